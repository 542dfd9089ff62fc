"""Pattern Library MCP - documentation snippets and prompt templates served over MCP."""

__version__ = "0.3.0"
__package_name__ = "pattern-library-mcp"
