"""
MCP Types Module
Types and dataclasses for the resource and prompt registry.
"""

from .registry import (
    # Enums
    MCPErrorCode,

    # Resources
    ResourceDescriptor,
    LoadFailure,
    BulkLoadResult,

    # Prompts
    PromptArgument,
    TextContent,
    PromptMessage,
    PromptRenderResult,
    PromptDescriptor,

    # Type aliases
    PromptArguments,
    PromptRenderer,
)

__all__ = [
    # Enums
    "MCPErrorCode",

    # Resources
    "ResourceDescriptor",
    "LoadFailure",
    "BulkLoadResult",

    # Prompts
    "PromptArgument",
    "TextContent",
    "PromptMessage",
    "PromptRenderResult",
    "PromptDescriptor",

    # Type aliases
    "PromptArguments",
    "PromptRenderer",
]
