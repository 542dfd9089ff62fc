#!/usr/bin/env python3
"""
Pattern Library MCP Server
Serves one content profile's resources and prompts over MCP.
"""

import argparse
import asyncio
from typing import Dict, List, Optional, Tuple

from mcp import types
from mcp.server import Server
from mcp.server.lowlevel import NotificationOptions
from mcp.server.lowlevel.helper_types import ReadResourceContents
from mcp.server.models import InitializationOptions
from mcp.server.stdio import stdio_server
from mcp.shared.exceptions import McpError

from pattern_library import __version__, __package_name__
from pattern_library.config import Config, ConfigManager, ServerProfile, load_profile
from pattern_library.mcp_types import MCPErrorCode
from pattern_library.registry import NotFoundError, RegistryDispatcher, RegistryError
from pattern_library.utils import Logger

# MCP reserves -32002 for "resource not found"
RESOURCE_NOT_FOUND = -32002

# Registry error kind -> (JSON-RPC error code, HTTP status)
ERROR_MAPPING: Dict[MCPErrorCode, Tuple[int, int]] = {
    MCPErrorCode.RESOURCE_NOT_FOUND: (RESOURCE_NOT_FOUND, 404),
    MCPErrorCode.PROMPT_NOT_FOUND: (types.INVALID_PARAMS, 404),
    MCPErrorCode.PROFILE_NOT_FOUND: (types.INVALID_PARAMS, 404),
    MCPErrorCode.CONTENT_LOAD_ERROR: (types.INTERNAL_ERROR, 500),
    MCPErrorCode.INVALID_MANIFEST: (types.INTERNAL_ERROR, 500),
    MCPErrorCode.DUPLICATE_URI: (types.INTERNAL_ERROR, 500),
}


def http_status(error: RegistryError) -> int:
    return ERROR_MAPPING[error.code][1]


def to_mcp_error(error: RegistryError, data: Optional[Dict[str, str]] = None) -> McpError:
    """Wrap a registry error in the McpError the protocol layer reports."""
    code, _ = ERROR_MAPPING[error.code]
    return McpError(types.ErrorData(code=code, message=error.message, data=data))


class PatternLibraryMCPServer:
    """MCP server for a single content profile."""

    def __init__(self, profile: Optional[str] = None, config: Optional[Config] = None, logger: Optional[Logger] = None):
        self.config = config or ConfigManager.get_instance().get()
        self.logger = logger or Logger(level=self.config.log_level)

        # Fails fast on a broken manifest
        self.profile: ServerProfile = load_profile(profile or self.config.profile, self.config.content_root)
        self.dispatcher: RegistryDispatcher = self.profile.create_dispatcher()

        self.server = Server(self.profile.name, version=self.profile.version)
        self._setup_handlers()

    def _setup_handlers(self):
        """Set up MCP protocol request handlers using decorators."""

        @self.server.list_resources()
        async def handle_list_resources() -> list[types.Resource]:
            return await self.list_resources()

        @self.server.read_resource()
        async def handle_read_resource(uri) -> list[ReadResourceContents]:
            return await self.read_resource(str(uri))

        # Prompt capability is only advertised when the profile has prompts
        if not self.profile.has_prompts:
            return

        @self.server.list_prompts()
        async def handle_list_prompts() -> list[types.Prompt]:
            return await self.list_prompts()

        @self.server.get_prompt()
        async def handle_get_prompt(name: str, arguments: Optional[Dict[str, str]]) -> types.GetPromptResult:
            return await self.get_prompt(name, arguments)

    async def list_resources(self) -> List[types.Resource]:
        envelope = self.dispatcher.list_resources()
        self.logger.debug(f"Listing {len(envelope['resources'])} resources")
        return [
            types.Resource(
                uri=r["uri"],
                name=r["name"],
                description=r["description"],
                mimeType=r["mimeType"],
            )
            for r in envelope["resources"]
        ]

    async def read_resource(self, uri: str) -> List[ReadResourceContents]:
        try:
            envelope = self.dispatcher.read_resource(uri)
        except RegistryError as e:
            self._log_failure(f"Error reading resource {uri}", e)
            raise to_mcp_error(e, {"uri": uri}) from e

        return [
            ReadResourceContents(content=item["text"], mime_type=item["mimeType"])
            for item in envelope["contents"]
        ]

    async def list_prompts(self) -> List[types.Prompt]:
        envelope = self.dispatcher.list_prompts()
        return [
            types.Prompt(
                name=p["name"],
                description=p["description"],
                arguments=[types.PromptArgument(**a) for a in p["arguments"]],
            )
            for p in envelope["prompts"]
        ]

    async def get_prompt(self, name: str, arguments: Optional[Dict[str, str]] = None) -> types.GetPromptResult:
        try:
            envelope = self.dispatcher.get_prompt(name, arguments)
        except RegistryError as e:
            self._log_failure(f"Error rendering prompt {name}", e)
            raise to_mcp_error(e) from e

        return types.GetPromptResult(
            description=envelope["description"],
            messages=[
                types.PromptMessage(
                    role=m["role"],
                    content=types.TextContent(type="text", text=m["content"]["text"]),
                )
                for m in envelope["messages"]
            ],
        )

    def _log_failure(self, context: str, error: RegistryError):
        # Misses are client mistakes; anything else is a content defect
        if isinstance(error, NotFoundError):
            self.logger.warning(error.message)
        else:
            self.logger.error(f"{context}: {error.message}")

    def initialization_options(self) -> InitializationOptions:
        return InitializationOptions(
            server_name=self.profile.name,
            server_version=self.profile.version,
            capabilities=self.server.get_capabilities(
                notification_options=NotificationOptions(),
                experimental_capabilities={},
            ),
        )

    async def start(self):
        """Start the MCP server on stdio."""
        try:
            self.dispatcher.verify()
            self.logger.info(
                f"Serving profile {self.profile.name} v{self.profile.version} "
                f"({len(self.profile.manifest)} resources, {len(self.profile.prompts)} prompts)"
            )

            async with stdio_server() as (read_stream, write_stream):
                await self.server.run(read_stream, write_stream, self.initialization_options())

        except Exception as e:
            self.logger.error(f"Failed to start server: {e}")
            raise


async def run_stdio(profile: Optional[str] = None):
    """Run in stdio mode."""
    server = PatternLibraryMCPServer(profile)
    await server.start()


async def run_http(profile: Optional[str] = None, port: Optional[int] = None):
    """Run in HTTP mode using Streamable HTTP transport (see server_http.py)."""
    from pattern_library.server_http import serve
    await serve(profile=profile, port=port)


def main():
    config = ConfigManager.get_instance().load()

    parser = argparse.ArgumentParser(description=f"{__package_name__} {__version__}")
    parser.add_argument("--profile", default=config.profile, help="Content profile to serve")
    parser.add_argument("--stdio", action="store_true", help="Run in stdio mode")
    parser.add_argument("--http", action="store_true", help="Run in HTTP mode")
    parser.add_argument("--port", type=int, default=config.http_port, help="HTTP port")
    args = parser.parse_args()

    if args.http:
        asyncio.run(run_http(args.profile, args.port))
    else:
        asyncio.run(run_stdio(args.profile))


if __name__ == "__main__":
    main()
