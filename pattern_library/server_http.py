#!/usr/bin/env python3
"""
Pattern Library MCP Server - HTTP Transport
Runs one profile as a web server using the MCP Streamable HTTP protocol.

For local clients use `pattern-library serve` (stdio) instead.
"""

import contextlib
from typing import Optional

from mcp.server.streamable_http_manager import StreamableHTTPSessionManager
from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import JSONResponse, PlainTextResponse, Response
from starlette.routing import Mount, Route

from pattern_library import __version__
from pattern_library.config import ConfigManager
from pattern_library.registry import RegistryError
from pattern_library.server import PatternLibraryMCPServer, http_status


def create_app(mcp_server: PatternLibraryMCPServer) -> Starlette:
    """
    Build the Starlette app for one server instance.

    Endpoints:
    - /mcp            MCP protocol (Streamable HTTP)
    - /health         Deployment health check
    - /resources      JSON resource listing
    - /raw?uri=...    Raw resource content
    """
    dispatcher = mcp_server.dispatcher
    session_manager = StreamableHTTPSessionManager(app=mcp_server.server, event_store=None)

    async def mcp_endpoint(scope, receive, send):
        await session_manager.handle_request(scope, receive, send)

    async def health_check(request: Request) -> Response:
        info = dispatcher.server_info()
        return PlainTextResponse(
            f"Pattern Library MCP Server (HTTP)\n"
            f"Version: {__version__}\n"
            f"Profile: {info['name']} {info['version']}\n"
            f"Status: Running\n"
            f"Resources: {info['resourceCount']}\n"
            f"Prompts: {info['promptCount']}\n"
            f"MCP endpoint: /mcp\n"
        )

    async def list_resources(request: Request) -> Response:
        category = request.query_params.get("category")
        query = request.query_params.get("q")
        return JSONResponse(dispatcher.list_resources(category=category, query=query))

    async def get_resource_raw(request: Request) -> Response:
        uri = request.query_params.get("uri", "")
        try:
            envelope = dispatcher.read_resource(uri)
        except RegistryError as e:
            status = http_status(e)
            if status >= 500:
                mcp_server.logger.error(f"Error loading resource {uri}: {e.message}")
            return PlainTextResponse(e.message, status_code=status)

        item = envelope["contents"][0]
        return Response(content=item["text"], media_type=f"{item['mimeType']}; charset=utf-8")

    @contextlib.asynccontextmanager
    async def lifespan(app: Starlette):
        async with session_manager.run():
            mcp_server.logger.info("Streamable HTTP session manager started")
            try:
                yield
            finally:
                mcp_server.logger.info("Streamable HTTP session manager stopped")

    return Starlette(
        routes=[
            Route("/health", endpoint=health_check),
            Route("/resources", endpoint=list_resources),
            Route("/raw", endpoint=get_resource_raw),
            Mount("/mcp", app=mcp_endpoint),
        ],
        lifespan=lifespan,
    )


async def serve(profile: Optional[str] = None, port: Optional[int] = None):
    """Run the HTTP server."""
    import uvicorn

    config = ConfigManager.get_instance().get()
    mcp_server = PatternLibraryMCPServer(profile, config=config)
    mcp_server.dispatcher.verify()

    host = config.http_host
    port = port or config.http_port
    server = uvicorn.Server(uvicorn.Config(create_app(mcp_server), host=host, port=port, log_level="info"))

    mcp_server.logger.info(f"Pattern Library MCP Server (HTTP) starting on http://{host}:{port}")
    mcp_server.logger.info(f"  MCP:       http://{host}:{port}/mcp")
    mcp_server.logger.info(f"  Health:    http://{host}:{port}/health")
    mcp_server.logger.info(f"  Resources: http://{host}:{port}/resources")

    await server.serve()
