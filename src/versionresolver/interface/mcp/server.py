"""MCP server factory."""

from __future__ import annotations

from mcp.server.fastmcp import FastMCP

from ...config.runtime import get_settings
from ...services.resolution_service import ResolutionService
from .tools import register_tools


def create_server(service: ResolutionService | None = None, name: str | None = None) -> FastMCP:
    """Build and return a configured FastMCP server.

    Args:
        service: Service to answer tool calls with. When omitted it is built
            lazily from settings on first use.
        name: Server name; defaults to ``mcp_server_name`` from settings.

    Returns:
        A FastMCP instance with the resolver tools registered.
    """
    server = FastMCP(name or get_settings().mcp_server_name)
    cached: list[ResolutionService] = [service] if service is not None else []

    def get_service() -> ResolutionService:
        if not cached:
            from ...wiring import build_resolution_service

            cached.append(build_resolution_service())
        return cached[0]

    register_tools(server, get_service)
    return server


def run_server() -> None:
    """Run the MCP server over stdio."""
    from ...observability import configure_logging

    configure_logging(get_settings().log_level)
    create_server().run()
