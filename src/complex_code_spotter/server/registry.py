"""Central tool registration for MCP server."""

from mcp.server.fastmcp import FastMCP

from complex_code_spotter.features.complexity.tools import register_complexity_tools


def register_all_tools(mcp: FastMCP) -> None:
    """Register all MCP tools from all features.

    Complexity (2 tools - find_complex_code, score_code)
    """
    register_complexity_tools(mcp)
