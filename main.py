"""complex-code-spotter MCP server entry point."""

from complex_code_spotter.server.runner import mcp, run_mcp_server

__all__ = ["mcp", "run_mcp_server"]

if __name__ == "__main__":
    run_mcp_server()
