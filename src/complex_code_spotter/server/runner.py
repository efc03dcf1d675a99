"""MCP server entry point."""

import os

from mcp.server.fastmcp import FastMCP

from complex_code_spotter.constants import EnvVars
from complex_code_spotter.core.logging import configure_logging
from complex_code_spotter.core.sentry import init_sentry
from complex_code_spotter.server.registry import register_all_tools

# Create FastMCP instance
mcp = FastMCP("complex-code-spotter")


def run_mcp_server() -> None:
    """Run the MCP server.

    This function:
    1. Configures logging from LOG_LEVEL / LOG_FILE
    2. Initializes Sentry error tracking (if configured)
    3. Registers all MCP tools
    4. Starts the MCP server with stdio transport
    """
    configure_logging(
        log_level=os.environ.get(EnvVars.LOG_LEVEL, "INFO"),
        log_file=os.environ.get(EnvVars.LOG_FILE),
    )
    init_sentry(component="mcp-server")  # no-op if not configured
    register_all_tools(mcp)
    mcp.run(transport="stdio")
