# =============================================================================
# tools/mcp_server.py  -  FastMCP Tool Server
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Builds the FastMCP server and registers every tool group on it.  Each
#   tool group (tools/iterations.py today) owns its own registration; this
#   module just wires them to one server and one Shortcut client.
#
# HOW IT WORKS (the flow):
#   1. The agent runtime decides it needs Shortcut data
#   2. It calls a tool by name via MCP (e.g., "get-iteration")
#   3. FastMCP validates the arguments and routes the call to the handler
#   4. The handler calls the Shortcut client, formats the result as text
#   5. The agent receives one text block, or a tool error
#
# TOOL NAMING CONVENTIONS:
#   - get-*    → Read-only retrieval by id
#   - search-* → Query with filters
#   All tools here are read-only.
#
# RUNNING THIS SERVER:
#   python main.py            (stdio transport, for an MCP client to spawn)
# =============================================================================

from fastmcp import FastMCP

from shortcut.client import ShortcutClient
from tools.iterations import IterationTools

SERVER_NAME = "shortcut-iterations"


def create_server(client: ShortcutClient) -> tuple[FastMCP, IterationTools]:
    """Create the FastMCP server with all tools registered.

    Returns:
        Tuple of (server, iteration tools)
    """
    server = FastMCP(SERVER_NAME)
    iteration_tools = IterationTools.create(client, server)
    return server, iteration_tools
