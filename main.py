# =============================================================================
# main.py  -  Entry Point for the Shortcut iteration MCP server
# =============================================================================
#
# HOW TO RUN:
#   uv run python main.py
#
# WHAT HAPPENS:
#   1. Loads .env (SHORTCUT_API_TOKEN, optional SHORTCUT_API_URL, ...)
#   2. Configures logging to STDERR (STDOUT is the MCP transport)
#   3. Builds the Shortcut client and the FastMCP server
#   4. Serves the tools over stdio until the client disconnects
#
# CONNECTING AN AGENT:
#   Point any MCP client at this script with stdio transport, e.g.
#     {"command": "uv", "args": ["run", "python", "/path/to/main.py"],
#      "env": {"SHORTCUT_API_TOKEN": "..."}}
# =============================================================================

import logging
import os
import sys

from dotenv import load_dotenv

# Load environment variables from .env before anything reads them.
load_dotenv()

from shortcut.client import ShortcutClient
from tools.mcp_server import create_server

logging.basicConfig(
    level=os.environ.get("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s [MCP] %(message)s",
    datefmt="%H:%M:%S",
    stream=sys.stderr,
)
logger = logging.getLogger("shortcut")


def main() -> None:
    try:
        client = ShortcutClient.from_environment()
    except ValueError as e:
        logger.error(str(e))
        sys.exit(1)

    server, _ = create_server(client)
    logger.info("Starting %s over stdio", server.name)
    try:
        server.run()
    except KeyboardInterrupt:
        logger.info("Server stopped by user")


# =============================================================================
# Script entry point
# =============================================================================
if __name__ == "__main__":
    main()
