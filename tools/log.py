# =============================================================================
# tools/log.py  -  Colored request/response logging for tool calls
# =============================================================================
# We log to STDERR because the MCP server talks to the agent over STDOUT.
# Anything printed to stdout would corrupt the MCP JSON stream.
#
# ANSI COLOR CODES:
#     - CYAN for incoming requests (tool name + parameters)
#     - GREEN for the response text
#     - YELLOW for intermediate status/progress messages
#
# The handlers call these helpers; main.py owns logging.basicConfig().
# =============================================================================

import logging

logger = logging.getLogger("shortcut.tools")

# ANSI color codes for terminal output
_CYAN = "\033[36m"     # Requests (tool calls with params)
_GREEN = "\033[32m"    # Responses
_YELLOW = "\033[33m"   # Status/progress messages
_RESET = "\033[0m"     # Reset to default terminal color


def log_request(tool_name: str, **params) -> None:
    """Log an incoming tool call with its parameters in CYAN."""
    param_str = ", ".join(f"{k}={v!r}" for k, v in params.items())
    logger.info(f"{_CYAN}{tool_name} called with: {param_str}{_RESET}")


def log_status(message: str) -> None:
    """Log an intermediate status message in YELLOW."""
    logger.info(f"{_YELLOW}  → {message}{_RESET}")


def log_response(tool_name: str, text: str) -> str:
    """Log the first line of the tool response in GREEN, then return the text unchanged."""
    first_line = text.split("\n", 1)[0]
    logger.info(f"{_GREEN}  ← {tool_name} response: {first_line}{_RESET}")
    return text
