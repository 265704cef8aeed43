# =============================================================================
# tools/__init__.py
# =============================================================================
# This package contains the FastMCP tools.
#
# ARCHITECTURAL ROLE:
#   tools/ is the "translation layer" between the agent runtime and the
#   Shortcut API.  Each tool:
#     1. Declares its input schema (typed, annotated parameters)
#     2. Calls the Shortcut client from shortcut/
#     3. Checks what came back and raises a ToolError if it's missing
#     4. Renders the data as plain text the LLM can read
#
# WHAT TOOLS DO NOT DO:
#   - They do NOT speak HTTP (that's shortcut/client.py)
#   - They do NOT retry, cache, or chain calls together
#   - They do NOT decide anything (that's the agent's job)
# =============================================================================
