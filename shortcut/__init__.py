# =============================================================================
# shortcut/__init__.py
# =============================================================================
# This package talks to the Shortcut REST API and models what comes back.
#
# ARCHITECTURAL RULE:
#   Nothing in this package imports FastMCP.  The client returns plain
#   dataclasses; turning them into text for the agent is the job of tools/.
#   That keeps the HTTP layer testable with a fake transport and the
#   formatting layer testable with a fake client.
# =============================================================================
