# =============================================================================
# tools/errors.py  -  What a tool raises when Shortcut gives us nothing
# =============================================================================
#
# Two kinds of failure, both raised (never returned as text):
#
#   RetrievalError - a record or collection we asked for by id came back
#                    missing.  "Failed to retrieve Shortcut iteration with
#                    public ID: 999."
#   SearchError    - the search response had no result list at all.
#
# An EMPTY list is not a failure.  "0 stories found" is a perfectly good
# answer; only a missing list is an error.
#
# Both subclass FastMCP's ToolError, which FastMCP always passes through to
# the agent verbatim (other exceptions may be masked).  Transport errors from
# httpx are not wrapped: they propagate unchanged.
# =============================================================================

from fastmcp.exceptions import ToolError


class ShortcutToolError(ToolError):
    """Base class for failures a Shortcut tool reports to the agent."""


class RetrievalError(ShortcutToolError):
    """A Shortcut record looked up by public ID was not returned."""

    def __init__(self, entity: str, public_id: int):
        self.entity = entity
        self.public_id = public_id
        super().__init__(f"Failed to retrieve Shortcut {entity} with public ID: {public_id}.")


class SearchError(ShortcutToolError):
    """A Shortcut search returned no result collection."""

    def __init__(self, query: str):
        self.query = query
        super().__init__(f'Failed to search for iterations matching your query: "{query}".')
