# =============================================================================
# tools/iterations.py  -  Iteration tools (registration + handlers)
# =============================================================================
#
# WHAT THIS FILE DOES:
#   IterationTools.create(client, server) registers three MCP tools on a
#   FastMCP server and returns the IterationTools instance that backs them:
#
#     get-iteration-stories  → IterationTools.get_iteration_stories
#     get-iteration          → IterationTools.get_iteration
#     search-iterations      → IterationTools.search_iterations
#
# HOW A CALL FLOWS:
#   1. FastMCP validates the arguments against the wrapper's signature
#      (the Annotated/Field hints below ARE the input schema)
#   2. The wrapper passes only those validated values to the handler
#   3. The handler calls the Shortcut client, checks the result, formats it
#   4. The handler returns a ToolResult with one text block, or raises
#
# STATELESS:
#   The only thing an IterationTools holds is the client.  Nothing is cached
#   between calls, so every call sees current Shortcut data and concurrent
#   calls can't step on each other.
# =============================================================================

from typing import Annotated, Any, Literal, Mapping, Optional

from fastmcp import FastMCP
from fastmcp.tools.tool import ToolResult
from mcp.types import TextContent, ToolAnnotations
from pydantic import Field, StringConstraints

from shortcut.client import ShortcutClient
from shortcut.search import build_search_query
from tools.errors import RetrievalError, SearchError
from tools.formatting import (
    collect_owner_ids,
    format_iteration,
    format_iteration_list,
    format_story_list,
)
from tools.log import log_request, log_response, log_status

# All three tools only read from Shortcut.
READ_ONLY = ToolAnnotations(readOnlyHint=True, idempotentHint=True)

IterationPublicId = Annotated[int, Field(gt=0, description="The public ID of the iteration")]

# Shortcut date filter: a date, a keyword, or a range "a..b" ("*" = open end).
_DATE_TERM = r"(\*|today|yesterday|tomorrow|\d{4}-\d{2}-\d{2})"
DateFilter = Annotated[
    Optional[Annotated[str, StringConstraints(pattern=rf"^{_DATE_TERM}(\.\.{_DATE_TERM})?$")]],
    Field(
        description='A date (YYYY-MM-DD), "today", "yesterday", "tomorrow", '
                    'or a range like "2023-01-01..2023-01-31" or "*..today"',
    ),
]


class IterationTools:
    """Handlers for the iteration tools.  Build with IterationTools.create()."""

    def __init__(self, client: ShortcutClient):
        self.client = client

    # =========================================================================
    # Registration
    # =========================================================================
    @classmethod
    def create(cls, client: ShortcutClient, server: FastMCP) -> "IterationTools":
        """Register the iteration tools on `server`, in a fixed order.

        Registration is local bookkeeping only; no request goes to Shortcut
        until a tool is actually called.
        """
        tools = cls(client)

        # The wrappers look the handler up on `tools` at call time, so a
        # test can swap a handler out after registration.

        @server.tool(
            name="get-iteration-stories",
            description="Get stories in a specific iteration by iteration public ID",
            annotations=READ_ONLY,
        )
        async def get_iteration_stories(iterationPublicId: IterationPublicId) -> ToolResult:
            return await tools.get_iteration_stories(iterationPublicId)

        @server.tool(
            name="get-iteration",
            description="Get a Shortcut iteration by public ID",
            annotations=READ_ONLY,
        )
        async def get_iteration(iterationPublicId: IterationPublicId) -> ToolResult:
            return await tools.get_iteration(iterationPublicId)

        @server.tool(
            name="search-iterations",
            description="Find Shortcut iterations. All filters are optional and combined with AND.",
            annotations=READ_ONLY,
        )
        async def search_iterations(
            id: Annotated[Optional[int], Field(description="Public ID of the iteration")] = None,
            name: Annotated[Optional[str], Field(description="Find iterations matching this name")] = None,
            description: Annotated[Optional[str], Field(description="Find iterations whose description matches")] = None,
            state: Annotated[
                Optional[Literal["started", "unstarted", "done"]],
                Field(description="Iteration state"),
            ] = None,
            team: Annotated[Optional[str], Field(description="Team name or mention name")] = None,
            created: DateFilter = None,
            updated: DateFilter = None,
            startDate: DateFilter = None,
            endDate: DateFilter = None,
        ) -> ToolResult:
            filters = {
                "id": id,
                "name": name,
                "description": description,
                "state": state,
                "team": team,
                "created": created,
                "updated": updated,
                "startDate": startDate,
                "endDate": endDate,
            }
            return await tools.search_iterations(
                {key: value for key, value in filters.items() if value is not None}
            )

        return tools

    # =========================================================================
    # Handlers
    # =========================================================================
    @staticmethod
    def to_result(text: str) -> ToolResult:
        """Wrap rendered text in the MCP response envelope."""
        return ToolResult(content=[TextContent(type="text", text=text)])

    async def get_iteration_stories(self, iteration_public_id: int) -> ToolResult:
        log_request("get-iteration-stories", iterationPublicId=iteration_public_id)

        stories = await self.client.list_iteration_stories(iteration_public_id)
        if stories is None:
            raise RetrievalError("stories in iteration", iteration_public_id)

        # Owners are resolved in one batch, after the stories are known.
        owner_ids = collect_owner_ids(stories)
        members = await self.client.get_user_map(owner_ids)
        log_status(f"Got {len(stories)} stories, resolved {len(members)}/{len(owner_ids)} owners")

        text = format_story_list(stories, members)
        return self.to_result(log_response("get-iteration-stories", text))

    async def get_iteration(self, iteration_public_id: int) -> ToolResult:
        log_request("get-iteration", iterationPublicId=iteration_public_id)

        iteration = await self.client.get_iteration(iteration_public_id)
        if iteration is None:
            raise RetrievalError("iteration", iteration_public_id)

        text = format_iteration(iteration)
        return self.to_result(log_response("get-iteration", text))

    async def search_iterations(self, filters: Mapping[str, Any]) -> ToolResult:
        log_request("search-iterations", **filters)

        # Fetched on every search so "me" in a filter always means the
        # token's owner.  It never appears in the output.
        current_user = await self.client.get_current_user()
        query = build_search_query(filters, current_user)
        log_status(f"Query: {query!r}")

        result = await self.client.search_iterations(query)
        if result.iterations is None:
            raise SearchError(query)

        text = format_iteration_list(result.iterations, result.total)
        return self.to_result(log_response("search-iterations", text))
