# =============================================================================
# shortcut/client.py  -  Async Shortcut REST API client
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Wraps the handful of Shortcut API v3 endpoints the tools need and turns
#   the JSON into dataclasses from shortcut/models.py.
#
# ERROR CONTRACT:
#   - 404 on a single-record endpoint → None  (the tool decides what that means)
#   - any other non-2xx               → httpx.HTTPStatusError is raised
#   - network failures                → httpx.HTTPError subclasses are raised
#   The client never retries and never swallows errors.  Retrying is the
#   agent runtime's call, not ours.
#
# CONFIGURATION:
#   ShortcutClient.from_environment() reads:
#     SHORTCUT_API_TOKEN        (required)
#     SHORTCUT_API_URL          (default: https://api.app.shortcut.com/api/v3)
#     SHORTCUT_TIMEOUT_SECONDS  (default: 10)
# =============================================================================

import logging
import os
from typing import Any, Iterable, Optional

import httpx

from shortcut.models import Iteration, IterationSearchResult, Member, Story

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://api.app.shortcut.com/api/v3"
DEFAULT_TIMEOUT_SECONDS = 10.0


class ShortcutClient:
    """Thin async client for the Shortcut API."""

    def __init__(
        self,
        api_token: str,
        base_url: str = DEFAULT_API_URL,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Args:
            api_token: Shortcut API token (Settings → API Tokens).
            base_url: API root, without a trailing slash.
            timeout: Per-request timeout in seconds.
            transport: Optional httpx transport.  Tests pass an
                httpx.MockTransport here instead of hitting the network.
        """
        self._http = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            headers={
                "Shortcut-Token": api_token,
                "Content-Type": "application/json",
            },
            timeout=timeout,
            transport=transport,
        )

    @classmethod
    def from_environment(cls) -> "ShortcutClient":
        """Build a client from SHORTCUT_* environment variables.

        Raises:
            ValueError: if SHORTCUT_API_TOKEN is not set.
        """
        token = os.environ.get("SHORTCUT_API_TOKEN", "").strip()
        if not token:
            raise ValueError(
                "SHORTCUT_API_TOKEN is not set. Create a token in Shortcut "
                "(Settings → API Tokens) and export it or add it to .env."
            )
        return cls(
            api_token=token,
            base_url=os.environ.get("SHORTCUT_API_URL", DEFAULT_API_URL),
            timeout=float(os.environ.get("SHORTCUT_TIMEOUT_SECONDS", DEFAULT_TIMEOUT_SECONDS)),
        )

    async def aclose(self) -> None:
        await self._http.aclose()

    async def __aenter__(self) -> "ShortcutClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    # -------------------------------------------------------------------------
    # Low-level request helper
    # -------------------------------------------------------------------------
    async def _get(self, path: str, params: Optional[dict[str, Any]] = None,
                   allow_missing: bool = False) -> Any:
        logger.debug("GET %s params=%s", path, params)
        response = await self._http.get(path, params=params)
        if allow_missing and response.status_code == 404:
            return None
        response.raise_for_status()
        return response.json()

    # -------------------------------------------------------------------------
    # Iterations
    # -------------------------------------------------------------------------
    async def get_iteration(self, iteration_id: int) -> Optional[Iteration]:
        data = await self._get(f"/iterations/{iteration_id}", allow_missing=True)
        if data is None:
            return None
        return Iteration.from_api(data)

    async def list_iteration_stories(self, iteration_id: int) -> Optional[list[Story]]:
        data = await self._get(f"/iterations/{iteration_id}/stories", allow_missing=True)
        if data is None:
            return None
        return [Story.from_api(item) for item in data]

    async def search_iterations(self, query: str, page_size: int = 25) -> IterationSearchResult:
        """Run a Shortcut search restricted to iterations.

        Returns exactly one page.  `total` is Shortcut's count of all
        matches, which can be larger than the page.
        """
        data = await self._get(
            "/search/iterations",
            params={"query": query, "page_size": page_size, "detail": "full"},
        )
        return IterationSearchResult.from_api(data or {})

    # -------------------------------------------------------------------------
    # Members
    # -------------------------------------------------------------------------
    async def get_current_user(self) -> Member:
        """The member who owns the API token."""
        return Member.from_api(await self._get("/member"))

    async def get_user_map(self, member_ids: Iterable[str]) -> dict[str, Member]:
        """Resolve member ids to members with a single request.

        Ids that don't match a workspace member are simply left out of the
        returned dict.  An empty id set makes no request at all.
        """
        wanted = set(member_ids)
        if not wanted:
            return {}
        members = await self._get("/members")
        return {
            member.id: member
            for member in (Member.from_api(item) for item in members)
            if member.id in wanted
        }
