"""
Shared fixtures for the Shortcut tool tests.

The Shortcut client is replaced by an AsyncMock, so no test touches the
network.  FakeServer stands in for FastMCP where a test only cares about what
got registered.
"""

from unittest.mock import AsyncMock

import pytest

from shortcut.client import ShortcutClient
from shortcut.models import Iteration, IterationSearchResult, Member, Story

CURRENT_USER = Member(id="user1", name="Test User", mention_name="testuser")

MEMBERS = [
    CURRENT_USER,
    Member(id="user2", name="Jane Smith", mention_name="jane"),
]

STORIES = [
    Story(id=123, name="Test Story 1", story_type="feature", owner_ids=("user1",)),
    Story(id=456, name="Test Story 2", story_type="bug", owner_ids=("user1", "user2")),
]

ITERATIONS = [
    Iteration(
        id=1,
        name="Iteration 1",
        description="Description for Iteration 1",
        start_date="2023-01-01",
        end_date="2023-01-14",
        status="started",
        app_url="https://app.shortcut.com/test/iteration/1",
    ),
    Iteration(
        id=2,
        name="Iteration 2",
        description="Description for Iteration 2",
        start_date="2023-01-15",
        end_date="2023-01-28",
        status="unstarted",
        app_url="https://app.shortcut.com/test/iteration/2",
    ),
]


async def resolve_members(member_ids):
    """Behaves like ShortcutClient.get_user_map over MEMBERS."""
    wanted = set(member_ids)
    return {member.id: member for member in MEMBERS if member.id in wanted}


async def find_iteration(iteration_id):
    return next((it for it in ITERATIONS if it.id == iteration_id), None)


class FakeServer:
    """Records tool registrations the way FastMCP.tool(...) is called."""

    def __init__(self):
        self.registrations = []

    def tool(self, name=None, description=None, annotations=None):
        def decorator(fn):
            self.registrations.append((name, description, fn))
            return fn
        return decorator

    def handler(self, name):
        return next(fn for tool_name, _, fn in self.registrations if tool_name == name)


@pytest.fixture
def fake_server():
    return FakeServer()


@pytest.fixture
def client():
    """A ShortcutClient double pre-loaded with the sample data above."""
    mock = AsyncMock(spec=ShortcutClient)
    mock.list_iteration_stories.return_value = list(STORIES)
    mock.get_user_map.side_effect = resolve_members
    mock.get_iteration.side_effect = find_iteration
    mock.get_current_user.return_value = CURRENT_USER
    mock.search_iterations.return_value = IterationSearchResult(
        iterations=list(ITERATIONS), total=len(ITERATIONS)
    )
    return mock
