"""
Tests for ShortcutClient.

HTTP is served by httpx.MockTransport, so these check the requests we send
and how responses become models, without any network.
"""

import httpx
import pytest

from shortcut.client import DEFAULT_API_URL, ShortcutClient

BASE_URL = "https://api.test/api/v3"


def make_client(handler, requests=None):
    def recording_handler(request: httpx.Request) -> httpx.Response:
        if requests is not None:
            requests.append(request)
        return handler(request)

    return ShortcutClient("secret-token", base_url=BASE_URL,
                          transport=httpx.MockTransport(recording_handler))


ITERATION_JSON = {
    "id": 1,
    "name": "Iteration 1",
    "description": "Description for Iteration 1",
    "start_date": "2023-01-01",
    "end_date": "2023-01-14",
    "status": "started",
    "app_url": "https://app.shortcut.com/test/iteration/1",
    "group_ids": ["team-a"],
    "stats": {"num_points": 8},
}


class TestIterations:

    @pytest.mark.asyncio
    async def test_get_iteration(self):
        requests = []
        client = make_client(lambda r: httpx.Response(200, json=ITERATION_JSON), requests)

        iteration = await client.get_iteration(1)

        assert requests[0].url.path == "/api/v3/iterations/1"
        assert requests[0].headers["Shortcut-Token"] == "secret-token"
        assert iteration.name == "Iteration 1"
        assert iteration.is_started
        assert iteration.group_ids == ("team-a",)
        await client.aclose()

    @pytest.mark.asyncio
    async def test_get_iteration_not_found(self):
        client = make_client(lambda r: httpx.Response(404, json={"message": "nope"}))
        assert await client.get_iteration(999) is None
        await client.aclose()

    @pytest.mark.asyncio
    async def test_server_errors_raise(self):
        client = make_client(lambda r: httpx.Response(500))
        with pytest.raises(httpx.HTTPStatusError):
            await client.get_iteration(1)
        await client.aclose()

    @pytest.mark.asyncio
    async def test_list_iteration_stories(self):
        requests = []
        stories_json = [
            {"id": 123, "name": "Test Story 1", "story_type": "feature",
             "owner_ids": ["user1"], "started": True, "epic_id": None},
        ]
        client = make_client(lambda r: httpx.Response(200, json=stories_json), requests)

        stories = await client.list_iteration_stories(7)

        assert requests[0].url.path == "/api/v3/iterations/7/stories"
        assert len(stories) == 1
        assert stories[0].owner_ids == ("user1",)
        assert stories[0].epic_id is None
        assert stories[0].workflow_state == "In Progress"
        await client.aclose()

    @pytest.mark.asyncio
    async def test_list_iteration_stories_missing(self):
        client = make_client(lambda r: httpx.Response(404))
        assert await client.list_iteration_stories(7) is None
        await client.aclose()

    @pytest.mark.asyncio
    async def test_search_iterations(self):
        requests = []
        body = {"data": [ITERATION_JSON], "total": 12, "next": "/api/v3/search/iterations?next=abc"}
        client = make_client(lambda r: httpx.Response(200, json=body), requests)

        result = await client.search_iterations('title:"Sprint 1"')

        params = requests[0].url.params
        assert requests[0].url.path == "/api/v3/search/iterations"
        assert params["query"] == 'title:"Sprint 1"'
        assert params["page_size"] == "25"
        assert params["detail"] == "full"
        assert [it.id for it in result.iterations] == [1]
        assert result.total == 12
        assert result.next is not None
        await client.aclose()

    @pytest.mark.asyncio
    async def test_search_without_data_is_none(self):
        client = make_client(lambda r: httpx.Response(200, json={"total": 0}))
        result = await client.search_iterations("")
        assert result.iterations is None
        await client.aclose()

    @pytest.mark.asyncio
    async def test_search_with_empty_data(self):
        client = make_client(lambda r: httpx.Response(200, json={"data": [], "total": 0}))
        result = await client.search_iterations("")
        assert result.iterations == []
        await client.aclose()


class TestMembers:

    @pytest.mark.asyncio
    async def test_get_current_user(self):
        requests = []
        body = {"id": "user1", "name": "Test User", "mention_name": "testuser"}
        client = make_client(lambda r: httpx.Response(200, json=body), requests)

        member = await client.get_current_user()

        assert requests[0].url.path == "/api/v3/member"
        assert member.mention_name == "testuser"
        await client.aclose()

    @pytest.mark.asyncio
    async def test_get_user_map_single_request(self):
        requests = []
        members = [
            {"id": "user1", "profile": {"name": "Test User", "mention_name": "testuser"}},
            {"id": "user2", "profile": {"name": "Jane Smith", "mention_name": "jane"}},
            {"id": "user3", "profile": {"name": "Other", "mention_name": "other"}},
        ]
        client = make_client(lambda r: httpx.Response(200, json=members), requests)

        user_map = await client.get_user_map(["user1", "user2", "missing"])

        assert len(requests) == 1
        assert requests[0].url.path == "/api/v3/members"
        assert set(user_map) == {"user1", "user2"}
        assert user_map["user2"].mention_name == "jane"
        await client.aclose()

    @pytest.mark.asyncio
    async def test_get_user_map_empty_makes_no_request(self):
        requests = []
        client = make_client(lambda r: httpx.Response(200, json=[]), requests)

        assert await client.get_user_map([]) == {}
        assert requests == []
        await client.aclose()


class TestFromEnvironment:

    def test_missing_token(self, monkeypatch):
        monkeypatch.delenv("SHORTCUT_API_TOKEN", raising=False)
        with pytest.raises(ValueError, match="SHORTCUT_API_TOKEN"):
            ShortcutClient.from_environment()

    @pytest.mark.asyncio
    async def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("SHORTCUT_API_TOKEN", "env-token")
        monkeypatch.delenv("SHORTCUT_API_URL", raising=False)
        monkeypatch.setenv("SHORTCUT_TIMEOUT_SECONDS", "3")

        client = ShortcutClient.from_environment()

        assert str(client._http.base_url).rstrip("/") == DEFAULT_API_URL
        assert client._http.headers["Shortcut-Token"] == "env-token"
        assert client._http.timeout.read == 3.0
        await client.aclose()
