"""
pytest configuration and shared fixtures.

Upstream APIs are replaced with ``httpx.MockTransport`` handlers, so no test
talks to the network.

Usage:
    pytest
    pytest tests/unit/test_token_cache.py
"""

import json
from pathlib import Path
from typing import Any

import httpx
import pytest

from linkhub.shared.twitch_api import TwitchAPIClient
from linkhub.shared.youtube_api import YouTubeAPIClient


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture(autouse=True)
def _clear_platform_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep credentials from the developer's shell out of the tests."""
    for name in (
        "TWITCH_CLIENT_ID",
        "TWITCH_CLIENT_SECRET",
        "TWITCH_USER_ID",
        "YOUTUBE_API_KEY",
        "YOUTUBE_CHANNEL_ID",
        "DATA_DIR",
    ):
        monkeypatch.delenv(name, raising=False)


class FakeTwitch:
    """Scriptable stand-in for the Twitch OAuth and Helix endpoints."""

    def __init__(self) -> None:
        self.token_calls = 0
        self.requests: list[httpx.Request] = []
        self.followers = 1234
        self.streams: list[dict[str, Any]] = []
        self.token_status = 200
        self.streams_status = 200
        self.fail_with: dict[str, Exception] = {}

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path

        if path == "/oauth2/token":
            self.token_calls += 1
            if "token" in self.fail_with:
                raise self.fail_with["token"]
            if self.token_status != 200:
                return httpx.Response(self.token_status, text='{"message":"invalid client"}')
            return httpx.Response(
                200,
                json={
                    "access_token": f"token-{self.token_calls}",
                    "expires_in": 5000000,
                    "token_type": "bearer",
                },
            )
        if path == "/helix/channels/followers":
            if "followers" in self.fail_with:
                raise self.fail_with["followers"]
            return httpx.Response(200, json={"total": self.followers, "data": []})
        if path == "/helix/streams":
            if "streams" in self.fail_with:
                raise self.fail_with["streams"]
            if self.streams_status != 200:
                return httpx.Response(self.streams_status, json={"message": "error"})
            return httpx.Response(200, json={"data": self.streams})
        return httpx.Response(404)

    def client(self, client_id: str = "cid", client_secret: str = "secret") -> TwitchAPIClient:
        return TwitchAPIClient(
            client_id,
            client_secret,
            http=httpx.AsyncClient(transport=httpx.MockTransport(self.handler)),
        )


class FakeYouTube:
    """Stand-in for the YouTube channel statistics resource."""

    def __init__(self, subscribers: str = "5678") -> None:
        self.subscribers = subscribers
        self.items: list[dict[str, Any]] | None = None
        self.status = 200
        self.requests: list[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.status != 200:
            return httpx.Response(self.status, json={"error": {"message": "quota"}})
        items = (
            self.items
            if self.items is not None
            else [{"id": "UC123", "statistics": {"subscriberCount": self.subscribers}}]
        )
        return httpx.Response(200, json={"items": items})

    def client(self, api_key: str = "key") -> YouTubeAPIClient:
        return YouTubeAPIClient(
            api_key,
            http=httpx.AsyncClient(transport=httpx.MockTransport(self.handler)),
        )


@pytest.fixture
def fake_twitch() -> FakeTwitch:
    return FakeTwitch()


@pytest.fixture
def fake_youtube() -> FakeYouTube:
    return FakeYouTube()


@pytest.fixture
def sample_stream() -> dict[str, Any]:
    return {
        "id": "40952121085",
        "user_id": "101051819",
        "user_login": "streamer",
        "game_id": "509658",
        "game_name": "Just Chatting",
        "type": "live",
        "title": "Morning coffee stream",
        "viewer_count": 321,
        "started_at": "2024-05-01T10:00:00Z",
    }


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    """Data directory seeded with a stats file and a media kit."""
    directory = tmp_path / "data"
    directory.mkdir()
    (directory / "social.stats.json").write_text(
        json.dumps(
            {
                "platforms": [{"platform": "Twitch", "followers": 10, "isLive": False}],
                "lastUpdated": "2024-01-01T00:00:00.000Z",
            },
            indent=2,
        ),
        encoding="utf-8",
    )
    (directory / "media.kit.json").write_text(
        json.dumps(
            {
                "name": "Nova",
                "about": "Variety streamer, 日本語 OK",
                "contact": {"email": "biz@example.com"},
                "stats": [],
                "lastUpdated": "2024-01-01T00:00:00.000Z",
                "rates": [{"type": "sponsored stream", "price": 500}],
            },
            indent=2,
            ensure_ascii=False,
        ),
        encoding="utf-8",
    )
    return directory
