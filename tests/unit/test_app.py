"""HTTP-level tests for the FastAPI app: live status, health and static site."""

from collections.abc import AsyncGenerator
from pathlib import Path

import httpx
import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from linkhub.api.app import create_app
from linkhub.api.core.config import Settings
from linkhub.api.core.dependencies import get_live_status_service
from linkhub.api.services.live_status import LiveStatusService
from linkhub.shared.token_cache import TokenCache

pytestmark = pytest.mark.anyio


@pytest.fixture
def public_dir(tmp_path: Path) -> Path:
    site = tmp_path / "public"
    (site / "data").mkdir(parents=True)
    (site / "index.html").write_text("<html>link hub</html>", encoding="utf-8")
    (site / "data" / "social.stats.json").write_text('{"platforms": []}', encoding="utf-8")
    (site / "styles.css").write_text("body {}", encoding="utf-8")
    (site / "avatar.png").write_bytes(b"\x89PNG\r\n")
    return site


@pytest.fixture
def app(public_dir: Path) -> FastAPI:
    return create_app(Settings(public_dir=public_dir, environment="test"))


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


def _override_service(app: FastAPI, fake_twitch, user_id: str = "42") -> LiveStatusService:
    twitch_api = fake_twitch.client()
    service = LiveStatusService(
        twitch_api=twitch_api,
        token_cache=TokenCache(twitch_api.request_app_token, ttl=3600),
        user_id=user_id,
    )
    app.dependency_overrides[get_live_status_service] = lambda: service
    return service


async def test_live_status_offline(app, client, fake_twitch) -> None:
    _override_service(app, fake_twitch)

    response = await client.get("/api/twitch/live")

    assert response.status_code == 200
    assert response.headers["cache-control"] == "public, max-age=60"
    body = response.json()
    assert body["isLive"] is False
    assert body["streamData"] is None
    assert body["timestamp"].endswith("Z")


async def test_live_status_alias_route(app, client, fake_twitch, sample_stream) -> None:
    fake_twitch.streams = [sample_stream]
    _override_service(app, fake_twitch)

    response = await client.get("/live-status")

    assert response.status_code == 200
    assert response.json()["isLive"] is True
    assert response.json()["streamData"]["viewers"] == 321


async def test_live_status_unconfigured(app, client, fake_twitch) -> None:
    _override_service(app, fake_twitch, user_id="")

    response = await client.get("/api/twitch/live")

    assert response.status_code == 503
    assert response.headers["cache-control"] == "no-cache"
    assert response.json()["error"] == "Twitch not configured"
    assert response.json()["isLive"] is False


async def test_live_status_timeout_is_degraded_not_failed(app, client, fake_twitch) -> None:
    fake_twitch.fail_with["streams"] = httpx.ReadTimeout("timed out")
    _override_service(app, fake_twitch)

    response = await client.get("/api/twitch/live")

    assert response.status_code == 200
    assert response.headers["cache-control"] == "no-cache"
    assert response.json() == {
        "isLive": False,
        "error": "Request timeout",
        "cached": False,
        "timestamp": response.json()["timestamp"],
    }


async def test_live_status_malformed_stream_is_degraded(app, client, fake_twitch) -> None:
    fake_twitch.streams = ["oops"]
    _override_service(app, fake_twitch)

    response = await client.get("/api/twitch/live")

    assert response.status_code == 200
    assert response.headers["cache-control"] == "no-cache"
    assert response.json()["isLive"] is False
    assert response.json()["error"] == "Malformed streams response"


async def test_live_status_allows_any_origin(app, client, fake_twitch) -> None:
    _override_service(app, fake_twitch)

    response = await client.get("/api/twitch/live", headers={"Origin": "https://example.org"})

    assert response.headers["access-control-allow-origin"] == "*"


async def test_health(client) -> None:
    response = await client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"


@pytest.mark.parametrize(
    ("path", "cache_control"),
    [
        ("/data/social.stats.json", "public, max-age=300"),
        ("/styles.css", "public, max-age=3600"),
        ("/avatar.png", "public, max-age=86400"),
    ],
)
async def test_static_cache_control_by_type(client, path: str, cache_control: str) -> None:
    response = await client.get(path)

    assert response.status_code == 200
    assert response.headers["cache-control"] == cache_control


async def test_unknown_page_falls_back_to_index(client) -> None:
    response = await client.get("/links/some-page")

    assert response.status_code == 200
    assert "link hub" in response.text


async def test_unknown_api_path_is_404(client) -> None:
    response = await client.get("/api/unknown")

    assert response.status_code == 404
