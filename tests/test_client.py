import asyncio

import httpx
import pytest
import respx

from conftest import FakeGenerator, make_output, make_request
from fitquest.client import QuestApiClient, QuestApiError
from fitquest.client.quest_api import NETWORK_ERROR_MESSAGE, STATUS_MESSAGES
from fitquest.errors import QuestGenerationError
from fitquest.main import app
from fitquest.schemas.quest import QUEST_STYLES

pytestmark = pytest.mark.asyncio

BASE_URL = "http://quests.test/api"


def quest_json(**overrides) -> dict:
    return {
        **make_output(**overrides),
        "questId": "550e8400-e29b-41d4-a716-446655440000",
        "generatedAt": "2025-12-10T15:45:00.000Z",
    }


@respx.mock
async def test_generate_quest_success():
    route = respx.post(f"{BASE_URL}/quests/generate").mock(
        return_value=httpx.Response(200, json={"success": True, "quest": quest_json()})
    )
    async with QuestApiClient(base_url=BASE_URL) as api:
        quest = await api.generate_quest(make_request())

    assert quest.title == "The Waterfront Wanderer"
    assert route.called
    assert route.calls.last.request.headers["content-type"] == "application/json"


@pytest.mark.parametrize("status", [400, 429, 500, 503])
@respx.mock
async def test_known_statuses_get_specific_messages(status):
    respx.post(f"{BASE_URL}/quests/generate").mock(
        return_value=httpx.Response(status, json={"success": False, "error": "boom"})
    )
    async with QuestApiClient(base_url=BASE_URL) as api:
        with pytest.raises(QuestApiError) as excinfo:
            await api.generate_quest(make_request())

    err = excinfo.value
    assert err.message == STATUS_MESSAGES[status]
    assert err.status_code == status
    assert err.is_network_error is False
    assert err.detail == "boom"


@respx.mock
async def test_other_status_gets_generic_message():
    respx.get(f"{BASE_URL}/quests/demo").mock(return_value=httpx.Response(418, text="teapot"))
    async with QuestApiClient(base_url=BASE_URL) as api:
        with pytest.raises(QuestApiError) as excinfo:
            await api.fetch_demo_quests()

    assert excinfo.value.status_code == 418
    assert "418" in excinfo.value.message
    assert excinfo.value.detail is None
    assert excinfo.value.title == "Generation Failed"


@respx.mock
async def test_unreachable_server_is_network_error():
    respx.post(f"{BASE_URL}/quests/generate").mock(side_effect=httpx.ConnectError("refused"))
    async with QuestApiClient(base_url=BASE_URL) as api:
        with pytest.raises(QuestApiError) as excinfo:
            await api.generate_quest(make_request())

    err = excinfo.value
    assert err.is_network_error is True
    assert err.status_code is None
    assert err.message == NETWORK_ERROR_MESSAGE
    assert err.title == "Connection Error"


@respx.mock
async def test_timeout_is_network_error():
    respx.post(f"{BASE_URL}/quests/generate").mock(side_effect=httpx.ReadTimeout("slow"))
    async with QuestApiClient(base_url=BASE_URL) as api:
        with pytest.raises(QuestApiError) as excinfo:
            await api.generate_quest(make_request())
    assert excinfo.value.is_network_error is True


@pytest.mark.parametrize("body", [
    {"success": True},
    {"success": True, "quest": {"title": "x"}},
    {"success": True, "quest": None},
    ["not", "an", "envelope"],
])
@respx.mock
async def test_unexpected_success_body_is_api_error(body):
    respx.post(f"{BASE_URL}/quests/generate").mock(return_value=httpx.Response(200, json=body))
    async with QuestApiClient(base_url=BASE_URL) as api:
        with pytest.raises(QuestApiError) as excinfo:
            await api.generate_quest(make_request())

    assert excinfo.value.status_code == 200
    assert excinfo.value.is_network_error is False
    assert "unreadable" in excinfo.value.message


@pytest.mark.parametrize("body", [{"success": True}, {"success": True, "quests": [{"title": "x"}]}])
@respx.mock
async def test_unexpected_demo_body_is_api_error(body):
    respx.get(f"{BASE_URL}/quests/demo").mock(return_value=httpx.Response(200, json=body))
    async with QuestApiClient(base_url=BASE_URL) as api:
        with pytest.raises(QuestApiError) as excinfo:
            await api.fetch_demo_quests()
    assert excinfo.value.status_code == 200


@respx.mock
async def test_non_json_success_body_is_api_error():
    respx.get(f"{BASE_URL}/quests/demo").mock(return_value=httpx.Response(200, text="<html>"))
    async with QuestApiClient(base_url=BASE_URL) as api:
        with pytest.raises(QuestApiError, match="unreadable"):
            await api.fetch_demo_quests()


async def test_default_timeout_is_sixty_seconds():
    api = QuestApiClient(base_url=BASE_URL)
    assert api.timeout == 60.0
    await api.aclose()


async def test_error_titles():
    assert QuestApiError("x", status_code=400).title == "Invalid Request"
    assert QuestApiError("x", status_code=500).title == "Generation Failed"


# ==========================================
# FAN-OUT AGAINST THE REAL APP
# ==========================================

def asgi_client() -> QuestApiClient:
    return QuestApiClient(base_url="http://testserver/api", transport=httpx.ASGITransport(app=app))


async def test_all_styles_success(generator):
    base = {k: v for k, v in make_request().items() if k != "questStyle"}
    async with asgi_client() as api:
        quests = await api.generate_all_styles(base)

    assert [q.title for q in quests] == [f"Quest {s}" for s in QUEST_STYLES]
    assert sorted(r.quest_style for r in generator.requests) == sorted(QUEST_STYLES)
    assert len({q.quest_id for q in quests}) == 3


async def test_all_styles_one_failure_fails_the_batch():
    class OneBadStyle(FakeGenerator):
        async def generate(self, request):
            if request.quest_style == "challenge_based":
                raise QuestGenerationError("provider hiccup")
            return await super().generate(request)

    app.state.generator = OneBadStyle()
    try:
        base = {k: v for k, v in make_request().items() if k != "questStyle"}
        async with asgi_client() as api:
            with pytest.raises(QuestApiError) as excinfo:
                await api.generate_all_styles(base)
    finally:
        app.state.generator = None

    assert excinfo.value.status_code == 500
    assert excinfo.value.detail == "provider hiccup"


async def test_all_styles_cancels_calls_still_running(monkeypatch):
    cancelled = []

    async def fake_generate(request):
        if request["questStyle"] == "fun_exploratory":
            raise QuestApiError("fast failure", status_code=500)
        try:
            await asyncio.sleep(10)
        except asyncio.CancelledError:
            cancelled.append(request["questStyle"])
            raise

    api = QuestApiClient(base_url=BASE_URL)
    monkeypatch.setattr(api, "generate_quest", fake_generate)
    base = {k: v for k, v in make_request().items() if k != "questStyle"}

    with pytest.raises(QuestApiError, match="fast failure"):
        await asyncio.wait_for(api.generate_all_styles(base), timeout=5)
    await api.aclose()

    assert sorted(cancelled) == ["challenge_based", "performance_oriented"]
