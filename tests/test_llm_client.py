import httpx
import pytest

from odyssey_reader.core.errors import (
    AuthFailure,
    GenericAPIFailure,
    MissingKey,
    NetworkFailure,
    QuotaExceeded,
    RateLimited,
)
from odyssey_reader.services.llm_client import LLMClient

from conftest import API_KEY


def _client(settings, fake_api, key=API_KEY, max_calls=5):
    return LLMClient(settings, api_key_provider=lambda: key, max_calls=max_calls, http_client=fake_api.client())


def test_send_builds_single_user_message(settings, fake_api):
    client = _client(settings, fake_api)
    assert client.send("Hello Homer") == "Commentary"

    req = fake_api.requests[0]
    assert req.method == "POST"
    assert str(req.url) == settings.API_ENDPOINT
    assert req.headers["x-api-key"] == API_KEY
    assert req.headers["anthropic-version"] == settings.ANTHROPIC_VERSION
    assert fake_api.last_body() == {
        "model": settings.MODEL,
        "max_tokens": settings.MAX_TOKENS,
        "messages": [{"role": "user", "content": "Hello Homer"}],
    }


def test_only_text_blocks_are_joined_in_order(settings, fake_api):
    fake_api.queue((200, {"content": [
        {"type": "text", "text": "one"},
        {"type": "tool_use", "id": "x", "name": "y", "input": {}},
        {"type": "text", "text": "two"},
    ]}))
    assert _client(settings, fake_api).send("p") == "one\ntwo"


def test_missing_key_fails_before_network(settings, fake_api):
    client = _client(settings, fake_api, key=None)
    with pytest.raises(MissingKey):
        client.send("p")
    assert fake_api.requests == []


def test_quota_reached_fails_before_network(settings, fake_api):
    client = _client(settings, fake_api, max_calls=1)
    client.send("first")
    assert client.call_count == 1
    with pytest.raises(QuotaExceeded):
        client.send("second")
    assert len(fake_api.requests) == 1
    assert client.call_count == 1


@pytest.mark.parametrize(
    "response,error",
    [
        ((401, {"error": {"type": "authentication_error", "message": "invalid x-api-key"}}), AuthFailure),
        ((429, {"error": {"type": "rate_limit_error", "message": "slow down"}}), RateLimited),
        ((500, {"error": {"type": "api_error", "message": "Overloaded"}}), GenericAPIFailure),
        ((200, {"unexpected": True}), GenericAPIFailure),
        ((200, {"content": "oops"}), GenericAPIFailure),
        ((200, {"content": {"type": "text", "text": "x"}}), GenericAPIFailure),
        (httpx.ConnectError("unreachable"), NetworkFailure),
    ],
)
def test_failures_are_classified_and_not_counted(settings, fake_api, response, error):
    fake_api.queue(response)
    client = _client(settings, fake_api)
    with pytest.raises(error):
        client.send("p")
    assert client.call_count == 0


def test_api_error_message_comes_from_body(settings, fake_api):
    fake_api.queue((400, {"error": {"type": "invalid_request_error", "message": "max_tokens too large"}}))
    with pytest.raises(GenericAPIFailure) as exc:
        _client(settings, fake_api).send("p")
    assert exc.value.message == "max_tokens too large"
    assert exc.value.status == 400


def test_api_error_falls_back_to_status_text(settings, fake_api):
    fake_api.queue((503, "<html>down</html>"))
    with pytest.raises(GenericAPIFailure) as exc:
        _client(settings, fake_api).send("p")
    assert exc.value.message == "Service Unavailable"


def test_api_error_without_message(settings, fake_api):
    fake_api.queue((418, {"detail": "teapot"}))
    with pytest.raises(GenericAPIFailure) as exc:
        _client(settings, fake_api).send("p")
    assert exc.value.message == "API request failed (418)"


def test_each_success_counts_once(settings, fake_api):
    client = _client(settings, fake_api, max_calls=10)
    for _ in range(3):
        client.send("p")
    assert client.call_count == 3
    assert client.estimated_cost == 0.06
    assert not client.near_limit


def test_near_limit_at_ninety_percent(settings, fake_api):
    client = _client(settings, fake_api, max_calls=10)
    for _ in range(9):
        client.send("p")
    assert client.near_limit
