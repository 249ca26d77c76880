"""Tests for the Gemini vision client."""

import asyncio
import base64
import json

import httpx
import pytest

from macro_hunt.adapters.gemini_vision_client import GeminiVisionClient
from macro_hunt.adapters.http_transport import HttpxTransport
from macro_hunt.adapters.retrying_executor import RetryingExecutor
from macro_hunt.domain.meals import MealType
from macro_hunt.errors import (
    DecodingError,
    HTTPStatusError,
    NoDataError,
    RateLimitedError,
    ServerError,
)
from macro_hunt.services.vision import VisionService
from tests.fakes import RecordingSleep

ENDPOINT = "https://gemini.test/v1beta/models/test-model:generateContent"
PNG = b"\x89PNG\r\n\x1a\n" + b"pixels"
ESTIMATE_JSON = (
    '{"mealName": "Oatmeal Bowl", "calories": 320, "protein": 11.5, '
    '"carbs": 54.0, "fat": 6.2, "keyNutrients": "Fiber, Iron"}'
)


def _envelope(text: str) -> dict[str, object]:
    return {"candidates": [{"content": {"parts": [{"text": text}]}}]}


def _client(  # type: ignore[no-untyped-def]
    handler,
) -> tuple[GeminiVisionClient, RecordingSleep]:
    sleep = RecordingSleep()
    transport = HttpxTransport(
        http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler))
    )
    executor = RetryingExecutor(transport=transport, max_attempts=1, sleep=sleep)
    client = GeminiVisionClient(executor=executor, api_key="gem-key", endpoint=ENDPOINT)
    return client, sleep


def _service(client: GeminiVisionClient) -> VisionService:
    return VisionService(
        client_factory=lambda _key: client, api_key_provider=lambda: "k"
    )


def test_request_body_matches_provider_shape() -> None:
    captured: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        captured.append(request)
        return httpx.Response(200, json=_envelope(ESTIMATE_JSON))

    client, _sleep = _client(handler)
    asyncio.run(
        _service(client).analyze(
            [PNG, b"jpeg-ish"], "porridge with berries", MealType.BREAKFAST
        )
    )

    request = captured[0]
    body = json.loads(request.content)
    parts = body["contents"][0]["parts"]
    assert request.headers["x-goog-api-key"] == "gem-key"
    assert request.headers["content-type"] == "application/json"
    assert "porridge with berries" in parts[0]["text"]
    assert "Meal type: Breakfast" in parts[0]["text"]
    assert parts[1]["inline_data"]["mime_type"] == "image/png"
    assert base64.b64decode(parts[1]["inline_data"]["data"]) == PNG
    assert parts[2]["inline_data"]["mime_type"] == "image/jpeg"
    assert "inline_data" not in parts[0]
    assert body["generationConfig"] == {"temperature": 0.3, "maxOutputTokens": 500}


def test_fenced_and_plain_json_parse_identically() -> None:
    def plain(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=_envelope(ESTIMATE_JSON))

    def fenced(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=_envelope(f"```json\n{ESTIMATE_JSON}\n```"))

    plain_client, _ = _client(plain)
    fenced_client, _ = _client(fenced)

    first = asyncio.run(_service(plain_client).analyze([PNG], "", MealType.SNACK))
    second = asyncio.run(_service(fenced_client).analyze([PNG], "", MealType.SNACK))

    assert first == second
    assert first.meal_name == "Oatmeal Bowl"
    assert first.calories == 320
    assert first.fat == pytest.approx(6.2)


def test_error_object_message_is_surfaced() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            400,
            json={
                "error": {"message": "API key not valid", "status": "INVALID_ARGUMENT"}
            },
        )

    client, sleep = _client(handler)

    with pytest.raises(HTTPStatusError) as excinfo:
        asyncio.run(client.generate(prompt="p", images=[PNG]))

    assert excinfo.value.status_code == 400
    assert excinfo.value.body == "INVALID_ARGUMENT: API key not valid"
    assert sleep.delays == []


def test_error_without_error_object_keeps_raw_body() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(403, content=b"forbidden")

    client, _sleep = _client(handler)

    with pytest.raises(HTTPStatusError) as excinfo:
        asyncio.run(client.generate(prompt="p", images=[]))

    assert excinfo.value.body == "forbidden"


def test_rate_limit_maps_to_rate_limited() -> None:
    calls: list[int] = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(1)
        return httpx.Response(429, json={"error": {"status": "RESOURCE_EXHAUSTED"}})

    client, sleep = _client(handler)

    with pytest.raises(RateLimitedError):
        asyncio.run(client.generate(prompt="p", images=[PNG]))

    assert len(calls) == 1
    assert sleep.delays == []


def test_server_error_maps_to_server_error() -> None:
    calls: list[int] = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(1)
        return httpx.Response(503, content=b"unavailable")

    client, _sleep = _client(handler)

    with pytest.raises(ServerError) as excinfo:
        asyncio.run(client.generate(prompt="p", images=[PNG]))

    assert excinfo.value.status_code == 503
    assert len(calls) == 1


@pytest.mark.parametrize(
    "payload",
    [
        {},
        {"candidates": []},
        {"candidates": [{}]},
        {"candidates": [{"content": {"parts": []}}]},
        {"candidates": [{"content": {"parts": [{"inlineData": {}}]}}]},
    ],
)
def test_missing_envelope_levels_raise_decoding_error(payload: dict) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=payload)

    client, _sleep = _client(handler)

    with pytest.raises(DecodingError) as excinfo:
        asyncio.run(client.generate(prompt="p", images=[PNG]))

    assert "Unexpected Gemini response" in excinfo.value.description


def test_empty_body_raises_no_data() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=b"")

    client, _sleep = _client(handler)

    with pytest.raises(NoDataError):
        asyncio.run(client.generate(prompt="p", images=[PNG]))


def test_unparseable_model_text_includes_snippet() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=_envelope("I think this is about 400 kcal"))

    client, _sleep = _client(handler)

    with pytest.raises(DecodingError) as excinfo:
        asyncio.run(_service(client).analyze([PNG], "", MealType.DINNER))

    assert "I think this is about 400 kcal" in excinfo.value.description
