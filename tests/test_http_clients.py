"""Tests for HTTP-based adapters."""

import asyncio

import httpx

from meal_analyzer.adapters.openai_analysis_client import OpenAIAnalysisClient
from meal_analyzer.adapters.openfoodfacts_client import HttpxOpenFoodFactsClient


class _FakeResponses:
    def __init__(self, output_text: str) -> None:
        self.output_text = output_text
        self.last_payload: dict[str, object] | None = None

    async def create(self, **kwargs):  # type: ignore[no-untyped-def]
        self.last_payload = kwargs
        return type("Resp", (), {"output_text": self.output_text})()


class _FakeOpenAI:
    def __init__(self, output_text: str = "Calories: 300 kcal") -> None:
        self.responses = _FakeResponses(output_text)


def test_openai_analysis_client_returns_text() -> None:
    fake = _FakeOpenAI()
    client = OpenAIAnalysisClient(client=fake)

    result = asyncio.run(
        client.analyse(
            model="gpt-4o",
            image_data_url="data:image/jpeg;base64,ZmFrZQ==",
            prompt="Estimate macros",
        )
    )

    assert result == "Calories: 300 kcal"
    payload = fake.responses.last_payload
    assert payload is not None
    assert payload["model"] == "gpt-4o"
    content = payload["input"][0]["content"]
    assert content[0] == {"type": "input_text", "text": "Estimate macros"}
    assert content[1]["image_url"] == "data:image/jpeg;base64,ZmFrZQ=="


def test_openai_analysis_client_rejects_empty_output() -> None:
    client = OpenAIAnalysisClient(client=_FakeOpenAI(output_text=""))

    try:
        asyncio.run(
            client.analyse(model="gpt-4o", image_data_url="data:,", prompt="p")
        )
    except RuntimeError as exc:
        assert "empty" in str(exc)
    else:
        raise AssertionError("Expected RuntimeError")


def test_openfoodfacts_client_fetches_product() -> None:
    seen_paths: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen_paths.append(request.url.path)
        return httpx.Response(
            200,
            json={"status": 1, "product": {"product_name": "Granola"}},
        )

    transport = httpx.MockTransport(handler)
    async_client = httpx.AsyncClient(transport=transport)
    client = HttpxOpenFoodFactsClient(
        base_url="https://off.test/api/v0", http_client=async_client
    )

    payload = asyncio.run(client.get_product("3017620422003"))

    assert payload["status"] == 1
    assert seen_paths == ["/api/v0/product/3017620422003.json"]


def test_openfoodfacts_client_maps_404_to_missing_status() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(404, json={"status": 0})

    transport = httpx.MockTransport(handler)
    async_client = httpx.AsyncClient(transport=transport)
    client = HttpxOpenFoodFactsClient(
        base_url="https://off.test/api/v0", http_client=async_client
    )

    payload = asyncio.run(client.get_product("1"))

    assert payload == {"status": 0, "code": "1"}


def test_openfoodfacts_client_raises_on_server_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(503)

    transport = httpx.MockTransport(handler)
    async_client = httpx.AsyncClient(transport=transport)
    client = HttpxOpenFoodFactsClient(
        base_url="https://off.test/api/v0", http_client=async_client
    )

    try:
        asyncio.run(client.get_product("1"))
    except httpx.HTTPStatusError as exc:
        assert exc.response.status_code == 503
    else:
        raise AssertionError("Expected HTTPStatusError")
