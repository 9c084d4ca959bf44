"""Unit tests for the UI-side gateway client."""

import asyncio
import json

import httpx
import pytest

from promptgallery.core.errors import GenerationFailed
from promptgallery.core.models import GenerationRequest
from promptgallery.ui.gateway_client import GENERATE_PATH, GatewayClient


def make_client(responder) -> tuple[GatewayClient, list[httpx.Request]]:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return responder(request)

    client = GatewayClient("http://gateway.test/", transport=httpx.MockTransport(handler))
    return client, seen


def generate(client: GatewayClient, prompt: str = "a castle"):
    return asyncio.run(client.generate(GenerationRequest(prompt=prompt)))


class TestRequest:
    def test_posts_prompt_json(self):
        client, seen = make_client(lambda r: httpx.Response(200, json={"url": "https://img/1"}))

        generate(client, "a red bicycle")

        assert seen[0].method == "POST"
        assert seen[0].url.path == GENERATE_PATH
        assert json.loads(seen[0].content) == {"prompt": "a red bicycle"}

    def test_base_url_trailing_slash_stripped(self):
        client, _ = make_client(lambda r: httpx.Response(200, json={"url": "x"}))
        assert client.base_url == "http://gateway.test"


class TestSuccess:
    def test_openai_style_body(self):
        body = {"created": 1, "data": [{"url": "https://img/1"}]}
        client, _ = make_client(lambda r: httpx.Response(200, json=body))

        result = generate(client)

        assert result.image_url == "https://img/1"
        assert result.descriptor == body

    def test_flat_url_body(self):
        client, _ = make_client(lambda r: httpx.Response(200, json={"url": "https://img/dog-url"}))
        assert generate(client).image_url == "https://img/dog-url"


class TestFailures:
    def test_error_body_message(self):
        client, _ = make_client(
            lambda r: httpx.Response(502, json={"error": "Image service returned status 500"})
        )

        with pytest.raises(GenerationFailed) as exc_info:
            generate(client)

        assert exc_info.value.status_code == 502
        assert str(exc_info.value) == "Image service returned status 500"

    def test_validation_error_body(self):
        client, _ = make_client(lambda r: httpx.Response(400, json={"error": "prompt must not be empty"}))

        with pytest.raises(GenerationFailed, match="must not be empty") as exc_info:
            generate(client)

        assert exc_info.value.status_code == 400

    def test_non_json_error_body(self):
        client, _ = make_client(lambda r: httpx.Response(500, text="Internal Server Error"))

        with pytest.raises(GenerationFailed, match="status 500"):
            generate(client)

    def test_gateway_unreachable(self):
        def responder(request):
            raise httpx.ConnectError("refused", request=request)

        client, _ = make_client(responder)

        with pytest.raises(GenerationFailed, match="Could not reach") as exc_info:
            generate(client)

        assert exc_info.value.status_code is None

    def test_success_without_image_url(self):
        client, _ = make_client(lambda r: httpx.Response(200, json={"data": []}))

        with pytest.raises(GenerationFailed, match="image URL"):
            generate(client)

    def test_success_with_malformed_body(self):
        client, _ = make_client(lambda r: httpx.Response(200, text="not json"))

        with pytest.raises(GenerationFailed, match="malformed"):
            generate(client)
