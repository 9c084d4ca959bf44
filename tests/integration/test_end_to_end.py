"""End-to-end tests: controller -> gateway client -> gateway -> fake image service.

The gateway runs in-process behind ``httpx.ASGITransport``; only the external
image service is faked.
"""

import asyncio
import json

import httpx
import pytest

from promptgallery.ui.controller import GenerationController
from promptgallery.ui.gateway_client import GatewayClient
from promptgallery.ui.models import GenerationPhase


@pytest.fixture
def controller(gateway_app) -> GenerationController:
    gateway = GatewayClient("http://gateway", transport=httpx.ASGITransport(app=gateway_app))
    return GenerationController(gateway)


def url_per_prompt(request: httpx.Request) -> httpx.Response:
    """Answer every prompt with a URL derived from it."""
    prompt = json.loads(request.content)["prompt"]
    return httpx.Response(200, json={"data": [{"url": f"https://img/{prompt}-url"}]})


def submit_all(controller: GenerationController, *prompts: str) -> None:
    async def scenario():
        for prompt in prompts:
            controller.set_prompt(prompt)
            task = controller.submit()
            if task is not None:
                await task

    asyncio.run(scenario())


class TestEndToEnd:
    def test_successful_generation(self, controller, fake_service):
        submit_all(controller, "a red bicycle")

        state = controller.state
        assert state.is_loading is False
        assert state.current_image_url == "https://img/1"
        assert state.history == ("https://img/1",)
        assert fake_service.payloads[0]["prompt"] == "a red bicycle"

    def test_sequential_generations_newest_first(self, controller, fake_service):
        fake_service.responder = url_per_prompt

        submit_all(controller, "cat", "dog")

        assert controller.state.history == ("https://img/dog-url", "https://img/cat-url")

    def test_upstream_failure_surfaces_error(self, controller, fake_service):
        fake_service.responder = lambda request: httpx.Response(500)

        submit_all(controller, "a castle")

        state = controller.state
        assert state.is_loading is False
        assert state.history == ()
        assert state.error is not None
        assert state.prompt == "a castle"
        assert state.last_outcome is GenerationPhase.FAILED

    def test_failure_then_retry(self, controller, fake_service):
        answers = iter(
            [
                httpx.Response(500),
                httpx.Response(200, json={"url": "https://img/castle"}),
            ]
        )
        fake_service.responder = lambda request: next(answers)

        submit_all(controller, "a castle", "a castle")

        assert controller.state.history == ("https://img/castle",)
        assert controller.state.error is None

    def test_blank_prompt_never_reaches_service(self, controller, fake_service):
        submit_all(controller, "   ")

        assert fake_service.requests == []
        assert controller.state.history == ()

    def test_success_body_without_url_is_failure(self, controller, fake_service):
        fake_service.responder = lambda request: httpx.Response(200, json={"data": []})

        submit_all(controller, "a castle")

        assert controller.state.history == ()
        assert "image URL" in controller.state.error
