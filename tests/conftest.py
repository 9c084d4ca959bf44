"""Shared pytest fixtures for Prompt Gallery tests."""

import asyncio
import json

import httpx
import pytest
from fastapi.testclient import TestClient

from promptgallery.api.main import create_app
from promptgallery.core.config import PromptGalleryConfig
from promptgallery.core.models import GenerationResult
from promptgallery.core.upstream import UpstreamImageClient

TEST_API_KEY = "sk-test-secret-123"
UPSTREAM_URL = "https://images.example.test/v1/generate"


class FakeImageService:
    """Stand-in for the external image service, used through httpx.MockTransport.

    Records every request it receives.  ``responder`` decides the answer and
    may be replaced by a test; it can also raise an httpx exception.
    """

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.responder = lambda request: httpx.Response(
            200, json={"created": 1, "data": [{"url": "https://img/1"}]}
        )

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.responder(request)

    @property
    def payloads(self) -> list[dict]:
        return [json.loads(r.content) for r in self.requests]


class FakeGateway:
    """Stand-in for GatewayClient in controller tests.

    Each call consumes the next outcome: a URL string for success or an
    exception instance to raise.  When ``gate`` is set, calls wait on it
    before answering so a test can observe the in-flight state.
    """

    def __init__(self, *outcomes):
        self.outcomes = list(outcomes)
        self.requests = []
        self.gate: asyncio.Event | None = None

    async def generate(self, request):
        self.requests.append(request)
        outcome = self.outcomes.pop(0)
        if self.gate is not None:
            await self.gate.wait()
        if isinstance(outcome, BaseException):
            raise outcome
        return GenerationResult(image_url=outcome, descriptor={"url": outcome})


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep PROMPTGALLERY_* variables from the developer's shell out of tests."""
    for name in (
        "PROMPTGALLERY_API_KEY",
        "PROMPTGALLERY_UPSTREAM_URL",
        "PROMPTGALLERY_UPSTREAM_PARAMS",
        "PROMPTGALLERY_SERVER_PORT",
        "PROMPTGALLERY_GATEWAY_URL",
        "PROMPTGALLERY_MAX_PROMPT_LENGTH",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def test_config() -> PromptGalleryConfig:
    """Create a test configuration with a fake credential.

    Returns:
        PromptGalleryConfig that never reads a .env file
    """
    return PromptGalleryConfig(
        api_key=TEST_API_KEY,
        upstream_url=UPSTREAM_URL,
        upstream_params={"model": "test-model"},
        upstream_timeout=5.0,
        max_prompt_length=200,
        _env_file=None,
    )


@pytest.fixture
def fake_service() -> FakeImageService:
    return FakeImageService()


@pytest.fixture
def upstream_client(test_config, fake_service) -> UpstreamImageClient:
    """UpstreamImageClient wired to the fake image service."""
    return UpstreamImageClient(test_config, transport=httpx.MockTransport(fake_service))


@pytest.fixture
def gateway_app(test_config, upstream_client):
    """Gateway application backed by the fake image service."""
    return create_app(test_config, upstream=upstream_client)


@pytest.fixture
def test_client(gateway_app):
    """FastAPI TestClient for the gateway.

    Unhandled server errors are returned as responses rather than raised,
    the way a real client would see them.
    """
    with TestClient(gateway_app, raise_server_exceptions=False) as client:
        yield client


@pytest.fixture
def make_gateway():
    """Factory for FakeGateway instances: ``make_gateway("https://img/1", error)``."""
    return FakeGateway
