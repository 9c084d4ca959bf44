"""HTTP client the controller uses to reach the generation gateway."""

import logging

import httpx

from promptgallery.core.errors import GenerationFailed
from promptgallery.core.models import GenerationRequest, GenerationResult

logger = logging.getLogger(__name__)

GENERATE_PATH = "/api/generate-image"


class GatewayClient:
    """Calls ``POST /api/generate-image`` and interprets the answer.

    The client never sees the upstream credential; it only speaks the
    gateway's public contract.

    Args:
        base_url: Gateway root, e.g. ``http://127.0.0.1:7860``
        timeout: Seconds to wait for the gateway.  Should exceed the
            gateway's own upstream timeout so that upstream timeouts arrive
            as structured 504 responses.
        transport: Optional httpx transport (``httpx.ASGITransport`` for an
            in-process gateway, ``httpx.MockTransport`` in tests)
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 90.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=self.base_url, timeout=timeout, transport=transport
        )

    async def generate(self, request: GenerationRequest) -> GenerationResult:
        """Submit one generation request.

        Args:
            request: The prompt submission

        Returns:
            The generation result with the extracted image URL

        Raises:
            GenerationFailed: If the gateway is unreachable, answers with a
                non-200 status, or returns a body without an image URL
        """
        try:
            response = await self._client.post(GENERATE_PATH, json=request.to_payload())
        except httpx.HTTPError as e:
            logger.warning(f"Gateway unreachable: {type(e).__name__}")
            raise GenerationFailed("Could not reach the generation service") from e

        if response.status_code != 200:
            raise GenerationFailed(_error_message(response), status_code=response.status_code)

        try:
            descriptor = response.json()
        except ValueError as e:
            raise GenerationFailed("Generation service returned a malformed response", 200) from e

        try:
            return GenerationResult.from_descriptor(descriptor)
        except ValueError as e:
            raise GenerationFailed(str(e), status_code=200) from e

    async def aclose(self) -> None:
        """Close the underlying HTTP connection pool."""
        await self._client.aclose()


def _error_message(response: httpx.Response) -> str:
    """Pull the gateway's ``{"error": ...}`` message, or describe the status."""
    try:
        payload = response.json()
    except ValueError:
        payload = None

    if isinstance(payload, dict) and isinstance(payload.get("error"), str):
        return payload["error"]
    return f"Generation failed with status {response.status_code}"
