"""Client for the external image-generation service.

The gateway owns exactly one :class:`UpstreamImageClient`.  It is the only
place in the project that unwraps the credential, and it does so solely to
build the outbound authentication header.

Failure Policy
--------------
One call per request, no retries, no caching.  Every failure is converted
into :class:`~promptgallery.core.errors.UpstreamError`:

- non-2xx status from the service   -> 502
- timeout                           -> 504
- connection/transport failure      -> 502
- 2xx with a body that is not JSON  -> 502
"""

import logging
from typing import Any

import httpx

from .config import PromptGalleryConfig
from .errors import UpstreamError

logger = logging.getLogger(__name__)

REDACTED = "[redacted]"


class UpstreamImageClient:
    """Sends generation requests to the configured image service.

    Args:
        config: Gateway configuration; must carry an API key
        transport: Optional httpx transport, used by tests to fake the service

    Raises:
        ConfigurationError: If the configuration has no API key
    """

    def __init__(
        self,
        config: PromptGalleryConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._api_key = config.require_api_key().get_secret_value()
        self.url = config.upstream_url
        self.params = dict(config.upstream_params)
        self.auth_header = config.upstream_auth_header
        self.auth_scheme = config.upstream_auth_scheme
        self._client = httpx.AsyncClient(timeout=config.upstream_timeout, transport=transport)

    def _headers(self) -> dict[str, str]:
        value = f"{self.auth_scheme} {self._api_key}" if self.auth_scheme else self._api_key
        return {self.auth_header: value, "Content-Type": "application/json"}

    def _redact(self, text: str) -> str:
        """Remove any occurrence of the credential from *text*."""
        if self._api_key:
            text = text.replace(self._api_key, REDACTED)
        return text

    def _error_from_response(self, response: httpx.Response) -> UpstreamError:
        """Build a sanitized UpstreamError from a non-2xx response."""
        message = ""
        try:
            payload = response.json()
        except ValueError:
            payload = None

        if isinstance(payload, dict):
            error_obj = payload.get("error")
            if isinstance(error_obj, dict):
                message = str(error_obj.get("message") or "")
            elif isinstance(error_obj, str):
                message = error_obj

        if message:
            detail = f"Image service error ({response.status_code}): {self._redact(message)}"
        else:
            detail = f"Image service returned status {response.status_code}"

        return UpstreamError(detail, status_code=502, upstream_status=response.status_code)

    async def generate(self, prompt: str) -> Any:
        """Request one image for *prompt*.

        Args:
            prompt: Validated, normalized prompt text

        Returns:
            The service's parsed JSON success body, unmodified

        Raises:
            UpstreamError: On any failure, see module docstring
        """
        payload = {**self.params, "prompt": prompt}

        try:
            response = await self._client.post(self.url, headers=self._headers(), json=payload)
        except httpx.TimeoutException as e:
            logger.warning(f"Image service timed out: {type(e).__name__}")
            raise UpstreamError("Image service timed out", status_code=504) from e
        except httpx.HTTPError as e:
            logger.warning(f"Image service unreachable: {type(e).__name__}")
            raise UpstreamError("Could not reach the image service", status_code=502) from e

        if not response.is_success:
            error = self._error_from_response(response)
            logger.warning(str(error))
            raise error

        try:
            return response.json()
        except ValueError as e:
            logger.warning("Image service returned a non-JSON success body")
            raise UpstreamError(
                "Image service returned a malformed response",
                status_code=502,
                upstream_status=response.status_code,
            ) from e

    async def aclose(self) -> None:
        """Close the underlying HTTP connection pool."""
        await self._client.aclose()
