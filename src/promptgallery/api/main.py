"""Prompt Gallery — Generation Gateway.

The gateway is the server-side hop between the browser and the external
image service.  It exists so the upstream credential never reaches
client-visible code or responses.

Architecture
------------
- **Configuration** is an explicit :class:`PromptGalleryConfig` value passed
  to :func:`create_app`; a missing credential aborts startup.
- **The upstream client** is created once per application, stored on
  ``app.state`` and closed in the lifespan shutdown phase.
- **Errors** never escape as unstructured responses: validation failures,
  upstream failures and malformed requests are all converted to
  ``{"error": "..."}`` bodies by the registered exception handlers.

Endpoints
---------
========  =========================  =====================================
Method    Path                       Purpose
========  =========================  =====================================
POST      ``/api/generate-image``    Validate prompt, call image service
GET       ``/api/config``            Public, credential-free settings
GET       ``/health``                Liveness check
========  =========================  =====================================

Usage
-----
CLI (installed entry point, gateway only)::

    promptgallery-gateway

Direct invocation::

    python -m promptgallery.api.main
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import APIRouter, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from promptgallery import __version__
from promptgallery.api.models import ErrorResponse, GenerateImageRequest
from promptgallery.core.config import PromptGalleryConfig, load_config
from promptgallery.core.errors import UpstreamError, ValidationError
from promptgallery.core.upstream import UpstreamImageClient
from promptgallery.core.validation import validate_prompt

logger = logging.getLogger(__name__)

router = APIRouter()


# ---------------------------------------------------------------------------
# Application lifecycle: upstream client teardown.
# ---------------------------------------------------------------------------


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage application startup and shutdown lifecycle.

    The upstream client is created eagerly by :func:`create_app`, so startup
    only logs.  On shutdown the upstream connection pool is closed, along with
    the UI's gateway client when one was attached by the combined server.

    Args:
        app: The FastAPI application instance.

    Yields:
        Control back to the application for the duration of its lifetime.
    """
    logger.info(f"Gateway started (upstream: {app.state.config.upstream_url})")

    yield

    await app.state.upstream.aclose()
    logger.info("Upstream client closed on shutdown.")

    if app.state.ui_gateway is not None:
        await app.state.ui_gateway.aclose()
        logger.info("UI gateway client closed on shutdown.")


# ---------------------------------------------------------------------------
# Exception handlers: every failure becomes {"error": ...}.
# ---------------------------------------------------------------------------


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorResponse(error=message).model_dump())


async def _handle_validation_error(request: Request, exc: ValidationError) -> JSONResponse:
    logger.info(f"Rejected generation request: {exc}")
    return _error(exc.status_code, str(exc))


async def _handle_request_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    logger.info(f"Malformed request body: {len(exc.errors())} error(s)")
    return _error(400, "Request body must be a JSON object with a string 'prompt' field")


async def _handle_upstream_error(request: Request, exc: UpstreamError) -> JSONResponse:
    return _error(exc.status_code, str(exc))


async def _handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"Unhandled gateway error: {exc}", exc_info=True)
    return _error(500, "Internal gateway error")


# ---------------------------------------------------------------------------
# Routes.
# ---------------------------------------------------------------------------


@router.post(
    "/api/generate-image",
    responses={
        400: {"model": ErrorResponse},
        502: {"model": ErrorResponse},
        504: {"model": ErrorResponse},
    },
)
async def generate_image(req: GenerateImageRequest, request: Request) -> JSONResponse:
    """Generate one image for the submitted prompt.

    This endpoint:

    1. Validates the prompt (present, not blank, within length limit).
    2. Issues exactly one call to the image service with the credential.
    3. Relays the service's success body unchanged with status 200.

    Args:
        req: Validated :class:`GenerateImageRequest` payload.
        request: Incoming request, used to reach ``app.state``.

    Returns:
        The upstream success body.

    Raises:
        ValidationError: 400 for a missing, blank or over-long prompt.
        UpstreamError: 502/504 when the image service fails.
    """
    config: PromptGalleryConfig = request.app.state.config
    prompt = validate_prompt(req.prompt, config.max_prompt_length)

    logger.info(f"Generating image ({len(prompt)} character prompt)")
    upstream: UpstreamImageClient = request.app.state.upstream
    descriptor = await upstream.generate(prompt)

    return JSONResponse(status_code=200, content=descriptor)


@router.get("/api/config")
async def get_config(request: Request) -> dict:
    """Return the settings the UI needs.  Never includes the credential."""
    config: PromptGalleryConfig = request.app.state.config
    return {
        "version": __version__,
        "max_prompt_length": config.max_prompt_length,
        "ui_path": config.ui_path,
    }


@router.get("/health")
async def health_check() -> dict:
    """Health check endpoint."""
    return {"status": "healthy", "version": __version__}


# ---------------------------------------------------------------------------
# Application factory.
# ---------------------------------------------------------------------------


def create_app(
    config: PromptGalleryConfig | None = None,
    upstream: UpstreamImageClient | None = None,
) -> FastAPI:
    """Build the gateway application.

    Args:
        config: Gateway configuration.  Loaded from the environment when
            omitted (this is what ``uvicorn --factory`` does).
        upstream: Pre-built upstream client.  Tests pass one backed by an
            ``httpx.MockTransport``.

    Returns:
        The configured FastAPI application.

    Raises:
        ConfigurationError: If no upstream credential is configured.
    """
    if config is None:
        config = load_config()
    if upstream is None:
        upstream = UpstreamImageClient(config)

    app = FastAPI(
        title="Prompt Gallery Gateway",
        description="Credential-holding proxy in front of an image-generation service.",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.config = config
    app.state.upstream = upstream
    app.state.ui_gateway = None

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(ValidationError, _handle_validation_error)
    app.add_exception_handler(RequestValidationError, _handle_request_validation_error)
    app.add_exception_handler(UpstreamError, _handle_upstream_error)
    app.add_exception_handler(Exception, _handle_unexpected_error)

    app.include_router(router)
    return app


# ---------------------------------------------------------------------------
# CLI entry point.
# ---------------------------------------------------------------------------


def main() -> None:
    """Launch the gateway alone under uvicorn.

    Host and port come from ``PROMPTGALLERY_SERVER_HOST`` and
    ``PROMPTGALLERY_SERVER_PORT``.  Use ``promptgallery`` instead to serve the
    gateway and the UI together.
    """
    import uvicorn

    config = load_config()
    logging.basicConfig(
        level=config.log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    uvicorn.run(
        create_app(config),
        host=config.server_host,
        port=config.server_port,
        reload=False,
    )


if __name__ == "__main__":
    main()
