"""Single-process server: gateway routes plus the Gradio UI.

The UI is mounted on the gateway application, so the browser only ever talks
to one origin.  The UI's gateway client reaches ``/api/generate-image``
in-process through ``httpx.ASGITransport``, using the same HTTP contract an
external caller would.

Usage
-----
CLI (installed entry point)::

    promptgallery

Direct invocation::

    python -m promptgallery.server
"""

import logging

import gradio as gr
import httpx
from fastapi import FastAPI
from fastapi.responses import RedirectResponse

from promptgallery.api.main import create_app
from promptgallery.core.config import PromptGalleryConfig, load_config
from promptgallery.ui.app import create_ui
from promptgallery.ui.gateway_client import GatewayClient

logger = logging.getLogger(__name__)

IN_PROCESS_BASE_URL = "http://gateway"


def create_server(config: PromptGalleryConfig | None = None) -> FastAPI:
    """Build the gateway app with the UI mounted at ``config.ui_path``.

    Args:
        config: Configuration; loaded from the environment when omitted

    Returns:
        The combined ASGI application

    Raises:
        ConfigurationError: If no upstream credential is configured
    """
    if config is None:
        config = load_config()

    app = create_app(config)

    gateway = GatewayClient(
        IN_PROCESS_BASE_URL,
        timeout=config.upstream_timeout + 30,
        transport=httpx.ASGITransport(app=app),
    )
    # Closed by the gateway lifespan on shutdown.
    app.state.ui_gateway = gateway
    blocks = create_ui(gateway, config)

    @app.get("/", include_in_schema=False)
    async def index() -> RedirectResponse:
        """Send browsers to the UI."""
        return RedirectResponse(url=config.ui_path)

    # Mounted last so the gateway routes above take precedence.
    app = gr.mount_gradio_app(app, blocks, path=config.ui_path)
    logger.info(f"UI mounted at {config.ui_path}")
    return app


def main() -> None:
    """Launch the combined server under uvicorn."""
    import uvicorn

    config = load_config()
    logging.basicConfig(
        level=config.log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    logger.info(f"Configuration: {config.model_dump(exclude={'api_key'})}")

    uvicorn.run(
        create_server(config),
        host=config.server_host,
        port=config.server_port,
        reload=False,
    )


if __name__ == "__main__":
    main()
