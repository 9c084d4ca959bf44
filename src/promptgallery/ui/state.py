"""Session lifecycle for per-browser controllers.

Gradio keeps one value per browser session in a ``gr.State``.  The value
starts as ``None`` and is replaced by a :class:`GenerationController` on the
first event; when the session ends Gradio calls :func:`cleanup_controller`.
"""

import logging

from .controller import GenerationController
from .gateway_client import GatewayClient

logger = logging.getLogger(__name__)


def initialize_controller(
    controller: GenerationController | None, gateway: GatewayClient
) -> GenerationController:
    """Return the session's controller, creating it on first use.

    A controller that was already torn down is replaced with a fresh one.

    Args:
        controller: Existing controller or None
        gateway: Shared gateway client for new controllers

    Returns:
        A live controller
    """
    if controller is not None and not controller.closed:
        return controller

    logger.info("Creating new GenerationController for session")
    return GenerationController(gateway)


def cleanup_controller(controller: GenerationController | None) -> None:
    """Tear down a session's controller when the browser session ends."""
    if controller is None:
        return
    logger.info(f"Cleaning up session controller: {controller.state!r}")
    controller.close()
