"""Gradio event handlers and the pure rendering of controller state."""

import logging
from collections.abc import AsyncIterator
from typing import Any

import gradio as gr

from promptgallery.core.validation import is_submittable

from .controller import GenerationController
from .gateway_client import GatewayClient
from .models import GenerationPhase, UIState
from .state import initialize_controller

logger = logging.getLogger(__name__)

READY_MESSAGE = "*Describe an image and press Generate*"
EMPTY_PROMPT_MESSAGE = "⚠️ Please enter a prompt first"


def render_status(state: UIState, notice: str | None = None) -> str:
    """Markdown status line for a snapshot.

    Args:
        state: Snapshot to describe
        notice: Optional one-off message that overrides the idle text

    Returns:
        Markdown string
    """
    if state.is_loading:
        return "⏳ **Generating image...**"
    if notice:
        return notice
    if state.error is not None:
        return f"❌ **Generation failed**\n\n{state.error}"
    if state.last_outcome is GenerationPhase.SUCCEEDED:
        count = len(state.history)
        return f"✅ **Image generated** ({count} in history)"
    return READY_MESSAGE


def render_outputs(state: UIState, notice: str | None = None) -> tuple[Any, list[str], str, Any]:
    """Map a snapshot onto the page components.

    Returns:
        Tuple of (current_image, history_gallery, status_markdown, button_update)
    """
    return (
        state.current_image_url,
        list(state.history),
        render_status(state, notice),
        gr.update(interactive=not state.is_loading and is_submittable(state.prompt)),
    )


def update_prompt(
    prompt: str, controller: GenerationController | None, gateway: GatewayClient
) -> tuple[GenerationController, Any]:
    """Handle prompt edits.

    Args:
        prompt: Current textbox value
        controller: Session controller (None on first event)
        gateway: Shared gateway client

    Returns:
        Tuple of (controller, button_update)
    """
    controller = initialize_controller(controller, gateway)
    controller.set_prompt(prompt or "")
    return controller, gr.update(interactive=controller.can_submit())


async def generate_image(
    prompt: str, controller: GenerationController | None, gateway: GatewayClient
) -> AsyncIterator[tuple]:
    """Submit the prompt and stream two renders: loading, then the outcome.

    Args:
        prompt: Current textbox value
        controller: Session controller (None on first event)
        gateway: Shared gateway client

    Yields:
        Tuple of (current_image, history_gallery, status, button_update, controller)
    """
    controller = initialize_controller(controller, gateway)
    controller.set_prompt(prompt or "")

    task = controller.submit()
    if task is None:
        notice = None if controller.state.is_loading else EMPTY_PROMPT_MESSAGE
        yield (*render_outputs(controller.state, notice), controller)
        return

    yield (*render_outputs(controller.state), controller)

    await task
    yield (*render_outputs(controller.state), controller)
