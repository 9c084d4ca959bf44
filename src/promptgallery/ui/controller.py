"""Prompt/history controller.

The controller owns the page's :class:`~promptgallery.ui.models.UIState` and
is its only writer.  It implements a small state machine::

    idle --submit--> submitting --success--> idle  (history grows by one)
                                --failure--> idle  (history unchanged, error set)

Rules
-----
- ``submit()`` is a no-op unless the phase is ``IDLE`` and the prompt has a
  non-whitespace character.  This guard is enforced here, not only by
  disabling the button, so at most one request is ever in flight and results
  arrive in submission order.
- The move to ``SUBMITTING`` happens synchronously inside ``submit()``, before
  the gateway call is scheduled, so the next render always sees the loading
  flag.
- Every completion, successful or not, clears the loading flag.
- After ``close()`` no transition is applied and no subscriber is notified.

Usage
-----
::

    controller = GenerationController(GatewayClient("http://127.0.0.1:7860"))
    controller.subscribe(render)
    controller.set_prompt("a red bicycle")
    task = controller.submit()      # state.is_loading is already True
    if task is not None:
        await task                  # history[0] is the new image
"""

import asyncio
import logging
from collections.abc import Callable
from dataclasses import replace
from typing import TYPE_CHECKING

from promptgallery.core.errors import GenerationFailed
from promptgallery.core.models import GenerationRequest
from promptgallery.core.validation import is_submittable, normalize_prompt

from .models import GenerationPhase, UIState

if TYPE_CHECKING:
    from .gateway_client import GatewayClient

logger = logging.getLogger(__name__)

Subscriber = Callable[[UIState], None]


class GenerationController:
    """Observable state container for one browser session.

    Args:
        gateway: Object with an async ``generate(GenerationRequest)`` method,
            normally a :class:`~promptgallery.ui.gateway_client.GatewayClient`
        initial_prompt: Prompt text to start with
    """

    def __init__(self, gateway: "GatewayClient", initial_prompt: str = "") -> None:
        self._gateway = gateway
        self._state = UIState(prompt=initial_prompt)
        self._subscribers: list[Subscriber] = []
        self._inflight: asyncio.Task | None = None
        self._closed = False

    @property
    def state(self) -> UIState:
        """Current immutable snapshot."""
        return self._state

    @property
    def closed(self) -> bool:
        return self._closed

    def can_submit(self) -> bool:
        """Check whether ``submit()`` would dispatch a request right now."""
        return (
            not self._closed
            and self._state.phase is GenerationPhase.IDLE
            and is_submittable(self._state.prompt)
        )

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register a renderer to be called with every new snapshot.

        Args:
            callback: Called with the new UIState after each transition

        Returns:
            A function that removes the subscription
        """
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def set_prompt(self, text: str) -> None:
        """Replace the prompt text.  Allowed in every phase."""
        if text == self._state.prompt:
            return
        self._transition(prompt=text)

    def submit(self) -> asyncio.Task | None:
        """Start a generation for the current prompt.

        Must be called from within a running event loop.

        Returns:
            The task running the gateway call, or None if the submission was
            ignored (blank prompt, request already in flight, or closed)
        """
        if not self.can_submit():
            logger.debug(f"Submission ignored: {self._state!r}")
            return None

        loop = asyncio.get_running_loop()
        request = GenerationRequest(prompt=normalize_prompt(self._state.prompt))

        self._transition(phase=GenerationPhase.SUBMITTING, is_loading=True, error=None)
        self._inflight = loop.create_task(self._dispatch(request))
        return self._inflight

    async def _dispatch(self, request: GenerationRequest) -> None:
        try:
            result = await self._gateway.generate(request)
        except GenerationFailed as e:
            logger.warning(f"Generation failed: {e}")
            self._complete_failure(str(e))
        except Exception as e:
            logger.error(f"Unexpected error during generation: {e}", exc_info=True)
            self._complete_failure("An unexpected error occurred. Please try again.")
        else:
            self._complete_success(result.image_url)
        finally:
            self._inflight = None

    def _complete_success(self, image_url: str) -> None:
        self._transition(
            current_image_url=image_url,
            history=(image_url,) + self._state.history,
            is_loading=False,
            error=None,
            phase=GenerationPhase.IDLE,
            last_outcome=GenerationPhase.SUCCEEDED,
        )

    def _complete_failure(self, message: str) -> None:
        self._transition(
            is_loading=False,
            error=message,
            phase=GenerationPhase.IDLE,
            last_outcome=GenerationPhase.FAILED,
        )

    def _transition(self, **changes) -> None:
        """The single mutator of controller state."""
        if self._closed:
            logger.debug(f"Dropped update after close: {sorted(changes)}")
            return

        self._state = replace(self._state, **changes)
        logger.debug(f"Transition -> {self._state!r}")

        for callback in list(self._subscribers):
            try:
                callback(self._state)
            except Exception as e:
                logger.error(f"State subscriber failed: {e}", exc_info=True)

    def close(self) -> None:
        """Tear the controller down.

        Cancels any in-flight request and stops all further updates.
        """
        if self._closed:
            return
        self._closed = True
        if self._inflight is not None and not self._inflight.done():
            logger.info("Cancelling in-flight generation on teardown")
            self._inflight.cancel()
        self._subscribers.clear()
