"""Data models for Prompt Gallery UI state."""

from dataclasses import dataclass
from enum import Enum


class GenerationPhase(str, Enum):
    """Phases of the prompt/history state machine.

    ``SUCCEEDED`` and ``FAILED`` are momentary: the controller records them
    as the last outcome and returns to ``IDLE`` in the same transition.
    """

    IDLE = "idle"
    SUBMITTING = "submitting"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass(frozen=True)
class UIState:
    """Snapshot of everything the page renders.

    Snapshots are immutable; the controller replaces the whole snapshot on
    every transition.  Renderers may keep a reference without worrying about
    it changing under them.

    Attributes
    ----------
    prompt : str
        Current prompt text (kept after submission and after failure)
    current_image_url : str | None
        Most recently generated image, always ``history[0]`` after a success
    history : tuple[str, ...]
        Generated image URLs, newest first
    is_loading : bool
        True strictly while a request is in flight
    error : str | None
        Message from the last failed generation, cleared on the next submit
    phase : GenerationPhase
        ``IDLE`` or ``SUBMITTING``
    last_outcome : GenerationPhase | None
        ``SUCCEEDED`` or ``FAILED`` once any request has completed
    """

    prompt: str = ""
    current_image_url: str | None = None
    history: tuple[str, ...] = ()
    is_loading: bool = False
    error: str | None = None
    phase: GenerationPhase = GenerationPhase.IDLE
    last_outcome: GenerationPhase | None = None

    @property
    def has_error(self) -> bool:
        return self.error is not None

    def __repr__(self) -> str:
        """String representation for debugging."""
        return (
            f"UIState(phase={self.phase.value}, loading={self.is_loading}, "
            f"history={len(self.history)}, error={self.error!r})"
        )
