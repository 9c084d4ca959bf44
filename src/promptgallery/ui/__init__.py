"""Browser-side half of Prompt Gallery.

- controller: the prompt/history state machine (GenerationController)
- gateway_client: HTTP client for the generation gateway
- models: immutable UIState snapshot and GenerationPhase
- state: per-session controller lifecycle
- handlers: Gradio event handlers and rendering
- app: Gradio page assembly and the standalone UI entry point
"""

from .controller import GenerationController
from .gateway_client import GatewayClient
from .models import GenerationPhase, UIState

__all__ = [
    "GenerationController",
    "GatewayClient",
    "GenerationPhase",
    "UIState",
]
