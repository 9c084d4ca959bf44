"""Prompt Gallery - text-to-image generation behind a credential-holding gateway."""

__version__ = "0.1.0"

from promptgallery.core.config import PromptGalleryConfig, load_config
from promptgallery.core.errors import (
    ConfigurationError,
    GenerationFailed,
    PromptGalleryError,
    UpstreamError,
    ValidationError,
)

__all__ = [
    "PromptGalleryConfig",
    "load_config",
    "PromptGalleryError",
    "ConfigurationError",
    "ValidationError",
    "UpstreamError",
    "GenerationFailed",
]
