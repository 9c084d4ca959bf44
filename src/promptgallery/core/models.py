"""Generation request/result value objects shared by gateway and controller."""

from dataclasses import dataclass, field
from typing import Any

# Descriptor keys that carry an image URL directly, checked in order.
_URL_KEYS = ("url", "imageUrl", "image_url", "output")


@dataclass(frozen=True)
class GenerationRequest:
    """A single prompt submission.

    Built at submit time, sent once, never modified afterwards.
    """

    prompt: str

    def to_payload(self) -> dict[str, str]:
        """JSON body for ``POST /api/generate-image``."""
        return {"prompt": self.prompt}


@dataclass(frozen=True)
class GenerationResult:
    """Outcome of a successful generation.

    Attributes:
        image_url: URL of the generated image
        descriptor: The upstream success body exactly as the gateway relayed it
    """

    image_url: str
    descriptor: Any = field(default=None, compare=False, repr=False)

    @classmethod
    def from_descriptor(cls, descriptor: Any) -> "GenerationResult":
        """Build a result from a relayed upstream body.

        Raises:
            ValueError: If the descriptor contains no image URL
        """
        image_url = extract_image_url(descriptor)
        if image_url is None:
            raise ValueError("Response did not contain an image URL")
        return cls(image_url=image_url, descriptor=descriptor)


def _first_url(value: Any) -> str | None:
    if isinstance(value, str) and value.strip():
        return value.strip()
    if isinstance(value, list) and value:
        return _first_url(value[0])
    if isinstance(value, dict):
        return _first_url(value.get("url"))
    return None


def extract_image_url(descriptor: Any) -> str | None:
    """Find the image URL in an image-service response body.

    Different services shape their responses differently, so this accepts
    the common layouts:

    - ``{"url": ...}``, ``{"imageUrl": ...}``, ``{"image_url": ...}``
    - ``{"output": "..."}`` or ``{"output": ["...", ...]}``
    - ``{"data": [{"url": ...}, ...]}`` (OpenAI images API)
    - ``{"images": [{"url": ...}]}`` or ``{"images": ["..."]}``

    Args:
        descriptor: Parsed JSON body

    Returns:
        The first image URL found, or None
    """
    if not isinstance(descriptor, dict):
        return None

    for key in _URL_KEYS:
        url = _first_url(descriptor.get(key))
        if url:
            return url

    for key in ("data", "images"):
        url = _first_url(descriptor.get(key))
        if url:
            return url

    return None
