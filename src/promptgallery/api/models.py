"""Pydantic request and response models for the gateway API.

Models
------
GenerateImageRequest
    Payload for ``POST /api/generate-image``.
ErrorResponse
    Body of every non-200 gateway response.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class GenerateImageRequest(BaseModel):
    """Request body for the ``POST /api/generate-image`` endpoint.

    ``prompt`` is optional at the schema level so that a missing prompt
    reaches the gateway's own validation and produces the same
    ``{"error": ...}`` body as an empty one.

    Attributes:
        prompt: Text describing the image to generate.
    """

    prompt: str | None = Field(
        default=None,
        description="Text describing the image to generate.",
    )


class ErrorResponse(BaseModel):
    """Structured error body returned for every failed request.

    Attributes:
        error: Human-readable description of what went wrong.
    """

    error: str = Field(
        ...,
        description="Human-readable description of what went wrong.",
    )
