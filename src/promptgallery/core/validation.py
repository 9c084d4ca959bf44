"""Prompt validation shared by the gateway and the controller."""

import logging

from .errors import ValidationError

logger = logging.getLogger(__name__)


def normalize_prompt(prompt: str | None) -> str:
    """Strip surrounding whitespace; ``None`` becomes an empty string."""
    return (prompt or "").strip()


def is_submittable(prompt: str | None) -> bool:
    """Check whether a prompt may be submitted at all.

    Returns:
        True if the prompt has at least one non-whitespace character
    """
    return bool(normalize_prompt(prompt))


def validate_prompt(prompt: str | None, max_length: int) -> str:
    """Validate a prompt received at the gateway boundary.

    Args:
        prompt: Raw prompt from the request body
        max_length: Longest prompt the gateway forwards

    Returns:
        The normalized prompt

    Raises:
        ValidationError: If the prompt is missing, blank, or too long
    """
    if prompt is None:
        raise ValidationError("prompt is required")

    normalized = normalize_prompt(prompt)
    if not normalized:
        raise ValidationError("prompt must not be empty")

    if len(normalized) > max_length:
        logger.debug(f"Rejected prompt of {len(normalized)} characters")
        raise ValidationError(
            f"prompt is too long ({len(normalized)} characters). Maximum is {max_length} characters."
        )

    return normalized
