"""Tests for promptgallery.api.models — Pydantic request/response models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from promptgallery.api.models import ErrorResponse, GenerateImageRequest


class TestGenerateImageRequest:
    def test_prompt(self):
        assert GenerateImageRequest(prompt="a castle").prompt == "a castle"

    def test_prompt_optional_at_schema_level(self):
        """Missing prompts are rejected by gateway validation, not the schema."""
        assert GenerateImageRequest().prompt is None

    def test_non_string_prompt_rejected(self):
        with pytest.raises(ValidationError):
            GenerateImageRequest(prompt=42)

    def test_extra_fields_ignored(self):
        req = GenerateImageRequest.model_validate({"prompt": "cat", "size": "1024x1024"})
        assert req.model_dump() == {"prompt": "cat"}


class TestErrorResponse:
    def test_dump(self):
        assert ErrorResponse(error="boom").model_dump() == {"error": "boom"}

    def test_error_required(self):
        with pytest.raises(ValidationError):
            ErrorResponse()
