"""Configuration management for Prompt Gallery.

This module provides centralized configuration management using Pydantic Settings.
All configuration is loaded from environment variables with the PROMPTGALLERY_
prefix, allowing easy customization without code changes.

Environment Variable Loading
-----------------------------
Configuration values are loaded in the following priority order:
1. Environment variables (PROMPTGALLERY_* prefix)
2. .env file in the working directory
3. Default values defined in PromptGalleryConfig

Example .env file:
    PROMPTGALLERY_API_KEY=sk-...
    PROMPTGALLERY_UPSTREAM_URL=https://api.openai.com/v1/images/generations
    PROMPTGALLERY_UPSTREAM_PARAMS={"model": "dall-e-3", "n": 1, "size": "1024x1024"}
    PROMPTGALLERY_SERVER_PORT=7860

Explicit Construction
---------------------
There is deliberately no module-level configuration instance.  Entry points
call :func:`load_config` once and hand the resulting value to the gateway
factory, so tests can build a gateway with a fake credential without touching
the process environment:

    from promptgallery.core.config import PromptGalleryConfig
    from promptgallery.api.main import create_app

    app = create_app(PromptGalleryConfig(api_key="test-key", _env_file=None))

Credential Handling
-------------------
``api_key`` is a :class:`pydantic.SecretStr`, so it is masked in ``repr()``,
``model_dump()`` output and log lines.  Only the upstream client unwraps it,
and only to build the outbound authentication header.
"""

import logging
from typing import Any

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from .errors import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_UPSTREAM_URL = "https://api.openai.com/v1/images/generations"


class PromptGalleryConfig(BaseSettings):
    """Main configuration for Prompt Gallery.

    Attributes
    ----------
    Upstream Settings:
        api_key : SecretStr | None
            Credential for the external image-generation service
        upstream_url : str
            Endpoint the gateway POSTs generation requests to
        upstream_params : dict
            Extra JSON fields merged into every upstream payload
        upstream_auth_header : str
            Header that carries the credential
        upstream_auth_scheme : str
            Scheme prefix for the header value ("" sends the raw key)
        upstream_timeout : float
            Seconds before an upstream call is abandoned

    Gateway Settings:
        max_prompt_length : int
            Longest prompt the gateway will forward

    Server Settings:
        server_host : str
            Bind address for the uvicorn server
        server_port : int
            Port for the uvicorn server (1024-65535)
        ui_path : str
            Path the Gradio UI is mounted at
        ui_server_port : int
            Port for a standalone UI process
        gateway_url : str | None
            Gateway base URL for a standalone UI process
        ui_title : str
            Page title shown in the browser
        log_level : str
            Root logging level for the entry points
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="PROMPTGALLERY_",
        case_sensitive=False,
        extra="ignore",
    )

    # Upstream image service
    api_key: SecretStr | None = Field(
        default=None,
        description="Credential for the external image-generation service",
    )
    upstream_url: str = Field(
        default=DEFAULT_UPSTREAM_URL,
        description="Endpoint that receives generation requests",
    )
    upstream_params: dict[str, Any] = Field(
        default_factory=lambda: {"model": "dall-e-3", "n": 1, "size": "1024x1024"},
        description="Extra JSON fields merged into the upstream payload",
    )
    upstream_auth_header: str = Field(
        default="Authorization",
        description="Header name that carries the credential",
    )
    upstream_auth_scheme: str = Field(
        default="Bearer",
        description="Scheme prefix for the credential header ('' for the raw key)",
    )
    upstream_timeout: float = Field(
        default=60.0,
        description="Upstream request timeout in seconds",
        gt=0,
    )

    # Gateway
    max_prompt_length: int = Field(
        default=4000,
        description="Maximum prompt length accepted by the gateway",
        ge=1,
    )

    # Server / UI
    server_host: str = Field(
        default="0.0.0.0",
        description="Server bind address (0.0.0.0 for local network)",
    )
    server_port: int = Field(
        default=7860,
        description="Server port",
        ge=1024,
        le=65535,
    )
    ui_path: str = Field(
        default="/ui",
        description="Path the Gradio UI is mounted at",
    )
    ui_server_port: int = Field(
        default=7861,
        description="Port for a standalone UI process",
        ge=1024,
        le=65535,
    )
    gateway_url: str | None = Field(
        default=None,
        description="Gateway base URL used by a standalone UI process",
    )
    ui_title: str = Field(
        default="Prompt Gallery",
        description="Browser page title",
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level for the entry points",
    )

    def require_api_key(self) -> SecretStr:
        """Return the upstream credential or fail startup.

        Returns:
            The configured credential

        Raises:
            ConfigurationError: If no credential (or an empty one) is configured
        """
        if self.api_key is None or not self.api_key.get_secret_value().strip():
            raise ConfigurationError(
                "PROMPTGALLERY_API_KEY is not set; the gateway cannot reach the image service"
            )
        return self.api_key

    def resolved_gateway_url(self) -> str:
        """Base URL a standalone UI should use to reach the gateway."""
        if self.gateway_url:
            return self.gateway_url.rstrip("/")
        return f"http://127.0.0.1:{self.server_port}"


def load_config(**overrides: Any) -> PromptGalleryConfig:
    """Build a configuration value from the environment.

    Args:
        **overrides: Explicit field values that take precedence over the
            environment and ``.env`` file

    Returns:
        A freshly constructed PromptGalleryConfig
    """
    cfg = PromptGalleryConfig(**overrides)
    logger.debug(f"Configuration loaded: {cfg!r}")
    return cfg
