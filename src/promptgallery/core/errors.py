"""Exception hierarchy shared by the gateway and the UI controller."""


class PromptGalleryError(Exception):
    """Base class for all Prompt Gallery errors."""


class ConfigurationError(PromptGalleryError):
    """Raised at startup when required configuration is missing or invalid."""


class ValidationError(PromptGalleryError):
    """User-friendly validation error.

    Raised when a generation request fails validation before any upstream
    call is made.  The message is intended to be shown to the caller as-is.
    """

    status_code = 400


class UpstreamError(PromptGalleryError):
    """The external image service failed, timed out, or answered garbage.

    Attributes:
        status_code: HTTP status the gateway reports for this failure
            (always a 5xx).
        upstream_status: Status code returned by the image service, or
            ``None`` when no response was received.
    """

    def __init__(
        self, message: str, status_code: int = 502, upstream_status: int | None = None
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.upstream_status = upstream_status


class GenerationFailed(PromptGalleryError):
    """Raised by the UI-side gateway client when a generation did not succeed.

    Attributes:
        status_code: Status returned by the gateway, or ``None`` when the
            gateway could not be reached.
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
