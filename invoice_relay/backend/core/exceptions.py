"""
Custom Exceptions.

Application-specific exception classes for consistent error handling.
Every relay failure maps to exactly one of these; none is retried.
"""


class ApplicationError(Exception):
    """Base exception for all application errors."""

    def __init__(self, message: str, code: str = "SYS_INTERNAL_ERROR") -> None:
        self.message = message
        self.code = code
        super().__init__(self.message)


class ValidationError(ApplicationError):
    """Raised when request or form input is rejected."""

    def __init__(self, message: str = "Validation failed", details: dict | None = None) -> None:
        self.details = details or {}
        super().__init__(message, code="VAL_VALIDATION_ERROR")


class PayloadTooLargeError(ApplicationError):
    """Raised when an uploaded file exceeds the server-side size ceiling."""

    def __init__(self, message: str = "File too large") -> None:
        super().__init__(message, code="VAL_PAYLOAD_TOO_LARGE")


class ConfigurationError(ApplicationError):
    """Raised when a required credential or setting is missing."""

    def __init__(self, message: str = "Configuration error") -> None:
        super().__init__(message, code="CFG_MISSING_CREDENTIAL")


class ProviderResponseError(ApplicationError):
    """
    Raised when the Telegram Bot API rejects a call or replies with a body
    that is not JSON.

    `details` carries the provider's own description or the raw body text.
    """

    def __init__(
        self,
        details: str,
        message: str = "Failed to send message to Telegram",
        code: str = "EXT_PROVIDER_RESPONSE_ERROR",
        provider_status: int | None = None,
    ) -> None:
        self.details = details
        self.provider_status = provider_status
        super().__init__(message, code=code)


class ProviderUnavailableError(ProviderResponseError):
    """Raised when the Telegram Bot API cannot be reached at all."""

    def __init__(self, details: str) -> None:
        super().__init__(details, code="EXT_PROVIDER_UNAVAILABLE")


class NetworkError(ApplicationError):
    """Raised on the caller side when the relay backend is unreachable."""

    def __init__(self, message: str = "Relay backend unreachable") -> None:
        super().__init__(message, code="NET_BACKEND_UNREACHABLE")
