"""Domain exceptions."""

from __future__ import annotations


class SubscoutError(Exception):
    """Base class for all subscout errors."""


class FileTooSmallError(SubscoutError):
    """Raised when a video is below the fingerprint window."""

    def __init__(self, path: str, size: int, minimum: int) -> None:
        super().__init__(
            f"file '{path}' is too small for fingerprinting "
            f"(size: {size} bytes, minimum: {minimum} bytes)"
        )
        self.path = path
        self.size = size
        self.minimum = minimum


class ProviderError(SubscoutError):
    """Raised when an external lookup provider fails."""

    def __init__(
        self, provider: str, message: str, *, status_code: int | None = None
    ) -> None:
        super().__init__(f"{provider}: {message}")
        self.provider = provider
        self.status_code = status_code


class ProviderAuthError(ProviderError):
    """Raised when a provider rejects the configured credentials (401/403)."""


class ProviderRateLimitedError(ProviderError):
    """Raised when a provider answers 429 Too Many Requests."""
