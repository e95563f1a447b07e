"""Error kinds raised by the scoring pipeline.

Every error carries a short ``category`` and a message that is safe to show
to an end user, so callers can offer the manual assessment path instead.
"""

from __future__ import annotations


class PredictionError(Exception):
    """Base class for every failed prediction."""

    category = "prediction"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return f"[{self.category}] {self.message}"


class ValidationError(PredictionError):
    """Missing or malformed input."""

    category = "validation"


class DecodeError(PredictionError):
    """The image could not be loaded or parsed."""

    category = "decode"


class ClassificationError(PredictionError):
    """The image classifier failed to load or infer."""

    category = "classification"


class ConfigurationError(PredictionError):
    """A required credential is missing or still a placeholder."""

    category = "configuration"


class AuthError(PredictionError):
    """The remote service rejected the credential."""

    category = "auth"


class RateLimitError(PredictionError):
    """The remote service rate limited the request; retry after a backoff."""

    category = "rate_limit"


class ResponseFormatError(PredictionError):
    """The remote reply did not contain a usable JSON object."""

    category = "response_format"


class BackendError(PredictionError):
    """Any other transport or backend failure."""

    category = "backend"
