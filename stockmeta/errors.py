"""Exception hierarchy for metadata generation."""


class StockMetaError(Exception):
    """Base class for all stockmeta errors."""


class MissingInputError(StockMetaError, ValueError):
    """Raised when a request is made without image data. Never retried."""


class RecoverableAPIError(StockMetaError):
    """A failed model call that the executor retries with backoff."""


class SafetyBlockedError(RecoverableAPIError):
    """The model returned no text because of a content safety block."""

    def __init__(self, message: str = "Blocked by content safety"):
        super().__init__(message)


class InvalidResponseError(RecoverableAPIError):
    """The model returned no text and no recognised finish reason."""

    def __init__(self, message: str = "Invalid response structure"):
        super().__init__(message)


class ResponseParseError(RecoverableAPIError):
    """The response text could not be parsed as a JSON object."""


class RetriesExhaustedError(StockMetaError):
    """Raised when a bounded retry policy runs out of attempts."""

    def __init__(self, attempts: int, last_error: Exception | None = None):
        self.attempts = attempts
        self.last_error = last_error
        super().__init__(f"Giving up after {attempts} failed attempt(s): {last_error}")


class GenerationCancelledError(StockMetaError):
    """Raised when the caller signals cancellation of an in-flight request."""
