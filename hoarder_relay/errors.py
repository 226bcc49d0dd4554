"""Error taxonomy for the relay.

Every failure on the webhook path is a ``RelayError`` carrying the HTTP status
it maps to and a plain-text message safe to return to the caller. Bookmark API
failures are a separate ``BookmarkError`` family raised by the client and
wrapped in ``DownstreamFailure`` by the dispatcher.
"""

from __future__ import annotations


class RelayError(Exception):
    """Base exception for request-boundary failures."""

    status_code: int = 500

    # Operator-facing context for the log; never sent to the caller
    detail: str = ""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class InvalidMethod(RelayError):
    """Webhook called with anything other than POST."""

    status_code = 405

    def __init__(self, method: str = "") -> None:
        super().__init__("Method not allowed")
        self.method = method
        self.detail = f"method {method}" if method else ""


class MissingSignature(RelayError):
    """Signature header absent or empty."""

    status_code = 400

    def __init__(self) -> None:
        super().__init__("Missing signature")


class BodyReadFailure(RelayError):
    """Request body could not be read in full."""

    status_code = 500

    def __init__(self) -> None:
        super().__init__("Error reading request body")


class SignatureMismatch(RelayError):
    status_code = 401

    def __init__(self) -> None:
        super().__init__("Invalid signature")


class UnknownEventType(RelayError):
    """Discriminator header does not name a supported event."""

    status_code = 400

    def __init__(self, event_type: str | None) -> None:
        self.event_type = event_type or ""
        super().__init__(f"Unknown event type: {self.event_type}")


class MalformedPayload(RelayError):
    """Body is not valid JSON or does not match the event shape."""

    status_code = 400

    def __init__(self, detail: str = "") -> None:
        super().__init__("Error parsing payload")
        self.detail = detail


class DownstreamFailure(RelayError):
    """Bookmark API call failed; the rest of the batch was not attempted."""

    status_code = 500

    def __init__(self, context: str, cause: BookmarkError) -> None:
        super().__init__(f"{context}: {cause}")
        self.cause = cause


class ConfigError(Exception):
    """Required configuration missing or invalid. Fatal at startup."""


# ---------------------------------------------------------------------------
# Bookmark client errors
# ---------------------------------------------------------------------------


class BookmarkError(Exception):
    """Base exception for bookmark API failures."""


class BookmarkStatusError(BookmarkError):
    """Bookmark API answered with a status other than 200/201."""

    def __init__(self, status_code: int, body: str) -> None:
        super().__init__(f"unexpected status code: {status_code}, body: {body}")
        self.status_code = status_code
        self.body = body


class BookmarkNetworkError(BookmarkError):
    """Bookmark API unreachable (connection refused, timeout, DNS)."""
