class CatalogUnavailableError(RuntimeError):
    """Raised when the product catalog cannot be fetched or is malformed."""
    pass


class InvalidRelayRequestError(ValueError):
    """Raised when a relay request body is not an object with a non-empty messages array."""
    pass


class UpstreamError(RuntimeError):
    """Raised when the chat-completion provider answers with a non-success status."""

    def __init__(self, status_code: int, details: str) -> None:
        super().__init__(f"Upstream returned {status_code}")
        self.status_code = status_code
        self.details = details


class TransportError(RuntimeError):
    """Raised when the provider (or the relay, client side) cannot be reached."""

    def __init__(self, details: str) -> None:
        super().__init__(details)
        self.details = details


class EmptyReplyError(RuntimeError):
    """Raised when a successful reply carries no usable text."""
    pass
