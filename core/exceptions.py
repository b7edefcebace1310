"""Custom exception hierarchy for the HTTP relay."""


class RelayError(Exception):
    """Base exception for all relay errors.

    Attributes:
        message: Human-readable error message
        status_code: HTTP status returned to the caller
    """

    status_code = 400

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ConfigurationError(RelayError):
    """Raised when configuration is missing or invalid."""

    status_code = 500


class ValidationError(RelayError):
    """A required descriptor field is missing or has an invalid value."""


class DecodeError(RelayError):
    """Inbound body is not a valid request descriptor."""


class RequestTooLarge(RelayError):
    """Request body exceeds size limit."""

    status_code = 413


class InvalidProxyURL(RelayError):
    """The rendered proxy URL cannot be parsed."""


class UnsupportedProxyType(RelayError):
    """Proxy scheme is neither http nor socks5."""

    def __init__(self, scheme: str) -> None:
        super().__init__(f"Unsupported proxy type: {scheme}")
        self.scheme = scheme


class InvalidTargetURL(RelayError):
    """The descriptor's target URL cannot be parsed."""


class UnsupportedMethod(RelayError):
    """Request method is outside GET, POST, PUT, DELETE, PATCH."""

    def __init__(self, method: str) -> None:
        super().__init__(f"Unsupported request method: {method}")
        self.method = method


class ForwardFailed(RelayError):
    """Raised when the upstream could not be reached.

    Covers DNS failures, refused connections, proxy and TLS errors, and
    expiry of the per-call deadline. Upstream HTTP error statuses never
    raise this.
    """


class EncodeError(RelayError):
    """Reply could not be serialized."""
