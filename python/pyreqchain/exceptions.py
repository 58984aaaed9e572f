"""Exception types raised by the library."""


class PyreqchainError(Exception):
    """Base class for all library errors."""


class ConfigurationError(PyreqchainError, ValueError):
    """Preset configuration is malformed or conflicting.

    Raised when a preset is registered, never when a request is made.
    """


class DecodingError(PyreqchainError, ValueError):
    """Response declared a JSON content type but the body is not valid JSON."""

    def __init__(self, url: str | None) -> None:
        super().__init__(f"Can not parse response from {url}: Invalid JSON")
        self.url = url


class TransportError(PyreqchainError):
    """Network call failed before a reply was received.

    The pipeline logs it and continues with an unpopulated response.
    """


class ExpectationError(AssertionError):
    """Mocked requests did not match the expectation."""


class TooManyRequestsError(ExpectationError):
    """More mocked requests matched than allowed."""


class TooFewRequestsError(ExpectationError):
    """Fewer mocked requests matched than required."""
