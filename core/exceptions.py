"""Custom exception hierarchy for the search proxy."""


class ProxyError(Exception):
    """Base exception for all proxy errors."""


class InvalidInput(ProxyError):
    """Raised when the destination URL parameter is missing or malformed."""


class UpstreamFailure(ProxyError):
    """Raised when the upstream server answers with a non-2xx status.

    Attributes:
        status_code: HTTP status code from upstream
        status_text: Upstream reason phrase, sent back verbatim
    """

    def __init__(self, status_code: int, status_text: str) -> None:
        super().__init__(f"{status_code} {status_text}")
        self.status_code = status_code
        self.status_text = status_text


class TransportFailure(ProxyError):
    """Raised when no upstream response could be obtained.

    The original transport error is chained as ``__cause__``.
    """
