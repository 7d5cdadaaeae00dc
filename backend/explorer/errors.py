"""Error taxonomy shared by the Blockfrost client, aggregators and API layer"""

from enum import Enum
from typing import Dict, Optional


class ErrorKind(str, Enum):
    """Closed set of failure classes"""

    INVALID_INPUT = "invalid_input"
    NOT_FOUND = "not_found"
    UPSTREAM_AUTH = "upstream_auth"
    RATE_LIMITED = "rate_limited"
    TIMEOUT = "timeout"
    UPSTREAM = "upstream"
    CONFIGURATION = "configuration"


_STATUS_BY_KIND: Dict[ErrorKind, int] = {
    ErrorKind.INVALID_INPUT: 400,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.UPSTREAM_AUTH: 403,
    ErrorKind.RATE_LIMITED: 429,
    ErrorKind.TIMEOUT: 408,
    ErrorKind.UPSTREAM: 500,
    ErrorKind.CONFIGURATION: 500,
}


class ExplorerError(Exception):
    """
    Single exception type for every classified failure.

    ``kind`` decides the HTTP status, ``code`` is a stable machine-readable
    tag for clients, and ``upstream_status`` keeps the provider's status for
    generic upstream failures.
    """

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        code: Optional[str] = None,
        upstream_status: Optional[int] = None,
    ) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.code = code or kind.value
        self.upstream_status = upstream_status

    @property
    def status_code(self) -> int:
        return status_for(self)

    @property
    def is_not_found(self) -> bool:
        return self.kind is ErrorKind.NOT_FOUND

    def __repr__(self) -> str:
        return f"ExplorerError(kind={self.kind.value!r}, code={self.code!r}, message={self.message!r})"


def status_for(error: ExplorerError) -> int:
    """Map an error to the HTTP status returned to API clients"""
    if error.kind is ErrorKind.UPSTREAM and error.upstream_status and 400 <= error.upstream_status < 600:
        return error.upstream_status
    return _STATUS_BY_KIND[error.kind]


def invalid_input(message: str, code: str = "invalid_input") -> ExplorerError:
    return ExplorerError(ErrorKind.INVALID_INPUT, message, code=code)


def not_found(message: str, code: str = "not_found") -> ExplorerError:
    return ExplorerError(ErrorKind.NOT_FOUND, message, code=code)


def is_not_found(exc: BaseException) -> bool:
    return isinstance(exc, ExplorerError) and exc.is_not_found
