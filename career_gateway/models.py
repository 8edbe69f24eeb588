"""models.py
Holds standardized data models used across the adapter, the parser and the
rate-limit client.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Union


# --------------------------------------------------------------
# UPSTREAM CALL RESULT (closed tagged union)
# --------------------------------------------------------------
@dataclass(frozen=True)
class Success:
    """
    Upstream answered with a 2xx status.

    Attributes:
        raw_body (str): Response body exactly as received.
    """
    raw_body: str


@dataclass(frozen=True)
class ClientError:
    """
    The outbound call never produced an HTTP status (connection refused, DNS
    failure, protocol error). `status` is always None; `details` is for logs.
    """
    details: str
    status: Optional[int] = None


@dataclass(frozen=True)
class RateLimited:
    """
    Upstream answered 429.

    Attributes:
        retry_after_seconds (Optional[int]): Hint read from the response headers,
            None when absent or non-numeric.
    """
    retry_after_seconds: Optional[int] = None


@dataclass(frozen=True)
class PaymentRequired:
    """Upstream answered 402 (credits exhausted)."""
    pass


@dataclass(frozen=True)
class UpstreamFailure:
    """
    Any other non-2xx answer, or a timeout (`status` is None).

    Attributes:
        status (Optional[int]): Upstream HTTP status.
        body (str): Raw body, kept for logging only.
    """
    status: Optional[int]
    body: str = ""


UpstreamCallResult = Union[Success, ClientError, RateLimited, PaymentRequired, UpstreamFailure]


# --------------------------------------------------------------
# RESULT SHAPES
# --------------------------------------------------------------
class ResultShape(str, Enum):
    """Where a use case expects its structured result inside a success body."""
    DIRECT_JSON = "direct_json"
    FENCED_JSON = "fenced_json"
    TOOL_CALL = "tool_call"
    TEXT = "text"


# --------------------------------------------------------------
# ADAPTER ERRORS AND RESPONSES
# --------------------------------------------------------------
class ErrorKind(str, Enum):
    VALIDATION = "validation"
    CONFIGURATION = "configuration"
    RATE_LIMITED = "rate_limited"
    PAYMENT_REQUIRED = "payment_required"
    UPSTREAM_FAILURE = "upstream_failure"
    UNPARSABLE_RESULT = "unparsable_result"
    MALFORMED_RESULT = "malformed_result"


ERROR_STATUS_CODES: Dict[ErrorKind, int] = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.CONFIGURATION: 500,
    ErrorKind.RATE_LIMITED: 429,
    ErrorKind.PAYMENT_REQUIRED: 402,
    ErrorKind.UPSTREAM_FAILURE: 500,
    ErrorKind.UNPARSABLE_RESULT: 500,
    ErrorKind.MALFORMED_RESULT: 500,
}


@dataclass(frozen=True)
class AdapterError:
    """
    A failed adapter invocation, represented as data.

    Attributes:
        kind (ErrorKind): Error category.
        message (str): User-facing message. Never contains provider output.
        details (Optional[str]): Per-field detail (validation errors only).
        retry_after (Optional[int]): Retry hint (rate limiting only).
    """
    kind: ErrorKind
    message: str
    details: Optional[str] = None
    retry_after: Optional[int] = None

    @property
    def status_code(self) -> int:
        return ERROR_STATUS_CODES[self.kind]

    def to_body(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"error": self.message}
        if self.kind is ErrorKind.VALIDATION and self.details is not None:
            body["details"] = self.details
        if self.kind is ErrorKind.RATE_LIMITED:
            body["retryAfter"] = self.retry_after
        return body


@dataclass(frozen=True)
class AdapterResponse:
    """HTTP-ready outcome of one adapter invocation."""
    status_code: int
    body: Dict[str, Any] = field(default_factory=dict)
    error: Optional[AdapterError] = None

    @classmethod
    def from_error(cls, error: AdapterError) -> "AdapterResponse":
        return cls(status_code=error.status_code, body=error.to_body(), error=error)

    @property
    def ok(self) -> bool:
        return self.error is None


# --------------------------------------------------------------
# CLIENT-SIDE RATE LIMIT STATE
# --------------------------------------------------------------
@dataclass(frozen=True)
class RateLimitState:
    """
    Snapshot of a flow's rate-limit countdown.

    Attributes:
        active (bool): True while new submissions must be rejected.
        remaining_seconds (int): Seconds left; 0 when idle.
        message (Optional[str]): Message to show the user, None when idle.
    """
    active: bool = False
    remaining_seconds: int = 0
    message: Optional[str] = None


IDLE_RATE_LIMIT_STATE = RateLimitState()
