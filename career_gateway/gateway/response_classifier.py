"""response_classifier.py
Turns an upstream HTTP status and headers into an `UpstreamCallResult`.
"""
import math
from typing import Iterable, Mapping, Optional

from career_gateway.config import GATEWAY_DEFAULTS
from career_gateway.models import (
    PaymentRequired,
    RateLimited,
    Success,
    UpstreamCallResult,
    UpstreamFailure,
)


def classify_response(
    status_code: int,
    headers: Mapping[str, str],
    body: str,
) -> UpstreamCallResult:
    """
    Classify an upstream response. First match wins:

        1. 200-299 -> Success
        2. 429     -> RateLimited (retry hint from headers, else None)
        3. 402     -> PaymentRequired
        4. other   -> UpstreamFailure (body kept for logging only)

    Args:
        status_code (int): Upstream HTTP status.
        headers (Mapping[str, str]): Upstream response headers.
        body (str): Raw response body.

    Returns:
        UpstreamCallResult: Exactly one tag.
    """
    if 200 <= status_code < 300:
        return Success(raw_body=body)
    if status_code == 429:
        return RateLimited(retry_after_seconds=parse_retry_after(headers))
    if status_code == 402:
        return PaymentRequired()
    return UpstreamFailure(status=status_code, body=body)


def parse_retry_after(
    headers: Mapping[str, str],
    header_names: Iterable[str] = GATEWAY_DEFAULTS.RATE_LIMIT_HEADERS,
) -> Optional[int]:
    """
    Read a retry delay in whole seconds from the first header holding a
    non-negative number. Fractions round up. Returns None when no header
    qualifies (HTTP-date values count as non-numeric).
    """
    lowered = {str(key).lower(): value for key, value in headers.items()}
    for name in header_names:
        value = lowered.get(name.lower())
        if value is None:
            continue
        try:
            seconds = float(str(value).strip())
        except ValueError:
            continue
        if math.isfinite(seconds) and seconds >= 0:
            return math.ceil(seconds)
    return None
