"""
gateway_api_client.py

Python client for the career gateway HTTP endpoints. Owns one
`RateLimitCountdown` per flow and refuses to resubmit while it is counting.
"""
import os
from typing import Any, Dict, Optional

import httpx

from career_gateway.client.rate_limit import (
    CREDITS_DEPLETED_MESSAGE,
    CREDITS_DEPLETED_TITLE,
    RateLimitCountdown,
    normalize_retry_after,
)
from career_gateway.config import GATEWAY_DEFAULTS
from career_gateway.exceptions import (
    CreditsDepletedError,
    GatewayRequestError,
    RateLimitExceededError,
)
from career_gateway.logging import LoggerFactory

logger = LoggerFactory().get_logger(name="gateway_api_client", logger_type="default")


class GatewayApiClient:
    """
    Calls the adapter endpoints (`POST {base_url}/{slug}`) and the document
    endpoint, translating error statuses into exceptions.

    Attributes:
        base_url (str): Server root, e.g. "http://localhost:8000".
        countdown (RateLimitCountdown): Countdown for this flow.
        http_client (Optional[httpx.Client]): Injected client, not closed here.
        timeout_s (float): Timeout used when no client is injected.

    Example:
        >>> client = GatewayApiClient("http://localhost:8000")
        >>> client.invoke("analyze-skill-gap", {"resume": "...", "jobDescription": "..."})
        {'analysis': {...}}
    """

    def __init__(
        self,
        base_url: str,
        countdown: Optional[RateLimitCountdown] = None,
        http_client: Optional[httpx.Client] = None,
        timeout_s: float = GATEWAY_DEFAULTS.REQUEST_TIMEOUT_S,
    ):
        self.base_url = base_url.rstrip("/")
        self.countdown = countdown or RateLimitCountdown()
        self.http_client = http_client
        self.timeout_s = timeout_s

    def invoke(self, slug: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        """
        Submit `payload` to one use-case endpoint.

        Args:
            slug (str): Endpoint path segment, e.g. "optimize-resume".
            payload (Dict[str, Any]): Request body.

        Returns:
            Dict[str, Any]: The 200 body, e.g. `{"result": {...}}`.

        Raises:
            SubmissionBlockedError: While the countdown is active (no request is sent).
            RateLimitExceededError: On 429; the countdown is started first.
            CreditsDepletedError: On 402; no countdown.
            GatewayRequestError: On any other non-2xx status.
        """
        self.countdown.ensure_can_submit()

        response = self._post(f"/{slug.strip('/')}", json=payload)
        body = self._json_body(response)

        if response.is_success:
            return body

        if response.status_code == 429:
            retry_after = normalize_retry_after(body.get("retryAfter"))
            self.countdown.handle_error(429, retry_after)
            message = self.countdown.state.message or body.get("error") or "Rate limit exceeded"
            raise RateLimitExceededError(message, retry_after=retry_after)

        if response.status_code == 402:
            self.countdown.handle_error(402)
            raise CreditsDepletedError(f"{CREDITS_DEPLETED_TITLE}. {CREDITS_DEPLETED_MESSAGE}")

        raise GatewayRequestError(
            status_code=response.status_code,
            message=body.get("error") or "Request failed",
            details=body.get("details"),
        )

    def parse_document(self, file_path: str) -> str:
        """
        Upload a document to `/parse-document` and return its extracted text.

        Raises:
            GatewayRequestError: If the server rejects the file.
        """
        with open(file_path, "rb") as f:
            response = self._post(
                "/parse-document",
                files={"file": (os.path.basename(file_path), f)},
            )
        body = self._json_body(response)

        if not response.is_success:
            raise GatewayRequestError(
                status_code=response.status_code,
                message=body.get("error") or "Failed to process file",
            )
        return body["text"]

    def _post(self, path: str, **kwargs: Any) -> httpx.Response:
        url = f"{self.base_url}{path}"
        logger.debug(f"POST {url}")
        if self.http_client is not None:
            return self.http_client.post(url, **kwargs)
        with httpx.Client(timeout=self.timeout_s) as client:
            return client.post(url, **kwargs)

    @staticmethod
    def _json_body(response: httpx.Response) -> Dict[str, Any]:
        try:
            body = response.json()
        except ValueError:
            return {}
        return body if isinstance(body, dict) else {}
