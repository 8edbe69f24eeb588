"""gateway_adapter.py
Holds GatewayAdapter: the per-request pipeline that validates input, calls the
AI gateway once, classifies the outcome and returns an HTTP-ready response.
"""
from typing import Any, Optional, Union

import httpx

from career_gateway.config import GatewaySettings
from career_gateway.exceptions import (
    GatewayConfigError,
    InputValidationError,
    MalformedResultError,
    UnparsableResultError,
)
from career_gateway.gateway.gateway_client import GatewayClient
from career_gateway.gateway.input_validator import validate_request
from career_gateway.gateway.result_parser import check_result_shape, parse_result
from career_gateway.logging import LoggerFactory
from career_gateway.models import (
    AdapterError,
    AdapterResponse,
    ClientError,
    ErrorKind,
    PaymentRequired,
    RateLimited,
    Success,
    UpstreamCallResult,
    UpstreamFailure,
)
from career_gateway.use_cases.registry import UseCase, get_use_case

# ---- User-facing messages ----
INVALID_INPUT_MESSAGE = "Invalid input"
NOT_CONFIGURED_MESSAGE = "AI service not configured"
RATE_LIMITED_MESSAGE = "Rate limit exceeded. Please try again in a moment."
PAYMENT_REQUIRED_MESSAGE = "AI credits depleted. Please add credits to continue."
UNPARSABLE_MESSAGE = "Failed to parse AI response"
MALFORMED_MESSAGE = "Invalid AI response format"
UNEXPECTED_MESSAGE = "An unexpected error occurred. Please try again."

logger_factory = LoggerFactory()
logger = logger_factory.get_logger(name="gateway_adapter", logger_type="gateway")


class GatewayAdapter:
    """
    Stateless adapter for a single use case. Create one per inbound request.

    Stages run strictly in order and each one only starts if the previous one
    succeeded: validation -> configuration check -> upstream call ->
    classification -> parsing -> shape check. Every failure, including an
    unexpected exception, comes back as an `AdapterResponse` carrying an
    `AdapterError`; nothing escapes `handle()`.

    Args:
        use_case (UseCase | str): Use case definition, registry name or slug.
        settings (GatewaySettings): Read-only process settings (credential etc.).
        http_client (Optional[httpx.Client]): HTTP client passed to `GatewayClient`.
        gateway_client (Optional[GatewayClient]): Pre-built client; skips the
            configuration check done when building one.

    Example:
        >>> adapter = GatewayAdapter("skill_gap", GatewaySettings.from_env())
        >>> response = adapter.handle({"resume": "...", "jobDescription": "..."})
        >>> response.status_code, list(response.body)
        (200, ['analysis'])
    """

    def __init__(
        self,
        use_case: Union[UseCase, str],
        settings: GatewaySettings,
        http_client: Optional[httpx.Client] = None,
        gateway_client: Optional[GatewayClient] = None,
    ):
        self.use_case = use_case if isinstance(use_case, UseCase) else get_use_case(use_case)
        self.settings = settings
        self.http_client = http_client
        self.gateway_client = gateway_client
        # Raw provider output goes only to this use case's redacted failure log
        self.failure_logger = logger_factory.get_upstream_failure_logger(self.use_case.name)

    def handle(self, payload: Any) -> AdapterResponse:
        """Run the full pipeline for one decoded request body."""
        try:
            return self._run(payload)
        except Exception:
            logger.exception(f"Unexpected error in `{self.use_case.name}` adapter")
            return self._error(ErrorKind.UPSTREAM_FAILURE, UNEXPECTED_MESSAGE)

    def _run(self, payload: Any) -> AdapterResponse:
        # ---- Validate input ----
        try:
            request = validate_request(self.use_case, payload)
        except InputValidationError as e:
            logger.info(f"Rejected `{self.use_case.name}` request: {e.details}")
            return self._error(ErrorKind.VALIDATION, INVALID_INPUT_MESSAGE, details=e.details)

        # ---- Resolve gateway client (credential check) ----
        try:
            client = self._get_gateway_client()
        except GatewayConfigError as e:
            logger.error(str(e))
            return self._error(ErrorKind.CONFIGURATION, NOT_CONFIGURED_MESSAGE)

        # ---- Single upstream call ----
        logger.info(f"Calling AI gateway for `{self.use_case.name}`...")
        outcome = client.complete(
            self.use_case.build_messages(request),
            **self.use_case.completion_options(),
        )
        if not isinstance(outcome, Success):
            return self._error_for_outcome(outcome)

        # ---- Parse and shape-check ----
        try:
            result = parse_result(outcome.raw_body, self.use_case.result_shape)
            result = check_result_shape(result, self.use_case.result_model)
        except UnparsableResultError as e:
            self.failure_logger.error(
                f"Unparsable result: {e.message}\nRaw content: {e.raw_content!r}"
            )
            return self._error(ErrorKind.UNPARSABLE_RESULT, UNPARSABLE_MESSAGE)
        except MalformedResultError as e:
            self.failure_logger.error(
                f"Malformed result: {e.message}\nParsed object: {e.raw_content!r}"
            )
            return self._error(ErrorKind.MALFORMED_RESULT, MALFORMED_MESSAGE)

        logger.info(f"`{self.use_case.name}` completed successfully")
        return AdapterResponse(status_code=200, body={self.use_case.result_key: result})

    def _get_gateway_client(self) -> GatewayClient:
        if self.gateway_client is None:
            self.gateway_client = GatewayClient(self.settings, http_client=self.http_client)
        return self.gateway_client

    def _error_for_outcome(self, outcome: UpstreamCallResult) -> AdapterResponse:
        """Map a non-success tag to its adapter error."""
        if isinstance(outcome, RateLimited):
            logger.warning(
                f"AI gateway rate limited `{self.use_case.name}` "
                f"(retry after: {outcome.retry_after_seconds})"
            )
            return self._error(
                ErrorKind.RATE_LIMITED,
                RATE_LIMITED_MESSAGE,
                retry_after=outcome.retry_after_seconds,
            )
        if isinstance(outcome, PaymentRequired):
            logger.warning(f"AI gateway credits exhausted during `{self.use_case.name}`")
            return self._error(ErrorKind.PAYMENT_REQUIRED, PAYMENT_REQUIRED_MESSAGE)
        if isinstance(outcome, UpstreamFailure):
            self.failure_logger.error(
                f"AI gateway error: status={outcome.status}\nBody: {outcome.body}"
            )
        elif isinstance(outcome, ClientError):
            self.failure_logger.error(
                f"AI gateway unreachable: {outcome.details}"
            )
        return self._error(ErrorKind.UPSTREAM_FAILURE, self.use_case.failure_message)

    @staticmethod
    def _error(kind: ErrorKind, message: str, **kwargs: Any) -> AdapterResponse:
        return AdapterResponse.from_error(AdapterError(kind=kind, message=message, **kwargs))
