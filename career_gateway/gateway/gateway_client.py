"""
gateway_client.py

Client for the OpenAI-compatible AI gateway. Makes exactly one chat-completion
call per `complete()` and classifies the outcome. Retries are the caller's job.
"""
from typing import Any, Dict, List, Optional

import httpx
from langchain_core.messages import BaseMessage, convert_to_openai_messages

from career_gateway.config import GatewaySettings
from career_gateway.exceptions import GatewayConfigError
from career_gateway.gateway.response_classifier import classify_response
from career_gateway.logging import LoggerFactory
from career_gateway.models import ClientError, UpstreamCallResult, UpstreamFailure

logger = LoggerFactory().get_logger(name="gateway_client", logger_type="gateway")


class GatewayClient:
    """
    Sends chat-completion requests to the configured AI gateway.

    The credential comes from the injected `GatewaySettings`; the client never
    reads the environment itself. An `httpx.Client` may be injected (tests use
    one backed by `httpx.MockTransport`); otherwise a short-lived client is
    opened per call.

    Attributes:
        settings (GatewaySettings): Read-only process settings.
        http_client (Optional[httpx.Client]): Injected HTTP client, not closed here.

    Raises:
        GatewayConfigError: If `settings` carry no usable API key.

    Example:
        >>> client = GatewayClient(GatewaySettings.from_env())
        >>> outcome = client.complete([HumanMessage(content="ping")])
        >>> isinstance(outcome, Success)
        True
    """

    def __init__(
        self,
        settings: GatewaySettings,
        http_client: Optional[httpx.Client] = None,
    ):
        if not settings.is_configured:
            raise GatewayConfigError(
                variable_name="AI_GATEWAY_API_KEY",
                message=(
                    "You must set an AI gateway API key in your environment variables "
                    "to run queries against the AI gateway."
                ),
            )
        self.settings = settings
        self.http_client = http_client

    def build_payload(self, messages: List[BaseMessage], **options: Any) -> Dict[str, Any]:
        """Chat-completion request body for `messages` plus per-use-case options."""
        payload: Dict[str, Any] = {
            "model": self.settings.model,
            "messages": convert_to_openai_messages(messages),
        }
        payload.update(options)
        return payload

    def complete(self, messages: List[BaseMessage], **options: Any) -> UpstreamCallResult:
        """
        Make the single outbound call and classify the response.

        Args:
            messages (List[BaseMessage]): Prompt messages.
            **options: Extra chat-completion parameters (temperature, tools, ...).

        Returns:
            UpstreamCallResult: `UpstreamFailure(status=None)` on timeout and
                `ClientError` when no HTTP response was received at all.
        """
        payload = self.build_payload(messages, **options)
        headers = {
            "Authorization": f"Bearer {self.settings.api_key}",
            "Content-Type": "application/json",
        }

        try:
            if self.http_client is not None:
                response = self.http_client.post(
                    self.settings.gateway_url,
                    json=payload,
                    headers=headers,
                    timeout=self.settings.request_timeout_s,
                )
            else:
                with httpx.Client(timeout=self.settings.request_timeout_s) as client:
                    response = client.post(self.settings.gateway_url, json=payload, headers=headers)
        except httpx.TimeoutException as e:
            logger.error(f"AI gateway timed out after {self.settings.request_timeout_s}s: {e!r}")
            return UpstreamFailure(status=None, body=f"timeout: {e!r}")
        except httpx.RequestError as e:
            logger.error(f"AI gateway request failed before a response: {e!r}")
            return ClientError(details=repr(e))

        return classify_response(response.status_code, response.headers, response.text)
