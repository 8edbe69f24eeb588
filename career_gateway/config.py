"""config.py
Holds defaults for the AI gateway adapter and the process-wide settings
resolved from the environment.
"""
import os
from dataclasses import dataclass, field
from typing import Optional, Tuple

from dotenv import load_dotenv

# --------------------------------------------------------------
# SETUP DEFAULT VALUES
# --------------------------------------------------------------
@dataclass
class GatewayDefaults:
    """
    Default settings for parameters used across the career_gateway repo.
    """
    # ---- Input validation limits ----
    MAX_TEXT_LENGTH: int = field(
        default = 50000,
        metadata = {
            "description": "Maximum characters for free-text fields (resume, job description)"
    })
    MAX_NAME_LENGTH: int = field(
        default = 200,
        metadata = {
            "description": "Maximum characters for names, titles and companies"
    })
    MAX_CONTEXT_LENGTH: int = field(
        default = 5000,
        metadata = {
            "description": "Maximum characters for networking context notes"
    })
    MAX_LAST_ACTIVITY_LENGTH: int = field(
        default = 1000,
        metadata = {
            "description": "Maximum characters for the last application activity note"
    })

    # ---- Upstream AI gateway settings ----
    AI_GATEWAY_URL: str = field(
        default = "https://ai.gateway.lovable.dev/v1/chat/completions",
        metadata = {
            "description": "OpenAI-compatible chat completions endpoint"
    })
    AI_GATEWAY_MODEL: str = field(
        default = "google/gemini-2.5-flash",
        metadata = {
            "description": "Model ID sent with every completion request"
    })
    REQUEST_TIMEOUT_S: float = field(
        default = 60.0,
        metadata = {
            "description": "Seconds before an outbound gateway call is abandoned"
    })
    RATE_LIMIT_HEADERS: Tuple[str, ...] = field(
        default = ("retry-after", "x-ratelimit-reset-after", "ratelimit-reset"),
        metadata = {
            "description": "Response headers checked (in order) for a retry hint in seconds"
    })

    # ---- Rate-limit client settings ----
    RATE_LIMIT_FALLBACK_SECONDS: int = field(
        default = 180,
        metadata = {
            "description": "Countdown used when the gateway gives no retry hint"
    })

    # ---- Document extraction settings ----
    MAX_FILE_SIZE_MB: float = field(
        default = 5.0,
        metadata = {
            "description": "Maximum allowed upload size in MB"
    })
    MIN_DOCUMENT_TEXT_LENGTH: int = field(
        default = 10,
        metadata = {
            "description": "Extracted text shorter than this is treated as empty"
    })


# Import this where needed
GATEWAY_DEFAULTS = GatewayDefaults()


# --------------------------------------------------------------
# PROCESS SETTINGS
# --------------------------------------------------------------
@dataclass(frozen=True)
class GatewaySettings:
    """
    Read-only settings shared by every adapter invocation.

    Built once at process start (see `from_env`) and passed into the app factory
    and `GatewayAdapter`. A missing `api_key` does not stop the process; each
    request reports the service as not configured instead.

    Attributes:
        api_key (Optional[str]): Bearer credential for the AI gateway.
        gateway_url (str): Chat completions endpoint.
        model (str): Model ID sent upstream.
        request_timeout_s (float): Timeout for the single outbound call.
    """
    api_key: Optional[str] = None
    gateway_url: str = GATEWAY_DEFAULTS.AI_GATEWAY_URL
    model: str = GATEWAY_DEFAULTS.AI_GATEWAY_MODEL
    request_timeout_s: float = GATEWAY_DEFAULTS.REQUEST_TIMEOUT_S

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key) and self.api_key != "<REPLACE_ME>"

    @classmethod
    def from_env(cls) -> "GatewaySettings":
        """Resolve settings from the environment (and `.env` if present)."""
        load_dotenv()
        api_key = (os.getenv("AI_GATEWAY_API_KEY") or "").strip() or None
        timeout = os.getenv("AI_GATEWAY_TIMEOUT_S")
        return cls(
            api_key=api_key,
            gateway_url=os.getenv("AI_GATEWAY_URL") or GATEWAY_DEFAULTS.AI_GATEWAY_URL,
            model=os.getenv("AI_GATEWAY_MODEL") or GATEWAY_DEFAULTS.AI_GATEWAY_MODEL,
            request_timeout_s=float(timeout) if timeout else GATEWAY_DEFAULTS.REQUEST_TIMEOUT_S,
        )
