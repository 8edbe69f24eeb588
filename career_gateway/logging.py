"""logging.py
Holds configured loggers.
"""
from typing import Literal
import logging
import os
import re
import sys
from datetime import datetime
from dotenv import load_dotenv

load_dotenv()  # load .env

ENV = os.getenv("ENV", "development")  # e.g., development, staging, production

LoggerType = Literal["default", "pytest", "gateway", "upstream_failure"]

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

# Provider error bodies can be huge HTML pages; keep the first part only
MAX_LOGGED_BODY_CHARS = 4000

SECRET_PATTERNS = [
    (re.compile(r"(?i)\b(bearer\s+)[A-Za-z0-9._~+/=\-]+"), r"\1[REDACTED]"),
    (
        re.compile(r'(?i)("?(?:api[_-]?key|access[_-]?token|secret)"?\s*[:=]\s*"?)[^"\s,}]+'),
        r"\1[REDACTED]",
    ),
    (re.compile(r"\bsk-[A-Za-z0-9_\-]{8,}"), "[REDACTED]"),
]


def redact_secrets(text: str) -> str:
    """
    Mask credentials that providers sometimes echo back in error bodies.

    Example:
        >>> redact_secrets('{"error": "bad key", "api_key": "abc123"} Authorization: Bearer xyz')
        '{"error": "bad key", "api_key": "[REDACTED]"} Authorization: Bearer [REDACTED]'
    """
    for pattern, replacement in SECRET_PATTERNS:
        text = pattern.sub(replacement, text)
    return text


class RedactingFormatter(logging.Formatter):
    """Formatter for raw provider output: masks secrets and caps the record length."""

    def __init__(self, fmt: str = LOG_FORMAT, max_chars: int = MAX_LOGGED_BODY_CHARS):
        super().__init__(fmt)
        self.max_chars = max_chars

    def format(self, record: logging.LogRecord) -> str:
        text = redact_secrets(super().format(record))
        if len(text) > self.max_chars:
            text = f"{text[:self.max_chars]}... [truncated {len(text) - self.max_chars} chars]"
        return text


class LoggerFactory:
    """
    Factory to create configured loggers for different purposes.

    Logging behavior depends on environment (ENV):
      - Console logging is optional.
      - Local file logging in development (separate folders per logger type).
      - Cloud logging (optional) in staging/production using watchtower.
      - Duplicate handlers and propagation are avoided automatically.

    Upstream failure loggers are the only place raw provider bodies and
    unparsable model output are written. They never print to the console and
    format through `RedactingFormatter`. Use `get_upstream_failure_logger()` to
    get one per use case.
    """

    def __init__(self, env: str = ENV, base_log_folder: str = "logs"):
        self.env = env
        self.base_log_folder = base_log_folder

    def get_logger(
        self,
        name: str,
        logger_type: LoggerType = "default",
        console: bool = True
    ) -> logging.Logger:
        """
        Create and return a configured logger based on type.
        """
        logger = logging.getLogger(name)

        # Prevent duplicate handlers
        if logger.hasHandlers():
            return logger

        # Disable propagation to root logger
        logger.propagate = False

        level = logging.DEBUG if logger_type in ["default", "pytest"] else logging.INFO
        logger.setLevel(level)

        formatter = logging.Formatter(LOG_FORMAT)

        if console:
            ch = logging.StreamHandler()
            ch.setFormatter(formatter)
            logger.addHandler(ch)

        # File logging (always available in development)
        if self.env in ["development", "local", "test"]:
            log_folder = self._get_log_folder_for_type(logger_type)
            os.makedirs(log_folder, exist_ok=True)
            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
            log_file_path = os.path.join(log_folder, f"{name}_{timestamp}.log")
            fh = logging.FileHandler(log_file_path, mode="a", encoding="utf-8")
            fh.setFormatter(formatter)
            logger.addHandler(fh)

        # CloudWatch handler for staging/production
        elif self.env in ["staging", "production"]:
            self._add_cloudwatch_handler(logger, logger_type, formatter)

        # Safety: ensure at least one handler exists
        if not logger.handlers:
            ch = logging.StreamHandler()
            ch.setFormatter(formatter)
            logger.addHandler(ch)

        return logger

    def get_upstream_failure_logger(self, use_case_name: str) -> logging.Logger:
        """
        Return a use-case-specific upstream failure logger.

        In development it writes to a subfolder per use case:
            logs/upstream_failures/skill_gap/skill_gap_20251028_103022.log
            logs/upstream_failures/cover_letter/cover_letter_20251028_103022.log
        In staging/production it ships to the `upstream_failure_logs` group.
        """
        safe_name = re.sub(r"[^A-Za-z0-9_\-]", "_", use_case_name) or "other"

        logger = logging.getLogger(f"upstream_failure_{safe_name}")

        # Prevent duplicate handlers (esp. if re-requested)
        if logger.hasHandlers():
            return logger

        logger.setLevel(logging.INFO)
        logger.propagate = False  # do not print to console

        formatter = RedactingFormatter()

        if self.env in ["staging", "production"]:
            self._add_cloudwatch_handler(logger, "upstream_failure", formatter)
        else:
            log_folder = os.path.join(self.base_log_folder, "upstream_failures", safe_name)
            os.makedirs(log_folder, exist_ok=True)

            # Use timestamped filename to avoid overwrite
            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
            fh = logging.FileHandler(
                os.path.join(log_folder, f"{safe_name}_{timestamp}.log"), mode="a", encoding="utf-8"
            )
            fh.setFormatter(formatter)
            logger.addHandler(fh)

        if not logger.handlers:
            logger.addHandler(logging.NullHandler())

        return logger

    def _get_log_folder_for_type(self, logger_type: LoggerType) -> str:
        """Return folder path based on logger type."""
        if any("pytest" in arg for arg in sys.argv):
            return os.path.join(self.base_log_folder, "tests")

        mapping = {
            "default": self.base_log_folder,
            "pytest": os.path.join(self.base_log_folder, "tests"),
            "gateway": os.path.join(self.base_log_folder, "gateway"),
        }
        return mapping.get(logger_type, self.base_log_folder)

    def _add_cloudwatch_handler(
        self,
        logger: logging.Logger,
        logger_type: LoggerType,
        formatter: logging.Formatter,
    ):
        """Optional AWS CloudWatch logging for staging/production."""
        try:
            import watchtower

            log_group = {
                "default": "default_logs",
                "gateway": "gateway_logs",
                "upstream_failure": "upstream_failure_logs",
            }.get(logger_type, "default_logs")

            aws_handler = watchtower.CloudWatchLogHandler(log_group=log_group)
            aws_handler.setFormatter(formatter)
            logger.addHandler(aws_handler)

        except ImportError:
            logger.warning("watchtower not installed, skipping cloud logging.")
