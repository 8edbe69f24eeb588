"""exceptions.py
Defines custom exceptions for this project.
"""
from dataclasses import dataclass
from typing import Any, List, Optional


# ------------------------ Configuration Errors ------------------------
class GatewayConfigError(Exception):
    """Raised when a required configuration (in .env by default) for the AI gateway
    is missing or invalid."""

    def __init__(
        self,
        variable_name: str,
        message: str = None,
        extra_info: str = None
    ):
        """
        Args:
            variable_name: Name of the config variable.
            message: Optional custom message for the error.
            extra_info: Additional information to append to the error message.
        """
        if message is None:
            message = f"Missing or invalid configuration: {variable_name}. Please set it in your .env file."
        if extra_info:
            message += f" | {extra_info}"
        super().__init__(message)
        self.variable_name = variable_name
        self.extra_info = extra_info

    def __str__(self):
        return f"[CONFIG ERROR] {super().__str__()} | Variable: {self.variable_name}"


# ------------------------ Input Validation Errors ------------------------
@dataclass(frozen=True)
class FieldIssue:
    """A single failing field: dotted path plus a human-readable reason."""
    path: str
    message: str

    def __str__(self) -> str:
        return f"{self.path}: {self.message}" if self.path else self.message


class InputValidationError(Exception):
    """
    Raised when an adapter request payload fails its schema.

    Attributes:
        use_case (str): Use case the payload was validated for.
        issues (List[FieldIssue]): Every failing field, not just the first.
    """

    def __init__(self, use_case: str, issues: List[FieldIssue]):
        self.use_case = use_case
        self.issues = issues
        super().__init__(f"Invalid input for `{use_case}`: {self.details}")

    @property
    def details(self) -> str:
        return ", ".join(str(issue) for issue in self.issues)


# ------------------------ Result Parsing Errors ------------------------
class ResultParseError(Exception):
    """Base exception for failures turning an upstream success body into a result."""

    def __init__(self, message: str, raw_content: Any = None):
        self.message = message
        self.raw_content = raw_content
        super().__init__(message)


class UnparsableResultError(ResultParseError):
    """Raised when JSON was expected but the content could not be decoded."""
    pass


class MalformedResultError(ResultParseError):
    """
    Raised when the decoded result does not have the required keys/types.

    Attributes:
        issues (List[FieldIssue]): Shape violations found in the decoded result.
    """

    def __init__(self, message: str, raw_content: Any = None, issues: Optional[List[FieldIssue]] = None):
        self.issues = issues or []
        if self.issues:
            message += ": " + ", ".join(str(issue) for issue in self.issues)
        super().__init__(message, raw_content=raw_content)


# ------------------------ Gateway Client Errors ------------------------
class GatewayClientError(Exception):
    """Base exception for the endpoint client (`GatewayApiClient`)."""
    pass


class SubmissionBlockedError(GatewayClientError):
    """Raised when a request is attempted while a rate-limit countdown is active."""

    def __init__(self, remaining_seconds: int, message: Optional[str] = None):
        self.remaining_seconds = remaining_seconds
        super().__init__(
            message or f"Request blocked: rate limit countdown active ({remaining_seconds}s remaining)."
        )


class RateLimitExceededError(GatewayClientError):
    """Raised when an endpoint answers 429. Carries the optional retry hint."""

    def __init__(self, message: str, retry_after: Optional[int] = None):
        self.retry_after = retry_after
        super().__init__(message)


class CreditsDepletedError(GatewayClientError):
    """Raised when an endpoint answers 402. Never retried automatically."""
    pass


class GatewayRequestError(GatewayClientError):
    """Raised for any other non-2xx endpoint response."""

    def __init__(self, status_code: int, message: str, details: Optional[str] = None):
        self.status_code = status_code
        self.details = details
        full_message = f"[{status_code}] {message}"
        if details:
            full_message += f" | {details}"
        super().__init__(full_message)


# ------------------------ Document Extraction Errors ------------------------
class DocumentError(Exception):
    """Base exception for document text extraction errors."""
    pass


class FileNotSupportedError(DocumentError):
    """Raised when the current file path has an unsupported extension."""
    def __init__(
        self,
        extension: str,
        supported_extensions: List[str],
        context: Optional[str] = None
    ):
        self.extension = extension
        self.supported_extensions = list(supported_extensions)
        message = (
            f"File with extension '{extension}' is not supported. "
            f"Supported extensions: {self.supported_extensions}"
        )
        if context:
            message += f" Context: {context}"
        super().__init__(message)


class FileTooLargeError(DocumentError):
    """Raised when a file exceeds the allowed file size."""
    def __init__(self, max_size: int, actual_size: int):
        super().__init__(
            f"File size is {actual_size} bytes, which exceeds the max allowed {max_size} bytes."
        )
        self.max_size = max_size
        self.actual_size = actual_size


class FileOpenError(DocumentError):
    """Raised when a file cannot be opened or read."""
    def __init__(self, file_path: str, original_error: str):
        super().__init__(
            f"Failed to open or read file: {file_path}. Original error: {original_error}"
        )
        self.file_path = file_path
        self.original_error = original_error


class FileEmptyError(DocumentError):
    """Raised when a file contains no usable text."""
    def __init__(self, file_path: str, message: str | None = None):
        self.file_path = file_path
        if message is None:
            message = f"File `{file_path}` contains no parsable text."
        super().__init__(message)
