"""input_validator.py
Validates raw request payloads against a use case's request schema.
"""
from typing import Any, Dict, List, Type

from pydantic import ValidationError

from career_gateway.exceptions import FieldIssue, InputValidationError
from career_gateway.use_cases.registry import UseCase
from career_gateway.use_cases.request_schemas import AdapterRequest


def validate_request(use_case: UseCase, payload: Any) -> AdapterRequest:
    """
    Validate an untyped payload and return the use case's typed request.

    Every failing field is reported, not just the first. Pure function: no
    I/O, no partial validation.

    Args:
        use_case (UseCase): Use case whose `request_model` defines the schema.
        payload (Any): Decoded JSON body.

    Returns:
        AdapterRequest: Normalized request (trimmed strings, blank optionals as None).

    Raises:
        InputValidationError: Listing each failing field as `path: message`.
    """
    if not isinstance(payload, dict):
        raise InputValidationError(
            use_case=use_case.name,
            issues=[FieldIssue(path="body", message="Request body must be a JSON object")],
        )

    try:
        return use_case.request_model.model_validate(payload)
    except ValidationError as e:
        raise InputValidationError(
            use_case=use_case.name,
            issues=format_validation_issues(use_case.request_model, e),
        )


def format_validation_issues(
    request_model: Type[AdapterRequest],
    error: ValidationError,
) -> List[FieldIssue]:
    """Convert pydantic errors into `FieldIssue`s with readable messages."""
    titles = _field_titles(request_model)
    issues = []
    for err in error.errors():
        path = ".".join(str(part) for part in err["loc"])
        title = titles.get(str(err["loc"][0]), path) if err["loc"] else "Value"
        issues.append(FieldIssue(path=path, message=_describe_error(title, err)))
    return issues


def _field_titles(request_model: Type[AdapterRequest]) -> Dict[str, str]:
    """Map the JSON key (alias or name) of each field to its display title."""
    titles = {}
    for name, field_info in request_model.model_fields.items():
        key = field_info.alias or name
        titles[key] = field_info.title or name
    return titles


def _describe_error(title: str, err: Dict[str, Any]) -> str:
    error_type = err["type"]
    ctx = err.get("ctx") or {}

    if error_type in ("missing", "string_too_short"):
        return f"{title} is required"
    if error_type == "string_too_long":
        return f"{title} too long (max {ctx.get('max_length', 0):,} characters)"
    if error_type == "string_type":
        return f"{title} must be a string"
    if error_type == "literal_error":
        return f"Invalid {title.lower()} {err.get('input')!r}. Expected {ctx.get('expected')}"
    if error_type in ("dict_type", "model_type"):
        return f"{title} must be a JSON object"
    return err["msg"]
