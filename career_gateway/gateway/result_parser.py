"""result_parser.py
Extracts the structured result from an upstream success body.

Supported shapes (chosen by the use case, never guessed):
    - DIRECT_JSON: `choices[0].message.content` is a JSON document.
    - FENCED_JSON: the content is prose that may embed JSON in a ``` fence.
    - TOOL_CALL: `choices[0].message.tool_calls[0].function.arguments` is JSON.
    - TEXT: the content itself (trimmed) is the result.
"""
import json
import math
import re
from typing import Any, Dict, Optional, Type

from pydantic import BaseModel, ValidationError

from career_gateway.exceptions import FieldIssue, MalformedResultError, UnparsableResultError
from career_gateway.models import ResultShape

# Opening fence, then either a language tag (ending the line or followed by
# spaces) or an optional newline, then the body up to the next fence (or the
# end of the string).
FENCE_PATTERN = re.compile(
    r"```(?:[ \t]*[A-Za-z0-9_+.\-]+(?:[ \t]*\r?\n|[ \t]+)|[ \t]*\r?\n?)(.*?)(?:```|\Z)",
    re.DOTALL,
)


def extract_fenced_json(text: str) -> str:
    """
    Return the JSON candidate inside the first ``` fence of `text`.

    Falls back to the whole trimmed string when there is no fence.

    Example:
        >>> extract_fenced_json('Here you go ```json\\n{"a": 1}\\n``` thanks')
        '{"a": 1}'
    """
    stripped = text.strip()
    match = FENCE_PATTERN.search(stripped)
    if match is None:
        return stripped
    return match.group(1).strip()


def parse_result(raw_body: str, shape: ResultShape) -> Any:
    """
    Decode the success body and pull out the result for `shape`.

    Args:
        raw_body (str): Upstream 2xx body.
        shape (ResultShape): Where the result lives.

    Returns:
        Any: Decoded JSON for JSON shapes, a non-empty string for TEXT.

    Raises:
        UnparsableResultError: If the body, the content or the tool arguments are
            missing or are not valid JSON where JSON is expected.
    """
    body = _decode_json(raw_body, what="AI response body")
    if not isinstance(body, dict):
        raise UnparsableResultError("AI response body is not a JSON object", raw_content=raw_body)

    if shape is ResultShape.TOOL_CALL:
        arguments = _tool_call_arguments(body)
        if isinstance(arguments, dict):
            return arguments
        return _decode_json(arguments, what="tool call arguments")

    content = _message_content(body)
    if shape is ResultShape.TEXT:
        return content.strip()
    if shape is ResultShape.FENCED_JSON:
        return _decode_json(extract_fenced_json(content), what="AI content")
    return _decode_json(content.strip(), what="AI content")


def check_result_shape(result: Any, result_model: Optional[Type[BaseModel]]) -> Any:
    """
    Verify required keys and primitive/array types of a decoded result.

    The decoded object is returned unchanged so extra keys survive.

    Raises:
        MalformedResultError: If the result violates `result_model`.
    """
    if result_model is None:
        return result
    try:
        result_model.model_validate(result)
    except ValidationError as e:
        issues = [
            FieldIssue(path=".".join(str(part) for part in err["loc"]), message=err["msg"])
            for err in e.errors()
        ]
        raise MalformedResultError(
            f"AI result does not match {result_model.__name__}",
            raw_content=result,
            issues=issues,
        )
    return result


# ---- Body helpers ----
def _decode_json(text: str, what: str) -> Any:
    try:
        return json.loads(text, parse_constant=_reject_constant, parse_float=_finite_float)
    except (TypeError, ValueError) as e:
        raise UnparsableResultError(f"Failed to parse {what} as JSON: {e}", raw_content=text)


# Responses are serialized as strict JSON, so NaN/Infinity never get past parsing
def _reject_constant(name: str) -> Any:
    raise ValueError(f"Non-finite number `{name}` is not valid JSON")


def _finite_float(literal: str) -> float:
    value = float(literal)
    if not math.isfinite(value):
        raise ValueError(f"Number `{literal}` is out of range")
    return value


def _first_message(body: Dict[str, Any]) -> Dict[str, Any]:
    choices = body.get("choices")
    if not isinstance(choices, list) or not choices or not isinstance(choices[0], dict):
        raise UnparsableResultError("No choices in AI response", raw_content=body)
    message = choices[0].get("message")
    if not isinstance(message, dict):
        raise UnparsableResultError("No message in AI response", raw_content=body)
    return message


def _message_content(body: Dict[str, Any]) -> str:
    content = _first_message(body).get("content")
    if not isinstance(content, str) or not content.strip():
        raise UnparsableResultError("No content in AI response", raw_content=body)
    return content


def _tool_call_arguments(body: Dict[str, Any]) -> Any:
    tool_calls = _first_message(body).get("tool_calls")
    if not isinstance(tool_calls, list) or not tool_calls or not isinstance(tool_calls[0], dict):
        raise UnparsableResultError("No tool call in AI response", raw_content=body)
    function = tool_calls[0].get("function") or {}
    arguments = function.get("arguments") if isinstance(function, dict) else None
    if not arguments:
        raise UnparsableResultError("No tool call arguments in AI response", raw_content=body)
    return arguments
