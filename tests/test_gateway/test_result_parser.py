"""test_result_parser.py
Test fence extraction, result parsing per shape and the shape check.
"""
import json

import pytest

from career_gateway.exceptions import MalformedResultError, UnparsableResultError
from career_gateway.gateway.result_parser import (
    check_result_shape,
    extract_fenced_json,
    parse_result,
)
from career_gateway.models import ResultShape
from career_gateway.test_helpers.upstream_responses import (
    SAMPLE_RESULTS,
    create_chat_completion_body,
)
from career_gateway.use_cases.result_schemas import (
    ApplicationInsights,
    ResumeOptimizationResult,
    SkillGapAnalysis,
)

def _content_body(content):
    return json.dumps(create_chat_completion_body(content=content))

# -----------------------------
# extract_fenced_json()
# -----------------------------
@pytest.mark.parametrize(
    "text, expected",
    [
        ('```json\n{"a": 1}\n```', '{"a": 1}'),
        ('```\n{"a": 1}\n```', '{"a": 1}'),
        ('```JSON  \r\n{"a": 1}\r\n```', '{"a": 1}'),
        ('Sure! Here it is:\n```json\n{"a": 1}\n```\nAnything else?', '{"a": 1}'),
        ('```{"a": 1}```', '{"a": 1}'),
        ('  {"a": 1}  ', '{"a": 1}'),
        ('```json\n{"a": 1}', '{"a": 1}'),
        ('```json\n{"a": 1}\n```\n```json\n{"b": 2}\n```', '{"a": 1}'),
        ('```json {"a": 1}```', '{"a": 1}'),
        ('Result: ```json  {"a": 1}\n```', '{"a": 1}'),
    ],
)
def test_extract_fenced_json(text, expected):
    assert extract_fenced_json(text) == expected

# -----------------------------
# parse_result(): fenced / direct
# -----------------------------
def test_embedded_fence_yields_ats_score():
    """Prose around a ```json fence is ignored."""
    content = 'Here is your analysis:\n```json\n{"atsScore": 72, "keywordInsights": []}\n```\nGood luck!'
    result = parse_result(_content_body(content), ResultShape.FENCED_JSON)
    assert result["atsScore"] == 72


def test_bare_and_fenced_content_parse_the_same():
    payload = SAMPLE_RESULTS["skill_gap"]
    bare = parse_result(_content_body(json.dumps(payload)), ResultShape.FENCED_JSON)
    fenced = parse_result(
        _content_body(f"```json\n{json.dumps(payload, indent=2)}\n```"),
        ResultShape.FENCED_JSON,
    )
    assert bare == fenced == payload


def test_direct_json_content():
    payload = SAMPLE_RESULTS["cover_letter"]
    assert parse_result(_content_body(json.dumps(payload)), ResultShape.DIRECT_JSON) == payload


def test_direct_json_does_not_strip_fences():
    with pytest.raises(UnparsableResultError):
        parse_result(_content_body('```json\n{"a": 1}\n```'), ResultShape.DIRECT_JSON)


def test_invalid_json_content_is_unparsable():
    with pytest.raises(UnparsableResultError) as exc_info:
        parse_result(_content_body("I could not analyze this resume, sorry."), ResultShape.FENCED_JSON)
    assert exc_info.value.raw_content == "I could not analyze this resume, sorry."


@pytest.mark.parametrize(
    "content",
    [
        '{"matchScore": 70, "strengths": [NaN], "gaps": ["x"], "recommendations": ["y"]}',
        '{"matchScore": Infinity, "strengths": [], "gaps": [], "recommendations": []}',
        '{"matchScore": 70, "extra": -Infinity}',
        '{"matchScore": 1e999}',
    ],
)
def test_non_finite_numbers_are_unparsable(content):
    """Strict JSON only: NaN, Infinity and overflowing floats are rejected."""
    with pytest.raises(UnparsableResultError):
        parse_result(_content_body(content), ResultShape.FENCED_JSON)

# -----------------------------
# parse_result(): tool call / text
# -----------------------------
def test_tool_call_arguments_string():
    payload = SAMPLE_RESULTS["application_insight"]
    body = create_chat_completion_body(tool_name="provide_application_insights", tool_arguments=payload)
    assert parse_result(json.dumps(body), ResultShape.TOOL_CALL) == payload


def test_tool_call_arguments_already_decoded():
    body = create_chat_completion_body(tool_name="provide_networking_guidance", tool_arguments="{}")
    body["choices"][0]["message"]["tool_calls"][0]["function"]["arguments"] = {"tips": []}
    assert parse_result(json.dumps(body), ResultShape.TOOL_CALL) == {"tips": []}


def test_tool_call_missing_is_unparsable():
    with pytest.raises(UnparsableResultError):
        parse_result(_content_body('{"nextAction": "wait"}'), ResultShape.TOOL_CALL)


def test_tool_call_bad_arguments_is_unparsable():
    body = create_chat_completion_body(tool_name="provide_networking_guidance", tool_arguments="{tips: [")
    with pytest.raises(UnparsableResultError):
        parse_result(json.dumps(body), ResultShape.TOOL_CALL)


def test_text_shape_is_trimmed_content():
    assert parse_result(_content_body("\n  JANE DOE\nData Scientist  \n"), ResultShape.TEXT) == "JANE DOE\nData Scientist"

# -----------------------------
# parse_result(): broken bodies
# -----------------------------
@pytest.mark.parametrize(
    "raw_body",
    [
        "<html>502 Bad Gateway</html>",
        "[]",
        json.dumps({"choices": []}),
        json.dumps({"choices": [{"message": None}]}),
        json.dumps({"choices": [{"message": {"content": None}}]}),
        json.dumps({"choices": [{"message": {"content": "   "}}]}),
    ],
)
@pytest.mark.parametrize("shape", list(ResultShape))
def test_broken_bodies_are_unparsable(raw_body, shape):
    with pytest.raises(UnparsableResultError):
        parse_result(raw_body, shape)

# -----------------------------
# check_result_shape()
# -----------------------------
def test_valid_result_is_returned_unchanged():
    result = dict(SAMPLE_RESULTS["skill_gap"], experienceLevel="Senior")
    assert check_result_shape(result, SkillGapAnalysis) is result


def test_no_model_skips_check():
    assert check_result_shape("plain text", None) == "plain text"


def test_missing_key_is_malformed():
    result = dict(SAMPLE_RESULTS["resume_optimization"])
    del result["overallFeedback"]
    with pytest.raises(MalformedResultError) as exc_info:
        check_result_shape(result, ResumeOptimizationResult)
    assert [issue.path for issue in exc_info.value.issues] == ["overallFeedback"]


@pytest.mark.parametrize("score", [-1, 101, "72", None])
def test_score_out_of_range_or_wrong_type_is_malformed(score):
    result = dict(SAMPLE_RESULTS["skill_gap"], matchScore=score)
    with pytest.raises(MalformedResultError):
        check_result_shape(result, SkillGapAnalysis)


def test_array_fields_must_be_arrays():
    result = dict(SAMPLE_RESULTS["application_insight"], preparationPoints="Review SQL")
    with pytest.raises(MalformedResultError):
        check_result_shape(result, ApplicationInsights)


def test_non_object_result_is_malformed():
    with pytest.raises(MalformedResultError):
        check_result_shape(["not", "an", "object"], SkillGapAnalysis)
