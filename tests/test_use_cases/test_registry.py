"""test_registry.py
Test the UseCase registry: lookups, prompt messages and upstream options.
"""
import pytest
from langchain_core.messages import HumanMessage, SystemMessage

from career_gateway.gateway.input_validator import validate_request
from career_gateway.models import ResultShape
from career_gateway.test_helpers.upstream_responses import VALID_PAYLOADS
from career_gateway.use_cases.registry import USE_CASES, get_use_case

# -----------------------------
# Lookups
# -----------------------------
def test_lookup_by_name_and_slug():
    assert get_use_case("resume_optimization") is get_use_case("optimize-resume")


def test_unknown_use_case_raises():
    with pytest.raises(KeyError):
        get_use_case("write-my-memoir")


def test_slugs_and_result_keys():
    expected = {
        "skill_gap": ("analyze-skill-gap", "analysis"),
        "resume_optimization": ("optimize-resume", "result"),
        "cover_letter": ("generate-cover-letter", "coverLetters"),
        "interview_questions": ("generate-interview-questions", "interviewData"),
        "application_insight": ("analyze-application", "insights"),
        "networking_tip": ("generate-networking-tips", "guidance"),
        "resume_rewrite": ("rewrite-resume", "optimizedResume"),
    }
    assert {name: (uc.slug, uc.result_key) for name, uc in USE_CASES.items()} == expected

# -----------------------------
# Messages
# -----------------------------
@pytest.mark.parametrize("use_case_name", list(USE_CASES))
def test_build_messages_is_system_then_user(use_case_name):
    use_case = get_use_case(use_case_name)
    request = validate_request(use_case, VALID_PAYLOADS[use_case_name])
    messages = use_case.build_messages(request)

    assert [type(m) for m in messages] == [SystemMessage, HumanMessage]
    assert messages[0].content == use_case.system_prompt
    assert messages[1].content.strip()


def test_resume_rewrite_system_prompt_override():
    use_case = get_use_case("resume_rewrite")
    payload = dict(VALID_PAYLOADS["resume_rewrite"], systemPrompt="  Be terse.  ")
    messages = use_case.build_messages(validate_request(use_case, payload))
    assert messages[0].content == "Be terse."


def test_blank_system_prompt_keeps_default():
    use_case = get_use_case("resume_rewrite")
    payload = dict(VALID_PAYLOADS["resume_rewrite"], systemPrompt="   ")
    messages = use_case.build_messages(validate_request(use_case, payload))
    assert messages[0].content == use_case.system_prompt

# -----------------------------
# Completion options
# -----------------------------
def test_temperatures_and_token_caps():
    options = {name: uc.completion_options() for name, uc in USE_CASES.items()}
    assert options["skill_gap"]["temperature"] == 0.7
    assert options["cover_letter"]["temperature"] == 0.7
    assert options["interview_questions"]["temperature"] == 0.8
    assert "temperature" not in options["resume_optimization"]
    assert options["resume_rewrite"]["max_tokens"] == 4000


@pytest.mark.parametrize(
    "use_case_name, tool_name, required",
    [
        (
            "application_insight",
            "provide_application_insights",
            {"nextAction", "followUpTiming", "preparationPoints", "estimatedTimeline"},
        ),
        ("networking_tip", "provide_networking_guidance", {"messageTemplate", "tips", "timing"}),
    ],
)
def test_tool_call_use_cases_force_their_tool(use_case_name, tool_name, required):
    use_case = get_use_case(use_case_name)
    assert use_case.result_shape is ResultShape.TOOL_CALL

    options = use_case.completion_options()
    tool = options["tools"][0]
    assert tool["type"] == "function"
    assert tool["function"]["name"] == tool_name
    assert set(tool["function"]["parameters"]["required"]) == required
    assert options["tool_choice"] == {"type": "function", "function": {"name": tool_name}}


def test_direct_json_use_cases_request_json_object():
    for name in ("cover_letter", "interview_questions"):
        assert get_use_case(name).completion_options()["response_format"] == {"type": "json_object"}


def test_fenced_and_text_use_cases_send_no_format_options():
    for name in ("skill_gap", "resume_optimization", "resume_rewrite"):
        options = get_use_case(name).completion_options()
        assert "response_format" not in options
        assert "tools" not in options
