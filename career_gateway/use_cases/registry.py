"""registry.py
Holds the UseCase definition and the registry of every supported use case.

A UseCase tells the adapter everything that differs between endpoints: which
request schema to validate against, how to build the prompt, which options to
send upstream, where the result lives in the success body (`result_shape`),
which shape contract it must satisfy and under which key it is returned.
"""
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Type

from langchain_core.messages import BaseMessage, HumanMessage, SystemMessage
from langchain_core.utils.function_calling import convert_to_openai_tool
from pydantic import BaseModel

from career_gateway.models import ResultShape
from career_gateway.use_cases import prompts
from career_gateway.use_cases.request_schemas import (
    AdapterRequest,
    ApplicationInsightRequest,
    CoverLetterRequest,
    InterviewQuestionsRequest,
    NetworkingTipRequest,
    ResumeOptimizationRequest,
    ResumeRewriteRequest,
    SkillGapRequest,
)
from career_gateway.use_cases.result_schemas import (
    ApplicationInsights,
    CoverLetters,
    InterviewData,
    NetworkingGuidance,
    ResumeOptimizationResult,
    SkillGapAnalysis,
)


@dataclass(frozen=True)
class UseCase:
    """
    Definition of one adapter endpoint.

    Attributes:
        name (str): Registry key (e.g. "skill_gap").
        slug (str): HTTP path segment (e.g. "analyze-skill-gap").
        request_model (Type[AdapterRequest]): Input schema.
        result_key (str): Key wrapping the result in the 200 body.
        result_shape (ResultShape): Where the result sits in the upstream body.
        result_model (Optional[Type[BaseModel]]): Shape contract for JSON results;
            for TOOL_CALL use cases it is also the tool definition sent upstream.
        system_prompt (str): Default system prompt.
        build_user_prompt (Callable): Renders the user prompt from a request.
        failure_message (str): User-facing message for upstream failures.
        temperature (Optional[float]): Sampling temperature, provider default if None.
        max_tokens (Optional[int]): Completion token cap, provider default if None.
    """
    name: str
    slug: str
    request_model: Type[AdapterRequest]
    result_key: str
    result_shape: ResultShape
    result_model: Optional[Type[BaseModel]]
    system_prompt: str
    build_user_prompt: Callable[[Any], str]
    failure_message: str
    temperature: Optional[float] = None
    max_tokens: Optional[int] = None

    def build_messages(self, request: AdapterRequest) -> List[BaseMessage]:
        """System + user messages for one request. A non-blank `system_prompt`
        on the request replaces the default."""
        system_prompt = getattr(request, "system_prompt", None) or self.system_prompt
        return [
            SystemMessage(content=system_prompt),
            HumanMessage(content=self.build_user_prompt(request)),
        ]

    def completion_options(self) -> Dict[str, Any]:
        """Extra chat-completion parameters for this use case."""
        options: Dict[str, Any] = {}
        if self.temperature is not None:
            options["temperature"] = self.temperature
        if self.max_tokens is not None:
            options["max_tokens"] = self.max_tokens

        if self.result_shape is ResultShape.TOOL_CALL:
            tool = convert_to_openai_tool(self.result_model)
            options["tools"] = [tool]
            options["tool_choice"] = {
                "type": "function",
                "function": {"name": tool["function"]["name"]},
            }
        elif self.result_shape is ResultShape.DIRECT_JSON:
            options["response_format"] = {"type": "json_object"}
        return options


USE_CASES: Dict[str, UseCase] = {
    use_case.name: use_case
    for use_case in [
        UseCase(
            name="skill_gap",
            slug="analyze-skill-gap",
            request_model=SkillGapRequest,
            result_key="analysis",
            result_shape=ResultShape.FENCED_JSON,
            result_model=SkillGapAnalysis,
            system_prompt=prompts.SKILL_GAP_SYSTEM_PROMPT,
            build_user_prompt=prompts.build_skill_gap_prompt,
            failure_message="AI analysis failed",
            temperature=0.7,
        ),
        UseCase(
            name="resume_optimization",
            slug="optimize-resume",
            request_model=ResumeOptimizationRequest,
            result_key="result",
            result_shape=ResultShape.FENCED_JSON,
            result_model=ResumeOptimizationResult,
            system_prompt=prompts.RESUME_OPTIMIZATION_SYSTEM_PROMPT,
            build_user_prompt=prompts.build_resume_optimization_prompt,
            failure_message="AI service error",
        ),
        UseCase(
            name="cover_letter",
            slug="generate-cover-letter",
            request_model=CoverLetterRequest,
            result_key="coverLetters",
            result_shape=ResultShape.DIRECT_JSON,
            result_model=CoverLetters,
            system_prompt=prompts.COVER_LETTER_SYSTEM_PROMPT,
            build_user_prompt=prompts.build_cover_letter_prompt,
            failure_message="Failed to generate cover letters",
            temperature=0.7,
        ),
        UseCase(
            name="interview_questions",
            slug="generate-interview-questions",
            request_model=InterviewQuestionsRequest,
            result_key="interviewData",
            result_shape=ResultShape.DIRECT_JSON,
            result_model=InterviewData,
            system_prompt=prompts.INTERVIEW_QUESTIONS_SYSTEM_PROMPT,
            build_user_prompt=prompts.build_interview_questions_prompt,
            failure_message="Failed to generate interview questions",
            temperature=0.8,
        ),
        UseCase(
            name="application_insight",
            slug="analyze-application",
            request_model=ApplicationInsightRequest,
            result_key="insights",
            result_shape=ResultShape.TOOL_CALL,
            result_model=ApplicationInsights,
            system_prompt=prompts.APPLICATION_INSIGHT_SYSTEM_PROMPT,
            build_user_prompt=prompts.build_application_insight_prompt,
            failure_message="Failed to generate insights",
        ),
        UseCase(
            name="networking_tip",
            slug="generate-networking-tips",
            request_model=NetworkingTipRequest,
            result_key="guidance",
            result_shape=ResultShape.TOOL_CALL,
            result_model=NetworkingGuidance,
            system_prompt=prompts.NETWORKING_TIP_SYSTEM_PROMPT,
            build_user_prompt=prompts.build_networking_tip_prompt,
            failure_message="Failed to generate networking guidance",
        ),
        UseCase(
            name="resume_rewrite",
            slug="rewrite-resume",
            request_model=ResumeRewriteRequest,
            result_key="optimizedResume",
            result_shape=ResultShape.TEXT,
            result_model=None,
            system_prompt=prompts.RESUME_REWRITE_SYSTEM_PROMPT,
            build_user_prompt=prompts.build_resume_rewrite_prompt,
            failure_message="Failed to optimize resume",
            temperature=0.7,
            max_tokens=4000,
        ),
    ]
}


def get_use_case(name: str) -> UseCase:
    """
    Look up a use case by registry name or slug.

    Raises:
        KeyError: If no use case matches.
    """
    if name in USE_CASES:
        return USE_CASES[name]
    for use_case in USE_CASES.values():
        if use_case.slug == name:
            return use_case
    raise KeyError(f"Unknown use case `{name}`. Choices are: {list(USE_CASES)}")
