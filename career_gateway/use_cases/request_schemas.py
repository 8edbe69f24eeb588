"""request_schemas.py
Pydantic request models, one per use case. Field aliases match the camelCase
JSON keys the web client sends.
"""
from typing import Any, Dict, Literal, Optional, get_args

from pydantic import BaseModel, ConfigDict, Field, field_validator

from career_gateway.config import GATEWAY_DEFAULTS

ApplicationStatus = Literal[
    "wishlist", "applied", "screening", "interviewing",
    "offer", "accepted", "rejected", "withdrawn",
]
InteractionType = Literal[
    "initial_outreach", "followup", "thank_you",
    "coffee_chat_request", "referral_request", "keep_in_touch",
]

APPLICATION_STATUSES = get_args(ApplicationStatus)
INTERACTION_TYPES = get_args(InteractionType)


class AdapterRequest(BaseModel):
    """
    Base for every use-case request.

    Strings are trimmed before length checks and never coerced from other
    types. Optional strings that are blank after trimming become None.
    """
    model_config = ConfigDict(
        str_strip_whitespace=True,
        populate_by_name=True,
        extra="ignore",
        frozen=True,
    )

    @field_validator("*", mode="after")
    @classmethod
    def _blank_to_none(cls, value: Any) -> Any:
        if isinstance(value, str) and value == "":
            return None
        return value


class ResumeJobRequest(AdapterRequest):
    resume: str = Field(
        title="Resume", strict=True, min_length=1, max_length=GATEWAY_DEFAULTS.MAX_TEXT_LENGTH
    )
    job_description: str = Field(
        alias="jobDescription", title="Job description", strict=True,
        min_length=1, max_length=GATEWAY_DEFAULTS.MAX_TEXT_LENGTH,
    )


class SkillGapRequest(ResumeJobRequest):
    pass


class ResumeOptimizationRequest(ResumeJobRequest):
    pass


class CoverLetterRequest(ResumeJobRequest):
    analysis_result: Optional[Dict[str, Any]] = Field(
        default=None, alias="analysisResult", title="Analysis result"
    )


class InterviewQuestionsRequest(ResumeJobRequest):
    skill_gaps: Optional[Any] = Field(default=None, alias="skillGaps", title="Skill gaps")


class ResumeRewriteRequest(ResumeJobRequest):
    system_prompt: Optional[str] = Field(
        default=None, alias="systemPrompt", title="System prompt", strict=True,
        max_length=GATEWAY_DEFAULTS.MAX_TEXT_LENGTH,
    )


class ApplicationInsightRequest(AdapterRequest):
    company_name: str = Field(
        alias="companyName", title="Company name", strict=True,
        min_length=1, max_length=GATEWAY_DEFAULTS.MAX_NAME_LENGTH,
    )
    job_title: str = Field(
        alias="jobTitle", title="Job title", strict=True,
        min_length=1, max_length=GATEWAY_DEFAULTS.MAX_NAME_LENGTH,
    )
    job_description: Optional[str] = Field(
        default=None, alias="jobDescription", title="Job description", strict=True,
        max_length=GATEWAY_DEFAULTS.MAX_TEXT_LENGTH,
    )
    current_status: ApplicationStatus = Field(alias="currentStatus", title="Current status")
    applied_date: Optional[str] = Field(
        default=None, alias="appliedDate", title="Applied date", strict=True,
        max_length=GATEWAY_DEFAULTS.MAX_NAME_LENGTH,
    )
    last_activity: Optional[str] = Field(
        default=None, alias="lastActivity", title="Last activity", strict=True,
        max_length=GATEWAY_DEFAULTS.MAX_LAST_ACTIVITY_LENGTH,
    )


class NetworkingTipRequest(AdapterRequest):
    contact_name: str = Field(
        alias="contactName", title="Contact name", strict=True,
        min_length=1, max_length=GATEWAY_DEFAULTS.MAX_NAME_LENGTH,
    )
    contact_company: Optional[str] = Field(
        default=None, alias="contactCompany", title="Contact company", strict=True,
        max_length=GATEWAY_DEFAULTS.MAX_NAME_LENGTH,
    )
    contact_role: Optional[str] = Field(
        default=None, alias="contactRole", title="Contact role", strict=True,
        max_length=GATEWAY_DEFAULTS.MAX_NAME_LENGTH,
    )
    interaction_type: InteractionType = Field(alias="interactionType", title="Interaction type")
    context: Optional[str] = Field(
        default=None, title="Context", strict=True,
        max_length=GATEWAY_DEFAULTS.MAX_CONTEXT_LENGTH,
    )
    last_interaction_date: Optional[str] = Field(
        default=None, alias="lastInteractionDate", title="Last interaction date", strict=True,
        max_length=GATEWAY_DEFAULTS.MAX_NAME_LENGTH,
    )
