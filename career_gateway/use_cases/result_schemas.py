"""result_schemas.py
Minimal shape contracts for the structured results each use case returns.

These models only check that required keys exist with the right primitive or
array type; extra keys from the model are allowed and passed through. The two
tool-call models double as the function definitions sent upstream, so their
titles are the tool names and their docstrings the tool descriptions.
"""
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ResultModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="allow")


class SkillGapAnalysis(ResultModel):
    match_score: float = Field(alias="matchScore", strict=True, ge=0, le=100)
    strengths: List[Any]
    gaps: List[Any]
    recommendations: List[Any]


class ResumeOptimizationResult(ResultModel):
    ats_score: float = Field(alias="atsScore", strict=True, ge=0, le=100)
    keyword_insights: List[Any] = Field(alias="keywordInsights")
    suggested_rewrites: List[Any] = Field(alias="suggestedRewrites")
    overall_feedback: str = Field(alias="overallFeedback", strict=True)


class CoverLetters(ResultModel):
    conservative: str = Field(strict=True)
    passionate: str = Field(strict=True)
    data_driven: str = Field(alias="dataDriven", strict=True)


class InterviewData(ResultModel):
    behavioral: List[Any]
    technical: List[Any]
    weak_areas: List[Any] = Field(alias="weakAreas")


class ApplicationInsights(ResultModel):
    """Provide actionable insights for a job application"""
    model_config = ConfigDict(
        title="provide_application_insights", populate_by_name=True, extra="allow"
    )

    next_action: str = Field(
        alias="nextAction", strict=True,
        description="The recommended next action to take",
    )
    follow_up_timing: str = Field(
        alias="followUpTiming", strict=True,
        description="When and how to follow up",
    )
    preparation_points: List[str] = Field(
        alias="preparationPoints",
        description="Key points to prepare for next stage",
    )
    concerns: Optional[List[str]] = Field(
        default=None,
        description="Any red flags or concerns",
    )
    estimated_timeline: str = Field(
        alias="estimatedTimeline", strict=True,
        description="Expected timeline for current stage",
    )


class NetworkingGuidance(ResultModel):
    """Provide networking tips and message template"""
    model_config = ConfigDict(
        title="provide_networking_guidance", populate_by_name=True, extra="allow"
    )

    message_template: str = Field(
        alias="messageTemplate", strict=True,
        description="A warm, professional message template",
    )
    tips: List[str] = Field(description="Actionable networking tips (3-5 items)")
    timing: str = Field(strict=True, description="Best time to send this message")
