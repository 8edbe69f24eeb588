"""upstream_responses.py
Helpers to fake AI gateway traffic with `httpx.MockTransport`.
"""
import json
import random
import uuid
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

import httpx

# --------------------------------------------------------------
# SAMPLE REQUESTS AND RESULTS
# --------------------------------------------------------------
SAMPLE_RESUME = (
    "Jane Doe\nSenior Data Analyst\n"
    "Skills: SQL, Python, Tableau, stakeholder communication\n"
    "Experience: 5 years building reporting pipelines at Acme Corp."
)
SAMPLE_JOB_DESCRIPTION = (
    "We are hiring a Data Scientist with strong Python, SQL and machine learning "
    "experience. Familiarity with A/B testing and cloud data warehouses is a plus."
)

VALID_PAYLOADS: Dict[str, Dict[str, Any]] = {
    "skill_gap": {"resume": SAMPLE_RESUME, "jobDescription": SAMPLE_JOB_DESCRIPTION},
    "resume_optimization": {"resume": SAMPLE_RESUME, "jobDescription": SAMPLE_JOB_DESCRIPTION},
    "cover_letter": {"resume": SAMPLE_RESUME, "jobDescription": SAMPLE_JOB_DESCRIPTION},
    "interview_questions": {"resume": SAMPLE_RESUME, "jobDescription": SAMPLE_JOB_DESCRIPTION},
    "application_insight": {
        "companyName": "Acme Corp",
        "jobTitle": "Data Scientist",
        "currentStatus": "applied",
        "appliedDate": "2025-01-10",
    },
    "networking_tip": {
        "contactName": "Sam Lee",
        "contactCompany": "Globex",
        "interactionType": "followup",
    },
    "resume_rewrite": {"resume": SAMPLE_RESUME, "jobDescription": SAMPLE_JOB_DESCRIPTION},
}

SAMPLE_RESULTS: Dict[str, Any] = {
    "skill_gap": {
        "matchScore": 68,
        "strengths": [{"skill": "SQL", "evidence": "5 years of reporting pipelines"}],
        "gaps": [{"skill": "Machine learning", "priority": "High"}],
        "recommendations": [{"title": "Complete an applied ML course", "timeframe": "1-2 months"}],
    },
    "resume_optimization": {
        "atsScore": 72,
        "keywordInsights": [{"keyword": "machine learning", "status": "missing"}],
        "suggestedRewrites": [{"before": "Built reports", "after": "Built Python reporting pipelines"}],
        "overallFeedback": "Strong analytics base; surface ML exposure.",
    },
    "cover_letter": {
        "conservative": "Dear Hiring Manager, ...",
        "passionate": "From my first SQL query, ...",
        "dataDriven": "In five years I cut reporting time by 40% ...",
    },
    "interview_questions": {
        "behavioral": [{"question": "Tell me about a conflict with a stakeholder."}],
        "technical": [{"question": "How would you design an A/B test?"}],
        "weakAreas": [{"area": "Machine learning", "suggestion": "Review model evaluation basics"}],
    },
    "application_insight": {
        "nextAction": "Send a short follow-up email to the recruiter.",
        "followUpTiming": "In 5 business days",
        "preparationPoints": ["Review A/B testing", "Prepare a portfolio walkthrough"],
        "concerns": ["Limited ML experience"],
        "estimatedTimeline": "2-4 weeks",
    },
    "networking_tip": {
        "messageTemplate": "Hi Sam, great catching up last week...",
        "tips": ["Reference your last conversation", "Keep it under 100 words"],
        "timing": "Tuesday morning",
    },
    "resume_rewrite": "JANE DOE\nData Scientist\n...",
}


# --------------------------------------------------------------
# CHAT COMPLETION BODIES
# --------------------------------------------------------------
def create_chat_completion_body(
    content: Optional[str] = None,
    tool_name: Optional[str] = None,
    tool_arguments: Union[str, Dict[str, Any], None] = None,
) -> Dict[str, Any]:
    """
    Build an OpenAI-compatible chat completion body.

    Pass `content` for content shapes, or `tool_name` and `tool_arguments` for
    a tool-call answer (dict arguments are JSON-encoded like real providers do).
    """
    message: Dict[str, Any] = {"role": "assistant", "content": content}
    if tool_name is not None:
        arguments = tool_arguments if isinstance(tool_arguments, str) else json.dumps(tool_arguments)
        message["tool_calls"] = [{
            "id": f"call_{uuid.uuid4().hex[:12]}",
            "type": "function",
            "function": {"name": tool_name, "arguments": arguments},
        }]

    prompt_tokens = random.randint(200, 800)
    completion_tokens = random.randint(50, 400)
    return {
        "id": f"chatcmpl-{uuid.uuid4().hex}",
        "object": "chat.completion",
        "model": "google/gemini-2.5-flash",
        "choices": [{"index": 0, "message": message, "finish_reason": "stop"}],
        "usage": {
            "prompt_tokens": prompt_tokens,
            "completion_tokens": completion_tokens,
            "total_tokens": prompt_tokens + completion_tokens,
        },
    }


def create_success_body_for(use_case_name: str, fenced: bool = False) -> Dict[str, Any]:
    """Realistic success body for one use case, shaped the way the model answers it."""
    result = SAMPLE_RESULTS[use_case_name]
    if use_case_name == "application_insight":
        return create_chat_completion_body(tool_name="provide_application_insights", tool_arguments=result)
    if use_case_name == "networking_tip":
        return create_chat_completion_body(tool_name="provide_networking_guidance", tool_arguments=result)
    if isinstance(result, str):
        return create_chat_completion_body(content=result)

    content = json.dumps(result)
    if fenced:
        content = f"Here is the analysis:\n```json\n{content}\n```\nGood luck!"
    return create_chat_completion_body(content=content)


# --------------------------------------------------------------
# MOCK TRANSPORT
# --------------------------------------------------------------
class RecordingTransport(httpx.MockTransport):
    """
    `httpx.MockTransport` that keeps every request it served.

    Attributes:
        requests (List[httpx.Request]): Requests in the order received.
    """

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]):
        self.requests: List[httpx.Request] = []

        def recording_handler(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(recording_handler)

    @property
    def call_count(self) -> int:
        return len(self.requests)

    def last_json(self) -> Dict[str, Any]:
        return json.loads(self.requests[-1].content)


def create_mock_http_client(
    status_code: int = 200,
    json_body: Any = None,
    text: Optional[str] = None,
    headers: Optional[Dict[str, str]] = None,
    handler: Optional[Callable[[httpx.Request], httpx.Response]] = None,
) -> Tuple[httpx.Client, RecordingTransport]:
    """
    Return an `httpx.Client` whose every request gets the same canned answer
    (or whatever `handler` returns), plus the transport recording the requests.
    """
    if handler is None:
        def handler(request: httpx.Request) -> httpx.Response:
            if text is not None:
                return httpx.Response(status_code, text=text, headers=headers)
            return httpx.Response(status_code, json=json_body, headers=headers)

    transport = RecordingTransport(handler)
    return httpx.Client(transport=transport), transport
