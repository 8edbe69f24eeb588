"""test_server.py
Endpoint tests for the FastAPI app built by create_app().
"""
import pytest
from fastapi.testclient import TestClient

from api.server import CORS_HEADERS, UNSUPPORTED_FILE_MESSAGE, create_app
from career_gateway.gateway.gateway_adapter import UNEXPECTED_MESSAGE, GatewayAdapter
from career_gateway.models import AdapterResponse
from career_gateway.test_helpers.document_files import write_docx, write_pdf
from career_gateway.test_helpers.upstream_responses import (
    SAMPLE_RESULTS,
    VALID_PAYLOADS,
    create_chat_completion_body,
    create_mock_http_client,
    create_success_body_for,
)
from career_gateway.use_cases.registry import USE_CASES, get_use_case


def _api(settings, **mock_kwargs):
    http_client, recorder = create_mock_http_client(**mock_kwargs)
    return TestClient(create_app(settings=settings, http_client=http_client)), recorder

def _assert_cors(response):
    for header, value in CORS_HEADERS.items():
        assert response.headers[header] == value

# -----------------------------
# Use-case endpoints
# -----------------------------
@pytest.mark.parametrize("use_case_name", list(USE_CASES))
def test_success_for_every_endpoint(use_case_name, gateway_settings):
    use_case = get_use_case(use_case_name)
    api, _ = _api(gateway_settings, json_body=create_success_body_for(use_case_name))

    response = api.post(f"/{use_case.slug}", json=VALID_PAYLOADS[use_case_name])

    assert response.status_code == 200
    assert response.json() == {use_case.result_key: SAMPLE_RESULTS[use_case_name]}
    _assert_cors(response)


@pytest.mark.parametrize("use_case_name", list(USE_CASES))
def test_options_preflight(use_case_name, gateway_settings):
    api, recorder = _api(gateway_settings, json_body={})
    response = api.options(f"/{get_use_case(use_case_name).slug}")

    assert response.status_code == 200
    assert response.content == b""
    _assert_cors(response)
    assert recorder.call_count == 0


def test_invalid_input(gateway_settings):
    api, recorder = _api(gateway_settings, json_body={})
    response = api.post("/analyze-application", json={"companyName": "Acme", "currentStatus": "ghosted"})

    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "Invalid input"
    assert "jobTitle: Job title is required" in body["details"]
    assert "currentStatus: Invalid current status 'ghosted'" in body["details"]
    _assert_cors(response)
    assert recorder.call_count == 0


def test_malformed_json_body(gateway_settings):
    api, _ = _api(gateway_settings, json_body={})
    response = api.post(
        "/analyze-skill-gap",
        content=b"{not json",
        headers={"content-type": "application/json"},
    )
    assert response.status_code == 400
    assert response.json()["details"] == "body: Request body must be a JSON object"


def test_rate_limited(gateway_settings):
    api, _ = _api(gateway_settings, status_code=429, json_body={}, headers={"Retry-After": "45"})
    response = api.post("/analyze-skill-gap", json=VALID_PAYLOADS["skill_gap"])

    assert response.status_code == 429
    assert response.json()["retryAfter"] == 45
    _assert_cors(response)


def test_payment_required(gateway_settings):
    api, _ = _api(gateway_settings, status_code=402, json_body={})
    response = api.post("/generate-networking-tips", json=VALID_PAYLOADS["networking_tip"])
    assert response.status_code == 402
    assert response.json() == {"error": "AI credits depleted. Please add credits to continue."}


def test_upstream_failure(gateway_settings):
    api, _ = _api(gateway_settings, status_code=503, text="provider exploded")
    response = api.post("/generate-cover-letter", json=VALID_PAYLOADS["cover_letter"])
    assert response.status_code == 500
    assert response.json() == {"error": "Failed to generate cover letters"}
    _assert_cors(response)


def test_non_finite_result_is_json_error(gateway_settings):
    """NaN in model output is a parse failure, still answered as JSON with CORS headers."""
    content = '{"matchScore": 70, "strengths": [NaN], "gaps": ["x"], "recommendations": ["y"]}'
    api, _ = _api(gateway_settings, json_body=create_chat_completion_body(content=content))
    response = api.post("/analyze-skill-gap", json=VALID_PAYLOADS["skill_gap"])

    assert response.status_code == 500
    assert response.headers["content-type"] == "application/json"
    assert response.json() == {"error": "Failed to parse AI response"}
    _assert_cors(response)


def test_unserializable_adapter_body_is_json_error(gateway_settings, monkeypatch):
    monkeypatch.setattr(
        GatewayAdapter,
        "handle",
        lambda self, payload: AdapterResponse(status_code=200, body={"analysis": {"matchScore": float("nan")}}),
    )
    api, _ = _api(gateway_settings, json_body={})
    response = api.post("/analyze-skill-gap", json=VALID_PAYLOADS["skill_gap"])

    assert response.status_code == 500
    assert response.json() == {"error": UNEXPECTED_MESSAGE}
    _assert_cors(response)


def test_unhandled_endpoint_error_is_json_error(gateway_settings, monkeypatch):
    def explode(self, payload):
        raise RuntimeError("boom")

    monkeypatch.setattr(GatewayAdapter, "handle", explode)
    http_client, _ = create_mock_http_client(json_body={})
    api = TestClient(create_app(settings=gateway_settings, http_client=http_client), raise_server_exceptions=False)
    response = api.post("/generate-cover-letter", json=VALID_PAYLOADS["cover_letter"])

    assert response.status_code == 500
    assert response.json() == {"error": UNEXPECTED_MESSAGE}
    _assert_cors(response)


def test_missing_credential_on_every_request(unconfigured_settings):
    api, recorder = _api(unconfigured_settings, json_body={})
    for _ in range(2):
        response = api.post("/optimize-resume", json=VALID_PAYLOADS["resume_optimization"])
        assert response.status_code == 500
        assert response.json() == {"error": "AI service not configured"}
    assert recorder.call_count == 0

# -----------------------------
# /parse-document
# -----------------------------
def test_parse_text_document(gateway_settings):
    api, _ = _api(gateway_settings, json_body={})
    response = api.post(
        "/parse-document",
        files={"file": ("resume.txt", b"  Jane Doe\nSenior Data Analyst  ", "text/plain")},
    )
    assert response.status_code == 200
    assert response.json() == {"text": "Jane Doe\nSenior Data Analyst"}
    _assert_cors(response)


def test_parse_pdf_and_docx_documents(gateway_settings, tmp_path):
    api, _ = _api(gateway_settings, json_body={})
    pdf_path = write_pdf(tmp_path / "resume.pdf", ["Jane Doe", "Senior Data Analyst"])
    docx_path = write_docx(tmp_path / "resume.docx", ["Jane Doe", "Senior Data Analyst"])

    for path in (pdf_path, docx_path):
        response = api.post("/parse-document", files={"file": (path.name, path.read_bytes())})
        assert response.status_code == 200
        assert "Senior Data Analyst" in response.json()["text"]


def test_parse_document_without_file(gateway_settings):
    api, _ = _api(gateway_settings, json_body={})
    response = api.post("/parse-document", data={"other": "field"})
    assert response.status_code == 400
    assert response.json() == {"error": "No file provided"}


def test_parse_empty_document(gateway_settings):
    api, _ = _api(gateway_settings, json_body={})
    response = api.post("/parse-document", files={"file": ("resume.txt", b"   ", "text/plain")})
    assert response.status_code == 400
    assert response.json() == {"error": "File appears to be empty. Please paste the text directly."}


def test_parse_unsupported_document(gateway_settings):
    api, _ = _api(gateway_settings, json_body={})
    response = api.post("/parse-document", files={"file": ("resume.doc", b"binary word 97 file")})
    assert response.status_code == 400
    assert response.json() == {"error": UNSUPPORTED_FILE_MESSAGE}


def test_parse_document_preflight(gateway_settings):
    api, _ = _api(gateway_settings, json_body={})
    response = api.options("/parse-document")
    assert response.status_code == 200
    _assert_cors(response)
