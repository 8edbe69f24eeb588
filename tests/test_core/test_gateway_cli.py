"""test_gateway_cli.py
Test the gateway_cli.py command line entry point.
"""
import json

import pytest

import gateway_cli
from career_gateway.models import AdapterResponse
from career_gateway.test_helpers.document_files import write_txt


@pytest.fixture
def resume_files(tmp_path):
    resume = write_txt(tmp_path / "resume.txt", "Jane Doe\nSenior Data Analyst")
    job = write_txt(tmp_path / "job.txt", "Data Scientist with Python and SQL")
    return str(resume), str(job)


def test_build_payload_merges_sources(tmp_path, resume_files):
    extra = tmp_path / "extra.json"
    extra.write_text(json.dumps({"analysisResult": {"atsScore": 70}}))
    args = gateway_cli.parse_args([
        "cover_letter",
        "--resume", resume_files[0],
        "--job-description", resume_files[1],
        "--payload-json", str(extra),
        "--field", "tone=warm",
    ])
    payload = gateway_cli.build_payload(args, lambda path: open(path, encoding="utf-8").read())
    assert payload == {
        "resume": "Jane Doe\nSenior Data Analyst",
        "jobDescription": "Data Scientist with Python and SQL",
        "analysisResult": {"atsScore": 70},
        "tone": "warm",
    }


def test_bad_field_pair_is_rejected():
    args = gateway_cli.parse_args(["networking_tip", "--field", "contactName"])
    with pytest.raises(ValueError):
        gateway_cli.build_payload(args, str)


def test_unknown_use_case_exits_2(capsys):
    assert gateway_cli.main(["write-my-memoir"]) == 2
    assert "Unknown use case" in capsys.readouterr().out


def test_local_run_prints_result(monkeypatch, capsys, resume_files):
    calls = {}

    class FakeAdapter:
        def __init__(self, use_case, settings):
            calls["use_case"] = use_case

        def handle(self, payload):
            calls["payload"] = payload
            return AdapterResponse(status_code=200, body={"analysis": {"matchScore": 80}})

    monkeypatch.setattr(gateway_cli, "GatewayAdapter", FakeAdapter)
    exit_code = gateway_cli.main([
        "analyze-skill-gap", "--resume", resume_files[0], "--job-description", resume_files[1],
    ])

    assert exit_code == 0
    assert calls["use_case"] == "skill_gap"
    assert calls["payload"]["resume"] == "Jane Doe\nSenior Data Analyst"
    assert json.loads(capsys.readouterr().out) == {"analysis": {"matchScore": 80}}


def test_missing_document_exits_1(capsys, tmp_path):
    exit_code = gateway_cli.main(["skill_gap", "--resume", str(tmp_path / "missing.txt")])
    assert exit_code == 1
    assert "Could not read document" in capsys.readouterr().out
