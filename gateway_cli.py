"""gateway_cli.py
Run one career gateway use case from the command line.

Examples:
    `python gateway_cli.py skill_gap --resume path/to/resume.pdf --job-description path/to/job.txt`
    `python gateway_cli.py networking_tip --field contactName="Sam Lee" --field interactionType=followup`
    `python gateway_cli.py optimize-resume --resume resume.docx --job-description job.txt --server http://localhost:8001`

Without `--server` the adapter runs in-process (AI_GATEWAY_API_KEY must be set).
With `--server` the request goes through `GatewayApiClient` to a running API.
"""
import argparse
import json
import sys
from typing import Any, Dict

import httpx

from career_gateway.client.gateway_api_client import GatewayApiClient
from career_gateway.config import GatewaySettings
from career_gateway.documents.document_text_extractor import DocumentTextExtractor
from career_gateway.exceptions import DocumentError, GatewayClientError
from career_gateway.gateway.gateway_adapter import GatewayAdapter
from career_gateway.use_cases.registry import USE_CASES, get_use_case


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run a career gateway AI use case.")
    parser.add_argument(
        "use_case",
        help=f"Use case name or endpoint slug. One of: {', '.join(USE_CASES)}",
    )
    parser.add_argument("--resume", help="Resume file (.txt, .pdf or .docx).")
    parser.add_argument("--job-description", help="Job description file (.txt, .pdf or .docx).")
    parser.add_argument(
        "--field",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Extra request field, e.g. companyName=Acme. Repeatable.",
    )
    parser.add_argument("--payload-json", help="JSON file merged into the request body.")
    parser.add_argument("--server", help="Base URL of a running API. Runs in-process if omitted.")
    return parser.parse_args(argv)


def build_payload(args: argparse.Namespace, extract_text) -> Dict[str, Any]:
    """Request body from the document files, the JSON file and `--field` pairs (in that order)."""
    payload: Dict[str, Any] = {}
    if args.resume:
        payload["resume"] = extract_text(args.resume)
    if args.job_description:
        payload["jobDescription"] = extract_text(args.job_description)

    if args.payload_json:
        with open(args.payload_json, "r", encoding="utf-8") as f:
            payload.update(json.load(f))

    for pair in args.field:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise ValueError(f"Invalid --field `{pair}`; expected KEY=VALUE")
        payload[key.strip()] = value
    return payload


def run_local(use_case_name: str, args: argparse.Namespace) -> int:
    extractor = DocumentTextExtractor()
    payload = build_payload(args, extractor.extract_text)

    response = GatewayAdapter(use_case_name, GatewaySettings.from_env()).handle(payload)
    print(json.dumps(response.body, indent=2, ensure_ascii=False))
    return 0 if response.ok else 1


def run_remote(use_case_name: str, args: argparse.Namespace) -> int:
    client = GatewayApiClient(args.server)
    payload = build_payload(args, client.parse_document)

    result = client.invoke(get_use_case(use_case_name).slug, payload)
    print(json.dumps(result, indent=2, ensure_ascii=False))
    return 0


def main(argv=None) -> int:
    args = parse_args(argv)

    try:
        use_case = get_use_case(args.use_case)
    except KeyError as e:
        print(e.args[0])
        return 2

    try:
        if args.server:
            return run_remote(use_case.name, args)
        return run_local(use_case.name, args)
    except (DocumentError, FileNotFoundError) as e:
        print(f"Could not read document: {e}")
    except GatewayClientError as e:
        print(str(e))
    except httpx.HTTPError as e:
        print(f"Could not reach {args.server}: {e}")
    except ValueError as e:
        print(str(e))
    return 1


if __name__ == "__main__":
    sys.exit(main())
