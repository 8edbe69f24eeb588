"""server.py
Server to launch the career gateway FastAPI / Swagger UI instance.

One POST endpoint per use case (`/analyze-skill-gap`, `/optimize-resume`, ...),
an OPTIONS preflight for each, and `/parse-document` for file uploads. Every
response carries the CORS headers below.
"""
import os
import tempfile
from typing import Callable, Optional

import httpx
from fastapi import FastAPI, File, Request, UploadFile
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse, Response

from career_gateway.config import GATEWAY_DEFAULTS, GatewaySettings
from career_gateway.documents.document_text_extractor import DocumentTextExtractor
from career_gateway.exceptions import (
    DocumentError,
    FileEmptyError,
    FileNotSupportedError,
    FileTooLargeError,
)
from career_gateway.gateway.gateway_adapter import UNEXPECTED_MESSAGE, GatewayAdapter
from career_gateway.logging import LoggerFactory
from career_gateway.use_cases.registry import USE_CASES, UseCase

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
}

UNSUPPORTED_FILE_MESSAGE = "Please upload a .txt, .pdf or .docx file or paste your content directly into the text area."
UNREADABLE_FILE_MESSAGE = "Could not read this file. Please paste the text directly into the text area."
FAILED_FILE_MESSAGE = "Failed to process file. Please paste the text directly into the text area."

logger = LoggerFactory().get_logger(name="api_server", logger_type="gateway")


def create_app(
    settings: Optional[GatewaySettings] = None,
    http_client: Optional[httpx.Client] = None,
    document_extractor: Optional[DocumentTextExtractor] = None,
) -> FastAPI:
    """
    Build the FastAPI app.

    Args:
        settings (Optional[GatewaySettings]): Read-only settings; resolved from the
            environment if None.
        http_client (Optional[httpx.Client]): HTTP client for upstream calls
            (tests inject one backed by `httpx.MockTransport`).
        document_extractor (Optional[DocumentTextExtractor]): Extractor used by
            `/parse-document`.

    Returns:
        FastAPI: The configured application.
    """
    settings = settings or GatewaySettings.from_env()
    document_extractor = document_extractor or DocumentTextExtractor()

    if not settings.is_configured:
        logger.warning("AI_GATEWAY_API_KEY is not set; AI endpoints will answer 500 until it is.")

    app = FastAPI(title="Career Gateway API", version="1.0")

    @app.middleware("http")
    async def add_cors_headers(request: Request, call_next):
        response = await call_next(request)
        response.headers.update(CORS_HEADERS)
        return response

    # Runs outside the middleware stack, so the CORS headers are set here
    @app.exception_handler(Exception)
    async def unhandled_error(request: Request, exc: Exception) -> JSONResponse:
        logger.exception(f"Unhandled error on {request.method} {request.url.path}", exc_info=exc)
        return JSONResponse(status_code=500, content={"error": UNEXPECTED_MESSAGE}, headers=CORS_HEADERS)

    for use_case in USE_CASES.values():
        app.add_api_route(
            f"/{use_case.slug}",
            _use_case_endpoint(use_case, settings, http_client),
            methods=["POST"],
            name=use_case.name,
            summary=f"Run the `{use_case.name}` AI use case",
        )
        app.add_api_route(
            f"/{use_case.slug}",
            _preflight,
            methods=["OPTIONS"],
            name=f"{use_case.name}_preflight",
            include_in_schema=False,
        )

    @app.post(
        "/parse-document",
        summary="Extract plain text from an uploaded resume or job description",
        description="Accepts a .txt, .pdf or .docx upload (multipart field `file`) and returns `{text}`.",
    )
    async def parse_document(file: Optional[UploadFile] = File(default=None)) -> JSONResponse:
        if file is None or not file.filename:
            return JSONResponse(status_code=400, content={"error": "No file provided"})

        contents = await file.read()
        try:
            text = await run_in_threadpool(
                _extract_uploaded_text, document_extractor, file.filename, contents
            )
        except FileNotSupportedError:
            return JSONResponse(status_code=400, content={"error": UNSUPPORTED_FILE_MESSAGE})
        except FileTooLargeError:
            return JSONResponse(
                status_code=400,
                content={"error": f"File too large. Max allowed size is {GATEWAY_DEFAULTS.MAX_FILE_SIZE_MB} MB."},
            )
        except FileEmptyError as e:
            return JSONResponse(status_code=400, content={"error": str(e)})
        except DocumentError as e:
            logger.warning(f"Unreadable upload `{file.filename}`: {e}")
            return JSONResponse(status_code=400, content={"error": UNREADABLE_FILE_MESSAGE})
        except Exception:
            logger.exception(f"Error processing file `{file.filename}`")
            return JSONResponse(status_code=500, content={"error": FAILED_FILE_MESSAGE})

        return JSONResponse(status_code=200, content={"text": text})

    @app.options("/parse-document", include_in_schema=False)
    async def parse_document_preflight() -> Response:
        return await _preflight()

    return app


def _use_case_endpoint(
    use_case: UseCase,
    settings: GatewaySettings,
    http_client: Optional[httpx.Client],
) -> Callable:
    """POST handler for one use case. A fresh adapter serves every request."""

    async def endpoint(request: Request) -> JSONResponse:
        try:
            payload = await request.json()
        except ValueError:
            # Undecodable bodies are reported by the validator like any non-object body
            payload = None

        adapter = GatewayAdapter(use_case, settings, http_client=http_client)
        response = await run_in_threadpool(adapter.handle, payload)
        try:
            return JSONResponse(status_code=response.status_code, content=response.body)
        except (TypeError, ValueError):
            # Rendering failed; still answer with a JSON error the middleware can decorate
            logger.exception(f"Could not serialize `{use_case.name}` response")
            return JSONResponse(status_code=500, content={"error": UNEXPECTED_MESSAGE})

    endpoint.__name__ = f"{use_case.name}_endpoint"
    return endpoint


async def _preflight() -> Response:
    return Response(status_code=200)


def _extract_uploaded_text(
    document_extractor: DocumentTextExtractor,
    filename: str,
    contents: bytes,
) -> str:
    """Write the upload to a temp file (the parsers read from disk) and extract its text."""
    with tempfile.TemporaryDirectory() as temp_dir:
        temp_path = os.path.join(temp_dir, os.path.basename(filename))
        with open(temp_path, "wb") as f:
            f.write(contents)
        return document_extractor.extract_text(temp_path)


app = create_app()
