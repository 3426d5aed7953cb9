"""FastAPI application exposing the tools and prompts over HTTP.

Endpoints:
- GET /health - Health check for load balancers and monitoring
- GET /tools, GET /prompts - What this service offers
- POST /tools/get_gke_release_notes - Filtered GKE release notes
- POST /tools/get_k8s_changelog - Filtered Kubernetes changelog
- POST /prompts/gke:upgraderiskreport - Rendered upgrade risk report prompt
- POST /extract/release-notes, POST /extract/changelog - Run an extractor
  on a document supplied in the request body

To run locally:
    uvicorn gke_upgrade_risk.main:app --reload --port 8000

Then visit http://localhost:8000/docs for the interactive API docs.
"""

from __future__ import annotations

import time
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from gke_upgrade_risk import __version__
from gke_upgrade_risk.config import get_app_config
from gke_upgrade_risk.context.fetcher import HttpDocumentFetcher
from gke_upgrade_risk.extractors.changelog import filter_changelog
from gke_upgrade_risk.extractors.release_notes import extract_release_notes_html
from gke_upgrade_risk.logging_config import get_logger, setup_logging
from gke_upgrade_risk.prompts.upgrade_risk_report import (
    PROMPT_NAME,
    UPGRADE_RISK_REPORT_PROMPT,
    build_upgrade_risk_report_prompt,
)
from gke_upgrade_risk.schemas import (
    ChangelogDocument,
    K8sChangelogArgs,
    PromptResult,
    PromptSpec,
    ReleaseNotesDocument,
    ToolResult,
    ToolSpec,
    UpgradeRiskReportArgs,
)
from gke_upgrade_risk.tools import TOOLS, get_gke_release_notes, get_k8s_changelog

logger = get_logger(__name__)


# ---------------------------------------------------------------------------
# Application Lifespan (startup/shutdown)
# ---------------------------------------------------------------------------


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Build the config and the fetcher once at startup."""
    setup_logging()
    config = get_app_config()
    app.state.config = config
    app.state.fetcher = HttpDocumentFetcher(timeout=config.sources.timeout_seconds)
    yield


# ---------------------------------------------------------------------------
# FastAPI App
# ---------------------------------------------------------------------------

app = FastAPI(
    title="GKE Upgrade Risk",
    description="Upgrade-relevant GKE release notes, Kubernetes changelogs and report prompts",
    version=__version__,
    lifespan=lifespan,
)


class LoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request, call_next):
        start = time.time()
        response = await call_next(request)
        logger.info(
            "request_handled",
            method=request.method,
            path=request.url.path,
            status=response.status_code,
            duration_s=round(time.time() - start, 3),
        )
        return response


app.add_middleware(LoggingMiddleware)


# ---------------------------------------------------------------------------
# Error Handling
# ---------------------------------------------------------------------------


@app.exception_handler(ValueError)
async def value_error_handler(request: Request, exc: ValueError) -> JSONResponse:
    """Invalid tool or prompt arguments."""
    return JSONResponse(
        status_code=422,
        content={"error": "validation_error", "detail": str(exc)},
    )


@app.exception_handler(httpx.HTTPError)
async def upstream_error_handler(request: Request, exc: httpx.HTTPError) -> JSONResponse:
    """The release notes or changelog source could not be fetched."""
    return JSONResponse(
        status_code=502,
        content={"error": "upstream_error", "detail": str(exc)},
    )


@app.exception_handler(Exception)
async def general_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("unhandled_error", path=request.url.path, error=str(exc), exc_info=True)
    return JSONResponse(
        status_code=500,
        content={"error": "internal_error"},
    )


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------


@app.get("/health")
async def health_check() -> dict[str, str]:
    return {"status": "healthy"}


@app.get("/tools", response_model=list[ToolSpec])
async def list_tools() -> list[ToolSpec]:
    return list(TOOLS)


@app.get("/prompts", response_model=list[PromptSpec])
async def list_prompts() -> list[PromptSpec]:
    return [UPGRADE_RISK_REPORT_PROMPT]


@app.post("/tools/get_gke_release_notes", response_model=ToolResult)
async def gke_release_notes(request: Request) -> ToolResult:
    """Fetch the GKE release notes without version and security listings."""
    return await get_gke_release_notes(request.app.state.fetcher, request.app.state.config)


@app.post("/tools/get_k8s_changelog", response_model=ToolResult)
async def k8s_changelog(args: K8sChangelogArgs, request: Request) -> ToolResult:
    """Fetch a Kubernetes minor version changelog, changes only."""
    return await get_k8s_changelog(
        args, request.app.state.fetcher, request.app.state.config
    )


@app.post(f"/prompts/{PROMPT_NAME}", response_model=PromptResult)
async def upgrade_risk_report(args: UpgradeRiskReportArgs) -> PromptResult:
    return build_upgrade_risk_report_prompt(args)


@app.post("/extract/release-notes", response_model=ToolResult)
def extract_release_notes(document: ReleaseNotesDocument, request: Request) -> ToolResult:
    """Run the release notes extractor on markup supplied by the caller.

    Runs in Starlette's threadpool, off the event loop.
    """
    rules = request.app.state.config.release_notes
    return ToolResult(text=extract_release_notes_html(document.html, rules))


@app.post("/extract/changelog", response_model=ToolResult)
def extract_changelog(document: ChangelogDocument, request: Request) -> ToolResult:
    """Run the changelog filter on text supplied by the caller."""
    rules = request.app.state.config.changelog
    return ToolResult(text=filter_changelog(document.text, rules))
