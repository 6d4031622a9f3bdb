"""
FastAPI front end for code vulnerability analysis.

Routes:
- GET/HEAD /      input form
- POST /analyse   analyse the submitted `code` field and render the report
- /static/...     stylesheet and other assets

Anything else answers 404 with a plain-text body.
"""

import logging
from pathlib import Path
from typing import Optional

# Configure logging to show in console
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

from fastapi import FastAPI, Form, Request
from fastapi.responses import FileResponse, HTMLResponse, JSONResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates
from starlette.exceptions import HTTPException as StarletteHTTPException

from api.errors import (
    internal_error_response,
    is_quota_error,
    not_found_response,
    quota_response,
)
from config import AppSettings
from src.agent import VulnerabilityAnalyzer, create_analyzer
from src.models import AnalysisFailed, AnalysisRequest, AnalysisResult

FRONTEND_DIR = Path(__file__).parent.parent / "frontend"

app = FastAPI(
    title="Code Vulnerability Analyzer",
    description="Paste code, get an AI-generated vulnerability report.",
    version="1.0.0"
)

templates = Jinja2Templates(directory=str(FRONTEND_DIR / "templates"))

# Global instances, created on startup
settings: AppSettings = AppSettings()
analyzer: Optional[VulnerabilityAnalyzer] = None


# Startup/Shutdown events
@app.on_event("startup")
async def startup_event():
    """Load configuration and build the API client once per process."""
    global settings, analyzer

    settings = AppSettings.from_env()
    logging.getLogger().setLevel(settings.log_level)

    if not settings.llm.api_key:
        logger.warning("[API] OPENAI_API_KEY is not set; analysis requests will fail")

    analyzer = create_analyzer(settings)
    logger.info(f"[API] Ready. Model: {settings.llm.model}, port: {settings.server.port}")


@app.on_event("shutdown")
async def shutdown_event():
    """Close the API client session."""
    if analyzer is not None:
        analyzer.close()


# ============================================
# Error Handlers
# ============================================

@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    # Unknown paths and unsupported methods look the same to the client
    if exc.status_code in (404, 405):
        return not_found_response()
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail}, headers=exc.headers)


@app.exception_handler(AnalysisFailed)
async def analysis_failed_handler(request: Request, exc: AnalysisFailed):
    logger.error(f"[API] Error occurred: {exc.error.kind.value}")
    logger.error(f"[API] Error message: {exc.error.message}")
    if exc.error.detail:
        logger.error(f"[API] Error detail: {exc.error.detail}")
    return internal_error_response(exc, settings.server.expose_error_details)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(f"[API] Unhandled error on {request.url.path}: {exc}")
    return internal_error_response(exc, settings.server.expose_error_details)


# ============================================
# Routes
# ============================================

@app.api_route("/", methods=["GET", "HEAD"])
async def root():
    """Serve the input form."""
    return FileResponse(FRONTEND_DIR / "index.html")


@app.post("/analyse", response_class=HTMLResponse)
def analyse(request: Request, code: str = Form("")):
    """
    Analyse a submitted code snippet.

    Runs in the worker thread pool: the upstream call and retry delays
    block only this request.
    """
    logger.info("[API] Received request to /analyse")
    submission = AnalysisRequest(code=code)
    logger.info(f"[API] Code: {submission.code}")

    outcome = analyzer.analyze(submission.code)

    if isinstance(outcome, AnalysisResult):
        return templates.TemplateResponse(request, "results.html", {"result": outcome.text})

    logger.error(f"[API] Error in /analyse route: {outcome.message}")
    if is_quota_error(outcome, settings.server.quota_markers):
        return quota_response()
    raise AnalysisFailed(outcome)


# Mount frontend static files
static_path = FRONTEND_DIR / "static"
if static_path.exists():
    app.mount("/static", StaticFiles(directory=str(static_path)), name="static")


if __name__ == "__main__":
    import uvicorn
    server_settings = AppSettings.from_env().server
    uvicorn.run(app, host=server_settings.host, port=server_settings.port)
