"""
HTTP API for CV analysis.

POST /api/analyze takes a multipart body with a `jobDescription` text field
and a `cv` file, and returns the match score and profile summary.
"""

import asyncio
import uuid
from pathlib import Path
from typing import AsyncIterator, Optional

from fastapi import APIRouter, Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger
from starlette.datastructures import UploadFile

from analyzer import AnalyzerError, CVAnalyzer, UnsupportedFileTypeError
from shared.config import Settings, get_settings
from shared.models import AnalysisResult, ErrorResponse

JOB_DESCRIPTION_FIELD = "jobDescription"
CV_FIELD = "cv"

router = APIRouter()


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


async def get_analyzer(
    settings: Settings = Depends(get_settings),
) -> AsyncIterator[CVAnalyzer]:
    """Build a CVAnalyzer for one request and release its HTTP client afterwards."""
    analyzer = CVAnalyzer(settings=settings)
    try:
        yield analyzer
    finally:
        await analyzer.completion_client.close()


def save_upload(data: bytes, filename: Optional[str], upload_dir: Path) -> Path:
    """Write an upload under a unique name that keeps the original extension."""
    upload_dir.mkdir(parents=True, exist_ok=True)
    suffix = Path(filename or "").suffix.lower()
    path = upload_dir / f"{uuid.uuid4().hex}{suffix}"
    path.write_bytes(data)
    return path


@router.get("/health", tags=["health"])
def health_check(settings: Settings = Depends(get_settings)) -> dict:
    """Simple health check endpoint."""
    return {"status": "ok", "app": settings.app_name}


@router.post(
    "/api/analyze",
    response_model=AnalysisResult,
    responses={
        400: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
        502: {"model": ErrorResponse},
    },
    tags=["api"],
)
async def analyze_cv(
    request: Request,
    analyzer: CVAnalyzer = Depends(get_analyzer),
    settings: Settings = Depends(get_settings),
):
    """Score an uploaded CV against a job description."""
    try:
        form = await request.form()
    except Exception as e:
        logger.error(f"Multipart parse failed: {e}")
        return error_response(500, "File parse error")

    try:
        job_description = form.get(JOB_DESCRIPTION_FIELD)
        cv = form.get(CV_FIELD)

        if not isinstance(job_description, str):
            return error_response(400, f"Missing field: {JOB_DESCRIPTION_FIELD}")
        if not isinstance(cv, UploadFile):
            return error_response(400, f"Missing field: {CV_FIELD}")

        if not analyzer.supports(cv.content_type):
            logger.warning(f"Rejected {cv.filename}: unsupported type {cv.content_type}")
            raise UnsupportedFileTypeError(str(cv.content_type))

        data = await cv.read()
        path = await asyncio.to_thread(save_upload, data, cv.filename, settings.upload_dir)
        logger.info(f"Analyzing {cv.filename} ({cv.content_type}, {len(data)} bytes) -> {path}")

        result = await analyzer.analyze(data, cv.content_type, job_description)
        return result

    except AnalyzerError as e:
        return error_response(e.status_code, e.message)
    except Exception as e:
        logger.exception(f"Analysis failed: {e}")
        return error_response(500, "Internal server error")
    finally:
        await form.close()


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Create the FastAPI application.

    Settings passed in here are the ones every route resolves; without them
    the environment is read when the app is built.
    """
    settings = settings or get_settings()
    app = FastAPI(title=settings.app_name)
    app.state.settings = settings
    app.dependency_overrides[get_settings] = lambda: settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.include_router(router)
    return app

