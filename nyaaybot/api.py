"""FastAPI server for NyaayBot document analysis."""

import asyncio
import logging
from typing import Optional

from fastapi import Depends, FastAPI, File, Form, Request, Response, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from nyaaybot import __version__
from nyaaybot.config import Settings
from nyaaybot.exceptions import BatchValidationError
from nyaaybot.models import UploadedFile
from nyaaybot.pipeline import CaseAnalysisPipeline
from nyaaybot.rate_limiter import RateLimiter

logger = logging.getLogger(__name__)

MAX_UPLOAD_BYTES = 20 * 1024 * 1024  # 20 MB per file

# ------------------------------------------------------------------
# Configuration from environment
# ------------------------------------------------------------------

settings = Settings.from_env()

NYAAYBOT_API_KEY = settings.api_key

rate_limiter = RateLimiter(max_requests=settings.rate_limit, window_seconds=3600)

ANONYMOUS_CLIENT = "anonymous"

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
}


class ApiError(Exception):
    """An HTTP failure rendered as ``{"error": ..., "details": ...}``."""

    def __init__(self, status_code: int, error: str, details: Optional[str] = None,
                 headers: Optional[dict[str, str]] = None):
        super().__init__(error)
        self.status_code = status_code
        self.error = error
        self.details = details
        self.headers = headers

    def to_content(self) -> dict:
        content = {"error": self.error}
        if self.details is not None:
            content["details"] = self.details
        return content

# ------------------------------------------------------------------
# Client identification and throttling
# ------------------------------------------------------------------

async def verify_api_key(request: Request) -> str:
    """Identify the caller by its X-API-Key header.

    With no NYAAYBOT_API_KEY configured the endpoint is open and every
    caller shares the anonymous quota.
    """
    if not NYAAYBOT_API_KEY:
        return ANONYMOUS_CLIENT

    presented = request.headers.get("X-API-Key")
    if not presented:
        raise ApiError(401, "missing_api_key", "Send your key in the X-API-Key header.")
    if presented != NYAAYBOT_API_KEY:
        raise ApiError(401, "invalid_api_key", "The X-API-Key header does not match.")
    return presented


def charge_quota(client: str, response: Response) -> None:
    """Charge one analysis against the caller's hourly quota."""
    if not rate_limiter.is_allowed(client):
        wait = rate_limiter.retry_after(client)
        logger.warning("Analysis quota exhausted for client; retry in %ss", wait)
        raise ApiError(
            429,
            "rate_limit_exceeded",
            f"Hourly analysis quota used up. Retry in {wait} seconds.",
            headers={"Retry-After": str(wait)} if wait else None,
        )
    response.headers["X-RateLimit-Remaining"] = str(rate_limiter.remaining(client))


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)
        response.headers.update(SECURITY_HEADERS)
        return response

# ------------------------------------------------------------------
# App setup
# ------------------------------------------------------------------

app = FastAPI(
    title="NyaayBot API",
    description="Legal document extraction, narrative analysis, and case metrics.",
    version=__version__,
)

app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(ApiError)
async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_content(), headers=exc.headers)


# ------------------------------------------------------------------
# Endpoints
# ------------------------------------------------------------------

@app.get("/api/health")
async def health() -> dict:
    """Health check."""
    return {"status": "ok"}


@app.post("/api/analyze")
async def analyze(
    response: Response,
    files: Optional[list[UploadFile]] = File(None),
    jurisdiction: Optional[str] = Form(None),
    client: str = Depends(verify_api_key),
):
    """Upload one or more documents and receive an analysis with case stats.

    Per-file extraction failures do not fail the request; they show up
    in that file's preview. Only an empty upload is rejected, and it is
    not charged against the caller's quota.
    """
    if not files:
        raise ApiError(400, "No files provided")
    charge_quota(client, response)

    uploads: list[UploadedFile] = []
    for upload in files:
        contents = await upload.read()
        if len(contents) > MAX_UPLOAD_BYTES:
            raise ApiError(
                413,
                "file_too_large",
                f"{upload.filename} exceeds {MAX_UPLOAD_BYTES // (1024 * 1024)}MB limit.",
            )
        uploads.append(UploadedFile(
            name=upload.filename or "",
            mime_type=upload.content_type or "",
            data=contents,
        ))

    try:
        pipeline = CaseAnalysisPipeline(settings=settings)
        # OCR and the model call block for seconds; keep the event loop free
        result = await asyncio.to_thread(pipeline.run, uploads, jurisdiction)
    except BatchValidationError as e:
        raise ApiError(400, "No files provided") from e
    except Exception as e:
        logger.exception("Analysis failed for %d uploaded file(s)", len(uploads))
        raise ApiError(500, "Failed to analyze documents", str(e)) from e
    return result.to_dict()


# ------------------------------------------------------------------
# Runner — python -m nyaaybot.api
# ------------------------------------------------------------------

def run_server() -> None:
    """Start the uvicorn server."""
    import uvicorn
    uvicorn.run("nyaaybot.api:app", host="0.0.0.0", port=8000, reload=True)


if __name__ == "__main__":
    run_server()
