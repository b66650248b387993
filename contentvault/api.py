"""FastAPI REST API for the content extraction pipeline.

Provides endpoints for:
- Health checks
- Extracting an article from a URL, or from HTML the client already fetched

Run with:  uvicorn contentvault.api:app --host 0.0.0.0 --port 8000
"""

from __future__ import annotations

from typing import Any, Optional

import structlog
from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field, field_validator
from starlette.concurrency import run_in_threadpool

from contentvault.config import validate_http_url
from contentvault.errors import ExtractionError, RetrievalError
from contentvault.logger import setup_logging
from contentvault.service import ExtractionService

# ── setup ─────────────────────────────────────────────────────────────

setup_logging()
logger = structlog.get_logger(__name__)

app = FastAPI(
    title="Content Vault Extraction API",
    description="Extract the original article text, images and tags from web pages.",
    version="1.0.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

service = ExtractionService()


# ── models ────────────────────────────────────────────────────────────

class ExtractRequest(BaseModel):
    """Request body for an extraction."""
    url: str = Field(..., description="Source URL of the page.")
    html: Optional[str] = Field(
        default=None,
        description="Raw HTML of the page. When omitted the server fetches the URL.",
    )

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        return validate_http_url(v)


# ── endpoints ─────────────────────────────────────────────────────────

@app.get("/", tags=["Health"])
async def root():
    """Health check."""
    return {
        "service": "Content Vault Extraction API",
        "status": "running",
        "version": "1.0.0",
        "docs": "/docs",
    }


@app.post("/api/extract", tags=["Extract"])
async def extract(request: ExtractRequest) -> dict[str, Any]:
    """Extract the main article from a page.

    Failures return 422 with the diagnostic message, or 502 when the page
    could not be retrieved at all.
    """
    try:
        if request.html is not None:
            result = await run_in_threadpool(service.extract_html, request.html, request.url)
        else:
            result = await service.extract_url_async(request.url)
    except ExtractionError as exc:
        logger.warning("api_extraction_failed", url=request.url, error=exc.message)
        raise HTTPException(status_code=422, detail=exc.diagnostic)
    except RetrievalError as exc:
        logger.warning("api_retrieval_failed", url=request.url, attempts=exc.attempts)
        raise HTTPException(status_code=502, detail=str(exc))

    return result.to_dict()
