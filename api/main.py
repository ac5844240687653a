"""FastAPI service for the bias checker.

Run with::

    uvicorn api.main:app --reload

Endpoints
---------
POST /analyze   -- Bias analysis with highlighted spans (advisory)
POST /toxicity  -- Toxicity verdict (blocking)
POST /review    -- Composer check: toxicity gate, then bias analysis
GET  /patterns  -- Active bias and toxicity rules
GET  /health    -- Health check
"""

from __future__ import annotations

import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from bias_checker.bias_scorer import BiasAnalysisResult, BiasScorer, bias_level
from bias_checker.config import settings
from bias_checker.logging import get_logger, setup_logging
from bias_checker.pipeline import ReviewPipeline, SubmissionReview
from bias_checker.toxicity_gate import ToxicityGate, ToxicityVerdict

logger = get_logger("api")


# ---------------------------------------------------------------------------
# App
# ---------------------------------------------------------------------------

@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    logger.info("Bias checker API starting")
    yield
    logger.info("Bias checker API shutting down")


app = FastAPI(
    title="Bias Checker API",
    description="Detect and analyze biases in textual content.",
    version=settings.APP_VERSION,
    lifespan=lifespan,
)

scorer = BiasScorer()
gate = ToxicityGate()
pipeline = ReviewPipeline(scorer=scorer, gate=gate)

# ---------------------------------------------------------------------------
# Request / Response schemas
# ---------------------------------------------------------------------------


class TextRequest(BaseModel):
    text: str = Field(
        ...,
        max_length=settings.MAX_TEXT_LENGTH,
        description="Text to check.",
    )


class AnalyzeResponse(BiasAnalysisResult):
    bias_level: str


class PatternsResponse(BaseModel):
    bias_rules: list[dict[str, str | int | float]]
    toxicity_rules: list[dict[str, str]]


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str = settings.APP_VERSION


# ---------------------------------------------------------------------------
# Middleware / error handling
# ---------------------------------------------------------------------------


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log every request except health checks with status and duration."""
    path = request.url.path
    if path == "/health":
        return await call_next(request)

    start = time.time()
    response = await call_next(request)
    duration_ms = round((time.time() - start) * 1000, 1)

    logger.info(
        f"{request.method} {path} -> {response.status_code} ({duration_ms}ms)",
        extra={
            "method": request.method,
            "path": path,
            "status_code": response.status_code,
            "duration_ms": duration_ms,
        },
    )
    return response


@app.exception_handler(Exception)
async def global_error_handler(request: Request, exc: Exception):
    logger.error(
        f"Unhandled exception: {type(exc).__name__}",
        extra={"error": str(exc), "path": request.url.path, "method": request.method},
        exc_info=True,
    )
    return JSONResponse(status_code=500, content={"detail": "Internal server error."})


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------


@app.get("/health", response_model=HealthResponse, tags=["system"])
async def health():
    """Health check."""
    return HealthResponse()


@app.post("/analyze", response_model=AnalyzeResponse, tags=["bias"])
async def analyze_text(req: TextRequest):
    """Score text for bias and return highlighted spans."""
    result = scorer.analyze(req.text)
    level = bias_level(result.overall_score)
    logger.info(
        "Analysis complete",
        extra={
            "overall_score": round(result.overall_score, 4),
            "bias_level": level,
            "text_length": len(req.text),
        },
    )
    return AnalyzeResponse(**result.model_dump(), bias_level=level)


@app.post("/toxicity", response_model=ToxicityVerdict, tags=["moderation"])
async def toxicity(req: TextRequest):
    """Decide whether text must be blocked."""
    return gate.check(req.text)


@app.post("/review", response_model=SubmissionReview, tags=["moderation"])
async def review(req: TextRequest):
    """Run the composer check on a pending comment or post."""
    return pipeline.review(req.text)


@app.get("/patterns", response_model=PatternsResponse, tags=["system"])
async def patterns():
    """List the active bias and toxicity rules."""
    return PatternsResponse(
        bias_rules=scorer.registry.list_rules(),
        toxicity_rules=gate.list_rules(),
    )
