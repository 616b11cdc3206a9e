"""
AI Governance Engine — FastAPI Application Entry Point

POST /run-assessment     → LLM-backed compliance assessment
POST /generate-document  → governance document generation
GET  /health             → health check
GET  /docs               → OpenAPI / Swagger UI
"""
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from prometheus_client import make_asgi_app
from starlette.exceptions import HTTPException as StarletteHTTPException

from governance_engine.api.assessment_endpoint import router as assessment_router
from governance_engine.api.document_endpoint import router as document_router
from governance_engine.core.config import get_settings
from governance_engine.core.errors import GovernanceError

structlog.configure(
    processors=[
        structlog.contextvars.merge_contextvars,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.ConsoleRenderer() if get_settings().app_env == "development"
        else structlog.processors.JSONRenderer(),
    ],
    wrapper_class=structlog.make_filtering_bound_logger(get_settings().log_level),
)
logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    logger.info(
        "governance_engine_starting",
        version=settings.app_version,
        llm_model=settings.llm_model,
        llm_key_configured=bool(settings.llm_api_key),
    )
    yield
    logger.info("governance_engine_shutting_down")


app = FastAPI(
    title="AI Governance Engine",
    description="Assessment and document generation pipeline for the AI governance dashboard",
    version=get_settings().app_version,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# ── CORS (dashboard) ──
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # tighten in production
    allow_methods=["POST", "GET", "OPTIONS"],
    allow_headers=["authorization", "x-client-info", "apikey", "content-type"],
)

# ── Prometheus metrics ──
metrics_app = make_asgi_app()
app.mount("/metrics", metrics_app)

# ── Routes ──
app.include_router(assessment_router)
app.include_router(document_router)


# ── Error bodies: always {"error": ..., "details"?: ...} ──

@app.exception_handler(GovernanceError)
async def governance_error_handler(request: Request, exc: GovernanceError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("request_failed", path=request.url.path, error_type=type(exc).__name__, error=exc.message)
    body = {"error": exc.public_message}
    if exc.expose and exc.details is not None:
        body["details"] = exc.details
    return JSONResponse(status_code=exc.status_code, content=body)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg"), "type": err.get("type")}
        for err in exc.errors()
    ]
    logger.info("request_rejected", path=request.url.path, issues=len(details))
    return JSONResponse(
        status_code=400,
        content={"error": "Invalid request parameters", "details": details},
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


@app.get("/health", tags=["health"])
async def health():
    settings = get_settings()
    return {"status": "ok", "service": settings.app_name, "version": settings.app_version}


@app.get("/", include_in_schema=False)
async def root():
    return {
        "service": get_settings().app_name,
        "version": get_settings().app_version,
        "docs": "/docs",
        "run_assessment": "POST /run-assessment",
        "generate_document": "POST /generate-document",
    }
