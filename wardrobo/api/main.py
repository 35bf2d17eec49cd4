"""
FastAPI app assembly: logging, middleware, error envelope and router wiring.
"""
import logging
import os

from fastapi import FastAPI
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.requests import Request
from starlette.responses import JSONResponse

from wardrobo import __version__

# Configure logging
LOG_LEVEL_NAME = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_LEVEL = getattr(logging, LOG_LEVEL_NAME, logging.INFO)
logging.basicConfig(level=LOG_LEVEL)
logger = logging.getLogger(__name__)
logger.setLevel(LOG_LEVEL)
logger.info("app_startup: log_level=%s", LOG_LEVEL_NAME)

from wardrobo.api.ai_query import router as ai_query_router
from wardrobo.api.clothes import router as clothes_router
from wardrobo.api.support import router as support_router
from wardrobo.api.upload import router as upload_router
from wardrobo.services.storage import DEFAULT_UPLOAD_DIR, UPLOAD_URL_PREFIX

# Database schema is managed by Alembic migrations.

app = FastAPI(
    title="Wardrobo",
    description="Clothing catalog API with prompt-driven search and photo auto-tagging.",
    version=__version__,
)

# Avoid implicit trailing-slash redirects for predictable URLs
app.router.redirect_slashes = False

_DEFAULT_ORIGINS = "http://localhost,http://localhost:3000,http://localhost:8000"
origins = [o.strip() for o in os.getenv("CORS_ALLOW_ORIGINS", _DEFAULT_ORIGINS).split(",") if o.strip()]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Render every HTTP error as ``{"error": ...}``."""
    detail = exc.detail
    if isinstance(detail, dict) and "error" in detail:
        content = detail
    else:
        content = {"error": detail if isinstance(detail, str) else str(detail)}
    return JSONResponse(content, status_code=exc.status_code, headers=getattr(exc, "headers", None))


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        {"error": "Invalid request", "details": jsonable_encoder(exc.errors())},
        status_code=422,
    )


app.include_router(clothes_router)
app.include_router(ai_query_router)
app.include_router(upload_router)
app.include_router(support_router)

# Locally stored uploads; blob-backed deployments return absolute URLs instead.
app.mount(
    UPLOAD_URL_PREFIX,
    StaticFiles(directory=os.getenv("UPLOAD_DIR", DEFAULT_UPLOAD_DIR), check_dir=False),
    name="uploads",
)


@app.get("/health")
def health_check():
    return {"status": "ok", "service": "wardrobo"}
