"""
Prompt-driven catalog search.

A language model turns the shopper's free-text prompt into structured filters,
which are then applied to the catalog like any other listing.
"""
import logging

from fastapi import APIRouter, Depends, HTTPException, status
from starlette.concurrency import run_in_threadpool
from starlette.requests import Request
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from wardrobo.api.deps import error_responses, paginated_response
from wardrobo.db import schemas
from wardrobo.db.database import get_db
from wardrobo.db.filters import CatalogFilter
from wardrobo.db.repositories import clothing_items as repo_items
from wardrobo.services.filter_extraction import get_filter_extraction_service
from wardrobo.services.llm_client import LLMError
from wardrobo.utils.feature_flags import llm_features_enabled
from wardrobo.utils.pagination import DEFAULT_PAGE_SIZE, clamp_page_size, coerce_page_number

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/ai", tags=["ai"])


async def _read_json_body(request: Request) -> dict:
    try:
        body = await request.json()
    except ValueError:
        return {}
    return body if isinstance(body, dict) else {}


@router.post(
    "/query",
    response_model=schemas.PaginatedClothingItems,
    responses=error_responses(400, 415, 500, 502, 503),
)
async def ai_query_endpoint(request: Request, db: Session = Depends(get_db)):
    """
    Search the catalog with a natural-language prompt.

    Body: ``{prompt, page?, perPage?, category?, color?}``. ``category`` and
    ``color`` seed the filters and take precedence over what the model
    extracts. A model reply that cannot be parsed searches with no filters.
    """
    content_type = request.headers.get("content-type") or ""
    if "application/json" not in content_type:
        raise HTTPException(
            status_code=status.HTTP_415_UNSUPPORTED_MEDIA_TYPE,
            detail="Content-Type must be application/json",
        )

    body = await _read_json_body(request)
    prompt = body.get("prompt")
    page = coerce_page_number(body.get("page"), 1)
    page_size = clamp_page_size(coerce_page_number(body.get("perPage"), DEFAULT_PAGE_SIZE))

    if not isinstance(prompt, str) or not prompt.strip():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Missing prompt")

    if not llm_features_enabled():
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="LLM features are currently disabled")

    service = get_filter_extraction_service()
    try:
        extraction = await run_in_threadpool(service.extract, prompt)
    except LLMError as exc:
        logger.warning("Filter extraction failed: %s", exc)
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(exc))

    catalog_filter = CatalogFilter.from_extraction(
        extraction,
        seed_category=body.get("category"),
        seed_color=body.get("color"),
    )
    try:
        items, total = await run_in_threadpool(
            repo_items.list_clothing_items, db, catalog_filter, page=page, per_page=page_size
        )
    except SQLAlchemyError:
        logger.exception("Failed to query clothing items for prompt")
        raise HTTPException(status_code=500, detail="Failed to load clothing items")

    logger.info("AI query for %r matched %d items (filter=%s)", prompt, total, catalog_filter)
    return paginated_response(items, total, page, page_size)
