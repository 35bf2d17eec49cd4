"""
Catalog browsing endpoints.

Paginated listing with category, color and keyword filters, plus single
item lookup.
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from wardrobo.api.deps import error_responses, paginated_response
from wardrobo.db import schemas
from wardrobo.db.database import get_db
from wardrobo.db.filters import CatalogFilter
from wardrobo.db.repositories import clothing_items as repo_items
from wardrobo.utils.pagination import DEFAULT_PAGE_SIZE, clamp_page_size, parse_positive_int

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/clothes", tags=["clothes"])


@router.get("", response_model=schemas.PaginatedClothingItems, responses=error_responses(500))
def list_clothes_endpoint(
    page: Optional[str] = None,
    per_page: Optional[str] = Query(default=None, alias="perPage"),
    category: Optional[str] = None,
    color: Optional[str] = None,
    search: Optional[str] = None,
    q: Optional[str] = None,
    db: Session = Depends(get_db),
):
    """
    List clothing items, newest first.

    Query parameters are lenient: invalid page numbers fall back to defaults
    and unknown categories are ignored rather than rejected.
    """
    page_num = parse_positive_int(page, 1)
    page_size = clamp_page_size(parse_positive_int(per_page, DEFAULT_PAGE_SIZE))
    catalog_filter = CatalogFilter.from_query_params(
        category=category,
        color=color,
        search=search if search is not None else q,
    )
    try:
        items, total = repo_items.list_clothing_items(db, catalog_filter, page=page_num, per_page=page_size)
    except SQLAlchemyError:
        logger.exception("Failed to list clothing items")
        raise HTTPException(status_code=500, detail="Failed to load clothing items")
    return paginated_response(items, total, page_num, page_size)


@router.get("/{item_id}", response_model=schemas.ClothingItemResponse, responses=error_responses(404))
def get_clothing_item_endpoint(item_id: int, db: Session = Depends(get_db)):
    item = repo_items.get_clothing_item(db, item_id)
    if not item:
        raise HTTPException(status_code=404, detail="Clothing item not found")
    return {"data": schemas.ClothingItem.model_validate(item, from_attributes=True)}
