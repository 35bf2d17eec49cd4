"""
Shared helpers for catalog endpoints.
"""
from typing import List, Sequence

from wardrobo.db import models, schemas
from wardrobo.utils.pagination import total_pages


def serialize_items(items: Sequence[models.ClothingItem]) -> List[schemas.ClothingItem]:
    return [schemas.ClothingItem.model_validate(item, from_attributes=True) for item in items]


def paginated_response(
    items: Sequence[models.ClothingItem],
    total: int,
    page: int,
    per_page: int,
) -> schemas.PaginatedClothingItems:
    return schemas.PaginatedClothingItems(
        data=serialize_items(items),
        meta=schemas.PaginationMeta(
            page=page,
            per_page=per_page,
            total=total,
            total_pages=total_pages(total, per_page),
        ),
    )


def error_responses(*status_codes: int) -> dict:
    """OpenAPI ``responses`` entries documenting the ``{error}`` body."""
    return {code: {"model": schemas.ErrorResponse} for code in status_codes}
