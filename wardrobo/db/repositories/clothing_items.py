"""
Clothing item repository functions.

Implements catalog listing with filters and pagination, single-item lookup,
and item creation together with its images.
"""
from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from sqlalchemy.orm import Session, selectinload

from wardrobo.db import models, schemas
from wardrobo.db.database import dialect_name
from wardrobo.db.filters import CatalogFilter, apply_catalog_filter
from wardrobo.utils.pagination import page_offset

logger = logging.getLogger(__name__)


def list_clothing_items(
    db: Session,
    catalog_filter: Optional[CatalogFilter] = None,
    *,
    page: int = 1,
    per_page: int = 12,
) -> Tuple[List[models.ClothingItem], int]:
    """Return one page of items (newest first) and the total match count.

    Both statements run on the same session, inside the transaction it
    opened for the first one.
    """
    base = apply_catalog_filter(db.query(models.ClothingItem), catalog_filter, dialect_name(db))

    total = base.order_by(None).count()
    items = (
        base.options(selectinload(models.ClothingItem.images))
        .order_by(models.ClothingItem.created_at.desc(), models.ClothingItem.id.desc())
        .offset(page_offset(page, per_page))
        .limit(per_page)
        .all()
    )
    return items, total


def get_clothing_item(db: Session, item_id: int) -> Optional[models.ClothingItem]:
    return (
        db.query(models.ClothingItem)
        .options(selectinload(models.ClothingItem.images))
        .filter(models.ClothingItem.id == item_id)
        .first()
    )


def create_clothing_item(db: Session, item: schemas.ClothingItemCreate) -> models.ClothingItem:
    db_item = models.ClothingItem(
        name=item.name,
        category=item.category.value,
        description=item.description,
        price=item.price,
        primary_color=item.primary_color,
        colors=list(item.colors),
        sizes=[size.value for size in item.sizes],
        materials=list(item.materials),
        brand=item.brand,
        fit_notes=item.fit_notes,
        image_url=item.image_url,
        metadata_col=item.metadata_col,
        owner_id=item.owner_id,
    )
    for image in item.images:
        db_item.images.append(
            models.Image(url=image.url, alt_text=image.alt_text, is_primary=image.is_primary)
        )
    db.add(db_item)
    try:
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(db_item)
    logger.info("clothing_item_created: id=%s category=%s images=%d", db_item.id, db_item.category, len(db_item.images))
    return db_item


def delete_clothing_items(db: Session) -> int:
    """Remove every clothing item (images cascade). Returns the number deleted."""
    items = db.query(models.ClothingItem).all()
    for db_item in items:
        db.delete(db_item)
    db.commit()
    return len(items)
