"""
Catalog filter construction.

Translates request query parameters or an AI filter extraction into
SQLAlchemy WHERE clauses over `ClothingItem`.
"""
from __future__ import annotations

import json
from dataclasses import dataclass
from typing import List, Optional, TYPE_CHECKING

from sqlalchemy import Text, and_, any_, cast, func, literal, or_
from sqlalchemy.orm import Query

from wardrobo.db import models
from wardrobo.utils.catalog import CATEGORY_TOP, normalize_category
from wardrobo.utils.tags import LEGACY_STRIPED_TOKEN, search_tag_tokens

if TYPE_CHECKING:  # pragma: no cover
    from wardrobo.services.filter_extraction import FilterExtraction


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _contains_ci(column, value: str):
    """Case-insensitive substring match."""
    return column.ilike(f"%{_escape_like(value)}%", escape="\\")


def array_contains(column, value: str, dialect_name: str):
    """``value`` is an element of the string-array ``column``.

    PostgreSQL stores TEXT[] so ``= ANY`` applies; other dialects hold the list
    as JSON text, matched on the quoted element.
    """
    if dialect_name == "postgresql":
        return literal(value, type_=Text) == any_(column)
    needle = json.dumps(value)
    return cast(column, Text).like(f"%{_escape_like(needle)}%", escape="\\")


@dataclass
class CatalogFilter:
    category: Optional[str] = None
    color: Optional[str] = None
    search: Optional[str] = None
    brand: Optional[str] = None
    price_min: Optional[float] = None
    price_max: Optional[float] = None
    # When false, search only matches text fields and the legacy striped token.
    expand_search_tags: bool = False

    @classmethod
    def from_query_params(
        cls,
        category: Optional[str] = None,
        color: Optional[str] = None,
        search: Optional[str] = None,
    ) -> "CatalogFilter":
        """Filters for ``GET /api/clothes``; unknown categories are ignored."""
        return cls(
            category=normalize_category(category),
            color=color.lower() if color else None,
            search=(search or "").strip() or None,
        )

    @classmethod
    def from_extraction(
        cls,
        extraction: "FilterExtraction",
        seed_category: Optional[str] = None,
        seed_color: Optional[str] = None,
    ) -> "CatalogFilter":
        """Filters for an AI query.

        A seed value from the request wins over the extracted one whenever it is
        present, so an explicit empty seed turns that filter off. The search
        phrase only applies when no color filter is active and is expanded onto
        vision feature tokens.
        """
        category_raw = seed_category if seed_category is not None else extraction.category
        color_raw = seed_color if seed_color is not None else extraction.color
        category = normalize_category(str(category_raw or ""))
        color = str(color_raw or "").lower() or None
        search = (extraction.search or "").strip() or None
        return cls(
            category=category,
            color=color,
            search=None if color else search,
            brand=extraction.brand or None,
            price_min=extraction.price_min,
            price_max=extraction.price_max,
            expand_search_tags=True,
        )

    @property
    def is_empty(self) -> bool:
        return not any([
            self.category,
            self.color,
            self.search,
            self.brand,
            self.price_min is not None,
            self.price_max is not None,
        ])


def build_conditions(catalog_filter: CatalogFilter, dialect_name: str) -> List:
    """Return the list of clauses to AND together for ``catalog_filter``."""
    item = models.ClothingItem
    conditions: List = []

    if catalog_filter.category:
        conditions.append(item.category == catalog_filter.category)

    if catalog_filter.color:
        conditions.append(
            or_(
                func.lower(item.primary_color) == catalog_filter.color,
                array_contains(item.colors, catalog_filter.color, dialect_name),
            )
        )

    if catalog_filter.search:
        query = catalog_filter.search
        or_clauses = [
            _contains_ci(item.name, query),
            _contains_ci(item.description, query),
            _contains_ci(item.brand, query),
        ]
        if catalog_filter.expand_search_tags:
            tokens, include_top = search_tag_tokens(query)
            for token in tokens:
                or_clauses.append(array_contains(item.materials, token, dialect_name))
            if include_top:
                # Older items carry no vision type tokens
                or_clauses.append(item.category == CATEGORY_TOP)
        elif "stripe" in query.lower():
            or_clauses.append(array_contains(item.materials, LEGACY_STRIPED_TOKEN, dialect_name))
        conditions.append(or_(*or_clauses))

    if catalog_filter.brand:
        conditions.append(_contains_ci(item.brand, catalog_filter.brand))

    if catalog_filter.price_min is not None:
        conditions.append(item.price >= catalog_filter.price_min)
    if catalog_filter.price_max is not None:
        conditions.append(item.price <= catalog_filter.price_max)

    return conditions


def apply_catalog_filter(query: Query, catalog_filter: Optional[CatalogFilter], dialect_name: str) -> Query:
    if catalog_filter is None or catalog_filter.is_empty:
        return query
    conditions = build_conditions(catalog_filter, dialect_name)
    if conditions:
        query = query.filter(and_(*conditions))
    return query
