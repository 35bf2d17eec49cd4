"""
Clothing catalog vocabulary.

Centralized definitions for garment categories and sizes to eliminate
string literals scattered across the codebase.
"""

from enum import Enum
from typing import FrozenSet, Optional

# Canonical category values stored in the database
CATEGORY_TOP = "TOP"
CATEGORY_BOTTOM = "BOTTOM"
CATEGORY_OUTERWEAR = "OUTERWEAR"
CATEGORY_FOOTWEAR = "FOOTWEAR"
CATEGORY_ACCESSORY = "ACCESSORY"
CATEGORY_DRESS = "DRESS"

ALL_CATEGORIES: FrozenSet[str] = frozenset({
    CATEGORY_TOP,
    CATEGORY_BOTTOM,
    CATEGORY_OUTERWEAR,
    CATEGORY_FOOTWEAR,
    CATEGORY_ACCESSORY,
    CATEGORY_DRESS,
})


class ClothingCategory(str, Enum):
    """Enum for garment categories used in schemas and validation."""
    TOP = CATEGORY_TOP
    BOTTOM = CATEGORY_BOTTOM
    OUTERWEAR = CATEGORY_OUTERWEAR
    FOOTWEAR = CATEGORY_FOOTWEAR
    ACCESSORY = CATEGORY_ACCESSORY
    DRESS = CATEGORY_DRESS


class ClothingSize(str, Enum):
    XS = "XS"
    S = "S"
    M = "M"
    L = "L"
    XL = "XL"
    XXL = "XXL"


def is_valid_category(category: str) -> bool:
    """Return True if the provided category is one of the supported values."""
    return category in ALL_CATEGORIES


def normalize_category(value: Optional[str]) -> Optional[str]:
    """Upper-case ``value`` and return it only when it names a known category."""
    if not value or not isinstance(value, str):
        return None
    upper = value.strip().upper()
    return upper if is_valid_category(upper) else None
