"""
Domain-split Pydantic schemas.

Re-exports every schema from one import path.
"""

from .clothing import (
    ImageBase,
    ImageCreate,
    Image,
    ClothingItemBase,
    ClothingItemCreate,
    ClothingItem,
    PaginationMeta,
    PaginatedClothingItems,
    ClothingItemResponse,
    ErrorResponse,
)

__all__ = [
    "ImageBase",
    "ImageCreate",
    "Image",
    "ClothingItemBase",
    "ClothingItemCreate",
    "ClothingItem",
    "PaginationMeta",
    "PaginatedClothingItems",
    "ClothingItemResponse",
    "ErrorResponse",
]
