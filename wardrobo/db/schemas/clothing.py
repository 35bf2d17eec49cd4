from datetime import datetime
from decimal import Decimal
from typing import Optional, Dict, Any, List
from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from wardrobo.utils.catalog import ClothingCategory, ClothingSize

# camelCase on the wire, snake_case in Python
_CAMEL = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ImageBase(BaseModel):
    model_config = _CAMEL
    url: str
    alt_text: Optional[str] = None
    is_primary: bool = False


class ImageCreate(ImageBase):
    pass


class Image(ImageBase):
    id: int
    item_id: int
    created_at: datetime
    updated_at: datetime
    model_config = ConfigDict(from_attributes=True, alias_generator=to_camel, populate_by_name=True)


class ClothingItemBase(BaseModel):
    model_config = _CAMEL
    name: str
    category: ClothingCategory
    description: Optional[str] = None
    price: Optional[Decimal] = None
    primary_color: Optional[str] = None
    colors: List[str] = []
    sizes: List[ClothingSize] = []
    materials: List[str] = []
    brand: Optional[str] = None
    fit_notes: Optional[str] = None
    image_url: Optional[str] = None
    # ORM attribute is metadata_col; `metadata` is reserved on declarative models
    metadata_col: Optional[Dict[str, Any]] = Field(
        default=None,
        validation_alias=AliasChoices("metadata_col", "metadata"),
        serialization_alias="metadata",
    )
    owner_id: Optional[int] = None


class ClothingItemCreate(ClothingItemBase):
    images: List[ImageCreate] = []


class ClothingItem(ClothingItemBase):
    id: int
    price: Optional[float] = None
    created_at: datetime
    updated_at: datetime
    images: List[Image] = []
    model_config = ConfigDict(from_attributes=True, alias_generator=to_camel, populate_by_name=True)


class PaginationMeta(BaseModel):
    model_config = _CAMEL
    page: int
    per_page: int
    total: int
    total_pages: int


class PaginatedClothingItems(BaseModel):
    data: List[ClothingItem]
    meta: PaginationMeta


class ClothingItemResponse(BaseModel):
    data: ClothingItem


class ErrorResponse(BaseModel):
    error: str
    details: Optional[str] = None
