from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Text,
)
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import relationship
from .base import Base, now_utc
from wardrobo.db.types import StringArray


class ClothingItem(Base):
    __tablename__ = 'clothing_items'
    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String, nullable=False)
    category = Column(String(20), nullable=False)
    description = Column(Text, nullable=True)
    price = Column(Numeric(10, 2), nullable=True)
    primary_color = Column(String, nullable=True)
    colors = Column(StringArray(), nullable=True, default=list)
    sizes = Column(StringArray(), nullable=True, default=list)
    # Materials and canonical feature tokens (type:tshirt, pattern:striped, ...)
    materials = Column(StringArray(), nullable=True, default=list)
    brand = Column(String, nullable=True)
    fit_notes = Column(Text, nullable=True)
    image_url = Column(String, nullable=True)
    metadata_col = Column('metadata', JSONB, nullable=True)
    owner_id = Column(Integer, ForeignKey('users.id', ondelete='SET NULL'), nullable=True)
    created_at = Column(DateTime(timezone=True), default=now_utc)
    updated_at = Column(DateTime(timezone=True), default=now_utc, onupdate=now_utc)

    owner = relationship("User", back_populates="clothing_items")
    images = relationship(
        "Image",
        back_populates="item",
        cascade="all, delete-orphan",
        order_by="[Image.is_primary.desc(), Image.id]",
    )

    __table_args__ = (
        Index('idx_clothing_items_category', 'category'),
        Index('idx_clothing_items_owner_id', 'owner_id'),
        Index('idx_clothing_items_created_at', 'created_at'),
        CheckConstraint(
            "category in ('TOP','BOTTOM','OUTERWEAR','FOOTWEAR','ACCESSORY','DRESS')",
            name='ck_clothing_items_category',
        ),
    )


class Image(Base):
    __tablename__ = 'images'
    id = Column(Integer, primary_key=True, autoincrement=True)
    url = Column(String, nullable=False)
    alt_text = Column(String, nullable=True)
    is_primary = Column(Boolean, nullable=False, default=False)
    item_id = Column(Integer, ForeignKey('clothing_items.id', ondelete='CASCADE'), nullable=False)
    created_at = Column(DateTime(timezone=True), default=now_utc)
    updated_at = Column(DateTime(timezone=True), default=now_utc, onupdate=now_utc)

    item = relationship("ClothingItem", back_populates="images")

    __table_args__ = (
        Index('idx_images_item_id', 'item_id'),
    )
