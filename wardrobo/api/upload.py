"""
Photo upload endpoint.

Stores the image, optionally runs vision tagging, and creates a catalog item
whose category, colors and feature tokens come from the tagging result.
"""
import logging

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool
from starlette.datastructures import UploadFile
from starlette.requests import Request
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from wardrobo.api.auth import resolve_owner
from wardrobo.api.deps import error_responses
from wardrobo.db import schemas
from wardrobo.db.database import get_db
from wardrobo.db.repositories import clothing_items as repo_items
from wardrobo.services.storage import StorageError, get_image_storage
from wardrobo.services.vision_tagging import derive_item_attributes, get_vision_tagging_service
from wardrobo.utils.feature_flags import vision_tagging_enabled

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["upload"])

MAX_UPLOAD_BYTES = int(4.5 * 1024 * 1024)
ALLOWED_CONTENT_TYPES = frozenset({"image/jpeg", "image/jpg", "image/png", "image/webp"})
DEFAULT_ITEM_NAME = "Untitled Item"


@router.post(
    "/upload",
    response_model=schemas.ClothingItemResponse,
    responses=error_responses(400, 413, 415, 500),
)
async def upload_clothing_item_endpoint(request: Request, db: Session = Depends(get_db)):
    content_type = request.headers.get("content-type") or ""
    if "multipart/form-data" not in content_type:
        raise HTTPException(
            status_code=status.HTTP_415_UNSUPPORTED_MEDIA_TYPE,
            detail="Content-Type must be multipart/form-data",
        )

    form = await request.form()
    upload = form.get("file")
    raw_name = form.get("name")
    name = raw_name if isinstance(raw_name, str) and raw_name else DEFAULT_ITEM_NAME

    if not isinstance(upload, UploadFile):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Missing file")

    data = await upload.read()
    if not data:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Empty file")
    if len(data) > MAX_UPLOAD_BYTES:
        raise HTTPException(status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE, detail="File too large (>4.5MB)")
    file_type = (upload.content_type or "").lower()
    if file_type not in ALLOWED_CONTENT_TYPES:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Unsupported file type")

    try:
        public_url = await run_in_threadpool(get_image_storage().save, upload.filename, data, file_type)
    except StorageError:
        logger.exception("Failed to store uploaded file %r", upload.filename)
        raise HTTPException(status_code=500, detail="Failed to store file")

    vision = {}
    if vision_tagging_enabled():
        vision = await run_in_threadpool(get_vision_tagging_service().analyze, data, file_type, public_url)
    attributes = derive_item_attributes(vision)

    try:
        owner = resolve_owner(db, request.headers)
        item_in = schemas.ClothingItemCreate(
            name=name,
            category=attributes.category,
            primary_color=attributes.primary_color,
            colors=attributes.colors,
            materials=attributes.features,
            image_url=public_url,
            metadata_col=vision or None,
            owner_id=owner.id if owner else None,
            images=[schemas.ImageCreate(url=public_url, alt_text=name, is_primary=True)],
        )
        item = repo_items.create_clothing_item(db, item_in)
    except SQLAlchemyError as exc:
        logger.exception("Failed to create clothing item for upload %s", public_url)
        return JSONResponse(status_code=500, content={"error": "Upload failed", "details": str(exc)})

    return {"data": schemas.ClothingItem.model_validate(item, from_attributes=True)}
