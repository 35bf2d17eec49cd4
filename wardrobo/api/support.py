"""
Build information endpoint.
"""
from __future__ import annotations

import os

from fastapi import APIRouter

from wardrobo import __version__

SERVICE_NAME = "wardrobo"

router = APIRouter(tags=["support"])


@router.get("/build-info")
def get_build_info():
    """Return build and deployment information for the running service."""
    return {
        "build_sha": os.getenv("BUILD_SHA") or None,
        "build_timestamp": os.getenv("BUILD_TIMESTAMP") or None,
        "image_tag": os.getenv("IMAGE_TAG") or None,
        "service_name": SERVICE_NAME,
        "version": os.getenv("VERSION", __version__),
    }
