"""
App assembly entry point.

Re-exports the FastAPI `app` from `wardrobo.api.main` for `uvicorn app:app`.
"""

from wardrobo.api.main import app  # noqa: F401
