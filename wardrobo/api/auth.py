"""
Identity resolution from proxy headers.

oauth2-proxy forwards the signed-in user as ``X-Auth-Request-*`` (or
``X-Forwarded-*``) headers. Anonymous requests are allowed; identity is only
used to attribute ownership of uploaded items.
"""
from typing import Mapping, Optional, Tuple

from sqlalchemy.orm import Session

from wardrobo.db import models
from wardrobo.db.repositories import users as repo_users


def resolve_identity_from_headers(headers: Mapping[str, str]) -> Tuple[Optional[str], Optional[str]]:
    user = headers.get("x-auth-request-user") or headers.get("x-forwarded-user")
    email = repo_users.normalize_email(
        headers.get("x-auth-request-email") or headers.get("x-forwarded-email")
    )
    return user, email


def resolve_owner(db: Session, headers: Mapping[str, str]) -> Optional[models.User]:
    """Upsert the user named by the proxy headers, or None for anonymous requests."""
    name, email = resolve_identity_from_headers(headers)
    if not email:
        return None
    return repo_users.get_or_create_user(db, email=email, name=name)
