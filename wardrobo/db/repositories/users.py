"""
User repository functions.

Owner lookups for catalog items, keyed by normalized email.
"""
from __future__ import annotations

from typing import Optional

from sqlalchemy.orm import Session

from wardrobo.db import models


def normalize_email(email: Optional[str]) -> Optional[str]:
    if not email:
        return None
    return email.strip().lower() or None


def get_user_by_email(db: Session, email: str) -> Optional[models.User]:
    return db.query(models.User).filter(models.User.email == normalize_email(email)).first()


def get_or_create_user(db: Session, email: str, name: Optional[str] = None) -> models.User:
    email = normalize_email(email)
    user = db.query(models.User).filter(models.User.email == email).first()
    if user:
        return user
    user = models.User(email=email, name=name or email.split("@")[0])
    db.add(user)
    db.commit()
    db.refresh(user)
    return user
