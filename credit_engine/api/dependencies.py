"""Dependency injection for FastAPI endpoints"""

from typing import Optional
from fastapi import Depends, Request
from sqlalchemy.orm import Session
from credit_engine.config import settings
from credit_engine.infrastructure.database.repositories import ProfileStore
from credit_engine.infrastructure.database.session import get_db


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_caller_id(request: Request) -> Optional[str]:
    """Authenticated user id forwarded by the identity provider, if any"""
    caller_id = request.headers.get(settings.caller_id_header, "").strip()
    return caller_id or None


def get_profile_store(db: Session = Depends(get_db)) -> ProfileStore:
    """Provide the profile store adapter bound to the request's session"""
    return ProfileStore(db)
