#!/usr/bin/env python3
"""
FastAPI dependencies for dependency injection.
"""

import logging
from typing import Callable, Generator, Optional
from uuid import UUID

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import jwt, JWTError
from pydantic import BaseModel
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from core.exceptions import AuthorizationException
from database.repositories import PushTokenRepository, DirectoryRepository
from notification.service import PushNotificationService
from .config import get_config

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


class DatabaseManager:
    """Manages database connections and sessions."""

    def __init__(self):
        config = get_config()
        self.engine = create_engine(
            config.database.url,
            echo=config.database.echo,
            pool_pre_ping=True  # Verify connections before using
        )
        self.SessionLocal = sessionmaker(
            autocommit=False,
            autoflush=False,
            bind=self.engine
        )

    def get_session(self) -> Generator[Session, None, None]:
        """
        Get a database session.

        Rolls back anything left uncommitted when the request ends.

        Yields:
            Session: SQLAlchemy database session.
        """
        session = self.SessionLocal()
        try:
            yield session
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()


_db_manager: Optional[DatabaseManager] = None


def _get_db_manager() -> DatabaseManager:
    global _db_manager
    if _db_manager is None:
        _db_manager = DatabaseManager()
    return _db_manager


def get_db() -> Generator[Session, None, None]:
    """
    FastAPI dependency that yields a database session.

    Usage:
        @app.get("/endpoint")
        def my_endpoint(db: Session = Depends(get_db)):
            ...

    Yields:
        Session: Database session that will be automatically closed.
    """
    yield from _get_db_manager().get_session()


class CurrentUser(BaseModel):
    """Identity taken from a verified bearer token."""
    id: UUID
    role: Optional[str] = None


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme)
) -> CurrentUser:
    """
    Verify the bearer token and return the caller.

    Tokens are issued by the auth service; `sub` carries the user id and
    `role` the account role.

    Raises:
        HTTPException: 401 when the token is missing, invalid or expired.
    """
    if credentials is None or not credentials.credentials:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="User not authenticated")

    auth = get_config().auth
    try:
        payload = jwt.decode(credentials.credentials, auth.jwt_secret, algorithms=[auth.jwt_algorithm])
        return CurrentUser(id=UUID(str(payload['sub'])), role=payload.get('role'))
    except (JWTError, KeyError, ValueError) as e:
        logger.warning(f"JWT verification failed: {e}")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid or expired token")


def get_push_service(db: Session = Depends(get_db)) -> PushNotificationService:
    """Push notifier bound to the request session."""
    return PushNotificationService.from_config(PushTokenRepository(db), get_config().notifications)


def require_role(role: str, message: Optional[str] = None) -> Callable[..., CurrentUser]:
    """
    Dependency factory gating an endpoint on the caller's stored role.

    Sub-dependencies resolve before the request body is validated, so a
    caller with the wrong role gets 403 even when the body is malformed.

    Usage:
        @router.post("")
        def endpoint(current_user: CurrentUser = Depends(require_role('practice'))):
            ...
    """
    denied = message or f"Only {role}s can perform this action"

    def dependency(
        current_user: CurrentUser = Depends(get_current_user),
        db: Session = Depends(get_db)
    ) -> CurrentUser:
        if DirectoryRepository(db).find_user_role(current_user.id) != role:
            raise AuthorizationException(denied)
        return current_user

    return dependency
