"""
Engine and session factory for code running outside a request, such as
the push worker. Request handlers get sessions from
web.backend.dependencies.get_db instead.
"""
import contextlib
from typing import Iterator

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session

from core.config_loader import load_config

_db_config = load_config().database

engine = create_engine(_db_config.url, echo=_db_config.echo, pool_pre_ping=True)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@contextlib.contextmanager
def session_scope(factory: sessionmaker = SessionLocal) -> Iterator[Session]:
    """Commit on success, roll back on error, always close."""
    session: Session = factory()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
