#!/usr/bin/env python3
"""
Test suite configuration and utilities.

Unit tests run against an in-memory SQLite database built from the ORM
metadata, so no server is needed:

    python -m pytest tests/ -v

    # Skip tests that need a real PostgreSQL
    python -m pytest tests/ -v -m "not db"

PostgreSQL-only tests (marked `db`) read TEST_DATABASE_URL.
"""

import os
import uuid
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from database.models import (
    Base, User, CandidateProfile, JobPreference, Media,
    PracticeProfile, PracticeLocation, LocumShift, PermanentJob,
    MatchLike, Interview, UserFCMToken
)

TEST_DB_URL = os.environ.get("TEST_DATABASE_URL")


def create_test_session() -> Session:
    """Fresh in-memory SQLite database with all tables, one shared connection."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    return SessionLocal()


def close_test_session(session: Session) -> None:
    engine = session.get_bind()
    session.close()
    Base.metadata.drop_all(engine)
    engine.dispose()


# ----------------------------------------------------------------------
# Row factories
# ----------------------------------------------------------------------

def make_candidate(
    db: Session,
    full_name: str = "Jane Candidate",
    with_profile: bool = True,
    avatar: Optional[str] = None,
    **preferences
) -> User:
    """Candidate user, optionally with a profile and job preferences."""
    user = User(
        id=uuid.uuid4(),
        full_name=full_name,
        email=f"{uuid.uuid4().hex[:8]}@candidate.test",
        role='candidate',
    )
    db.add(user)
    db.flush()

    if with_profile:
        db.add(CandidateProfile(user_id=user.id, full_name=full_name, job_title="Dental Nurse"))
        db.add(JobPreference(user_id=user.id, **preferences))
    if avatar:
        db.add(Media(user_id=user.id, kind='profile_picture', url=avatar))
    db.flush()
    return user


def make_practice(
    db: Session,
    full_name: str = "Smile Dental",
    locations: int = 0,
    logo: Optional[str] = None
) -> User:
    user = User(
        id=uuid.uuid4(),
        full_name=full_name,
        email=f"{uuid.uuid4().hex[:8]}@practice.test",
        role='practice',
    )
    db.add(user)
    db.flush()

    db.add(PracticeProfile(user_id=user.id, clinic_type="General", phone_number="020 7946 0000"))
    for i in range(locations):
        db.add(PracticeLocation(user_id=user.id, address=f"{i + 1} High Street"))
    if logo:
        db.add(Media(user_id=user.id, kind='logo', url=logo))
    db.flush()
    return user


def make_locum(db: Session, practice: User, **fields) -> LocumShift:
    values = {'role': "Dental Nurse", 'job_type': "locum", 'time': "Day shift 9-5", 'hourly_rate': 25}
    values.update(fields)
    shift = LocumShift(user_id=practice.id, **values)
    db.add(shift)
    db.flush()
    return shift


def make_permanent(db: Session, practice: User, **fields) -> PermanentJob:
    values = {
        'role': "Dental Nurse",
        'job_type': "full_time",
        'working_hours': "Day shift, Mon-Fri",
        'salary_range': "£25,000 - £30,000",
    }
    values.update(fields)
    job = PermanentJob(user_id=practice.id, **values)
    db.add(job)
    db.flush()
    return job


def make_like(db: Session, actor: User, target_type: str, target_id, decision: str = 'like') -> MatchLike:
    like = MatchLike(actor_user_id=actor.id, target_type=target_type, target_id=target_id, decision=decision)
    db.add(like)
    db.flush()
    return like


def make_interview(db: Session, practice: User, candidate: User, **fields) -> Interview:
    values = {
        'meeting_type': "Video",
        'location': "Online",
        'date': "2026-03-01",
        'time': "10:00",
        'status': "scheduled",
    }
    values.update(fields)
    interview = Interview(practice_user_id=practice.id, candidate_user_id=candidate.id, **values)
    db.add(interview)
    db.flush()
    return interview


def make_token(db: Session, user: User, token: str, device_type: str = 'android') -> UserFCMToken:
    row = UserFCMToken(
        user_id=user.id,
        fcm_token=token,
        device_type=device_type,
        last_used_at=datetime.now(timezone.utc),
    )
    db.add(row)
    db.flush()
    return row
