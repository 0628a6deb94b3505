import uuid

from sqlalchemy import Column, Text, Boolean, Integer, Numeric, TIMESTAMP, ForeignKey, Uuid, JSON, func, Index

from .base import Base


class CandidateProfile(Base):
    __tablename__ = 'candidate_profiles'

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, ForeignKey('users.id', ondelete='CASCADE'), nullable=False, unique=True)
    full_name = Column(Text, nullable=False)
    gender = Column(Text)
    job_title = Column(Text)
    current_status = Column(Text)
    linkedin_url = Column(Text)
    about_me = Column(Text)
    profile_completion = Column(Boolean, nullable=False, default=False)

    created_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())


class JobPreference(Base):
    """
    What a candidate is looking for.

    The scorer reads job_type, working_pattern, the pay fields and the
    search radius/coordinates.
    """
    __tablename__ = 'job_preferences'

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, ForeignKey('users.id', ondelete='CASCADE'), nullable=False, unique=True)

    ideal_job_title = Column(Text)
    looking_for = Column(Text)
    job_type = Column(Text)  # full_time|part_time|locum|contract
    working_pattern = Column(Text)  # e.g. day-shift
    pay_min = Column(Integer)
    pay_max = Column(Integer)
    hourly_rate = Column(Numeric(10, 2))
    salary_preference = Column(Text)

    preferred_locations = Column(JSON)
    search_radius_km = Column(Integer)
    latitude = Column(Numeric(9, 6))
    longitude = Column(Numeric(9, 6))

    created_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())


class Media(Base):
    """Uploaded media metadata (profile pictures, practice logos)."""
    __tablename__ = 'media'

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    kind = Column(Text, nullable=False)  # profile_picture|logo|gallery|video
    url = Column(Text, nullable=False)

    created_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now())

    __table_args__ = (
        Index('idx_media_user_kind', 'user_id', 'kind'),
    )
