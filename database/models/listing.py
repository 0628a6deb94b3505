import uuid

from sqlalchemy import Column, Text, Date, Numeric, TIMESTAMP, ForeignKey, Uuid, JSON, func, Index

from .base import Base


class LocumShift(Base):
    """Short-term, rate-based shift posted by a practice."""
    __tablename__ = 'locum_shifts'

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, ForeignKey('users.id', ondelete='CASCADE'), nullable=False)  # owning practice

    role = Column(Text)
    job_type = Column(Text)
    location = Column(Text)
    date = Column(Date)
    time = Column(Text)  # free text, e.g. "Day shift 9-5"
    day_rate = Column(Numeric(10, 2))
    hourly_rate = Column(Numeric(10, 2))
    skills = Column(JSON)
    status = Column(Text, nullable=False, default='active')  # active|paused|filled|cancelled

    created_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        Index('idx_locum_shifts_user', 'user_id'),
        Index('idx_locum_shifts_status', 'status'),
    )


class PermanentJob(Base):
    """Salaried position posted by a practice."""
    __tablename__ = 'permanent_jobs'

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, ForeignKey('users.id', ondelete='CASCADE'), nullable=False)  # owning practice

    role = Column(Text)
    location = Column(Text)
    contract_type = Column(Text)
    job_type = Column(Text)
    start_date = Column(Date)
    job_title = Column(Text)
    job_description = Column(Text)
    salary_range = Column(Text)  # free text, e.g. "£30,000 - £40,000"
    working_hours = Column(Text)
    skills = Column(JSON)
    status = Column(Text, nullable=False, default='active')  # active|paused|filled|closed

    created_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        Index('idx_permanent_jobs_user', 'user_id'),
        Index('idx_permanent_jobs_status', 'status'),
    )
