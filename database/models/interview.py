import uuid

from sqlalchemy import Column, Text, TIMESTAMP, ForeignKey, Boolean, Uuid, Index, func

from .base import Base


class Interview(Base):
    """
    Interview scheduled by a practice with a candidate.

    Status moves scheduled -> confirmed -> completed, or to cancelled on
    decline. The reschedule_* and declined* columns are flags orthogonal
    to status.
    """
    __tablename__ = 'interviews'

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    practice_user_id = Column(Uuid, ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    candidate_user_id = Column(Uuid, ForeignKey('users.id', ondelete='CASCADE'), nullable=False)

    meeting_type = Column(Text, nullable=False)  # Video|Inperson|Call
    location = Column(Text, nullable=False)  # Online|Office
    date = Column(Text, nullable=False)
    time = Column(Text, nullable=False)  # HH:MM, 24h
    status = Column(Text, nullable=False, default='scheduled')  # scheduled|confirmed|cancelled|completed
    notes = Column(Text)

    reschedule_requested = Column(Boolean, nullable=False, default=False)
    reschedule_request_date = Column(TIMESTAMP(timezone=True))
    reschedule_request_reason = Column(Text)
    reschedule_requested_date = Column(Text)
    reschedule_requested_time = Column(Text)

    declined = Column(Boolean, nullable=False, default=False)
    declined_at = Column(TIMESTAMP(timezone=True))
    decline_reason = Column(Text)

    created_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        Index('idx_interviews_practice', 'practice_user_id'),
        Index('idx_interviews_candidate', 'candidate_user_id'),
        Index('idx_interviews_status', 'status'),
    )
