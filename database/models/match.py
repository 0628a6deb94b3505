import uuid

from sqlalchemy import Column, Text, TIMESTAMP, ForeignKey, Integer, Uuid, UniqueConstraint, Index, func

from .base import Base


class MatchLike(Base):
    """
    Append-only ledger of swipe decisions.

    A like targets either a listing (locum/permanent) or a candidate user.
    Rows are never updated or deduplicated; the resolver only asks whether
    at least one matching `like` row exists.
    """
    __tablename__ = 'match_likes'

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    actor_user_id = Column(Uuid, ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    target_type = Column(Text, nullable=False)  # locum|permanent|candidate
    target_id = Column(Uuid, nullable=False)
    decision = Column(Text, nullable=False)  # like|pass

    created_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        Index('idx_match_likes_actor', 'actor_user_id', 'target_type', 'decision'),
        Index('idx_match_likes_target', 'target_type', 'target_id'),
    )


class Match(Base):
    """
    Mutual interest between a candidate and a practice on one listing.

    The unique constraint is what keeps concurrent mutual likes from
    producing two rows; inserts go through ON CONFLICT DO NOTHING.
    """
    __tablename__ = 'matches'

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    candidate_user_id = Column(Uuid, ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    practice_user_id = Column(Uuid, ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    target_type = Column(Text, nullable=False)  # locum|permanent
    target_id = Column(Uuid, nullable=False)
    score = Column(Integer, nullable=False, default=0)
    status = Column(Text, nullable=False, default='matched')  # matched|archived

    created_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        UniqueConstraint(
            'candidate_user_id', 'practice_user_id', 'target_type', 'target_id',
            name='uq_match_candidate_practice_target'
        ),
        Index('idx_matches_candidate', 'candidate_user_id', 'status'),
        Index('idx_matches_practice', 'practice_user_id', 'status'),
        Index('idx_matches_created', 'created_at'),
    )
