import uuid

from sqlalchemy import Column, Text, TIMESTAMP, ForeignKey, Uuid, Index, func

from .base import Base


class UserFCMToken(Base):
    """
    Push token registered by one of a user's devices.

    A user may hold several tokens; tokens reported invalid by FCM are
    deleted after a send.
    """
    __tablename__ = 'user_fcm_tokens'

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    fcm_token = Column(Text, nullable=False, unique=True)
    device_id = Column(Text)
    device_type = Column(Text, nullable=False, default='other')  # ios|android|web|other
    last_used_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now())

    created_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now())

    __table_args__ = (
        Index('idx_user_fcm_tokens_user', 'user_id'),
    )
