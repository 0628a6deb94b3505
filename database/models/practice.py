import uuid

from sqlalchemy import Column, Text, Boolean, TIMESTAMP, ForeignKey, Uuid, func, Index

from .base import Base


class PracticeProfile(Base):
    __tablename__ = 'practice_profiles'

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, ForeignKey('users.id', ondelete='CASCADE'), nullable=False, unique=True)
    clinic_type = Column(Text)
    about = Column(Text)
    website = Column(Text)
    phone_number = Column(Text)
    hide_from_public = Column(Boolean, nullable=False, default=False)
    profile_completion = Column(Boolean, nullable=False, default=False)

    created_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())


class PracticeLocation(Base):
    __tablename__ = 'practice_locations'

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    address = Column(Text, nullable=False)
    phone = Column(Text)
    parking = Column(Text)
    public_transport = Column(Text)

    created_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now())

    __table_args__ = (
        Index('idx_practice_locations_user', 'user_id'),
    )
