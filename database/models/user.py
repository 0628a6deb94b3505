import uuid

from sqlalchemy import Column, Text, TIMESTAMP, Uuid, func, Index

from .base import Base


class User(Base):
    """
    Account record shared by candidates and practices.

    Only the fields the match and interview services read are mapped here;
    signup, login and verification live in the auth service.
    """
    __tablename__ = 'users'

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    full_name = Column(Text, nullable=False)
    email = Column(Text, nullable=False, unique=True)
    mobile_number = Column(Text)
    role = Column(Text, nullable=False, default='candidate')  # candidate|practice

    created_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        Index('idx_users_role', 'role'),
    )

    def __repr__(self) -> str:
        return f"<User id={self.id} role={self.role}>"
