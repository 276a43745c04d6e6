"""User and APIKey models."""

import uuid
from datetime import datetime, timezone

from sqlalchemy import (
    Column,
    DateTime,
    ForeignKey,
    String,
    Text,
    UniqueConstraint,
    Uuid,
)
from sqlalchemy.orm import relationship

from bio_optimizer.database import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(Base):
    """
    Account owning profile sessions.

    Rows are provisioned by the identity system; this service only reads them.
    """

    __tablename__ = "users"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    username = Column(String, nullable=False)
    email = Column(String)
    display_name = Column(Text)
    created_at = Column(DateTime(timezone=True), default=utcnow)

    __table_args__ = (
        UniqueConstraint("username", name="uq_users_username"),
        UniqueConstraint("email", name="uq_users_email"),
    )

    api_keys = relationship("APIKey", back_populates="user", cascade="all, delete-orphan")
    profile_sessions = relationship("ProfileSession", back_populates="user")


class APIKey(Base):
    """API key used by server-side callers to act as a user."""

    __tablename__ = "api_keys"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    key_hash = Column(Text, nullable=False)
    key_prefix = Column(String(12), nullable=False)
    name = Column(Text)
    created_at = Column(DateTime(timezone=True), default=utcnow)
    expires_at = Column(DateTime(timezone=True))
    revoked_at = Column(DateTime(timezone=True))

    __table_args__ = (UniqueConstraint("key_hash", name="uq_api_keys_key_hash"),)

    user = relationship("User", back_populates="api_keys")
