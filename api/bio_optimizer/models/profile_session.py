"""Profile session and bio variant models."""

import uuid

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Text,
    Uuid,
    false,
)
from sqlalchemy.orm import relationship

from bio_optimizer.database import Base
from bio_optimizer.models.user import utcnow


class ProfileSession(Base):
    """
    Snapshot of one user's current professional profile.

    Holds the existing headline/about text and the user's stated goals.
    ``user_id`` is stamped from the authenticated caller at creation and
    never changes afterwards.
    """

    __tablename__ = "profile_sessions"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, ForeignKey("users.id"), nullable=False)
    current_headline = Column(Text)
    current_about = Column(Text)
    current_title = Column(Text)
    industry = Column(Text)
    location = Column(Text)
    goals = Column(Text)  # e.g. "job search", "personal branding"
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    user = relationship("User", back_populates="profile_sessions")
    variants = relationship("BioVariant", back_populates="session")

    __table_args__ = (Index("idx_profile_sessions_user", "user_id"),)

    # Fields a caller may set on create or change with a partial update
    EDITABLE_FIELDS = (
        "current_headline",
        "current_about",
        "current_title",
        "industry",
        "location",
        "goals",
    )


class BioVariant(Base):
    """
    Candidate rewritten headline/about text for a profile session.

    Variants have no ``updated_at``; only ``created_at`` is tracked.
    """

    __tablename__ = "bio_variants"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    session_id = Column(Uuid, ForeignKey("profile_sessions.id"), nullable=False)
    variant_label = Column(Text)  # "Professional", "Storytelling", "Short"
    headline = Column(Text)
    about_text = Column(Text, nullable=False)
    tone = Column(Text)  # "formal", "friendly", "thought-leader"
    length_hint = Column(Text)  # "short", "medium", "long"
    is_favorite = Column(Boolean, nullable=False, default=False, server_default=false())
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    session = relationship("ProfileSession", back_populates="variants")

    __table_args__ = (Index("idx_bio_variants_session", "session_id", "is_favorite"),)

    EDITABLE_FIELDS = (
        "variant_label",
        "headline",
        "about_text",
        "tone",
        "length_hint",
        "is_favorite",
    )
