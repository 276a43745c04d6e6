"""Ownership-checked operations on profile sessions and their bio variants.

Every operation takes the caller explicitly and runs ``require_caller``
before touching the store. Access control is ownership of the parent
session, nothing else: a record that exists but belongs to someone else
is reported exactly like a missing one.
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import Any, TypeVar
from uuid import UUID

from sqlalchemy import select, true
from sqlalchemy.ext.asyncio import AsyncSession

from bio_optimizer.auth.dependencies import require_caller
from bio_optimizer.errors import NotFoundError, ValidationError
from bio_optimizer.models.profile_session import BioVariant, ProfileSession
from bio_optimizer.models.user import User
from bio_optimizer.schemas.profile_sessions import (
    AddBioVariantRequest,
    CreateProfileSessionRequest,
    PartialUpdate,
    UpdateBioVariantRequest,
    UpdateProfileSessionRequest,
)

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", ProfileSession, BioVariant)

EMPTY_UPDATE_MESSAGE = "At least one field must be provided to update."
EMPTY_ABOUT_TEXT_MESSAGE = "About text cannot be empty"


# --- Ownership guards ---


async def _get_owned(
    db: AsyncSession,
    model: type[ModelT],
    record_id: UUID,
    label: str,
    *scope: Any,
) -> ModelT:
    """Fetch ``model`` by id within ``scope`` or raise NotFoundError."""
    result = await db.execute(select(model).where(model.id == record_id, *scope))
    record = result.scalar_one_or_none()

    if record is None:
        logger.warning("%s %s not found in caller scope", label, record_id)
        raise NotFoundError(f"{label} not found.")

    return record


async def get_owned_session(db: AsyncSession, session_id: UUID, user_id: UUID) -> ProfileSession:
    """Return the session if it exists and belongs to ``user_id``."""
    return await _get_owned(
        db,
        ProfileSession,
        session_id,
        "Profile session",
        ProfileSession.user_id == user_id,
    )


async def get_owned_variant(
    db: AsyncSession, variant_id: UUID, session_id: UUID, user_id: UUID
) -> BioVariant:
    """Return the variant if its session belongs to ``user_id`` and it belongs to that session."""
    await get_owned_session(db, session_id, user_id)
    return await _get_owned(
        db,
        BioVariant,
        variant_id,
        "Bio variant",
        BioVariant.session_id == session_id,
    )


def _changes(data: PartialUpdate, editable: tuple[str, ...]) -> dict[str, Any]:
    changes = {name: value for name, value in data.changes().items() if name in editable}
    if not changes:
        raise ValidationError(EMPTY_UPDATE_MESSAGE)
    return changes


def _check_about_text(value: str | None) -> None:
    if not value:
        raise ValidationError(EMPTY_ABOUT_TEXT_MESSAGE)


# --- Profile sessions ---


async def create_session(
    db: AsyncSession,
    caller: User | None,
    data: CreateProfileSessionRequest,
) -> ProfileSession:
    """Create a session owned by the caller."""
    user = require_caller(caller)
    now = datetime.now(timezone.utc)

    session = ProfileSession(
        id=uuid.uuid4(),
        user_id=user.id,
        created_at=now,
        updated_at=now,
        **data.model_dump(include=set(ProfileSession.EDITABLE_FIELDS)),
    )
    db.add(session)
    await db.commit()

    logger.info("Created profile session %s for user %s", session.id, user.id)
    return session


async def update_session(
    db: AsyncSession,
    caller: User | None,
    session_id: UUID,
    data: UpdateProfileSessionRequest,
) -> ProfileSession:
    """Apply the fields present in ``data`` and refresh ``updated_at``."""
    user = require_caller(caller)
    changes = _changes(data, ProfileSession.EDITABLE_FIELDS)

    session = await get_owned_session(db, session_id, user.id)
    for name, value in changes.items():
        setattr(session, name, value)
    session.updated_at = datetime.now(timezone.utc)

    await db.commit()

    logger.info("Updated profile session %s fields=%s", session.id, sorted(changes))
    return session


async def list_sessions(db: AsyncSession, caller: User | None) -> list[ProfileSession]:
    """All sessions owned by the caller."""
    user = require_caller(caller)

    result = await db.execute(
        select(ProfileSession)
        .where(ProfileSession.user_id == user.id)
        .order_by(ProfileSession.created_at)
    )
    return list(result.scalars().all())


# --- Bio variants ---


async def add_variant(
    db: AsyncSession,
    caller: User | None,
    session_id: UUID,
    data: AddBioVariantRequest,
) -> BioVariant:
    """Attach a new variant to a session the caller owns."""
    user = require_caller(caller)
    _check_about_text(data.about_text)

    await get_owned_session(db, session_id, user.id)

    variant = BioVariant(
        id=uuid.uuid4(),
        session_id=session_id,
        variant_label=data.variant_label,
        headline=data.headline,
        about_text=data.about_text,
        tone=data.tone,
        length_hint=data.length_hint,
        is_favorite=bool(data.is_favorite),
        created_at=datetime.now(timezone.utc),
    )
    db.add(variant)
    await db.commit()

    logger.info("Added bio variant %s to session %s", variant.id, session_id)
    return variant


async def update_variant(
    db: AsyncSession,
    caller: User | None,
    session_id: UUID,
    variant_id: UUID,
    data: UpdateBioVariantRequest,
) -> BioVariant:
    """Apply the fields present in ``data``. ``created_at`` is never touched."""
    user = require_caller(caller)
    changes = _changes(data, BioVariant.EDITABLE_FIELDS)
    if "about_text" in changes:
        _check_about_text(changes["about_text"])

    variant = await get_owned_variant(db, variant_id, session_id, user.id)
    for name, value in changes.items():
        setattr(variant, name, value)

    await db.commit()

    logger.info("Updated bio variant %s fields=%s", variant.id, sorted(changes))
    return variant


async def list_variants(
    db: AsyncSession,
    caller: User | None,
    session_id: UUID,
    favorites_only: bool = False,
) -> list[BioVariant]:
    """Variants of a session the caller owns, optionally favorites only."""
    user = require_caller(caller)
    await get_owned_session(db, session_id, user.id)

    query = select(BioVariant).where(BioVariant.session_id == session_id)
    if favorites_only:
        query = query.where(BioVariant.is_favorite == true())

    result = await db.execute(query.order_by(BioVariant.created_at))
    return list(result.scalars().all())
