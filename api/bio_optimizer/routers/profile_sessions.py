"""Profile session and bio variant endpoints."""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from bio_optimizer.auth.dependencies import resolve_caller
from bio_optimizer.config import settings
from bio_optimizer.database import get_db
from bio_optimizer.middleware.rate_limit import limiter
from bio_optimizer.models.user import User
from bio_optimizer.schemas.profile_sessions import (
    AddBioVariantRequest,
    BioVariantResponse,
    CreateProfileSessionRequest,
    ProfileSessionResponse,
    SessionData,
    SessionEnvelope,
    SessionListData,
    SessionListEnvelope,
    UpdateBioVariantRequest,
    UpdateProfileSessionRequest,
    VariantData,
    VariantEnvelope,
    VariantListData,
    VariantListEnvelope,
)
from bio_optimizer.services import profile_sessions as service

router = APIRouter(prefix="/api/v1/profile-sessions", tags=["Profile Sessions"])


# --- Sessions ---


@router.post(
    "",
    response_model=SessionEnvelope,
    status_code=status.HTTP_201_CREATED,
)
@limiter.limit(settings.session_create_rate_limit)
async def create_profile_session(
    request: Request,
    data: CreateProfileSessionRequest,
    db: AsyncSession = Depends(get_db),
    caller: User | None = Depends(resolve_caller),
) -> SessionEnvelope:
    """Create a profile session owned by the caller."""
    session = await service.create_session(db, caller, data)
    return SessionEnvelope(data=SessionData(session=ProfileSessionResponse.from_model(session)))


@router.get(
    "",
    response_model=SessionListEnvelope,
    status_code=status.HTTP_200_OK,
)
async def list_profile_sessions(
    db: AsyncSession = Depends(get_db),
    caller: User | None = Depends(resolve_caller),
) -> SessionListEnvelope:
    """List the caller's profile sessions."""
    sessions = await service.list_sessions(db, caller)
    items = [ProfileSessionResponse.from_model(session) for session in sessions]
    return SessionListEnvelope(data=SessionListData(items=items, total=len(items)))


@router.patch(
    "/{session_id}",
    response_model=SessionEnvelope,
    status_code=status.HTTP_200_OK,
)
async def update_profile_session(
    session_id: UUID,
    data: UpdateProfileSessionRequest,
    db: AsyncSession = Depends(get_db),
    caller: User | None = Depends(resolve_caller),
) -> SessionEnvelope:
    """
    Partially update a profile session.

    Only fields present in the body are changed; send ``null`` to clear one.
    """
    session = await service.update_session(db, caller, session_id, data)
    return SessionEnvelope(data=SessionData(session=ProfileSessionResponse.from_model(session)))


# --- Variants ---


@router.post(
    "/{session_id}/variants",
    response_model=VariantEnvelope,
    status_code=status.HTTP_201_CREATED,
)
@limiter.limit(settings.variant_create_rate_limit)
async def add_bio_variant(
    request: Request,
    session_id: UUID,
    data: AddBioVariantRequest,
    db: AsyncSession = Depends(get_db),
    caller: User | None = Depends(resolve_caller),
) -> VariantEnvelope:
    """Add a bio variant to one of the caller's sessions."""
    variant = await service.add_variant(db, caller, session_id, data)
    return VariantEnvelope(data=VariantData(variant=BioVariantResponse.from_model(variant)))


@router.get(
    "/{session_id}/variants",
    response_model=VariantListEnvelope,
    status_code=status.HTTP_200_OK,
)
async def list_bio_variants(
    session_id: UUID,
    favorites_only: bool = Query(default=False, alias="favoritesOnly"),
    db: AsyncSession = Depends(get_db),
    caller: User | None = Depends(resolve_caller),
) -> VariantListEnvelope:
    """List a session's variants, optionally only favorites."""
    variants = await service.list_variants(db, caller, session_id, favorites_only)
    items = [BioVariantResponse.from_model(variant) for variant in variants]
    return VariantListEnvelope(data=VariantListData(items=items, total=len(items)))


@router.patch(
    "/{session_id}/variants/{variant_id}",
    response_model=VariantEnvelope,
    status_code=status.HTTP_200_OK,
)
async def update_bio_variant(
    session_id: UUID,
    variant_id: UUID,
    data: UpdateBioVariantRequest,
    db: AsyncSession = Depends(get_db),
    caller: User | None = Depends(resolve_caller),
) -> VariantEnvelope:
    """Partially update a bio variant."""
    variant = await service.update_variant(db, caller, session_id, variant_id, data)
    return VariantEnvelope(data=VariantData(variant=BioVariantResponse.from_model(variant)))
