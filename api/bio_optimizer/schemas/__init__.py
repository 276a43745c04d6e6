"""Pydantic schemas for request/response validation."""

from bio_optimizer.schemas.profile_sessions import (
    AddBioVariantRequest,
    BioVariantResponse,
    CreateProfileSessionRequest,
    ProfileSessionResponse,
    SessionEnvelope,
    SessionListEnvelope,
    UpdateBioVariantRequest,
    UpdateProfileSessionRequest,
    VariantEnvelope,
    VariantListEnvelope,
)

__all__ = [
    "CreateProfileSessionRequest",
    "UpdateProfileSessionRequest",
    "ProfileSessionResponse",
    "SessionEnvelope",
    "SessionListEnvelope",
    "AddBioVariantRequest",
    "UpdateBioVariantRequest",
    "BioVariantResponse",
    "VariantEnvelope",
    "VariantListEnvelope",
]
