"""Database models for the bio optimizer API."""

from bio_optimizer.models.profile_session import BioVariant, ProfileSession
from bio_optimizer.models.user import APIKey, User

__all__ = [
    "User",
    "APIKey",
    "ProfileSession",
    "BioVariant",
]
