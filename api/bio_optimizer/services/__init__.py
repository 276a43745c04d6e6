"""Services for the bio optimizer API."""

from bio_optimizer.services import profile_sessions

__all__ = ["profile_sessions"]
