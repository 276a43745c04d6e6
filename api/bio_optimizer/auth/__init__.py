"""Caller identity resolution for the bio optimizer API."""

from bio_optimizer.auth.api_key import generate_api_key, get_key_prefix, hash_api_key
from bio_optimizer.auth.dependencies import require_caller, resolve_caller
from bio_optimizer.auth.jwt import create_access_token, decode_access_token

__all__ = [
    "generate_api_key",
    "hash_api_key",
    "get_key_prefix",
    "create_access_token",
    "decode_access_token",
    "resolve_caller",
    "require_caller",
]
