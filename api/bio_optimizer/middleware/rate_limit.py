"""Rate limiting for create endpoints using slowapi."""

from slowapi import Limiter
from slowapi.util import get_remote_address

# IP-keyed limiter; limits are applied per endpoint with @limiter.limit
limiter = Limiter(key_func=get_remote_address)


def reset_limiter() -> None:
    """Clear recorded hits. Used in tests to isolate rate limit state."""
    limiter.reset()
