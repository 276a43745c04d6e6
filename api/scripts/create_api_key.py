"""Provision a user (if needed) and print a fresh API key for it.

Used to hand a server-side action layer credentials for acting as a
signed-in user. The plaintext key is printed once and never stored.
"""

from __future__ import annotations

import argparse
import asyncio
from datetime import datetime, timedelta, timezone

from sqlalchemy import select

from bio_optimizer.auth.api_key import generate_api_key, get_key_prefix
from bio_optimizer.database import AsyncSessionLocal
from bio_optimizer.models import APIKey, User


async def provision(username: str, email: str | None, name: str, expires_days: int | None) -> str:
    async with AsyncSessionLocal() as db:
        result = await db.execute(select(User).where(User.username == username))
        user = result.scalar_one_or_none()
        if user is None:
            user = User(username=username, email=email, display_name=username.title())
            db.add(user)
            await db.flush()

        plaintext_key, key_hash = generate_api_key()
        expires_at = None
        if expires_days:
            expires_at = datetime.now(timezone.utc) + timedelta(days=expires_days)

        db.add(
            APIKey(
                user_id=user.id,
                key_hash=key_hash,
                key_prefix=get_key_prefix(plaintext_key),
                name=name,
                expires_at=expires_at,
            )
        )
        await db.commit()
        return plaintext_key


def main() -> int:
    parser = argparse.ArgumentParser(description="Create an API key for a user")
    parser.add_argument("username")
    parser.add_argument("--email", default=None)
    parser.add_argument("--name", default="CLI key", help="Label shown in key listings")
    parser.add_argument("--expires-days", type=int, default=None)
    args = parser.parse_args()

    key = asyncio.run(provision(args.username, args.email, args.name, args.expires_days))
    print(key)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
