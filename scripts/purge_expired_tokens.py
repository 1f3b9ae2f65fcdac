"""
Delete expired access token rows.

Expired tokens are already rejected at validation time; this only keeps the
table small. Safe to run from cron.
"""
import asyncio

from assetcdn.core.config import get_settings
from assetcdn.domain.tokens.service import AccessTokenIssuer
from assetcdn.infrastructure.database import build_engine, build_session_factory, init_db


async def purge_expired_tokens() -> int:
    settings = get_settings()
    engine = build_engine(settings)
    try:
        if settings.environment in {"development", "test"}:
            await init_db(engine)
        issuer = AccessTokenIssuer(build_session_factory(engine))
        removed = await issuer.purge_expired()
    finally:
        await engine.dispose()

    print(f"Removed {removed} expired access token(s)")
    return removed


if __name__ == "__main__":
    asyncio.run(purge_expired_tokens())
