"""asyncpg pool for the PostgreSQL storage backend.

One pool per process, created lazily on first use by ``get_pool`` and
released by ``close_pool`` at shutdown.
"""

import asyncio
from urllib.parse import urlsplit, urlunsplit

import asyncpg
import structlog

from payment_gateway.config import StorageSettings, settings

logger = structlog.get_logger()

_pool: asyncpg.Pool | None = None
_pool_lock = asyncio.Lock()


def mask_dsn(dsn: str) -> str:
    """Return ``dsn`` with any password replaced by ``***``."""
    parts = urlsplit(dsn)
    if parts.password is None:
        return dsn

    netloc = parts.netloc.replace(f":{parts.password}@", ":***@", 1)
    return urlunsplit(parts._replace(netloc=netloc))


async def create_pool(storage: StorageSettings | None = None) -> asyncpg.Pool:
    """Open a new connection pool for the payments database."""
    storage = storage or settings.storage

    logger.info(
        "creating_payments_db_pool",
        dsn=mask_dsn(storage.database_url),
        min_size=storage.pool_min_size,
        max_size=storage.pool_max_size,
    )

    pool = await asyncpg.create_pool(
        dsn=storage.database_url,
        min_size=storage.pool_min_size,
        max_size=storage.pool_max_size,
        server_settings={"application_name": settings.service_name},
    )
    if pool is None:
        raise RuntimeError("asyncpg returned no pool")

    return pool


async def get_pool() -> asyncpg.Pool:
    """Return the process-wide pool, opening it on first call."""
    global _pool
    async with _pool_lock:
        if _pool is None:
            _pool = await create_pool()
    return _pool


async def close_pool() -> None:
    global _pool
    async with _pool_lock:
        if _pool is None:
            return
        pool, _pool = _pool, None

    await pool.close()
    logger.info("payments_db_pool_closed")
