"""PostgreSQL-backed payment repository."""

import asyncio

import asyncpg
import structlog

from payment_gateway.domain.errors import StorageError
from payment_gateway.domain.payment import PaymentRecord, PaymentStatus
from payment_gateway.infrastructure.repository import PaymentRepository

logger = structlog.get_logger(__name__)

# Failures that mean the database could not serve the request
_STORAGE_FAILURES = (
    asyncpg.PostgresError,
    asyncpg.InterfaceError,
    OSError,
    asyncio.TimeoutError,
)

CREATE_PAYMENTS_TABLE = """
CREATE TABLE IF NOT EXISTS payments (
    id TEXT PRIMARY KEY,
    status TEXT NOT NULL,
    card_last_four VARCHAR(4) NOT NULL,
    expiry_month SMALLINT NOT NULL,
    expiry_year INTEGER NOT NULL,
    currency CHAR(3) NOT NULL,
    amount BIGINT NOT NULL,
    created_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
    updated_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
)
"""

UPSERT_PAYMENT = """
INSERT INTO payments (
    id, status, card_last_four, expiry_month, expiry_year, currency, amount
)
VALUES ($1, $2, $3, $4, $5, $6, $7)
ON CONFLICT (id) DO UPDATE SET
    status = EXCLUDED.status,
    card_last_four = EXCLUDED.card_last_four,
    expiry_month = EXCLUDED.expiry_month,
    expiry_year = EXCLUDED.expiry_year,
    currency = EXCLUDED.currency,
    amount = EXCLUDED.amount,
    updated_at = NOW()
"""

SELECT_PAYMENT = """
SELECT id, status, card_last_four, expiry_month, expiry_year, currency, amount
FROM payments
WHERE id = $1
"""


def _to_record(row) -> PaymentRecord:
    return PaymentRecord(
        id=row["id"],
        status=PaymentStatus(row["status"]),
        card_last_four=row["card_last_four"],
        expiry_month=row["expiry_month"],
        expiry_year=row["expiry_year"],
        currency=row["currency"],
        amount=row["amount"],
    )


class PostgresPaymentRepository(PaymentRepository):
    """Stores payment records in the ``payments`` table.

    Each save is a single upsert statement, so concurrent readers observe
    either the old row or the new one.
    """

    def __init__(self, pool: asyncpg.Pool) -> None:
        self.pool = pool

    async def ensure_schema(self) -> None:
        """Create the payments table if it does not exist."""
        try:
            async with self.pool.acquire() as conn:
                await conn.execute(CREATE_PAYMENTS_TABLE)
        except _STORAGE_FAILURES as e:
            raise StorageError(f"failed to create payments table: {e}") from e

        logger.info("payments_schema_ready")

    async def save(self, record: PaymentRecord) -> None:
        try:
            async with self.pool.acquire() as conn:
                await conn.execute(
                    UPSERT_PAYMENT,
                    record.id,
                    record.status.value,
                    record.card_last_four,
                    record.expiry_month,
                    record.expiry_year,
                    record.currency,
                    record.amount,
                )
        except _STORAGE_FAILURES as e:
            logger.error(
                "payment_save_failed",
                payment_id=record.id,
                error_type=type(e).__name__,
                error=str(e),
            )
            raise StorageError(f"failed to save payment {record.id}: {e}") from e

        logger.debug("payment_record_saved", payment_id=record.id, status=record.status.value)

    async def find_by_id(self, payment_id: str) -> PaymentRecord | None:
        try:
            async with self.pool.acquire() as conn:
                row = await conn.fetchrow(SELECT_PAYMENT, payment_id)
        except _STORAGE_FAILURES as e:
            logger.error(
                "payment_lookup_failed",
                payment_id=payment_id,
                error_type=type(e).__name__,
                error=str(e),
            )
            raise StorageError(f"failed to read payment {payment_id}: {e}") from e

        if row is None:
            return None

        return _to_record(row)
