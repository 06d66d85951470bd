"""Repository layer for payment records.

``PaymentRepository`` is the contract the payment service depends on.
``find_by_id`` returns ``None`` when a payment does not exist and raises
``StorageError`` only when the backend itself fails, so "not found" and
"storage broken" never look alike.
"""

import threading
from abc import ABC, abstractmethod

import structlog

from payment_gateway.domain.payment import PaymentRecord

logger = structlog.get_logger(__name__)


class PaymentRepository(ABC):
    """Interface for payment record storage."""

    @abstractmethod
    async def save(self, record: PaymentRecord) -> None:
        """
        Insert or replace the record stored under ``record.id``.

        Raises:
            StorageError: If the backend cannot persist the record
        """
        pass

    @abstractmethod
    async def find_by_id(self, payment_id: str) -> PaymentRecord | None:
        """
        Look up a record by identifier.

        Returns:
            The stored record, or None if no payment has this identifier

        Raises:
            StorageError: If the backend cannot be read
        """
        pass

    async def close(self) -> None:
        """Release any resources held by the repository."""
        return None


class InMemoryPaymentRepository(PaymentRepository):
    """
    Process-local payment store.

    Records are immutable and every read or write of the index happens under
    one lock, so readers see either the previous record or the complete new
    one. Safe to share between request tasks and worker threads.
    """

    def __init__(self) -> None:
        self._payments: dict[str, PaymentRecord] = {}
        self._lock = threading.Lock()

    async def save(self, record: PaymentRecord) -> None:
        with self._lock:
            self._payments[record.id] = record

        logger.debug("payment_record_saved", payment_id=record.id, status=record.status.value)

    async def find_by_id(self, payment_id: str) -> PaymentRecord | None:
        with self._lock:
            return self._payments.get(payment_id)

    def __len__(self) -> int:
        with self._lock:
            return len(self._payments)
