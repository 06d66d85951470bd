"""
Bank client factory.

Selects the acquiring bank integration from configuration so the service can
run against the real bank over HTTP or against the in-process mock.
"""

from typing import Any

import structlog

from payment_gateway.clients.bank_client import HTTPBankClient
from payment_gateway.clients.base import BankClient
from payment_gateway.clients.mock_bank_client import MockBankClient
from payment_gateway.config import settings

logger = structlog.get_logger(__name__)


class BankClientFactory:
    """Factory for creating bank client instances by name."""

    # Registry of available bank clients
    _CLIENTS: dict[str, type[BankClient]] = {
        "http": HTTPBankClient,
        "mock": MockBankClient,
    }

    @classmethod
    def create_client(
        cls,
        client_name: str,
        client_config: dict[str, Any] | None = None,
    ) -> BankClient:
        """
        Create a bank client instance by name.

        Args:
            client_name: Name of the client (e.g., "http", "mock")
            client_config: Optional client-specific configuration.
                           If not provided, uses settings from global config.

        Returns:
            BankClient instance

        Raises:
            ValueError: If client_name is not registered
        """
        client_name_lower = client_name.lower()

        if client_name_lower not in cls._CLIENTS:
            available = ", ".join(cls._CLIENTS.keys())
            raise ValueError(
                f"Unknown bank client: {client_name}. "
                f"Available clients: {available}"
            )

        client_class = cls._CLIENTS[client_name_lower]

        if client_config is None:
            client_config = cls._get_default_config(client_name_lower)

        logger.info(
            "bank_client_created",
            client_name=client_name_lower,
            client_class=client_class.__name__,
        )

        return client_class(**client_config)

    @classmethod
    def _get_default_config(cls, client_name: str) -> dict[str, Any]:
        if client_name == "http":
            return {
                "base_url": settings.bank.base_url,
                "timeout_seconds": settings.bank.timeout_seconds,
            }
        elif client_name == "mock":
            return {"latency_ms": settings.bank.mock_latency_ms}
        return {}

    @classmethod
    def register_client(cls, name: str, client_class: type[BankClient]) -> None:
        """
        Register a new bank client type.

        Args:
            name: Name to register the client under
            client_class: BankClient subclass to register
        """
        if not issubclass(client_class, BankClient):
            raise TypeError(f"{client_class.__name__} must inherit from BankClient")

        cls._CLIENTS[name.lower()] = client_class
        logger.info(
            "bank_client_registered",
            client_name=name.lower(),
            client_class=client_class.__name__,
        )

    @classmethod
    def list_clients(cls) -> list[str]:
        return sorted(cls._CLIENTS.keys())


def get_bank_client(
    client_name: str | None = None,
    client_config: dict[str, Any] | None = None,
) -> BankClient:
    """
    Convenience function to create a bank client.

    Args:
        client_name: Name of client (defaults to ``settings.bank.client``)
        client_config: Optional client-specific config

    Returns:
        BankClient instance
    """
    if client_name is None:
        client_name = settings.bank.client

    return BankClientFactory.create_client(client_name, client_config)
