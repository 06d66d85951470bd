"""
Acquiring bank integrations.

- base.BankClient: Abstract interface that all bank clients implement
- bank_client.HTTPBankClient: Production HTTP integration
- mock_bank_client.MockBankClient: In-process bank for development and tests
- factory: Configuration-based client selection
"""

from payment_gateway.clients.bank_client import HTTPBankClient, classify_bank_response
from payment_gateway.clients.base import BankClient
from payment_gateway.clients.factory import BankClientFactory, get_bank_client
from payment_gateway.clients.mock_bank_client import MockBankClient

__all__ = [
    "BankClient",
    "HTTPBankClient",
    "MockBankClient",
    "BankClientFactory",
    "classify_bank_response",
    "get_bank_client",
]
