"""Base interface for acquiring bank clients."""

from abc import ABC, abstractmethod

from payment_gateway.domain.payment import Payment
from payment_gateway.models import AuthorizationOutcome


class BankClient(ABC):
    """
    Abstract base class for acquiring bank integrations.

    Implementations are stateless across calls and never retry: one failed
    call is one failed payment attempt.
    """

    @abstractmethod
    async def authorize(self, payment: Payment) -> AuthorizationOutcome:
        """
        Ask the bank to authorize a validated payment.

        Args:
            payment: Validated payment with its identifier already assigned

        Returns:
            AuthorizationOutcome with the bank's authorize/decline decision

        Raises:
            BankError: When no decision could be obtained (rejected request,
                       service unavailable, undecodable response, network
                       failure or timeout).

        Note:
            Card declines are NOT exceptions - they return an outcome with
            authorized=False.
        """
        pass

    async def close(self) -> None:
        """Release any resources held by the client."""
        return None
