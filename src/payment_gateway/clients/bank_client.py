"""HTTP client for the acquiring bank authorization endpoint."""

import asyncio
import json

import httpx
import structlog

from payment_gateway.clients.base import BankClient
from payment_gateway.domain.payment import Payment
from payment_gateway.models import (
    AuthorizationOutcome,
    BankAuthorizationRequest,
    BankCommunicationError,
    BankError,
    BankRequestRejected,
    BankResponseDecodeError,
    BankServiceUnavailable,
    BankTimeout,
)

logger = structlog.get_logger(__name__)


def classify_bank_response(status_code: int, body: bytes) -> AuthorizationOutcome:
    """
    Map a bank HTTP response to an authorization outcome.

    200 is decoded as ``{"authorized": bool, "authorization_code": str}``;
    400, 503 and every other status raise the matching ``BankError``.

    Args:
        status_code: HTTP status returned by the bank
        body: Raw response body

    Returns:
        AuthorizationOutcome for a 200 response with a decodable body

    Raises:
        BankResponseDecodeError: 200 with a body that is not the expected JSON
        BankRequestRejected: 400, carrying the bank's raw message
        BankServiceUnavailable: 503
        BankCommunicationError: Any other status
    """
    if status_code == 200:
        try:
            data = json.loads(body)
        except ValueError as e:
            raise BankResponseDecodeError(f"failed to decode bank response: {e}") from e

        if not isinstance(data, dict) or not isinstance(data.get("authorized"), bool):
            raise BankResponseDecodeError("bank response is missing a boolean 'authorized' field")

        authorization_code = data.get("authorization_code", "")
        if authorization_code is None:
            authorization_code = ""
        if not isinstance(authorization_code, str):
            raise BankResponseDecodeError("bank response 'authorization_code' is not a string")

        authorized = data["authorized"]
        return AuthorizationOutcome(
            authorized=authorized,
            authorization_code=authorization_code if authorized else "",
        )

    text = body.decode("utf-8", errors="replace")

    if status_code == 400:
        raise BankRequestRejected(text)

    if status_code == 503:
        raise BankServiceUnavailable()

    raise BankCommunicationError(
        f"unexpected response from bank: {status_code} - {text}",
        status_code=status_code,
        body=text,
    )


class HTTPBankClient(BankClient):
    """
    Client for the acquiring bank ``POST /payments`` endpoint.

    Every call is bounded by ``timeout_seconds``. A timeout surfaces as
    ``BankTimeout`` and is never treated as a decline.
    """

    def __init__(self, base_url: str, timeout_seconds: float = 10.0) -> None:
        """
        Initialize the bank client.

        Args:
            base_url: Base URL of the acquiring bank (e.g., "http://localhost:8080")
            timeout_seconds: Upper bound for one authorization call (default: 10.0)
        """
        self.base_url = base_url.rstrip("/")
        self.timeout_seconds = timeout_seconds
        self.http_client = httpx.AsyncClient(timeout=timeout_seconds)

        logger.info(
            "bank_client_initialized",
            base_url=self.base_url,
            timeout_seconds=timeout_seconds,
        )

    async def close(self) -> None:
        """Close the HTTP client connection pool."""
        await self.http_client.aclose()

    async def authorize(self, payment: Payment) -> AuthorizationOutcome:
        request = BankAuthorizationRequest.from_payment(payment)
        url = f"{self.base_url}/payments"

        logger.info(
            "bank_authorization_request",
            payment_id=payment.id,
            card_last_four=payment.card.last_four,
            amount=payment.amount,
            currency=payment.currency,
        )

        try:
            response = await asyncio.wait_for(
                self.http_client.post(
                    url,
                    json=request.to_dict(),
                    headers={"X-Request-ID": payment.id},
                ),
                timeout=self.timeout_seconds,
            )

        except (httpx.TimeoutException, asyncio.TimeoutError) as e:
            logger.error(
                "bank_timeout",
                payment_id=payment.id,
                timeout_seconds=self.timeout_seconds,
            )
            raise BankTimeout(
                f"bank did not respond within {self.timeout_seconds}s"
            ) from e

        except httpx.RequestError as e:
            # Network errors, connection errors, etc.
            logger.error(
                "bank_request_error",
                payment_id=payment.id,
                error_type=type(e).__name__,
                error=str(e),
            )
            raise BankCommunicationError(f"failed to send request to bank: {e}") from e

        try:
            outcome = classify_bank_response(response.status_code, response.content)
        except BankError as e:
            logger.warning(
                "bank_authorization_failed",
                payment_id=payment.id,
                status_code=response.status_code,
                error_type=type(e).__name__,
                error=str(e),
            )
            raise

        logger.info(
            "bank_authorization_response",
            payment_id=payment.id,
            authorized=outcome.authorized,
        )
        return outcome

    async def __aenter__(self):
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.close()
