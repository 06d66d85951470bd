"""Acquiring bank client exceptions.

None of these are retried. Each one aborts the payment before anything is
persisted.
"""


class BankError(Exception):
    """Base exception for acquiring bank failures."""

    pass


class BankResponseDecodeError(BankError):
    """
    Raised when the bank answers 200 but the body cannot be decoded.

    Examples:
    - Body is not JSON
    - ``authorized`` missing or not a boolean
    """

    pass


class BankRequestRejected(BankError):
    """
    Raised when the bank returns 400 for the authorization request.

    The raw message from the bank is kept in ``bank_message``.
    """

    def __init__(self, bank_message: str) -> None:
        self.bank_message = bank_message
        super().__init__(f"bank rejected request: {bank_message}")


class BankServiceUnavailable(BankError):
    """Raised when the bank returns 503."""

    def __init__(self, message: str = "bank service unavailable") -> None:
        super().__init__(message)


class BankCommunicationError(BankError):
    """
    Raised for any other bank failure.

    Examples:
    - Unexpected status codes (500, 404, 429, ...)
    - Connection errors
    - Network timeouts (see ``BankTimeout``)
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        body: str | None = None,
    ) -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(message)


class BankTimeout(BankCommunicationError):
    """
    Raised when the authorization call exceeds the configured timeout.

    A timeout is a failure, never an implicit decline.
    """

    pass
