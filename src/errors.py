"""Typed failures raised by Account.process.

Every error is recoverable: the account is left untouched and the caller
decides whether to log and move on to the next transaction.
"""


class TransactionError(Exception):
    """Base exception for a transaction the account refused to apply."""

    def __init__(self, message: str, transaction=None):
        super().__init__(message)
        self.transaction = transaction


class AccountFrozenError(TransactionError):
    """Raised for any transaction against an account locked by a chargeback."""
    pass


class ClientMismatchError(TransactionError):
    """Raised when a transaction is routed to another client's account."""
    pass


class InsufficientFundsError(TransactionError):
    """Raised when a withdrawal or deposit dispute exceeds the available balance."""
    pass


class InsufficientHeldFundsError(TransactionError):
    """Raised when a resolve or chargeback exceeds the held balance."""
    pass


class InsufficientTotalFundsError(TransactionError):
    """Raised when a chargeback exceeds the total balance."""
    pass


class UnknownTransactionError(TransactionError):
    """Raised when a dispute, resolve or chargeback references an unusable id."""
    pass
