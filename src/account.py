from dataclasses import dataclass, field
from decimal import Decimal
from typing import Dict

from errors import (
    AccountFrozenError,
    ClientMismatchError,
    InsufficientFundsError,
    InsufficientHeldFundsError,
    InsufficientTotalFundsError,
    UnknownTransactionError,
)
from models import (
    AccountSnapshot,
    Chargeback,
    Deposit,
    Dispute,
    Resolve,
    SettledTransaction,
    Transaction,
    Withdrawal,
)


@dataclass
class Account:
    """
    Balances and dispute state for a single client.

    Deposits and withdrawals that went through are kept in `records` so they
    can be disputed later. A dispute moves the entry to `disputed`; a resolve
    moves it back and a chargeback drops it for good and freezes the account.
    An id is never present in both maps.

    Not thread-safe: callers must serialize calls to process() per account.
    """

    client_id: int
    available: Decimal = Decimal("0")
    held: Decimal = Decimal("0")
    total: Decimal = Decimal("0")
    frozen: bool = False
    records: Dict[int, SettledTransaction] = field(default_factory=dict)
    disputed: Dict[int, SettledTransaction] = field(default_factory=dict)

    def process(self, transaction: Transaction) -> None:
        """
        Validate and apply a single transaction.

        Raises a TransactionError subclass if the transaction is rejected.
        All checks run before any balance or record is touched, so a rejected
        transaction leaves the account exactly as it was.
        """
        self._verify_eligible(transaction)

        match transaction:
            case Deposit():
                self._deposit(transaction)
            case Withdrawal():
                self._withdrawal(transaction)
            case Dispute():
                self._dispute(transaction)
            case Resolve():
                self._resolve(transaction)
            case Chargeback():
                self._chargeback(transaction)
            case _:
                raise TypeError(f"Unsupported transaction: {transaction!r}")

    def snapshot(self) -> AccountSnapshot:
        return AccountSnapshot(self.available, self.held, self.total, self.frozen)

    def is_disputed(self, transaction_id: int) -> bool:
        return transaction_id in self.disputed

    def _verify_eligible(self, transaction: Transaction) -> None:
        if self.frozen:
            raise AccountFrozenError(
                f"Transaction failed because account {self.client_id} is frozen", transaction
            )
        if transaction.client_id != self.client_id:
            raise ClientMismatchError(
                f"Transaction for client {transaction.client_id} does not match account {self.client_id}",
                transaction,
            )

    def _deposit(self, transaction: Deposit) -> None:
        self.available += transaction.amount
        self.total += transaction.amount
        self.records[transaction.transaction_id] = transaction

    def _withdrawal(self, transaction: Withdrawal) -> None:
        amount = transaction.amount
        if self.available < amount:
            raise InsufficientFundsError(
                f"Withdrawal tx {transaction.transaction_id} failed: available {self.available} < {amount}",
                transaction,
            )
        # total >= available holds after every commit, checked anyway in case it drifts
        if self.total < amount:
            raise InsufficientFundsError(
                f"Withdrawal tx {transaction.transaction_id} failed: total {self.total} < {amount}",
                transaction,
            )
        self.available -= amount
        self.total -= amount
        self.records[transaction.transaction_id] = transaction

    def _dispute(self, transaction: Dispute) -> None:
        original = self.records.get(transaction.transaction_id)
        if original is None:
            raise UnknownTransactionError(
                f"Dispute failed: tx {transaction.transaction_id} is not a settled transaction",
                transaction,
            )

        amount = original.amount
        match original:
            case Deposit():
                if self.available < amount:
                    raise InsufficientFundsError(
                        f"Dispute of tx {original.transaction_id} failed: available {self.available} < {amount}",
                        transaction,
                    )
                self.available -= amount
                self.held += amount
            case Withdrawal():
                # The withdrawn funds already left available and total; bring them back as held.
                self.held += amount
                self.total += amount

        del self.records[original.transaction_id]
        self.disputed[original.transaction_id] = original

    def _resolve(self, transaction: Resolve) -> None:
        original = self.disputed.get(transaction.transaction_id)
        if original is None:
            raise UnknownTransactionError(
                f"Resolve failed: tx {transaction.transaction_id} is not under dispute",
                transaction,
            )

        amount = original.amount
        if self.held < amount:
            raise InsufficientHeldFundsError(
                f"Resolve of tx {original.transaction_id} failed: held {self.held} < {amount}",
                transaction,
            )

        match original:
            case Deposit():
                self.held -= amount
                self.available += amount
            case Withdrawal():
                # The withdrawal stands, so the held funds leave the account again.
                self.held -= amount
                self.total -= amount

        del self.disputed[original.transaction_id]
        self.records[original.transaction_id] = original

    def _chargeback(self, transaction: Chargeback) -> None:
        original = self.disputed.get(transaction.transaction_id)
        if original is None:
            raise UnknownTransactionError(
                f"Chargeback failed: tx {transaction.transaction_id} is not under dispute",
                transaction,
            )

        amount = original.amount
        if self.held < amount:
            raise InsufficientHeldFundsError(
                f"Chargeback of tx {original.transaction_id} failed: held {self.held} < {amount}",
                transaction,
            )
        if self.total < amount:
            raise InsufficientTotalFundsError(
                f"Chargeback of tx {original.transaction_id} failed: total {self.total} < {amount}",
                transaction,
            )

        self.held -= amount
        self.total -= amount
        self.frozen = True
        del self.disputed[original.transaction_id]
