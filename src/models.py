import threading
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import ClassVar, NamedTuple, Union


class TransactionType(Enum):
    DEPOSIT = "deposit"
    WITHDRAWAL = "withdrawal"
    DISPUTE = "dispute"
    RESOLVE = "resolve"
    CHARGEBACK = "chargeback"


class ProcessingResult(Enum):
    SUCCESS = "success"
    FAILED = "failed"
    SKIPPED = "skipped"


@dataclass(frozen=True)
class Deposit:
    transaction_type: ClassVar[TransactionType] = TransactionType.DEPOSIT

    client_id: int
    transaction_id: int
    amount: Decimal

    def __repr__(self) -> str:
        return f"Deposit(client={self.client_id}, tx={self.transaction_id}, amount={self.amount})"


@dataclass(frozen=True)
class Withdrawal:
    transaction_type: ClassVar[TransactionType] = TransactionType.WITHDRAWAL

    client_id: int
    transaction_id: int
    amount: Decimal

    def __repr__(self) -> str:
        return f"Withdrawal(client={self.client_id}, tx={self.transaction_id}, amount={self.amount})"


# Dispute, resolve and chargeback refer to an earlier transaction by id.
# Their amount column is carried along but never used.

@dataclass(frozen=True)
class Dispute:
    transaction_type: ClassVar[TransactionType] = TransactionType.DISPUTE

    client_id: int
    transaction_id: int
    amount: Decimal = Decimal("0")

    def __repr__(self) -> str:
        return f"Dispute(client={self.client_id}, tx={self.transaction_id})"


@dataclass(frozen=True)
class Resolve:
    transaction_type: ClassVar[TransactionType] = TransactionType.RESOLVE

    client_id: int
    transaction_id: int
    amount: Decimal = Decimal("0")

    def __repr__(self) -> str:
        return f"Resolve(client={self.client_id}, tx={self.transaction_id})"


@dataclass(frozen=True)
class Chargeback:
    transaction_type: ClassVar[TransactionType] = TransactionType.CHARGEBACK

    client_id: int
    transaction_id: int
    amount: Decimal = Decimal("0")

    def __repr__(self) -> str:
        return f"Chargeback(client={self.client_id}, tx={self.transaction_id})"


Transaction = Union[Deposit, Withdrawal, Dispute, Resolve, Chargeback]

# Only these two are ever kept in an account's records.
SettledTransaction = Union[Deposit, Withdrawal]

TRANSACTION_CLASSES = {
    TransactionType.DEPOSIT: Deposit,
    TransactionType.WITHDRAWAL: Withdrawal,
    TransactionType.DISPUTE: Dispute,
    TransactionType.RESOLVE: Resolve,
    TransactionType.CHARGEBACK: Chargeback,
}


class AccountSnapshot(NamedTuple):
    available: Decimal
    held: Decimal
    total: Decimal
    frozen: bool


class ProcessingStats:
    """Thread-safe counters for tracking processing statistics."""

    def __init__(self):
        self._lock = threading.Lock()
        self.processed = 0
        self.failed = 0
        self.skipped = 0

    def record_success(self):
        with self._lock:
            self.processed += 1

    def record_failure(self):
        with self._lock:
            self.failed += 1

    def record_skip(self):
        with self._lock:
            self.skipped += 1
