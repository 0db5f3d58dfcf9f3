import logging
from typing import Optional, Set, Tuple

from errors import TransactionError
from ledger import Ledger
from models import Deposit, Withdrawal, Transaction, ProcessingResult, ProcessingStats

logger = logging.getLogger(__name__)


class TransactionProcessor:
    """
    Routes transactions to their client's account.
    Returns ProcessingResult to indicate success/failure type.
    Caller is responsible for holding appropriate client lock.
    """

    def __init__(self, ledger: Ledger, stats: Optional[ProcessingStats] = None):
        self._ledger = ledger
        self._stats = stats if stats is not None else ProcessingStats()
        # (client_id, transaction_id) of every deposit/withdrawal ever applied
        self._applied: Set[Tuple[int, int]] = set()

    @property
    def stats(self) -> ProcessingStats:
        return self._stats

    def process_transaction(self, transaction: Transaction) -> ProcessingResult:
        """
        Process a single transaction.

        Returns:
            SUCCESS: Applied to the account
            FAILED: Rejected by the account (frozen, insufficient funds, unknown tx, ...),
                    balances left untouched
            SKIPPED: Deposit or withdrawal whose id was already applied for this client;
                     a frozen account reports the rejection instead
        """
        account = self._ledger.get_or_create_account(transaction.client_id)
        key = (transaction.client_id, transaction.transaction_id)
        settles = isinstance(transaction, (Deposit, Withdrawal))

        if settles and key in self._applied and not account.frozen:
            logger.info(f"{transaction}: already processed, skipping (idempotent)")
            self._stats.record_skip()
            return ProcessingResult.SKIPPED

        logger.debug(f"Account before: {account.snapshot()}, tx: {transaction}")
        try:
            account.process(transaction)
        except TransactionError as e:
            logger.warning(f"{type(e).__name__}: {e}")
            self._stats.record_failure()
            return ProcessingResult.FAILED
        logger.debug(f"Account after: {account.snapshot()}")

        if settles:
            self._applied.add(key)
        self._stats.record_success()
        return ProcessingResult.SUCCESS
