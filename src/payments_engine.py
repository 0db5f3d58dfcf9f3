import logging
import threading
from typing import Dict, Iterable, Optional

from account import Account
from ledger import Ledger
from message_queue import PartitionedQueue
from models import Transaction, ProcessingStats
from reader import load_csv_transactions
from transaction_processor import TransactionProcessor

logger = logging.getLogger(__name__)


class PaymentsEngine:
    """
    Orchestrates transaction processing with publisher-consumer pattern.
    Each consumer owns one queue partition, so transactions for a given client
    are applied one at a time and in input order.
    """

    def __init__(self, num_consumers: int = 4):
        if num_consumers < 1:
            raise ValueError(f"num_consumers must be at least 1, got {num_consumers}")
        self._num_consumers = num_consumers
        self._ledger = Ledger()
        self._stats = ProcessingStats()
        self._processor = TransactionProcessor(self._ledger, self._stats)
        self._queue: Optional[PartitionedQueue] = None
        self._publish_error: Optional[Exception] = None

    @property
    def stats(self) -> ProcessingStats:
        return self._stats

    def process_file(self, filepath: str) -> Dict[int, Account]:
        """Process CSV file and return final account states."""
        with open(filepath, "r", newline="", encoding="utf-8") as f:
            return self.process_transactions(load_csv_transactions(f))

    def process_transactions(self, transactions: Iterable[Transaction]) -> Dict[int, Account]:
        """Process already parsed transactions and return final account states."""
        logger.info(f"Starting processing with {self._num_consumers} consumers")
        self._queue = PartitionedQueue(num_partitions=self._num_consumers)
        self._publish_error = None

        publisher_thread = threading.Thread(target=self._publish_transactions, args=(transactions,))
        publisher_thread.start()

        consumer_threads = []
        for partition in range(self._num_consumers):
            consumer_thread = threading.Thread(target=self._consume_transactions, args=(partition,))
            consumer_thread.start()
            consumer_threads.append(consumer_thread)

        publisher_thread.join()
        self._queue.shutdown()
        for consumer_thread in consumer_threads:
            consumer_thread.join()

        if self._publish_error is not None:
            raise self._publish_error

        logger.info(f"Processed: {self._stats.processed}, Failed: {self._stats.failed}")

        return self._ledger.get_all_accounts()

    def _publish_transactions(self, transactions: Iterable[Transaction]) -> None:
        """Publish transactions to the queue in input order."""
        try:
            for transaction in transactions:
                self._queue.publish_message(transaction)
        except Exception as e:
            logger.error(f"Publisher stopped reading transactions: {e}")
            self._publish_error = e

    def _consume_transactions(self, partition: int) -> None:
        """Consumer loop: pull from own partition and apply under the client lock."""
        while True:
            transaction = self._queue.consume_message(partition)
            if transaction is None:
                if self._queue.is_shutdown() and self._queue.is_empty(partition):
                    break
                continue

            lock = self._ledger.get_client_lock(transaction.client_id)
            with lock:
                self._processor.process_transaction(transaction)
