import threading
from typing import Dict

from account import Account


class Ledger:
    """
    Thread-safe collection of client accounts with per-client locking.
    Accounts are created lazily the first time a client id is seen.
    """

    def __init__(self):
        self._accounts: Dict[int, Account] = {}

        # Global lock protects creation of new entries in _accounts and _client_locks dicts.
        # Without it, two threads could create duplicate locks for the same client.
        self._global_lock = threading.Lock()
        self._client_locks: Dict[int, threading.Lock] = {}

    def __len__(self) -> int:
        with self._global_lock:
            return len(self._accounts)

    def get_client_lock(self, client_id: int) -> threading.Lock:
        """
        Get or create a lock for a specific client.
        Consumer acquires this before processing any transaction for that client.
        """
        with self._global_lock:
            if client_id not in self._client_locks:
                self._client_locks[client_id] = threading.Lock()
            return self._client_locks[client_id]

    def get_or_create_account(self, client_id: int) -> Account:
        """Get existing account or create new one."""
        with self._global_lock:
            if client_id not in self._accounts:
                self._accounts[client_id] = Account(client_id=client_id)
            return self._accounts[client_id]

    def get_all_accounts(self) -> Dict[int, Account]:
        """Return all accounts (for final output)."""
        with self._global_lock:
            return dict(self._accounts)
