import csv
import logging
from decimal import Decimal, InvalidOperation
from typing import Dict, Iterator, Optional, TextIO

from models import Transaction, TransactionType, TRANSACTION_CLASSES

logger = logging.getLogger(__name__)

# Types whose amount column is meaningful and mandatory.
AMOUNT_REQUIRED = {TransactionType.DEPOSIT, TransactionType.WITHDRAWAL}


def parse_csv_row(row: Dict[Optional[str], Optional[str]]) -> Optional[Transaction]:
    """Parse CSV row into Transaction. Malformed rows are logged and skipped."""
    try:
        # csv.DictReader uses None for the key of surplus fields and the value of missing ones
        normalized = {k.strip(): (v or "").strip() for k, v in row.items() if k is not None}

        transaction_type = TransactionType(normalized["type"].lower())
        client_id = int(normalized["client"])
        transaction_id = int(normalized["tx"])
        if client_id < 0 or transaction_id < 0:
            raise ValueError(f"negative id (client={client_id}, tx={transaction_id})")

        amount_str = normalized.get("amount", "")
        if amount_str:
            amount = Decimal(amount_str)
            if not amount.is_finite() or amount < 0:
                raise ValueError(f"invalid amount {amount_str}")
        elif transaction_type in AMOUNT_REQUIRED:
            raise ValueError(f"{transaction_type.value} requires an amount")
        else:
            amount = Decimal("0")

        return TRANSACTION_CLASSES[transaction_type](
            client_id=client_id,
            transaction_id=transaction_id,
            amount=amount,
        )
    except (KeyError, ValueError, InvalidOperation) as e:
        logger.warning(f"Failed to parse row {row}: {e}")
        return None


def load_csv_transactions(stream: TextIO) -> Iterator[Transaction]:
    """Yield transactions from a CSV stream in input order, skipping malformed rows."""
    reader = csv.DictReader(stream)
    for row in reader:
        transaction = parse_csv_row(row)
        if transaction is not None:
            yield transaction
