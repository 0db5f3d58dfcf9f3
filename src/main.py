import csv
import sys
import logging
from decimal import Decimal
from typing import Dict, TextIO

from account import Account
from payments_engine import PaymentsEngine
from settings import Settings

logger = logging.getLogger(__name__)


def format_decimal(value: Decimal) -> str:
    """Format decimal without exponent, removing trailing zeros."""
    normalized = value.normalize()
    return f"{normalized:f}"


def write_accounts(accounts: Dict[int, Account], stream: TextIO) -> None:
    print("client,available,held,total,locked", file=stream)
    for client_id in sorted(accounts.keys()):
        account = accounts[client_id]
        print(
            f"{client_id},"
            f"{format_decimal(account.available)},"
            f"{format_decimal(account.held)},"
            f"{format_decimal(account.total)},"
            f"{str(account.frozen).lower()}",
            file=stream,
        )


def main(argv=None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    if len(argv) != 1:
        print("Usage: python main.py <input.csv>", file=sys.stderr)
        return 1

    try:
        settings = Settings.load()
    except ValueError as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return 1

    logging.basicConfig(
        level=settings.log_level,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )

    filepath = argv[0]
    engine = PaymentsEngine(num_consumers=settings.num_consumers)
    try:
        accounts = engine.process_file(filepath)
    except (OSError, csv.Error, UnicodeDecodeError) as e:
        logger.error(f"Cannot read {filepath}: {e}")
        return 1

    write_accounts(accounts, sys.stdout)
    return 0


if __name__ == "__main__":
    sys.exit(main())
