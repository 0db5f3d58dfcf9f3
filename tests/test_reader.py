import sys
import os
import io
import logging
from decimal import Decimal

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from models import Deposit, Withdrawal, Dispute, Resolve, Chargeback
from reader import load_csv_transactions, parse_csv_row


class TestParseCsvRow:
    def test_deposit(self):
        row = {"type": " deposit", " client": " 1", " tx": " 2", " amount": " 1.5"}
        assert parse_csv_row(row) == Deposit(1, 2, Decimal("1.5"))

    def test_type_is_case_insensitive(self):
        row = {"type": "WithDrawal", "client": "1", "tx": "2", "amount": "3"}
        assert parse_csv_row(row) == Withdrawal(1, 2, Decimal("3"))

    def test_dispute_without_amount(self):
        row = {"type": "dispute", "client": "1", "tx": "2", "amount": ""}
        assert parse_csv_row(row) == Dispute(1, 2)

    def test_missing_amount_column(self):
        # csv.DictReader fills missing trailing fields with None
        row = {"type": "chargeback", "client": "1", "tx": "2", "amount": None}
        assert parse_csv_row(row) == Chargeback(1, 2)

    def test_surplus_fields_ignored(self):
        row = {"type": "resolve", "client": "1", "tx": "2", "amount": "", None: ["extra"]}
        assert parse_csv_row(row) == Resolve(1, 2)

    def test_deposit_requires_amount(self, caplog):
        row = {"type": "deposit", "client": "1", "tx": "2", "amount": ""}
        with caplog.at_level(logging.WARNING, logger="reader"):
            assert parse_csv_row(row) is None
        assert "requires an amount" in caplog.text

    def test_rejects_malformed(self):
        rows = [
            {"type": "transfer", "client": "1", "tx": "2", "amount": "1"},
            {"type": "deposit", "client": "x", "tx": "2", "amount": "1"},
            {"type": "deposit", "client": "1", "tx": "-2", "amount": "1"},
            {"type": "deposit", "client": "1", "tx": "2", "amount": "-1"},
            {"type": "deposit", "client": "1", "tx": "2", "amount": "1,5"},
            {"type": "deposit", "client": "1", "tx": "2", "amount": "NaN"},
            {"type": "deposit", "client": "1", "amount": "1"},
        ]
        for row in rows:
            assert parse_csv_row(row) is None, row


class TestLoadCsvTransactions:
    def test_reading_csv_records(self):
        stream = io.StringIO("\n".join([
            "type,client,tx,amount",
            "deposit,1,1,1.0",
            "deposit,2,2,2.0",
            "deposit,1,3,2.0",
            "withdrawal,1,4,1.0",
            "withdrawal,2,5,3.0",
        ]))

        assert list(load_csv_transactions(stream)) == [
            Deposit(1, 1, Decimal("1.0")),
            Deposit(2, 2, Decimal("2.0")),
            Deposit(1, 3, Decimal("2.0")),
            Withdrawal(1, 4, Decimal("1.0")),
            Withdrawal(2, 5, Decimal("3.0")),
        ]

    def test_skips_malformed_and_keeps_order(self):
        stream = io.StringIO("\n".join([
            "type, client, tx, amount",
            "deposit, 1, 1, 1.0",
            "bogus, 1, 2, 1.0",
            "",
            "dispute, 1, 1",
            "resolve, 1, 1,",
        ]))

        assert list(load_csv_transactions(stream)) == [
            Deposit(1, 1, Decimal("1.0")),
            Dispute(1, 1),
            Resolve(1, 1),
        ]
