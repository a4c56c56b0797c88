"""Shared pytest fixtures for ledgerdesk tests."""

import tempfile
import os
from datetime import date
from decimal import Decimal
from pathlib import Path
import pytest

from ledgerdesk.database.factories import create_sqlite_database
from ledgerdesk.domain.account_records import AccountRecordService
from ledgerdesk.domain.customer import CustomerService
from ledgerdesk.domain.ledger import LedgerService


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def reopen_db(temp_db):
    """Return a factory for a fresh connection to the temporary database.

    CLI commands write through their own connection; tests read the result
    back through a new one.
    """
    opened = []

    def _open():
        db = create_sqlite_database(database_path=temp_db.database_path)
        opened.append(db)
        return db

    yield _open

    for db in opened:
        db.disconnect()


@pytest.fixture
def customer_service(temp_db):
    """Create a CustomerService with a temporary database."""
    return CustomerService(temp_db)


@pytest.fixture
def ledger_service(temp_db):
    """Create a LedgerService with a temporary database."""
    return LedgerService(temp_db)


@pytest.fixture
def account_record_service(temp_db):
    """Create an AccountRecordService with a temporary database."""
    return AccountRecordService(temp_db)


@pytest.fixture
def sample_customer(customer_service):
    """Create a sample customer for testing."""
    customer_id = customer_service.create_customer(
        name="Ramesh Kumar",
        phone="9876543210",
        address="12 Station Road",
        opening_date=date(2024, 1, 1),
    )
    return customer_service.get_customer(customer_id)


@pytest.fixture
def sample_ledger(ledger_service, sample_customer):
    """Give the sample customer a debit of 500 and a credit of 800."""
    ledger_service.record_transaction(
        sample_customer.id, "debit", Decimal("500"), transaction_date=date(2024, 1, 10)
    )
    ledger_service.record_transaction(
        sample_customer.id, "credit", Decimal("800"), transaction_date=date(2024, 2, 5)
    )
    return sample_customer


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()


@pytest.fixture
def fixtures_dir():
    """Return the path to the test fixtures directory."""
    return Path(__file__).parent / "fixtures"
