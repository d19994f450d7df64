"""Shared pytest fixtures for bankledger tests."""

import tempfile
import os
from datetime import date
from decimal import Decimal
import pytest

from bankledger.database.factories import create_sqlite_database
from bankledger.domain.backup import BackupService
from bankledger.domain.bank import BankService
from bankledger.domain.entities import EntryType
from bankledger.domain.entry import EntryService
from bankledger.domain.reports import ReportService
from bankledger.domain.settings import SettingsService


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    # Create database
    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    # Cleanup
    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def bank_service(temp_db):
    """Create a BankService with a temporary database."""
    return BankService(temp_db)


@pytest.fixture
def entry_service(temp_db):
    """Create an EntryService with a temporary database."""
    return EntryService(temp_db)


@pytest.fixture
def settings_service(temp_db):
    """Create a SettingsService with a temporary database."""
    return SettingsService(temp_db)


@pytest.fixture
def report_service(temp_db):
    """Create a ReportService with a temporary database."""
    return ReportService(temp_db)


@pytest.fixture
def backup_service(temp_db):
    """Create a BackupService with a temporary database."""
    return BackupService(temp_db)


@pytest.fixture
def sample_bank(bank_service):
    """Create a sample bank with an opening balance of 1000."""
    bank_id = bank_service.create_bank(
        name="National Bank", opening_balance=Decimal("1000"), iban="EG380019000500000000263180002"
    )
    return bank_service.get_bank(bank_id)


@pytest.fixture
def sample_entries(entry_service, sample_bank):
    """Record entries for July and August 2024 on the sample bank.

    July: debit 1500, credit 500. August: debit 2200.
    """
    ids = [
        entry_service.create_entry(
            sample_bank.id, EntryType.DEBIT, "Salary", date(2024, 7, 1), Decimal("1500")
        ),
        entry_service.create_entry(
            sample_bank.id, EntryType.CREDIT, "Rent", date(2024, 7, 15), Decimal("500")
        ),
        entry_service.create_entry(
            sample_bank.id, EntryType.DEBIT, "Bonus", date(2024, 8, 10), Decimal("2200")
        ),
    ]
    return [entry_service.get_entry(entry_id) for entry_id in ids]


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
