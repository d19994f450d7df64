"""Tests for bank service and commands."""

import pytest
from datetime import date
from decimal import Decimal

from bankledger.cli.main import cli
from bankledger.domain.entities import EntryType
from bankledger.domain.errors import ConflictError, DependencyError, NotFoundError, ValidationError


class TestBankService:
    """Tests for BankService."""

    def test_create_bank(self, bank_service):
        bank_id = bank_service.create_bank("  CIB  ", Decimal("2500.75"), iban="EG99")

        bank = bank_service.get_bank(bank_id)
        assert bank.name == "CIB"
        assert bank.opening_balance == Decimal("2500.75")
        assert bank.iban == "EG99"

    def test_create_bank_defaults(self, bank_service):
        bank = bank_service.get_bank(bank_service.create_bank("Plain"))
        assert bank.opening_balance == Decimal("0")
        assert bank.iban is None

    def test_create_bank_requires_name(self, bank_service):
        with pytest.raises(ValidationError):
            bank_service.create_bank("   ")

    @pytest.mark.parametrize("opening", [Decimal("100.005"), "-0.001", "NaN", "lots"])
    def test_create_bank_refuses_invalid_opening_balance(self, bank_service, opening):
        with pytest.raises(ValidationError):
            bank_service.create_bank("Fractional", opening)

        assert bank_service.list_banks() == []

    def test_create_duplicate_bank(self, bank_service, sample_bank):
        with pytest.raises(ConflictError, match="already exists"):
            bank_service.create_bank(sample_bank.name)

    def test_update_bank(self, bank_service, sample_bank):
        bank_service.update_bank(sample_bank.id, name="Renamed", opening_balance=Decimal("5"))

        bank = bank_service.get_bank(sample_bank.id)
        assert bank.name == "Renamed"
        assert bank.opening_balance == Decimal("5")
        assert bank.iban == sample_bank.iban

    def test_update_bank_to_own_name(self, bank_service, sample_bank):
        bank_service.update_bank(sample_bank.id, name=sample_bank.name)
        assert bank_service.get_bank(sample_bank.id).name == sample_bank.name

    def test_update_bank_name_taken(self, bank_service, sample_bank):
        other = bank_service.create_bank("Other")
        with pytest.raises(ConflictError):
            bank_service.update_bank(other, name=sample_bank.name)

    def test_update_bank_refuses_sub_cent_opening_balance(self, bank_service, sample_bank):
        with pytest.raises(ValidationError, match="more than two decimal places"):
            bank_service.update_bank(sample_bank.id, opening_balance=Decimal("0.001"))

        assert bank_service.get_bank(sample_bank.id).opening_balance == Decimal("1000")

    def test_update_missing_bank(self, bank_service):
        with pytest.raises(NotFoundError):
            bank_service.update_bank(404, name="Ghost")

    def test_opening_balance_change_is_reflected_in_balances(
        self, bank_service, report_service, sample_bank, sample_entries
    ):
        assert report_service.bank_summary(sample_bank.id).balance == Decimal("4200")

        bank_service.update_bank(sample_bank.id, opening_balance=Decimal("0"))

        assert report_service.bank_summary(sample_bank.id).balance == Decimal("3200")

    def test_delete_bank_without_entries(self, bank_service, sample_bank):
        assert bank_service.delete_bank(sample_bank.id) == 0
        assert bank_service.get_bank(sample_bank.id) is None

    def test_delete_bank_with_entries_fails(self, bank_service, entry_service, sample_bank):
        entry_service.create_entry(sample_bank.id, EntryType.DEBIT, "Deposit", date(2024, 1, 1), Decimal("1"))

        with pytest.raises(DependencyError, match="1 entry"):
            bank_service.delete_bank(sample_bank.id)

        assert bank_service.get_bank(sample_bank.id) is not None
        assert len(entry_service.list_entries()) == 1

    def test_delete_bank_cascade(self, bank_service, entry_service, sample_bank, sample_entries):
        assert bank_service.delete_bank(sample_bank.id, cascade=True) == 3

        assert bank_service.get_bank(sample_bank.id) is None
        assert entry_service.list_entries() == []

    def test_delete_missing_bank(self, bank_service):
        with pytest.raises(NotFoundError):
            bank_service.delete_bank(404)


class TestBankCommands:
    """Tests for bank commands."""

    def test_bank_create(self, cli_runner, temp_db):
        result = cli_runner.invoke(
            cli,
            ["--db-path", temp_db.database_path, "bank", "create", "CIB", "--opening-balance", "1,250.50"],
        )

        assert result.exit_code == 0
        assert "Created bank 'CIB'" in result.output
        assert "ID:" in result.output
        assert temp_db.get_bank_by_name("CIB").opening_balance == Decimal("1250.50")

    def test_bank_create_invalid_balance(self, cli_runner, temp_db):
        result = cli_runner.invoke(
            cli, ["--db-path", temp_db.database_path, "bank", "create", "CIB", "--opening-balance", "lots"]
        )

        assert result.exit_code == 1
        assert "Invalid amount format" in result.output

    def test_bank_create_duplicate(self, cli_runner, temp_db, sample_bank):
        result = cli_runner.invoke(
            cli, ["--db-path", temp_db.database_path, "bank", "create", sample_bank.name]
        )

        assert result.exit_code == 1
        assert "already exists" in result.output.lower()

    def test_bank_list_empty(self, cli_runner, temp_db):
        result = cli_runner.invoke(cli, ["--db-path", temp_db.database_path, "bank", "list"])

        assert result.exit_code == 0
        assert "No banks found" in result.output

    def test_bank_list_with_balance(self, cli_runner, temp_db, sample_bank, sample_entries):
        result = cli_runner.invoke(cli, ["--db-path", temp_db.database_path, "bank", "list"])

        assert result.exit_code == 0
        assert "National Bank" in result.output
        assert "1,000.00 EGP" in result.output
        assert "4,200.00 EGP" in result.output

    def test_bank_edit(self, cli_runner, temp_db, sample_bank):
        result = cli_runner.invoke(
            cli,
            ["--db-path", temp_db.database_path, "bank", "edit", "National Bank", "--name", "NBE"],
        )

        assert result.exit_code == 0
        assert f"Updated bank {sample_bank.id}" in result.output
        temp_db.disconnect()
        assert temp_db.get_bank(sample_bank.id).name == "NBE"

    def test_bank_edit_requires_a_change(self, cli_runner, temp_db, sample_bank):
        result = cli_runner.invoke(cli, ["--db-path", temp_db.database_path, "bank", "edit", "1"])

        assert result.exit_code == 1
        assert "Nothing to change" in result.output

    def test_bank_edit_unknown_bank(self, cli_runner, temp_db):
        result = cli_runner.invoke(
            cli, ["--db-path", temp_db.database_path, "bank", "edit", "Nope", "--name", "X"]
        )

        assert result.exit_code == 1
        assert "Bank 'Nope' not found" in result.output

    def test_bank_delete_with_entries_refused(self, cli_runner, temp_db, sample_bank, sample_entries):
        result = cli_runner.invoke(
            cli, ["--db-path", temp_db.database_path, "bank", "delete", str(sample_bank.id), "--yes"]
        )

        assert result.exit_code == 1
        assert "3 entries" in result.output
        assert "--cascade" in result.output

    def test_bank_delete_cascade(self, cli_runner, temp_db, sample_bank, sample_entries):
        result = cli_runner.invoke(
            cli,
            ["--db-path", temp_db.database_path, "bank", "delete", "National Bank", "--cascade", "--yes"],
        )

        assert result.exit_code == 0
        assert "Deleted bank 'National Bank'" in result.output
        assert "Deleted 3 entries" in result.output
        temp_db.disconnect()
        assert temp_db.list_banks() == []
        assert temp_db.list_entries() == []

    def test_bank_delete_cancelled(self, cli_runner, temp_db, sample_bank):
        result = cli_runner.invoke(
            cli, ["--db-path", temp_db.database_path, "bank", "delete", "National Bank"], input="n\n"
        )

        assert result.exit_code == 0
        assert "Deletion cancelled" in result.output
        temp_db.disconnect()
        assert temp_db.get_bank(sample_bank.id) is not None
