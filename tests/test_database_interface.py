"""Tests for Database interface returning domain models."""

import pytest
from datetime import date, datetime
from decimal import Decimal

from sqlalchemy.exc import SQLAlchemyError

from bankledger.domain import entities
from bankledger.domain.entities import EntryQuery, EntryType
from bankledger.domain.errors import ConflictError, DependencyError, NotFoundError


class TestBanks:
    """Tests for bank storage."""

    def test_get_bank_returns_domain_model(self, temp_db):
        """Test that get_bank returns a domain Bank entity."""
        bank_id = temp_db.create_bank(name="National Bank", opening_balance=Decimal("1000.50"))

        bank = temp_db.get_bank(bank_id)

        assert isinstance(bank, entities.Bank)
        assert bank.id == bank_id
        assert bank.name == "National Bank"
        assert bank.iban is None
        assert bank.opening_balance == Decimal("1000.50")
        assert isinstance(bank.created_at, datetime)

    def test_list_banks_ordered_by_name(self, temp_db):
        temp_db.create_bank(name="Zeta", opening_balance=Decimal("0"))
        temp_db.create_bank(name="Alpha", opening_balance=Decimal("0"))

        assert [bank.name for bank in temp_db.list_banks()] == ["Alpha", "Zeta"]

    def test_get_missing_bank(self, temp_db):
        assert temp_db.get_bank(999) is None
        assert temp_db.get_bank_by_name("Nope") is None

    def test_update_bank(self, temp_db):
        bank_id = temp_db.create_bank(name="Old", opening_balance=Decimal("5"))

        temp_db.update_bank(bank_id, name="New", iban="EG12", opening_balance=Decimal("7.25"))

        bank = temp_db.get_bank(bank_id)
        assert (bank.name, bank.iban, bank.opening_balance) == ("New", "EG12", Decimal("7.25"))

    def test_update_bank_duplicate_name(self, temp_db):
        temp_db.create_bank(name="First", opening_balance=Decimal("0"))
        second = temp_db.create_bank(name="Second", opening_balance=Decimal("0"))

        with pytest.raises(ConflictError):
            temp_db.update_bank(second, name="First")

    def test_update_missing_bank(self, temp_db):
        with pytest.raises(NotFoundError):
            temp_db.update_bank(42, name="Ghost")

    def test_delete_bank_with_entries_is_refused(self, temp_db):
        bank_id = temp_db.create_bank(name="Bank", opening_balance=Decimal("0"))
        temp_db.create_entry(bank_id, EntryType.DEBIT, "Deposit", date(2024, 1, 1), Decimal("10"))

        with pytest.raises(DependencyError, match="1 entry"):
            temp_db.delete_bank(bank_id)

        assert temp_db.get_bank(bank_id) is not None
        assert temp_db.get_bank_entry_count(bank_id) == 1

    def test_delete_bank_cascade(self, temp_db):
        bank_id = temp_db.create_bank(name="Bank", opening_balance=Decimal("0"))
        other_id = temp_db.create_bank(name="Other", opening_balance=Decimal("0"))
        temp_db.create_entry(bank_id, EntryType.DEBIT, "Deposit", date(2024, 1, 1), Decimal("10"))
        temp_db.create_entry(other_id, EntryType.DEBIT, "Deposit", date(2024, 1, 1), Decimal("10"))

        temp_db.delete_bank(bank_id, cascade=True)

        assert temp_db.get_bank(bank_id) is None
        assert temp_db.get_bank_entry_count(bank_id) == 0
        assert len(temp_db.list_entries()) == 1


class TestEntries:
    """Tests for entry storage."""

    @pytest.fixture
    def bank_id(self, temp_db):
        return temp_db.create_bank(name="Bank", opening_balance=Decimal("0"))

    def test_get_entry_returns_domain_model(self, temp_db, bank_id):
        entry_id = temp_db.create_entry(
            bank_id, EntryType.CREDIT, "Rent", date(2024, 2, 1), Decimal("750.25")
        )

        entry = temp_db.get_entry(entry_id)

        assert isinstance(entry, entities.Entry)
        assert entry.type is EntryType.CREDIT
        assert entry.date == date(2024, 2, 1)
        assert entry.amount == Decimal("750.25")

    def test_list_entries_ordered_by_date_then_id(self, temp_db, bank_id):
        late = temp_db.create_entry(bank_id, EntryType.DEBIT, "Late", date(2024, 10, 2), Decimal("1"))
        early = temp_db.create_entry(bank_id, EntryType.DEBIT, "Early", date(2024, 9, 30), Decimal("1"))
        same_day = temp_db.create_entry(bank_id, EntryType.DEBIT, "Early too", date(2024, 9, 30), Decimal("1"))

        assert [e.id for e in temp_db.list_entries()] == [early, same_day, late]

    def test_list_entries_query(self, temp_db, bank_id):
        other = temp_db.create_bank(name="Other", opening_balance=Decimal("0"))
        temp_db.create_entry(bank_id, EntryType.DEBIT, "A", date(2024, 1, 1), Decimal("1"))
        wanted = temp_db.create_entry(bank_id, EntryType.CREDIT, "B", date(2024, 1, 31), Decimal("1"))
        temp_db.create_entry(bank_id, EntryType.CREDIT, "C", date(2024, 2, 1), Decimal("1"))
        temp_db.create_entry(other, EntryType.CREDIT, "D", date(2024, 1, 15), Decimal("1"))

        query = EntryQuery(
            bank_id=bank_id,
            start_date=date(2024, 1, 1),
            end_date=date(2024, 1, 31),
            entry_type=EntryType.CREDIT,
        )
        assert [e.id for e in temp_db.list_entries(query)] == [wanted]

    def test_update_entry(self, temp_db, bank_id):
        entry_id = temp_db.create_entry(bank_id, EntryType.DEBIT, "A", date(2024, 1, 1), Decimal("1"))

        temp_db.update_entry(entry_id, entry_type=EntryType.CREDIT, amount=Decimal("2.50"))

        entry = temp_db.get_entry(entry_id)
        assert entry.type is EntryType.CREDIT
        assert entry.amount == Decimal("2.50")
        assert entry.description == "A"

    def test_delete_entry(self, temp_db, bank_id):
        entry_id = temp_db.create_entry(bank_id, EntryType.DEBIT, "A", date(2024, 1, 1), Decimal("1"))
        temp_db.delete_entry(entry_id)
        assert temp_db.get_entry(entry_id) is None

        with pytest.raises(NotFoundError):
            temp_db.delete_entry(entry_id)

    def test_delete_entries_for_bank(self, temp_db, bank_id):
        for day in (1, 2, 3):
            temp_db.create_entry(bank_id, EntryType.DEBIT, "A", date(2024, 1, day), Decimal("1"))

        assert temp_db.delete_entries_for_bank(bank_id) == 3
        assert temp_db.list_entries() == []

    def test_non_positive_amount_rejected_by_schema(self, temp_db, bank_id):
        with pytest.raises(SQLAlchemyError):
            temp_db.create_entry(bank_id, EntryType.DEBIT, "Zero", date(2024, 1, 1), Decimal("0"))


class TestSettings:
    """Tests for setting storage."""

    def test_default_for_missing_key(self, temp_db):
        assert temp_db.get_setting("missing") is None
        assert temp_db.get_setting("missing", 5) == 5

    def test_set_and_replace(self, temp_db):
        temp_db.set_setting("fiscalStartMonth", 7)
        temp_db.set_setting("fiscalStartMonth", 4)
        temp_db.set_setting("fixedDate", None)

        assert temp_db.list_settings() == {"fiscalStartMonth": 4, "fixedDate": None}


class TestReplaceAll:
    """Tests for the transactional bulk replace."""

    def test_replaces_everything(self, temp_db):
        temp_db.create_bank(name="Old", opening_balance=Decimal("0"))
        temp_db.set_setting("old", 1)

        temp_db.replace_all(
            banks=[{"id": 7, "name": "New", "iban": None, "opening_balance": Decimal("100")}],
            entries=[
                {
                    "id": 3,
                    "bank_id": 7,
                    "type": "debit",
                    "description": "Deposit",
                    "date": date(2024, 1, 1),
                    "amount": Decimal("50"),
                }
            ],
            settings=[{"key": "fiscalStartMonth", "value": 7}],
        )

        assert [(b.id, b.name) for b in temp_db.list_banks()] == [(7, "New")]
        assert [(e.id, e.bank_id) for e in temp_db.list_entries()] == [(3, 7)]
        assert temp_db.list_settings() == {"fiscalStartMonth": 7}

    def test_failure_rolls_back(self, temp_db):
        bank_id = temp_db.create_bank(name="Keep", opening_balance=Decimal("10"))
        temp_db.create_entry(bank_id, EntryType.DEBIT, "Keep", date(2024, 1, 1), Decimal("5"))
        temp_db.set_setting("keep", True)

        with pytest.raises(SQLAlchemyError):
            temp_db.replace_all(
                banks=[{"id": 1, "name": "New", "opening_balance": Decimal("0")}],
                entries=[
                    {
                        "bank_id": 1,
                        "type": "debit",
                        "description": "Broken",
                        "date": date(2024, 1, 1),
                        "amount": Decimal("0"),
                    }
                ],
                settings=[],
            )

        assert [b.name for b in temp_db.list_banks()] == ["Keep"]
        assert [e.description for e in temp_db.list_entries()] == ["Keep"]
        assert temp_db.list_settings() == {"keep": True}
