"""Tests for taxwise.interchange JSON documents."""

import json
from pathlib import Path

import pytest

from taxwise.domain.errors import DocumentReadError, InvalidInputError, ParseError, SchemaError
from taxwise.domain.models import BudgetState
from taxwise.interchange import ImportFailure, ImportSuccess, import_budget
from taxwise.interchange.documents import budget_to_document
from taxwise.interchange.json_io import export_json, import_json, parse_json, write_json


def minimal_document(**overrides: object) -> dict[str, object]:
    document: dict[str, object] = {
        "monthlySalary": 30000,
        "currency": "ZAR",
        "expenses": [
            {"id": "1", "category": "Food", "amount": 1500.5},
            {"id": "2", "category": "Other", "customName": "Gym", "amount": 450},
            {"id": "3", "category": "Food", "amount": 99.99},
        ],
    }
    document.update(overrides)
    return document


class TestExportJson:
    """Tests for JSON export."""

    def test_document_shape(self, sample_state: BudgetState) -> None:
        """Should write every field with major-unit amounts."""
        document = json.loads(export_json(sample_state))

        assert document["monthlySalary"] == 50000.0
        assert document["currency"] == "USD"
        assert document["expenseCategories"] == ["Food", "Rent", "Other", "Holidays"]
        assert document["expenses"][1] == {"id": "e-food", "category": "Food", "amount": 3500.5}

    def test_custom_name_only_for_other(self, sample_state: BudgetState) -> None:
        """Should include customName only on 'Other' expenses."""
        expenses = budget_to_document(sample_state)["expenses"]

        assert expenses[2] == {"id": "e-gym", "category": "Other", "customName": "Gym", "amount": 499.99}
        assert "customName" not in expenses[0]

    def test_round_trip(self, sample_state: BudgetState) -> None:
        """Should import exactly what was exported."""
        assert parse_json(export_json(sample_state)) == sample_state

    def test_round_trip_empty_budget(self) -> None:
        """Should round-trip a brand new budget."""
        assert parse_json(export_json(BudgetState())) == BudgetState()

    def test_write_and_import_file(self, sample_state: BudgetState, tmp_path: Path) -> None:
        """Should round-trip through a file."""
        path = tmp_path / "budget.json"
        write_json(sample_state, path)

        result = import_json(path)

        assert isinstance(result, ImportSuccess)
        assert result.state == sample_state
        assert result.source == "json"


class TestParseJson:
    """Tests for JSON parsing and validation."""

    def test_amounts_converted_to_cents(self) -> None:
        """Should store amounts as cents."""
        state = parse_json(json.dumps(minimal_document()))

        assert state.monthly_salary == 3_000_000
        assert [e.amount for e in state.expenses] == [150_050, 45_000, 9_999]
        assert state.expenses[1].label == "Gym"

    def test_missing_categories_reconstructed(self) -> None:
        """Should rebuild categories from distinct expense categories when absent."""
        state = parse_json(json.dumps(minimal_document()))

        assert state.expense_categories == ("Food", "Other")

    def test_missing_categories_and_expenses_empty(self) -> None:
        """Should yield no categories for an empty expense list."""
        state = parse_json(json.dumps(minimal_document(expenses=[])))

        assert state.expense_categories == ()

    @pytest.mark.parametrize("field", ["monthlySalary", "expenses", "currency"])
    def test_missing_required_field(self, field: str) -> None:
        """Should reject documents missing a required field."""
        document = minimal_document()
        del document[field]

        with pytest.raises(SchemaError, match=field):
            parse_json(json.dumps(document))

    def test_malformed_json(self) -> None:
        """Should report malformed text as a parse error."""
        with pytest.raises(ParseError):
            parse_json('{"monthlySalary": 1,')

    def test_not_an_object(self) -> None:
        """Should reject top-level arrays."""
        with pytest.raises(SchemaError):
            parse_json("[1, 2, 3]")

    def test_unsupported_currency(self) -> None:
        """Should reject unknown currency codes."""
        with pytest.raises(SchemaError, match="JPY"):
            parse_json(json.dumps(minimal_document(currency="JPY")))

    def test_negative_salary(self) -> None:
        """Should reject negative salaries."""
        with pytest.raises(InvalidInputError):
            parse_json(json.dumps(minimal_document(monthlySalary=-1)))

    def test_salary_must_be_number(self) -> None:
        """Should reject non-numeric salaries."""
        with pytest.raises(SchemaError):
            parse_json(json.dumps(minimal_document(monthlySalary="lots")))

    @pytest.mark.parametrize("salary", ["1e400", "-1e400", "NaN", '"inf"', '"nan"'])
    def test_non_finite_salary_rejected(self, salary: str) -> None:
        """Should reject infinite and NaN amounts instead of overflowing."""
        text = f'{{"monthlySalary": {salary}, "expenses": [], "currency": "ZAR"}}'

        with pytest.raises(SchemaError, match="finite"):
            parse_json(text)

    def test_non_finite_expense_amount_rejected(self) -> None:
        """Should reject an expense amount that overflows to infinity."""
        text = '{"monthlySalary": 1, "currency": "ZAR", "expenses": [{"id": "1", "category": "Food", "amount": 1e400}]}'

        with pytest.raises(SchemaError, match="finite"):
            parse_json(text)

    def test_numeric_strings_accepted(self) -> None:
        """Should tolerate amounts written as numeric text."""
        state = parse_json(json.dumps(minimal_document(monthlySalary="25000.50")))

        assert state.monthly_salary == 2_500_050

    def test_expense_missing_amount(self) -> None:
        """Should reject expenses without an amount."""
        with pytest.raises(SchemaError, match="amount"):
            parse_json(json.dumps(minimal_document(expenses=[{"id": "1", "category": "Food"}])))

    def test_expense_without_id_gets_one(self) -> None:
        """Should synthesize ids for expenses that lack them."""
        state = parse_json(json.dumps(minimal_document(expenses=[{"category": "Food", "amount": 1}])))

        assert state.expenses[0].id

    def test_duplicate_ids_rejected(self) -> None:
        """Should reject documents with repeated expense ids."""
        expenses = [{"id": "1", "category": "Food", "amount": 1}, {"id": "1", "category": "Rent", "amount": 2}]

        with pytest.raises(SchemaError, match="unique"):
            parse_json(json.dumps(minimal_document(expenses=expenses)))

    def test_other_without_custom_name(self) -> None:
        """Should reject 'Other' expenses without a name."""
        with pytest.raises(InvalidInputError):
            parse_json(json.dumps(minimal_document(expenses=[{"id": "1", "category": "Other", "amount": 1}])))

    def test_custom_name_ignored_for_named_category(self) -> None:
        """Should drop customName on named categories."""
        expenses = [{"id": "1", "category": "Food", "customName": "Snacks", "amount": 1}]
        state = parse_json(json.dumps(minimal_document(expenses=expenses)))

        assert state.expenses[0].label == "Food"


class TestImportJson:
    """Tests for the non-raising JSON import boundary."""

    def test_missing_file(self, tmp_path: Path) -> None:
        """Should report unreadable files as read errors."""
        result = import_json(tmp_path / "missing.json")

        assert isinstance(result, ImportFailure)
        assert isinstance(result.error, DocumentReadError)
        assert "Failed to read" in result.message

    def test_malformed_file(self, tmp_path: Path) -> None:
        """Should report malformed files as parse errors."""
        path = tmp_path / "broken.json"
        path.write_text("not json at all")

        result = import_json(path)

        assert isinstance(result, ImportFailure)
        assert isinstance(result.error, ParseError)

    def test_dispatch_by_suffix(self, sample_state: BudgetState, tmp_path: Path) -> None:
        """Should pick JSON import for .json files in any case."""
        path = tmp_path / "BUDGET.JSON"
        write_json(sample_state, path)

        result = import_budget(path)

        assert isinstance(result, ImportSuccess)
        assert result.state == sample_state

    def test_unsupported_suffix(self, tmp_path: Path) -> None:
        """Should refuse other file types."""
        path = tmp_path / "budget.csv"
        path.write_text("Category,Amount\n")

        result = import_budget(path)

        assert isinstance(result, ImportFailure)
        assert ".json or .xlsx" in result.message

    def test_overflowing_number(self, tmp_path: Path) -> None:
        """Should turn an infinite salary into a failure, not an exception."""
        path = tmp_path / "huge.json"
        path.write_text('{"monthlySalary": 1e400, "expenses": [], "currency": "ZAR"}')

        result = import_budget(path)

        assert isinstance(result, ImportFailure)
        assert isinstance(result.error, SchemaError)
        assert "finite" in result.message
