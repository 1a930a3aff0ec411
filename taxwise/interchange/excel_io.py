"""Spreadsheet export and import of budgets.

Exported workbooks carry three sheets:
- Summary: label/value rows in the display currency
- Expenses: one Category/Amount row per expense in the display currency
- RawData: hidden, one row mirroring the JSON document for lossless re-import

Import prefers RawData. Workbooks without it (a hand-made expense list,
or a bank export) are read as a flat list of "Other" expenses.
"""

import json
import logging
import math
import zipfile
from collections.abc import Mapping
from pathlib import Path
from typing import Any
from uuid import uuid4

import pandas as pd
from openpyxl import Workbook
from openpyxl.utils.exceptions import InvalidFileException
from openpyxl.worksheet.worksheet import Worksheet

from taxwise.domain.budget import BudgetSummary, reconstruct_categories
from taxwise.domain.currency import CurrencyInfo
from taxwise.domain.errors import DocumentReadError, ParseError, SchemaError, TaxwiseError
from taxwise.domain.models import (
    CANONICAL_CURRENCY,
    BudgetState,
    CurrencyCode,
    CustomCategory,
    Expense,
    ExpenseId,
    Money,
    to_minor,
)
from taxwise.domain.snapshot import create_snapshot
from taxwise.domain.tax import TaxTable
from taxwise.interchange.documents import (
    ImportFailure,
    ImportResult,
    ImportSuccess,
    budget_from_document,
    budget_to_document,
)

logger = logging.getLogger(__name__)

SUMMARY_SHEET = "Summary"
EXPENSES_SHEET = "Expenses"
RAW_SHEET = "RawData"

RAW_COLUMNS = ("monthlySalary", "currency", "expenseCategories", "expenses")
LABEL_COLUMNS = ("Category", "category")
AMOUNT_COLUMNS = ("Amount", "amount")
FALLBACK_LABEL = "Imported Expense"


def _append_row(sheet: Worksheet, values: list[Any]) -> None:
    """Append a row, keeping user text that starts with '=' as plain text."""
    sheet.append(values)
    for cell in sheet[sheet.max_row]:
        if cell.data_type == "f":
            cell.data_type = "s"


def build_workbook(
    state: BudgetState,
    summary: BudgetSummary | None = None,
    table: TaxTable | None = None,
    currencies: Mapping[CurrencyCode, CurrencyInfo] | None = None,
) -> Workbook:
    """Build the three-sheet workbook for a budget.

    Args:
        state: Budget to export.
        summary: Precomputed totals. Computed from state if omitted.
        table: Tax table used when computing totals.
        currencies: Currency table for the display sheets.

    Returns:
        openpyxl Workbook ready to save.
    """
    snapshot = create_snapshot(state, summary, table, currencies)

    wb = Workbook()
    ws_summary = wb.active
    ws_summary.title = SUMMARY_SHEET
    ws_summary.append(["TaxWise Budget Summary"])
    ws_summary.append([])
    ws_summary.append(["Currency", snapshot.currency])
    ws_summary.append(["Monthly Salary (Gross)", round(snapshot.monthly_salary, 2)])
    ws_summary.append(["Monthly Tax", round(snapshot.monthly_tax, 2)])
    ws_summary.append(["Monthly Net Income", round(snapshot.net_monthly, 2)])
    ws_summary.append(["Total Expenses", round(snapshot.total_expenses, 2)])
    ws_summary.append(["Remaining Balance", round(snapshot.remaining_balance, 2)])

    ws_expenses = wb.create_sheet(EXPENSES_SHEET)
    ws_expenses.append(["Category", "Amount"])
    for line in snapshot.expenses:
        _append_row(ws_expenses, [line.label, round(line.amount, 2)])

    document = budget_to_document(state)
    ws_raw = wb.create_sheet(RAW_SHEET)
    ws_raw.append(list(RAW_COLUMNS))
    ws_raw.append(
        [
            document["monthlySalary"],
            document["currency"],
            json.dumps(document["expenseCategories"], ensure_ascii=False),
            json.dumps(document["expenses"], ensure_ascii=False),
        ]
    )
    ws_raw.sheet_state = "hidden"

    return wb


def export_excel(
    state: BudgetState,
    path: Path,
    summary: BudgetSummary | None = None,
    table: TaxTable | None = None,
    currencies: Mapping[CurrencyCode, CurrencyInfo] | None = None,
) -> None:
    """Write a budget workbook to disk.

    Raises:
        OSError: If the file cannot be written.
    """
    build_workbook(state, summary, table, currencies).save(path)
    logger.debug("Wrote workbook with %d expenses to %s", len(state.expenses), path)


def _open_workbook(path: Path) -> pd.ExcelFile:
    try:
        return pd.ExcelFile(path, engine="openpyxl")
    except (zipfile.BadZipFile, InvalidFileException, KeyError, ValueError) as e:
        raise ParseError(f"Failed to parse Excel file: {e}") from e
    except OSError as e:
        raise DocumentReadError(f"Failed to read the file: {e}") from e


def _parse_sheet(workbook: pd.ExcelFile, sheet_name: str) -> pd.DataFrame:
    try:
        return workbook.parse(sheet_name)
    except (KeyError, ValueError) as e:
        raise ParseError(f"Failed to parse sheet '{sheet_name}': {e}") from e


def _plain(value: Any) -> Any:
    """Unwrap numpy scalars into Python values."""
    return value.item() if hasattr(value, "item") else value


def raw_record_from_frame(frame: pd.DataFrame) -> dict[str, Any]:
    """Turn the first RawData row back into a document dictionary.

    Cells left empty are dropped so that they read as missing fields, and
    sub-documents flattened to text are parsed again.

    Raises:
        SchemaError: If the sheet has no data row.
        ParseError: If an embedded sub-document is not valid JSON.
    """
    if frame.empty:
        raise SchemaError(f"{RAW_SHEET} sheet is empty or invalid.")

    record: dict[str, Any] = {}
    for key, value in frame.iloc[0].items():
        if pd.isna(value):
            continue
        record[str(key)] = _plain(value)

    for key in ("expenses", "expenseCategories"):
        if isinstance(record.get(key), str):
            try:
                record[key] = json.loads(record[key])
            except json.JSONDecodeError as e:
                raise ParseError(f"{RAW_SHEET} '{key}' is not valid JSON: {e}") from e
    return record


def _first_value(row: Mapping[str, Any], columns: tuple[str, ...]) -> Any:
    for column in columns:
        value = row.get(column)
        if value is None or pd.isna(value) or str(value).strip() == "":
            continue
        return value
    return None


def _coerce_amount(value: Any) -> Money:
    """Parse a cell as an amount: non-numeric or infinite is 0, debits (negative) count as spending."""
    if value is None:
        return Money(0)
    number = pd.to_numeric(value, errors="coerce")
    if pd.isna(number) or not math.isfinite(number):
        return Money(0)
    return to_minor(abs(float(number)))


def expenses_from_frame(frame: pd.DataFrame) -> tuple[Expense, ...]:
    """Read a flat Category/Amount sheet as "Other" expenses.

    The flat format carries no ids, so each row gets a random one.
    """
    batch = uuid4().hex
    expenses: list[Expense] = []
    for position, row in enumerate(frame.to_dict("records")):
        label = _first_value(row, LABEL_COLUMNS)
        expenses.append(
            Expense(
                id=ExpenseId(f"imported-{position}-{batch}"),
                category=CustomCategory(str(label).strip() if label is not None else FALLBACK_LABEL),
                amount=_coerce_amount(_first_value(row, AMOUNT_COLUMNS)),
            )
        )
    return tuple(expenses)


def find_expense_sheet(sheet_names: list[str]) -> str | None:
    """Pick the sheet named "Expenses" (any case), else the first sheet."""
    for name in sheet_names:
        if name.lower() == EXPENSES_SHEET.lower():
            return name
    return sheet_names[0] if sheet_names else None


def read_excel(
    path: Path,
    currencies: Mapping[CurrencyCode, CurrencyInfo] | None = None,
) -> tuple[BudgetState, str]:
    """Read a budget workbook, trying each strategy in a fixed order.

    Args:
        path: Workbook path.
        currencies: Supported currencies for validating the raw sheet.

    Returns:
        Tuple of (budget, source) where source is "raw-sheet" or "expense-sheet".

    Raises:
        DocumentReadError: If the file cannot be read.
        ParseError: If the file is not a workbook.
        SchemaError: If no usable sheet exists.
    """
    with _open_workbook(path) as workbook:
        sheet_names = [str(name) for name in workbook.sheet_names]

        if RAW_SHEET in sheet_names:
            record = raw_record_from_frame(_parse_sheet(workbook, RAW_SHEET))
            return budget_from_document(record, currencies), "raw-sheet"

        sheet = find_expense_sheet(sheet_names)
        if sheet is None:
            raise SchemaError("No valid sheet found in Excel file.")

        logger.info("No %s sheet in %s, reading '%s' as a flat expense list", RAW_SHEET, path, sheet)
        expenses = expenses_from_frame(_parse_sheet(workbook, sheet))

    return (
        BudgetState(
            monthly_salary=Money(0),
            expenses=expenses,
            currency=CANONICAL_CURRENCY,
            expense_categories=reconstruct_categories(expenses),
        ),
        "expense-sheet",
    )


def import_excel(
    path: Path,
    currencies: Mapping[CurrencyCode, CurrencyInfo] | None = None,
) -> ImportResult:
    """Import a budget workbook without raising.

    Returns:
        ImportSuccess with the budget, or ImportFailure with the error.
    """
    try:
        state, source = read_excel(path, currencies)
    except TaxwiseError as e:
        logger.info("Excel import of %s failed: %s", path, e)
        return ImportFailure(e)

    logger.info("Imported %d expenses from %s (%s)", len(state.expenses), path, source)
    return ImportSuccess(state, source=source)
