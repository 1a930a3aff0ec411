"""Budget import and export.

This module re-exports the public interchange functions and dispatches
on file suffix: ".json" for JSON, ".xlsx"/".xls" for spreadsheets.
"""

from collections.abc import Mapping
from pathlib import Path

from taxwise.domain.budget import BudgetSummary
from taxwise.domain.currency import CurrencyInfo
from taxwise.domain.errors import UnsupportedFormatError
from taxwise.domain.models import BudgetState, CurrencyCode
from taxwise.domain.tax import TaxTable
from taxwise.interchange.documents import (
    ImportFailure,
    ImportResult,
    ImportSuccess,
    budget_from_document,
    budget_to_document,
)
from taxwise.interchange.excel_io import build_workbook, export_excel, import_excel, read_excel
from taxwise.interchange.json_io import export_json, import_json, parse_json, read_json, write_json

JSON_SUFFIXES = (".json",)
EXCEL_SUFFIXES = (".xlsx", ".xls")


def _unsupported(path: Path) -> UnsupportedFormatError:
    kind = path.suffix or path.name
    return UnsupportedFormatError(f"Unsupported file type '{kind}'. Please use a .json or .xlsx file.")


def import_budget(
    path: Path,
    currencies: Mapping[CurrencyCode, CurrencyInfo] | None = None,
) -> ImportResult:
    """Import a budget file of either format without raising."""
    suffix = path.suffix.lower()
    if suffix in JSON_SUFFIXES:
        return import_json(path, currencies)
    if suffix in EXCEL_SUFFIXES:
        return import_excel(path, currencies)
    return ImportFailure(_unsupported(path))


def export_budget(
    state: BudgetState,
    path: Path,
    summary: BudgetSummary | None = None,
    table: TaxTable | None = None,
    currencies: Mapping[CurrencyCode, CurrencyInfo] | None = None,
) -> None:
    """Export a budget as JSON (".json") or a workbook (".xlsx").

    Raises:
        UnsupportedFormatError: For any other suffix.
        OSError: If the file cannot be written.
    """
    suffix = path.suffix.lower()
    if suffix in JSON_SUFFIXES:
        write_json(state, path)
    elif suffix == ".xlsx":
        export_excel(state, path, summary, table, currencies)
    else:
        raise _unsupported(path)


__all__ = [
    "EXCEL_SUFFIXES",
    "JSON_SUFFIXES",
    "ImportFailure",
    "ImportResult",
    "ImportSuccess",
    "budget_from_document",
    "budget_to_document",
    "build_workbook",
    "export_budget",
    "export_excel",
    "export_json",
    "import_budget",
    "import_excel",
    "import_json",
    "parse_json",
    "read_excel",
    "read_json",
    "write_json",
]
