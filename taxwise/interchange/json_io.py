"""JSON export and import of budgets."""

import json
import logging
from collections.abc import Mapping
from pathlib import Path

from taxwise.domain.currency import CurrencyInfo
from taxwise.domain.errors import DocumentReadError, ParseError, TaxwiseError
from taxwise.domain.models import BudgetState, CurrencyCode
from taxwise.interchange.documents import (
    ImportFailure,
    ImportResult,
    ImportSuccess,
    budget_from_document,
    budget_to_document,
)

logger = logging.getLogger(__name__)


def export_json(state: BudgetState) -> str:
    """Serialize a budget to pretty-printed JSON text."""
    return json.dumps(budget_to_document(state), indent=2, ensure_ascii=False)


def write_json(state: BudgetState, path: Path) -> None:
    """Write a budget to a JSON file.

    Raises:
        OSError: If the file cannot be written.
    """
    path.write_text(export_json(state) + "\n", encoding="utf-8")
    logger.debug("Wrote %d expenses to %s", len(state.expenses), path)


def parse_json(
    text: str,
    currencies: Mapping[CurrencyCode, CurrencyInfo] | None = None,
) -> BudgetState:
    """Parse JSON text into a validated budget.

    Raises:
        ParseError: If the text is not valid JSON.
        SchemaError: If a required field is missing.
        InvalidInputError: If an amount is negative.
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ParseError(f"Failed to parse JSON file: {e}") from e
    return budget_from_document(data, currencies)


def read_json(
    path: Path,
    currencies: Mapping[CurrencyCode, CurrencyInfo] | None = None,
) -> BudgetState:
    """Read and validate a JSON budget file.

    Raises:
        DocumentReadError: If the file cannot be read.
        ParseError: If the content is not valid JSON text.
        SchemaError: If a required field is missing.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise ParseError(f"File content is not valid text: {e}") from e
    except OSError as e:
        raise DocumentReadError(f"Failed to read the file: {e}") from e
    return parse_json(text, currencies)


def import_json(
    path: Path,
    currencies: Mapping[CurrencyCode, CurrencyInfo] | None = None,
) -> ImportResult:
    """Import a JSON budget file without raising.

    Returns:
        ImportSuccess with the budget, or ImportFailure with the error.
    """
    try:
        state = read_json(path, currencies)
    except TaxwiseError as e:
        logger.info("JSON import of %s failed: %s", path, e)
        return ImportFailure(e)

    logger.info("Imported %d expenses from %s", len(state.expenses), path)
    return ImportSuccess(state, source="json")
