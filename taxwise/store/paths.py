"""Locations of taxwise's working files."""

import os
from pathlib import Path


def get_xdg_data_home() -> Path:
    """Get XDG data directory, with fallback to ~/.local/share."""
    xdg_data = os.environ.get("XDG_DATA_HOME")
    if xdg_data:
        return Path(xdg_data)
    return Path.home() / ".local" / "share"


def get_budget_path() -> Path:
    """Get the working budget file path (XDG compliant)."""
    return get_xdg_data_home() / "taxwise" / "budget.json"


def budget_exists(budget_path: Path | None = None) -> bool:
    """Check if the working budget file exists.

    Args:
        budget_path: Path to check. If None, uses default location.

    Returns:
        True if the budget file exists, False otherwise.
    """
    if budget_path is None:
        budget_path = get_budget_path()
    return budget_path.exists()
