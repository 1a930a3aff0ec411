"""Session store - owns the working budget between commands.

This module re-exports the public store functions for easy importing.
"""

from taxwise.store.paths import budget_exists, get_budget_path, get_xdg_data_home
from taxwise.store.session import BudgetSession, load_session, save_session

__all__ = [
    "BudgetSession",
    "budget_exists",
    "get_budget_path",
    "get_xdg_data_home",
    "load_session",
    "save_session",
]
