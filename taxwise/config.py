"""Configuration file management for taxwise."""

import os
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import tomli_w

from taxwise.domain.currency import CurrencyInfo, build_currency_table
from taxwise.domain.errors import ConfigError, InvalidInputError
from taxwise.domain.models import CANONICAL_CURRENCY, CurrencyCode
from taxwise.domain.tax import DEFAULT_TAX_YEAR, TaxTable, get_tax_table


@dataclass(frozen=True)
class Settings:
    """Resolved configuration."""

    currency: CurrencyCode
    tax_table: TaxTable
    currencies: dict[CurrencyCode, CurrencyInfo]


def get_xdg_config_home() -> Path:
    """Get XDG config directory, with fallback to ~/.config."""
    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config:
        return Path(xdg_config)
    return Path.home() / ".config"


def get_config_path() -> Path:
    """Get the config file path (XDG compliant).

    Returns:
        Path to the config file.
    """
    return get_xdg_config_home() / "taxwise" / "config.toml"


def default_config() -> dict[str, Any]:
    return {
        "currency": CANONICAL_CURRENCY,
        "tax_year": DEFAULT_TAX_YEAR,
        "currencies": {},
    }


def create_default_config(config_path: Path | None = None) -> None:
    """Create default config file with secure permissions.

    Args:
        config_path: Path to config file. If None, uses default location.
    """
    save_config(default_config(), config_path)


def load_config(config_path: Path | None = None) -> dict[str, Any]:
    """Load configuration from TOML file.

    Args:
        config_path: Path to config file. If None, uses default location.

    Returns:
        Configuration dictionary.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        ConfigError: If the file is not valid TOML.
    """
    if config_path is None:
        config_path = get_config_path()

    with open(config_path, "rb") as f:
        try:
            return tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ConfigError(f"Invalid config file {config_path}: {e}") from e


def save_config(config: dict[str, Any], config_path: Path | None = None) -> None:
    """Save configuration to TOML file.

    Args:
        config: Configuration dictionary.
        config_path: Path to config file. If None, uses default location.
    """
    if config_path is None:
        config_path = get_config_path()

    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, "wb") as f:
        tomli_w.dump(config, f)

    os.chmod(config_path, 0o600)


def resolve_settings(config: dict[str, Any]) -> Settings:
    """Validate a configuration dictionary and resolve it into Settings.

    Args:
        config: Raw configuration, missing keys fall back to defaults.

    Returns:
        Settings with the tax table and currency table looked up.

    Raises:
        ConfigError: If the tax year, currency or currency table is invalid.
    """
    merged = {**default_config(), **config}

    try:
        currencies = build_currency_table(merged["currencies"])
        tax_table = get_tax_table(str(merged["tax_year"]))
    except InvalidInputError as e:
        raise ConfigError(f"Invalid configuration: {e}") from e

    currency = CurrencyCode(str(merged["currency"]).upper())
    if currency not in currencies:
        raise ConfigError(f"Invalid configuration: unsupported default currency '{merged['currency']}'")

    return Settings(currency=currency, tax_table=tax_table, currencies=currencies)


def get_settings(config_path: Path | None = None) -> Settings:
    """Load and resolve settings, using defaults when no config file exists.

    Args:
        config_path: Path to config file. If None, uses default location.

    Returns:
        Resolved Settings.
    """
    try:
        config = load_config(config_path)
    except FileNotFoundError:
        config = {}
    return resolve_settings(config)


def update_config(changes: dict[str, Any], config_path: Path | None = None) -> Settings:
    """Apply changes to the config file after validating the result.

    Args:
        changes: Keys to set.
        config_path: Path to config file. If None, uses default location.

    Returns:
        Settings resolved from the updated configuration.

    Raises:
        ConfigError: If the updated configuration would be invalid. The file is left as it was.
    """
    try:
        config = load_config(config_path)
    except FileNotFoundError:
        config = default_config()

    config.update(changes)
    settings = resolve_settings(config)
    save_config(config, config_path)
    return settings
