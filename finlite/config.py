"""Configuration file management for finlite."""

import os
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import tomli_w

from finlite.store.schema import get_db_path

DB_ENV_VAR = "FINLITE_DB"


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
    return get_xdg_config_home() / "finlite" / "config.toml"


@dataclass(frozen=True)
class SimulationSettings:
    """Load generation parameters for the concurrency simulation."""

    writes: int = 5
    readers: int = 2
    reads_per_reader: int = 3
    write_delay: float = 0.1
    read_delay: float = 0.15


@dataclass(frozen=True)
class Settings:
    """Resolved application settings."""

    db_path: Path
    csv_path: Path
    currency: str = "₹"
    log_level: str = "WARNING"
    simulation: SimulationSettings = SimulationSettings()


def default_config() -> dict[str, Any]:
    """Configuration written by 'finlite init'."""
    sim = SimulationSettings()
    return {
        "database": {"path": str(get_db_path())},
        "export": {"csv_path": "expenses_summary.csv"},
        "display": {"currency": "₹"},
        "simulation": {
            "writes": sim.writes,
            "readers": sim.readers,
            "reads_per_reader": sim.reads_per_reader,
            "write_delay": sim.write_delay,
            "read_delay": sim.read_delay,
        },
        "logging": {"level": "WARNING"},
    }


def create_default_config(config_path: Path | None = None) -> None:
    """Create default config file with secure permissions.

    Args:
        config_path: Path to config file. If None, uses default location.
    """
    if config_path is None:
        config_path = get_config_path()

    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, "wb") as f:
        tomli_w.dump(default_config(), f)

    os.chmod(config_path, 0o600)


def load_config(config_path: Path | None = None) -> dict[str, Any]:
    """Load configuration from TOML file.

    Args:
        config_path: Path to config file. If None, uses default location.

    Returns:
        Configuration dictionary.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        tomllib.TOMLDecodeError: If the file is not valid TOML.
    """
    if config_path is None:
        config_path = get_config_path()

    with open(config_path, "rb") as f:
        return tomllib.load(f)


def settings_from_config(config: dict[str, Any]) -> Settings:
    """Resolve settings from a config dictionary, filling in defaults.

    The FINLITE_DB environment variable overrides the database path.

    Args:
        config: Parsed configuration (may be empty or partial).

    Returns:
        Settings with every field set.
    """
    database = config.get("database", {})
    export = config.get("export", {})
    display = config.get("display", {})
    logging_cfg = config.get("logging", {})
    sim = config.get("simulation", {})
    defaults = SimulationSettings()

    db_path = os.environ.get(DB_ENV_VAR) or database.get("path")

    return Settings(
        db_path=Path(db_path).expanduser() if db_path else get_db_path(),
        csv_path=Path(export.get("csv_path", "expenses_summary.csv")).expanduser(),
        currency=str(display.get("currency", "₹")),
        log_level=str(logging_cfg.get("level", "WARNING")).upper(),
        simulation=SimulationSettings(
            writes=int(sim.get("writes", defaults.writes)),
            readers=int(sim.get("readers", defaults.readers)),
            reads_per_reader=int(sim.get("reads_per_reader", defaults.reads_per_reader)),
            write_delay=float(sim.get("write_delay", defaults.write_delay)),
            read_delay=float(sim.get("read_delay", defaults.read_delay)),
        ),
    )


def load_settings(config_path: Path | None = None) -> Settings:
    """Load settings, using defaults when the config file is missing.

    Args:
        config_path: Path to config file. If None, uses default location.

    Returns:
        Resolved Settings.
    """
    try:
        config = load_config(config_path)
    except FileNotFoundError:
        config = {}
    return settings_from_config(config)
