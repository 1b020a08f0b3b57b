"""
Environment driven settings.

Environment variables:
    DATAUTILS_SORT_CONVERSION_FILE: path to the sort conversion table (YAML or JSON).
        Default: the table shipped in datautils/sorting/sort_conversion.yaml
    DATAUTILS_LOG_LEVEL: level used by configure_logging() (default WARNING).
    DATAUTILS_CURRENCY_SYMBOL: symbol used by pence_to_pounds (default "£").
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from importlib import resources
from pathlib import Path
from typing import Optional

_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_configured = False


def _default_sort_conversion_file() -> Path:
    # shipped as package data next to the sorting loader
    return Path(str(resources.files("datautils") / "sorting" / "sort_conversion.yaml"))


@dataclass(frozen=True)
class Settings:
    sort_conversion_file: Path
    log_level: str = "WARNING"
    currency_symbol: str = "£"

    @classmethod
    def from_env(cls) -> "Settings":
        env_path = os.getenv("DATAUTILS_SORT_CONVERSION_FILE", "").strip()
        path = Path(env_path) if env_path else _default_sort_conversion_file()
        level = (os.getenv("DATAUTILS_LOG_LEVEL", "") or "WARNING").strip().upper()
        symbol = os.getenv("DATAUTILS_CURRENCY_SYMBOL")
        return cls(
            sort_conversion_file=path,
            log_level=level,
            currency_symbol="£" if symbol is None else symbol,
        )


def get_settings() -> Settings:
    # read on every call so tests can monkeypatch the environment
    return Settings.from_env()


def configure_logging(level: Optional[str] = None) -> None:
    """Install a stream handler on the root logger once per process."""
    global _configured
    if _configured:
        return
    resolved = (level or get_settings().log_level).upper()
    logging.basicConfig(
        level=getattr(logging, resolved, logging.WARNING),
        format=_LOG_FORMAT,
        handlers=[logging.StreamHandler()],
    )
    _configured = True
