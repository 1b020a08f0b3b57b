"""
Sort conversion table loader.

The table maps single characters to the string they should sort as in the
database (for example accented letters to their plain equivalents).

File format (YAML or JSON), either a list of entries:
    - {character: "é", conversion: "e"}
    - {character: "ß", conversion: "ss"}
or a flat mapping:
    é: e
    ß: ss

Environment variable:
    DATAUTILS_SORT_CONVERSION_FILE, path to the file (optional).
    Default: the table shipped with the package (datautils/sorting/sort_conversion.yaml)
"""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, List, Optional

import yaml
from pydantic import BaseModel, ValidationError, field_validator

from datautils.config import get_settings
from datautils.errors import SortConversionUnavailable

_log = logging.getLogger("datautils.sorting")


class SortConversionEntry(BaseModel):
    character: str
    conversion: str

    @field_validator("character")
    @classmethod
    def _single_character(cls, v: str) -> str:
        if len(v) != 1:
            raise ValueError("character must be exactly one character long")
        return v


def _parse_entries(raw: Any) -> List[SortConversionEntry]:
    """Convert a loaded list/mapping into entries, skipping invalid ones."""
    if isinstance(raw, dict):
        raw = [{"character": k, "conversion": v} for k, v in raw.items()]

    out: List[SortConversionEntry] = []
    for item in raw:
        if not isinstance(item, dict):
            _log.warning("Skipping sort conversion entry %r (expected a mapping)", item)
            continue
        try:
            out.append(SortConversionEntry(
                character=str(item.get("character", "")),
                conversion="" if item.get("conversion") is None else str(item.get("conversion")),
            ))
        except ValidationError as exc:
            _log.warning("Skipping invalid sort conversion entry %r: %s", item, exc.errors()[0]["msg"])
    return out


def load_sort_conversion(path: Optional[Path] = None) -> List[SortConversionEntry]:
    """
    Load the sort conversion table from a YAML or JSON file.

    Raises SortConversionUnavailable if the file is absent, unreadable,
    malformed or not a list/mapping.
    """
    resolved = Path(path) if path is not None else get_settings().sort_conversion_file

    if not resolved.exists():
        raise SortConversionUnavailable(
            f"Sort conversion file not found: {resolved}",
            details={"path": str(resolved)},
        )

    try:
        raw_text = resolved.read_text(encoding="utf-8")
    except OSError as exc:
        raise SortConversionUnavailable(
            f"Cannot read sort conversion file {resolved}: {exc}",
            details={"path": str(resolved)},
        ) from exc

    # JSON first, YAML as the fallback
    try:
        data = json.loads(raw_text)
    except json.JSONDecodeError:
        try:
            data = yaml.safe_load(raw_text)
        except yaml.YAMLError as exc:
            raise SortConversionUnavailable(
                f"Failed to parse sort conversion file {resolved} as JSON or YAML: {exc}",
                details={"path": str(resolved)},
            ) from exc

    if not isinstance(data, (list, dict)):
        raise SortConversionUnavailable(
            f"Sort conversion file {resolved} must be a list or mapping, got {type(data).__name__}",
            details={"path": str(resolved)},
        )

    entries = _parse_entries(data)
    _log.info("Loaded %d sort conversion entries from %s", len(entries), resolved)
    return entries
