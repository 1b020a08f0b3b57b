from __future__ import annotations

import csv
import io
import json
import logging
from typing import Any, Dict, Iterable, List, Optional

from datautils.errors import JSONParseError
from datautils.observability import metrics

_log = logging.getLogger("datautils.json")


def parse_json(value: Any) -> Any:
    """
    Parse value if it arrived as a JSON string (e.g. a query parameter).

    Non-string values are returned unchanged.
    """
    if not isinstance(value, str):
        return value
    try:
        return json.loads(value)
    except json.JSONDecodeError as exc:
        _log.error("Error parsing json: %s", exc)
        metrics.inc_named("json_parse_errors")
        raise JSONParseError("Value is not parsable JSON", details={"error": str(exc)}) from exc


def to_csv(rows: Optional[Iterable[Dict[str, Any]]], fields: Optional[List[str]] = None) -> str:
    """Render rows as CSV with a header line. Fields default to the keys of the first row."""
    rows = list(rows or [])
    if fields is None:
        fields = list(rows[0].keys()) if rows else []
    buf = io.StringIO()
    writer = csv.DictWriter(buf, fieldnames=fields, extrasaction="ignore", lineterminator="\n")
    writer.writeheader()
    for row in rows:
        writer.writerow(row)
    return buf.getvalue()
