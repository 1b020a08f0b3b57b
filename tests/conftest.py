import json
from pathlib import Path

import pytest

from datautils.core import timing
from datautils.model.schema import EntitySchema
from datautils.observability.metrics import reset_metrics
from datautils.sorting.cache import default_cache


@pytest.fixture(autouse=True)
def _reset_process_state():
    # sort conversion cache, counters and timers are process wide
    default_cache.reset()
    reset_metrics()
    timing.reset()
    yield
    default_cache.reset()


@pytest.fixture()
def sort_conversion_file(tmp_path: Path, monkeypatch):
    """
    Writes a small conversion table and points DATAUTILS_SORT_CONVERSION_FILE at it.
    """
    f = tmp_path / "sort_conversion.json"
    f.write_text(json.dumps([
        {"character": "é", "conversion": "e"},
        {"character": "ß", "conversion": "ss"},
        {"character": "é", "conversion": "x"},
    ]), encoding="utf-8")
    monkeypatch.setenv("DATAUTILS_SORT_CONVERSION_FILE", str(f))
    return f


@pytest.fixture()
def vehicle_schema():
    return EntitySchema.from_mapping({
        "name": "Vehicle",
        "attributes": {
            "id": {"type": "integer"},
            "registration": "string",
            "mot_due": {"type": "datetime"},
            "is_active": {"type": "boolean"},
            "owner": {"model": "customer"},
            "garage": {"model": "garage"},
            "services": {"collection": "service"},
        },
    })
