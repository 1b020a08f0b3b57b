from datetime import datetime

import pytest

from datautils.core import objects
from datautils.errors import InvalidPathError


# ---------------------------------------------------------------------------
# get_value_at / has_any / has_all
# ---------------------------------------------------------------------------

def test_get_value_at():
    assert objects.get_value_at({"a": {"b": 2}}, "a.b") == 2
    assert objects.get_value_at({"a": {}}, "a.b.c") is None
    assert objects.get_value_at({"a": {"b": None}}, "a.b.c") is None
    assert objects.get_value_at({"a": [{"id": 7}]}, "a.0.id") == 7
    assert objects.get_value_at({"a": [1]}, "a.3") is None


def test_get_value_at_treats_non_ascii_digit_segments_as_missing():
    assert objects.get_value_at({"a": [1]}, "a.²") is None
    assert objects.get_value_at({"a": {"²": 2}}, "a.²") == 2
    assert objects.get_value_at({"a": [1, 2]}, "a.-1") is None
    assert objects.get_value_at({"a": {1: "x"}}, "a.1") == "x"
    assert objects.has_any({"a": [1]}, ["a.²", "a.٣"]) is False


def test_get_value_at_rejects_non_string_path():
    with pytest.raises(InvalidPathError):
        objects.get_value_at({"a": 1}, ["a"])


def test_has_any_and_has_all():
    obj = {"a": {"b": 1}, "c": None}
    assert objects.has_any(obj, ["x", "a.b"]) is True
    assert objects.has_any(obj, ["x", "y"]) is False
    assert objects.has_all(obj, ["a", "c", "a.b"]) is True
    assert objects.has_all(obj, ["a", "z"]) is False


# ---------------------------------------------------------------------------
# omit_deep / pick_deep
# ---------------------------------------------------------------------------

def test_omit_deep_removes_nested_keys():
    assert objects.omit_deep({"a": {"b": 1, "c": 2}}, ["c"]) == {"a": {"b": 1}}
    data = [{"id": 1, "tmp": 1, "items": [{"tmp": 2, "v": 3}]}]
    assert objects.omit_deep(data, ["tmp"]) == [{"id": 1, "items": [{"v": 3}]}]


def test_omit_deep_leaves_dates_and_input_untouched():
    when = datetime(2024, 5, 1)
    src = {"when": when, "c": 1, "n": None}
    out = objects.omit_deep(src, ["c"])
    assert out == {"when": when, "n": None}
    assert out["when"] is when
    assert src == {"when": when, "c": 1, "n": None}
    assert objects.omit_deep(None, ["c"]) == {}


def test_pick_deep_keeps_only_keys():
    src = {"id": 1, "name": "x", "owner": {"id": 2, "name": "y"}}
    assert objects.pick_deep(src, ["id", "owner"]) == {"id": 1, "owner": {"id": 2}}
    assert objects.pick_deep([{"id": 1, "x": 2}], ["id"]) == [{"id": 1}]


def test_omit_and_pick_are_complementary_at_top_level():
    o = {"a": 1, "b": {"c": 2}, "d": [1, 2]}
    keys = ["a", "d"]
    merged = {**objects.omit_deep(o, keys), **objects.pick_deep(o, keys)}
    assert set(merged) == set(o)


def test_omit_and_pick_on_nested_branches():
    o = {"a": {"c": 1}, "b": 2}
    # pick_deep also filters inside the picked branch, so "c" is lost
    assert objects.omit_deep(o, ["a"]) == {"b": 2}
    assert objects.pick_deep(o, ["a"]) == {"a": {}}
    assert {**objects.omit_deep(o, ["a"]), **objects.pick_deep(o, ["a"])} != o
    # the union is whole again once the nested keys are picked as well
    assert {**objects.omit_deep(o, ["a"]), **objects.pick_deep(o, ["a", "c"])} == o
    # omitting a nested key leaves its (now empty) parent in place
    assert objects.omit_deep(o, ["c"]) == {"a": {}, "b": 2}


def test_is_valid_json():
    assert objects.is_valid_json({"a": [1, "x", None, True]}) is True
    assert objects.is_valid_json({"a": object()}) is False
    circular = {}
    circular["self"] = circular
    assert objects.is_valid_json(circular) is False



# ---------------------------------------------------------------------------
# compact / null handling
# ---------------------------------------------------------------------------

def test_compact_keeps_zero_and_false_by_default():
    src = {"a": 0, "b": False, "c": None, "d": "", "e": [], "f": {}, "g": "x"}
    assert objects.compact(src) == {"a": 0, "b": False, "e": [], "f": {}, "g": "x"}
    assert objects.compact(src, remove_falsy=True) == {"e": [], "f": {}, "g": "x"}
    assert objects.compact(src, remove_empty=True) == {"a": 0, "b": False, "g": "x"}
    assert "c" in src


def test_remove_null_attributes_mutates():
    obj = {"a": None, "b": 0}
    assert objects.remove_null_attributes(obj) is obj
    assert obj == {"b": 0}


def test_remove_property_where_regexp():
    assert objects.remove_property_where_regexp({"id": "ab12"}, "id", "[a-z]") == {}
    assert objects.remove_property_where_regexp({"id": "12"}, "id", "[a-z]") == {"id": "12"}
    assert objects.remove_property_where_regexp({"id": 12}, "id", "[a-z]") == {"id": 12}


# ---------------------------------------------------------------------------
# conversions
# ---------------------------------------------------------------------------

def test_convert_keyed_object_to_array_sorts_numerically_and_drops_other_keys():
    keyed = {"10": "k", "2": "c", "name": "x", "0": "a", 1: "b"}
    assert objects.convert_keyed_object_to_array(keyed) == ["a", "b", "c", "k"]


def test_map_property_renames_on_a_copy():
    src = {"first_name": "Ann", "nested": {"x": 1}}
    out = objects.map_property(src, lambda key, value, obj: key.upper())
    assert out == {"FIRST_NAME": "Ann", "NESTED": {"x": 1}}
    out["NESTED"]["x"] = 2
    assert src["nested"]["x"] == 1


def test_to_query_string():
    assert objects.to_query_string({"a": 1, "b": "x y", "c": True}) == "a=1&b=x%20y&c=true"
    assert objects.to_query_string({"q": "a&b=c/d"}) == "q=a%26b%3Dc%2Fd"
    assert objects.to_query_string({}) == ""


def test_create_or_query():
    assert objects.create_or_query([1, 2], "id") == {"or": [{"id": 1}, {"id": 2}]}
    assert objects.create_or_query("[3]", "id", parse_value=True) == {"or": [{"id": 3}]}


def test_sort_objects_by_key():
    rows = [{"n": 2}, {"n": 1}, {"n": 3}]
    assert [r["n"] for r in objects.sort_objects_by_key(rows, "n")] == [1, 2, 3]
    assert [r["n"] for r in objects.sort_objects_reverse_by_key(rows, "n")] == [3, 2, 1]


def test_deep_diff():
    a = {"name": "x", "tags": ["a"], "owner": {"id": 1}, "old": 1}
    b = {"name": "y", "tags": ["a", "b"], "owner": {"id": 1}, "new": 2}
    assert objects.deep_diff(a, b) == {
        "added": ["new", "tags.1"],
        "removed": ["old"],
        "modified": ["name"],
    }
    assert objects.deep_diff(a, dict(a)) is None
    assert objects.deep_diff(1, 2) == {"added": [], "removed": [], "modified": ["$"]}


def test_small_helpers():
    assert objects.is_empty_object(None) is True
    assert objects.is_empty_object({}) is True
    assert objects.is_empty_object([1]) is False
    assert objects.get_keys({"a": 1, "b": 2}) == ["a", "b"]
    assert objects.apply_values({"a": 1}, {"b": 2}) == {"a": 1, "b": 2}
    assert objects.has_child_object({"a": {"b": 1}}) is True
    assert objects.has_child_object({"a": [1]}) is False
