import pytest

from layered_config import NestedStore

SEPARATORS = ["", ".", "/", "::"]


def _path(separator, *segments):
    if separator == "":
        return "".join(segments)
    return separator.join(segments)


@pytest.mark.parametrize("separator", SEPARATORS)
@pytest.mark.parametrize("value", [1, 2.5, "text", True, None, [1, 2], {"x": {"y": 1}}])
def test_set_then_get_returns_value(separator, value):
    store = NestedStore()
    path = _path(separator, "a", "b", "c")
    assert store.set(path, value, separator) == value
    assert store.get(path, "missing", separator) == value


def test_initial_data_is_copied():
    data = {"initial": 1}
    store = NestedStore(data)
    data["reference"] = 2
    assert store.get("initial") == 1
    assert store.get("reference") is None
    assert store.to_dict() == {"initial": 1}


def test_set_overwrites():
    store = NestedStore()
    assert store.set("simple", "value") == "value"
    assert store.set("simple", "overwrite") == "overwrite"
    assert store.get("simple") == "overwrite"


def test_nested_set_creates_levels():
    store = NestedStore()
    store.set("db.primary.host", "localhost", ".")
    assert store.to_dict() == {"db": {"primary": {"host": "localhost"}}}
    assert store.get("db.primary", separator=".") == {"host": "localhost"}


def test_set_replaces_scalar_on_the_way():
    store = NestedStore({"db": "sqlite"})
    store.set("db.host", "localhost", ".")
    assert store.get("db", separator=".") == {"host": "localhost"}


def test_empty_separator_keeps_dotted_keys_flat():
    store = NestedStore()
    store.set("app.name", "demo")
    assert store.to_dict() == {"app.name": "demo"}
    assert store.get("app.name") == "demo"
    assert store.get("app.name", "missing", ".") == "missing"


def test_empty_segments_are_keys():
    store = NestedStore()
    store.set("a..b", 1, ".")
    assert store.to_dict() == {"a": {"": {"b": 1}}}
    assert store.get("a..b", separator=".") == 1


def test_get_through_scalar_returns_default():
    store = NestedStore({"a": 1})
    assert store.get("a.b", "default", ".") == "default"


def test_get_returns_copies():
    store = NestedStore({"list": [1, 2], "map": {"k": "v"}})
    items = store.get("list")
    items.append(3)
    mapping = store.get("map")
    mapping["k"] = "changed"
    snapshot = store.to_dict()
    snapshot["map"]["k"] = "changed"
    assert store.get("list") == [1, 2]
    assert store.get("map") == {"k": "v"}


def test_set_stores_a_copy():
    store = NestedStore()
    value = {"k": [1]}
    store.set("key", value)
    value["k"].append(2)
    assert store.get("key") == {"k": [1]}


@pytest.mark.parametrize("separator", SEPARATORS)
def test_delete_missing_path_is_noop(separator):
    store = NestedStore({"a": {"b": 1}, "c": 2})
    before = store.to_dict()
    assert store.delete(_path(separator, "a", "x"), separator) is None
    assert store.delete(_path(separator, "zz", "b"), separator) is None
    assert store.to_dict() == before


def test_delete_returns_removed_value_and_keeps_parents():
    store = NestedStore()
    store.set("a.b.c", 1, ".")
    assert store.delete("a.b.c", ".") == 1
    assert store.to_dict() == {"a": {"b": {}}}


def test_delete_subtree():
    store = NestedStore({"a": {"b": {"c": 1}}, "d": 2})
    assert store.delete("a.b", ".") == {"c": 1}
    assert store.to_dict() == {"a": {}, "d": 2}


def test_delete_through_scalar_is_noop():
    store = NestedStore({"a": 1})
    assert store.delete("a.b", ".") is None
    assert store.to_dict() == {"a": 1}


def test_has_distinguishes_stored_none():
    store = NestedStore({"nothing": None})
    assert store.has("nothing")
    assert not store.has("absent")
    assert "nothing" in store
    assert len(store) == 1
