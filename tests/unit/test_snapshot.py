from core.entities import DataSnapshot, JsonKind, kind_of, make_snapshot


def test_exists():
    assert make_snapshot("a", 0).exists()
    assert make_snapshot("a", {}).exists()
    assert make_snapshot("a", False).exists()
    assert not make_snapshot("a", None).exists()


def test_val_is_a_copy():
    source = {"name": "Ann", "tags": ["x"]}
    snapshot = make_snapshot("42", source)
    source["name"] = "changed"
    value = snapshot.val()
    value["tags"].append("y")
    assert snapshot.val() == {"name": "Ann", "tags": ["x"]}


def test_for_each_in_enumeration_order():
    snapshot = make_snapshot("users", {"b": 2, "a": 1, "c": 3})
    seen = []
    cancelled = snapshot.for_each(lambda child: seen.append((child.key, child.val())))
    assert seen == [("b", 2), ("a", 1), ("c", 3)]
    assert cancelled is False


def test_for_each_stops_when_callback_returns_true():
    snapshot = make_snapshot("users", {"a": 1, "b": 2, "c": 3})
    seen = []

    def visit(child: DataSnapshot):
        seen.append(child.key)
        return child.key == "b"

    assert snapshot.for_each(visit) is True
    assert seen == ["a", "b"]


def test_for_each_on_scalar_does_not_iterate():
    calls = []
    assert make_snapshot("x", "text").for_each(calls.append) is False
    assert make_snapshot("x", None).for_each(calls.append) is False
    assert calls == []


def test_for_each_over_array_uses_indices():
    keys = []
    make_snapshot("list", ["a", "b"]).for_each(lambda child: keys.append(child.key))
    assert keys == ["0", "1"]


def test_child_walks_multiple_segments():
    snapshot = make_snapshot("42", {"profile": {"address": {"city": "Pune"}}})
    child = snapshot.child("profile/address/city")
    assert child.key == "city"
    assert child.val() == "Pune"


def test_child_missing_or_scalar_never_raises():
    snapshot = make_snapshot("42", {"name": "Ann"})
    assert not snapshot.child("missing/deeper").exists()
    assert not snapshot.child("name/first").exists()
    assert not make_snapshot("x", None).child("a").exists()
    assert snapshot.child("name/first").key == "first"


def test_child_counts():
    snapshot = make_snapshot("42", {"a": 1, "b": {"c": 2}})
    assert snapshot.has_child("b/c")
    assert not snapshot.has_child("z")
    assert snapshot.num_children() == 2
    assert snapshot.has_children()
    assert not make_snapshot("a", 1).has_children()


def test_kind_of():
    assert kind_of(True) is JsonKind.BOOLEAN
    assert kind_of(1.5) is JsonKind.NUMBER
    assert kind_of({}) is JsonKind.OBJECT
    assert kind_of([]) is JsonKind.ARRAY
    assert kind_of(None) is JsonKind.NULL
    assert kind_of("s") is JsonKind.STRING
