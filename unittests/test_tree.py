from collections import OrderedDict

import pytest

from pathtree import (
    ConstructionError,
    ImmutableContainerError,
    Index,
    PathTree,
    PathTreeView,
    PathTypeError,
    SegmentError,
    ShapeError,
    WriteOnAtomicError,
    wrap,
)


@pytest.fixture
def data() -> dict:
    return {"a": 1, "b": {"c": 2, "d": [3, {"e": 4}, None]}, "f": "text"}


class TestConstruction:
    @pytest.mark.parametrize("root", [{}, [], {"a": 1}, [1, 2], (1, 2), OrderedDict(a=1)])
    def test_composite_root(self, root):
        assert wrap(root).root is root

    @pytest.mark.parametrize("root", [None, 1, 1.5, "abc", b"abc", True])
    def test_atomic_root(self, root):
        with pytest.raises(ConstructionError) as error:
            wrap(root)
        assert isinstance(error.value, TypeError)

    def test_wrap_returns_path_tree(self):
        assert isinstance(wrap({}), PathTree)


class TestGet:
    def test_dotted_path(self, data):
        tree = wrap(data)
        assert tree.get("a") == 1
        assert tree.get("b.c") == 2
        assert tree.get("b.d.1.e") == 4

    def test_segment_path(self, data):
        tree = wrap(data)
        assert tree.get(["b", "d", 0]) == 3
        assert tree.get(("b", "d", "1", "e")) == 4
        assert tree.get(["b", "d", Index(1), "e"]) == 4

    def test_containers_are_returned(self, data):
        tree = wrap(data)
        assert tree.get("b") is data["b"]
        assert tree.get("b.d") is data["b"]["d"]

    def test_missing_path(self, data):
        tree = wrap(data)
        assert tree.get("x") is None
        assert tree.get("x.y.z") is None
        assert tree.get("b.d.7") is None
        assert tree.get("b.d.first") is None
        assert tree.get("x", default="fallback") == "fallback"

    def test_descending_into_leaf_yields_nothing(self, data):
        tree = wrap(data)
        assert tree.get("a.b") is None
        assert tree.get("f.0") is None

    def test_stored_none_is_present(self, data):
        tree = wrap(data)
        assert tree.get("b.d.2", default="fallback") is None
        assert tree.has("b.d.2")
        assert not tree.has("b.d.3")

    def test_key_with_dot_is_preferred(self):
        tree = wrap({"a.b": "flat", "a": {"b": "nested"}})
        assert tree.get("a.b") == "flat"
        assert tree.get(["a", "b"]) == "nested"

    def test_empty_path_returns_root(self, data):
        assert wrap(data).get("") is data

    def test_integer_keys_of_mappings(self):
        tree = wrap({1: "one", "2": "two"})
        assert tree.get("1") == "one"
        assert tree.get([1]) == "one"
        assert tree.get([2]) == "two"

    def test_negative_index(self):
        assert wrap([1, 2]).get([-1]) is None

    def test_deferred_segments(self):
        tree = wrap({"items": [{"v": "x"}, {"v": "y"}]})
        i = 0
        path = ["items", lambda: i, "v"]
        found = []
        for i in range(2):
            found.append(tree.get(path))
        assert found == ["x", "y"]

    @pytest.mark.parametrize("path", [None, 1, {"a"}])
    def test_invalid_path(self, data, path):
        with pytest.raises(PathTypeError):
            wrap(data).get(path)


class TestSet:
    def test_overwrite_leaf(self, data):
        tree = wrap(data)
        tree.set("b.c", 20)
        assert data["b"]["c"] == 20

    def test_set_then_get(self, data):
        tree = wrap(data)
        tree.set("b.d.1.e", "new")
        assert tree.get("b.d.1.e") == "new"

    def test_auto_vivification(self):
        root: dict = {}
        wrap(root).set("a.0.b", 5)
        assert root == {"a": [{"b": 5}]}

    def test_auto_vivification_with_segments(self):
        root: dict = {}
        wrap(root).set(["x", 0, "y", "1"], "v")
        assert root == {"x": [{"y": [None, "v"]}]}

    def test_array_root(self):
        root: list = []
        tree = wrap(root)
        tree.set("0.name", "first")
        tree.set("1", "second")
        assert root == [{"name": "first"}, "second"]

    def test_append_pads_with_none(self):
        root = {"l": [1]}
        wrap(root).set("l.3", 4)
        assert root == {"l": [1, None, None, 4]}

    def test_name_with_trailing_newline_is_no_index(self):
        root: dict = {}
        wrap(root).set("a.1\n", "v")
        assert root == {"a": {"1\n": "v"}}

    def test_existing_integer_key_is_overwritten(self):
        root = {1: "one"}
        wrap(root).set("1", "uno")
        assert root == {1: "uno"}

    def test_empty_path_is_noop(self, data):
        before = repr(data)
        wrap(data).set("", "ignored")
        assert repr(data) == before

    def test_write_through_leaf(self, data):
        tree = wrap(data)
        with pytest.raises(WriteOnAtomicError):
            tree.set("a.b", 1)
        with pytest.raises(WriteOnAtomicError):
            tree.set("f.x.y", 1)
        assert data["a"] == 1

    def test_write_into_tuple(self):
        with pytest.raises(ImmutableContainerError):
            wrap({"t": (1, 2)}).set("t.0", 5)

    def test_name_on_array(self):
        with pytest.raises(SegmentError):
            wrap([]).set("name", 1)

    def test_invalid_path(self, data):
        with pytest.raises(PathTypeError):
            wrap(data).set(3, 1)

    def test_aliasing_wrappers(self, data):
        first = wrap(data)
        second = wrap(data)
        first.set("g", 7)
        assert second.get("g") == 7


class TestKeys:
    def test_keys(self, data):
        assert wrap(data).keys() == ["a", "b.c", "b.d.0", "b.d.1.e", "b.d.2", "f"]

    def test_keys_with_prefix(self):
        assert wrap({"a": 1, "b": [2]}).keys("root") == ["root.a", "root.b.0"]

    def test_empty_containers_are_no_leaves(self):
        assert wrap({"a": {}, "b": [], "c": [[], {}]}).keys() == []

    def test_insertion_order(self):
        root = {"z": 1, "a": 2}
        root["m"] = 3
        assert wrap(root).keys() == ["z", "a", "m"]

    def test_idempotent(self, data):
        tree = wrap(data)
        assert tree.keys() == tree.keys()

    def test_keys_of_replaced_root(self):
        tree = PathTreeView({})
        tree._root = 5  # pylint: disable=protected-access
        with pytest.raises(ShapeError):
            tree.keys()


class TestDerivedOperations:
    def test_values(self, data):
        assert wrap(data).values() == [1, 2, 3, 4, None, "text"]

    def test_from_keys_round_trip(self, data):
        tree = wrap(data)
        assert tree.from_keys(tree.keys()) == tree.values()

    def test_from_keys_missing(self, data):
        assert wrap(data).from_keys(["a", "nope"]) == [1, None]

    def test_filter_keys(self, data):
        assert wrap(data).filter_keys(lambda v: isinstance(v, int)) == ["a", "b.c", "b.d.0", "b.d.1.e"]

    def test_flatten(self, data):
        assert wrap(data).flatten() == {"a": 1, "b.c": 2, "b.d.0": 3, "b.d.1.e": 4, "b.d.2": None, "f": "text"}

    def test_find_key(self, data):
        tree = wrap(data)
        assert tree.find_key(lambda v: v == 4) == "b.d.1.e"
        assert tree.find_key(lambda v: isinstance(v, int) and v > 1) == "b.c"
        assert tree.find_key(lambda v: v == "absent") is None


class TestMap:
    def test_map(self, data):
        mapped = wrap(data).map(lambda v: v * 2 if isinstance(v, int) else v)
        assert mapped == {"a": 2, "b": {"c": 4, "d": [6, {"e": 8}, None]}, "f": "text"}

    def test_identity_is_equal_but_detached(self, data):
        tree = wrap(data)
        mapped = tree.map(lambda v: v)
        assert tree.equal(mapped)
        wrap(mapped).set("b.c", 99)
        assert data["b"]["c"] == 2
        assert not tree.equal(mapped)

    def test_array_root(self):
        mapped = wrap([1, [2, 3]]).map(str)
        assert mapped == ["1", ["2", "3"]]

    def test_digit_keys_keep_their_container_kind(self):
        root = {"x": {"1": "a"}}
        mapped = wrap(root).map(str.upper)
        assert mapped == {"x": {"1": "A"}}
        assert wrap(root).keys() == wrap(mapped).keys()

    @pytest.mark.parametrize(
        "root",
        [
            [[], 5],
            [{}, 5],
            [5, []],
            {"a": [{"x": {}}, 1]},
            {"a": [[], {}, [[]], "leaf", {}]},
            [[[], 1], {}, 2],
            {"empty": [], "nested": {"list": [{}, [], 3]}},
        ],
    )
    def test_identity_keeps_containers_without_leaves(self, root):
        tree = wrap(root)
        mapped = tree.map(lambda v: v)
        assert wrap(mapped).keys() == tree.keys()
        assert tree.equal(mapped)

    def test_gaps_are_filled_with_empty_containers(self):
        assert wrap([[[], 1], {}, 2]).map(str) == [[[], "1"], {}, "2"]
        assert wrap({"a": [{"x": {}}, 1]}).map(str) == {"a": [{}, "1"]}


class TestEqual:
    def test_reflexive(self, data):
        tree = wrap(data)
        assert tree.equal(tree.root)
        assert tree.equal(tree)

    def test_equal_copy(self):
        assert wrap({"a": [1, {"b": "x"}]}).equal({"a": [1, {"b": "x"}]})

    def test_changed_leaf(self, data):
        tree = wrap(data)
        other = tree.map(lambda v: v)
        wrap(other).set("b.d.0", 30)
        assert not tree.equal(other)

    def test_added_and_removed_leaf(self):
        tree = wrap({"a": 1, "b": 2})
        assert not tree.equal({"a": 1, "b": 2, "c": 3})
        assert not tree.equal({"a": 1})

    def test_order_matters(self):
        assert not wrap({"a": 1, "b": 2}).equal({"b": 2, "a": 1})

    def test_leaves_are_compared_strictly(self):
        assert not wrap({"a": 1}).equal({"a": 1.0})
        assert not wrap({"a": 1}).equal({"a": True})

    def test_atomic_other(self):
        assert not wrap({}).equal(None)
        assert not wrap({}).equal("a")

    def test_array_and_object_with_same_leaves(self):
        assert wrap(["x"]).equal({"0": "x"})


class TestView:
    def test_view_shares_root(self, data):
        tree = wrap(data)
        view = tree.view()
        tree.set("b.c", 5)
        assert view.get("b.c") == 5
        assert view.root is data

    def test_view_is_read_only(self, data):
        view = wrap(data).view()
        assert not hasattr(view, "set")
