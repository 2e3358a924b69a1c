"""
Contains the tree wrappers. A `PathTreeView` provides read access to every leaf of a nested composite value via
dotted paths, a `PathTree` additionally allows to write into it.
Neither of them copies the wrapped value: all wrappers of the same value see each other's changes.
"""
from typing import Any, Iterable, Mapping, Optional

from .analysis import ValidationResult
from .core import MISSING, assign, is_array, is_composite, is_object, resolve
from .errors import ConstructionError, ShapeError
from .types import Mapper, PathT, Predicate
from .validation import AbsentPolicy, Rule, expand_rules, run_rules

RuleSpec = Rule | Mapping[str, Any]


def _same_leaf(first: Any, second: Any) -> bool:
    # leaves are compared without recursion; 1 == 1.0 == True must not count as equal
    return first is second or (type(first) is type(second) and first == second)


class PathTreeView:
    """
    Read-only access to a nested composite value. The root has to be object-like (a Mapping) or array-like
    (a Sequence which is no string).
    """

    def __init__(self, root: Any):
        if not is_composite(root):
            raise ConstructionError(f"Constructor received atomic value as root: {type(root).__name__}")
        self._root = root

    def __repr__(self):
        return f"{type(self).__name__}({self._root!r})"

    @property
    def root(self) -> Any:
        """The wrapped value itself (not a copy)"""
        return self._root

    def get(self, path: PathT, default: Any = None) -> Any:
        """
        Returns the value at `path` which may be a leaf or a container. If the path does not exist, `default` is
        returned. The empty path "" addresses the root.
        """
        value = resolve(self._root, path)
        return default if value is MISSING else value

    def has(self, path: PathT) -> bool:
        """
        Returns True if something (possibly None) is stored at `path`.
        """
        return resolve(self._root, path) is not MISSING

    def keys(self, prefix: Optional[str] = None) -> list[str]:
        """
        Returns the full dotted path of every leaf, depth-first in insertion (resp. index) order.
        If `prefix` is given, every path gets prefixed with it.
        """
        if is_object(self._root):
            children = ((str(key), child) for key, child in self._root.items())
        elif is_array(self._root):
            children = ((str(index), child) for index, child in enumerate(self._root))
        else:
            raise ShapeError(f"Object or array expected, received: {type(self._root).__name__}")
        keys: list[str] = []
        for key, child in children:
            if is_composite(child):
                keys.extend(PathTreeView(child).keys(key))
            else:
                keys.append(key)
        if prefix is not None:
            keys = [f"{prefix}.{key}" for key in keys]
        return keys

    def values(self) -> list[Any]:
        """Returns every leaf value in the order of `keys()`"""
        return self.from_keys(self.keys())

    def from_keys(self, keys: Iterable[PathT]) -> list[Any]:
        return [self.get(key) for key in keys]

    def filter_keys(self, predicate: Predicate) -> list[str]:
        """Returns the leaf paths whose value satisfies `predicate`"""
        return [key for key in self.keys() if predicate(self.get(key))]

    def flatten(self) -> dict[str, Any]:
        """
        Returns a single level dict mapping every leaf path to its value.
        """
        return {key: self.get(key) for key in self.keys()}

    def find_key(self, predicate: Predicate) -> Optional[str]:
        """Returns the first leaf path whose value satisfies `predicate` or None"""
        return next((key for key in self.keys() if predicate(self.get(key))), None)

    def map(self, mapper: Mapper) -> Any:
        """
        Returns a new, detached value of the same shape in which every leaf is replaced by `mapper(leaf)`.
        Containers are created with the kind (list or dict) of their counterpart in this tree.
        """
        mapped: Any = [] if is_array(self._root) else {}
        for key in self.keys():
            assign(mapped, key, mapper(self.get(key)), template=self._root)
        return mapped

    def equal(self, other: Any) -> bool:
        """
        Returns True if `other` has the same leaf paths in the same order and equal leaf values.
        `other` may be a composite value or another tree.
        """
        if isinstance(other, PathTreeView):
            other = other.root
        if not is_composite(other):
            return False
        other_tree = PathTreeView(other)
        keys = self.keys()
        other_keys = other_tree.keys()
        if keys != other_keys:
            return False
        return all(
            _same_leaf(value, other_value)
            for value, other_value in zip(self.from_keys(keys), other_tree.from_keys(other_keys))
        )

    def check(self, rules: Iterable[RuleSpec], absent: AbsentPolicy = AbsentPolicy.SHORT_CIRCUIT) -> ValidationResult:
        """
        Validates the tree against `rules` and returns the detailed result. Wildcard rules (path "*") are expanded
        into one rule per leaf path before any rule is evaluated.
        An optional rule whose path is absent accepts the whole tree by default; pass `absent=AbsentPolicy.SKIP` to
        only skip that rule instead.
        """
        return run_rules(self._root, expand_rules(rules, self.keys), absent=absent)

    def validate(self, rules: Iterable[RuleSpec], absent: AbsentPolicy = AbsentPolicy.SHORT_CIRCUIT) -> bool:
        return self.check(rules, absent=absent).valid


class PathTree(PathTreeView):
    """
    Read and write access to a nested composite value. Writes mutate the wrapped value in place.
    """

    def set(self, path: PathT, value: Any) -> None:
        """
        Stores `value` at `path`. Missing intermediate containers are created: a list if the following segment is
        an index (e.g. "0"), a dict otherwise. Writing through a leaf raises a WriteOnAtomicError.
        """
        assign(self._root, path, value)

    def view(self) -> PathTreeView:
        """Returns a read-only wrapper of the same value"""
        return PathTreeView(self._root)


def wrap(root: Any) -> PathTree:
    """
    Wraps `root` into a PathTree. Raises a ConstructionError if `root` is no container.
    """
    return PathTree(root)
