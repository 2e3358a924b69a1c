"""
Contains the iterative descent used to read and write values in nested containers.
Object-like containers are `Mapping`s, array-like containers are `Sequence`s except strings and bytes. Every other
value is a leaf.
"""
from collections.abc import Mapping, MutableMapping, MutableSequence, Sequence
from typing import Any, Optional

from pathtree.errors import ImmutableContainerError, SegmentError, WriteOnAtomicError
from pathtree.types import PathT

from .segments import ConcreteSegment, Index, check_path, parse_path, resolve_segments

_ATOMIC_SEQUENCES = (str, bytes, bytearray)


class _Missing:
    """
    Marks the absence of a value. Contrary to `None` it can never be stored in a tree.
    """

    _instance: Optional["_Missing"] = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self):
        return "MISSING"

    def __bool__(self):
        return False


MISSING: Any = _Missing()


def is_object(value: Any) -> bool:
    return isinstance(value, Mapping)


def is_array(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, _ATOMIC_SEQUENCES)


def is_composite(value: Any) -> bool:
    """
    Returns True if the value is a container. Empty containers are containers as well, they are never leaves.
    """
    return is_object(value) or is_array(value)


def lookup(container: Any, segment: ConcreteSegment) -> Any:
    """
    Returns the child of `container` addressed by `segment` or MISSING if there is none.
    Looking up anything in a leaf yields MISSING as well.
    """
    if is_object(container):
        for key in (segment.key, segment.alternate_key):
            if key is not None and key in container:
                return container[key]
        return MISSING
    if is_array(container):
        position = segment.position
        if position is None or not 0 <= position < len(container):
            return MISSING
        return container[position]
    return MISSING


def store(container: Any, segment: ConcreteSegment, value: Any, template: Any = MISSING) -> None:
    """
    Stores `value` as child of `container`. Writing past the end of an array-like container pads the gap with None,
    or with an empty container wherever `template` (the counterpart of `container`) holds one at that position.
    """
    if is_object(container):
        if not isinstance(container, MutableMapping):
            raise ImmutableContainerError(f"Cannot set '{segment}' on immutable {type(container).__name__}")
        key: Any = segment.key
        if key not in container and segment.alternate_key is not None and segment.alternate_key in container:
            key = segment.alternate_key
        container[key] = value
        return
    if is_array(container):
        if not isinstance(container, MutableSequence):
            raise ImmutableContainerError(f"Cannot set '{segment}' on immutable {type(container).__name__}")
        position = segment.position
        if position is None or position < 0:
            raise SegmentError(f"Cannot address an array-like container with segment '{segment}'")
        if position < len(container):
            container[position] = value
        else:
            container.extend(_filler(template, index) for index in range(len(container), position))
            container.append(value)
        return
    raise WriteOnAtomicError(f"Tried to set property '{segment}' of atomic value {value_repr(container)}")


def _filler(template: Any, position: int) -> Any:
    counterpart = lookup(template, Index(position))
    if is_array(counterpart):
        return []
    if is_object(counterpart):
        return {}
    return None


def value_repr(value: Any) -> str:
    text = repr(value)
    return text if len(text) <= 40 else f"{text[:37]}..."


def _new_container(template: Any, following: ConcreteSegment) -> Any:
    if is_array(template):
        return []
    if is_object(template):
        return {}
    return [] if following.is_index else {}


def resolve(root: Any, path: PathT) -> Any:
    """
    Returns the value stored at `path` or MISSING. The result is not restricted to leaves.
    A string path which is a key of the root itself is returned directly, i.e. a key literally named "a.b" is preferred
    over the descent into "a" and "b".
    """
    check_path(path)
    if isinstance(path, str) and is_object(root) and path in root:
        return root[path]
    node = root
    for segment in resolve_segments(parse_path(path)):
        node = lookup(node, segment)
        if node is MISSING:
            return MISSING
    return node


def assign(root: Any, path: PathT, value: Any, template: Any = MISSING) -> None:
    """
    Stores `value` at `path`, creating missing intermediate containers on the way. A missing container becomes a list
    if the segment addressing its content is an index and a dict otherwise. If a `template` tree is given, a missing
    container takes the kind of the template's node at the same position instead, and gaps in lists are filled with
    empty containers where the template has containers without leaves.
    """
    check_path(path)
    segments = resolve_segments(parse_path(path))
    if not segments:
        return
    node = root
    shadow = template
    for current, following in zip(segments, segments[1:]):
        if not is_composite(node):
            raise WriteOnAtomicError(f"Tried to set property '{current}' of atomic value {value_repr(node)}")
        child_shadow = lookup(shadow, current)
        child = lookup(node, current)
        if child is MISSING:
            child = _new_container(child_shadow, following)
            store(node, current, child, template=shadow)
        node = child
        shadow = child_shadow
    store(node, segments[-1], value, template=shadow)
