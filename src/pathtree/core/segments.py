"""
Contains the segment types a path is made of and the functions to parse a path into segments.
A segment is either a `Literal` (a property name), an `Index` (a position in an array-like container) or a `Deferred`
segment which is evaluated to one of the former two each time the path gets resolved.
"""
import re
from dataclasses import dataclass
from typing import Any, Optional

from pathtree.errors import PathTypeError, SegmentError
from pathtree.types import DeferredSegment, PathT

INDEX_PATTERN = re.compile(r"[0-9]+")


@dataclass(frozen=True)
class Literal:
    """
    A property name. If the name consists of digits only it can address array-like containers as well.
    """

    name: str

    @property
    def key(self) -> str:
        """The key used to store a new value in an object-like container"""
        return self.name

    @property
    def alternate_key(self) -> Optional[int]:
        """Digit-only names may also address integer keys of an object-like container"""
        return int(self.name) if self.is_index else None

    @property
    def position(self) -> Optional[int]:
        """The position in an array-like container or None if the name is no index"""
        return int(self.name) if self.is_index else None

    @property
    def is_index(self) -> bool:
        return INDEX_PATTERN.fullmatch(self.name) is not None

    def __str__(self):
        return self.name


@dataclass(frozen=True)
class Index:
    """
    A numeric position. In object-like containers it addresses the integer key or, as fallback, its string form.
    """

    position: int

    @property
    def key(self) -> str:
        return str(self.position)

    @property
    def alternate_key(self) -> int:
        return self.position

    @property
    def is_index(self) -> bool:
        return self.position >= 0

    def __str__(self):
        return str(self.position)


@dataclass(frozen=True)
class Deferred:
    """
    A segment which is computed lazily. The factory is called every time the path is resolved which allows to build
    a path once and reuse it with e.g. a changing loop counter.
    """

    factory: DeferredSegment

    def resolve(self) -> "Literal | Index":
        """Calls the factory and tags its result"""
        return _tag_value(self.factory(), source="deferred segment")

    def __str__(self):
        return f"<deferred {getattr(self.factory, '__name__', repr(self.factory))}>"


Segment = Literal | Index | Deferred
ConcreteSegment = Literal | Index


def _tag_value(value: Any, source: str) -> ConcreteSegment:
    # bool is a subclass of int but never a sensible index
    if isinstance(value, bool):
        raise SegmentError(f"Unsupported {source}: {value!r}")
    if isinstance(value, str):
        return Literal(value)
    if isinstance(value, int):
        return Index(value)
    if isinstance(value, float) and value.is_integer():
        return Index(int(value))
    raise SegmentError(f"Unsupported {source} of type {type(value).__name__}: {value!r}")


def check_path(path: Any) -> None:
    """
    Raises a PathTypeError if the path is neither a string nor a list or tuple of segments.
    """
    if not isinstance(path, (str, list, tuple)):
        raise PathTypeError(f"String or sequence expected as path, received: {type(path).__name__}")


def parse_path(path: PathT) -> list[Segment]:
    """
    Splits a path into its segments. An empty string results in no segments at all.
    Elements of a segment sequence may be strings, integers, zero-argument callables or segments. Floats without
    fractional part are taken as integers, all other floats are rejected.
    """
    check_path(path)
    if isinstance(path, str):
        if not path:
            return []
        return [Literal(name) for name in path.split(".")]
    segments: list[Segment] = []
    for element in path:
        if isinstance(element, (Literal, Index, Deferred)):
            segments.append(element)
        elif callable(element):
            segments.append(Deferred(element))
        else:
            segments.append(_tag_value(element, source="path segment"))
    return segments


def resolve_segments(segments: list[Segment]) -> list[ConcreteSegment]:
    """
    Evaluates all deferred segments.
    """
    return [segment.resolve() if isinstance(segment, Deferred) else segment for segment in segments]


def format_path(path: PathT) -> str:
    """
    Returns a dotted representation of the path for messages. Deferred segments are not evaluated.
    """
    return ".".join(str(segment) for segment in parse_path(path))
