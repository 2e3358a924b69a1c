"""
Contains the types used by the path tree
"""
from typing import Any, Callable, Sequence, TypeAlias, Union

SegmentValue: TypeAlias = str | int
DeferredSegment: TypeAlias = Callable[[], SegmentValue]
SegmentLike: TypeAlias = SegmentValue | DeferredSegment
PathT: TypeAlias = Union[str, Sequence[SegmentLike]]
Predicate: TypeAlias = Callable[[Any], Any]
"""A predicate holds if it returns a truthy value."""
Mapper: TypeAlias = Callable[[Any], Any]
