"""
Contains the exceptions raised by the path tree. Every error also derives from the builtin exception it refines,
so callers may catch either the specific error or e.g. a plain `TypeError`.
"""


class PathTreeError(Exception):
    """
    Base class of all errors raised by this package.
    """


class ConstructionError(PathTreeError, TypeError):
    """
    Raised if a tree should be built upon a value which is neither object-like nor array-like.
    """


class PathTypeError(PathTreeError, TypeError):
    """
    Raised if a path is neither a string nor a sequence of segments.
    """


class SegmentError(PathTreeError, TypeError):
    """
    Raised if a segment cannot be used to address a container.
    """


class WriteOnAtomicError(PathTreeError, TypeError):
    """
    Raised if a write has to descend through (or into) a leaf value.
    """


class ImmutableContainerError(PathTreeError, TypeError):
    """
    Raised if a write targets a container which does not support item assignment (e.g. a tuple).
    """


class ShapeError(PathTreeError, TypeError):
    """
    Raised if a traversal is started on a value which is not a container.
    """


class ConfigurationError(PathTreeError, ValueError):
    """
    Raised if a validation rule is malformed. This is not a validation failure but a mistake of the caller.
    """
