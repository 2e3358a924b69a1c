"""
This package turns arbitrary nested dicts and lists into trees whose leaves can be read and written via dotted paths,
enumerated, compared, mapped and validated against declarative rules.
"""

from .analysis import ValidationResult
from .core import Deferred, Index, Literal
from .errors import (
    ConfigurationError,
    ConstructionError,
    ImmutableContainerError,
    PathTreeError,
    PathTypeError,
    SegmentError,
    ShapeError,
    WriteOnAtomicError,
)
from .tree import PathTree, PathTreeView, wrap
from .validation import WILDCARD, AbsentPolicy, Rule
