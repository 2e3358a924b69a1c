"""
Contains some useful utility functions to query typed leaves and to build type checking rules.
"""
from typing import Any, Optional, TypeVar, overload

from typeguard import TypeCheckError, check_type

from pathtree.core import MISSING, format_path, resolve
from pathtree.tree import PathTreeView
from pathtree.types import PathT, Predicate

LeafT = TypeVar("LeafT")


def _root_of(tree: Any) -> Any:
    return tree.root if isinstance(tree, PathTreeView) else PathTreeView(tree).root


def optional_leaf(tree: Any, path: PathT, leaf_type: type[LeafT]) -> Optional[LeafT]:
    """
    Tries to query the `tree` with the provided `path`. If it is not existent or if the type of the value doesn't
    match, `None` will be returned.
    """
    try:
        return required_leaf(tree, path, leaf_type)
    except (KeyError, TypeCheckError):
        return None


@overload
def required_leaf(tree: Any, path: PathT, leaf_type: type[LeafT], param_base_path: Optional[str] = None) -> LeafT:
    ...


@overload
def required_leaf(tree: Any, path: PathT, leaf_type: Any, param_base_path: Optional[str] = None) -> Any:
    ...


def required_leaf(tree: Any, path: PathT, leaf_type: Any, param_base_path: Optional[str] = None) -> Any:
    """
    Tries to query the `tree` (a PathTreeView or a plain composite value) with the provided `path`.
    If it is not existent, a KeyError will be raised.
    If the value is found, the type will be checked and TypeCheckError will be raised if the type doesn't match the
    value.
    """
    current_path = format_path(path)
    if param_base_path is not None:
        current_path = f"{param_base_path}.{current_path}"
    value = resolve(_root_of(tree), path)
    if value is MISSING:
        raise KeyError(f"{current_path}: Not found")
    try:
        check_type(value, leaf_type)
    except TypeCheckError as error:
        raise TypeCheckError(f"{current_path}: {error}") from error
    return value


def of_type(leaf_type: Any) -> Predicate:
    """
    Returns a validation predicate which holds if the value matches `leaf_type`, e.g. `of_type(int | None)`.
    """

    def _check(value: Any) -> bool:
        try:
            check_type(value, leaf_type)
        except TypeCheckError:
            return False
        return True

    _check.__name__ = f"of_type({getattr(leaf_type, '__name__', leaf_type)})"
    return _check
