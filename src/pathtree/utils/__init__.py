"""
Contains utility functions to work with typed leaves
"""
from .query_object import of_type, optional_leaf, required_leaf
