"""
Contains the path resolution: parsing paths into segments and descending into nested containers
"""
from .resolver import MISSING, assign, is_array, is_composite, is_object, lookup, resolve, store
from .segments import Deferred, Index, Literal, Segment, check_path, format_path, parse_path, resolve_segments
