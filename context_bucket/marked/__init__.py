"""
Marked buckets: containers that only accept contexts matching their marks.
"""

from .bucket import FilteredInserter, MarkedContextBucket
from .marks import MarkResolutionError, TypeMark, resolve_mark, resolve_marks

__all__ = [
    'FilteredInserter',
    'MarkedContextBucket',
    'MarkResolutionError',
    'TypeMark',
    'resolve_mark',
    'resolve_marks',
]
