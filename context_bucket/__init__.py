"""
Context buckets: containers grouping heterogeneous context objects by type.

This package contains the type-grouped ContextBucket, the mark-gated
MarkedContextBucket, and the configuration and logging helpers they use.
"""

from .bucket import Context, ContextBucket
from .marked import FilteredInserter, MarkedContextBucket, MarkResolutionError, TypeMark

__all__ = [
    'Context',
    'ContextBucket',
    'FilteredInserter',
    'MarkedContextBucket',
    'MarkResolutionError',
    'TypeMark',
]
