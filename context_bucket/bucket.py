"""
Type-grouped container for heterogeneous context objects.

A ContextBucket keeps every stored value in a group keyed by the value's
exact runtime type. Groups keep insertion order, and group keys keep the
order in which each type was first added. Lookups for missing types return
None or an empty list rather than raising.
"""

import copy
from abc import ABC
from itertools import chain
from typing import Any, Callable, Dict, Iterator, List, Optional, Type, TypeVar

from context_bucket.utils.logging import get_logger

logger = get_logger()

T = TypeVar('T')


class Context(ABC):
    """
    Marker base class for values stored in a bucket.

    Subclassing is optional: a bucket stores any object and groups it
    by type(value).
    """


class ContextBucket:
    """Multi-map from exact runtime type to the ordered values of that type."""

    @classmethod
    def instance(cls, *contexts: Any) -> 'ContextBucket':
        """Create a bucket holding the given contexts"""
        return cls(*contexts)

    def __init__(self, *contexts: Any):
        self._groups: Dict[type, List[Any]] = {}
        self.add(*contexts)

    def add(self, *contexts: Any) -> 'ContextBucket':
        """
        Append contexts to the groups of their exact types.

        Returns:
            The bucket itself, for chaining
        """
        for context in contexts:
            self._groups.setdefault(type(context), []).append(context)
        return self

    def last(self, context_type: Type[T]) -> Optional[T]:
        """Most recently added value of exactly `context_type`, or None"""
        group = self._groups.get(context_type)
        return group[-1] if group else None

    def all(self) -> Dict[type, List[Any]]:
        """Copy of the whole grouping; changing it does not affect the bucket"""
        return {context_type: list(group) for context_type, group in self._groups.items()}

    def group(self, context_type: Optional[Type[T]] = None) -> List[T]:
        """Values of exactly `context_type` in insertion order, [] when there are none"""
        if context_type is None:
            return []
        return list(self._groups.get(context_type, ()))

    def has(self, context_type: type) -> bool:
        return bool(self._groups.get(context_type))

    def types(self) -> List[type]:
        """Group keys in first-insertion order"""
        return list(self._groups)

    def without_all(self, context_type: type) -> 'ContextBucket':
        """
        Copy of this bucket with the whole `context_type` group removed.

        The receiver is left untouched. The copy has its own dict and lists
        but shares the stored values.
        """
        cloned = self._clone()
        cloned._groups.pop(context_type, None)
        return cloned

    def to_flat_list(self) -> List[Any]:
        """All values, group by group, each group in insertion order"""
        return list(chain.from_iterable(self._groups.values()))

    def filter(self, predicate: Callable[[Any], bool]) -> 'ContextBucket':
        """
        Regroup the values that satisfy `predicate` into a new ContextBucket.

        The predicate sees values in flattened order.
        """
        kept = [context for context in self.to_flat_list() if predicate(context)]
        logger.debug("bucket.filter.complete", total=len(self), kept=len(kept))
        return ContextBucket.instance(*kept)

    def _clone(self) -> 'ContextBucket':
        cloned = copy.copy(self)
        cloned._groups = self.all()
        return cloned

    def __len__(self) -> int:
        return sum(len(group) for group in self._groups.values())

    def __iter__(self) -> Iterator[Any]:
        return iter(self.to_flat_list())

    def __contains__(self, context_type: type) -> bool:
        return self.has(context_type)

    def __repr__(self) -> str:
        counts = ", ".join(f"{t.__name__}={len(g)}" for t, g in self._groups.items())
        return f"{type(self).__name__}({counts})"
