"""
Buckets that only accept contexts matching a fixed set of marks.
Path: context_bucket/marked/bucket.py
"""

import copy
from typing import Any, Callable, Dict, Iterator, List, Optional, Sequence, Tuple, Type, TypeVar

from context_bucket.bucket import ContextBucket
from context_bucket.config import get_value
from context_bucket.marked.marks import Mark, MarkResolutionError, MarkSpec, resolve_marks
from context_bucket.utils.logging import get_logger

logger = get_logger()

T = TypeVar('T')


class FilteredInserter:
    """
    Wraps an owned ContextBucket and gates insertion through mark predicates.

    A context is stored when at least one mark accepts it, and it is stored
    once no matter how many marks accept it. Rejected contexts are dropped
    without an error. Every read is answered by the wrapped bucket.
    """

    @classmethod
    def instance(cls, marks: Sequence[Any], *contexts: Any) -> 'FilteredInserter':
        return cls(marks, *contexts)

    def __init__(self, marks: Sequence[Mark], *contexts: Any):
        """
        Initialize with the accepting predicates and optional initial contexts.

        Args:
            marks: Predicates taking one context, tested in order
            *contexts: Contexts to insert after the marks are set
        """
        self._marks: Tuple[Mark, ...] = tuple(marks)
        self._bucket = ContextBucket()
        self.add(*contexts)

    @property
    def marks(self) -> Tuple[Mark, ...]:
        return self._marks

    def accepts(self, context: Any) -> bool:
        """True when any mark matches `context`"""
        return any(mark(context) for mark in self._marks)

    def add(self, *contexts: Any) -> 'FilteredInserter':
        for context in contexts:
            if self.accepts(context):
                self._bucket.add(context)
            else:
                logger.debug("bucket.marked.context_dropped",
                             context_type=type(context).__name__,
                             marks=len(self._marks))
        return self

    def last(self, context_type: Type[T]) -> Optional[T]:
        return self._bucket.last(context_type)

    def all(self) -> Dict[type, List[Any]]:
        return self._bucket.all()

    def group(self, context_type: Optional[Type[T]] = None) -> List[T]:
        return self._bucket.group(context_type)

    def has(self, context_type: type) -> bool:
        return self._bucket.has(context_type)

    def types(self) -> List[type]:
        return self._bucket.types()

    def to_flat_list(self) -> List[Any]:
        return self._bucket.to_flat_list()

    def without_all(self, context_type: type) -> 'FilteredInserter':
        """Copy with the same marks and the `context_type` group removed"""
        derived = copy.copy(self)
        derived._bucket = self._bucket.without_all(context_type)
        return derived

    def filter(self, predicate: Callable[[Any], bool]) -> ContextBucket:
        """Plain ContextBucket of the stored contexts satisfying `predicate`"""
        return self._bucket.filter(predicate)

    def __len__(self) -> int:
        return len(self._bucket)

    def __iter__(self) -> Iterator[Any]:
        return iter(self._bucket)

    def __contains__(self, context_type: type) -> bool:
        return context_type in self._bucket

    def __repr__(self) -> str:
        return f"{type(self).__name__}(marks={list(self._marks)!r}, bucket={self._bucket!r})"


class MarkedContextBucket(FilteredInserter):
    """
    Bucket restricted to contexts that are instances of one of its marks.

    Marks may be classes (including ABCs and runtime-checkable protocols),
    dotted import strings naming a class, or plain predicates.
    """

    def __init__(self, marks: Sequence[MarkSpec], *contexts: Any):
        super().__init__(resolve_marks(marks), *contexts)

    @classmethod
    def from_config(cls, config: Dict[str, Any], *contexts: Any,
                    path: str = "bucket.marks") -> 'MarkedContextBucket':
        """
        Build a bucket whose marks are read from a configuration mapping.

        Args:
            config: Configuration dictionary, e.g. from load_with_defaults()
            *contexts: Initial contexts
            path: Dotted path to the list of mark specifications

        Raises:
            MarkResolutionError: If the configured marks cannot be resolved
        """
        specs = get_value(config, path)
        if specs is None:
            logger.warning("bucket.marked.no_marks_configured", path=path)
            specs = []
        elif not isinstance(specs, list):
            logger.error("bucket.marked.invalid_marks_config", path=path,
                         found_type=type(specs).__name__)
            raise MarkResolutionError(f"Config value at '{path}' must be a list of marks")

        logger.info("bucket.marked.from_config", path=path, marks=len(specs))
        return cls(specs, *contexts)
