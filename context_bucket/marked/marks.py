"""
Mark predicates deciding which contexts a marked bucket accepts.
Path: context_bucket/marked/marks.py

A mark is any callable taking a context and returning a truthy value when
the context is acceptable. Classes and dotted import strings are turned
into TypeMark predicates, which match by isinstance.
"""

import collections.abc
import importlib
import inspect
from typing import Any, Callable, Iterable, Tuple, Union

from context_bucket.utils.logging import get_logger

logger = get_logger()

Mark = Callable[[Any], bool]
MarkSpec = Union[type, str, Mark]


class MarkResolutionError(ValueError):
    """Raised when a mark specification cannot be turned into a predicate."""
    pass


class TypeMark:
    """Predicate matching instances of a class, its subclasses and virtual subclasses"""

    def __init__(self, mark_type: type):
        if not isinstance(mark_type, type):
            logger.error("marks.type_mark_not_a_class", spec_type=type(mark_type).__name__)
            raise MarkResolutionError(f"TypeMark requires a class, got {mark_type!r}")
        self.mark_type = mark_type

    def __call__(self, context: Any) -> bool:
        return isinstance(context, self.mark_type)

    def __eq__(self, other: Any) -> bool:
        return isinstance(other, TypeMark) and other.mark_type is self.mark_type

    def __hash__(self) -> int:
        return hash(self.mark_type)

    def __repr__(self) -> str:
        return f"TypeMark({self.mark_type.__module__}.{self.mark_type.__qualname__})"


def _import_type(path: str) -> type:
    """
    Import a class from "package.module:Name" or "package.module.Name".

    Raises:
        MarkResolutionError: If the module or attribute is missing, or the
            attribute is not a class
    """
    if ':' in path:
        module_path, _, attr_path = path.partition(':')
    else:
        module_path, _, attr_path = path.rpartition('.')

    if not module_path or not attr_path:
        logger.error("marks.not_an_import_path", mark=path)
        raise MarkResolutionError(f"Mark '{path}' is not a dotted import path")

    try:
        target = importlib.import_module(module_path)
    except ImportError as e:
        logger.error("marks.import_error", mark=path, module=module_path, error=str(e))
        raise MarkResolutionError(f"Cannot import module '{module_path}' for mark '{path}'") from e

    for attr in attr_path.split('.'):
        try:
            target = getattr(target, attr)
        except AttributeError as e:
            logger.error("marks.attribute_not_found", mark=path, attribute=attr)
            raise MarkResolutionError(f"'{attr}' not found while resolving mark '{path}'") from e

    if not inspect.isclass(target):
        logger.error("marks.target_not_a_class", mark=path, target_type=type(target).__name__)
        raise MarkResolutionError(f"Mark '{path}' resolves to {type(target).__name__}, not a class")
    return target


def resolve_mark(spec: MarkSpec) -> Mark:
    """
    Turn a mark specification into a predicate.

    Args:
        spec: A class, a dotted import string naming a class, or a callable
            predicate taking one context

    Returns:
        The predicate to test contexts with

    Raises:
        MarkResolutionError: If the specification is none of the above
    """
    if isinstance(spec, TypeMark):
        return spec
    if inspect.isclass(spec):
        return TypeMark(spec)
    if isinstance(spec, str):
        return TypeMark(_import_type(spec.strip()))
    if callable(spec):
        return spec

    logger.error("marks.unsupported_spec", spec_type=type(spec).__name__)
    raise MarkResolutionError(f"Unsupported mark specification: {spec!r}")


def resolve_marks(specs: Iterable[MarkSpec]) -> Tuple[Mark, ...]:
    """Resolve every specification, keeping their order"""
    if isinstance(specs, (str, bytes)) or not isinstance(specs, collections.abc.Iterable):
        logger.error("marks.not_a_sequence", spec_type=type(specs).__name__)
        raise MarkResolutionError(f"Marks must be a sequence of specifications, got {specs!r}")
    return tuple(resolve_mark(spec) for spec in specs)
