"""Runtime assignability of argument values to constructor parameter types."""

from __future__ import annotations

import inspect
import types
from typing import (
    Annotated,
    Any,
    Literal,
    NewType,
    TypeVar,
    Union,
    get_args,
    get_origin,
)

NonePolicy = Literal["typed", "any", "never"]

_NONE_TYPE = type(None)

# PEP 484 numeric tower: an int is acceptable where a float is expected, etc.
_NUMERIC_PROMOTIONS: dict[type, tuple[type, ...]] = {
    float: (int,),
    complex: (int, float),
}


def _is_union(origin: object) -> bool:
    return origin is Union or origin is types.UnionType


def _matches_class(value: object, cls: type) -> bool:
    try:
        if isinstance(value, cls):
            return True
    except TypeError:
        # Non runtime-checkable protocols refuse isinstance().
        return False
    return isinstance(value, _NUMERIC_PROMOTIONS.get(cls, ()))


def _matches_type_form(value: object, args: tuple[Any, ...]) -> bool:
    if not isinstance(value, type):
        return False
    if not args or args[0] is Any:
        return True
    target = args[0]
    if _is_union(get_origin(target)):
        return any(_matches_type_form(value, (member,)) for member in get_args(target))
    if isinstance(target, type):
        return issubclass(value, target)
    return False


def _matches(value: object, annotation: Any) -> bool:
    if annotation is inspect.Parameter.empty or annotation is Any:
        return True
    if annotation is None or annotation is _NONE_TYPE:
        return value is None
    if isinstance(annotation, str):
        # Unresolved forward reference; nothing to compare against.
        return False

    origin = get_origin(annotation)
    if origin is Annotated:
        return _matches(value, get_args(annotation)[0])
    if _is_union(origin):
        return any(_matches(value, member) for member in get_args(annotation))
    if origin is Literal:
        return any(
            value == literal and type(value) is type(literal)
            for literal in get_args(annotation)
        )
    if origin is type:
        return _matches_type_form(value, get_args(annotation))

    if isinstance(annotation, TypeVar):
        if annotation.__bound__ is not None:
            return _matches(value, annotation.__bound__)
        if annotation.__constraints__:
            return any(_matches(value, c) for c in annotation.__constraints__)
        return True
    if isinstance(annotation, NewType):
        return _matches(value, annotation.__supertype__)

    if origin is not None:
        annotation = origin
    if isinstance(annotation, type):
        return _matches_class(value, annotation)
    return False


def is_assignable(
    value: object,
    annotation: Any,
    *,
    none_policy: NonePolicy = "typed",
) -> bool:
    """Check whether ``value`` may be passed for a parameter typed ``annotation``.

    ``annotation`` is a resolved annotation or ``inspect.Parameter.empty`` for
    an unannotated parameter. Parametrised generics are checked against their
    origin only (``list[int]`` accepts any list).

    ``none_policy`` decides how a ``None`` value is treated:

    - ``"typed"``: ``None`` matches only types that admit it (unannotated,
      ``Any``, ``object``, ``Optional[...]``, ``None``).
    - ``"any"``: ``None`` matches every parameter.
    - ``"never"``: ``None`` matches nothing.
    """
    if value is None:
        if none_policy == "any":
            return True
        if none_policy == "never":
            return False
    return _matches(value, annotation)


def describe_annotation(annotation: Any) -> str:
    """Render a parameter type for messages and reports."""
    if annotation is inspect.Parameter.empty:
        return "Any"
    if isinstance(annotation, type) and get_origin(annotation) is None:
        return annotation.__qualname__
    if isinstance(annotation, str):
        return annotation
    return repr(annotation).replace("typing.", "")


__all__ = ["NonePolicy", "describe_annotation", "is_assignable"]
