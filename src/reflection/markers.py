"""Field markers.

A marker kind is any class. Fields carry markers through ``typing.Annotated``
metadata, either as the class itself or as an instance of it::

    class Villager:
        name: Annotated[str, Important]
        title: Annotated[str, Important()]

``Annotated`` may also sit inside ``ClassVar``, ``Final`` or a union such as
``Annotated[str, Important] | None``.
"""

from __future__ import annotations

import types
from collections.abc import Iterable
from typing import Annotated, Any, ClassVar, Final, Union, get_args, get_origin

_QUALIFIERS: tuple[Any, ...] = (ClassVar, Final)
_UNIONS: tuple[Any, ...] = (Union, types.UnionType)


class Marker:
    """Optional base class for marker kinds."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


def carries_marker(metadata: Iterable[Any], marker: type) -> bool:
    """Return True when any metadata item is, subclasses or instantiates ``marker``."""
    for item in metadata:
        if item is marker:
            return True
        if isinstance(item, type):
            if issubclass(item, marker):
                return True
        elif isinstance(item, marker):
            return True
    return False


def annotation_metadata(annotation: Any) -> tuple[Any, ...]:
    """Return the ``Annotated`` metadata of an annotation (empty when plain).

    Qualifiers are unwrapped and union members are searched, so
    ``ClassVar[Annotated[int, M]]`` and ``Annotated[str, M] | None`` both
    yield ``(M,)``.
    """
    origin = get_origin(annotation)
    args = get_args(annotation)

    if origin is Annotated:
        return tuple(args[1:]) + annotation_metadata(args[0])
    if origin in _QUALIFIERS and args:
        return annotation_metadata(args[0])
    if origin in _UNIONS:
        return tuple(item for arg in args for item in annotation_metadata(arg))
    return ()


__all__ = ["Marker", "annotation_metadata", "carries_marker"]
