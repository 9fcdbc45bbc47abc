"""Constructor declaration and access control for live classes.

``@restricted`` makes a constructor private: calling it directly raises
:class:`RestrictedAccessError`. Code running inside :func:`access_override`
may call it. The override is scoped with a context variable, so it never
leaks across threads or asyncio tasks, and it is cleared again while the
constructor body runs.
"""

from __future__ import annotations

import functools
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, TypeVar

from reflection.errors import RestrictedAccessError

F = TypeVar("F", bound=Callable[..., Any])

RESTRICTED_ATTR = "__classinspect_restricted__"
CONSTRUCTOR_ATTR = "__classinspect_constructor__"

_ACCESS_OVERRIDE: ContextVar[bool] = ContextVar(
    "classinspect_access_override", default=False
)


def restricted(func: F) -> F:
    """Mark ``func`` (``__init__`` or an alternate constructor) as restricted."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        if not _ACCESS_OVERRIDE.get():
            msg = f"{func.__qualname__} is a restricted constructor"
            raise RestrictedAccessError(msg)
        token = _ACCESS_OVERRIDE.set(False)
        try:
            return func(*args, **kwargs)
        finally:
            _ACCESS_OVERRIDE.reset(token)

    setattr(wrapper, RESTRICTED_ATTR, True)
    return wrapper  # type: ignore[return-value]


def constructor(func: Callable[..., Any]) -> classmethod:
    """Declare an alternate constructor.

    Use in place of ``@classmethod``. Stack ``@restricted`` underneath to make
    it private.
    """
    setattr(func, CONSTRUCTOR_ATTR, True)
    return classmethod(func)


def is_restricted(func: object) -> bool:
    if isinstance(func, (classmethod, staticmethod)):
        func = func.__func__
    return bool(getattr(func, RESTRICTED_ATTR, False))


def is_constructor(member: object) -> bool:
    """True for class-body members declared with ``@constructor``."""
    return isinstance(member, classmethod) and bool(
        getattr(member.__func__, CONSTRUCTOR_ATTR, False)
    )


def access_overridden() -> bool:
    return _ACCESS_OVERRIDE.get()


@contextmanager
def access_override() -> Iterator[None]:
    """Allow restricted constructors to be called within the block."""
    token = _ACCESS_OVERRIDE.set(True)
    try:
        yield
    finally:
        _ACCESS_OVERRIDE.reset(token)


__all__ = [
    "access_override",
    "access_overridden",
    "constructor",
    "is_constructor",
    "is_restricted",
    "restricted",
]
