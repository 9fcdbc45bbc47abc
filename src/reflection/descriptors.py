"""Capability protocols a runtime metadata provider must implement.

The inspector depends only on these protocols. Two providers ship with the
package: :class:`reflection.runtime.PythonTypeDescriptor` for live classes and
:class:`reflection.records.TypeRecord` for explicitly declared metadata.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class FieldDescriptor(Protocol):
    """A data member declared directly on a type."""

    @property
    def name(self) -> str: ...

    def has_marker(self, marker: type) -> bool: ...


@runtime_checkable
class MethodDescriptor(Protocol):
    """A method declared directly on a type. Only the name is significant."""

    @property
    def name(self) -> str: ...


@runtime_checkable
class ConstructorDescriptor(Protocol):
    """A constructor declared directly on a type."""

    @property
    def parameter_types(self) -> tuple[Any, ...]: ...

    @property
    def accessible(self) -> bool: ...

    def invoke(self, args: Sequence[Any], *, override_access: bool = False) -> Any:
        """Run the construction procedure with positional ``args``.

        Raises:
            RestrictedAccessError: If the constructor is not accessible and
                ``override_access`` is False.
            AccessViolationError: If access cannot be overridden.
        """
        ...


@runtime_checkable
class TypeDescriptor(Protocol):
    """Runtime handle describing the members a type declares itself."""

    @property
    def name(self) -> str: ...

    def declared_fields(self) -> Sequence[FieldDescriptor]: ...

    def declared_methods(self) -> Sequence[MethodDescriptor]: ...

    def interfaces(self) -> Sequence[TypeDescriptor]:
        """Capability contracts the type directly declares conformance to."""
        ...

    def declared_constructors(self) -> Sequence[ConstructorDescriptor]:
        """Constructors in provider order; the order need not be stable."""
        ...

    def is_instance(self, value: object) -> bool: ...


__all__ = [
    "ConstructorDescriptor",
    "FieldDescriptor",
    "MethodDescriptor",
    "TypeDescriptor",
]
