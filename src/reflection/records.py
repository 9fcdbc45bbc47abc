"""Explicitly declared type metadata.

These models implement the descriptor protocols from plain data, for types
whose metadata does not come from a live Python class (generated bindings,
foreign object models, test doubles). Constructor order is exactly the order
in which the records are declared.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from reflection.errors import AccessViolationError, RestrictedAccessError
from reflection.markers import carries_marker


class FieldRecord(BaseModel):
    """A declared data member and the markers attached to it."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    name: str
    markers: tuple[Any, ...] = Field(
        default=(), description="Marker classes or marker instances"
    )

    def has_marker(self, marker: type) -> bool:
        return carries_marker(self.markers, marker)


class MethodRecord(BaseModel):
    """A declared method. Overloads share one name."""

    model_config = ConfigDict(frozen=True)

    name: str
    parameter_types: tuple[str, ...] = Field(
        default=(), description="Informational only; never used for identity"
    )


class ConstructorRecord(BaseModel):
    """A declared constructor backed by a factory callable."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    parameter_types: tuple[Any, ...] = Field(
        default=(), description="Formal parameter types, in order"
    )
    accessible: bool = Field(default=True, description="False when restricted")
    bypass_supported: bool = Field(
        default=True,
        description="Whether access to a restricted constructor may be overridden",
    )
    factory: Callable[..., Any] = Field(description="Construction procedure")

    def invoke(self, args: Sequence[Any], *, override_access: bool = False) -> Any:
        if not self.accessible:
            if not override_access:
                msg = "Constructor is restricted"
                raise RestrictedAccessError(msg)
            if not self.bypass_supported:
                msg = "Access override is not supported for this constructor"
                raise AccessViolationError(msg)
        return self.factory(*args)


class TypeRecord(BaseModel):
    """A type described entirely by declared records."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    name: str
    field_records: tuple[FieldRecord, ...] = Field(default=())
    method_records: tuple[MethodRecord, ...] = Field(default=())
    interface_records: tuple[TypeRecord, ...] = Field(
        default=(), description="Directly declared capability contracts"
    )
    constructor_records: tuple[ConstructorRecord, ...] = Field(default=())
    instance_type: type | None = Field(
        default=None,
        description="Class constructed instances must belong to (None accepts any object)",
    )

    def declared_fields(self) -> tuple[FieldRecord, ...]:
        return self.field_records

    def declared_methods(self) -> tuple[MethodRecord, ...]:
        return self.method_records

    def interfaces(self) -> tuple[TypeRecord, ...]:
        return self.interface_records

    def declared_constructors(self) -> tuple[ConstructorRecord, ...]:
        return self.constructor_records

    def is_instance(self, value: object) -> bool:
        if self.instance_type is None:
            return value is not None
        return isinstance(value, self.instance_type)


TypeRecord.model_rebuild()

__all__ = ["ConstructorRecord", "FieldRecord", "MethodRecord", "TypeRecord"]
