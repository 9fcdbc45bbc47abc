"""JSON report models emitted by the command line."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Literal

import orjson
from pydantic import BaseModel, Field

from reflection.assignability import describe_annotation

if TYPE_CHECKING:
    from reflection.inspector import ClassInspector

# Schema version constant
SCHEMA_VERSION = 1


class NameSetReport(BaseModel):
    """Result of a field or method name query."""

    schema_version: int = Field(default=SCHEMA_VERSION)
    type_name: str
    query: Literal["fields", "methods"]
    marker: str | None = Field(default=None, description="Marker kind for field queries")
    names: list[str] = Field(description="Sorted, duplicate-free names")


class ConstructorReport(BaseModel):
    index: int
    name: str | None = None
    parameter_types: list[str]
    accessible: bool


class ConstructorsReport(BaseModel):
    """Declared constructors in provider order."""

    schema_version: int = Field(default=SCHEMA_VERSION)
    type_name: str
    constructors: list[ConstructorReport]


class InstanceReport(BaseModel):
    schema_version: int = Field(default=SCHEMA_VERSION)
    type_name: str
    arg_types: list[str]
    instance: str = Field(description="repr() of the created instance")


def build_fields_report(
    inspector: ClassInspector, target: object, marker: type
) -> NameSetReport:
    descriptor = inspector.describe(target)
    return NameSetReport(
        type_name=descriptor.name,
        query="fields",
        marker=f"{marker.__module__}.{marker.__qualname__}",
        names=sorted(inspector.get_annotated_fields(descriptor, marker)),
    )


def build_methods_report(inspector: ClassInspector, target: object) -> NameSetReport:
    descriptor = inspector.describe(target)
    return NameSetReport(
        type_name=descriptor.name,
        query="methods",
        names=sorted(inspector.get_all_declared_methods(descriptor)),
    )


def build_constructors_report(
    inspector: ClassInspector, target: object
) -> ConstructorsReport:
    descriptor = inspector.describe(target)
    return ConstructorsReport(
        type_name=descriptor.name,
        constructors=[
            ConstructorReport(
                index=index,
                name=getattr(ctor, "name", None),
                parameter_types=[describe_annotation(t) for t in ctor.parameter_types],
                accessible=ctor.accessible,
            )
            for index, ctor in enumerate(descriptor.declared_constructors())
        ],
    )


def build_instance_report(
    inspector: ClassInspector, target: object, args: list[Any]
) -> InstanceReport:
    descriptor = inspector.describe(target)
    instance = inspector.create_instance(descriptor, *args)
    return InstanceReport(
        type_name=descriptor.name,
        arg_types=[type(arg).__name__ for arg in args],
        instance=repr(instance),
    )


def dump_report(report: BaseModel) -> bytes:
    opts = orjson.OPT_SORT_KEYS | orjson.OPT_INDENT_2
    return orjson.dumps(report.model_dump(), option=opts)


__all__ = [
    "SCHEMA_VERSION",
    "ConstructorReport",
    "ConstructorsReport",
    "InstanceReport",
    "NameSetReport",
    "build_constructors_report",
    "build_fields_report",
    "build_instance_report",
    "build_methods_report",
    "dump_report",
]
