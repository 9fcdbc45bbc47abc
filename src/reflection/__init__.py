"""Runtime class introspection.

Find marker-annotated fields, enumerate declared method names, and build
instances through declared constructors, restricted ones included.
"""

from reflection.access import access_override, constructor, restricted
from reflection.assignability import NonePolicy, is_assignable
from reflection.descriptors import (
    ConstructorDescriptor,
    FieldDescriptor,
    MethodDescriptor,
    TypeDescriptor,
)
from reflection.errors import (
    AccessViolationError,
    ConstructionError,
    InspectionError,
    InvalidInputError,
    RestrictedAccessError,
)
from reflection.inspector import (
    ClassInspector,
    create_instance,
    get_all_declared_methods,
    get_annotated_fields,
)
from reflection.markers import Marker
from reflection.records import ConstructorRecord, FieldRecord, MethodRecord, TypeRecord
from reflection.runtime import PythonTypeDescriptor

__all__ = [
    "AccessViolationError",
    "ClassInspector",
    "ConstructionError",
    "ConstructorDescriptor",
    "ConstructorRecord",
    "FieldDescriptor",
    "FieldRecord",
    "InspectionError",
    "InvalidInputError",
    "Marker",
    "MethodDescriptor",
    "MethodRecord",
    "NonePolicy",
    "PythonTypeDescriptor",
    "RestrictedAccessError",
    "TypeDescriptor",
    "TypeRecord",
    "access_override",
    "constructor",
    "create_instance",
    "get_all_declared_methods",
    "get_annotated_fields",
    "is_assignable",
    "restricted",
]
