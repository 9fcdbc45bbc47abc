from __future__ import annotations

from dataclasses import dataclass

import pytest

from fixtures.villagers import Important, Secondary
from reflection import (
    AccessViolationError,
    ClassInspector,
    ConstructionError,
    ConstructorRecord,
    FieldRecord,
    MethodRecord,
    RestrictedAccessError,
    TypeDescriptor,
    TypeRecord,
    create_instance,
    get_all_declared_methods,
    get_annotated_fields,
)


@dataclass
class Cart:
    owner: str
    size: int = 0


def _tradeable() -> TypeRecord:
    return TypeRecord(
        name="Tradeable",
        method_records=(MethodRecord(name="trade"), MethodRecord(name="cancel")),
        interface_records=(
            TypeRecord(name="Exchange", method_records=(MethodRecord(name="swap"),)),
        ),
    )


def _cart_type(*constructors: ConstructorRecord) -> TypeRecord:
    return TypeRecord(
        name="Cart",
        field_records=(
            FieldRecord(name="owner", markers=(Important,)),
            FieldRecord(name="size", markers=(Secondary(),)),
            FieldRecord(name="owner", markers=(Important(),)),
        ),
        method_records=(
            MethodRecord(name="load", parameter_types=("int",)),
            MethodRecord(name="load", parameter_types=("str",)),
            MethodRecord(name="trade"),
        ),
        interface_records=(_tradeable(),),
        constructor_records=constructors,
        instance_type=Cart,
    )


def test_type_record_satisfies_descriptor_protocol() -> None:
    assert isinstance(_cart_type(), TypeDescriptor)


def test_duplicate_field_names_collapse() -> None:
    assert get_annotated_fields(_cart_type(), Important) == {"owner"}
    assert get_annotated_fields(_cart_type(), Secondary) == {"size"}


def test_overloads_and_contract_methods_collapse_without_walking_deeper() -> None:
    assert get_all_declared_methods(_cart_type()) == {"load", "trade", "cancel"}


def test_records_constructor_order_is_declaration_order() -> None:
    cart_type = _cart_type(
        ConstructorRecord(
            parameter_types=(str,), factory=lambda owner: Cart(owner, 1)
        ),
        ConstructorRecord(
            parameter_types=(object,), factory=lambda owner: Cart(str(owner), 2)
        ),
    )

    assert create_instance(cart_type, "Bob").size == 1
    assert create_instance(cart_type, 42).size == 2


def test_restricted_record_constructor_is_overridden() -> None:
    ctor = ConstructorRecord(
        parameter_types=(str, int), accessible=False, factory=Cart
    )

    with pytest.raises(RestrictedAccessError):
        ctor.invoke(["Bob", 1])

    cart = create_instance(_cart_type(ctor), "Bob", 3)
    assert cart == Cart("Bob", 3)


def test_refused_override_is_an_access_violation() -> None:
    ctor = ConstructorRecord(
        parameter_types=(str,),
        accessible=False,
        bypass_supported=False,
        factory=Cart,
    )

    with pytest.raises(AccessViolationError):
        create_instance(_cart_type(ctor), "Bob")


def test_no_constructors_raises_construction_error() -> None:
    with pytest.raises(ConstructionError) as exc_info:
        ClassInspector().create_instance(_cart_type())

    assert exc_info.value.type_name == "Cart"
    assert exc_info.value.arg_types == ()


def test_instance_type_check_rejects_foreign_objects() -> None:
    ctor = ConstructorRecord(factory=lambda: "not a cart")

    with pytest.raises(ConstructionError, match="returned str"):
        create_instance(_cart_type(ctor))


def test_untyped_record_accepts_any_non_none_result() -> None:
    record = TypeRecord(
        name="Anything",
        constructor_records=(ConstructorRecord(factory=lambda: 0),),
    )

    assert create_instance(record) == 0


def test_records_are_frozen() -> None:
    record = FieldRecord(name="owner")

    with pytest.raises(ValueError):
        record.name = "other"  # type: ignore[misc]
