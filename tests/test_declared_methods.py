from __future__ import annotations

import pytest

from fixtures.villagers import (
    Almanac,
    Broker,
    Cathedral,
    Coin,
    Empty,
    Farmhand,
    Guild,
    Scribe,
    Temple,
    Tradeable,
    Villager,
)
from reflection import ClassInspector, InvalidInputError, get_all_declared_methods
from reflection.runtime import is_capability_contract
from settings.config import InspectorConfig


def test_villager_unites_own_and_contract_methods() -> None:
    assert get_all_declared_methods(Villager) == {"greet", "trade", "cancel"}


def test_superclass_methods_are_excluded() -> None:
    assert "breathe" not in get_all_declared_methods(Villager)


def test_concrete_superclass_is_not_a_contract() -> None:
    assert get_all_declared_methods(Cathedral) == {"choir"}


def test_abstract_base_is_a_contract() -> None:
    assert get_all_declared_methods(Temple) == {"pray", "ring_bell"}


def test_only_direct_contracts_are_walked() -> None:
    # Guild -> Broker -> Merchant: Merchant.haggle is one level too deep.
    assert get_all_declared_methods(Guild) == {"register", "broker"}


def test_contract_itself_reports_its_own_methods() -> None:
    assert get_all_declared_methods(Tradeable) == {"trade", "cancel"}
    # Broker declares Merchant as its own direct contract.
    assert get_all_declared_methods(Broker) == {"broker", "haggle"}


def test_overloads_collapse_into_one_name() -> None:
    assert get_all_declared_methods(Scribe) == {"write"}


def test_static_and_class_methods_count_but_properties_do_not() -> None:
    assert get_all_declared_methods(Almanac) == {"season", "today"}


def test_constructors_are_not_methods() -> None:
    assert get_all_declared_methods(Farmhand) == set()


def test_type_without_methods_returns_empty_set() -> None:
    assert get_all_declared_methods(Empty) == set()


def test_user_written_dunder_methods_are_reported() -> None:
    # total_ordering fills in __le__, __gt__ and __ge__; those are not reported.
    assert get_all_declared_methods(Coin) == {
        "__eq__",
        "__lt__",
        "__hash__",
        "__repr__",
        "spend",
    }


def test_protocol_machinery_is_not_reported() -> None:
    names = get_all_declared_methods(Guild)

    assert "__subclasshook__" not in names
    assert "__init__" not in names


def test_dunder_methods_dropped_when_disabled() -> None:
    inspector = ClassInspector(InspectorConfig(include_dunder_methods=False))

    assert inspector.get_all_declared_methods(Coin) == {"spend"}


def test_is_capability_contract_classification() -> None:
    assert is_capability_contract(Tradeable)
    assert is_capability_contract(Temple.__bases__[0])
    assert not is_capability_contract(Temple)
    assert not is_capability_contract(object)


def test_none_type_fails_fast() -> None:
    with pytest.raises(InvalidInputError):
        get_all_declared_methods(None)
