from __future__ import annotations

import threading

import pytest

from fixtures.villagers import Farmhand, Villager
from reflection import RestrictedAccessError, access_override
from reflection.access import access_overridden, is_constructor, is_restricted
from reflection.runtime import PythonTypeDescriptor


def test_access_override_allows_restricted_constructor() -> None:
    with access_override():
        villager = Villager("Bob", "Farmer")

    assert villager.name == "Bob"


def test_access_override_is_reset_after_block() -> None:
    with access_override():
        assert access_overridden()

    assert not access_overridden()
    with pytest.raises(RestrictedAccessError):
        Villager("Bob", "Farmer")


def test_access_override_is_reset_when_block_raises() -> None:
    with pytest.raises(RuntimeError), access_override():
        raise RuntimeError

    assert not access_overridden()


def test_access_override_does_not_leak_into_other_threads() -> None:
    seen: list[bool] = []

    def probe() -> None:
        seen.append(access_overridden())

    with access_override():
        thread = threading.Thread(target=probe)
        thread.start()
        thread.join()

    assert seen == [False]


def test_restricted_alternate_constructor_refuses_direct_calls() -> None:
    with pytest.raises(RestrictedAccessError):
        Farmhand._apprentice("Tom", None)


def test_markers_on_class_members() -> None:
    namespace = vars(Farmhand)

    assert is_constructor(namespace["from_name"])
    assert is_constructor(namespace["_apprentice"])
    assert not is_restricted(namespace["from_name"])
    assert is_restricted(namespace["_apprentice"])
    assert is_restricted(vars(Villager)["__init__"])


def test_runtime_constructors_in_declaration_order() -> None:
    constructors = PythonTypeDescriptor(Farmhand).declared_constructors()

    assert [ctor.name for ctor in constructors] == [
        "__init__",
        "from_name",
        "_apprentice",
    ]
    assert [ctor.accessible for ctor in constructors] == [True, True, False]
    assert constructors[0].parameter_types == (str, float)
    assert constructors[2].parameter_types == (str, Villager)


def test_runtime_constructor_invoke_requires_override_when_restricted() -> None:
    (ctor,) = PythonTypeDescriptor(Villager).declared_constructors()

    with pytest.raises(RestrictedAccessError):
        ctor.invoke(["Bob", "Farmer"])

    villager = ctor.invoke(["Bob", "Farmer"], override_access=True)
    assert isinstance(villager, Villager)
