from __future__ import annotations

import pytest

from fixtures.villagers import (
    Broken,
    Empty,
    Granary,
    Important,
    Ledger,
    Secondary,
    SubLedger,
    VeryImportant,
    Villager,
)
from reflection import ClassInspector, InvalidInputError, get_annotated_fields
from reflection.runtime import PythonTypeDescriptor


def test_villager_reports_only_marked_field() -> None:
    assert get_annotated_fields(Villager, Important) == {"name"}


def test_inherited_marked_fields_are_not_reported() -> None:
    # Creature.legs carries Important but is declared on the superclass.
    assert "legs" not in get_annotated_fields(Villager, Important)
    assert get_annotated_fields(SubLedger, Important) == {"auditor"}


def test_marker_instances_and_subclasses_count_as_the_marker() -> None:
    assert get_annotated_fields(Ledger, Important) == {"entries", "owner"}


def test_marker_subclass_query_does_not_match_base_marker() -> None:
    assert get_annotated_fields(Ledger, VeryImportant) == {"owner"}
    assert get_annotated_fields(Ledger, Secondary) == {"notes"}


def test_unrelated_marker_returns_empty_set() -> None:
    class Unused:
        pass

    assert get_annotated_fields(Ledger, Unused) == set()


def test_type_without_fields_returns_empty_set() -> None:
    assert get_annotated_fields(Empty, Important) == set()


def test_every_reported_name_is_a_declared_marked_field() -> None:
    descriptor = PythonTypeDescriptor(Ledger)
    declared = {field.name: field for field in descriptor.declared_fields()}

    names = get_annotated_fields(Ledger, Important)

    assert isinstance(names, set)
    for name in names:
        assert declared[name].has_marker(Important)


def test_none_type_fails_fast() -> None:
    with pytest.raises(InvalidInputError):
        get_annotated_fields(None, Important)


def test_none_marker_fails_fast() -> None:
    with pytest.raises(InvalidInputError):
        get_annotated_fields(Villager, None)  # type: ignore[arg-type]


def test_non_class_marker_fails_fast() -> None:
    with pytest.raises(InvalidInputError, match="marker must be a class"):
        ClassInspector().get_annotated_fields(Villager, Important())  # type: ignore[arg-type]


def test_non_type_target_fails_fast() -> None:
    with pytest.raises(InvalidInputError):
        get_annotated_fields("Villager", Important)


def test_unresolvable_annotation_is_reported_as_invalid_input() -> None:
    with pytest.raises(InvalidInputError, match="Cannot resolve annotations"):
        get_annotated_fields(Broken, Important)


def test_markers_inside_qualifiers_and_unions_are_found() -> None:
    assert get_annotated_fields(Granary, Important) == {"capacity", "keeper"}
    assert get_annotated_fields(Granary, Secondary) == {"grain"}
