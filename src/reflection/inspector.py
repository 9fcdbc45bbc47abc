"""Field, method and constructor introspection over type descriptors."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, TypeVar, overload

from observability.logging import get_logger
from reflection.assignability import is_assignable
from reflection.descriptors import TypeDescriptor
from reflection.errors import ConstructionError, InvalidInputError
from reflection.runtime import PythonTypeDescriptor, is_dunder

if TYPE_CHECKING:
    from collections.abc import Sequence

    from reflection.descriptors import ConstructorDescriptor
    from settings.config import InspectorConfig

T = TypeVar("T")

logger = get_logger(__name__)


def _type_names(args: Sequence[Any]) -> tuple[str, ...]:
    return tuple(type(arg).__name__ for arg in args)


class ClassInspector:
    """Introspection queries over a :class:`TypeDescriptor`.

    Every method accepts either a live class, which is wrapped in a
    :class:`PythonTypeDescriptor`, or any object implementing the
    :class:`TypeDescriptor` protocol. Nothing is cached between calls.
    """

    def __init__(self, config: InspectorConfig | None = None) -> None:
        if config is None:
            # Lazy: settings.config imports reflection.assignability.
            from settings.config import InspectorConfig

            config = InspectorConfig()
        self.config = config

    def describe(self, target: object) -> TypeDescriptor:
        """Return the descriptor used to inspect ``target``."""
        if target is None:
            msg = "type must not be None"
            raise InvalidInputError(msg)
        if isinstance(target, type):
            return PythonTypeDescriptor(target)
        if isinstance(target, TypeDescriptor):
            return target
        msg = f"Cannot inspect {type(target).__name__} instance; expected a class or TypeDescriptor"
        raise InvalidInputError(msg)

    def get_annotated_fields(self, target: object, marker: type) -> set[str]:
        """Names of fields declared directly on ``target`` that carry ``marker``."""
        descriptor = self.describe(target)
        if not isinstance(marker, type):
            msg = f"marker must be a class, got {type(marker).__name__}"
            raise InvalidInputError(msg)

        annotated: set[str] = set()
        for field in descriptor.declared_fields():
            if field.has_marker(marker):
                annotated.add(field.name)
        return annotated

    def get_all_declared_methods(self, target: object) -> set[str]:
        """Method names declared on ``target`` and on its direct capability contracts.

        Only one level is inspected: superclasses and the contracts' own
        parents are ignored. Overloads collapse into a single name.
        User-written dunder methods are included unless the config turns
        ``include_dunder_methods`` off.
        """
        descriptor = self.describe(target)

        names: set[str] = {method.name for method in descriptor.declared_methods()}
        for contract in descriptor.interfaces():
            names.update(method.name for method in contract.declared_methods())

        if not self.config.include_dunder_methods:
            names = {name for name in names if not is_dunder(name)}
        return names

    @overload
    def create_instance(self, target: type[T], *args: Any) -> T: ...

    @overload
    def create_instance(self, target: TypeDescriptor, *args: Any) -> Any: ...

    def create_instance(self, target: Any, *args: Any) -> Any:
        """Build a new instance using the first declared constructor accepting ``args``.

        Constructors are tried in the order the metadata provider yields them
        and the first whose arity matches and whose parameter types accept
        every argument wins, restricted or not. No specificity ranking is
        applied, so with overlapping constructors the result depends on that
        order.

        Raises:
            InvalidInputError: If ``target`` cannot be inspected.
            ConstructionError: If no constructor accepts ``args``, or the
                matched constructor returned an object of another type.
            AccessViolationError: If a matched restricted constructor cannot
                be opened by the provider.
        """
        descriptor = self.describe(target)
        arg_types = _type_names(args)

        for index, ctor in enumerate(descriptor.declared_constructors()):
            if not self._accepts(ctor, args):
                continue

            logger.debug(
                "constructor_matched",
                type=descriptor.name,
                index=index,
                arity=len(args),
                accessible=ctor.accessible,
            )
            instance = ctor.invoke(args, override_access=True)
            if not descriptor.is_instance(instance):
                msg = (
                    f"Constructor of {descriptor.name} returned "
                    f"{type(instance).__name__}, not an instance of the type"
                )
                raise ConstructionError(descriptor.name, arg_types, msg)
            return instance

        logger.debug("constructor_not_found", type=descriptor.name, arg_types=arg_types)
        raise ConstructionError(descriptor.name, arg_types)

    def _accepts(self, ctor: ConstructorDescriptor, args: Sequence[Any]) -> bool:
        parameter_types = ctor.parameter_types
        if len(parameter_types) != len(args):
            return False
        return all(
            is_assignable(arg, parameter_type, none_policy=self.config.none_policy)
            for arg, parameter_type in zip(args, parameter_types)
        )


_default_inspector: ClassInspector | None = None


def _get_default_inspector() -> ClassInspector:
    global _default_inspector
    if _default_inspector is None:
        _default_inspector = ClassInspector()
    return _default_inspector


def get_annotated_fields(target: object, marker: type) -> set[str]:
    return _get_default_inspector().get_annotated_fields(target, marker)


def get_all_declared_methods(target: object) -> set[str]:
    return _get_default_inspector().get_all_declared_methods(target)


def create_instance(target: Any, *args: Any) -> Any:
    """Module-level shortcut for :meth:`ClassInspector.create_instance`."""
    return _get_default_inspector().create_instance(target, *args)


__all__ = [
    "ClassInspector",
    "create_instance",
    "get_all_declared_methods",
    "get_annotated_fields",
]
