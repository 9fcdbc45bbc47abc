"""Type metadata provider for live Python classes."""

from __future__ import annotations

import abc
import inspect
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import Any, Generic, Protocol

from observability.logging import get_logger
from reflection.access import access_override, is_constructor, is_restricted
from reflection.errors import InvalidInputError, RestrictedAccessError
from reflection.markers import annotation_metadata, carries_marker

logger = get_logger(__name__)

# Names Python reserves for the construction protocol.
CONSTRUCTOR_NAMES = frozenset({"__init__", "__new__"})

_CONTRACT_ROOTS: frozenset[Any] = frozenset({object, Protocol, Generic, abc.ABC})

# Compiler-generated annotation functions stored in class namespaces.
_ANNOTATE_NAMES = frozenset({"__annotate__", "__annotate_func__"})

IMPLICIT_CONSTRUCTOR = "<implicit>"

_POSITIONAL_KINDS = (
    inspect.Parameter.POSITIONAL_ONLY,
    inspect.Parameter.POSITIONAL_OR_KEYWORD,
)


@dataclass(frozen=True)
class RuntimeField:
    """A class-level annotation declared in the class body."""

    name: str
    annotation: Any

    def has_marker(self, marker: type) -> bool:
        return carries_marker(annotation_metadata(self.annotation), marker)


@dataclass(frozen=True)
class RuntimeMethod:
    name: str


@dataclass(frozen=True)
class RuntimeConstructor:
    """A constructor of a live class.

    ``call`` performs the whole construction (``cls(*args)`` for ``__init__``,
    the bound classmethod for alternate constructors).
    """

    name: str
    parameter_types: tuple[Any, ...]
    accessible: bool
    call: Callable[..., Any] = field(repr=False, compare=False)

    def invoke(self, args: Sequence[Any], *, override_access: bool = False) -> Any:
        if not self.accessible and not override_access:
            msg = f"Constructor {self.name} is restricted"
            raise RestrictedAccessError(msg)
        if override_access:
            with access_override():
                return self.call(*args)
        return self.call(*args)


def is_capability_contract(base: type) -> bool:
    """True for bases that act as interfaces: Protocols and abstract classes."""
    if base in _CONTRACT_ROOTS:
        return False
    if getattr(base, "_is_protocol", False):
        return True
    return inspect.isabstract(base)


def is_dunder(name: str) -> bool:
    return len(name) > 4 and name.startswith("__") and name.endswith("__")


def _is_method_member(member: object) -> bool:
    return inspect.isfunction(member) or isinstance(member, (staticmethod, classmethod))


def _is_synthesized(cls: type, name: str, member: object) -> bool:
    """True for dunder members that Python or ``typing`` placed on ``cls``.

    ``Protocol`` installs its own ``__subclasshook__``, ``functools`` fills in
    comparison methods, and the compiler stores ``__annotate__``. None of them
    carry a ``__qualname__`` under the class body.
    """
    if not is_dunder(name):
        return False
    if name in _ANNOTATE_NAMES:
        return True
    func = getattr(member, "__func__", member)
    qualname = getattr(func, "__qualname__", "")
    return not qualname.startswith(f"{cls.__qualname__}.")


class PythonTypeDescriptor:
    """Expose a live class through the :class:`TypeDescriptor` protocol.

    Only members found in the class's own ``__dict__`` are reported, so
    nothing inherited from superclasses leaks into the results.
    """

    def __init__(self, cls: type) -> None:
        if not isinstance(cls, type):
            msg = f"Expected a class, got {type(cls).__name__}"
            raise InvalidInputError(msg)
        self._cls = cls

    def __repr__(self) -> str:
        return f"PythonTypeDescriptor({self._cls.__qualname__})"

    @property
    def cls(self) -> type:
        return self._cls

    @property
    def name(self) -> str:
        return f"{self._cls.__module__}.{self._cls.__qualname__}"

    def declared_fields(self) -> list[RuntimeField]:
        try:
            annotations = inspect.get_annotations(self._cls, eval_str=True)
        except (NameError, SyntaxError) as exc:
            msg = f"Cannot resolve annotations of {self.name}: {exc}"
            raise InvalidInputError(msg) from exc
        return [RuntimeField(name, annotation) for name, annotation in annotations.items()]

    def declared_methods(self) -> list[RuntimeMethod]:
        methods: list[RuntimeMethod] = []
        for name, member in vars(self._cls).items():
            if name in CONSTRUCTOR_NAMES or is_constructor(member):
                continue
            if not _is_method_member(member):
                continue
            if not _is_synthesized(self._cls, name, member):
                methods.append(RuntimeMethod(name))
        return methods

    def interfaces(self) -> list[PythonTypeDescriptor]:
        return [
            PythonTypeDescriptor(base)
            for base in self._cls.__bases__
            if is_capability_contract(base)
        ]

    def declared_constructors(self) -> list[RuntimeConstructor]:
        """Own ``__init__`` (or ``__new__``), then ``@constructor`` members.

        A class declaring none of them gets a single implicit constructor
        taking no arguments, provided the inherited construction path can run
        without arguments and is not restricted.
        """
        namespace = vars(self._cls)
        constructors: list[RuntimeConstructor] = []

        primary = namespace.get("__init__") or namespace.get("__new__")
        if primary is not None:
            signature = self._signature(primary, skip_first=True)
            if signature is not None:
                constructors.append(
                    self._constructor(
                        "__init__" if "__init__" in namespace else "__new__",
                        signature,
                        accessible=not is_restricted(primary),
                        call=self._cls,
                    )
                )

        for name, member in namespace.items():
            if not is_constructor(member):
                continue
            bound = getattr(self._cls, name)
            signature = self._signature(bound, skip_first=False)
            if signature is not None:
                constructors.append(
                    self._constructor(
                        name,
                        signature,
                        accessible=not is_restricted(member),
                        call=bound,
                    )
                )

        if primary is None and not constructors:
            implicit = self._implicit_constructor()
            if implicit is not None:
                constructors.append(implicit)
        return constructors

    def _implicit_constructor(self) -> RuntimeConstructor | None:
        for name in CONSTRUCTOR_NAMES:
            if is_restricted(getattr(self._cls, name, None)):
                logger.debug(
                    "implicit_constructor_unavailable",
                    type=self.name,
                    reason="restricted_inherited",
                    member=name,
                )
                return None

        try:
            inspect.signature(self._cls).bind()
        except TypeError:
            logger.debug(
                "implicit_constructor_unavailable",
                type=self.name,
                reason="inherited_arguments_required",
            )
            return None
        except ValueError:
            # No introspectable signature; assume the no-argument form.
            pass

        return RuntimeConstructor(
            name=IMPLICIT_CONSTRUCTOR,
            parameter_types=(),
            accessible=True,
            call=self._cls,
        )

    def is_instance(self, value: object) -> bool:
        return isinstance(value, self._cls)

    def _signature(
        self, target: Callable[..., Any], *, skip_first: bool
    ) -> inspect.Signature | None:
        if isinstance(target, staticmethod):
            target = target.__func__
        try:
            signature = inspect.signature(target, eval_str=True)
        except (NameError, SyntaxError) as exc:
            msg = f"Cannot resolve constructor annotations of {self.name}: {exc}"
            raise InvalidInputError(msg) from exc
        except ValueError:
            # Some builtins expose no signature; they cannot be matched.
            logger.debug("constructor_signature_unavailable", type=self.name)
            return None

        parameters = list(signature.parameters.values())
        if skip_first and parameters:
            parameters = parameters[1:]
        for parameter in parameters:
            if (
                parameter.kind is inspect.Parameter.KEYWORD_ONLY
                and parameter.default is inspect.Parameter.empty
            ):
                logger.debug(
                    "constructor_skipped_keyword_only",
                    type=self.name,
                    parameter=parameter.name,
                )
                return None
        return signature.replace(parameters=parameters)

    @staticmethod
    def _constructor(
        name: str,
        signature: inspect.Signature,
        *,
        accessible: bool,
        call: Callable[..., Any],
    ) -> RuntimeConstructor:
        parameter_types = tuple(
            parameter.annotation
            for parameter in signature.parameters.values()
            if parameter.kind in _POSITIONAL_KINDS
        )
        return RuntimeConstructor(
            name=name,
            parameter_types=parameter_types,
            accessible=accessible,
            call=call,
        )


__all__ = [
    "CONSTRUCTOR_NAMES",
    "IMPLICIT_CONSTRUCTOR",
    "PythonTypeDescriptor",
    "RuntimeConstructor",
    "RuntimeField",
    "RuntimeMethod",
    "is_capability_contract",
    "is_dunder",
]
