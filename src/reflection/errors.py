"""Error taxonomy for class inspection."""

from __future__ import annotations


class InspectionError(Exception):
    """Base class for all class inspection failures."""


class InvalidInputError(InspectionError, TypeError):
    """Raised when a type or marker argument cannot be inspected."""


class ConstructionError(InspectionError):
    """Raised when no declared constructor accepts the supplied arguments."""

    def __init__(
        self,
        type_name: str,
        arg_types: tuple[str, ...],
        message: str | None = None,
    ) -> None:
        self.type_name = type_name
        self.arg_types = arg_types
        if message is None:
            message = (
                f"No constructor of {type_name} accepts {len(arg_types)} "
                f"argument(s) of type(s) ({', '.join(arg_types)})"
            )
        super().__init__(message)


class RestrictedAccessError(InspectionError, TypeError):
    """Raised when a restricted constructor is called without access override."""


class AccessViolationError(InspectionError):
    """Raised when a metadata provider refuses to override constructor access."""


__all__ = [
    "AccessViolationError",
    "ConstructionError",
    "InspectionError",
    "InvalidInputError",
    "RestrictedAccessError",
]
