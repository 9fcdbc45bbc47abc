"""Resolve ``package.module:Qualified.Name`` references to objects."""

from __future__ import annotations

import importlib
import sys
from pathlib import Path

from reflection.errors import InvalidInputError


def split_reference(reference: str) -> tuple[str, str]:
    """Split a reference into ``(module, qualname)``.

    Examples:
        >>> split_reference("pkg.models:Villager")
        ('pkg.models', 'Villager')
        >>> split_reference("pkg.models:Outer.Inner")
        ('pkg.models', 'Outer.Inner')
    """
    module_name, sep, qualname = reference.partition(":")
    if not sep or not module_name or not qualname:
        msg = f"Reference '{reference}' must look like 'package.module:Name'"
        raise InvalidInputError(msg)
    return module_name.strip(), qualname.strip()


def add_import_root(root: Path) -> None:
    """Put ``root`` at the front of ``sys.path`` so references resolve against it.

    Installed console scripts start with their own ``bin/`` directory on the
    path, not the directory being inspected.
    """
    entry = str(Path(root).resolve())
    if entry not in sys.path:
        sys.path.insert(0, entry)


def resolve_reference(reference: str) -> object:
    """Import the module named by ``reference`` and walk the qualified name."""
    module_name, qualname = split_reference(reference)

    try:
        obj: object = importlib.import_module(module_name)
    except ImportError as exc:
        msg = f"Cannot import module '{module_name}': {exc}"
        raise InvalidInputError(msg) from exc

    for part in qualname.split("."):
        try:
            obj = getattr(obj, part)
        except AttributeError as exc:
            msg = f"'{qualname}' not found in module '{module_name}'"
            raise InvalidInputError(msg) from exc
    return obj


def resolve_class(reference: str) -> type:
    obj = resolve_reference(reference)
    if not isinstance(obj, type):
        msg = f"'{reference}' is a {type(obj).__name__}, not a class"
        raise InvalidInputError(msg)
    return obj


__all__ = ["add_import_root", "resolve_class", "resolve_reference", "split_reference"]
