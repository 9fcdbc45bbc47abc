"""Command-line interface for classinspect."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Any

import orjson

from observability.logging import configure_logging
from reflection.errors import ConstructionError, InvalidInputError
from reflection.inspector import ClassInspector
from reflection.report import (
    build_constructors_report,
    build_fields_report,
    build_instance_report,
    build_methods_report,
    dump_report,
)
from reflection.targets import add_import_root, resolve_class
from settings.config import ConfigError, load_config

if TYPE_CHECKING:
    from pydantic import BaseModel


def _add_common_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "target",
        help="Class to inspect, as package.module:QualifiedName",
    )
    parser.add_argument(
        "--root",
        default=".",
        help=(
            "Project directory: holds classinspect.toml and is searched "
            "first when importing targets (default: .)"
        ),
    )
    parser.add_argument(
        "--log-level",
        default=None,
        type=str.upper,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Log level (default: config log_level)",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="classinspect")
    subparsers = parser.add_subparsers(dest="command", required=True)

    fields_parser = subparsers.add_parser(
        "fields", help="List fields carrying a marker"
    )
    _add_common_options(fields_parser)
    fields_parser.add_argument(
        "marker",
        help="Marker class, as package.module:QualifiedName",
    )

    methods_parser = subparsers.add_parser(
        "methods", help="List declared and contract method names"
    )
    _add_common_options(methods_parser)

    constructors_parser = subparsers.add_parser(
        "constructors", help="List declared constructors"
    )
    _add_common_options(constructors_parser)

    create_parser = subparsers.add_parser(
        "create", help="Create an instance through a matching constructor"
    )
    _add_common_options(create_parser)
    create_parser.add_argument(
        "--args",
        default="[]",
        help="Constructor arguments as a JSON array (default: [])",
    )

    return parser


def _parse_json_args(raw: str) -> list[Any]:
    try:
        value = orjson.loads(raw)
    except orjson.JSONDecodeError as exc:
        msg = f"--args is not valid JSON: {exc}"
        raise InvalidInputError(msg) from exc
    if not isinstance(value, list):
        msg = "--args must be a JSON array"
        raise InvalidInputError(msg)
    return value


def _build_report(args: argparse.Namespace, inspector: ClassInspector) -> BaseModel:
    target = resolve_class(args.target)

    if args.command == "fields":
        return build_fields_report(inspector, target, resolve_class(args.marker))

    if args.command == "methods":
        return build_methods_report(inspector, target)

    if args.command == "constructors":
        return build_constructors_report(inspector, target)

    if args.command == "create":
        return build_instance_report(inspector, target, _parse_json_args(args.args))

    raise AssertionError


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    root = Path(args.root).expanduser().resolve()

    try:
        config = load_config(root)
    except ConfigError as exc:
        sys.stderr.write(f"error: {exc}\n")
        return 2

    add_import_root(root)

    level = args.log_level or config.log_level
    configure_logging(level=level, fmt=config.log_format)
    inspector = ClassInspector(config)

    try:
        report = _build_report(args, inspector)
    except ConstructionError as exc:
        sys.stderr.write(f"error: {exc}\n")
        return 1
    except InvalidInputError as exc:
        sys.stderr.write(f"error: {exc}\n")
        return 2

    sys.stdout.write(dump_report(report).decode("utf-8"))
    sys.stdout.write("\n")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
