"""
Command-line interface for tagmap.

Maps a JSON document onto a dataclass named by ``module:ClassName`` and
prints the populated object, parses single timestamps, and lists the
document paths a dataclass reads.
"""

import dataclasses
import importlib
import json
import sys
from datetime import datetime
from pathlib import Path
from typing import Any, NoReturn, Optional

import click

from . import __version__
from .descriptors import describe
from .errors import DocumentParseError, TimestampParseError
from .mapping import StructMapper
from .tags import effective_path
from .timestamps import format_iso, parse_timestamp, resolve_zone


def _fail(message: str) -> NoReturn:
    click.echo(click.style(f"Error: {message}", fg="red"), err=True)
    sys.exit(1)


def _load_target(spec: str) -> type:
    """Import a dataclass from a ``module:ClassName`` reference, exiting 1 on failure."""
    module_name, sep, class_name = spec.partition(":")
    if not sep or not module_name or not class_name:
        _fail(f"expected module:ClassName, got {spec!r}")

    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        _fail(f"cannot import {module_name!r}: {e}")

    cls = getattr(module, class_name, None)
    if not (isinstance(cls, type) and dataclasses.is_dataclass(cls)):
        _fail(f"{spec!r} is not a dataclass")
    return cls


def _remove_nulls(obj: Any) -> Any:
    """Recursively remove null values from dicts."""
    if isinstance(obj, dict):
        return {k: _remove_nulls(v) for k, v in obj.items() if v is not None}
    elif isinstance(obj, list):
        return [_remove_nulls(item) for item in obj]
    return obj


def _json_default(value: Any) -> Any:
    if isinstance(value, datetime):
        return format_iso(value)
    return str(value)


def _zone_option(tz: Optional[str]):
    try:
        return resolve_zone(tz)
    except ValueError as e:
        _fail(f"--tz: {e}")


@click.group()
@click.version_option(version=__version__)
def main() -> None:
    """
    tagmap - populate dataclasses from JSON documents.

    Fields declare the document path they read with dotted annotations.
    """
    pass


@main.command("map")
@click.argument("document", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("target")
@click.option("--tz", default=None, help="Time zone for timestamps (default: $TAGMAP_TIMEZONE or UTC)")
@click.option("--namespace", default="", help="Annotation namespace suffix (e.g. Alt)")
@click.option("--propagate", is_flag=True, help="Use the namespace in nested dataclasses too")
@click.option("--strict-optionals", is_flag=True, help="Skip optional values of the wrong JSON type")
@click.option("--compact", is_flag=True, help="Output compact JSON (no indentation)")
@click.option("--include-nulls", is_flag=True, help="Keep unset optional fields in the output")
def map_command(
    document: Path,
    target: str,
    tz: Optional[str],
    namespace: str,
    propagate: bool,
    strict_optionals: bool,
    compact: bool,
    include_nulls: bool,
) -> None:
    """Map DOCUMENT onto TARGET and print the result as JSON.

    TARGET is a dataclass reference of the form module:ClassName.

    Example:

        tagmap map order.json shop.models:Order --namespace Alt --propagate
    """
    cls = _load_target(target)
    mapper = StructMapper(
        zone=_zone_option(tz),
        namespace_suffix=namespace,
        propagate=propagate,
        strict_optionals=strict_optionals,
    )

    try:
        result = mapper.load(document.read_bytes(), cls)
    except DocumentParseError as e:
        click.echo(click.style(f"Error parsing document: {e}", fg="red"), err=True)
        sys.exit(1)

    for message in result.messages:
        click.echo(click.style(f"Warning: {message}", fg="yellow"), err=True)

    record = dataclasses.asdict(result.target)
    if not include_nulls:
        record = _remove_nulls(record)
    click.echo(json.dumps(record, indent=None if compact else 2, default=_json_default))


@main.command()
@click.argument("text")
@click.option("--tz", default=None, help="Time zone for the parsed value (default: $TAGMAP_TIMEZONE or UTC)")
def date(text: str, tz: Optional[str]) -> None:
    """Parse TEXT with the supported timestamp layouts."""
    try:
        parsed = parse_timestamp(text, _zone_option(tz))
    except TimestampParseError as e:
        click.echo(click.style(f"Error parsing timestamp: {e}", fg="red"), err=True)
        sys.exit(1)
    click.echo(format_iso(parsed))


@main.command()
@click.argument("target")
@click.option("--namespace", default="", help="Annotation namespace suffix")
@click.option("--propagate", is_flag=True, help="Use the namespace in nested dataclasses too")
def paths(target: str, namespace: str, propagate: bool) -> None:
    """List the document path each field of TARGET reads."""
    cls = _load_target(target)

    def walk(klass: type, suffix: str, prop: bool, base: tuple[str, ...], owner: str, seen: tuple) -> None:
        for descriptor in describe(klass):
            if not descriptor.settable:
                continue
            name = f"{owner}.{descriptor.name}" if owner else descriptor.name
            path = effective_path(base, descriptor.tag(suffix))
            click.echo(f"{name}\t{'.'.join(path)}\t{descriptor.kind.value}")
            # self-referencing dataclasses are listed once
            if descriptor.composite and descriptor.nested not in seen:
                chain = (*seen, descriptor.nested)
                if prop:
                    walk(descriptor.nested, suffix, True, path, name, chain)
                else:
                    walk(descriptor.nested, "", False, path, name, chain)

    walk(cls, namespace, propagate, (), "", (cls,))


if __name__ == "__main__":
    main()
