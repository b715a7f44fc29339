from __future__ import annotations

import logging
from typing import Any, Iterable

from leaflet_notebook.errors import MissingOptionValueError

logger = logging.getLogger(__name__)

MARKER_PREFIX = ":"


class Option(str):
    """
    Marks the next positional argument as the value of a view option.

        leaflet(points, Option("color"), "red")
        leaflet(points, opt.tile_layer_url, url)
        leaflet(points, ":color", "red")
    """

    def __new__(cls, name: str) -> "Option":
        name = str(name)
        if name.startswith(MARKER_PREFIX):
            name = name[len(MARKER_PREFIX):]
        if not name:
            raise ValueError("Option name must not be empty")
        return super().__new__(cls, name)

    def __repr__(self) -> str:
        return f"{MARKER_PREFIX}{str.__str__(self)}"


class _OptionNamespace:
    def __getattr__(self, name: str) -> Option:
        if name.startswith("__"):
            raise AttributeError(name)
        return Option(option_name(name))


opt = _OptionNamespace()


def option_name(name: str) -> str:
    # Python identifiers can't carry hyphens: tile_layer_url -> tile-layer-url.
    return name.replace("_", "-")


def is_option_marker(arg: Any) -> bool:
    if isinstance(arg, Option):
        return True
    return isinstance(arg, str) and len(arg) > 1 and arg.startswith(MARKER_PREFIX)


def _marker_key(arg: str) -> str:
    return str.__str__(Option(arg))


def classify_args(args: Iterable[Any]) -> list[tuple[bool, Any]]:
    """First pass: tag each argument as (is_marker, value)."""
    return [(is_option_marker(a), a) for a in args]


def parse_args(args: Iterable[Any]) -> tuple[list[Any], dict[str, Any]]:
    """
    Split a mixed argument list into geometry descriptors and options.

    Scans left to right. A marker takes the argument right after it as its value
    (a repeated marker overwrites the earlier value); everything else is a
    geometry descriptor, kept in order.
    """
    tokens = classify_args(args)
    geometries: list[Any] = []
    options: dict[str, Any] = {}

    i = 0
    while i < len(tokens):
        is_marker, arg = tokens[i]
        if not is_marker:
            geometries.append(arg)
            i += 1
            continue
        key = _marker_key(arg)
        if i + 1 >= len(tokens):
            raise MissingOptionValueError(f"No value specified for option {key!r}")
        # The value slot is taken as-is, even if it looks like another marker.
        options[key] = tokens[i + 1][1]
        i += 2

    logger.debug(
        "Parsed %d geometry descriptor(s), options=%s", len(geometries), sorted(options)
    )
    return geometries, options
