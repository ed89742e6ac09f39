from __future__ import annotations

import argparse
import logging
import sys
from typing import Any, Iterable, Optional, Sequence

from config_layers.fields.models import FieldDescriptor

logger = logging.getLogger(__name__)

# Shared by every loader in the process that is not given its own flags.
PROCESS_FLAGS = argparse.ArgumentParser(add_help=False, allow_abbrev=False)

_parsed: Optional[argparse.Namespace] = None


def _format(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class NamespaceFlags:
    """Flag values from an argparse namespace whose dests are full flag names."""

    def __init__(self, namespace: argparse.Namespace) -> None:
        self._values = vars(namespace)

    def lookup(self, name: str) -> Optional[str]:
        value = self._values.get(name)
        if value is None:
            return None
        return _format(value)


def parsed() -> bool:
    return _parsed is not None


def parse(args: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parse the process flags. Unknown arguments are left for the application."""
    global _parsed
    namespace, unknown = PROCESS_FLAGS.parse_known_args(sys.argv[1:] if args is None else args)
    if unknown:
        logger.debug("config.flags_unrecognized count=%d", len(unknown))
    _parsed = namespace
    return namespace


def process_flags() -> NamespaceFlags:
    """Process-wide flags, parsed on first use."""
    namespace = _parsed if _parsed is not None else parse()
    return NamespaceFlags(namespace)


def reset() -> None:
    global _parsed
    _parsed = None


def flag_name(field: FieldDescriptor, flag_prefix: str) -> str:
    return (flag_prefix + field.full_name).lower()


def register_flags(
    parser: argparse.ArgumentParser,
    fields: Iterable[FieldDescriptor],
    flag_prefix: str = "",
) -> list[str]:
    """
    Add one `--<name>` option per field.

    Options default to None so that only flags actually given are applied.
    `flag_prefix` is used as is and should already end with a dot.
    """
    names = []
    for field in fields:
        name = flag_name(field, flag_prefix)
        help_text = field.help or f"{field.kind.value} value"
        if field.default_value:
            help_text += f" (default: {field.default_value})"
        parser.add_argument(
            f"--{name}",
            dest=name,
            default=None,
            metavar=field.kind.value.upper(),
            help=help_text.replace("%", "%%"),
        )
        names.append(name)
    return names
