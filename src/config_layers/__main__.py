from __future__ import annotations

import argparse
import importlib
import logging
import sys
from typing import Any, Optional, Sequence

from pydantic import TypeAdapter

from config_layers.errors import ConfigError
from config_layers.fields import build_catalog
from config_layers.loader import Loader, LoaderConfig
from config_layers.logging import LoggingSettings, init_logging
from config_layers.sources import NamespaceFlags, register_flags

logger = logging.getLogger(__name__)

LOGGING_ENV_PREFIX = "CONFIG_LAYERS"


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="config-layers", description="Inspect and load layered configuration records")
    subparsers = parser.add_subparsers(dest="command", required=True, help="Command to run")

    def add_common(sub: argparse.ArgumentParser) -> None:
        sub.add_argument("target", help="Record class as 'package.module:ClassName'")
        sub.add_argument("--env-prefix", default="", help="Environment variable prefix, without separator")
        sub.add_argument("--flag-prefix", default="", help="Flag name prefix, without separator")

    # Command: inspect
    inspect_parser = subparsers.add_parser("inspect", help="List the fields of a record and their source names")
    add_common(inspect_parser)

    # Command: load
    load_parser = subparsers.add_parser(
        "load",
        help="Load a record and print it as JSON",
        epilog="Record flags follow '--', e.g. -- --server.port 8080",
    )
    add_common(load_parser)
    load_parser.add_argument(
        "--file",
        dest="files",
        action="append",
        default=[],
        help="Config file candidate; the first existing one is used (repeatable)",
    )
    load_parser.add_argument("--dotenv", default=None, help="Optional .env file for the environment stage")
    load_parser.add_argument("--no-defaults", action="store_true", help="Skip declared defaults")
    load_parser.add_argument("--no-file", action="store_true", help="Skip config files")
    load_parser.add_argument("--no-env", action="store_true", help="Skip environment variables")
    load_parser.add_argument("--no-flags", action="store_true", help="Skip record flags")

    return parser


def _resolve_target(spec: str) -> type:
    module_name, sep, attribute = spec.partition(":")
    if not sep or not module_name or not attribute:
        raise ValueError(f"Invalid target, expected 'package.module:ClassName': {spec}")
    module = importlib.import_module(module_name)
    target: Any = module
    for part in attribute.split("."):
        target = getattr(target, part)
    if not isinstance(target, type):
        raise ValueError(f"Target is not a class: {spec}")
    return target


def _init_cli_logging() -> None:
    settings = LoggingSettings()
    loader = Loader(LoaderConfig(use_file=False, use_flag=False, env_prefix=LOGGING_ENV_PREFIX))
    loader.load(settings)
    init_logging(settings)


def _inspect(args: argparse.Namespace) -> None:
    record = _resolve_target(args.target)()
    loader = Loader(LoaderConfig(env_prefix=args.env_prefix, flag_prefix=args.flag_prefix))
    for field in build_catalog(record):
        default = field.default_value or "-"
        print(
            f"{field.full_name}\t{field.kind.value}\t{loader.env_name(field)}\t--{loader.flag_name(field)}\t{default}"
        )


def _load(args: argparse.Namespace, overrides: Sequence[str]) -> None:
    record = _resolve_target(args.target)()
    config = LoaderConfig(
        use_defaults=not args.no_defaults,
        use_file=not args.no_file,
        use_env=not args.no_env,
        use_flag=not args.no_flags,
        env_prefix=args.env_prefix,
        flag_prefix=args.flag_prefix,
        files=tuple(args.files),
        dotenv_path=args.dotenv,
    )

    # Record flags live on a separate parser, keyed by full flag name.
    probe = Loader(config)
    flag_parser = argparse.ArgumentParser(prog=f"config-layers load {args.target} --", add_help=False)
    register_flags(flag_parser, build_catalog(record), probe.flag_prefix)
    flags = NamespaceFlags(flag_parser.parse_args(list(overrides)))

    Loader(config, flags=flags).load(record)
    logger.info("config.loaded target=%s", args.target)
    print(TypeAdapter(type(record)).dump_json(record, indent=2).decode("utf-8"))


def main(argv: Optional[Sequence[str]] = None) -> int:
    argv = list(sys.argv[1:] if argv is None else argv)
    overrides: list[str] = []
    if "--" in argv:
        split = argv.index("--")
        argv, overrides = argv[:split], argv[split + 1 :]

    parser = _build_parser()
    args = parser.parse_args(argv)

    try:
        _init_cli_logging()
        if args.command == "inspect":
            _inspect(args)
        elif args.command == "load":
            _load(args, overrides)
    except (ConfigError, ValueError, ImportError, AttributeError, OSError) as exc:
        logger.debug("config.cli_failed", exc_info=True)
        print(f"config-layers: error: {exc}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        logger.info("Interrupted by user.")
        return 130
    return 0


if __name__ == "__main__":
    sys.exit(main())
