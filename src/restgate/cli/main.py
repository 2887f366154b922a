"""CLI entrypoint for Restgate."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from restgate import __version__
from restgate.cli.handlers import handle_generate_models, handle_publish_api, handle_validate_config
from restgate.constants.branding import CLI_DESCRIPTION
from restgate.constants.compatibility import VALID_COMPAT_LEVELS
from restgate.exceptions import (
    CompatibilityError,
    ConfigError,
    DescriptorParseError,
    MissingInputDirectoryError,
    RestgateError,
)


def build_parser() -> argparse.ArgumentParser:
    """Build top-level CLI parser."""
    parser = argparse.ArgumentParser(
        prog="restgate",
        description=CLI_DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command", required=True)

    models = subparsers.add_parser("generate-models", help="Generate data model classes from descriptors")
    _add_common_arguments(models)

    api = subparsers.add_parser("publish-api", help="Generate, check and publish idl and snapshot files")
    _add_common_arguments(api)
    api.add_argument(
        "--compat-mode",
        type=str.lower,
        choices=list(VALID_COMPAT_LEVELS),
        default=None,
        help="Override compat_mode from restgate.yaml",
    )

    validate = subparsers.add_parser("validate-config", help="Validate configuration without running")
    validate.add_argument("-r", "--root", type=Path, required=True, help="Project root path")
    validate.add_argument("-c", "--config", type=Path, help="Explicit config file")

    return parser


def _add_common_arguments(subparser: argparse.ArgumentParser) -> None:
    subparser.add_argument("-r", "--root", type=Path, required=True, help="Project root path")
    subparser.add_argument("-c", "--config", type=Path, help="Explicit config file")
    subparser.add_argument("-v", "--verbose", action="store_true", help="Log cache and generation details")


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint."""
    parser = build_parser()
    args = parser.parse_args(argv)

    level = logging.DEBUG if getattr(args, "verbose", False) else logging.INFO
    logging.basicConfig(level=level, format="%(levelname)s %(message)s")

    if args.command == "validate-config":
        return handle_validate_config(args)

    handlers = {
        "generate-models": handle_generate_models,
        "publish-api": handle_publish_api,
    }
    handler = handlers.get(args.command)
    if handler is None:
        parser.error(f"Unsupported command: {args.command}")

    try:
        return handler(args)
    except (ConfigError, MissingInputDirectoryError) as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 2
    except DescriptorParseError as exc:
        print(f"Descriptor error: {exc}", file=sys.stderr)
        return 1
    except CompatibilityError as exc:
        print(f"Compatibility check failed:\n{exc.summary}", file=sys.stderr)
        return 1
    except RestgateError as exc:
        print(f"Generation error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
