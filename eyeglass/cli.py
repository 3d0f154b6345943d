"""Command line inspection of assembled options.

    eyeglass-options eyeglass.yaml
    eyeglass-options eyeglass.yaml --env-file .env --sass-only

Loads an options file, assembles it exactly as :class:`eyeglass.Eyeglass`
would (deprecations go to stderr) and prints the canonical options as JSON.
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from eyeglass.config_loader import load_options_file
from eyeglass.core import Eyeglass
from eyeglass.errors import EyeglassError
from eyeglass.logging_config import get_logger, setup_logging
from eyeglass.options import sass_options_for_compiler
from eyeglass.versions import VERSION


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="eyeglass-options",
        description="Print the sass options eyeglass assembles from an options file",
    )
    parser.add_argument("config", help="Path to a YAML options file")
    parser.add_argument(
        "--env-file",
        help="Load environment variables (such as SASS_PATH) from this .env file first",
    )
    parser.add_argument(
        "--sass-only",
        action="store_true",
        help="Omit the eyeglass namespace from the output",
    )
    parser.add_argument(
        "--no-env-expansion",
        action="store_true",
        help="Do not expand ${VAR} references in option values",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--log-format",
        choices=["human", "json", "simple"],
        help="Log format (default: EYEGLASS_LOG_FORMAT or human)",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {VERSION}")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(
        level=logging.DEBUG if args.verbose else None,
        format_type=args.log_format,
    )

    context = {"config": args.config}
    logger = get_logger(__name__, extra=context)
    logger.debug("Loading options file")

    try:
        raw = load_options_file(
            Path(args.config),
            env_file=args.env_file,
            expand_env=not args.no_env_expansion,
        )
    except EyeglassError as exc:
        get_logger(__name__, extra={**context, "error": exc.to_dict()}).error("%s", exc)
        return 1

    eyeglass = Eyeglass(raw)
    options = sass_options_for_compiler(eyeglass.options, include_namespace=not args.sass_only)
    logger.debug("Printing %d option(s)", len(options))
    json.dump(options, sys.stdout, indent=2, sort_keys=True, default=str)
    sys.stdout.write("\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
