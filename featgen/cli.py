"""featgen command-line entry point.

Fully interactive: answers come from prompts, settings from the environment
(see ``ScaffoldConfig.from_env``) or an optional JSON config file.

Usage::

    featgen
    featgen --config featgen.json
    python -m featgen
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

from pydantic import ValidationError

from featgen import __version__
from featgen.config import ScaffoldConfig
from featgen.scaffolder import (
    ConfigurationError,
    FeatureGenerator,
    GenerationReport,
    TemplateResolver,
    build_registry,
)
from featgen.selector import InteractiveSelector
from featgen.utils import console, print_error, print_success, print_summary_table


def run(config: ScaffoldConfig, selector: InteractiveSelector | None = None) -> int:
    """Run one interactive scaffolding session.

    Returns:
        ``0`` once the batch ran (individual file failures are reported, not
        escalated), ``1`` on a configuration error (nothing is written),
        ``130`` if the user aborted a prompt.
    """
    registry = build_registry(config.profile)
    selector = selector or InteractiveSelector(config, registry)

    try:
        request = selector.select()
    except ConfigurationError as exc:
        print_error(str(exc))
        return 1
    except (KeyboardInterrupt, EOFError):
        console.print()
        print_error("Aborted.")
        return 130

    generator = FeatureGenerator(
        registry=registry,
        resolver=TemplateResolver(config.build_template_source()),
        base_dir=config.base_dir,
    )
    try:
        report = asyncio.run(generator.generate(request))
    except ConfigurationError as exc:
        print_error(str(exc))
        return 1

    _print_report(report)
    print_success("Feature scaffolding complete.")
    return 0


def _print_report(report: GenerationReport) -> None:
    console.print()
    print_summary_table(report.summary(), title="Feature scaffolding")


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for ``featgen`` and ``python -m featgen``."""
    parser = argparse.ArgumentParser(
        prog="featgen",
        description="Interactively scaffold the files of a front-end feature module.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Settings can also come from FEATGEN_* environment variables, e.g.\n"
            "  FEATGEN_TEMPLATE_DIR=./templates featgen\n"
            "  FEATGEN_TEMPLATE_URL=https://example.com/scaffold featgen\n"
        ),
    )
    parser.add_argument(
        "--config", "-c",
        default=None,
        help="JSON configuration file (default: read FEATGEN_* environment variables)",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    args = parser.parse_args(argv)

    if args.config:
        config_path = Path(args.config)
        if not config_path.exists():
            print_error(f"Error: Config file not found: {config_path}")
            return 1
    try:
        if args.config:
            config = ScaffoldConfig.load(args.config)
        else:
            config = ScaffoldConfig.from_env()
    except (ValidationError, ValueError) as exc:
        source = args.config or "FEATGEN_* environment variables"
        print_error(f"Error: Invalid configuration in {source}: {exc}")
        return 1

    return run(config)


if __name__ == "__main__":
    sys.exit(main())
