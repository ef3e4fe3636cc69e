"""Command line entry point.

Usage:
    solverbench [build] [--impl NAME] [--output-dir DIR]
    solverbench clean [--output-dir DIR]
    solverbench variants [--registry FILE]
"""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence

from solverbench.config import BuildConfig
from solverbench.errors import (
    ConfigurationError,
    SolverBenchError,
    ToolchainError,
    UnknownVariantError,
)
from solverbench.pipeline import BenchmarkBuild

EXIT_FILESYSTEM = 1
EXIT_USAGE = 2


def cmd_build(pipeline: BenchmarkBuild, args: argparse.Namespace) -> None:
    result = pipeline.build()
    print(f"Built {result.variant.name} -> {result.target.executable_path}")


def cmd_clean(pipeline: BenchmarkBuild, args: argparse.Namespace) -> None:
    for path in pipeline.clean():
        print(f"Removed {path}")


def cmd_variants(pipeline: BenchmarkBuild, args: argparse.Namespace) -> None:
    registry = pipeline.variants
    for name in registry.names():
        variant = registry.variants[name]
        marker = "*" if name == registry.default else " "
        libs = " ".join(variant.linker_args())
        print(f"{marker} {name}\t{variant.source_path}\t{libs}".rstrip())


COMMANDS = {
    "build": cmd_build,
    "clean": cmd_clean,
    "variants": cmd_variants,
}


def _common_options(*, default: object) -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--impl",
        default=default,
        help="Solver variant to build (env: SOLVERBENCH_IMPL)",
    )
    common.add_argument(
        "--output-dir",
        default=default,
        help="Managed output directory (default: output)",
    )
    common.add_argument("--registry", default=default, help="JSON variant registry file")
    common.add_argument("--cxx", default=default, help="Compiler driver (env: CXX)")
    common.add_argument(
        "--log-file",
        default=default,
        help="Write structured logs as JSON lines",
    )
    return common


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="solverbench",
        description="Build the standalone solver benchmark for one variant",
        parents=[_common_options(default=None)],
    )
    # Absent subcommand options leave values given before the subcommand in place.
    sub_options = _common_options(default=argparse.SUPPRESS)
    sub = parser.add_subparsers(dest="command")
    sub.add_parser(
        "build",
        help="Compile and link the selected variant",
        parents=[sub_options],
    )
    sub.add_parser(
        "clean",
        help="Remove generated objects and the executable",
        parents=[sub_options],
    )
    sub.add_parser("variants", help="List registered variants", parents=[sub_options])
    parser.set_defaults(command="build")
    return parser


def exit_code_for(error: SolverBenchError) -> int:
    if isinstance(error, ToolchainError):
        return error.returncode or 1
    if isinstance(error, (UnknownVariantError, ConfigurationError)):
        return EXIT_USAGE
    return EXIT_FILESYSTEM


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    pipeline: BenchmarkBuild | None = None
    try:
        config = BuildConfig.from_env().with_overrides(
            variant=args.impl,
            output_dir=args.output_dir,
            cxx=args.cxx,
            registry_path=args.registry,
        )
        pipeline = BenchmarkBuild(config=config)
        COMMANDS[args.command](pipeline, args)
    except SolverBenchError as exc:
        print(f"error[{exc.code}]: {exc}", file=sys.stderr)
        return exit_code_for(exc)
    finally:
        if args.log_file and pipeline is not None:
            pipeline.logger.to_json_lines(args.log_file)
    return 0


if __name__ == "__main__":
    sys.exit(main())
