# Copyright 2025 CrownOps Engineering
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""CLI entry point and orchestration for flowcheck commands."""

from __future__ import annotations

import argparse
import logging
import pathlib
from collections.abc import Callable, Sequence
from textwrap import dedent
from typing import TYPE_CHECKING, Final

from flowcheck import __version__
from flowcheck.cli.commands import check as check_command
from flowcheck.cli.commands import checkers as checkers_command
from flowcheck.cli.commands import parse as parse_command
from flowcheck.cli.helpers import CLIContext, build_cli_context, echo, format_error
from flowcheck.cli.helpers import register_argument as _register_argument
from flowcheck.core.model_types import LogComponent, LogFormat
from flowcheck.exceptions import FlowcheckError
from flowcheck.logging import LOG_FORMATS, LOG_LEVELS, configure_logging, structured_extra
from flowcheck.runtime import consume

if TYPE_CHECKING:
    from flowcheck.cli.types import SubparserCollection

logger: logging.Logger = logging.getLogger("flowcheck.cli")

FLOWCHECK_VERSION: Final[str] = __version__
CONFIG_ERROR_EXIT: Final[int] = 2

CONFIG_TEMPLATE: Final[str] = dedent(
    """\
    # flowcheck configuration template
    # Save this file as flowcheck.toml in the root of your project, or move the
    # settings under [tool.flowcheck] in pyproject.toml.
    config_version = 0

    [flow]
    # Flow binary; FLOWCHECK_FLOW_EXECUTABLE overrides this value.
    executable = "flow"

    # Extra arguments inserted after the flow subcommand.
    # args = ["--quiet"]

    # Sent to flow as --from so the server can attribute requests.
    client = "flowcheck"

    # Directory marker identifying a Flow project.
    marker_file = ".flowconfig"

    # Checkers to run, in order.
    checkers = ["javascript-flow", "javascript-flow-coverage"]

    # Set to false to skip the coverage checker.
    coverage = true
    """,
)


def write_config_template(path: pathlib.Path, *, force: bool) -> int:
    """Write the flowcheck configuration template to a file.

    Args:
        path: Target path where the configuration file will be written.
        force: Overwrite the file if it already exists.

    Returns:
        int: Exit code (0 for success, 1 when the file exists and ``force`` is unset).
    """
    if path.exists() and not force:
        echo(f"[flowcheck] Refusing to overwrite existing file: {path}")
        echo("Use --force if you want to replace it.")
        return 1
    path.parent.mkdir(parents=True, exist_ok=True)
    consume(path.write_text(CONFIG_TEMPLATE, encoding="utf-8"))
    echo(f"[flowcheck] Wrote starter config to {path}")
    return 0


CommandHandler = Callable[[argparse.Namespace, CLIContext], int]


def main(argv: Sequence[str] | None = None) -> int:
    """Main CLI entry point for the flowcheck command-line interface.

    Parses command-line arguments, configures logging, loads configuration and
    dispatches to the command handler. Structured flowcheck errors are printed
    with their error code.

    Args:
        argv: Command-line arguments to parse. If None, uses sys.argv.

    Returns:
        int: Exit code from the command handler, or 2 when configuration,
        checker selection or report input is invalid.
    """
    parser = _build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)
    if args.version:
        echo(f"flowcheck {FLOWCHECK_VERSION}")
        return 0
    if args.command is None:
        parser.error("No command provided.")
    _initialize_logging(getattr(args, "log_format", None), getattr(args, "log_level", None))
    if args.command == "init":
        return _execute_init(args)
    handler = _command_handlers().get(args.command)
    if handler is None:
        parser.error(f"Unknown command {args.command}")
    try:
        context = build_cli_context(getattr(args, "config", None))
        return handler(args, context)
    except FlowcheckError as exc:
        logger.debug(
            "Command %s failed: %s",
            args.command,
            exc,
            extra=structured_extra(component=LogComponent.CLI, details={"error": type(exc).__name__}),
        )
        echo(format_error(exc), err=True)
        return CONFIG_ERROR_EXIT
    except OSError as exc:
        echo(f"[flowcheck] {exc}", err=True)
        return CONFIG_ERROR_EXIT


def _build_parser() -> argparse.ArgumentParser:
    """Build the top-level parser with global options and every subcommand.

    Returns:
        argparse.ArgumentParser: Fully configured argument parser.
    """
    common = argparse.ArgumentParser(add_help=False)
    _register_argument(
        common,
        "--log-format",
        choices=LOG_FORMATS,
        default=argparse.SUPPRESS,
        help="Select logging output format (human-readable text or structured JSON).",
    )
    _register_argument(
        common,
        "--log-level",
        choices=LOG_LEVELS,
        default=argparse.SUPPRESS,
        help="Set verbosity of logged events (default: warning).",
    )
    _register_argument(
        common,
        "--config",
        type=pathlib.Path,
        default=argparse.SUPPRESS,
        help="Explicit configuration file (defaults to discovery from the working directory).",
    )
    parser = argparse.ArgumentParser(
        prog="flowcheck",
        parents=[common],
        description="Run Flow over JavaScript buffers and report normalized diagnostics.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    _register_argument(
        parser,
        "--version",
        action="store_true",
        help="Print the flowcheck version and exit.",
    )
    subparsers = parser.add_subparsers(dest="command")

    parents = [common]
    check_command.register_check_command(subparsers, parents=parents)
    parse_command.register_parse_command(subparsers, parents=parents)
    checkers_command.register_checkers_command(subparsers, parents=parents)
    _register_init_command(subparsers, parents=parents)
    return parser


def _register_init_command(
    subparsers: SubparserCollection,
    *,
    parents: Sequence[argparse.ArgumentParser] | None,
) -> None:
    init = subparsers.add_parser(
        "init",
        help="Generate a starter configuration file",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
        parents=parents or [],
    )
    _register_argument(
        init,
        "-s",
        "--save-as",
        dest="output",
        type=pathlib.Path,
        default=pathlib.Path("flowcheck.toml"),
        help="Destination for the generated configuration file.",
    )
    _register_argument(
        init,
        "--force",
        action="store_true",
        help="Overwrite the output file if it already exists.",
    )


def _initialize_logging(log_format: str | None, log_level: str | None) -> None:
    fmt = LogFormat.from_str(log_format) if log_format else None
    consume(configure_logging(fmt, log_level=log_level))


def _command_handlers() -> dict[str, CommandHandler]:
    return {
        "check": check_command.execute_check,
        "checkers": checkers_command.execute_checkers,
        "parse": parse_command.execute_parse,
    }


def _execute_init(args: argparse.Namespace) -> int:
    return write_config_template(args.output, force=args.force)


__all__ = ["CONFIG_TEMPLATE", "main", "write_config_template"]
