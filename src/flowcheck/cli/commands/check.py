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

"""Implementation of ``flowcheck check``."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import TYPE_CHECKING

from flowcheck.api import build_context
from flowcheck.cli.helpers import echo, output_format_from, register_argument, register_format_flag, render_results
from flowcheck.core.model_types import SeverityLevel

if TYPE_CHECKING:
    from collections.abc import Sequence

    from flowcheck.checkers import CheckContext, PipelineRun
    from flowcheck.cli.helpers import CLIContext
    from flowcheck.cli.types import SubparserCollection


def register_check_command(
    subparsers: SubparserCollection,
    *,
    parents: Sequence[argparse.ArgumentParser] | None = None,
) -> None:
    """Attach the ``flowcheck check`` command to the CLI.

    Args:
        subparsers: Top-level argparse subparser collection to register commands on.
        parents: Shared parent parsers carrying global options.
    """
    check = subparsers.add_parser(
        "check",
        help="Run the Flow checkers over one file",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
        parents=parents or [],
    )
    register_argument(check, "path", type=Path, help="File to check; Flow resolves imports relative to it.")
    register_argument(
        check,
        "--stdin",
        action="store_true",
        help="Read the buffer contents from standard input instead of the file.",
    )
    register_argument(
        check,
        "--checker",
        dest="checkers",
        action="append",
        default=None,
        metavar="NAME",
        help="Only run this checker (repeatable).",
    )
    register_argument(
        check,
        "--explain",
        action="store_true",
        help="Report the gate decision on standard error.",
    )
    register_format_flag(check)


def _explain(context: CheckContext) -> None:
    reason = context.gate.reason.value if context.gate is not None else "unknown"
    root = str(context.config_root) if context.config_root is not None else "-"
    echo(f"[flowcheck] gate: {reason} (config root: {root})", err=True)


def exit_code_for(run: PipelineRun) -> int:
    """Return 1 when the run produced an error record or a checker failed."""
    if run.failures:
        return 1
    if any(record.severity is SeverityLevel.ERROR for record in run.records):
        return 1
    return 0


def execute_check(args: argparse.Namespace, cli_context: CLIContext) -> int:
    """Execute ``flowcheck check``.

    Args:
        args: Parsed CLI namespace.
        cli_context: Loaded configuration.

    Returns:
        ``1`` when any error-severity record or checker failure was reported,
        otherwise ``0``.
    """
    text = sys.stdin.read() if args.stdin else None
    context = build_context(args.path, text, settings=cli_context.config.flow)
    if args.explain:
        _explain(context)
    pipeline = cli_context.pipeline
    if args.checkers:
        pipeline = pipeline.select(args.checkers)
    run = pipeline.run(context)
    for line in render_results(run.results, output_format_from(args)):
        echo(line)
    return exit_code_for(run)


__all__ = ["execute_check", "exit_code_for", "register_check_command"]
