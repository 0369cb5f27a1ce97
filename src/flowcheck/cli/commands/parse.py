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

"""Implementation of ``flowcheck parse``: translate a captured Flow report."""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import TYPE_CHECKING

from flowcheck.cli.helpers import (
    echo,
    format_coverage_summary,
    output_format_from,
    read_text_source,
    register_argument,
    register_format_flag,
    render_records,
)
from flowcheck.core.model_types import OutputFormat, ReportKind, SeverityLevel
from flowcheck.reports import coverage_summary, parse_coverage, parse_diagnostics

if TYPE_CHECKING:
    from collections.abc import Sequence

    from flowcheck.cli.helpers import CLIContext
    from flowcheck.cli.types import SubparserCollection
    from flowcheck.core.types import DiagnosticRecord


def register_parse_command(
    subparsers: SubparserCollection,
    *,
    parents: Sequence[argparse.ArgumentParser] | None = None,
) -> None:
    """Attach the ``flowcheck parse`` command to the CLI.

    Args:
        subparsers: Top-level argparse subparser collection to register commands on.
        parents: Shared parent parsers carrying global options.
    """
    parse = subparsers.add_parser(
        "parse",
        help="Translate a saved Flow JSON report into diagnostics",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
        parents=parents or [],
    )
    register_argument(
        parse,
        "kind",
        choices=[kind.value for kind in ReportKind],
        help="Which Flow command produced the report.",
    )
    register_argument(parse, "report", help="Report file, or '-' to read standard input.")
    register_argument(
        parse,
        "--path",
        dest="buffer_path",
        type=Path,
        default=None,
        help="File the report was produced for.",
    )
    register_format_flag(parse)


def _parse(kind: ReportKind, raw: str, buffer_path: Path | None) -> list[DiagnosticRecord]:
    if kind is ReportKind.COVERAGE:
        return parse_coverage(raw, buffer_path)
    return parse_diagnostics(raw, file_context=buffer_path)


def execute_parse(args: argparse.Namespace, _: CLIContext) -> int:
    """Execute ``flowcheck parse``.

    Report errors (``ParseFailure``/``MalformedReport``) propagate to the CLI
    entry point, which prints their error code.

    Returns:
        ``1`` when the report contains an error-severity record, otherwise ``0``.
    """
    kind = ReportKind.from_str(args.kind)
    raw = read_text_source(args.report)
    records = _parse(kind, raw, args.buffer_path)
    fmt = output_format_from(args)
    for line in render_records(records, fmt):
        echo(line)
    if kind is ReportKind.COVERAGE and fmt is OutputFormat.TEXT:
        summary = coverage_summary(raw)
        if summary is not None:
            echo(format_coverage_summary(summary), err=True)
    return 1 if any(record.severity is SeverityLevel.ERROR for record in records) else 0


__all__ = ["execute_parse", "register_parse_command"]
