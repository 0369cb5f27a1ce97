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

"""Built-in Flow checker descriptors.

Both checkers send the unsaved buffer to Flow on standard input and pass the
real file path so Flow can resolve the file's imports. They share the gate as
their predicate.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from flowcheck.core.checker_names import ESLINT_CHECKER, FLOW_CHECKER, FLOW_COVERAGE_CHECKER
from flowcheck.core.model_types import SeverityLevel
from flowcheck.gate import first_line, should_run
from flowcheck.reports import parse_coverage, parse_diagnostics

from .base import CheckContext, CheckerDescriptor, NextChecker

if TYPE_CHECKING:
    from flowcheck.core.type_aliases import Command
    from flowcheck.core.types import DiagnosticRecord


def flow_applies(context: CheckContext) -> bool:
    """Gate predicate shared by the Flow checkers."""
    return should_run(
        context.buffer_path,
        first_line(context.buffer_text),
        marker_file=context.settings.marker_file,
    )


def flow_command(context: CheckContext) -> Command:
    """Return ``flow check-contents <args> --json --from <client> --color=never <path>``."""
    settings = context.settings
    return [
        settings.executable,
        "check-contents",
        *settings.args,
        "--json",
        "--from",
        settings.client,
        "--color=never",
        str(context.buffer_path),
    ]


def flow_coverage_command(context: CheckContext) -> Command:
    """Return ``flow coverage <args> --json --from <client> --path <path>``."""
    settings = context.settings
    return [
        settings.executable,
        "coverage",
        *settings.args,
        "--json",
        "--from",
        settings.client,
        "--path",
        str(context.buffer_path),
    ]


def _parse_flow(stdout: str, context: CheckContext) -> list[DiagnosticRecord]:
    return parse_diagnostics(stdout, FLOW_CHECKER, context.buffer_path)


def _parse_flow_coverage(stdout: str, context: CheckContext) -> list[DiagnosticRecord]:
    return parse_coverage(stdout, context.buffer_path)


FLOW_DESCRIPTOR = CheckerDescriptor(
    name=FLOW_CHECKER,
    description="Type errors reported by flow check-contents",
    build_command=flow_command,
    parse=_parse_flow,
    predicate=flow_applies,
    next_checkers=(
        NextChecker(ESLINT_CHECKER, max_level=SeverityLevel.ERROR),
        NextChecker(FLOW_COVERAGE_CHECKER),
    ),
)

FLOW_COVERAGE_DESCRIPTOR = CheckerDescriptor(
    name=FLOW_COVERAGE_CHECKER,
    description="Expressions flow coverage reports as untyped",
    build_command=flow_coverage_command,
    parse=_parse_flow_coverage,
    predicate=flow_applies,
)

BUILTIN_DESCRIPTORS: tuple[CheckerDescriptor, ...] = (FLOW_DESCRIPTOR, FLOW_COVERAGE_DESCRIPTOR)

__all__ = [
    "BUILTIN_DESCRIPTORS",
    "FLOW_COVERAGE_DESCRIPTOR",
    "FLOW_DESCRIPTOR",
    "flow_applies",
    "flow_command",
    "flow_coverage_command",
]
