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

"""Translate ``flow coverage --json`` output into warning records.

Coverage is advisory: a report that is not JSON, lacks
``expressions.uncovered_locs``, or contains a malformed span yields no records
instead of an error.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Final

from pydantic import ValidationError

from flowcheck.core.checker_names import FLOW_COVERAGE_CHECKER
from flowcheck.core.model_types import LogComponent, SeverityLevel
from flowcheck.core.types import DiagnosticRecord
from flowcheck.logging import structured_extra

from .models import CoverageReportModel, CoverageSpanModel

logger: logging.Logger = logging.getLogger("flowcheck.reports")

UNCOVERED_MESSAGE_PREFIX: Final[str] = "no-coverage-to"


@dataclass(slots=True, frozen=True)
class CoverageSummary:
    """Covered/uncovered expression counts reported by Flow."""

    covered: int
    uncovered: int

    @property
    def total(self) -> int:
        return self.covered + self.uncovered

    @property
    def percent(self) -> float:
        """Share of covered expressions; an empty file counts as fully covered."""
        if self.total == 0:
            return 100.0
        return round(self.covered * 100 / self.total, 2)


def _decode(raw_json_text: str) -> CoverageReportModel | None:
    try:
        payload = json.loads(raw_json_text)
    except json.JSONDecodeError as exc:
        logger.debug(
            "Ignoring coverage output that is not JSON: %s",
            exc,
            extra=structured_extra(component=LogComponent.REPORTS, checker=FLOW_COVERAGE_CHECKER),
        )
        return None
    try:
        return CoverageReportModel.model_validate(payload)
    except ValidationError as exc:
        logger.debug(
            "Ignoring unreadable coverage report (%s problems)",
            exc.error_count(),
            extra=structured_extra(
                component=LogComponent.REPORTS,
                checker=FLOW_COVERAGE_CHECKER,
                details={"errors": [error["type"] for error in exc.errors()]},
            ),
        )
        return None


def uncovered_message(span: CoverageSpanModel) -> str:
    """Return the message for an uncovered span, e.g. ``no-coverage-to (3 . 10)``."""
    return f"{UNCOVERED_MESSAGE_PREFIX} ({span.end.line} . {span.end.column})"


def parse_coverage(raw_json_text: str, buffer_path: Path | str | None) -> list[DiagnosticRecord]:
    """Translate a Flow coverage report into warning records.

    Args:
        raw_json_text: JSON text from ``flow coverage --json``.
        buffer_path: File the report was produced for; coverage entries carry
            no path of their own.

    Returns:
        One warning per uncovered span, in report order, or an empty list when
        the report cannot be read.
    """
    report = _decode(raw_json_text)
    if report is None:
        return []
    file_path = Path(buffer_path) if buffer_path is not None else None
    records = [
        DiagnosticRecord(
            line=span.start.line,
            column=span.start.column,
            severity=SeverityLevel.WARNING,
            message=uncovered_message(span),
            source_checker=FLOW_COVERAGE_CHECKER,
            file_path=file_path,
        )
        for span in report.expressions.uncovered_locs
    ]
    logger.debug(
        "Parsed %s uncovered expressions",
        len(records),
        extra=structured_extra(
            component=LogComponent.REPORTS,
            checker=FLOW_COVERAGE_CHECKER,
            path=file_path,
        ),
    )
    return records


def coverage_summary(raw_json_text: str) -> CoverageSummary | None:
    """Return covered/uncovered counts from a coverage report, if present.

    Falls back to counting ``uncovered_locs`` when Flow omits
    ``uncovered_count``. Returns None when the report is unreadable or has no
    ``covered_count``.
    """
    report = _decode(raw_json_text)
    if report is None:
        return None
    expressions = report.expressions
    if expressions.covered_count is None:
        return None
    uncovered = expressions.uncovered_count
    if uncovered is None:
        uncovered = len(expressions.uncovered_locs)
    return CoverageSummary(covered=expressions.covered_count, uncovered=uncovered)


__all__ = [
    "UNCOVERED_MESSAGE_PREFIX",
    "CoverageSummary",
    "coverage_summary",
    "parse_coverage",
    "uncovered_message",
]
