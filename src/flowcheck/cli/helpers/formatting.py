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

"""Rendering helpers shared by CLI commands."""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, cast

from flowcheck.core.model_types import OutputFormat
from flowcheck.error_codes import error_code_for
from flowcheck.json import normalize_enums_for_json

if TYPE_CHECKING:
    from flowcheck.checkers import CheckResult
    from flowcheck.core.types import DiagnosticRecord
    from flowcheck.json import JSONValue
    from flowcheck.reports import CoverageSummary

UNKNOWN_LOCATION = "<buffer>"


def stringify(value: object) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str | int | float):
        return str(value)
    if isinstance(value, Mapping):
        mapping = cast("Mapping[str, JSONValue]", value)
        return "{" + ", ".join(f"{key}: {stringify(val)}" for key, val in mapping.items()) + "}"
    if isinstance(value, Sequence) and not isinstance(value, str | bytes | bytearray):
        sequence = cast("Sequence[JSONValue]", value)
        return "[" + ", ".join(stringify(item) for item in sequence) + "]"
    return str(value)


def render_table_rows(rows: Sequence[Mapping[str, JSONValue]], headers: Sequence[str] | None = None) -> list[str]:
    """Render mappings as an aligned text table."""
    if not rows:
        return ["<empty>"]
    columns = list(headers) if headers is not None else sorted({key for row in rows for key in row})
    widths = {
        column: max(len(column), *(len(stringify(row.get(column))) for row in rows)) for column in columns
    }
    lines = [
        " | ".join(column.ljust(widths[column]) for column in columns),
        "-+-".join("-" * widths[column] for column in columns),
    ]
    lines.extend(" | ".join(stringify(row.get(column)).ljust(widths[column]) for column in columns) for row in rows)
    return lines


def render_json(data: object) -> str:
    return json.dumps(normalize_enums_for_json(data), indent=2, ensure_ascii=False)


def format_record(record: DiagnosticRecord) -> str:
    """Format a record as ``path:line:col: severity: message [identifier] (checker)``.

    Records without a location print the path alone; a missing identifier
    drops the bracketed part.
    """
    location = str(record.file_path) if record.file_path is not None else UNKNOWN_LOCATION
    if record.line is not None:
        location = f"{location}:{record.line}"
        if record.column is not None:
            location = f"{location}:{record.column}"
    text = f"{location}: {record.severity.value}: {record.message}"
    if record.identifier:
        text = f"{text} [{record.identifier}]"
    return f"{text} ({record.source_checker})"


def render_records(records: Sequence[DiagnosticRecord], fmt: OutputFormat) -> list[str]:
    if fmt is OutputFormat.JSON:
        return [render_json([record.to_payload() for record in records])]
    return [format_record(record) for record in records]


def render_results(results: Sequence[CheckResult], fmt: OutputFormat) -> list[str]:
    """Render pipeline results: one JSON document, or record lines plus failures."""
    if fmt is OutputFormat.JSON:
        return [render_json({"results": [result.to_payload() for result in results]})]
    lines: list[str] = []
    for result in results:
        lines.extend(format_record(record) for record in result.records)
        if result.failure is not None:
            lines.append(f"{UNKNOWN_LOCATION}: error: {result.failure} ({result.checker})")
    return lines


def format_coverage_summary(summary: CoverageSummary) -> str:
    return f"coverage: {summary.percent:.2f}% ({summary.covered}/{summary.total} expressions covered)"


def format_error(exc: BaseException) -> str:
    """Return ``[flowcheck] <code>: <message>`` for a structured exception."""
    return f"[flowcheck] {error_code_for(exc)}: {exc}"


__all__ = [
    "format_coverage_summary",
    "format_error",
    "format_record",
    "render_json",
    "render_records",
    "render_results",
    "render_table_rows",
    "stringify",
]
