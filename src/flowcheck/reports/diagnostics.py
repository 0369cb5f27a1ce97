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

"""Translate ``flow check-contents --json`` output into diagnostic records.

Each entry of the report's ``errors`` array becomes exactly one
``DiagnosticRecord``, in report order:

- location (path, line, column) comes from the first message part;
- the message text is the first part's ``descr``, replaced by the second
  part's ``descr`` when that part is tagged ``"Comment"``;
- ``kind == "parse"`` replaces the message with the literal ``"parse"``;
- ``identifier`` keeps the first part's original ``descr`` even when the
  message text was replaced.

The last two rules reproduce long-standing editor behaviour that downstream
filters match on; they are kept for compatibility.
"""

from __future__ import annotations

import json
import logging
from collections import Counter
from pathlib import Path
from typing import TYPE_CHECKING

from pydantic import ValidationError

from flowcheck.core.checker_names import FLOW_CHECKER
from flowcheck.core.model_types import LogComponent, SeverityLevel
from flowcheck.core.types import DiagnosticRecord
from flowcheck.logging import structured_extra

from .errors import MalformedReport, ParseFailure
from .models import PARSE_ERROR_KIND, FlowErrorModel, FlowReportModel

if TYPE_CHECKING:
    from flowcheck.core.type_aliases import CheckerId

logger: logging.Logger = logging.getLogger("flowcheck.reports")


def decode_report(raw_json_text: str) -> FlowReportModel:
    """Decode a Flow error report, failing fast on malformed input.

    Args:
        raw_json_text: Standard output captured from Flow.

    Returns:
        The validated report model.

    Raises:
        ParseFailure: If the text is empty, not JSON, or does not match the
            report schema.
    """
    if not raw_json_text.strip():
        reason = "empty output"
        raise ParseFailure(reason)
    try:
        payload = json.loads(raw_json_text)
    except json.JSONDecodeError as exc:
        reason = "invalid json"
        raise ParseFailure(reason, error=exc) from exc
    try:
        return FlowReportModel.model_validate(payload)
    except ValidationError as exc:
        reason = "unexpected report shape"
        raise ParseFailure(reason, error=exc) from exc


def _severity_for(entry: FlowErrorModel, index: int) -> SeverityLevel:
    try:
        return SeverityLevel.from_str(entry.level)
    except ValueError as exc:
        raise MalformedReport(entry.level, index=index) from exc


def _record_for(
    entry: FlowErrorModel,
    *,
    index: int,
    checker_id: CheckerId,
    file_context: Path | None,
) -> DiagnosticRecord:
    severity = _severity_for(entry, index)
    primary = entry.primary
    file_path = file_context
    line: int | None = None
    column: int | None = None
    code_reason: str | None = None
    if primary is not None:
        code_reason = primary.descr
        loc = primary.loc
        if loc is not None:
            if loc.source:
                file_path = Path(loc.source)
            if loc.start is not None:
                line = loc.start.line
                column = loc.start.column
    message = code_reason or ""
    comment = entry.comment
    if comment is not None:
        message = comment.descr
    if entry.is_parse_error:
        message = PARSE_ERROR_KIND
    return DiagnosticRecord(
        line=line,
        column=column,
        severity=severity,
        message=message,
        source_checker=checker_id,
        file_path=file_path,
        identifier=code_reason,
    )


def parse_diagnostics(
    raw_json_text: str,
    checker_id: CheckerId = FLOW_CHECKER,
    file_context: Path | str | None = None,
) -> list[DiagnosticRecord]:
    """Translate a Flow error report into diagnostic records.

    Args:
        raw_json_text: JSON text from ``flow check-contents --json``.
        checker_id: Checker identifier stamped on every record.
        file_context: Path of the file under check, used when an entry has no
            ``loc.source`` of its own.

    Returns:
        One record per ``errors`` entry, in report order. A report without an
        ``errors`` key yields an empty list.

    Raises:
        ParseFailure: If the report is not valid JSON or has the wrong shape.
        MalformedReport: If any entry has an unrecognised ``level``; no records
            are returned in that case.
    """
    report = decode_report(raw_json_text)
    context_path = Path(file_context) if file_context is not None else None
    records = [
        _record_for(entry, index=index, checker_id=checker_id, file_context=context_path)
        for index, entry in enumerate(report.errors)
    ]
    logger.debug(
        "Parsed %s flow diagnostics",
        len(records),
        extra=structured_extra(
            component=LogComponent.REPORTS,
            checker=checker_id,
            path=context_path,
            counts=_severity_counts(records),
        ),
    )
    return records


def _severity_counts(records: list[DiagnosticRecord]) -> Counter[SeverityLevel]:
    return Counter(record.severity for record in records)


__all__ = ["decode_report", "parse_diagnostics"]
