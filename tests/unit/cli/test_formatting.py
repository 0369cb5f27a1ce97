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

"""Unit tests for CLI rendering helpers."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from flowcheck.checkers import CheckResult
from flowcheck.cli.helpers import (
    format_coverage_summary,
    format_error,
    format_record,
    render_records,
    render_results,
    render_table_rows,
    stringify,
)
from flowcheck.core.checker_names import FLOW_CHECKER, FLOW_COVERAGE_CHECKER
from flowcheck.core.model_types import OutputFormat, SeverityLevel
from flowcheck.core.types import DiagnosticRecord
from flowcheck.reports import CoverageSummary, ParseFailure

pytestmark = [pytest.mark.unit, pytest.mark.cli]


def _record(**overrides: object) -> DiagnosticRecord:
    values: dict[str, object] = {
        "line": 4,
        "column": 2,
        "severity": SeverityLevel.ERROR,
        "message": "Cannot call",
        "source_checker": FLOW_CHECKER,
        "file_path": Path("src/app.js"),
        "identifier": "Cannot call",
    }
    values.update(overrides)
    return DiagnosticRecord(**values)  # type: ignore[arg-type]


def test_format_record_full_location() -> None:
    assert format_record(_record()) == "src/app.js:4:2: error: Cannot call [Cannot call] (javascript-flow)"


def test_format_record_without_location_or_identifier() -> None:
    record = _record(line=None, column=None, file_path=None, identifier=None, message="")
    assert format_record(record) == "<buffer>: error:  (javascript-flow)"


def test_render_records_json() -> None:
    (document,) = render_records([_record()], OutputFormat.JSON)
    payload = json.loads(document)
    assert payload == [
        {
            "file": "src/app.js",
            "line": 4,
            "column": 2,
            "severity": "error",
            "message": "Cannot call",
            "identifier": "Cannot call",
            "checker": "javascript-flow",
        },
    ]


def test_render_results_text_lists_records_then_failures() -> None:
    results = [
        CheckResult(checker=FLOW_CHECKER, records=[_record()]),
        CheckResult(checker=FLOW_COVERAGE_CHECKER, failure="boom"),
    ]
    assert render_results(results, OutputFormat.TEXT) == [
        "src/app.js:4:2: error: Cannot call [Cannot call] (javascript-flow)",
        "<buffer>: error: boom (javascript-flow-coverage)",
    ]


def test_render_table_rows_aligns_columns() -> None:
    rows = render_table_rows([{"name": "javascript-flow", "n": 1}, {"name": "x", "n": 22}], ["name", "n"])
    assert rows[0] == "name            | n "
    assert rows[1] == "----------------+---"
    assert rows[3] == "x               | 22"
    assert render_table_rows([]) == ["<empty>"]


def test_stringify_nested_values() -> None:
    assert stringify({"a": [1, True, None]}) == "{a: [1, true, ]}"


def test_format_coverage_summary() -> None:
    summary = CoverageSummary(covered=3, uncovered=1)
    assert format_coverage_summary(summary) == "coverage: 75.00% (3/4 expressions covered)"
    assert CoverageSummary(covered=0, uncovered=0).percent == 100.0


def test_format_error_includes_code() -> None:
    assert format_error(ParseFailure("empty output")) == "[flowcheck] FC200: Unable to parse flow report (empty output)"
