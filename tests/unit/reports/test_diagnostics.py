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

"""Unit tests for the Flow error-report parser."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from flowcheck.core.checker_names import FLOW_CHECKER
from flowcheck.core.model_types import SeverityLevel
from flowcheck.core.type_aliases import CheckerId
from flowcheck.reports import MalformedReport, ParseFailure, decode_report, parse_diagnostics
from tests.fixtures.flow_reports import comment_part, flow_error, flow_report

pytestmark = pytest.mark.unit


def test_records_follow_report_order() -> None:
    report = flow_report(
        flow_error("first", line=1, column=2),
        flow_error("second", level="warning", line=5, column=1),
        flow_error("third", line=9, column=4),
    )
    records = parse_diagnostics(report)
    assert [record.message for record in records] == ["first", "second", "third"]
    assert [(record.line, record.column) for record in records] == [(1, 2), (5, 1), (9, 4)]
    assert [record.severity for record in records] == [
        SeverityLevel.ERROR,
        SeverityLevel.WARNING,
        SeverityLevel.ERROR,
    ]


def test_location_comes_from_first_part() -> None:
    report = flow_report(
        flow_error(
            "Cannot assign",
            source="/repo/src/app.js",
            line=4,
            column=11,
            extra_parts=[
                {
                    "descr": "string",
                    "loc": {"source": "/repo/lib/other.js", "start": {"line": 90, "column": 1}},
                    "type": "Blame",
                },
            ],
        ),
    )
    (record,) = parse_diagnostics(report)
    assert record.file_path == Path("/repo/src/app.js")
    assert (record.line, record.column) == (4, 11)
    assert record.message == "Cannot assign"
    assert record.source_checker == FLOW_CHECKER


def test_comment_part_overrides_message_and_keeps_identifier() -> None:
    report = flow_report(flow_error("Cannot call", extra_parts=[comment_part("Use the other API")]))
    (record,) = parse_diagnostics(report)
    assert record.message == "Use the other API"
    # identifier keeps the first part's text even after the override
    assert record.identifier == "Cannot call"


def test_second_part_without_comment_tag_is_ignored() -> None:
    report = flow_report(flow_error("Cannot call", extra_parts=[{"descr": "number", "type": "Blame"}]))
    (record,) = parse_diagnostics(report)
    assert record.message == "Cannot call"


def test_comment_in_third_position_is_ignored() -> None:
    report = flow_report(
        flow_error("Cannot call", extra_parts=[{"descr": "number"}, comment_part("ignored")]),
    )
    (record,) = parse_diagnostics(report)
    assert record.message == "Cannot call"


def test_parse_kind_replaces_message_even_with_comment() -> None:
    report = flow_report(
        flow_error("Unexpected token", kind="parse", extra_parts=[comment_part("explanation")]),
    )
    (record,) = parse_diagnostics(report)
    assert record.message == "parse"
    assert record.identifier == "Unexpected token"


def test_missing_errors_key_yields_no_records() -> None:
    assert parse_diagnostics(json.dumps({"passed": True, "flowVersion": "0.230.0"})) == []


def test_empty_errors_array_yields_no_records() -> None:
    assert parse_diagnostics(flow_report()) == []


def test_entry_without_source_falls_back_to_file_context(tmp_path: Path) -> None:
    buffer_path = tmp_path / "app.js"
    report = flow_report(flow_error("lib mismatch", source=None))
    (record,) = parse_diagnostics(report, file_context=buffer_path)
    assert record.file_path == buffer_path


def test_entry_without_location_has_no_line() -> None:
    report = json.dumps({"errors": [{"kind": "infer", "level": "error", "message": [{"descr": "global"}]}]})
    (record,) = parse_diagnostics(report)
    assert record.line is None
    assert record.column is None
    assert not record.has_location()


def test_entry_with_empty_message_list() -> None:
    report = json.dumps({"errors": [{"kind": "infer", "level": "warning", "message": []}]})
    (record,) = parse_diagnostics(report)
    assert record.message == ""
    assert record.identifier is None
    assert record.severity is SeverityLevel.WARNING


def test_custom_checker_identifier_is_stamped() -> None:
    records = parse_diagnostics(flow_report(flow_error("x")), CheckerId("custom-flow"))
    assert records[0].source_checker == "custom-flow"


def test_level_is_case_insensitive() -> None:
    (record,) = parse_diagnostics(flow_report(flow_error("x", level="ERROR")))
    assert record.severity is SeverityLevel.ERROR


def test_unknown_level_rejects_whole_report() -> None:
    report = flow_report(flow_error("fine"), flow_error("odd", level="fatal"))
    with pytest.raises(MalformedReport) as exc_info:
        _ = parse_diagnostics(report)
    assert exc_info.value.level == "fatal"
    assert exc_info.value.index == 1


@pytest.mark.parametrize(
    ("raw", "reason"),
    [
        ("", "empty output"),
        ("   \n", "empty output"),
        ("Launching Flow server...", "invalid json"),
        ('{"errors": [', "invalid json"),
        ('{"errors": {"kind": "infer"}}', "unexpected report shape"),
        ('{"errors": [{"kind": "infer", "message": []}]}', "unexpected report shape"),
        ("[1, 2, 3]", "unexpected report shape"),
    ],
)
def test_malformed_reports_raise_parse_failure(raw: str, reason: str) -> None:
    with pytest.raises(ParseFailure) as exc_info:
        _ = parse_diagnostics(raw)
    assert exc_info.value.reason == reason
    assert reason in str(exc_info.value)


def test_decode_report_ignores_unknown_fields() -> None:
    report = decode_report(
        json.dumps({
            "flowVersion": "0.230.0",
            "errors": [{"kind": "infer", "level": "error", "suppressions": [], "message": [{"descr": "x"}]}],
            "passed": False,
        }),
    )
    assert report.passed is False
    assert len(report.errors) == 1


@pytest.mark.parametrize("raw", ['{"passed": true}', '{"errors": null, "passed": true}'])
def test_absent_or_null_errors_yield_no_records(raw: str) -> None:
    assert parse_diagnostics(raw) == []


def test_lone_surrogate_escape_is_kept() -> None:
    raw = r'{"errors": [{"kind": "infer", "level": "error", "message": [{"descr": "bad \ud800 text"}]}]}'

    (record,) = parse_diagnostics(raw, file_context="/repo/src/app.js")

    assert record.message == "bad \ud800 text"
    assert record.identifier == "bad \ud800 text"


def test_record_payload_is_json_ready() -> None:
    (record,) = parse_diagnostics(flow_report(flow_error("boom", line=2, column=3)))
    payload = record.to_payload()
    assert payload == {
        "file": "/repo/src/app.js",
        "line": 2,
        "column": 3,
        "severity": "error",
        "message": "boom",
        "identifier": "boom",
        "checker": "javascript-flow",
    }
    assert json.loads(json.dumps(payload)) == payload
