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

"""Unit tests for running a single checker."""

from __future__ import annotations

import dataclasses
from pathlib import Path
from typing import TYPE_CHECKING

import pytest

from flowcheck.api import build_context
from flowcheck.checkers import FLOW_COVERAGE_DESCRIPTOR, FLOW_DESCRIPTOR, CheckContext, run_checker
from flowcheck.core.model_types import SeverityLevel
from flowcheck.runtime import CommandOutput
from tests.fixtures.flow_reports import coverage_report, flow_error, flow_report

if TYPE_CHECKING:
    from collections.abc import Iterable
    from collections.abc import Set as AbstractSet

    from tests.fixtures.flow_reports import FlowProject

pytestmark = [pytest.mark.unit, pytest.mark.checker]


def _install_fake(
    monkeypatch: pytest.MonkeyPatch,
    *,
    stdout: str,
    exit_code: int = 0,
    calls: list[dict[str, object]] | None = None,
) -> None:
    def fake_run_command(
        args: Iterable[str],
        cwd: Path | None = None,
        *,
        allowed: AbstractSet[str] | None = None,
        input_text: str | None = None,
    ) -> CommandOutput:
        argv = list(args)
        if calls is not None:
            calls.append({"argv": argv, "cwd": cwd, "allowed": allowed, "input_text": input_text})
        return CommandOutput(args=argv, stdout=stdout, stderr="", exit_code=exit_code, duration_ms=4.0)

    monkeypatch.setattr("flowcheck.checkers.execution.run_command", fake_run_command)


def test_run_checker_feeds_buffer_on_stdin(flow_project: FlowProject, monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[dict[str, object]] = []
    _install_fake(monkeypatch, stdout=flow_report(flow_error("boom")), exit_code=2, calls=calls)
    text = "// @flow\nconst unsaved = 1;\n"
    context = CheckContext(buffer_path=flow_project.source, buffer_text=text)

    result = run_checker(FLOW_DESCRIPTOR, context)

    (call,) = calls
    assert call["input_text"] == text
    assert call["cwd"] == flow_project.source.parent
    assert call["allowed"] == {"flow"}
    assert result.command[:2] == ["flow", "check-contents"]
    assert result.exit_code == 2
    assert result.duration_ms == 4.0
    assert not result.skipped
    assert result.failure is None
    assert [record.message for record in result.records] == ["boom"]
    assert result.max_severity is SeverityLevel.ERROR


def test_run_checker_skips_when_gate_fails(flow_project: FlowProject, monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[dict[str, object]] = []
    _install_fake(monkeypatch, stdout="", calls=calls)
    context = CheckContext(buffer_path=flow_project.source, buffer_text="const plain = 1;\n")

    result = run_checker(FLOW_DESCRIPTOR, context)

    assert result.skipped
    assert result.records == []
    assert result.command == []
    assert calls == []


def test_unparseable_output_becomes_failure(flow_project: FlowProject, monkeypatch: pytest.MonkeyPatch) -> None:
    _install_fake(monkeypatch, stdout="Server is initializing", exit_code=1)
    context = CheckContext(buffer_path=flow_project.source, buffer_text="// @flow\n")

    result = run_checker(FLOW_DESCRIPTOR, context)

    assert result.records == []
    assert result.failure is not None
    assert "invalid json" in result.failure
    assert result.exit_code == 1


def test_unknown_level_becomes_failure(flow_project: FlowProject, monkeypatch: pytest.MonkeyPatch) -> None:
    _install_fake(monkeypatch, stdout=flow_report(flow_error("a"), flow_error("b", level="info")))
    context = CheckContext(buffer_path=flow_project.source, buffer_text="// @flow\n")

    result = run_checker(FLOW_DESCRIPTOR, context)

    assert result.records == []
    assert result.failure is not None
    assert "info" in result.failure


def test_coverage_garbage_is_not_a_failure(flow_project: FlowProject, monkeypatch: pytest.MonkeyPatch) -> None:
    _install_fake(monkeypatch, stdout="garbage")
    context = CheckContext(buffer_path=flow_project.source, buffer_text="// @flow\n")

    result = run_checker(FLOW_COVERAGE_DESCRIPTOR, context)

    assert result.failure is None
    assert result.records == []


def test_coverage_records(flow_project: FlowProject, monkeypatch: pytest.MonkeyPatch) -> None:
    _install_fake(monkeypatch, stdout=coverage_report([(2, 1, 2, 9)]))
    context = CheckContext(buffer_path=flow_project.source, buffer_text="// @flow\n")

    result = run_checker(FLOW_COVERAGE_DESCRIPTOR, context)

    assert [(record.line, record.severity) for record in result.records] == [(2, SeverityLevel.WARNING)]
    assert result.max_severity is SeverityLevel.WARNING


def test_result_payload(flow_project: FlowProject, monkeypatch: pytest.MonkeyPatch) -> None:
    _install_fake(monkeypatch, stdout=flow_report())
    context = CheckContext(buffer_path=flow_project.source, buffer_text="// @flow\n")

    payload = run_checker(FLOW_DESCRIPTOR, context).to_payload()

    assert payload["checker"] == "javascript-flow"
    assert payload["records"] == []
    assert payload["failure"] is None
    assert payload["skipped"] is False


def test_flow_runs_from_config_root(flow_project: FlowProject, monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[dict[str, object]] = []
    _install_fake(monkeypatch, stdout=flow_report(), calls=calls)
    context = build_context(flow_project.source)

    _ = run_checker(FLOW_DESCRIPTOR, context)

    (call,) = calls
    assert call["cwd"] == flow_project.root.resolve()
    assert call["allowed"] == {"flow"}


def test_only_configured_executable_may_start(flow_project: FlowProject) -> None:
    rogue = dataclasses.replace(FLOW_DESCRIPTOR, build_command=lambda _context: ["sh", "-c", "true"])
    context = CheckContext(buffer_path=flow_project.source, buffer_text="// @flow\n")

    with pytest.raises(ValueError, match="Executable 'sh' is not allowed"):
        _ = run_checker(rogue, context)
