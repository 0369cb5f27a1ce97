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

"""CLI-specific fixtures shared across unit tests."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import pytest

from flowcheck.runtime import CommandOutput
from tests.fixtures.flow_reports import coverage_report, flow_report

if TYPE_CHECKING:
    from collections.abc import Iterable
    from collections.abc import Set as AbstractSet
    from pathlib import Path

    from tests.fixtures.flow_reports import FlowProject


def _default_outputs() -> dict[str, str]:
    return {"check-contents": flow_report(), "coverage": coverage_report([])}


@dataclass(slots=True)
class FakeFlow:
    """Stand-in for the Flow binary keyed by subcommand.

    Attributes:
        outputs: Standard output returned for each Flow subcommand.
        stdin: Buffer text received by each subcommand that was invoked.
    """

    outputs: dict[str, str] = field(default_factory=_default_outputs)
    stdin: dict[str, str] = field(default_factory=dict)

    def __call__(
        self,
        args: Iterable[str],
        cwd: Path | None = None,
        *,
        allowed: AbstractSet[str] | None = None,
        input_text: str | None = None,
    ) -> CommandOutput:
        del cwd, allowed
        argv = list(args)
        subcommand = argv[1]
        self.stdin[subcommand] = input_text or ""
        return CommandOutput(args=argv, stdout=self.outputs[subcommand], stderr="", exit_code=0, duration_ms=1.0)


@pytest.fixture
def fake_flow(monkeypatch: pytest.MonkeyPatch, flow_project: FlowProject) -> FakeFlow:
    """Replace process execution with ``FakeFlow`` and run from the project root."""
    monkeypatch.chdir(flow_project.root)
    fake = FakeFlow()
    monkeypatch.setattr("flowcheck.checkers.execution.run_command", fake)
    return fake
