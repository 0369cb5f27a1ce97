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

"""Unit tests for flowcheck enumerations."""

from __future__ import annotations

import pytest

from flowcheck.core.model_types import GateReason, LogComponent, LogFormat, OutputFormat, ReportKind, SeverityLevel

pytestmark = pytest.mark.unit

_PARSEABLE = (SeverityLevel, ReportKind, OutputFormat, LogFormat, LogComponent)


@pytest.mark.parametrize("enum_type", _PARSEABLE)
def test_from_str_is_case_and_space_insensitive(enum_type: type[SeverityLevel]) -> None:
    for member in enum_type:
        assert enum_type.from_str(f"  {member.value.upper()} ") is member


@pytest.mark.parametrize("enum_type", _PARSEABLE)
def test_from_str_rejects_unknown_values(enum_type: type[SeverityLevel]) -> None:
    with pytest.raises(ValueError, match="Unknown"):
        _ = enum_type.from_str("definitely-not-a-member")


def test_severity_ordering() -> None:
    assert SeverityLevel.ERROR.exceeds(SeverityLevel.WARNING)
    assert not SeverityLevel.WARNING.exceeds(SeverityLevel.ERROR)
    assert not SeverityLevel.ERROR.exceeds(SeverityLevel.ERROR)
    assert SeverityLevel.ERROR.rank > SeverityLevel.WARNING.rank


def test_flow_only_reports_two_levels() -> None:
    assert [level.value for level in SeverityLevel] == ["error", "warning"]


def test_gate_reasons_are_stable_strings() -> None:
    assert {reason.value for reason in GateReason} == {"ok", "missing-file", "no-config-root", "no-flow-tag"}
