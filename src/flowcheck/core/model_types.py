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

"""Model types and enumerations for flowcheck.

This module defines the enumerations shared by the report parsers, the gate,
the checker pipeline and the CLI:

- Severity levels carried by diagnostic records
- Gate verdict reasons
- Report kinds and output formats for the CLI
- Logging formats and components
"""

from __future__ import annotations

from typing import Final

from flowcheck.compat import StrEnum


class SeverityLevel(StrEnum):
    """Enumeration of diagnostic severity levels.

    Flow only reports ``error`` and ``warning``; coverage gaps are always
    reported as ``warning``.

    Attributes:
        ERROR: The checker considers the code incorrect.
        WARNING: Advisory diagnostics, including uncovered expressions.
    """

    ERROR = "error"
    WARNING = "warning"

    @classmethod
    def from_str(cls, raw: str) -> SeverityLevel:
        """Create a SeverityLevel enum from a string value.

        Args:
            raw: String representation of the severity level.

        Returns:
            SeverityLevel enum value.

        Raises:
            ValueError: If the string does not match any SeverityLevel value.
        """
        value = raw.strip().lower()
        try:
            return cls(value)
        except ValueError as exc:
            msg = f"Unknown severity '{raw}'"
            raise ValueError(msg) from exc

    @property
    def rank(self) -> int:
        """Return an ordering key where larger values are more severe."""
        return _SEVERITY_RANKS[self]

    def exceeds(self, other: SeverityLevel) -> bool:
        """Return True when this level is strictly more severe than ``other``."""
        return self.rank > other.rank


_SEVERITY_RANKS: Final[dict[SeverityLevel, int]] = {
    SeverityLevel.WARNING: 1,
    SeverityLevel.ERROR: 2,
}


class GateReason(StrEnum):
    """Outcome of evaluating the predicate gate for a single file.

    Attributes:
        OK: Every condition holds; checkers may run.
        MISSING_FILE: No path was given or it does not exist on disk.
        NO_CONFIG_ROOT: No ancestor directory contains the marker file.
        NO_FLOW_TAG: The first line does not carry the ``@flow`` tag.
    """

    OK = "ok"
    MISSING_FILE = "missing-file"
    NO_CONFIG_ROOT = "no-config-root"
    NO_FLOW_TAG = "no-flow-tag"


class ReportKind(StrEnum):
    """Kinds of Flow JSON report understood by the parsers."""

    DIAGNOSTICS = "diagnostics"
    COVERAGE = "coverage"

    @classmethod
    def from_str(cls, raw: str) -> ReportKind:
        """Create a ReportKind enum from a string value.

        Raises:
            ValueError: If the string does not match any ReportKind value.
        """
        value = raw.strip().lower()
        try:
            return cls(value)
        except ValueError as exc:
            msg = f"Unknown report kind '{raw}'"
            raise ValueError(msg) from exc


class OutputFormat(StrEnum):
    """Enumeration of CLI output formats.

    Attributes:
        TEXT: One human-readable line per record.
        JSON: A JSON document for machine consumers.
    """

    TEXT = "text"
    JSON = "json"

    @classmethod
    def from_str(cls, raw: str) -> OutputFormat:
        """Create an OutputFormat enum from a string value.

        Raises:
            ValueError: If the string does not match any OutputFormat value.
        """
        value = raw.strip().lower()
        try:
            return cls(value)
        except ValueError as exc:
            msg = f"Unknown output format '{raw}'"
            raise ValueError(msg) from exc


class LogFormat(StrEnum):
    """Enumeration of log output formats.

    Attributes:
        TEXT: Human-readable text format.
        JSON: Machine-readable JSON format.
    """

    TEXT = "text"
    JSON = "json"

    @classmethod
    def from_str(cls, raw: str) -> LogFormat:
        """Create a LogFormat enum from a string value.

        Args:
            raw: String representation of the log format.

        Returns:
            LogFormat enum value.

        Raises:
            ValueError: If the string does not match any LogFormat value.
        """
        value = raw.strip().lower()
        try:
            return cls(value)
        except ValueError as exc:
            msg = f"Unknown log format '{raw}'"
            raise ValueError(msg) from exc


class LogComponent(StrEnum):
    """Enumeration of loggable system components.

    Attributes:
        GATE: Predicate gate evaluation.
        REPORTS: Flow report parsers.
        CHECKER: Checker execution and pipeline.
        PROCESS: Subprocess wrapper.
        CONFIG: Configuration loading.
        CLI: Command-line interface component.
    """

    GATE = "gate"
    REPORTS = "reports"
    CHECKER = "checker"
    PROCESS = "process"
    CONFIG = "config"
    CLI = "cli"

    @classmethod
    def from_str(cls, raw: str) -> LogComponent:
        """Create a LogComponent enum from a string value.

        Raises:
            ValueError: If the string does not match any LogComponent value.
        """
        value = raw.strip().lower()
        try:
            return cls(value)
        except ValueError as exc:
            msg = f"Unknown log component '{raw}'"
            raise ValueError(msg) from exc


__all__ = [
    "GateReason",
    "LogComponent",
    "LogFormat",
    "OutputFormat",
    "ReportKind",
    "SeverityLevel",
]
