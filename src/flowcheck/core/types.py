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

"""Core data classes for translated Flow diagnostics.

`DiagnosticRecord` is the single unit produced by both report parsers and
handed to the host (the CLI or an editor integration). Records are rebuilt on
every check invocation and never persisted.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path

    from flowcheck.json import JSONValue

    from .model_types import SeverityLevel
    from .type_aliases import CheckerId


@dataclass(slots=True, frozen=True)
class DiagnosticRecord:
    """Immutable dataclass representing a single translated diagnostic.

    Attributes:
        line: Line number (1-indexed), or None when the report entry carries no
            location (for example a file-level parse failure).
        column: Column number (1-indexed), or None alongside a missing line.
        severity: Severity level of the diagnostic.
        message: Human-readable diagnostic message.
        identifier: Opaque classification tag used for filtering and grouping.
        source_checker: Checker that produced this record.
        file_path: File the diagnostic belongs to.
    """

    line: int | None
    column: int | None
    severity: SeverityLevel
    message: str
    source_checker: CheckerId
    file_path: Path | None = None
    identifier: str | None = None

    def has_location(self) -> bool:
        """Return True when the record points at a line in the file."""
        return self.line is not None

    def to_payload(self) -> dict[str, JSONValue]:
        """Return a JSON-ready mapping for CLI and machine output."""
        return {
            "file": str(self.file_path) if self.file_path is not None else None,
            "line": self.line,
            "column": self.column,
            "severity": self.severity.value,
            "message": self.message,
            "identifier": self.identifier,
            "checker": str(self.source_checker),
        }


__all__ = ["DiagnosticRecord"]
