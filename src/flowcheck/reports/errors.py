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

"""Errors raised while translating Flow diagnostic reports."""

from __future__ import annotations

from flowcheck.exceptions import FlowcheckValidationError

__all__ = ["MalformedReport", "ParseFailure"]


class ParseFailure(FlowcheckValidationError):  # noqa: N818  # JUSTIFIED: public name used by callers
    """Raised when a diagnostic report is not JSON or lacks the expected shape.

    Callers surface this as a single checker-level failure; no partial records
    are ever returned alongside it.
    """

    def __init__(self, reason: str, *, error: Exception | None = None) -> None:
        """Initialize the exception with a short reason and the underlying error.

        Args:
            reason: Human-readable summary of what went wrong.
            error: Decoder or validation error that triggered the failure.
        """
        self.reason = reason
        self.error = error
        detail = f": {error}" if error is not None else ""
        super().__init__(f"Unable to parse flow report ({reason}){detail}")


class MalformedReport(FlowcheckValidationError):  # noqa: N818  # JUSTIFIED: public name used by callers
    """Raised when a report entry carries a ``level`` outside the known severities.

    The whole report is rejected rather than coercing the level to a default.
    """

    def __init__(self, level: str, *, index: int) -> None:
        """Initialize the exception with the offending level and entry index.

        Args:
            level: Raw ``level`` string found in the report.
            index: Zero-based position of the entry in the ``errors`` array.
        """
        self.level = level
        self.index = index
        super().__init__(f"Unknown severity level '{level}' in flow report entry {index}")
