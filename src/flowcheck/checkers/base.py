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

"""Checker descriptors and the data passed through a check.

A checker is described declaratively: how to build its command line, how to
parse its output, when it applies, and which checkers may run after it. The
descriptors are plain frozen dataclasses; the pipeline and execution layers
interpret them.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Final

from flowcheck.config.models import FlowSettings
from flowcheck.core.model_types import LogComponent, SeverityLevel
from flowcheck.logging import structured_extra

if TYPE_CHECKING:
    from pathlib import Path

    from flowcheck.core.type_aliases import CheckerId, Command
    from flowcheck.core.types import DiagnosticRecord
    from flowcheck.gate import GateVerdict
    from flowcheck.json import JSONValue

logger: logging.Logger = logging.getLogger("flowcheck.checkers")

# ".flow" covers declaration files such as "lib/api.js.flow".
JS_FILE_SUFFIXES: Final[tuple[str, ...]] = (".js", ".jsx", ".mjs", ".cjs", ".flow")


def _default_settings() -> FlowSettings:
    return FlowSettings()


@dataclass(slots=True, frozen=True)
class CheckContext:
    """Everything a checker needs to know about the buffer under check.

    Attributes:
        buffer_path: Real path of the file; Flow resolves imports relative to it.
        buffer_text: Current contents, which may differ from what is on disk.
        settings: Flow invocation settings.
        gate: Gate verdict computed when the context was built, if it was.
    """

    buffer_path: Path
    buffer_text: str
    settings: FlowSettings = field(default_factory=_default_settings)
    gate: GateVerdict | None = None

    @property
    def config_root(self) -> Path | None:
        """Directory holding the Flow marker file, once known."""
        return self.gate.config_root if self.gate is not None else None

    @property
    def working_directory(self) -> Path:
        """Directory Flow runs in: the config root, else the file's directory."""
        return self.config_root or self.buffer_path.parent


@dataclass(slots=True, frozen=True)
class NextChecker:
    """Link to a checker that may run after the current one.

    Attributes:
        name: Checker to hand over to.
        max_level: Follow the link only if no record of the current result is
            more severe than this level. None follows unconditionally.
    """

    name: CheckerId
    max_level: SeverityLevel | None = None

    def allows(self, result: CheckResult) -> bool:
        if result.failure is not None:
            return False
        if self.max_level is None:
            return True
        worst = result.max_severity
        return worst is None or not worst.exceeds(self.max_level)


@dataclass(slots=True)
class CheckResult:
    """Outcome of running one checker against one buffer.

    Attributes:
        checker: Checker that produced the result.
        command: Exact command that was executed (empty when skipped).
        records: Translated diagnostics, in report order.
        exit_code: Exit code of the checker process.
        duration_ms: Wall time spent in the process.
        skipped: True when the checker did not apply and nothing was run.
        failure: Reason the output could not be parsed, if it could not.
    """

    checker: CheckerId
    command: Command = field(default_factory=list)
    records: list[DiagnosticRecord] = field(default_factory=list)
    exit_code: int = 0
    duration_ms: float = 0.0
    skipped: bool = False
    failure: str | None = None

    def __post_init__(self) -> None:
        if self.duration_ms < 0:
            logger.warning(
                "Checker '%s' reported negative duration %.2f ms",
                self.checker,
                self.duration_ms,
                extra=structured_extra(component=LogComponent.CHECKER, checker=self.checker),
            )

    @property
    def max_severity(self) -> SeverityLevel | None:
        """Most severe level among the records, or None without records."""
        worst: SeverityLevel | None = None
        for record in self.records:
            if worst is None or record.severity.exceeds(worst):
                worst = record.severity
        return worst

    def to_payload(self) -> dict[str, JSONValue]:
        records: list[JSONValue] = [record.to_payload() for record in self.records]
        command: list[JSONValue] = list(self.command)
        return {
            "checker": str(self.checker),
            "command": command,
            "exit_code": self.exit_code,
            "duration_ms": round(self.duration_ms, 3),
            "skipped": self.skipped,
            "failure": self.failure,
            "records": records,
        }


CommandBuilder = Callable[[CheckContext], "Command"]
OutputParser = Callable[[str, CheckContext], "list[DiagnosticRecord]"]
Predicate = Callable[[CheckContext], bool]


@dataclass(slots=True, frozen=True)
class CheckerDescriptor:
    """Declarative description of a syntax checker.

    Attributes:
        name: Unique checker identifier.
        description: One-line summary shown by ``flowcheck checkers list``.
        build_command: Returns the argument vector for a context.
        parse: Translates the process's standard output into records.
        predicate: Decides whether the checker applies to a context.
        standard_input: Feed the buffer text to the process's standard input.
        next_checkers: Checkers that may run afterwards, in priority order.
        file_suffixes: File extensions the checker handles.
    """

    name: CheckerId
    description: str
    build_command: CommandBuilder
    parse: OutputParser
    predicate: Predicate
    standard_input: bool = True
    next_checkers: tuple[NextChecker, ...] = ()
    file_suffixes: tuple[str, ...] = JS_FILE_SUFFIXES

    def handles(self, path: Path) -> bool:
        return path.suffix.lower() in self.file_suffixes

    def applies(self, context: CheckContext) -> bool:
        """Return True when the file type matches and the predicate holds."""
        return self.handles(context.buffer_path) and self.predicate(context)

    def describe(self) -> dict[str, JSONValue]:
        next_checkers: list[JSONValue] = [
            {"name": str(link.name), "max_level": link.max_level.value if link.max_level else None}
            for link in self.next_checkers
        ]
        suffixes: list[JSONValue] = list(self.file_suffixes)
        return {
            "name": str(self.name),
            "description": self.description,
            "standard_input": self.standard_input,
            "file_suffixes": suffixes,
            "next_checkers": next_checkers,
        }


__all__ = [
    "JS_FILE_SUFFIXES",
    "CheckContext",
    "CheckResult",
    "CheckerDescriptor",
    "CommandBuilder",
    "NextChecker",
    "OutputParser",
    "Predicate",
]
