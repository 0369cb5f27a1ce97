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

"""Predicate gate deciding whether Flow checkers apply to a file.

A file is checked only when all of the following hold:

1. it exists on disk;
2. some ancestor directory (starting with its own) holds the Flow marker
   file, ``.flowconfig`` by default;
3. its first line carries the ``@flow`` tag, either as a line comment
   (``// @flow``, ``///@flow`` ...) or as exactly ``/* @flow */``.

The gate only reads the filesystem; it never caches, so callers may evaluate it
on every check.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Final

from flowcheck.core.model_types import GateReason, LogComponent
from flowcheck.logging import structured_extra
from flowcheck.runtime import find_marker_root

logger: logging.Logger = logging.getLogger("flowcheck.gate")

DEFAULT_MARKER_FILE: Final[str] = ".flowconfig"
FLOW_TAG_PATTERN: Final[re.Pattern[str]] = re.compile(r"//+ *@flow|/\* @flow \*/\Z")


@dataclass(slots=True, frozen=True)
class GateVerdict:
    """Result of evaluating the gate for one file.

    Attributes:
        reason: Which condition decided the verdict.
        config_root: Directory holding the marker file, when one was found.
    """

    reason: GateReason
    config_root: Path | None = None

    @property
    def passed(self) -> bool:
        return self.reason is GateReason.OK


def first_line(text: str) -> str:
    """Return the first line of ``text`` without its line terminator."""
    return text.split("\n", 1)[0].rstrip("\r")


def has_flow_tag(first_line_text: str) -> bool:
    """Return True when the line starts with a ``@flow`` marker comment."""
    return FLOW_TAG_PATTERN.match(first_line_text) is not None


def find_config_root(path: Path | str, marker_file: str = DEFAULT_MARKER_FILE) -> Path | None:
    """Return the nearest ancestor directory of ``path`` holding ``marker_file``."""
    return find_marker_root(Path(path), (marker_file,))


def evaluate_gate(
    file_path: Path | str | None,
    first_line_text: str,
    *,
    marker_file: str = DEFAULT_MARKER_FILE,
) -> GateVerdict:
    """Evaluate every gate condition and report which one decided.

    Args:
        file_path: File under check; empty or None never passes.
        first_line_text: First line of the (possibly unsaved) buffer contents.
        marker_file: Name of the project-root marker file.

    Returns:
        A ``GateVerdict`` whose ``passed`` property is the gate decision.
    """
    verdict = _evaluate(file_path, first_line_text, marker_file=marker_file)
    logger.debug(
        "Gate for %s: %s",
        file_path or "<unset>",
        verdict.reason.value,
        extra=structured_extra(
            component=LogComponent.GATE,
            path=str(file_path) if file_path else None,
            reason=verdict.reason.value,
        ),
    )
    return verdict


def _evaluate(file_path: Path | str | None, first_line_text: str, *, marker_file: str) -> GateVerdict:
    if not file_path:
        return GateVerdict(GateReason.MISSING_FILE)
    path = Path(file_path)
    if not path.is_file():
        return GateVerdict(GateReason.MISSING_FILE)
    root = find_config_root(path, marker_file)
    if root is None:
        return GateVerdict(GateReason.NO_CONFIG_ROOT)
    if not has_flow_tag(first_line_text):
        return GateVerdict(GateReason.NO_FLOW_TAG, config_root=root)
    return GateVerdict(GateReason.OK, config_root=root)


def should_run(
    file_path: Path | str | None,
    first_line_text: str,
    *,
    marker_file: str = DEFAULT_MARKER_FILE,
) -> bool:
    """Return True when Flow checkers should run for ``file_path``."""
    return evaluate_gate(file_path, first_line_text, marker_file=marker_file).passed


__all__ = [
    "DEFAULT_MARKER_FILE",
    "FLOW_TAG_PATTERN",
    "GateVerdict",
    "evaluate_gate",
    "find_config_root",
    "first_line",
    "has_flow_tag",
    "should_run",
]
