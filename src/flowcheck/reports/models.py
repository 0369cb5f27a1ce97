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

"""Typed decoders for the JSON documents emitted by ``flow --json``.

Two report shapes are understood:

- the error report from ``flow check-contents --json`` (``FlowReportModel``)
- the coverage report from ``flow coverage --json`` (``CoverageReportModel``)

Fields Flow emits but flowcheck does not use (``end`` positions, offsets,
``flowVersion`` and so on) are ignored rather than rejected so that newer Flow
releases keep decoding.
"""

from __future__ import annotations

from typing import ClassVar, Final

from pydantic import BaseModel, ConfigDict, Field, field_validator

COMMENT_PART_TYPE: Final[str] = "Comment"
PARSE_ERROR_KIND: Final[str] = "parse"


class _FlowModel(BaseModel):
    model_config: ClassVar[ConfigDict] = ConfigDict(extra="ignore", frozen=True)


class FlowPositionModel(_FlowModel):
    """A 1-based line/column position inside a source file."""

    line: int | None = None
    column: int | None = None


class FlowLocationModel(_FlowModel):
    """Location attached to a message part.

    ``source`` is None for positions inside Flow's own library definitions.
    """

    source: str | None = None
    start: FlowPositionModel | None = None


class FlowMessagePartModel(_FlowModel):
    """One element of an error's ``message`` array.

    Attributes:
        descr: Free-text description for this part.
        loc: Optional location the description refers to.
        type: Optional tag; ``"Comment"`` marks an explanatory override.
    """

    descr: str
    loc: FlowLocationModel | None = None
    type: str | None = None

    @property
    def is_comment(self) -> bool:
        """Return True when this part is tagged as a comment override."""
        return self.type == COMMENT_PART_TYPE


class FlowErrorModel(_FlowModel):
    """A single issue reported by Flow.

    Attributes:
        kind: Short classification string such as ``"parse"`` or ``"infer"``.
        level: Raw severity string; validated separately into ``SeverityLevel``.
        message: Ordered message parts; the first one carries the location.
    """

    kind: str
    level: str
    message: list[FlowMessagePartModel] = Field(default_factory=list)

    @property
    def primary(self) -> FlowMessagePartModel | None:
        """Return the first message part, if any."""
        return self.message[0] if self.message else None

    @property
    def comment(self) -> FlowMessagePartModel | None:
        """Return the second message part when it is tagged ``"Comment"``."""
        if len(self.message) > 1 and self.message[1].is_comment:
            return self.message[1]
        return None

    @property
    def is_parse_error(self) -> bool:
        """Return True for file-level syntax errors."""
        return self.kind == PARSE_ERROR_KIND


class FlowReportModel(_FlowModel):
    """Top-level ``flow check-contents --json`` document.

    A document without an ``errors`` key, or with ``"errors": null``, decodes
    to an empty report.
    """

    errors: list[FlowErrorModel] = Field(default_factory=list)
    passed: bool | None = None

    @field_validator("errors", mode="before")
    @classmethod
    def _null_errors(cls, value: object) -> object:
        return [] if value is None else value


class CoveragePositionModel(_FlowModel):
    """A 1-based line/column position in a coverage span."""

    line: int
    column: int


class CoverageSpanModel(_FlowModel):
    """Start/end positions of one uncovered expression."""

    start: CoveragePositionModel
    end: CoveragePositionModel


class CoverageExpressionsModel(_FlowModel):
    """The ``expressions`` object of a coverage report."""

    covered_count: int | None = None
    uncovered_count: int | None = None
    uncovered_locs: list[CoverageSpanModel]


class CoverageReportModel(_FlowModel):
    """Top-level ``flow coverage --json`` document."""

    expressions: CoverageExpressionsModel


__all__ = [
    "COMMENT_PART_TYPE",
    "PARSE_ERROR_KIND",
    "CoverageExpressionsModel",
    "CoveragePositionModel",
    "CoverageReportModel",
    "CoverageSpanModel",
    "FlowErrorModel",
    "FlowLocationModel",
    "FlowMessagePartModel",
    "FlowPositionModel",
    "FlowReportModel",
]
