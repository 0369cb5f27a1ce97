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

"""Ordered, immutable collection of checkers and the chaining logic between them.

The pipeline is built once from settings and never mutated. Running it picks
the first checker that applies to the buffer and then follows that checker's
``next_checkers`` links, the way editor syntax-checking frameworks chain
checkers: a link is followed only when its severity ceiling allows it, names
the pipeline does not contain are skipped, and no checker runs twice.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass
from functools import lru_cache
from typing import TYPE_CHECKING

from flowcheck.core.model_types import LogComponent
from flowcheck.exceptions import FlowcheckValidationError
from flowcheck.logging import structured_extra

from .builtin import BUILTIN_DESCRIPTORS
from .execution import run_checker

if TYPE_CHECKING:
    from flowcheck.config.models import FlowSettings
    from flowcheck.core.type_aliases import CheckerId
    from flowcheck.core.types import DiagnosticRecord
    from flowcheck.json import JSONValue

    from .base import CheckContext, CheckerDescriptor, CheckResult

logger: logging.Logger = logging.getLogger("flowcheck.checkers")

CheckerRunner = Callable[["CheckerDescriptor", "CheckContext"], "CheckResult"]


class UnknownCheckerError(FlowcheckValidationError):
    """Raised when a checker name is not part of the pipeline."""

    def __init__(self, name: str, available: Iterable[str]) -> None:
        self.name = name
        self.available = tuple(available)
        super().__init__(f"Unknown checker '{name}'; available: {', '.join(self.available) or 'none'}")


@dataclass(slots=True, frozen=True)
class PipelineRun:
    """Results of one pipeline run, in execution order."""

    results: tuple[CheckResult, ...] = ()

    @property
    def records(self) -> list[DiagnosticRecord]:
        return [record for result in self.results for record in result.records]

    @property
    def failures(self) -> list[CheckResult]:
        return [result for result in self.results if result.failure is not None]


@dataclass(slots=True, frozen=True)
class CheckerPipeline:
    """Immutable, ordered set of checker descriptors."""

    descriptors: tuple[CheckerDescriptor, ...] = ()

    def __iter__(self) -> Iterator[CheckerDescriptor]:
        return iter(self.descriptors)

    def __len__(self) -> int:
        return len(self.descriptors)

    def names(self) -> tuple[CheckerId, ...]:
        return tuple(descriptor.name for descriptor in self.descriptors)

    def get(self, name: str) -> CheckerDescriptor | None:
        for descriptor in self.descriptors:
            if descriptor.name == name:
                return descriptor
        return None

    def select(self, names: Iterable[str]) -> CheckerPipeline:
        """Return a pipeline restricted to ``names``, keeping pipeline order.

        Raises:
            UnknownCheckerError: If a name is not part of this pipeline.
        """
        wanted = {name.strip() for name in names}
        for name in sorted(wanted):
            if self.get(name) is None:
                raise UnknownCheckerError(name, self.names())
        return CheckerPipeline(tuple(d for d in self.descriptors if d.name in wanted))

    def first_applicable(self, context: CheckContext) -> CheckerDescriptor | None:
        for descriptor in self.descriptors:
            if descriptor.applies(context):
                return descriptor
        return None

    def run(self, context: CheckContext, runner: CheckerRunner | None = None) -> PipelineRun:
        """Run the checker chain for one buffer.

        Args:
            context: Buffer under check.
            runner: Executes one checker; defaults to ``run_checker``.

        Returns:
            PipelineRun: Results of every checker that ran, in order. Empty when
            no checker applies.
        """
        execute = runner or run_checker
        current = self.first_applicable(context)
        if current is None:
            logger.debug(
                "No checker applies to %s",
                context.buffer_path,
                extra=structured_extra(component=LogComponent.CHECKER, path=context.buffer_path),
            )
            return PipelineRun()
        results: list[CheckResult] = []
        visited: set[CheckerId] = set()
        while current is not None:
            visited.add(current.name)
            result = execute(current, context)
            results.append(result)
            if result.failure is not None:
                break
            current = self._next_after(current, result, context, visited)
        return PipelineRun(tuple(results))

    def _next_after(
        self,
        descriptor: CheckerDescriptor,
        result: CheckResult,
        context: CheckContext,
        visited: set[CheckerId],
    ) -> CheckerDescriptor | None:
        for link in descriptor.next_checkers:
            if link.name in visited:
                continue
            candidate = self.get(link.name)
            if candidate is None:
                logger.debug(
                    "Next checker %s is not registered; skipping",
                    link.name,
                    extra=structured_extra(component=LogComponent.CHECKER, checker=link.name),
                )
                continue
            if not link.allows(result):
                continue
            if candidate.applies(context):
                return candidate
        return None


@lru_cache(maxsize=8)
def default_pipeline(settings: FlowSettings) -> CheckerPipeline:
    """Return the built-in checkers enabled in ``settings``, in configured order."""
    by_name = {descriptor.name: descriptor for descriptor in BUILTIN_DESCRIPTORS}
    for name in settings.checkers:
        if name in by_name:
            continue
        logger.warning(
            "Ignoring unknown checker '%s' in configuration",
            name,
            extra=structured_extra(component=LogComponent.CONFIG, checker=name),
        )
    ordered = [by_name[name] for name in settings.checkers if name in by_name]
    return CheckerPipeline(tuple(ordered))


def describe_checkers(pipeline: CheckerPipeline) -> list[dict[str, JSONValue]]:
    """Return one descriptive mapping per checker, in pipeline order."""
    return [descriptor.describe() for descriptor in pipeline]


__all__ = [
    "CheckerPipeline",
    "CheckerRunner",
    "PipelineRun",
    "UnknownCheckerError",
    "default_pipeline",
    "describe_checkers",
]
