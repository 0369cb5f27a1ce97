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

"""High-level entry points for running Flow checks from Python."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from flowcheck.checkers import CheckContext, default_pipeline
from flowcheck.config import FlowSettings
from flowcheck.core.model_types import LogComponent
from flowcheck.gate import evaluate_gate, first_line
from flowcheck.logging import structured_extra

if TYPE_CHECKING:
    from collections.abc import Sequence

    from flowcheck.checkers import CheckerPipeline, PipelineRun
    from flowcheck.checkers.pipeline import CheckerRunner

logger: logging.Logger = logging.getLogger("flowcheck.checkers")


def build_context(
    path: Path | str,
    text: str | None = None,
    *,
    settings: FlowSettings | None = None,
) -> CheckContext:
    """Build the check context for a buffer.

    Args:
        path: Real path of the file under check.
        text: Unsaved buffer contents; read from disk when omitted. A missing
            file yields an empty buffer, which the gate then rejects.
        settings: Flow settings; defaults apply when omitted.

    Returns:
        CheckContext: Context carrying the gate verdict and, when found, the
        Flow config root.
    """
    buffer_path = Path(path).absolute()
    flow_settings = settings or FlowSettings()
    if text is None:
        text = buffer_path.read_text(encoding="utf-8") if buffer_path.is_file() else ""
    verdict = evaluate_gate(buffer_path, first_line(text), marker_file=flow_settings.marker_file)
    return CheckContext(
        buffer_path=buffer_path,
        buffer_text=text,
        settings=flow_settings,
        gate=verdict,
    )


def check_buffer(
    path: Path | str,
    text: str | None = None,
    *,
    settings: FlowSettings | None = None,
    checkers: Sequence[str] | None = None,
    runner: CheckerRunner | None = None,
) -> PipelineRun:
    """Run the Flow checker chain over one buffer.

    Args:
        path: Real path of the file under check.
        text: Unsaved buffer contents; read from disk when omitted.
        settings: Flow settings; defaults apply when omitted.
        checkers: Restrict the run to these checker names.
        runner: Replacement for ``run_checker``, mainly for hosts and tests.

    Returns:
        PipelineRun: Results of every checker that ran.

    Raises:
        UnknownCheckerError: If ``checkers`` names a checker that is not enabled.
    """
    context = build_context(path, text, settings=settings)
    pipeline: CheckerPipeline = default_pipeline(context.settings)
    if checkers:
        pipeline = pipeline.select(checkers)
    run = pipeline.run(context, runner)
    logger.debug(
        "Checked %s with %s checkers",
        context.buffer_path,
        len(run.results),
        extra=structured_extra(
            component=LogComponent.CHECKER,
            path=context.buffer_path,
            details={"checkers": [str(result.checker) for result in run.results]},
        ),
    )
    return run


__all__ = ["build_context", "check_buffer"]
