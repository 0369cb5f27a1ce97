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

"""Run a single checker process and translate its output."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from flowcheck.core.model_types import LogComponent
from flowcheck.logging import StructuredLogExtra, structured_extra
from flowcheck.reports import MalformedReport, ParseFailure
from flowcheck.runtime import run_command

from .base import CheckResult

if TYPE_CHECKING:
    from .base import CheckContext, CheckerDescriptor

logger: logging.Logger = logging.getLogger("flowcheck.checkers")


def run_checker(descriptor: CheckerDescriptor, context: CheckContext) -> CheckResult:
    """Run ``descriptor`` against the buffer described by ``context``.

    When the checker does not apply, no process is started and the result is
    marked as skipped. A report the parser rejects produces a result with
    ``failure`` set and no records; partial output is never returned.

    Flow runs from the project's config root when the context knows it. Only
    the configured Flow executable may be started.

    Args:
        descriptor: Checker to run.
        context: Buffer path, contents and settings.

    Returns:
        CheckResult: Records, timing and exit code of the run.

    Raises:
        ValueError: If the descriptor's command does not start with the
            configured Flow executable.
    """
    if not descriptor.applies(context):
        logger.debug(
            "Skipping %s for %s",
            descriptor.name,
            context.buffer_path,
            extra=structured_extra(
                component=LogComponent.CHECKER,
                checker=descriptor.name,
                path=context.buffer_path,
            ),
        )
        return CheckResult(checker=descriptor.name, skipped=True)

    argv = descriptor.build_command(context)
    logger.info(
        "Running %s (%s)",
        descriptor.name,
        " ".join(argv),
        extra=structured_extra(component=LogComponent.CHECKER, checker=descriptor.name, path=context.buffer_path),
    )
    output = run_command(
        argv,
        cwd=context.working_directory,
        allowed={context.settings.executable},
        input_text=context.buffer_text if descriptor.standard_input else None,
    )
    try:
        records = descriptor.parse(output.stdout, context)
    except (ParseFailure, MalformedReport) as exc:
        logger.warning(
            "%s output could not be parsed: %s",
            descriptor.name,
            exc,
            extra=structured_extra(
                component=LogComponent.CHECKER,
                checker=descriptor.name,
                path=context.buffer_path,
                exit_code=output.exit_code,
                details={"stderr": output.stderr.strip()},
            ),
        )
        return CheckResult(
            checker=descriptor.name,
            command=output.args,
            exit_code=output.exit_code,
            duration_ms=output.duration_ms,
            failure=str(exc),
        )

    result = CheckResult(
        checker=descriptor.name,
        command=output.args,
        records=records,
        exit_code=output.exit_code,
        duration_ms=output.duration_ms,
    )
    done_extra: StructuredLogExtra = structured_extra(
        component=LogComponent.CHECKER,
        checker=descriptor.name,
        path=context.buffer_path,
        duration_ms=result.duration_ms,
        exit_code=result.exit_code,
        details={"records": len(records)},
    )
    logger.debug(
        "%s completed: exit=%s records=%s",
        descriptor.name,
        result.exit_code,
        len(records),
        extra=done_extra,
    )
    return result


__all__ = ["run_checker"]
