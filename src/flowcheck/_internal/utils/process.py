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

"""Run checker processes with captured output and timing."""

from __future__ import annotations

import logging
import subprocess  # noqa: S404  # JUSTIFIED: single wrapper; argv lists only, never a shell
import time
from collections.abc import Set as AbstractSet
from dataclasses import dataclass
from typing import TYPE_CHECKING

from flowcheck.core.model_types import LogComponent
from flowcheck.logging import structured_extra

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path

    from flowcheck.core.type_aliases import Command

logger: logging.Logger = logging.getLogger("flowcheck.internal.process")

__all__ = ["CommandOutput", "run_command"]


@dataclass(slots=True)
class CommandOutput:
    """Captured result of one process run.

    Attributes:
        args: Argument vector that was executed.
        stdout: Decoded standard output.
        stderr: Decoded standard error.
        exit_code: Process return code.
        duration_ms: Wall time from spawn to exit.
    """

    args: Command
    stdout: str
    stderr: str
    exit_code: int
    duration_ms: float


def _checked_argv(args: Iterable[str], allowed: AbstractSet[str] | None) -> Command:
    argv: Command = list(args)
    if not argv:
        message = "Command must not be empty"
        raise ValueError(message)
    if any(not arg for arg in argv):
        message = "Command arguments must be non-empty strings"
        raise TypeError(message)
    if allowed is not None and argv[0] not in allowed:
        message = f"Executable '{argv[0]}' is not allowed"
        raise ValueError(message)
    return argv


def run_command(
    args: Iterable[str],
    cwd: Path | None = None,
    *,
    allowed: AbstractSet[str] | None = None,
    input_text: str | None = None,
) -> CommandOutput:
    """Run ``args`` to completion, optionally feeding ``input_text`` on stdin.

    A non-zero exit status is not an error here: Flow exits non-zero whenever
    it reports problems, and callers read the report from stdout regardless.

    Args:
        args: Argument vector; the first element is the executable.
        cwd: Working directory for the child process.
        allowed: Executables permitted as ``args[0]``; None allows any.
        input_text: Text written to the child's standard input.

    Returns:
        CommandOutput: Captured output, exit code and duration.

    Raises:
        ValueError: If ``args`` is empty or its executable is not allowed.
        TypeError: If any argument is an empty string.
        OSError: If the executable cannot be started.
    """
    argv = _checked_argv(args, allowed)
    logger.debug(
        "Executing command: %s",
        " ".join(argv),
        extra=structured_extra(
            LogComponent.PROCESS,
            path=cwd,
            details={"stdin": input_text is not None},
        ),
    )
    started = time.perf_counter()
    completed = subprocess.run(  # noqa: S603 - argv validated above
        argv,
        check=False,
        cwd=cwd,
        capture_output=True,
        text=True,
        input=input_text,
    )
    elapsed_ms = (time.perf_counter() - started) * 1000
    if completed.returncode:
        logger.debug(
            "%s exited with %s",
            argv[0],
            completed.returncode,
            extra=structured_extra(LogComponent.PROCESS, exit_code=completed.returncode, duration_ms=elapsed_ms),
        )
    return CommandOutput(
        args=argv,
        stdout=completed.stdout,
        stderr=completed.stderr,
        exit_code=completed.returncode,
        duration_ms=elapsed_ms,
    )
