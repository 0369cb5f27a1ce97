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

"""CLI context shared by commands."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from flowcheck.checkers import default_pipeline
from flowcheck.config.loader import load_config_with_metadata

if TYPE_CHECKING:
    from flowcheck.checkers import CheckerPipeline
    from flowcheck.config import Config


@dataclass(slots=True, frozen=True)
class CLIContext:
    """Resolved configuration shared by CLI commands."""

    config: Config
    config_path: Path | None

    @property
    def pipeline(self) -> CheckerPipeline:
        return default_pipeline(self.config.flow)


def build_cli_context(config_path: Path | None = None, *, cwd: Path | None = None) -> CLIContext:
    """Load configuration for a CLI invocation.

    Args:
        config_path: Explicit configuration file given with ``--config``.
        cwd: Directory to start project-root discovery from.

    Returns:
        CLIContext: Loaded configuration and where it came from.
    """
    working_dir = (cwd or Path.cwd()).resolve()
    loaded = load_config_with_metadata(config_path, start=working_dir)
    return CLIContext(config=loaded.config, config_path=loaded.path)


__all__ = ["CLIContext", "build_cli_context"]
