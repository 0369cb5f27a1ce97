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

"""flowcheck - Flow type checking for JavaScript buffers.

Runs the Flow type checker over a (possibly unsaved) buffer and translates its
JSON error and coverage reports into normalized diagnostic records, the way an
editor's on-the-fly syntax checker consumes them.
"""

from __future__ import annotations

from flowcheck.exceptions import (
    FlowcheckError,
    FlowcheckTypeError,
    FlowcheckValidationError,
)

from .api import build_context, check_buffer
from .checkers import CheckContext, CheckerPipeline, CheckResult, PipelineRun, default_pipeline
from .config import Config, FlowSettings, load_config
from .core.model_types import SeverityLevel
from .core.types import DiagnosticRecord
from .gate import evaluate_gate, should_run
from .reports import MalformedReport, ParseFailure, parse_coverage, parse_diagnostics

__all__ = [
    "CheckContext",
    "CheckResult",
    "CheckerPipeline",
    "Config",
    "DiagnosticRecord",
    "FlowSettings",
    "FlowcheckError",
    "FlowcheckTypeError",
    "FlowcheckValidationError",
    "MalformedReport",
    "ParseFailure",
    "PipelineRun",
    "SeverityLevel",
    "__version__",
    "build_context",
    "check_buffer",
    "default_pipeline",
    "evaluate_gate",
    "load_config",
    "parse_coverage",
    "parse_diagnostics",
    "should_run",
]

__version__ = "0.1.0"
