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

"""Flow checker descriptors, the checker pipeline, and checker execution.

The main entry point is `default_pipeline`, which returns the immutable
pipeline of built-in checkers enabled by the configuration. Running it yields
a `PipelineRun` with one `CheckResult` per checker that ran.
"""

from __future__ import annotations

from .base import JS_FILE_SUFFIXES, CheckContext, CheckerDescriptor, CheckResult, NextChecker
from .builtin import BUILTIN_DESCRIPTORS, FLOW_COVERAGE_DESCRIPTOR, FLOW_DESCRIPTOR
from .execution import run_checker
from .pipeline import CheckerPipeline, PipelineRun, UnknownCheckerError, default_pipeline, describe_checkers

__all__ = [
    "BUILTIN_DESCRIPTORS",
    "FLOW_COVERAGE_DESCRIPTOR",
    "FLOW_DESCRIPTOR",
    "JS_FILE_SUFFIXES",
    "CheckContext",
    "CheckResult",
    "CheckerDescriptor",
    "CheckerPipeline",
    "NextChecker",
    "PipelineRun",
    "UnknownCheckerError",
    "default_pipeline",
    "describe_checkers",
    "run_checker",
]
