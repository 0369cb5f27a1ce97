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

"""Parsers turning Flow JSON reports into ``DiagnosticRecord`` sequences."""

from __future__ import annotations

from .coverage import CoverageSummary, coverage_summary, parse_coverage
from .diagnostics import decode_report, parse_diagnostics
from .errors import MalformedReport, ParseFailure

__all__ = [
    "CoverageSummary",
    "MalformedReport",
    "ParseFailure",
    "coverage_summary",
    "decode_report",
    "parse_coverage",
    "parse_diagnostics",
]
