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

"""Identifiers of the checkers flowcheck knows about."""

from __future__ import annotations

from typing import Final

from .type_aliases import BuiltinCheckerName, CheckerId

FLOW_NAME: Final[BuiltinCheckerName] = "javascript-flow"
FLOW_COVERAGE_NAME: Final[BuiltinCheckerName] = "javascript-flow-coverage"

FLOW_CHECKER: Final[CheckerId] = CheckerId(FLOW_NAME)
FLOW_COVERAGE_CHECKER: Final[CheckerId] = CheckerId(FLOW_COVERAGE_NAME)
# Provided by the host; flow hands over to it when chaining.
ESLINT_CHECKER: Final[CheckerId] = CheckerId("javascript-eslint")

BUILTIN_CHECKERS: Final[tuple[CheckerId, ...]] = (FLOW_CHECKER, FLOW_COVERAGE_CHECKER)

__all__ = [
    "BUILTIN_CHECKERS",
    "ESLINT_CHECKER",
    "FLOW_CHECKER",
    "FLOW_COVERAGE_CHECKER",
    "FLOW_COVERAGE_NAME",
    "FLOW_NAME",
]
