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

"""Typed aliases used across flowcheck internals."""

from __future__ import annotations

from typing import Literal, NewType, TypeAlias

Command: TypeAlias = list[str]

CheckerId = NewType("CheckerId", str)

BuiltinCheckerName = Literal["javascript-flow", "javascript-flow-coverage"]

__all__ = [
    "BuiltinCheckerName",
    "CheckerId",
    "Command",
]
