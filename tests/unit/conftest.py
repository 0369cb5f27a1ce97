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

"""Fixtures shared across all unit tests."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from tests.fixtures.flow_reports import FLOW_HEADER, FlowProject

if TYPE_CHECKING:
    from pathlib import Path


@pytest.fixture
def flow_project(tmp_path: Path) -> FlowProject:
    """Return a directory holding ``.flowconfig`` and a tagged ``src/app.js``."""
    root = tmp_path / "project"
    root.mkdir()
    _ = (root / ".flowconfig").write_text("[options]\n", encoding="utf-8")
    source = root / "src" / "app.js"
    source.parent.mkdir()
    _ = source.write_text(FLOW_HEADER + "const x: number = 'a';\n", encoding="utf-8")
    return FlowProject(root=root, source=source)
