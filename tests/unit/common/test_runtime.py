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

"""Unit tests for process and project-root helpers."""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING

import pytest

from flowcheck.runtime import ROOT_MARKERS, dedupe_preserve, find_marker_root, resolve_project_root, run_command

if TYPE_CHECKING:
    from pathlib import Path

pytestmark = pytest.mark.unit

_ECHO_STDIN = "import sys; data = sys.stdin.read(); sys.stdout.write(data.upper()); sys.exit(len(data) % 7)"


def test_run_command_feeds_standard_input(tmp_path: Path) -> None:
    output = run_command([sys.executable, "-c", _ECHO_STDIN], cwd=tmp_path, input_text="// @flow\n")

    assert output.stdout == "// @FLOW\n"
    assert output.exit_code == len("// @flow\n") % 7
    assert output.args[0] == sys.executable
    assert output.duration_ms >= 0


def test_run_command_nonzero_exit_is_not_an_error() -> None:
    output = run_command([sys.executable, "-c", "import sys; sys.stderr.write('bad'); sys.exit(2)"])
    assert output.exit_code == 2
    assert output.stderr == "bad"


def test_run_command_rejects_empty_and_blank_arguments() -> None:
    with pytest.raises(ValueError, match="must not be empty"):
        _ = run_command([])
    with pytest.raises(TypeError, match="non-empty strings"):
        _ = run_command(["flow", ""])


def test_run_command_enforces_allowlist() -> None:
    with pytest.raises(ValueError, match="not allowed"):
        _ = run_command(["rm", "-rf", "/"], allowed={"flow"})


def test_run_command_missing_executable_raises_oserror(tmp_path: Path) -> None:
    missing = str(tmp_path / "no-such-flow")
    with pytest.raises(OSError):
        _ = run_command([missing, "check-contents"], allowed={missing})


def test_find_marker_root_walks_to_nearest_ancestor(tmp_path: Path) -> None:
    outer = tmp_path / "outer"
    inner = outer / "pkg" / "inner"
    inner.mkdir(parents=True)
    _ = (outer / ".flowconfig").write_text("", encoding="utf-8")
    source = inner / "app.js"
    _ = source.write_text("", encoding="utf-8")

    assert find_marker_root(source, (".flowconfig",)) == outer.resolve()
    _ = (inner / ".flowconfig").write_text("", encoding="utf-8")
    assert find_marker_root(source, (".flowconfig",)) == inner.resolve()


def test_find_marker_root_without_marker(tmp_path: Path) -> None:
    assert find_marker_root(tmp_path, ("definitely-not-a-marker-file",)) is None


def test_resolve_project_root_prefers_config_markers(tmp_path: Path) -> None:
    assert ROOT_MARKERS[0] == "flowcheck.toml"
    project = tmp_path / "project"
    nested = project / "src"
    nested.mkdir(parents=True)
    _ = (project / "flowcheck.toml").write_text("", encoding="utf-8")

    assert resolve_project_root(nested) == project.resolve()


def test_resolve_project_root_rejects_missing_start(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        _ = resolve_project_root(tmp_path / "missing")


def test_dedupe_preserve_keeps_first_occurrence() -> None:
    assert dedupe_preserve(["javascript-flow", "a", "javascript-flow", "b", "a"]) == ["javascript-flow", "a", "b"]
