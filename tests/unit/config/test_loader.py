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

"""Unit tests for configuration discovery and loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from flowcheck.config import (
    CONFIG_FILENAMES,
    Config,
    ConfigReadError,
    FlowSettings,
    InvalidConfigFileError,
    load_config,
    load_config_with_metadata,
)
from flowcheck.core.checker_names import FLOW_CHECKER

pytestmark = pytest.mark.unit


def _write(path: Path, text: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    _ = path.write_text(text, encoding="utf-8")
    return path


def test_defaults_without_configuration(tmp_path: Path) -> None:
    loaded = load_config_with_metadata(start=tmp_path)
    assert loaded.config == Config()
    assert loaded.path is None


def test_standalone_file_is_loaded(tmp_path: Path) -> None:
    path = _write(
        tmp_path / "flowcheck.toml",
        'config_version = 0\n[flow]\nexecutable = "node_modules/.bin/flow"\nargs = ["--quiet"]\n',
    )
    loaded = load_config_with_metadata(start=tmp_path)
    assert loaded.path == path.resolve()
    assert loaded.config.flow.executable == "node_modules/.bin/flow"
    assert loaded.config.flow.args == ("--quiet",)
    assert loaded.config.flow.client == "flowcheck"


def test_discovery_walks_up_from_nested_directory(tmp_path: Path) -> None:
    _ = _write(tmp_path / ".flowcheck.toml", '[flow]\nclient = "vim"\n')
    nested = tmp_path / "src" / "components"
    nested.mkdir(parents=True)
    assert load_config(start=nested).flow.client == "vim"


def test_pyproject_tool_table(tmp_path: Path) -> None:
    _ = _write(
        tmp_path / "pyproject.toml",
        '[project]\nname = "demo"\n\n[tool.flowcheck.flow]\nmarker_file = ".flowroot"\ncoverage = false\n',
    )
    settings = load_config(start=tmp_path).flow
    assert settings.marker_file == ".flowroot"
    assert settings.checkers == (FLOW_CHECKER,)


def test_pyproject_without_tool_table_uses_defaults(tmp_path: Path) -> None:
    _ = _write(tmp_path / "pyproject.toml", '[project]\nname = "demo"\n')
    loaded = load_config_with_metadata(start=tmp_path)
    assert loaded.path is None
    assert loaded.config.flow == FlowSettings()


def test_standalone_file_takes_precedence(tmp_path: Path) -> None:
    _ = _write(tmp_path / "flowcheck.toml", '[flow]\nclient = "standalone"\n')
    _ = _write(tmp_path / "pyproject.toml", '[tool.flowcheck.flow]\nclient = "pyproject"\n')
    assert load_config(start=tmp_path).flow.client == "standalone"
    assert CONFIG_FILENAMES[0] == "flowcheck.toml"


def test_explicit_path(tmp_path: Path) -> None:
    path = _write(tmp_path / "configs" / "flow.toml", '[flow]\nexecutable = "/opt/flow"\n')
    loaded = load_config_with_metadata(path)
    assert loaded.path == path.resolve()
    assert loaded.config.flow.executable == "/opt/flow"


def test_explicit_path_must_exist(tmp_path: Path) -> None:
    with pytest.raises(ConfigReadError):
        _ = load_config(tmp_path / "missing.toml")


def test_explicit_pyproject_requires_tool_table(tmp_path: Path) -> None:
    path = _write(tmp_path / "pyproject.toml", '[project]\nname = "demo"\n')
    with pytest.raises(InvalidConfigFileError, match=r"\[tool.flowcheck\]"):
        _ = load_config(path)


def test_invalid_toml_raises_read_error(tmp_path: Path) -> None:
    path = _write(tmp_path / "flowcheck.toml", "[flow\nexecutable = ")
    with pytest.raises(ConfigReadError) as exc_info:
        _ = load_config(start=tmp_path)
    assert exc_info.value.path == path.resolve()


def test_validation_errors_name_the_file(tmp_path: Path) -> None:
    path = _write(tmp_path / "flowcheck.toml", "[flow]\nexecutable = 3\n")
    with pytest.raises(InvalidConfigFileError) as exc_info:
        _ = load_config(start=tmp_path)
    assert exc_info.value.path == path.resolve()
    assert "executable must be a string" in str(exc_info.value)


def test_tool_flowcheck_must_be_a_table(tmp_path: Path) -> None:
    _ = _write(tmp_path / "pyproject.toml", '[tool]\nflowcheck = "yes"\n')
    with pytest.raises(InvalidConfigFileError, match="must be a TOML table"):
        _ = load_config(start=tmp_path)


def test_environment_overrides_executable(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    _ = _write(tmp_path / "flowcheck.toml", '[flow]\nexecutable = "flow"\nclient = "kept"\n')
    monkeypatch.setenv("FLOWCHECK_FLOW_EXECUTABLE", "  /usr/local/bin/flow ")
    settings = load_config(start=tmp_path).flow
    assert settings.executable == "/usr/local/bin/flow"
    assert settings.client == "kept"


def test_blank_environment_value_is_ignored(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("FLOWCHECK_FLOW_EXECUTABLE", "   ")
    assert load_config(start=tmp_path).flow.executable == "flow"
