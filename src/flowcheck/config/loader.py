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

"""Configuration loading for flowcheck.

Configuration lives in ``flowcheck.toml``, ``.flowcheck.toml``, or the
``[tool.flowcheck]`` table of ``pyproject.toml`` in the project root. The first
candidate defining flowcheck settings wins; without one, defaults apply.
The ``FLOWCHECK_FLOW_EXECUTABLE`` environment variable overrides the Flow
binary from any source.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Final, cast

from pydantic import ValidationError

from flowcheck.compat import tomllib
from flowcheck.core.model_types import LogComponent
from flowcheck.logging import structured_extra
from flowcheck.runtime import resolve_project_root

from .models import Config, ConfigModel, ConfigReadError, InvalidConfigFileError, model_to_config

logger: logging.Logger = logging.getLogger("flowcheck.config")

EXECUTABLE_ENV: Final[str] = "FLOWCHECK_FLOW_EXECUTABLE"
CONFIG_FILENAMES: Final[tuple[str, ...]] = ("flowcheck.toml", ".flowcheck.toml", "pyproject.toml")


@dataclass(slots=True, frozen=True)
class LoadedConfig:
    """Container for a loaded configuration and its source path.

    Attributes:
        config: Parsed configuration instance.
        path: Filesystem path the configuration was loaded from, or None when
            defaults are used.
    """

    config: Config
    path: Path | None


def load_config(explicit_path: Path | None = None, *, start: Path | None = None) -> Config:
    """Load flowcheck configuration from a TOML file or use defaults.

    Args:
        explicit_path: Optional explicit path to a configuration file.
        start: Directory to begin project-root discovery from (defaults to cwd).

    Returns:
        The resolved configuration.
    """
    return load_config_with_metadata(explicit_path, start=start).config


def load_config_with_metadata(explicit_path: Path | None = None, *, start: Path | None = None) -> LoadedConfig:
    """Load flowcheck configuration with metadata about the source file.

    When ``explicit_path`` is given only that file is considered and it must
    define flowcheck settings. Otherwise the candidates in ``CONFIG_FILENAMES``
    are tried, in order, inside the project root discovered from ``start``.

    Args:
        explicit_path: Optional explicit path to a configuration file.
        start: Directory to begin project-root discovery from (defaults to cwd).

    Returns:
        LoadedConfig: Parsed configuration and the path it originated from.

    Raises:
        ConfigReadError: If a candidate file cannot be read or parsed as TOML.
        InvalidConfigFileError: If a candidate fails validation.
    """
    loaded = _load(explicit_path, start=start)
    return _apply_env_overrides(loaded)


def _load(explicit_path: Path | None, *, start: Path | None) -> LoadedConfig:
    if explicit_path is not None:
        candidate = explicit_path if explicit_path.is_absolute() else (Path.cwd() / explicit_path).resolve()
        if not candidate.exists():
            raise ConfigReadError(candidate, FileNotFoundError(str(candidate)))
        loaded = _load_candidate(candidate, explicit=True)
        if loaded is None:  # pragma: no cover - explicit candidates always raise instead
            return LoadedConfig(config=Config(), path=None)
        return loaded

    root = resolve_project_root(start)
    for name in CONFIG_FILENAMES:
        candidate = root / name
        if not candidate.is_file():
            continue
        loaded = _load_candidate(candidate, explicit=False)
        if loaded is not None:
            return loaded
    logger.debug(
        "No flowcheck configuration found under %s; using defaults",
        root,
        extra=structured_extra(component=LogComponent.CONFIG, path=root),
    )
    return LoadedConfig(config=Config(), path=None)


def _load_candidate(candidate: Path, *, explicit: bool) -> LoadedConfig | None:
    try:
        raw_map: dict[str, object] = tomllib.loads(candidate.read_text(encoding="utf-8"))
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise ConfigReadError(candidate, exc) from exc

    payload = _extract_payload(candidate, raw_map)
    if payload is None:
        if explicit:
            message = f"{candidate.name} does not define flowcheck configuration; add a [tool.flowcheck] section"
            raise InvalidConfigFileError(candidate, ValueError(message))
        return None

    try:
        model = ConfigModel.model_validate(payload)
    except ValidationError as exc:
        raise InvalidConfigFileError(candidate, exc) from exc
    logger.debug(
        "Loaded flowcheck configuration from %s",
        candidate,
        extra=structured_extra(component=LogComponent.CONFIG, path=candidate),
    )
    return LoadedConfig(config=model_to_config(model), path=candidate.resolve())


def _extract_payload(candidate: Path, raw_map: dict[str, object]) -> dict[str, object] | None:
    """Return the flowcheck table of a parsed TOML document.

    Standalone files hold the settings at top level. ``pyproject.toml`` (or a
    standalone file using the PEP 518 layout) nests them under
    ``[tool.flowcheck]``.

    Raises:
        InvalidConfigFileError: If ``[tool.flowcheck]`` exists but is not a table.
    """
    tool_section = raw_map.get("tool")
    if isinstance(tool_section, dict):
        section = cast("dict[str, object]", tool_section).get("flowcheck")
        if section is not None and not isinstance(section, dict):
            message = "[tool.flowcheck] must be a TOML table"
            raise InvalidConfigFileError(candidate, ValueError(message))
        if isinstance(section, dict):
            return cast("dict[str, object]", section)
    if candidate.name == "pyproject.toml":
        return None
    return {key: value for key, value in raw_map.items() if key != "tool"}


def _apply_env_overrides(loaded: LoadedConfig) -> LoadedConfig:
    executable = os.getenv(EXECUTABLE_ENV, "").strip()
    if not executable:
        return loaded
    flow = loaded.config.flow.with_executable(executable)
    return LoadedConfig(config=Config(flow=flow), path=loaded.path)


__all__ = ["CONFIG_FILENAMES", "EXECUTABLE_ENV", "LoadedConfig", "load_config", "load_config_with_metadata"]
