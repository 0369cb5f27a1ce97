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

"""Configuration models and validation for flowcheck.

Pydantic models validate the TOML payload; validated models are converted into
frozen dataclasses used at runtime. Frozen settings are hashable, which lets
the checker pipeline be built once per distinct configuration.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, ClassVar, Final

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator, model_validator

from flowcheck.core.checker_names import BUILTIN_CHECKERS, FLOW_COVERAGE_CHECKER
from flowcheck.core.type_aliases import CheckerId
from flowcheck.exceptions import FlowcheckValidationError
from flowcheck.runtime import dedupe_preserve

if TYPE_CHECKING:
    from pathlib import Path

CONFIG_VERSION: Final[int] = 0
DEFAULT_EXECUTABLE: Final[str] = "flow"
DEFAULT_CLIENT: Final[str] = "flowcheck"
DEFAULT_MARKER_FILE: Final[str] = ".flowconfig"


class ConfigValidationError(FlowcheckValidationError):
    """Raised when configuration data contains invalid values."""


class ConfigFieldTypeError(ConfigValidationError):
    """Raised when a configuration field has an invalid type."""

    def __init__(self, field: str, expected: str = "a string") -> None:
        """Initialize the exception with the field name that has an invalid type.

        Args:
            field: The name of the configuration field with an invalid type.
            expected: Short description of the accepted type.
        """
        self.field = field
        super().__init__(f"{field} must be {expected}")


class UnsupportedConfigVersionError(ConfigValidationError):
    """Raised when a configuration file declares an unsupported schema version."""

    def __init__(self, provided: int, expected: int) -> None:
        """Initialize the exception with version information.

        Args:
            provided: The config_version value provided in the configuration file.
            expected: The config_version value expected by this version of flowcheck.
        """
        self.provided = provided
        self.expected = expected
        super().__init__(f"Unsupported config_version {provided}; expected {expected}")


class ConfigReadError(ConfigValidationError):
    """Raised when a configuration file cannot be read from disk."""

    def __init__(self, path: Path, error: Exception) -> None:
        """Initialize the exception with file path and underlying error.

        Args:
            path: The path to the configuration file that could not be read.
            error: The underlying exception that caused the read failure.
        """
        self.path = path
        self.error = error
        super().__init__(f"Unable to read {path}: {error}")


class InvalidConfigFileError(ConfigValidationError):
    """Raised when the configuration file fails validation."""

    def __init__(self, path: Path, error: Exception) -> None:
        """Initialize the exception with configuration file path and validation error.

        Args:
            path: The path to the configuration file that failed validation.
            error: The underlying validation exception.
        """
        self.path = path
        self.error = error
        super().__init__(f"Invalid flowcheck configuration in {path}: {error}")


@dataclass(slots=True, frozen=True)
class FlowSettings:
    """Runtime settings for invoking Flow.

    Attributes:
        executable: Flow binary to run (a name on PATH or an absolute path).
        args: Extra arguments inserted after the Flow subcommand.
        client: Value passed to ``--from`` so Flow can attribute requests.
        marker_file: Name of the project-root marker file looked up by the gate.
        checkers: Checkers enabled for this project, in pipeline order.
    """

    executable: str = DEFAULT_EXECUTABLE
    args: tuple[str, ...] = ()
    client: str = DEFAULT_CLIENT
    marker_file: str = DEFAULT_MARKER_FILE
    checkers: tuple[CheckerId, ...] = BUILTIN_CHECKERS

    def with_executable(self, executable: str) -> FlowSettings:
        """Return a copy of these settings using a different Flow binary."""
        return FlowSettings(
            executable=executable,
            args=self.args,
            client=self.client,
            marker_file=self.marker_file,
            checkers=self.checkers,
        )


def _default_flow_settings() -> FlowSettings:
    return FlowSettings()


@dataclass(slots=True, frozen=True)
class Config:
    """Top-level flowcheck configuration."""

    flow: FlowSettings = field(default_factory=_default_flow_settings)


def _require_text(value: object, field_name: str) -> str:
    if not isinstance(value, str):
        raise ConfigFieldTypeError(field_name)
    stripped = value.strip()
    if not stripped:
        raise ConfigFieldTypeError(field_name, "a non-empty string")
    return stripped


def _ensure_str_list(value: object, field_name: str) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if not isinstance(value, list):
        raise ConfigFieldTypeError(field_name, "a list of strings")
    items: list[str] = []
    for item in value:
        if not isinstance(item, str):
            raise ConfigFieldTypeError(field_name, "a list of strings")
        items.append(item)
    return items


class FlowSettingsModel(BaseModel):
    """Pydantic model for the ``[flow]`` table.

    Attributes:
        executable: Flow binary to run.
        args: Extra arguments for every Flow invocation.
        client: Value for Flow's ``--from`` flag.
        marker_file: Project-root marker file name.
        checkers: Enabled checker names, in order.
        coverage: Set to false to drop the coverage checker.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(extra="forbid")

    executable: str = DEFAULT_EXECUTABLE
    args: list[str] = Field(default_factory=list)
    client: str = DEFAULT_CLIENT
    marker_file: str = DEFAULT_MARKER_FILE
    checkers: list[str] = Field(default_factory=lambda: [str(name) for name in BUILTIN_CHECKERS])
    coverage: bool = True

    @field_validator("executable", "client", mode="before")
    @classmethod
    def _strip_text(cls, value: object, info: ValidationInfo) -> str:
        return _require_text(value, info.field_name or "value")

    @field_validator("marker_file", mode="before")
    @classmethod
    def _check_marker_file(cls, value: object) -> str:
        name = _require_text(value, "marker_file")
        if "/" in name or "\\" in name:
            raise ConfigFieldTypeError("marker_file", "a bare file name")
        return name

    @field_validator("args", mode="before")
    @classmethod
    def _coerce_args(cls, value: object) -> list[str]:
        return _ensure_str_list(value, "args")

    @field_validator("checkers", mode="before")
    @classmethod
    def _coerce_checkers(cls, value: object) -> list[str]:
        names = [name.strip() for name in _ensure_str_list(value, "checkers")]
        return [name for name in names if name]

    @model_validator(mode="after")
    def _normalise(self) -> FlowSettingsModel:
        self.checkers = dedupe_preserve(self.checkers)
        if not self.coverage:
            self.checkers = [name for name in self.checkers if name != FLOW_COVERAGE_CHECKER]
        return self


class ConfigModel(BaseModel):
    """Pydantic model for a whole flowcheck configuration file."""

    model_config: ClassVar[ConfigDict] = ConfigDict(extra="forbid")

    config_version: int = CONFIG_VERSION
    flow: FlowSettingsModel = Field(default_factory=FlowSettingsModel)

    @field_validator("config_version")
    @classmethod
    def _check_version(cls, value: int) -> int:
        if value != CONFIG_VERSION:
            raise UnsupportedConfigVersionError(value, CONFIG_VERSION)
        return value


def settings_from_model(model: FlowSettingsModel) -> FlowSettings:
    """Convert a validated ``[flow]`` table into runtime settings."""
    return FlowSettings(
        executable=model.executable,
        args=tuple(model.args),
        client=model.client,
        marker_file=model.marker_file,
        checkers=tuple(CheckerId(name) for name in model.checkers),
    )


def model_to_config(model: ConfigModel) -> Config:
    """Convert a validated configuration model into a ``Config`` dataclass."""
    return Config(flow=settings_from_model(model.flow))


__all__ = [
    "CONFIG_VERSION",
    "Config",
    "ConfigFieldTypeError",
    "ConfigModel",
    "ConfigReadError",
    "ConfigValidationError",
    "FlowSettings",
    "FlowSettingsModel",
    "InvalidConfigFileError",
    "UnsupportedConfigVersionError",
    "model_to_config",
    "settings_from_model",
]
