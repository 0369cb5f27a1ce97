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

"""Logging setup and structured extra payloads for flowcheck.

Everything logs below the ``flowcheck`` logger. The CLI prints diagnostics on
stdout, so the single handler installed here always writes to stderr.
"""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING, Final, Literal, cast

from flowcheck.compat import UTC, TypedDict, Unpack, override
from flowcheck.core.model_types import LogComponent, LogFormat, SeverityLevel
from flowcheck.json import normalize_enums_for_json

if TYPE_CHECKING:
    from flowcheck.core.type_aliases import CheckerId

ROOT_LOGGER_NAME: Final[str] = "flowcheck"
LOG_FORMAT_ENV: Final[str] = "FLOWCHECK_LOG_FORMAT"
LOG_LEVEL_ENV: Final[str] = "FLOWCHECK_LOG_LEVEL"
DEFAULT_LOG_LEVEL: Final[str] = "warning"

LogLevelName = Literal["debug", "info", "warning", "error"]

_LEVELS: Final[dict[LogLevelName, int]] = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}

LOG_FORMATS: Final[tuple[str, ...]] = tuple(member.value for member in LogFormat)
LOG_LEVELS: Final[tuple[LogLevelName, ...]] = tuple(_LEVELS)

CHILD_LOGGERS: Final[tuple[str, ...]] = (
    "flowcheck.cli",
    "flowcheck.gate",
    "flowcheck.reports",
    "flowcheck.checkers",
    "flowcheck.config",
    "flowcheck.internal.process",
)


@dataclass(slots=True, frozen=True)
class LogConfig:
    """Outcome of ``configure_logging``."""

    format: LogFormat
    level: int
    level_name: str


class _StructuredLogBase(TypedDict):
    component: LogComponent


class StructuredLogExtra(_StructuredLogBase, total=False):
    """Typed ``extra=`` mapping attached to flowcheck log records."""

    checker: str
    path: str
    duration_ms: float
    exit_code: int
    counts: Mapping[SeverityLevel, int]
    reason: str
    details: Mapping[str, object]


class _StructuredLogKwargs(TypedDict, total=False):
    checker: CheckerId | str
    path: str | os.PathLike[str]
    duration_ms: float
    exit_code: int
    counts: Mapping[SeverityLevel, int]
    reason: str
    details: Mapping[str, object]


def _non_empty_mapping(value: object) -> object | None:
    if isinstance(value, Mapping) and value:
        return dict(cast("Mapping[object, object]", value))
    return None


# Applied in order; a converter returning None drops the field.
_FIELD_CONVERTERS: Final[tuple[tuple[str, Callable[[object], object | None]], ...]] = (
    ("checker", str),
    ("path", lambda value: os.fspath(cast("str | os.PathLike[str]", value))),
    ("duration_ms", lambda value: float(cast("float", value))),
    ("exit_code", lambda value: int(cast("int", value))),
    ("counts", _non_empty_mapping),
    ("reason", str),
    ("details", _non_empty_mapping),
)

STRUCTURED_FIELDS: Final[tuple[str, ...]] = ("component", *(name for name, _ in _FIELD_CONVERTERS))


def structured_extra(
    component: LogComponent,
    **kwargs: Unpack[_StructuredLogKwargs],
) -> StructuredLogExtra:
    """Build the ``extra`` mapping for a log call.

    None values and empty ``counts``/``details`` mappings are left out so
    that JSON log lines only carry fields that say something.

    Args:
        component: Subsystem emitting the record.
        **kwargs: Optional structured fields.

    Returns:
        Mapping suitable for the ``extra`` parameter of logging calls.
    """
    values = cast("dict[str, object]", kwargs)
    extra: dict[str, object] = {"component": component}
    for name, convert in _FIELD_CONVERTERS:
        raw = values.get(name)
        if raw is None:
            continue
        converted = convert(raw)
        if converted is not None:
            extra[name] = converted
    return cast("StructuredLogExtra", extra)


def _structured_fields(record: logging.LogRecord) -> dict[str, object]:
    return {name: getattr(record, name) for name in STRUCTURED_FIELDS if hasattr(record, name)}


class JSONLogFormatter(logging.Formatter):
    """One JSON object per line: standard fields plus any structured extras."""

    @override
    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, object] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname.lower(),
            "logger": record.name,
            "message": record.getMessage(),
            **_structured_fields(record),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(normalize_enums_for_json(payload), ensure_ascii=False)


class TextLogFormatter(logging.Formatter):
    """``[LEVEL] message`` lines for people reading stderr."""

    def __init__(self) -> None:
        super().__init__("[%(levelname)s] %(message)s")


def _resolve_format(preferred: LogFormat | str | None) -> LogFormat:
    raw = preferred if preferred is not None else os.getenv(LOG_FORMAT_ENV)
    if not raw:
        return LogFormat.TEXT
    if isinstance(raw, LogFormat):
        return raw
    return LogFormat.from_str(raw)


def _resolve_level(preferred: str | int | None) -> tuple[int, str]:
    raw = preferred if preferred is not None else (os.getenv(LOG_LEVEL_ENV) or DEFAULT_LOG_LEVEL)
    if isinstance(raw, int):
        return raw, logging.getLevelName(raw).lower()
    name = raw.strip().lower()
    if name in _LEVELS:
        return _LEVELS[cast("LogLevelName", name)], name
    # unrecognised names degrade to info rather than failing the command
    return logging.INFO, "info"


def _build_handler(log_format: LogFormat) -> logging.Handler:
    handler = logging.StreamHandler()
    formatter = JSONLogFormatter() if log_format is LogFormat.JSON else TextLogFormatter()
    handler.setFormatter(formatter)
    return handler


def configure_logging(
    log_format: LogFormat | str | None = None,
    *,
    log_level: str | int | None = None,
) -> LogConfig:
    """Install flowcheck's stderr handler and set logger levels.

    Explicit arguments win over ``FLOWCHECK_LOG_FORMAT`` and
    ``FLOWCHECK_LOG_LEVEL``; without either, text output at ``warning`` is
    used. Calling this again replaces the previous handler.

    Args:
        log_format: ``text`` or ``json``.
        log_level: Level name or numeric level.

    Returns:
        The resolved format and level.
    """
    selected_format = _resolve_format(log_format)
    level, level_name = _resolve_level(log_level)

    root = logging.getLogger(ROOT_LOGGER_NAME)
    root.handlers.clear()
    root.addHandler(_build_handler(selected_format))
    root.setLevel(level)
    root.propagate = False
    for name in CHILD_LOGGERS:
        logging.getLogger(name).setLevel(level)
    return LogConfig(format=selected_format, level=level, level_name=level_name)


__all__ = [
    "CHILD_LOGGERS",
    "LOG_FORMATS",
    "LOG_LEVELS",
    "LogConfig",
    "StructuredLogExtra",
    "configure_logging",
    "structured_extra",
]
