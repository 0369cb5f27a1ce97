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

"""Stable error code registry used across flowcheck."""

from __future__ import annotations

from typing import TYPE_CHECKING, NewType

from flowcheck.checkers.pipeline import UnknownCheckerError
from flowcheck.config import (
    ConfigFieldTypeError,
    ConfigReadError,
    ConfigValidationError,
    InvalidConfigFileError,
    UnsupportedConfigVersionError,
)
from flowcheck.reports.errors import MalformedReport, ParseFailure

from .exceptions import FlowcheckError, FlowcheckTypeError, FlowcheckValidationError

if TYPE_CHECKING:
    from collections.abc import Mapping

ErrorCode = NewType("ErrorCode", str)

_ERROR_CODES: dict[type[BaseException], ErrorCode] = {
    FlowcheckError: ErrorCode("FC000"),
    FlowcheckValidationError: ErrorCode("FC100"),
    FlowcheckTypeError: ErrorCode("FC101"),
    ConfigValidationError: ErrorCode("FC110"),
    ConfigReadError: ErrorCode("FC111"),
    InvalidConfigFileError: ErrorCode("FC112"),
    UnsupportedConfigVersionError: ErrorCode("FC113"),
    ConfigFieldTypeError: ErrorCode("FC114"),
    ParseFailure: ErrorCode("FC200"),
    MalformedReport: ErrorCode("FC201"),
    UnknownCheckerError: ErrorCode("FC300"),
}


def error_code_for(exc: BaseException) -> ErrorCode:
    """Return a stable error code for a structured flowcheck exception.

    Args:
        exc: Exception instance raised by flowcheck code paths.

    Returns:
        Error code mapped from the exception's class hierarchy.
    """
    for cls in type(exc).__mro__:
        code = _ERROR_CODES.get(cls)
        if code:
            return code
    return ErrorCode("FC000")


def error_code_catalog() -> Mapping[str, ErrorCode]:
    """Return a mapping of fully-qualified exception names to error codes.

    Returns:
        Mapping of ``<module>.<ExceptionName>`` strings to error codes.
    """
    return {f"{exc_type.__module__}.{exc_type.__name__}": code for exc_type, code in _ERROR_CODES.items()}


__all__ = ["ErrorCode", "error_code_catalog", "error_code_for"]
