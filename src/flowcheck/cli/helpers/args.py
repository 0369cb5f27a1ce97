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

# ignore JUSTIFIED: argument helpers mirror argparse signatures and allow passthrough
# typing without constraining caller kwargs
# ruff: noqa: ANN401  # pylint: disable=redundant-returns-doc,unnecessary-ellipsis

"""Argument parser helpers used across CLI commands."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

from flowcheck.core.model_types import OutputFormat
from flowcheck.runtime import consume

if TYPE_CHECKING:
    import argparse


class ArgumentRegistrar(Protocol):
    """Protocol matching ``argparse.ArgumentParser`` and argument groups."""

    def add_argument(
        self,
        *args: Any,
        **kwargs: Any,
    ) -> argparse.Action:
        """Expose ``ArgumentParser.add_argument`` so helpers can operate generically.

        Args:
            *args: Positional argument configuration passed through to ``add_argument``.
            **kwargs: Keyword options forwarded to ``add_argument``.

        Returns:
            argparse.Action: The action object created for the registered argument.
        """
        ...  # pragma: no cover


def register_argument(
    registrar: ArgumentRegistrar,
    *args: Any,
    **kwargs: Any,
) -> None:
    """Register an argument on a parser/argument group, discarding the action handle.

    Args:
        registrar: Parser or argument group on which to register the option.
        *args: Positional flags and option strings forwarded to ``add_argument``.
        **kwargs: Keyword options forwarded to ``add_argument``.
    """
    consume(registrar.add_argument(*args, **kwargs))


def register_format_flag(registrar: ArgumentRegistrar) -> None:
    """Register the ``--format`` option shared by commands that print records."""
    register_argument(
        registrar,
        "--format",
        dest="output_format",
        choices=[fmt.value for fmt in OutputFormat],
        default=OutputFormat.TEXT.value,
        help="Print human-readable lines or a JSON document.",
    )


def output_format_from(args: argparse.Namespace) -> OutputFormat:
    return OutputFormat.from_str(getattr(args, "output_format", OutputFormat.TEXT.value))


__all__ = ["ArgumentRegistrar", "output_format_from", "register_argument", "register_format_flag"]
