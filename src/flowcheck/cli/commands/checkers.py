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

"""Checker inspection commands for the flowcheck CLI."""

from __future__ import annotations

import argparse
from typing import TYPE_CHECKING

from flowcheck.checkers import describe_checkers
from flowcheck.cli.helpers import (
    echo,
    output_format_from,
    register_format_flag,
    render_json,
    render_table_rows,
)
from flowcheck.core.model_types import OutputFormat

if TYPE_CHECKING:
    from collections.abc import Sequence

    from flowcheck.cli.helpers import CLIContext
    from flowcheck.cli.types import SubparserCollection

_TABLE_COLUMNS = ("name", "description", "next_checkers")


def register_checkers_command(
    subparsers: SubparserCollection,
    *,
    parents: Sequence[argparse.ArgumentParser] | None = None,
) -> None:
    """Attach the ``flowcheck checkers`` command to the CLI.

    Args:
        subparsers: Top-level argparse subparser collection to register commands on.
        parents: Shared parent parsers carrying global options.
    """
    checkers = subparsers.add_parser(
        "checkers",
        help="Inspect the configured checker pipeline",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
        parents=parents or [],
    )
    checkers_sub = checkers.add_subparsers(dest="checkers_action", required=True)
    checkers_list = checkers_sub.add_parser(
        "list",
        help="List enabled checkers in pipeline order",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
        parents=parents or [],
    )
    register_format_flag(checkers_list)


def _handle_list(args: argparse.Namespace, context: CLIContext) -> int:
    payload = describe_checkers(context.pipeline)
    if output_format_from(args) is OutputFormat.JSON:
        echo(render_json(payload))
        return 0
    rows = [
        {
            "name": entry["name"],
            "description": entry["description"],
            "next_checkers": ", ".join(_link_names(entry["next_checkers"])),
        }
        for entry in payload
    ]
    for line in render_table_rows(rows, _TABLE_COLUMNS):
        echo(line)
    return 0


def _link_names(links: object) -> list[str]:
    if not isinstance(links, list):
        return []
    names: list[str] = []
    for link in links:
        if isinstance(link, dict) and isinstance(link.get("name"), str):
            names.append(link["name"])
    return names


def execute_checkers(args: argparse.Namespace, context: CLIContext) -> int:
    """Execute the ``checkers`` subcommand.

    Returns:
        ``0`` if the action completes successfully.

    Raises:
        SystemExit: If the requested action is unknown.
    """
    action_value = getattr(args, "checkers_action", None)
    if action_value == "list":
        return _handle_list(args, context)
    msg = f"Unknown checkers action '{action_value}'"
    raise SystemExit(msg)


__all__ = ["execute_checkers", "register_checkers_command"]
