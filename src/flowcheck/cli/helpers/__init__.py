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

"""Helper utilities shared across CLI commands."""

from __future__ import annotations

from .args import ArgumentRegistrar, output_format_from, register_argument, register_format_flag
from .context import CLIContext, build_cli_context
from .formatting import (
    format_coverage_summary,
    format_error,
    format_record,
    render_json,
    render_records,
    render_results,
    render_table_rows,
    stringify,
)
from .io import echo, read_text_source

__all__ = [
    "ArgumentRegistrar",
    "CLIContext",
    "build_cli_context",
    "echo",
    "format_coverage_summary",
    "format_error",
    "format_record",
    "output_format_from",
    "read_text_source",
    "register_argument",
    "register_format_flag",
    "render_json",
    "render_records",
    "render_results",
    "render_table_rows",
    "stringify",
]
