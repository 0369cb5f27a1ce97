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

"""Filesystem helpers for locating marker files in ancestor directories."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any, Final, Literal, TypeAlias, cast

if TYPE_CHECKING:
    from collections.abc import Iterable

logger: logging.Logger = logging.getLogger("flowcheck.internal.paths")

__all__ = ["ROOT_MARKERS", "RootMarker", "find_marker_root", "resolve_project_root"]

RootMarker: TypeAlias = Literal["flowcheck.toml", ".flowcheck.toml", "pyproject.toml"]

ROOT_MARKERS: Final[tuple[RootMarker, RootMarker, RootMarker]] = (
    "flowcheck.toml",
    ".flowcheck.toml",
    "pyproject.toml",
)


def find_marker_root(start: Path, markers: Iterable[str]) -> Path | None:
    """Return the nearest directory at or above ``start`` holding any marker.

    The walk begins at ``start`` itself when it is a directory, or at its parent
    when it is a file, and stops at the filesystem root. Only the existence of
    the marker matters; its contents are never read.

    Args:
        start: File or directory to search upwards from.
        markers: File names whose presence marks the wanted directory.

    Returns:
        The first matching directory, or None when no ancestor holds a marker.
    """
    names = tuple(markers)
    base = start.resolve()
    if not base.is_dir():
        base = base.parent
    for candidate in (base, *base.parents):
        for marker in names:
            if (candidate / marker).exists():
                return candidate
    return None


def resolve_project_root(start: Path | None = None) -> Path:
    """Return the flowcheck project root for ``start`` (defaults to the cwd).

    Falls back to ``start`` itself when no configuration marker is found.

    Raises:
        FileNotFoundError: If an explicit ``start`` does not exist.
    """
    base = (start or Path.cwd()).resolve()
    found = find_marker_root(base, ROOT_MARKERS)
    if found is not None:
        return found

    if start is not None and not base.exists():
        message = f"Provided project root {start} does not exist."
        raise FileNotFoundError(message)
    root = base.parent if base.is_file() else base
    logger.debug(
        "No project markers found; using %s as project root",
        root,
        extra=_structured_extra(path=root),
    )
    return root


def _structured_extra(**kwargs: object) -> dict[str, object]:
    from flowcheck.core.model_types import LogComponent
    from flowcheck.logging import structured_extra

    payload = structured_extra(LogComponent.CONFIG, **cast("dict[str, Any]", kwargs))
    return cast("dict[str, object]", payload)
