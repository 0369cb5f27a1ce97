#!/usr/bin/env python3
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

"""Check the flowcheck error-code registry against ``docs/EXCEPTIONS.md``.

The documentation lists one table row per code, ``| FC200 | ParseFailure | ...``.
Both the code set and the exception name attached to each code must match the
registry. The repo's ``src/`` directory is put on ``sys.path`` so the script
works without installing the package.
"""

from __future__ import annotations

import argparse
import importlib
import re
import sys
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping, Sequence

REPO_ROOT = Path(__file__).resolve().parents[1]
DEFAULT_DOC_PATH = REPO_ROOT / "docs" / "EXCEPTIONS.md"
_ROW_PATTERN = re.compile(r"^\|\s*(FC\d{3})\s*\|\s*`?([A-Za-z_][A-Za-z0-9_]*)`?\s*\|", re.MULTILINE)


def _emit(message: str, *, error: bool = False) -> None:
    stream = sys.stderr if error else sys.stdout
    _ = stream.write(f"[flowcheck] {message}\n")


def _load_error_codes(src_path: Path) -> Mapping[str, str]:
    """Return ``{code: exception class name}`` from the live registry."""
    src_str = str(src_path)
    if src_str not in sys.path:
        sys.path.insert(0, src_str)
    module = importlib.import_module("flowcheck._internal.error_codes")
    catalog: Mapping[str, str] = module.error_code_catalog()
    return {str(code): qualified.rsplit(".", 1)[-1] for qualified, code in catalog.items()}


def _load_documented_codes(doc_path: Path) -> dict[str, str]:
    """Return ``{code: exception name}`` from the documentation table.

    Raises:
        FileNotFoundError: If the documentation file is missing.
    """
    if not doc_path.exists():
        msg = f"documentation missing: {doc_path}"
        raise FileNotFoundError(msg)
    content = doc_path.read_text(encoding="utf-8")
    return {code: name for code, name in _ROW_PATTERN.findall(content)}


def _discover_duplicates(codes: Iterable[str]) -> set[str]:
    seen: set[str] = set()
    duplicates: set[str] = set()
    for code in codes:
        if code in seen:
            duplicates.add(code)
        seen.add(code)
    return duplicates


def compare(registry: Mapping[str, str], documented: Mapping[str, str]) -> list[str]:
    """Return one problem description per mismatch; empty when in sync."""
    problems: list[str] = []
    missing = sorted(set(registry) - set(documented))
    orphaned = sorted(set(documented) - set(registry))
    if missing:
        problems.append("missing codes in docs: " + ", ".join(missing))
    if orphaned:
        problems.append("unknown codes in docs: " + ", ".join(orphaned))
    problems.extend(
        f"{code} is documented as {documented[code]} but registered for {registry[code]}"
        for code in sorted(set(registry) & set(documented))
        if registry[code] != documented[code]
    )
    return problems


def main(argv: Sequence[str] | None = None) -> int:
    """Validate that the error-code registry matches the public docs.

    Returns:
        ``0`` when registry and documentation agree, ``1`` otherwise.
    """
    parser = argparse.ArgumentParser(description=__doc__)
    _ = parser.add_argument("--docs", type=Path, default=DEFAULT_DOC_PATH, help="Exceptions guide to check.")
    args = parser.parse_args(list(argv) if argv is not None else [])

    try:
        registry = _load_error_codes(REPO_ROOT / "src")
    except (ImportError, RuntimeError) as exc:
        _emit(str(exc), error=True)
        return 1

    try:
        documented = _load_documented_codes(args.docs)
    except FileNotFoundError as exc:
        _emit(str(exc), error=True)
        return 1

    duplicates = _discover_duplicates(registry.values())
    problems = compare(registry, documented)
    if duplicates:
        problems.insert(0, "exception names registered twice: " + ", ".join(sorted(duplicates)))

    if problems:
        for line in problems:
            _emit(line, error=True)
        return 1

    _emit("error code registry and documentation are in sync")
    return 0


if __name__ == "__main__":  # pragma: no cover - manual invocation
    raise SystemExit(main(sys.argv[1:]))
