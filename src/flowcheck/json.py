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

"""JSON value types and enum normalisation for machine-readable output.

Kept free of logging, configuration and CLI imports so any module can use it.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from pathlib import PurePath
from typing import TypeAlias, cast

from pydantic import JsonValue

__all__ = [
    "JSONMapping",
    "JSONValue",
    "normalize_enums_for_json",
]

JSONValue: TypeAlias = JsonValue
JSONMapping = dict[str, JsonValue]

_SCALARS = (str, int, float, bool)


def _key(key: object) -> str:
    return str(key.value) if isinstance(key, Enum) else str(key)


def normalize_enums_for_json(value: object) -> JSONValue:
    """Return ``value`` with every enum replaced by its ``.value``.

    Mappings, lists and tuples are walked recursively (mapping keys become
    strings), paths become strings, and any other object falls back to
    ``str()``.
    """
    if isinstance(value, Enum):
        return cast("JSONValue", value.value)
    if value is None or isinstance(value, _SCALARS):
        return cast("JSONValue", value)
    if isinstance(value, Mapping):
        items = cast("Mapping[object, object]", value).items()
        return {_key(key): normalize_enums_for_json(item) for key, item in items}
    if isinstance(value, (list, tuple)):
        return [normalize_enums_for_json(item) for item in cast("list[object]", value)]
    if isinstance(value, PurePath):
        return value.as_posix()
    return str(value)
