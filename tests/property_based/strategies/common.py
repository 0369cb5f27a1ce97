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

"""Hypothesis strategies for Flow reports and buffer headers."""

from __future__ import annotations

from hypothesis import strategies as st

from tests.fixtures.flow_reports import comment_part, flow_error

FLOW_LEVELS = ("error", "warning")
FLOW_KINDS = ("infer", "parse", "lint")

_descr = st.text(alphabet=st.characters(blacklist_categories=("Cs",)), min_size=1, max_size=40)
_position = st.integers(min_value=1, max_value=5000)


@st.composite
def flow_entries(draw: st.DrawFn) -> dict[str, object]:
    """Return one entry of a ``flow check-contents --json`` errors array."""
    comment = draw(st.none() | _descr)
    return flow_error(
        draw(_descr),
        level=draw(st.sampled_from(FLOW_LEVELS)),
        kind=draw(st.sampled_from(FLOW_KINDS)),
        line=draw(_position),
        column=draw(_position),
        extra_parts=[comment_part(comment)] if comment is not None else None,
    )


def coverage_spans(max_size: int = 20) -> st.SearchStrategy[list[tuple[int, int, int, int]]]:
    """Strategy for lists of ``(start_line, start_col, end_line, end_col)`` spans."""
    span = st.tuples(_position, _position, _position, _position)
    return st.lists(span, max_size=max_size)


def flow_tag_lines() -> st.SearchStrategy[str]:
    """First lines that carry the ``@flow`` tag as a line comment."""
    return st.builds(
        lambda slashes, spaces, rest: "/" * slashes + " " * spaces + "@flow" + rest,
        st.integers(min_value=2, max_value=6),
        st.integers(min_value=0, max_value=4),
        st.text(max_size=20),
    )


def untagged_lines() -> st.SearchStrategy[str]:
    """First lines that can never carry the tag because they do not start a comment."""
    return st.text(max_size=40).filter(lambda line: not line.startswith("/"))


def arbitrary_report_text() -> st.SearchStrategy[str]:
    """Noise that a misbehaving Flow server might print instead of JSON."""
    return st.one_of(
        st.text(max_size=80),
        st.just("{}"),
        st.just('{"expressions": {}}'),
        st.just('{"expressions": {"uncovered_locs": [{"start": {}}]}}'),
        st.just("[]"),
    )
