"""Line-level diffs between two strings for failure messages."""

from __future__ import annotations

from dataclasses import dataclass
from difflib import SequenceMatcher
from enum import Enum


class DiffOp(str, Enum):
    CONTEXT = "context"
    ADD = "add"
    REMOVE = "remove"


@dataclass(frozen=True)
class DiffLine:
    op: DiffOp
    text: str

    def render(self) -> str:
        if self.op is DiffOp.ADD:
            return f"+{self.text}"
        if self.op is DiffOp.REMOVE:
            return f"-{self.text}"
        return self.text


def _split(text: str) -> list[str]:
    return text.split("\n")


def diff_lines(expected: str, actual: str) -> list[DiffLine]:
    """Full edit script turning ``expected`` into ``actual``, line by line."""
    old = _split(expected)
    new = _split(actual)
    lines: list[DiffLine] = []
    matcher = SequenceMatcher(None, old, new, autojunk=False)
    for tag, i1, i2, j1, j2 in matcher.get_opcodes():
        if tag == "equal":
            lines.extend(DiffLine(DiffOp.CONTEXT, line) for line in old[i1:i2])
            continue
        if tag in ("replace", "delete"):
            lines.extend(DiffLine(DiffOp.REMOVE, line) for line in old[i1:i2])
        if tag in ("replace", "insert"):
            lines.extend(DiffLine(DiffOp.ADD, line) for line in new[j1:j2])
    return lines


def _hunk_range(start: int, length: int) -> str:
    if length == 1:
        return f"{start + 1}"
    if length == 0:
        return f"{start},0"
    return f"{start + 1},{length}"


def unified_diff(expected: str, actual: str, context: int = 3) -> str:
    """Render a unified diff of two strings.

    Removed lines are prefixed ``-``, added lines ``+`` and context lines are
    left as they are. Identical inputs produce an empty string.
    """
    old = _split(expected)
    new = _split(actual)
    matcher = SequenceMatcher(None, old, new, autojunk=False)

    out: list[str] = []
    for group in matcher.get_grouped_opcodes(context):
        if not out:
            out.extend(["--- Expected", "+++ Actual"])
        first, last = group[0], group[-1]
        old_range = _hunk_range(first[1], last[2] - first[1])
        new_range = _hunk_range(first[3], last[4] - first[3])
        out.append(f"@@ -{old_range} +{new_range} @@")
        for tag, i1, i2, j1, j2 in group:
            if tag == "equal":
                out.extend(DiffLine(DiffOp.CONTEXT, line).render() for line in old[i1:i2])
                continue
            if tag in ("replace", "delete"):
                out.extend(DiffLine(DiffOp.REMOVE, line).render() for line in old[i1:i2])
            if tag in ("replace", "insert"):
                out.extend(DiffLine(DiffOp.ADD, line).render() for line in new[j1:j2])
    return "\n".join(out)
