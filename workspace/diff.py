"""Line diff used to preview a proposed section change."""

from dataclasses import dataclass, field
from typing import List


@dataclass
class DiffResult:
    added: List[str] = field(default_factory=list)
    removed: List[str] = field(default_factory=list)
    unchanged: List[str] = field(default_factory=list)

    @property
    def has_changes(self) -> bool:
        return bool(self.added or self.removed)


def simple_diff(before: str, after: str) -> DiffResult:
    """Compare two texts line by line with a one-line look-ahead.

    Not a minimal edit script: a line is treated as inserted or deleted
    only when the very next line on the other side realigns the two.
    """
    before_lines = before.split("\n")
    after_lines = after.split("\n")
    result = DiffResult()

    i = j = 0
    while i < len(before_lines) or j < len(after_lines):
        if i >= len(before_lines):
            result.added.append(after_lines[j])
            j += 1
        elif j >= len(after_lines):
            result.removed.append(before_lines[i])
            i += 1
        elif before_lines[i] == after_lines[j]:
            result.unchanged.append(before_lines[i])
            i += 1
            j += 1
        elif i + 1 < len(before_lines) and before_lines[i + 1] == after_lines[j]:
            result.removed.append(before_lines[i])
            i += 1
        elif j + 1 < len(after_lines) and before_lines[i] == after_lines[j + 1]:
            result.added.append(after_lines[j])
            j += 1
        else:
            result.removed.append(before_lines[i])
            result.added.append(after_lines[j])
            i += 1
            j += 1

    return result


def format_diff(diff: DiffResult) -> str:
    """Removed lines, then added, then unchanged, each with a two-char marker."""
    lines = [f"- {line}" for line in diff.removed]
    lines += [f"+ {line}" for line in diff.added]
    lines += [f"  {line}" for line in diff.unchanged]
    return "\n".join(lines)
