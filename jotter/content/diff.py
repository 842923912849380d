"""
Word-level diff between two plain-text extractions.

Both texts are split into alternating word and whitespace tokens, the
longest common subsequence of the two token lists is computed with the
classic dynamic-programming table, and the table is walked back from the
bottom-right corner to produce an edit script. Whitespace tokens are kept so
that either side can be rebuilt exactly from the segments.
"""
import re
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Sequence

_TOKEN_RE = re.compile(r"(\s+)")


class DiffType(str, Enum):
    UNCHANGED = "unchanged"
    ADDED = "added"
    REMOVED = "removed"


@dataclass(frozen=True)
class DiffSegment:
    type: DiffType
    text: str


def tokenize(text: str) -> List[str]:
    return [token for token in _TOKEN_RE.split(text) if token]


def _lcs_table(old: Sequence[str], new: Sequence[str]) -> List[List[int]]:
    m, n = len(old), len(new)
    dp = [[0] * (n + 1) for _ in range(m + 1)]
    for i in range(1, m + 1):
        row, prev_row = dp[i], dp[i - 1]
        old_token = old[i - 1]
        for j in range(1, n + 1):
            if old_token == new[j - 1]:
                row[j] = prev_row[j - 1] + 1
            else:
                row[j] = max(prev_row[j], row[j - 1])
    return dp


def _coalesce(steps: Sequence[DiffSegment]) -> List[DiffSegment]:
    segments: List[DiffSegment] = []
    for step in steps:
        if segments and segments[-1].type is step.type:
            segments[-1] = DiffSegment(step.type, segments[-1].text + step.text)
        else:
            segments.append(step)
    return segments


def diff_texts(old_text: str, new_text: str) -> List[DiffSegment]:
    """Return the coalesced edit script turning ``old_text`` into ``new_text``.

    On ties the backtrack prefers emitting the new token as ``added`` over
    emitting the old token as ``removed``.
    """
    old = tokenize(old_text)
    new = tokenize(new_text)
    dp = _lcs_table(old, new)

    steps: List[DiffSegment] = []
    i, j = len(old), len(new)
    while i > 0 or j > 0:
        if i > 0 and j > 0 and old[i - 1] == new[j - 1]:
            steps.append(DiffSegment(DiffType.UNCHANGED, old[i - 1]))
            i -= 1
            j -= 1
        elif j > 0 and (i == 0 or dp[i][j - 1] >= dp[i - 1][j]):
            steps.append(DiffSegment(DiffType.ADDED, new[j - 1]))
            j -= 1
        else:
            steps.append(DiffSegment(DiffType.REMOVED, old[i - 1]))
            i -= 1

    steps.reverse()
    return _coalesce(steps)


def old_side(segments: Sequence[DiffSegment]) -> str:
    return "".join(s.text for s in segments if s.type is not DiffType.ADDED)


def new_side(segments: Sequence[DiffSegment]) -> str:
    return "".join(s.text for s in segments if s.type is not DiffType.REMOVED)


def summarize_diff(segments: Sequence[DiffSegment]) -> Dict[str, int]:
    """Count words per segment type."""
    summary = {t.value: 0 for t in DiffType}
    for segment in segments:
        summary[segment.type.value] += len(segment.text.split())
    return summary
