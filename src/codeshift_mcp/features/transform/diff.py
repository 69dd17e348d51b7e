"""Index-aligned line comparison.

Lines at the same index are compared for equality only; this is not an
LCS diff, so a single inserted line marks every following line changed.
"""

import re
from typing import Dict, List

from codeshift_mcp.models.transformation import LineClassification, LineDiff

_LINE_BREAK = re.compile(r"\r\n|\r|\n")


def split_lines(text: str) -> List[str]:
    """Split text on any line ending; an empty text is one empty line."""
    return _LINE_BREAK.split(text)


def compute_line_diff(before: str, after: str) -> List[LineDiff]:
    """Compare two texts line by line.

    Args:
        before: Original text
        after: Transformed text

    Returns:
        One LineDiff per index up to the longer text. Indices past the end
        of ``before`` are ``added``; past the end of ``after``, ``removed``.
    """
    before_lines = split_lines(before)
    after_lines = split_lines(after)
    result: List[LineDiff] = []

    for index in range(max(len(before_lines), len(after_lines))):
        old = before_lines[index] if index < len(before_lines) else None
        new = after_lines[index] if index < len(after_lines) else None
        if old is None:
            classification = LineClassification.ADDED
        elif new is None:
            classification = LineClassification.REMOVED
        elif old == new:
            classification = LineClassification.UNCHANGED
        else:
            classification = LineClassification.CHANGED
        result.append(LineDiff(
            line_number=index + 1,
            classification=classification,
            before_line=old,
            after_line=new,
        ))
    return result


def summarize_diff(entries: List[LineDiff]) -> Dict[str, int]:
    """Count diff entries per classification."""
    counts = {classification.value: 0 for classification in LineClassification if classification != LineClassification.WARNING}
    for entry in entries:
        counts[entry.classification.value] += 1
    return counts
