"""Text scanning helpers for line-oriented rewriting.

These helpers implement a minimal per-line lexical scan: they know where
string literals and trailing comments start so that regex rules can be
applied to code spans only. They are not a tokenizer; unterminated strings
simply extend to the end of the line.
"""

import re
from typing import Callable, List, Optional, Sequence, Tuple

__all__ = [
    "CODE",
    "STRING",
    "COMMENT",
    "leading_whitespace",
    "split_code_segments",
    "rewrite_code_segments",
    "split_trailing_comment",
    "count_in_code",
    "find_call",
    "split_top_level",
    "unwrap_parens",
    "has_top_level_colon",
]

CODE = "code"
STRING = "string"
COMMENT = "comment"

DEFAULT_QUOTES = "\"'`"

_OPENERS = "([{"
_CLOSERS = ")]}"


def leading_whitespace(line: str) -> str:
    """Return the indentation prefix of a line."""
    return line[: len(line) - len(line.lstrip())]


def _comment_prefix_at(line: str, index: int, comment_prefixes: Sequence[str]) -> Optional[str]:
    for prefix in comment_prefixes:
        if line.startswith(prefix, index):
            return prefix
    return None


def split_code_segments(
    line: str,
    comment_prefixes: Sequence[str] = ("#", "//"),
    quote_chars: str = DEFAULT_QUOTES,
) -> List[Tuple[str, str]]:
    """Split a line into code, string and comment segments.

    Args:
        line: Single line of source text
        comment_prefixes: Markers that start a comment running to end of line
        quote_chars: Characters that open and close string literals

    Returns:
        List of (kind, text) tuples whose texts concatenate back to the line
    """
    segments: List[Tuple[str, str]] = []
    buf: List[str] = []
    quote: Optional[str] = None
    i = 0
    n = len(line)

    while i < n:
        ch = line[i]
        if quote is None:
            if _comment_prefix_at(line, i, comment_prefixes):
                if buf:
                    segments.append((CODE, "".join(buf)))
                segments.append((COMMENT, line[i:]))
                return segments
            if ch in quote_chars:
                if buf:
                    segments.append((CODE, "".join(buf)))
                buf = [ch]
                quote = ch
            else:
                buf.append(ch)
            i += 1
            continue

        buf.append(ch)
        if ch == "\\" and i + 1 < n:
            buf.append(line[i + 1])
            i += 2
            continue
        if ch == quote:
            segments.append((STRING, "".join(buf)))
            buf = []
            quote = None
        i += 1

    if buf:
        segments.append((STRING if quote else CODE, "".join(buf)))
    return segments


def rewrite_code_segments(
    line: str,
    rewrite: Callable[[str], str],
    comment_prefixes: Sequence[str] = ("#", "//"),
    quote_chars: str = DEFAULT_QUOTES,
) -> str:
    """Apply a rewrite function to the code segments of a line only.

    Args:
        line: Single line of source text
        rewrite: Function applied to each code segment
        comment_prefixes: Comment markers for the scan
        quote_chars: String delimiters for the scan

    Returns:
        Line with code segments rewritten, literals and comments untouched
    """
    parts = []
    for kind, text in split_code_segments(line, comment_prefixes, quote_chars):
        parts.append(rewrite(text) if kind == CODE else text)
    return "".join(parts)


def split_trailing_comment(
    line: str,
    comment_prefixes: Sequence[str] = ("#", "//"),
    quote_chars: str = DEFAULT_QUOTES,
) -> Tuple[str, str]:
    """Separate a trailing comment from the code before it.

    Returns:
        Tuple of (code, comment); comment is "" when the line has none
    """
    segments = split_code_segments(line, comment_prefixes, quote_chars)
    if segments and segments[-1][0] == COMMENT:
        return "".join(text for _, text in segments[:-1]), segments[-1][1]
    return line, ""


def count_in_code(
    line: str,
    token: str,
    comment_prefixes: Sequence[str] = ("#", "//"),
    quote_chars: str = DEFAULT_QUOTES,
) -> int:
    """Count occurrences of a token outside string literals and comments."""
    return sum(
        text.count(token)
        for kind, text in split_code_segments(line, comment_prefixes, quote_chars)
        if kind == CODE
    )


def _matching_close(text: str, open_index: int, quote_chars: str = DEFAULT_QUOTES) -> Optional[int]:
    """Index of the bracket closing the one at open_index, or None."""
    depth = 0
    quote: Optional[str] = None
    i = open_index
    while i < len(text):
        ch = text[i]
        if quote is not None:
            if ch == "\\":
                i += 2
                continue
            if ch == quote:
                quote = None
        elif ch in quote_chars:
            quote = ch
        elif ch in _OPENERS:
            depth += 1
        elif ch in _CLOSERS:
            depth -= 1
            if depth == 0:
                return i
        i += 1
    return None


def find_call(line: str, callee: str) -> Optional[Tuple[int, int, str]]:
    """Locate a call expression and its balanced argument text.

    Args:
        line: Line to search
        callee: Regex for the callee name (the open paren is matched here)

    Returns:
        Tuple of (start, end, args) where line[start:end] is the whole call,
        or None when no complete call is found
    """
    match = re.search(rf"(?<![\w.]){callee}\s*\(", line)
    if not match:
        return None
    open_index = match.end() - 1
    close_index = _matching_close(line, open_index)
    if close_index is None:
        return None
    return match.start(), close_index + 1, line[open_index + 1:close_index]


def split_top_level(text: str, separator: str = ",") -> List[str]:
    """Split on a separator that is not nested in brackets or strings."""
    parts: List[str] = []
    depth = 0
    quote: Optional[str] = None
    current: List[str] = []
    i = 0
    while i < len(text):
        ch = text[i]
        if quote is not None:
            current.append(ch)
            if ch == "\\" and i + 1 < len(text):
                current.append(text[i + 1])
                i += 2
                continue
            if ch == quote:
                quote = None
        elif ch in DEFAULT_QUOTES:
            quote = ch
            current.append(ch)
        elif ch in _OPENERS:
            depth += 1
            current.append(ch)
        elif ch in _CLOSERS:
            depth -= 1
            current.append(ch)
        elif ch == separator and depth == 0:
            parts.append("".join(current).strip())
            current = []
        else:
            current.append(ch)
        i += 1
    tail = "".join(current).strip()
    if tail or parts:
        parts.append(tail)
    return parts


def unwrap_parens(expr: str) -> str:
    """Drop one pair of parentheses that wraps the whole expression."""
    stripped = expr.strip()
    if stripped.startswith("(") and _matching_close(stripped, 0) == len(stripped) - 1:
        return stripped[1:-1].strip()
    return stripped


def has_top_level_colon(text: str) -> bool:
    """True when a colon appears outside brackets and string literals."""
    return len(split_top_level(text, ":")) > 1
