"""Input normalization.

Cleans whitespace and line endings, flags mixed-language input and applies
a fixed sequence of heuristic auto-corrections for malformed control
structures. Every correction is a pure function over the list of lines and
preserves the line count, so changed lines can be reported by index.
"""

import re
from typing import Callable, List, Optional, Sequence, Tuple

from codeshift_mcp.constants import WarningPrefixes
from codeshift_mcp.core.logging import get_logger
from codeshift_mcp.features.transform.detection import detect_mixed_languages
from codeshift_mcp.features.transform.registry import LanguageSpec, REGISTRY, lookup_language
from codeshift_mcp.models.transformation import BlockStyle, LogicStyle, NormalizationResult
from codeshift_mcp.utils.text import (
    CODE,
    STRING,
    has_top_level_colon,
    rewrite_code_segments,
    split_code_segments,
    split_trailing_comment,
    unwrap_parens,
)

logger = get_logger(__name__)

_FALLBACK_COMMENTS: Tuple[str, ...] = ("#", "//")

Correction = Callable[[List[str], Optional[LanguageSpec], Optional[LanguageSpec]], List[str]]


# =============================================================================
# Header Patterns
# =============================================================================

_ELSE_IF_KEYWORD = re.compile(r"^(\s*(?:\}\s*)?)(elif|elsif|elseif|else\s+if)\b")

# Lines that open a block in an indentation-delimited language
_INDENT_HEADER = re.compile(
    r"^\s*(?:async\s+)?(?:def\s+\w+|class\s+\w+|if\b|elif\b|else\s+if\b|elsif\b|else\b"
    r"|for\b|while\b|try\b|except\b|finally\b|with\b)"
)

# Headers that only Python spells this way, used when the source is unknown
_PYTHON_ONLY_HEADERS: Tuple[re.Pattern, ...] = (
    re.compile(r"^\s*(?:async\s+)?def\s+\w+\s*\(.*\)\s*(?:->\s*[^:{]+)?$"),
    re.compile(r"^\s*elif\b"),
    re.compile(r"^\s*for\s+\w+(?:\s*,\s*\w+)*\s+in\s+"),
    re.compile(r"^\s*except\b"),
    re.compile(r"^\s*(?:if|while)\s+(?!\()"),
)

# Parenthesized brace-language headers: the parens must close the line
_PAREN_HEADER = re.compile(r"^\s*(?:\}\s*)?(?:else\s+)?(?:if|for|while|switch|catch)\s*(?=\()")
_FUNCTION_HEADER = re.compile(r"^\s*(?:export\s+)?(?:async\s+)?function\b[^{;]*\)$")
_BARE_BLOCK_HEADER = re.compile(r"^\s*(?:\}\s*)?(?:else|try|finally|do)$")
_CLASS_HEADER = re.compile(
    r"^\s*(?:(?:public|private|protected|abstract|final|static|export)\s+)*class\s+\w+[^{;]*$"
)
_METHOD_HEADER = re.compile(
    r"^\s*(?:(?:public|private|protected|static|final|abstract|virtual|override|async)\s+)+"
    r"[\w<>\[\],.?\s]*?\w+\s*\([^;]*\)(?:\s*throws\s+[\w.,\s]+)?$"
)
# Go and Rust headers carry no parentheses around conditions
_PARENLESS_HEADER = re.compile(
    r"^\s*(?:\}\s*)?(?:(?:else\s+)?if\s+\S.*|for\b.*|loop|match\s+\S.*|impl\b.*|struct\s+\w+.*"
    r"|func\s+.*\)(?:\s*[\w\[\]*().,\s]+)?|(?:pub\s+)?fn\s+.*\)(?:\s*->\s*.+)?)$"
)

_PRINT_STATEMENT = re.compile(r"^(\s*)print\s+(?![=(])(\S.*)$")
_DUPLICATE_TERMINATORS = re.compile(r";{2,}")
_FOR_PAREN = re.compile(r"\bfor\s*\(")


def _comment_prefixes(spec: Optional[LanguageSpec]) -> Tuple[str, ...]:
    return spec.comment_prefixes if spec else _FALLBACK_COMMENTS


def _quote_chars(spec: Optional[LanguageSpec]) -> str:
    return spec.quote_chars if spec else "\"'`"


def _is_comment_line(trimmed: str, spec: Optional[LanguageSpec]) -> bool:
    if spec is not None:
        return spec.is_comment(trimmed)
    return trimmed.startswith(_FALLBACK_COMMENTS + ("/*", "*"))


def _next_code_line(lines: Sequence[str], index: int) -> str:
    for line in lines[index + 1:]:
        if line.strip():
            return line.strip()
    return ""


# =============================================================================
# Pre-processing
# =============================================================================

def _tidy_code(segment: str, is_last: bool) -> str:
    segment = re.sub(r"[ \t]+,", ",", segment)
    segment = re.sub(r",[ \t]{2,}(?=\S)", ", ", segment)
    if is_last:
        segment = re.sub(r"(\S)[ \t]+:$", r"\1:", segment)
        segment = re.sub(r"(\S)[ \t]{2,}\{$", r"\1 {", segment)
    return segment


def _preprocess_line(line: str, spec: Optional[LanguageSpec]) -> str:
    segments = split_code_segments(line, _comment_prefixes(spec), _quote_chars(spec))
    parts = []
    for index, (kind, text) in enumerate(segments):
        if kind == CODE:
            text = _tidy_code(text, is_last=index == len(segments) - 1)
        parts.append(text)
    return "".join(parts)


def preprocess(code: str, spec: Optional[LanguageSpec] = None) -> str:
    """Unify line endings, strip trailing whitespace, collapse spacing."""
    text = code.replace("\r\n", "\n").replace("\r", "\n")
    return "\n".join(_preprocess_line(line.rstrip(), spec) for line in text.split("\n"))


# =============================================================================
# Auto-corrections
# =============================================================================

def _correct_else_if(lines: List[str], source: Optional[LanguageSpec], target: Optional[LanguageSpec]) -> List[str]:
    if target is None:
        return lines
    keyword = target.else_if_keyword
    return [_ELSE_IF_KEYWORD.sub(lambda m: m.group(1) + keyword, line, count=1) for line in lines]


def _needs_colon(code: str, source: Optional[LanguageSpec]) -> bool:
    stripped = code.rstrip()
    if not stripped or stripped.endswith((":", "{", "\\", ",", "(", ";", "[")):
        return False
    if source is None:
        if not any(pattern.match(stripped) for pattern in _PYTHON_ONLY_HEADERS):
            return False
    elif not _INDENT_HEADER.match(stripped):
        return False
    return not has_top_level_colon(stripped)


def _correct_missing_colon(lines: List[str], source: Optional[LanguageSpec], target: Optional[LanguageSpec]) -> List[str]:
    if source is not None and source.block_style != BlockStyle.INDENT:
        return lines
    prefixes = _comment_prefixes(source)
    result = []
    for line in lines:
        trimmed = line.strip()
        if not trimmed or _is_comment_line(trimmed, source):
            result.append(line)
            continue
        code, comment = split_trailing_comment(line, prefixes, _quote_chars(source))
        if _needs_colon(code, source):
            stripped = code.rstrip()
            line = stripped + ":" + code[len(stripped):] + comment
        result.append(line)
    return result


def _is_brace_header(stripped: str, source: Optional[LanguageSpec]) -> bool:
    paren = _PAREN_HEADER.match(stripped)
    if paren:
        rest = stripped[paren.end():]
        return unwrap_parens(rest) != rest
    if _FUNCTION_HEADER.match(stripped):
        return True
    if source is None:
        return False
    if _BARE_BLOCK_HEADER.match(stripped) or _CLASS_HEADER.match(stripped) or _METHOD_HEADER.match(stripped):
        return True
    if source.name in ("go", "rust"):
        return bool(_PARENLESS_HEADER.match(stripped))
    return False


def _correct_missing_brace(lines: List[str], source: Optional[LanguageSpec], target: Optional[LanguageSpec]) -> List[str]:
    if source is not None and source.block_style != BlockStyle.BRACE:
        return lines
    prefixes = _comment_prefixes(source)
    result = []
    for index, line in enumerate(lines):
        trimmed = line.strip()
        if not trimmed or _is_comment_line(trimmed, source):
            result.append(line)
            continue
        code, comment = split_trailing_comment(line, prefixes, _quote_chars(source))
        stripped = code.rstrip()
        if (
            not stripped.endswith(("{", ";", "}", ","))
            and not _next_code_line(lines, index).startswith("{")
            and _is_brace_header(stripped, source)
        ):
            line = stripped + " {" + code[len(stripped):] + comment
        result.append(line)
    return result


def _unify_quote_segment(text: str) -> str:
    if len(text) < 2 or text[0] != "'" or text[-1] != "'":
        return text
    inner = text[1:-1]
    if '"' in inner or "#{" in inner or "$" in inner:
        return text
    return '"' + inner.replace("\\'", "'") + '"'


def _correct_quotes(lines: List[str], source: Optional[LanguageSpec], target: Optional[LanguageSpec]) -> List[str]:
    if source is not None and source.char_literals:
        return lines
    prefixes = _comment_prefixes(source)
    quotes = _quote_chars(source)
    result = []
    for line in lines:
        trimmed = line.strip()
        if "'" not in line or _is_comment_line(trimmed, source):
            result.append(line)
            continue
        parts = [
            _unify_quote_segment(text) if kind == STRING else text
            for kind, text in split_code_segments(line, prefixes, quotes)
        ]
        result.append("".join(parts))
    return result


def _correct_duplicate_terminators(lines: List[str], source: Optional[LanguageSpec], target: Optional[LanguageSpec]) -> List[str]:
    prefixes = _comment_prefixes(source)
    quotes = _quote_chars(source)
    result = []
    for line in lines:
        if ";;" not in line or _FOR_PAREN.search(line):
            result.append(line)
            continue
        result.append(rewrite_code_segments(line, lambda seg: _DUPLICATE_TERMINATORS.sub(";", seg), prefixes, quotes))
    return result


def _to_words(segment: str) -> str:
    for symbol, word in (("&&", "and"), (r"\|\|", "or")):
        segment = re.sub(rf"^([ \t]*){symbol}[ \t]*", rf"\1{word} ", segment)
        segment = re.sub(rf"(?<=\S)[ \t]*{symbol}[ \t]*(?=\S|$)", f" {word} ", segment)
    return segment


def _to_symbols(segment: str) -> str:
    segment = re.sub(r"(?<=\S)[ \t]+and[ \t]+(?=\S)", " && ", segment)
    return re.sub(r"(?<=\S)[ \t]+or[ \t]+(?=\S)", " || ", segment)


def _correct_logical_operators(lines: List[str], source: Optional[LanguageSpec], target: Optional[LanguageSpec]) -> List[str]:
    if source is None or source.logic_style == LogicStyle.MIXED:
        return lines
    rewrite = _to_words if source.logic_style == LogicStyle.WORD else _to_symbols
    prefixes = source.comment_prefixes
    result = []
    for line in lines:
        if _is_comment_line(line.strip(), source):
            result.append(line)
            continue
        result.append(rewrite_code_segments(line, rewrite, prefixes, source.quote_chars))
    return result


def _correct_print_statement(lines: List[str], source: Optional[LanguageSpec], target: Optional[LanguageSpec]) -> List[str]:
    if source is None or source.name != "python":
        return lines
    result = []
    for line in lines:
        code, comment = split_trailing_comment(line, source.comment_prefixes, source.quote_chars)
        stripped = code.rstrip()
        match = _PRINT_STATEMENT.match(stripped)
        if match:
            line = f"{match.group(1)}print({match.group(2)})" + code[len(stripped):] + comment
        result.append(line)
    return result


# Applied in order; keyword correction runs before colon/brace correction
CORRECTIONS: Tuple[Tuple[str, str, Correction], ...] = (
    ("else_if_keyword", "unified else-if keyword", _correct_else_if),
    ("print_statement", "converted print statement to call", _correct_print_statement),
    ("missing_colon", "added missing colon", _correct_missing_colon),
    ("missing_brace", "added missing brace", _correct_missing_brace),
    ("quotes", "unified string quotes", _correct_quotes),
    ("duplicate_terminators", "collapsed duplicate terminators", _correct_duplicate_terminators),
    ("logical_operators", "unified logical operators", _correct_logical_operators),
)


def _changed_lines(before: Sequence[str], after: Sequence[str]) -> List[int]:
    return [index + 1 for index, (old, new) in enumerate(zip(before, after)) if old != new]


def normalize_code(
    code: str,
    source_language: Optional[str] = None,
    target_language: Optional[str] = None,
) -> NormalizationResult:
    """Clean up raw input and auto-correct malformed block syntax.

    Args:
        code: Raw input text
        source_language: Declared source language; enables source-specific
            corrections. Unknown or missing values restrict corrections to
            unambiguous cases.
        target_language: Target language; enables else-if keyword correction

    Returns:
        NormalizationResult with the normalized text, warnings and the names
        of the corrections that changed something
    """
    source_id = lookup_language(source_language)
    target_id = lookup_language(target_language)
    source = REGISTRY[source_id] if source_id else None
    target = REGISTRY[target_id] if target_id else None

    warnings: List[str] = []
    corrections: List[str] = []

    report = detect_mixed_languages(code)
    if report.detected:
        warnings.append(f"{WarningPrefixes.MIXED}: {', '.join(report.languages)}")

    lines = preprocess(code, source).split("\n")
    for name, description, correct in CORRECTIONS:
        corrected = correct(lines, source, target)
        changed = _changed_lines(lines, corrected)
        if changed:
            corrections.append(name)
            numbers = ", ".join(str(n) for n in changed)
            warnings.append(f"{WarningPrefixes.NORMALIZING}: {description} (lines {numbers})")
            lines = corrected

    normalized = "\n".join(lines)
    if corrections:
        logger.debug("normalization_applied", corrections=corrections, source_language=source_language)

    return NormalizationResult(
        normalized=normalized,
        warnings=warnings,
        corrections=corrections,
        mixed_report=report,
    )
