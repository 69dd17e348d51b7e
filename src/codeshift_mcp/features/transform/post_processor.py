"""Structural fix-ups after rule substitution.

Rule substitution works one line at a time, so block delimiters need a
second pass over the whole output:

1. Close blocks implied by indentation when the source delimits blocks
   by indentation and the target does not.
2. Balance curly braces for brace targets.
3. Turn lone closing braces into ``end`` and drop opening braces from
   block headers for keyword targets.
4. Re-level indentation from the block structure.
5. Drop terminators the target does not use and prepend any required
   top-level declaration.

Whole-line comment markers are translated before the first pass so the
structural passes see target comments.
"""

import re
from typing import List, Optional, Tuple, Union

from codeshift_mcp.core.logging import get_logger
from codeshift_mcp.features.transform.registry import LanguageSpec, get_language_spec
from codeshift_mcp.models.transformation import BlockStyle, Language
from codeshift_mcp.utils.text import count_in_code, leading_whitespace, split_trailing_comment

logger = get_logger(__name__)

LanguageRef = Union[Language, str]

_UNTERMINATED_TARGETS = frozenset({Language.PYTHON, Language.GO, Language.RUBY})


def _code_of(line: str, spec: LanguageSpec) -> str:
    code, _ = split_trailing_comment(line, spec.comment_prefixes, spec.quote_chars)
    return code.strip()


def _is_comment(trimmed: str, spec: LanguageSpec) -> bool:
    return spec.is_comment(trimmed)


# =============================================================================
# Indentation Closure
# =============================================================================

def close_blocks_by_indent(lines: List[str], target: LanguageSpec) -> List[str]:
    """Insert block closers where indentation drops back.

    Blank lines that precede a dedent are held back so that the closers
    appear directly after the block body.

    Args:
        lines: Rewritten lines whose indentation still follows the source
        target: Target language spec (its ``block_close`` is emitted)

    Returns:
        Lines with closers inserted and any still-open blocks closed at the end
    """
    closer = target.block_close or "}"
    result: List[str] = []
    pending_blank: List[str] = []
    stack: List[Tuple[int, str]] = []

    def close_deeper_than(width: int, inclusive: bool) -> None:
        while stack and (stack[-1][0] > width or (inclusive and stack[-1][0] == width)):
            _, indent = stack.pop()
            result.append(indent + closer)

    for line in lines:
        trimmed = line.strip()
        if not trimmed:
            pending_blank.append(line)
            continue

        indent = leading_whitespace(line)
        width = len(indent)
        code = trimmed if _is_comment(trimmed, target) else _code_of(line, target)
        reopen = False

        if _is_comment(trimmed, target):
            close_deeper_than(width, inclusive=True)
        elif target.continues_block(code):
            close_deeper_than(width, inclusive=False)
            if stack and stack[-1][0] == width:
                stack.pop()
            reopen = True
        elif code == closer or (target.block_style == BlockStyle.KEYWORD and code == "}"):
            close_deeper_than(width, inclusive=False)
            if stack and stack[-1][0] == width:
                stack.pop()
        else:
            close_deeper_than(width, inclusive=True)
            reopen = target.opens_block(code)

        result.extend(pending_blank)
        pending_blank = []
        result.append(line)
        if reopen:
            stack.append((width, indent))

    close_deeper_than(-1, inclusive=False)
    result.extend(pending_blank)
    return result


# =============================================================================
# Brace Balancing
# =============================================================================

def balance_braces(lines: List[str], target: LanguageSpec) -> List[str]:
    """Append missing or remove surplus closing braces.

    Braces inside string literals and comments are ignored. Surplus
    closers are removed from the bottom: whole ``}`` lines first, then
    trailing ``}`` characters.
    """
    opens = sum(count_in_code(line, "{", target.comment_prefixes, target.quote_chars) for line in lines)
    closes = sum(count_in_code(line, "}", target.comment_prefixes, target.quote_chars) for line in lines)
    result = list(lines)

    if opens > closes:
        result.extend("}" for _ in range(opens - closes))
        return result

    surplus = closes - opens
    dropped = set()
    for index in reversed(range(len(result))):
        if surplus and result[index].strip() == "}":
            dropped.add(index)
            surplus -= 1
    result = [line for index, line in enumerate(result) if index not in dropped]

    for index in reversed(range(len(result))):
        if not surplus:
            break
        stripped = result[index].rstrip()
        if not stripped.endswith("}"):
            continue
        while surplus and stripped.endswith("}"):
            stripped = stripped[:-1].rstrip()
            surplus -= 1
        result[index] = stripped
    return result


def _braces_to_end(lines: List[str], target: LanguageSpec) -> List[str]:
    """Turn lone closing braces into ``end`` and drop opening braces from headers."""
    result: List[str] = []
    for line in lines:
        if line.strip() == "}":
            result.append(leading_whitespace(line) + "end")
            continue
        code, comment = split_trailing_comment(line, target.comment_prefixes, target.quote_chars)
        header = code.rstrip()
        if header.endswith("{"):
            bare = header[:-1].rstrip()
            if target.opens_block(bare.strip()) or target.continues_block(bare.strip()):
                line = bare + code[len(header):] + comment
        result.append(line)
    return result


# =============================================================================
# Re-leveling
# =============================================================================

def _relevel_delimited(lines: List[str], target: LanguageSpec) -> List[str]:
    unit = target.indent_unit
    level = 0
    result: List[str] = []

    for line in lines:
        trimmed = line.strip()
        if not trimmed:
            result.append("")
            continue
        if _is_comment(trimmed, target):
            result.append(unit * level + trimmed)
            continue

        code = _code_of(line, target)
        continues = target.continues_block(code)
        closes = target.closes_block(code) or (target.uses_braces and code.startswith("}"))
        if continues or closes:
            level = max(level - 1, 0)
        result.append(unit * level + trimmed)
        if continues or target.opens_block(code):
            level += 1

    return result


def _relevel_indented(lines: List[str], target: LanguageSpec) -> List[str]:
    """Re-level for an indentation-delimited target.

    Braces that close a block are dropped; braces that close a literal
    stay. A block whose body turns out empty gets ``pass``.
    """
    unit = target.indent_unit
    result: List[str] = []
    # Entries: [kind, source width, has_body]
    stack: List[list] = []

    def level() -> int:
        return len(stack)

    def pop_block() -> None:
        entry = stack.pop()
        if entry[0] == "block" and not entry[2]:
            result.append(unit * (level() + 1) + "pass")

    def mark_body() -> None:
        if stack:
            stack[-1][2] = True

    for line in lines:
        trimmed = line.strip()
        if not trimmed:
            result.append("")
            continue
        if _is_comment(trimmed, target):
            result.append(unit * level() + trimmed)
            continue

        width = len(leading_whitespace(line))

        # Leading closers
        while trimmed.startswith("}") and stack:
            kind = stack[-1][0]
            if kind == "literal":
                break
            pop_block()
            trimmed = trimmed[1:].lstrip()
        if trimmed in ("", ";"):
            continue
        code = _code_of(trimmed, target)

        if trimmed == "{":
            continue

        if target.continues_block(code):
            if stack and stack[-1][0] == "block":
                pop_block()
        elif not trimmed.startswith("}"):
            while stack and stack[-1][0] == "block" and width <= stack[-1][1] and stack[-1][2]:
                pop_block()

        if trimmed.startswith("}") and stack and stack[-1][0] == "literal":
            stack.pop()
            result.append(unit * level() + trimmed)
            mark_body()
            continue

        mark_body()
        result.append(unit * level() + trimmed)
        if target.opens_block(code):
            stack.append(["block", width, False])
        elif code.endswith("{"):
            stack.append(["literal", width, True])

    while stack:
        if stack[-1][0] == "literal":
            stack.pop()
            continue
        pop_block()
    return result


def relevel(lines: List[str], target: LanguageSpec) -> List[str]:
    """Recompute indentation from the block structure of the target."""
    if target.block_style == BlockStyle.INDENT:
        return _relevel_indented(lines, target)
    return _relevel_delimited(lines, target)


# =============================================================================
# Cleanup
# =============================================================================

def _strip_terminator(line: str, target: LanguageSpec) -> str:
    code, comment = split_trailing_comment(line, target.comment_prefixes, target.quote_chars)
    stripped = code.rstrip()
    if not stripped.endswith(";") or stripped.strip().startswith("for "):
        return line
    gap = code[len(stripped):]
    stripped = stripped.rstrip(";").rstrip()
    if not stripped.strip():
        return "" if not comment else leading_whitespace(line) + comment
    return stripped + ((gap or " ") + comment if comment else "")


def _translate_comment_marker(line: str, source: LanguageSpec, target: LanguageSpec) -> str:
    trimmed = line.lstrip()
    for marker in source.comment_prefixes:
        if marker in target.comment_prefixes or not trimmed.startswith(marker):
            continue
        rest = trimmed[len(marker):]
        if rest and not rest[0].isspace():
            return line
        return leading_whitespace(line) + target.line_comment + rest
    return line


def translate_comments(lines: List[str], source: LanguageSpec, target: LanguageSpec) -> List[str]:
    """Rewrite whole-line comment markers the target does not use."""
    if source.language == target.language:
        return list(lines)
    return [_translate_comment_marker(line, source, target) for line in lines]


def cleanup(lines: List[str], target: LanguageSpec) -> List[str]:
    """Drop unused terminators and prepend any top-level declaration."""
    result = list(lines)
    if target.language in _UNTERMINATED_TARGETS:
        result = [_strip_terminator(line, target) for line in result]

    declaration = target.top_level_declaration
    if declaration and any(line.strip() for line in result):
        text = "\n".join(result)
        if not re.search(target.top_level_pattern or re.escape(declaration), text, re.MULTILINE):
            result = [declaration, ""] + result
    return result


def post_process(
    code: str,
    target_language: LanguageRef,
    source_language: Optional[LanguageRef] = None,
    close_by_indent: bool = False,
) -> str:
    """Run the structural fix-up passes over rewritten code.

    Args:
        code: Output of the rule engine
        target_language: Target language
        source_language: Source language; enables comment-marker translation
        close_by_indent: Insert closers from indentation first

    Returns:
        Post-processed code
    """
    target = get_language_spec(target_language)
    source = get_language_spec(source_language) if source_language is not None else None
    lines = code.split("\n")

    if source is not None:
        lines = translate_comments(lines, source, target)
    if close_by_indent and target.block_style != BlockStyle.INDENT:
        lines = close_blocks_by_indent(lines, target)
    if target.uses_braces:
        lines = balance_braces(lines, target)
    if target.block_style == BlockStyle.KEYWORD:
        lines = _braces_to_end(lines, target)
    lines = relevel(lines, target)
    lines = cleanup(lines, target)

    logger.debug("post_processed", target_language=target.name, lines=len(lines))
    return "\n".join(lines)
