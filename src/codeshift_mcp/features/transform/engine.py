"""Line-by-line substitution engine.

Each non-blank, non-comment line is passed through the rules for the
(source, target) pair in category order. The engine never parses: a
line no rule matches comes out as it went in.
"""

from dataclasses import dataclass, field
from typing import List, Tuple

from codeshift_mcp.core.logging import get_logger
from codeshift_mcp.features.transform.emitters import RuleContext
from codeshift_mcp.features.transform.recognizers import Construct
from codeshift_mcp.features.transform.rules import Rule, make_context, rules_for
from codeshift_mcp.models.transformation import Language
from codeshift_mcp.utils.text import leading_whitespace, split_trailing_comment

logger = get_logger(__name__)

_IMPORT_KINDS = frozenset({"import_module", "import_names"})
_LOOP_KINDS = frozenset({"for_range", "for_each", "for_counted"})


@dataclass(frozen=True)
class RewrittenLine:
    """One line after rule substitution.

    Attributes:
        text: Rewritten line
        warnings: Warnings raised by the rules for this line
        kinds: Construct kinds recognized on this line
    """
    text: str
    warnings: Tuple[str, ...] = ()
    kinds: Tuple[str, ...] = ()


@dataclass(frozen=True)
class EngineResult:
    lines: List[RewrittenLine] = field(default_factory=list)
    functions: int = 0
    classes: int = 0
    imports: int = 0

    @property
    def code(self) -> str:
        return "\n".join(line.text for line in self.lines)


def _remember_names(construct: Construct, ctx: RuleContext) -> None:
    """Record names bound by headers so later assignments reassign."""
    if construct.kind == "function":
        for param in construct.get("params", []):
            ctx.declared.add(param.partition(" = ")[0].strip().lstrip("*&$"))
    elif construct.kind in _LOOP_KINDS:
        for name in str(construct.get("var", "")).split(","):
            if name.strip():
                ctx.declared.add(name.strip())


def _comment_marker(comment: str, ctx: RuleContext) -> str:
    for prefix in ctx.source.comment_prefixes:
        if comment.startswith(prefix):
            return prefix
    return ""


def _reattach_comment(text: str, gap: str, comment: str, ctx: RuleContext, indent: str) -> str:
    body = comment[len(_comment_marker(comment, ctx)):]
    translated = ctx.target.line_comment + body
    if not text.strip():
        return indent + translated
    return text + (gap or " ") + translated


def rewrite_line(line: str, rules: List[Rule], ctx: RuleContext) -> RewrittenLine:
    """Apply every rule to one line.

    Blank lines and whole-line source comments pass through unchanged.
    A trailing comment is split off before the rules run and re-attached
    with the target's comment marker.

    Args:
        line: Normalized input line
        rules: Rules for the pair, in category order
        ctx: Per-call rule context (mutated as names are declared)

    Returns:
        RewrittenLine with text, warnings and recognized kinds
    """
    trimmed = line.strip()
    if not trimmed or ctx.source.is_comment(trimmed):
        return RewrittenLine(line)

    code, comment = split_trailing_comment(line, ctx.source.comment_prefixes, ctx.source.quote_chars)
    stripped = code.rstrip()
    gap = code[len(stripped):]

    text = stripped
    warnings: List[str] = []
    kinds: List[str] = []
    for rule in rules:
        outcome = rule.apply(text, ctx)
        text = outcome.text
        warnings.extend(outcome.warnings)
        if outcome.construct is not None:
            kinds.append(outcome.construct.kind)
            _remember_names(outcome.construct, ctx)

    if comment:
        text = _reattach_comment(text, gap, comment, ctx, leading_whitespace(line))
    return RewrittenLine(text, tuple(warnings), tuple(kinds))


def rewrite_code(code: str, source: Language, target: Language) -> EngineResult:
    """Rewrite every line of normalized code for a supported pair.

    Args:
        code: Normalized source text
        source: Source language
        target: Target language

    Returns:
        EngineResult with one RewrittenLine per input line
    """
    rules = rules_for(source, target)
    ctx = make_context(source, target)
    lines = [rewrite_line(line, rules, ctx) for line in code.split("\n")]

    kinds = [kind for line in lines for kind in line.kinds]
    result = EngineResult(
        lines=lines,
        functions=kinds.count("function"),
        classes=kinds.count("class"),
        imports=sum(1 for kind in kinds if kind in _IMPORT_KINDS),
    )
    logger.debug(
        "rules_applied",
        source_language=source.value,
        target_language=target.value,
        rule_count=len(rules),
        lines=len(lines),
    )
    return result
