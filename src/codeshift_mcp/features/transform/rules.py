"""Rule table for the substitution engine.

Rules are keyed by (category, source, target). Structural categories pair
the source's recognizers with the target's emitters; token categories
(booleans, operators, endings) are whole-token rewrites over the code
spans of a line. The table is built once at import and never mutated.
"""

import re
from dataclasses import dataclass
from types import MappingProxyType
from typing import Callable, Dict, List, Mapping, Optional, Tuple, Union

from codeshift_mcp.features.transform.emitters import (
    RuleContext,
    get_emitter,
    is_header_line,
    needs_terminator,
    no_equivalent_warning,
)
from codeshift_mcp.features.transform.recognizers import (
    CATEGORIES,
    STRUCTURAL_CATEGORIES,
    Construct,
    Recognizer,
    recognizers_for,
)
from codeshift_mcp.features.transform.registry import REGISTRY
from codeshift_mcp.models.transformation import Language, LogicStyle
from codeshift_mcp.utils.text import rewrite_code_segments

# Languages whose equality operators distinguish strict comparison
_STRICT_EQUALITY = frozenset({Language.JAVASCRIPT, Language.TYPESCRIPT, Language.PHP})

# Spelling of the current-instance receiver, when a language has one
_RECEIVERS: Mapping[Language, str] = MappingProxyType({
    Language.PYTHON: "self.",
    Language.RUBY: "self.",
    Language.RUST: "self.",
    Language.JAVASCRIPT: "this.",
    Language.TYPESCRIPT: "this.",
    Language.JAVA: "this.",
    Language.CSHARP: "this.",
    Language.CPP: "this->",
    Language.PHP: "$this->",
})


@dataclass(frozen=True)
class RuleOutcome:
    """Result of applying one rule to one line."""
    text: str
    warnings: Tuple[str, ...] = ()
    construct: Optional[Construct] = None


def _code_only(line: str, ctx: RuleContext, rewrite: Callable[[str], str]) -> str:
    return rewrite_code_segments(line, rewrite, (), ctx.source.quote_chars)


# =============================================================================
# Token Rewrites
# =============================================================================

def rewrite_literals(line: str, ctx: RuleContext) -> str:
    """Rewrite true/false/null literal spellings, whole tokens only."""
    source, target = ctx.source, ctx.target
    mapping: Dict[str, str] = {
        source.true_literal: target.true_literal,
        source.false_literal: target.false_literal,
        source.null_literal: target.null_literal,
    }
    if source.language in (Language.JAVASCRIPT, Language.TYPESCRIPT):
        mapping["undefined"] = target.null_literal
    mapping = {old: new for old, new in mapping.items() if old != new}
    if not mapping:
        return line
    pattern = re.compile(r"(?<![\w$.])(" + "|".join(re.escape(old) for old in mapping) + r")(?![\w$])")
    return _code_only(line, ctx, lambda segment: pattern.sub(lambda m: mapping[m.group(1)], segment))


def _words_to_symbols(segment: str, source: Language, strict: bool) -> str:
    if source == Language.PYTHON:
        segment = re.sub(r"(?<![\w$])is\s+not(?![\w$])", "!==" if strict else "!=", segment)
        segment = re.sub(r"(?<![\w$])is(?![\w$])", "===" if strict else "==", segment)
    segment = re.sub(r"(?<![\w$])and(?![\w$])", "&&", segment)
    segment = re.sub(r"(?<![\w$])or(?![\w$])", "||", segment)
    return re.sub(r"(?<![\w$])not\s+(?!in\b)", "!", segment)


def _symbols_to_words(segment: str) -> str:
    segment = segment.replace("!==", "!=").replace("===", "==")
    for symbol, word in (("&&", "and"), (r"\|\|", "or")):
        segment = re.sub(rf"^([ \t]*){symbol}[ \t]*", rf"\1{word} ", segment)
        segment = re.sub(rf"(?<=\S)[ \t]*{symbol}[ \t]*(?=\S|$)", f" {word} ", segment)
    return re.sub(r"(?<![\w)\]'\"!=<>])!(?!=)\s*", "not ", segment)


def rewrite_operators(line: str, ctx: RuleContext) -> str:
    """Rewrite logical operators and strict equality, whole tokens only."""
    source, target = ctx.source.language, ctx.target.language
    source_style, target_style = ctx.source.logic_style, ctx.target.logic_style
    strict = target in _STRICT_EQUALITY

    if target_style == LogicStyle.WORD and source_style != LogicStyle.WORD:
        return _code_only(line, ctx, _symbols_to_words)
    if target_style != LogicStyle.WORD and source_style != LogicStyle.SYMBOL:
        line = _code_only(line, ctx, lambda segment: _words_to_symbols(segment, source, strict))
    if source in _STRICT_EQUALITY and not strict:
        line = _code_only(line, ctx, lambda segment: segment.replace("!==", "!=").replace("===", "=="))
    return line


def rewrite_endings(line: str, ctx: RuleContext) -> str:
    """Append the target's statement terminator where one is required."""
    if ctx.target.terminator and needs_terminator(line):
        return line.rstrip() + ctx.target.terminator
    return line


def rewrite_identifiers(line: str, ctx: RuleContext) -> str:
    """Swap instance receivers and strip PHP variable sigils."""
    old = _RECEIVERS.get(ctx.source.language)
    new = _RECEIVERS.get(ctx.target.language)
    if old and new and old != new and old in line:
        pattern = re.compile(r"(?<![\w$])" + re.escape(old))
        line = _code_only(line, ctx, lambda segment: pattern.sub(new, segment))
    if ctx.source.language == Language.PHP and ctx.target.language != Language.PHP:
        member = "->" if ctx.target.language == Language.CPP else "."
        line = _code_only(
            line,
            ctx,
            lambda segment: re.sub(r"\$(?=[A-Za-z_])", "", segment.replace("->", member)),
        )
    return line


_TOKEN_REWRITES: Mapping[str, Callable[[str, RuleContext], str]] = MappingProxyType({
    "booleans": rewrite_literals,
    "operators": rewrite_operators,
    "endings": rewrite_endings,
})


# =============================================================================
# Rules
# =============================================================================

@dataclass(frozen=True)
class RewriteRule:
    """Structural rule: source recognizers feeding target emitters."""
    category: str
    source: Language
    target: Language
    recognizers: Tuple[Recognizer, ...]
    after: Optional[Callable[[str, RuleContext], str]] = None

    def apply(self, line: str, ctx: RuleContext) -> RuleOutcome:
        outcome = self._match(line, ctx)
        if self.after is not None:
            return RuleOutcome(self.after(outcome.text, ctx), outcome.warnings, outcome.construct)
        return outcome

    def _match(self, line: str, ctx: RuleContext) -> RuleOutcome:
        if self.category == "variables" and is_header_line(line):
            return RuleOutcome(line)
        for recognizer in self.recognizers:
            construct = recognizer.recognize(line)
            if construct is None:
                continue
            emitter = get_emitter(construct.kind, self.target)
            if emitter is None:
                return RuleOutcome(line, (no_equivalent_warning(construct.kind, ctx.target),), construct)
            emission = emitter(construct, ctx)
            if construct.span is not None:
                start, end = construct.span
                text = line[:start] + emission.text + line[end:]
            else:
                text = construct.indent + emission.text if emission.text else ""
            return RuleOutcome(text, emission.warnings, construct)
        return RuleOutcome(line)


@dataclass(frozen=True)
class TokenRule:
    """Token rule applied to every line of a pair."""
    category: str
    source: Language
    target: Language
    rewrite: Callable[[str, RuleContext], str]

    def apply(self, line: str, ctx: RuleContext) -> RuleOutcome:
        return RuleOutcome(self.rewrite(line, ctx))


Rule = Union[RewriteRule, TokenRule]


def _build_rules() -> Mapping[Tuple[str, Language, Language], Rule]:
    rules: Dict[Tuple[str, Language, Language], Rule] = {}
    for source in Language:
        for target in Language:
            if source == target:
                continue
            for category in STRUCTURAL_CATEGORIES:
                recognizers = recognizers_for(category, source)
                after = rewrite_identifiers if category == "variables" else None
                if recognizers or after:
                    rules[(category, source, target)] = RewriteRule(category, source, target, recognizers, after)
            for category, rewrite in _TOKEN_REWRITES.items():
                rules[(category, source, target)] = TokenRule(category, source, target, rewrite)
    return MappingProxyType(rules)


RULES = _build_rules()


def rules_for(source: Language, target: Language) -> List[Rule]:
    """Rules for a pair in application order."""
    return [RULES[(category, source, target)] for category in CATEGORIES if (category, source, target) in RULES]


def is_supported_pair(source: Optional[Language], target: Optional[Language]) -> bool:
    """True when a rule set exists for the pair (identity always counts)."""
    if source is None or target is None:
        return False
    if source == target:
        return True
    return any(
        isinstance(RULES.get((category, source, target)), RewriteRule) and RULES[(category, source, target)].recognizers
        for category in STRUCTURAL_CATEGORIES
    )


def make_context(source: Language, target: Language) -> RuleContext:
    """Fresh per-call rule context."""
    return RuleContext(source=REGISTRY[source], target=REGISTRY[target])
