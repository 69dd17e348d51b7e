"""Language registry.

Pure data describing each supported language: lexical fingerprints used
for detection, and the surface conventions (terminator, block style,
literal spellings, indent unit) the engine and post-processor rely on.

Adding a language means adding one LanguageSpec here and, per rule
category, a recognizer and an emitter; missing rule branches fall back to
a pass-unchanged rewrite with a warning.
"""
import re
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import List, Mapping, Optional, Pattern, Tuple, Union

from codeshift_mcp.constants import LanguageDefaults
from codeshift_mcp.core.exceptions import UnknownLanguageError
from codeshift_mcp.models.transformation import BlockStyle, Language, LogicStyle

_BRACE_OPEN = r"\{\s*$"
_BRACE_CONTINUE = r"^\}.*\{\s*$"


@dataclass(frozen=True)
class LanguageSpec:
    """Lexical and surface-syntax description of one language.

    Attributes:
        language: Registry key
        display_name: Human-readable name
        extensions: File extensions, primary first
        comment_prefixes: Markers that start a comment running to end of line
        terminator: Statement terminator, or None when the language has none
        block_style: How nested blocks are delimited
        indent_unit: One level of indentation in re-leveled output
        true_literal / false_literal / null_literal: Literal spellings
        logic_style: Preferred spelling of logical operators
        else_if_keyword: Spelling of the else-if chain keyword
        quote_chars: String delimiters
        char_literals: Whether single quotes denote character literals
        top_level_declaration: Line every file must start with, if any
        top_level_pattern: Regex detecting an existing top-level declaration
        block_open: Regex matching a trimmed line that opens a block
        block_continue: Regex matching a trimmed line that closes and reopens
        block_close: Token that closes a block on its own line
        fingerprints: Indicator patterns for mixed-language scoring
        detection_patterns: (pattern, weight) pairs for single-language guess
    """
    language: Language
    display_name: str
    extensions: Tuple[str, ...]
    comment_prefixes: Tuple[str, ...]
    terminator: Optional[str]
    block_style: BlockStyle
    indent_unit: str
    true_literal: str
    false_literal: str
    null_literal: str
    logic_style: LogicStyle
    else_if_keyword: str
    quote_chars: str = "\"'"
    char_literals: bool = False
    top_level_declaration: Optional[str] = None
    top_level_pattern: Optional[str] = None
    block_open: str = _BRACE_OPEN
    block_continue: str = _BRACE_CONTINUE
    block_close: Optional[str] = "}"
    fingerprints: Tuple[str, ...] = field(default_factory=tuple)
    detection_patterns: Tuple[Tuple[str, int], ...] = field(default_factory=tuple)

    @property
    def name(self) -> str:
        return self.language.value

    @property
    def uses_braces(self) -> bool:
        return self.block_style == BlockStyle.BRACE

    @property
    def line_comment(self) -> str:
        return self.comment_prefixes[0]

    def opens_block(self, trimmed: str) -> bool:
        return bool(re.search(self.block_open, trimmed))

    def continues_block(self, trimmed: str) -> bool:
        return bool(re.search(self.block_continue, trimmed))

    def closes_block(self, trimmed: str) -> bool:
        return self.block_close is not None and trimmed == self.block_close

    def is_comment(self, trimmed: str) -> bool:
        if trimmed.startswith(self.comment_prefixes):
            return True
        if not self.uses_braces:
            return False
        return trimmed.startswith(("/*", "*/", "* ")) or trimmed == "*"


_SPECS: Tuple[LanguageSpec, ...] = (
    LanguageSpec(
        language=Language.PYTHON,
        display_name="Python",
        extensions=(".py", ".pyi"),
        comment_prefixes=("#",),
        terminator=None,
        block_style=BlockStyle.INDENT,
        indent_unit="    ",
        true_literal="True",
        false_literal="False",
        null_literal="None",
        logic_style=LogicStyle.WORD,
        else_if_keyword="elif",
        block_open=r":\s*$",
        block_continue=r"^(?:elif|else|except|finally)\b",
        block_close=None,
        fingerprints=(
            r"^\s*(?:async\s+)?def\s+\w+\s*\(",
            r"^\s*(?:if|elif|else|for|while|def|class|try|except|finally|with)\b.*:\s*$",
            r"^\s*elif\b",
            r"\bprint\s*\(",
            r"\bself\.",
            r"^\s*from\s+[\w.]+\s+import\b",
            r"\b(?:True|False|None)\b",
        ),
        detection_patterns=(
            (r"^\s*(?:async\s+)?def\s+\w+\s*\(", 3),
            (r"^\s*elif\b", 3),
            (r"^\s*(?:if|for|while|def|class|try|except|with)\b.*:\s*$", 2),
            (r"^\s*(?:from\s+[\w.]+\s+)?import\s+\w+\s*$", 1),
            (r"\bprint\s*\(", 1),
            (r"\bself\.", 1),
            (r"\b(?:True|False|None)\b", 1),
        ),
    ),
    LanguageSpec(
        language=Language.JAVASCRIPT,
        display_name="JavaScript",
        extensions=(".js", ".jsx", ".mjs", ".cjs"),
        comment_prefixes=("//",),
        terminator=";",
        block_style=BlockStyle.BRACE,
        indent_unit="  ",
        true_literal="true",
        false_literal="false",
        null_literal="null",
        logic_style=LogicStyle.SYMBOL,
        else_if_keyword="else if",
        quote_chars="\"'`",
        fingerprints=(
            r"\bfunction\b",
            r"\bconsole\.log\s*\(",
            r"^\s*(?:const|let|var)\s+\w+",
            r"=>",
            r"===|!==",
            r"\{\s*$",
            r";\s*$",
        ),
        detection_patterns=(
            (r"\bfunction\b", 2),
            (r"\bconsole\.log\s*\(", 3),
            (r"^\s*(?:const|let|var)\s+\w+", 2),
            (r"=>", 2),
            (r"===|!==", 1),
        ),
    ),
    LanguageSpec(
        language=Language.TYPESCRIPT,
        display_name="TypeScript",
        extensions=(".ts", ".tsx"),
        comment_prefixes=("//",),
        terminator=";",
        block_style=BlockStyle.BRACE,
        indent_unit="  ",
        true_literal="true",
        false_literal="false",
        null_literal="null",
        logic_style=LogicStyle.SYMBOL,
        else_if_keyword="else if",
        quote_chars="\"'`",
        fingerprints=(
            r":\s*(?:string|number|boolean|any|void|unknown)\b",
            r"^\s*(?:export\s+)?interface\s+\w+",
            r"^\s*(?:export\s+)?type\s+\w+\s*=",
        ),
        detection_patterns=(
            (r":\s*(?:string|number|boolean|any|void|unknown)\b", 3),
            (r"^\s*(?:export\s+)?interface\s+\w+", 3),
            (r"^\s*(?:export\s+)?type\s+\w+\s*=", 2),
        ),
    ),
    LanguageSpec(
        language=Language.JAVA,
        display_name="Java",
        extensions=(".java",),
        comment_prefixes=("//",),
        terminator=";",
        block_style=BlockStyle.BRACE,
        indent_unit="    ",
        true_literal="true",
        false_literal="false",
        null_literal="null",
        logic_style=LogicStyle.SYMBOL,
        else_if_keyword="else if",
        char_literals=True,
        fingerprints=(
            r"\bSystem\.out\.print",
            r"\bpublic\s+(?:static\s+)?(?:final\s+)?(?:class|void|int|String)\b",
            r"\bString\[\]",
            r"^\s*import\s+java\.",
        ),
        detection_patterns=(
            (r"\bSystem\.out\.print", 3),
            (r"\bpublic\s+(?:static\s+)?(?:final\s+)?(?:class|void|int|String)\b", 3),
            (r"\bprivate\s+(?:static\s+)?\w+\s+\w+", 1),
            (r"\bString\[\]", 1),
        ),
    ),
    LanguageSpec(
        language=Language.CPP,
        display_name="C++",
        extensions=(".cpp", ".hpp", ".cc", ".cxx", ".h"),
        comment_prefixes=("//",),
        terminator=";",
        block_style=BlockStyle.BRACE,
        indent_unit="    ",
        true_literal="true",
        false_literal="false",
        null_literal="nullptr",
        logic_style=LogicStyle.SYMBOL,
        else_if_keyword="else if",
        char_literals=True,
        fingerprints=(
            r"^\s*#include\s*[<\"]",
            r"\bstd::",
            r"\bcout\s*<<",
            r"\bnullptr\b",
        ),
        detection_patterns=(
            (r"^\s*#include\s*[<\"]", 4),
            (r"\bstd::", 3),
            (r"\bcout\s*<<", 2),
            (r"\bnullptr\b", 1),
        ),
    ),
    LanguageSpec(
        language=Language.GO,
        display_name="Go",
        extensions=(".go",),
        comment_prefixes=("//",),
        terminator=None,
        block_style=BlockStyle.BRACE,
        indent_unit="\t",
        true_literal="true",
        false_literal="false",
        null_literal="nil",
        logic_style=LogicStyle.SYMBOL,
        else_if_keyword="else if",
        quote_chars="\"'`",
        char_literals=True,
        top_level_declaration="package main",
        top_level_pattern=r"^\s*package\s+\w+",
        fingerprints=(
            r"^\s*package\s+\w+",
            r"\bfunc\s+\w+\s*\(",
            r":=",
            r"\bfmt\.\w+\s*\(",
        ),
        detection_patterns=(
            (r"^\s*package\s+\w+", 3),
            (r"\bfunc\s+(?:\([^)]*\)\s*)?\w+\s*\(", 3),
            (r":=", 2),
            (r"\bfmt\.\w+\s*\(", 2),
        ),
    ),
    LanguageSpec(
        language=Language.RUST,
        display_name="Rust",
        extensions=(".rs",),
        comment_prefixes=("//",),
        terminator=";",
        block_style=BlockStyle.BRACE,
        indent_unit="    ",
        true_literal="true",
        false_literal="false",
        null_literal="None",
        logic_style=LogicStyle.SYMBOL,
        else_if_keyword="else if",
        quote_chars="\"",
        char_literals=True,
        fingerprints=(
            r"\bfn\s+\w+\s*[(<]",
            r"\blet\s+mut\b",
            r"\bprintln!\s*\(",
            r"^\s*impl\b",
        ),
        detection_patterns=(
            (r"\bfn\s+\w+\s*[(<]", 3),
            (r"\blet\s+mut\b", 3),
            (r"\bprintln!\s*\(", 3),
            (r"^\s*impl\b", 1),
        ),
    ),
    LanguageSpec(
        language=Language.CSHARP,
        display_name="C#",
        extensions=(".cs",),
        comment_prefixes=("//",),
        terminator=";",
        block_style=BlockStyle.BRACE,
        indent_unit="    ",
        true_literal="true",
        false_literal="false",
        null_literal="null",
        logic_style=LogicStyle.SYMBOL,
        else_if_keyword="else if",
        char_literals=True,
        fingerprints=(
            r"^\s*using\s+System\b",
            r"\bConsole\.Write(?:Line)?\s*\(",
            r"^\s*namespace\s+[\w.]+",
        ),
        detection_patterns=(
            (r"^\s*using\s+System\b", 3),
            (r"\bConsole\.Write(?:Line)?\s*\(", 3),
            (r"^\s*namespace\s+[\w.]+", 2),
        ),
    ),
    LanguageSpec(
        language=Language.PHP,
        display_name="PHP",
        extensions=(".php",),
        comment_prefixes=("//", "#"),
        terminator=";",
        block_style=BlockStyle.BRACE,
        indent_unit="    ",
        true_literal="true",
        false_literal="false",
        null_literal="null",
        logic_style=LogicStyle.MIXED,
        else_if_keyword="elseif",
        top_level_declaration="<?php",
        top_level_pattern=r"^\s*<\?php",
        fingerprints=(
            r"<\?php",
            r"\$\w+\s*=",
            r"^\s*echo\s+",
            r"\$this->",
        ),
        detection_patterns=(
            (r"<\?php", 5),
            (r"\$\w+\s*=", 2),
            (r"^\s*echo\s+", 2),
            (r"\$this->", 2),
        ),
    ),
    LanguageSpec(
        language=Language.RUBY,
        display_name="Ruby",
        extensions=(".rb",),
        comment_prefixes=("#",),
        terminator=None,
        block_style=BlockStyle.KEYWORD,
        indent_unit="  ",
        true_literal="true",
        false_literal="false",
        null_literal="nil",
        logic_style=LogicStyle.MIXED,
        else_if_keyword="elsif",
        block_open=(
            r"^(?:def|class|module|if|unless|while|until|for|begin|case)\b"
            r"|\bdo(?:\s*\|[^|]*\|)?\s*$"
        ),
        block_continue=r"^(?:elsif|else|rescue|ensure|when)\b",
        block_close="end",
        fingerprints=(
            r"^\s*end\s*$",
            r"^\s*puts\s+",
            r"^\s*elsif\b",
            r"\bdo\s*\|\w+",
            r"^\s*require(?:_relative)?\s+['\"]",
        ),
        detection_patterns=(
            (r"^\s*end\s*$", 2),
            (r"^\s*puts\s+", 3),
            (r"^\s*elsif\b", 3),
            (r"\bdo\s*\|\w+", 2),
            (r"^\s*require(?:_relative)?\s+['\"]", 1),
        ),
    ),
)

REGISTRY: Mapping[Language, LanguageSpec] = MappingProxyType({spec.language: spec for spec in _SPECS})

# Tie-break order for the single-language guess
DETECTION_PRIORITY: Tuple[Language, ...] = (
    Language.PYTHON,
    Language.GO,
    Language.RUST,
    Language.CPP,
    Language.JAVA,
    Language.CSHARP,
    Language.TYPESCRIPT,
    Language.PHP,
    Language.RUBY,
    Language.JAVASCRIPT,
)

DEFAULT_LANGUAGE = Language(LanguageDefaults.DEFAULT_LANGUAGE)

_COMPILED_FINGERPRINTS: Mapping[Language, Tuple[Pattern[str], ...]] = MappingProxyType({
    spec.language: tuple(re.compile(p, re.MULTILINE) for p in spec.fingerprints) for spec in _SPECS
})

_COMPILED_DETECTION: Mapping[Language, Tuple[Tuple[Pattern[str], int], ...]] = MappingProxyType({
    spec.language: tuple((re.compile(p, re.MULTILINE), w) for p, w in spec.detection_patterns) for spec in _SPECS
})


def lookup_language(identifier: Optional[str]) -> Optional[Language]:
    """Look up a language without falling back.

    Returns:
        Language, or None when the identifier is not registered
    """
    return Language.from_identifier(identifier)


def resolve_language(identifier: Optional[str], strict: bool = False) -> Language:
    """Resolve an identifier to a registered language.

    Args:
        identifier: Language name or alias (case-insensitive)
        strict: Raise instead of falling back to the default language

    Returns:
        Matching Language, or the default language for unknown identifiers

    Raises:
        UnknownLanguageError: If strict and the identifier is not registered
    """
    language = Language.from_identifier(identifier)
    if language is not None:
        return language
    if strict:
        raise UnknownLanguageError(str(identifier))
    return DEFAULT_LANGUAGE


def get_language_spec(language: Union[Language, str, None]) -> LanguageSpec:
    """Return the spec for a language, falling back to the default language."""
    if not isinstance(language, Language):
        language = resolve_language(language)
    return REGISTRY[language]


def list_languages() -> List[str]:
    """Return registered language identifiers in registry order."""
    return [spec.name for spec in _SPECS]


def fingerprint_patterns(language: Language) -> Tuple[Pattern[str], ...]:
    return _COMPILED_FINGERPRINTS[language]


def detection_patterns(language: Language) -> Tuple[Tuple[Pattern[str], int], ...]:
    return _COMPILED_DETECTION[language]
