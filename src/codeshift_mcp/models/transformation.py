"""Data models for the code transformation feature.

This module defines data models for:
- Language identifiers and lookup aliases
- Mixed-language detection reports
- Normalization results
- Per-line transformations and the aggregate transformation result
- Structural-summary nodes
- Line-diff entries
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional


class Language(Enum):
    """Supported languages, in registry order."""
    PYTHON = "python"
    JAVASCRIPT = "javascript"
    TYPESCRIPT = "typescript"
    JAVA = "java"
    CPP = "cpp"
    GO = "go"
    RUST = "rust"
    CSHARP = "csharp"
    PHP = "php"
    RUBY = "ruby"

    @classmethod
    def from_identifier(cls, identifier: Optional[str]) -> Optional["Language"]:
        """Look up a language by name or alias, case-insensitively.

        Args:
            identifier: Language name such as "Python", "c++" or "ts"

        Returns:
            Matching Language, or None when the identifier is not registered
        """
        if not identifier:
            return None
        key = identifier.strip().lower()
        key = LANGUAGE_ALIASES.get(key, key)
        for member in cls:
            if member.value == key:
                return member
        return None


LANGUAGE_ALIASES: Dict[str, str] = {
    "py": "python",
    "python3": "python",
    "js": "javascript",
    "node": "javascript",
    "ts": "typescript",
    "c++": "cpp",
    "cxx": "cpp",
    "golang": "go",
    "rs": "rust",
    "cs": "csharp",
    "c#": "csharp",
    "rb": "ruby",
}


class LineClassification(Enum):
    """How a line changed during transformation or diffing."""
    UNCHANGED = "unchanged"
    CHANGED = "changed"
    ADDED = "added"
    REMOVED = "removed"
    WARNING = "warning"


class BlockStyle(Enum):
    """How a language delimits nested blocks."""
    INDENT = "indent"    # Colon plus indentation (Python)
    BRACE = "brace"      # Curly braces
    KEYWORD = "keyword"  # Opening keyword closed by `end` (Ruby)


class LogicStyle(Enum):
    """Preferred spelling of logical AND/OR/NOT."""
    WORD = "word"      # and / or / not
    SYMBOL = "symbol"  # && / || / !
    MIXED = "mixed"    # Both spellings are idiomatic


# =============================================================================
# Detection and Normalization Models
# =============================================================================

@dataclass(frozen=True)
class MixedLanguageReport:
    """Result of scoring text against every language fingerprint.

    Attributes:
        detected: True when more than one language scored
        languages: Languages with a nonzero score, highest score first
        confidence: Coarse advisory confidence in [0, 1]
        scores: Indicator hit count per scoring language
    """
    detected: bool
    languages: List[str] = field(default_factory=list)
    confidence: float = 0.0
    scores: Dict[str, int] = field(default_factory=dict)


@dataclass(frozen=True)
class NormalizationResult:
    """Result of normalizing raw input.

    Attributes:
        normalized: Cleaned and auto-corrected text
        warnings: Human-readable warnings raised while normalizing
        corrections: Names of the auto-corrections that changed something
        mixed_report: Mixed-language detection report for the raw input
    """
    normalized: str
    warnings: List[str] = field(default_factory=list)
    corrections: List[str] = field(default_factory=list)
    mixed_report: Optional[MixedLanguageReport] = None


# =============================================================================
# Transformation Models
# =============================================================================

@dataclass(frozen=True)
class LineTransformation:
    """One input line's journey through the rule engine.

    Attributes:
        line_number: 1-indexed line number in the input
        original: Line as given by the caller
        transformed: Line after rule substitution
        warnings: Warnings raised while processing this line
        classification: unchanged, changed or warning
    """
    line_number: int
    original: str
    transformed: str
    warnings: List[str] = field(default_factory=list)
    classification: LineClassification = LineClassification.UNCHANGED


@dataclass(frozen=True)
class TransformationStatistics:
    """Summary counts for one transformation call."""
    functions_detected: int = 0
    classes_detected: int = 0
    imports_detected: int = 0
    lines_transformed: int = 0
    mixed_language_detected: bool = False
    normalization_applied: bool = False


@dataclass
class StructuralNode:
    """A recognized construct in the structural summary.

    Nesting follows indentation, not real block matching, so irregular
    indentation can mis-parent a node.

    Attributes:
        type: function, class, if, for, while, import, variable,
            statement, block or comment
        name: Construct name when one can be extracted
        line_start: First line (0-indexed)
        line_end: Last line covered, including children (0-indexed)
        content: Trimmed text of the first line
        children: Nested nodes in source order
    """
    type: str
    line_start: int
    line_end: int
    name: Optional[str] = None
    content: str = ""
    children: List["StructuralNode"] = field(default_factory=list)


@dataclass(frozen=True)
class TransformationResult:
    """Complete result of one transformation call.

    Attributes:
        code: Final transformed code
        original: Code as given by the caller
        source_language: Resolved source language identifier
        target_language: Resolved target language identifier
        lines: Per-line transformations in input order
        warnings: Deduplicated warnings in first-seen order
        errors: Empty unless the pair is unsupported or the call failed
        statistics: Summary counts
        structure: Structural summary of the final code
    """
    code: str
    original: str
    source_language: str
    target_language: str
    lines: List[LineTransformation] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)
    statistics: TransformationStatistics = field(default_factory=TransformationStatistics)
    structure: List[StructuralNode] = field(default_factory=list)


@dataclass(frozen=True)
class LineDiff:
    """One index-aligned comparison entry.

    Attributes:
        line_number: 1-indexed position
        classification: unchanged, changed, added or removed
        before_line: Line from the first text, None past its end
        after_line: Line from the second text, None past its end
    """
    line_number: int
    classification: LineClassification
    before_line: Optional[str]
    after_line: Optional[str]
