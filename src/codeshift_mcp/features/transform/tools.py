"""MCP tool definitions for code transformation features.

This module registers MCP tools for:
- transform_code: Rewrite code from one language into another
- detect_language: Guess the language of a snippet
- detect_mixed_languages: Report every language a snippet shows signs of
- build_structural_summary: Indentation-based outline of a snippet
- compute_line_diff: Index-aligned line comparison of two texts
- list_supported_languages: Registered languages and their conventions
"""
import time
from typing import Any, Dict, List, Optional

import sentry_sdk
from mcp.server.fastmcp import FastMCP
from pydantic import Field

from codeshift_mcp.core.config import get_config
from codeshift_mcp.core.logging import get_logger
from codeshift_mcp.features.transform.detection import detect_language as detect_language_impl
from codeshift_mcp.features.transform.detection import detect_mixed_languages as detect_mixed_languages_impl
from codeshift_mcp.features.transform.diff import compute_line_diff as compute_line_diff_impl
from codeshift_mcp.features.transform.diff import summarize_diff
from codeshift_mcp.features.transform.orchestrator import transform
from codeshift_mcp.features.transform.registry import REGISTRY
from codeshift_mcp.features.transform.rules import is_supported_pair
from codeshift_mcp.features.transform.streaming import iter_code_chunks
from codeshift_mcp.features.transform.structure import build_structural_summary as build_structural_summary_impl
from codeshift_mcp.models.transformation import (
    LineDiff,
    LineTransformation,
    MixedLanguageReport,
    StructuralNode,
    TransformationResult,
)


# =============================================================================
# Response Formatting Helpers
# =============================================================================

def _format_line(line: LineTransformation) -> Dict[str, Any]:
    """Format a single line transformation."""
    return {
        "line_number": line.line_number,
        "original": line.original,
        "transformed": line.transformed,
        "warnings": line.warnings,
        "classification": line.classification.value,
    }


def _format_node(node: StructuralNode) -> Dict[str, Any]:
    """Format a structural node and its children."""
    return {
        "type": node.type,
        "name": node.name,
        "line_start": node.line_start,
        "line_end": node.line_end,
        "content": node.content,
        "children": [_format_node(child) for child in node.children],
    }


def _format_mixed_report(report: MixedLanguageReport) -> Dict[str, Any]:
    return {
        "detected": report.detected,
        "languages": report.languages,
        "confidence": report.confidence,
        "scores": report.scores,
    }


def _format_diff_entry(entry: LineDiff) -> Dict[str, Any]:
    return {
        "line_number": entry.line_number,
        "classification": entry.classification.value,
        "before_line": entry.before_line,
        "after_line": entry.after_line,
    }


def _format_transformation_result(result: TransformationResult, include_structure: bool) -> Dict[str, Any]:
    """Format transform_code result."""
    stats = result.statistics
    formatted: Dict[str, Any] = {
        "code": result.code,
        "original": result.original,
        "source_language": result.source_language,
        "target_language": result.target_language,
        "lines": [_format_line(line) for line in result.lines],
        "warnings": result.warnings,
        "errors": result.errors,
        "statistics": {
            "functions_detected": stats.functions_detected,
            "classes_detected": stats.classes_detected,
            "imports_detected": stats.imports_detected,
            "lines_transformed": stats.lines_transformed,
            "mixed_language_detected": stats.mixed_language_detected,
            "normalization_applied": stats.normalization_applied,
        },
    }
    if include_structure:
        formatted["structure"] = [_format_node(node) for node in result.structure]
    return formatted


def _check_input_size(code: str) -> None:
    """Reject snippets larger than the configured limit."""
    limit = get_config().max_input_chars
    if len(code) > limit:
        raise ValueError(f"Input is {len(code)} characters; the limit is {limit}")


# =============================================================================
# Tool Implementations
# =============================================================================

def transform_code_tool(
    code: str,
    target_language: Optional[str] = None,
    source_language: Optional[str] = "auto",
    stream: bool = False,
) -> Dict[str, Any]:
    """
    Transform a code snippet from one language into another.

    The transformation is rule-based and line-oriented: function and class
    headers, conditionals, loops, exception handling, print calls, imports,
    variable declarations, literals, logical operators and statement
    terminators are rewritten into the target's surface syntax. It is not a
    compiler; the output is a starting point, and every substitution the
    target cannot express directly is reported in ``warnings``.

    **Supported Languages:**
    Python, JavaScript, TypeScript, Java, C++, Go, Rust, C#, PHP, Ruby

    Args:
        code: Source code to transform
        target_language: Target language (defaults to the configured default)
        source_language: Source language, or "auto" to detect it
        stream: Also return the output as delta events for incremental display

    Returns:
        Dictionary containing:
        - code: Transformed code
        - lines: Per-line original/transformed pairs with classifications
        - warnings: Deduplicated warnings
        - errors: Non-empty for unsupported pairs or internal failures
        - statistics: Counts of recognized constructs and changed lines
        - structure: Structural summary of the output (when enabled)
        - events: Delta events (when stream is True)

    Example usage:
        result = transform_code(
            code="def greet(name):\\n    print(name)",
            source_language="python",
            target_language="javascript"
        )
    """
    logger = get_logger("tool.transform_code")
    start_time = time.time()
    config = get_config()
    target_language = target_language or config.default_target_language

    logger.info(
        "tool_invoked",
        tool="transform_code",
        source_language=source_language,
        target_language=target_language,
        code_length=len(code),
    )

    try:
        _check_input_size(code)
        result = transform(code, source_language, target_language)
        formatted = _format_transformation_result(result, config.include_structure)
        if stream:
            formatted["events"] = list(iter_code_chunks(result.code, config.stream_chunk_size))

        execution_time = time.time() - start_time
        logger.info(
            "tool_completed",
            tool="transform_code",
            execution_time_seconds=round(execution_time, 3),
            lines_transformed=result.statistics.lines_transformed,
            warning_count=len(result.warnings),
            error_count=len(result.errors),
        )
        return formatted

    except Exception as e:
        execution_time = time.time() - start_time
        logger.error(
            "tool_failed",
            tool="transform_code",
            execution_time_seconds=round(execution_time, 3),
            error=str(e)[:200],
        )
        sentry_sdk.capture_exception(e)
        raise


def detect_language_tool(code: str) -> Dict[str, Any]:
    """
    Guess the language of a code snippet.

    Scoring is a weighted keyword/pattern match per language; ties go to a
    fixed priority order, and a snippet with no matches is reported as
    javascript.

    Args:
        code: Code snippet to inspect

    Returns:
        Dictionary containing:
        - language: Best-guess language identifier
    """
    logger = get_logger("tool.detect_language")
    logger.info("tool_invoked", tool="detect_language", code_length=len(code))

    try:
        _check_input_size(code)
        language = detect_language_impl(code)
        logger.info("tool_completed", tool="detect_language", language=language)
        return {"language": language}

    except Exception as e:
        logger.error("tool_failed", tool="detect_language", error=str(e)[:200])
        sentry_sdk.capture_exception(e)
        raise


def detect_mixed_languages_tool(code: str) -> Dict[str, Any]:
    """
    Report whether a snippet shows indicators of more than one language.

    Args:
        code: Code snippet to inspect

    Returns:
        Dictionary containing:
        - detected: True when more than one language scored
        - languages: Scoring languages, highest score first
        - confidence: Coarse advisory confidence (0.9 single, 0.5 mixed, 0.0 none)
        - scores: Indicator hits per language
    """
    logger = get_logger("tool.detect_mixed_languages")
    logger.info("tool_invoked", tool="detect_mixed_languages", code_length=len(code))

    try:
        _check_input_size(code)
        report = detect_mixed_languages_impl(code)
        logger.info(
            "tool_completed",
            tool="detect_mixed_languages",
            detected=report.detected,
            languages=report.languages,
        )
        return _format_mixed_report(report)

    except Exception as e:
        logger.error("tool_failed", tool="detect_mixed_languages", error=str(e)[:200])
        sentry_sdk.capture_exception(e)
        raise


def build_structural_summary_tool(code: str, language: str = "auto") -> Dict[str, Any]:
    """
    Build an outline of a snippet's functions, classes and control blocks.

    Nesting is inferred from indentation, so irregularly indented code can
    produce a mis-parented node. Line numbers are 0-indexed.

    Args:
        code: Code snippet to outline
        language: Language of the snippet, or "auto" to detect it

    Returns:
        Dictionary containing:
        - language: Language used for the outline
        - nodes: Top-level nodes with nested children
        - node_count: Total number of nodes
    """
    logger = get_logger("tool.build_structural_summary")
    logger.info("tool_invoked", tool="build_structural_summary", language=language)

    try:
        _check_input_size(code)
        if not language or language.lower() == "auto":
            language = detect_language_impl(code)
        nodes = build_structural_summary_impl(code, language)
        formatted = [_format_node(node) for node in nodes]
        node_count = _count_nodes(nodes)
        logger.info("tool_completed", tool="build_structural_summary", node_count=node_count)
        return {"language": language, "nodes": formatted, "node_count": node_count}

    except Exception as e:
        logger.error("tool_failed", tool="build_structural_summary", error=str(e)[:200])
        sentry_sdk.capture_exception(e)
        raise


def _count_nodes(nodes: List[StructuralNode]) -> int:
    return sum(1 + _count_nodes(node.children) for node in nodes)


def compute_line_diff_tool(before: str, after: str) -> Dict[str, Any]:
    """
    Compare two texts line by line at equal indices.

    This is not an LCS diff: lines are compared only with the line at the
    same index in the other text.

    Args:
        before: Original text
        after: Changed text

    Returns:
        Dictionary containing:
        - entries: One entry per line index with classification
        - summary: Count of entries per classification
    """
    logger = get_logger("tool.compute_line_diff")
    logger.info("tool_invoked", tool="compute_line_diff", before_length=len(before), after_length=len(after))

    try:
        _check_input_size(before)
        _check_input_size(after)
        entries = compute_line_diff_impl(before, after)
        summary = summarize_diff(entries)
        logger.info("tool_completed", tool="compute_line_diff", **summary)
        return {
            "entries": [_format_diff_entry(entry) for entry in entries],
            "summary": summary,
        }

    except Exception as e:
        logger.error("tool_failed", tool="compute_line_diff", error=str(e)[:200])
        sentry_sdk.capture_exception(e)
        raise


def list_supported_languages_tool() -> Dict[str, Any]:
    """
    List registered languages with their syntax conventions.

    Returns:
        Dictionary containing:
        - languages: One entry per language with name, extensions, block
          style, terminator and supported targets
        - default_target_language: Target used when a call omits one
    """
    logger = get_logger("tool.list_supported_languages")
    logger.info("tool_invoked", tool="list_supported_languages")

    languages = []
    for language, spec in REGISTRY.items():
        languages.append({
            "language": spec.name,
            "display_name": spec.display_name,
            "extensions": list(spec.extensions),
            "block_style": spec.block_style.value,
            "terminator": spec.terminator,
            "comment_prefixes": list(spec.comment_prefixes),
            "targets": [other.value for other in REGISTRY if other != language and is_supported_pair(language, other)],
        })

    logger.info("tool_completed", tool="list_supported_languages", count=len(languages))
    return {
        "languages": languages,
        "default_target_language": get_config().default_target_language,
    }


# =============================================================================
# Tool Registration
# =============================================================================

def _create_mcp_field_definitions():
    """Create field definitions for MCP tool registration."""
    return {
        'transform_code': {
            'code': Field(description="Source code to transform"),
            'target_language': Field(default=None, description="Target language (python, javascript, typescript, java, cpp, go, rust, csharp, php, ruby)"),
            'source_language': Field(default="auto", description="Source language, or 'auto' to detect it"),
            'stream': Field(default=False, description="Also return the output as delta events"),
        },
        'detect_language': {
            'code': Field(description="Code snippet to inspect"),
        },
        'detect_mixed_languages': {
            'code': Field(description="Code snippet to inspect"),
        },
        'build_structural_summary': {
            'code': Field(description="Code snippet to outline"),
            'language': Field(default="auto", description="Language of the snippet, or 'auto' to detect it"),
        },
        'compute_line_diff': {
            'before': Field(description="Original text"),
            'after': Field(description="Changed text"),
        },
    }


def register_transform_tools(mcp: FastMCP) -> None:
    """Register all code transformation tools with MCP server.

    Args:
        mcp: FastMCP server instance
    """
    fields = _create_mcp_field_definitions()

    @mcp.tool()
    def transform_code(
        code: str = fields['transform_code']['code'],
        target_language: Optional[str] = fields['transform_code']['target_language'],
        source_language: Optional[str] = fields['transform_code']['source_language'],
        stream: bool = fields['transform_code']['stream'],
    ) -> Dict[str, Any]:
        """Transform a code snippet from one language into another."""
        return transform_code_tool(
            code=code,
            target_language=target_language,
            source_language=source_language,
            stream=stream,
        )

    @mcp.tool()
    def detect_language(
        code: str = fields['detect_language']['code'],
    ) -> Dict[str, Any]:
        """Guess the language of a code snippet."""
        return detect_language_tool(code=code)

    @mcp.tool()
    def detect_mixed_languages(
        code: str = fields['detect_mixed_languages']['code'],
    ) -> Dict[str, Any]:
        """Report whether a snippet shows indicators of more than one language."""
        return detect_mixed_languages_tool(code=code)

    @mcp.tool()
    def build_structural_summary(
        code: str = fields['build_structural_summary']['code'],
        language: str = fields['build_structural_summary']['language'],
    ) -> Dict[str, Any]:
        """Build an outline of a snippet's functions, classes and control blocks."""
        return build_structural_summary_tool(code=code, language=language)

    @mcp.tool()
    def compute_line_diff(
        before: str = fields['compute_line_diff']['before'],
        after: str = fields['compute_line_diff']['after'],
    ) -> Dict[str, Any]:
        """Compare two texts line by line at equal indices."""
        return compute_line_diff_tool(before=before, after=after)

    @mcp.tool()
    def list_supported_languages() -> Dict[str, Any]:
        """List registered languages with their syntax conventions."""
        return list_supported_languages_tool()
