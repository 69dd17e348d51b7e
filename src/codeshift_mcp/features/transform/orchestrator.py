"""Transformation orchestrator.

Sequences detection, normalization, rule substitution and post-processing
into one call. ``transform`` never raises for any input: unsupported pairs
and internal failures are reported through the result's error list.
"""

import re
from typing import Iterable, List, Optional, Tuple, Union

import sentry_sdk

from codeshift_mcp.constants import LanguageDefaults, WarningPrefixes
from codeshift_mcp.core.logging import get_logger
from codeshift_mcp.features.transform.detection import detect_language
from codeshift_mcp.features.transform.engine import EngineResult, rewrite_code
from codeshift_mcp.features.transform.normalizer import normalize_code
from codeshift_mcp.features.transform.post_processor import post_process
from codeshift_mcp.features.transform.registry import REGISTRY, lookup_language
from codeshift_mcp.features.transform.rules import is_supported_pair
from codeshift_mcp.features.transform.structure import build_structural_summary
from codeshift_mcp.models.transformation import (
    BlockStyle,
    Language,
    LineClassification,
    LineTransformation,
    TransformationResult,
    TransformationStatistics,
)

logger = get_logger(__name__)

LanguageRef = Union[Language, str, None]

_LINE_BREAK = re.compile(r"\r\n|\r|\n")


def _identifier(language: LanguageRef) -> str:
    if isinstance(language, Language):
        return language.value
    return (language or "").strip().lower()


def _dedupe(warnings: Iterable[str]) -> List[str]:
    seen = set()
    result: List[str] = []
    for warning in warnings:
        if warning not in seen:
            seen.add(warning)
            result.append(warning)
    return result


def _resolve_source(code: str, source_language: LanguageRef) -> str:
    identifier = _identifier(source_language)
    if not identifier or identifier == LanguageDefaults.AUTO_DETECT:
        return detect_language(code)
    return identifier


def _classify(original: str, transformed: str, warnings: List[str]) -> LineClassification:
    if warnings:
        return LineClassification.WARNING
    if transformed != original:
        return LineClassification.CHANGED
    return LineClassification.UNCHANGED


# =============================================================================
# Result Builders
# =============================================================================

def _identity_result(code: str, source_id: str, target_id: str, language: Optional[Language]) -> TransformationResult:
    lines = [
        LineTransformation(line_number=i + 1, original=line, transformed=line)
        for i, line in enumerate(_LINE_BREAK.split(code))
    ]
    return TransformationResult(
        code=code,
        original=code,
        source_language=language.value if language else source_id,
        target_language=language.value if language else target_id,
        lines=lines,
        structure=build_structural_summary(code, language) if language else [],
    )


def _unsupported_result(
    code: str,
    source_id: str,
    target_id: str,
    source: Optional[Language],
    target: Optional[Language],
) -> TransformationResult:
    """Return the input prefixed with a comment naming the unsupported pair."""
    marker_language = target or source
    marker = REGISTRY[marker_language].line_comment if marker_language else "//"
    message = f"{WarningPrefixes.UNSUPPORTED}: {source_id or 'unknown'} -> {target_id or 'unknown'}"

    logger.warning("unsupported_pair", source_language=source_id, target_language=target_id)
    return TransformationResult(
        code=f"{marker} {message}\n{code}",
        original=code,
        source_language=source.value if source else source_id,
        target_language=target.value if target else target_id,
        warnings=[message],
        errors=[message],
        structure=build_structural_summary(code, source) if source else [],
    )


def _failure_result(code: str, source_id: str, target_id: str, error: Exception) -> TransformationResult:
    message = f"Transformation failed: {error}"
    return TransformationResult(
        code=code,
        original=code,
        source_language=source_id,
        target_language=target_id,
        warnings=[message],
        errors=[message],
    )


# =============================================================================
# Pipeline
# =============================================================================

def _line_transformations(code: str, engine_result: EngineResult) -> Tuple[List[LineTransformation], List[str]]:
    """Pair each input line with its rewritten form."""
    lines: List[LineTransformation] = []
    warnings: List[str] = []
    for index, (original, rewritten) in enumerate(zip(_LINE_BREAK.split(code), engine_result.lines)):
        line_warnings = list(rewritten.warnings)
        warnings.extend(line_warnings)
        lines.append(LineTransformation(
            line_number=index + 1,
            original=original,
            transformed=rewritten.text,
            warnings=line_warnings,
            classification=_classify(original, rewritten.text, line_warnings),
        ))
    return lines, warnings


def _run_pipeline(code: str, source: Language, target: Language) -> TransformationResult:
    normalization = normalize_code(code, source.value, target.value)
    engine_result = rewrite_code(normalization.normalized, source, target)

    close_by_indent = (
        REGISTRY[source].block_style == BlockStyle.INDENT
        and REGISTRY[target].block_style != BlockStyle.INDENT
    )
    final = post_process(engine_result.code, target, source, close_by_indent=close_by_indent)

    lines, line_warnings = _line_transformations(code, engine_result)
    warnings = _dedupe(normalization.warnings + line_warnings)
    mixed = bool(normalization.mixed_report and normalization.mixed_report.detected)

    statistics = TransformationStatistics(
        functions_detected=engine_result.functions,
        classes_detected=engine_result.classes,
        imports_detected=engine_result.imports,
        lines_transformed=sum(1 for line in lines if line.classification != LineClassification.UNCHANGED),
        mixed_language_detected=mixed,
        normalization_applied=normalization.normalized != code,
    )

    logger.info(
        "transform_completed",
        source_language=source.value,
        target_language=target.value,
        lines_transformed=statistics.lines_transformed,
        warning_count=len(warnings),
        corrections=normalization.corrections,
    )
    return TransformationResult(
        code=final,
        original=code,
        source_language=source.value,
        target_language=target.value,
        lines=lines,
        warnings=warnings,
        statistics=statistics,
        structure=build_structural_summary(final, target),
    )


def transform(code: str, source_language: LanguageRef, target_language: LanguageRef) -> TransformationResult:
    """Transform code from one language to another.

    Args:
        code: Source text
        source_language: Source language identifier; None or "auto" detects it
        target_language: Target language identifier

    Returns:
        TransformationResult. Same-language calls return the input verbatim;
        unsupported pairs return the input prefixed with a comment and an
        entry in ``errors``.
    """
    code = code if isinstance(code, str) else ""
    source_id = _identifier(source_language)
    target_id = _identifier(target_language)

    try:
        source_id = _resolve_source(code, source_language)
        source = lookup_language(source_id)
        target = lookup_language(target_id)

        if source_id == target_id or (source is not None and source == target):
            return _identity_result(code, source_id, target_id, source)
        if not is_supported_pair(source, target):
            return _unsupported_result(code, source_id, target_id, source, target)
        return _run_pipeline(code, source, target)
    except Exception as e:
        logger.error(
            "transform_failed",
            source_language=source_id,
            target_language=target_id,
            error=str(e),
            exc_info=True,
        )
        sentry_sdk.capture_exception(e)
        return _failure_result(code, source_id, target_id, e)
