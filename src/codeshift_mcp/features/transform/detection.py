"""Language detection.

Two detectors share the registry's pattern tables:

- detect_language: weighted single-language guess used when the caller
  asks for automatic source detection
- detect_mixed_languages: per-language indicator scoring that flags input
  mixing more than one language's surface syntax
"""

from typing import Dict, List

from codeshift_mcp.constants import DetectionDefaults
from codeshift_mcp.core.logging import get_logger
from codeshift_mcp.features.transform.registry import (
    DEFAULT_LANGUAGE,
    DETECTION_PRIORITY,
    REGISTRY,
    detection_patterns,
    fingerprint_patterns,
)
from codeshift_mcp.models.transformation import Language, MixedLanguageReport

logger = get_logger(__name__)


def _weighted_scores(code: str) -> Dict[Language, int]:
    scores: Dict[Language, int] = {}
    for language in DETECTION_PRIORITY:
        score = sum(weight for pattern, weight in detection_patterns(language) if pattern.search(code))
        if score:
            scores[language] = score
    return scores


def detect_language(code: str) -> str:
    """Guess the single language a snippet is written in.

    Each language scores the summed weights of its patterns that match
    anywhere in the text. Ties resolve by a fixed priority order.

    Args:
        code: Source text

    Returns:
        Language identifier; the default language when nothing matches
    """
    if not code or not code.strip():
        return DEFAULT_LANGUAGE.value

    scores = _weighted_scores(code)
    if not scores:
        return DEFAULT_LANGUAGE.value

    best = max(DETECTION_PRIORITY, key=lambda lang: (scores.get(lang, 0), -DETECTION_PRIORITY.index(lang)))
    logger.debug("language_detected", language=best.value, score=scores[best])
    return best.value


def score_languages(code: str) -> Dict[str, int]:
    """Count indicator hits per language.

    Each indicator contributes at most one hit regardless of how many
    times it matches.

    Returns:
        Mapping of language identifier to hit count, zero scores omitted
    """
    scores: Dict[str, int] = {}
    for language in REGISTRY:
        hits = sum(1 for pattern in fingerprint_patterns(language) if pattern.search(code))
        if hits:
            scores[language.value] = hits
    return scores


def detect_mixed_languages(code: str) -> MixedLanguageReport:
    """Report whether a snippet mixes several languages' syntax.

    Args:
        code: Source text

    Returns:
        MixedLanguageReport with languages ordered by descending score
    """
    if not code or not code.strip():
        return MixedLanguageReport(detected=False, confidence=DetectionDefaults.NO_MATCH_CONFIDENCE)

    scores = score_languages(code)
    order = list(REGISTRY)
    languages: List[str] = sorted(
        scores,
        key=lambda name: (-scores[name], order.index(Language(name))),
    )

    if len(languages) > 1:
        confidence = DetectionDefaults.MIXED_CONFIDENCE
    elif languages:
        confidence = DetectionDefaults.SINGLE_CONFIDENCE
    else:
        confidence = DetectionDefaults.NO_MATCH_CONFIDENCE

    report = MixedLanguageReport(
        detected=len(languages) > 1,
        languages=languages,
        confidence=confidence,
        scores=scores,
    )
    if report.detected:
        logger.info("mixed_languages_detected", languages=languages, scores=scores)
    return report
