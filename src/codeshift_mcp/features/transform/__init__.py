"""Code transformation feature module.

This module provides:
- Language registry and detection (single guess and mixed-language report)
- Input normalization with heuristic auto-corrections
- Rule-based line substitution between language pairs
- Structural post-processing of the rewritten code
- Structural summary, line diff and chunked streaming helpers
"""

from .detection import detect_language, detect_mixed_languages
from .diff import compute_line_diff
from .normalizer import normalize_code
from .orchestrator import transform
from .post_processor import post_process
from .registry import get_language_spec, list_languages, resolve_language
from .streaming import format_sse_events, iter_code_chunks
from .structure import build_structural_summary

__all__ = [
    "transform",
    "detect_language",
    "detect_mixed_languages",
    "normalize_code",
    "post_process",
    "build_structural_summary",
    "compute_line_diff",
    "iter_code_chunks",
    "format_sse_events",
    "get_language_spec",
    "list_languages",
    "resolve_language",
]
