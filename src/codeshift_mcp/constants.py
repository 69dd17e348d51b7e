"""Shared constants across the codeshift-mcp codebase.

This module centralizes magic numbers and configuration values
to improve maintainability and reduce code duplication.
"""


class LanguageDefaults:
    """Defaults for language lookup."""

    DEFAULT_LANGUAGE = "javascript"
    AUTO_DETECT = "auto"


class DetectionDefaults:
    """Confidence levels reported by mixed-language detection.

    The confidence is a coarse triage signal, not a probability.
    """

    SINGLE_CONFIDENCE = 0.9  # Exactly one language scored
    MIXED_CONFIDENCE = 0.5  # More than one language scored
    NO_MATCH_CONFIDENCE = 0.0


class StreamDefaults:
    """Defaults for chunked delivery of transformed code."""

    CHUNK_SIZE = 50  # Characters per delta event
    MAX_CHUNK_SIZE = 10000


class InputLimits:
    """Limits applied by the tool layer before calling the core."""

    MAX_INPUT_CHARS = 200_000


class WarningPrefixes:
    """Prefixes shared by warning producers and consumers."""

    MIXED = "Mixed languages detected"
    NORMALIZING = "Normalizing"
    UNSUPPORTED = "Unsupported language pair"
