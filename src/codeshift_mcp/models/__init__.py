"""Data models for codeshift MCP server."""

from codeshift_mcp.models.config import TransformerConfig
from codeshift_mcp.models.transformation import (
    BlockStyle,
    Language,
    LineClassification,
    LineDiff,
    LineTransformation,
    LogicStyle,
    MixedLanguageReport,
    NormalizationResult,
    StructuralNode,
    TransformationResult,
    TransformationStatistics,
)

__all__ = [
    # Config
    "TransformerConfig",
    # Transformation
    "BlockStyle",
    "Language",
    "LineClassification",
    "LineDiff",
    "LineTransformation",
    "LogicStyle",
    "MixedLanguageReport",
    "NormalizationResult",
    "StructuralNode",
    "TransformationResult",
    "TransformationStatistics",
]
