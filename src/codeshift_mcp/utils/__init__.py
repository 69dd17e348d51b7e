"""Utilities module for codeshift MCP server.

This module provides the lexical helpers shared by the normalizer,
rule engine and post-processor.
"""

from .text import (
    count_in_code,
    find_call,
    has_top_level_colon,
    leading_whitespace,
    rewrite_code_segments,
    split_code_segments,
    split_top_level,
    split_trailing_comment,
    unwrap_parens,
)

__all__ = [
    "count_in_code",
    "find_call",
    "has_top_level_colon",
    "leading_whitespace",
    "rewrite_code_segments",
    "split_code_segments",
    "split_top_level",
    "split_trailing_comment",
    "unwrap_parens",
]
