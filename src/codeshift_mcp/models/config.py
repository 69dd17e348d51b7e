"""Configuration models for codeshift MCP server."""
from pydantic import BaseModel, Field, field_validator

from codeshift_mcp.constants import InputLimits, LanguageDefaults, StreamDefaults
from codeshift_mcp.models.transformation import Language


class TransformerConfig(BaseModel):
    """Settings loaded from the optional YAML config file."""

    default_target_language: str = Field(
        default=LanguageDefaults.DEFAULT_LANGUAGE,
        description="Target language used when a tool call omits one",
    )
    stream_chunk_size: int = Field(
        default=StreamDefaults.CHUNK_SIZE,
        ge=1,
        le=StreamDefaults.MAX_CHUNK_SIZE,
        description="Characters per streamed delta event",
    )
    max_input_chars: int = Field(
        default=InputLimits.MAX_INPUT_CHARS,
        ge=1,
        description="Largest code snippet accepted by the tools",
    )
    include_structure: bool = Field(
        default=True,
        description="Whether tool responses include the structural summary",
    )

    @field_validator("default_target_language")
    @classmethod
    def validate_language(cls, v: str) -> str:
        """Ensure the default target is a registered language."""
        language = Language.from_identifier(v)
        if language is None:
            valid = ", ".join(member.value for member in Language)
            raise ValueError(f"Unknown language '{v}'. Must be one of: {valid}")
        return language.value
