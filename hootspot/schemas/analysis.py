# hootspot/schemas/analysis.py
"""
Schemas for model-produced analyses.

An Analysis is what the LLM collaborator returns for one piece of text:
a summary plus a list of manipulation-pattern findings. The models are
frozen; the highlighting engine never mutates them.
"""

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

MIN_STRENGTH = 1
MAX_STRENGTH = 10


class Finding(BaseModel):
    """A single manipulation-pattern detection."""

    model_config = ConfigDict(frozen=True)

    pattern_name: str = Field(..., description="Stable tactic identifier, e.g. 'Ad Hominem' (not localized)")
    display_name: str = Field("", description="Short 1-3 word human label")
    specific_quote: str = Field("", description="Substring the model claims appears in the source text")
    explanation: str = Field("", description="Why the quote exhibits the pattern")
    strength: int = Field(MIN_STRENGTH, description="Confidence/severity from 1 (subtle) to 10 (overt)")
    category: str = Field("", description="Category key, e.g. 'category_sociopolitical_rhetorical'")

    @field_validator("strength", mode="before")
    @classmethod
    def clamp_strength(cls, v):
        """Models occasionally return strength as a string or out of range."""
        if v is None:
            return MIN_STRENGTH
        if isinstance(v, str):
            v = v.strip()
        try:
            value = int(float(v))
        except (TypeError, ValueError):
            raise ValueError(f"strength must be a number, got {v!r}") from None
        return max(MIN_STRENGTH, min(MAX_STRENGTH, value))

    @field_validator("display_name", "specific_quote", "explanation", mode="before")
    @classmethod
    def null_to_empty(cls, v):
        """Models sometimes send null for text fields; treat it as missing."""
        return "" if v is None else v

    @field_validator("display_name", mode="after")
    @classmethod
    def strip_display_name(cls, v: str) -> str:
        return v.strip()


class Analysis(BaseModel):
    """Result of one analysis call."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    analysis_summary: str = Field(
        "",
        validation_alias=AliasChoices("analysis_summary", "summary"),
        description="Overall summary of the text",
    )
    findings: list[Finding] = Field(default_factory=list, description="Detected patterns")
