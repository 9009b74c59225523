"""
Text Analysis Request/Response Models

This module defines the Pydantic models for the text analysis endpoint.
These models handle validation and serialization for the POST /analysis/text API.
"""

from pydantic import BaseModel, Field, field_validator

from models.analysis_models import AnalysisResult


class TextAnalysisRequest(BaseModel):
    """
    Request body for the text analysis endpoint.

    Attributes:
        text: Raw transcript to analyze (required, must not be empty or whitespace-only)
    """
    text: str = Field(
        ...,
        description="Raw transcript text to analyze"
    )

    @field_validator('text')
    @classmethod
    def text_must_contain_words(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("text must contain at least one word")
        return v


class TextAnalysisResponse(BaseModel):
    """
    Response from the text analysis endpoint.

    Attributes:
        raw_text: Transcript exactly as submitted
        cleaned_text: Deduplicated and cleaned transcript
        analysis: Reconciled meeting analysis
    """
    raw_text: str = Field(
        ...,
        description="Transcript exactly as submitted"
    )
    cleaned_text: str = Field(
        ...,
        description="Deduplicated and cleaned transcript"
    )
    analysis: AnalysisResult = Field(
        ...,
        description="Reconciled meeting analysis"
    )
