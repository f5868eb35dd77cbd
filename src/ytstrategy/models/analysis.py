"""Comment analysis result model."""

from typing import List
from enum import Enum
from pydantic import BaseModel, Field


class AnalysisMode(str, Enum):
    """What the analysis should suggest next."""
    IDEAS = "ideas"
    KEYWORDS = "keywords"


class AnalysisResult(BaseModel):
    """Audience insight extracted from a video's title and comments."""

    top_themes: List[str] = Field(default_factory=list, description="Main topics discussed in comments")
    audience_sentiment: str = Field(default="", description="Overall sentiment of the audience")
    improvement_points: List[str] = Field(
        default_factory=list,
        description="What viewers felt was missing or could be better"
    )
    content_suggestions: List[str] = Field(
        default_factory=list,
        description="New video ideas based on the analysis"
    )
    recommended_keywords: List[str] = Field(
        default_factory=list,
        description="Keywords to pick from for a follow-up script"
    )
    mode: AnalysisMode = Field(default=AnalysisMode.IDEAS, description="Analysis variant")

    class Config:
        """Pydantic config."""
        frozen = False

    @property
    def suggestions(self) -> List[str]:
        """Return the suggestion list that matches the analysis mode."""
        if self.mode == AnalysisMode.KEYWORDS:
            return self.recommended_keywords
        return self.content_suggestions
