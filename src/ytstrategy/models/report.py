"""Strategy report model."""

from typing import List, Optional
from pathlib import Path
from pydantic import BaseModel, Field
import yaml

from .analysis import AnalysisResult
from .script import ScriptOutline
from .video import VideoData


class StrategyReport(BaseModel):
    """A video together with its comments, analysis and drafted script."""

    video: VideoData = Field(..., description="Analyzed video")
    comments: List[str] = Field(default_factory=list, description="Comments sent for analysis")
    analysis: Optional[AnalysisResult] = Field(None, description="AI analysis result")
    script: Optional[ScriptOutline] = Field(None, description="Follow-up script outline")

    class Config:
        """Pydantic config."""
        frozen = False

    @classmethod
    def from_yaml(cls, path: Path) -> "StrategyReport":
        """Load report from YAML file."""
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
        return cls(**data)

    def to_yaml(self, path: Path) -> None:
        """Save report to YAML file."""
        with open(path, "w", encoding="utf-8") as f:
            yaml.safe_dump(
                self.model_dump(mode="json"),
                f,
                default_flow_style=False,
                allow_unicode=True,
                sort_keys=False,
            )
