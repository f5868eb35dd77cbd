"""Data models for the strategy dashboard."""

from .video import VideoData
from .analysis import AnalysisMode, AnalysisResult
from .script import ScriptOutline, ScriptSections
from .report import StrategyReport

__all__ = [
    "VideoData",
    "AnalysisMode",
    "AnalysisResult",
    "ScriptOutline",
    "ScriptSections",
    "StrategyReport",
]
