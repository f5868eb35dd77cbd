"""AI agents for audience analysis and script planning."""

from .base import BaseAgent
from .analysis import AnalysisInput, CommentAnalysisAgent
from .script import ScriptAgent, ScriptInput

__all__ = [
    "BaseAgent",
    "AnalysisInput",
    "CommentAnalysisAgent",
    "ScriptAgent",
    "ScriptInput",
]
