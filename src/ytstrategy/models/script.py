"""Script outline model."""

from typing import List
from pydantic import BaseModel, Field


class ScriptSections(BaseModel):
    """Intro, body beats and outro of a video script."""

    intro: str = Field(default="", description="Opening hook")
    body: List[str] = Field(default_factory=list, description="Main talking points in order")
    outro: str = Field(default="", description="Closing and call to action")


class ScriptOutline(BaseModel):
    """Follow-up video plan drafted from a chosen keyword."""

    title: str = Field(..., description="Working title")
    concept: str = Field(default="", description="One-paragraph concept")
    outline: ScriptSections = Field(default_factory=ScriptSections, description="Script sections")

    class Config:
        """Pydantic config."""
        frozen = False

    def to_markdown(self) -> str:
        """Render the outline as Markdown."""
        lines = [f"# {self.title}", ""]
        if self.concept:
            lines.extend([self.concept, ""])
        lines.extend(["## Intro", self.outline.intro, "", "## Body"])
        lines.extend(f"{i}. {point}" for i, point in enumerate(self.outline.body, 1))
        lines.extend(["", "## Outro", self.outline.outro])
        return "\n".join(lines)
