"""Script outline agent."""

import logging
from dataclasses import dataclass
from typing import Optional

from ..models import AnalysisResult, ScriptOutline, ScriptSections
from .base import BaseAgent, load_prompt, string_list

logger = logging.getLogger(__name__)

_FALLBACK_PROMPT = """You are a YouTube scriptwriter.
Given a keyword and what the audience of a similar video cared about, you plan
a new video: a clickable title, a one-paragraph concept, and a script outline
with a hook intro, ordered body points and an outro with a call to action.

Output valid JSON only, with no additional text or markdown formatting."""

SCRIPT_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "title": {"type": "STRING", "description": "Video title"},
        "concept": {"type": "STRING", "description": "Overall concept of the video"},
        "outline": {
            "type": "OBJECT",
            "properties": {
                "intro": {"type": "STRING", "description": "Opening hook"},
                "body": {
                    "type": "ARRAY",
                    "items": {"type": "STRING"},
                    "description": "Main points in order",
                },
                "outro": {"type": "STRING", "description": "Closing and call to action"},
            },
            "required": ["intro", "body", "outro"],
        },
    },
    "required": ["title", "concept", "outline"],
}


@dataclass
class ScriptInput:
    """Input data for the script agent."""

    keyword: str
    video_title: Optional[str] = None
    analysis: Optional[AnalysisResult] = None
    language: Optional[str] = None


class ScriptAgent(BaseAgent[ScriptInput, ScriptOutline]):
    """Agent for drafting a follow-up video script from a chosen keyword."""

    @property
    def name(self) -> str:
        """Return the agent's name."""
        return "ScriptAgent"

    @property
    def system_prompt(self) -> str:
        """Return the system prompt for script drafting."""
        return load_prompt("script", _FALLBACK_PROMPT)

    @property
    def response_schema(self) -> dict:
        return SCRIPT_SCHEMA

    def run(self, input_data: ScriptInput) -> ScriptOutline:
        """Draft a script outline.

        Raises:
            ValueError: If the keyword is empty or the response cannot be parsed.
        """
        if not input_data.keyword.strip():
            raise ValueError("Keyword must not be empty")

        self._logger.info(f"Drafting script for keyword: '{input_data.keyword}'")

        prompt = self._build_prompt(input_data)
        response = self._create_message(prompt=prompt, max_tokens=4096, temperature=0.8)
        outline = self._parse_response(response)

        self._logger.info(f"Drafted '{outline.title}' with {len(outline.outline.body)} body points")
        return outline

    def _build_prompt(self, input_data: ScriptInput) -> str:
        """Build the user prompt for script drafting."""
        prompt_parts = [
            "Write a YouTube video plan for the following keyword.",
            f"KEYWORD: {input_data.keyword}",
        ]

        if input_data.video_title:
            prompt_parts.append(f"REFERENCE VIDEO: {input_data.video_title}")

        analysis = input_data.analysis
        if analysis:
            if analysis.audience_sentiment:
                prompt_parts.append(f"AUDIENCE SENTIMENT: {analysis.audience_sentiment}")
            if analysis.top_themes:
                prompt_parts.append(f"THEMES: {', '.join(analysis.top_themes)}")
            if analysis.improvement_points:
                prompt_parts.append(
                    f"WHAT VIEWERS MISSED: {'; '.join(analysis.improvement_points)}"
                )

        if input_data.language:
            prompt_parts.append(f"Respond in {input_data.language}.")

        prompt_parts.extend([
            "",
            "Return a title, a concept, and an outline with intro, body points and outro.",
            "Address what viewers missed in the reference video.",
        ])
        return "\n".join(prompt_parts)

    def _parse_response(self, response: str) -> ScriptOutline:
        """Parse the model's JSON into a ScriptOutline."""
        data = self._parse_object(response)

        title = data.get("title")
        outline = data.get("outline")
        if not title or not isinstance(outline, dict):
            raise ValueError("Response missing title or outline")

        return ScriptOutline(
            title=str(title).strip(),
            concept=str(data.get("concept") or "").strip(),
            outline=ScriptSections(
                intro=str(outline.get("intro") or "").strip(),
                body=string_list(outline.get("body")),
                outro=str(outline.get("outro") or "").strip(),
            ),
        )
