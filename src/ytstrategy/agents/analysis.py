"""Comment analysis agent."""

import logging
from dataclasses import dataclass, field
from typing import Optional

from ..models import AnalysisMode, AnalysisResult
from .base import BaseAgent, load_prompt, string_list

logger = logging.getLogger(__name__)

# Comments included in the prompt
DEFAULT_MAX_COMMENTS = 30

_FALLBACK_PROMPT = """You are a YouTube content strategist.
You read a video's title and its audience comments and work out what viewers
responded to, what they missed, and what they want to watch next.

Output valid JSON only, with no additional text or markdown formatting.
Write in the same language as the majority of the comments."""

_BASE_PROPERTIES = {
    "topThemes": {
        "type": "ARRAY",
        "items": {"type": "STRING"},
        "description": "Main topics discussed in comments",
    },
    "audienceSentiment": {
        "type": "STRING",
        "description": "Overall sentiment of the audience",
    },
    "improvementPoints": {
        "type": "ARRAY",
        "items": {"type": "STRING"},
        "description": "What viewers felt was missing or could be better",
    },
}

_MODE_PROPERTY = {
    AnalysisMode.IDEAS: (
        "contentSuggestions",
        {
            "type": "ARRAY",
            "items": {"type": "STRING"},
            "description": "3-5 high-potential new video ideas based on this analysis",
        },
    ),
    AnalysisMode.KEYWORDS: (
        "recommendedKeywords",
        {
            "type": "ARRAY",
            "items": {"type": "STRING"},
            "description": "5 short keywords for follow-up videos",
        },
    ),
}


@dataclass
class AnalysisInput:
    """Input data for the analysis agent."""

    video_title: str
    comments: list[str] = field(default_factory=list)
    mode: Optional[AnalysisMode] = None
    max_comments: int = DEFAULT_MAX_COMMENTS
    language: Optional[str] = None


class CommentAnalysisAgent(BaseAgent[AnalysisInput, AnalysisResult]):
    """Agent that turns a title and its comments into audience insight.

    Produces themes, sentiment and improvement points, plus either new video
    ideas or a short list of keywords to build a script from.
    """

    def __init__(self, *args, mode: AnalysisMode = AnalysisMode.IDEAS, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._mode = AnalysisMode(mode)

    @property
    def name(self) -> str:
        """Return the agent's name."""
        return "CommentAnalysisAgent"

    @property
    def system_prompt(self) -> str:
        """Return the system prompt for comment analysis."""
        return load_prompt("analysis", _FALLBACK_PROMPT)

    @property
    def response_schema(self) -> dict:
        """Return the JSON schema for the current mode."""
        key, prop = _MODE_PROPERTY[self._mode]
        return {
            "type": "OBJECT",
            "properties": {**_BASE_PROPERTIES, key: prop},
            "required": [*_BASE_PROPERTIES, key],
        }

    def run(self, input_data: AnalysisInput) -> AnalysisResult:
        """Analyze a video's comments.

        Args:
            input_data: Title and comments. A mode set here overrides the agent's.

        Returns:
            AnalysisResult for the requested mode.

        Raises:
            ValueError: If the response cannot be parsed into a result.
        """
        if input_data.mode is not None:
            self._mode = AnalysisMode(input_data.mode)
        comments = input_data.comments[:input_data.max_comments]

        self._logger.info(
            f"Analyzing '{input_data.video_title}' "
            f"({len(comments)} comments, mode: {self._mode.value})"
        )

        prompt = self._build_prompt(input_data.video_title, comments, input_data.language)
        response = self._create_message(prompt=prompt, max_tokens=2048, temperature=0.4)

        try:
            return self._parse_response(response)
        except ValueError as e:
            raise ValueError(f"Analysis failed: {e}")

    def _build_prompt(
        self, title: str, comments: list[str], language: Optional[str] = None
    ) -> str:
        """Build the user prompt for comment analysis."""
        prompt_parts = [
            "Analyze the following YouTube video and its audience comments "
            "to extract insights for new content ideas.",
            f'Video Title: "{title}"',
        ]

        if comments:
            # Keep each comment on one line so the separator stays unambiguous
            flat = [" ".join(c.split()) for c in comments]
            prompt_parts.append(f"Comments: {' | '.join(flat)}")
        else:
            prompt_parts.append(
                "Comments: (none available - infer from the title alone)"
            )

        if self._mode == AnalysisMode.KEYWORDS:
            prompt_parts.append(
                "Recommend exactly 5 short keywords a creator could build the next video around."
            )
        else:
            prompt_parts.append("Suggest 3-5 high-potential new video ideas.")

        if language:
            prompt_parts.append(f"Respond in {language}.")

        return "\n".join(prompt_parts)

    def _parse_response(self, response: str) -> AnalysisResult:
        """Parse the model's JSON into an AnalysisResult."""
        data = self._parse_object(response)

        key, _ = _MODE_PROPERTY[self._mode]
        missing = [k for k in self.response_schema["required"] if k not in data]
        if missing:
            raise ValueError(f"Response missing keys: {', '.join(missing)}")

        sentiment = data.get("audienceSentiment")
        result = AnalysisResult(
            top_themes=string_list(data.get("topThemes")),
            audience_sentiment=str(sentiment).strip() if sentiment is not None else "",
            improvement_points=string_list(data.get("improvementPoints")),
            content_suggestions=string_list(data.get("contentSuggestions")),
            recommended_keywords=string_list(data.get("recommendedKeywords")),
            mode=self._mode,
        )

        self._logger.info(
            f"Found {len(result.top_themes)} themes, "
            f"{len(result.suggestions)} {key}"
        )
        return result
