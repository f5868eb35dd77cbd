"""Search, analyze and script handlers shared by the CLI and the dashboard."""

import logging
from typing import Optional

from .agents import AnalysisInput, CommentAnalysisAgent, ScriptAgent, ScriptInput
from .metrics import filter_videos
from .models import AnalysisMode, ScriptOutline, StrategyReport, VideoData
from .services import YouTubeClient

logger = logging.getLogger(__name__)

# Comments fetched per video; the prompt keeps the first 30
COMMENTS_TO_FETCH = 50


def search_ranked_videos(
    query: str,
    youtube_key: Optional[str] = None,
    video_duration: str = "any",
    max_results: Optional[int] = None,
    min_ratio: Optional[float] = None,
    client: Optional[YouTubeClient] = None,
) -> list[VideoData]:
    """Search YouTube and return videos ranked by performance ratio.

    Raises:
        ValueError: If the query or API key is missing.
        YouTubeAPIError: If the Data API rejects a request.
    """
    if not query or not query.strip():
        raise ValueError("Enter a search keyword")

    client = client or YouTubeClient(api_key=youtube_key)
    videos = client.search_videos(query.strip(), video_duration, max_results)

    if min_ratio is not None:
        videos = filter_videos(videos, min_ratio=min_ratio)

    logger.info(f"Ranked {len(videos)} videos for '{query}'")
    return videos


def analyze_video(
    video: VideoData,
    youtube_key: Optional[str] = None,
    ai_key: Optional[str] = None,
    mode: AnalysisMode = AnalysisMode.IDEAS,
    provider: Optional[str] = None,
    youtube: Optional[YouTubeClient] = None,
    agent: Optional[CommentAnalysisAgent] = None,
    language: Optional[str] = None,
) -> StrategyReport:
    """Fetch a video's comments and analyze them.

    Raises:
        ValueError: If credentials are missing or the analysis cannot be parsed.
    """
    # Build the agent first so a missing AI key fails before any quota is spent
    agent = agent or CommentAnalysisAgent(provider=provider, api_key=ai_key, mode=mode)
    youtube = youtube or YouTubeClient(api_key=youtube_key)

    comments = youtube.fetch_comments(video.id, max_results=COMMENTS_TO_FETCH)
    analysis = agent.run(
        AnalysisInput(
            video_title=video.title,
            comments=comments,
            mode=mode,
            language=language,
        )
    )
    return StrategyReport(video=video, comments=comments, analysis=analysis)


def draft_script(
    keyword: str,
    report: Optional[StrategyReport] = None,
    ai_key: Optional[str] = None,
    provider: Optional[str] = None,
    agent: Optional[ScriptAgent] = None,
    language: Optional[str] = None,
) -> ScriptOutline:
    """Draft a follow-up script outline for a keyword.

    When a report is given, its video title and analysis are used as context
    and the outline is stored on it.
    """
    agent = agent or ScriptAgent(provider=provider, api_key=ai_key)

    outline = agent.run(
        ScriptInput(
            keyword=keyword,
            video_title=report.video.title if report else None,
            analysis=report.analysis if report else None,
            language=language,
        )
    )
    if report is not None:
        report.script = outline
    return outline
