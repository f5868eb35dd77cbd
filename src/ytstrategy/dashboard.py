"""Streamlit dashboard.

Run with `yt-strategy dashboard` or `streamlit run src/ytstrategy/dashboard.py`.
"""

import logging

import streamlit as st

from ytstrategy import workflow
from ytstrategy.config import config
from ytstrategy.export import videos_to_csv
from ytstrategy.metrics import format_duration
from ytstrategy.models import AnalysisMode, StrategyReport, VideoData
from ytstrategy.services import PROVIDERS, QuotaTracker, YouTubeAPIError, YouTubeClient

logger = logging.getLogger(__name__)

DURATION_LABELS = {
    "any": "Any length",
    "short": "Short (< 4 min)",
    "medium": "Medium (4-20 min)",
    "long": "Long (> 20 min)",
}


def _init_state() -> None:
    defaults = {
        "videos": [],
        "selected_id": None,
        "report": None,
        "script": None,
        "last_query": "",
        "quota": QuotaTracker(limit=config.daily_quota),
    }
    for key, value in defaults.items():
        if key not in st.session_state:
            st.session_state[key] = value


def _ai_key_for(provider: str) -> str:
    if provider == "anthropic":
        return config.anthropic_api_key
    return config.gemini_api_key


def render_sidebar() -> dict:
    """Render settings and return them."""
    with st.sidebar:
        st.header("🔑 API keys")
        youtube_key = st.text_input(
            "YouTube API Key", value=config.youtube_api_key, type="password", key="youtube_key"
        )
        provider = st.selectbox(
            "AI provider",
            PROVIDERS,
            index=PROVIDERS.index(config.ai_provider) if config.ai_provider in PROVIDERS else 0,
            key="provider",
        )
        ai_key = st.text_input(
            f"{provider.capitalize()} API Key",
            value=_ai_key_for(provider),
            type="password",
            key=f"ai_key_{provider}",
        )

        st.header("⚙️ Search")
        duration = st.radio(
            "Video length",
            list(DURATION_LABELS),
            format_func=DURATION_LABELS.get,
            key="duration",
        )
        max_results = st.slider("Results", 5, 50, config.max_results, key="max_results")
        min_ratio = st.number_input(
            "Minimum performance ratio", min_value=0.0, value=0.0, step=0.5, key="min_ratio"
        )

        st.header("🧠 Analysis")
        mode = st.radio(
            "Suggestions",
            [m.value for m in AnalysisMode],
            format_func=lambda m: "New video ideas" if m == "ideas" else "Keywords → script",
            key="mode",
        )

    return {
        "youtube_key": youtube_key.strip(),
        "provider": provider,
        "ai_key": ai_key.strip(),
        "duration": duration,
        "max_results": max_results,
        "min_ratio": min_ratio or None,
        "mode": AnalysisMode(mode),
    }


def render_quota() -> None:
    """Show estimated quota use, including requests made in this run."""
    quota: QuotaTracker = st.session_state["quota"]
    with st.sidebar:
        st.header("🔋 Quota (estimated)")
        st.progress(quota.fraction)
        st.caption(f"{quota.used:,} / {quota.limit:,} units")
        st.caption("Search costs 100 units, other calls 1. Resets at midnight Pacific time.")


def run_search(query: str, settings: dict) -> None:
    if not settings["youtube_key"] or not query.strip():
        st.warning("Enter a YouTube API key and a search keyword.")
        return

    with st.spinner("Searching and ranking videos..."):
        try:
            client = YouTubeClient(
                api_key=settings["youtube_key"], quota=st.session_state["quota"]
            )
            videos = workflow.search_ranked_videos(
                query,
                video_duration=settings["duration"],
                max_results=settings["max_results"],
                min_ratio=settings["min_ratio"],
                client=client,
            )
        except (ValueError, YouTubeAPIError) as e:
            logger.error(f"Search failed: {e}")
            st.error(f"Search failed: {e}")
            return

    st.session_state["videos"] = videos
    st.session_state["last_query"] = query.strip()
    st.session_state["selected_id"] = None
    st.session_state["report"] = None
    st.session_state["script"] = None


def run_analysis(video: VideoData, settings: dict) -> None:
    if not settings["ai_key"] and not (
        settings["provider"] == "gemini" and config.google_cloud_project
    ):
        st.warning(f"Enter a {settings['provider'].capitalize()} API key.")
        return

    st.session_state["selected_id"] = video.id
    st.session_state["report"] = None
    st.session_state["script"] = None

    with st.spinner("Analyzing comments and reactions..."):
        try:
            youtube = YouTubeClient(
                api_key=settings["youtube_key"], quota=st.session_state["quota"]
            )
            report = workflow.analyze_video(
                video,
                ai_key=settings["ai_key"] or None,
                mode=settings["mode"],
                provider=settings["provider"],
                youtube=youtube,
            )
        except Exception as e:
            logger.error(f"Analysis failed: {e}")
            st.error(f"AI analysis failed: {e}")
            return

    st.session_state["report"] = report


def run_script(keyword: str, settings: dict) -> None:
    report: StrategyReport = st.session_state["report"]
    with st.spinner(f"Drafting a script for '{keyword}'..."):
        try:
            outline = workflow.draft_script(
                keyword,
                report=report,
                ai_key=settings["ai_key"] or None,
                provider=settings["provider"],
            )
        except Exception as e:
            logger.error(f"Script generation failed: {e}")
            st.error(f"Script generation failed: {e}")
            return
    st.session_state["script"] = outline


def render_video(video: VideoData, settings: dict) -> None:
    selected = st.session_state["selected_id"] == video.id
    with st.container(border=True):
        thumb, info, score = st.columns([2, 5, 2])
        with thumb:
            if video.thumbnail:
                st.image(video.thumbnail, use_container_width=True)
        with info:
            st.markdown(f"**[{video.title}]({video.url})**" + (" ✅" if selected else ""))
            st.caption(video.channel_title)
            length = format_duration(video.duration_seconds)
            st.caption(
                f"Views {video.view_count:,} · Subscribers {video.subscriber_count:,}"
                + (f" · {length}" if length else "")
            )
        with score:
            ratio = f"x{video.performance_ratio:.1f}"
            st.metric("Performance", ratio, delta="outlier" if video.is_outlier else None)
            if st.button("💡 AI analysis", key=f"analyze_{video.id}"):
                run_analysis(video, settings)


def render_analysis(settings: dict) -> None:
    st.subheader("🧠 Audience analysis")
    report: StrategyReport = st.session_state["report"]
    if report is None or report.analysis is None:
        st.info("Pick a video and press 'AI analysis'.")
        return

    analysis = report.analysis
    st.caption(f"{report.video.title} · {len(report.comments)} comments")

    st.markdown("**Overall reaction**")
    st.markdown(f'> "{analysis.audience_sentiment}"')

    st.markdown("**Main themes**")
    st.markdown(" ".join(f"`#{theme}`" for theme in analysis.top_themes) or "-")

    st.markdown("**What viewers missed**")
    for point in analysis.improvement_points:
        st.markdown(f"- ⚠️ {point}")

    if analysis.mode == AnalysisMode.KEYWORDS:
        st.markdown("**Recommended keywords**")
        if not analysis.recommended_keywords:
            st.caption("No keywords returned.")
            return
        keyword = st.selectbox("Keyword for the next video", analysis.recommended_keywords, key="keyword")
        if st.button("✍️ Draft script", key="draft_script"):
            run_script(keyword, settings)

        outline = st.session_state["script"]
        if outline is not None:
            st.divider()
            st.markdown(outline.to_markdown())
    else:
        st.markdown("**New content ideas**")
        for i, suggestion in enumerate(analysis.content_suggestions, 1):
            st.markdown(f"{i}. **{suggestion}**")


def main() -> None:
    st.set_page_config(page_title="YouTube Strategy AI", page_icon="📈", layout="wide")
    _init_state()

    st.title("📈 YouTube Strategy AI")
    st.caption(
        "Find videos that got far more views than their channel size predicts, "
        "then mine their comments for your next idea."
    )

    settings = render_sidebar()

    query_col, button_col = st.columns([5, 1])
    with query_col:
        query = st.text_input(
            "Search keyword",
            placeholder="e.g. iPhone 16 review, cooking vlog",
            key="query",
            label_visibility="collapsed",
        )
    with button_col:
        if st.button("🔍 Search", key="search", use_container_width=True):
            run_search(query, settings)

    videos: list[VideoData] = st.session_state["videos"]
    results_col, analysis_col = st.columns([7, 5])

    with results_col:
        st.subheader("📊 Ranked by performance ratio")
        if not videos:
            st.info("Search a keyword to find videos.")
        else:
            st.download_button(
                "⬇️ Download CSV",
                data=videos_to_csv(videos),
                file_name=f"ranked_{st.session_state['last_query'] or 'videos'}.csv",
                mime="text/csv",
            )
            for video in videos:
                render_video(video, settings)

    with analysis_col:
        render_analysis(settings)

    render_quota()


main()
