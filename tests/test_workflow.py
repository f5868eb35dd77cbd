import json

import pytest

from conftest import (
    IDEAS_REPLY,
    SCRIPT_REPLY,
    FakeSession,
    FakeTextClient,
    channel_item,
    search_payload,
    video_item,
)
from ytstrategy.agents import CommentAnalysisAgent, ScriptAgent
from ytstrategy.models import AnalysisMode, VideoData
from ytstrategy.services import YouTubeClient
from ytstrategy.workflow import analyze_video, draft_script, search_ranked_videos


def youtube_with(routes):
    session = FakeSession(routes)
    return YouTubeClient(api_key="k", session=session), session


def sample_video():
    return VideoData(
        id="abc",
        title="How I grew to 1M views",
        channel_title="Tiny channel",
        view_count=1_000_000,
        subscriber_count=2_000,
        performance_ratio=500.0,
    )


def test_search_requires_query():
    with pytest.raises(ValueError, match="keyword"):
        search_ranked_videos("   ", youtube_key="k")


def test_search_requires_key():
    with pytest.raises(ValueError, match="YOUTUBE_API_KEY"):
        search_ranked_videos("cats")


def test_search_ranks_and_filters():
    client, _ = youtube_with({
        "search": search_payload("a", "b", "c"),
        "videos": {"items": [
            video_item("a", "ch1", "1000"),
            video_item("b", "ch2", "90000"),
            video_item("c", "ch3", "4000"),
        ]},
        "channels": {"items": [
            channel_item("ch1", "1000"),
            channel_item("ch2", "10000"),
            channel_item("ch3", "1000"),
        ]},
    })

    videos = search_ranked_videos("  cats  ", min_ratio=2, client=client)

    assert [v.id for v in videos] == ["b", "c"]
    assert [v.performance_ratio for v in videos] == [9.0, 4.0]


def test_analyze_video_bundles_comments_and_analysis():
    youtube, session = youtube_with({
        "commentThreads": {"items": [
            {"snippet": {"topLevelComment": {"snippet": {"textDisplay": "Need a part 2"}}}},
        ]},
    })
    client = FakeTextClient([json.dumps(IDEAS_REPLY)])
    agent = CommentAnalysisAgent(client=client)

    report = analyze_video(sample_video(), youtube=youtube, agent=agent)

    assert report.video.id == "abc"
    assert report.comments == ["Need a part 2"]
    assert report.analysis.content_suggestions == IDEAS_REPLY["contentSuggestions"]
    assert session.calls[0][1]["maxResults"] == 50
    assert "Need a part 2" in client.calls[0]["prompt"]


def test_analyze_video_continues_when_comments_fail():
    youtube, _ = youtube_with({"commentThreads": {"error": {"message": "commentsDisabled"}}})
    agent = CommentAnalysisAgent(client=FakeTextClient([json.dumps(IDEAS_REPLY)]))

    report = analyze_video(sample_video(), youtube=youtube, agent=agent, mode=AnalysisMode.IDEAS)

    assert report.comments == []
    assert report.analysis is not None


def test_analyze_video_without_ai_key_spends_no_quota():
    youtube, session = youtube_with({})

    with pytest.raises(ValueError, match="GEMINI_API_KEY"):
        analyze_video(sample_video(), youtube=youtube)
    assert session.calls == []


def test_draft_script_attaches_outline_to_report():
    youtube, _ = youtube_with({"commentThreads": {"items": []}})
    analysis_agent = CommentAnalysisAgent(client=FakeTextClient([json.dumps(IDEAS_REPLY)]))
    report = analyze_video(sample_video(), youtube=youtube, agent=analysis_agent)
    client = FakeTextClient([json.dumps(SCRIPT_REPLY)])

    outline = draft_script("night camera", report=report, agent=ScriptAgent(client=client))

    assert report.script is outline
    assert "REFERENCE VIDEO: How I grew to 1M views" in client.calls[0]["prompt"]


def test_draft_script_without_report():
    client = FakeTextClient([json.dumps(SCRIPT_REPLY)])

    outline = draft_script("meal prep", agent=ScriptAgent(client=client))

    assert outline.title == SCRIPT_REPLY["title"]
    assert "REFERENCE VIDEO" not in client.calls[0]["prompt"]
