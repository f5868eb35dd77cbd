import json

import pytest

from conftest import IDEAS_REPLY, KEYWORDS_REPLY, SCRIPT_REPLY, FakeTextClient
from ytstrategy.agents import (
    AnalysisInput,
    BaseAgent,
    CommentAnalysisAgent,
    ScriptAgent,
    ScriptInput,
)
from ytstrategy.models import AnalysisMode, AnalysisResult


def analysis_agent(*responses, mode=AnalysisMode.IDEAS):
    client = FakeTextClient(responses)
    return CommentAnalysisAgent(client=client, mode=mode), client


def test_analysis_parses_fenced_json():
    agent, client = analysis_agent("```json\n" + json.dumps(IDEAS_REPLY) + "\n```")

    result = agent.run(AnalysisInput(video_title="iPhone 16 review", comments=["wow", "price?"]))

    assert isinstance(result, AnalysisResult)
    assert result.top_themes == ["battery life", "camera"]
    assert result.audience_sentiment.startswith("Mostly positive")
    assert result.improvement_points == ["No low-light samples", "Too long intro"]
    assert len(result.content_suggestions) == 3
    assert result.suggestions == result.content_suggestions
    assert result.mode == AnalysisMode.IDEAS
    assert agent.model == "fake-model"


def test_analysis_prompt_contains_title_and_first_thirty_comments():
    agent, client = analysis_agent(json.dumps(IDEAS_REPLY))
    comments = [f"comment {i}" for i in range(50)]

    agent.run(AnalysisInput(video_title="Cooking vlog", comments=comments))

    prompt = client.calls[0]["prompt"]
    assert 'Video Title: "Cooking vlog"' in prompt
    assert "comment 0 | comment 1" in prompt
    assert "comment 29" in prompt
    assert "comment 30" not in prompt
    assert client.calls[0]["system"]


def test_analysis_flattens_multiline_comments():
    agent, client = analysis_agent(json.dumps(IDEAS_REPLY))

    agent.run(AnalysisInput(video_title="t", comments=["line one\nline two"]))

    assert "line one line two" in client.calls[0]["prompt"]


def test_analysis_without_comments_still_runs():
    agent, client = analysis_agent(json.dumps(IDEAS_REPLY))

    agent.run(AnalysisInput(video_title="t", comments=[]))

    assert "none available" in client.calls[0]["prompt"]


def test_ideas_mode_schema():
    agent, client = analysis_agent(json.dumps(IDEAS_REPLY))
    agent.run(AnalysisInput(video_title="t", comments=["c"]))

    schema = client.calls[0]["response_schema"]
    assert schema["type"] == "OBJECT"
    assert set(schema["required"]) == {
        "topThemes", "audienceSentiment", "improvementPoints", "contentSuggestions"
    }


def test_keywords_mode_requests_keywords():
    agent, client = analysis_agent(json.dumps(KEYWORDS_REPLY))

    result = agent.run(
        AnalysisInput(video_title="Meal prep", comments=["c"], mode=AnalysisMode.KEYWORDS)
    )

    schema = client.calls[0]["response_schema"]
    assert "recommendedKeywords" in schema["required"]
    assert "contentSuggestions" not in schema["properties"]
    assert "exactly 5 short keywords" in client.calls[0]["prompt"]
    assert result.mode == AnalysisMode.KEYWORDS
    assert result.suggestions == KEYWORDS_REPLY["recommendedKeywords"]


def test_analysis_language_hint():
    agent, client = analysis_agent(json.dumps(IDEAS_REPLY))

    agent.run(AnalysisInput(video_title="t", comments=["c"], language="Korean"))

    assert "Respond in Korean." in client.calls[0]["prompt"]


def test_analysis_missing_keys_fails():
    reply = dict(IDEAS_REPLY)
    del reply["improvementPoints"]
    agent, _ = analysis_agent(json.dumps(reply))

    with pytest.raises(ValueError, match="Analysis failed: .*improvementPoints"):
        agent.run(AnalysisInput(video_title="t", comments=["c"]))


def test_analysis_invalid_json_fails():
    agent, _ = analysis_agent("Sorry, I cannot help with that.")

    with pytest.raises(ValueError, match="Analysis failed"):
        agent.run(AnalysisInput(video_title="t", comments=["c"]))


def test_analysis_coerces_loose_values():
    reply = dict(IDEAS_REPLY, topThemes="single theme", improvementPoints=["", "  real point "])
    agent, _ = analysis_agent(json.dumps(reply))

    result = agent.run(AnalysisInput(video_title="t", comments=["c"]))

    assert result.top_themes == ["single theme"]
    assert result.improvement_points == ["real point"]


def test_script_agent_parses_outline():
    client = FakeTextClient(["Here you go:\n" + json.dumps(SCRIPT_REPLY) + "\nEnjoy!"])
    agent = ScriptAgent(client=client)

    outline = agent.run(ScriptInput(keyword="budget meal prep"))

    assert outline.title == "Meal Prep on $20 a Week"
    assert outline.outline.body == ["Shopping list", "Batch cooking", "Storage tips"]
    assert outline.outline.outro.startswith("Subscribe")
    assert client.calls[0]["response_schema"]["required"] == ["title", "concept", "outline"]


def test_script_prompt_uses_analysis_context():
    client = FakeTextClient([json.dumps(SCRIPT_REPLY)])
    agent = ScriptAgent(client=client)
    analysis = AnalysisResult(
        top_themes=["portions"],
        audience_sentiment="Hungry for more",
        improvement_points=["Show prices"],
    )

    agent.run(ScriptInput(keyword="high protein", video_title="Meal prep 101", analysis=analysis))

    prompt = client.calls[0]["prompt"]
    assert "KEYWORD: high protein" in prompt
    assert "REFERENCE VIDEO: Meal prep 101" in prompt
    assert "THEMES: portions" in prompt
    assert "WHAT VIEWERS MISSED: Show prices" in prompt


def test_script_missing_outline_fails():
    client = FakeTextClient([json.dumps({"title": "Only a title"})])

    with pytest.raises(ValueError, match="missing title or outline"):
        ScriptAgent(client=client).run(ScriptInput(keyword="x"))


def test_script_empty_keyword_fails_without_calling_model():
    client = FakeTextClient([])

    with pytest.raises(ValueError, match="Keyword"):
        ScriptAgent(client=client).run(ScriptInput(keyword="   "))
    assert client.calls == []


def test_agent_without_credentials_raises():
    with pytest.raises(ValueError, match="GEMINI_API_KEY"):
        ScriptAgent()


def test_extract_json_ignores_braces_inside_strings():
    text = 'Result: {"title": "Use {curly} braces", "n": {"x": 1}} trailing'

    assert json.loads(BaseAgent._extract_json(text)) == {
        "title": "Use {curly} braces",
        "n": {"x": 1},
    }


def test_analysis_scalar_list_value_fails():
    agent, _ = analysis_agent(json.dumps(dict(IDEAS_REPLY, topThemes=5)))

    with pytest.raises(ValueError, match="Analysis failed: Expected a list, got int"):
        agent.run(AnalysisInput(video_title="t", comments=["c"]))


def test_script_scalar_body_fails():
    reply = dict(SCRIPT_REPLY, outline=dict(SCRIPT_REPLY["outline"], body=3))
    client = FakeTextClient([json.dumps(reply)])

    with pytest.raises(ValueError, match="Expected a list"):
        ScriptAgent(client=client).run(ScriptInput(keyword="x"))


def test_agent_mode_applies_when_input_has_none():
    client = FakeTextClient([json.dumps(KEYWORDS_REPLY)])
    agent = CommentAnalysisAgent(client=client, mode=AnalysisMode.KEYWORDS)

    result = agent.run(AnalysisInput(video_title="t", comments=["c"]))

    assert "recommendedKeywords" in client.calls[0]["response_schema"]["required"]
    assert result.mode == AnalysisMode.KEYWORDS
