import importlib

from ytstrategy.models import (
    AnalysisMode,
    AnalysisResult,
    ScriptOutline,
    ScriptSections,
    StrategyReport,
    VideoData,
)


def test_import_package():
    """Basic smoke test: package imports and version present."""
    m = importlib.import_module("ytstrategy")
    assert isinstance(m.__version__, str)


def test_video_derived_fields():
    video = VideoData(id="dQw4w9WgXcQ", title="t", performance_ratio=2.5, duration="PT3M33S")

    assert video.url == "https://www.youtube.com/watch?v=dQw4w9WgXcQ"
    assert video.duration_seconds == 213
    assert video.is_outlier
    assert not VideoData(id="x", title="t", performance_ratio=2.0).is_outlier


def test_suggestions_follow_mode():
    ideas = AnalysisResult(content_suggestions=["idea"], recommended_keywords=["kw"])
    keywords = AnalysisResult(
        content_suggestions=["idea"], recommended_keywords=["kw"], mode=AnalysisMode.KEYWORDS
    )

    assert ideas.suggestions == ["idea"]
    assert keywords.suggestions == ["kw"]


def test_script_markdown():
    outline = ScriptOutline(
        title="Night Camera Test",
        concept="Compare three phones after dark.",
        outline=ScriptSections(intro="Hook", body=["Setup", "Results"], outro="Subscribe"),
    )

    text = outline.to_markdown()

    assert text.startswith("# Night Camera Test")
    assert "1. Setup\n2. Results" in text
    assert text.endswith("## Outro\nSubscribe")


def test_report_yaml_keeps_unicode(tmp_path):
    report = StrategyReport(
        video=VideoData(id="abc", title="아이폰 16 리뷰", view_count=10, subscriber_count=5, performance_ratio=2.0),
        comments=["좋아요", "part 2?"],
        analysis=AnalysisResult(top_themes=["카메라"], mode=AnalysisMode.KEYWORDS, recommended_keywords=["야간 촬영"]),
        script=ScriptOutline(title="야간 촬영 비교"),
    )
    path = tmp_path / "report.yaml"

    report.to_yaml(path)

    assert "아이폰 16 리뷰" in path.read_text(encoding="utf-8")
    loaded = StrategyReport.from_yaml(path)
    assert loaded == report
    assert loaded.analysis.mode == AnalysisMode.KEYWORDS
