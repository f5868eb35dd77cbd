"""CLI entry point for the YouTube strategy tool."""

import logging
import typer
from pathlib import Path
from typing import Optional
from enum import Enum

from . import __version__
from .config import config
from .models import AnalysisMode, StrategyReport

app = typer.Typer(
    name="yt-strategy",
    help="Find outlier YouTube videos and turn their comments into content ideas",
    no_args_is_help=True
)


def setup_logging(verbose: bool = False) -> None:
    """Configure logging."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s",
    )


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"yt-strategy version {__version__}")
        raise typer.Exit()


class VideoDuration(str, Enum):
    """Search duration filter."""
    ANY = "any"
    SHORT = "short"
    MEDIUM = "medium"
    LONG = "long"


class Provider(str, Enum):
    """Text generation providers."""
    GEMINI = "gemini"
    ANTHROPIC = "anthropic"


def _truncate(text: str, width: int) -> str:
    return text[:width - 3] + "..." if len(text) > width else text


@app.callback()
def main(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit"
    )
) -> None:
    """YouTube Strategy AI - rank videos by views per subscriber and analyze their audience."""
    pass


@app.command()
def search(
    query: str = typer.Argument(
        ...,
        help="Search keyword"
    ),
    duration: VideoDuration = typer.Option(
        VideoDuration.ANY,
        "--duration",
        "-d",
        help="Duration filter (short: < 4 min, medium: 4-20 min, long: > 20 min)"
    ),
    limit: int = typer.Option(
        config.max_results,
        "--limit",
        "-l",
        help="Number of search results",
        min=1,
        max=50
    ),
    min_ratio: Optional[float] = typer.Option(
        None,
        "--min-ratio",
        "-r",
        help="Hide videos below this views-per-subscriber ratio"
    ),
    csv: Optional[Path] = typer.Option(
        None,
        "--csv",
        help="Also write the ranked results to a CSV file"
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose logging"
    ),
) -> None:
    """Search videos and rank them by performance ratio."""
    from .export import save_csv
    from .metrics import format_duration
    from .services import YouTubeAPIError, YouTubeClient
    from .workflow import search_ranked_videos

    setup_logging(verbose)
    typer.echo(f"🔍 Searching: {query}")
    typer.echo(f"   Duration: {duration.value}")

    try:
        client = YouTubeClient()
        videos = search_ranked_videos(
            query,
            video_duration=duration.value,
            max_results=limit,
            min_ratio=min_ratio,
            client=client,
        )
    except (ValueError, YouTubeAPIError) as e:
        typer.echo(f"❌ Search failed: {e}")
        raise typer.Exit(1)

    if not videos:
        typer.echo("\n⚠️  No videos found")
        raise typer.Exit(0)

    typer.echo(f"\n📊 Ranked by performance ratio ({len(videos)} videos):")
    for rank, video in enumerate(videos, 1):
        marker = "🔥" if video.is_outlier else "  "
        length = format_duration(video.duration_seconds)
        typer.echo(
            f"{marker} {rank:>2}. x{video.performance_ratio:<8.1f} {_truncate(video.title, 60)}"
        )
        typer.echo(
            f"       {video.channel_title} · views {video.view_count:,} · "
            f"subscribers {video.subscriber_count:,}"
            + (f" · {length}" if length else "")
        )
        typer.echo(f"       {video.url}")

    if csv:
        try:
            save_csv(videos, csv)
            typer.echo(f"\n✅ CSV saved: {csv}")
        except OSError as e:
            typer.echo(f"❌ Error saving CSV: {e}")
            raise typer.Exit(1)

    typer.echo(f"\n🔋 Estimated quota used: {client.quota.used}/{client.quota.limit}")


@app.command()
def comments(
    video_id: str = typer.Argument(
        ...,
        help="YouTube video ID"
    ),
    limit: int = typer.Option(
        50,
        "--limit",
        "-l",
        help="Number of comment threads to fetch",
        min=1,
        max=100
    ),
) -> None:
    """Print the top-level comments of a video."""
    from .services import YouTubeClient

    try:
        client = YouTubeClient()
    except ValueError as e:
        typer.echo(f"❌ Configuration error: {e}")
        raise typer.Exit(1)

    texts = client.fetch_comments(video_id, max_results=limit)
    if not texts:
        typer.echo("⚠️  No comments available (disabled, private, or request failed)")
        raise typer.Exit(0)

    typer.echo(f"💬 {len(texts)} comments for {video_id}:")
    for text in texts:
        typer.echo(f"   • {_truncate(' '.join(text.split()), 100)}")


@app.command()
def analyze(
    video_id: str = typer.Argument(
        ...,
        help="YouTube video ID"
    ),
    mode: AnalysisMode = typer.Option(
        AnalysisMode.IDEAS,
        "--mode",
        "-m",
        help="'ideas' suggests new videos, 'keywords' suggests keywords for a script"
    ),
    provider: Optional[Provider] = typer.Option(
        None,
        "--provider",
        "-p",
        help="Text generation provider (defaults to STRATEGY_AI_PROVIDER)"
    ),
    language: Optional[str] = typer.Option(
        None,
        "--language",
        help="Language for the analysis (defaults to the comments' language)"
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Save the report as YAML"
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose logging"
    ),
) -> None:
    """Analyze a video's comments with AI."""
    from .services import YouTubeAPIError, YouTubeClient
    from .workflow import analyze_video

    setup_logging(verbose)
    provider_name = provider.value if provider else config.ai_provider

    try:
        config.validate_ai_required(provider_name)
        client = YouTubeClient()
        videos = client.fetch_videos([video_id])
    except (ValueError, YouTubeAPIError) as e:
        typer.echo(f"❌ {e}")
        raise typer.Exit(1)

    if not videos:
        typer.echo(f"❌ Video not found: {video_id}")
        raise typer.Exit(1)

    video = videos[0]
    typer.echo(f"🧠 Analyzing: {video.title}")
    typer.echo(f"   Provider: {provider_name}")
    typer.echo(f"   Performance ratio: x{video.performance_ratio:.1f}")

    try:
        report = analyze_video(
            video,
            mode=mode,
            provider=provider_name,
            youtube=client,
            language=language,
        )
    except Exception as e:
        typer.echo(f"❌ AI analysis failed: {e}")
        raise typer.Exit(1)

    _print_report(report)

    if output:
        try:
            output.parent.mkdir(parents=True, exist_ok=True)
            report.to_yaml(output)
            typer.echo(f"\n✅ Report saved: {output}")
        except OSError as e:
            typer.echo(f"❌ Error saving report: {e}")
            raise typer.Exit(1)

        if mode == AnalysisMode.KEYWORDS and report.analysis.recommended_keywords:
            keyword = report.analysis.recommended_keywords[0]
            typer.echo("\nDraft a script from a keyword:")
            typer.echo(f'   yt-strategy script "{keyword}" --report {output}')


@app.command()
def script(
    keyword: str = typer.Argument(
        ...,
        help="Keyword to build the video around"
    ),
    report_path: Optional[Path] = typer.Option(
        None,
        "--report",
        "-r",
        help="Report YAML from 'analyze' to use as context",
        exists=True,
        file_okay=True,
        dir_okay=False
    ),
    provider: Optional[Provider] = typer.Option(
        None,
        "--provider",
        "-p",
        help="Text generation provider (defaults to STRATEGY_AI_PROVIDER)"
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Save the outline (.md as Markdown, .yaml as YAML; with --report the updated report)"
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose logging"
    ),
) -> None:
    """Draft a follow-up video script outline from a keyword."""
    from .workflow import draft_script

    setup_logging(verbose)
    provider_name = provider.value if provider else config.ai_provider

    report = None
    if report_path:
        try:
            report = StrategyReport.from_yaml(report_path)
        except Exception as e:
            typer.echo(f"❌ Error loading report: {e}")
            raise typer.Exit(1)

    typer.echo(f"✍️  Drafting script: {keyword}")
    if report:
        typer.echo(f"   Reference video: {report.video.title}")

    try:
        config.validate_ai_required(provider_name)
        outline = draft_script(keyword, report=report, provider=provider_name)
    except Exception as e:
        typer.echo(f"❌ Script generation failed: {e}")
        raise typer.Exit(1)

    typer.echo("")
    typer.echo(outline.to_markdown())

    if output:
        try:
            output.parent.mkdir(parents=True, exist_ok=True)
            if output.suffix in (".yaml", ".yml"):
                if report:
                    report.to_yaml(output)
                else:
                    import yaml

                    with open(output, "w", encoding="utf-8") as f:
                        yaml.safe_dump(outline.model_dump(), f, allow_unicode=True, sort_keys=False)
            else:
                output.write_text(outline.to_markdown(), encoding="utf-8")
            typer.echo(f"\n✅ Saved: {output}")
        except OSError as e:
            typer.echo(f"❌ Error saving outline: {e}")
            raise typer.Exit(1)


@app.command()
def report(
    path: Path = typer.Argument(
        ...,
        help="Report YAML file",
        exists=False,
        file_okay=True,
        dir_okay=False
    )
) -> None:
    """Show a saved report."""
    if not path.exists():
        typer.echo(f"❌ No report found at {path}")
        typer.echo("   Run 'yt-strategy analyze VIDEO_ID --output report.yaml' first")
        raise typer.Exit(1)

    try:
        saved = StrategyReport.from_yaml(path)
    except Exception as e:
        typer.echo(f"❌ Error loading report: {e}")
        raise typer.Exit(1)

    video = saved.video
    typer.echo(f"📁 {video.title}")
    typer.echo(f"   Channel: {video.channel_title}")
    typer.echo(f"   Views: {video.view_count:,} · Subscribers: {video.subscriber_count:,}")
    typer.echo(f"   Performance ratio: x{video.performance_ratio:.1f}")
    typer.echo(f"   Comments analyzed: {len(saved.comments)}")
    _print_report(saved)

    if saved.script:
        typer.echo("")
        typer.echo(saved.script.to_markdown())


@app.command()
def dashboard(
    port: int = typer.Option(
        8501,
        "--port",
        help="Port for the Streamlit server"
    ),
) -> None:
    """Open the browser dashboard."""
    import subprocess
    import sys

    app_path = Path(__file__).parent / "dashboard.py"
    typer.echo(f"🌐 Starting dashboard on http://localhost:{port}")
    result = subprocess.run(
        [sys.executable, "-m", "streamlit", "run", str(app_path), "--server.port", str(port)]
    )
    raise typer.Exit(result.returncode)


def _print_report(report: StrategyReport) -> None:
    """Print the analysis section of a report."""
    analysis = report.analysis
    if analysis is None:
        typer.echo("\n⏳ Not analyzed yet")
        return

    typer.echo(f"\n💬 Audience sentiment:")
    typer.echo(f'   "{analysis.audience_sentiment}"')

    typer.echo(f"\n🏷️  Top themes:")
    typer.echo("   " + " ".join(f"#{theme}" for theme in analysis.top_themes))

    typer.echo(f"\n⚠️  What viewers missed:")
    for point in analysis.improvement_points:
        typer.echo(f"   • {point}")

    heading = "Recommended keywords" if analysis.mode == AnalysisMode.KEYWORDS else "New content ideas"
    typer.echo(f"\n💡 {heading}:")
    for i, suggestion in enumerate(analysis.suggestions, 1):
        typer.echo(f"   {i}. {suggestion}")


if __name__ == "__main__":
    app()
