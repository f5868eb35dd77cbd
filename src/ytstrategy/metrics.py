"""Performance ratio, ranking and filtering of search results."""

import re
from typing import Any, Iterable, Optional

from .models.video import VideoData

_INT_PREFIX = re.compile(r"^\s*([+-]?\d+)")
_ISO_DURATION = re.compile(
    r"^P(?:(?P<weeks>\d+)W)?(?:(?P<days>\d+)D)?"
    r"(?:T(?:(?P<hours>\d+)H)?(?:(?P<minutes>\d+)M)?(?:(?P<seconds>\d+)S)?)?$"
)


def to_int(value: Any, default: int = 0) -> int:
    """Leniently parse an API statistic.

    The Data API returns counts as strings and omits hidden ones. Anything
    that does not start with digits, or parses to zero, yields `default`.
    """
    if value is None:
        return default
    if isinstance(value, int):
        return value or default
    match = _INT_PREFIX.match(str(value))
    if not match:
        return default
    return int(match.group(1)) or default


def performance_ratio(view_count: int, subscriber_count: int) -> float:
    """Return views per subscriber, with the subscriber count floored at 1."""
    return view_count / max(subscriber_count, 1)


def rank_by_performance(videos: Iterable[VideoData]) -> list[VideoData]:
    """Return videos sorted by performance ratio, highest first.

    The sort is stable, so equal ratios keep their original (relevance) order.
    """
    return sorted(videos, key=lambda v: v.performance_ratio, reverse=True)


def filter_videos(
    videos: Iterable[VideoData],
    min_ratio: Optional[float] = None,
    min_views: Optional[int] = None,
    min_duration: Optional[int] = None,
    max_duration: Optional[int] = None,
) -> list[VideoData]:
    """Drop videos below the given thresholds.

    Duration bounds are in seconds; videos with an unknown duration are kept.
    """
    kept: list[VideoData] = []
    for video in videos:
        if min_ratio is not None and video.performance_ratio < min_ratio:
            continue
        if min_views is not None and video.view_count < min_views:
            continue

        seconds = video.duration_seconds
        if seconds is not None:
            if min_duration is not None and seconds < min_duration:
                continue
            if max_duration is not None and seconds > max_duration:
                continue

        kept.append(video)
    return kept


def parse_iso8601_duration(value: Optional[str]) -> Optional[int]:
    """Parse a contentDetails duration such as 'PT1H2M3S' into seconds."""
    if not value:
        return None
    match = _ISO_DURATION.match(value.strip())
    if not match or not any(match.groupdict().values()):
        return None

    parts = {k: int(v or 0) for k, v in match.groupdict().items()}
    return (
        parts["weeks"] * 604800
        + parts["days"] * 86400
        + parts["hours"] * 3600
        + parts["minutes"] * 60
        + parts["seconds"]
    )


def format_duration(seconds: Optional[int]) -> str:
    """Format seconds as MM:SS, or HH:MM:SS from one hour up."""
    if seconds is None:
        return ""
    h = seconds // 3600
    m = (seconds % 3600) // 60
    s = seconds % 60
    return f"{h:02d}:{m:02d}:{s:02d}" if h > 0 else f"{m:02d}:{s:02d}"
