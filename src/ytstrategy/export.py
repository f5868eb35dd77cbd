"""Tabular export of ranked search results."""

from pathlib import Path
from typing import Iterable

import pandas as pd

from .metrics import format_duration
from .models import VideoData

COLUMNS = [
    "title",
    "channel",
    "view_count",
    "subscriber_count",
    "performance_ratio",
    "comment_count",
    "length",
    "published_at",
    "url",
]


def videos_to_dataframe(videos: Iterable[VideoData]) -> pd.DataFrame:
    """Build a DataFrame of videos in display order."""
    rows = [
        {
            "title": v.title,
            "channel": v.channel_title,
            "view_count": v.view_count,
            "subscriber_count": v.subscriber_count,
            "performance_ratio": round(v.performance_ratio, 2),
            "comment_count": v.comment_count,
            "length": format_duration(v.duration_seconds),
            "published_at": v.published_at,
            "url": v.url,
        }
        for v in videos
    ]
    return pd.DataFrame(rows, columns=COLUMNS)


def videos_to_csv(videos: Iterable[VideoData]) -> bytes:
    """Encode videos as CSV with a BOM so spreadsheets detect UTF-8."""
    return videos_to_dataframe(videos).to_csv(index=False).encode("utf-8-sig")


def save_csv(videos: Iterable[VideoData], path: Path) -> None:
    """Write videos to a CSV file."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(videos_to_csv(videos))
