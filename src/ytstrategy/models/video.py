"""Video metadata model."""

from typing import Optional
from pydantic import BaseModel, Field

# Ratio above which a video is flagged as an outlier in listings
OUTLIER_RATIO = 2.0


class VideoData(BaseModel):
    """A search result enriched with channel statistics."""

    id: str = Field(..., description="YouTube video ID")
    title: str = Field(..., description="Video title")
    thumbnail: str = Field(default="", description="Thumbnail URL")
    channel_title: str = Field(default="", description="Channel display name")
    channel_id: str = Field(default="", description="Channel ID")
    published_at: str = Field(default="", description="Publish time (ISO 8601)")
    view_count: int = Field(default=0, description="Total views", ge=0)
    subscriber_count: int = Field(default=1, description="Channel subscribers, floored at 1", ge=1)
    comment_count: int = Field(default=0, description="Total comments", ge=0)
    performance_ratio: float = Field(default=0.0, description="Views per subscriber")
    duration: Optional[str] = Field(None, description="ISO 8601 duration")

    class Config:
        """Pydantic config."""
        frozen = False

    @property
    def url(self) -> str:
        """Return the watch URL."""
        return f"https://www.youtube.com/watch?v={self.id}"

    @property
    def duration_seconds(self) -> Optional[int]:
        """Return the duration in seconds, if known."""
        from ..metrics import parse_iso8601_duration

        return parse_iso8601_duration(self.duration)

    @property
    def is_outlier(self) -> bool:
        """Whether the video outperformed its channel size."""
        return self.performance_ratio > OUTLIER_RATIO
