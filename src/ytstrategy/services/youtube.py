"""YouTube Data API v3 client wrapper."""

import logging
from dataclasses import dataclass
from typing import Iterable, Optional

import requests

from ..config import config
from ..metrics import performance_ratio, rank_by_performance, to_int
from ..models import VideoData

logger = logging.getLogger(__name__)

API_BASE = "https://www.googleapis.com/youtube/v3"

# Quota cost per call, per the Data API quota table
QUOTA_COSTS = {
    "search": 100,
    "videos": 1,
    "channels": 1,
    "commentThreads": 1,
}

VIDEO_DURATIONS = ("any", "short", "medium", "long")

# Maximum ids per videos.list / channels.list request
_ID_CHUNK = 50


class YouTubeAPIError(Exception):
    """Raised when the Data API returns an error response."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


@dataclass
class QuotaTracker:
    """Estimated daily quota usage for this process."""

    limit: int = 10_000
    used: int = 0

    def add(self, cost: int) -> None:
        self.used += int(cost)

    @property
    def remaining(self) -> int:
        return max(0, self.limit - self.used)

    @property
    def fraction(self) -> float:
        return min(1.0, self.used / self.limit) if self.limit else 0.0

    def reset(self) -> None:
        self.used = 0


def _chunks(items: list[str], size: int) -> Iterable[list[str]]:
    for i in range(0, len(items), size):
        yield items[i:i + size]


def _pick_thumbnail(thumbnails: dict) -> str:
    for key in ("high", "medium", "default"):
        url = thumbnails.get(key, {}).get("url")
        if url:
            return url
    return ""


class YouTubeClient:
    """Client for the search -> videos -> channels request chain."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
        quota: Optional[QuotaTracker] = None,
    ) -> None:
        """Initialize the YouTube client.

        Args:
            api_key: Data API key. Defaults to YOUTUBE_API_KEY env var.
            session: HTTP session to reuse. Created if not provided.
            timeout: Request timeout in seconds. Defaults to config.request_timeout.
            quota: Tracker charged for every request made.
        """
        self._api_key = api_key or config.youtube_api_key
        if not self._api_key:
            raise ValueError(
                "YouTube API key not provided. Set YOUTUBE_API_KEY env var."
            )

        self._session = session or requests.Session()
        self._timeout = timeout or config.request_timeout
        self.quota = quota or QuotaTracker(limit=config.daily_quota)

    def _get(self, endpoint: str, params: dict) -> dict:
        """GET an API endpoint and return the decoded body.

        Raises:
            YouTubeAPIError: If the request fails, or the response carries an
                error or a non-2xx status.
        """
        url = f"{API_BASE}/{endpoint}"
        query = {**params, "key": self._api_key}

        logger.debug(f"GET {endpoint} {params}")
        try:
            response = self._session.get(url, params=query, timeout=self._timeout)
        except requests.RequestException as e:
            raise YouTubeAPIError(f"Request failed: {e}") from e
        finally:
            # Invalid requests are billed as well
            self.quota.add(QUOTA_COSTS.get(endpoint, 1))

        try:
            data = response.json()
        except ValueError:
            data = {}

        if isinstance(data, dict) and data.get("error"):
            error = data["error"]
            message = error.get("message") if isinstance(error, dict) else str(error)
            raise YouTubeAPIError(message or "Unknown API error", response.status_code)

        if not 200 <= response.status_code < 300:
            raise YouTubeAPIError(
                f"{response.status_code}: {response.text[:200]}", response.status_code
            )

        return data

    def search_video_ids(
        self,
        query: str,
        video_duration: str = "any",
        max_results: Optional[int] = None,
        order: str = "relevance",
    ) -> list[str]:
        """Search for videos and return their ids in result order.

        Args:
            query: Search keyword.
            video_duration: 'any', 'short' (< 4 min), 'medium' (4-20 min) or 'long' (> 20 min).
            max_results: Number of results (1-50). Defaults to config.max_results.
            order: Search order, e.g. 'relevance', 'viewCount', 'date'.
        """
        if video_duration not in VIDEO_DURATIONS:
            raise ValueError(
                f"Invalid video duration: {video_duration}. "
                f"Expected one of {', '.join(VIDEO_DURATIONS)}"
            )

        params = {
            "part": "snippet",
            "q": query,
            "type": "video",
            "maxResults": max_results or config.max_results,
            "order": order,
            "videoDuration": video_duration,
        }
        if config.region_code:
            params["regionCode"] = config.region_code
        if config.relevance_language:
            params["relevanceLanguage"] = config.relevance_language

        data = self._get("search", params)

        seen: set[str] = set()
        ids: list[str] = []
        for item in data.get("items", []):
            video_id = item.get("id", {}).get("videoId")
            if video_id and video_id not in seen:
                seen.add(video_id)
                ids.append(video_id)

        logger.info(f"Search '{query}' returned {len(ids)} videos")
        return ids

    def fetch_video_details(self, video_ids: list[str]) -> list[dict]:
        """Fetch statistics, snippet and contentDetails for the given ids."""
        items: list[dict] = []
        for chunk in _chunks(list(video_ids), _ID_CHUNK):
            data = self._get(
                "videos",
                {"part": "statistics,snippet,contentDetails", "id": ",".join(chunk)},
            )
            items.extend(data.get("items", []))
        return items

    def fetch_subscriber_counts(self, channel_ids: Iterable[str]) -> dict[str, int]:
        """Map channel id to subscriber count, with hidden counts as 1."""
        unique = list(dict.fromkeys(cid for cid in channel_ids if cid))
        counts: dict[str, int] = {}
        for chunk in _chunks(unique, _ID_CHUNK):
            data = self._get("channels", {"part": "statistics", "id": ",".join(chunk)})
            for item in data.get("items", []):
                stats = item.get("statistics", {})
                counts[item["id"]] = to_int(stats.get("subscriberCount"), default=1)
        return counts

    def search_videos(
        self,
        query: str,
        video_duration: str = "any",
        max_results: Optional[int] = None,
    ) -> list[VideoData]:
        """Search, enrich with channel statistics and rank by performance ratio.

        Returns:
            VideoData list sorted by performance ratio, highest first.

        Raises:
            YouTubeAPIError: If any request in the chain fails.
        """
        video_ids = self.search_video_ids(query, video_duration, max_results)
        if not video_ids:
            return []
        return rank_by_performance(self.fetch_videos(video_ids))

    def fetch_videos(self, video_ids: list[str]) -> list[VideoData]:
        """Fetch videos by id with their channels' subscriber counts.

        Ids the API does not know are silently absent from the result.
        """
        items = self.fetch_video_details(video_ids)
        subscribers = self.fetch_subscriber_counts(
            item.get("snippet", {}).get("channelId", "") for item in items
        )
        return [self._to_video(item, subscribers) for item in items]

    @staticmethod
    def _to_video(item: dict, subscribers: dict[str, int]) -> VideoData:
        snippet = item.get("snippet", {})
        stats = item.get("statistics", {})
        channel_id = snippet.get("channelId", "")

        views = to_int(stats.get("viewCount"), default=0)
        subs = max(subscribers.get(channel_id, 1), 1)

        return VideoData(
            id=item["id"],
            title=snippet.get("title", ""),
            thumbnail=_pick_thumbnail(snippet.get("thumbnails", {})),
            channel_title=snippet.get("channelTitle", ""),
            channel_id=channel_id,
            published_at=snippet.get("publishedAt", ""),
            view_count=views,
            subscriber_count=subs,
            comment_count=to_int(stats.get("commentCount"), default=0),
            performance_ratio=performance_ratio(views, subs),
            duration=item.get("contentDetails", {}).get("duration"),
        )

    def fetch_comments(self, video_id: str, max_results: int = 50) -> list[str]:
        """Return top-level comment texts, or an empty list on any failure.

        Comments are often disabled, so failures here are not fatal.
        """
        try:
            data = self._get(
                "commentThreads",
                {
                    "part": "snippet",
                    "videoId": video_id,
                    "maxResults": max_results,
                    "textFormat": "plainText",
                },
            )
        except (requests.RequestException, YouTubeAPIError) as e:
            logger.warning(f"Could not fetch comments for {video_id}: {e}")
            return []

        comments: list[str] = []
        for item in data.get("items", []):
            text = (
                item.get("snippet", {})
                .get("topLevelComment", {})
                .get("snippet", {})
                .get("textDisplay")
            )
            if text:
                comments.append(text)

        logger.info(f"Fetched {len(comments)} comments for {video_id}")
        return comments
