import pytest

from ytstrategy.config import config


class FakeResponse:
    def __init__(self, payload=None, status_code=200, text=""):
        self._payload = payload
        self.status_code = status_code
        self.text = text or str(payload)

    def json(self):
        if self._payload is None:
            raise ValueError("No JSON object could be decoded")
        return self._payload


class FakeSession:
    """Stands in for requests.Session, answering by endpoint name.

    Route values may be a payload dict, a FakeResponse, an exception to raise,
    or a list of those consumed in order.
    """

    def __init__(self, routes=None):
        self.routes = routes or {}
        self.calls = []

    def _answer(self, endpoint):
        value = self.routes[endpoint]
        if isinstance(value, list):
            value = value.pop(0)
        if isinstance(value, Exception):
            raise value
        if isinstance(value, FakeResponse):
            return value
        return FakeResponse(value)

    def get(self, url, params=None, timeout=None):
        endpoint = url.rsplit("/", 1)[-1]
        self.calls.append((endpoint, params))
        return self._answer(endpoint)

    def post(self, url, json=None, headers=None, timeout=None):
        self.calls.append((url, {"json": json, "headers": headers, "timeout": timeout}))
        return self._answer("post")


class FakeTextClient:
    model = "fake-model"

    def __init__(self, responses):
        self.responses = list(responses)
        self.calls = []

    def create_message(
        self, prompt, max_tokens=4096, system=None, temperature=0.7, response_schema=None
    ):
        self.calls.append(
            {"prompt": prompt, "system": system, "response_schema": response_schema}
        )
        return self.responses.pop(0)


IDEAS_REPLY = {
    "topThemes": ["battery life", "camera"],
    "audienceSentiment": "Mostly positive, skeptical about the price.",
    "improvementPoints": ["No low-light samples", "Too long intro"],
    "contentSuggestions": ["Night camera test", "Battery drain after 1 month", "Price vs value"],
}

KEYWORDS_REPLY = {
    "topThemes": ["meal prep"],
    "audienceSentiment": "Enthusiastic",
    "improvementPoints": ["Show exact portions"],
    "recommendedKeywords": ["budget meal prep", "high protein", "5 minute lunch", "freezer meals", "vegan bowls"],
}

SCRIPT_REPLY = {
    "title": "Meal Prep on $20 a Week",
    "concept": "A full week of lunches on a tight budget.",
    "outline": {
        "intro": "What if lunch cost less than a coffee?",
        "body": ["Shopping list", "Batch cooking", "Storage tips"],
        "outro": "Subscribe for next week's menu.",
    },
}


def search_payload(*video_ids):
    return {"items": [{"id": {"kind": "youtube#video", "videoId": v}} for v in video_ids]}


def video_item(video_id, channel_id, views, comments="5", duration="PT4M13S"):
    stats = {"commentCount": comments}
    if views is not None:
        stats["viewCount"] = views
    return {
        "id": video_id,
        "snippet": {
            "title": f"Title {video_id}",
            "channelId": channel_id,
            "channelTitle": f"Channel {channel_id}",
            "publishedAt": "2024-05-01T12:00:00Z",
            "thumbnails": {
                "default": {"url": f"https://i.ytimg.com/vi/{video_id}/default.jpg"},
                "high": {"url": f"https://i.ytimg.com/vi/{video_id}/hqdefault.jpg"},
            },
        },
        "statistics": stats,
        "contentDetails": {"duration": duration},
    }


def channel_item(channel_id, subscribers):
    stats = {"videoCount": "10"}
    if subscribers is None:
        stats["hiddenSubscriberCount"] = True
    else:
        stats["subscriberCount"] = subscribers
    return {"id": channel_id, "statistics": stats}


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch):
    """Keep tests independent of keys in the developer's environment."""
    monkeypatch.setattr(config, "youtube_api_key", "")
    monkeypatch.setattr(config, "gemini_api_key", "")
    monkeypatch.setattr(config, "anthropic_api_key", "")
    monkeypatch.setattr(config, "google_cloud_project", "")
    monkeypatch.setattr(config, "ai_provider", "gemini")
    monkeypatch.setattr(config, "region_code", "")
    monkeypatch.setattr(config, "relevance_language", "")
    monkeypatch.setattr(config, "daily_quota", 10_000)


@pytest.fixture
def no_sleep(monkeypatch):
    import time

    monkeypatch.setattr(time, "sleep", lambda seconds: None)
