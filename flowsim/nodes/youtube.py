"""YouTube data node types."""

from __future__ import annotations

import random
from typing import Any, Dict

from .registry import ConfigField, choices, register_node_type

CATEGORY = "YouTube"
COLOR = "#ff0000"

_VIDEO_ID_HINT = "{{$node.input.videoId}}"


@register_node_type(
    node_type="get-video-details",
    display_name="Get Video Details",
    description="Fetches detailed information about a YouTube video",
    category=CATEGORY,
    config_fields=(
        ConfigField("videoId", "Video ID", "text", placeholder="dQw4w9WgXcQ or " + _VIDEO_ID_HINT),
        ConfigField("parts", "Data Parts", "select", options=choices(
            ("snippet,statistics", "Snippet & Statistics"),
            ("snippet,statistics,contentDetails", "All Details"),
            ("snippet", "Snippet Only"),
        )),
    ),
    default_config={"videoId": "", "parts": "snippet,statistics"},
    icon="📹",
    color=COLOR,
)
def get_video_details(config: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "message": "Fetched video details",
        "title": "Sample Video Title",
        "viewCount": random.randrange(1_000_000),
        "likeCount": random.randrange(50_000),
        "commentCount": random.randrange(5_000),
        "duration": "PT15M30S",
    }


@register_node_type(
    node_type="get-channel-videos",
    display_name="Get Channel Videos",
    description="Fetches recent videos from a YouTube channel",
    category=CATEGORY,
    config_fields=(
        ConfigField("channelId", "Channel ID", "text", placeholder="UC..."),
        ConfigField("maxResults", "Max Results", "number", placeholder="10"),
        ConfigField("order", "Order By", "select", options=choices(
            ("date", "Date (Newest)"),
            ("viewCount", "View Count"),
            ("rating", "Rating"),
        )),
    ),
    default_config={"channelId": "", "maxResults": 10, "order": "date"},
    icon="📺",
    color=COLOR,
)
def get_channel_videos(config: Dict[str, Any]) -> Dict[str, Any]:
    # The search API pages at 50
    count = min(int(config.get("maxResults") or 10), 50)
    return {
        "message": f"Found {count} videos",
        "items": [
            {"videoId": f"video_{i}", "title": f"Video {i + 1}"}
            for i in range(count)
        ],
    }


@register_node_type(
    node_type="search-videos",
    display_name="Search Videos",
    description="Search for videos on YouTube",
    category=CATEGORY,
    config_fields=(
        ConfigField("query", "Search Query", "text", placeholder="AI tutorials"),
        ConfigField("maxResults", "Max Results", "number", placeholder="25"),
        ConfigField("publishedAfter", "Published After", "text", placeholder="2024-01-01"),
        ConfigField("order", "Order By", "select", options=choices(
            ("relevance", "Relevance"),
            ("date", "Date"),
            ("viewCount", "View Count"),
        )),
    ),
    default_config={"query": "", "maxResults": 25, "publishedAfter": "", "order": "relevance"},
    icon="🔍",
    color=COLOR,
)
def search_videos(config: Dict[str, Any]) -> Dict[str, Any]:
    query = config.get("query") or "Result"
    return {
        "message": f"Found {config.get('maxResults') or 25} matching videos",
        "totalResults": random.randrange(10_000),
        "items": [
            {"videoId": f"search_{i}", "title": f"{query} - Video {i + 1}"}
            for i in range(5)
        ],
    }


@register_node_type(
    node_type="download-transcript",
    display_name="Download Transcript",
    description="Downloads video transcript/captions",
    category=CATEGORY,
    config_fields=(
        ConfigField("videoId", "Video ID", "text", placeholder=_VIDEO_ID_HINT),
        ConfigField("language", "Language", "select", options=choices(
            ("en", "English"),
            ("es", "Spanish"),
            ("fr", "French"),
            ("de", "German"),
            ("auto", "Auto-detect"),
        )),
    ),
    default_config={"videoId": "", "language": "en"},
    icon="📝",
    color=COLOR,
)
def download_transcript(config: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "message": "Transcript downloaded",
        "language": config.get("language") or "en",
        "text": "This is a sample transcript text that would contain the full video captions...",
        "wordCount": 1250,
    }


@register_node_type(
    node_type="get-comments",
    display_name="Get Comments",
    description="Fetches comments from a YouTube video",
    category=CATEGORY,
    config_fields=(
        ConfigField("videoId", "Video ID", "text", placeholder=_VIDEO_ID_HINT),
        ConfigField("maxResults", "Max Comments", "number", placeholder="100"),
        ConfigField("order", "Order By", "select", options=choices(
            ("relevance", "Relevance"),
            ("time", "Time (Newest)"),
        )),
    ),
    default_config={"videoId": "", "maxResults": 100, "order": "relevance"},
    icon="💬",
    color=COLOR,
)
def get_comments(config: Dict[str, Any]) -> Dict[str, Any]:
    # The comments API pages at 100
    fetched = min(int(config.get("maxResults") or 100), 100)
    return {
        "message": f"Fetched {fetched} comments",
        "items": [
            {
                "author": f"User {i + 1}",
                "text": f"This is comment {i + 1}. Great video!",
                "likeCount": random.randrange(100),
            }
            for i in range(5)
        ],
    }
