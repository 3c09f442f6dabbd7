"""Trigger node types: the nodes a run can start from."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict

from .registry import ConfigField, choices, register_node_type


@register_node_type(
    node_type="youtube-trigger",
    display_name="YouTube Trigger",
    description="Triggers workflow when new video is uploaded to a channel",
    category="Triggers",
    config_fields=(
        ConfigField("channelId", "Channel ID", "text", placeholder="UC...", required=True),
        ConfigField("pollInterval", "Poll Interval (min)", "number", placeholder="15"),
        ConfigField("filterKeywords", "Filter Keywords", "text", placeholder="tutorial, review"),
    ),
    default_config={"channelId": "", "pollInterval": 15, "filterKeywords": ""},
    trigger=True,
    icon="▶️",
    color="#ff0000",
)
def youtube_trigger(config: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "message": "New video detected",
        "videoId": "abc123xyz",
        "title": "Amazing Tutorial Video",
        "channelTitle": "Tech Channel",
        "publishedAt": datetime.now(timezone.utc).isoformat(),
    }


@register_node_type(
    node_type="schedule-trigger",
    display_name="Schedule Trigger",
    description="Triggers workflow on a schedule",
    category="Triggers",
    config_fields=(
        ConfigField("cronExpression", "Cron Expression", "text", placeholder="0 */6 * * *"),
        ConfigField("timezone", "Timezone", "select", options=choices(
            ("UTC", "UTC"),
            ("America/New_York", "New York"),
            ("America/Los_Angeles", "Los Angeles"),
            ("Europe/London", "London"),
        )),
    ),
    default_config={"cronExpression": "0 */6 * * *", "timezone": "UTC"},
    trigger=True,
    icon="⏰",
    color="#9d4edd",
)
def schedule_trigger(config: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "message": f"Schedule fired ({config.get('cronExpression') or '0 */6 * * *'})",
        "firedAt": datetime.now(timezone.utc).isoformat(),
        "timezone": config.get("timezone") or "UTC",
    }


@register_node_type(
    node_type="webhook-trigger",
    display_name="Webhook Trigger",
    description="Triggers workflow from external webhook",
    category="Triggers",
    config_fields=(
        ConfigField("webhookPath", "Webhook Path", "text", placeholder="/youtube-webhook"),
        ConfigField("method", "HTTP Method", "select", options=choices(
            ("POST", "POST"),
            ("GET", "GET"),
        )),
    ),
    default_config={"webhookPath": "/youtube-webhook", "method": "POST"},
    trigger=True,
    icon="🔗",
    color="#00d4ff",
)
def webhook_trigger(config: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "message": f"Webhook received on {config.get('webhookPath') or '/'}",
        "method": config.get("method") or "POST",
        "receivedAt": datetime.now(timezone.utc).isoformat(),
    }
