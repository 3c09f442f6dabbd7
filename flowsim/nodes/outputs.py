"""Output action node types."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict

from .registry import ConfigField, choices, register_node_type

CATEGORY = "Output"
COLOR = "#ff6b35"


@register_node_type(
    node_type="send-email",
    display_name="Send Email",
    description="Sends an email with the data",
    category=CATEGORY,
    config_fields=(
        ConfigField("to", "To", "text", placeholder="email@example.com"),
        ConfigField("subject", "Subject", "text", placeholder="New Video Alert: {{title}}"),
        ConfigField("body", "Email Body", "textarea", placeholder="Email content with {{variables}}"),
    ),
    default_config={"to": "", "subject": "", "body": ""},
    icon="📧",
    color=COLOR,
)
def send_email(config: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "message": f"Email sent to {config.get('to') or 'recipient'}",
        "status": "delivered",
    }


@register_node_type(
    node_type="post-slack",
    display_name="Post to Slack",
    description="Posts a message to Slack",
    category=CATEGORY,
    config_fields=(
        ConfigField("channel", "Channel", "text", placeholder="#youtube-updates"),
        ConfigField("message", "Message", "textarea", placeholder="New video: {{title}}"),
        ConfigField("includeAttachment", "Include Rich Attachment", "boolean"),
    ),
    default_config={"channel": "", "message": "", "includeAttachment": True},
    icon="💬",
    color=COLOR,
)
def post_slack(config: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "message": f"Posted to {config.get('channel') or '#channel'}",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@register_node_type(
    node_type="save-database",
    display_name="Save to Database",
    description="Saves data to a database",
    category=CATEGORY,
    config_fields=(
        ConfigField("table", "Table/Collection", "text", placeholder="videos"),
        ConfigField("operation", "Operation", "select", options=choices(
            ("insert", "Insert"),
            ("upsert", "Upsert"),
            ("update", "Update"),
        )),
        ConfigField("upsertKey", "Upsert Key", "text", placeholder="videoId"),
    ),
    default_config={"table": "", "operation": "upsert", "upsertKey": "videoId"},
    icon="💾",
    color=COLOR,
)
def save_database(config: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "message": f"Saved to {config.get('table') or 'table'}",
        "recordsAffected": 1,
    }


@register_node_type(
    node_type="post-twitter",
    display_name="Post to Twitter/X",
    description="Posts a tweet",
    category=CATEGORY,
    config_fields=(
        ConfigField("text", "Tweet Text", "textarea", placeholder="🎬 New video: {{title}}"),
        ConfigField("includeLink", "Include Video Link", "boolean"),
    ),
    default_config={"text": "", "includeLink": True},
    icon="🐦",
    color=COLOR,
)
def post_twitter(config: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "message": "Tweet posted",
        "tweetId": "1234567890",
    }


@register_node_type(
    node_type="create-notion",
    display_name="Create Notion Page",
    description="Creates a page in Notion",
    category=CATEGORY,
    config_fields=(
        ConfigField("databaseId", "Database ID", "text", placeholder="xxx-xxx-xxx"),
        ConfigField("title", "Page Title", "text", placeholder="{{title}}"),
        ConfigField(
            "properties",
            "Properties (JSON)",
            "json",
            placeholder='{"Status": "New", "URL": "{{url}}"}',
        ),
    ),
    default_config={"databaseId": "", "title": "", "properties": "{}"},
    icon="📓",
    color=COLOR,
)
def create_notion(config: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "message": "Notion page created",
        "pageId": "notion-page-123",
    }


@register_node_type(
    node_type="http-request",
    display_name="HTTP Request",
    description="Makes an HTTP request",
    category=CATEGORY,
    config_fields=(
        ConfigField("url", "URL", "text", placeholder="https://api.example.com/webhook"),
        ConfigField("method", "Method", "select", options=choices(
            ("GET", "GET"),
            ("POST", "POST"),
            ("PUT", "PUT"),
            ("DELETE", "DELETE"),
        )),
        ConfigField("headers", "Headers (JSON)", "json", placeholder='{"Authorization": "Bearer xxx"}'),
        ConfigField("body", "Body (JSON)", "json", placeholder="{{$node.input}}"),
    ),
    default_config={"url": "", "method": "POST", "headers": "{}", "body": "{}"},
    icon="🌐",
    color=COLOR,
)
def http_request(config: Dict[str, Any]) -> Dict[str, Any]:
    # Simulated only; no request is sent
    return {
        "message": f"{config.get('method') or 'POST'} request completed",
        "statusCode": 200,
        "response": {"success": True},
    }
