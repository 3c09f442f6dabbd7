"""AI processing node types."""

from __future__ import annotations

from typing import Any, Dict

from .registry import ConfigField, choices, register_node_type

CATEGORY = "AI Processing"
COLOR = "#00ff9d"


@register_node_type(
    node_type="ai-summarize",
    display_name="AI Summarize",
    description="Summarizes content using AI",
    category=CATEGORY,
    config_fields=(
        ConfigField("inputField", "Input Field", "text", placeholder="{{$node.input.transcript}}"),
        ConfigField("model", "AI Model", "select", options=choices(
            ("gpt-4", "GPT-4"),
            ("gpt-3.5-turbo", "GPT-3.5 Turbo"),
            ("claude-3", "Claude 3"),
        )),
        ConfigField("summaryLength", "Summary Length", "select", options=choices(
            ("brief", "Brief (1-2 sentences)"),
            ("medium", "Medium (1 paragraph)"),
            ("detailed", "Detailed (multiple paragraphs)"),
        )),
        ConfigField("customPrompt", "Custom Prompt", "textarea", placeholder="Additional instructions..."),
    ),
    default_config={"inputField": "", "model": "gpt-4", "summaryLength": "medium", "customPrompt": ""},
    icon="🤖",
    color=COLOR,
)
def ai_summarize(config: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "message": "Content summarized",
        "summary": (
            "This video discusses the key aspects of the topic, providing insights "
            "into best practices and common pitfalls to avoid."
        ),
        "model": config.get("model") or "gpt-4",
    }


@register_node_type(
    node_type="ai-extract-topics",
    display_name="Extract Topics",
    description="Extracts main topics and keywords using AI",
    category=CATEGORY,
    config_fields=(
        ConfigField("inputField", "Input Field", "text", placeholder="{{$node.input.transcript}}"),
        ConfigField("maxTopics", "Max Topics", "number", placeholder="10"),
        ConfigField("includeTimestamps", "Include Timestamps", "boolean"),
    ),
    default_config={"inputField": "", "maxTopics": 10, "includeTimestamps": True},
    icon="🏷️",
    color=COLOR,
)
def ai_extract_topics(config: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "message": f"Extracted {config.get('maxTopics') or 10} topics",
        "topics": ["Introduction", "Main Concepts", "Best Practices", "Examples", "Conclusion"],
        "keywords": ["tutorial", "guide", "tips", "learn"],
    }


@register_node_type(
    node_type="sentiment-analysis",
    display_name="Sentiment Analysis",
    description="Analyzes sentiment of text content",
    category=CATEGORY,
    config_fields=(
        ConfigField("inputField", "Input Field", "text", placeholder="{{$node.input.comments}}"),
        ConfigField("granularity", "Granularity", "select", options=choices(
            ("overall", "Overall Score"),
            ("per-item", "Per Item"),
        )),
    ),
    default_config={"inputField": "", "granularity": "per-item"},
    icon="😊",
    color=COLOR,
)
def sentiment_analysis(config: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "message": "Sentiment analyzed",
        "overall": "positive",
        "score": 0.78,
        "breakdown": {"positive": 65, "neutral": 25, "negative": 10},
    }


@register_node_type(
    node_type="generate-content",
    display_name="Generate Content",
    description="Generates content based on video data",
    category=CATEGORY,
    config_fields=(
        ConfigField("contentType", "Content Type", "select", options=choices(
            ("blog-post", "Blog Post"),
            ("social-post", "Social Media Post"),
            ("newsletter", "Newsletter"),
            ("script", "Video Script"),
        )),
        ConfigField("inputContext", "Input Context", "text", placeholder="{{$node.input}}"),
        ConfigField("tone", "Tone", "select", options=choices(
            ("professional", "Professional"),
            ("casual", "Casual"),
            ("humorous", "Humorous"),
        )),
        ConfigField("additionalInstructions", "Additional Instructions", "textarea"),
    ),
    default_config={
        "contentType": "blog-post",
        "inputContext": "",
        "tone": "professional",
        "additionalInstructions": "",
    },
    icon="✍️",
    color=COLOR,
)
def generate_content(config: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "message": f"Generated {config.get('contentType') or 'blog-post'}",
        "content": "Generated content based on the video analysis would appear here...",
        "wordCount": 500,
    }
