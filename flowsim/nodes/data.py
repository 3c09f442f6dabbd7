"""Data processing node types.

``merge`` and ``split`` have no dedicated mock behaviour and produce the
registry's generic output.
"""

from __future__ import annotations

from typing import Any, Dict

from .registry import (
    ConfigField,
    NodeDefinition,
    choices,
    register_node_definition,
    register_node_type,
)

CATEGORY = "Data Processing"
COLOR = "#ffc300"


@register_node_type(
    node_type="filter",
    display_name="Filter",
    description="Filters data based on conditions",
    category=CATEGORY,
    config_fields=(
        ConfigField("field", "Field to Check", "text", placeholder="viewCount"),
        ConfigField("operator", "Operator", "select", options=choices(
            ("equals", "Equals"),
            ("notEquals", "Not Equals"),
            ("greaterThan", "Greater Than"),
            ("lessThan", "Less Than"),
            ("contains", "Contains"),
        )),
        ConfigField("value", "Value", "text", placeholder="1000"),
    ),
    default_config={"field": "", "operator": "greaterThan", "value": ""},
    icon="🔀",
    color=COLOR,
)
def filter_items(config: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "message": "Data filtered",
        "inputCount": 10,
        "outputCount": 7,
        "filtered": 3,
    }


@register_node_type(
    node_type="transform",
    display_name="Transform Data",
    description="Transforms and maps data fields",
    category=CATEGORY,
    config_fields=(
        ConfigField(
            "mapping",
            "Field Mapping (JSON)",
            "json",
            placeholder='{"title": "{{title}}", "views": "{{statistics.viewCount}}"}',
        ),
        ConfigField("keepOriginal", "Keep Original Fields", "boolean"),
    ),
    default_config={"mapping": "{}", "keepOriginal": False},
    icon="⚙️",
    color=COLOR,
)
def transform(config: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "message": "Data transformed",
        "fields": ["title", "views", "likes"],
    }


register_node_definition(NodeDefinition(
    node_type="merge",
    display_name="Merge Data",
    description="Merges data from multiple sources",
    category=CATEGORY,
    config_fields=(
        ConfigField("mode", "Merge Mode", "select", options=choices(
            ("append", "Append"),
            ("combine", "Combine by Key"),
            ("keepMatched", "Keep Matched"),
        )),
        ConfigField("mergeKey", "Merge Key", "text", placeholder="videoId"),
    ),
    default_config={"mode": "append", "mergeKey": ""},
    icon="🔗",
    color=COLOR,
))

register_node_definition(NodeDefinition(
    node_type="split",
    display_name="Split Items",
    description="Splits array into individual items",
    category=CATEGORY,
    config_fields=(
        ConfigField("fieldToSplit", "Field to Split", "text", placeholder="items"),
    ),
    default_config={"fieldToSplit": "items"},
    icon="✂️",
    color=COLOR,
))
