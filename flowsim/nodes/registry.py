"""Node Type Registry

This module provides the decorator-based catalog of node types the editor
offers and the executor consults.

Key Components:
- ConfigField: Schema for one configuration field
- NodeDefinition: Immutable metadata for a node type
- register_node_type: Decorator registering a type and its mock output behaviour
- produce_mock_output: Dispatch table lookup used by the executor on success

Design Principles:
- Registered once at import time, read-only afterwards
- Trigger types are declared explicitly, never inferred from the type key
- Registration order is the display order (categories by first appearance)
"""

from __future__ import annotations

import copy
import json
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Tuple

logger = logging.getLogger(__name__)

# Mock output behaviour: node config → result payload
MockOutput = Callable[[Dict[str, Any]], Dict[str, Any]]

FIELD_KINDS = ("text", "textarea", "select", "number", "boolean", "json")

FALLBACK_OUTPUT_MESSAGE = "Node executed"


@dataclass(frozen=True)
class FieldOption:
    """One choice of a select field."""

    value: str
    label: str


def choices(*pairs: Tuple[str, str]) -> Tuple[FieldOption, ...]:
    """Build select options from (value, label) pairs."""
    return tuple(FieldOption(value=value, label=label) for value, label in pairs)


@dataclass(frozen=True)
class ConfigField:
    """Schema for a single configuration field.

    Attributes:
        name: Key in the node config mapping
        label: Human-readable label for the property panel
        kind: Value kind (text, textarea, select, number, boolean, json)
        options: Allowed choices for select fields
        placeholder: Optional input hint
        required: Whether an empty value should be reported
    """

    name: str
    label: str
    kind: str = "text"
    options: Tuple[FieldOption, ...] = ()
    placeholder: Optional[str] = None
    required: bool = False

    def __post_init__(self):
        if not self.name:
            raise ValueError("field name cannot be empty")
        if self.kind not in FIELD_KINDS:
            raise ValueError(f"field '{self.name}': unknown kind '{self.kind}'")
        if self.kind == "select" and not self.options:
            raise ValueError(f"field '{self.name}': select fields need options")

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "name": self.name,
            "label": self.label,
            "kind": self.kind,
            "required": self.required,
        }
        if self.options:
            data["options"] = [{"value": o.value, "label": o.label} for o in self.options]
        if self.placeholder is not None:
            data["placeholder"] = self.placeholder
        return data


@dataclass(frozen=True)
class NodeDefinition:
    """Metadata definition for a node type.

    Attributes:
        node_type: Unique type key (e.g., "youtube-trigger")
        display_name: Human-readable name for UI display
        description: Brief description of node functionality
        category: Category for grouping (e.g., "Triggers", "Output")
        config_fields: Ordered configuration field schemas
        default_config: Values a new node of this type starts with
        trigger: Whether nodes of this type can start a run
        icon: Optional icon for UI rendering
        color: Optional color code for UI theming
    """

    node_type: str
    display_name: str
    description: str
    category: str
    config_fields: Tuple[ConfigField, ...] = ()
    default_config: Dict[str, Any] = field(default_factory=dict)
    trigger: bool = False
    icon: Optional[str] = None
    color: Optional[str] = None

    def __post_init__(self):
        if not self.node_type:
            raise ValueError("node_type cannot be empty")
        if not self.display_name:
            raise ValueError("display_name cannot be empty")
        if not self.category:
            raise ValueError("category cannot be empty")
        if not isinstance(self.default_config, dict):
            raise ValueError("default_config must be a dictionary")

        names = [f.name for f in self.config_fields]
        if len(names) != len(set(names)):
            raise ValueError(f"{self.node_type}: duplicate config field names")
        unknown = set(self.default_config) - set(names)
        if unknown:
            raise ValueError(
                f"{self.node_type}: defaults for undeclared fields {sorted(unknown)}"
            )

    def get_field(self, name: str) -> Optional[ConfigField]:
        for config_field in self.config_fields:
            if config_field.name == name:
                return config_field
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "node_type": self.node_type,
            "display_name": self.display_name,
            "description": self.description,
            "category": self.category,
            "trigger": self.trigger,
            "icon": self.icon,
            "color": self.color,
            "config_fields": [f.to_dict() for f in self.config_fields],
            "default_config": copy.deepcopy(self.default_config),
        }


# Global registry for node types
NODE_REGISTRY: Dict[str, NodeDefinition] = {}
NODE_BEHAVIORS: Dict[str, MockOutput] = {}


def register_node_type(
    node_type: str,
    display_name: str,
    description: str,
    category: str,
    config_fields: Tuple[ConfigField, ...] = (),
    default_config: Optional[Dict[str, Any]] = None,
    trigger: bool = False,
    icon: Optional[str] = None,
    color: Optional[str] = None,
) -> Callable[[MockOutput], MockOutput]:
    """Decorator to register a node type.

    The decorated function is the type's mock output behaviour: it receives
    the node config and returns the simulated result payload.

    Example:
        @register_node_type(
            node_type="send-email",
            display_name="Send Email",
            description="Sends an email with the data",
            category="Output",
            config_fields=(ConfigField("to", "To"),),
            default_config={"to": ""},
        )
        def send_email(config):
            return {"message": f"Email sent to {config.get('to') or 'recipient'}"}
    """

    def decorator(func: MockOutput) -> MockOutput:
        definition = NodeDefinition(
            node_type=node_type,
            display_name=display_name,
            description=description,
            category=category,
            config_fields=tuple(config_fields),
            default_config=dict(default_config or {}),
            trigger=trigger,
            icon=icon,
            color=color,
        )

        register_node_definition(definition, func)
        return func

    return decorator


def register_node_definition(
    definition: NodeDefinition,
    behavior: Optional[MockOutput] = None,
) -> NodeDefinition:
    """Register a node definition, optionally with a mock output behaviour.

    Types registered without a behaviour produce the generic fallback output.
    """
    if definition.node_type in NODE_REGISTRY:
        logger.warning(f"Node type re-registered: {definition.node_type}")

    NODE_REGISTRY[definition.node_type] = definition
    if behavior is not None:
        NODE_BEHAVIORS[definition.node_type] = behavior
    else:
        NODE_BEHAVIORS.pop(definition.node_type, None)

    logger.debug(f"Registered node type: {definition.node_type} ({definition.display_name})")
    return definition


def get_node_definition(node_type: str) -> Optional[NodeDefinition]:
    """Get the definition for a registered node type, or None."""
    return NODE_REGISTRY.get(node_type)


def is_node_type_registered(node_type: str) -> bool:
    return node_type in NODE_REGISTRY


def is_trigger(node_type: str) -> bool:
    """True iff the type is registered and declared as a trigger."""
    definition = NODE_REGISTRY.get(node_type)
    return bool(definition and definition.trigger)


def list_categories() -> List[str]:
    """Categories in order of first registration."""
    categories: List[str] = []
    for definition in NODE_REGISTRY.values():
        if definition.category not in categories:
            categories.append(definition.category)
    return categories


def list_node_types_by_category(category: str) -> List[NodeDefinition]:
    return [
        definition
        for definition in NODE_REGISTRY.values()
        if definition.category == category
    ]


def list_node_types() -> List[NodeDefinition]:
    """All registered node types, grouped by category.

    Category order and order within a category both follow registration.
    """
    ordered: List[NodeDefinition] = []
    for category in list_categories():
        ordered.extend(list_node_types_by_category(category))
    return ordered


def default_config(node_type: str) -> Dict[str, Any]:
    """Fresh copy of the type's default config (empty for unknown types)."""
    definition = NODE_REGISTRY.get(node_type)
    if definition is None:
        return {}
    return copy.deepcopy(definition.default_config)


def _check_value(config_field: ConfigField, value: Any) -> Optional[str]:
    kind = config_field.kind
    if kind in ("text", "textarea"):
        if not isinstance(value, str):
            return "must be a string"
    elif kind == "number":
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return "must be a number"
    elif kind == "boolean":
        if not isinstance(value, bool):
            return "must be a boolean"
    elif kind == "select":
        allowed = [o.value for o in config_field.options]
        if value not in allowed:
            return f"must be one of {', '.join(allowed)}"
    elif kind == "json":
        if isinstance(value, (dict, list)):
            return None
        if not isinstance(value, str):
            return "must be a JSON string"
        try:
            json.loads(value)
        except json.JSONDecodeError as e:
            return f"invalid JSON: {e.msg}"
    return None


def validate_config(
    node_type: str,
    config: Dict[str, Any],
    check_required: bool = True,
) -> List[Dict[str, str]]:
    """Validate config values against the type's field schemas.

    Args:
        node_type: Registered type key
        config: Values to check (a full config or a partial update)
        check_required: Also report required fields that are missing or empty

    Returns:
        List of {"field", "error"} dicts; empty if valid
    """
    definition = NODE_REGISTRY.get(node_type)
    if definition is None:
        return [{"field": "node_type", "error": f"Unknown node type: {node_type}"}]

    errors: List[Dict[str, str]] = []
    for name, value in config.items():
        config_field = definition.get_field(name)
        if config_field is None:
            errors.append({"field": name, "error": "Unknown field"})
            continue
        # None clears a value; emptiness is a required-check concern
        if value is None:
            continue
        problem = _check_value(config_field, value)
        if problem:
            errors.append({"field": name, "error": problem})

    if check_required:
        for config_field in definition.config_fields:
            if config_field.required and config.get(config_field.name) in (None, ""):
                errors.append({
                    "field": config_field.name,
                    "error": f"Required field '{config_field.name}' is missing",
                })

    return errors


def produce_mock_output(node_type: str, config: Dict[str, Any]) -> Dict[str, Any]:
    """Run the registered mock behaviour for a node type.

    Types without a behaviour produce a generic {"message": "Node executed"}.
    """
    behavior = NODE_BEHAVIORS.get(node_type)
    if behavior is None:
        return {"message": FALLBACK_OUTPUT_MESSAGE}
    return behavior(config)
