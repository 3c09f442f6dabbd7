"""Node System: registry and the built-in node type catalog."""

# Import catalog modules to auto-register node types; import order is display order
from . import triggers  # noqa: F401 - registers youtube/schedule/webhook triggers
from . import youtube  # noqa: F401 - registers YouTube data nodes
from . import ai  # noqa: F401 - registers AI processing nodes
from . import data  # noqa: F401 - registers filter, transform, merge, split
from . import outputs  # noqa: F401 - registers output actions

from .registry import (
    NODE_BEHAVIORS,
    NODE_REGISTRY,
    ConfigField,
    FieldOption,
    NodeDefinition,
    choices,
    default_config,
    get_node_definition,
    is_node_type_registered,
    is_trigger,
    list_categories,
    list_node_types,
    list_node_types_by_category,
    produce_mock_output,
    register_node_definition,
    register_node_type,
    validate_config,
)

__all__ = [
    "NODE_BEHAVIORS",
    "NODE_REGISTRY",
    "ConfigField",
    "FieldOption",
    "NodeDefinition",
    "choices",
    "default_config",
    "get_node_definition",
    "is_node_type_registered",
    "is_trigger",
    "list_categories",
    "list_node_types",
    "list_node_types_by_category",
    "produce_mock_output",
    "register_node_definition",
    "register_node_type",
    "validate_config",
]
