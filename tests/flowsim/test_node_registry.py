"""Unit tests for the node registry and built-in catalog."""

import pytest

from flowsim.nodes import (
    NODE_BEHAVIORS,
    NODE_REGISTRY,
    ConfigField,
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
    register_node_type,
    validate_config,
)


@pytest.fixture
def temp_node_type():
    """Register a throwaway type whose key mentions 'trigger' but isn't one."""

    @register_node_type(
        node_type="not-a-trigger-test",
        display_name="Not A Trigger",
        description="Looks like a trigger by name only",
        category="Test",
        config_fields=(ConfigField("size", "Size", "number"),),
        default_config={"size": 1},
    )
    def not_a_trigger(config):
        return {"message": f"size={config.get('size')}"}

    yield "not-a-trigger-test"

    NODE_REGISTRY.pop("not-a-trigger-test", None)
    NODE_BEHAVIORS.pop("not-a-trigger-test", None)


class TestCatalog:
    """Built-in catalog contents and ordering."""

    def test_category_order(self):
        assert list_categories() == [
            "Triggers",
            "YouTube",
            "AI Processing",
            "Data Processing",
            "Output",
        ]

    def test_catalog_size(self):
        assert len(list_node_types()) == 22

    def test_list_is_grouped_by_category(self):
        categories = [d.category for d in list_node_types()]
        # Each category appears as one contiguous run
        runs = [c for i, c in enumerate(categories) if i == 0 or categories[i - 1] != c]
        assert runs == list_categories()

    def test_triggers_category(self):
        keys = [d.node_type for d in list_node_types_by_category("Triggers")]
        assert keys == ["youtube-trigger", "schedule-trigger", "webhook-trigger"]

    def test_output_category(self):
        keys = [d.node_type for d in list_node_types_by_category("Output")]
        assert keys == [
            "send-email",
            "post-slack",
            "save-database",
            "post-twitter",
            "create-notion",
            "http-request",
        ]

    def test_get_node_definition(self):
        definition = get_node_definition("get-channel-videos")
        assert definition.display_name == "Get Channel Videos"
        assert definition.category == "YouTube"
        assert [f.name for f in definition.config_fields] == ["channelId", "maxResults", "order"]

    def test_unknown_type_lookup(self):
        assert get_node_definition("does-not-exist") is None
        assert is_node_type_registered("does-not-exist") is False

    def test_to_dict_shape(self):
        data = get_node_definition("schedule-trigger").to_dict()
        assert data["trigger"] is True
        assert data["default_config"] == {"cronExpression": "0 */6 * * *", "timezone": "UTC"}
        timezone_field = data["config_fields"][1]
        assert timezone_field["kind"] == "select"
        assert {"value": "UTC", "label": "UTC"} in timezone_field["options"]


class TestTriggers:
    """Trigger classification is an explicit flag."""

    @pytest.mark.parametrize(
        "node_type", ["youtube-trigger", "schedule-trigger", "webhook-trigger"]
    )
    def test_builtin_triggers(self, node_type):
        assert is_trigger(node_type) is True

    def test_non_triggers(self):
        assert is_trigger("send-email") is False
        assert is_trigger("merge") is False

    def test_unknown_type_is_not_trigger(self):
        assert is_trigger("mystery-trigger") is False

    def test_name_does_not_make_a_trigger(self, temp_node_type):
        assert is_trigger(temp_node_type) is False


class TestDefaultConfig:

    def test_returns_defaults(self):
        assert default_config("get-comments") == {
            "videoId": "",
            "maxResults": 100,
            "order": "relevance",
        }

    def test_returns_a_copy(self):
        config = default_config("filter")
        config["operator"] = "equals"
        assert default_config("filter")["operator"] == "greaterThan"

    def test_unknown_type(self):
        assert default_config("nope") == {}


class TestValidateConfig:
    """Field-level config validation."""

    def test_defaults_are_valid_except_required(self):
        errors = validate_config("youtube-trigger", default_config("youtube-trigger"))
        assert errors == [
            {"field": "channelId", "error": "Required field 'channelId' is missing"}
        ]

    def test_required_check_can_be_skipped(self):
        config = default_config("youtube-trigger")
        assert validate_config("youtube-trigger", config, check_required=False) == []

    def test_required_satisfied(self):
        config = {**default_config("youtube-trigger"), "channelId": "UC123"}
        assert validate_config("youtube-trigger", config) == []

    def test_unknown_type(self):
        errors = validate_config("nope", {})
        assert errors[0]["field"] == "node_type"

    def test_unknown_field(self):
        errors = validate_config("filter", {"bogus": 1}, check_required=False)
        assert errors == [{"field": "bogus", "error": "Unknown field"}]

    def test_number_rejects_strings_and_bools(self):
        errors = validate_config(
            "get-channel-videos", {"maxResults": "ten"}, check_required=False
        )
        assert errors == [{"field": "maxResults", "error": "must be a number"}]
        errors = validate_config(
            "get-channel-videos", {"maxResults": True}, check_required=False
        )
        assert errors[0]["error"] == "must be a number"

    def test_number_accepts_floats(self):
        assert validate_config("get-channel-videos", {"maxResults": 2.5}) == []

    def test_text_must_be_string(self):
        errors = validate_config("send-email", {"to": 42}, check_required=False)
        assert errors == [{"field": "to", "error": "must be a string"}]

    def test_boolean(self):
        assert validate_config("transform", {"keepOriginal": True}) == []
        errors = validate_config("transform", {"keepOriginal": "yes"})
        assert errors[0]["error"] == "must be a boolean"

    def test_select_must_be_an_option(self):
        errors = validate_config("schedule-trigger", {"timezone": "Mars/Olympus"})
        assert errors[0]["field"] == "timezone"
        assert errors[0]["error"].startswith("must be one of UTC")

    def test_json_field(self):
        assert validate_config("transform", {"mapping": '{"a": 1}'}) == []
        assert validate_config("transform", {"mapping": {"a": 1}}) == []
        errors = validate_config("transform", {"mapping": "{not json"})
        assert errors[0]["field"] == "mapping"
        assert errors[0]["error"].startswith("invalid JSON")

    def test_none_values_skip_kind_checks(self):
        assert validate_config("get-channel-videos", {"maxResults": None}) == []


class TestDefinitionValidation:
    """NodeDefinition and ConfigField reject malformed schemas."""

    def test_empty_node_type(self):
        with pytest.raises(ValueError, match="node_type cannot be empty"):
            NodeDefinition(node_type="", display_name="X", description="", category="C")

    def test_empty_category(self):
        with pytest.raises(ValueError, match="category cannot be empty"):
            NodeDefinition(node_type="x", display_name="X", description="", category="")

    def test_defaults_for_undeclared_fields(self):
        with pytest.raises(ValueError, match="undeclared fields"):
            NodeDefinition(
                node_type="x",
                display_name="X",
                description="",
                category="C",
                default_config={"ghost": 1},
            )

    def test_duplicate_field_names(self):
        with pytest.raises(ValueError, match="duplicate config field names"):
            NodeDefinition(
                node_type="x",
                display_name="X",
                description="",
                category="C",
                config_fields=(ConfigField("a", "A"), ConfigField("a", "A again")),
            )

    def test_unknown_field_kind(self):
        with pytest.raises(ValueError, match="unknown kind"):
            ConfigField("a", "A", "colour")

    def test_select_without_options(self):
        with pytest.raises(ValueError, match="need options"):
            ConfigField("a", "A", "select")

    def test_select_with_options(self):
        config_field = ConfigField("a", "A", "select", options=choices(("x", "X")))
        assert config_field.to_dict()["options"] == [{"value": "x", "label": "X"}]


class TestMockOutput:
    """Per-type simulated outputs."""

    def test_channel_videos_honours_max_results(self):
        output = produce_mock_output("get-channel-videos", {"maxResults": 3})
        assert output["message"] == "Found 3 videos"
        assert len(output["items"]) == 3
        assert output["items"][0] == {"videoId": "video_0", "title": "Video 1"}

    def test_channel_videos_capped_at_fifty(self):
        output = produce_mock_output("get-channel-videos", {"maxResults": 10**9})
        assert output["message"] == "Found 50 videos"
        assert len(output["items"]) == 50

    def test_channel_videos_zero_falls_back_to_ten(self):
        output = produce_mock_output("get-channel-videos", {"maxResults": 0})
        assert len(output["items"]) == 10

    def test_comments_capped_at_one_hundred(self):
        output = produce_mock_output("get-comments", {"maxResults": 500})
        assert output["message"] == "Fetched 100 comments"

    def test_comments_below_cap(self):
        output = produce_mock_output("get-comments", {"maxResults": 20})
        assert output["message"] == "Fetched 20 comments"

    def test_email_recipient(self):
        assert produce_mock_output("send-email", {"to": "a@b.c"})["message"] == "Email sent to a@b.c"
        assert produce_mock_output("send-email", {})["message"] == "Email sent to recipient"

    @pytest.mark.parametrize("node_type", ["merge", "split"])
    def test_types_without_behaviour_use_fallback(self, node_type):
        assert produce_mock_output(node_type, default_config(node_type)) == {
            "message": "Node executed"
        }

    def test_unknown_type_uses_fallback(self):
        assert produce_mock_output("nope", {}) == {"message": "Node executed"}

    def test_every_behaviour_returns_a_message(self):
        for definition in list_node_types():
            output = produce_mock_output(definition.node_type, default_config(definition.node_type))
            assert isinstance(output.get("message"), str), definition.node_type

    def test_custom_registration(self, temp_node_type):
        assert produce_mock_output(temp_node_type, {"size": 4}) == {"message": "size=4"}
        assert "Test" in list_categories()
