"""Unit tests for WorkflowStore mutations and change notifications."""

import pytest

from flowsim.errors import (
    ConfigValidationError,
    EdgeNotFoundError,
    NodeNotFoundError,
    UnknownNodeTypeError,
)
from flowsim.models import Edge, LogSeverity, Node, NodeStatus, Position


@pytest.fixture
def events(store):
    """Record every event the store publishes."""
    recorded = []
    store.subscribe(recorded.append)
    return recorded


def _kinds(events):
    return [e.kind for e in events]


class TestAddNode:

    def test_assigns_sequential_ids(self, store):
        first = store.add_node("youtube-trigger")
        second = store.add_node("send-email")
        assert (first.id, second.id) == ("node_1", "node_2")

    def test_starts_idle_with_defaults(self, store):
        node = store.add_node("get-comments", position=Position(10, 20))
        assert node.status == NodeStatus.IDLE
        assert node.output is None
        assert node.position == Position(10, 20)
        assert node.config == {"videoId": "", "maxResults": 100, "order": "relevance"}

    def test_overrides_merge_into_defaults(self, store):
        node = store.add_node("get-comments", config={"maxResults": 20})
        assert node.config["maxResults"] == 20
        assert node.config["order"] == "relevance"

    def test_unknown_type(self, store):
        with pytest.raises(UnknownNodeTypeError) as exc_info:
            store.add_node("teleporter")
        assert exc_info.value.node_type == "teleporter"
        assert store.nodes == []

    def test_invalid_config(self, store):
        with pytest.raises(ConfigValidationError) as exc_info:
            store.add_node("get-comments", config={"maxResults": "lots"})
        assert exc_info.value.errors[0]["field"] == "maxResults"
        assert store.nodes == []

    def test_required_fields_not_enforced(self, store):
        node = store.add_node("youtube-trigger")
        assert node.config["channelId"] == ""

    def test_explicit_id(self, store):
        store.add_node("filter", node_id="F")
        with pytest.raises(ValueError, match="duplicate node id"):
            store.add_node("filter", node_id="F")

    def test_log_id_is_reserved(self, store):
        with pytest.raises(ValueError, match="reserved"):
            store.add_node("filter", node_id="workflow")
        assert store.nodes == []

    def test_generated_ids_skip_taken_ones(self, store):
        store.add_node("filter", node_id="node_1")
        assert store.add_node("filter").id == "node_2"

    def test_config_is_not_shared_with_caller(self, store):
        overrides = {"mapping": {"a": 1}}
        node = store.add_node("transform", config=overrides)
        overrides["mapping"]["a"] = 2
        assert node.config["mapping"] == {"a": 1}

    def test_emits_node_added(self, store, events):
        store.add_node("filter", node_id="F")
        assert _kinds(events) == ["node_added"]
        assert events[0].payload["node"]["id"] == "F"
        assert events[0].payload["node"]["status"] == "idle"


class TestUpdateNode:

    def test_config_merge_keeps_other_fields(self, store):
        store.add_node("get-channel-videos", node_id="V")
        node = store.update_node_config("V", {"maxResults": 5})
        assert node.config == {"channelId": "", "maxResults": 5, "order": "date"}

    def test_config_validation(self, store):
        store.add_node("get-channel-videos", node_id="V")
        with pytest.raises(ConfigValidationError):
            store.update_node_config("V", {"order": "random"})
        assert store.get_node("V").config["order"] == "date"

    def test_config_missing_node(self, store):
        with pytest.raises(NodeNotFoundError):
            store.update_node_config("ghost", {})

    def test_move(self, store, events):
        store.add_node("filter", node_id="F")
        store.update_node_position("F", Position(3.5, -1))
        assert store.get_node("F").position == Position(3.5, -1)
        assert events[-1].kind == "node_moved"
        assert events[-1].payload == {"node_id": "F", "position": {"x": 3.5, "y": -1}}

    def test_status_with_output(self, store, events):
        store.add_node("filter", node_id="F")
        store.update_node_status("F", NodeStatus.SUCCESS, {"message": "ok"})
        node = store.get_node("F")
        assert node.status == NodeStatus.SUCCESS
        assert node.output == {"message": "ok"}
        assert events[-1].payload == {
            "node_id": "F",
            "status": "success",
            "output": {"message": "ok"},
        }

    def test_status_for_missing_node_is_ignored(self, store, events):
        store.update_node_status("ghost", NodeStatus.RUNNING)
        assert events == []

    def test_reset_is_idempotent(self, store):
        store.add_node("filter", node_id="F")
        store.update_node_status("F", NodeStatus.ERROR)
        store.reset_node_statuses()
        store.reset_node_statuses()
        node = store.get_node("F")
        assert (node.status, node.output) == (NodeStatus.IDLE, None)


class TestRemoveNode:

    def test_removes_connected_edges(self, build_graph):
        store = build_graph(
            [("A", "filter"), ("B", "transform"), ("C", "merge")],
            [("A", "B"), ("B", "C"), ("A", "C")],
        )
        store.remove_node("B")
        assert [n.id for n in store.nodes] == ["A", "C"]
        assert [(e.source, e.target) for e in store.edges] == [("A", "C")]

    def test_clears_selection(self, store, events):
        store.add_node("filter", node_id="F")
        store.set_selected_node("F")
        store.remove_node("F")
        assert store.selected_node_id is None
        assert store.selected_node is None
        assert _kinds(events)[-2:] == ["node_removed", "selection_changed"]

    def test_keeps_unrelated_selection(self, store):
        store.add_node("filter", node_id="A")
        store.add_node("filter", node_id="B")
        store.set_selected_node("A")
        store.remove_node("B")
        assert store.selected_node.id == "A"

    def test_missing_node(self, store):
        with pytest.raises(NodeNotFoundError):
            store.remove_node("ghost")

    def test_event_lists_dropped_edges(self, build_graph, events):
        store = build_graph([("A", "filter"), ("B", "transform")], [("A", "B")])
        edge_id = store.edges[0].id
        store.remove_node("A")
        assert events[-1].payload == {"node_id": "A", "edge_ids": [edge_id]}


class TestEdges:

    def test_add_edge(self, build_graph):
        store = build_graph([("A", "filter"), ("B", "transform")])
        edge = store.add_edge("A", "B")
        assert edge.id.startswith("edge_")
        assert store.edges == [edge]

    def test_missing_endpoint(self, build_graph):
        store = build_graph([("A", "filter")])
        with pytest.raises(NodeNotFoundError) as exc_info:
            store.add_edge("A", "ghost")
        assert exc_info.value.node_id == "ghost"
        assert store.edges == []

    def test_self_loops_and_duplicates_allowed(self, build_graph):
        store = build_graph([("A", "filter"), ("B", "transform")])
        store.add_edge("A", "A")
        store.add_edge("A", "B")
        store.add_edge("A", "B")
        assert len(store.edges) == 3
        assert len({e.id for e in store.edges}) == 3

    def test_remove_edge(self, build_graph):
        store = build_graph([("A", "filter"), ("B", "transform")], [("A", "B")])
        store.remove_edge(store.edges[0].id)
        assert store.edges == []

    def test_remove_missing_edge(self, store):
        with pytest.raises(EdgeNotFoundError):
            store.remove_edge("edge_nope")


class TestSelection:

    def test_select_and_clear(self, store):
        store.add_node("filter", node_id="F")
        store.set_selected_node("F")
        assert store.selected_node.id == "F"
        store.set_selected_node(None)
        assert store.selected_node is None

    def test_select_missing(self, store):
        with pytest.raises(NodeNotFoundError):
            store.set_selected_node("ghost")


class TestRunStateAndLog:

    def test_running_flag_events(self, store, events):
        store.set_running(True)
        store.set_running(False)
        assert _kinds(events) == ["run_started", "run_finished"]
        assert store.is_running is False

    def test_append_and_clear_log(self, store, events):
        entry = store.append_log("A", "hello", LogSeverity.SUCCESS)
        assert store.execution_log == [entry]
        assert events[-1].kind == "log_appended"
        assert events[-1].payload["severity"] == "success"
        assert events[-1].payload["timestamp"] == entry.timestamp.isoformat()

        store.clear_log()
        assert store.execution_log == []
        assert events[-1].kind == "log_cleared"


class TestListeners:

    def test_unsubscribe(self, store):
        seen = []
        unsubscribe = store.subscribe(seen.append)
        store.add_node("filter")
        unsubscribe()
        store.add_node("filter")
        assert len(seen) == 1
        # Second call is harmless
        unsubscribe()

    def test_failing_listener_does_not_break_mutation(self, store):
        seen = []

        def broken(event):
            raise RuntimeError("listener bug")

        store.subscribe(broken)
        store.subscribe(seen.append)

        node = store.add_node("filter")

        assert store.nodes == [node]
        assert _kinds(seen) == ["node_added"]


class TestSnapshot:

    def test_snapshot_is_detached(self, build_graph):
        store = build_graph([("A", "get-comments"), ("B", "filter")], [("A", "B")])
        snapshot = store.snapshot()

        store.update_node_config("A", {"maxResults": 1})
        store.remove_node("B")

        assert snapshot.node_ids() == ["A", "B"]
        assert snapshot.nodes[0].config["maxResults"] == 100
        assert [(e.source, e.target) for e in snapshot.edges] == [("A", "B")]


class TestReplaceGraph:

    def test_replace(self, store, events):
        store.add_node("filter", node_id="old")
        store.set_selected_node("old")
        store.replace_graph(
            [Node(id="node_1", type="youtube-trigger"), Node(id="node_2", type="send-email")],
            [Edge(id="edge_1", source="node_1", target="node_2")],
        )
        assert [n.id for n in store.nodes] == ["node_1", "node_2"]
        assert store.selected_node_id is None
        assert events[-1].kind == "graph_replaced"

    def test_new_ids_avoid_imported_ones(self, store):
        store.replace_graph([Node(id="node_1", type="filter")], [])
        assert store.add_node("filter").id == "node_2"

    def test_duplicate_ids(self, store):
        with pytest.raises(ValueError, match="duplicate node IDs"):
            store.replace_graph([Node(id="a", type="filter"), Node(id="a", type="merge")], [])

    def test_log_id_is_reserved(self, store):
        with pytest.raises(ValueError, match="reserved"):
            store.replace_graph([Node(id="workflow", type="filter")], [])

    def test_unknown_type(self, store):
        with pytest.raises(UnknownNodeTypeError):
            store.replace_graph([Node(id="a", type="teleporter")], [])

    def test_dangling_edge(self, store):
        store.add_node("filter", node_id="keep")
        with pytest.raises(NodeNotFoundError):
            store.replace_graph(
                [Node(id="a", type="filter")],
                [Edge(id="e", source="a", target="b")],
            )
        # Failed replace leaves the graph untouched
        assert [n.id for n in store.nodes] == ["keep"]
