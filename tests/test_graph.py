"""
Unit tests for the Graph model.

Covers structural invariants, queries, statistics and snapshots.
"""

import json
import math

import pytest

from graphlab.graph import (
    DuplicateEdgeError,
    DuplicateIdError,
    Graph,
    MissingEndpointError,
)
from graphlab.graph.model import letter_label


class TestNodes:
    """Test node creation, update and removal."""

    def test_auto_id(self):
        """Nodes without an id get node_<n>."""
        graph = Graph()
        first = graph.add_node()
        second = graph.add_node()
        assert first.id == "node_1"
        assert second.id == "node_2"
        assert graph.node_id_counter == 3

    def test_label_defaults_to_id(self):
        """An empty label falls back to the id."""
        node = Graph().add_node("A")
        assert node.label == "A"

    def test_data_is_copied(self):
        """The attribute bag is not shared with the caller."""
        data = {"color": "red"}
        node = Graph().add_node("A", data=data)
        data["color"] = "blue"
        assert node.data == {"color": "red"}

    def test_duplicate_id_raises(self):
        """Adding an existing id raises DuplicateIdError."""
        graph = Graph()
        graph.add_node("A")
        with pytest.raises(DuplicateIdError):
            graph.add_node("A")
        assert len(graph.nodes) == 1

    def test_remove_missing_returns_false(self):
        """Removing an unknown node is a no-op."""
        assert Graph().remove_node("nope") is False

    def test_remove_cascades_edges(self, weighted_graph):
        """Removing C removes B-C, A-C and C-D."""
        assert weighted_graph.remove_node("C") is True
        remaining = [(e.source, e.target) for e in weighted_graph.get_edges()]
        assert remaining == [("A", "B")]
        assert weighted_graph.get_statistics().is_connected is False

    def test_update_position(self):
        """update_node_position moves an existing node."""
        graph = Graph()
        graph.add_node("A")
        assert graph.update_node_position("A", 10, 20) is True
        assert (graph.get_node("A").x, graph.get_node("A").y) == (10, 20)
        assert graph.update_node_position("B", 1, 1) is False

    def test_auto_id_skips_taken_ids(self):
        """Auto ids step over ids that were given explicitly."""
        graph = Graph()
        graph.add_node("node_1")
        graph.add_node("node_2")
        assert graph.add_node().id == "node_3"
        assert graph.add_node().id == "node_4"
        assert graph.node_id_counter == 5

    def test_update_node_rejects_id(self):
        """Node ids cannot be changed through update_node."""
        graph = Graph()
        graph.add_node("A")
        with pytest.raises(ValueError):
            graph.update_node("A", id="B")
        assert graph.update_node("A", label="Alpha") is True
        assert graph.get_node("A").label == "Alpha"


class TestEdges:
    """Test edge creation and the duplicate-edge invariant."""

    def test_missing_endpoint_raises(self):
        """Both endpoints must exist."""
        graph = Graph()
        graph.add_node("A")
        with pytest.raises(MissingEndpointError):
            graph.add_edge("A", "B")
        assert graph.edge_id_counter == 1

    def test_undirected_duplicate_either_direction(self, chain_graph):
        """Undirected graphs reject B-A when A-B exists."""
        before = len(chain_graph.edges)
        with pytest.raises(DuplicateEdgeError):
            chain_graph.add_edge("B", "A")
        with pytest.raises(DuplicateEdgeError):
            chain_graph.add_edge("A", "B")
        assert len(chain_graph.edges) == before

    def test_directed_allows_reverse(self):
        """Directed graphs allow A->B and B->A but not A->B twice."""
        graph = Graph(directed=True)
        graph.add_node("A")
        graph.add_node("B")
        graph.add_edge("A", "B")
        graph.add_edge("B", "A")
        with pytest.raises(DuplicateEdgeError):
            graph.add_edge("A", "B")
        assert len(graph.edges) == 2

    def test_duplicate_edge_id_raises(self, chain_graph):
        """Explicit edge ids must be unique."""
        with pytest.raises(DuplicateIdError):
            chain_graph.add_edge("A", "D", edge_id="edge_1")

    def test_auto_edge_id_skips_taken_ids(self, chain_graph):
        """Generated edge ids step over explicit ones."""
        chain_graph.add_node("E")
        chain_graph.add_edge("D", "E", edge_id="edge_4")
        assert chain_graph.add_edge("A", "D").id == "edge_5"
        assert chain_graph.add_edge("A", "E").id == "edge_6"

    def test_undirected_switch_rejects_reciprocal_edges(self):
        """A->B plus B->A cannot become one undirected pair."""
        graph = Graph(directed=True)
        graph.add_node("A")
        graph.add_node("B")
        graph.add_edge("A", "B")
        graph.add_edge("B", "A")
        with pytest.raises(DuplicateEdgeError):
            graph.set_graph_type(directed=False)
        assert graph.is_directed is True
        assert len(graph.edges) == 2

    def test_undirected_switch_without_reciprocal_edges(self):
        graph = Graph(directed=True)
        for node_id in "ABC":
            graph.add_node(node_id)
        graph.add_edge("A", "B")
        graph.add_edge("C", "B")
        graph.set_graph_type(directed=False, weighted=True)
        assert graph.is_directed is False
        assert graph.get_neighbors("B") == ["A", "C"]

    def test_unweighted_forces_weight(self):
        """Unweighted graphs store weight 1 and no label."""
        graph = Graph()
        graph.add_node("A")
        graph.add_node("B")
        edge = graph.add_edge("A", "B", 7)
        assert edge.weight == 1
        assert edge.label == ""

    def test_weighted_label_defaults_to_weight(self):
        """Weighted edges are labelled with their weight."""
        graph = Graph(weighted=True)
        graph.add_node("A")
        graph.add_node("B")
        edge = graph.add_edge("A", "B", 7)
        assert edge.weight == 7
        assert edge.label == "7"
        assert edge.directed is False

    def test_non_positive_weight_raises(self):
        """Weighted edges need a positive weight."""
        graph = Graph(weighted=True)
        graph.add_node("A")
        graph.add_node("B")
        with pytest.raises(ValueError):
            graph.add_edge("A", "B", 0)
        assert not graph.edges

    def test_effective_weight_after_type_change(self, weighted_graph):
        """Switching to unweighted makes every edge weigh 1."""
        weighted_graph.set_graph_type(directed=False, weighted=False)
        assert weighted_graph.get_edge_weight("A", "C") == 1

    def test_update_edge(self, weighted_graph):
        """Weight and label can change; endpoints cannot."""
        assert weighted_graph.update_edge("edge_1", weight=5, label="five") is True
        assert weighted_graph.get_edge_weight("A", "B") == 5
        with pytest.raises(ValueError):
            weighted_graph.update_edge("edge_1", target="D")
        assert weighted_graph.update_edge("missing", label="x") is False

    def test_update_weight_refreshes_default_label(self, weighted_graph):
        """A label that only mirrored the weight follows the new weight."""
        weighted_graph.update_edge("edge_1", weight=8)
        assert weighted_graph.get_edge("edge_1").label == "8"
        weighted_graph.update_edge("edge_1", label="road")
        weighted_graph.update_edge("edge_1", weight=2)
        assert weighted_graph.get_edge("edge_1").label == "road"

    def test_remove_edge(self, chain_graph):
        assert chain_graph.remove_edge("edge_1") is True
        assert chain_graph.remove_edge("edge_1") is False
        assert not chain_graph.has_edge("A", "B")


class TestQueries:
    """Test adjacency and weight lookups."""

    def test_neighbors_undirected_symmetric(self, chain_graph):
        assert chain_graph.get_neighbors("B") == ["A", "C"]
        assert "B" in chain_graph.get_neighbors("A")

    def test_neighbors_directed_outgoing_only(self):
        graph = Graph(directed=True)
        for node_id in "ABC":
            graph.add_node(node_id)
        graph.add_edge("A", "B")
        graph.add_edge("C", "A")
        assert graph.get_neighbors("A") == ["B"]
        assert graph.get_neighbors("B") == []

    def test_edge_weight_either_direction(self, weighted_graph):
        assert weighted_graph.get_edge_weight("C", "A") == 4
        assert weighted_graph.get_edge_weight("A", "D") == math.inf

    def test_node_edges(self, weighted_graph):
        ids = [edge.id for edge in weighted_graph.get_node_edges("C")]
        assert ids == ["edge_2", "edge_3", "edge_4"]


class TestStatistics:
    """Test get_statistics, is_connected and has_cycles."""

    def test_statistics(self, weighted_graph):
        stats = weighted_graph.get_statistics()
        assert stats.node_count == 4
        assert stats.edge_count == 4
        assert stats.density == 66.67
        assert stats.average_degree == 2
        assert stats.max_degree == 3
        assert stats.min_degree == 1
        assert stats.is_connected is True
        assert stats.has_cycles is True

    def test_statistics_dict_keys(self, chain_graph):
        data = chain_graph.get_statistics().to_dict()
        assert data["nodeCount"] == 4
        assert data["hasCycles"] is False
        assert set(data) == {
            "nodeCount", "edgeCount", "density", "averageDegree",
            "maxDegree", "minDegree", "isConnected", "hasCycles",
        }

    def test_empty_graph(self):
        stats = Graph().get_statistics()
        assert stats.density == 0
        assert stats.average_degree == 0
        assert stats.max_degree == 0
        assert stats.min_degree == 0
        assert stats.is_connected is True

    def test_directed_density(self):
        graph = Graph(directed=True)
        graph.add_node("A")
        graph.add_node("B")
        graph.add_edge("A", "B")
        assert graph.get_statistics().density == 50

    def test_tree_has_no_cycles(self, chain_graph):
        """Walking an edge back to the parent is not a cycle."""
        assert chain_graph.has_cycles() is False

    def test_small_graphs_have_no_cycles(self):
        """Two nodes never count as a cycle, even A->B->A."""
        graph = Graph(directed=True)
        graph.add_node("A")
        graph.add_node("B")
        graph.add_edge("A", "B")
        graph.add_edge("B", "A")
        assert graph.has_cycles() is False

    def test_directed_cycle(self):
        graph = Graph(directed=True)
        for node_id in "ABC":
            graph.add_node(node_id)
        graph.add_edge("A", "B")
        graph.add_edge("B", "C")
        assert graph.has_cycles() is False
        graph.add_edge("C", "A")
        assert graph.has_cycles() is True

    def test_directed_diamond_is_acyclic(self):
        """Reaching a finished node again is not a cycle in a directed graph."""
        graph = Graph(directed=True)
        for node_id in "ABCD":
            graph.add_node(node_id)
        graph.add_edge("A", "B")
        graph.add_edge("A", "C")
        graph.add_edge("B", "D")
        graph.add_edge("C", "D")
        assert graph.has_cycles() is False

    def test_deep_chain_does_not_recurse(self):
        """Long paths do not hit the recursion limit."""
        graph = Graph()
        ids = [f"n{i}" for i in range(1500)]
        for node_id in ids:
            graph.add_node(node_id)
        for a, b in zip(ids, ids[1:]):
            graph.add_edge(a, b)
        assert graph.has_cycles() is False
        assert graph.is_connected() is True


class TestSnapshots:
    """Test to_json / from_json / clone."""

    def test_round_trip(self, weighted_graph):
        snapshot = weighted_graph.to_json()
        restored = Graph()
        restored.from_json(json.dumps(snapshot))
        assert restored.to_json() == snapshot
        assert restored.is_weighted is True
        assert restored.edge_id_counter == weighted_graph.edge_id_counter

    def test_from_json_replaces_state(self, weighted_graph, chain_graph):
        """Loading is clear-then-load, not a merge."""
        chain_graph.add_node("Z")
        chain_graph.from_json(weighted_graph.to_json())
        assert "Z" not in chain_graph.nodes
        assert chain_graph.is_weighted is True

    def test_counters_survive_round_trip(self):
        """Auto ids keep counting after a reload."""
        graph = Graph()
        graph.add_node()
        graph.add_node()
        restored = Graph()
        restored.from_json(graph.to_json())
        assert restored.add_node().id == "node_3"

    def test_bad_snapshot_leaves_graph_unchanged(self, chain_graph):
        before = chain_graph.to_json()
        bad = {
            "nodes": [{"id": "A"}],
            "edges": [{"id": "e", "source": "A", "target": "B"}],
        }
        with pytest.raises(MissingEndpointError):
            chain_graph.from_json(bad)
        assert chain_graph.to_json() == before

    @pytest.mark.parametrize("weight", [-5, 0, "3", None])
    def test_bad_weight_leaves_graph_unchanged(self, chain_graph, weight):
        """Weighted snapshots must carry positive numeric weights."""
        before = chain_graph.to_json()
        bad = {
            "nodes": [{"id": "A"}, {"id": "B"}],
            "edges": [{"id": "e", "source": "A", "target": "B", "weight": weight}],
            "isWeighted": True,
        }
        with pytest.raises(ValueError):
            chain_graph.from_json(bad)
        assert chain_graph.to_json() == before

    def test_unweighted_snapshot_ignores_weight_values(self):
        graph = Graph()
        graph.from_json({
            "nodes": [{"id": "A"}, {"id": "B"}],
            "edges": [{"id": "e", "source": "A", "target": "B", "weight": 1}],
        })
        assert graph.get_edge_weight("A", "B") == 1

    def test_clone_is_independent(self, weighted_graph):
        copy = weighted_graph.clone()
        copy.remove_node("A")
        assert "A" in weighted_graph.nodes
        assert copy.node_id_counter == weighted_graph.node_id_counter

    def test_clear_resets_counters(self):
        graph = Graph()
        graph.add_node()
        graph.clear()
        assert not graph.nodes
        assert graph.add_node().id == "node_1"


class TestRandomGraph:
    """Test generate_random."""

    def test_letter_labels(self):
        assert [letter_label(i) for i in (0, 1, 25, 26, 27, 51, 52)] == [
            "A", "B", "Z", "AA", "AB", "AZ", "BA",
        ]

    def test_complete_graph(self):
        graph = Graph()
        graph.generate_random(5, 1.0, weighted=True, seed=3)
        assert list(graph.nodes) == ["A", "B", "C", "D", "E"]
        assert len(graph.edges) == 10
        assert all(1 <= edge.weight <= 10 for edge in graph.get_edges())
        assert all(isinstance(edge.weight, int) for edge in graph.get_edges())

    def test_complete_directed_graph(self):
        graph = Graph()
        graph.generate_random(4, 1.0, directed=True, seed=3)
        assert len(graph.edges) == 12
        assert graph.is_directed is True

    def test_no_edges(self):
        graph = Graph()
        graph.generate_random(4, 0.0, seed=1)
        assert len(graph.nodes) == 4
        assert not graph.edges

    def test_seed_is_reproducible(self):
        first, second = Graph(), Graph()
        first.generate_random(8, 0.4, weighted=True, seed=42)
        second.generate_random(8, 0.4, weighted=True, seed=42)
        assert first.to_json() == second.to_json()

    def test_replaces_existing_graph(self, weighted_graph):
        weighted_graph.generate_random(3, 0.5, seed=0)
        assert list(weighted_graph.nodes) == ["A", "B", "C"]
        assert weighted_graph.is_weighted is False

    def test_invalid_probability(self):
        with pytest.raises(ValueError):
            Graph().generate_random(3, 1.5)
