"""
Unit tests for snapshot files.
"""

import json

import pytest

from graphlab.graph import Graph, load_graph, save_graph


class TestSnapshotFiles:
    """Test save_graph / load_graph."""

    @pytest.mark.parametrize("name", ["graph.json", "graph.msgpack"])
    def test_round_trip(self, tmp_path, weighted_graph, name):
        """Saved graphs load back with the same nodes, edges and flags."""
        weighted_graph.get_node("A").data["color"] = "red"
        path = save_graph(weighted_graph, tmp_path / name)
        loaded = load_graph(path)
        assert loaded.to_json() == weighted_graph.to_json()

    def test_json_is_readable(self, tmp_path, chain_graph):
        path = save_graph(chain_graph, tmp_path / "nested" / "chain.json")
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
        assert data["isDirected"] is False
        assert [node["id"] for node in data["nodes"]] == ["A", "B", "C", "D"]
        assert data["edgeIdCounter"] == 4

    def test_unknown_suffix(self, tmp_path, chain_graph):
        with pytest.raises(ValueError, match="Unsupported"):
            save_graph(chain_graph, tmp_path / "graph.csv")
        with pytest.raises(ValueError):
            load_graph(tmp_path / "graph.txt")

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_graph(tmp_path / "absent.json")

    def test_empty_graph(self, tmp_path):
        path = save_graph(Graph(directed=True), tmp_path / "empty.msgpack")
        loaded = load_graph(path)
        assert loaded.is_directed is True
        assert not loaded.nodes
