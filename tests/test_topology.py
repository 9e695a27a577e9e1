"""Tests for topology store and seed definitions"""

import pytest
from adrnet.errors import InvalidTopology
from adrnet.topology import (
    Topology, EdgeStatus, DEFAULT_CONNECTIONS, edge_key,
    parse_seed, load_seed_file, build_seed_topology
)


class TestTopologyStore:
    """Tests for Topology construction and mutation"""

    def test_add_nodes_and_edges(self):
        """Test basic construction"""
        topology = Topology()
        topology.add_node("A")
        topology.add_node("B")
        edge = topology.add_edge("B", "A", 4)

        assert topology.nodes() == ["A", "B"]
        assert edge.key == ("A", "B")
        assert edge.id == "A-B"
        assert edge.cost == 4
        assert edge.status == EdgeStatus.ACTIVE

    def test_edge_references_unknown_node(self):
        """Test dangling edge is rejected"""
        topology = Topology()
        topology.add_node("A")
        with pytest.raises(InvalidTopology):
            topology.add_edge("A", "Z", 1)
        assert topology.edge_count() == 0

    def test_duplicate_pair_rejected_in_either_order(self):
        """Test at most one edge per node pair"""
        topology = Topology.from_definition([("A", "B", 1)])
        with pytest.raises(InvalidTopology):
            topology.add_edge("B", "A", 2)
        assert topology.get_edge("A", "B").cost == 1

    def test_self_loop_rejected(self):
        """Test edge endpoints must differ"""
        topology = Topology.from_definition([("A", "B", 1)])
        with pytest.raises(InvalidTopology):
            topology.add_edge("A", "A", 1)

    @pytest.mark.parametrize("cost", [-1, 1.5, "3", True, None])
    def test_invalid_cost_rejected(self, cost):
        """Test costs must be non-negative integers"""
        topology = Topology()
        topology.add_node("A")
        topology.add_node("B")
        with pytest.raises(InvalidTopology):
            topology.add_edge("A", "B", cost)
        assert topology.edge_count() == 0

    def test_zero_cost_allowed(self):
        """Test zero is a valid cost"""
        topology = Topology.from_definition([("A", "B", 0)])
        assert topology.get_edge("A", "B").cost == 0

    @pytest.mark.parametrize("label", ["", "A,B", "A|B", "A B", "A:B", "A\nB", "-X", "--"])
    def test_reserved_labels_rejected(self, label):
        """Test labels that would corrupt the line protocol"""
        topology = Topology()
        with pytest.raises(InvalidTopology):
            topology.add_node(label)

    def test_duplicate_node_rejected(self):
        """Test node labels are unique"""
        topology = Topology()
        topology.add_node("A")
        with pytest.raises(InvalidTopology):
            topology.add_node("A")

    def test_empty_definition_rejected(self):
        """Test a topology needs at least one node"""
        with pytest.raises(InvalidTopology):
            Topology.from_definition([])

    def test_set_edge_status(self):
        """Test failing an edge by endpoint pair"""
        topology = Topology.from_definition([("A", "B", 1), ("B", "C", 1)])
        topology.set_edge_status(("B", "A"), EdgeStatus.FAILED)

        assert topology.get_edge("A", "B").status == EdgeStatus.FAILED
        assert [e.id for e in topology.active_edges()] == ["B-C"]
        assert [e.id for e in topology.failed_edges()] == ["A-B"]

    def test_failed_edge_cannot_be_restored(self):
        """Test FAILED is a one-way transition"""
        topology = Topology.from_definition([("A", "B", 1)])
        topology.set_edge_status(("A", "B"), EdgeStatus.FAILED)
        with pytest.raises(InvalidTopology):
            topology.set_edge_status(("A", "B"), EdgeStatus.ACTIVE)
        assert topology.get_edge("A", "B").status == EdgeStatus.FAILED

    def test_set_status_unknown_edge(self):
        """Test unknown edge ids are rejected"""
        topology = Topology.from_definition([("A", "B", 1)], nodes=["C"])
        with pytest.raises(InvalidTopology):
            topology.set_edge_status(("A", "C"), EdgeStatus.FAILED)

    def test_neighbors_skip_failed_edges(self):
        """Test active-only adjacency"""
        topology = Topology.from_definition([("A", "B", 1), ("A", "C", 1)])
        topology.set_edge_status(("A", "C"), EdgeStatus.FAILED)

        assert set(topology.neighbors("A")) == {"B"}
        assert set(topology.neighbors("A", active_only=False)) == {"B", "C"}

    def test_edges_sorted_by_canonical_pair(self, seed_topology):
        """Test edge listing order"""
        keys = [edge.key for edge in seed_topology.edges()]
        assert keys == sorted(keys)
        assert all(u < v for u, v in keys)

    def test_dict_round_trip(self, seed_topology):
        """Test to_dict/from_dict keeps nodes, costs and statuses"""
        seed_topology.set_edge_status(("C1", "C2"), EdgeStatus.FAILED)
        restored = Topology.from_dict(seed_topology.to_dict())

        assert restored.nodes() == seed_topology.nodes()
        assert [(e.key, e.cost, e.status) for e in restored.edges()] == \
            [(e.key, e.cost, e.status) for e in seed_topology.edges()]

    def test_from_dict_malformed(self):
        """Test malformed data raises InvalidTopology"""
        with pytest.raises(InvalidTopology):
            Topology.from_dict({"edges": [{"from": "A"}]})
        with pytest.raises(InvalidTopology):
            Topology.from_dict({"edges": [{"from": "A", "to": "B", "cost": 1, "status": "BROKEN"}]})


class TestSeed:
    """Tests for seed definitions"""

    def test_default_topology(self, seed_topology):
        """Test the built-in network"""
        assert seed_topology.nodes() == ["P1", "C1", "H1", "F1", "C2", "P2", "H2", "F2"]
        assert seed_topology.edge_count() == len(DEFAULT_CONNECTIONS)
        assert all(edge.is_active for edge in seed_topology.edges())
        assert seed_topology.get_edge("C2", "C1").cost == 1

    def test_parse_seed_with_statuses(self):
        """Test seed documents may pre-fail edges"""
        topology = parse_seed({
            "nodes": ["X"],
            "edges": [
                {"from": "A", "to": "B", "cost": 2},
                {"from": "B", "to": "C", "cost": 3, "status": "failed"},
            ]
        })
        assert topology.nodes() == ["X", "A", "B", "C"]
        assert topology.get_edge("B", "C").status == EdgeStatus.FAILED
        assert topology.get_edge("A", "B").status == EdgeStatus.ACTIVE

    @pytest.mark.parametrize("document", [
        None,
        [],
        {"nodes": ["A"]},
        {"edges": [{"from": "A", "to": "B"}]},
        {"edges": [{"from": "A", "to": "B", "cost": 1, "status": "DOWN"}]},
        {"edges": [["A", "B", 1]]},
        {"edges": [{"from": "A", "to": "B", "cost": 1}, {"from": "B", "to": "A", "cost": 2}]},
    ])
    def test_parse_seed_invalid(self, document):
        """Test malformed seeds raise InvalidTopology"""
        with pytest.raises(InvalidTopology):
            parse_seed(document)

    def test_load_seed_file(self, tmp_path):
        """Test YAML seed loading"""
        seed_file = tmp_path / "seed.yaml"
        seed_file.write_text(
            "edges:\n"
            "  - {from: A, to: B, cost: 1}\n"
            "  - {from: B, to: C, cost: 2}\n"
        )
        topology = load_seed_file(seed_file)
        assert topology.nodes() == ["A", "B", "C"]
        assert edge_key("C", "B") in [e.key for e in topology.edges()]

    def test_load_seed_file_missing(self, tmp_path):
        """Test unreadable seed file"""
        with pytest.raises(InvalidTopology):
            load_seed_file(tmp_path / "missing.yaml")

    def test_load_seed_file_bad_yaml(self, tmp_path):
        """Test unparsable seed file"""
        seed_file = tmp_path / "bad.yaml"
        seed_file.write_text("edges: [unclosed\n")
        with pytest.raises(InvalidTopology):
            load_seed_file(seed_file)

    def test_build_seed_topology_default(self):
        """Test fallback to the built-in network"""
        assert build_seed_topology(None).node_count() == 8
