"""
Pytest configuration file

Adds the project root to the Python path so tests can import the engine
without installing it, and provides shared topology fixtures.
"""
import sys
import os

import pytest

# Add the project root to the path
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if project_root not in sys.path:
    sys.path.insert(0, project_root)

from adrnet.topology import Topology, default_topology  # noqa: E402


class ScriptedRandom:
    """
    Deterministic random source

    Picks the edges whose ids are listed in `picks`, in that order, instead
    of sampling at random.
    """

    def __init__(self, picks):
        self.picks = list(picks)
        self.calls = []

    def sample(self, population, k):
        self.calls.append((len(population), k))
        by_id = {edge.id: edge for edge in population}
        chosen = [by_id[edge_id] for edge_id in self.picks if edge_id in by_id]
        return chosen[:k]


@pytest.fixture
def seed_topology() -> Topology:
    """Built-in eight-node network, every edge ACTIVE"""
    return default_topology()


@pytest.fixture
def line_topology() -> Topology:
    """A - B - C chain plus an isolated node D"""
    return Topology.from_definition([("A", "B", 1), ("B", "C", 2)], nodes=["D"])


@pytest.fixture
def scripted_random():
    return ScriptedRandom
