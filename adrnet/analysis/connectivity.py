"""
Connectivity Analysis

Counts and lists the connected components of a topology, considering only
ACTIVE edges. Every node is part of the graph, so an isolated node is a
component of its own.
"""

import logging
from typing import List

import networkx as nx

from ..topology.store import Topology

logger = logging.getLogger(__name__)


def active_graph(topology: Topology) -> nx.Graph:
    """
    Build an undirected networkx graph of the surviving network

    Args:
        topology: Topology to read

    Returns:
        Graph holding every node and only the ACTIVE edges, weighted by cost
    """
    graph = nx.Graph()
    graph.add_nodes_from(topology.nodes())
    for edge in topology.active_edges():
        graph.add_edge(edge.u, edge.v, weight=edge.cost)
    return graph


def count_components(topology: Topology) -> int:
    """Number of maximal groups of nodes joined by ACTIVE edges"""
    count = nx.number_connected_components(active_graph(topology))
    logger.debug(f"Topology has {count} connected component(s)")
    return count


def components(topology: Topology) -> List[List[str]]:
    """
    List connected components

    Returns:
        Sorted node groups, ordered by their smallest label
    """
    groups = [sorted(group) for group in nx.connected_components(active_graph(topology))]
    return sorted(groups)


def same_component(topology: Topology, a: str, b: str) -> bool:
    """True when a and b are joined by a path of ACTIVE edges"""
    if not (topology.has_node(a) and topology.has_node(b)):
        return False
    return nx.has_path(active_graph(topology), a, b)
