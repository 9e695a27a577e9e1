"""
Failure-aware SPF Router

Computes the minimum-cost path between two nodes over ACTIVE edges only,
using networkx Dijkstra on the surviving graph.

Among equal-cost paths the router picks the one with the fewest hops, and
among those the lexicographically smallest node sequence. Each edge is
weighted as cost * scale + 1, where scale exceeds any possible hop count, so
a single Dijkstra run from the destination orders paths by (cost, hops). The
path is then walked forward from the source, always stepping to the smallest
neighbor that stays on an optimal path.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

import networkx as nx

from ..analysis.connectivity import active_graph
from ..errors import CostOverflow, NoPath, UnknownNode
from ..topology.constants import MAX_PATH_COST
from ..topology.store import Topology

logger = logging.getLogger(__name__)


class RouteFailure(Enum):
    """Why a route could not be computed"""
    UNKNOWN_NODE = "unknown_node"
    NO_PATH = "no_path"
    COST_OVERFLOW = "cost_overflow"


@dataclass
class Route:
    """
    Result of a reroute query

    Attributes:
        start: Source node
        end: Destination node
        path: Ordered node labels from start to end (empty on failure)
        cost: Total path cost (None on failure)
        failure: Failure kind, None on success
        reason: Human-readable failure reason
    """
    start: str
    end: str
    path: List[str] = field(default_factory=list)
    cost: Optional[int] = None
    failure: Optional[RouteFailure] = None
    reason: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.failure is None

    @property
    def hops(self) -> int:
        return max(len(self.path) - 1, 0)

    def raise_for_failure(self) -> "Route":
        """Raise the matching engine error if this route failed"""
        if self.failure is RouteFailure.UNKNOWN_NODE:
            raise UnknownNode(self.reason.split(": ", 1)[-1])
        if self.failure is RouteFailure.NO_PATH:
            raise NoPath(self.reason)
        if self.failure is RouteFailure.COST_OVERFLOW:
            raise CostOverflow(self.reason)
        return self

    def to_dict(self) -> Dict[str, Any]:
        return {
            "start": self.start,
            "end": self.end,
            "success": self.success,
            "path": self.path,
            "cost": self.cost,
            "failure": self.failure.value if self.failure else None,
            "reason": self.reason
        }

    def __repr__(self) -> str:
        if self.success:
            return f"Route({' -> '.join(self.path)}, cost={self.cost})"
        return f"Route({self.start} -> {self.end}, failed={self.failure.value})"


class Router:
    """
    Shortest path calculator restricted to ACTIVE edges

    Routing never mutates the topology.
    """

    def __init__(self, max_cost: int = MAX_PATH_COST):
        """
        Initialize router

        Args:
            max_cost: Largest representable path cost
        """
        self.max_cost = max_cost

    def route(self, topology: Topology, start: str, end: str) -> Route:
        """
        Find the best path from start to end

        Args:
            topology: Topology to read
            start: Source node label
            end: Destination node label

        Returns:
            Route; on failure `failure` and `reason` are set
        """
        for node_id in (start, end):
            if not topology.has_node(node_id):
                logger.info(f"Reroute {start} -> {end} failed: unknown node {node_id}")
                return Route(start=start, end=end,
                             failure=RouteFailure.UNKNOWN_NODE,
                             reason=f"unknown node: {node_id}")

        if start == end:
            return Route(start=start, end=end, path=[start], cost=0)

        graph = active_graph(topology)
        scale = graph.number_of_nodes()
        distances = self._distances_to(graph, end, scale)

        if start not in distances:
            logger.info(f"Reroute {start} -> {end} failed: no active path")
            return Route(start=start, end=end,
                         failure=RouteFailure.NO_PATH,
                         reason="no path available")

        cost = distances[start] // scale
        if cost > self.max_cost:
            logger.warning(f"Reroute {start} -> {end} failed: cost exceeds {self.max_cost}")
            return Route(start=start, end=end,
                         failure=RouteFailure.COST_OVERFLOW,
                         reason=f"path cost exceeds {self.max_cost}")

        path = self._walk(graph, start, end, distances, scale)
        logger.info(f"Reroute {start} -> {end}: {' -> '.join(path)} (cost {cost})")
        return Route(start=start, end=end, path=path, cost=cost)

    @staticmethod
    def _distances_to(graph: nx.Graph, target: str, scale: int) -> Dict[str, int]:
        """
        Dijkstra from target over the ACTIVE graph

        Returns:
            node -> cost * scale + hops to target, for every reachable node
        """
        return nx.single_source_dijkstra_path_length(
            graph, target,
            weight=lambda u, v, data: data["weight"] * scale + 1
        )

    @staticmethod
    def _walk(graph: nx.Graph, start: str, end: str,
              distances: Dict[str, int], scale: int) -> List[str]:
        """Follow optimal next hops from start, smallest label first"""
        path = [start]
        current = start
        while current != end:
            next_hop = None
            for neighbor in sorted(graph[current]):
                step = graph[current][neighbor]["weight"] * scale + 1
                if neighbor in distances and distances[neighbor] + step == distances[current]:
                    next_hop = neighbor
                    break
            if next_hop is None:
                raise RuntimeError(f"shortest path tree is inconsistent at {current}")
            path.append(next_hop)
            current = next_hop
        return path


def route(topology: Topology, start: str, end: str) -> Route:
    """Find the best ACTIVE-only path between two nodes"""
    return Router().route(topology, start, end)
