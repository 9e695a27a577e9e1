"""
Topology Store

Holds the nodes and undirected, weighted edges of a network together with the
health status of every edge. All mutation is validated before it is applied,
so a failed call leaves the store exactly as it was.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Tuple, Union

from ..errors import InvalidTopology
from .constants import EDGE_ID_SEPARATOR, OPTION_PREFIX, RESERVED_LABEL_CHARS, EdgeStatus

logger = logging.getLogger(__name__)

EdgeKey = Tuple[str, str]


def edge_key(a: str, b: str) -> EdgeKey:
    """Canonical (sorted) endpoint pair for an undirected edge"""
    return (a, b) if a <= b else (b, a)


@dataclass
class Edge:
    """
    Undirected link between two distinct nodes

    Attributes:
        u: Lower endpoint label (canonical direction)
        v: Higher endpoint label
        cost: Non-negative traversal weight
        status: ACTIVE or FAILED
    """
    u: str
    v: str
    cost: int
    status: EdgeStatus = EdgeStatus.ACTIVE

    @property
    def key(self) -> EdgeKey:
        return (self.u, self.v)

    @property
    def id(self) -> str:
        return f"{self.u}{EDGE_ID_SEPARATOR}{self.v}"

    @property
    def is_active(self) -> bool:
        return self.status is EdgeStatus.ACTIVE

    def to_dict(self) -> Dict[str, Any]:
        return {
            "from": self.u,
            "to": self.v,
            "cost": self.cost,
            "status": self.status.value
        }

    def __repr__(self) -> str:
        return f"Edge({self.u}<->{self.v}, cost={self.cost}, {self.status.value})"


class Topology:
    """
    In-memory network topology

    Nodes keep their insertion order. Edges are keyed by their sorted endpoint
    pair, so at most one edge can join any two nodes.
    """

    def __init__(self):
        self._nodes: Dict[str, None] = {}
        self._edges: Dict[EdgeKey, Edge] = {}
        self._adjacency: Dict[str, Dict[str, Edge]] = {}

    @classmethod
    def from_definition(
        cls,
        edges: Iterable[Tuple[str, str, int]],
        nodes: Optional[Iterable[str]] = None,
        statuses: Optional[Dict[EdgeKey, EdgeStatus]] = None
    ) -> "Topology":
        """
        Build a topology in one step

        Args:
            edges: (a, b, cost) triples
            nodes: Extra node labels; edge endpoints are added implicitly
            statuses: Initial status per canonical edge key

        Returns:
            A fully validated Topology

        Raises:
            InvalidTopology: if any definition entry is invalid or nothing
                was defined
        """
        topology = cls()
        for node_id in nodes or []:
            topology.add_node(node_id)

        for a, b, cost in edges:
            for endpoint in (a, b):
                if not topology.has_node(endpoint):
                    topology.add_node(endpoint)
            topology.add_edge(a, b, cost)

        for key, status in (statuses or {}).items():
            topology.set_edge_status(key, status)

        if not topology._nodes:
            raise InvalidTopology("topology must contain at least one node")

        logger.debug(f"Built topology with {topology.node_count()} nodes "
                     f"and {topology.edge_count()} edges")
        return topology

    # --- Construction ---

    def add_node(self, node_id: str) -> None:
        """
        Register a node label

        Raises:
            InvalidTopology: if the label is empty, reserved or already present
        """
        if not isinstance(node_id, str) or not node_id:
            raise InvalidTopology(f"invalid node label: {node_id!r}")
        if any(ch in RESERVED_LABEL_CHARS for ch in node_id):
            raise InvalidTopology(f"node label contains a reserved character: {node_id!r}")
        if node_id.startswith(OPTION_PREFIX):
            raise InvalidTopology(f"node label may not start with {OPTION_PREFIX!r}: {node_id!r}")
        if node_id in self._nodes:
            raise InvalidTopology(f"duplicate node: {node_id}")

        self._nodes[node_id] = None
        self._adjacency[node_id] = {}

    def add_edge(self, a: str, b: str, cost: int,
                 status: EdgeStatus = EdgeStatus.ACTIVE) -> Edge:
        """
        Connect two existing nodes

        Args:
            a: First endpoint
            b: Second endpoint
            cost: Non-negative integer weight
            status: Initial status (FAILED is used when restoring snapshots)

        Returns:
            The created Edge

        Raises:
            InvalidTopology: on unknown endpoints, self-loops, duplicate pairs
                or a cost that is not a non-negative integer
        """
        for endpoint in (a, b):
            if endpoint not in self._nodes:
                raise InvalidTopology(f"edge {a}-{b} references unknown node {endpoint}")
        if a == b:
            raise InvalidTopology(f"edge must join two distinct nodes: {a}")
        if isinstance(cost, bool) or not isinstance(cost, int) or cost < 0:
            raise InvalidTopology(f"edge {a}-{b} has invalid cost {cost!r}")
        if not isinstance(status, EdgeStatus):
            raise InvalidTopology(f"edge {a}-{b} has invalid status {status!r}")

        key = edge_key(a, b)
        if key in self._edges:
            raise InvalidTopology(f"duplicate edge between {key[0]} and {key[1]}")

        edge = Edge(u=key[0], v=key[1], cost=cost, status=status)
        self._edges[key] = edge
        self._adjacency[edge.u][edge.v] = edge
        self._adjacency[edge.v][edge.u] = edge
        return edge

    # --- Read accessors ---

    def nodes(self) -> List[str]:
        """Node labels in insertion order"""
        return list(self._nodes)

    def edges(self) -> List[Edge]:
        """All edges sorted by canonical endpoint pair"""
        return [self._edges[key] for key in sorted(self._edges)]

    def active_edges(self) -> List[Edge]:
        return [edge for edge in self.edges() if edge.is_active]

    def failed_edges(self) -> List[Edge]:
        return [edge for edge in self.edges() if not edge.is_active]

    def has_node(self, node_id: str) -> bool:
        return node_id in self._nodes

    def get_edge(self, a: str, b: str) -> Optional[Edge]:
        return self._edges.get(edge_key(a, b))

    def neighbors(self, node_id: str, active_only: bool = True) -> Dict[str, Edge]:
        """Map of neighbor label -> connecting edge"""
        links = self._adjacency.get(node_id, {})
        if not active_only:
            return dict(links)
        return {peer: edge for peer, edge in links.items() if edge.is_active}

    def node_count(self) -> int:
        return len(self._nodes)

    def edge_count(self) -> int:
        return len(self._edges)

    # --- Mutation ---

    def set_edge_status(self, edge_id: Union[Edge, EdgeKey], status: EdgeStatus) -> Edge:
        """
        Change the health status of an edge

        Args:
            edge_id: Edge or endpoint pair (either order)
            status: New status

        Returns:
            The updated Edge

        Raises:
            InvalidTopology: if the edge does not exist or the change would
                restore a FAILED edge
        """
        if isinstance(edge_id, Edge):
            key = edge_id.key
        else:
            key = edge_key(*edge_id)

        edge = self._edges.get(key)
        if edge is None:
            raise InvalidTopology(f"unknown edge: {key[0]}-{key[1]}")
        if not isinstance(status, EdgeStatus):
            raise InvalidTopology(f"invalid edge status: {status!r}")
        if edge.status is EdgeStatus.FAILED and status is EdgeStatus.ACTIVE:
            raise InvalidTopology(f"edge {edge.id} is FAILED and cannot be restored")

        edge.status = status
        return edge

    # --- Serialization ---

    def to_dict(self) -> Dict[str, Any]:
        return {
            "nodes": self.nodes(),
            "edges": [edge.to_dict() for edge in self.edges()]
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Topology":
        """
        Rebuild a topology from to_dict() output

        Raises:
            InvalidTopology: if the data is malformed
        """
        try:
            edges = [(e["from"], e["to"], e["cost"]) for e in data.get("edges", [])]
            statuses = {
                edge_key(e["from"], e["to"]): EdgeStatus(e.get("status", "ACTIVE"))
                for e in data.get("edges", [])
            }
            nodes = list(data.get("nodes", []))
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise InvalidTopology(f"malformed topology data: {e}") from e

        return cls.from_definition(edges, nodes=nodes, statuses=statuses)

    def __repr__(self) -> str:
        return (f"Topology(nodes={self.node_count()}, "
                f"edges={self.edge_count()}, "
                f"failed={len(self.failed_edges())})")
