"""
Line Protocol - Encoding and Parsing

Snapshot output (DUMP, DISASTER and FAIL modes):

    STATUS_NODES:<int>
    STATUS_COMPONENTS:<int>
    NODE:<id>                       (one per node)
    EDGE:<from>,<to>,<cost>,<ACTIVE|FAILED>   (one per edge)

Reroute output (REROUTE mode, one line):

    SUCCESS|<cost>|<A -> B -> C>
    FAILED|N/A|<reason>

Encoders are pure functions of typed values; parsers implement the consumer
side of the same grammar and ignore line types they do not know.
"""

from dataclasses import dataclass, field, replace
from typing import Dict, List, Optional

from ..analysis.connectivity import count_components
from ..spf.router import Route, RouteFailure
from ..topology.constants import EdgeStatus
from ..topology.store import Edge, Topology

STATUS_NODES = "STATUS_NODES:"
STATUS_COMPONENTS = "STATUS_COMPONENTS:"
NODE = "NODE:"
EDGE = "EDGE:"

ROUTE_SUCCESS = "SUCCESS"
ROUTE_FAILED = "FAILED"
ROUTE_NO_COST = "N/A"
PATH_SEPARATOR = " -> "


class ProtocolError(ValueError):
    """Raised when text does not follow the line protocol"""
    pass


@dataclass
class TopologySnapshot:
    """
    Point-in-time copy of a topology's observable state

    Attributes:
        nodes: Node labels
        component_count: Connected components over ACTIVE edges
        edges: Detached copies of every edge
        node_count: Reported node total (defaults to len(nodes))
    """
    nodes: List[str] = field(default_factory=list)
    component_count: int = 0
    edges: List[Edge] = field(default_factory=list)
    node_count: Optional[int] = None

    def __post_init__(self):
        if self.node_count is None:
            self.node_count = len(self.nodes)

    @classmethod
    def capture(cls, topology: Topology) -> "TopologySnapshot":
        return cls(
            nodes=topology.nodes(),
            component_count=count_components(topology),
            edges=[replace(edge) for edge in topology.edges()]
        )

    def to_dict(self) -> Dict:
        return {
            "status": {
                "total_nodes": self.node_count,
                "disconnected_components": self.component_count
            },
            "nodes": list(self.nodes),
            "edges": [edge.to_dict() for edge in self.edges]
        }


# --- Encoding ---

def encode_snapshot(snapshot: TopologySnapshot) -> str:
    """Serialize a snapshot, one record per line"""
    lines = [
        f"{STATUS_NODES}{snapshot.node_count}",
        f"{STATUS_COMPONENTS}{snapshot.component_count}",
    ]
    lines.extend(f"{NODE}{node_id}" for node_id in snapshot.nodes)
    lines.extend(
        f"{EDGE}{edge.u},{edge.v},{edge.cost},{edge.status.value}"
        for edge in snapshot.edges
    )
    return "\n".join(lines) + "\n"


def encode_topology(topology: Topology) -> str:
    """Capture and serialize the current state of a topology"""
    return encode_snapshot(TopologySnapshot.capture(topology))


def encode_route(route: Route) -> str:
    """Serialize a reroute result as a single line"""
    if route.success:
        return f"{ROUTE_SUCCESS}|{route.cost}|{PATH_SEPARATOR.join(route.path)}\n"
    return f"{ROUTE_FAILED}|{ROUTE_NO_COST}|{route.reason}\n"


# --- Parsing ---

def _parse_int(value: str, line: str) -> int:
    try:
        return int(value)
    except ValueError as e:
        raise ProtocolError(f"expected an integer in line: {line!r}") from e


def parse_snapshot(text: str) -> TopologySnapshot:
    """
    Parse snapshot output

    When no NODE lines are present the node list is derived from EDGE
    endpoints in order of appearance.

    Raises:
        ProtocolError: on malformed records
    """
    snapshot = TopologySnapshot()
    node_count = None
    explicit_nodes: List[str] = []
    edge_nodes: List[str] = []

    for raw in text.splitlines():
        line = raw.strip()
        if not line:
            continue

        if line.startswith(STATUS_NODES):
            node_count = _parse_int(line[len(STATUS_NODES):], line)
        elif line.startswith(STATUS_COMPONENTS):
            snapshot.component_count = _parse_int(line[len(STATUS_COMPONENTS):], line)
        elif line.startswith(NODE):
            explicit_nodes.append(line[len(NODE):])
        elif line.startswith(EDGE):
            parts = line[len(EDGE):].split(",")
            if len(parts) != 4:
                raise ProtocolError(f"EDGE record needs 4 fields: {line!r}")
            u, v, cost, status = parts
            try:
                edge_status = EdgeStatus(status)
            except ValueError as e:
                raise ProtocolError(f"unknown edge status in line: {line!r}") from e
            snapshot.edges.append(Edge(u=u, v=v, cost=_parse_int(cost, line), status=edge_status))
            for endpoint in (u, v):
                if endpoint not in edge_nodes:
                    edge_nodes.append(endpoint)

    snapshot.nodes = explicit_nodes or edge_nodes
    snapshot.node_count = node_count if node_count is not None else len(snapshot.nodes)
    return snapshot


def parse_route(text: str) -> Route:
    """
    Parse a reroute result line

    Raises:
        ProtocolError: if the line does not have three '|' separated fields
    """
    line = text.strip()
    parts = line.split("|", 2)
    if len(parts) != 3:
        raise ProtocolError(f"reroute line needs 3 fields: {line!r}")

    status, cost, detail = parts
    if status == ROUTE_SUCCESS:
        path = [hop for hop in detail.split(PATH_SEPARATOR) if hop]
        if not path:
            raise ProtocolError(f"successful reroute without a path: {line!r}")
        return Route(start=path[0], end=path[-1], path=path, cost=_parse_int(cost, line))

    if status == ROUTE_FAILED:
        if detail.startswith("unknown node:"):
            failure = RouteFailure.UNKNOWN_NODE
        elif detail.startswith("path cost exceeds"):
            failure = RouteFailure.COST_OVERFLOW
        else:
            failure = RouteFailure.NO_PATH
        return Route(start="", end="", failure=failure, reason=detail)

    raise ProtocolError(f"unknown reroute status {status!r}")
