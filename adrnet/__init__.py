"""
ADR Network Engine - Disaster simulation and failure-aware rerouting

Models a network topology, injects link failures ("disasters"), analyses the
connectivity that survives and finds the cheapest remaining path between two
nodes.

Architecture:
- topology/: Node/edge store and seed definitions
- chaos/: Random and targeted link failure injection
- analysis/: Connected component analysis over ACTIVE links
- spf/: Dijkstra router that ignores FAILED links
- protocol/: Line-oriented text protocol
- persistence/: JSON snapshots carried between invocations
"""

__version__ = "1.0.0"

from .errors import (
    AdrnError,
    InvalidTopology,
    UnknownNode,
    UnknownEdge,
    NoPath,
    CostOverflow,
    UnknownCommand
)
from .topology import Topology, Edge, EdgeStatus, default_topology
from .chaos import DisasterInjector, DisasterResult, inject_failures
from .analysis import count_components
from .spf import Router, Route, RouteFailure, route
from .dispatcher import CommandDispatcher, Invocation, Mode, parse_invocation
from .session import TopologySession

__all__ = [
    "AdrnError",
    "InvalidTopology",
    "UnknownNode",
    "UnknownEdge",
    "NoPath",
    "CostOverflow",
    "UnknownCommand",
    "Topology",
    "Edge",
    "EdgeStatus",
    "default_topology",
    "DisasterInjector",
    "DisasterResult",
    "inject_failures",
    "count_components",
    "Router",
    "Route",
    "RouteFailure",
    "route",
    "CommandDispatcher",
    "Invocation",
    "Mode",
    "parse_invocation",
    "TopologySession",
]
