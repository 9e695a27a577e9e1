"""
Seed Topology Definitions

Provides the built-in eight-node network and loading of seed definitions from
YAML files:

    nodes: [P1, C1]
    edges:
      - {from: P1, to: C1, cost: 5}
      - {from: C1, to: C2, cost: 1, status: FAILED}
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

import yaml

from ..errors import InvalidTopology
from .constants import EdgeStatus
from .store import Topology, edge_key

logger = logging.getLogger(__name__)

# (a, b, cost)
DEFAULT_CONNECTIONS: List[Tuple[str, str, int]] = [
    ("P1", "C1", 5), ("H1", "C1", 3), ("F1", "C1", 7),
    ("C1", "C2", 1), ("C2", "P2", 4), ("C2", "H2", 6),
    ("P1", "H1", 8), ("H2", "F1", 2), ("C1", "F2", 9),
    ("F2", "P2", 10), ("H1", "P2", 5),
]


def default_topology() -> Topology:
    """Build the built-in eight-node network with every edge ACTIVE"""
    return Topology.from_definition(DEFAULT_CONNECTIONS)


def parse_seed(data: Any) -> Topology:
    """
    Build a topology from a parsed seed document

    Args:
        data: Mapping with optional 'nodes' and required 'edges' lists

    Returns:
        Validated Topology

    Raises:
        InvalidTopology: if the document does not match the seed grammar
    """
    if not isinstance(data, dict) or "edges" not in data:
        raise InvalidTopology("seed definition must be a mapping with an 'edges' list")

    nodes = data.get("nodes") or []
    raw_edges = data.get("edges") or []
    if not isinstance(nodes, list) or not isinstance(raw_edges, list):
        raise InvalidTopology("seed 'nodes' and 'edges' must be lists")

    edges: List[Tuple[str, str, int]] = []
    statuses: Dict[Tuple[str, str], EdgeStatus] = {}
    for index, entry in enumerate(raw_edges):
        if not isinstance(entry, dict):
            raise InvalidTopology(f"seed edge #{index} must be a mapping")
        try:
            a, b, cost = entry["from"], entry["to"], entry["cost"]
        except KeyError as e:
            raise InvalidTopology(f"seed edge #{index} is missing {e}") from e

        edges.append((str(a), str(b), cost))

        status = str(entry.get("status", EdgeStatus.ACTIVE.value)).upper()
        try:
            statuses[edge_key(str(a), str(b))] = EdgeStatus(status)
        except ValueError as e:
            raise InvalidTopology(f"seed edge #{index} has unknown status {status}") from e

    return Topology.from_definition(edges, nodes=[str(n) for n in nodes], statuses=statuses)


def load_seed_file(path: Union[str, Path]) -> Topology:
    """
    Load a YAML seed definition

    Raises:
        InvalidTopology: if the file cannot be read or parsed
    """
    path = Path(path)
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise InvalidTopology(f"cannot read seed file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise InvalidTopology(f"cannot parse seed file {path}: {e}") from e

    topology = parse_seed(data)
    logger.info(f"Loaded seed {path} with {topology.node_count()} nodes "
                f"and {topology.edge_count()} edges")
    return topology


def build_seed_topology(seed_file: Optional[Union[str, Path]] = None) -> Topology:
    """Seed from a file when one is configured, otherwise the built-in network"""
    if seed_file:
        return load_seed_file(seed_file)
    return default_topology()
