"""
Topology Module

In-memory network model:
- Nodes identified by short labels
- Undirected weighted edges with ACTIVE/FAILED health
- Built-in and YAML seed definitions
"""

from .constants import EdgeStatus, MAX_PATH_COST
from .store import Edge, Topology, edge_key
from .seed import (
    DEFAULT_CONNECTIONS,
    default_topology,
    parse_seed,
    load_seed_file,
    build_seed_topology
)

__all__ = [
    'EdgeStatus',
    'MAX_PATH_COST',
    'Edge',
    'Topology',
    'edge_key',
    'DEFAULT_CONNECTIONS',
    'default_topology',
    'parse_seed',
    'load_seed_file',
    'build_seed_topology'
]
