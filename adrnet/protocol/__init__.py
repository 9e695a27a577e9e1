"""
Protocol Module

Line-oriented text protocol spoken to the invocation wrapper.
"""

from .wire import (
    ProtocolError,
    TopologySnapshot,
    encode_snapshot,
    encode_topology,
    encode_route,
    parse_snapshot,
    parse_route
)

__all__ = [
    'ProtocolError',
    'TopologySnapshot',
    'encode_snapshot',
    'encode_topology',
    'encode_route',
    'parse_snapshot',
    'parse_route'
]
