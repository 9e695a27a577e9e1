"""
Engine error taxonomy

InvalidTopology and UnknownEdge are raised by the topology store and the
injector. UnknownNode, NoPath and CostOverflow mirror the failure variants of
a Route and are only raised when a caller asks a failed Route to raise.
UnknownCommand is raised by the dispatcher for usage errors.
"""


class AdrnError(Exception):
    """Base class for all engine errors"""
    pass


class InvalidTopology(AdrnError):
    """Raised when a topology definition or mutation would break its invariants"""
    pass


class UnknownNode(AdrnError):
    """Raised when an operation references a node absent from the topology"""

    def __init__(self, node_id: str):
        super().__init__(f"unknown node: {node_id}")
        self.node_id = node_id


class UnknownEdge(AdrnError):
    """Raised when a targeted failure names a link that does not exist"""

    def __init__(self, u: str, v: str):
        super().__init__(f"no connection between {u} and {v}")
        self.u = u
        self.v = v


class NoPath(AdrnError):
    """Raised when two nodes are not joined by any active path"""
    pass


class CostOverflow(AdrnError):
    """Raised when an accumulated path cost exceeds MAX_PATH_COST"""
    pass


class UnknownCommand(AdrnError):
    """Raised when the dispatcher receives an unrecognized or malformed mode"""
    pass
