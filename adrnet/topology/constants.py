"""
Topology Constants

Edge health states, wire protocol delimiters and numeric limits.
"""

from enum import Enum


class EdgeStatus(Enum):
    """Edge health state; FAILED is terminal within a run"""
    ACTIVE = "ACTIVE"
    FAILED = "FAILED"


# Path costs are bounded by a signed 32-bit integer
MAX_PATH_COST = 2**31 - 1

# Characters that would corrupt the line protocol if used in a node label
RESERVED_LABEL_CHARS = frozenset(",|:\r\n\t ")

# Labels may not start with this; the command line would read them as options
OPTION_PREFIX = "-"

# Separator between endpoints in an edge id ("C1-C2")
EDGE_ID_SEPARATOR = "-"
