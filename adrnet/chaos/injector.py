"""
Disaster Injector - Link failure injection

Provides:
- Random failure of N currently ACTIVE links, without replacement
- Targeted failure of a single named link

The random source is injected so that tests can replay an exact selection.
"""

import logging
import random
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Protocol, Sequence, TypeVar

from ..errors import UnknownEdge
from ..topology.constants import EdgeStatus
from ..topology.store import Edge, Topology

logger = logging.getLogger("DisasterInjector")

T = TypeVar("T")


class RandomSource(Protocol):
    """Anything that can draw k distinct items, like random.Random"""

    def sample(self, population: Sequence[T], k: int) -> List[T]:
        ...


@dataclass
class DisasterResult:
    """
    Outcome of a failure injection

    Attributes:
        requested: Number of failures asked for
        failed: Edges moved from ACTIVE to FAILED by this call
        clamped: True when fewer edges were available than requested
    """
    requested: int
    failed: List[Edge] = field(default_factory=list)
    clamped: bool = False

    @property
    def effective_count(self) -> int:
        return len(self.failed)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "requested": self.requested,
            "effective_count": self.effective_count,
            "clamped": self.clamped,
            "failed": [edge.id for edge in self.failed]
        }


class DisasterInjector:
    """
    Fails links in a topology

    Only ACTIVE edges are ever selected, so no edge fails twice and none is
    restored.
    """

    def __init__(self, rng: Optional[RandomSource] = None, seed: Optional[int] = None):
        """
        Initialize injector

        Args:
            rng: Random source; defaults to random.Random(seed)
            seed: Seed for the default random source (None = nondeterministic)
        """
        self.rng = rng if rng is not None else random.Random(seed)

    def inject_failures(self, topology: Topology, count: int) -> DisasterResult:
        """
        Fail up to `count` randomly chosen ACTIVE edges

        Args:
            topology: Topology to mutate in place
            count: Requested number of failures (non-negative)

        Returns:
            DisasterResult listing the edges that failed
        """
        if isinstance(count, bool) or not isinstance(count, int) or count < 0:
            raise ValueError(f"failure count must be a non-negative integer, got {count!r}")

        active = topology.active_edges()
        actual = min(count, len(active))
        result = DisasterResult(requested=count, clamped=count > len(active))

        if count == 0:
            return result

        if not active:
            logger.warning("Network has no active edges left to fail")
            return result

        if result.clamped:
            logger.warning(f"Requested {count} failures but only {len(active)} "
                           f"active connections remain; failing all of them")

        chosen = self.rng.sample(active, actual)

        logger.warning(f"Simulating disaster: failing {actual} connection(s)")
        for edge in chosen:
            topology.set_edge_status(edge, EdgeStatus.FAILED)
            result.failed.append(edge)
            logger.warning(f"Connection FAILED: {edge.u} <-> {edge.v} (cost {edge.cost})")

        return result

    def fail_connection(self, topology: Topology, a: str, b: str) -> DisasterResult:
        """
        Fail the edge joining a and b

        Failing an already FAILED edge is a no-op.

        Raises:
            UnknownEdge: if no edge joins a and b
        """
        edge = topology.get_edge(a, b)
        if edge is None:
            raise UnknownEdge(a, b)

        result = DisasterResult(requested=1)
        if edge.is_active:
            topology.set_edge_status(edge, EdgeStatus.FAILED)
            result.failed.append(edge)
            logger.warning(f"Connection FAILED: {edge.u} <-> {edge.v} (cost {edge.cost})")
        else:
            logger.info(f"Connection {edge.id} is already FAILED")

        return result


def inject_failures(topology: Topology, count: int,
                    rng: Optional[RandomSource] = None) -> DisasterResult:
    """Fail up to `count` random ACTIVE edges of a topology"""
    return DisasterInjector(rng=rng).inject_failures(topology, count)
