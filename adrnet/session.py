"""
Topology Session

Owns the topology of a long-lived host. Readers (dump, reroute) share the
topology; a disaster or targeted failure takes it exclusively.
"""

import logging
import threading
from contextlib import contextmanager
from typing import Iterator, Optional, Sequence

from .dispatcher import CommandDispatcher, DispatchResult, Invocation, parse_invocation
from .topology.store import Topology

logger = logging.getLogger("TopologySession")


class ReadWriteLock:
    """
    Many readers or one writer

    Waiting writers block new readers so that a steady stream of reroute
    queries cannot starve an injection.
    """

    def __init__(self):
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0

    @contextmanager
    def read(self) -> Iterator[None]:
        with self._cond:
            while self._writer or self._writers_waiting:
                self._cond.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._cond:
                self._readers -= 1
                if self._readers == 0:
                    self._cond.notify_all()

    @contextmanager
    def write(self) -> Iterator[None]:
        with self._cond:
            self._writers_waiting += 1
            try:
                while self._writer or self._readers:
                    self._cond.wait()
            finally:
                self._writers_waiting -= 1
            self._writer = True
        try:
            yield
        finally:
            with self._cond:
                self._writer = False
                self._cond.notify_all()


class TopologySession:
    """
    Host-owned topology state

    Example:
        session = TopologySession(default_topology())
        session.run(["disaster", "2"])
        print(session.run(["reroute", "P1", "H2"]).output)
    """

    def __init__(self, topology: Topology, dispatcher: Optional[CommandDispatcher] = None):
        self._topology = topology
        self._lock = ReadWriteLock()
        self.dispatcher = dispatcher or CommandDispatcher()

    @contextmanager
    def read(self) -> Iterator[Topology]:
        """Consistent view of the topology; must not be mutated"""
        with self._lock.read():
            yield self._topology

    @contextmanager
    def write(self) -> Iterator[Topology]:
        """Exclusive access to the topology"""
        with self._lock.write():
            yield self._topology

    def dispatch(self, invocation: Invocation) -> DispatchResult:
        """Run an invocation under the lock its mode requires"""
        guard = self.write() if invocation.mode.mutates else self.read()
        with guard as topology:
            result = self.dispatcher.dispatch(topology, invocation)
            if result.mutated:
                logger.info(f"Topology updated: {topology!r}")
        return result

    def run(self, args: Sequence[str]) -> DispatchResult:
        return self.dispatch(parse_invocation(args))
