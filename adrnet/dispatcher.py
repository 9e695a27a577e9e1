"""
Command Dispatcher

Maps one invocation mode onto the engine components and renders the result
in the line protocol:

    (none) | dump          -> DUMP
    disaster <count>       -> DISASTER(count), then snapshot
    fail <a> <b>           -> FAIL(a, b), then snapshot
    reroute <start> <end>  -> REROUTE(start, end)
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence, Tuple

from .chaos.injector import DisasterInjector, DisasterResult
from .errors import UnknownCommand
from .protocol.wire import encode_route, encode_topology
from .spf.router import Route, Router
from .topology.store import Topology

logger = logging.getLogger(__name__)


class Mode(Enum):
    """Invocation modes"""
    DUMP = "dump"
    DISASTER = "disaster"
    FAIL = "fail"
    REROUTE = "reroute"

    @property
    def mutates(self) -> bool:
        return self in (Mode.DISASTER, Mode.FAIL)


# Number of positional arguments each mode takes after its name
MODE_ARITY = {
    Mode.DUMP: 0,
    Mode.DISASTER: 1,
    Mode.FAIL: 2,
    Mode.REROUTE: 2,
}

USAGE = "usage: adrnet [dump | disaster <count> | fail <a> <b> | reroute <start> <end>]"


@dataclass(frozen=True)
class Invocation:
    """A single parsed command"""
    mode: Mode = Mode.DUMP
    count: Optional[int] = None
    nodes: Tuple[str, ...] = ()


@dataclass
class DispatchResult:
    """
    Outcome of one dispatched command

    Attributes:
        invocation: Command that ran
        output: Protocol text for the primary channel
        disaster: Injection outcome (DISASTER / FAIL)
        route: Reroute outcome (REROUTE)
    """
    invocation: Invocation
    output: str
    disaster: Optional[DisasterResult] = None
    route: Optional[Route] = None

    @property
    def mutated(self) -> bool:
        return self.disaster is not None and self.disaster.effective_count > 0


def parse_invocation(args: Sequence[str]) -> Invocation:
    """
    Parse positional command arguments

    Raises:
        UnknownCommand: for unknown modes, wrong argument counts or an
            invalid failure count
    """
    if not args:
        return Invocation(Mode.DUMP)

    name, params = args[0], list(args[1:])
    try:
        mode = Mode(name)
    except ValueError:
        raise UnknownCommand(f"unknown command: {name}") from None

    expected = MODE_ARITY[mode]
    if len(params) != expected:
        raise UnknownCommand(f"{mode.value} expects {expected} argument(s), got {len(params)}")

    if mode is Mode.DISASTER:
        raw = params[0]
        if not (raw.isascii() and raw.isdigit()):
            raise UnknownCommand(f"failure count must be a non-negative integer: {raw}")
        return Invocation(mode, count=int(raw))

    return Invocation(mode, nodes=tuple(params))


class CommandDispatcher:
    """
    Runs one invocation against a topology
    """

    def __init__(self, injector: Optional[DisasterInjector] = None,
                 router: Optional[Router] = None):
        self.injector = injector or DisasterInjector()
        self.router = router or Router()

    def dispatch(self, topology: Topology, invocation: Invocation) -> DispatchResult:
        """
        Execute an invocation

        Args:
            topology: Topology to operate on (mutated by DISASTER / FAIL)
            invocation: Parsed command

        Returns:
            DispatchResult with the protocol output
        """
        logger.debug(f"Dispatching {invocation}")

        if invocation.mode is Mode.DUMP:
            return DispatchResult(invocation, encode_topology(topology))

        if invocation.mode is Mode.DISASTER:
            disaster = self.injector.inject_failures(topology, invocation.count)
            return DispatchResult(invocation, encode_topology(topology), disaster=disaster)

        if invocation.mode is Mode.FAIL:
            a, b = invocation.nodes
            disaster = self.injector.fail_connection(topology, a, b)
            return DispatchResult(invocation, encode_topology(topology), disaster=disaster)

        if invocation.mode is Mode.REROUTE:
            start, end = invocation.nodes
            route = self.router.route(topology, start, end)
            return DispatchResult(invocation, encode_route(route), route=route)

        raise UnknownCommand(f"unsupported mode: {invocation.mode}")

    def run(self, topology: Topology, args: Sequence[str]) -> DispatchResult:
        """Parse positional arguments and dispatch them"""
        return self.dispatch(topology, parse_invocation(args))
