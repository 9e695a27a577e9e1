"""
Command line interface

Runs exactly one engine operation per invocation. Protocol output goes to
stdout; diagnostics and errors go to stderr.

Exit codes:
    0  result written (a FAILED reroute line is still a handled result)
    1  invalid seed/state, unknown targeted link, or snapshot write failure
    2  usage error
"""

import argparse
import logging
import sys
from typing import List, Optional

from . import __version__
from .chaos.injector import DisasterInjector
from .config import DEFAULT_LOG_LEVEL, LOG_LEVELS, EngineConfig
from .dispatcher import USAGE, CommandDispatcher, parse_invocation
from .errors import InvalidTopology, UnknownCommand, UnknownEdge
from .persistence.snapshot import SnapshotStore
from .topology.seed import build_seed_topology
from .topology.store import Topology

logger = logging.getLogger("adrnet")


def setup_logging(log_level: str = DEFAULT_LOG_LEVEL):
    """
    Setup logging configuration

    Args:
        log_level: Logging level
    """
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S',
        stream=sys.stderr
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="adrnet",
        description="Network disaster simulation and failure-aware rerouting",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:

  # Current topology and health
  adrnet

  # Fail three random links and show the result
  adrnet --state /tmp/adrn.json disaster 3

  # Fail one specific link
  adrnet --state /tmp/adrn.json fail C1 C2

  # Cheapest surviving path
  adrnet --state /tmp/adrn.json reroute P1 H2
        """
    )
    parser.add_argument("command", nargs="*", metavar="MODE",
                        help="dump | disaster <count> | fail <a> <b> | reroute <start> <end>")
    parser.add_argument("--seed-file", default=None,
                        help="YAML seed topology (env: ADRN_SEED_FILE)")
    parser.add_argument("--state", dest="state_path", default=None,
                        help="JSON snapshot carried between invocations (env: ADRN_STATE_PATH)")
    parser.add_argument("--random-seed", type=int, default=None,
                        help="Seed for disaster selection (env: ADRN_RANDOM_SEED)")
    parser.add_argument("--log-level", default=None, choices=LOG_LEVELS,
                        help="Diagnostic log level (env: ADRN_LOG_LEVEL)")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def load_topology(config: EngineConfig) -> Topology:
    """Saved state when present, otherwise a fresh seed topology"""
    if config.state_path:
        topology = SnapshotStore(config.state_path).load()
        if topology is not None:
            logger.info(f"Resumed topology from {config.state_path}")
            return topology
    return build_seed_topology(config.seed_file)


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = EngineConfig.from_env().override(
            seed_file=args.seed_file,
            state_path=args.state_path,
            random_seed=args.random_seed,
            log_level=args.log_level
        )
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    setup_logging(config.log_level)

    try:
        invocation = parse_invocation(args.command)
    except UnknownCommand as e:
        print(f"Error: {e}\n{USAGE}", file=sys.stderr)
        return 2

    try:
        topology = load_topology(config)
        dispatcher = CommandDispatcher(injector=DisasterInjector(seed=config.random_seed))
        result = dispatcher.dispatch(topology, invocation)

        if result.mutated and config.state_path:
            SnapshotStore(config.state_path).save(topology)
    except (InvalidTopology, UnknownEdge) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except IOError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    sys.stdout.write(result.output)
    sys.stdout.flush()
    return 0


if __name__ == "__main__":
    sys.exit(main())
