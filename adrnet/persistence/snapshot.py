"""
Topology Snapshot Storage

Carries topology state between invocations as a JSON document:

    {"version": 1, "saved_at": "...", "topology": {"nodes": [...], "edges": [...]}}

Writes go through a temporary file and an atomic rename so an interrupted
save never leaves a truncated snapshot behind.
"""

import json
import logging
import os
import tempfile
from datetime import datetime
from pathlib import Path
from typing import Optional, Union

from ..errors import InvalidTopology
from ..topology.store import Topology

logger = logging.getLogger(__name__)

SNAPSHOT_VERSION = 1


class SnapshotStore:
    """
    File-backed topology snapshot
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def exists(self) -> bool:
        return self.path.exists()

    def save(self, topology: Topology) -> Path:
        """
        Persist a topology

        Args:
            topology: Topology to save

        Returns:
            Path written

        Raises:
            IOError: if the file cannot be written
        """
        document = {
            "version": SNAPSHOT_VERSION,
            "saved_at": datetime.now().isoformat(),
            "topology": topology.to_dict()
        }
        content = json.dumps(document, indent=2)

        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, temp_path = tempfile.mkstemp(suffix=".tmp", prefix=".adrn_", dir=self.path.parent)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(content)
                f.flush()
                os.fsync(f.fileno())
            os.replace(temp_path, self.path)
        except OSError as e:
            try:
                os.unlink(temp_path)
            except OSError:
                pass
            raise IOError(f"Failed to save snapshot {self.path}: {e}") from e

        logger.debug(f"Saved snapshot to {self.path}")
        return self.path

    def load(self) -> Optional[Topology]:
        """
        Load the saved topology

        Returns:
            Topology, or None when no snapshot exists yet

        Raises:
            InvalidTopology: if the snapshot is unreadable or invalid
        """
        if not self.path.exists():
            return None

        try:
            document = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            raise InvalidTopology(f"cannot load snapshot {self.path}: {e}") from e

        if not isinstance(document, dict) or document.get("version") != SNAPSHOT_VERSION:
            raise InvalidTopology(f"unsupported snapshot format in {self.path}")

        topology = Topology.from_dict(document.get("topology") or {})
        logger.debug(f"Loaded snapshot {self.path}: {topology!r}")
        return topology

    def clear(self) -> bool:
        """Delete the snapshot; True if one existed"""
        if self.path.exists():
            self.path.unlink()
            return True
        return False
