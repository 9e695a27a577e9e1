"""
Engine Configuration

Settings come from environment variables and may be overridden by command
line options:

    ADRN_SEED_FILE     YAML seed definition (default: built-in network)
    ADRN_STATE_PATH    JSON snapshot carried between invocations
    ADRN_RANDOM_SEED   Integer seed for disaster selection
    ADRN_LOG_LEVEL     DEBUG, INFO, WARNING or ERROR (default: WARNING)
"""

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Mapping, Optional

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")
DEFAULT_LOG_LEVEL = "WARNING"


@dataclass(frozen=True)
class EngineConfig:
    """Resolved engine settings"""
    seed_file: Optional[Path] = None
    state_path: Optional[Path] = None
    random_seed: Optional[int] = None
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "EngineConfig":
        """
        Read settings from the environment

        Raises:
            ValueError: if a variable holds an invalid value
        """
        env = os.environ if environ is None else environ

        seed_file = env.get("ADRN_SEED_FILE")
        state_path = env.get("ADRN_STATE_PATH")

        random_seed = None
        raw_seed = env.get("ADRN_RANDOM_SEED")
        if raw_seed:
            try:
                random_seed = int(raw_seed)
            except ValueError:
                raise ValueError(f"ADRN_RANDOM_SEED must be an integer, got {raw_seed!r}") from None

        log_level = env.get("ADRN_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()
        if log_level not in LOG_LEVELS:
            raise ValueError(f"ADRN_LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}")

        return cls(
            seed_file=Path(seed_file) if seed_file else None,
            state_path=Path(state_path) if state_path else None,
            random_seed=random_seed,
            log_level=log_level
        )

    def override(self, **changes) -> "EngineConfig":
        """Copy with every non-None keyword applied"""
        updates = {key: value for key, value in changes.items() if value is not None}
        for key in ("seed_file", "state_path"):
            if key in updates:
                updates[key] = Path(updates[key])
        if "log_level" in updates:
            updates["log_level"] = updates["log_level"].upper()
        return replace(self, **updates)
