"""Solver settings.

Defaults can be overridden from the environment (``FIFTEEN_*`` variables)
or, in the CLI, from command-line options.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, replace
from typing import Any, Mapping

logger = logging.getLogger(__name__)

ENV_PREFIX = "FIFTEEN_"


def _parse_bool(raw: str) -> bool:
    return raw.strip().lower() not in ("0", "false", "no", "off", "")


@dataclass(frozen=True)
class SolverConfig:
    """Tuning knobs for a search run.

    Attributes:
        progress_interval: node expansions between progress snapshots.
        progress_seconds: if set, also yield once this much wall-clock time
            has passed since the last snapshot.
        max_nodes: if set, give up (``EXHAUSTED``) after this many expansions.
        use_linear_conflict: add linear-conflict to the Manhattan estimate.
    """

    progress_interval: int = 5000
    progress_seconds: float | None = None
    max_nodes: int | None = None
    use_linear_conflict: bool = True

    def __post_init__(self) -> None:
        if self.progress_interval < 1:
            raise ValueError("progress_interval must be at least 1")
        if self.max_nodes is not None and self.max_nodes < 1:
            raise ValueError("max_nodes must be at least 1")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> SolverConfig:
        """Build a config from ``FIFTEEN_*`` variables, falling back to defaults."""
        env = os.environ if environ is None else environ
        values: dict[str, Any] = {}
        if (raw := env.get(ENV_PREFIX + "LINEAR_CONFLICT")) is not None:
            values["use_linear_conflict"] = _parse_bool(raw)
        try:
            if raw := env.get(ENV_PREFIX + "PROGRESS_INTERVAL"):
                values["progress_interval"] = int(raw)
            if raw := env.get(ENV_PREFIX + "PROGRESS_SECONDS"):
                values["progress_seconds"] = float(raw)
            if raw := env.get(ENV_PREFIX + "MAX_NODES"):
                values["max_nodes"] = int(raw)
            config = cls(**values)
        except ValueError as e:
            logger.warning(f"Ignoring invalid solver setting: {e}")
            config = cls(use_linear_conflict=values.get("use_linear_conflict", True))
        logger.debug(f"Solver config: {config}")
        return config

    def with_overrides(self, **changes: Any) -> SolverConfig:
        """Return a copy with every non-``None`` keyword applied."""
        return replace(self, **{k: v for k, v in changes.items() if v is not None})
