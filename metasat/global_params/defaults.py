"""Process-wide defaults for oracle sessions.

Defaults are read once from the environment:

- ``METASAT_SOLVER``: engine name used when a session does not name one
  (any pysat solver alias, or ``z3``).
- ``METASAT_TIMEOUT``: per-solve timeout in seconds; unset or non-positive
  means no timeout.
"""
import logging
import os
from typing import Optional

logger = logging.getLogger(__name__)


class ConfigRegistry(type):
    """Metaclass implementing singleton pattern for GlobalConfig.

    Ensures only one instance of GlobalConfig exists throughout the application.
    """
    _instance = None

    def __call__(cls, *args, **kwargs):
        if cls._instance is None:
            cls._instance = super().__call__(*args, **kwargs)
        return cls._instance


class GlobalConfig(metaclass=ConfigRegistry):
    """Global configuration manager for oracle defaults.

    Attributes:
        solver_name: Engine used when a session does not name one.
        timeout: Per-solve timeout in seconds, or None.
    """
    FALLBACK_SOLVER = "g4"

    def __init__(self):
        """Initialize the global configuration from the environment."""
        self.solver_name: str = os.environ.get("METASAT_SOLVER", self.FALLBACK_SOLVER)
        self.timeout: Optional[float] = self._read_timeout(os.environ.get("METASAT_TIMEOUT"))

    @staticmethod
    def _read_timeout(raw: Optional[str]) -> Optional[float]:
        """Parse a timeout value, ignoring malformed or non-positive ones."""
        if raw is None or raw == "":
            return None
        try:
            value = float(raw)
        except ValueError:
            logger.warning("Ignoring malformed METASAT_TIMEOUT value %r", raw)
            return None
        return value if value > 0 else None

    def set_default_solver(self, name: str) -> None:
        """Set the engine name used by sessions created afterwards."""
        self.solver_name = name

    def set_default_timeout(self, seconds: Optional[float]) -> None:
        """Set the per-solve timeout used by sessions created afterwards."""
        self.timeout = seconds if seconds and seconds > 0 else None


global_config = GlobalConfig()
