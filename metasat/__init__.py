import logging
import os

from .bool import Oracle, OracleConfig, OracleMode, find_backbone, find_minimal_model
from .unsat_core import CallbackListener, MUSListener, UnsatCoreResult
from .utils.exceptions import MetaSATException, OracleTimeout, UnsupportedOperation
from .utils.types import SolverResult

# Debug flag - can be set via environment variable METASAT_DEBUG
METASAT_DEBUG = os.environ.get("METASAT_DEBUG", "False").lower() in ("true", "1", "yes")
if METASAT_DEBUG:
    logging.getLogger(__name__).setLevel(logging.DEBUG)

__all__ = [
    "Oracle", "OracleConfig", "OracleMode",
    "find_backbone", "find_minimal_model",
    "CallbackListener", "MUSListener", "UnsatCoreResult",
    "MetaSATException", "OracleTimeout", "UnsupportedOperation",
    "SolverResult",
]
