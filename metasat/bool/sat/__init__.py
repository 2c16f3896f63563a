# coding: utf-8
from .config import OracleConfig, OracleMode
from .oracle import Oracle
from .z3sat_engine import Z3SATEngine

__all__ = ["Oracle", "OracleConfig", "OracleMode", "Z3SATEngine"]
