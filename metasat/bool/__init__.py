# coding: utf-8
from .backbone import find_backbone
from .minimal_model import find_minimal_model
from .sat import Oracle, OracleConfig, OracleMode

# Export
__all__ = ["Oracle", "OracleConfig", "OracleMode", "find_backbone", "find_minimal_model"]
