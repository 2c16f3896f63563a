"""Global parameters module for metasat.

This module provides access to process-wide defaults used by oracle sessions.
"""
from .defaults import global_config, GlobalConfig
