"""failtriage CLI command implementations."""

from .catalog import categories, patterns
from .classify import classify
from .config_cmd import check_config

__all__ = ["categories", "check_config", "classify", "patterns"]
