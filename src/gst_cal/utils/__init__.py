"""
Utilities Module

Configuration and logging shared by the CLI, repository and tax engine.
"""

from .config import Config
from .logging import get_logger, setup_logging

__all__ = ["Config", "get_logger", "setup_logging"]
