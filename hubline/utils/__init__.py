"""
Utils — Process-level helpers
"""

from .logs import setup_logger

__all__ = ["setup_logger"]
