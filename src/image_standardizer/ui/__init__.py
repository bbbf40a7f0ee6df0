"""
Terminal user interface components.
"""

from .rich_ui import BatchProgressDisplay

__all__ = ["BatchProgressDisplay"]
