"""
Utility functions and helpers.
"""

from .log_utils import configure_logging, get_logger
from .utils import IMAGE_EXTS, iter_files, iter_image_files, round_half_away

__all__ = [
    "configure_logging",
    "get_logger",
    "IMAGE_EXTS",
    "iter_files",
    "iter_image_files",
    "round_half_away",
]
