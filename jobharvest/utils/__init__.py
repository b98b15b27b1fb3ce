"""
Shared utility functions.
"""

from jobharvest.utils.config_helpers import merge_configs
from jobharvest.utils.text_processing import (
    squish_whitespace,
    normalize_nbsp,
    clean_text_fragments,
)

__all__ = [
    # Text processing
    "squish_whitespace",
    "normalize_nbsp",
    "clean_text_fragments",
    # Configuration utilities
    "merge_configs",
]
