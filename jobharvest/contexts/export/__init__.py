"""
Export domain.

Turns parsed job records into the Result Table and writes run artifacts.
"""

from jobharvest.contexts.export.tabular import (
    build_result_table,
    write_result_table,
)
from jobharvest.contexts.export.events import log_skipped_listing_event

__all__ = [
    "build_result_table",
    "write_result_table",
    "log_skipped_listing_event",
]
