"""linkvault - save web pages to a personal library."""

from .lifecycle import ItemStatus
from .models import BulkProgress, ImportOutcome
from .pipeline import BulkImportRun, bulk_import, single_import

__all__ = [
    "ItemStatus",
    "BulkProgress",
    "ImportOutcome",
    "BulkImportRun",
    "bulk_import",
    "single_import",
]
