"""
AgMIP Reshaper - Compress and decompress AgMIP experiment documents.

Converts between the compressed form produced by the AgMIP translators,
where record lists omit values repeated from earlier records, and the
decompressed form, where every record is complete.
"""

from .bucket_entry import BucketEntry
from .config import BucketOrder, ReshapeConfig
from .decompressor import compress_records, decompress_records
from .document_reshaper import DocumentReshaper
from .types import ReshapeError, ReshapeResult, ReshapeWarning, ValueKind, WarningType

__version__ = "0.15.0"
__all__ = [
    "BucketEntry",
    "BucketOrder",
    "DocumentReshaper",
    "ReshapeConfig",
    "ReshapeError",
    "ReshapeResult",
    "ReshapeWarning",
    "ValueKind",
    "WarningType",
    "compress_records",
    "decompress_records",
]
