"""Sticky-value compression and decompression of record lists."""

import logging
from typing import Dict, List, Mapping, Optional, Sequence, Tuple
from .config import ReshapeConfig
from .error_handler import ErrorHandler
from .types import ReshapeWarning, WarningType

Record = Dict[str, str]

# An empty string in a sparse record clears the field for that record.
CLEAR = ""


def _fill(sticky: Mapping[str, Optional[str]], source: Mapping[str, str],
          clear_persists: bool) -> Tuple[Record, Dict[str, Optional[str]]]:
    """
    Expand one sparse record against the running sticky state.

    Returns the dense record and the sticky state for the next record.
    Only keys already in the sticky state are considered.
    """
    merged = {}
    next_sticky = dict(sticky)

    for key, current in sticky.items():
        value = source.get(key)
        if value is None:
            if current is not None:
                merged[key] = current
        elif value == CLEAR:
            if clear_persists:
                next_sticky[key] = None
        else:
            merged[key] = value
            next_sticky[key] = value

    return merged, next_sticky


def decompress_records(records: Sequence[Mapping[str, str]],
                       clear_persists: bool = False) -> List[Record]:
    """
    Expand a sparse record list into one where every record is complete.

    The first record is copied verbatim and fixes the schema. Each later
    record inherits every schema key it omits from the running state,
    drops keys it sets to the empty string and ignores keys outside the
    schema.

    Args:
        records: Sparse records in sequence order
        clear_persists: Whether an empty-string clear also stops later
            records from inheriting the cleared value

    Returns:
        New list of new dicts, same length and order as ``records``
    """
    if not records:
        return []

    first = dict(records[0])
    dense = [first]
    sticky = dict(first)

    for source in records[1:]:
        merged, sticky = _fill(sticky, source, clear_persists)
        dense.append(merged)

    return dense


def compress_records(records: Sequence[Mapping[str, str]],
                     clear_persists: bool = False) -> List[Record]:
    """
    Reduce a complete record list to its sparse form.

    Inverse of ``decompress_records`` for records whose keys are a subset
    of the first record's keys.

    Args:
        records: Dense records in sequence order
        clear_persists: Must match the value used when decompressing

    Returns:
        New list of sparse records
    """
    if not records:
        return []

    first = dict(records[0])
    sparse = [first]
    sticky: Dict[str, Optional[str]] = dict(first)

    for source in records[1:]:
        reduced = {}
        for key, current in sticky.items():
            value = source.get(key)
            if value is not None and value == current:
                continue
            if value is None or value == CLEAR:
                if current is None:
                    continue
                reduced[key] = CLEAR
                if clear_persists:
                    sticky[key] = None
            else:
                reduced[key] = value
                sticky[key] = value
        sparse.append(reduced)

    return sparse


def find_schema_growth(records: Sequence[Mapping[str, str]]) -> List[Tuple[int, str]]:
    """
    List the (index, key) pairs that fall outside the first record's keys.

    Those values never reach the decompressed output.
    """
    if not records:
        return []

    schema = set(records[0])
    return [
        (index, key)
        for index, record in enumerate(records[1:], start=1)
        for key in record
        if key not in schema
    ]


class RecordCompressor:
    """
    Applies sticky-value (de)compression to a bucket's record list and
    reports the values that cannot be carried.
    """

    def __init__(self, config: Optional[ReshapeConfig] = None,
                 error_handler: Optional[ErrorHandler] = None,
                 logger: Optional[logging.Logger] = None):
        """
        Initialize the record compressor.

        Args:
            config: Optional reshaping config
            error_handler: Optional ErrorHandler instance
            logger: Optional logger instance
        """
        self.config = config or ReshapeConfig()
        self.logger = logger or logging.getLogger(__name__)
        self.error_handler = error_handler or ErrorHandler(self.logger, self.config.strict)

    def decompress(self, records: Sequence[Mapping[str, str]],
                   location: str = "") -> Tuple[List[Record], List[ReshapeWarning]]:
        """
        Decompress records, warning about keys outside the schema.

        Args:
            records: Sparse records
            location: Dotted path of the list, used in warnings

        Returns:
            Tuple of (dense_records, warnings)
        """
        warnings = self._check_schema(records, location)
        dense = decompress_records(records, self.config.clear_persists)
        self.logger.debug(f"Decompressed {len(dense)} records at {location or '<root>'}")
        return dense, warnings

    def compress(self, records: Sequence[Mapping[str, str]],
                 location: str = "") -> Tuple[List[Record], List[ReshapeWarning]]:
        """
        Compress records, warning about keys outside the schema.

        Args:
            records: Dense records
            location: Dotted path of the list, used in warnings

        Returns:
            Tuple of (sparse_records, warnings)
        """
        warnings = self._check_schema(records, location)
        sparse = compress_records(records, self.config.clear_persists)
        self.logger.debug(f"Compressed {len(sparse)} records at {location or '<root>'}")
        return sparse, warnings

    def _check_schema(self, records: Sequence[Mapping[str, str]],
                      location: str) -> List[ReshapeWarning]:
        warnings = []
        for index, key in find_schema_growth(records):
            warnings.append(self.error_handler.report(
                WarningType.SCHEMA_GROWTH,
                f"Key '{key}' is not in the first record and is ignored",
                f"{location}[{index}]"
            ))
        return warnings
