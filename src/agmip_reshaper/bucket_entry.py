"""Bucket entry: one classified dataset section of a document."""

import logging
from collections.abc import Mapping
from typing import Any, Dict, List, Optional
from .config import ReshapeConfig
from .decompressor import Record, RecordCompressor
from .error_handler import ErrorHandler
from .types import ReshapeWarning, ValueKind, WarningType
from .value_classifier import ValueClassifier


class BucketEntry:
    """
    A bucket split into its scalar values and its record list.

    Each bucket corresponds to a section of an AgMIP experiment
    (initial_conditions, weather, soil, management, observed) or to a
    custom per-translator section. The record list is found under one of
    the configured list keys and is decompressed on construction unless it
    is a verbatim kind such as ``events``.
    """

    def __init__(self, raw: Optional[Mapping] = None,
                 config: Optional[ReshapeConfig] = None,
                 error_handler: Optional[ErrorHandler] = None,
                 name: Optional[str] = None,
                 decompress: bool = True,
                 logger: Optional[logging.Logger] = None):
        """
        Partition a raw bucket mapping.

        Args:
            raw: The bucket's mapping; None gives an empty bucket
            config: Optional reshaping config
            error_handler: Optional ErrorHandler instance
            name: Bucket name, used in warning locations
            decompress: Decompress the record list (False keeps it as given)
            logger: Optional logger instance
        """
        self.config = config or ReshapeConfig()
        self.logger = logger or logging.getLogger(__name__)
        self.error_handler = error_handler or ErrorHandler(self.logger, self.config.strict)
        self.name = name or "bucket"

        self.values: Dict[str, str] = {}
        self.data_list: List[Record] = []
        self.list_key: Optional[str] = None
        self.warnings: List[ReshapeWarning] = []

        for key, value in (raw or {}).items():
            if self.config.is_list_key(key):
                self._set_list(key, value, decompress)
            elif ValueClassifier.classify(value) is ValueKind.SCALAR:
                self.values[key] = value
            else:
                self._warn(
                    WarningType.DROPPED_FIELD,
                    f"Dropped non-string value of type {type(value).__name__}",
                    f"{self.name}.{key}"
                )

    @classmethod
    def empty(cls, config: Optional[ReshapeConfig] = None,
              name: Optional[str] = None) -> 'BucketEntry':
        """Create a bucket with no values and no records."""
        return cls(None, config=config, name=name)

    def _set_list(self, key: str, value: Any, decompress: bool) -> None:
        location = f"{self.name}.{key}"

        if self.list_key is not None:
            self._warn(
                WarningType.DUPLICATE_LIST_KEY,
                f"Second record list ignored, already using '{self.list_key}'",
                location
            )
            return

        self.list_key = key
        records = self._records_from(value, location)

        if not decompress or self.config.is_verbatim(key):
            self.data_list = records
            return

        compressor = RecordCompressor(self.config, self.error_handler, self.logger)
        self.data_list, warnings = compressor.decompress(records, location)
        self.warnings.extend(warnings)

    def _records_from(self, value: Any, location: str) -> List[Record]:
        """Copy the mapping elements of a record list, warning about the rest."""
        if ValueClassifier.classify(value) is not ValueKind.RECORD_LIST:
            self._warn(
                WarningType.LIST_TYPE_MISMATCH,
                f"Expected a list of records, got {type(value).__name__}",
                location
            )
            return []

        records = []
        for index, item in enumerate(value):
            if isinstance(item, Mapping):
                records.append(dict(item))
            else:
                self._warn(
                    WarningType.LIST_TYPE_MISMATCH,
                    f"Skipped record of type {type(item).__name__}",
                    f"{location}[{index}]"
                )
        return records

    def _warn(self, warning_type: WarningType, message: str, location: str) -> None:
        self.warnings.append(self.error_handler.report(warning_type, message, location))

    def get_values(self) -> Dict[str, str]:
        return self.values

    def get_data_list(self) -> List[Record]:
        return self.data_list

    def to_dict(self, output_key: str) -> Dict[str, Any]:
        """
        Rebuild the bucket with its record list under ``output_key``.

        Args:
            output_key: Key to store the record list under

        Returns:
            New mapping of the scalar values plus the record list
        """
        rebuilt: Dict[str, Any] = dict(self.values)
        rebuilt[output_key] = self.data_list
        return rebuilt

    def __repr__(self) -> str:
        return (f"BucketEntry(name={self.name!r}, values={len(self.values)}, "
                f"list_key={self.list_key!r}, records={len(self.data_list)})")
