"""Whole-document classification and reshaping."""

import logging
from contextlib import nullcontext
from typing import Any, Dict, Iterable, List, Optional
from .bucket_entry import BucketEntry
from .config import BucketOrder, ReshapeConfig
from .decompressor import RecordCompressor
from .error_handler import ErrorHandler
from .profiler import OperationProfiler
from .types import (
    DocumentReshaperInterface,
    ReshapeResult,
    ReshapeWarning,
    ValueKind,
    WarningType
)
from .value_classifier import ValueClassifier


class DocumentReshaper(DocumentReshaperInterface):
    """
    Reshapes AgMIP experiment documents between compressed and
    decompressed form.

    Top-level string values are globals, top-level mappings are buckets.
    Every operation builds fresh BucketEntry objects from the document it
    is given and never modifies that document.
    """

    def __init__(self, config: Optional[ReshapeConfig] = None,
                 logger: Optional[logging.Logger] = None,
                 profiler: Optional[OperationProfiler] = None):
        """
        Initialize the document reshaper.

        Args:
            config: Optional reshaping config
            logger: Optional logger instance
            profiler: Optional profiler; one is created when the config
                enables profiling
        """
        self.config = config or ReshapeConfig()
        self.logger = logger or logging.getLogger(__name__)
        self.error_handler = ErrorHandler(self.logger, self.config.strict)
        self.classifier = ValueClassifier(self.config, self.logger)
        self.compressor = RecordCompressor(self.config, self.error_handler, self.logger)

        if profiler is None and self.config.enable_profiling:
            profiler = OperationProfiler(self.logger)
        self.profiler = profiler

    def list_bucket_names(self, document: Dict[str, Any]) -> List[str]:
        """
        List the top-level keys whose value is a bucket.

        Args:
            document: Source document

        Returns:
            Bucket names in document order
        """
        return [key for key, value in document.items() if self.classifier.is_bucket(value)]

    def get_global_values(self, document: Dict[str, Any]) -> ReshapeResult:
        """
        Collect the top-level string values.

        Top-level values that are neither strings nor buckets are dropped
        with a warning.

        Args:
            document: Source document

        Returns:
            ReshapeResult whose data maps global keys to their values
        """
        globals_ = {}
        warnings = []

        for key, value in document.items():
            kind = self.classifier.classify(value)
            if kind is ValueKind.SCALAR:
                globals_[key] = value
            elif kind is not ValueKind.BUCKET:
                warnings.append(self.error_handler.report(
                    WarningType.DROPPED_FIELD,
                    f"Dropped top-level value of type {type(value).__name__}",
                    key
                ))

        return ReshapeResult(data=globals_, warnings=warnings)

    def get_bucket(self, document: Dict[str, Any], name: str,
                   decompress: bool = True) -> BucketEntry:
        """
        Build the entry for one bucket.

        A missing bucket behaves as an empty one.

        Args:
            document: Source document
            name: Bucket name
            decompress: Decompress the bucket's record list

        Returns:
            BucketEntry for ``document[name]``
        """
        raw = document.get(name)
        if raw is None:
            return BucketEntry.empty(self.config, name)

        if not self.classifier.is_bucket(raw):
            entry = BucketEntry.empty(self.config, name)
            entry.warnings.append(self.error_handler.report(
                WarningType.DROPPED_FIELD,
                f"Expected a bucket, got {type(raw).__name__}",
                name
            ))
            return entry

        return BucketEntry(
            raw,
            config=self.config,
            error_handler=self.error_handler,
            name=name,
            decompress=decompress,
            logger=self.logger
        )

    def decompress_all(self, document: Dict[str, Any]) -> ReshapeResult:
        """
        Decompress every bucket of a document.

        Each bucket's record list is written under the canonical key for
        the bucket name (``data`` for custom buckets).

        Args:
            document: Compressed document

        Returns:
            ReshapeResult whose data is the decompressed document
        """
        bucket_names = self.list_bucket_names(document)
        self.logger.info(f"Decompressing document with {len(bucket_names)} buckets")

        global_result = self.get_global_values(document)
        decompressed: Dict[str, Any] = dict(global_result.data)
        warnings = list(global_result.warnings)
        record_count = 0

        with self._profile("decompress_all", document):
            for name in bucket_names:
                entry = self.get_bucket(document, name)
                decompressed[name] = entry.to_dict(self.config.canonical_key_for(name))
                warnings.extend(entry.warnings)
                record_count += len(entry.data_list)
                self.logger.debug(f"Bucket '{name}': {len(entry.values)} values, "
                                  f"{len(entry.data_list)} records")

        self.logger.info(f"Decompressed {record_count} records with {len(warnings)} warnings")
        return ReshapeResult(data=decompressed, warnings=warnings)

    def compress_all(self, document: Dict[str, Any]) -> ReshapeResult:
        """
        Compress every bucket of a decompressed document.

        Record lists stay under the key they were found under; verbatim
        kinds such as ``events`` are copied unchanged.

        Args:
            document: Decompressed document

        Returns:
            ReshapeResult whose data is the compressed document
        """
        bucket_names = self.list_bucket_names(document)
        self.logger.info(f"Compressing document with {len(bucket_names)} buckets")

        global_result = self.get_global_values(document)
        compressed: Dict[str, Any] = dict(global_result.data)
        warnings = list(global_result.warnings)

        with self._profile("compress_all", document):
            for name in bucket_names:
                entry = self.get_bucket(document, name, decompress=False)
                warnings.extend(entry.warnings)

                if entry.list_key is None:
                    compressed[name] = dict(entry.values)
                    continue

                records = entry.data_list
                if not self.config.is_verbatim(entry.list_key):
                    records, list_warnings = self.compressor.compress(
                        records, f"{name}.{entry.list_key}"
                    )
                    warnings.extend(list_warnings)
                compressed[name] = {**entry.values, entry.list_key: records}

        return ReshapeResult(data=compressed, warnings=warnings)

    def flatten_globals(self, document: Dict[str, Any]) -> ReshapeResult:
        """
        Merge the global values with every bucket's scalar values.

        Buckets are merged in the configured order; a later bucket
        overwrites earlier values and globals under the same key.

        Args:
            document: Source document

        Returns:
            ReshapeResult whose data is the flat mapping
        """
        global_result = self.get_global_values(document)
        flat: Dict[str, str] = dict(global_result.data)
        warnings = list(global_result.warnings)

        for name in self._merge_order(document):
            entry = self.get_bucket(document, name, decompress=False)
            warnings.extend(entry.warnings)
            warnings.extend(self._collisions(flat, entry.values, name))
            flat.update(entry.values)

        return ReshapeResult(data=flat, warnings=warnings)

    def extract(self, document: Dict[str, Any], keys: Iterable[str]) -> ReshapeResult:
        """
        Select named values from the flattened document.

        Keys that are not found are omitted.

        Args:
            document: Source document
            keys: Names of the values to extract

        Returns:
            ReshapeResult whose data maps each found key to its value
        """
        flat_result = self.flatten_globals(document)
        flat = flat_result.data
        extracted = {key: flat[key] for key in keys if key in flat}
        return ReshapeResult(data=extracted, warnings=flat_result.warnings)

    def _merge_order(self, document: Dict[str, Any]) -> List[str]:
        names = self.list_bucket_names(document)
        if self.config.bucket_order is BucketOrder.SORTED:
            return sorted(names)
        return names

    def _collisions(self, flat: Dict[str, str], values: Dict[str, str],
                    bucket_name: str) -> List[ReshapeWarning]:
        warnings = []
        for key, value in values.items():
            if key in flat and flat[key] != value:
                warnings.append(self.error_handler.report(
                    WarningType.KEY_COLLISION,
                    f"Value '{flat[key]}' overwritten by '{value}'",
                    f"{bucket_name}.{key}"
                ))
        return warnings

    def _profile(self, operation_name: str, document: Dict[str, Any]):
        if self.profiler is None:
            return nullcontext()
        return self.profiler.profile_operation(operation_name, self._count_records(document))

    def _count_records(self, document: Dict[str, Any]) -> int:
        analysis = self.classifier.analyze_document(document)
        return sum(bucket["record_count"] for bucket in analysis["buckets"].values())
