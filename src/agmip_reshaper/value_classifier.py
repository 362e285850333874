"""Structural classification of document values."""

import logging
from collections import Counter
from collections.abc import Mapping
from typing import Any, Dict, Optional
from .config import ReshapeConfig
from .types import ValueKind


class ValueClassifier:
    """
    Classifies document values by shape rather than by key name.

    A value is a bucket iff it is a mapping; the key it is stored under
    plays no part in the decision.
    """

    def __init__(self, config: Optional[ReshapeConfig] = None,
                 logger: Optional[logging.Logger] = None):
        """
        Initialize the value classifier.

        Args:
            config: Optional reshaping config, used to find record lists
            logger: Optional logger instance
        """
        self.config = config or ReshapeConfig()
        self.logger = logger or logging.getLogger(__name__)

    @staticmethod
    def classify(value: Any) -> ValueKind:
        """
        Detect the kind of a single value.

        Args:
            value: Value to classify

        Returns:
            ValueKind enum indicating the value shape
        """
        if isinstance(value, str):
            return ValueKind.SCALAR
        elif isinstance(value, Mapping):
            return ValueKind.BUCKET
        elif isinstance(value, (list, tuple)):
            return ValueKind.RECORD_LIST
        else:
            return ValueKind.UNSUPPORTED

    def is_bucket(self, value: Any) -> bool:
        return self.classify(value) is ValueKind.BUCKET

    def is_scalar(self, value: Any) -> bool:
        return self.classify(value) is ValueKind.SCALAR

    def analyze_document(self, document: Dict[str, Any]) -> Dict[str, Any]:
        """
        Summarize the shape of a document.

        Args:
            document: Document to analyze

        Returns:
            Dictionary with per-kind counts, bucket names and, per bucket,
            the recognized list key and its record count
        """
        kinds = Counter()
        buckets = {}

        for key, value in document.items():
            kind = self.classify(value)
            kinds[kind.value] += 1

            if kind is ValueKind.BUCKET:
                buckets[key] = self._analyze_bucket(value)

        self.logger.debug(f"Analyzed document with {len(document)} keys: {dict(kinds)}")

        return {
            "total_keys": len(document),
            "value_kinds": dict(kinds),
            "bucket_names": list(buckets),
            "buckets": buckets
        }

    def _analyze_bucket(self, bucket: Mapping) -> Dict[str, Any]:
        """Describe a single bucket's scalars and record list."""
        list_key = None
        record_count = 0
        scalar_count = 0

        for key, value in bucket.items():
            if self.config.is_list_key(key):
                if list_key is None:
                    list_key = key
                    if self.classify(value) is ValueKind.RECORD_LIST:
                        record_count = len(value)
            elif self.is_scalar(value):
                scalar_count += 1

        return {
            "scalar_count": scalar_count,
            "list_key": list_key,
            "record_count": record_count
        }
