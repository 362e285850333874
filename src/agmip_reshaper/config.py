"""Reshaping conventions: recognized list keys and canonical output keys."""

from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any, Dict, Tuple


class BucketOrder(Enum):
    """Order in which bucket scalars are merged when flattening."""
    SORTED = "sorted"
    DOCUMENT = "document"


DEFAULT_LIST_KEYS = ("data", "soilLayer", "dailyWeather", "events", "timeSeries")
DEFAULT_VERBATIM_LIST_KEYS = ("events",)
DEFAULT_CANONICAL_LIST_KEYS = {
    "initial_conditions": "soilLayer",
    "soil": "soilLayer",
    "weather": "dailyWeather",
    "management": "events",
    "observed": "timeSeries",
}


@dataclass(frozen=True)
class ReshapeConfig:
    """
    Bucket vocabulary and reshaping policy.

    The list key names and the bucket to list key table are conventions
    shared with the AgMIP translators. Custom per-translator buckets fall
    back to ``default_list_key``.
    """

    list_keys: Tuple[str, ...] = DEFAULT_LIST_KEYS
    verbatim_list_keys: Tuple[str, ...] = DEFAULT_VERBATIM_LIST_KEYS
    canonical_list_keys: Dict[str, str] = field(
        default_factory=lambda: dict(DEFAULT_CANONICAL_LIST_KEYS)
    )
    default_list_key: str = "data"
    clear_persists: bool = False
    bucket_order: BucketOrder = BucketOrder.SORTED
    strict: bool = False
    enable_profiling: bool = False

    def __post_init__(self):
        """Validate configuration after initialization."""
        if not self.list_keys:
            raise ValueError("list_keys cannot be empty")

        unknown = set(self.verbatim_list_keys) - set(self.list_keys)
        if unknown:
            raise ValueError(f"verbatim_list_keys not in list_keys: {sorted(unknown)}")

        if not self.default_list_key:
            raise ValueError("default_list_key cannot be empty")

    def is_list_key(self, key: str) -> bool:
        return key in self.list_keys

    def is_verbatim(self, key: str) -> bool:
        return key in self.verbatim_list_keys

    def canonical_key_for(self, bucket_name: str) -> str:
        return self.canonical_list_keys.get(bucket_name, self.default_list_key)

    @classmethod
    def from_mapping(cls, mapping: Dict[str, Any]) -> 'ReshapeConfig':
        """
        Create a config from a plain mapping, e.g. a parsed JSON file.

        Args:
            mapping: Field names to values; sequences become tuples and
                ``bucket_order`` may be given by its string value

        Returns:
            ReshapeConfig instance

        Raises:
            ValueError: If the mapping names an unknown field
        """
        known = {f.name for f in fields(cls)}
        unknown = set(mapping) - known
        if unknown:
            raise ValueError(f"Unknown config keys: {', '.join(sorted(unknown))}")

        kwargs = dict(mapping)
        for key in ("list_keys", "verbatim_list_keys"):
            if key in kwargs:
                kwargs[key] = tuple(kwargs[key])
        if "canonical_list_keys" in kwargs:
            kwargs["canonical_list_keys"] = dict(kwargs["canonical_list_keys"])
        if "bucket_order" in kwargs and not isinstance(kwargs["bucket_order"], BucketOrder):
            kwargs["bucket_order"] = BucketOrder(kwargs["bucket_order"])

        return cls(**kwargs)
