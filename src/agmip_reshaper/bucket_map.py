"""
Function interface over AgMIP documents.

These helpers mirror the DocumentReshaper methods but return plain data;
warnings are logged and otherwise discarded. Use a DocumentReshaper
directly to inspect them.
"""

from typing import Any, Dict, Iterable, List, Mapping, Optional, TypeVar
from .bucket_entry import BucketEntry
from .document_reshaper import DocumentReshaper

K = TypeVar("K")
V = TypeVar("V")

_default_reshaper = DocumentReshaper()


def get_reshaper() -> DocumentReshaper:
    """Get the shared default reshaper."""
    return _default_reshaper


def get_or(mapping: Mapping[K, V], key: K, default: V) -> V:
    """Return ``mapping[key]``, or ``default`` when it is missing or None."""
    value = mapping.get(key)
    return default if value is None else value


def get_value_or(mapping: Mapping[str, str], key: str, default: str) -> str:
    return get_or(mapping, key, default)


def list_bucket_names(document: Dict[str, Any]) -> List[str]:
    return _default_reshaper.list_bucket_names(document)


def get_global_values(document: Dict[str, Any]) -> Dict[str, str]:
    return _default_reshaper.get_global_values(document).data


def get_bucket(document: Dict[str, Any], name: str) -> BucketEntry:
    return _default_reshaper.get_bucket(document, name)


def decompress_all(document: Dict[str, Any]) -> Dict[str, Any]:
    return _default_reshaper.decompress_all(document).data


def compress_all(document: Dict[str, Any]) -> Dict[str, Any]:
    return _default_reshaper.compress_all(document).data


def flatten_globals(document: Dict[str, Any]) -> Dict[str, str]:
    return _default_reshaper.flatten_globals(document).data


def extract(document: Dict[str, Any], keys: Iterable[str],
            reshaper: Optional[DocumentReshaper] = None) -> Dict[str, str]:
    """
    Extract named values from the flattened document.

    Args:
        document: Source document
        keys: Names of the values to extract
        reshaper: Optional reshaper to use instead of the shared default

    Returns:
        Mapping of each found key to its value
    """
    return (reshaper or _default_reshaper).extract(document, keys).data
