"""Core type definitions for the AgMIP document reshaper."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional


class ValueKind(Enum):
    """Enumeration of the value shapes found in a document."""
    SCALAR = "scalar"
    BUCKET = "bucket"
    RECORD_LIST = "record_list"
    UNSUPPORTED = "unsupported"


class WarningType(Enum):
    """Enumeration of non-fatal reshaping problems."""
    DROPPED_FIELD = "dropped_field"
    LIST_TYPE_MISMATCH = "list_type_mismatch"
    DUPLICATE_LIST_KEY = "duplicate_list_key"
    SCHEMA_GROWTH = "schema_growth"
    KEY_COLLISION = "key_collision"


class ErrorType(Enum):
    """Enumeration of input validation error types."""
    SYNTAX = "syntax"
    STRUCTURE = "structure"


@dataclass
class ReshapeWarning:
    """A value that was dropped, ignored or overwritten while reshaping."""
    type: WarningType
    message: str
    location: Optional[str] = None


@dataclass
class ReshapeResult:
    """Result of a whole-document operation."""
    data: Any
    warnings: List[ReshapeWarning] = field(default_factory=list)

    @property
    def has_warnings(self) -> bool:
        return len(self.warnings) > 0


@dataclass
class ValidationError:
    """Validation error details."""
    type: ErrorType
    message: str
    location: Optional[str] = None


@dataclass
class ValidationResult:
    """Result of input validation."""
    is_valid: bool
    errors: List[ValidationError]
    warnings: List[str]


class ReshapeError(Exception):
    """Raised for reshaping problems when running in strict mode."""

    def __init__(self, message: str, warning_type: WarningType, location: Optional[str] = None):
        super().__init__(message)
        self.warning_type = warning_type
        self.location = location


class DocumentReshaperInterface(ABC):
    """Abstract interface for document reshaping."""

    @abstractmethod
    def list_bucket_names(self, document: Dict[str, Any]) -> List[str]:
        """List the top-level keys holding buckets."""
        pass

    @abstractmethod
    def get_global_values(self, document: Dict[str, Any]) -> ReshapeResult:
        """Collect the document-level scalar fields."""
        pass

    @abstractmethod
    def get_bucket(self, document: Dict[str, Any], name: str) -> 'BucketEntry':
        """Build the entry for one bucket."""
        pass

    @abstractmethod
    def decompress_all(self, document: Dict[str, Any]) -> ReshapeResult:
        """Decompress every bucket of the document."""
        pass

    @abstractmethod
    def flatten_globals(self, document: Dict[str, Any]) -> ReshapeResult:
        """Merge document and bucket scalars into one mapping."""
        pass

    @abstractmethod
    def extract(self, document: Dict[str, Any], keys: Iterable[str]) -> ReshapeResult:
        """Select named scalar fields from the flattened document."""
        pass
