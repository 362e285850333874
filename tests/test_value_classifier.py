"""Tests for value classifier."""

import pytest
from agmip_reshaper.value_classifier import ValueClassifier
from agmip_reshaper.types import ValueKind


class TestValueClassifier:
    """Tests for ValueClassifier class."""

    def setup_method(self):
        """Set up test fixtures."""
        self.classifier = ValueClassifier()

    @pytest.mark.parametrize("value, kind", [
        ("UFGA", ValueKind.SCALAR),
        ("", ValueKind.SCALAR),
        ({"a": "1"}, ValueKind.BUCKET),
        ({}, ValueKind.BUCKET),
        ([{"a": "1"}], ValueKind.RECORD_LIST),
        ((), ValueKind.RECORD_LIST),
        (42, ValueKind.UNSUPPORTED),
        (1.5, ValueKind.UNSUPPORTED),
        (True, ValueKind.UNSUPPORTED),
        (None, ValueKind.UNSUPPORTED),
    ])
    def test_classify(self, value, kind):
        """Test classification of each value shape."""
        assert self.classifier.classify(value) == kind

    def test_predicates(self):
        """Test is_bucket and is_scalar."""
        assert self.classifier.is_bucket({})
        assert not self.classifier.is_bucket([])
        assert self.classifier.is_scalar("x")
        assert not self.classifier.is_scalar(1)

    def test_analyze_document(self, compressed_document):
        """Test the document summary."""
        analysis = self.classifier.analyze_document(compressed_document)

        assert analysis["total_keys"] == 6
        assert analysis["value_kinds"] == {"scalar": 2, "bucket": 4}
        assert analysis["bucket_names"] == ["weather", "soil", "management", "observed"]
        assert analysis["buckets"]["soil"] == {
            "scalar_count": 2,
            "list_key": "soilLayer",
            "record_count": 3
        }
        assert analysis["buckets"]["management"]["list_key"] == "events"

    def test_analyze_empty_document(self):
        """Test the summary of an empty document."""
        analysis = self.classifier.analyze_document({})

        assert analysis["total_keys"] == 0
        assert analysis["value_kinds"] == {}
        assert analysis["buckets"] == {}

    def test_analyze_bucket_with_bad_list(self):
        """Test that a non-list under a list key counts no records."""
        analysis = self.classifier.analyze_document({"soil": {"soilLayer": "x"}})

        assert analysis["buckets"]["soil"]["record_count"] == 0
