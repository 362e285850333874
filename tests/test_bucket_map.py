"""Tests for the function interface."""

from agmip_reshaper import bucket_map
from agmip_reshaper.config import BucketOrder, ReshapeConfig
from agmip_reshaper.document_reshaper import DocumentReshaper


class TestGetOr:
    """Tests for the lookup-with-default helpers."""

    def test_present(self):
        """Test that a present value is returned."""
        assert bucket_map.get_or({"a": "1"}, "a", "x") == "1"

    def test_missing(self):
        """Test that a missing key gives the default."""
        assert bucket_map.get_or({}, "a", "x") == "x"

    def test_none_value(self):
        """Test that a None value gives the default."""
        assert bucket_map.get_or({"a": None}, "a", "x") == "x"

    def test_empty_string_is_a_value(self):
        """Test that an empty string is returned, not replaced."""
        assert bucket_map.get_value_or({"a": ""}, "a", "x") == ""


class TestBucketMapFunctions:
    """Tests for the module-level document functions."""

    def test_list_bucket_names(self, compressed_document):
        """Test listing bucket names."""
        assert bucket_map.list_bucket_names(compressed_document) == [
            "weather", "soil", "management", "observed"
        ]

    def test_get_global_values(self, compressed_document):
        """Test that globals are returned as a plain mapping."""
        assert bucket_map.get_global_values(compressed_document) == {
            "exname": "UFGA8201", "crid": "MZE"
        }

    def test_get_bucket_missing(self):
        """Test that a missing bucket is empty."""
        entry = bucket_map.get_bucket({"exname": "E1"}, "observed")

        assert entry.values == {}
        assert entry.data_list == []

    def test_decompress_and_compress(self, compressed_document):
        """Test that the plain functions restore the compressed lists."""
        decompressed = bucket_map.decompress_all(compressed_document)
        compressed = bucket_map.compress_all(decompressed)

        assert decompressed["soil"]["soilLayer"][1]["sloc"] == "0.90"
        assert compressed["soil"]["soilLayer"] == compressed_document["soil"]["soilLayer"]

    def test_flatten_globals(self, compressed_document):
        """Test flattening to a plain mapping."""
        flat = bucket_map.flatten_globals(compressed_document)

        assert flat["wst_id"] == "UFGA"
        assert flat["exname"] == "UFGA8201"

    def test_extract(self, compressed_document):
        """Test extracting with the shared reshaper."""
        assert bucket_map.extract(compressed_document, ["hwah", "nope"]) == {"hwah": "8793"}

    def test_extract_with_reshaper(self):
        """Test extracting with a caller-supplied reshaper."""
        reshaper = DocumentReshaper(ReshapeConfig(bucket_order=BucketOrder.DOCUMENT))
        document = {"weather": {"site": "W"}, "soil": {"site": "S"}}

        assert bucket_map.extract(document, ["site"]) == {"site": "W"}
        assert bucket_map.extract(document, ["site"], reshaper) == {"site": "S"}

    def test_shared_reshaper(self):
        """Test that the shared reshaper uses the default conventions."""
        assert bucket_map.get_reshaper().config == ReshapeConfig()
