"""Pytest configuration and fixtures."""

import pytest
import tempfile
import json
from pathlib import Path
from typing import Dict, Any


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmp_dir:
        yield Path(tmp_dir)


@pytest.fixture
def compressed_document() -> Dict[str, Any]:
    """Sample compressed experiment document as produced by a translator."""
    return {
        "exname": "UFGA8201",
        "crid": "MZE",
        "weather": {
            "wst_id": "UFGA",
            "wst_lat": "29.630",
            "dailyWeather": [
                {"w_date": "19820101", "srad": "10.2", "tmax": "21.1", "tmin": "8.3"},
                {"w_date": "19820102", "tmax": "22.0"},
                {"w_date": "19820103", "srad": "11.5", "tmin": ""},
            ]
        },
        "soil": {
            "soil_id": "IBMZ910014",
            "sl_source": "SCS",
            "soilLayer": [
                {"sllb": "5", "slbdm": "1.36", "sloc": "0.90"},
                {"sllb": "15"},
                {"sllb": "30", "sloc": "0.69"},
            ]
        },
        "management": {
            "events": [
                {"event": "planting", "date": "19820226", "crid": "MZE"},
                {"event": "irrigation", "date": "19820301"},
            ]
        },
        "observed": {
            "hwah": "8793",
            "timeSeries": [
                {"date": "19820315", "lai": "0.5", "cwad": "120"},
                {"date": "19820330", "lai": "1.2"},
            ]
        }
    }


@pytest.fixture
def document_file(temp_dir, compressed_document) -> Path:
    """Write the compressed document to a JSON file."""
    path = temp_dir / "experiment.json"
    path.write_text(json.dumps(compressed_document), encoding="utf-8")
    return path
