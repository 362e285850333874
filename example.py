#!/usr/bin/env python3
"""
Example usage of the AgMIP reshaper.

This script decompresses a small experiment document, flattens its
values and compresses it again.
"""

import json
import logging
from agmip_reshaper import DocumentReshaper, ReshapeConfig


def main():
    """Main example function."""
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    print("AgMIP Reshaper Example")
    print("=" * 50)

    # Compressed document as produced by a translator
    document = {
        "exname": "UFGA8201",
        "crid": "MZE",
        "weather": {
            "wst_id": "UFGA",
            "dailyWeather": [
                {"w_date": "19820101", "srad": "10.2", "tmax": "21.1", "tmin": "8.3"},
                {"w_date": "19820102", "tmax": "22.0"},
                {"w_date": "19820103", "srad": "11.5", "tmin": ""},
            ]
        },
        "soil": {
            "soil_id": "IBMZ910014",
            "elev": 30,
            "soilLayer": [
                {"sllb": "5", "slbdm": "1.36", "sloc": "0.90"},
                {"sllb": "15"},
                {"sllb": "30", "sloc": "0.69"},
            ]
        },
        "management": {
            "events": [
                {"event": "planting", "date": "19820226"},
                {"event": "irrigation", "date": "19820301", "irval": "12"},
            ]
        }
    }

    reshaper = DocumentReshaper(ReshapeConfig(enable_profiling=True))

    print(f"Buckets: {reshaper.list_bucket_names(document)}")

    result = reshaper.decompress_all(document)
    print("\nDecompressed weather:")
    for record in result.data["weather"]["dailyWeather"]:
        print(f"   {record}")

    if result.has_warnings:
        print(f"\n⚠️  {len(result.warnings)} warning(s):")
        for warning in result.warnings:
            print(f"   {warning.type.value}: {warning.message} [{warning.location}]")

    flat = reshaper.flatten_globals(document).data
    print(f"\nFlattened values: {json.dumps(flat, indent=2)}")

    extracted = reshaper.extract(document, ["exname", "wst_id", "missing"]).data
    print(f"Extracted: {extracted}")

    compressed = reshaper.compress_all(result.data).data
    restored = compressed["soil"]["soilLayer"] == document["soil"]["soilLayer"]
    print(f"\nSoil layers restored by compression: {'✅' if restored else '❌'}")

    print(f"\nProfile: {reshaper.profiler.summary()}")


if __name__ == "__main__":
    main()
