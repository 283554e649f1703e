# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Adapters for orbit data export.

External dependencies (json, csv, file I/O) are confined to this layer.
"""
from orrery.adapters.csv_exporter import CsvOrbitExporter
from orrery.adapters.json_exporter import JsonOrbitExporter

__all__ = ["CsvOrbitExporter", "JsonOrbitExporter"]
