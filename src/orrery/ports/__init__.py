# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Port interfaces for orbit data export.

Adapters implement these to write paths and positions in different file
formats.
"""
from orrery.ports.export import OrbitPathExporter, PositionExporter

__all__ = ["OrbitPathExporter", "PositionExporter"]
