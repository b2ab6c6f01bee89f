"""Geometry, simplex quality metrics, plane cuts, surface adapters and MIXD file I/O for 4D space-time meshes."""

__version__ = "1.0.0"