"""Attendance sheet layout analysis and signature stamping."""

__version__ = "0.1.0"
