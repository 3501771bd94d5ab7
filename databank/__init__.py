# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Physician DataBank service package."""

__version__ = "1.0.0"
