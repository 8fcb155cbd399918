"""
Core data structures for FBMNExport.

This module provides the data types handed over by the upstream
processing stage:

- Spectrum: A single MS2 spectrum with its feature link
- ScanMetadata: Metadata for a scan
- PrecursorInfo: Precursor ion information
- SpectrumCollection: An ordered collection of spectra
- Feature: A consolidated peak group
- FeatureSet: An ordered collection of features

Enums for categorical metadata:
- Polarity: Ion polarity (positive/negative)
"""

from .scan_metadata import (
    Polarity,
    PrecursorInfo,
    ScanMetadata,
)
from .spectrum import Spectrum
from .collection import SpectrumCollection
from .feature import (
    Feature,
    FeatureSet,
    SampleIntensities,
    METADATA_COLUMNS,
    PEAK_INDEX_COLUMN,
)

__all__ = [
    # Main classes
    "Spectrum",
    "ScanMetadata",
    "PrecursorInfo",
    "SpectrumCollection",
    "Feature",
    "FeatureSet",
    # Types and constants
    "SampleIntensities",
    "METADATA_COLUMNS",
    "PEAK_INDEX_COLUMN",
    # Enums
    "Polarity",
]
