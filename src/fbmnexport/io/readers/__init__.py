"""
Readers for the results of the upstream processing stage.

- MgfReader: MS2 spectra in MGF (pyteomics)
- read_feature_definitions(): feature metadata table (pandas)
- read_feature_values(): per-sample intensity matrix (pandas)

Convenience functions:
- read_mgf(): Load an MGF file into a SpectrumCollection
"""

from .mgf import MgfReader, read_mgf
from .tables import read_feature_definitions, read_feature_values

__all__ = [
    # Readers
    "MgfReader",
    # Convenience functions
    "read_mgf",
    "read_feature_definitions",
    "read_feature_values",
]
