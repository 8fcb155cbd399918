"""
Export artifact writers.

- MgfWriter: MGF spectrum exports (pyteomics)
- TsvWriter: tab-separated feature tables (pandas)

Importing this module registers both writers with the WriterRegistry.
"""

from .mgf import MgfWriter, spectrum_to_mgf, write_mgf
from .tsv import TsvWriter, write_table

__all__ = [
    # Writers
    "MgfWriter",
    "TsvWriter",
    # Convenience functions
    "write_mgf",
    "write_table",
    "spectrum_to_mgf",
]
