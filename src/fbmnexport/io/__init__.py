"""
I/O module for reading pipeline inputs and writing export artifacts.

This module provides:

Readers:
- MgfReader: Read MS2 spectra from MGF files
- read_feature_definitions(): Load feature metadata
- read_feature_values(): Load the per-sample intensity matrix

Writers:
- MgfWriter: Write spectra as MGF
- TsvWriter: Write export tables as tab-separated text

Base classes:
- SpectrumReader: Abstract base class for spectrum readers
- ArtifactWriter: Abstract base class for export writers

Registry:
- WriterRegistry: Writer selection by output extension
- detect_format(): Detect export format from path
- ExportFormat: Enum of supported formats
"""

from .base import SpectrumReader, ArtifactWriter
from .registry import WriterRegistry, detect_format, ExportFormat
from .readers import (
    MgfReader,
    read_mgf,
    read_feature_definitions,
    read_feature_values,
)
from .writers import (
    MgfWriter,
    TsvWriter,
    write_mgf,
    write_table,
)

__all__ = [
    # Base
    "SpectrumReader",
    "ArtifactWriter",
    # Readers
    "MgfReader",
    "read_mgf",
    "read_feature_definitions",
    "read_feature_values",
    # Writers
    "MgfWriter",
    "TsvWriter",
    "write_mgf",
    "write_table",
    # Registry
    "WriterRegistry",
    "detect_format",
    "ExportFormat",
]
