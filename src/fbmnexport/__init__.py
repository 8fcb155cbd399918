"""
FBMNExport: feature and spectrum export for feature-based molecular networking.

Subpackages:
- core: Spectrum, SpectrumCollection, Feature, FeatureSet
- export: Feature table, representative selection, MS2 filtering, pipeline
- io: MGF and TSV readers and writers
"""

__version__ = "0.1.0"

from .errors import DataIntegrityError
from .core import (
    Feature,
    FeatureSet,
    Spectrum,
    SpectrumCollection,
    ScanMetadata,
    PrecursorInfo,
    Polarity,
)
from .export import (
    ExportFilter,
    ExportOptions,
    ExportResult,
    ExportTable,
    FeatureTableBuilder,
    RepresentativeSpectrumSelector,
    run_export,
)

__all__ = [
    "__version__",
    # Errors
    "DataIntegrityError",
    # Data types
    "Feature",
    "FeatureSet",
    "Spectrum",
    "SpectrumCollection",
    "ScanMetadata",
    "PrecursorInfo",
    "Polarity",
    # Export
    "ExportFilter",
    "ExportOptions",
    "ExportResult",
    "ExportTable",
    "FeatureTableBuilder",
    "RepresentativeSpectrumSelector",
    "run_export",
]
