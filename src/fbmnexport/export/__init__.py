"""
Export steps for feature-based molecular networking.

This module provides:

Feature table:
- FeatureTableBuilder: Outer join of feature metadata and sample intensities
- ExportTable: Row-per-feature table written as TSV

Spectra:
- RepresentativeSpectrumSelector: One highest-TIC spectrum per feature
- link_spectra_to_features(): Link spectra to features by m/z and RT
- format_for_gnps(): Numeric SCANS field per feature

Filtering:
- ExportFilter: MS2-only table and spectra

Pipeline:
- run_export(): Build and write all four artifacts
- ExportOptions / ExportResult: Pipeline configuration and outcome
"""

from .table import (
    DEFAULT_ID_COLUMN,
    ExportTable,
    FeatureTableBuilder,
    build_feature_table,
)
from .selection import (
    RepresentativeSpectrumSelector,
    max_by_score,
    select_representative_spectra,
    total_intensity,
)
from .filtering import ExportFilter, filter_ms2_features
from .gnps import feature_scan_number, feature_scan_numbers, format_for_gnps
from .linking import link_spectra_to_features
from .pipeline import ExportOptions, ExportResult, prepare_spectra, run_export

__all__ = [
    # Feature table
    "DEFAULT_ID_COLUMN",
    "ExportTable",
    "FeatureTableBuilder",
    "build_feature_table",
    # Representative selection
    "RepresentativeSpectrumSelector",
    "max_by_score",
    "select_representative_spectra",
    "total_intensity",
    # Filtering
    "ExportFilter",
    "filter_ms2_features",
    # GNPS numbering
    "feature_scan_number",
    "feature_scan_numbers",
    "format_for_gnps",
    # Linking
    "link_spectra_to_features",
    # Pipeline
    "ExportOptions",
    "ExportResult",
    "prepare_spectra",
    "run_export",
]
