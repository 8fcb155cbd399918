"""Pytest configuration for FBMNExport tests.

Provides small hand-built feature sets, intensity mappings and spectra
shared across the test modules.
"""

import pytest

from fbmnexport.core import (
    Feature,
    FeatureSet,
    PrecursorInfo,
    ScanMetadata,
    Spectrum,
    SpectrumCollection,
)


def make_spectrum(
    feature_id,
    peaks,
    scan_number=1,
    rt=15.0,
    precursor_mz=150.1,
    ms_level=2,
    **metadata,
):
    """Build a spectrum from (m/z, intensity) pairs."""
    precursor = PrecursorInfo(mz=precursor_mz) if precursor_mz is not None else None
    return Spectrum.from_peaks(
        peaks,
        ScanMetadata(
            scan_number=scan_number,
            ms_level=ms_level,
            retention_time=rt,
            precursor=precursor,
            feature_id=feature_id,
            **metadata,
        ),
    )


@pytest.fixture
def spectrum_factory():
    """Factory for spectra: spectrum_factory(feature_id, peaks, **metadata)."""
    return make_spectrum


@pytest.fixture
def two_features():
    """Two features separated in retention time (f1: 10-20 s, f2: 30-40 s)."""
    return FeatureSet([
        Feature("f1", 150.1, 150.0, 150.2, 15.0, 10.0, 20.0, n_peaks=1),
        Feature("f2", 210.1, 210.0, 210.2, 35.0, 30.0, 40.0, n_peaks=1),
    ])


@pytest.fixture
def three_features():
    """Three features with numeric identifiers and auxiliary columns."""
    return FeatureSet([
        Feature("FT001", 150.1, 150.0, 150.2, 15.0, 10.0, 20.0, n_peaks=2,
                extras={'npeaks_QC': 2}, peak_indices=(1, 4)),
        Feature("FT002", 210.1, 210.0, 210.2, 35.0, 30.0, 40.0, n_peaks=1,
                extras={'npeaks_QC': 1}, peak_indices=(2,)),
        Feature("FT003", 330.2, 330.1, 330.3, 55.0, 50.0, 60.0, n_peaks=3,
                extras={'npeaks_QC': 0}, peak_indices=(3, 5, 6)),
    ])


@pytest.fixture
def three_intensities():
    """Intensities for three_features; FT002 was not recovered in s2."""
    return {
        "FT001": {"s1": 100.0, "s2": 120.0},
        "FT002": {"s1": 200.0, "s2": None},
        "FT003": {"s1": 300.0, "s2": 330.0},
    }


@pytest.fixture
def linked_spectra():
    """Spectra for FT001 (two scans) and FT002 (one scan); FT003 has none."""
    return SpectrumCollection([
        make_spectrum("FT001", [(100.0, 5.0), (101.0, 3.0)], scan_number=11, rt=12.0),
        make_spectrum("FT002", [(120.0, 40.0)], scan_number=12, rt=33.0,
                      precursor_mz=210.1),
        make_spectrum("FT001", [(100.0, 50.0)], scan_number=13, rt=16.0),
    ])
