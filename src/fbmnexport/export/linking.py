"""
Linking MS2 spectra to features.

A spectrum belongs to a feature when its precursor m/z falls inside the
feature's m/z range and its retention time inside the feature's
retention-time range, both optionally widened by a tolerance.
"""

import logging
from collections.abc import Iterable

import numpy as np

from ..core import FeatureSet, Spectrum, SpectrumCollection


logger = logging.getLogger(__name__)


def link_spectra_to_features(
    spectra: Iterable[Spectrum],
    features: FeatureSet,
    mz_tolerance_ppm: float = 0.0,
    rt_tolerance: float = 0.0,
    keep_unlinked: bool = False,
) -> SpectrumCollection:
    """
    Assign feature identifiers to unlinked spectra.

    A spectrum matching several features is emitted once per matching
    feature, in feature order. Spectra that already carry a feature
    identifier pass through unchanged. Spectra without precursor
    information never match.

    Args:
        spectra: Spectra in input order.
        features: Candidate features.
        mz_tolerance_ppm: Widening of the m/z range, in ppm of the
            precursor m/z.
        rt_tolerance: Widening of the retention-time range, in seconds.
        keep_unlinked: If True, unmatched spectra are kept without a
            feature identifier; otherwise they are dropped.

    Returns:
        New SpectrumCollection.
    """
    if mz_tolerance_ppm < 0 or rt_tolerance < 0:
        raise ValueError("Tolerances must be non-negative")

    mz_min, mz_max = features.mz_bounds()
    rt_min, rt_max = features.rt_bounds()
    feature_ids = features.ids

    linked: list[Spectrum] = []
    n_unmatched = 0
    for spectrum in spectra:
        if spectrum.feature_id is not None:
            linked.append(spectrum)
            continue

        precursor_mz = spectrum.precursor_mz
        matches = np.array([], dtype=np.intp)
        if precursor_mz is not None and len(feature_ids) > 0:
            mz_tol = precursor_mz * mz_tolerance_ppm / 1e6
            rt = spectrum.retention_time
            mask = (
                (mz_min - mz_tol <= precursor_mz) & (precursor_mz <= mz_max + mz_tol)
                & (rt_min - rt_tolerance <= rt) & (rt <= rt_max + rt_tolerance)
            )
            matches = np.flatnonzero(mask)

        if len(matches) == 0:
            n_unmatched += 1
            if keep_unlinked:
                linked.append(spectrum)
            continue

        for idx in matches:
            linked.append(spectrum.with_feature(feature_ids[idx]))

    if n_unmatched:
        action = "kept unlinked" if keep_unlinked else "dropped"
        logger.warning(f"{n_unmatched} spectra matched no feature ({action})")
    return SpectrumCollection(linked)
