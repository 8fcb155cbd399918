"""
Representative spectrum selection.

Every feature with MS2 data is represented in the reduced export by exactly
one spectrum: the one with the highest total intensity (TIC). Equal scores
keep the spectrum encountered first, so the result depends only on input
order.
"""

import logging
from collections.abc import Callable, Iterable

from ..core import Spectrum, SpectrumCollection


logger = logging.getLogger(__name__)


def total_intensity(spectrum: Spectrum) -> float:
    """Score a spectrum by the sum of its intensities (0.0 if empty)."""
    return spectrum.total_intensity


def max_by_score(
    spectra: Iterable[Spectrum],
    score: Callable[[Spectrum], float] = total_intensity,
) -> Spectrum:
    """
    Return the highest-scoring spectrum; the first one wins on ties.

    Raises:
        ValueError: If ``spectra`` is empty.
    """
    best = None
    best_score = 0.0
    for spectrum in spectra:
        current = score(spectrum)
        # strict comparison keeps the earliest spectrum among equals
        if best is None or current > best_score:
            best = spectrum
            best_score = current
    if best is None:
        raise ValueError("Cannot select a representative from an empty group")
    return best


class RepresentativeSpectrumSelector:
    """
    Select one spectrum per feature.

    Spectra are grouped by feature identifier; spectra without one are not
    part of any group and do not appear in the output. Output order is
    group order: a feature's representative is placed where the feature's
    first spectrum occurred in the input.

    Example:
        >>> selector = RepresentativeSpectrumSelector()
        >>> representatives = selector.select(spectra)
        >>> len(representatives) == len(spectra.feature_ids)
        True
    """

    def __init__(self, score: Callable[[Spectrum], float] = total_intensity):
        """
        Initialize the selector.

        Args:
            score: Scoring function; the highest score wins. Defaults to the
                total intensity of the spectrum.
        """
        self.score = score

    def select(self, spectra: Iterable[Spectrum]) -> SpectrumCollection:
        """
        Reduce the spectra to one representative per feature.

        Args:
            spectra: Spectra, possibly unlinked, in input order.

        Returns:
            SpectrumCollection with one spectrum per distinct non-null
            feature identifier, in first-encountered feature order.
        """
        if not isinstance(spectra, SpectrumCollection):
            spectra = SpectrumCollection(spectra)

        groups = spectra.group_by_feature()
        selected = [max_by_score(group, self.score) for group in groups.values()]

        logger.debug(
            f"Selected {len(selected)} representatives from "
            f"{sum(len(g) for g in groups.values())} linked spectra"
        )
        return SpectrumCollection(selected)


def select_representative_spectra(
    spectra: Iterable[Spectrum],
    score: Callable[[Spectrum], float] = total_intensity,
) -> SpectrumCollection:
    """Convenience function: one highest-TIC spectrum per feature."""
    return RepresentativeSpectrumSelector(score=score).select(spectra)
