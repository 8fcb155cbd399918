"""
SpectrumCollection: an ordered set of MS2 spectra.

This module defines the SpectrumCollection class, the container passed
between the export steps. Unlike an acquisition run it does not reorder
its spectra: input order is kept verbatim so that every derived artifact
is reproducible byte for byte.
"""

from collections.abc import Iterable, Iterator, Sequence
from typing import Optional, overload

from .spectrum import Spectrum


class SpectrumCollection(Sequence[Spectrum]):
    """
    An ordered collection of MS2 spectra.

    The class implements the Sequence protocol, allowing indexing and
    iteration over spectra in input order. Spectra may share a feature
    identifier (one-to-many) and scan numbers need not be unique.

    Example:
        >>> from fbmnexport.core import SpectrumCollection, Spectrum, ScanMetadata
        >>>
        >>> spectra = SpectrumCollection([
        ...     Spectrum.from_peaks([(100.0, 5.0)],
        ...         ScanMetadata(scan_number=1, ms_level=2, retention_time=12.0,
        ...                      feature_id="FT1")),
        ...     Spectrum.from_peaks([(100.0, 50.0)],
        ...         ScanMetadata(scan_number=2, ms_level=2, retention_time=14.0,
        ...                      feature_id="FT1")),
        ... ])
        >>> list(spectra.group_by_feature())
        ['FT1']
    """

    def __init__(self, spectra: Optional[Iterable[Spectrum]] = None):
        """
        Initialize a SpectrumCollection.

        Args:
            spectra: Spectra in input order.
        """
        self._spectra: list[Spectrum] = list(spectra) if spectra is not None else []

    # -------------------------------------------------------------------------
    # Sequence protocol implementation
    # -------------------------------------------------------------------------

    @overload
    def __getitem__(self, index: int) -> Spectrum: ...

    @overload
    def __getitem__(self, index: slice) -> list[Spectrum]: ...

    def __getitem__(self, index: int | slice) -> Spectrum | list[Spectrum]:
        """Get spectrum by position (input order)."""
        return self._spectra[index]

    def __len__(self) -> int:
        """Total number of spectra in the collection."""
        return len(self._spectra)

    def __iter__(self) -> Iterator[Spectrum]:
        """Iterate over all spectra in input order."""
        return iter(self._spectra)

    # -------------------------------------------------------------------------
    # Feature grouping
    # -------------------------------------------------------------------------

    def group_by_feature(self) -> dict[str, list[Spectrum]]:
        """
        Group linked spectra by feature identifier.

        Returns:
            Dictionary mapping feature identifier to its spectra. Keys are in
            the order each identifier is first encountered; spectra keep
            their relative input order within a group. Spectra without a
            feature identifier are not included.
        """
        groups: dict[str, list[Spectrum]] = {}
        for spectrum in self._spectra:
            feature_id = spectrum.feature_id
            if feature_id is None:
                continue
            groups.setdefault(feature_id, []).append(spectrum)
        return groups

    @property
    def feature_ids(self) -> list[str]:
        """Distinct feature identifiers in first-encountered order."""
        return list(self.group_by_feature())

    def linked(self) -> 'SpectrumCollection':
        """Spectra that carry a feature identifier."""
        return SpectrumCollection(s for s in self._spectra if s.metadata.is_linked)

    def unlinked(self) -> 'SpectrumCollection':
        """Spectra without a feature identifier."""
        return SpectrumCollection(s for s in self._spectra if not s.metadata.is_linked)

    # -------------------------------------------------------------------------
    # Filtering and transformation
    # -------------------------------------------------------------------------

    def filter(
        self,
        ms_level: Optional[int] = None,
        feature_ids: Optional[Iterable[str]] = None,
    ) -> 'SpectrumCollection':
        """
        Create a new collection with filtered spectra.

        Args:
            ms_level: Keep only spectra with this MS level.
            feature_ids: Keep only spectra linked to one of these features.

        Returns:
            New SpectrumCollection, input order preserved.
        """
        filtered = self._spectra

        if ms_level is not None:
            filtered = [s for s in filtered if s.ms_level == ms_level]

        if feature_ids is not None:
            keep = set(feature_ids)
            filtered = [s for s in filtered if s.feature_id in keep]

        return SpectrumCollection(filtered)

    def clean(self, non_positive: bool = False) -> 'SpectrumCollection':
        """Return a collection with zero-intensity peaks removed from every spectrum."""
        return SpectrumCollection(s.clean(non_positive=non_positive) for s in self._spectra)

    # -------------------------------------------------------------------------
    # Properties and statistics
    # -------------------------------------------------------------------------

    def get_ms_level_counts(self) -> dict[int, int]:
        """
        Count spectra per MS level.

        Returns:
            Dictionary mapping MS level to count.
        """
        counts: dict[int, int] = {}
        for spectrum in self._spectra:
            level = spectrum.ms_level
            counts[level] = counts.get(level, 0) + 1
        return counts

    def summary(self) -> dict:
        """
        Generate a summary of the collection.

        Returns:
            Dictionary with collection statistics.
        """
        return {
            'n_spectra': len(self),
            'n_linked': len(self.linked()),
            'n_unlinked': len(self.unlinked()),
            'n_features': len(self.feature_ids),
            'ms_level_counts': self.get_ms_level_counts(),
        }

    def __repr__(self) -> str:
        """String representation."""
        summary = self.summary()
        return (
            f"SpectrumCollection({summary['n_spectra']} spectra, "
            f"{summary['n_features']} features, "
            f"{summary['n_unlinked']} unlinked)"
        )
