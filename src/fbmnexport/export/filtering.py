"""
MS2-only export filtering.

The networking service only needs features that were fragmented. This
module intersects the export table with the spectrum collection on feature
identifier, in both directions.
"""

import logging
from collections.abc import Iterable

from ..core import Spectrum, SpectrumCollection
from ..errors import DataIntegrityError
from .table import ExportTable


logger = logging.getLogger(__name__)


class ExportFilter:
    """
    Produce the MS2-only variants of the export table and spectra.

    Example:
        >>> export_filter = ExportFilter(table)
        >>> ms2_table = export_filter.filter_table(spectra)
        >>> set(ms2_table.feature_ids) == set(spectra.feature_ids)
        True
    """

    def __init__(self, table: ExportTable):
        """
        Initialize the filter.

        Args:
            table: The full export table.
        """
        self.table = table

    def linked_feature_ids(self, spectra: Iterable[Spectrum]) -> set[str]:
        """
        Feature identifiers with at least one associated spectrum.

        Raises:
            DataIntegrityError: If a spectrum references a feature that is
                not a row of the table.
        """
        feature_ids: set[str] = set()
        for spectrum in spectra:
            feature_id = spectrum.feature_id
            if feature_id is None:
                continue
            if feature_id not in self.table:
                raise DataIntegrityError(
                    f"Spectrum (scan {spectrum.scan_number}) references unknown "
                    f"feature {feature_id!r}",
                    feature_id=feature_id,
                )
            feature_ids.add(feature_id)
        return feature_ids

    def filter_table(self, spectra: Iterable[Spectrum]) -> ExportTable:
        """
        Keep the table rows that have at least one spectrum.

        Args:
            spectra: The full, pre-selection spectrum collection.

        Returns:
            New ExportTable, row order preserved.
        """
        keep = self.linked_feature_ids(spectra)
        filtered = self.table.subset(keep)
        logger.info(f"MS2-only table: {len(filtered)} of {len(self.table)} features")
        return filtered

    def filter_spectra(self, spectra: Iterable[Spectrum]) -> SpectrumCollection:
        """
        Keep the spectra linked to a row of the table.

        Raises:
            DataIntegrityError: If a spectrum references an unknown feature.
        """
        spectra = SpectrumCollection(spectra)
        return spectra.filter(feature_ids=self.linked_feature_ids(spectra))


def filter_ms2_features(table: ExportTable, spectra: Iterable[Spectrum]) -> ExportTable:
    """Convenience function: rows of ``table`` that have MS2 spectra."""
    return ExportFilter(table).filter_table(spectra)
