"""
MGF spectrum writer using pyteomics.

Each spectrum becomes one ``BEGIN IONS`` / ``END IONS`` record carrying the
fields the feature-based molecular networking service reads: title,
precursor, retention time, charge, MS level, scan number and feature
identifier, followed by the peak list.
"""

import logging
from collections.abc import Iterable
from pathlib import Path
from typing import ClassVar

from ..base import ArtifactWriter
from ..registry import ExportFormat, WriterRegistry
from ...core import Polarity, Spectrum


logger = logging.getLogger(__name__)

# Order of the record header fields
MGF_KEY_ORDER: list[str] = [
    'title', 'feature_id', 'pepmass', 'rtinseconds', 'charge',
    'mslevel', 'scans', 'ionmode', 'filename',
]

_IONMODE: dict[Polarity, str] = {
    Polarity.POSITIVE: 'Positive',
    Polarity.NEGATIVE: 'Negative',
}


def spectrum_to_mgf(spectrum: Spectrum) -> dict:
    """
    Convert a Spectrum to the dictionary layout pyteomics writes.

    Fields without a value are left out of the record.
    """
    metadata = spectrum.metadata
    params: dict = {
        'title': metadata.native_id or f"scan={metadata.scan_number}",
        'rtinseconds': float(metadata.retention_time),
        'mslevel': metadata.ms_level,
        'scans': metadata.scan_number,
    }
    if metadata.feature_id is not None:
        params['feature_id'] = metadata.feature_id

    precursor = metadata.precursor
    if precursor is not None:
        if precursor.intensity is not None:
            params['pepmass'] = (float(precursor.mz), float(precursor.intensity))
        else:
            params['pepmass'] = float(precursor.mz)
        if precursor.charge is not None:
            params['charge'] = precursor.charge

    if metadata.polarity in _IONMODE:
        params['ionmode'] = _IONMODE[metadata.polarity]
    if metadata.sample_name:
        params['filename'] = metadata.sample_name

    return {
        'm/z array': spectrum.mz,
        'intensity array': spectrum.intensity,
        'params': params,
    }


@WriterRegistry.register(ExportFormat.MGF)
class MgfWriter(ArtifactWriter):
    """
    Writer for MGF spectrum exports.

    Example:
        >>> MgfWriter("ms2spectra_all.mgf").write(spectra)
        42
    """

    format_name: ClassVar[str] = "MGF"
    supported_extensions: ClassVar[list[str]] = ['.mgf']

    def write(self, data: Iterable[Spectrum]) -> int:
        """
        Write spectra in iteration order.

        Args:
            data: Spectra to write.

        Returns:
            Number of records written.
        """
        from pyteomics import mgf

        records = [spectrum_to_mgf(spectrum) for spectrum in data]
        mgf.write(
            spectra=records,
            output=str(self.path),
            key_order=MGF_KEY_ORDER,
            write_charges=False,
            file_mode='w',
        )
        logger.info(f"Wrote {len(records)} spectra to {self.path.name}")
        return len(records)


def write_mgf(spectra: Iterable[Spectrum], path: Path | str) -> int:
    """
    Convenience function to write spectra to an MGF file.

    Returns:
        Number of records written.
    """
    return MgfWriter(path).write(spectra)
