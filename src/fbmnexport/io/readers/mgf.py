"""
MGF file reader using pyteomics.

This module provides the MgfReader class for reading the MS2 spectra
handed over by the upstream processing stage. Spectra are linked to
features through the ``FEATURE_ID`` field.
"""

import re
from collections.abc import Iterator
from pathlib import Path
from typing import Any, ClassVar, Optional

import numpy as np

from ..base import SpectrumReader
from ...core import (
    Spectrum,
    ScanMetadata,
    PrecursorInfo,
    SpectrumCollection,
    Polarity,
)


# Record fields mapped onto ScanMetadata; the rest go to extras
_KNOWN_PARAMS = {
    'title', 'pepmass', 'charge', 'rtinseconds', 'scans',
    'mslevel', 'feature_id', 'ionmode', 'filename',
}

# Values that mean "no feature"
_MISSING_FEATURE = {'', 'na', 'nan', 'none', 'null'}


def _parse_scan_number(value: Any, index: int) -> int:
    """
    Extract a scan number from a SCANS field.

    Accepts "123", "123-125" and "123,124" (first number wins). Falls back
    to index + 1 if parsing fails.
    """
    if value is None:
        return index + 1
    match = re.match(r'\s*(\d+)', str(value))
    if match and int(match.group(1)) >= 1:
        return int(match.group(1))
    return index + 1


def _parse_charge(value: Any) -> Optional[int]:
    """Parse a CHARGE field; pyteomics may hand over a list of charges."""
    if value is None:
        return None
    if isinstance(value, (list, tuple)):
        if not value:
            return None
        value = value[0]
    if isinstance(value, (int, np.integer)):
        return int(value)
    text = str(value).strip()
    if not text:
        return None
    sign = -1 if text.endswith('-') else 1
    digits = text.rstrip('+-')
    return sign * int(digits) if digits else sign


def _parse_pepmass(value: Any) -> tuple[Optional[float], Optional[float]]:
    """Return (precursor m/z, precursor intensity) from a PEPMASS field."""
    if value is None:
        return None, None
    if isinstance(value, (list, tuple)):
        mz = value[0] if len(value) > 0 else None
        intensity = value[1] if len(value) > 1 else None
    else:
        mz, intensity = value, None
    return (
        float(mz) if mz is not None else None,
        float(intensity) if intensity is not None else None,
    )


def _parse_feature_id(value: Any) -> Optional[str]:
    """Normalize a FEATURE_ID field; missing markers map to None."""
    if value is None:
        return None
    text = str(value).strip()
    if text.lower() in _MISSING_FEATURE:
        return None
    return text


class MgfReader(SpectrumReader):
    """
    Reader for MGF files using pyteomics.

    Example:
        >>> with MgfReader("ms2spectra.mgf") as reader:
        ...     for spectrum in reader:
        ...         print(spectrum.scan_number, spectrum.feature_id)
    """

    format_name: ClassVar[str] = "MGF"
    supported_extensions: ClassVar[list[str]] = ['.mgf']

    def __init__(self, path: Path | str, default_ms_level: int = 2):
        """
        Initialize the MGF reader.

        Args:
            path: Path to the MGF file.
            default_ms_level: MS level for records without an MSLEVEL field.
        """
        super().__init__(path)
        self.default_ms_level = default_ms_level
        self._reader = None
        self._n_spectra: Optional[int] = None

    @classmethod
    def is_available(cls) -> bool:
        """Check if pyteomics is installed."""
        try:
            import pyteomics.mgf
            return True
        except ImportError:
            return False

    @classmethod
    def get_installation_instructions(cls) -> str:
        """Return installation instructions for pyteomics."""
        return (
            "Install pyteomics:\n"
            "  pip install pyteomics"
        )

    def __enter__(self) -> 'MgfReader':
        """Open the file for reading."""
        if not self.is_available():
            raise RuntimeError(self.get_installation_instructions())
        from pyteomics import mgf
        self._reader = mgf.MGF(
            str(self.path),
            use_header=True,
            convert_arrays=1,
            read_charges=False,
        )
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Close the file."""
        if self._reader is not None:
            self._reader.close()
            self._reader = None

    def __iter__(self) -> Iterator[Spectrum]:
        """Iterate over all spectra in the file."""
        if self._reader is None:
            raise RuntimeError("Reader not opened. Use 'with' context manager.")

        self._reader.reset()
        for idx, spectrum_data in enumerate(self._reader):
            yield self._parse_spectrum(spectrum_data, idx)

    def __len__(self) -> int:
        """Total number of spectra in the file."""
        if self._reader is None:
            raise RuntimeError("Reader not opened. Use 'with' context manager.")
        if self._n_spectra is None:
            with open(self.path, encoding='utf-8') as f:
                self._n_spectra = sum(1 for line in f if line.strip() == 'BEGIN IONS')
        return self._n_spectra

    def _parse_spectrum(self, spectrum_data: dict, index: int) -> Spectrum:
        """
        Parse a pyteomics spectrum dictionary into a Spectrum object.

        Args:
            spectrum_data: Dictionary from pyteomics.
            index: Position in file (0-based).

        Returns:
            Parsed Spectrum object.
        """
        params = spectrum_data.get('params', {})

        mz = spectrum_data.get('m/z array', np.array([], dtype=np.float64))
        intensity = spectrum_data.get('intensity array', np.array([], dtype=np.float64))
        mz = np.asarray(mz, dtype=np.float64)
        intensity = np.asarray(intensity, dtype=np.float64)

        precursor = None
        precursor_mz, precursor_intensity = _parse_pepmass(params.get('pepmass'))
        if precursor_mz is not None:
            precursor = PrecursorInfo(
                mz=precursor_mz,
                charge=_parse_charge(params.get('charge')),
                intensity=precursor_intensity,
            )

        rt = params.get('rtinseconds')
        ms_level = params.get('mslevel')

        metadata = ScanMetadata(
            scan_number=_parse_scan_number(params.get('scans'), index),
            ms_level=int(ms_level) if ms_level is not None else self.default_ms_level,
            retention_time=float(rt) if rt is not None else 0.0,
            polarity=Polarity.from_string(params.get('ionmode')),
            precursor=precursor,
            native_id=params.get('title'),
            feature_id=_parse_feature_id(params.get('feature_id')),
            sample_name=params.get('filename'),
            extras={k: v for k, v in params.items() if k not in _KNOWN_PARAMS},
        )

        return Spectrum(mz=mz, intensity=intensity, metadata=metadata)


def read_mgf(path: Path | str) -> SpectrumCollection:
    """
    Convenience function to read an MGF file into a SpectrumCollection.

    Args:
        path: Path to the MGF file.

    Returns:
        SpectrumCollection in file order.

    Example:
        >>> spectra = read_mgf("ms2spectra_all.mgf")
        >>> print(f"Loaded {len(spectra)} spectra")
    """
    with MgfReader(path) as reader:
        return reader.to_collection()
