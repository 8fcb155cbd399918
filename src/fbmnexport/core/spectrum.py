"""
Core spectrum representation for FBMNExport.

This module defines the Spectrum class, the data structure representing a
single MS2 scan: its peak list (m/z-intensity pairs) and the scan metadata
that links it to a consolidated feature.
"""

from dataclasses import dataclass
from typing import Optional

import numpy as np
from numpy.typing import NDArray

from .scan_metadata import ScanMetadata

@dataclass(slots=True, eq=False)
class Spectrum:
    """
    A single MS2 spectrum with associated metadata.

    Spectra are treated as values: the methods that change peaks or
    metadata return new instances and leave the original untouched.

    Attributes:
        mz: Array of m/z values.
        intensity: Array of intensity values corresponding to mz.
        metadata: Scan metadata, including the feature link.

    Example:
        >>> import numpy as np
        >>> from fbmnexport.core.scan_metadata import ScanMetadata, PrecursorInfo
        >>>
        >>> metadata = ScanMetadata(
        ...     scan_number=12, ms_level=2, retention_time=605.2,
        ...     precursor=PrecursorInfo(mz=301.14), feature_id="FT0001",
        ... )
        >>> spectrum = Spectrum(
        ...     mz=np.array([100.0, 150.0, 200.0]),
        ...     intensity=np.array([1000.0, 0.0, 2500.0]),
        ...     metadata=metadata
        ... )
        >>> spectrum.total_intensity
        3500.0
        >>> spectrum.clean().n_points
        2
    """
    mz: NDArray[np.float64]
    intensity: NDArray[np.float64]
    metadata: ScanMetadata

    def __post_init__(self) -> None:
        """Coerce the peak arrays to 1-D float64 and check they pair up."""
        self.mz = np.asarray(self.mz, dtype=np.float64)
        self.intensity = np.asarray(self.intensity, dtype=np.float64)
        for name, values in (('mz', self.mz), ('intensity', self.intensity)):
            if values.ndim != 1:
                raise ValueError(f"Peak array {name} must be 1-D, got shape {values.shape}")
        if self.mz.shape != self.intensity.shape:
            raise ValueError(
                f"Scan {self.metadata.scan_number}: {self.mz.size} m/z values "
                f"but {self.intensity.size} intensities"
            )

    @classmethod
    def from_peaks(
        cls,
        peaks: list[tuple[float, float]],
        metadata: ScanMetadata,
    ) -> 'Spectrum':
        """
        Create a Spectrum from a list of (m/z, intensity) pairs.

        Args:
            peaks: Peak list, possibly empty.
            metadata: Scan metadata.

        Returns:
            New Spectrum instance.
        """
        if not peaks:
            return cls(
                mz=np.array([], dtype=np.float64),
                intensity=np.array([], dtype=np.float64),
                metadata=metadata,
            )
        mz, intensity = zip(*peaks)
        return cls(
            mz=np.array(mz, dtype=np.float64),
            intensity=np.array(intensity, dtype=np.float64),
            metadata=metadata,
        )

    @property
    def n_points(self) -> int:
        """Number of peaks."""
        return self.mz.size

    @property
    def is_empty(self) -> bool:
        return self.mz.size == 0

    @property
    def total_intensity(self) -> float:
        """Total ion current: the intensity sum, 0.0 for an empty peak list."""
        return float(self.intensity.sum())

    # Shortcuts into the scan metadata

    @property
    def feature_id(self) -> Optional[str]:
        return self.metadata.feature_id

    @property
    def ms_level(self) -> int:
        return self.metadata.ms_level

    @property
    def retention_time(self) -> float:
        return self.metadata.retention_time

    @property
    def scan_number(self) -> int:
        return self.metadata.scan_number

    @property
    def precursor_mz(self) -> Optional[float]:
        return self.metadata.precursor_mz

    def clean(self, non_positive: bool = False) -> 'Spectrum':
        """
        Return a copy without zero-intensity peaks.

        Args:
            non_positive: If True, also drop peaks with negative intensity.

        Returns:
            New Spectrum with the remaining peaks in their original order.
        """
        keep = self.intensity > 0 if non_positive else self.intensity != 0
        return Spectrum(self.mz[keep], self.intensity[keep], self.metadata)

    def evolve(self, **changes) -> 'Spectrum':
        """Return a copy with metadata fields replaced; the peak arrays are shared."""
        return Spectrum(self.mz, self.intensity, self.metadata.evolve(**changes))

    def with_feature(self, feature_id: Optional[str]) -> 'Spectrum':
        """Return a copy linked to ``feature_id``."""
        return self.evolve(feature_id=feature_id)

    def with_scan_number(self, scan_number: int) -> 'Spectrum':
        """Return a copy with a new scan number."""
        return self.evolve(scan_number=scan_number)

    def __len__(self) -> int:
        return self.n_points

    def __repr__(self) -> str:
        precursor = self.precursor_mz
        return (
            f"Spectrum(scan={self.scan_number}, feature={self.feature_id or '-'}, "
            f"precursor={'n/a' if precursor is None else f'{precursor:.4f}'}, "
            f"rt={self.retention_time:.1f}s, peaks={self.n_points}, "
            f"tic={self.total_intensity:.3g})"
        )
