"""
Scan metadata for MS2 spectra.

This module defines the ScanMetadata dataclass that captures the metadata
of a single fragmentation scan as it leaves the upstream processing stage:
acquisition context, precursor information, and the link to the
consolidated feature the scan was assigned to.
"""

from dataclasses import dataclass, field, replace
from enum import Enum, auto
from typing import Optional

class Polarity(Enum):
    """Ion polarity mode."""
    POSITIVE = auto()
    NEGATIVE = auto()
    UNKNOWN = auto()

    @classmethod
    def from_string(cls, value: Optional[str]) -> 'Polarity':
        """Parse an MGF ``IONMODE`` style value ("positive", "neg", "+", ...)."""
        if not value:
            return cls.UNKNOWN
        value = str(value).strip().lower()
        if value in ('positive', 'pos', '+', '1'):
            return cls.POSITIVE
        if value in ('negative', 'neg', '-', '-1'):
            return cls.NEGATIVE
        return cls.UNKNOWN

@dataclass(frozen=True, slots=True)
class PrecursorInfo:
    """
    Precursor ion information for MS2 spectra.

    Attributes:
        mz: Precursor m/z value (selected for fragmentation).
        charge: Charge state, signed (None if unknown).
        intensity: Precursor intensity in the MS1 scan (None if unknown).
    """
    mz: float
    charge: Optional[int] = None
    intensity: Optional[float] = None

@dataclass(frozen=True, slots=True)
class ScanMetadata:
    """
    Metadata for a single MS2 scan.

    Attributes:
        scan_number: Scan identifier (1-based). After GNPS numbering this
            holds the integer form of the feature identifier.
        ms_level: MS level (2 for fragmentation scans).
        retention_time: Retention time in seconds.
        polarity: Ion polarity mode.
        precursor: Precursor information (None if not recorded).
        native_id: Native spectrum ID or MGF title from the source file.
        feature_id: Identifier of the feature this scan is linked to, or
            None when no feature matched.
        sample_name: Name of the sample (file) the scan was acquired in.
        extras: Additional metadata not covered by standard fields.
    """
    scan_number: int
    ms_level: int
    retention_time: float  # in seconds

    polarity: Polarity = Polarity.UNKNOWN
    precursor: Optional[PrecursorInfo] = None

    native_id: Optional[str] = None
    feature_id: Optional[str] = None
    sample_name: Optional[str] = None
    extras: dict = field(default_factory=dict)

    def __post_init__(self) -> None:
        """Validate metadata consistency."""
        if self.scan_number < 1:
            raise ValueError(f"scan_number must be >= 1, got {self.scan_number}")
        if self.ms_level < 1:
            raise ValueError(f"ms_level must be >= 1, got {self.ms_level}")
        if self.retention_time < 0:
            raise ValueError(f"retention_time must be >= 0, got {self.retention_time}")

    @property
    def is_linked(self) -> bool:
        """Check if the scan is associated with a feature."""
        return self.feature_id is not None

    @property
    def precursor_mz(self) -> Optional[float]:
        """Precursor m/z, or None without precursor information."""
        return self.precursor.mz if self.precursor is not None else None

    def evolve(self, **changes) -> 'ScanMetadata':
        """Return a copy with the given fields replaced."""
        return replace(self, **changes)
