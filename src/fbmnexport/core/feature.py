"""
Consolidated features and the ordered FeatureSet container.

A feature is a chromatographic peak group matched across samples by the
upstream correspondence step. This module holds the per-feature metadata
that is exported next to the sample intensities; the intensities
themselves travel separately as a mapping keyed by feature identifier.
"""

from collections.abc import Iterable, Iterator, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Optional, overload

import numpy as np
from numpy.typing import NDArray

from ..errors import DataIntegrityError


# feature_id -> sample name -> integrated peak area (None if not recovered)
SampleIntensities = Mapping[str, Mapping[str, Optional[float]]]

# Column names of the standard feature metadata, in export order
METADATA_COLUMNS: tuple[str, ...] = (
    'mzmed', 'mzmin', 'mzmax', 'rtmed', 'rtmin', 'rtmax', 'npeaks',
)

# Internal bookkeeping column, never exported
PEAK_INDEX_COLUMN = 'peakidx'


@dataclass(frozen=True, slots=True)
class Feature:
    """
    A consolidated peak group across samples.

    Attributes:
        feature_id: Unique feature identifier (e.g. "FT0001").
        mz: Median m/z of the grouped peaks.
        mz_min: Lower bound of the m/z range.
        mz_max: Upper bound of the m/z range.
        rt: Median retention time in seconds.
        rt_min: Lower bound of the retention-time range (seconds).
        rt_max: Upper bound of the retention-time range (seconds).
        n_peaks: Number of chromatographic peaks in the group.
        extras: Auxiliary peak-shape columns, in column order.
        peak_indices: Indices of the grouped chromatographic peaks.
    """
    feature_id: str
    mz: float
    mz_min: float
    mz_max: float
    rt: float
    rt_min: float
    rt_max: float
    n_peaks: Optional[int] = None
    extras: dict = field(default_factory=dict)
    peak_indices: tuple[int, ...] = ()

    def __post_init__(self) -> None:
        """Validate ranges."""
        if not self.feature_id:
            raise ValueError("feature_id must be a non-empty string")
        if self.mz_min > self.mz_max:
            raise ValueError(
                f"Feature {self.feature_id}: mz_min {self.mz_min} > mz_max {self.mz_max}"
            )
        if self.rt_min > self.rt_max:
            raise ValueError(
                f"Feature {self.feature_id}: rt_min {self.rt_min} > rt_max {self.rt_max}"
            )

    @property
    def mz_range(self) -> tuple[float, float]:
        """Return (mz_min, mz_max)."""
        return self.mz_min, self.mz_max

    @property
    def rt_range(self) -> tuple[float, float]:
        """Return (rt_min, rt_max) in seconds."""
        return self.rt_min, self.rt_max

    def metadata_row(self) -> dict:
        """Export values keyed by column name (standard columns, then extras)."""
        row = {
            'mzmed': self.mz,
            'mzmin': self.mz_min,
            'mzmax': self.mz_max,
            'rtmed': self.rt,
            'rtmin': self.rt_min,
            'rtmax': self.rt_max,
            'npeaks': self.n_peaks,
        }
        row.update(self.extras)
        return row


class FeatureSet(Sequence[Feature]):
    """
    An ordered, immutable collection of features with identifier lookup.

    Iteration follows insertion order, which is also the row order of the
    export table.

    Example:
        >>> features = FeatureSet([
        ...     Feature("FT1", 150.1, 150.0, 150.2, 15.0, 10.0, 20.0),
        ...     Feature("FT2", 210.1, 210.0, 210.2, 35.0, 30.0, 40.0),
        ... ])
        >>> features.get("FT2").rt_range
        (30.0, 40.0)
        >>> "FT3" in features
        False
    """

    def __init__(self, features: Optional[Iterable[Feature]] = None):
        """
        Initialize a FeatureSet.

        Args:
            features: Features in export order.

        Raises:
            DataIntegrityError: If a feature identifier occurs twice.
        """
        self._features: list[Feature] = []
        self._index: dict[str, int] = {}  # feature_id -> list index
        for feature in features or ():
            if feature.feature_id in self._index:
                raise DataIntegrityError(
                    f"Duplicate feature identifier {feature.feature_id!r}",
                    feature_id=feature.feature_id,
                )
            self._index[feature.feature_id] = len(self._features)
            self._features.append(feature)

    # -------------------------------------------------------------------------
    # Sequence protocol implementation
    # -------------------------------------------------------------------------

    @overload
    def __getitem__(self, index: int) -> Feature: ...

    @overload
    def __getitem__(self, index: slice) -> list[Feature]: ...

    def __getitem__(self, index: int | slice) -> Feature | list[Feature]:
        """Get feature by position."""
        return self._features[index]

    def __len__(self) -> int:
        return len(self._features)

    def __iter__(self) -> Iterator[Feature]:
        return iter(self._features)

    def __contains__(self, item: object) -> bool:
        """Check if a feature or feature identifier is in the set."""
        if isinstance(item, str):
            return item in self._index
        if isinstance(item, Feature):
            return item.feature_id in self._index
        return False

    # -------------------------------------------------------------------------
    # Access methods
    # -------------------------------------------------------------------------

    def get(self, feature_id: str) -> Feature:
        """
        Get feature by identifier.

        Raises:
            KeyError: If the identifier is not in the set.
        """
        if feature_id not in self._index:
            raise KeyError(f"Feature {feature_id!r} not found")
        return self._features[self._index[feature_id]]

    def position(self, feature_id: str) -> int:
        """0-based position of a feature in export order."""
        if feature_id not in self._index:
            raise KeyError(f"Feature {feature_id!r} not found")
        return self._index[feature_id]

    @property
    def ids(self) -> list[str]:
        """Feature identifiers in order."""
        return [feature.feature_id for feature in self._features]

    @property
    def metadata_columns(self) -> list[str]:
        """Standard metadata columns followed by the union of extras keys."""
        columns = list(METADATA_COLUMNS)
        seen = set(columns)
        for feature in self._features:
            for key in feature.extras:
                if key not in seen:
                    seen.add(key)
                    columns.append(key)
        return columns

    # -------------------------------------------------------------------------
    # Array views (used for window matching)
    # -------------------------------------------------------------------------

    def mz_bounds(self) -> tuple[NDArray[np.float64], NDArray[np.float64]]:
        """Arrays of (mz_min, mz_max) in feature order."""
        return (
            np.array([f.mz_min for f in self._features], dtype=np.float64),
            np.array([f.mz_max for f in self._features], dtype=np.float64),
        )

    def rt_bounds(self) -> tuple[NDArray[np.float64], NDArray[np.float64]]:
        """Arrays of (rt_min, rt_max) in feature order."""
        return (
            np.array([f.rt_min for f in self._features], dtype=np.float64),
            np.array([f.rt_max for f in self._features], dtype=np.float64),
        )

    def __repr__(self) -> str:
        return f"FeatureSet({len(self)} features)"
