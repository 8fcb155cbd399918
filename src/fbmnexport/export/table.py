"""
Feature export table.

This module merges per-feature metadata with the per-sample intensity
matrix into one row-per-feature table. The merge is an explicit outer join
over a mapping keyed by feature identifier: every feature yields exactly
one row, in feature order, and a sample without a recovered peak yields a
missing value rather than a dropped row.
"""

import logging
import math
from collections.abc import Iterable, Iterator, Mapping
from numbers import Integral
from typing import Any, Optional

import pandas as pd

from ..core import Feature, FeatureSet, SampleIntensities, PEAK_INDEX_COLUMN
from ..errors import DataIntegrityError


logger = logging.getLogger(__name__)

# Name of the identifier column in tables merged by row name
DEFAULT_ID_COLUMN = 'Row.names'


def _as_intensity(value: Any) -> Optional[float]:
    """Normalize an intensity value; None and NaN both mean missing."""
    if value is None:
        return None
    value = float(value)
    if math.isnan(value):
        return None
    return value


def _is_integer(value: Any) -> bool:
    return isinstance(value, Integral) and not isinstance(value, bool)


def _check_field(kind: str, name: str) -> None:
    """Tab-separated output has no quoting, so a field may not hold a separator."""
    if any(char in name for char in '\t\r\n'):
        raise ValueError(f"{kind} {name!r} contains a tab or line break")


class ExportTable:
    """
    A row-per-feature table: identifier, feature metadata, sample intensities.

    Rows keep insertion order. The table is write-once: filtering returns
    a new table.

    Attributes:
        id_column: Name of the identifier column.
        metadata_columns: Feature metadata columns, in output order.
        sample_columns: One intensity column per sample, in output order.
    """

    def __init__(
        self,
        metadata_columns: Iterable[str],
        sample_columns: Iterable[str],
        rows: Optional[Iterable[tuple[str, Mapping[str, Any]]]] = None,
        id_column: str = DEFAULT_ID_COLUMN,
    ):
        """
        Initialize an ExportTable.

        Args:
            metadata_columns: Feature metadata column names.
            sample_columns: Sample column names.
            rows: (feature_id, values by column) pairs in row order. Columns
                absent from a row's values are missing.
            id_column: Name of the identifier column.

        Raises:
            DataIntegrityError: If a feature identifier occurs twice.
        """
        self.id_column = id_column
        self.metadata_columns = list(metadata_columns)
        self.sample_columns = list(sample_columns)
        self._rows: dict[str, dict[str, Any]] = {}
        for feature_id, values in rows or ():
            if feature_id in self._rows:
                raise DataIntegrityError(
                    f"Duplicate feature identifier {feature_id!r} in export table",
                    feature_id=feature_id,
                )
            self._rows[feature_id] = {
                column: values.get(column) for column in self.value_columns
            }

    @property
    def value_columns(self) -> list[str]:
        """Metadata columns followed by sample columns."""
        return self.metadata_columns + self.sample_columns

    @property
    def columns(self) -> list[str]:
        """Full header: identifier, metadata, samples."""
        return [self.id_column] + self.value_columns

    @property
    def feature_ids(self) -> list[str]:
        """Row identifiers in order."""
        return list(self._rows)

    def __len__(self) -> int:
        return len(self._rows)

    def __iter__(self) -> Iterator[tuple[str, dict[str, Any]]]:
        """Iterate over (feature_id, values by column) in row order."""
        for feature_id, values in self._rows.items():
            yield feature_id, dict(values)

    def __contains__(self, feature_id: object) -> bool:
        return feature_id in self._rows

    def row(self, feature_id: str) -> dict[str, Any]:
        """
        Values of one row keyed by column, identifier included.

        Raises:
            KeyError: If the identifier is not a row of the table.
        """
        if feature_id not in self._rows:
            raise KeyError(f"Feature {feature_id!r} not in export table")
        return {self.id_column: feature_id, **self._rows[feature_id]}

    def value(self, feature_id: str, column: str) -> Any:
        """Single cell value (None if missing)."""
        return self.row(feature_id)[column]

    def subset(self, feature_ids: Iterable[str]) -> 'ExportTable':
        """
        Create a new table with only the given rows.

        Row order follows this table, not ``feature_ids``; identifiers that
        are not rows are ignored.
        """
        keep = set(feature_ids)
        return ExportTable(
            metadata_columns=self.metadata_columns,
            sample_columns=self.sample_columns,
            rows=((fid, values) for fid, values in self._rows.items() if fid in keep),
            id_column=self.id_column,
        )

    def to_frame(self) -> pd.DataFrame:
        """
        Convert to a pandas DataFrame with the full header.

        Columns whose present values are all integers use the nullable
        ``Int64`` dtype, so a count stays "2" next to a missing cell.
        """
        data: dict[str, Any] = {self.id_column: list(self._rows)}
        for column in self.value_columns:
            values = [row[column] for row in self._rows.values()]
            present = [value for value in values if value is not None]
            if present and all(_is_integer(value) for value in present):
                data[column] = pd.array(values, dtype='Int64')
            else:
                data[column] = values
        return pd.DataFrame(data, columns=self.columns)

    def __repr__(self) -> str:
        return (
            f"ExportTable({len(self)} rows, "
            f"{len(self.metadata_columns)} metadata columns, "
            f"{len(self.sample_columns)} samples)"
        )


class FeatureTableBuilder:
    """
    Merge feature metadata and sample intensities into an ExportTable.

    Example:
        >>> builder = FeatureTableBuilder()
        >>> table = builder.build(features, {"FT1": {"s1": 100.0}})
        >>> table.columns[-1]
        's1'
    """

    def __init__(
        self,
        id_column: str = DEFAULT_ID_COLUMN,
        samples: Optional[Iterable[str]] = None,
        exclude_columns: Iterable[str] = (PEAK_INDEX_COLUMN,),
    ):
        """
        Initialize the builder.

        Args:
            id_column: Name of the identifier column.
            samples: Explicit sample column order. If None, samples appear
                in the order they are first seen in the intensity mapping.
            exclude_columns: Metadata columns left out of the export.
        """
        self.id_column = id_column
        self.samples = list(samples) if samples is not None else None
        self.exclude_columns = set(exclude_columns) | {PEAK_INDEX_COLUMN}

    def _sample_columns(self, features: FeatureSet, intensities: SampleIntensities) -> list[str]:
        """Resolve sample column order."""
        if self.samples is not None:
            known = set(self.samples)
            for feature_id in features.ids:
                for sample in intensities[feature_id]:
                    if sample not in known:
                        raise ValueError(
                            f"Feature {feature_id!r} has an intensity for sample "
                            f"{sample!r}, which is not in the sample list"
                        )
            return list(self.samples)

        samples: list[str] = []
        seen: set[str] = set()
        for feature_id in features.ids:
            for sample in intensities[feature_id]:
                if sample not in seen:
                    seen.add(sample)
                    samples.append(sample)
        return samples

    def _check_keys(self, features: FeatureSet, intensities: SampleIntensities) -> None:
        """Both inputs must share one feature identifier space."""
        for feature_id in intensities:
            if feature_id not in features:
                raise DataIntegrityError(
                    f"Intensity mapping references unknown feature {feature_id!r}",
                    feature_id=feature_id,
                )
        for feature_id in features.ids:
            if feature_id not in intensities:
                raise DataIntegrityError(
                    f"No intensity entry for feature {feature_id!r}",
                    feature_id=feature_id,
                )

    def build(
        self,
        features: FeatureSet | Iterable[Feature],
        intensities: SampleIntensities,
    ) -> ExportTable:
        """
        Build the export table.

        Args:
            features: Feature metadata, in export order.
            intensities: feature_id -> sample -> peak area (None/NaN missing).

        Returns:
            ExportTable with one row per feature.

        Raises:
            DataIntegrityError: If a feature has no intensity entry, or the
                intensity mapping references an unknown feature.
            ValueError: If column names collide, or a column name or
                feature identifier contains a tab or line break.
        """
        if not isinstance(features, FeatureSet):
            features = FeatureSet(features)

        self._check_keys(features, intensities)

        metadata_columns = [
            column for column in features.metadata_columns
            if column not in self.exclude_columns
        ]
        sample_columns = self._sample_columns(features, intensities)

        clashes = set(metadata_columns) & set(sample_columns)
        if clashes:
            raise ValueError(f"Sample names collide with metadata columns: {sorted(clashes)}")
        if self.id_column in metadata_columns or self.id_column in sample_columns:
            raise ValueError(f"Identifier column {self.id_column!r} collides with a data column")
        for column in [self.id_column] + metadata_columns + sample_columns:
            _check_field("Column name", column)
        for feature_id in features.ids:
            _check_field("Feature identifier", feature_id)

        rows = []
        for feature in features:
            values = feature.metadata_row()
            for sample, value in intensities[feature.feature_id].items():
                values[sample] = _as_intensity(value)
            rows.append((feature.feature_id, values))

        table = ExportTable(
            metadata_columns=metadata_columns,
            sample_columns=sample_columns,
            rows=rows,
            id_column=self.id_column,
        )
        logger.info(
            f"Built export table: {len(table)} features x {len(sample_columns)} samples"
        )
        return table


def build_feature_table(
    features: FeatureSet | Iterable[Feature],
    intensities: SampleIntensities,
    **kwargs,
) -> ExportTable:
    """
    Convenience function to build an export table.

    Args:
        features: Feature metadata, in export order.
        intensities: feature_id -> sample -> peak area.
        **kwargs: Passed to FeatureTableBuilder.

    Returns:
        ExportTable with one row per feature.
    """
    return FeatureTableBuilder(**kwargs).build(features, intensities)
