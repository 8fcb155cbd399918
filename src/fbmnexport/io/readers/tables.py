"""
Readers for the tabular results of the upstream processing stage.

Two tab-separated tables are read with pandas:

- feature definitions: one row per feature with its m/z and retention-time
  ranges and auxiliary peak-shape columns;
- feature values: one row per feature with one integrated peak area per
  sample.
"""

import logging
import math
import re
from pathlib import Path
from typing import Any, Optional

import pandas as pd

from ..base import validate_input_path
from ...core import Feature, FeatureSet, METADATA_COLUMNS, PEAK_INDEX_COLUMN
from ...errors import DataIntegrityError


logger = logging.getLogger(__name__)

TABLE_EXTENSIONS: list[str] = ['.tsv', '.txt', '.tab']

# Columns recognized as the feature identifier, in order of preference
ID_COLUMN_CANDIDATES: tuple[str, ...] = ('Row.names', 'feature_id', 'id')

_REQUIRED_COLUMNS = ('mzmed', 'mzmin', 'mzmax', 'rtmed', 'rtmin', 'rtmax')


def _identifier_column(frame: pd.DataFrame) -> str:
    """Pick the identifier column: a known name, else the first column."""
    for candidate in ID_COLUMN_CANDIDATES:
        if candidate in frame.columns:
            return candidate
    if len(frame.columns) == 0:
        raise ValueError("Table has no columns")
    return frame.columns[0]


def _read_table(path: Path | str) -> tuple[pd.DataFrame, str]:
    """Read a tab-separated table; identifiers are kept as strings."""
    path = validate_input_path(path, TABLE_EXTENSIONS, "table")
    frame = pd.read_csv(path, sep='\t')
    if len(frame) > 0 and not isinstance(frame.index, pd.RangeIndex):
        # header one field short: the first column holds row names
        frame = frame.rename_axis(ID_COLUMN_CANDIDATES[0]).reset_index()
    id_column = _identifier_column(frame)
    if frame[id_column].isna().any():
        raise ValueError(f"{path.name}: missing feature identifiers in column {id_column!r}")
    frame[id_column] = frame[id_column].astype(str)
    return frame, id_column


def _missing(value: Any) -> bool:
    return value is None or (isinstance(value, float) and math.isnan(value))


def _clean_value(value: Any) -> Any:
    """Convert pandas/numpy scalars to plain Python values; NaN -> None."""
    if _missing(value):
        return None
    if hasattr(value, 'item'):
        value = value.item()
        if _missing(value):
            return None
    return value


def _parse_peak_indices(value: Any) -> tuple[int, ...]:
    """Parse a peak index list such as "1,4,9" or "c(1, 4, 9)"."""
    if _missing(value):
        return ()
    return tuple(int(token) for token in re.findall(r'\d+', str(value)))


def read_feature_definitions(path: Path | str) -> FeatureSet:
    """
    Read feature definitions into a FeatureSet.

    Args:
        path: Tab-separated table with an identifier column and the columns
            mzmed, mzmin, mzmax, rtmed, rtmin, rtmax; npeaks and peakidx are
            optional and every other column is kept as auxiliary metadata.

    Returns:
        FeatureSet in file order.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If required columns are missing.
        DataIntegrityError: If an identifier occurs twice.
    """
    frame, id_column = _read_table(path)

    missing = [column for column in _REQUIRED_COLUMNS if column not in frame.columns]
    if missing:
        raise ValueError(f"{Path(path).name}: missing feature columns {missing}")

    aux_columns = [
        column for column in frame.columns
        if column != id_column
        and column not in METADATA_COLUMNS
        and column != PEAK_INDEX_COLUMN
    ]

    features = []
    for record in frame.to_dict(orient='records'):
        n_peaks = _clean_value(record.get('npeaks'))
        features.append(Feature(
            feature_id=record[id_column],
            mz=float(record['mzmed']),
            mz_min=float(record['mzmin']),
            mz_max=float(record['mzmax']),
            rt=float(record['rtmed']),
            rt_min=float(record['rtmin']),
            rt_max=float(record['rtmax']),
            n_peaks=int(n_peaks) if n_peaks is not None else None,
            extras={column: _clean_value(record[column]) for column in aux_columns},
            peak_indices=_parse_peak_indices(record.get(PEAK_INDEX_COLUMN)),
        ))

    logger.info(f"Read {len(features)} feature definitions from {Path(path).name}")
    return FeatureSet(features)


def read_feature_values(path: Path | str) -> dict[str, dict[str, Optional[float]]]:
    """
    Read the per-sample intensity matrix.

    Args:
        path: Tab-separated table with an identifier column followed by one
            column per sample. Empty and ``NA`` cells are missing values.

    Returns:
        Mapping feature_id -> sample -> peak area (None if missing), in
        file order.

    Raises:
        FileNotFoundError: If the file does not exist.
        DataIntegrityError: If an identifier occurs twice.
    """
    frame, id_column = _read_table(path)
    samples = [column for column in frame.columns if column != id_column]

    intensities: dict[str, dict[str, Optional[float]]] = {}
    for record in frame.to_dict(orient='records'):
        feature_id = record[id_column]
        if feature_id in intensities:
            raise DataIntegrityError(
                f"{Path(path).name}: duplicate feature identifier {feature_id!r}",
                feature_id=feature_id,
            )
        values = {}
        for sample in samples:
            value = _clean_value(record[sample])
            values[sample] = float(value) if value is not None else None
        intensities[feature_id] = values

    logger.info(
        f"Read intensities for {len(intensities)} features x {len(samples)} samples "
        f"from {Path(path).name}"
    )
    return intensities
