"""
Tab-separated feature table writer using pandas.

Tables are written without quoting or index, with a configurable marker
(default ``NA``) for missing values.
"""

import csv
import logging
from pathlib import Path
from typing import ClassVar, TYPE_CHECKING

from ..base import ArtifactWriter
from ..registry import ExportFormat, WriterRegistry

if TYPE_CHECKING:
    from ...export.table import ExportTable


logger = logging.getLogger(__name__)


@WriterRegistry.register(ExportFormat.TSV)
class TsvWriter(ArtifactWriter):
    """
    Writer for feature table exports.

    Example:
        >>> TsvWriter("xcms_all.txt").write(table)
        120
    """

    format_name: ClassVar[str] = "TSV"
    supported_extensions: ClassVar[list[str]] = ['.tsv', '.txt', '.tab']

    def __init__(self, path: Path | str, na_rep: str = 'NA'):
        """
        Initialize the table writer.

        Args:
            path: Output path; an existing file is replaced.
            na_rep: Representation of missing values.
        """
        super().__init__(path)
        self.na_rep = na_rep

    def write(self, data: 'ExportTable') -> int:
        """
        Write the table: header row, then one row per feature.

        Returns:
            Number of data rows written.
        """
        frame = data.to_frame()
        frame.to_csv(
            self.path,
            sep='\t',
            index=False,
            na_rep=self.na_rep,
            quoting=csv.QUOTE_NONE,
        )
        logger.info(f"Wrote {len(frame)} rows x {len(frame.columns)} columns to {self.path.name}")
        return len(frame)


def write_table(table: 'ExportTable', path: Path | str, na_rep: str = 'NA') -> int:
    """
    Convenience function to write an export table.

    Returns:
        Number of data rows written.
    """
    return TsvWriter(path, na_rep=na_rep).write(table)
