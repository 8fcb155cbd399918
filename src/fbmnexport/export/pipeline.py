"""
End-to-end export for feature-based molecular networking.

run_export() turns the consolidated results of the upstream processing
stage into the four artifacts the networking service consumes:

- the full feature table (one row per feature);
- the MS2-only feature table (features with at least one spectrum);
- all MS2 spectra as MGF;
- one representative (highest total intensity) spectrum per feature as MGF.

All transformations happen in memory; files are only touched by the
writers at the end.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from ..core import Feature, FeatureSet, SampleIntensities, SpectrumCollection, PEAK_INDEX_COLUMN
from ..io import WriterRegistry
from .filtering import ExportFilter
from .gnps import format_for_gnps
from .linking import link_spectra_to_features
from .selection import RepresentativeSpectrumSelector
from .table import DEFAULT_ID_COLUMN, FeatureTableBuilder


logger = logging.getLogger(__name__)


@dataclass
class ExportOptions:
    """Options for the export pipeline."""

    # Output file names (extension selects the writer)
    full_table_name: str = 'xcms_all.txt'
    ms2_table_name: str = 'xcms_onlyMS2.txt'
    all_spectra_name: str = 'ms2spectra_all.mgf'
    representative_spectra_name: str = 'ms2spectra_maxTic.mgf'

    # Table layout
    id_column: str = DEFAULT_ID_COLUMN
    na_rep: str = 'NA'
    exclude_columns: tuple[str, ...] = (PEAK_INDEX_COLUMN,)
    samples: Optional[list[str]] = None  # None = first-seen order

    # Spectra
    clean_spectra: bool = True  # drop zero-intensity peaks
    ms_level: Optional[int] = 2  # None = keep all levels
    gnps_scans: bool = True  # SCANS = numeric part of the feature id
    strict_scans: bool = False  # raise instead of numbering features by position

    # Linking by precursor m/z and retention time
    link_spectra: bool = False
    mz_tolerance_ppm: float = 10.0
    rt_tolerance: float = 0.0  # seconds
    keep_unlinked: bool = False

    def output_paths(self, output_dir: Path | str) -> dict[str, Path]:
        """Artifact paths keyed by artifact name."""
        output_dir = Path(output_dir)
        return {
            'full_table': output_dir / self.full_table_name,
            'ms2_table': output_dir / self.ms2_table_name,
            'all_spectra': output_dir / self.all_spectra_name,
            'representative_spectra': output_dir / self.representative_spectra_name,
        }


@dataclass
class ExportResult:
    """Result of an export run."""
    output_dir: Path
    paths: dict[str, Path] = field(default_factory=dict)
    n_features: int = 0
    n_ms2_features: int = 0
    n_spectra: int = 0
    n_representatives: int = 0

    def __repr__(self) -> str:
        return (
            f"ExportResult({self.n_ms2_features}/{self.n_features} features with MS2, "
            f"{self.n_spectra} spectra, {self.n_representatives} representatives)"
        )


def prepare_spectra(
    spectra: SpectrumCollection,
    features: FeatureSet,
    options: ExportOptions,
) -> SpectrumCollection:
    """
    Apply the spectrum-side steps: MS level filter, cleaning, linking.

    Returns:
        New SpectrumCollection, input order preserved.
    """
    if options.ms_level is not None:
        kept = spectra.filter(ms_level=options.ms_level)
        n_dropped = len(spectra) - len(kept)
        if n_dropped:
            logger.warning(
                f"Dropped {n_dropped} spectra with MS level other than {options.ms_level}"
            )
        spectra = kept

    if options.clean_spectra:
        spectra = spectra.clean()

    if options.link_spectra:
        spectra = link_spectra_to_features(
            spectra,
            features,
            mz_tolerance_ppm=options.mz_tolerance_ppm,
            rt_tolerance=options.rt_tolerance,
            keep_unlinked=options.keep_unlinked,
        )
    return spectra


def run_export(
    features: FeatureSet | list[Feature],
    intensities: SampleIntensities,
    spectra: SpectrumCollection,
    output_dir: Path | str,
    options: Optional[ExportOptions] = None,
) -> ExportResult:
    """
    Build, filter and write all export artifacts.

    Args:
        features: Feature metadata, in export order.
        intensities: feature_id -> sample -> peak area.
        spectra: MS2 spectra, linked through their feature identifier
            (or linked here when ``options.link_spectra`` is set).
        output_dir: Directory for the artifacts; created if missing.
        options: Export options (defaults if None).

    Returns:
        ExportResult with artifact paths and counts.

    Raises:
        DataIntegrityError: If identifiers do not resolve between the
            inputs. Nothing is written in that case.
        ValueError: If column names collide or a file name has an
            unsupported extension.
    """
    options = options or ExportOptions()
    if not isinstance(features, FeatureSet):
        features = FeatureSet(features)
    if not isinstance(spectra, SpectrumCollection):
        spectra = SpectrumCollection(spectra)

    logger.info(
        f"Exporting {len(features)} features and {len(spectra)} spectra"
    )

    builder = FeatureTableBuilder(
        id_column=options.id_column,
        samples=options.samples,
        exclude_columns=options.exclude_columns,
    )
    full_table = builder.build(features, intensities)

    spectra = prepare_spectra(spectra, features, options)

    # unlinked spectra stay in the full MGF but never reach a table row
    ms2_table = ExportFilter(full_table).filter_table(spectra)

    if options.gnps_scans:
        spectra = format_for_gnps(spectra, features, strict=options.strict_scans)

    representatives = RepresentativeSpectrumSelector().select(spectra)

    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    paths = options.output_paths(output_dir)

    writers = {
        'full_table': WriterRegistry.get_writer(paths['full_table'], na_rep=options.na_rep),
        'ms2_table': WriterRegistry.get_writer(paths['ms2_table'], na_rep=options.na_rep),
        'all_spectra': WriterRegistry.get_writer(paths['all_spectra']),
        'representative_spectra': WriterRegistry.get_writer(paths['representative_spectra']),
    }
    writers['full_table'].write(full_table)
    writers['ms2_table'].write(ms2_table)
    n_spectra = writers['all_spectra'].write(spectra)
    n_representatives = writers['representative_spectra'].write(representatives)

    result = ExportResult(
        output_dir=output_dir,
        paths=paths,
        n_features=len(full_table),
        n_ms2_features=len(ms2_table),
        n_spectra=n_spectra,
        n_representatives=n_representatives,
    )
    logger.info(f"Export complete: {result}")
    return result
