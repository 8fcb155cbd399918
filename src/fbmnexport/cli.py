"""
Command-line entry point: export xcms-style results for molecular networking.
"""

import argparse
import logging
import sys
from typing import Optional

from .errors import DataIntegrityError
from .export import ExportOptions, run_export
from .io import read_feature_definitions, read_feature_values, read_mgf


logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="fbmnexport",
        description="Export feature tables and MS2 spectra for feature-based molecular networking",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Export spectra that already carry FEATURE_ID
  fbmnexport --features definitions.txt --values values.txt --spectra ms2.mgf -o export/

  # Link spectra to features by precursor m/z and retention time
  fbmnexport --features definitions.txt --values values.txt --spectra ms2.mgf \\
      -o export/ --link --ppm 10 --rt-tol 5
        """
    )

    parser.add_argument(
        "--features",
        type=str,
        required=True,
        help="Tab-separated feature definitions (mzmed, mzmin, mzmax, rtmed, rtmin, rtmax, ...)"
    )

    parser.add_argument(
        "--values",
        type=str,
        required=True,
        help="Tab-separated per-sample intensities, one row per feature"
    )

    parser.add_argument(
        "--spectra",
        type=str,
        required=True,
        help="MS2 spectra in MGF format"
    )

    parser.add_argument(
        "-o", "--output",
        type=str,
        required=True,
        help="Output directory for the exported files"
    )

    parser.add_argument(
        "--id-column",
        type=str,
        default=ExportOptions.id_column,
        help=f"Identifier column name in the exported tables (default: {ExportOptions.id_column})"
    )

    parser.add_argument(
        "--ms-level",
        type=int,
        default=ExportOptions.ms_level,
        help=f"MS level of the exported spectra (default: {ExportOptions.ms_level})"
    )

    parser.add_argument(
        "--no-clean",
        action="store_true",
        help="Keep zero-intensity peaks"
    )

    parser.add_argument(
        "--no-gnps-scans",
        action="store_true",
        help="Keep acquisition scan numbers instead of numeric feature identifiers"
    )

    parser.add_argument(
        "--strict-scans",
        action="store_true",
        help="Fail when feature identifiers do not give unique scan numbers"
    )

    parser.add_argument(
        "--link",
        action="store_true",
        help="Link spectra to features by precursor m/z and retention time"
    )

    parser.add_argument(
        "--ppm",
        type=float,
        default=ExportOptions.mz_tolerance_ppm,
        help=f"m/z tolerance for linking in ppm (default: {ExportOptions.mz_tolerance_ppm})"
    )

    parser.add_argument(
        "--rt-tol",
        type=float,
        default=ExportOptions.rt_tolerance,
        help=f"Retention time tolerance for linking in seconds (default: {ExportOptions.rt_tolerance})"
    )

    parser.add_argument(
        "--keep-unlinked",
        action="store_true",
        help="Keep spectra that match no feature in the full MGF export"
    )

    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log debug messages"
    )
    verbosity.add_argument(
        "-q", "--quiet",
        action="store_true",
        help="Only log warnings and errors"
    )

    return parser


def options_from_args(args: argparse.Namespace) -> ExportOptions:
    """Map parsed arguments onto ExportOptions."""
    return ExportOptions(
        id_column=args.id_column,
        ms_level=args.ms_level,
        clean_spectra=not args.no_clean,
        gnps_scans=not args.no_gnps_scans,
        strict_scans=args.strict_scans,
        link_spectra=args.link,
        mz_tolerance_ppm=args.ppm,
        rt_tolerance=args.rt_tol,
        keep_unlinked=args.keep_unlinked,
    )


def main(argv: Optional[list[str]] = None) -> int:
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)

    if args.verbose:
        level = logging.DEBUG
    elif args.quiet:
        level = logging.WARNING
    else:
        level = logging.INFO
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

    try:
        features = read_feature_definitions(args.features)
        intensities = read_feature_values(args.values)
        spectra = read_mgf(args.spectra)
        result = run_export(
            features,
            intensities,
            spectra,
            args.output,
            options=options_from_args(args),
        )
    except DataIntegrityError as e:
        logger.error(f"Data integrity error: {e}")
        return 1
    except (FileNotFoundError, ValueError) as e:
        logger.error(f"Error: {e}")
        return 1

    for name, path in result.paths.items():
        logger.info(f"{name}: {path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
