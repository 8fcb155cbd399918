"""
GNPS scan numbering.

The feature-based molecular networking service joins MGF records to rows
of the feature table through the ``SCANS`` field, which must hold the
integer form of the feature identifier ("FT0012" -> 12).
"""

import logging
import re
from collections.abc import Iterable
from typing import Optional

from ..core import FeatureSet, Spectrum, SpectrumCollection
from ..errors import DataIntegrityError


logger = logging.getLogger(__name__)

_TRAILING_DIGITS = re.compile(r'(\d+)$')


def feature_scan_number(feature_id: str, position: Optional[int] = None) -> int:
    """
    Integer scan number for a feature identifier.

    Args:
        feature_id: Feature identifier, e.g. "FT0012".
        position: 0-based position of the feature in export order, used
            when the identifier has no trailing digits.

    Returns:
        The trailing digits as an integer, or ``position + 1``.

    Raises:
        ValueError: If the identifier has no trailing digits and no
            position is given, or the digits are zero.
    """
    match = _TRAILING_DIGITS.search(feature_id)
    if match:
        number = int(match.group(1))
        if number < 1:
            raise ValueError(f"Feature {feature_id!r} maps to scan number {number}")
        return number
    if position is None:
        raise ValueError(f"Feature {feature_id!r} has no numeric part")
    return position + 1


def feature_scan_numbers(features: FeatureSet, strict: bool = False) -> dict[str, int]:
    """
    Scan numbers for all features.

    Each feature gets the trailing digits of its identifier. When that
    numbering is not one-to-one (two identifiers share their digits, or an
    identifier without digits lands on another's number) every feature is
    numbered by its 1-based position instead, so SCANS stays unique.

    Args:
        features: Features in export order.
        strict: Raise instead of falling back to positional numbering.

    Raises:
        DataIntegrityError: In strict mode, if two features map to the same
            number or an identifier maps to zero.
    """
    numbers: dict[str, int] = {}
    owners: dict[int, str] = {}
    for position, feature_id in enumerate(features.ids):
        try:
            number = feature_scan_number(feature_id, position)
        except ValueError as exc:
            if strict:
                raise DataIntegrityError(str(exc), feature_id=feature_id) from exc
            break
        if number in owners:
            if strict:
                raise DataIntegrityError(
                    f"Features {owners[number]!r} and {feature_id!r} both map to "
                    f"scan number {number}",
                    feature_id=feature_id,
                )
            break
        owners[number] = feature_id
        numbers[feature_id] = number
    else:
        return numbers

    logger.warning(
        f"Feature identifiers do not give unique scan numbers; numbering "
        f"{len(features)} features by position"
    )
    return {feature_id: position + 1 for position, feature_id in enumerate(features.ids)}


def format_for_gnps(
    spectra: Iterable[Spectrum],
    features: FeatureSet,
    strict: bool = False,
) -> SpectrumCollection:
    """
    Set each linked spectrum's scan number to its feature's number.

    The acquisition scan number survives in the native id ("scan=N") when
    the spectrum has none. Unlinked spectra keep their acquisition scan
    number.

    Args:
        spectra: Spectra to renumber.
        features: Feature set the spectra are linked to.
        strict: Raise on ambiguous scan numbers instead of numbering by
            position.

    Returns:
        New SpectrumCollection, input order preserved.

    Raises:
        DataIntegrityError: If a spectrum references an unknown feature, or
            in strict mode if feature scan numbers are ambiguous.
    """
    numbers = feature_scan_numbers(features, strict=strict)
    formatted = []
    for spectrum in spectra:
        feature_id = spectrum.feature_id
        if feature_id is None:
            formatted.append(spectrum)
            continue
        if feature_id not in numbers:
            raise DataIntegrityError(
                f"Spectrum (scan {spectrum.scan_number}) references unknown "
                f"feature {feature_id!r}",
                feature_id=feature_id,
            )
        formatted.append(spectrum.evolve(
            scan_number=numbers[feature_id],
            native_id=spectrum.metadata.native_id or f"scan={spectrum.scan_number}",
        ))
    logger.debug(f"Assigned GNPS scan numbers to {len(formatted)} spectra")
    return SpectrumCollection(formatted)
