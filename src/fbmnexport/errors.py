"""Exceptions raised by the export pipeline."""

from typing import Optional


class DataIntegrityError(ValueError):
    """
    A feature identifier could not be resolved against the feature set.

    Raised when the intensity mapping or a spectrum references a feature
    that does not exist, when a feature has no intensity entry at all, or
    when identifiers collide. The export is aborted: silently dropping the
    offending record would corrupt downstream analyses.

    Attributes:
        feature_id: The offending feature identifier (None if not specific
            to one identifier).
    """

    def __init__(self, message: str, feature_id: Optional[str] = None):
        super().__init__(message)
        self.feature_id = feature_id
