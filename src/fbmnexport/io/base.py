from abc import ABC, abstractmethod
from collections.abc import Iterator
from pathlib import Path
from typing import Any, ClassVar

from ..core import Spectrum, SpectrumCollection


def validate_input_path(path: Path | str, supported_extensions: list[str], kind: str) -> Path:
    """
    Validate that an input file exists and has a supported extension.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the extension is not supported.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")

    suffix = path.suffix.lower()
    if suffix not in supported_extensions:
        raise ValueError(
            f"Unsupported extension {suffix} for {kind} input. "
            f"Expected: {supported_extensions}"
        )
    return path


class SpectrumReader(ABC):
    """
    Abstract base class for spectrum file readers.

    All spectral input formats must implement this interface.
    """

    # Class-level attributes
    format_name: ClassVar[str]  # e.g., "MGF"
    supported_extensions: ClassVar[list[str]]  # e.g., [".mgf"]

    def __init__(self, path: Path | str):
        self.path = Path(path)
        self._validate_path()

    def _validate_path(self) -> None:
        """Validate file exists and has correct extension."""
        validate_input_path(self.path, self.supported_extensions, self.format_name)

    @classmethod
    @abstractmethod
    def is_available(cls) -> bool:
        """
        Check if this reader's dependencies are available.

        Returns False if required libraries are not installed.
        """
        ...

    @abstractmethod
    def __enter__(self) -> 'SpectrumReader':
        ...

    @abstractmethod
    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        ...

    @abstractmethod
    def __iter__(self) -> Iterator[Spectrum]:
        """Iterate over all spectra in the file."""
        ...

    @abstractmethod
    def __len__(self) -> int:
        """Total number of spectra."""
        ...

    def to_collection(self) -> SpectrumCollection:
        """
        Load all spectra into a SpectrumCollection, in file order.

        The reader must be open.
        """
        return SpectrumCollection(list(self))

    @property
    def total_spectra(self) -> int:
        """Alias for __len__."""
        return len(self)


class ArtifactWriter(ABC):
    """
    Abstract base class for export artifact writers.

    A writer owns one output path and writes one artifact to it, replacing
    any existing file. Write errors propagate unchanged.
    """

    format_name: ClassVar[str]
    supported_extensions: ClassVar[list[str]]

    def __init__(self, path: Path | str):
        self.path = Path(path)
        self._validate_path()

    def _validate_path(self) -> None:
        """Validate the extension and that the parent directory exists."""
        suffix = self.path.suffix.lower()
        if suffix not in self.supported_extensions:
            raise ValueError(
                f"Unsupported extension {suffix} for {self.format_name} writer. "
                f"Expected: {self.supported_extensions}"
            )
        if not self.path.parent.exists():
            raise FileNotFoundError(f"Output directory not found: {self.path.parent}")

    @abstractmethod
    def write(self, data: Any) -> int:
        """
        Write the artifact.

        Returns:
            Number of records (rows or spectra) written.
        """
        ...
