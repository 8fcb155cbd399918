from pathlib import Path
from enum import Enum, auto
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .base import ArtifactWriter

class ExportFormat(Enum):
    MGF = auto()       # spectra
    TSV = auto()       # feature tables
    UNKNOWN = auto()

# Extension to format mapping
FORMAT_EXTENSIONS: dict[str, ExportFormat] = {
    '.mgf': ExportFormat.MGF,
    '.tsv': ExportFormat.TSV,
    '.txt': ExportFormat.TSV,  # the networking service expects .txt tables
    '.tab': ExportFormat.TSV,
}

def detect_format(path: Path | str) -> ExportFormat:
    """Detect the export format from the file extension."""
    path = Path(path)
    return FORMAT_EXTENSIONS.get(path.suffix.lower(), ExportFormat.UNKNOWN)


class WriterRegistry:
    """Registry for artifact writers with format detection."""

    _writers: dict[ExportFormat, type['ArtifactWriter']] = {}

    @classmethod
    def register(cls, export_format: ExportFormat):
        """Decorator to register a writer class for a format."""
        def decorator(writer_class: type['ArtifactWriter']):
            cls._writers[export_format] = writer_class
            return writer_class
        return decorator

    @classmethod
    def get_writer(cls, path: Path | str, **kwargs) -> 'ArtifactWriter':
        """Get the writer for an output path, detected from its extension."""
        path = Path(path)
        export_format = detect_format(path)

        if export_format in cls._writers:
            return cls._writers[export_format](path, **kwargs)

        raise ValueError(
            f"No writer available for {path} (detected format: {export_format.name}). "
            f"Supported extensions: {sorted(FORMAT_EXTENSIONS)}"
        )

    @classmethod
    def list_available(cls) -> dict[str, str]:
        """List registered writers by format."""
        return {fmt.name: writer.__name__ for fmt, writer in cls._writers.items()}
