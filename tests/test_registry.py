"""Tests for writer selection by output extension."""

import pytest

from fbmnexport.io import ExportFormat, MgfWriter, TsvWriter, WriterRegistry, detect_format


class TestDetectFormat:

    @pytest.mark.parametrize("name,expected", [
        ("ms2spectra_all.mgf", ExportFormat.MGF),
        ("SPECTRA.MGF", ExportFormat.MGF),
        ("xcms_all.txt", ExportFormat.TSV),
        ("table.tsv", ExportFormat.TSV),
        ("table.csv", ExportFormat.UNKNOWN),
    ])
    def test_extensions(self, name, expected):
        assert detect_format(name) is expected


class TestWriterRegistry:

    def test_writers_registered(self):
        available = WriterRegistry.list_available()
        assert available["MGF"] == "MgfWriter"
        assert available["TSV"] == "TsvWriter"

    def test_get_writer(self, tmp_path):
        assert isinstance(WriterRegistry.get_writer(tmp_path / "a.mgf"), MgfWriter)
        writer = WriterRegistry.get_writer(tmp_path / "a.txt", na_rep="-")
        assert isinstance(writer, TsvWriter)
        assert writer.na_rep == "-"

    def test_unknown_extension(self, tmp_path):
        with pytest.raises(ValueError):
            WriterRegistry.get_writer(tmp_path / "a.csv")
