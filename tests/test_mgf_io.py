"""Tests for MGF writing and reading (pyteomics)."""

import numpy as np
import pytest

from fbmnexport.core import Polarity, PrecursorInfo, ScanMetadata, Spectrum
from fbmnexport.io import MgfReader, MgfWriter, read_mgf, write_mgf
from fbmnexport.io.writers import spectrum_to_mgf


@pytest.fixture
def detailed_spectrum():
    metadata = ScanMetadata(
        scan_number=12,
        ms_level=2,
        retention_time=605.25,
        polarity=Polarity.NEGATIVE,
        precursor=PrecursorInfo(mz=301.1412, charge=-1, intensity=2.5e5),
        native_id="sample_A.1234.1234",
        feature_id="FT0012",
        sample_name="sample_A.mzML",
    )
    return Spectrum.from_peaks([(80.5, 120.0), (150.25, 3400.0)], metadata)


class TestSpectrumToMgf:

    def test_fields(self, detailed_spectrum):
        record = spectrum_to_mgf(detailed_spectrum)
        params = record['params']
        assert params['title'] == "sample_A.1234.1234"
        assert params['feature_id'] == "FT0012"
        assert params['pepmass'] == (301.1412, 2.5e5)
        assert params['charge'] == -1
        assert params['scans'] == 12
        assert params['mslevel'] == 2
        assert params['ionmode'] == "Negative"
        np.testing.assert_array_equal(record['m/z array'], [80.5, 150.25])

    def test_unlinked_has_no_feature_field(self, spectrum_factory):
        record = spectrum_to_mgf(spectrum_factory(None, [(1.0, 1.0)], scan_number=4))
        assert 'feature_id' not in record['params']
        assert 'charge' not in record['params']
        assert record['params']['title'] == "scan=4"
        assert record['params']['pepmass'] == 150.1


class TestMgfRoundTrip:

    def test_write_then_read(self, tmp_path, detailed_spectrum, spectrum_factory):
        path = tmp_path / "spectra.mgf"
        empty = spectrum_factory("FT0013", [], scan_number=13, rt=20.0)
        assert write_mgf([detailed_spectrum, empty], path) == 2

        spectra = read_mgf(path)
        assert len(spectra) == 2

        first = spectra[0]
        assert first.feature_id == "FT0012"
        assert first.scan_number == 12
        assert first.ms_level == 2
        assert first.retention_time == pytest.approx(605.25)
        assert first.metadata.precursor.charge == -1
        assert first.precursor_mz == pytest.approx(301.1412)
        assert first.metadata.polarity is Polarity.NEGATIVE
        assert first.metadata.sample_name == "sample_A.mzML"
        np.testing.assert_allclose(first.mz, [80.5, 150.25])
        np.testing.assert_allclose(first.intensity, [120.0, 3400.0])

        assert spectra[1].is_empty
        assert spectra[1].feature_id == "FT0013"

    def test_file_layout(self, tmp_path, detailed_spectrum):
        path = tmp_path / "spectra.mgf"
        MgfWriter(path).write([detailed_spectrum])
        lines = path.read_text().splitlines()
        assert lines[0] == "BEGIN IONS"
        assert "SCANS=12" in lines
        assert "FEATURE_ID=FT0012" in lines
        assert lines[-1] == "END IONS" or lines[-2] == "END IONS"

    def test_output_order(self, tmp_path, linked_spectra):
        path = tmp_path / "spectra.mgf"
        write_mgf(linked_spectra, path)
        assert [s.scan_number for s in read_mgf(path)] == [11, 12, 13]

    def test_reader_length(self, tmp_path, linked_spectra):
        path = tmp_path / "spectra.mgf"
        write_mgf(linked_spectra, path)
        with MgfReader(path) as reader:
            assert len(reader) == 3
            assert [s.ms_level for s in reader] == [2, 2, 2]


class TestMgfErrors:

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            read_mgf(tmp_path / "missing.mgf")

    def test_wrong_extension(self, tmp_path):
        with pytest.raises(ValueError):
            MgfWriter(tmp_path / "spectra.txt")

    def test_missing_output_directory(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            MgfWriter(tmp_path / "missing" / "spectra.mgf")
