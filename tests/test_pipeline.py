"""Tests for the end-to-end export."""

import logging

import pytest

from fbmnexport.core import Feature, FeatureSet, SpectrumCollection
from fbmnexport.errors import DataIntegrityError
from fbmnexport.export import ExportOptions, run_export
from fbmnexport.io import read_mgf


def _table_ids(path):
    return [line.split("\t")[0] for line in path.read_text().splitlines()[1:]]


class TestRunExport:

    def test_artifacts(self, tmp_path, three_features, three_intensities, linked_spectra):
        result = run_export(three_features, three_intensities, linked_spectra, tmp_path / "out")

        assert sorted(p.name for p in (tmp_path / "out").iterdir()) == [
            "ms2spectra_all.mgf",
            "ms2spectra_maxTic.mgf",
            "xcms_all.txt",
            "xcms_onlyMS2.txt",
        ]
        assert result.n_features == 3
        assert result.n_ms2_features == 2
        assert result.n_spectra == 3
        assert result.n_representatives == 2

        assert _table_ids(result.paths['full_table']) == ["FT001", "FT002", "FT003"]
        assert _table_ids(result.paths['ms2_table']) == ["FT001", "FT002"]

    def test_representatives_use_feature_scans(
        self, tmp_path, three_features, three_intensities, linked_spectra
    ):
        result = run_export(three_features, three_intensities, linked_spectra, tmp_path)

        representatives = read_mgf(result.paths['representative_spectra'])
        assert [s.feature_id for s in representatives] == ["FT001", "FT002"]
        assert [s.scan_number for s in representatives] == [1, 2]
        # FT001: the second scan (TIC 50) beats the first (TIC 8)
        assert representatives[0].total_intensity == pytest.approx(50.0)
        assert representatives[0].metadata.native_id == "scan=13"

        all_spectra = read_mgf(result.paths['all_spectra'])
        assert [s.scan_number for s in all_spectra] == [1, 2, 1]

    def test_acquisition_scans_kept(
        self, tmp_path, three_features, three_intensities, linked_spectra
    ):
        options = ExportOptions(gnps_scans=False)
        result = run_export(three_features, three_intensities, linked_spectra, tmp_path, options)
        all_spectra = read_mgf(result.paths['all_spectra'])
        assert [s.scan_number for s in all_spectra] == [11, 12, 13]

    def test_cleaning_and_ms_level(
        self, tmp_path, three_features, three_intensities, spectrum_factory, caplog
    ):
        spectra = SpectrumCollection([
            spectrum_factory("FT001", [(100.0, 0.0), (101.0, 3.0)], scan_number=1),
            spectrum_factory("FT002", [(100.0, 9.0)], scan_number=2, ms_level=3),
        ])
        with caplog.at_level(logging.WARNING):
            result = run_export(three_features, three_intensities, spectra, tmp_path)

        assert "MS level" in caplog.text
        all_spectra = read_mgf(result.paths['all_spectra'])
        assert len(all_spectra) == 1
        assert all_spectra[0].n_points == 1
        assert _table_ids(result.paths['ms2_table']) == ["FT001"]

    def test_linking(self, tmp_path, three_features, three_intensities, spectrum_factory):
        spectra = SpectrumCollection([
            spectrum_factory(None, [(100.0, 1.0)], scan_number=5, rt=52.0, precursor_mz=330.2),
            spectrum_factory(None, [(100.0, 1.0)], scan_number=6, rt=90.0, precursor_mz=330.2),
        ])
        options = ExportOptions(link_spectra=True, keep_unlinked=True)
        result = run_export(three_features, three_intensities, spectra, tmp_path, options)

        assert _table_ids(result.paths['ms2_table']) == ["FT003"]
        all_spectra = read_mgf(result.paths['all_spectra'])
        assert [s.feature_id for s in all_spectra] == ["FT003", None]
        assert [s.scan_number for s in all_spectra] == [3, 6]
        assert result.n_representatives == 1

    def test_custom_names(self, tmp_path, three_features, three_intensities, linked_spectra):
        options = ExportOptions(full_table_name="features.tsv", id_column="feature_id")
        result = run_export(three_features, three_intensities, linked_spectra, tmp_path, options)
        assert result.paths['full_table'].name == "features.tsv"
        header = result.paths['full_table'].read_text().splitlines()[0]
        assert header.startswith("feature_id\t")

    def test_unknown_feature_writes_nothing(
        self, tmp_path, three_features, three_intensities, spectrum_factory
    ):
        spectra = [spectrum_factory("FT999", [(100.0, 1.0)])]
        out = tmp_path / "out"
        with pytest.raises(DataIntegrityError):
            run_export(three_features, three_intensities, spectra, out)
        assert not out.exists()

    def test_missing_intensity_entry(self, tmp_path, three_features, linked_spectra):
        with pytest.raises(DataIntegrityError):
            run_export(three_features, {"FT001": {"s1": 1.0}}, linked_spectra, tmp_path)

    def test_no_spectra(self, tmp_path, three_features, three_intensities):
        result = run_export(three_features, three_intensities, SpectrumCollection(), tmp_path)
        assert result.n_features == 3
        assert result.n_ms2_features == 0
        assert result.n_representatives == 0
        assert _table_ids(result.paths['ms2_table']) == []

    def test_empty_inputs(self, tmp_path):
        result = run_export(FeatureSet(), {}, SpectrumCollection(), tmp_path)

        header = result.paths['full_table'].read_text().splitlines()
        assert header == [result.paths['ms2_table'].read_text().splitlines()[0]]
        assert header[0].startswith("Row.names\tmzmed\t")
        assert _table_ids(result.paths['ms2_table']) == []
        assert result.n_features == 0
        assert result.n_spectra == 0
        assert result.n_representatives == 0
        assert len(read_mgf(result.paths['all_spectra'])) == 0
        assert len(read_mgf(result.paths['representative_spectra'])) == 0

    def test_shared_trailing_digits(self, tmp_path, spectrum_factory, caplog):
        features = FeatureSet([
            Feature("M150T30", 150.0, 149.9, 150.1, 30.0, 25.0, 35.0),
            Feature("M200T30", 200.0, 199.9, 200.1, 30.0, 25.0, 35.0),
        ])
        intensities = {"M150T30": {"s1": 10.0}, "M200T30": {"s1": 20.0}}
        spectra = SpectrumCollection([
            spectrum_factory("M200T30", [(100.0, 4.0)], scan_number=7),
            spectrum_factory("M150T30", [(100.0, 2.0)], scan_number=9),
        ])
        with caplog.at_level(logging.WARNING):
            result = run_export(features, intensities, spectra, tmp_path)

        assert "by position" in caplog.text
        all_spectra = read_mgf(result.paths['all_spectra'])
        assert [s.feature_id for s in all_spectra] == ["M200T30", "M150T30"]
        assert [s.scan_number for s in all_spectra] == [2, 1]
        assert _table_ids(result.paths['ms2_table']) == ["M150T30", "M200T30"]

    def test_shared_trailing_digits_strict(self, tmp_path, spectrum_factory):
        features = FeatureSet([
            Feature("M150T30", 150.0, 149.9, 150.1, 30.0, 25.0, 35.0),
            Feature("M200T30", 200.0, 199.9, 200.1, 30.0, 25.0, 35.0),
        ])
        intensities = {"M150T30": {}, "M200T30": {}}
        spectra = [spectrum_factory("M150T30", [(100.0, 2.0)])]
        out = tmp_path / "out"
        with pytest.raises(DataIntegrityError):
            run_export(features, intensities, spectra, out, ExportOptions(strict_scans=True))
        assert not out.exists()

    def test_tab_in_sample_name_writes_nothing(self, tmp_path, three_features, linked_spectra):
        intensities = {"FT001": {"s\t1": 1.0}, "FT002": {}, "FT003": {}}
        out = tmp_path / "out"
        with pytest.raises(ValueError):
            run_export(three_features, intensities, linked_spectra, out)
        assert not out.exists()
