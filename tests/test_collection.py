"""Tests for SpectrumCollection."""


from fbmnexport.core import SpectrumCollection


class TestSpectrumCollection:

    def test_keeps_input_order(self, linked_spectra):
        assert [s.scan_number for s in linked_spectra] == [11, 12, 13]
        assert linked_spectra[-1].scan_number == 13
        assert len(linked_spectra[0:2]) == 2

    def test_group_by_feature(self, linked_spectra, spectrum_factory):
        spectra = SpectrumCollection(list(linked_spectra) + [spectrum_factory(None, [(1.0, 1.0)])])
        groups = spectra.group_by_feature()
        assert list(groups) == ["FT001", "FT002"]
        assert [s.scan_number for s in groups["FT001"]] == [11, 13]
        assert spectra.feature_ids == ["FT001", "FT002"]

    def test_linked_and_unlinked(self, spectrum_factory):
        spectra = SpectrumCollection([
            spectrum_factory("f1", [(1.0, 1.0)]),
            spectrum_factory(None, [(1.0, 1.0)]),
        ])
        assert len(spectra.linked()) == 1
        assert len(spectra.unlinked()) == 1

    def test_filter(self, spectrum_factory):
        spectra = SpectrumCollection([
            spectrum_factory("f1", [(1.0, 1.0)], rt=5.0),
            spectrum_factory("f2", [(1.0, 1.0)], rt=50.0),
            spectrum_factory("f2", [(1.0, 1.0)], rt=50.0, ms_level=3),
        ])
        assert len(spectra.filter(ms_level=2)) == 2
        assert len(spectra.filter(feature_ids=["f2"])) == 2

    def test_clean(self, spectrum_factory):
        spectra = SpectrumCollection([spectrum_factory("f1", [(1.0, 0.0), (2.0, 1.0)])])
        assert spectra.clean()[0].n_points == 1
        assert spectra[0].n_points == 2

    def test_summary(self, linked_spectra):
        summary = linked_spectra.summary()
        assert summary['n_spectra'] == 3
        assert summary['n_features'] == 2
        assert summary['n_linked'] == 3
        assert summary['n_unlinked'] == 0
        assert summary['ms_level_counts'] == {2: 3}
