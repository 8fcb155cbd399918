"""Tests for representative spectrum selection."""

import pytest

from fbmnexport.core import SpectrumCollection
from fbmnexport.export import (
    RepresentativeSpectrumSelector,
    max_by_score,
    select_representative_spectra,
)


class TestRepresentativeSpectrumSelector:

    def test_highest_tic_per_feature(self, spectrum_factory):
        first = spectrum_factory("f1", [(100.0, 5.0), (101.0, 3.0)])
        second = spectrum_factory("f1", [(100.0, 50.0)])
        empty = spectrum_factory("f2", [])

        selected = RepresentativeSpectrumSelector().select([first, second, empty])

        assert len(selected) == 2
        assert selected[0] is second
        assert selected[1] is empty
        assert selected[1].total_intensity == 0.0

    def test_ties_keep_first(self, spectrum_factory):
        a = spectrum_factory("f1", [(100.0, 10.0)], scan_number=1)
        b = spectrum_factory("f1", [(200.0, 10.0)], scan_number=2)
        assert select_representative_spectra([a, b])[0] is a
        assert select_representative_spectra([b, a])[0] is b

    def test_selected_is_maximum_of_group(self, linked_spectra):
        groups = linked_spectra.group_by_feature()
        for spectrum in select_representative_spectra(linked_spectra):
            group = groups[spectrum.feature_id]
            assert all(spectrum.total_intensity >= other.total_intensity for other in group)

    def test_one_per_feature_in_first_seen_order(self, linked_spectra):
        selected = select_representative_spectra(linked_spectra)
        assert [s.feature_id for s in selected] == ["FT001", "FT002"]
        assert selected[0].scan_number == 13

    def test_repeated_runs_agree(self, linked_spectra):
        first = select_representative_spectra(linked_spectra)
        second = select_representative_spectra(linked_spectra)
        assert [s.scan_number for s in first] == [s.scan_number for s in second]
        again = select_representative_spectra(first)
        assert [s.scan_number for s in again] == [s.scan_number for s in first]

    def test_unlinked_spectra_excluded(self, spectrum_factory):
        spectra = SpectrumCollection([
            spectrum_factory(None, [(100.0, 1000.0)]),
            spectrum_factory("f1", [(100.0, 1.0)]),
        ])
        selected = select_representative_spectra(spectra)
        assert [s.feature_id for s in selected] == ["f1"]

    def test_empty_input(self):
        assert len(select_representative_spectra([])) == 0

    def test_custom_score(self, spectrum_factory):
        few = spectrum_factory("f1", [(100.0, 100.0)])
        many = spectrum_factory("f1", [(100.0, 1.0), (101.0, 1.0)])
        selector = RepresentativeSpectrumSelector(score=lambda s: s.n_points)
        assert selector.select([few, many])[0] is many


class TestMaxByScore:

    def test_empty_group(self):
        with pytest.raises(ValueError):
            max_by_score([])
