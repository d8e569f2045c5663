"""
Tests for the diagnostic distance-to-agreement.

DTA is not the gamma index: it only looks at points of (almost) equal
dose and ignores the dose criterion. test_gamma.py checks that the two
evaluations disagree on the reference scenario.
"""

import numpy as np
import pytest

from pygamma1d import (DoseProfile, resample, distance_to_agreement,
                       NO_MATCH_DISTANCE, InvalidConfiguration)


@pytest.fixture(scope="module")
def fine_reference(low_pair):
    _, ref = low_pair
    return resample(ref, 0.001)


class TestDistanceToAgreement:

    def test_isolated_spike_has_no_match(self):
        x = np.linspace(0.0, 4.0, 5)
        ref = DoseProfile(positions=x, doses=np.ones(5))
        test = DoseProfile(positions=x, doses=np.array([1.0, 1.0, 5.0, 1.0, 1.0]))

        dta = distance_to_agreement(test, resample(ref, 0.01))

        assert dta[2] == NO_MATCH_DISTANCE == 10.0
        assert np.all(dta[[0, 1, 3, 4]] <= 0.011)

    def test_nearest_matching_position(self):
        ref = DoseProfile(positions=np.array([0.0, 10.0]), doses=np.array([0.0, 10.0]))
        test = DoseProfile(positions=np.array([2.0]), doses=np.array([5.0]))
        r = resample(ref, 0.5)
        dta = distance_to_agreement(test, r, match_tolerance=0.01)
        assert dta[0] == pytest.approx(3.0)

    def test_identical_profiles_agree_locally(self, low_pair, fine_reference):
        _, ref = low_pair
        dta = distance_to_agreement(ref, fine_reference)
        # the last sample lies outside the resampled grid
        assert np.all(dta[:-1] <= 0.01)

    def test_shifted_profile_dta_near_shift_in_penumbra(self, low_pair, fine_reference):
        test, _ = low_pair
        dta = distance_to_agreement(test, fine_reference)
        edge = np.argmin(np.abs(test.positions - 5.0))
        assert 0.1 < dta[edge] < 0.4

    def test_sorted_and_scan_are_identical(self, low_pair, fine_reference):
        test, _ = low_pair
        scan = distance_to_agreement(test, fine_reference, method="scan")
        fast = distance_to_agreement(test, fine_reference, method="sorted")
        np.testing.assert_array_equal(scan, fast)
        assert np.any(scan == NO_MATCH_DISTANCE)

    @pytest.mark.parametrize("tol", [0.0, -1e-3, float("nan")])
    def test_invalid_tolerance(self, low_pair, fine_reference, tol):
        test, _ = low_pair
        with pytest.raises(InvalidConfiguration):
            distance_to_agreement(test, fine_reference, tol)

    def test_unknown_method(self, low_pair, fine_reference):
        test, _ = low_pair
        with pytest.raises(InvalidConfiguration):
            distance_to_agreement(test, fine_reference, method="kdtree")
