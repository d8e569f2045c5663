import numpy as np
import pytest

from pygamma1d import (DoseProfile, ResampledProfile, resample,
                       InvalidConfiguration, DegenerateProfile)


class TestResample:

    @pytest.mark.parametrize("step", [0.001, 0.01, 0.3, 1.0])
    def test_positions_start_increase_and_stay_in_domain(self, low_pair, step):
        _, ref = low_pair
        r = resample(ref, step)

        assert isinstance(r, ResampledProfile)
        assert r.step == step
        assert r.positions[0] == ref.positions[0]
        assert r.doses[0] == ref.doses[0]
        assert np.all(np.diff(r.positions) > 0)
        assert r.positions[-1] <= ref.positions[-1]

    def test_last_original_sample_is_dropped(self, low_pair):
        """The grid stops at the first position >= last - step."""
        _, ref = low_pair
        r = resample(ref, 0.01)
        last = ref.positions[-1]
        assert r.positions[-1] < last
        assert r.positions[-1] >= last - 0.01
        assert r.positions[-2] < last - 0.01

    def test_step_accumulates(self, ramp_profile):
        r = resample(ramp_profile, 0.1)
        expected = [0.0]
        xp = 0.0
        while True:
            xp += 0.1
            expected.append(xp)
            if not xp < 4.0 - 0.1:
                break
        np.testing.assert_array_equal(r.positions, expected)

    def test_linear_interpolation(self):
        profile = DoseProfile(positions=np.array([0.0, 1.0, 3.0]),
                              doses=np.array([0.0, 2.0, 0.0]))
        r = resample(profile, 0.5)
        np.testing.assert_allclose(r.positions, [0.0, 0.5, 1.0, 1.5, 2.0, 2.5])
        np.testing.assert_allclose(r.doses, [0.0, 1.0, 2.0, 1.5, 1.0, 0.5])

    def test_step_larger_than_domain(self):
        profile = DoseProfile(positions=np.array([0.0, 1.0]), doses=np.array([1.0, 2.0]))
        r = resample(profile, 5.0)
        np.testing.assert_array_equal(r.positions, [0.0])

    def test_original_profile_untouched(self, low_pair):
        _, ref = low_pair
        before = ref.doses.copy()
        resample(ref, 0.01)
        np.testing.assert_array_equal(ref.doses, before)

    @pytest.mark.parametrize("step", [0.0, -0.01, float("nan"), float("inf")])
    def test_invalid_step(self, ramp_profile, step):
        with pytest.raises(InvalidConfiguration):
            resample(ramp_profile, step)

    def test_step_too_small_to_advance(self):
        profile = DoseProfile(positions=np.array([1e16, 1e16 + 4.0]), doses=np.array([1.0, 1.0]))
        with pytest.raises(InvalidConfiguration):
            resample(profile, 1e-3)

    def test_single_sample_is_degenerate(self):
        profile = DoseProfile(positions=np.array([0.0]), doses=np.array([1.0]))
        with pytest.raises(DegenerateProfile):
            resample(profile, 0.1)
