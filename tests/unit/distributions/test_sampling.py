from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import numpy as np
import pytest

from binormal import ArraySample, BiNormal, Sample, SamplingMethod
from binormal.distributions.sampling import as_1d_array

N_DRAWS = 200_000


class TestArraySample:
    def test_requires_single_column(self) -> None:
        with pytest.raises(ValueError, match=r"shape \(n, 1\)"):
            ArraySample(np.zeros(3))
        with pytest.raises(ValueError, match=r"shape \(n, 1\)"):
            ArraySample(np.zeros((3, 2)))

    def test_from_values(self) -> None:
        sample = ArraySample.from_values([1.0, 2.5, -3.0])

        assert isinstance(sample, Sample)
        assert sample.shape == (3, 1)
        assert len(sample) == 3
        assert list(sample) == [1.0, 2.5, -3.0]
        assert sample.array.dtype == np.float64

    def test_as_1d_array_accepts_samples_and_array_likes(self) -> None:
        expected = np.array([1.0, 2.0, 3.0])

        np.testing.assert_array_equal(as_1d_array(ArraySample.from_values(expected)), expected)
        np.testing.assert_array_equal(as_1d_array([1, 2, 3]), expected)
        np.testing.assert_array_equal(as_1d_array(expected.reshape(-1, 1)), expected)
        np.testing.assert_array_equal(as_1d_array(4.0), np.array([4.0]))
        assert as_1d_array([]).shape == (0,)

    @pytest.mark.parametrize(
        "values, message",
        [
            ([1.0, np.nan], "non-finite"),
            ([1.0, np.inf], "non-finite"),
            (np.zeros((4, 2)), "univariate"),
        ],
    )
    def test_as_1d_array_rejects_invalid_input(self, values, message: str) -> None:
        with pytest.raises(ValueError, match=message):
            as_1d_array(values)


class TestRandomVariates:
    def test_single_draw_is_a_float(self, bimodal: BiNormal, rng: np.random.Generator) -> None:
        assert isinstance(bimodal.rvs(rng), float)
        assert isinstance(bimodal.rvs(rng, method="mixture"), float)

    def test_seeded_draws_are_reproducible(self, bimodal: BiNormal) -> None:
        a = bimodal.rvs(np.random.default_rng(11), 50)
        b = bimodal.rvs(11, 50)
        np.testing.assert_array_equal(a, b)

    def test_weighted_sum_moments(self, bimodal: BiNormal, rng: np.random.Generator) -> None:
        draws = bimodal.rvs(rng, N_DRAWS)
        lam, _, s1, _, s2 = bimodal.params()

        assert draws.shape == (N_DRAWS,)
        assert np.mean(draws) == pytest.approx(bimodal.mean(), abs=0.01)
        # a weighted sum of independent Gaussians is Gaussian
        assert np.var(draws) == pytest.approx(lam**2 * s1**2 + (1 - lam) ** 2 * s2**2, rel=0.02)

    def test_equal_means_weighted_sum_mean(self, rng: np.random.Generator) -> None:
        d = BiNormal(0.6, 1.5, 1.0, 1.5, 2.0)
        draws = d.rvs(rng, N_DRAWS)
        assert np.mean(draws) == pytest.approx(1.5, abs=0.01)

    def test_mixture_draws_follow_the_density(
        self, bimodal: BiNormal, rng: np.random.Generator
    ) -> None:
        draws = bimodal.rvs(rng, N_DRAWS, method=SamplingMethod.MIXTURE)

        assert np.mean(draws) == pytest.approx(bimodal.mean(), abs=0.03)
        assert np.std(draws) == pytest.approx(bimodal.std(), rel=0.01)
        # share of draws from the left component
        assert np.mean(draws < 0.5) == pytest.approx(0.7, abs=0.01)

    def test_unknown_method(self, bimodal: BiNormal, rng: np.random.Generator) -> None:
        with pytest.raises(ValueError):
            bimodal.rvs(rng, 10, method="inverse")

    @pytest.mark.parametrize("method", list(SamplingMethod))
    def test_sample_container(
        self, bimodal: BiNormal, rng: np.random.Generator, method: SamplingMethod
    ) -> None:
        sample = bimodal.sample(1000, rng, method=method)

        assert isinstance(sample, ArraySample)
        assert sample.shape == (1000, 1)
        assert np.isfinite(sample.array).all()
