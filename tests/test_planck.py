import math

import pytest

from htradiance.planck import PLANCK_CONTINUE, PlanckDistribution
from htradiance.spectral import SUN_TEMPERATURE, blackbody_fraction


@pytest.fixture
def discrete():
    return PlanckDistribution((400.0, 800.0), 400, SUN_TEMPERATURE)


@pytest.fixture
def continuous():
    return PlanckDistribution((400.0, 800.0), PLANCK_CONTINUE, SUN_TEMPERATURE)


def test_discrete_cdf_is_monotonic_and_ends_at_one(discrete):
    cdf = discrete.cdf
    assert len(cdf) == 400
    assert all(b >= a for a, b in zip(cdf, cdf[1:]))
    assert cdf[-1] == 1.0


def test_discrete_pdf_is_normalized(discrete):
    assert math.fsum(discrete.pdf) == pytest.approx(1.0)


def test_discrete_band_length(discrete):
    assert discrete.band_len == pytest.approx(1.0)


def test_discrete_first_sample_is_range_start(discrete):
    wavelength, pdf = discrete.sample(0.0, 0.0)
    assert wavelength == pytest.approx(400.0)
    assert pdf == pytest.approx(discrete.pdf[0] / discrete.band_len)


@pytest.mark.parametrize("r0", [0.0, 0.1, 0.5, 0.9, 0.999999])
@pytest.mark.parametrize("r1", [0.0, 0.5, 0.99])
def test_discrete_samples_in_range(discrete, r0, r1):
    wavelength, pdf = discrete.sample(r0, r1)
    assert 400.0 <= wavelength < 800.0
    assert pdf > 0


def test_discrete_samples_increase_with_r0(discrete):
    samples = [discrete.sample(r, 0.5)[0] for r in (0.05, 0.25, 0.5, 0.75, 0.95)]
    assert samples == sorted(samples)


def test_continuous_degenerate_range():
    dist = PlanckDistribution((550.0, 550.0), PLANCK_CONTINUE, 300.0)
    assert dist.sample(0.3, 0.7) == (550.0, 1.0)


def test_continuous_sample_inverts_cumulative(continuous):
    wavelength, _ = continuous.sample(0.5, 0.0)
    total = blackbody_fraction(400e-9, 800e-9, SUN_TEMPERATURE)
    partial = blackbody_fraction(400e-9, wavelength * 1e-9, SUN_TEMPERATURE)
    assert partial / total == pytest.approx(0.5, abs=1e-3)


def test_continuous_samples_in_range_and_increasing(continuous):
    samples = [continuous.sample(r, 0.0)[0] for r in (0.0, 0.2, 0.4, 0.6, 0.8, 0.99)]
    assert all(400.0 <= s <= 800.0 for s in samples)
    assert samples == sorted(samples)


def test_continuous_pdf_order_of_uniform(continuous):
    _, pdf = continuous.sample(0.5, 0.0)
    assert 0.5 / 400.0 < pdf < 2.0 / 400.0


def test_continuous_agrees_with_discrete_median(continuous, discrete):
    wc, _ = continuous.sample(0.5, 0.0)
    wd, _ = discrete.sample(0.5, 0.5)
    assert wc == pytest.approx(wd, abs=1.0)


def test_invalid_temperature():
    with pytest.raises(ValueError):
        PlanckDistribution((400.0, 800.0), 10, 0.0)


def test_invalid_range():
    with pytest.raises(ValueError):
        PlanckDistribution((800.0, 400.0), 10, 300.0)


def test_invalid_canonical_numbers(discrete, continuous):
    with pytest.raises(ValueError):
        discrete.sample(1.0, 0.0)
    with pytest.raises(ValueError):
        discrete.sample(0.0, -0.1)
    with pytest.raises(ValueError):
        continuous.sample(1.5, 0.0)