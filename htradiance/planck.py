"""Wavelength sampling proportional to the Planck function."""

from __future__ import annotations

import bisect
import logging
import math
from collections.abc import Sequence

from .spectral import blackbody_fraction, planck

__all__ = ["PLANCK_CONTINUE", "PlanckDistribution"]

logger = logging.getLogger(__name__)

# Number of bands meaning "no discretisation": sample the distribution exactly.
PLANCK_CONTINUE = 0

_MAX_ITER = 100
_EPSILON_LAMBDA_M = 1e-15
_EPSILON_BF = 1e-6


def _check_canonical(name: str, value: float) -> None:
    if not 0.0 <= value < 1.0:
        raise ValueError(f"{name} must lie in [0, 1[, got {value}")


class PlanckDistribution:
    """Distribution of wavelengths (nm) following a blackbody at a reference temperature.

    With ``nbands`` set to 0 the distribution is sampled continuously by
    inversion; otherwise the range is split into ``nbands`` bands sampled
    with a cumulative and then uniformly within the band.
    """

    def __init__(self, wavelength_range: Sequence[float], nbands: int, ref_temperature: float) -> None:
        lo, hi = (float(x) for x in wavelength_range)
        if ref_temperature <= 0:
            raise ValueError(f"reference temperature must be positive, got {ref_temperature}")
        if lo > hi:
            raise ValueError(f"invalid wavelength range [{lo}, {hi}]")
        if nbands < 0:
            raise ValueError(f"number of bands must be non negative, got {nbands}")

        self._range = (lo, hi)
        self._nbands = int(nbands)
        self._ref_temperature = float(ref_temperature)
        self._pdf: tuple[float, ...] = ()
        self._cdf: tuple[float, ...] = ()

        if self._nbands == PLANCK_CONTINUE:
            self._band_len = 0.0
        else:
            self._band_len = (hi - lo) / self._nbands
            self._setup_cdf()

        logger.info("Spectral interval defined on [%g, %g] nanometers.", lo, hi)

    @property
    def range(self) -> tuple[float, float]:
        return self._range

    @property
    def nbands(self) -> int:
        return self._nbands

    @property
    def band_len(self) -> float:
        return self._band_len

    @property
    def ref_temperature(self) -> float:
        return self._ref_temperature

    @property
    def pdf(self) -> tuple[float, ...]:
        """Normalized probability of each band."""
        return self._pdf

    @property
    def cdf(self) -> tuple[float, ...]:
        """Cumulative probability of the bands; the last entry is 1."""
        return self._cdf

    def _setup_cdf(self) -> None:
        logger.info("Number of bands used to speed up Planck distribution: %d", self._nbands)
        lo, hi = self._range
        weights = []
        for i in range(self._nbands):
            band_lo = lo + i * self._band_len
            band_hi = min(band_lo + self._band_len, hi)
            weights.append(
                blackbody_fraction(band_lo * 1e-9, band_hi * 1e-9, self._ref_temperature)
            )
        total = math.fsum(weights)
        if not total > 0:
            raise ValueError(
                f"cannot build a Planck distribution over [{lo}, {hi}] nanometers"
            )
        pdf = [w / total for w in weights]
        cdf = []
        acc = 0.0
        for p in pdf:
            acc += p
            cdf.append(acc)
        cdf[-1] = 1.0  # Handle numerical issue
        self._pdf = tuple(pdf)
        self._cdf = tuple(cdf)

    def sample(self, r0: float, r1: float) -> tuple[float, float]:
        """Return a sampled wavelength in nm and its pdf in nm⁻¹."""
        if self._nbands != PLANCK_CONTINUE:
            return self._sample_discrete(r0, r1)
        lo, hi = self._range
        if math.isclose(lo, hi, rel_tol=0.0, abs_tol=1e-6):
            return lo, 1.0
        return self._sample_continue(r0)

    def _sample_discrete(self, r0: float, r1: float) -> tuple[float, float]:
        _check_canonical("r0", r0)
        _check_canonical("r1", r1)
        # First band whose cumulative is strictly greater than r0
        iband = bisect.bisect_right(self._cdf, r0)
        band_lo = self._range[0] + iband * self._band_len
        band_hi = band_lo + self._band_len
        wavelength = band_lo + (band_hi - band_lo) * r1
        pdf = self._pdf[iband] / (band_hi - band_lo)
        return wavelength, pdf

    def _sample_continue(self, r: float) -> tuple[float, float]:
        _check_canonical("r0", r)
        temperature = self._ref_temperature
        range_m = (self._range[0] * 1e-9, self._range[1] * 1e-9)

        lambda_m_min, lambda_m_max = range_m
        bf_min_max = blackbody_fraction(range_m[0], range_m[1], temperature)

        lambda_m = lambda_m_prev = 0.0
        bf_prev = 0.0
        for _ in range(_MAX_ITER):
            lambda_m = (lambda_m_min + lambda_m_max) * 0.5
            bf = blackbody_fraction(range_m[0], lambda_m, temperature)
            if bf / bf_min_max < r:
                lambda_m_min = lambda_m
            else:
                lambda_m_max = lambda_m
            if abs(lambda_m_prev - lambda_m) < _EPSILON_LAMBDA_M or abs(bf_prev - bf) < _EPSILON_BF:
                break
            lambda_m_prev = lambda_m
            bf_prev = bf
        else:
            logger.warning(
                "could not sample a wavelength in the range [%g, %g] nanometers "
                "for the reference temperature %g Kelvin.",
                self._range[0],
                self._range[1],
                temperature,
            )

        b_lambda = planck(lambda_m, lambda_m, temperature)
        b_mean = planck(range_m[0], range_m[1], temperature)
        pdf = b_lambda / (b_mean * (range_m[1] - range_m[0])) * 1e-9
        return lambda_m * 1e9, pdf