"""Wavelength sampling proportional to the CIE 1931 colour matching functions."""

from __future__ import annotations

import bisect
import logging
import math
from collections.abc import Callable, Sequence

__all__ = [
    "CIE_XYZ_RANGE_DEFAULT",
    "CieXyzDistribution",
    "fit_x_bar_1931",
    "fit_y_bar_1931",
    "fit_z_bar_1931",
]

logger = logging.getLogger(__name__)

# Wavelength boundaries of the CIE XYZ colour space in nanometers
CIE_XYZ_RANGE_DEFAULT = (380.0, 780.0)


# Analytic fits of the CIE 1931 x̄, ȳ and z̄ curves from Wyman, Sloan and
# Shirley, "Simple Analytic Approximations to the CIE XYZ Color Matching
# Functions", JCGT 2013.
def fit_x_bar_1931(wavelength: float) -> float:
    """Approximate CIE 1931 x̄ at a wavelength in nanometers."""
    a = (wavelength - 442.0) * (0.0624 if wavelength < 442.0 else 0.0374)
    b = (wavelength - 599.8) * (0.0264 if wavelength < 599.8 else 0.0323)
    c = (wavelength - 501.1) * (0.0490 if wavelength < 501.1 else 0.0382)
    return (
        0.362 * math.exp(-0.5 * a * a)
        + 1.056 * math.exp(-0.5 * b * b)
        - 0.065 * math.exp(-0.5 * c * c)
    )


def fit_y_bar_1931(wavelength: float) -> float:
    """Approximate CIE 1931 ȳ at a wavelength in nanometers."""
    a = (wavelength - 568.8) * (0.0213 if wavelength < 568.8 else 0.0247)
    b = (wavelength - 530.9) * (0.0613 if wavelength < 530.9 else 0.0322)
    return 0.821 * math.exp(-0.5 * a * a) + 0.286 * math.exp(-0.5 * b * b)


def fit_z_bar_1931(wavelength: float) -> float:
    """Approximate CIE 1931 z̄ at a wavelength in nanometers."""
    a = (wavelength - 437.0) * (0.0845 if wavelength < 437.0 else 0.0278)
    b = (wavelength - 459.0) * (0.0385 if wavelength < 459.0 else 0.0725)
    return 1.217 * math.exp(-0.5 * a * a) + 0.681 * math.exp(-0.5 * b * b)


def _trapezoidal_integration(
    lambda_lo: float, lambda_hi: float, f_bar: Callable[[float], float]
) -> float:
    n = int(lambda_hi - lambda_lo) + 1
    dlambda = (lambda_hi - lambda_lo) / n
    total = 0.0
    for i in range(n):
        f1 = f_bar(lambda_lo + dlambda * i)
        f2 = f_bar(lambda_lo + dlambda * (i + 1))
        total += (f1 + f2) * dlambda * 0.5
    return total


def _check_canonical(name: str, value: float) -> None:
    if not 0.0 <= value < 1.0:
        raise ValueError(f"{name} must lie in [0, 1[, got {value}")


class _Stimulus:
    """Discretised cumulative of one colour matching function."""

    __slots__ = ("f_bar", "cdf", "integral")

    def __init__(self, f_bar: Callable[[float], float], cdf: tuple[float, ...], integral: float):
        self.f_bar = f_bar
        self.cdf = cdf
        self.integral = integral


class CieXyzDistribution:
    """Wavelength distributions (nm) following the CIE X, Y and Z stimuli.

    The range, included in [380, 780] nanometers, is split into ``nbands``
    bands; a band is chosen from the cumulative of the stimulus and the
    wavelength is then drawn within it along the linearly interpolated curve.
    """

    def __init__(self, wavelength_range: Sequence[float], nbands: int) -> None:
        lo, hi = (float(x) for x in wavelength_range)
        if lo < CIE_XYZ_RANGE_DEFAULT[0] or hi > CIE_XYZ_RANGE_DEFAULT[1]:
            raise ValueError(
                f"wavelength range [{lo}, {hi}] must be included in "
                f"[{CIE_XYZ_RANGE_DEFAULT[0]:g}, {CIE_XYZ_RANGE_DEFAULT[1]:g}] nanometers"
            )
        if not lo < hi:
            raise ValueError(f"invalid wavelength range [{lo}, {hi}]")
        if nbands <= 0:
            raise ValueError(f"number of bands must be positive, got {nbands}")

        self._range = (lo, hi)
        self._nbands = int(nbands)
        self._band_len = (hi - lo) / self._nbands
        self._x = self._setup(fit_x_bar_1931)
        self._y = self._setup(fit_y_bar_1931)
        self._z = self._setup(fit_z_bar_1931)

        logger.info("CIE XYZ spectral interval defined on [%g, %g] nanometers.", lo, hi)

    def _setup(self, f_bar: Callable[[float], float]) -> _Stimulus:
        lo, hi = self._range
        weights = []
        for i in range(self._nbands):
            band_lo = lo + i * self._band_len
            band_hi = min(band_lo + self._band_len, hi)
            weights.append(_trapezoidal_integration(band_lo, band_hi, f_bar))
        total = sum(weights)
        cdf = []
        acc = 0.0
        for w in weights:
            acc += w / total
            cdf.append(acc)
        cdf[-1] = 1.0  # Handle numerical issue
        return _Stimulus(f_bar, tuple(cdf), total)

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
    def cdf_x(self) -> tuple[float, ...]:
        return self._x.cdf

    @property
    def cdf_y(self) -> tuple[float, ...]:
        return self._y.cdf

    @property
    def cdf_z(self) -> tuple[float, ...]:
        return self._z.cdf

    def sample_x(self, r0: float, r1: float) -> tuple[float, float]:
        """Return a wavelength in nm sampled along x̄, and its pdf in nm⁻¹."""
        return self._sample(self._x, r0, r1)

    def sample_y(self, r0: float, r1: float) -> tuple[float, float]:
        """Return a wavelength in nm sampled along ȳ, and its pdf in nm⁻¹."""
        return self._sample(self._y, r0, r1)

    def sample_z(self, r0: float, r1: float) -> tuple[float, float]:
        """Return a wavelength in nm sampled along z̄, and its pdf in nm⁻¹."""
        return self._sample(self._z, r0, r1)

    def _sample(self, stimulus: _Stimulus, r0: float, r1: float) -> tuple[float, float]:
        _check_canonical("r0", r0)
        _check_canonical("r1", r1)

        # First band whose cumulative is strictly greater than r0
        iband = bisect.bisect_right(stimulus.cdf, r0)
        band = self._band_len
        lambda_min = self._range[0] + band * iband
        lambda_max = lambda_min + band

        f_min = stimulus.f_bar(lambda_min)
        f_max = stimulus.f_bar(lambda_max)

        # Invert the integral of the linearly interpolated curve over the band
        a = 0.5 * (f_max - f_min) / band
        b = (lambda_max * f_min - lambda_min * f_max) / band
        c = -lambda_min * f_min + lambda_min * lambda_min * a
        d = 0.5 * (f_max + f_min) * band

        roots: tuple[float, ...]
        if a == 0.0:
            roots = ((d * r1 - c) / b,) if b != 0.0 else ()
        else:
            delta = b * b - 4 * a * (c - d * r1)
            if delta < 0 and abs(delta) <= 1e-6:
                delta = 0.0
            if delta >= 0:
                sqrt_delta = math.sqrt(delta)
                roots = ((-b - sqrt_delta) / (2 * a), (-b + sqrt_delta) / (2 * a))
            else:
                roots = ()

        for root in roots:
            if lambda_min <= root < lambda_max:
                return root, 1.0 / stimulus.integral

        logger.warning(
            "cannot sample a wavelength in [%g, %g[. The possible wavelengths were %s.",
            lambda_min,
            lambda_max,
            ", ".join(f"{r:g}" for r in roots) or "none",
        )
        return (lambda_min + lambda_max) * 0.5, 1.0 / stimulus.integral