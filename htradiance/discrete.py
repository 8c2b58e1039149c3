"""Wavelength sampling from a tabulated radiance spectrum."""

from __future__ import annotations

import bisect
import logging
import math
from collections.abc import Iterable

__all__ = ["DiscreteDistribution"]

logger = logging.getLogger(__name__)


def _check_canonical(name: str, value: float) -> None:
    if not 0.0 <= value < 1.0:
        raise ValueError(f"{name} must lie in [0, 1[, got {value}")


class DiscreteDistribution:
    """Distribution of wavelengths (nm) following a tabulated radiance spectrum.

    ``samples`` holds (wavelength in nm, radiance in W/m²/sr/m) pairs sorted by
    strictly increasing wavelength. Consecutive pairs define bands whose
    probability is the trapezoidal integral of the radiance over the band; the
    wavelength is then drawn uniformly within the sampled band. With a single
    pair, that wavelength is always returned.
    """

    def __init__(self, samples: Iterable[tuple[float, float]]) -> None:
        pairs = [(float(w), float(L)) for w, L in samples]
        if not pairs:
            raise ValueError("at least one wavelength is required")

        wavelengths = tuple(w for w, _ in pairs)
        radiances = tuple(L for _, L in pairs)
        if any(w1 <= w0 for w0, w1 in zip(wavelengths, wavelengths[1:])):
            raise ValueError(
                "failed to calculate discrete radiance distribution probabilities: "
                "wavelengths are not sorted in ascending order"
            )

        self._wavelengths = wavelengths
        self._radiances = radiances
        self._range = (wavelengths[0], wavelengths[-1])
        self._nbands = len(pairs) - 1
        self._proba: tuple[float, ...] = ()
        self._cumul: tuple[float, ...] = ()

        if self._nbands:
            self._setup_distribution()

    def _setup_distribution(self) -> None:
        areas = [
            (L0 + L1) * (w1 - w0) * 0.5
            for (w0, L0), (w1, L1) in zip(
                zip(self._wavelengths, self._radiances),
                zip(self._wavelengths[1:], self._radiances[1:]),
            )
        ]
        total = math.fsum(areas)
        logger.info("Discrete radiance integral = %g W/m²/sr", total)
        if not total > 0:
            raise ValueError("the integral of the radiance spectrum must be positive")

        proba = [a / total for a in areas]
        cumul = []
        acc = 0.0
        for p in proba:
            acc += p
            cumul.append(acc)
        cumul[-1] = 1.0  # Fix numerical imprecision
        self._proba = tuple(proba)
        self._cumul = tuple(cumul)

    @property
    def wavelengths(self) -> tuple[float, ...]:
        return self._wavelengths

    @property
    def radiances(self) -> tuple[float, ...]:
        return self._radiances

    @property
    def range(self) -> tuple[float, float]:
        """Boundaries of the spectral interval in nm."""
        return self._range

    @property
    def nbands(self) -> int:
        return self._nbands

    @property
    def proba(self) -> tuple[float, ...]:
        """Normalized probability of each band."""
        return self._proba

    @property
    def cumul(self) -> tuple[float, ...]:
        """Cumulative probability of the bands; the last entry is 1."""
        return self._cumul

    def sample(self, r0: float, r1: float) -> tuple[float, float]:
        """Return a sampled wavelength in nm and its pdf in nm⁻¹."""
        _check_canonical("r0", r0)
        _check_canonical("r1", r1)

        if self._nbands == 0:
            return self._wavelengths[0], 1.0

        # First band whose cumulative is strictly greater than r0
        iband = bisect.bisect_right(self._cumul, r0)
        w0 = self._wavelengths[iband]
        w1 = self._wavelengths[iband + 1]
        wavelength = w0 + r1 * (w1 - w0)
        pdf = self._proba[iband] / (w1 - w0)
        return wavelength, pdf