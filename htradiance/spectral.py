"""Blackbody radiation helpers and brightness temperature inversion."""

from __future__ import annotations

import enum
import logging
import math

__all__ = [
    "SUN_TEMPERATURE",
    "DEFAULT_LW_REF_TEMPERATURE",
    "SpectralType",
    "BrightnessTemperatureError",
    "wavenumber_to_wavelength",
    "wavelength_to_wavenumber",
    "wiebelt",
    "blackbody_fraction",
    "planck_monochromatic",
    "planck_interval",
    "planck",
    "brightness_temperature",
    "radiance_temperature",
]

logger = logging.getLogger(__name__)

SUN_TEMPERATURE = 5778.0  # K
DEFAULT_LW_REF_TEMPERATURE = 290.0  # K

_C2 = 1.43877735e-2  # m.K
_LIGHT_SPEED = 299792458.0  # m/s
_PLANCK_CONSTANT = 6.62607015e-34  # J.s
_BOLTZMANN_CONSTANT = 1.380649e-23  # J/K
_STEFAN_BOLTZMANN = 5.6696e-8  # W/m²/K⁴
_FIFTEEN_OVER_PI4 = 15.0 / math.pi**4

_MAX_ITER = 100


class SpectralType(enum.Enum):
    """Kind of spectral domain being integrated."""

    LW = "lw"  # Longwave
    SW = "sw"  # Shortwave
    SW_CIE_XYZ = "sw_cie_xyz"  # Shortwave wrt the CIE XYZ tristimulus


class BrightnessTemperatureError(ArithmeticError):
    """The brightness temperature search did not converge."""


def wavenumber_to_wavelength(nu: float) -> float:
    """Convert a wavenumber in cm⁻¹ to a wavelength in nanometers."""
    return 1.0e7 / nu


def wavelength_to_wavenumber(wavelength: float) -> float:
    """Convert a wavelength in nanometers to a wavenumber in cm⁻¹."""
    return wavenumber_to_wavelength(wavelength)


def wiebelt(v: float) -> float:
    """Fraction of blackbody emission beyond the reduced frequency ``v``."""
    if v >= 2.0:
        w = sum(
            math.exp(-m * v) / m**4 * (((m * v + 3) * m * v + 6) * m * v + 6)
            for m in range(1, 6)
        )
        return w * _FIFTEEN_OVER_PI4
    v2 = v * v
    v4 = v2 * v2
    w = (
        1.0 / 3.0
        - v / 8.0
        + v2 / 60.0
        - v4 / 5040.0
        + v4 * v2 / 272160.0
        - v4 * v4 / 13305600.0
    )
    return 1.0 - _FIFTEEN_OVER_PI4 * v2 * v * w


def blackbody_fraction(lambda0: float, lambda1: float, temperature: float) -> float:
    """Fraction of blackbody emission in [lambda0, lambda1] (meters, Kelvin)."""
    v0 = _C2 / lambda0 / temperature
    v1 = _C2 / lambda1 / temperature
    return wiebelt(v1) - wiebelt(v0)


def planck_monochromatic(wavelength: float, temperature: float) -> float:
    """Planck radiance in W/m²/sr/m at a wavelength in meters."""
    if temperature <= 0:
        raise ValueError(f"temperature must be positive, got {temperature}")
    c = _LIGHT_SPEED
    h = _PLANCK_CONSTANT
    k = _BOLTZMANN_CONSTANT
    lambda5 = wavelength**5
    try:
        denom = math.expm1(h * c / (wavelength * k * temperature))
    except OverflowError:
        return 0.0
    return (2.0 * h * c * c / lambda5) / denom


def planck_interval(lambda_min: float, lambda_max: float, temperature: float) -> float:
    """Average Planck radiance in W/m²/sr/m over [lambda_min, lambda_max]."""
    if not lambda_min < lambda_max:
        raise ValueError(f"invalid interval [{lambda_min}, {lambda_max}]")
    if temperature <= 0:
        raise ValueError(f"temperature must be positive, got {temperature}")
    t4 = temperature**4
    return (
        blackbody_fraction(lambda_min, lambda_max, temperature)
        * _STEFAN_BOLTZMANN
        * t4
        / (math.pi * (lambda_max - lambda_min))
    )


def planck(lambda_min: float, lambda_max: float, temperature: float) -> float:
    """Monochromatic or interval-averaged Planck radiance in W/m²/sr/m."""
    if lambda_min > lambda_max:
        raise ValueError(f"invalid interval [{lambda_min}, {lambda_max}]")
    if lambda_min == lambda_max:
        return planck_monochromatic(lambda_min, temperature)
    return planck_interval(lambda_min, lambda_max, temperature)


def brightness_temperature(lambda_min: float, lambda_max: float, radiance: float) -> float:
    """Temperature whose Planck radiance over the interval matches ``radiance``.

    Wavelengths are in meters and the radiance, averaged over the interval,
    in W/m²/sr/m. Raises BrightnessTemperatureError if the search fails.
    """
    if lambda_min > lambda_max:
        raise ValueError(f"invalid interval [{lambda_min}, {lambda_max}]")
    epsilon_t = 1e-4
    epsilon_b = radiance * 1e-8

    t2 = 200.0
    for _ in range(_MAX_ITER):
        if planck(lambda_min, lambda_max, t2) >= radiance:
            break
        t2 *= 2
    else:
        raise _search_error(lambda_min, lambda_max, radiance)

    t0 = t1 = b0 = 0.0
    for _ in range(_MAX_ITER):
        t = (t1 + t2) * 0.5
        b = planck(lambda_min, lambda_max, t)
        if b < radiance:
            t1 = t
        else:
            t2 = t
        if abs(t - t0) < epsilon_t or abs(b - b0) < epsilon_b:
            return t
        t0 = t
        b0 = b
    raise _search_error(lambda_min, lambda_max, radiance)


def _search_error(lambda_min: float, lambda_max: float, radiance: float) -> BrightnessTemperatureError:
    return BrightnessTemperatureError(
        f"could not compute the brightness temperature for the estimated "
        f"radiance {radiance:g} averaged over [{lambda_min * 1e9:g}, "
        f"{lambda_max * 1e9:g}] nanometers"
    )


def radiance_temperature(lambda_min: float, lambda_max: float, radiance: float) -> float:
    """Brightness temperature of a radiance integrated over the interval.

    The radiance is in W/m²/sr (W/m²/sr/m when monochromatic). Returns 0 when
    no temperature can be found.
    """
    if radiance < 0:
        raise ValueError(f"radiance must be non negative, got {radiance}")
    radiance_avg = radiance
    if lambda_min != lambda_max:
        radiance_avg /= lambda_max - lambda_min
    try:
        return brightness_temperature(lambda_min, lambda_max, radiance_avg)
    except BrightnessTemperatureError:
        logger.warning(
            "Could not compute the brightness temperature for the radiance %g.",
            radiance_avg,
        )
        return 0.0