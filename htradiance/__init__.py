"""Blackbody radiometry, wavelength sampling, slab and rectangle geometry, and threaded buffer solving."""

__version__ = "0.11.0"