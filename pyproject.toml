[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "htradiance"
version = "0.11.0"
description = "Spectral sampling, blackbody radiometry and multithreaded Monte Carlo buffer solving for radiative transfer rendering"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "radiative transfer",
    "monte carlo",
    "planck",
    "blackbody",
    "cie xyz",
    "spectral sampling",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Physics",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["htradiance"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.mypy]
python_version = "3.10"
