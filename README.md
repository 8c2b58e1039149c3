# htradiance

Building blocks for Monte Carlo radiative transfer rendering, in pure Python
with no runtime dependencies.

## What is inside

- `htradiance.spectral`: blackbody radiometry.
  - `planck(lambda_min, lambda_max, temperature)` gives the Planck radiance in
    W/m²/sr/m. Wavelengths are in metres. The radiance is monochromatic when
    both bounds are equal. Otherwise it is averaged over the interval.
  - `planck_monochromatic`, `planck_interval`, `blackbody_fraction` and
    `wiebelt` are the underlying functions.
  - `brightness_temperature(lambda_min, lambda_max, radiance)` inverts an
    averaged radiance to a temperature. It raises
    `BrightnessTemperatureError` if the search does not converge.
  - `radiance_temperature(lambda_min, lambda_max, radiance)` does the same for
    an integrated radiance. It returns `0.0` and logs a warning when no
    temperature is found.
  - `wavenumber_to_wavelength` and `wavelength_to_wavenumber` convert between
    cm⁻¹ and nm.
  - The module also provides the `SpectralType` enum (`LW`, `SW`,
    `SW_CIE_XYZ`), `SUN_TEMPERATURE` and `DEFAULT_LW_REF_TEMPERATURE`.
- Wavelength distributions for importance sampling. Wavelengths are in
  nanometres. Each `sample` method takes two canonical numbers in `[0, 1)` and
  returns a `(wavelength, pdf)` tuple, with the pdf in nm⁻¹.
  - `htradiance.planck.PlanckDistribution(wavelength_range, nbands, ref_temperature)`.
    When `nbands` is `0` (`PLANCK_CONTINUE`), the distribution is sampled
    continuously by bisection. Otherwise it uses `nbands` bands.
  - `htradiance.cie_xyz.CieXyzDistribution(wavelength_range, nbands)` follows
    the CIE 1931 colour matching functions. The range must lie within
    380–780 nm. It provides `sample_x`, `sample_y` and `sample_z`. The
    analytic fits are available as `fit_x_bar_1931`, `fit_y_bar_1931` and
    `fit_z_bar_1931`.
  - `htradiance.discrete.DiscreteDistribution(samples)` is built from
    `(wavelength, radiance)` pairs, given in strictly increasing wavelength
    order.
- Geometry.
  - `htradiance.rectangle.Rectangle(size, position, target, up)` is an
    oriented rectangle in 3D. It offers:
    - `sample_pos`, `world_to_local` and `local_to_world`;
    - the properties `normal`, `center`, `size`, `transform` and
      `transform_inverse`.
  - `htradiance.slab.trace_ray(origin, direction, ray_range, cell_low, cell_upp, trace_cell, max_steps)`
    traverses a cell repeated infinitely along X and Y. It calls
    `trace_cell(origin_in_cell, direction, ray_range)` for each traversed
    cell. It returns `True` as soon as that callback reports a hit.
- Work distribution.
  - `htradiance.work.ProcWork` is a thread-safe queue of chunk indices. It
    provides `add_chunk`, `get_chunk` (which returns `None` when the queue is
    exhausted), `reset` and `len()`.
  - `htradiance.solve_buffer.solve_buffer(solve_item, nitems, nrealisations=1, context=None, nthreads=None, seed=0)`
    solves a one-dimensional buffer across threads and returns the item
    values in order.
    - Items are grouped in chunks of `CHUNK_SIZE` (32).
    - Each chunk gets its own random generator, derived from `seed` and the
      chunk index. Results therefore do not depend on the number of threads.
    - `solve_item` receives a `SolveItemArgs` with the fields `rng`,
      `item_id`, `nrealisations`, `ithread` and `context`.
    - `chunk_count(nitems)` gives the number of chunks.

## Installation

```
pip install htradiance
```

## Examples

```python
from htradiance.spectral import planck, brightness_temperature

# Mean radiance over [500, 600] nm at 5778 K, in W/m²/sr/m
radiance = planck(500e-9, 600e-9, 5778.0)
print(brightness_temperature(500e-9, 600e-9, radiance))  # ~5778 K
```

```python
from htradiance.planck import PlanckDistribution

dist = PlanckDistribution((380.0, 780.0), 400, 5778.0)
wavelength, pdf = dist.sample(0.42, 0.17)   # nanometres, nm⁻¹
```

```python
from htradiance.solve_buffer import solve_buffer

def solve_item(args):
    total = sum(args.rng.random() for _ in range(args.nrealisations))
    return total / args.nrealisations

values = solve_buffer(solve_item, nitems=100, nrealisations=4, nthreads=4, seed=0)
```

## What it does not do

This is a library of components. It does not provide a complete renderer.

- There is no command-line program.
- There is no atmosphere, ground or scene loading.
- There is no camera or image writing.
- Work is shared between threads of one process only. Chunks are not
  distributed or stolen across separate processes or machines.

## Running the tests

```
pip install -e .[test]
pytest
```