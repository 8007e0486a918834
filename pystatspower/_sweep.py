"""Evaluate :func:`compute` over one- and two-dimensional grids.

Power curves and surfaces (e.g. implied effect size over a grid of sample
size and power) go through the same evaluator and solver as single
calculations, so every point agrees with what :func:`compute` reports for
it.  Failed points are ``NaN``.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pystatspower._common import CORE_FIELDS, DEFAULT_CONFIG, EngineConfig, PowerParameters
from pystatspower._engine import compute


def _check_axis(name: str, unknown: str) -> None:
    if name not in PowerParameters.__dataclass_fields__:
        raise ValueError(f"unknown parameter {name!r}")
    if name == "test":
        raise ValueError("the test family cannot be swept")
    if name == unknown:
        raise ValueError(f"cannot sweep the unknown field {unknown!r}")


def sweep(
    params: PowerParameters,
    unknown: str,
    axis: str,
    values: ArrayLike,
    *,
    config: EngineConfig = DEFAULT_CONFIG,
) -> NDArray[np.floating]:
    """Solve for *unknown* at each value of *axis*.

    Parameters
    ----------
    params : PowerParameters
        Base parameters; *axis* is overwritten point by point.
    unknown : str
        Core field to solve for.
    axis : str
        Field to vary (core or nuisance).
    values : array_like
        1-D grid of values for *axis*.

    Returns
    -------
    ndarray
        Same length as *values*; ``NaN`` where no value exists.
    """
    if unknown not in CORE_FIELDS:
        raise ValueError(f"unknown must be one of {CORE_FIELDS}, got {unknown!r}")
    _check_axis(axis, unknown)

    grid = np.asarray(values, dtype=np.float64).ravel()
    out = np.full(grid.shape, np.nan)
    for i, x in enumerate(grid):
        result = compute(params.with_value(axis, x.item()), unknown, config=config)
        if result.ok:
            out[i] = result.value
    return out


def surface(
    params: PowerParameters,
    unknown: str,
    x_axis: str,
    x_values: ArrayLike,
    y_axis: str,
    y_values: ArrayLike,
    *,
    config: EngineConfig = DEFAULT_CONFIG,
) -> NDArray[np.floating]:
    """Solve for *unknown* over the grid ``y_values x x_values``.

    Returns
    -------
    ndarray
        Shape ``(len(y_values), len(x_values))``: row ``i`` holds
        ``sweep`` along *x_axis* with *y_axis* fixed at ``y_values[i]``.
    """
    if x_axis == y_axis:
        raise ValueError("x_axis and y_axis must differ")
    _check_axis(y_axis, unknown)

    ys = np.asarray(y_values, dtype=np.float64).ravel()
    rows = [
        sweep(params.with_value(y_axis, y.item()), unknown, x_axis, x_values, config=config)
        for y in ys
    ]
    return np.vstack(rows) if rows else np.empty((0, np.size(x_values)))
