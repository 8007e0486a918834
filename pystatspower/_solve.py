"""Bracketed root finding against the power evaluator.

Achieved power increases with sample size, effect size and significance
level, so every search looks for the smallest value of the unknown whose
power reaches the target.
"""

from __future__ import annotations

import math
from collections.abc import Callable

from scipy.optimize import brentq

from pystatspower._common import DEFAULT_CONFIG, EngineConfig, NoSolutionInRangeError


class _TargetReached(Exception):
    """Raised inside the objective to stop Brent's method early."""

    def __init__(self, x: float) -> None:
        super().__init__(x)
        self.x = x


def _solve_parameter(
    func: Callable[[float], float],
    target: float,
    bracket: tuple[float, float],
    *,
    name: str,
    config: EngineConfig = DEFAULT_CONFIG,
) -> float:
    """Solve ``func(x) == target`` for increasing *func* via Brent's method.

    Parameters
    ----------
    func : callable
        Monotonically increasing function of one variable (power as f(x)).
    target : float
        Target power.
    bracket : tuple
        ``(lower, upper)`` search interval.
    name : str
        Name of the unknown, for error messages.

    Returns
    -------
    float
        *lower* when it already reaches the target; otherwise the root,
        or the first iterate whose power is within
        ``config.power_tolerance`` of the target.

    Raises
    ------
    NoSolutionInRangeError
        If *upper* does not reach the target, or Brent's method fails to
        converge within ``config.max_iterations``.
    """
    lo, hi = bracket
    f_lo = func(lo)
    if f_lo >= target:
        return lo
    f_hi = func(hi)
    if f_hi < target:
        raise NoSolutionInRangeError(
            f"Cannot solve for {name}: target power {target:.6f} is outside the "
            f"achievable range [{f_lo:.6f}, {f_hi:.6f}] for {name} in [{lo:g}, {hi:g}]"
        )

    def objective(x: float) -> float:
        diff = func(x) - target
        if abs(diff) < config.power_tolerance:
            raise _TargetReached(x)
        return diff

    try:
        root, info = brentq(
            objective, lo, hi,
            xtol=config.xtol, maxiter=config.max_iterations,
            full_output=True, disp=False,
        )
    except _TargetReached as hit:
        return hit.x

    if not info.converged:
        raise NoSolutionInRangeError(
            f"Cannot solve for {name}: no convergence after {info.iterations} iterations"
        )
    return float(root)


# ---------------------------------------------------------------------------
# Per-unknown searches
# ---------------------------------------------------------------------------

def solve_sample_size(
    func: Callable[[float], float],
    target: float,
    lower: float,
    config: EngineConfig = DEFAULT_CONFIG,
) -> int:
    """Smallest integer sample size in ``[lower, config.max_sample_size]`` reaching *target*.

    Fractional participants are not realizable, so the continuous root is
    moved to the first integer whose power is at least the target.
    """
    upper = float(config.max_sample_size)
    root = _solve_parameter(func, target, (lower, upper), name="sample_size", config=config)

    n_min = math.ceil(lower)
    n = max(n_min, math.floor(root))
    # An early exit may stop a few subjects past the first sufficient integer
    while n > n_min and func(n - 1) >= target:
        n -= 1
    while func(n) < target:
        n += 1
        if n > config.max_sample_size:
            raise NoSolutionInRangeError(
                f"Cannot solve for sample_size: target power {target:.6f} needs more "
                f"than {config.max_sample_size} subjects"
            )
    return n


def solve_effect_size(
    func: Callable[[float], float],
    target: float,
    floor: float,
    ceiling: float,
    config: EngineConfig = DEFAULT_CONFIG,
) -> float:
    """Smallest effect size in ``[floor, ceiling]`` reaching *target*."""
    return _solve_parameter(func, target, (floor, ceiling), name="effect_size", config=config)


def solve_significance_level(
    func: Callable[[float], float],
    target: float,
    config: EngineConfig = DEFAULT_CONFIG,
) -> float:
    """Smallest alpha reaching *target*.

    Lowering alpha lowers power, so the search runs upward from
    ``config.alpha_search_floor``.
    """
    upper = config.probability_bounds[1]
    return _solve_parameter(
        func, target, (config.alpha_search_floor, upper),
        name="significance_level", config=config,
    )
