"""Noncentrality rules for regression-based F tests.

Covers simple and multiple regression (R² deviation from zero), Cohen's
set correlation and one-way MANOVA.  The latter two use Rao's F
approximation to Wilks' lambda (Cohen, 1988, ch. 10), which reduces to
the ordinary regression F test when there is a single response variable.

All variants use ``ncp = f^2 * df2``.

Validates against: R pwr::pwr.f2.test() with ``v = df2``
"""

from __future__ import annotations

import math

from pystatspower._common import InvalidDomainError, PowerParameters, TestFamily
from pystatspower._distributions import NoncentralityContext, f_context


def _n_predictors(params: PowerParameters) -> int:
    if params.test == TestFamily.LINEAR_REGRESSION:
        return 1
    return params.predictors


def _regression_context(
    params: PowerParameters,
    n: float,
    f2: float,
    alpha: float,
) -> NoncentralityContext:
    """F test of R² = 0 with k predictors: ``df1 = k``, ``df2 = n - k - 1``."""
    k = _n_predictors(params)
    df2 = n - k - 1.0
    if df2 <= 0.0:
        raise InvalidDomainError(
            f"regression needs n > k + 1 (n = {n:g}, k = {k}): error df would be {df2:g}"
        )
    return f_context(alpha, float(k), df2, f2 * df2)


def _regression_min_n(params: PowerParameters) -> float:
    return _n_predictors(params) + 2.0


# ---------------------------------------------------------------------------
# Rao's F approximation (set correlation, MANOVA)
# ---------------------------------------------------------------------------

def _set_sizes(params: PowerParameters) -> tuple[int, int]:
    """(kX, kY): sizes of the predictor and response sets."""
    if params.test == TestFamily.MULTIVARIATE:
        # Group membership coded as groups - 1 dummy variables
        return params.groups - 1, params.response_variables
    return params.predictors, params.response_variables


def _rao_df(kx: int, ky: int, n: float) -> tuple[float, float]:
    """Numerator and denominator df of Rao's F for sets of size kx, ky."""
    u = float(kx * ky)
    denom = kx * kx + ky * ky - 5.0
    s = math.sqrt((kx * kx * ky * ky - 4.0) / denom) if denom > 0.0 else 1.0
    m = n - (kx + ky + 3.0) / 2.0
    v = m * s + 1.0 - u / 2.0
    return u, v


def _set_correlation_context(
    params: PowerParameters,
    n: float,
    f2: float,
    alpha: float,
) -> NoncentralityContext:
    """Set correlation between ``predictors`` and ``response_variables``."""
    kx, ky = _set_sizes(params)
    u, v = _rao_df(kx, ky, n)
    if v <= 0.0:
        raise InvalidDomainError(
            f"sample size {n:g} too small for sets of {kx} and {ky} variables "
            f"(denominator df would be {v:g})"
        )
    return f_context(alpha, u, v, f2 * v)


def _multivariate_context(
    params: PowerParameters,
    n: float,
    f_effect: float,
    alpha: float,
) -> NoncentralityContext:
    """One-way MANOVA; the effect is Cohen's f, so ``f^2`` enters the ncp."""
    return _set_correlation_context(params, n, f_effect * f_effect, alpha)


def _rao_min_n(params: PowerParameters) -> float:
    """Smallest integer N giving a positive denominator df."""
    kx, ky = _set_sizes(params)
    _, v_at_zero = _rao_df(kx, ky, 0.0)
    # v is linear in n with slope s
    _, v_at_one = _rao_df(kx, ky, 1.0)
    slope = v_at_one - v_at_zero
    return max(2.0, math.floor(-v_at_zero / slope) + 1.0)
