"""Noncentrality rules for one-way and two-way (factorial) ANOVA.

Validates against: R pwr::pwr.anova.test(), G*Power "ANOVA: fixed effects"
"""

from __future__ import annotations

from pystatspower._common import PowerParameters
from pystatspower._distributions import NoncentralityContext, f_context


def _oneway_context(
    params: PowerParameters,
    n: float,
    f_effect: float,
    alpha: float,
) -> NoncentralityContext:
    """Balanced one-way ANOVA with ``k = params.groups`` groups.

    Parameters
    ----------
    n : float
        Sample size per group (may be fractional during root-finding).
    f_effect : float
        Cohen's f.

    ``ncp = k * n * f^2`` (total N times f²), ``df1 = k - 1``,
    ``df2 = k * (n - 1)``.
    """
    k = params.groups
    return f_context(alpha, k - 1.0, k * (n - 1.0), k * n * f_effect ** 2)


def _term_df(params: PowerParameters) -> float:
    """Numerator df of the two-way ANOVA term under test."""
    a, b = params.groups, params.columns
    if params.effect_term == "main_a":
        return a - 1.0
    if params.effect_term == "main_b":
        return b - 1.0
    return (a - 1.0) * (b - 1.0)


def _factorial_context(
    params: PowerParameters,
    n: float,
    f_effect: float,
    alpha: float,
) -> NoncentralityContext:
    """Two-way factorial ANOVA, ``groups x columns`` cells, *n* per cell.

    ``ncp = cells * n * f^2``, ``df2 = cells * (n - 1)``; ``df1`` depends on
    ``params.effect_term``.
    """
    cells = params.groups * params.columns
    return f_context(alpha, _term_df(params), cells * (n - 1.0), cells * n * f_effect ** 2)


def _min_n(params: PowerParameters) -> float:
    return 2.0
