"""Noncentrality rules for chi-square goodness-of-fit and contingency tests.

Validates against: R pwr::pwr.chisq.test()
"""

from __future__ import annotations

from pystatspower._common import PowerParameters
from pystatspower._distributions import NoncentralityContext, critical_value


def _chi2_context(alpha: float, df: float, ncp: float) -> NoncentralityContext:
    return NoncentralityContext(
        reference="chi2",
        critical_value=critical_value(alpha, "one", "chi2", df),
        noncentrality=ncp,
        df1=df,
    )


def _gof_context(
    params: PowerParameters,
    n: float,
    w: float,
    alpha: float,
) -> NoncentralityContext:
    """Goodness of fit over ``params.groups`` categories: ``ncp = w^2 * N``."""
    return _chi2_context(alpha, params.groups - 1.0, w * w * n)


def _contingency_context(
    params: PowerParameters,
    n: float,
    w: float,
    alpha: float,
) -> NoncentralityContext:
    """``groups x columns`` table, ``df = (rows - 1)(cols - 1)``."""
    df = (params.groups - 1.0) * (params.columns - 1.0)
    return _chi2_context(alpha, df, w * w * n)


def _min_n(params: PowerParameters) -> float:
    return 2.0
