"""Noncentrality rules for t-tests (one-sample, two-sample, paired).

Validates against: R pwr::pwr.t.test()
"""

from __future__ import annotations

import math

from pystatspower._common import PowerParameters
from pystatspower._distributions import NoncentralityContext, critical_value


def _t_context(alpha: float, tail: str, df: float, ncp: float) -> NoncentralityContext:
    return NoncentralityContext(
        reference="t",
        critical_value=critical_value(alpha, tail, "t", df),
        noncentrality=ncp,
        df1=df,
        two_sided=(tail == "two"),
    )


def _one_sample_context(
    params: PowerParameters,
    n: float,
    d: float,
    alpha: float,
) -> NoncentralityContext:
    """One-sample t-test: ``ncp = d * sqrt(n)``, ``df = n - 1``.

    Parameters
    ----------
    params : PowerParameters
        Supplies the tail mode.
    n : float
        Total sample size.  May be non-integer during root-finding.
    d : float
        |Cohen's d|.
    alpha : float
        Significance level.
    """
    return _t_context(alpha, params.tail, n - 1.0, d * math.sqrt(n))


def _two_sample_context(
    params: PowerParameters,
    n: float,
    d: float,
    alpha: float,
) -> NoncentralityContext:
    """Two-sample t-test with equal allocation; *n* is the size of *each* group.

    ``ncp = d * sqrt(n / 2)``, ``df = 2n - 2``.
    """
    return _t_context(alpha, params.tail, 2.0 * n - 2.0, d * math.sqrt(n / 2.0))


def _paired_context(
    params: PowerParameters,
    n: float,
    d_adj: float,
    alpha: float,
) -> NoncentralityContext:
    """Paired t-test on *n* pairs.

    *d_adj* is already ``d / sqrt(2 * (1 - rho))``: the effect on the
    difference scores, so the test is a one-sample t-test on them.
    """
    return _t_context(alpha, params.tail, n - 1.0, d_adj * math.sqrt(n))


def _min_n(params: PowerParameters) -> float:
    return 2.0
