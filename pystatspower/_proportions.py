"""Noncentrality rules for proportion tests and the sign test.

All three use the normal approximation: the test statistic under H1 is
approximately N(ncp, 1).

Validates against: R pwr::pwr.p.test(), pwr::pwr.2p.test()
"""

from __future__ import annotations

import math

from pystatspower._common import PowerParameters
from pystatspower._distributions import NoncentralityContext, normal_context


def _one_prop_context(
    params: PowerParameters,
    n: float,
    h: float,
    alpha: float,
) -> NoncentralityContext:
    """One proportion against 0.50 using Cohen's h: ``ncp = h * sqrt(n)``."""
    return normal_context(alpha, params.tail, h * math.sqrt(n))


def _two_prop_context(
    params: PowerParameters,
    n: float,
    h: float,
    alpha: float,
) -> NoncentralityContext:
    """Two independent proportions, *n* per group: ``ncp = h * sqrt(n / 2)``."""
    return normal_context(alpha, params.tail, h * math.sqrt(n / 2.0))


def _sign_context(
    params: PowerParameters,
    n: float,
    g: float,
    alpha: float,
) -> NoncentralityContext:
    """Sign test with Cohen's g = P - 0.5.

    Under H0 the count of positive signs has standard deviation
    ``0.5 * sqrt(n)``, so the standardized shift is ``2 * g * sqrt(n)``.
    """
    return normal_context(alpha, params.tail, 2.0 * g * math.sqrt(n))


def _min_n(params: PowerParameters) -> float:
    return 2.0
