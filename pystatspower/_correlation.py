"""Noncentrality rules for correlation tests (Fisher z normal approximation).

Validates against: R pwr::pwr.r.test() (which uses the same transform),
Cohen (1988) ch. 4 for the difference of two correlations.
"""

from __future__ import annotations

import math

from pystatspower._common import InvalidDomainError, PowerParameters
from pystatspower._distributions import NoncentralityContext, normal_context


def _correlation_context(
    params: PowerParameters,
    n: float,
    z_r: float,
    alpha: float,
) -> NoncentralityContext:
    """Test of H0: rho = 0.

    *z_r* is ``|atanh(r)|``; under H1 the statistic ``atanh(r) * sqrt(n - 3)``
    is approximately N(z_r * sqrt(n - 3), 1).
    """
    if n <= 3.0:
        raise InvalidDomainError(f"correlation test needs n > 3, got {n}")
    return normal_context(alpha, params.tail, z_r * math.sqrt(n - 3.0))


def _difference_context(
    params: PowerParameters,
    n: float,
    q: float,
    alpha: float,
) -> NoncentralityContext:
    """Two independent correlations, *n* observations in each sample.

    Cohen's q is the difference of Fisher z values; its standard error is
    ``sqrt(2 / (n - 3))``.
    """
    if n <= 3.0:
        raise InvalidDomainError(f"correlation difference needs n > 3 per sample, got {n}")
    return normal_context(alpha, params.tail, q * math.sqrt((n - 3.0) / 2.0))


def _min_n(params: PowerParameters) -> float:
    return 4.0
