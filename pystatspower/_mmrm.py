"""Noncentrality rule for mixed-model repeated measures (MMRM) trials.

Two-arm, equally allocated longitudinal trial analysed at the final
visit with baseline adjustment, in the spirit of Lu, Luo & Chen (2008):

* compound symmetry with within-subject correlation ``rho`` shrinks the
  residual variance of the baseline-adjusted contrast by ``1 - rho^2``;
* monotone dropout at ``dropout_rate`` per post-baseline visit leaves
  ``(1 - dropout_rate)^(time_points - 1)`` of subjects at the final visit.

Together they give the variance inflation ``phi = (1 - rho^2) / retention``
and ``ncp = |delta| * sqrt(N / (4 * phi))`` for a two-sided z test
(N total across both arms).
"""

from __future__ import annotations

import math

from pystatspower._common import InvalidDomainError, PowerParameters
from pystatspower._distributions import NoncentralityContext, normal_context


def _retention(params: PowerParameters) -> float:
    """Fraction of subjects still observed at the final visit."""
    return (1.0 - params.dropout_rate) ** (params.time_points - 1)


def _variance_inflation(params: PowerParameters) -> float:
    rho = params.correlation
    if abs(rho) >= 1.0:
        raise InvalidDomainError(
            f"MMRM needs a within-subject correlation in (-1, 1), got {rho}"
        )
    return (1.0 - rho * rho) / _retention(params)


def _mmrm_context(
    params: PowerParameters,
    n: float,
    delta: float,
    alpha: float,
) -> NoncentralityContext:
    phi = _variance_inflation(params)
    return normal_context(alpha, "two", delta * math.sqrt(n / (4.0 * phi)))


def _min_n(params: PowerParameters) -> float:
    return 2.0
