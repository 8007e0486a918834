"""Noncentrality rule for structural equation models (RMSEA test of exact fit).

Under H1 the likelihood-ratio statistic follows a noncentral chi-square
with ``ncp = (N - 1) * df * RMSEA^2`` (MacCallum, Browne & Sugawara, 1996).
"""

from __future__ import annotations

from pystatspower._common import PowerParameters
from pystatspower._distributions import NoncentralityContext, critical_value


def _sem_context(
    params: PowerParameters,
    n: float,
    rmsea: float,
    alpha: float,
) -> NoncentralityContext:
    df = float(params.degrees_of_freedom)
    return NoncentralityContext(
        reference="chi2",
        critical_value=critical_value(alpha, "one", "chi2", df),
        noncentrality=(n - 1.0) * df * rmsea * rmsea,
        df1=df,
    )


def _min_n(params: PowerParameters) -> float:
    return 2.0
