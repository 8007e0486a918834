"""Critical values and achieved power under the reference distributions.

Four reference distributions cover every test family:

* ``'t'``: noncentral t (t-tests)
* ``'f'``: noncentral F (ANOVA, regression, set correlation, MANOVA)
* ``'chi2'``: noncentral chi-square (contingency / goodness of fit, SEM)
* ``'normal'``: shifted unit normal (large-sample z approximations)
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from scipy.stats import chi2, ncf, nct, ncx2, norm
from scipy.stats import f as f_dist
from scipy.stats import t as t_dist

from pystatspower._common import InvalidDomainError, NonFiniteResultError

REFERENCES = ("normal", "t", "f", "chi2")
_VALID_TAILS = ("one", "two")

# Above this many df the noncentral t is replaced by its normal limit.
_T_NORMAL_DF = 1e5


@dataclass(frozen=True)
class NoncentralityContext:
    """Everything the power evaluator needs for one evaluation.

    Built fresh for every (alpha, df, effect, n) combination and never
    shared between calculations.
    """

    reference: str
    critical_value: float
    noncentrality: float
    df1: float | None = None
    df2: float | None = None
    two_sided: bool = False


def _check_df(name: str, df: float | None) -> float:
    if df is None or not math.isfinite(df) or df <= 0.0:
        raise InvalidDomainError(f"{name} must be a finite number > 0, got {df}")
    return float(df)


def critical_value(
    alpha: float,
    tail: str,
    reference: str,
    df1: float | None = None,
    df2: float | None = None,
) -> float:
    """Critical value of the test statistic at level *alpha*.

    For ``'normal'`` and ``'t'`` a two-tailed test uses the upper
    ``alpha/2`` quantile (1.96 for the normal at 0.05) and a one-tailed
    test the upper ``alpha`` quantile (1.645).  ``'f'`` and ``'chi2'``
    always use the upper-tail quantile; *tail* is ignored for them.

    Raises
    ------
    InvalidDomainError
        A required degree of freedom is missing, non-finite or <= 0.
    """
    if not (0.0 < alpha < 1.0):
        raise InvalidDomainError(f"alpha must be in (0, 1), got {alpha}")
    if reference not in REFERENCES:
        raise ValueError(f"reference must be one of {REFERENCES}, got {reference!r}")

    if reference in ("normal", "t"):
        if tail not in _VALID_TAILS:
            raise ValueError(f"tail must be one of {_VALID_TAILS}, got {tail!r}")
        q = alpha / 2.0 if tail == "two" else alpha
        if reference == "normal":
            return float(norm.isf(q))
        return float(t_dist.isf(q, _check_df("df", df1)))

    if reference == "f":
        return float(f_dist.isf(alpha, _check_df("df1", df1), _check_df("df2", df2)))

    return float(chi2.isf(alpha, _check_df("df", df1)))


# ---------------------------------------------------------------------------
# Power evaluation
# ---------------------------------------------------------------------------

def _normal_power(crit: float, ncp: float, two_sided: bool) -> float:
    pwr = norm.sf(crit - ncp)
    if two_sided:
        pwr += norm.cdf(-crit - ncp)
    return float(pwr)


def _t_power(crit: float, df: float, ncp: float, two_sided: bool) -> float:
    # For very large df, go straight to normal approximation (exact in limit).
    if df > _T_NORMAL_DF:
        return _normal_power(crit, ncp, two_sided)

    pwr = float(nct.sf(crit, df, ncp))
    if two_sided:
        pwr += float(nct.cdf(-crit, df, ncp))

    # scipy's nct can return NaN for moderate-to-large noncentrality params
    # (ncp ~10+ even at moderate df).  The normal approximation is very
    # accurate there.
    if math.isnan(pwr):
        pwr = _normal_power(crit, ncp, two_sided)
    return pwr


def _f_power(crit: float, df1: float, df2: float, ncp: float) -> float:
    if ncp == 0.0:
        return float(f_dist.sf(crit, df1, df2))
    pwr = float(ncf.sf(crit, df1, df2, ncp))
    # Guard against NaN for extreme ncp
    if math.isnan(pwr):
        pwr = 1.0 if ncp > 50.0 else 0.0
    return pwr


def _chi2_power(crit: float, df: float, ncp: float) -> float:
    if ncp == 0.0:
        return float(chi2.sf(crit, df))
    pwr = float(ncx2.sf(crit, df, ncp))
    if math.isnan(pwr):
        pwr = 1.0 if ncp > 50.0 else 0.0
    return pwr


def _evaluator_df(name: str, df: float | None) -> float:
    if df is None or not math.isfinite(df) or df <= 0.0:
        raise NonFiniteResultError(f"{name} must be a finite number > 0, got {df}")
    return float(df)


def evaluate_power(ctx: NoncentralityContext) -> float:
    """Probability that the test statistic exceeds the critical value.

    Monotonically increasing in ``ctx.noncentrality`` for a fixed
    critical value and df.

    Raises
    ------
    NonFiniteResultError
        The noncentrality parameter or a df is outside its domain (not
        finite, negative noncentrality, df <= 0), or the resulting
        probability is not finite.
    """
    ncp = ctx.noncentrality
    if not math.isfinite(ncp) or ncp < 0.0:
        raise NonFiniteResultError(f"noncentrality parameter must be finite and >= 0, got {ncp}")
    if not math.isfinite(ctx.critical_value):
        raise NonFiniteResultError(f"critical value is not finite: {ctx.critical_value}")
    for name in ("df1", "df2"):
        df = getattr(ctx, name)
        if df is not None and not math.isfinite(df):
            raise NonFiniteResultError(f"{name} is not finite: {df}")

    if ctx.reference == "normal":
        pwr = _normal_power(ctx.critical_value, ncp, ctx.two_sided)
    elif ctx.reference == "t":
        pwr = _t_power(ctx.critical_value, _evaluator_df("df", ctx.df1), ncp, ctx.two_sided)
    elif ctx.reference == "f":
        pwr = _f_power(
            ctx.critical_value, _evaluator_df("df1", ctx.df1), _evaluator_df("df2", ctx.df2), ncp,
        )
    elif ctx.reference == "chi2":
        pwr = _chi2_power(ctx.critical_value, _evaluator_df("df", ctx.df1), ncp)
    else:
        raise ValueError(f"reference must be one of {REFERENCES}, got {ctx.reference!r}")

    if not math.isfinite(pwr):
        raise NonFiniteResultError(f"power evaluated to {pwr}")
    return pwr


def normal_context(alpha: float, tail: str, noncentrality: float) -> NoncentralityContext:
    """Context for a z statistic shifted by *noncentrality* under H1."""
    return NoncentralityContext(
        reference="normal",
        critical_value=critical_value(alpha, tail, "normal"),
        noncentrality=noncentrality,
        two_sided=(tail == "two"),
    )


def f_context(alpha: float, df1: float, df2: float, noncentrality: float) -> NoncentralityContext:
    """Context for an upper-tail F test with numerator *df1* and denominator *df2*."""
    return NoncentralityContext(
        reference="f",
        critical_value=critical_value(alpha, "one", "f", df1, df2),
        noncentrality=noncentrality,
        df1=df1,
        df2=df2,
    )
