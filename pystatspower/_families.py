"""Lookup table: test family -> noncentrality rule.

Each rule maps (parameters, sample size, converted effect, alpha) to a
:class:`NoncentralityContext`.  Adding a test means adding one entry here
plus its formula module; nothing else dispatches on the test family.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from types import MappingProxyType

from pystatspower import _anova, _chisquare, _correlation, _logistic, _means, _mmrm
from pystatspower import _proportions, _regression, _sem
from pystatspower._common import PowerParameters, TestFamily
from pystatspower._distributions import NoncentralityContext, evaluate_power
from pystatspower._effect import to_noncentrality_effect

ContextBuilder = Callable[[PowerParameters, float, float, float], NoncentralityContext]


@dataclass(frozen=True)
class FamilyRule:
    """How one test family turns its inputs into a noncentral distribution.

    Attributes
    ----------
    context : callable
        ``(params, n, effect, alpha) -> NoncentralityContext`` where
        *effect* has been through :func:`to_noncentrality_effect`.
    min_sample_size : callable
        ``params -> float``: smallest n at which the context is defined.
    closed_form_sample_size : callable or None
        ``(params, effect, alpha, power) -> float`` when the sample size
        has a direct formula and must not go through the root finder.
    """

    context: ContextBuilder
    min_sample_size: Callable[[PowerParameters], float]
    closed_form_sample_size: Callable[[PowerParameters, float, float, float], float] | None = None


_RULES = MappingProxyType({
    TestFamily.TTEST_ONE_SAMPLE: FamilyRule(_means._one_sample_context, _means._min_n),
    TestFamily.TTEST_TWO_SAMPLE: FamilyRule(_means._two_sample_context, _means._min_n),
    TestFamily.TTEST_PAIRED: FamilyRule(_means._paired_context, _means._min_n),
    TestFamily.ANOVA: FamilyRule(_anova._oneway_context, _anova._min_n),
    TestFamily.ANOVA_TWO_WAY: FamilyRule(_anova._factorial_context, _anova._min_n),
    TestFamily.CORRELATION: FamilyRule(_correlation._correlation_context, _correlation._min_n),
    TestFamily.CORRELATION_DIFFERENCE: FamilyRule(
        _correlation._difference_context, _correlation._min_n,
    ),
    TestFamily.CHI_SQUARE_GOF: FamilyRule(_chisquare._gof_context, _chisquare._min_n),
    TestFamily.CHI_SQUARE_CONTINGENCY: FamilyRule(
        _chisquare._contingency_context, _chisquare._min_n,
    ),
    TestFamily.PROPORTION_TEST: FamilyRule(_proportions._one_prop_context, _proportions._min_n),
    TestFamily.PROPORTION_DIFFERENCE: FamilyRule(
        _proportions._two_prop_context, _proportions._min_n,
    ),
    TestFamily.SIGN_TEST: FamilyRule(_proportions._sign_context, _proportions._min_n),
    TestFamily.LINEAR_REGRESSION: FamilyRule(
        _regression._regression_context, _regression._regression_min_n,
    ),
    TestFamily.MULTIPLE_REGRESSION: FamilyRule(
        _regression._regression_context, _regression._regression_min_n,
    ),
    TestFamily.SET_CORRELATION: FamilyRule(
        _regression._set_correlation_context, _regression._rao_min_n,
    ),
    TestFamily.MULTIVARIATE: FamilyRule(
        _regression._multivariate_context, _regression._rao_min_n,
    ),
    TestFamily.SEM: FamilyRule(_sem._sem_context, _sem._min_n),
    TestFamily.MMRM: FamilyRule(_mmrm._mmrm_context, _mmrm._min_n),
    TestFamily.LOGISTIC_REGRESSION: FamilyRule(
        _logistic._logistic_context, _logistic._min_n,
        closed_form_sample_size=_logistic._logistic_sample_size,
    ),
})


def family_rule(test: TestFamily | str) -> FamilyRule:
    return _RULES[TestFamily(test)]


def noncentrality_context(
    params: PowerParameters,
    n: float,
    effect: float,
    alpha: float,
) -> NoncentralityContext:
    """Critical value, df and ncp for raw (unconverted) effect size *effect*."""
    converted = to_noncentrality_effect(params.test, params, effect)
    return family_rule(params.test).context(params, float(n), converted, float(alpha))


def achieved_power(
    params: PowerParameters,
    n: float,
    effect: float,
    alpha: float,
) -> float:
    """Unrounded power of *params.test* at sample size *n*, effect and alpha."""
    return evaluate_power(noncentrality_context(params, n, effect, alpha))
