"""Effect-size metrics: reference magnitudes, interpretation, conversions.

Thresholds follow Cohen (1988) for d, f, r, q, w, h, g and f², MacCallum,
Browne & Sugawara (1996) for RMSEA and Chen, Cohen & Chen (2010) (rounded)
for the odds ratio.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from types import MappingProxyType

import numpy as np
from numpy.typing import ArrayLike

from pystatspower._common import (
    InvalidDomainError,
    InvalidEffectSizeError,
    PowerParameters,
    TestFamily,
)


@dataclass(frozen=True)
class EffectSizeMetric:
    """Standardized effect-size metric of a test.

    Attributes
    ----------
    label : str
        Display label, e.g. ``"Cohen's d"``.
    small, medium, large : float
        Conventional reference magnitudes.
    floor, ceiling : float
        Search and clamp interval used when the effect size is the unknown.
    signed : bool
        ``True`` when the sign only encodes direction (|value| is used).
    """

    label: str
    small: float
    medium: float
    large: float
    floor: float
    ceiling: float
    signed: bool = True


_D = EffectSizeMetric("Cohen's d", 0.2, 0.5, 0.8, floor=0.01, ceiling=5.0)
_F = EffectSizeMetric("Cohen's f", 0.1, 0.25, 0.4, floor=0.01, ceiling=2.0, signed=False)
_R = EffectSizeMetric("r", 0.1, 0.3, 0.5, floor=0.01, ceiling=0.99)
_Q = EffectSizeMetric("Cohen's q", 0.1, 0.3, 0.5, floor=0.01, ceiling=3.0)
_W = EffectSizeMetric("w", 0.1, 0.3, 0.5, floor=0.01, ceiling=2.0, signed=False)
_H = EffectSizeMetric("Cohen's h", 0.2, 0.5, 0.8, floor=0.01, ceiling=3.0)
_G = EffectSizeMetric("Cohen's g", 0.05, 0.15, 0.25, floor=0.01, ceiling=0.49)
_F2 = EffectSizeMetric("f²", 0.02, 0.15, 0.35, floor=0.01, ceiling=5.0, signed=False)
_F2_SET = EffectSizeMetric("f²", 0.02, 0.13, 0.26, floor=0.01, ceiling=5.0, signed=False)
_RMSEA = EffectSizeMetric("RMSEA", 0.05, 0.08, 0.1, floor=0.01, ceiling=0.5, signed=False)
_DELTA = EffectSizeMetric("δ (standardized difference)", 0.2, 0.5, 0.8, floor=0.01, ceiling=5.0)
_OR = EffectSizeMetric("odds ratio", 1.5, 2.5, 4.3, floor=1.01, ceiling=5.0, signed=False)

_METRICS = MappingProxyType({
    TestFamily.TTEST_ONE_SAMPLE: _D,
    TestFamily.TTEST_TWO_SAMPLE: _D,
    TestFamily.TTEST_PAIRED: _D,
    TestFamily.ANOVA: _F,
    TestFamily.ANOVA_TWO_WAY: _F,
    TestFamily.CORRELATION: _R,
    TestFamily.CORRELATION_DIFFERENCE: _Q,
    TestFamily.CHI_SQUARE_GOF: _W,
    TestFamily.CHI_SQUARE_CONTINGENCY: _W,
    TestFamily.PROPORTION_TEST: _H,
    TestFamily.PROPORTION_DIFFERENCE: _H,
    TestFamily.SIGN_TEST: _G,
    TestFamily.LINEAR_REGRESSION: _F2,
    TestFamily.MULTIPLE_REGRESSION: _F2,
    TestFamily.SET_CORRELATION: _F2_SET,
    TestFamily.MULTIVARIATE: _F,
    TestFamily.SEM: _RMSEA,
    TestFamily.MMRM: _DELTA,
    TestFamily.LOGISTIC_REGRESSION: _OR,
})


def thresholds(test: TestFamily | str) -> EffectSizeMetric:
    """Effect-size metric (label and small/medium/large magnitudes) of *test*."""
    return _METRICS[TestFamily(test)]


def _magnitude(test: TestFamily, value: float) -> float:
    if test == TestFamily.LOGISTIC_REGRESSION:
        return max(value, 1.0 / value) if value > 0 else value
    return abs(value)


def classify(test: TestFamily | str, value: float) -> str:
    """Label *value* as ``'negligible'``, ``'small'``, ``'medium'`` or ``'large'``."""
    test = TestFamily(test)
    metric = _METRICS[test]
    size = _magnitude(test, value)
    if size < metric.small:
        return "negligible"
    if size < metric.medium:
        return "small"
    if size < metric.large:
        return "medium"
    return "large"


# ---------------------------------------------------------------------------
# Conversion to the quantity the noncentrality formulas consume
# ---------------------------------------------------------------------------

def to_noncentrality_effect(
    test: TestFamily | str,
    params: PowerParameters,
    effect: float | None = None,
) -> float:
    """Convert the standardized effect size into the input of the λ formula.

    For most tests this is the non-negative magnitude of the metric; the
    paired t-test folds in the within-pair correlation and the correlation
    test works on Fisher's z.  Logistic regression returns the signed log
    odds ratio: the event rate of a binary predictor depends on the
    direction of the effect, not only its size.

    Raises
    ------
    InvalidEffectSizeError
        Non-positive value for a positive metric, or a correlation outside
        (-1, 1).
    InvalidDomainError
        The conversion is undefined for the nuisance parameters (paired
        test with correlation 1).
    """
    test = TestFamily(test)
    es = params.effect_size if effect is None else effect
    if es is None or not math.isfinite(es):
        raise InvalidEffectSizeError(f"effect size must be finite, got {es}")

    metric = _METRICS[test]
    if not metric.signed and es <= 0.0:
        raise InvalidEffectSizeError(f"{metric.label} must be > 0, got {es}")

    if test == TestFamily.TTEST_PAIRED:
        rho = params.correlation
        if rho >= 1.0:
            raise InvalidDomainError(
                "paired t-test undefined for within-pair correlation 1 "
                "(difference scores have zero variance)"
            )
        return abs(es) / math.sqrt(2.0 * (1.0 - rho))

    if test == TestFamily.CORRELATION:
        if not (-1.0 < es < 1.0):
            raise InvalidEffectSizeError(f"r must be in (-1, 1), got {es}")
        return abs(fisher_z(es))

    if test == TestFamily.SIGN_TEST:
        if not (-0.5 < es < 0.5):
            raise InvalidEffectSizeError(f"Cohen's g must be in (-0.5, 0.5), got {es}")
        return abs(es)

    if test == TestFamily.LOGISTIC_REGRESSION:
        if es == 1.0:
            raise InvalidEffectSizeError("odds ratio 1 means no effect")
        return math.log(es)

    return abs(es)


# ---------------------------------------------------------------------------
# Effect-size helpers
# ---------------------------------------------------------------------------

def fisher_z(r: float) -> float:
    """Fisher's z transform ``atanh(r)``."""
    return math.atanh(r)


def cohens_q(r1: float, r2: float) -> float:
    """Cohen's q for the difference of two independent correlations."""
    return fisher_z(r1) - fisher_z(r2)


def cohens_h(p1: float, p2: float) -> float:
    """Cohen's h: ``2 * (arcsin(sqrt(p1)) - arcsin(sqrt(p2)))``."""
    for name, p in (("p1", p1), ("p2", p2)):
        if not (0.0 <= p <= 1.0):
            raise ValueError(f"{name} must be in [0, 1], got {p}")
    return 2.0 * (math.asin(math.sqrt(p1)) - math.asin(math.sqrt(p2)))


def cohens_w(observed: ArrayLike, expected: ArrayLike) -> float:
    """Cohen's w from alternative and null cell probabilities.

    ``w = sqrt(sum((p1 - p0)^2 / p0))``.  Both arrays are normalised to
    sum to one.
    """
    p1 = np.asarray(observed, dtype=np.float64).ravel()
    p0 = np.asarray(expected, dtype=np.float64).ravel()
    if p1.shape != p0.shape:
        raise ValueError("observed and expected must have the same number of cells")
    if np.any(p0 <= 0.0) or np.any(p1 < 0.0):
        raise ValueError("expected probabilities must be > 0 and observed >= 0")
    p1 = p1 / p1.sum()
    p0 = p0 / p0.sum()
    return float(np.sqrt(np.sum((p1 - p0) ** 2 / p0)))


def f_from_eta_squared(eta_squared: float) -> float:
    """Cohen's f from η² (proportion of variance explained)."""
    if not (0.0 <= eta_squared < 1.0):
        raise ValueError(f"eta_squared must be in [0, 1), got {eta_squared}")
    return math.sqrt(eta_squared / (1.0 - eta_squared))


def d_from_f(f: float) -> float:
    """Cohen's d equivalent of f for two equal groups (``d = 2f``)."""
    if f < 0.0:
        raise ValueError(f"f must be >= 0, got {f}")
    return 2.0 * f


def f2_from_r_squared(r_squared: float) -> float:
    """Cohen's f² from R²."""
    if not (0.0 <= r_squared < 1.0):
        raise ValueError(f"r_squared must be in [0, 1), got {r_squared}")
    return r_squared / (1.0 - r_squared)


def odds_ratio_to_probability(p0: float, odds_ratio: float) -> float:
    """Event probability implied by baseline probability *p0* and an odds ratio.

    ``p1 = p0 * OR / (1 - p0 + p0 * OR)``; e.g. p0 = 0.25, OR = 2 gives 0.40.
    """
    if not (0.0 < p0 < 1.0):
        raise ValueError(f"p0 must be in (0, 1), got {p0}")
    if odds_ratio <= 0.0:
        raise ValueError(f"odds_ratio must be > 0, got {odds_ratio}")
    return p0 * odds_ratio / (1.0 - p0 + p0 * odds_ratio)
