"""Logistic regression with a single predictor (Hsieh, Bloch & Larsen, 1998).

Sample size has the closed form

    N = (z_crit + z_power)^2 / (P * (1 - P) * var_x * ln(OR)^2)

where ``P`` is the event probability and ``var_x`` the predictor variance.
Power, effect size and significance level are obtained by inverting the
same relationship, so every unknown is consistent with the closed form.
Like the closed form, power counts only the tail in the direction of the
effect.

* continuous predictor: OR per unit of X, ``var_x = predictor_variance``
  (1 for a standardized predictor), ``P = baseline_probability`` (event
  rate at the mean of X);
* binary predictor: ``var_x = B * (1 - B)`` with ``B = predictor_proportion``
  and ``P`` the overall event rate ``(1 - B) * P0 + B * P1``.

The signed ln(OR) sets the event rate of a binary predictor; only its
magnitude enters the noncentrality and the closed form.
"""

from __future__ import annotations

import math

from scipy.stats import norm

from pystatspower._common import PowerParameters
from pystatspower._distributions import NoncentralityContext, critical_value
from pystatspower._effect import odds_ratio_to_probability


def _design(params: PowerParameters, odds_ratio: float) -> tuple[float, float]:
    """Return (event probability P, predictor variance)."""
    p0 = params.baseline_probability
    if params.predictor_type == "binary":
        b = params.predictor_proportion
        p1 = odds_ratio_to_probability(p0, odds_ratio)
        return (1.0 - b) * p0 + b * p1, b * (1.0 - b)
    return p0, params.predictor_variance


def _information(params: PowerParameters, log_or: float) -> float:
    """Fisher information per subject about ln(OR): ``P (1 - P) var_x``.

    *log_or* is the signed ln(OR), so a protective effect lowers the event
    rate of the exposed group.
    """
    p, var_x = _design(params, math.exp(log_or))
    return p * (1.0 - p) * var_x


def _logistic_context(
    params: PowerParameters,
    n: float,
    log_or: float,
    alpha: float,
) -> NoncentralityContext:
    """*log_or* is the signed ``ln(OR)``."""
    return NoncentralityContext(
        reference="normal",
        critical_value=critical_value(alpha, params.tail, "normal"),
        noncentrality=abs(log_or) * math.sqrt(n * _information(params, log_or)),
        two_sided=False,
    )


def _logistic_sample_size(
    params: PowerParameters,
    log_or: float,
    alpha: float,
    power: float,
) -> float:
    """Hsieh-Bloch-Larsen sample size (unrounded)."""
    z = critical_value(alpha, params.tail, "normal") + float(norm.ppf(power))
    if z <= 0.0:
        # Target power is below alpha: any sample reaches it
        return _min_n(params)
    return z * z / (_information(params, log_or) * log_or * log_or)


def _min_n(params: PowerParameters) -> float:
    return 2.0
