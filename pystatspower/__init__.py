"""
PyStatsPower: solve-for-any-one-parameter statistical power analysis.

Given three of sample size, effect size, significance level and power,
computes the fourth for 19 test families (t-tests, ANOVA, correlation,
chi-square, proportion and sign tests, regression, set correlation,
MANOVA, SEM, MMRM and logistic regression).

Usage:
    from pystatspower import PowerParameters, TestFamily, compute

Validates against: R package pwr, G*Power 3.
"""

import logging

__version__ = "0.1.0"

from pystatspower._common import (
    CORE_FIELDS,
    DEFAULT_CONFIG,
    CalculationResult,
    EngineConfig,
    ErrorKind,
    InvalidDomainError,
    InvalidEffectSizeError,
    MissingFieldError,
    NonFiniteResultError,
    NoSolutionInRangeError,
    OutOfDomainError,
    PowerCalculationError,
    PowerParameters,
    TestFamily,
)
from pystatspower._schema import (
    advisories,
    apply_defaults,
    defaults,
    description,
    display_name,
    required_fields,
    validate,
)
from pystatspower._effect import (
    EffectSizeMetric,
    classify,
    cohens_h,
    cohens_q,
    cohens_w,
    d_from_f,
    f2_from_r_squared,
    f_from_eta_squared,
    fisher_z,
    odds_ratio_to_probability,
    thresholds,
    to_noncentrality_effect,
)
from pystatspower._distributions import NoncentralityContext, critical_value, evaluate_power
from pystatspower._families import achieved_power, noncentrality_context
from pystatspower._bounds import finalize
from pystatspower._engine import compute, solve
from pystatspower._sweep import surface, sweep

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "__version__",
    "CORE_FIELDS",
    "DEFAULT_CONFIG",
    "CalculationResult",
    "EngineConfig",
    "ErrorKind",
    "EffectSizeMetric",
    "NoncentralityContext",
    "PowerParameters",
    "TestFamily",
    "PowerCalculationError",
    "MissingFieldError",
    "OutOfDomainError",
    "InvalidEffectSizeError",
    "InvalidDomainError",
    "NonFiniteResultError",
    "NoSolutionInRangeError",
    "compute",
    "solve",
    "sweep",
    "surface",
    "required_fields",
    "defaults",
    "apply_defaults",
    "display_name",
    "description",
    "validate",
    "advisories",
    "thresholds",
    "classify",
    "to_noncentrality_effect",
    "critical_value",
    "evaluate_power",
    "noncentrality_context",
    "achieved_power",
    "finalize",
    "fisher_z",
    "cohens_q",
    "cohens_h",
    "cohens_w",
    "d_from_f",
    "f_from_eta_squared",
    "f2_from_r_squared",
    "odds_ratio_to_probability",
]
