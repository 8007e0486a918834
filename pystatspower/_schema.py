"""Per-test parameter schema: which fields matter, their defaults, validation.

Pure lookup and validation; nothing here computes power.
"""

from __future__ import annotations

import dataclasses
import math
from dataclasses import dataclass
from types import MappingProxyType

from pystatspower._common import (
    CORE_FIELDS,
    MissingFieldError,
    OutOfDomainError,
    PowerParameters,
    TestFamily,
)

_VALID_TAILS = ("one", "two")
_VALID_EFFECT_TERMS = ("interaction", "main_a", "main_b")
_VALID_PREDICTOR_TYPES = ("continuous", "binary")

CORE_DEFAULTS = MappingProxyType({"significance_level": 0.05, "power": 0.80})


@dataclass(frozen=True)
class _Schema:
    name: str
    description: str
    defaults: MappingProxyType


def _schema(name: str, description: str, **defaults: object) -> _Schema:
    return _Schema(name=name, description=description, defaults=MappingProxyType(defaults))


_SCHEMAS = MappingProxyType({
    TestFamily.TTEST_ONE_SAMPLE: _schema(
        "One-sample t-test",
        "Tests if a sample mean differs from a specified value",
        tail="two",
    ),
    TestFamily.TTEST_TWO_SAMPLE: _schema(
        "Two-sample t-test",
        "Tests if two independent sample means differ",
        tail="two",
    ),
    TestFamily.TTEST_PAIRED: _schema(
        "Paired t-test",
        "Tests if means of paired observations differ",
        tail="two", correlation=0.5,
    ),
    TestFamily.ANOVA: _schema(
        "One-way ANOVA",
        "Tests if means of three or more groups differ",
        groups=3,
    ),
    TestFamily.ANOVA_TWO_WAY: _schema(
        "Two-way ANOVA",
        "Tests main effects and interactions between two factors",
        groups=2, columns=2, effect_term="interaction",
    ),
    TestFamily.CORRELATION: _schema(
        "Correlation",
        "Tests if a correlation coefficient differs from zero",
        tail="two",
    ),
    TestFamily.CORRELATION_DIFFERENCE: _schema(
        "Differences between Correlations",
        "Tests if two independent correlation coefficients differ",
        tail="two",
    ),
    TestFamily.CHI_SQUARE_GOF: _schema(
        "Chi-square Goodness of Fit",
        "Tests if observed frequencies match expected frequencies",
        groups=3,
    ),
    TestFamily.CHI_SQUARE_CONTINGENCY: _schema(
        "Chi-square Contingency Tables",
        "Tests association between categorical variables",
        groups=2, columns=2,
    ),
    TestFamily.PROPORTION_TEST: _schema(
        "Proportion Test (0.50)",
        "Tests if a proportion equals 0.50",
        tail="two",
    ),
    TestFamily.PROPORTION_DIFFERENCE: _schema(
        "Differences between Proportions",
        "Tests if two independent proportions differ",
        tail="two",
    ),
    TestFamily.SIGN_TEST: _schema(
        "Sign Test",
        "Tests if the median equals a specified value",
        tail="two",
    ),
    TestFamily.LINEAR_REGRESSION: _schema(
        "Simple Linear Regression",
        "Tests if a regression slope differs from zero",
    ),
    TestFamily.MULTIPLE_REGRESSION: _schema(
        "Multiple Regression",
        "Tests if a set of regression coefficients differs from zero",
        predictors=3,
    ),
    TestFamily.SET_CORRELATION: _schema(
        "Set Correlation",
        "Tests correlation between two sets of variables",
        predictors=3, response_variables=2,
    ),
    TestFamily.MULTIVARIATE: _schema(
        "Multivariate Methods",
        "Tests group differences on several response variables (MANOVA)",
        groups=2, response_variables=2,
    ),
    TestFamily.SEM: _schema(
        "Structural Equation Modeling",
        "Tests model fit via RMSEA (test of exact fit)",
        degrees_of_freedom=10,
    ),
    TestFamily.MMRM: _schema(
        "Mixed-Model Repeated Measures",
        "Tests a treatment difference at the final visit of a longitudinal trial",
        time_points=4, dropout_rate=0.05, correlation=0.5,
    ),
    TestFamily.LOGISTIC_REGRESSION: _schema(
        "Logistic Regression",
        "Tests a single predictor's odds ratio for a binary outcome",
        tail="two", baseline_probability=0.2, predictor_type="continuous",
        predictor_variance=1.0, predictor_proportion=0.5,
    ),
})


# ---------------------------------------------------------------------------
# Lookups
# ---------------------------------------------------------------------------

def _lookup(test: TestFamily | str) -> _Schema:
    return _SCHEMAS[TestFamily(test)]


def display_name(test: TestFamily | str) -> str:
    return _lookup(test).name


def description(test: TestFamily | str) -> str:
    return _lookup(test).description


def nuisance_fields(test: TestFamily | str) -> frozenset[str]:
    """Nuisance fields the test reads."""
    return frozenset(_lookup(test).defaults)


def required_fields(test: TestFamily | str) -> frozenset[str]:
    """Core plus nuisance fields a calculation for *test* needs."""
    return frozenset(CORE_FIELDS) | nuisance_fields(test)


def defaults(test: TestFamily | str) -> dict[str, object]:
    """Default values for *test* (core significance level/power and nuisance fields)."""
    values: dict[str, object] = dict(CORE_DEFAULTS)
    values.update(_lookup(test).defaults)
    return values


def apply_defaults(
    params: PowerParameters,
    test: TestFamily | str | None = None,
) -> PowerParameters:
    """Switch *params* to *test* (if given) and fill unset nuisance fields.

    Fields the caller already set are kept.  Fields irrelevant to the new
    test are left untouched; downstream computation ignores them.  Core
    fields are never filled, since one of them is the unknown.
    """
    target = TestFamily(test) if test is not None else params.test
    updates: dict[str, object] = {"test": target}
    for name, value in _lookup(target).defaults.items():
        if getattr(params, name) is None:
            updates[name] = value
    return dataclasses.replace(params, **updates)


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------

def resolve_unknown(params: PowerParameters, unknown: str | None) -> str:
    """Return the core field to solve for.

    With *unknown* given it must name a core field; otherwise the single
    core field left as ``None`` is used.
    """
    if unknown is not None:
        if unknown not in CORE_FIELDS:
            raise OutOfDomainError("unknown", f"must be one of {CORE_FIELDS}, got {unknown!r}")
        return unknown

    missing = params.unknown_fields()
    if len(missing) == 1:
        return missing[0]
    if not missing:
        raise OutOfDomainError(
            "unknown", "cannot be inferred: all of sample_size, effect_size, "
            "significance_level, power are set",
        )
    # More than one unknown: report the first absent field
    raise MissingFieldError(
        missing[0],
        f"Exactly one of {', '.join(CORE_FIELDS)} may be unknown "
        f"(got {len(missing)} unknown: {', '.join(missing)})",
    )


def _check_finite(name: str, value: float) -> None:
    if not math.isfinite(value):
        raise OutOfDomainError(name, f"must be finite, got {value}")


def _check_integer(name: str, value: float, minimum: int) -> None:
    _check_finite(name, value)
    if value != int(value):
        raise OutOfDomainError(name, f"must be an integer, got {value}")
    if value < minimum:
        raise OutOfDomainError(name, f"must be >= {minimum}, got {value}")


def _check_core(params: PowerParameters, unknown: str) -> None:
    for name in CORE_FIELDS:
        if name != unknown and getattr(params, name) is None:
            raise MissingFieldError(name)

    n = params.sample_size
    if unknown != "sample_size":
        _check_finite("sample_size", n)
        if n < 2:
            raise OutOfDomainError("sample_size", f"must be >= 2, got {n}")

    if unknown != "significance_level":
        alpha = params.significance_level
        if not (0.0 < alpha < 1.0):
            raise OutOfDomainError("significance_level", f"must be in (0, 1), got {alpha}")

    if unknown != "power":
        pwr = params.power
        if not (0.0 < pwr < 1.0):
            raise OutOfDomainError("power", f"must be in (0, 1), got {pwr}")

    if unknown != "effect_size":
        _check_finite("effect_size", params.effect_size)


def _check_nuisance(params: PowerParameters) -> None:
    for name in sorted(nuisance_fields(params.test)):
        value = getattr(params, name)
        if value is None:
            raise MissingFieldError(name)

        if name == "tail":
            if value not in _VALID_TAILS:
                raise OutOfDomainError(name, f"must be one of {_VALID_TAILS}, got {value!r}")
        elif name == "effect_term":
            if value not in _VALID_EFFECT_TERMS:
                raise OutOfDomainError(name, f"must be one of {_VALID_EFFECT_TERMS}, got {value!r}")
        elif name == "predictor_type":
            if value not in _VALID_PREDICTOR_TYPES:
                raise OutOfDomainError(name, f"must be one of {_VALID_PREDICTOR_TYPES}, got {value!r}")
        elif name in ("groups", "columns", "time_points"):
            _check_integer(name, value, 2)
        elif name in ("predictors", "response_variables", "degrees_of_freedom"):
            _check_integer(name, value, 1)
        elif name == "correlation":
            _check_finite(name, value)
            if not (-1.0 <= value <= 1.0):
                raise OutOfDomainError(name, f"must be in [-1, 1], got {value}")
        elif name == "dropout_rate":
            _check_finite(name, value)
            if not (0.0 <= value < 1.0):
                raise OutOfDomainError(name, f"must be in [0, 1), got {value}")
        elif name in ("baseline_probability", "predictor_proportion"):
            _check_finite(name, value)
            if not (0.0 < value < 1.0):
                raise OutOfDomainError(name, f"must be in (0, 1), got {value}")
        elif name == "predictor_variance":
            _check_finite(name, value)
            if value <= 0.0:
                raise OutOfDomainError(name, f"must be > 0, got {value}")


def validate(params: PowerParameters, unknown: str | None = None) -> str:
    """Validate *params* for solving *unknown*.  Return the unknown field name.

    Raises
    ------
    MissingFieldError
        A required core or nuisance field is absent.
    OutOfDomainError
        A supplied field lies outside its domain.
    """
    unknown = resolve_unknown(params, unknown)
    _check_core(params, unknown)
    _check_nuisance(params)
    return unknown


# ---------------------------------------------------------------------------
# Advisories
# ---------------------------------------------------------------------------

def advisories(params: PowerParameters, sample_size: float | None = None) -> tuple[str, ...]:
    """Non-fatal notes that lower confidence in a result.

    *sample_size* overrides ``params.sample_size`` (used after solving
    for it).  Returns an empty tuple when nothing looks off.
    """
    n = sample_size if sample_size is not None else params.sample_size
    if n is None:
        return ()

    test = params.test
    notes: list[str] = []

    if test in (TestFamily.LINEAR_REGRESSION, TestFamily.MULTIPLE_REGRESSION,
                TestFamily.SET_CORRELATION):
        k = 1 if test == TestFamily.LINEAR_REGRESSION else params.predictors
        if test == TestFamily.SET_CORRELATION:
            k = params.predictors + params.response_variables
        if n < 10 * k:
            notes.append(
                f"fewer than 10 observations per predictor ({n:g} for {k}); "
                f"estimates are unstable and power is optimistic"
            )

    elif test in (TestFamily.CHI_SQUARE_GOF, TestFamily.CHI_SQUARE_CONTINGENCY):
        cells = params.groups
        if test == TestFamily.CHI_SQUARE_CONTINGENCY:
            cells = params.groups * params.columns
        if n / cells < 5.0:
            notes.append(
                f"expected count per cell below 5 ({n / cells:.2f}); "
                f"the chi-square approximation is unreliable"
            )

    elif test == TestFamily.SEM:
        if n < 100:
            notes.append(f"N = {n:g} is small for SEM; at least 100-200 is usually recommended")

    elif test == TestFamily.LOGISTIC_REGRESSION:
        events = n * params.baseline_probability
        if events < 10:
            notes.append(f"only {events:.1f} expected events; logistic estimates may be biased")

    elif test in (TestFamily.TTEST_ONE_SAMPLE, TestFamily.TTEST_PAIRED,
                  TestFamily.CORRELATION):
        if n < 10:
            notes.append(f"n = {n:g} is very small; normality assumptions carry the result")

    return tuple(notes)
