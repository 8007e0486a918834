"""Shared types, errors and engine configuration for power calculations."""

from __future__ import annotations

import dataclasses
import enum
from dataclasses import dataclass

CORE_FIELDS = ("sample_size", "effect_size", "significance_level", "power")


class TestFamily(str, enum.Enum):
    """Supported statistical tests.

    Values are the identifiers used by configuration tables and UIs.
    """

    __test__ = False  # not a pytest test class

    TTEST_ONE_SAMPLE = "ttest-one-sample"
    TTEST_TWO_SAMPLE = "ttest-two-sample"
    TTEST_PAIRED = "ttest-paired"
    ANOVA = "anova"
    ANOVA_TWO_WAY = "anova-two-way"
    CORRELATION = "correlation"
    CORRELATION_DIFFERENCE = "correlation-difference"
    CHI_SQUARE_GOF = "chi-square-gof"
    CHI_SQUARE_CONTINGENCY = "chi-square-contingency"
    PROPORTION_TEST = "proportion-test"
    PROPORTION_DIFFERENCE = "proportion-difference"
    SIGN_TEST = "sign-test"
    LINEAR_REGRESSION = "linear-regression"
    MULTIPLE_REGRESSION = "multiple-regression"
    SET_CORRELATION = "set-correlation"
    MULTIVARIATE = "multivariate"
    SEM = "sem"
    MMRM = "mmrm"
    LOGISTIC_REGRESSION = "logistic-regression"


class ErrorKind(str, enum.Enum):
    """Diagnostic category of a failed calculation."""

    MISSING_FIELD = "MissingField"
    OUT_OF_DOMAIN = "OutOfDomain"
    INVALID_EFFECT_SIZE = "InvalidEffectSize"
    INVALID_DOMAIN = "InvalidDomain"
    NON_FINITE_RESULT = "NonFiniteResult"
    NO_SOLUTION_IN_RANGE = "NoSolutionInRange"


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------

class PowerCalculationError(ValueError):
    """Base class for every recoverable power-calculation failure."""

    kind: ErrorKind


class MissingFieldError(PowerCalculationError):
    kind = ErrorKind.MISSING_FIELD

    def __init__(self, field: str, message: str | None = None) -> None:
        self.field = field
        super().__init__(message or f"{field} is required for this test")


class OutOfDomainError(PowerCalculationError):
    kind = ErrorKind.OUT_OF_DOMAIN

    def __init__(self, field: str, reason: str) -> None:
        self.field = field
        self.reason = reason
        super().__init__(f"{field} {reason}")


class InvalidEffectSizeError(PowerCalculationError):
    kind = ErrorKind.INVALID_EFFECT_SIZE


class InvalidDomainError(PowerCalculationError):
    kind = ErrorKind.INVALID_DOMAIN


class NonFiniteResultError(PowerCalculationError):
    kind = ErrorKind.NON_FINITE_RESULT


class NoSolutionInRangeError(PowerCalculationError):
    kind = ErrorKind.NO_SOLUTION_IN_RANGE


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class EngineConfig:
    """Engine-wide numeric limits.

    Attributes
    ----------
    min_sample_size : int
        Smallest sample size ever reported.
    max_sample_size : int
        Upper end of the sample-size search and cap on reported sizes.
        Raise it to search further before giving up.
    probability_bounds : tuple of float
        Clamp interval for computed power and significance level.
    decimals : int
        Rounding applied to probabilities and effect sizes.
    power_tolerance : float
        Root finding stops once achieved power is this close to the target.
    xtol : float
        Absolute tolerance on the unknown passed to Brent's method.
    max_iterations : int
        Iteration cap for one root-finding run.
    alpha_search_floor : float
        Lower end of the significance-level search.
    """

    min_sample_size: int = 4
    max_sample_size: int = 10_000
    probability_bounds: tuple[float, float] = (0.001, 0.999)
    decimals: int = 3
    power_tolerance: float = 1e-4
    xtol: float = 1e-10
    max_iterations: int = 200
    alpha_search_floor: float = 1e-6

    def __post_init__(self) -> None:
        if self.min_sample_size < 2:
            raise ValueError(f"min_sample_size must be >= 2, got {self.min_sample_size}")
        if self.max_sample_size <= self.min_sample_size:
            raise ValueError("max_sample_size must exceed min_sample_size")
        lo, hi = self.probability_bounds
        if not (0.0 < lo < hi < 1.0):
            raise ValueError(f"probability_bounds must satisfy 0 < lo < hi < 1, got {self.probability_bounds}")
        if self.max_iterations < 1:
            raise ValueError(f"max_iterations must be >= 1, got {self.max_iterations}")


DEFAULT_CONFIG = EngineConfig()


# ---------------------------------------------------------------------------
# Parameters and results
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class PowerParameters:
    """Inputs of one power calculation.

    The four core fields (``sample_size``, ``effect_size``,
    ``significance_level``, ``power``) hold a number or ``None``; the one
    left as ``None`` is solved for.  The remaining fields are
    test-specific nuisance parameters; which of them a test reads is
    declared by :func:`pystatspower.required_fields`.
    """

    test: TestFamily
    sample_size: float | None = None
    effect_size: float | None = None
    significance_level: float | None = None
    power: float | None = None

    tail: str | None = None  # 'one' or 'two'
    groups: int | None = None  # groups, factor-A levels or table rows
    columns: int | None = None  # factor-B levels or table columns
    effect_term: str | None = None  # two-way ANOVA: 'interaction', 'main_a', 'main_b'
    predictors: int | None = None
    response_variables: int | None = None
    correlation: float | None = None
    degrees_of_freedom: int | None = None
    time_points: int | None = None
    dropout_rate: float | None = None
    baseline_probability: float | None = None
    predictor_type: str | None = None  # 'continuous' or 'binary'
    predictor_variance: float | None = None
    predictor_proportion: float | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.test, TestFamily):
            # Accept the plain string identifier too
            object.__setattr__(self, "test", TestFamily(self.test))

    def with_value(self, field: str, value: object) -> PowerParameters:
        """Return a copy with one field replaced."""
        return dataclasses.replace(self, **{field: value})

    def unknown_fields(self) -> tuple[str, ...]:
        """Names of the core fields currently set to ``None``."""
        return tuple(name for name in CORE_FIELDS if getattr(self, name) is None)


@dataclass(frozen=True)
class CalculationResult:
    """Outcome of :func:`pystatspower.compute`.

    ``value`` is ``None`` exactly when the calculation failed; ``error``
    and ``message`` then say why.  ``warnings`` carries non-fatal
    advisories (e.g. too few observations per predictor) that lower
    confidence in an otherwise valid value.
    """

    test: TestFamily
    field: str
    value: float | int | None
    error: ErrorKind | None = None
    message: str = ""
    warnings: tuple[str, ...] = ()

    @property
    def ok(self) -> bool:
        return self.value is not None

    def summary(self) -> str:
        """Human-readable summary."""
        lines = [f"{self.test.value} power calculation", ""]
        if self.value is None:
            lines.append(f"  {self.field:>18} = (no result)")
            lines.append(f"  {'error':>18} = {self.error.value if self.error else 'unknown'}")
            if self.message:
                lines.append(f"  {'reason':>18} = {self.message}")
        else:
            lines.append(f"  {self.field:>18} = {self.value}")
        for warning in self.warnings:
            lines.append("")
            lines.append(f"NOTE: {warning}")
        return "\n".join(lines)
