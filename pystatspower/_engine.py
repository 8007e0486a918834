"""The ``compute`` boundary: validate, evaluate or invert, finalize.

:func:`solve` raises the error taxonomy of :mod:`pystatspower._common`;
:func:`compute` converts every such failure into a valueless
:class:`CalculationResult` so callers never see an exception for bad
inputs or unreachable targets.
"""

from __future__ import annotations

import logging

from pystatspower._bounds import finalize
from pystatspower._common import (
    CORE_FIELDS,
    DEFAULT_CONFIG,
    CalculationResult,
    EngineConfig,
    InvalidEffectSizeError,
    NoSolutionInRangeError,
    PowerCalculationError,
    PowerParameters,
)
from pystatspower._effect import thresholds, to_noncentrality_effect
from pystatspower._families import achieved_power, family_rule
from pystatspower._schema import advisories, validate
from pystatspower._solve import solve_effect_size, solve_sample_size, solve_significance_level

logger = logging.getLogger(__name__)


def _raw_value(params: PowerParameters, unknown: str, config: EngineConfig) -> float:
    """Unrounded value of *unknown*; *params* is already validated."""
    test = params.test
    rule = family_rule(test)
    n = params.sample_size
    es = params.effect_size
    alpha = params.significance_level
    target = params.power

    # Surface a bad effect size before any search starts
    converted = to_noncentrality_effect(test, params, es) if unknown != "effect_size" else None

    if unknown == "power":
        return achieved_power(params, n, es, alpha)

    if unknown == "sample_size":
        if converted == 0.0:
            raise InvalidEffectSizeError(
                "Cannot solve for sample_size when the effect size is 0 (no effect)"
            )
        if rule.closed_form_sample_size is not None:
            raw_n = rule.closed_form_sample_size(params, converted, alpha, target)
            if raw_n > config.max_sample_size:
                raise NoSolutionInRangeError(
                    f"Cannot solve for sample_size: target power {target:.6f} needs "
                    f"{raw_n:.0f} subjects, more than {config.max_sample_size}"
                )
            return raw_n
        return solve_sample_size(
            lambda x: achieved_power(params, x, es, alpha),
            target,
            rule.min_sample_size(params),
            config,
        )

    if unknown == "effect_size":
        metric = thresholds(test)
        return solve_effect_size(
            lambda x: achieved_power(params, n, x, alpha),
            target,
            metric.floor,
            metric.ceiling,
            config,
        )

    return solve_significance_level(
        lambda x: achieved_power(params, n, es, x),
        target,
        config,
    )


def _prepare(params: PowerParameters, unknown: str | None) -> tuple[PowerParameters, str]:
    # A value sitting in the named unknown field is ignored
    if unknown in CORE_FIELDS and getattr(params, unknown) is not None:
        params = params.with_value(unknown, None)
    return params, validate(params, unknown)


def solve(
    params: PowerParameters,
    unknown: str | None = None,
    *,
    config: EngineConfig = DEFAULT_CONFIG,
) -> float | int:
    """Solve for the unknown core field and return the finalized value.

    Parameters
    ----------
    params : PowerParameters
        Three of the four core fields plus the test's nuisance fields.
    unknown : str or None
        ``'sample_size'``, ``'effect_size'``, ``'significance_level'`` or
        ``'power'``.  ``None`` solves for the single core field left as
        ``None``.
    config : EngineConfig
        Numeric limits (search bounds, rounding, tolerances).

    Returns
    -------
    float or int
        ``int`` for sample size, a rounded ``float`` otherwise.

    Raises
    ------
    PowerCalculationError
        One of its subclasses, naming why no value exists.

    Examples
    --------
    >>> from pystatspower import PowerParameters, TestFamily, solve
    >>> p = PowerParameters(TestFamily.TTEST_TWO_SAMPLE, sample_size=64,
    ...                     effect_size=0.5, significance_level=0.05, tail="two")
    >>> solve(p, "power")
    0.801
    """
    params, unknown = _prepare(params, unknown)
    raw = _raw_value(params, unknown, config)
    return finalize(unknown, raw, params.test, config)


def compute(
    params: PowerParameters,
    unknown: str | None = None,
    *,
    config: EngineConfig = DEFAULT_CONFIG,
) -> CalculationResult:
    """Compute the unknown core field; never raises for invalid inputs.

    Same arguments as :func:`solve`.  On failure the result has
    ``value=None`` and ``error`` set to the :class:`ErrorKind`; advisories
    that lower confidence in a successful value are in ``warnings``.
    """
    field = unknown if unknown is not None else "unknown"
    logger.debug("compute %s for %s", field, params.test.value)

    try:
        params, field = _prepare(params, unknown)
        value = finalize(field, _raw_value(params, field, config), params.test, config)
    except NoSolutionInRangeError as exc:
        logger.info("%s: no %s in range: %s", params.test.value, field, exc)
        return CalculationResult(
            test=params.test, field=field, value=None, error=exc.kind, message=str(exc),
        )
    except PowerCalculationError as exc:
        logger.debug("%s: %s failed (%s): %s", params.test.value, field, exc.kind.value, exc)
        return CalculationResult(
            test=params.test, field=field, value=None, error=exc.kind, message=str(exc),
        )

    notes = advisories(params, sample_size=value if field == "sample_size" else None)
    for note in notes:
        logger.info("%s: %s", params.test.value, note)
    return CalculationResult(test=params.test, field=field, value=value, warnings=notes)
