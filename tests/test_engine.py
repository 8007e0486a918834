"""Tests for compute/solve: error taxonomy, results, logging, determinism."""

import logging

import pytest

from pystatspower import (
    CalculationResult,
    EngineConfig,
    ErrorKind,
    InvalidEffectSizeError,
    MissingFieldError,
    NoSolutionInRangeError,
    PowerCalculationError,
    PowerParameters,
    TestFamily,
    apply_defaults,
    compute,
    solve,
)


def _params(test=TestFamily.TTEST_TWO_SAMPLE, **kwargs):
    kwargs.setdefault("significance_level", 0.05)
    return apply_defaults(PowerParameters(test, **kwargs))


class TestComputeResult:

    def test_success(self):
        r = compute(_params(sample_size=64, effect_size=0.5), "power")
        assert isinstance(r, CalculationResult)
        assert r.ok
        assert r.field == "power"
        assert r.value == 0.801
        assert r.error is None
        assert r.test is TestFamily.TTEST_TWO_SAMPLE

    def test_unknown_inferred(self):
        r = compute(_params(effect_size=0.5, power=0.80))
        assert r.field == "sample_size"
        assert r.value == 64

    def test_named_unknown_overrides_supplied_value(self):
        """A value already sitting in the unknown field is ignored."""
        r = compute(_params(sample_size=10, effect_size=0.5, power=0.80), "sample_size")
        assert r.value == 64

    def test_string_test_identifier(self):
        p = apply_defaults(PowerParameters("ttest-two-sample", sample_size=64, effect_size=0.5,
                                           significance_level=0.05))
        assert compute(p).value == 0.801

    def test_summary(self):
        text = compute(_params(sample_size=64, effect_size=0.5)).summary()
        assert "ttest-two-sample" in text
        assert "power = 0.801" in text

    def test_failure_summary(self):
        text = compute(_params(effect_size=0.5)).summary()
        assert "(no result)" in text
        assert "MissingField" in text


class TestErrorTaxonomy:
    """compute never raises for recoverable failures; solve raises them."""

    def test_two_unknowns(self):
        r = compute(_params(effect_size=0.5))
        assert r.value is None
        assert r.error == ErrorKind.MISSING_FIELD
        assert "Exactly one of" in r.message

    def test_nothing_unknown(self):
        r = compute(_params(sample_size=64, effect_size=0.5, power=0.8))
        assert r.error == ErrorKind.OUT_OF_DOMAIN

    def test_missing_nuisance(self):
        p = PowerParameters(TestFamily.ANOVA, sample_size=20, effect_size=0.25,
                            significance_level=0.05)
        assert compute(p).error == ErrorKind.MISSING_FIELD
        with pytest.raises(MissingFieldError):
            solve(p)

    def test_unreachable_target(self):
        """Power 0.999999 at d=0.01 needs far more than 10,000 per group."""
        p = _params(effect_size=0.01, power=0.999999)
        r = compute(p, "sample_size")
        assert r.value is None
        assert r.error == ErrorKind.NO_SOLUTION_IN_RANGE
        with pytest.raises(NoSolutionInRangeError, match="Cannot solve for sample_size"):
            solve(p, "sample_size")

    def test_raising_cap_finds_large_n(self):
        p = _params(effect_size=0.03, power=0.80)
        assert compute(p).error == ErrorKind.NO_SOLUTION_IN_RANGE
        n = solve(p, config=EngineConfig(max_sample_size=50_000))
        assert 17_000 < n < 18_000

    def test_closed_form_respects_cap(self):
        p = _params(TestFamily.LOGISTIC_REGRESSION, effect_size=1.02, power=0.80)
        assert compute(p).error == ErrorKind.NO_SOLUTION_IN_RANGE

    def test_unreachable_power_for_effect_size(self):
        p = _params(sample_size=2, power=0.99)
        assert compute(p, "effect_size").error == ErrorKind.NO_SOLUTION_IN_RANGE

    def test_zero_effect(self):
        p = _params(effect_size=0.0, power=0.8)
        with pytest.raises(InvalidEffectSizeError, match="no effect"):
            solve(p)

    def test_all_errors_share_base(self):
        p = _params(effect_size=0.01, power=0.999999)
        with pytest.raises(PowerCalculationError) as info:
            solve(p)
        assert info.value.kind == ErrorKind.NO_SOLUTION_IN_RANGE

    @pytest.mark.parametrize("test", list(TestFamily))
    def test_compute_never_raises_on_garbage(self, test):
        p = apply_defaults(PowerParameters(test, sample_size=-5, effect_size=float("nan"),
                                           significance_level=2.0))
        r = compute(p, "power")
        assert r.value is None
        assert r.error is not None


class TestDeterminism:

    @pytest.mark.parametrize("unknown, kwargs", [
        ("power", dict(sample_size=37, effect_size=0.42)),
        ("sample_size", dict(effect_size=0.42, power=0.85)),
        ("effect_size", dict(sample_size=37, power=0.85)),
        ("significance_level", dict(sample_size=37, effect_size=0.42, power=0.6,
                                    significance_level=None)),
    ])
    def test_repeated_calls_identical(self, unknown, kwargs):
        p = _params(**kwargs)
        first = compute(p, unknown)
        second = compute(p, unknown)
        assert first.ok
        assert first == second


class TestLogging:

    def test_no_solution_logged_at_info(self, caplog):
        caplog.set_level(logging.INFO, logger="pystatspower")
        compute(_params(effect_size=0.01, power=0.999999))
        assert any(rec.levelno == logging.INFO and "no sample_size in range" in rec.getMessage()
                   for rec in caplog.records)

    def test_advisory_logged(self, caplog):
        caplog.set_level(logging.INFO, logger="pystatspower")
        p = _params(TestFamily.MULTIPLE_REGRESSION, sample_size=10, effect_size=0.15,
                    predictors=5)
        r = compute(p)
        assert r.warnings
        assert any(r.warnings[0] in rec.getMessage() for rec in caplog.records)

    def test_library_is_silent_by_default(self):
        handlers = logging.getLogger("pystatspower").handlers
        assert any(isinstance(h, logging.NullHandler) for h in handlers)
