"""Tests for per-test schemas, defaults and validation."""

import math

import pytest

from pystatspower import (
    CORE_FIELDS,
    MissingFieldError,
    OutOfDomainError,
    PowerParameters,
    TestFamily,
    advisories,
    apply_defaults,
    defaults,
    description,
    display_name,
    required_fields,
    validate,
)


class TestSchemaLookup:

    def test_nineteen_families(self):
        assert len(TestFamily) == 19
        for test in TestFamily:
            assert display_name(test)
            assert description(test)

    def test_string_identifier(self):
        assert display_name("ttest-paired") == "Paired t-test"
        assert PowerParameters("anova").test is TestFamily.ANOVA

    def test_core_defaults(self):
        d = defaults(TestFamily.CORRELATION)
        assert d["significance_level"] == 0.05
        assert d["power"] == 0.80
        assert d["tail"] == "two"

    def test_paired_defaults(self):
        assert defaults(TestFamily.TTEST_PAIRED)["correlation"] == 0.5

    def test_linear_regression_needs_only_core(self):
        assert required_fields(TestFamily.LINEAR_REGRESSION) == frozenset(CORE_FIELDS)

    def test_mmrm_required_fields(self):
        assert {"time_points", "dropout_rate", "correlation"} <= required_fields(TestFamily.MMRM)

    def test_defaults_is_a_copy(self):
        d = defaults(TestFamily.ANOVA)
        d["groups"] = 99
        assert defaults(TestFamily.ANOVA)["groups"] == 3


class TestApplyDefaults:

    def test_fills_unset(self):
        p = apply_defaults(PowerParameters(TestFamily.ANOVA_TWO_WAY))
        assert (p.groups, p.columns, p.effect_term) == (2, 2, "interaction")

    def test_keeps_set_values(self):
        p = apply_defaults(PowerParameters(TestFamily.ANOVA, groups=5))
        assert p.groups == 5

    def test_switches_test(self):
        p = PowerParameters(TestFamily.ANOVA, sample_size=30, effect_size=0.25)
        q = apply_defaults(p, TestFamily.SEM)
        assert q.test is TestFamily.SEM
        assert q.degrees_of_freedom == 10
        assert q.sample_size == 30

    def test_never_fills_core(self):
        p = apply_defaults(PowerParameters(TestFamily.CORRELATION))
        assert p.significance_level is None
        assert p.power is None


def _valid(**kwargs):
    base = dict(sample_size=40, effect_size=0.5, significance_level=0.05)
    base.update(kwargs)
    return apply_defaults(PowerParameters(TestFamily.TTEST_TWO_SAMPLE, **base))


class TestValidate:

    def test_infers_unknown(self):
        assert validate(_valid()) == "power"

    def test_two_unknowns(self):
        with pytest.raises(MissingFieldError, match="Exactly one of"):
            validate(_valid(effect_size=None))

    def test_nothing_unknown(self):
        with pytest.raises(OutOfDomainError, match="cannot be inferred"):
            validate(_valid(power=0.8))

    def test_bad_unknown_name(self):
        with pytest.raises(OutOfDomainError, match="unknown must be one of"):
            validate(_valid(), "alpha")

    def test_alpha_out_of_range(self):
        with pytest.raises(OutOfDomainError, match=r"significance_level must be in \(0, 1\)"):
            validate(_valid(significance_level=1.5))

    def test_power_out_of_range(self):
        p = _valid(sample_size=None, power=1.0)
        with pytest.raises(OutOfDomainError, match=r"power must be in \(0, 1\)"):
            validate(p)

    def test_sample_size_too_small(self):
        with pytest.raises(OutOfDomainError, match="sample_size must be >= 2"):
            validate(_valid(sample_size=1))

    def test_nan_effect_size(self):
        with pytest.raises(OutOfDomainError, match="effect_size must be finite"):
            validate(_valid(effect_size=math.nan))

    def test_missing_nuisance(self):
        p = PowerParameters(TestFamily.ANOVA, sample_size=20, effect_size=0.25,
                            significance_level=0.05)
        with pytest.raises(MissingFieldError, match="groups is required"):
            validate(p)

    def test_non_integer_groups(self):
        p = apply_defaults(PowerParameters(TestFamily.ANOVA, sample_size=20, effect_size=0.25,
                                           significance_level=0.05, groups=2.5))
        with pytest.raises(OutOfDomainError, match="must be an integer"):
            validate(p)

    def test_bad_tail(self):
        with pytest.raises(OutOfDomainError, match="tail must be one of"):
            validate(_valid(tail="left"))

    def test_correlation_range(self):
        p = apply_defaults(PowerParameters(TestFamily.TTEST_PAIRED, sample_size=20,
                                           effect_size=0.5, significance_level=0.05,
                                           correlation=1.2))
        with pytest.raises(OutOfDomainError, match=r"correlation must be in \[-1, 1\]"):
            validate(p)

    def test_errors_are_value_errors(self):
        with pytest.raises(ValueError):
            validate(_valid(significance_level=0.0))


class TestAdvisories:

    def test_none_for_healthy_design(self):
        assert advisories(_valid(sample_size=64)) == ()

    def test_override_sample_size(self):
        p = apply_defaults(PowerParameters(TestFamily.TTEST_ONE_SAMPLE, effect_size=2.0,
                                           significance_level=0.05, power=0.8))
        assert advisories(p) == ()
        assert any("very small" in note for note in advisories(p, sample_size=5))

    def test_set_correlation_counts_both_sets(self):
        p = apply_defaults(PowerParameters(TestFamily.SET_CORRELATION, sample_size=40))
        assert any("observations per predictor" in note for note in advisories(p))
