"""Tests for one-way and two-way ANOVA."""

import pytest

from pystatspower import (
    ErrorKind,
    PowerParameters,
    TestFamily,
    achieved_power,
    apply_defaults,
    compute,
    solve,
)


def _params(test, **kwargs):
    kwargs.setdefault("significance_level", 0.05)
    return apply_defaults(PowerParameters(test, **kwargs))


class TestAnovaOneway:
    """Tests for one-way ANOVA power."""

    def test_benchmark_n(self):
        """k=3, f=0.25, power=0.80 -> about 52 per group (pwr: 52.4)."""
        p = _params(TestFamily.ANOVA, effect_size=0.25, power=0.80)
        n = solve(p, "sample_size")
        assert 50 <= n <= 55

    def test_solve_power(self):
        p = _params(TestFamily.ANOVA, sample_size=50, effect_size=0.25)
        pwr = solve(p, "power")
        assert 0.0 < pwr < 1.0

    def test_solve_f(self):
        p = _params(TestFamily.ANOVA, sample_size=50, power=0.80)
        f = solve(p, "effect_size")
        assert 0.2 < f < 0.3

    def test_roundtrip(self):
        """Solve n, then verify power >= target."""
        p = _params(TestFamily.ANOVA, effect_size=0.25, power=0.80)
        n = solve(p)
        assert solve(p.with_value("sample_size", n), "power") >= 0.80

    def test_more_groups_more_total(self):
        n3 = solve(_params(TestFamily.ANOVA, effect_size=0.25, power=0.80, groups=3))
        n5 = solve(_params(TestFamily.ANOVA, effect_size=0.25, power=0.80, groups=5))
        assert n5 * 5 >= n3 * 3

    def test_groups_less_than_2_error(self):
        p = _params(TestFamily.ANOVA, effect_size=0.25, power=0.80, groups=1)
        r = compute(p)
        assert r.error == ErrorKind.OUT_OF_DOMAIN
        assert "groups must be >= 2" in r.message

    def test_zero_f_invalid(self):
        p = _params(TestFamily.ANOVA, sample_size=20, effect_size=0.0)
        assert compute(p, "power").error == ErrorKind.INVALID_EFFECT_SIZE


class TestAnovaTwoWay:
    """Tests for two-way factorial ANOVA."""

    def test_defaults_interaction(self):
        p = _params(TestFamily.ANOVA_TWO_WAY, effect_size=0.25, power=0.80)
        assert p.effect_term == "interaction"
        assert isinstance(solve(p), int)

    def test_2x2_terms_agree(self):
        """In a 2x2 design every term has one numerator df."""
        base = _params(TestFamily.ANOVA_TWO_WAY, sample_size=20, effect_size=0.25)
        powers = {
            term: solve(base.with_value("effect_term", term), "power")
            for term in ("interaction", "main_a", "main_b")
        }
        assert len(set(powers.values())) == 1

    def test_more_cells_more_power_for_main_effect(self):
        """At fixed n per cell, a 2x3 main effect A has more cells than 2x2 and the same df1."""
        a = _params(TestFamily.ANOVA_TWO_WAY, sample_size=10, effect_size=0.25,
                    effect_term="main_a")
        b = a.with_value("columns", 3)
        assert achieved_power(b, 10, 0.25, 0.05) > achieved_power(a, 10, 0.25, 0.05)

    def test_invalid_effect_term(self):
        p = _params(TestFamily.ANOVA_TWO_WAY, sample_size=20, effect_size=0.25,
                    effect_term="main_c")
        r = compute(p, "power")
        assert r.error == ErrorKind.OUT_OF_DOMAIN
        assert "effect_term" in r.message

    def test_solve_f(self):
        p = _params(TestFamily.ANOVA_TWO_WAY, sample_size=20, power=0.80)
        assert solve(p, "effect_size") == pytest.approx(0.32, abs=0.05)
