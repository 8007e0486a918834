"""Tests for the one-sample, two-sample and paired t-tests."""

import pytest

from pystatspower import (
    ErrorKind,
    PowerParameters,
    TestFamily,
    apply_defaults,
    compute,
    solve,
)


def _params(test, **kwargs):
    kwargs.setdefault("significance_level", 0.05)
    return apply_defaults(PowerParameters(test, **kwargs))


class TestTwoSampleSolvePower:
    """Solve for power (given n per group, d, alpha)."""

    def test_n64_d05(self):
        """n=64 per group, d=0.5, alpha=0.05 gives power ~ 0.80."""
        p = _params(TestFamily.TTEST_TWO_SAMPLE, sample_size=64, effect_size=0.5)
        assert solve(p, "power") == pytest.approx(0.80, abs=0.02)

    def test_matches_pwr(self):
        """pwr.t.test(n=64, d=0.5) = 0.8014596."""
        p = _params(TestFamily.TTEST_TWO_SAMPLE, sample_size=64, effect_size=0.5)
        assert solve(p, "power") == 0.801

    def test_power_increases_with_n(self):
        powers = [
            solve(_params(TestFamily.TTEST_TWO_SAMPLE, sample_size=n, effect_size=0.5), "power")
            for n in [20, 40, 60, 80, 100]
        ]
        for i in range(len(powers) - 1):
            assert powers[i] < powers[i + 1]

    def test_negative_d_same_power(self):
        """The sign of d only encodes direction."""
        pos = _params(TestFamily.TTEST_TWO_SAMPLE, sample_size=30, effect_size=0.5)
        neg = _params(TestFamily.TTEST_TWO_SAMPLE, sample_size=30, effect_size=-0.5)
        assert solve(pos, "power") == solve(neg, "power")

    def test_large_n_high_power(self):
        p = _params(TestFamily.TTEST_TWO_SAMPLE, sample_size=5000, effect_size=0.5)
        assert solve(p, "power") == 0.999


class TestTwoSampleSolveN:
    """Solve for n per group (given d, alpha, power)."""

    def test_classic_textbook(self):
        """d=0.5, alpha=0.05, power=0.80 -> n=64 per group."""
        p = _params(TestFamily.TTEST_TWO_SAMPLE, effect_size=0.5, power=0.80)
        n = solve(p, "sample_size")
        assert n == 64
        assert isinstance(n, int)

    def test_small_effect(self):
        p = _params(TestFamily.TTEST_TWO_SAMPLE, effect_size=0.2, power=0.80)
        assert solve(p) > 300

    def test_large_effect(self):
        p = _params(TestFamily.TTEST_TWO_SAMPLE, effect_size=0.8, power=0.80)
        assert solve(p) < 30

    def test_one_tailed_smaller_n(self):
        two = _params(TestFamily.TTEST_TWO_SAMPLE, effect_size=0.5, power=0.80)
        one = _params(TestFamily.TTEST_TWO_SAMPLE, effect_size=0.5, power=0.80, tail="one")
        assert solve(one) < solve(two)

    def test_higher_power_more_n(self):
        r80 = solve(_params(TestFamily.TTEST_TWO_SAMPLE, effect_size=0.5, power=0.80))
        r90 = solve(_params(TestFamily.TTEST_TWO_SAMPLE, effect_size=0.5, power=0.90))
        assert r90 > r80

    def test_lower_alpha_more_n(self):
        r05 = solve(_params(TestFamily.TTEST_TWO_SAMPLE, effect_size=0.5, power=0.80))
        r01 = solve(_params(
            TestFamily.TTEST_TWO_SAMPLE, effect_size=0.5, power=0.80, significance_level=0.01,
        ))
        assert r01 > r05

    def test_zero_effect_cannot_solve_n(self):
        p = _params(TestFamily.TTEST_TWO_SAMPLE, effect_size=0.0, power=0.80)
        r = compute(p, "sample_size")
        assert r.value is None
        assert r.error == ErrorKind.INVALID_EFFECT_SIZE


class TestTwoSampleSolveOther:

    def test_solve_d(self):
        """n=64, power=0.80 -> d ~ 0.5."""
        p = _params(TestFamily.TTEST_TWO_SAMPLE, sample_size=64, power=0.80)
        assert solve(p, "effect_size") == pytest.approx(0.5, abs=0.01)

    def test_solve_alpha(self):
        """n=64, d=0.5, power=0.80 -> alpha just under 0.05."""
        p = _params(
            TestFamily.TTEST_TWO_SAMPLE, sample_size=64, effect_size=0.5, power=0.80,
            significance_level=None,
        )
        assert solve(p, "significance_level") == pytest.approx(0.05, abs=0.003)


class TestOneSample:

    def test_solve_n(self):
        """pwr.t.test(d=0.5, power=0.8, type='one.sample') -> n = 33.37 -> 34."""
        p = _params(TestFamily.TTEST_ONE_SAMPLE, effect_size=0.5, power=0.80)
        assert solve(p) == 34

    def test_fewer_than_two_sample(self):
        one = _params(TestFamily.TTEST_ONE_SAMPLE, effect_size=0.5, power=0.80)
        two = _params(TestFamily.TTEST_TWO_SAMPLE, effect_size=0.5, power=0.80)
        assert solve(one) < solve(two)


class TestPaired:

    def test_rho_half_equals_one_sample(self):
        """With rho = 0.5 the difference scores have unit d."""
        paired = _params(TestFamily.TTEST_PAIRED, effect_size=0.5, power=0.80)
        one = _params(TestFamily.TTEST_ONE_SAMPLE, effect_size=0.5, power=0.80)
        assert paired.correlation == 0.5
        assert solve(paired) == solve(one)

    def test_higher_correlation_fewer_pairs(self):
        low = _params(TestFamily.TTEST_PAIRED, effect_size=0.5, power=0.80, correlation=0.2)
        high = _params(TestFamily.TTEST_PAIRED, effect_size=0.5, power=0.80, correlation=0.8)
        assert solve(high) < solve(low)

    def test_correlation_one_invalid(self):
        p = _params(TestFamily.TTEST_PAIRED, sample_size=20, effect_size=0.5, correlation=1.0)
        r = compute(p, "power")
        assert r.error == ErrorKind.INVALID_DOMAIN
        assert "correlation 1" in r.message
