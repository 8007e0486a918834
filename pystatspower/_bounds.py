"""Final clamping and rounding of computed values.

This is the only place results are rounded or clamped: identical inputs
always map to identical reported values, and tiny numeric differences
between otherwise-equal calls disappear in the rounding.
"""

from __future__ import annotations

import math

from pystatspower._common import (
    CORE_FIELDS,
    DEFAULT_CONFIG,
    EngineConfig,
    NonFiniteResultError,
    TestFamily,
)
from pystatspower._effect import thresholds


def _clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))


def finalize(
    field: str,
    raw: float,
    test: TestFamily | str,
    config: EngineConfig = DEFAULT_CONFIG,
) -> float | int:
    """Bound and round a raw computed value for *field*.

    * ``power``, ``significance_level``: clamp to
      ``config.probability_bounds`` and round to ``config.decimals``.
    * ``sample_size``: ceiling, then clamp to
      ``[config.min_sample_size, config.max_sample_size]``; returns ``int``.
    * ``effect_size``: clamp to the metric's ``[floor, ceiling]`` and round.

    Raises
    ------
    NonFiniteResultError
        *raw* is NaN or infinite.
    """
    if field not in CORE_FIELDS:
        raise ValueError(f"field must be one of {CORE_FIELDS}, got {field!r}")
    if raw is None or not math.isfinite(raw):
        raise NonFiniteResultError(f"{field} evaluated to {raw}")

    if field == "sample_size":
        n = math.ceil(raw)
        return int(_clamp(n, config.min_sample_size, config.max_sample_size))

    if field == "effect_size":
        metric = thresholds(test)
        return round(_clamp(raw, metric.floor, metric.ceiling), config.decimals)

    lo, hi = config.probability_bounds
    return round(_clamp(raw, lo, hi), config.decimals)
