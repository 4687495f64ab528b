"""
Calculator unit tests — slab tax, surcharge with marginal relief, 87A rebate.

All expected values hand-computed from the FY2025-26 tables.

Groups:
  1. compute_slab_tax — boundaries, age tables, continuity
  2. compute_surcharge — bracket selection, marginal relief, own-slab baseline
  3. compute_rebate — cliff exactness
"""
from __future__ import annotations

import pytest

from taxregime.engine.calculators import (
    compute_rebate,
    compute_slab_tax,
    compute_surcharge,
)
from taxregime.engine.regime_config import (
    NEW_REGIME_SLABS_FY2024_25,
    NEW_REGIME_SLABS_FY2025_26,
    NEW_REGIME_SURCHARGE,
    OLD_REGIME_SLABS,
    OLD_REGIME_SURCHARGE,
    AgeBracket,
)

UNDER60 = OLD_REGIME_SLABS[AgeBracket.under60]
SENIOR = OLD_REGIME_SLABS[AgeBracket.senior60to80]
SUPER_SENIOR = OLD_REGIME_SLABS[AgeBracket.super_senior80plus]


# ===========================================================================
# TEST GROUP 1: compute_slab_tax
# ===========================================================================

@pytest.mark.parametrize(
    "income, slabs, expected",
    [
        (0, UNDER60, 0),
        (250_000, UNDER60, 0),
        (500_000, UNDER60, 12_500),
        (600_000, UNDER60, 32_500),              # 0 + 12500 + 20000
        (1_000_000, UNDER60, 112_500),
        (1_500_000, UNDER60, 262_500),           # 112500 + 30% × 5L
        (300_000, SENIOR, 0),
        (500_000, SENIOR, 10_000),               # 5% × 2L
        (1_000_000, SENIOR, 110_000),
        (500_000, SUPER_SENIOR, 0),
        (1_000_000, SUPER_SENIOR, 100_000),
        (1_200_000, SUPER_SENIOR, 160_000),
        (925_000, NEW_REGIME_SLABS_FY2025_26, 32_500),     # 20000 + 12500
        (1_200_000, NEW_REGIME_SLABS_FY2025_26, 60_000),
        (2_400_000, NEW_REGIME_SLABS_FY2025_26, 300_000),
        (3_000_000, NEW_REGIME_SLABS_FY2025_26, 480_000),
        (700_000, NEW_REGIME_SLABS_FY2024_25, 20_000),
        (1_000_000, NEW_REGIME_SLABS_FY2024_25, 50_000),
    ],
)
def test_slab_tax_known_values(income: float, slabs, expected: float) -> None:
    assert compute_slab_tax(income, slabs) == pytest.approx(expected, abs=0.01)


def test_slab_tax_boundary_uses_own_rate_not_next() -> None:
    """₹10L exactly is taxed at 20% up to the boundary; the 30% slab is untouched."""
    at_boundary = compute_slab_tax(1_000_000, UNDER60)
    one_more = compute_slab_tax(1_000_001, UNDER60)
    assert at_boundary == pytest.approx(112_500, abs=0.01)
    assert one_more - at_boundary == pytest.approx(0.30, abs=1e-6)


@pytest.mark.parametrize(
    "slabs",
    [UNDER60, SENIOR, SUPER_SENIOR, NEW_REGIME_SLABS_FY2025_26, NEW_REGIME_SLABS_FY2024_25],
)
def test_slab_tax_continuous_at_every_boundary(slabs) -> None:
    """No jump at any slab boundary: tax(b - ε) → tax(b)."""
    for slab in slabs[:-1]:
        b = slab.upper_bound
        assert compute_slab_tax(b - 1e-6, slabs) == pytest.approx(
            compute_slab_tax(b, slabs), abs=1e-3,
        )


def test_slab_tax_non_decreasing() -> None:
    previous = 0.0
    for income in range(0, 3_000_001, 25_000):
        tax = compute_slab_tax(income, NEW_REGIME_SLABS_FY2025_26)
        assert tax >= previous
        previous = tax


# ===========================================================================
# TEST GROUP 2: compute_surcharge
# ===========================================================================

def _old_surcharge(income: float) -> float:
    tax = compute_slab_tax(income, UNDER60)
    return compute_surcharge(income, tax, OLD_REGIME_SURCHARGE, UNDER60)


def _new_surcharge(income: float) -> float:
    tax = compute_slab_tax(income, NEW_REGIME_SLABS_FY2025_26)
    return compute_surcharge(income, tax, NEW_REGIME_SURCHARGE, NEW_REGIME_SLABS_FY2025_26)


def test_no_surcharge_at_or_below_first_threshold() -> None:
    """Threshold is strict: ₹50L exactly attracts no surcharge."""
    assert _old_surcharge(4_000_000) == 0.0
    assert _old_surcharge(5_000_000) == 0.0


def test_no_surcharge_when_no_tax() -> None:
    assert compute_surcharge(6_000_000, 0.0, OLD_REGIME_SURCHARGE, UNDER60) == 0.0


def test_marginal_relief_just_above_50_lakh() -> None:
    """
    ₹51.5L: slab tax 13,57,500, naive 10% = 1,35,750.
    Baseline at ₹50L = 13,12,500 → cap = 13,12,500 + 1,50,000 = 14,62,500.
    Relieved surcharge = 14,62,500 - 13,57,500 = 1,05,000.
    """
    assert _old_surcharge(5_150_000) == pytest.approx(105_000, abs=0.01)


def test_relief_not_binding_well_above_threshold() -> None:
    """₹80L: naive 10% of 22,12,500 = 2,21,250 is far below the relief cap."""
    assert _old_surcharge(8_000_000) == pytest.approx(221_250, abs=0.01)


def test_relief_baseline_carries_lower_bracket_surcharge() -> None:
    """
    ₹1.001Cr: baseline at ₹1Cr = 28,12,500 + 10% surcharge 2,81,250 = 30,93,750.
    Cap = 30,93,750 + 10,000 = 31,03,750; slab tax = 28,15,500
    → relieved surcharge = 2,88,250 (naive 15% would be 4,22,325).
    """
    assert _old_surcharge(10_010_000) == pytest.approx(288_250, abs=0.01)


def test_relief_baseline_uses_same_regime_slabs() -> None:
    """
    New regime ₹51L: slab tax 11,10,000, naive 1,11,000.
    New-regime baseline at ₹50L = 10,80,000 → cap 11,80,000 → surcharge 70,000.
    An old-regime baseline (13,12,500) would leave the naive 1,11,000 unrelieved.
    """
    assert _new_surcharge(5_100_000) == pytest.approx(70_000, abs=0.01)


def test_top_bracket_rates_per_regime() -> None:
    """₹6Cr: old regime 37% surcharge, new regime capped at 25%."""
    assert _old_surcharge(60_000_000) == pytest.approx(0.37 * 17_812_500, abs=0.01)
    assert _new_surcharge(60_000_000) == pytest.approx(0.25 * 17_580_000, abs=0.01)


@pytest.mark.parametrize("threshold", [5_000_000, 10_000_000, 20_000_000, 50_000_000])
@pytest.mark.parametrize("excess", [1, 1_000, 50_000, 250_000])
def test_relief_bound_at_every_threshold(threshold: float, excess: float) -> None:
    """(tax + surcharge)(L + x) - (tax + surcharge)(L) <= x."""
    def payable(income: float) -> float:
        return compute_slab_tax(income, UNDER60) + _old_surcharge(income)

    increase = payable(threshold + excess) - payable(threshold)
    assert increase <= excess + 1e-6


def test_surcharge_never_negative() -> None:
    for income in range(5_000_001, 5_400_001, 20_000):
        assert _old_surcharge(income) >= 0.0
        assert _new_surcharge(income) >= 0.0


# ===========================================================================
# TEST GROUP 3: compute_rebate
# ===========================================================================

def test_rebate_full_at_limit() -> None:
    assert compute_rebate(500_000, 12_500, 500_000, 12_500) == 12_500


def test_rebate_zero_one_rupee_above_limit() -> None:
    assert compute_rebate(500_001, 12_500.2, 500_000, 12_500) == 0.0


def test_rebate_capped_at_max_amount() -> None:
    assert compute_rebate(1_200_000, 75_000, 1_200_000, 60_000) == 60_000


def test_rebate_never_exceeds_tax() -> None:
    assert compute_rebate(300_000, 2_500, 500_000, 12_500) == 2_500
