"""
calculators.py — the three pure calculators composed by the regime pipelines.

  compute_slab_tax   — progressive slab tax
  compute_surcharge  — surcharge with marginal relief at bracket thresholds
  compute_rebate     — Section 87A rebate (hard cliff at the income limit)

Pure functions — no side effects, no I/O, no module-level lookups. Every table
arrives as an argument.
"""
from __future__ import annotations

from typing import Optional, Sequence

from taxregime.engine.regime_config import SurchargeBracket, TaxSlab


def compute_slab_tax(income: float, slabs: Sequence[TaxSlab]) -> float:
    """
    Apply progressive slab tax to income using a bracket-list pattern.
    Accumulates tax on each slab, stops once income <= the slab's upper bound.

    Income exactly on a boundary is fully taxed at that slab's rate, never the
    next one.
    """
    tax = 0.0
    prev_ceiling = 0.0
    for slab in slabs:
        if income <= prev_ceiling:
            break
        slab_income = min(income, slab.upper_bound) - prev_ceiling
        tax += slab_income * slab.rate
        prev_ceiling = slab.upper_bound
        if income <= slab.upper_bound:
            break
    return tax


def _select_bracket(
    taxable_income: float,
    brackets: Sequence[SurchargeBracket],
) -> Optional[SurchargeBracket]:
    """Highest bracket whose lower_bound is strictly below taxable_income."""
    applicable = None
    for bracket in brackets:
        if taxable_income > bracket.lower_bound:
            applicable = bracket
        else:
            break
    return applicable


def compute_surcharge(
    taxable_income: float,
    tax_on_income: float,
    brackets: Sequence[SurchargeBracket],
    slabs: Sequence[TaxSlab],
) -> float:
    """
    Surcharge on tax_on_income, with marginal relief.

    Marginal relief: tax + surcharge at income I above threshold L may not
    exceed (tax + surcharge at L) + (I - L). The baseline at L is computed
    recursively with the same slabs, so it carries the surcharge (and relief)
    of the bracket immediately below L.

    slabs MUST be the table that produced tax_on_income — same regime, same
    age bracket.
    """
    if tax_on_income <= 0:
        return 0.0

    bracket = _select_bracket(taxable_income, brackets)
    if bracket is None:
        return 0.0

    surcharge = tax_on_income * bracket.rate

    threshold = bracket.lower_bound
    tax_at_threshold = compute_slab_tax(threshold, slabs)
    payable_at_threshold = tax_at_threshold + compute_surcharge(
        threshold, tax_at_threshold, brackets, slabs,
    )
    excess_income = taxable_income - threshold
    relieved = payable_at_threshold + excess_income - tax_on_income

    return max(0.0, min(surcharge, relieved))


def compute_rebate(
    taxable_income: float,
    tax_after_surcharge: float,
    rebate_income_limit: float,
    rebate_max_amount: float,
) -> float:
    """
    Section 87A rebate.
    taxable_income <= limit: rebate = min(tax, max_amount).
    taxable_income >  limit: NO rebate at all — no marginal relief on this cliff.
    """
    if taxable_income <= rebate_income_limit:
        return min(tax_after_surcharge, rebate_max_amount)
    return 0.0


__all__ = [
    "compute_slab_tax",
    "compute_surcharge",
    "compute_rebate",
]
