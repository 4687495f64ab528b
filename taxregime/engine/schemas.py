"""
schemas.py — engine data contracts (pydantic v2).

Defines:
  - DeductionSet        (raw old-regime claims, one field per category)
  - DeductionBreakdown  (capped amounts actually applied in one regime)
  - TaxBreakdown        (full computation for one regime — pipeline output)
  - ComparisonResult    (both regimes + recommendation — compare_regimes output)

Results are frozen: built once per pipeline run, never mutated.
"""
from __future__ import annotations

from typing import List, Literal

from pydantic import BaseModel, ConfigDict, Field

from taxregime.engine.regime_config import Regime


# ---------------------------------------------------------------------------
# DeductionSet: raw itemised claims (old regime only)
# ---------------------------------------------------------------------------

class DeductionSet(BaseModel):
    """
    Claimed amounts per category, BEFORE caps. The engine applies each
    category's cap independently; callers never pre-cap.

    No ge=0 here: the engine clamps negatives to 0 so it stays total.
    The HTTP request schema is where negatives are rejected.
    """
    model_config = ConfigDict(frozen=True, extra="forbid")

    section_80c: float = 0            # Cap ₹1,50,000
    section_80d: float = 0            # Self + parents, age-dependent cap
    hra: float = 0                    # Eligible HRA exemption (Rule 2A already applied)
    home_loan_interest: float = 0     # Section 24(b), cap ₹2,00,000
    section_80tta_ttb: float = 0      # 80TTA ₹10K under60 / 80TTB ₹50K 60+
    section_80ccd1b: float = 0        # Employee NPS, cap ₹50,000
    other: float = 0                  # Uncapped


# ---------------------------------------------------------------------------
# DeductionBreakdown: what was actually deducted
# ---------------------------------------------------------------------------

class DeductionBreakdown(BaseModel):
    """
    All values are the ACTUAL deduction applied (after caps), not the raw input.
    New regime: only standard_deduction can be non-zero.
    """
    model_config = ConfigDict(frozen=True, extra="forbid")

    standard_deduction: float = 0
    section_80c: float = 0
    section_80d: float = 0
    hra: float = 0
    home_loan_interest: float = 0
    section_80tta_ttb: float = 0
    section_80ccd1b: float = 0
    other: float = 0


# ---------------------------------------------------------------------------
# TaxBreakdown: one regime
# ---------------------------------------------------------------------------

class TaxBreakdown(BaseModel):
    """
    Complete tax computation for a single regime.

    Computation sequence (order determines correctness):
      1. total_deductions = standard deduction (salaried only) + capped itemised
      2. taxable_income   = max(0, gross_income - total_deductions)
      3. tax_on_income    = progressive slab tax
      4. surcharge        = with marginal relief
      5. rebate           = 87A on tax_after_surcharge
      6. cess             = cess_rate × tax_before_cess   ← NOT on pre-87A tax
      7. total_tax        = tax_before_cess + cess
    """
    model_config = ConfigDict(frozen=True, extra="forbid")

    regime: Regime
    gross_income: float
    standard_deduction: float
    total_deductions: float          # Includes standard_deduction
    taxable_income: float
    tax_on_income: float
    surcharge: float
    tax_after_surcharge: float       # tax_on_income + surcharge
    rebate: float
    tax_before_cess: float           # tax_after_surcharge - rebate
    cess: float
    total_tax: float
    deduction_breakdown: DeductionBreakdown


# ---------------------------------------------------------------------------
# ComparisonResult: public output of compare_regimes()
# ---------------------------------------------------------------------------

class ComparisonResult(BaseModel):
    """
    Both regime breakdowns plus the recommendation.

    cheaper_regime: strictly lower total_tax wins; identical totals → "equal".
    savings: abs(old total - new total).
    """
    model_config = ConfigDict(frozen=True, extra="forbid")

    tax_year: str
    old_regime: TaxBreakdown
    new_regime: TaxBreakdown
    cheaper_regime: Literal["old", "new", "equal"]
    savings: float
    rationale: str

    old_regime_suggestions: List[str] = Field(default_factory=list)
    new_regime_suggestions: List[str] = Field(default_factory=list)


__all__ = [
    "DeductionSet",
    "DeductionBreakdown",
    "TaxBreakdown",
    "ComparisonResult",
]
