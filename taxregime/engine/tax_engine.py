"""
Tax Engine — Old vs New regime pipelines and comparison.
Pure Python, deterministic. Same input → same output.

Pipeline (both regimes, strictly sequential):
  deductions → taxable income → slab tax → surcharge (marginal relief)
  → 87A rebate → cess → total

Regime tables come in as RegimeConfig arguments. Defaults are the FY2025-26
constants; pass the FY2024-25 pair (or any other RegimeConfig) to switch years.
"""
from __future__ import annotations

from typing import Dict, Optional

from taxregime.engine.calculators import (
    compute_rebate,
    compute_slab_tax,
    compute_surcharge,
)
from taxregime.engine.regime_config import (
    NEW_REGIME_FY2025_26,
    OLD_REGIME_FY2025_26,
    AgeBracket,
    RegimeConfig,
)
from taxregime.engine.schemas import (
    ComparisonResult,
    DeductionBreakdown,
    DeductionSet,
    TaxBreakdown,
)

HRA_METRO_PCT     = 0.50
HRA_NON_METRO_PCT = 0.40
HRA_RENT_EXCESS_PCT = 0.10


# ===========================================================================
# INTERNAL HELPERS (pure functions: no side effects, no I/O)
# ===========================================================================

def _clamp(amount: float) -> float:
    """Negative money never reaches a calculator — it becomes 0."""
    return max(0.0, float(amount or 0.0))


def _paise(amount: float) -> float:
    return round(amount, 2)


def _cap_deductions(
    deductions: DeductionSet,
    caps: Dict[str, float],
) -> Dict[str, float]:
    """Apply each category's ceiling independently. No combined ceiling."""
    claimed = deductions.model_dump()
    return {
        category: min(_clamp(claimed[category]), cap)
        for category, cap in caps.items()
    }


def _run_pipeline(
    config: RegimeConfig,
    gross_income: float,
    age_bracket: AgeBracket,
    breakdown: DeductionBreakdown,
) -> TaxBreakdown:
    """
    Stages 2–7, shared by both regimes. breakdown already holds the capped
    deductions (stage 1), which differ per regime.
    """
    total_deductions = sum(breakdown.model_dump().values())

    # Step 2: Taxable income (never negative)
    taxable_income = max(0.0, gross_income - total_deductions)

    # Step 3: Slab tax: age-specific table for old regime, single table for new
    slabs = config.slabs_for(age_bracket)
    tax_on_income = compute_slab_tax(taxable_income, slabs)

    # Step 4: Surcharge: marginal relief baseline uses the SAME slabs
    surcharge = compute_surcharge(
        taxable_income, tax_on_income, config.surcharge_brackets, slabs,
    )
    tax_after_surcharge = tax_on_income + surcharge

    # Step 5: 87A rebate (on tax after surcharge)
    rebate = compute_rebate(
        taxable_income,
        tax_after_surcharge,
        config.rebate_income_limit,
        config.rebate_max_amount,
    )
    tax_before_cess = max(0.0, tax_after_surcharge - rebate)

    # Step 6: Cess (on post-87A tax: NOT on pre-87A tax)
    cess = tax_before_cess * config.cess_rate

    # Step 7: Final tax
    total_tax = tax_before_cess + cess

    return TaxBreakdown(
        regime=config.regime,
        gross_income=_paise(gross_income),
        standard_deduction=_paise(breakdown.standard_deduction),
        total_deductions=_paise(total_deductions),
        taxable_income=_paise(taxable_income),
        tax_on_income=_paise(tax_on_income),
        surcharge=_paise(surcharge),
        tax_after_surcharge=_paise(tax_after_surcharge),
        rebate=_paise(rebate),
        tax_before_cess=_paise(tax_before_cess),
        cess=_paise(cess),
        total_tax=_paise(total_tax),
        deduction_breakdown=breakdown,
    )


def calculate_hra_exemption(
    basic_salary: float,
    hra_received: float,
    annual_rent_paid: float,
    is_metro: bool,
) -> float:
    """
    HRA exemption under Section 10(13A), Rule 2A.
    Returns the minimum of three components. Returns 0 if no HRA received or no rent paid.

    Component 1: HRA received from employer
    Component 2: 50% of basic_salary (metro) or 40% (non-metro)
    Component 3: max(0, annual_rent - 10% of basic_salary)  ← MUST clip at 0
    """
    basic = _clamp(basic_salary)
    hra = _clamp(hra_received)
    rent = _clamp(annual_rent_paid)
    if hra == 0 or rent == 0:
        return 0.0
    metro_pct = HRA_METRO_PCT if is_metro else HRA_NON_METRO_PCT
    component_1 = hra
    component_2 = metro_pct * basic
    component_3 = max(0.0, rent - HRA_RENT_EXCESS_PCT * basic)
    return min(component_1, component_2, component_3)


# ===========================================================================
# OLD REGIME CALCULATOR
# ===========================================================================

def calculate_old_regime(
    gross_income: float,
    age_bracket: AgeBracket,
    deductions: Optional[DeductionSet] = None,
    is_salaried: bool = True,
    config: RegimeConfig = OLD_REGIME_FY2025_26,
) -> TaxBreakdown:
    """
    Old regime tax calculation.

    Deductions allowed: standard deduction ₹50K (salaried only), 80C, 80D,
    HRA exemption, 24(b), 80TTA/TTB, 80CCD(1B), other — each capped on its own.
    Slabs depend on age bracket. 87A: up to ₹12,500 if taxable <= ₹5L.
    """
    age_bracket = AgeBracket(age_bracket)
    deductions = deductions or DeductionSet()

    # Step 1: Deduction aggregation: caps resolved once for this age bracket
    caps = config.deduction_caps.caps_for(age_bracket)
    capped = _cap_deductions(deductions, caps)
    breakdown = DeductionBreakdown(
        standard_deduction=float(config.standard_deduction) if is_salaried else 0.0,
        **capped,
    )

    return _run_pipeline(config, _clamp(gross_income), age_bracket, breakdown)


# ===========================================================================
# NEW REGIME CALCULATOR
# ===========================================================================

def calculate_new_regime(
    gross_income: float,
    is_salaried: bool = True,
    config: RegimeConfig = NEW_REGIME_FY2025_26,
) -> TaxBreakdown:
    """
    New regime tax calculation (Section 115BAC).

    Deductions allowed: standard deduction only (₹75K, salaried only).
    One slab table for every age. Surcharge tops out at 25%.
    FY2025-26 87A: up to ₹60,000 if taxable <= ₹12L.
    """
    breakdown = DeductionBreakdown(
        standard_deduction=float(config.standard_deduction) if is_salaried else 0.0,
    )
    # Age is irrelevant: every bracket maps to the same slab table
    return _run_pipeline(config, _clamp(gross_income), AgeBracket.under60, breakdown)


# ===========================================================================
# COMPARE REGIMES: public API
# ===========================================================================

def _build_rationale(
    old: TaxBreakdown,
    new: TaxBreakdown,
    cheaper: str,
    savings: float,
) -> str:
    if cheaper == "equal":
        return (
            f"Both regimes result in the same tax (₹{old.total_tax:,.0f}). "
            "Either regime can be chosen without any difference in liability."
        )
    if cheaper == "old":
        return (
            f"Old Regime saves ₹{savings:,.0f} over the New Regime. "
            f"Your deductions of ₹{old.total_deductions:,.0f} outweigh the New Regime's "
            f"lower slab rates (Old ₹{old.total_tax:,.0f} vs New ₹{new.total_tax:,.0f})."
        )
    return (
        f"New Regime saves ₹{savings:,.0f} over the Old Regime. "
        f"Your Old Regime deductions of ₹{old.total_deductions:,.0f} are not enough to "
        f"overcome the New Regime's lower slab rates "
        f"(New ₹{new.total_tax:,.0f} vs Old ₹{old.total_tax:,.0f})."
    )


def compare_regimes(
    gross_income: float,
    is_salaried: bool,
    age_bracket: AgeBracket,
    deductions: Optional[DeductionSet] = None,
    old_config: RegimeConfig = OLD_REGIME_FY2025_26,
    new_config: RegimeConfig = NEW_REGIME_FY2025_26,
) -> ComparisonResult:
    """
    Compare old and new regime tax for the same gross income and salaried flag.
    Old-regime deductions are ignored by the new regime.
    Strictly lower total wins; identical totals report "equal".
    """
    # Local import: optimizer re-runs calculate_old_regime from this module
    from taxregime.engine.optimizer import (
        generate_new_suggestions,
        generate_old_suggestions,
    )

    age_bracket = AgeBracket(age_bracket)
    old = calculate_old_regime(gross_income, age_bracket, deductions, is_salaried, old_config)
    new = calculate_new_regime(gross_income, is_salaried, new_config)

    if old.total_tax < new.total_tax:
        cheaper = "old"
    elif new.total_tax < old.total_tax:
        cheaper = "new"
    else:
        cheaper = "equal"
    savings = _paise(abs(old.total_tax - new.total_tax))

    return ComparisonResult(
        tax_year=old_config.tax_year,
        old_regime=old,
        new_regime=new,
        cheaper_regime=cheaper,
        savings=savings,
        rationale=_build_rationale(old, new, cheaper, savings),
        old_regime_suggestions=generate_old_suggestions(
            old, age_bracket, is_salaried, old_config,
        ),
        new_regime_suggestions=generate_new_suggestions(new, new_config),
    )


__all__ = [
    "calculate_hra_exemption",
    "calculate_old_regime",
    "calculate_new_regime",
    "compare_regimes",
]
