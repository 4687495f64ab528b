"""
Optimizer — plain-English suggestions for unused deduction headroom.
Pure functions. No I/O.

Old regime: headroom in 80C, 80D, 80CCD(1B) and Section 24(b). Each saving is
priced by re-running the old regime with that headroom claimed, so slab
crossings, surcharge relief and a regained 87A rebate are all accounted for
and the saving can never exceed the tax actually owed.
New regime: no itemised deductions exist, so the only actionable signal is a
taxable income sitting just above the 87A limit, where the rebate cliff costs
more tax than the income that caused it.

Called by compare_regimes() in tax_engine.py via local import
(this module imports calculate_old_regime from tax_engine).
"""
from __future__ import annotations

from typing import List, Tuple

from taxregime.engine.regime_config import AgeBracket, RegimeConfig
from taxregime.engine.schemas import DeductionSet, TaxBreakdown
from taxregime.engine.tax_engine import calculate_old_regime

_SUGGESTION_MIN_SAVING = 1_000   # Suppress suggestions where tax saving < ₹1,000
_MAX_SUGGESTIONS = 3


def generate_old_suggestions(
    old_result: TaxBreakdown,
    age_bracket: AgeBracket,
    is_salaried: bool,
    config: RegimeConfig,
) -> List[str]:
    """
    Suggestions for unused old-regime headroom.
    Returns at most 3, sorted by rupee saving descending.
    """
    if old_result.total_tax <= 0:
        return []   # Already in zero-tax territory

    caps = config.deduction_caps.caps_for(age_bracket)
    bd = old_result.deduction_breakdown
    claimed = bd.model_dump(exclude={"standard_deduction"})

    templates = (
        ("section_80c",
         "Invest ₹{headroom:,.0f} more in 80C instruments (PPF, ELSS, LIC) "
         "to save ₹{saving:,.0f} in the Old Regime."),
        ("section_80d",
         "Pay ₹{headroom:,.0f} more in health insurance premiums under Section 80D "
         "to save ₹{saving:,.0f} in the Old Regime."),
        ("section_80ccd1b",
         "Contribute ₹{headroom:,.0f} more to NPS (Section 80CCD(1B)) "
         "to save ₹{saving:,.0f} in the Old Regime."),
        ("home_loan_interest",
         "Home loan interest of up to ₹{headroom:,.0f} more can be claimed under "
         "Section 24(b) to save ₹{saving:,.0f} in the Old Regime."),
    )

    candidates: List[Tuple[float, str]] = []
    for category, template in templates:
        # Claiming more than the income still being taxed changes nothing
        headroom = min(caps[category] - claimed[category], old_result.taxable_income)
        if headroom <= 0:
            continue
        rerun = calculate_old_regime(
            old_result.gross_income,
            age_bracket,
            DeductionSet(**{**claimed, category: claimed[category] + headroom}),
            is_salaried,
            config,
        )
        saving = old_result.total_tax - rerun.total_tax
        if saving >= _SUGGESTION_MIN_SAVING:
            candidates.append((saving, template.format(headroom=headroom, saving=round(saving))))

    candidates.sort(key=lambda x: x[0], reverse=True)
    return [text for _, text in candidates[:_MAX_SUGGESTIONS]]


def generate_new_suggestions(
    new_result: TaxBreakdown,
    config: RegimeConfig,
) -> List[str]:
    """
    New regime: flag the 87A cliff when the tax owed exceeds the income above
    the rebate limit.
    """
    excess = new_result.taxable_income - config.rebate_income_limit
    if excess <= 0:
        return []

    if new_result.tax_before_cess - excess < _SUGGESTION_MIN_SAVING:
        return []

    return [
        f"Taxable income is ₹{excess:,.0f} above the ₹{config.rebate_income_limit:,.0f} "
        f"Section 87A limit, which costs ₹{new_result.total_tax:,.0f} in tax. "
        f"Bringing taxable income back to the limit (for example through employer NPS "
        f"contributions under Section 80CCD(2)) would restore the rebate of up to "
        f"₹{config.rebate_max_amount:,.0f}."
    ]


__all__ = [
    "generate_old_suggestions",
    "generate_new_suggestions",
]
