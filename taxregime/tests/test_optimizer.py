"""
Optimizer tests — old regime headroom suggestions and new regime 87A cliff.
"""
from __future__ import annotations

from taxregime.engine.optimizer import (
    generate_new_suggestions,
    generate_old_suggestions,
)
from taxregime.engine.regime_config import AgeBracket
from taxregime.engine.schemas import DeductionSet
from taxregime.engine.tax_engine import (
    calculate_new_regime,
    calculate_old_regime,
    compare_regimes,
)


def test_old_suggestions_sorted_by_saving(fy2025_26) -> None:
    """
    Taxable ₹14L at 31.2%: 24(b) 2L → 62,400; 80C 1L → 31,200;
    80D 75K → 23,400; 80CCD(1B) 50K → 15,600 (dropped, top 3 only).
    """
    old, _ = fy2025_26
    result = calculate_old_regime(
        1_500_000, AgeBracket.under60, DeductionSet(section_80c=50_000), True, old,
    )
    suggestions = generate_old_suggestions(result, AgeBracket.under60, True, old)
    assert len(suggestions) == 3
    assert "Section 24(b)" in suggestions[0]
    assert "62,400" in suggestions[0]
    assert "80C" in suggestions[1]
    assert "80D" in suggestions[2]


def test_old_suggestions_just_above_rebate_limit(fy2025_26) -> None:
    """
    Taxable ₹5.1L: total ₹15,080. Any of the four claims pulls taxable income
    under ₹5L and the rebate wipes the tax, so each saving is the full ₹15,080.
    """
    old, _ = fy2025_26
    result = calculate_old_regime(510_000, AgeBracket.under60, None, False, old)
    assert result.total_tax == 15_080.0
    suggestions = generate_old_suggestions(result, AgeBracket.under60, False, old)
    assert len(suggestions) == 3
    for text in suggestions:
        assert "save ₹15,080 " in text


def test_compare_suggestions_never_exceed_tax_owed() -> None:
    result = compare_regimes(510_000, is_salaried=False, age_bracket=AgeBracket.under60)
    assert result.old_regime.total_tax == 15_080.0
    assert result.old_regime_suggestions
    assert all("15,080" in text for text in result.old_regime_suggestions)


def test_old_suggestions_priced_across_slab_boundary(fy2025_26) -> None:
    """
    Taxable ₹6L: 80C ₹1.5L brings it to ₹4.5L. Tax drops from ₹33,800 to 0
    (₹20K at 20% plus ₹12,500 at 5%, then the rebate), not 1.5L × 20.8%.
    """
    old, _ = fy2025_26
    result = calculate_old_regime(600_000, AgeBracket.under60, None, False, old)
    suggestions = generate_old_suggestions(result, AgeBracket.under60, False, old)
    eighty_c = [s for s in suggestions if "80C instruments" in s]
    assert len(eighty_c) == 1
    assert "save ₹33,800 " in eighty_c[0]


def test_old_suggestions_skip_maxed_categories(fy2025_26) -> None:
    old, _ = fy2025_26
    maxed = DeductionSet(
        section_80c=150_000, section_80d=75_000,
        home_loan_interest=200_000, section_80ccd1b=50_000,
    )
    result = calculate_old_regime(3_000_000, AgeBracket.under60, maxed, True, old)
    assert generate_old_suggestions(result, AgeBracket.under60, True, old) == []


def test_old_suggestions_empty_when_no_tax(fy2025_26) -> None:
    old, _ = fy2025_26
    result = calculate_old_regime(500_000, AgeBracket.under60, None, True, old)
    assert generate_old_suggestions(result, AgeBracket.under60, True, old) == []


def test_new_suggestion_flags_rebate_cliff(fy2025_26) -> None:
    """Taxable ₹12.1L: ₹61,500 tax on ₹10,000 above the limit."""
    _, new = fy2025_26
    result = calculate_new_regime(1_210_000, False, new)
    suggestions = generate_new_suggestions(result, new)
    assert len(suggestions) == 1
    assert "87A" in suggestions[0]
    assert "10,000" in suggestions[0]


def test_new_suggestion_silent_once_cliff_is_absorbed(fy2025_26) -> None:
    """Taxable ₹13L: tax 75,000 < ₹1L above the limit — nothing to recover."""
    _, new = fy2025_26
    assert generate_new_suggestions(calculate_new_regime(1_300_000, False, new), new) == []
    assert generate_new_suggestions(calculate_new_regime(1_000_000, False, new), new) == []
