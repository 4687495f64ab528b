"""
Business-rule validator and cap-warning tests.
"""
from __future__ import annotations

import json

import pytest
from pydantic import ValidationError

from taxregime.api.schemas import HraComponents, TaxCalculationRequest
from taxregime.api.validator import collect_cap_warnings, validate_business_rules
from taxregime.engine.regime_config import AgeBracket
from taxregime.engine.schemas import DeductionSet

_HRA = dict(basic_salary=600_000, hra_received=240_000, monthly_rent_paid=20_000, city_type="metro")


def test_valid_request_passes() -> None:
    request = TaxCalculationRequest(gross_income=1_200_000, hra_components=_HRA)
    validate_business_rules(request)


def test_both_hra_sources_rejected() -> None:
    request = TaxCalculationRequest(
        gross_income=1_200_000,
        deductions={"hra": 50_000},
        hra_components=_HRA,
    )
    with pytest.raises(ValueError) as exc_info:
        validate_business_rules(request)
    violations = json.loads(str(exc_info.value))
    assert [v["field"] for v in violations] == ["deductions.hra"]


def test_all_violations_collected_in_one_pass() -> None:
    request = TaxCalculationRequest(
        gross_income=100_000,
        deductions={"hra": 50_000},
        hra_components=_HRA,
    )
    with pytest.raises(ValueError) as exc_info:
        validate_business_rules(request)
    fields = {v["field"] for v in json.loads(str(exc_info.value))}
    assert fields == {"deductions.hra", "hra_components.basic_salary"}


def test_hra_received_bounded_by_basic_in_schema() -> None:
    """hra_received <= basic_salary <= gross_income: the first half is structural."""
    with pytest.raises(ValidationError):
        HraComponents(**{**_HRA, "hra_received": 700_000})


def test_cap_warnings_name_each_over_cap_category(fy2025_26) -> None:
    old, _ = fy2025_26
    deductions = DeductionSet(section_80c=200_000, section_80tta_ttb=20_000, hra=500_000)
    warnings = collect_cap_warnings(deductions, AgeBracket.under60, old.deduction_caps)
    assert len(warnings) == 2
    assert "Section 80C" in warnings[0]
    assert "80TTA/80TTB" in warnings[1]


def test_cap_warnings_respect_age_bracket(fy2025_26) -> None:
    old, _ = fy2025_26
    deductions = DeductionSet(section_80tta_ttb=40_000)
    assert collect_cap_warnings(deductions, AgeBracket.senior60to80, old.deduction_caps) == []
    assert len(collect_cap_warnings(deductions, AgeBracket.under60, old.deduction_caps)) == 1
