"""
Business-rule validator for TaxCalculationRequest.

Runs AFTER pydantic structural validation. Collects all violations in a single
pass and raises ValueError with a JSON-encoded list of {field, issue} dicts so
the route can build the standard error envelope.

Rules enforced:
  1. deductions.hra and hra_components are mutually exclusive
  2. hra_components.basic_salary <= gross_income
     (hra_received <= basic_salary is enforced by HraComponents itself)

Claims above a category cap are NOT violations — the engine caps them. They
come back as soft warnings from collect_cap_warnings().
"""
from __future__ import annotations

import json
import logging
from typing import Any, List

from taxregime.api.schemas import TaxCalculationRequest
from taxregime.engine.regime_config import AgeBracket, DeductionCaps
from taxregime.engine.schemas import DeductionSet

logger = logging.getLogger(__name__)

_CATEGORY_LABELS = {
    "section_80c": "Section 80C",
    "section_80d": "Section 80D",
    "hra": "HRA exemption",
    "home_loan_interest": "Section 24(b) home loan interest",
    "section_80tta_ttb": "Section 80TTA/80TTB",
    "section_80ccd1b": "Section 80CCD(1B)",
    "other": "Other deductions",
}


def validate_business_rules(request: TaxCalculationRequest) -> None:
    """
    Validate a request against cross-field business rules.

    Raises:
        ValueError: If any rule is violated. The message is a JSON string
            containing a list of {"field": str, "issue": str} dicts.
    """
    violations: list[dict[str, Any]] = []
    hra = request.hra_components

    # ---- 1. One source of HRA only -----------------------------------------
    if hra is not None and request.deductions.hra > 0:
        violations.append({
            "field": "deductions.hra",
            "issue": (
                "Send either a pre-computed deductions.hra or hra_components, not both. "
                "hra_components is used to compute the Rule 2A exemption."
            ),
        })

    if hra is not None:
        # ---- 2. Basic salary is part of gross income -----------------------
        if hra.basic_salary > request.gross_income:
            violations.append({
                "field": "hra_components.basic_salary",
                "issue": (
                    f"Basic salary ₹{hra.basic_salary:,.0f} cannot exceed "
                    f"gross income ₹{request.gross_income:,.0f}."
                ),
            })

    if violations:
        # Log only the count: never the income figures
        logger.info("Business-rule validation failed: %d violation(s)", len(violations))
        raise ValueError(json.dumps(violations))


def collect_cap_warnings(
    deductions: DeductionSet,
    age_bracket: AgeBracket,
    caps: DeductionCaps,
) -> List[str]:
    """
    One warning per category whose claim exceeds its old regime cap.
    Soft check — the engine still computes with the capped amount.
    """
    warnings: List[str] = []
    claimed = deductions.model_dump()
    for category, cap in caps.caps_for(age_bracket).items():
        amount = claimed[category]
        if amount > cap:
            warnings.append(
                f"{_CATEGORY_LABELS[category]} claim of ₹{amount:,.0f} exceeds the "
                f"₹{cap:,.0f} limit for age bracket '{age_bracket.value}'. "
                f"Only ₹{cap:,.0f} is deducted."
            )
    return warnings
