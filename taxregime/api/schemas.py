"""
schemas.py — HTTP request/response contracts.

Defines:
  - CityType enum
  - DeductionInput, HraComponents, TaxCalculationRequest  (request body)
  - CalculationResponse, RegimeTablesResponse              (response bodies)
  - ErrorDetail, ErrorBody, ErrorResponse                  (cross-cutting error envelope)

Negative amounts are rejected here (ge=0) so they never reach the engine.
"""
from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from taxregime.engine.regime_config import AgeBracket
from taxregime.engine.schemas import ComparisonResult, DeductionSet


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class CityType(str, Enum):
    metro = "metro"
    non_metro = "non_metro"


# ---------------------------------------------------------------------------
# Request body
# ---------------------------------------------------------------------------

class DeductionInput(BaseModel):
    """
    Old regime itemised claims, annual INR. The engine caps each category;
    amounts above a cap are accepted and reported back as warnings.
    """
    model_config = ConfigDict(extra="forbid", allow_inf_nan=False)

    section_80c: float = Field(
        default=0, ge=0,
        description="Section 80C investments (PPF, ELSS, LIC, EPF, principal). Capped at ₹1,50,000.",
    )
    section_80d: float = Field(
        default=0, ge=0,
        description="Section 80D health insurance, self + parents combined.",
    )
    hra: float = Field(
        default=0, ge=0,
        description="Eligible HRA exemption already worked out. Leave 0 when sending hra_components.",
    )
    home_loan_interest: float = Field(
        default=0, ge=0,
        description="Section 24(b) self-occupied home loan interest. Capped at ₹2,00,000.",
    )
    section_80tta_ttb: float = Field(
        default=0, ge=0,
        description="80TTA (under 60, cap ₹10,000) / 80TTB (60+, cap ₹50,000) interest income.",
    )
    section_80ccd1b: float = Field(
        default=0, ge=0,
        description="Employee NPS under Section 80CCD(1B). Capped at ₹50,000.",
    )
    other: float = Field(
        default=0, ge=0,
        description="Any other eligible old regime deduction. Not capped.",
    )

    def to_deduction_set(self, hra: Optional[float] = None) -> DeductionSet:
        data = self.model_dump()
        if hra is not None:
            data["hra"] = hra
        return DeductionSet(**data)


class HraComponents(BaseModel):
    """Raw salary/rent figures — the server applies Rule 2A."""
    model_config = ConfigDict(extra="forbid", allow_inf_nan=False)

    basic_salary: float = Field(..., ge=0, description="Annual basic salary.")
    hra_received: float = Field(..., ge=0, description="Annual HRA component from employer.")
    monthly_rent_paid: float = Field(
        ..., ge=0,
        description="Monthly rent. Multiplied ×12 for Rule 2A.",
    )
    city_type: CityType = Field(
        ...,
        description="metro=50% of basic, non_metro=40% of basic.",
    )

    @model_validator(mode="after")
    def validate_hra_not_exceeds_basic(self) -> "HraComponents":
        """HRA component from employer cannot exceed basic salary."""
        if self.hra_received > self.basic_salary:
            raise ValueError(
                f"hra_received (₹{self.hra_received:,.0f}) cannot exceed "
                f"basic_salary (₹{self.basic_salary:,.0f})"
            )
        return self


class TaxCalculationRequest(BaseModel):
    """
    One comparison request. All monetary fields are annual INR.
    extra='forbid' ensures unknown fields cause a 422 error; so do Infinity and NaN.
    """
    model_config = ConfigDict(extra="forbid", allow_inf_nan=False)

    gross_income: float = Field(..., ge=0, description="Gross annual income in INR.")
    is_salaried: bool = Field(
        default=True,
        description="Salaried taxpayers get the regime's standard deduction.",
    )
    age_bracket: AgeBracket = Field(
        default=AgeBracket.under60,
        description="Selects the old regime slab table and 80TTA/80TTB cap.",
    )
    deductions: DeductionInput = Field(default_factory=DeductionInput)
    hra_components: Optional[HraComponents] = None
    tax_year: Optional[str] = Field(
        default=None,
        description="e.g. 'FY2025-26'. Server default applies when omitted.",
    )


# ---------------------------------------------------------------------------
# Response bodies
# ---------------------------------------------------------------------------

class CalculationResponse(ComparisonResult):
    """ComparisonResult plus non-blocking input warnings."""
    warnings: List[str] = Field(default_factory=list)


class RegimeTablesResponse(BaseModel):
    """RegimeConfig pair rendered for JSON — unbounded limits become null."""
    tax_year: str
    old_regime: Dict[str, Any]
    new_regime: Dict[str, Any]


# ---------------------------------------------------------------------------
# Error response models: used by main.py exception handlers (cross-cutting)
# ---------------------------------------------------------------------------

class ErrorDetail(BaseModel):
    """Single field-level validation or business-rule error."""
    model_config = ConfigDict(extra="forbid")

    field: Optional[str] = None   # Dot-notation field path, e.g. "deductions.section_80c"
    issue: str


class ErrorBody(BaseModel):
    model_config = ConfigDict(extra="forbid")

    code: str                                      # VALIDATION_ERROR, NOT_FOUND, etc.
    message: str
    details: List[ErrorDetail] = Field(default_factory=list)


class ErrorResponse(BaseModel):
    """
    Standard error response format for every endpoint.

    Structure: {"error": {"code": "...", "message": "...", "details": [...]}}
    """
    model_config = ConfigDict(extra="forbid")

    error: ErrorBody


__all__ = [
    "CityType",
    "DeductionInput",
    "HraComponents",
    "TaxCalculationRequest",
    "CalculationResponse",
    "RegimeTablesResponse",
    "ErrorDetail",
    "ErrorBody",
    "ErrorResponse",
]
