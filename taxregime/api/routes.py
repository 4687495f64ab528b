"""
HTTP routes — POST /api/calculate,
              POST /api/calculate/{regime},
              GET  /api/regimes/{tax_year}

Thin layer over the pure engine: validate, resolve the tax year's RegimeConfig
pair, call the engine, log the outcome. Nothing is persisted.
"""
from __future__ import annotations

import json
import logging
import math
from typing import Any, Tuple

from fastapi import APIRouter, HTTPException
from fastapi.responses import JSONResponse

from taxregime.api.schemas import (
    CalculationResponse,
    CityType,
    ErrorBody,
    ErrorDetail,
    ErrorResponse,
    RegimeTablesResponse,
    TaxCalculationRequest,
)
from taxregime.api.validator import collect_cap_warnings, validate_business_rules
from taxregime.config import settings
from taxregime.engine.regime_config import Regime, RegimeConfig, get_regime_configs
from taxregime.engine.schemas import DeductionSet
from taxregime.engine.tax_engine import (
    calculate_hra_exemption,
    calculate_new_regime,
    calculate_old_regime,
    compare_regimes,
)

router = APIRouter(prefix="/api", tags=["calculator"])
logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _make_validation_error_response(violations_json: str) -> JSONResponse:
    """Parse JSON-encoded violations and return standard 422 error envelope."""
    try:
        violations: list[dict] = json.loads(violations_json)
    except (json.JSONDecodeError, ValueError):
        violations = [{"field": None, "issue": violations_json}]
    details = [ErrorDetail(field=v.get("field"), issue=v["issue"]) for v in violations]
    body = ErrorResponse(
        error=ErrorBody(
            code="VALIDATION_ERROR",
            message="Request validation failed",
            details=details,
        )
    )
    return JSONResponse(status_code=422, content=body.model_dump())


def _resolve_configs(tax_year: str | None) -> Tuple[RegimeConfig, RegimeConfig]:
    try:
        return get_regime_configs(tax_year or settings.default_tax_year)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail=exc.args[0]) from exc


def _resolve_deductions(request: TaxCalculationRequest) -> DeductionSet:
    """Apply Rule 2A when raw HRA figures were sent instead of an exemption."""
    hra = request.hra_components
    if hra is None:
        return request.deductions.to_deduction_set()
    exemption = calculate_hra_exemption(
        basic_salary=hra.basic_salary,
        hra_received=hra.hra_received,
        annual_rent_paid=hra.monthly_rent_paid * 12,
        is_metro=hra.city_type is CityType.metro,
    )
    return request.deductions.to_deduction_set(hra=exemption)


def _jsonable(value: Any) -> Any:
    """Render +inf table limits as null — JSON has no infinity."""
    if isinstance(value, float) and math.isinf(value):
        return None
    if isinstance(value, dict):
        return {key: _jsonable(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_jsonable(item) for item in value]
    return value


def _config_as_json(config: RegimeConfig) -> dict[str, Any]:
    data = config.model_dump()
    data["regime"] = config.regime.value
    data["slabs"] = {age.value: slabs for age, slabs in data["slabs"].items()}
    caps = data.get("deduction_caps")
    if caps:
        for key in ("section_80d", "section_80tta_ttb"):
            caps[key] = {age.value: cap for age, cap in caps[key].items()}
    return _jsonable(data)


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

@router.post("/calculate")
async def calculate_tax(request_body: TaxCalculationRequest) -> JSONResponse:
    """
    Compare both regimes for one taxpayer.

    Returns both TaxBreakdowns, the cheaper regime ("old" | "new" | "equal"),
    savings, rationale, suggestions and non-blocking cap warnings.
    """
    try:
        validate_business_rules(request_body)
    except ValueError as exc:
        return _make_validation_error_response(str(exc))

    old_config, new_config = _resolve_configs(request_body.tax_year)
    deductions = _resolve_deductions(request_body)

    result = compare_regimes(
        gross_income=request_body.gross_income,
        is_salaried=request_body.is_salaried,
        age_bracket=request_body.age_bracket,
        deductions=deductions,
        old_config=old_config,
        new_config=new_config,
    )
    warnings = collect_cap_warnings(
        deductions, request_body.age_bracket, old_config.deduction_caps,
    )
    response = CalculationResponse(**result.model_dump(), warnings=warnings)

    logger.info(
        "Tax compared tax_year=%s cheaper=%s savings=%.2f warnings=%d",
        result.tax_year,
        result.cheaper_regime,
        result.savings,
        len(warnings),
    )
    return JSONResponse(status_code=200, content=response.model_dump(mode="json"))


@router.post("/calculate/{regime}")
async def calculate_single_regime(
    regime: Regime,
    request_body: TaxCalculationRequest,
) -> JSONResponse:
    """Compute the TaxBreakdown for one regime only."""
    try:
        validate_business_rules(request_body)
    except ValueError as exc:
        return _make_validation_error_response(str(exc))

    old_config, new_config = _resolve_configs(request_body.tax_year)

    if regime is Regime.old:
        breakdown = calculate_old_regime(
            request_body.gross_income,
            request_body.age_bracket,
            _resolve_deductions(request_body),
            request_body.is_salaried,
            old_config,
        )
    else:
        breakdown = calculate_new_regime(
            request_body.gross_income,
            request_body.is_salaried,
            new_config,
        )

    logger.info(
        "Tax calculated regime=%s tax_year=%s total_tax=%.2f",
        regime.value,
        old_config.tax_year,
        breakdown.total_tax,
    )
    return JSONResponse(status_code=200, content=breakdown.model_dump(mode="json"))


@router.get("/regimes/{tax_year}")
async def get_regime_tables(tax_year: str) -> JSONResponse:
    """Slabs, surcharge brackets, caps and 87A parameters for a tax year."""
    old_config, new_config = _resolve_configs(tax_year)
    body = RegimeTablesResponse(
        tax_year=tax_year,
        old_regime=_config_as_json(old_config),
        new_regime=_config_as_json(new_config),
    )
    return JSONResponse(status_code=200, content=body.model_dump())
