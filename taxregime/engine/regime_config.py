"""
regime_config.py — Immutable regime tables (slabs, surcharge, caps, 87A, cess).

One RegimeConfig per regime per tax year. Every table is constructed once at
import time and handed to the calculators explicitly — calculators never look
anything up on their own.

Tax years shipped:
  FY2025-26 (AY 2026-27) — Budget 2025 new regime slabs 4L/8L/12L/16L/20L/24L
  FY2024-25 (AY 2025-26) — new regime slabs 3L/7L/10L/12L/15L, 87A up to ₹7L

Old regime tables are identical in both years.
"""
from __future__ import annotations

from enum import Enum
from typing import Dict, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

INF = float("inf")


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class AgeBracket(str, Enum):
    under60 = "under60"
    senior60to80 = "60to80"
    super_senior80plus = "above80"


class Regime(str, Enum):
    old = "old"
    new = "new"


# ---------------------------------------------------------------------------
# Table rows
# ---------------------------------------------------------------------------

class TaxSlab(BaseModel):
    """One slab: income up to upper_bound (inclusive) is taxed at rate."""
    model_config = ConfigDict(frozen=True, extra="forbid")

    upper_bound: float
    rate: float = Field(ge=0, le=1)


class SurchargeBracket(BaseModel):
    """Surcharge applies to incomes strictly above lower_bound."""
    model_config = ConfigDict(frozen=True, extra="forbid")

    lower_bound: float
    upper_bound: float       # exclusive, INF for the top bracket
    rate: float = Field(ge=0, le=1)


class DeductionCaps(BaseModel):
    """
    Per-category ceilings for old regime itemised deductions.

    80TTA/80TTB and 80D depend on age; those are explicit AgeBracket → cap
    tables resolved once per pipeline run via caps_for().
    HRA exemption and "other" have no single statutory ceiling (INF).
    """
    model_config = ConfigDict(frozen=True, extra="forbid")

    section_80c: float
    section_80ccd1b: float
    home_loan_interest: float
    section_80d: Dict[AgeBracket, float]
    section_80tta_ttb: Dict[AgeBracket, float]
    hra: float = INF
    other: float = INF

    def caps_for(self, age_bracket: AgeBracket) -> Dict[str, float]:
        """Flatten to {category: cap} for one age bracket."""
        return {
            "section_80c": self.section_80c,
            "section_80d": self.section_80d[age_bracket],
            "hra": self.hra,
            "home_loan_interest": self.home_loan_interest,
            "section_80tta_ttb": self.section_80tta_ttb[age_bracket],
            "section_80ccd1b": self.section_80ccd1b,
            "other": self.other,
        }


class RegimeConfig(BaseModel):
    """
    Everything one regime needs for one tax year. Read-only for the lifetime
    of the process.

    slabs is keyed by AgeBracket. The new regime maps every bracket to the
    same table.
    """
    model_config = ConfigDict(frozen=True, extra="forbid")

    regime: Regime
    tax_year: str
    slabs: Dict[AgeBracket, Tuple[TaxSlab, ...]]
    standard_deduction: float
    surcharge_brackets: Tuple[SurchargeBracket, ...]
    rebate_income_limit: float
    rebate_max_amount: float
    cess_rate: float
    allows_itemised_deductions: bool
    deduction_caps: Optional[DeductionCaps] = None

    def slabs_for(self, age_bracket: AgeBracket) -> Tuple[TaxSlab, ...]:
        return self.slabs[age_bracket]


# ===========================================================================
# SHARED CONSTANTS
# ===========================================================================

CESS_RATE = 0.04

# ===========================================================================
# OLD REGIME: unchanged across FY2024-25 and FY2025-26
# ===========================================================================

OLD_STD_DEDUCTION        = 50_000
OLD_87A_TAXABLE_CEILING  = 500_000
OLD_87A_MAX_REBATE       = 12_500

CAP_80C                  = 150_000
CAP_80CCD1B              = 50_000    # Additional employee NPS
CAP_24B                  = 200_000   # Home loan interest, self-occupied
CAP_80TTA                = 10_000    # Savings interest: under60
CAP_80TTB                = 50_000    # All deposit interest: 60+
CAP_80D_UNDER60          = 75_000    # ₹25K self/family + ₹50K senior parents
CAP_80D_SENIOR           = 100_000   # ₹50K self/family + ₹50K senior parents

OLD_REGIME_SLABS: Dict[AgeBracket, Tuple[TaxSlab, ...]] = {
    AgeBracket.under60: (
        TaxSlab(upper_bound=250_000,   rate=0.00),
        TaxSlab(upper_bound=500_000,   rate=0.05),
        TaxSlab(upper_bound=1_000_000, rate=0.20),
        TaxSlab(upper_bound=INF,       rate=0.30),
    ),
    AgeBracket.senior60to80: (
        TaxSlab(upper_bound=300_000,   rate=0.00),
        TaxSlab(upper_bound=500_000,   rate=0.05),
        TaxSlab(upper_bound=1_000_000, rate=0.20),
        TaxSlab(upper_bound=INF,       rate=0.30),
    ),
    AgeBracket.super_senior80plus: (
        TaxSlab(upper_bound=500_000,   rate=0.00),
        TaxSlab(upper_bound=1_000_000, rate=0.20),
        TaxSlab(upper_bound=INF,       rate=0.30),
    ),
}

OLD_REGIME_SURCHARGE: Tuple[SurchargeBracket, ...] = (
    SurchargeBracket(lower_bound=5_000_000,  upper_bound=10_000_000, rate=0.10),
    SurchargeBracket(lower_bound=10_000_000, upper_bound=20_000_000, rate=0.15),
    SurchargeBracket(lower_bound=20_000_000, upper_bound=50_000_000, rate=0.25),
    SurchargeBracket(lower_bound=50_000_000, upper_bound=INF,        rate=0.37),
)

OLD_DEDUCTION_CAPS = DeductionCaps(
    section_80c=CAP_80C,
    section_80ccd1b=CAP_80CCD1B,
    home_loan_interest=CAP_24B,
    section_80d={
        AgeBracket.under60: CAP_80D_UNDER60,
        AgeBracket.senior60to80: CAP_80D_SENIOR,
        AgeBracket.super_senior80plus: CAP_80D_SENIOR,
    },
    section_80tta_ttb={
        AgeBracket.under60: CAP_80TTA,
        AgeBracket.senior60to80: CAP_80TTB,
        AgeBracket.super_senior80plus: CAP_80TTB,
    },
)

# ===========================================================================
# NEW REGIME: surcharge top rate capped at 25% (Section 115BAC)
# ===========================================================================

NEW_REGIME_SURCHARGE: Tuple[SurchargeBracket, ...] = (
    SurchargeBracket(lower_bound=5_000_000,  upper_bound=10_000_000, rate=0.10),
    SurchargeBracket(lower_bound=10_000_000, upper_bound=20_000_000, rate=0.15),
    SurchargeBracket(lower_bound=20_000_000, upper_bound=INF,        rate=0.25),
)

# FY2025-26 (Budget 2025)
NEW_STD_DEDUCTION_FY2025_26       = 75_000
NEW_87A_TAXABLE_CEILING_FY2025_26 = 1_200_000
NEW_87A_MAX_REBATE_FY2025_26      = 60_000

NEW_REGIME_SLABS_FY2025_26: Tuple[TaxSlab, ...] = (
    TaxSlab(upper_bound=400_000,   rate=0.00),
    TaxSlab(upper_bound=800_000,   rate=0.05),
    TaxSlab(upper_bound=1_200_000, rate=0.10),
    TaxSlab(upper_bound=1_600_000, rate=0.15),
    TaxSlab(upper_bound=2_000_000, rate=0.20),
    TaxSlab(upper_bound=2_400_000, rate=0.25),
    TaxSlab(upper_bound=INF,       rate=0.30),
)

# FY2024-25 (Budget July 2024)
NEW_STD_DEDUCTION_FY2024_25       = 75_000
NEW_87A_TAXABLE_CEILING_FY2024_25 = 700_000
NEW_87A_MAX_REBATE_FY2024_25      = 25_000

NEW_REGIME_SLABS_FY2024_25: Tuple[TaxSlab, ...] = (
    TaxSlab(upper_bound=300_000,   rate=0.00),
    TaxSlab(upper_bound=700_000,   rate=0.05),
    TaxSlab(upper_bound=1_000_000, rate=0.10),
    TaxSlab(upper_bound=1_200_000, rate=0.15),
    TaxSlab(upper_bound=1_500_000, rate=0.20),
    TaxSlab(upper_bound=INF,       rate=0.30),
)


# ===========================================================================
# CONFIG CONSTRUCTION
# ===========================================================================

def _old_regime(tax_year: str) -> RegimeConfig:
    return RegimeConfig(
        regime=Regime.old,
        tax_year=tax_year,
        slabs=OLD_REGIME_SLABS,
        standard_deduction=OLD_STD_DEDUCTION,
        surcharge_brackets=OLD_REGIME_SURCHARGE,
        rebate_income_limit=OLD_87A_TAXABLE_CEILING,
        rebate_max_amount=OLD_87A_MAX_REBATE,
        cess_rate=CESS_RATE,
        allows_itemised_deductions=True,
        deduction_caps=OLD_DEDUCTION_CAPS,
    )


def _new_regime(
    tax_year: str,
    slabs: Tuple[TaxSlab, ...],
    standard_deduction: float,
    rebate_income_limit: float,
    rebate_max_amount: float,
) -> RegimeConfig:
    return RegimeConfig(
        regime=Regime.new,
        tax_year=tax_year,
        slabs={age: slabs for age in AgeBracket},
        standard_deduction=standard_deduction,
        surcharge_brackets=NEW_REGIME_SURCHARGE,
        rebate_income_limit=rebate_income_limit,
        rebate_max_amount=rebate_max_amount,
        cess_rate=CESS_RATE,
        allows_itemised_deductions=False,
    )


DEFAULT_TAX_YEAR = "FY2025-26"

OLD_REGIME_FY2025_26 = _old_regime("FY2025-26")
NEW_REGIME_FY2025_26 = _new_regime(
    "FY2025-26",
    NEW_REGIME_SLABS_FY2025_26,
    NEW_STD_DEDUCTION_FY2025_26,
    NEW_87A_TAXABLE_CEILING_FY2025_26,
    NEW_87A_MAX_REBATE_FY2025_26,
)

OLD_REGIME_FY2024_25 = _old_regime("FY2024-25")
NEW_REGIME_FY2024_25 = _new_regime(
    "FY2024-25",
    NEW_REGIME_SLABS_FY2024_25,
    NEW_STD_DEDUCTION_FY2024_25,
    NEW_87A_TAXABLE_CEILING_FY2024_25,
    NEW_87A_MAX_REBATE_FY2024_25,
)

_REGIME_CONFIGS: Dict[str, Tuple[RegimeConfig, RegimeConfig]] = {
    "FY2025-26": (OLD_REGIME_FY2025_26, NEW_REGIME_FY2025_26),
    "FY2024-25": (OLD_REGIME_FY2024_25, NEW_REGIME_FY2024_25),
}

SUPPORTED_TAX_YEARS: Tuple[str, ...] = tuple(_REGIME_CONFIGS)


def get_regime_configs(tax_year: str = DEFAULT_TAX_YEAR) -> Tuple[RegimeConfig, RegimeConfig]:
    """
    Return the (old, new) RegimeConfig pair for a tax year.

    Raises:
        KeyError: tax_year is not one of SUPPORTED_TAX_YEARS.
    """
    try:
        return _REGIME_CONFIGS[tax_year]
    except KeyError:
        raise KeyError(
            f"Unsupported tax year '{tax_year}'. "
            f"Supported: {', '.join(SUPPORTED_TAX_YEARS)}"
        ) from None


def get_regime_config(regime: Literal["old", "new"] | Regime, tax_year: str = DEFAULT_TAX_YEAR) -> RegimeConfig:
    old, new = get_regime_configs(tax_year)
    return old if Regime(regime) is Regime.old else new


__all__ = [
    "INF",
    "AgeBracket",
    "Regime",
    "TaxSlab",
    "SurchargeBracket",
    "DeductionCaps",
    "RegimeConfig",
    "DEFAULT_TAX_YEAR",
    "SUPPORTED_TAX_YEARS",
    "get_regime_configs",
    "get_regime_config",
]
