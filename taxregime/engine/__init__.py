"""
Deterministic tax engine: regime tables, calculators, pipelines, comparison.
"""
from taxregime.engine.calculators import (
    compute_rebate,
    compute_slab_tax,
    compute_surcharge,
)
from taxregime.engine.regime_config import (
    DEFAULT_TAX_YEAR,
    SUPPORTED_TAX_YEARS,
    AgeBracket,
    Regime,
    RegimeConfig,
    SurchargeBracket,
    TaxSlab,
    get_regime_config,
    get_regime_configs,
)
from taxregime.engine.schemas import (
    ComparisonResult,
    DeductionBreakdown,
    DeductionSet,
    TaxBreakdown,
)
from taxregime.engine.tax_engine import (
    calculate_hra_exemption,
    calculate_new_regime,
    calculate_old_regime,
    compare_regimes,
)

__all__ = [
    "compute_rebate",
    "compute_slab_tax",
    "compute_surcharge",
    "DEFAULT_TAX_YEAR",
    "SUPPORTED_TAX_YEARS",
    "AgeBracket",
    "Regime",
    "RegimeConfig",
    "SurchargeBracket",
    "TaxSlab",
    "get_regime_config",
    "get_regime_configs",
    "ComparisonResult",
    "DeductionBreakdown",
    "DeductionSet",
    "TaxBreakdown",
    "calculate_hra_exemption",
    "calculate_new_regime",
    "calculate_old_regime",
    "compare_regimes",
]
