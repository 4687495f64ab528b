"""
Shared fixtures for the taxregime test suite.

Regime configs are passed explicitly everywhere, so fixtures hand out the
FY2025-26 and FY2024-25 pairs rather than relying on defaults.
"""
from __future__ import annotations

import pytest

from taxregime.engine.regime_config import RegimeConfig, get_regime_configs


@pytest.fixture
def fy2025_26() -> tuple[RegimeConfig, RegimeConfig]:
    return get_regime_configs("FY2025-26")


@pytest.fixture
def fy2024_25() -> tuple[RegimeConfig, RegimeConfig]:
    return get_regime_configs("FY2024-25")
