"""
Configuration for the reconciliation engine (reporting currency, lot tolerance, filters).
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from broker_recon.constants import (
    ALLOWED_ASSET_KEYWORDS,
    DEFAULT_BASE_CURRENCY,
    DEFAULT_LOT_EPSILON,
    EXCLUDED_ASSET_KEYWORDS,
)


class ReconConfig(BaseModel):
    """Configuration shared by the statement parser and the trade matcher."""

    model_config = ConfigDict(frozen=True)

    base_currency: str = DEFAULT_BASE_CURRENCY
    """Reporting currency; exchange rates are keyed "{ccy}_{base_currency}"."""

    lot_epsilon: float = Field(default=DEFAULT_LOT_EPSILON, gt=0)
    """Open lots with a residual quantity below this are dropped."""

    allowed_asset_keywords: tuple[str, ...] = ALLOWED_ASSET_KEYWORDS
    excluded_asset_keywords: tuple[str, ...] = EXCLUDED_ASSET_KEYWORDS

    broker_pnl_includes_fees: bool = False
    """
    Whether a broker-reported realized P/L is already net of commission.

    Unconfirmed for the supported exports. The default subtracts every trade's fee from
    its day total once, whichever source the P/L came from.
    """

    @field_validator("base_currency")
    @classmethod
    def _normalize_currency(cls, value: str) -> str:
        code = value.strip().upper()
        if len(code) != 3 or not code.isalpha():
            raise ValueError(f"base_currency must be a three-letter code (got {value!r})")
        return code


# Singleton for global access
_config = ReconConfig()


def get_config() -> ReconConfig:
    """Get the current global configuration."""
    return _config


def set_config(config: ReconConfig) -> None:
    """Replace the global configuration."""
    global _config  # noqa: PLW0603 - intentional singleton for CLI state
    _config = config
