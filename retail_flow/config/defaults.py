"""Default configuration parameters for the backtester."""

from dataclasses import dataclass


@dataclass(frozen=True)
class StrategyParams:
    """Signal classifier parameters."""
    long_percent: float = 40.0                       # Retail net % above which shorts fire
    monotonic_stops: bool = True                     # Trailing never loosens a held stop


@dataclass(frozen=True)
class MarkerParams:
    """Trade marker anchor parameters."""
    anchor_offset: float = 0.01                      # Markers sit 1% below lows / above highs


@dataclass(frozen=True)
class EquityParams:
    """Equity simulation parameters."""
    fund: float = 200_000.0                          # Starting capital
    fee: float = 200.0                               # Fee per side, charged twice on exit
    contract_multiplier: float = 50.0                # Currency per index point
    sharpe_window: int = 60                          # Trailing daily returns in rolling Sharpe
    annualization_days: int = 252                    # Trading days per year
    min_std: float = 1e-6                            # Below this std, Sharpe is reported as 0
    same_bar_reversal: bool = True                   # Long exit by signal opens a Short on the same bar
    attribute_exit_pnl_to_long: bool = True          # Flat exit-bar PnL lands in the long bucket


@dataclass(frozen=True)
class IngestionParams:
    """Source table column names."""
    price_date_column: str = "Date"
    open_column: str = "Open"
    high_column: str = "High"
    low_column: str = "Low"
    close_column: str = "Close"
    oi_date_column: str = "Date"
    total_oi_column: str = "TMF_全市場"
    institutional_long_column: str = "TMF_多方未平倉口數"
    institutional_short_column: str = "TMF_空方未平倉口數"


@dataclass(frozen=True)
class DefaultConfig:
    """Complete default configuration."""
    strategy: StrategyParams
    markers: MarkerParams
    equity: EquityParams
    ingestion: IngestionParams


def get_default_config() -> DefaultConfig:
    """Get the default configuration instance."""
    return DefaultConfig(
        strategy=StrategyParams(),
        markers=MarkerParams(),
        equity=EquityParams(),
        ingestion=IngestionParams(),
    )


def build_config(config: dict) -> DefaultConfig:
    """Build typed parameters from a merged configuration dictionary."""
    return DefaultConfig(
        strategy=StrategyParams(**config.get("strategy", {})),
        markers=MarkerParams(**config.get("markers", {})),
        equity=EquityParams(**config.get("equity", {})),
        ingestion=IngestionParams(**config.get("ingestion", {})),
    )
