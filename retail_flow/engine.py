"""
Main backtest engine coordinator.

Orchestrates the pipeline from raw source rows to simulation outputs:
rows → parsed bars → merged records → {markers, equity curve} → summary.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable, Mapping, Optional, Union

import structlog

from .backtest.equity import simulate_equity
from .backtest.markers import simulate_markers
from .config.defaults import DefaultConfig, build_config
from .config.loader import ConfigLoader
from .config.validation import ConfigValidator
from .data.loader import load_tables
from .data.merger import merge_series
from .data.models import MergedRecord
from .data.parsers import parse_oi_rows, parse_price_rows
from .errors import ConfigurationError, DataQualityError
from .metrics.performance import PerformanceSummary, summarize
from .models.results import EquitySample, MarkerResult

logger = structlog.get_logger(__name__)

Row = Mapping[str, Any]


@dataclass(frozen=True)
class BacktestResult:
    """Everything one run hands to presentation consumers."""
    records: tuple[MergedRecord, ...]
    markers: MarkerResult
    equity: tuple[EquitySample, ...]
    summary: PerformanceSummary


class BacktestEngine:
    """
    Coordinator for a single-instrument retail positioning backtest.

    Manages the pipeline:
    Source Rows → Parsing → Merge → Marker Walk / Equity Walk → Summary
    """

    def __init__(
        self,
        config_dir: Optional[Union[str, Path]] = None,
        instrument_id: Optional[str] = None,
        overrides: Optional[dict[str, Any]] = None,
    ) -> None:
        """
        Initialize the engine with merged, validated configuration.

        Raises:
            ConfigurationError: If the merged configuration is invalid
        """
        self.logger = logger
        self.instrument_id = instrument_id
        self.config_loader = ConfigLoader.create(Path(config_dir) if config_dir else None)

        try:
            config_dict = self.config_loader.merge_config(instrument_id, overrides)
        except ConfigurationError as e:
            self.logger.error("Instrument lookup failed", error=str(e), **e.context)
            raise

        validation_errors = ConfigValidator.validate_config(config_dict)
        if validation_errors:
            error_msgs = [f"{err.field}: {err.message} (got: {err.value})" for err in validation_errors]
            self.logger.error(
                "Configuration validation failed",
                instrument_id=instrument_id,
                errors=error_msgs
            )
            raise ConfigurationError(
                f"Invalid configuration: {'; '.join(error_msgs)}",
                errors=validation_errors
            )

        self.config: DefaultConfig = build_config(config_dict)

        self.logger.info(
            "Backtest engine initialized",
            instrument_id=instrument_id,
            long_percent=self.config.strategy.long_percent,
            fund=self.config.equity.fund,
            fee=self.config.equity.fee,
            contract_multiplier=self.config.equity.contract_multiplier,
            sharpe_window=self.config.equity.sharpe_window
        )

    def merge(self, price_rows: Iterable[Row], oi_rows: Iterable[Row]) -> list[MergedRecord]:
        """Parse both source tables and join them into merged records."""
        columns = self.config.ingestion
        price_bars = parse_price_rows(price_rows, columns)
        oi_data = parse_oi_rows(oi_rows, columns)
        return merge_series(price_bars, oi_data)

    def run(self, price_rows: Iterable[Row], oi_rows: Iterable[Row]) -> BacktestResult:
        """
        Run the full pipeline on header-keyed source rows.

        Raises:
            DataQualityError: On malformed rows or an empty merge
        """
        try:
            records = self.merge(price_rows, oi_rows)
        except DataQualityError as e:
            self.logger.error(
                "Source data rejected",
                error_type=type(e).__name__,
                error=str(e),
                context=e.context
            )
            raise

        return self.run_records(records)

    def run_records(self, records: list[MergedRecord]) -> BacktestResult:
        """Run both simulations on an already merged sequence."""
        markers = simulate_markers(records, self.config.strategy, self.config.markers)
        equity = simulate_equity(records, self.config.strategy, self.config.equity)
        summary = summarize(records, markers, equity)

        self.logger.info(
            "Backtest complete",
            instrument_id=self.instrument_id,
            **summary.to_dict()
        )

        return BacktestResult(
            records=tuple(records),
            markers=markers,
            equity=tuple(equity),
            summary=summary,
        )

    def run_files(self, price_path: Union[str, Path], oi_path: Union[str, Path]) -> BacktestResult:
        """Load both CSV tables and run the pipeline."""
        price_rows, oi_rows = load_tables(price_path, oi_path)
        return self.run(price_rows, oi_rows)
