"""Configuration validation utilities."""

from dataclasses import dataclass, fields
from typing import Any

from .defaults import EquityParams, IngestionParams, MarkerParams, StrategyParams


@dataclass(frozen=True)
class ValidationError:
    """Represents a configuration validation error."""
    field: str
    message: str
    value: Any


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


class ConfigValidator:
    """Validates configuration parameters."""

    @staticmethod
    def _unknown_fields(section: str, params: dict[str, Any], params_cls: type) -> list[ValidationError]:
        known = {f.name for f in fields(params_cls)}
        return [
            ValidationError(
                field=f"{section}.{key}",
                message="Unknown parameter",
                value=value
            )
            for key, value in params.items()
            if key not in known
        ]

    @staticmethod
    def validate_strategy_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate signal classifier parameters."""
        errors = ConfigValidator._unknown_fields("strategy", params, StrategyParams)

        if "long_percent" in params:
            value = params["long_percent"]
            if not _is_number(value) or value < -100 or value > 100:
                errors.append(ValidationError(
                    field="long_percent",
                    message="Must be a number between -100 and 100",
                    value=value
                ))

        if "monotonic_stops" in params:
            value = params["monotonic_stops"]
            if not isinstance(value, bool):
                errors.append(ValidationError(
                    field="monotonic_stops",
                    message="Must be a boolean",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_marker_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate marker anchor parameters."""
        errors = ConfigValidator._unknown_fields("markers", params, MarkerParams)

        if "anchor_offset" in params:
            value = params["anchor_offset"]
            if not _is_number(value) or value < 0 or value >= 1:
                errors.append(ValidationError(
                    field="anchor_offset",
                    message="Must be a number in [0, 1)",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_equity_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate equity simulation parameters."""
        errors = ConfigValidator._unknown_fields("equity", params, EquityParams)

        # Validate fund
        if "fund" in params:
            value = params["fund"]
            if not _is_number(value) or value <= 0:
                errors.append(ValidationError(
                    field="fund",
                    message="Must be a positive number",
                    value=value
                ))

        for name in ("fee", "contract_multiplier", "min_std"):
            if name in params:
                value = params[name]
                if not _is_number(value) or value < 0:
                    errors.append(ValidationError(
                        field=name,
                        message="Must be a non-negative number",
                        value=value
                    ))

        for name in ("sharpe_window", "annualization_days"):
            if name in params:
                value = params[name]
                if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
                    errors.append(ValidationError(
                        field=name,
                        message="Must be a positive integer",
                        value=value
                    ))

        for name in ("same_bar_reversal", "attribute_exit_pnl_to_long"):
            if name in params:
                value = params[name]
                if not isinstance(value, bool):
                    errors.append(ValidationError(
                        field=name,
                        message="Must be a boolean",
                        value=value
                    ))

        return errors

    @staticmethod
    def validate_ingestion_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate source column names."""
        errors = ConfigValidator._unknown_fields("ingestion", params, IngestionParams)

        for key, value in params.items():
            if not isinstance(value, str) or not value.strip():
                errors.append(ValidationError(
                    field=key,
                    message="Must be a non-empty column name",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_config(config: dict[str, Any]) -> list[ValidationError]:
        """Validate complete configuration."""
        errors = []

        if "strategy" in config:
            errors.extend(ConfigValidator.validate_strategy_params(config["strategy"]))

        if "markers" in config:
            errors.extend(ConfigValidator.validate_marker_params(config["markers"]))

        if "equity" in config:
            errors.extend(ConfigValidator.validate_equity_params(config["equity"]))

        if "ingestion" in config:
            errors.extend(ConfigValidator.validate_ingestion_params(config["ingestion"]))

        return errors
