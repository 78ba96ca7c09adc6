"""Configuration loader with 3-tier parameter precedence."""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

import yaml

from ..errors import ConfigurationError
from .defaults import DefaultConfig, get_default_config


@dataclass(frozen=True)
class ConfigLoader:
    """Manages configuration loading with 3-tier precedence."""

    config_dir: Path
    defaults: DefaultConfig

    @classmethod
    def create(cls, config_dir: Optional[Path] = None) -> "ConfigLoader":
        """Create a ConfigLoader instance."""
        if config_dir is None:
            config_dir = Path(__file__).parent.parent.parent / "config"

        return cls(
            config_dir=Path(config_dir),
            defaults=get_default_config(),
        )

    @property
    def instruments_file(self) -> Path:
        return self.config_dir / "instruments.yaml"

    def _read_instruments(self) -> dict[str, Any]:
        with open(self.instruments_file, encoding="utf-8") as f:
            instruments_config = yaml.safe_load(f) or {}
        return instruments_config.get("instruments") or {}

    def load_instrument_config(self, instrument_id: Optional[str]) -> dict[str, Any]:
        """
        Load the contract overrides for one instrument.

        Args:
            instrument_id: Instrument key in ``instruments.yaml``; None runs on defaults

        Raises:
            ConfigurationError: If an id is given but the file or the entry is missing
        """
        if not instrument_id:
            return {}

        if not self.instruments_file.exists():
            raise ConfigurationError(
                f"Instrument {instrument_id!r} requested but {self.instruments_file} does not exist",
                context={"instrument_id": instrument_id, "known_instruments": []}
            )

        instruments = self._read_instruments()
        if instrument_id not in instruments:
            known = sorted(instruments)
            raise ConfigurationError(
                f"Unknown instrument {instrument_id!r}; known instruments: {', '.join(known) or 'none'}",
                context={"instrument_id": instrument_id, "known_instruments": known}
            )

        return instruments[instrument_id] or {}  # type: ignore[no-any-return]

    def merge_config(
        self,
        instrument_id: Optional[str] = None,
        run_overrides: Optional[dict[str, Any]] = None
    ) -> dict[str, Any]:
        """
        Merge configuration with 3-tier precedence.

        Priority order:
        1. Per-run overrides (highest priority)
        2. Instrument-specific overrides
        3. Global defaults (lowest priority)
        """
        config = self._dataclass_to_dict(self.defaults)

        instrument_config = self.load_instrument_config(instrument_id)
        config = self._deep_merge(config, instrument_config)

        if run_overrides:
            config = self._deep_merge(config, run_overrides)

        return config

    def _dataclass_to_dict(self, obj: Any) -> dict[str, Any]:
        """Convert nested dataclasses to dictionary."""
        if hasattr(obj, '__dataclass_fields__'):
            result = {}
            for field_name in obj.__dataclass_fields__:
                value = getattr(obj, field_name)
                if hasattr(value, '__dataclass_fields__'):
                    result[field_name] = self._dataclass_to_dict(value)
                else:
                    result[field_name] = value
            return result
        return obj  # type: ignore[no-any-return]

    def _deep_merge(self, base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
        """Deep merge two dictionaries."""
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result
