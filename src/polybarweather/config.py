from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional

ENV_PREFIX = 'OPENWEATHER_'


class ConfigurationError(ValueError):
    """Raised when configuration values are missing or malformed."""


def parse_bool(value: str) -> bool:
    """Convert a 'true'/'false' flag string into a bool."""
    normalized = value.strip().lower()
    if normalized == 'true':
        return True
    if normalized == 'false':
        return False
    raise ConfigurationError(f"Expected 'true' or 'false', got {value!r}")


class Units(Enum):
    KELVIN = 'kelvin'
    METRIC = 'metric'
    IMPERIAL = 'imperial'

    @property
    def display_symbol(self) -> str:
        return _DISPLAY_SYMBOLS[self]

    @property
    def api_value(self) -> str:
        # OpenWeatherMap calls Kelvin "standard"
        return 'standard' if self is Units.KELVIN else self.value

    @classmethod
    def parse(cls, value: str) -> 'Units':
        try:
            return cls(value.strip().lower())
        except ValueError:
            allowed = ', '.join(u.value for u in cls)
            raise ConfigurationError(f"Unknown units {value!r} (expected one of: {allowed})") from None


_DISPLAY_SYMBOLS = {
    Units.KELVIN: 'K',
    Units.METRIC: '°C',
    Units.IMPERIAL: '°F',
}


@dataclass(frozen=True)
class Configuration:
    """Settings for a single weather lookup."""
    api_key: str
    city_id: str
    units: Units = Units.KELVIN
    lang: str = 'en'
    enable_forecast: bool = False

    @property
    def display_symbol(self) -> str:
        return self.units.display_symbol

    @staticmethod
    def from_strings(api_key: str, city_id: str, units: str = 'kelvin',
                     lang: str = 'en', enable_forecast: str = 'false') -> 'Configuration':
        """Build a configuration from raw command-line strings."""
        return Configuration(
            api_key=api_key,
            city_id=city_id,
            units=Units.parse(units),
            lang=lang,
            enable_forecast=parse_bool(enable_forecast),
        )


ENV_DEFAULTS = {
    'api_key': None,
    'city_id': None,
    'units': 'kelvin',
    'lang': 'en',
    'enable_forecast': 'false',
}


def env_defaults() -> Dict[str, Optional[str]]:
    """Raw OPENWEATHER_* values, keyed by Configuration field, falling back to built-in defaults."""
    return {
        field: os.environ.get(ENV_PREFIX + field.upper(), default)
        for field, default in ENV_DEFAULTS.items()
    }
