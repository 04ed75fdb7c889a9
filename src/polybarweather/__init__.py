"""
OpenWeatherMap status line for Polybar.
Fetches current conditions and the next-period forecast and renders bar markup.
"""

__version__ = '1.0.0'

__all__ = [
    'Configuration', 'ConfigurationError', 'Units',
    'WeatherClient', 'WeatherInfo', 'QueryType',
    'WeatherError', 'TransportError', 'InvalidResponse',
    'format_output', 'format_segment', 'TREND_TOKEN',
]

from .config import Configuration, ConfigurationError, Units
from .client import WeatherClient, WeatherInfo, QueryType, WeatherError, TransportError, InvalidResponse
from .formatter import format_output, format_segment, TREND_TOKEN
