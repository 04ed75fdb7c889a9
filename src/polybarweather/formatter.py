from __future__ import annotations

from .client import WeatherInfo

# Polybar font switches: T4 holds weather glyphs, T1 the text font, T3 the trend arrow
TREND_TOKEN = "%{T3}%{T-}"


def format_segment(info: WeatherInfo, unit_symbol: str) -> str:
    return f"%{{T4}}{info.icon}%{{T-}} %{{T1}}{info.temperature}{unit_symbol}%{{T-}}"


def format_output(current: WeatherInfo, forecast: WeatherInfo, enable_forecast: bool, unit_symbol: str) -> str:
    """Render the bar line.

    The trend token does not depend on whether the forecast is warmer or colder.
    """
    prefix = format_segment(current, unit_symbol)
    if not enable_forecast:
        return prefix
    return TREND_TOKEN.join([prefix, format_segment(forecast, unit_symbol)])
