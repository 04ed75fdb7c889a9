"""Polybar weather module.

Usage (example):
    polybar-weather --api-key KEY --city-id 2643743 --units metric --enable-forcast true

Prints one line of Polybar markup. Errors go to stderr behind a line break,
because Polybar only displays output up to the first newline.
"""
from __future__ import annotations
import argparse
import logging
import os
import sys
from typing import List, Optional

from dotenv import load_dotenv

from . import __version__
from .client import QueryType, WeatherClient, WeatherError
from .config import Configuration, ConfigurationError, Units, env_defaults
from .formatter import format_output

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    env = env_defaults()
    parser = argparse.ArgumentParser(prog='polybar-weather', description='Display weather info in Polybar')
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    parser.add_argument('-k', '--api-key', required=not env['api_key'], default=env['api_key'], help='Open Weather API key')
    parser.add_argument('-c', '--city-id', required=not env['city_id'], default=env['city_id'], help='City ID from openweather.com')
    parser.add_argument('-u', '--units', default=env['units'],
                        choices=[u.value for u in Units], help='Unit of temperature (default: kelvin)')
    parser.add_argument('-l', '--language', dest='lang', default=env['lang'],
                        help='Localization language (default: en)')
    parser.add_argument('-f', '--enable-forcast', '--enable-forecast', dest='enable_forecast',
                        default=env['enable_forecast'],
                        choices=['true', 'false'], help='Display forecast for the next period')
    return parser


def get_forecast(config: Configuration, client: WeatherClient) -> str:
    """Fetch current conditions then the forecast, and render the bar line."""
    current = client.get_info(config, QueryType.CURRENT)
    forecast = client.get_info(config, QueryType.FORECAST)
    return format_output(current, forecast, config.enable_forecast, config.display_symbol)


def main(argv: Optional[List[str]] = None) -> int:
    logging.basicConfig(level=os.environ.get('LOG_LEVEL', 'WARNING'))
    # Load environment (.env) so OPENWEATHER_* defaults are present
    if os.path.exists('.env'):
        load_dotenv('.env')
    args = build_parser().parse_args(argv)

    try:
        config = Configuration.from_strings(args.api_key, args.city_id, args.units, args.lang, args.enable_forecast)
        with WeatherClient() as client:
            line = get_forecast(config, client)
    except (WeatherError, ConfigurationError) as e:
        logger.debug("Weather lookup failed", exc_info=True)
        print(f"\nForecast unavailable ({e})", file=sys.stderr)
        return 1
    print(line)
    return 0


if __name__ == '__main__':
    raise SystemExit(main())
