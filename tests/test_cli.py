import httpx
import pytest
from polybarweather import cli
from polybarweather.client import WeatherClient

ARGS = ['-k', 'key', '-c', '2643743', '-u', 'metric']

CURRENT = {"main": {"temp": 10}, "weather": [{"icon": "01d"}]}
FORECAST = {"list": [{"main": {"temp": 15}, "weather": [{"icon": "02d"}]}]}


class DummyResp:
    def __init__(self, status_code, json_data):
        self.status_code = status_code
        self._json = json_data
        self.text = str(json_data)
    def json(self):
        return self._json


class DummyHttpClient:
    def __init__(self, responses):
        self.responses = responses
        self.urls = []
    def get(self, url, params=None):
        self.urls.append(url)
        resp = self.responses[len(self.urls) - 1]
        if isinstance(resp, Exception):
            raise resp
        return resp
    def close(self):
        pass


@pytest.fixture
def http(monkeypatch, tmp_path):
    for name in ('API_KEY', 'CITY_ID', 'UNITS', 'LANG', 'ENABLE_FORECAST'):
        monkeypatch.delenv('OPENWEATHER_' + name, raising=False)
    monkeypatch.chdir(tmp_path)
    dummy = DummyHttpClient([DummyResp(200, CURRENT), DummyResp(200, FORECAST)])
    monkeypatch.setattr(cli, 'WeatherClient', lambda: WeatherClient(http_client=dummy))  # type: ignore
    return dummy


def test_forecast_enabled(http, capsys):
    assert cli.main(ARGS + ['-f', 'true']) == 0
    out, err = capsys.readouterr()
    assert out == '%{T4}01d%{T-} %{T1}10°C%{T-}%{T3}%{T-}%{T4}02d%{T-} %{T1}15°C%{T-}\n'
    assert err == ''


def test_forecast_disabled(http, capsys):
    assert cli.main(ARGS + ['--enable-forcast', 'false']) == 0
    out, _ = capsys.readouterr()
    assert out == '%{T4}01d%{T-} %{T1}10°C%{T-}\n'


def test_both_requests_sequential(http, capsys):
    cli.main(ARGS)
    assert [u.rsplit('/', 1)[1] for u in http.urls] == ['weather', 'forecast']


def test_forecast_transport_failure(http, capsys):
    http.responses[1] = httpx.ConnectTimeout('timed out')
    assert cli.main(ARGS + ['-f', 'true']) == 1
    out, err = capsys.readouterr()
    assert out == ''
    assert err.startswith('\nForecast unavailable (')
    assert 'Failed to query OpenWeatherMap' in err


def test_missing_icon_reported(http, capsys):
    http.responses[0] = DummyResp(200, {"main": {"temp": 10}, "weather": [{}]})
    assert cli.main(ARGS) == 1
    out, err = capsys.readouterr()
    assert out == ''
    assert 'Invalid response format from OpenWeatherMap' in err
    assert len(http.urls) == 1


def test_required_flags(http):
    with pytest.raises(SystemExit) as exc:
        cli.main(['-c', '2643743'])
    assert exc.value.code == 2


def test_invalid_units_flag(http):
    with pytest.raises(SystemExit) as exc:
        cli.main(ARGS[:4] + ['-u', 'celsius'])
    assert exc.value.code == 2


def test_environment_defaults(http, monkeypatch, capsys):
    monkeypatch.setenv('OPENWEATHER_API_KEY', 'key')
    monkeypatch.setenv('OPENWEATHER_CITY_ID', '2643743')
    monkeypatch.setenv('OPENWEATHER_UNITS', 'imperial')
    assert cli.main([]) == 0
    out, _ = capsys.readouterr()
    assert out == '%{T4}01d%{T-} %{T1}10°F%{T-}\n'


def test_invalid_environment_units(http, monkeypatch, capsys):
    monkeypatch.setenv('OPENWEATHER_UNITS', 'celsius')
    assert cli.main(ARGS[:4]) == 1
    _, err = capsys.readouterr()
    assert 'Forecast unavailable (Unknown units' in err


def test_dotenv_file_loaded(http, tmp_path, capsys):
    import os
    (tmp_path / '.env').write_text('OPENWEATHER_API_KEY=key\nOPENWEATHER_CITY_ID=2643743\n')
    try:
        assert cli.main(['-u', 'kelvin']) == 0
    finally:
        os.environ.pop('OPENWEATHER_API_KEY', None)
        os.environ.pop('OPENWEATHER_CITY_ID', None)
    out, _ = capsys.readouterr()
    assert out == '%{T4}01d%{T-} %{T1}10K%{T-}\n'


def test_non_finite_temperature_reported(http, capsys):
    http.responses[1] = DummyResp(200, {"list": [{"main": {"temp": float('nan')}, "weather": [{"icon": "02d"}]}]})
    assert cli.main(ARGS + ['-f', 'true']) == 1
    out, err = capsys.readouterr()
    assert out == ''
    assert err.startswith('\nForecast unavailable (Invalid response format')
