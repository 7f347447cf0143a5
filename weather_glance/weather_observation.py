import logging
from typing import NamedTuple, Optional

import requests

from weather_glance import config
from weather_glance.utility import ServiceError, round_half_away, read_int

__all__ = ['WeatherRecord', 'Weather', 'describe_weather', 'WEATHER_DESCRIPTIONS', 'DEFAULT_DESCRIPTION']

CURRENT_FIELDS = ['temperature_2m', 'weather_code']
DAILY_FIELDS = ['temperature_2m_max', 'temperature_2m_min']

DEFAULT_DESCRIPTION = 'Sunny'

# WMO weather interpretation codes as used by Open-Meteo
WEATHER_DESCRIPTIONS = {
    0: 'Clear Sky',
    1: 'Mostly Clear',
    2: 'Partly Cloudy',
    3: 'Overcast',
    45: 'Foggy',
    48: 'Rime Fog',
    51: 'Light Drizzle',
    53: 'Moderate Drizzle',
    55: 'Heavy Drizzle',
    61: 'Light Rain',
    63: 'Moderate Rain',
    65: 'Heavy Rain',
    71: 'Light Snow',
    73: 'Moderate Snow',
    75: 'Heavy Snow',
    77: 'Snow Grains',
    80: 'Light Showers',
    81: 'Moderate Showers',
    82: 'Heavy Showers',
    85: 'Light Snow Showers',
    86: 'Heavy Snow Showers',
    95: 'Thunderstorm',
    96: 'Thunderstorm with Hail',
    99: 'Severe Thunderstorm',
}


def describe_weather(code: Optional[int]) -> str:
    """ Human readable label for a weather code, anything we don't know about is 'Sunny' """
    return WEATHER_DESCRIPTIONS.get(code, DEFAULT_DESCRIPTION)


class WeatherRecord(NamedTuple):
    """
    Display-ready snapshot of the weather for the selected city
    """
    temperature: int
    weather_code: Optional[int]
    max_temp: int
    min_temp: int
    city: str

    @property
    def description(self):
        return describe_weather(self.weather_code)

    def __str__(self):
        return f'Weather for {self.city}' \
            f'\n\tTemperature: {self.temperature}°' \
            f'\n\tConditions: {self.description}' \
            f'\n\tHigh: {self.max_temp}° Low: {self.min_temp}°'


class Weather:
    """
    Encapsulates the Open-Meteo forecast service
    """

    def __init__(self, url=None, timeout=None):
        self.url = url or config.FORECAST_URL
        self.timeout = timeout or config.HTTP_TIMEOUT

    def get_weather(self, lat: float, lon: float, city_name: str) -> WeatherRecord:
        """
        Get today's weather for a location.
        :param lat: latitude of the location
        :param lon: longitude of the location
        :param city_name: label to attach to the record, it is never taken from the response
        :return: a WeatherRecord with the temperatures rounded to whole degrees
        """
        logging.debug(f'get_weather location = {city_name} ({lat}, {lon})')
        return self._build_record_from_json(self.get_openmeteo_forecast(lat, lon), city_name)

    def get_openmeteo_forecast(self, lat, lon):
        """
        Query the forecast service for the current temperature and weather code plus today's max/min
        :return: the decoded JSON response
        """
        resp = requests.get(self.url,
                            params={'latitude': lat, 'longitude': lon,
                                    'current': ','.join(CURRENT_FIELDS),
                                    'daily': ','.join(DAILY_FIELDS),
                                    'timezone': 'auto'},
                            timeout=self.timeout)
        if resp.status_code != 200:
            raise ServiceError(f'Forecast service answered {resp.status_code} for ({lat}, {lon})')

        return resp.json()

    @staticmethod
    def _build_record_from_json(dct, city_name):
        """
        Converts the JSON returned from the forecast service into a WeatherRecord.
        Only the first entry of the daily arrays (today) is used.
        """
        try:
            current = dct['current']
            daily = dct['daily']
            return WeatherRecord(temperature=round_half_away(current['temperature_2m']),
                                 weather_code=read_int(current.get('weather_code')),
                                 max_temp=round_half_away(daily['temperature_2m_max'][0]),
                                 min_temp=round_half_away(daily['temperature_2m_min'][0]),
                                 city=city_name)
        except (KeyError, IndexError, TypeError) as e:
            raise ServiceError(f'Forecast for {city_name} is missing {e}') from e
