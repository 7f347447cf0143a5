import logging
from typing import List, NamedTuple, Optional

import requests

from weather_glance import config
from weather_glance.utility import ServiceError


class LocationSuggestion(NamedTuple):
    """
    A place returned by the geocoding service for a search query
    """
    name: str
    country: str
    admin1: Optional[str]
    latitude: float
    longitude: float

    @classmethod
    def from_json(cls, dct):
        """
        Build a suggestion from one entry of the geocoding ``results`` list
        :param dct: dictionary with name, latitude, longitude, country and (maybe) admin1
        :return: a LocationSuggestion
        """
        try:
            return cls(name=dct['name'], country=dct.get('country') or '', admin1=dct.get('admin1') or None,
                       latitude=float(dct['latitude']), longitude=float(dct['longitude']))
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            raise ServiceError(f'Unusable geocoding result {dct!r}') from e

    @property
    def display_name(self):
        """ The label the city gets once selected - 'City, Region' or just 'City' """
        return f'{self.name}, {self.admin1}' if self.admin1 else self.name

    @property
    def region_label(self):
        """ The second line of a suggestion row - region and country, skipping whichever is missing """
        return ', '.join(part for part in (self.admin1, self.country) if part)

    def to_city(self):
        return SelectedCity(self.display_name, self.latitude, self.longitude)


class SelectedCity(NamedTuple):
    """
    The location the weather is currently shown for
    """
    name: str
    lat: float
    lon: float

    def __str__(self):
        return f'{self.name} ({self.lat}, {self.lon})'


DEFAULT_CITY = SelectedCity(config.default_city_name, config.default_city_lat, config.default_city_lon)


def is_searchable(query: str) -> bool:
    """ Only queries longer than the minimum length are sent to the geocoding service """
    return len(query or '') > config.MIN_QUERY_LENGTH


class Geocoder:
    """
    Encapsulates the Open-Meteo geocoding search used for the city suggestions
    """

    def __init__(self, url=None, count=None, timeout=None):
        self.url = url or config.GEOCODING_URL
        self.count = count or config.SUGGESTION_COUNT
        self.timeout = timeout or config.HTTP_TIMEOUT

    def search(self, query: str) -> List[LocationSuggestion]:
        """
        Look up the places matching a (partial) name
        :param query: free text typed by the user
        :return: at most ``count`` suggestions, in the order the service ranked them
        """
        logging.debug(f'Going out to the geocoding service for {query!r}')
        resp = requests.get(self.url,
                            params={'name': query, 'count': self.count, 'language': 'en', 'format': 'json'},
                            timeout=self.timeout)
        if resp.status_code != 200:
            raise ServiceError(f'Geocoding service answered {resp.status_code} for {query!r}')

        data = resp.json()
        if not isinstance(data, dict):
            raise ServiceError(f'Unexpected geocoding payload for {query!r}')
        results = data.get('results') or []
        if not isinstance(results, list):
            raise ServiceError(f'Unexpected geocoding results for {query!r}')
        suggestions = [LocationSuggestion.from_json(r) for r in results[:self.count]]
        logging.debug(f'Geocoding {query!r} returned {len(suggestions)} suggestion(s)')
        return suggestions
