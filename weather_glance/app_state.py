"""
State container and the operations that change it.

``AppState`` holds everything the views draw: the selected city, the last weather record, the search
query with its suggestions and the loading flag.  ``WeatherApp`` is the only thing that mutates it,
always from the event loop thread; the blocking HTTP calls are pushed to the loop's executor and the
results are applied back on the loop.
"""
import asyncio
import functools
import logging
from typing import List, Optional

import requests

from weather_glance import config
from weather_glance.debounce import Debouncer
from weather_glance.location import DEFAULT_CITY, Geocoder, LocationSuggestion, SelectedCity, is_searchable
from weather_glance.weather_observation import Weather, WeatherRecord


class AppState:

    def __init__(self, selected_city: SelectedCity = DEFAULT_CITY):
        self.selected_city = selected_city
        self.weather: Optional[WeatherRecord] = None
        self.loading = True
        self.query = ''
        self.suggestions: List[LocationSuggestion] = []
        self.show_suggestions = False

    @property
    def first_load(self):
        """ True until the first weather record arrives, while a fetch is running """
        return self.loading and self.weather is None

    @property
    def visible_suggestions(self):
        return self.suggestions if self.show_suggestions else []

    def __repr__(self):
        return '{0} (city={1}, weather={2}, query={3!r}, suggestions={4}, loading={5})'.format(
            object.__repr__(self), self.selected_city.name, self.weather, self.query, len(self.suggestions),
            self.loading)


class WeatherApp:
    """
    Search-as-you-type and weather fetching on top of an AppState.

    Every request is tagged with a sequence number when it is issued, and its result is only applied
    if no newer request of the same kind has been issued since.  That keeps a slow answer for a city
    the user already moved away from from overwriting the newer one.
    """

    def __init__(self, state: AppState = None, geocoder: Geocoder = None, weather: Weather = None,
                 debounce_seconds: float = config.DEBOUNCE_SECONDS):
        self.state = state or AppState()
        self.geocoder = geocoder or Geocoder()
        self.weather_service = weather or Weather()
        self._debouncer = Debouncer(debounce_seconds)
        self._search_seq = 0
        self._weather_seq = 0
        self._tasks = set()

    def start(self):
        """ Fetch the weather for the city selected at start up """
        return self.refresh()

    def refresh(self):
        city = self.state.selected_city
        return self._spawn(self.fetch_weather(city.lat, city.lon, city.name))

    def select_city(self, city: SelectedCity):
        logging.debug(f'Selected city changed to {city}')
        self.state.selected_city = city
        return self.refresh()

    async def fetch_weather(self, lat: float, lon: float, city_name: str) -> Optional[WeatherRecord]:
        """
        Fetch the weather and store it as the current record.
        On failure the previous record stays where it is.
        :return: the record that was stored, or None if the fetch failed or was superseded
        """
        self._weather_seq += 1
        seq = self._weather_seq
        self.state.loading = True
        try:
            record = await self._run_blocking(self.weather_service.get_weather, lat, lon, city_name)
        except (requests.RequestException, ValueError) as e:
            logging.error(f'Error fetching weather for {city_name}: {e}')
            return None
        finally:
            if seq == self._weather_seq:
                self.state.loading = False

        if seq != self._weather_seq:
            logging.debug(f'Discarding weather for {city_name}, a newer request was issued')
            return None
        self.state.weather = record
        return record

    def set_query(self, text: str):
        """
        Store the text of the search box.  Long enough queries are looked up once typing pauses,
        shorter ones clear the suggestions straight away.
        """
        self.state.query = text
        if is_searchable(text):
            self._debouncer.call(self._start_search, text)
        else:
            self._debouncer.cancel()
            # anything still in flight is for a query that is gone now
            self._search_seq += 1
            self.state.suggestions = []
            self.state.show_suggestions = False

    def clear_search(self):
        self.set_query('')

    def focus(self):
        if self.state.suggestions:
            self.state.show_suggestions = True

    def blur(self):
        self.state.show_suggestions = False

    def select_suggestion(self, suggestion: LocationSuggestion):
        city = suggestion.to_city()
        self.set_query('')
        self.state.show_suggestions = False
        return self.select_city(city)

    def select_suggestion_at(self, index: int):
        return self.select_suggestion(self.state.suggestions[index])

    async def fetch_suggestions(self, query: str) -> List[LocationSuggestion]:
        self._search_seq += 1
        seq = self._search_seq
        try:
            suggestions = await self._run_blocking(self.geocoder.search, query)
        except (requests.RequestException, ValueError) as e:
            logging.error(f'Error fetching suggestions for {query!r}: {e}')
            suggestions = []

        if seq != self._search_seq:
            logging.debug(f'Discarding suggestions for {query!r}, the query has changed')
            return suggestions
        self.state.suggestions = suggestions
        self.state.show_suggestions = bool(suggestions)
        return suggestions

    def _start_search(self, query):
        self._spawn(self.fetch_suggestions(query))

    async def settle(self):
        """ Wait until no search is waiting on the debounce timer and no request is in flight """
        while self._debouncer.pending or self._tasks:
            if self._tasks:
                await asyncio.gather(*self._tasks)
            else:
                await asyncio.sleep(self._debouncer.delay)

    def _spawn(self, coro):
        task = asyncio.get_running_loop().create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    @staticmethod
    async def _run_blocking(func, *args):
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, functools.partial(func, *args))
