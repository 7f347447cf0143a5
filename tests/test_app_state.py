"""
Search-as-you-type and weather fetch flows, driven on a real event loop with fake services.
"""
import asyncio
import threading
from unittest import mock

import requests
from pytest import fixture

from weather_glance.app_state import AppState, WeatherApp
from weather_glance.location import DEFAULT_CITY, Geocoder, LocationSuggestion, SelectedCity
from weather_glance.weather_observation import WeatherRecord

DEBOUNCE = 0.05

PARIS = LocationSuggestion('Paris', 'France', 'Île-de-France', 48.85341, 2.3488)
PARIS_TX = LocationSuggestion('Paris', 'United States', 'Texas', 33.66094, -95.55551)
MONACO = LocationSuggestion('Monaco', 'Monaco', None, 43.73333, 7.41667)


class FakeGeocoder:

    def __init__(self, results=None, error=None):
        self.results = results or {}
        self.error = error
        self.calls = []

    def search(self, query):
        self.calls.append(query)
        if self.error is not None:
            raise self.error
        return self.results.get(query, [])


class FakeWeather:

    def __init__(self, temperature=16):
        self.temperature = temperature
        self.error = None
        self.calls = []

    def get_weather(self, lat, lon, city_name):
        self.calls.append((lat, lon, city_name))
        if self.error is not None:
            raise self.error
        return WeatherRecord(self.temperature, 1, self.temperature + 2, self.temperature - 6, city_name)


@fixture
def geocoder():
    return FakeGeocoder({'Paris': [PARIS, PARIS_TX], 'Monaco': [MONACO]})


@fixture
def weather():
    return FakeWeather()


@fixture
def app(geocoder, weather):
    return WeatherApp(AppState(), geocoder=geocoder, weather=weather, debounce_seconds=DEBOUNCE)


def run(coro):
    return asyncio.run(coro)


def test_initial_state():
    state = AppState()
    assert state.selected_city == DEFAULT_CITY
    assert state.weather is None
    assert state.loading
    assert state.first_load
    assert state.suggestions == []
    assert not state.show_suggestions


def test_start_fetches_default_city(app, weather):
    async def scenario():
        app.start()
        await app.settle()

    run(scenario())
    assert weather.calls == [(45.6719, 11.9258, 'Castelfranco Veneto')]
    assert app.state.weather.city == 'Castelfranco Veneto'
    assert not app.state.loading
    assert not app.state.first_load


def test_short_queries_never_search(app, geocoder):
    async def scenario():
        for text in ['', 'P', 'Pa']:
            app.set_query(text)
        await app.settle()

    run(scenario())
    assert geocoder.calls == []
    assert app.state.suggestions == []
    assert not app.state.show_suggestions


def test_burst_of_keystrokes_searches_once(app, geocoder):
    async def scenario():
        for text in ['P', 'Pa', 'Par', 'Pari', 'Paris']:
            app.set_query(text)
            await asyncio.sleep(DEBOUNCE / 4)
        await app.settle()

    run(scenario())
    assert geocoder.calls == ['Paris']
    assert app.state.suggestions == [PARIS, PARIS_TX]
    assert app.state.show_suggestions


def test_pauses_between_keystrokes_search_each_time(app, geocoder):
    async def scenario():
        app.set_query('Mon')
        await app.settle()
        app.set_query('Monaco')
        await app.settle()

    run(scenario())
    assert geocoder.calls == ['Mon', 'Monaco']
    assert app.state.suggestions == [MONACO]


def test_shortening_the_query_cancels_the_pending_search(app, geocoder):
    async def scenario():
        app.set_query('Paris')
        app.set_query('Pa')
        await app.settle()

    run(scenario())
    assert geocoder.calls == []
    assert app.state.query == 'Pa'


def test_short_query_clears_suggestions_synchronously(app):
    async def scenario():
        app.set_query('Paris')
        await app.settle()
        assert app.state.show_suggestions
        app.set_query('Pa')
        assert app.state.suggestions == []
        assert not app.state.show_suggestions

    run(scenario())


def test_no_results_clears_suggestions(app):
    async def scenario():
        app.set_query('Paris')
        await app.settle()
        app.set_query('Xyzzy')
        await app.settle()

    run(scenario())
    assert app.state.suggestions == []
    assert not app.state.show_suggestions


def test_search_error_clears_suggestions(app, geocoder):
    async def scenario():
        app.set_query('Paris')
        await app.settle()
        geocoder.error = requests.ConnectionError('offline')
        app.set_query('Paris ')
        await app.settle()

    run(scenario())
    assert app.state.suggestions == []
    assert not app.state.show_suggestions


def test_late_suggestions_for_an_abandoned_query_are_dropped(weather):
    release = threading.Event()

    class SlowGeocoder(FakeGeocoder):
        def search(self, query):
            release.wait(2)
            return super().search(query)

    app = WeatherApp(geocoder=SlowGeocoder({'Berlin': [MONACO]}), weather=weather, debounce_seconds=DEBOUNCE)

    async def scenario():
        app.set_query('Berlin')
        await asyncio.sleep(DEBOUNCE * 3)
        app.set_query('Be')
        release.set()
        await app.settle()

    run(scenario())
    assert app.state.suggestions == []
    assert not app.state.show_suggestions


def test_focus_and_blur(app, geocoder):
    async def scenario():
        app.set_query('Paris')
        await app.settle()
        app.blur()
        assert not app.state.show_suggestions
        app.focus()
        assert app.state.show_suggestions
        await app.settle()

    run(scenario())
    # focusing again shows what we had, it does not search again
    assert geocoder.calls == ['Paris']


def test_focus_without_suggestions_shows_nothing(app):
    app.focus()
    assert not app.state.show_suggestions


def test_select_suggestion(app, weather):
    async def scenario():
        app.start()
        app.set_query('Paris')
        await app.settle()
        app.select_suggestion(PARIS)
        await app.settle()

    run(scenario())
    assert app.state.selected_city == SelectedCity('Paris, Île-de-France', 48.85341, 2.3488)
    assert app.state.query == ''
    assert not app.state.show_suggestions
    assert app.state.weather.city == 'Paris, Île-de-France'
    assert weather.calls[-1] == (48.85341, 2.3488, 'Paris, Île-de-France')


def test_select_suggestion_without_region(app):
    async def scenario():
        app.set_query('Monaco')
        await app.settle()
        app.select_suggestion_at(0)
        await app.settle()

    run(scenario())
    assert app.state.selected_city.name == 'Monaco'
    assert app.state.weather.city == 'Monaco'


def test_clear_search(app):
    async def scenario():
        app.set_query('Paris')
        await app.settle()
        app.clear_search()

    run(scenario())
    assert app.state.query == ''
    assert app.state.suggestions == []
    assert not app.state.show_suggestions


def test_failed_fetch_keeps_previous_record(app, weather):
    async def scenario():
        app.start()
        await app.settle()
        before = app.state.weather
        weather.error = requests.Timeout('slow')
        app.select_city(SelectedCity('Monaco', 43.73333, 7.41667))
        await app.settle()
        return before

    before = run(scenario())
    assert app.state.weather is before
    assert (app.state.weather.temperature, app.state.weather.weather_code,
            app.state.weather.max_temp, app.state.weather.min_temp) == (16, 1, 18, 10)
    assert not app.state.loading


def test_failed_first_load_leaves_no_record(app, weather):
    weather.error = ValueError('garbage')

    async def scenario():
        app.start()
        await app.settle()

    run(scenario())
    assert app.state.weather is None
    assert not app.state.loading
    assert not app.state.first_load


def test_stale_weather_response_is_discarded():
    release = threading.Event()

    class SlowWeather(FakeWeather):
        def get_weather(self, lat, lon, city_name):
            if city_name == 'Old Town':
                release.wait(2)
            return super().get_weather(lat, lon, city_name)

    app = WeatherApp(AppState(SelectedCity('Old Town', 1.0, 1.0)), geocoder=FakeGeocoder(),
                     weather=SlowWeather(), debounce_seconds=DEBOUNCE)

    async def scenario():
        old = app.start()
        await asyncio.sleep(0)
        new = app.select_city(SelectedCity('New Town', 2.0, 2.0))
        await new
        assert app.state.weather.city == 'New Town'
        release.set()
        return await old

    assert run(scenario()) is None
    assert app.state.weather.city == 'New Town'
    assert not app.state.loading


def test_record_stays_visible_while_refreshing(app):
    async def scenario():
        app.start()
        await app.settle()
        task = app.select_city(SelectedCity('Monaco', 43.73333, 7.41667))
        await asyncio.sleep(0)
        assert app.state.loading
        assert app.state.weather.city == 'Castelfranco Veneto'
        assert not app.state.first_load
        await task

    run(scenario())
    assert app.state.weather.city == 'Monaco'


def test_malformed_results_clear_suggestions(weather):
    good = mock.Mock(status_code=200)
    good.json.return_value = {'results': [{'name': 'Paris', 'latitude': 48.85341, 'longitude': 2.3488,
                                           'country': 'France', 'admin1': 'Île-de-France'}]}
    bad = mock.Mock(status_code=200)
    bad.json.return_value = {'results': {'name': 'Parisx'}}
    app = WeatherApp(geocoder=Geocoder(url='https://geocoding.test/v1/search'), weather=weather,
                     debounce_seconds=DEBOUNCE)

    async def scenario():
        with mock.patch('weather_glance.location.requests.get', side_effect=[good, bad]):
            app.set_query('Paris')
            await app.settle()
            assert app.state.suggestions == [PARIS]
            app.set_query('Parisx')
            await app.settle()

    run(scenario())
    assert app.state.suggestions == []
    assert not app.state.show_suggestions
