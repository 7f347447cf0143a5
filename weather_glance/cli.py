"""Console script for weather_glance."""
import asyncio
import functools
import sys

import click
import requests

from weather_glance import configure_logging, __version__
from weather_glance.app_state import AppState, WeatherApp
from weather_glance.location import DEFAULT_CITY, Geocoder, SelectedCity, is_searchable
from weather_glance.renderers import ConsoleRenderer, HtmlRenderer

Colors = {'Description': 'cyan', 'Prompt': 'yellow', 'Error': 'red', 'Output': 'green',
          'Alternate_Output': 'cyan'}


def _prompt(s: str):
    return click.style(s, fg=Colors['Prompt'])


def _city_from_options(name, lat, lon) -> SelectedCity:
    if lat is None or lon is None:
        if lat is not None or lon is not None:
            raise click.UsageError('--lat and --lon have to be given together')
        return DEFAULT_CITY
    return SelectedCity(name or f'{lat}, {lon}', lat, lon)


def city_options(f):
    f = click.option('--lon', type=float, help='longitude of the location')(f)
    f = click.option('--lat', type=float, help='latitude of the location')(f)
    f = click.option('--name', help='label shown for the location')(f)
    return f


async def _load(app: WeatherApp, query=None):
    app.start()
    if query:
        app.set_query(query)
    await app.settle()


@click.group()
@click.version_option(__version__)
@click.option('--log-file', default=None, help='where to write the debug log')
def cli(log_file):
    configure_logging(log_file)


@cli.command('search')
@click.argument('query')
def search(query):
    """ List the places matching QUERY """
    if not is_searchable(query):
        click.secho('Type at least 3 characters to search.', fg=Colors['Error'])
        return
    try:
        suggestions = Geocoder().search(query)
    except (requests.RequestException, ValueError) as e:
        click.secho(f'Unable to search for {query}: {e}', fg=Colors['Error'])
        sys.exit(1)
    if not suggestions:
        click.secho(f'Nothing found for {query}.', fg=Colors['Alternate_Output'])
        return
    for n, s in enumerate(suggestions, start=1):
        click.secho(f'{n}. {s.name}', fg=Colors['Output'], bold=True)
        click.secho(f'   {s.region_label}  ({s.latitude}, {s.longitude})', fg=Colors['Description'])


@cli.command('now')
@city_options
def now(name, lat, lon):
    """ Show today's weather for a location (the default city if none is given) """
    app = WeatherApp(AppState(_city_from_options(name, lat, lon)))
    asyncio.run(_load(app))
    if app.state.weather is None:
        click.secho(f'Unable to get the weather for {app.state.selected_city.name}.', fg=Colors['Error'])
        sys.exit(1)
    click.echo(ConsoleRenderer().render(app.state))


@cli.command('html')
@city_options
@click.option('--query', default=None, help='also show the suggestions for this search')
@click.option('-o', '--output', type=click.File('w', encoding='utf-8'), default='-', help='file to write')
def html_page(name, lat, lon, query, output):
    """ Render the web view of the weather to a file """
    app = WeatherApp(AppState(_city_from_options(name, lat, lon)))
    asyncio.run(_load(app, query))
    if app.state.weather is None:
        click.secho(f'Unable to get the weather for {app.state.selected_city.name}.', fg=Colors['Error'],
                    err=True)
    output.write(HtmlRenderer().render(app.state))


@cli.command('interactive')
def interactive():
    """ Search for cities as you type and pick one to see its weather """
    asyncio.run(_interactive(WeatherApp(), ConsoleRenderer()))


async def _interactive(app: WeatherApp, renderer: ConsoleRenderer):
    loop = asyncio.get_running_loop()
    app.start()
    await app.settle()
    while True:
        click.echo(renderer.render(app.state))
        text = await loop.run_in_executor(None, functools.partial(
            click.prompt, _prompt('Search (#number picks a city, q quits)'), default='', show_default=False))
        text = text.strip()
        if text == 'q':
            break
        if text.startswith('#') and text[1:].isdigit() and app.state.visible_suggestions:
            index = int(text[1:]) - 1
            if not 0 <= index < len(app.state.suggestions):
                click.secho(f'Pick a number between 1 and {len(app.state.suggestions)}.', fg=Colors['Error'])
                continue
            app.select_suggestion_at(index)
        else:
            app.set_query(text)
        await app.settle()


def main():
    return cli()


if __name__ == "__main__":
    sys.exit(main())  # pragma: no cover
