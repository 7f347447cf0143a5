"""
The two ways of drawing an AppState: a terminal view and a web page.

Both work off the same ``WeatherView`` so they only differ in how things are painted.
"""
import datetime as dt
import html
from typing import List, NamedTuple, Tuple

import click

from weather_glance.theme import Theme, current_theme, hex_to_rgb
from weather_glance.weather_observation import DEFAULT_DESCRIPTION

SUGGESTION_TEXT = '#1B1B1B'
SUGGESTION_BACKGROUND = '#F2F2F2'
SEARCH_PLACEHOLDER = 'Search for a city...'


class WeatherView(NamedTuple):
    loading: bool
    city: str
    date_line: str
    temperature: str
    condition: str
    high: str
    low: str
    details: List[Tuple[str, str]]
    query: str
    suggestions: List[Tuple[str, str]]


def format_date_line(now: dt.datetime) -> str:
    """ e.g. 'Mon, Oct 19 · 3:04 PM' """
    hour = now.hour % 12 or 12
    return f'{now:%a, %b} {now.day} · {hour}:{now:%M} {now:%p}'


def _degrees(value):
    return '--°' if value is None else f'{value}°'


def build_view(state, now: dt.datetime) -> WeatherView:
    weather = state.weather
    if weather is None:
        temperature = high = low = None
        condition, city = DEFAULT_DESCRIPTION, ''
    else:
        temperature, high, low = weather.temperature, weather.max_temp, weather.min_temp
        condition, city = weather.description, weather.city
    return WeatherView(loading=state.first_load,
                       city=city,
                       date_line=format_date_line(now),
                       temperature=_degrees(temperature),
                       condition=condition,
                       high=_degrees(high),
                       low=_degrees(low),
                       details=[('FEELS LIKE', _degrees(temperature))],
                       query=state.query,
                       suggestions=[(s.name, s.region_label) for s in state.visible_suggestions])


class ConsoleRenderer:
    """
    Compact terminal view, painted with 24 bit colors from the theme
    """

    def __init__(self, width=44):
        self.width = width

    def render(self, state, now: dt.datetime = None) -> str:
        now = now or dt.datetime.now()
        theme = current_theme(now)
        view = build_view(state, now)
        if view.loading:
            return self._line('Loading...', theme, fg=theme.accent)

        lines = [self._line(f'🔍 {view.query or SEARCH_PLACEHOLDER}', theme, align='<')]
        for n, (name, region) in enumerate(view.suggestions, start=1):
            lines.append(self._row(f'{n}. {name}', bold=True))
            lines.append(self._row(f'   {region}'))
        lines += [self._line('', theme),
                  self._line(view.city, theme, bold=True),
                  self._line(view.date_line, theme),
                  self._line('', theme),
                  self._line(view.temperature, theme, bold=True),
                  self._line(view.condition, theme),
                  self._line(f'H {view.high} / L {view.low}', theme, fg=theme.accent),
                  self._line('', theme)]
        lines += [self._line(f'{label}: {value}', theme) for label, value in view.details]
        return '\n'.join(lines)

    def _line(self, text, theme: Theme, fg=None, align='^', bold=False):
        return click.style(f'{text:{align}{self.width}}', fg=hex_to_rgb(fg or theme.text),
                           bg=hex_to_rgb(theme.colors[1]), bold=bold)

    def _row(self, text, bold=False):
        return click.style(f'{text:<{self.width}}', fg=hex_to_rgb(SUGGESTION_TEXT),
                           bg=hex_to_rgb(SUGGESTION_BACKGROUND), bold=bold)


PAGE = """<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<meta name="color-scheme" content="{scheme}">
<title>{title}</title>
<style>
body {{ margin: 0; min-height: 100vh; font-family: Inter, sans-serif; color: {text};
       background: linear-gradient(135deg, {c0}, {c1}, {c2}); }}
.search {{ max-width: 42rem; margin: 1.5rem auto 2rem; position: relative; }}
.search input {{ width: 100%; padding: 1rem 3rem; border-radius: 1rem; font-size: 1.1rem; color: {text};
                background: rgba(255, 255, 255, 0.2); border: 1px solid rgba(255, 255, 255, 0.3); }}
.suggestions {{ margin-top: .5rem; border-radius: 1rem; overflow: hidden; background: rgba(255, 255, 255, 0.95); }}
.suggestion {{ padding: .75rem 1rem; color: {suggestion_text}; }}
.suggestion .region {{ font-size: .85rem; opacity: .7; }}
.weather {{ text-align: center; }}
.temperature {{ font-size: 8rem; font-weight: 300; }}
.range {{ color: {accent}; font-size: 1.5rem; }}
.card {{ display: inline-block; margin: .5rem; padding: 1rem; border-radius: 1rem;
         background: rgba(255, 255, 255, 0.15); }}
.spinner {{ margin: 40vh auto; width: 4rem; height: 4rem; border-radius: 50%;
            border: 4px solid {accent}; border-top-color: transparent; }}
</style>
</head>
<body>
{body}
</body>
</html>
"""


class HtmlRenderer:
    """
    Full page web view with the theme gradient as background
    """

    def render(self, state, now: dt.datetime = None) -> str:
        now = now or dt.datetime.now()
        theme = current_theme(now)
        view = build_view(state, now)
        body = '<div class="spinner"></div>' if view.loading else self._body(view)
        return PAGE.format(title=html.escape(view.city or 'Weather'), body=body, text=theme.text,
                           accent=theme.accent, c0=theme.colors[0], c1=theme.colors[1], c2=theme.colors[2],
                           scheme='dark' if theme.is_light_text else 'light', suggestion_text=SUGGESTION_TEXT)

    @staticmethod
    def _body(view: WeatherView) -> str:
        esc = html.escape
        parts = ['<div class="search">',
                 f'<input type="text" value="{esc(view.query)}" placeholder="{SEARCH_PLACEHOLDER}">']
        if view.suggestions:
            parts.append('<div class="suggestions">')
            for name, region in view.suggestions:
                parts.append(f'<div class="suggestion"><div class="name">{esc(name)}</div>'
                             f'<div class="region">{esc(region)}</div></div>')
            parts.append('</div>')
        parts.append('</div>')
        parts += ['<div class="weather">',
                  f'<h1 class="city">{esc(view.city)}</h1>',
                  f'<p class="date">{esc(view.date_line)}</p>',
                  f'<div class="temperature">{view.temperature}</div>',
                  f'<p class="condition">{esc(view.condition)}</p>',
                  f'<div class="range">H {view.high} / L {view.low}</div>']
        parts += [f'<div class="card"><p>{esc(label)}</p><p>{esc(value)}</p></div>' for label, value in view.details]
        parts.append('</div>')
        return '\n'.join(parts)
