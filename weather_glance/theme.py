import datetime as dt
from typing import NamedTuple, Tuple


class Theme(NamedTuple):
    """
    Colors used to paint the view - a three stop background gradient, the text color and an accent
    """
    colors: Tuple[str, str, str]
    text: str
    accent: str

    @property
    def is_light_text(self):
        return self.text == WHITE


DARK = '#1B1B1B'
WHITE = '#FFFFFF'

MORNING = Theme(('#FFD166', '#FFB347', '#FF8C66'), DARK, '#FF6B35')
DAY = Theme(('#4A90E2', '#357ABD', '#1E5F9A'), WHITE, '#FFD700')
EVENING = Theme(('#9B5DE5', '#F15BB5', '#FF7F5B'), WHITE, '#FFE156')
NIGHT = Theme(('#0F2027', '#203A43', '#2C5364'), WHITE, '#00B4D8')


def theme_for(hour: int) -> Theme:
    """
    Pick the theme for an hour of the day.  Ranges are half open: [5, 9) morning, [9, 17) day,
    [17, 20) evening and everything else is night.
    :param hour: hour of the day, 0-23
    :return: the Theme for that hour
    """
    if not 0 <= hour <= 23:
        raise ValueError(f'{hour} is not an hour of the day')
    if 5 <= hour < 9:
        return MORNING
    if 9 <= hour < 17:
        return DAY
    if 17 <= hour < 20:
        return EVENING
    return NIGHT


def current_theme(now: dt.datetime = None) -> Theme:
    """ Theme for the wall clock time, read again on every call """
    return theme_for((now or dt.datetime.now()).hour)


def hex_to_rgb(color: str) -> Tuple[int, int, int]:
    color = color.lstrip('#')
    return int(color[0:2], 16), int(color[2:4], 16), int(color[4:6], 16)
