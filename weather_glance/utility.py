from decimal import Decimal, ROUND_HALF_UP, InvalidOperation


class ServiceError(ValueError):
    """ Raised when one of the Open-Meteo services answers with something we can't use """


def round_half_away(value) -> int:
    """ Round a temperature to the nearest whole degree, halves going away from zero

    Python's round() uses banker's rounding (round(16.5) == 16), which is not what anybody
    expects from a thermometer, so we go through Decimal instead.

    :param value: a number (or numeric string) as returned by the forecast service
    :return: the rounded value, e.g. 15.5 -> 16, 15.4 -> 15, -15.5 -> -16
    """
    try:
        return int(Decimal(str(value)).quantize(Decimal('1'), rounding=ROUND_HALF_UP))
    except InvalidOperation:
        raise ValueError(f'{value!r} is not a temperature')


def read_int(key):
    try:
        return None if key is None else int(key)
    except (TypeError, ValueError):
        return None
