"""Sexagesimal formatting of RA (hours) and Dec (degrees) for text output."""

from __future__ import annotations


def sexagesimal(value: float, separators: str = '   ', ndecimal: int = 1) -> str:
    """Format value as units, minutes, seconds (e.g. 6.752 -> '6 45 07.2').

    Parameters:
        value: Hours or degrees.
        separators: 3 characters placed after units, minutes, seconds.
        ndecimal: Decimal places on the seconds field.

    Returns:
        Formatted string; negative values carry a leading '-' even when the
        whole-unit part is 0.
    """
    if len(separators) < 3:
        separators = '   '
    sign = '-' if value < 0 else ''
    scale = 10**ndecimal
    ticks = round(abs(value) * 3600.0 * scale)
    whole_secs, frac = divmod(ticks, scale)
    minutes, secs = divmod(whole_secs, 60)
    units, minutes = divmod(minutes, 60)
    width = 3 + ndecimal if ndecimal > 0 else 2
    sec_text = f'{secs + frac / scale:0{width}.{ndecimal}f}'
    return (
        f'{sign}{units}{separators[0]}{minutes:02d}{separators[1]}'
        f'{sec_text}{separators[2]}'
    ).rstrip()


def format_ra(hours: float) -> str:
    """RA as '6h45m07.2s'."""
    return sexagesimal(hours, 'hms', 1)


def format_dec(degrees: float) -> str:
    """Dec as '+38d47m01s', always signed."""
    text = sexagesimal(degrees, 'dms', 0)
    return text if text.startswith('-') else '+' + text
