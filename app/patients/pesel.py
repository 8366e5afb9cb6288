"""PESEL (Polish national identification number) validation.

Layout: ``YYMMDDZZZXQ``. The month carries the century as an offset, ``ZZZX`` is a
serial number whose last digit encodes sex, ``Q`` is a checksum over the first ten.
"""

from __future__ import annotations

from datetime import date

_WEIGHTS = (1, 3, 7, 9, 1, 3, 7, 9, 1, 3)

# Month offset -> first year of the century.
_CENTURY_OFFSETS = {80: 1800, 0: 1900, 20: 2000, 40: 2100, 60: 2200}


def checksum_digit(digits: str) -> int:
    total = sum(int(d) * w for d, w in zip(digits[:10], _WEIGHTS, strict=True))
    return (10 - total % 10) % 10


def birth_date(pesel: str) -> date | None:
    """Decode the birth date, or None when the encoded date does not exist."""

    yy, mm, dd = int(pesel[0:2]), int(pesel[2:4]), int(pesel[4:6])
    offset = (mm - 1) // 20 * 20
    century = _CENTURY_OFFSETS.get(offset)
    if century is None:
        return None
    try:
        return date(century + yy, mm - offset, dd)
    except ValueError:
        return None


def is_valid_pesel(value: str) -> bool:
    if len(value) != 11 or not value.isascii() or not value.isdigit():
        return False
    if checksum_digit(value) != int(value[10]):
        return False
    return birth_date(value) is not None
