"""Unit conversion, formatting and parsing for panel dimensions.

Lengths are stored in millimetres. Imperial values are displayed as whole
inches plus a fraction rounded to the nearest sixteenth.
"""

from __future__ import annotations

import math
import re

from panelcut.domain.value_objects import UnitSystem

MM_PER_INCH = 25.4

_METRIC_PATTERN = re.compile(r"^([\d.]+)(?:\s*mm)?$", re.IGNORECASE)
_FRACTION_PATTERN = re.compile(r'^(?:(\d+)\s+)?(\d+)/(\d+)"?$')
_DECIMAL_INCH_PATTERN = re.compile(r'^([\d.]+)"?$')


def to_millimeters(value: float, unit: UnitSystem) -> float:
    """Convert a length in the given unit system to millimetres."""
    if unit == UnitSystem.METRIC:
        return value
    return value * MM_PER_INCH


def from_millimeters(value: float, unit: UnitSystem) -> float:
    """Convert a length in millimetres to the given unit system."""
    if unit == UnitSystem.METRIC:
        return value
    return value / MM_PER_INCH


def format_dimension(value: float, unit: UnitSystem) -> str:
    """Format a millimetre length for display.

    Args:
        value: Length in millimetres.
        unit: Display unit system.

    Returns:
        ``"1234.5mm"`` for metric; ``'1 1/2"'``, ``'3/4"'`` or ``'12"'``
        for imperial.

    Examples:
        >>> format_dimension(38.1, UnitSystem.IMPERIAL)
        '1 1/2"'
        >>> format_dimension(100, UnitSystem.METRIC)
        '100mm'
    """
    if unit == UnitSystem.METRIC:
        rounded = round(value * 10) / 10
        if rounded == int(rounded):
            return f"{int(rounded)}mm"
        return f"{rounded}mm"

    inches = value / MM_PER_INCH
    whole = math.floor(inches)
    sixteenths = round((inches - whole) * 16)

    if sixteenths == 0:
        return f'{whole}"'
    if sixteenths == 16:
        return f'{whole + 1}"'

    divisor = math.gcd(sixteenths, 16)
    fraction = f"{sixteenths // divisor}/{16 // divisor}"
    if whole == 0:
        return f'{fraction}"'
    return f'{whole} {fraction}"'


def parse_dimension(text: str, unit: UnitSystem) -> float | None:
    """Parse a user-entered length into millimetres.

    Metric accepts ``"2440"`` or ``"2440mm"``. Imperial accepts decimal
    inches (``"48"``, ``'48"'``), fractions (``"3/4"``) and mixed numbers
    (``"1 1/2"``).

    Returns:
        The length in millimetres, or None if the text cannot be parsed or
        is too large to be a finite length.
    """
    length = _parse_millimeters(text.strip(), unit)
    if length is None or not math.isfinite(length):
        return None
    return length


def _parse_millimeters(trimmed: str, unit: UnitSystem) -> float | None:
    if unit == UnitSystem.METRIC:
        match = _METRIC_PATTERN.match(trimmed)
        if match:
            return _to_float(match.group(1))
        return None

    match = _FRACTION_PATTERN.match(trimmed)
    if match:
        # int() refuses very long digit runs; float division can overflow
        try:
            whole = int(match.group(1)) if match.group(1) else 0
            denominator = int(match.group(3))
            if denominator == 0:
                return None
            inches = whole + int(match.group(2)) / denominator
        except (ValueError, OverflowError):
            return None
        return to_millimeters(inches, unit)

    match = _DECIMAL_INCH_PATTERN.match(trimmed)
    if match:
        inches = _to_float(match.group(1))
        if inches is None:
            return None
        return to_millimeters(inches, unit)

    return None


def _to_float(text: str) -> float | None:
    # The character classes above admit strings like "1.2.3".
    try:
        return float(text)
    except ValueError:
        return None
