"""Domain services for the panel cutting domain."""

from .units import (
    MM_PER_INCH,
    format_dimension,
    from_millimeters,
    parse_dimension,
    to_millimeters,
)

__all__ = [
    "MM_PER_INCH",
    "format_dimension",
    "from_millimeters",
    "parse_dimension",
    "to_millimeters",
]
