"""
Parsers for pasted spreadsheet data.
"""

from parsers.tabular_parser import (
    iter_tabular_lines,
    parse_trip_rows,
    parse_vehicle_rows,
)

__all__ = [
    "iter_tabular_lines",
    "parse_trip_rows",
    "parse_vehicle_rows",
]
