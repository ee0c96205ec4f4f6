"""
Parser for tab-separated text pasted from a spreadsheet.

Copying a range in Excel/Sheets puts one row per line on the clipboard, with
cells separated by tabs. Lines that do not carry enough cells are dropped
without being reported.
"""

from typing import Iterator
import structlog

from models.trip_import import RawTripRow
from models.vehicle_import import RawVehicleRow

logger = structlog.get_logger(__name__)

TRIP_FIELD_COUNT = 4       # PLACA, MOTORISTA, ORIGEM, DESTINO
VEHICLE_FIELD_COUNT = 5    # PLACA, TIPO, MODELO, ANO, EQUIPAMENTO


def iter_tabular_lines(
    text: str,
    has_header: bool,
    min_fields: int,
) -> Iterator[tuple[int, list[str]]]:
    """
    Split pasted text into trimmed cells, line by line.

    Args:
        text: Raw pasted text
        has_header: Skip the first line (by position, not by content)
        min_fields: Lines with fewer tab-separated cells are skipped

    Yields:
        (row_index, cells) where row_index is the 1-based line number in the
        pasted text once leading blank lines are dropped, header included
    """
    if not text or not text.strip():
        return

    lines = text.split("\n")

    # Blank lines around the paste go; a leading tab is an empty first cell
    while not lines[0].strip():
        lines.pop(0)
    while not lines[-1].strip():
        lines.pop()

    start = 1 if has_header else 0

    for i in range(start, len(lines)):
        cells = [cell.strip() for cell in lines[i].split("\t")]

        if len(cells) < min_fields:
            continue

        yield i + 1, cells


def parse_trip_rows(text: str, has_header: bool = False) -> list[RawTripRow]:
    """
    Parse pasted trip lines: PLACA, MOTORISTA, ORIGEM, DESTINO.

    Extra cells after the fourth are ignored.

    Example:
        >>> rows = parse_trip_rows("RLJ7B45\\tCARLOS ARMANDO\\tBRF\\tCD FARIAS")
        >>> rows[0].driver_name
        'CARLOS ARMANDO'
    """
    rows = [
        RawTripRow(
            plate=cells[0],
            driver_name=cells[1],
            origin=cells[2],
            destination=cells[3],
            row_index=row_index,
        )
        for row_index, cells in iter_tabular_lines(text, has_header, TRIP_FIELD_COUNT)
    ]

    logger.debug("trip_rows_parsed", count=len(rows), has_header=has_header)
    return rows


def parse_vehicle_rows(text: str, has_header: bool = False) -> list[RawVehicleRow]:
    """Parse pasted vehicle lines: PLACA, TIPO, MODELO, ANO, EQUIPAMENTO."""
    rows = [
        RawVehicleRow(
            plate=cells[0],
            type=cells[1],
            model=cells[2],
            year=cells[3],
            equipment=cells[4],
            row_index=row_index,
        )
        for row_index, cells in iter_tabular_lines(text, has_header, VEHICLE_FIELD_COUNT)
    ]

    logger.debug("vehicle_rows_parsed", count=len(rows), has_header=has_header)
    return rows
