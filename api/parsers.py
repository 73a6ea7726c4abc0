import logging
import re
from typing import Any, Dict, List, Optional, Tuple

from .records import StatePopulationRecord

logger = logging.getLogger(__name__)

_INT_PREFIX = re.compile(r'^\s*[+-]?\d+')
_FLOAT_PREFIX = re.compile(r'^\s*[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?')


def split_response(data: Optional[list]) -> Tuple[list, List[list]]:
    """Split a Census API response into its header row and data rows"""
    if not data:
        return [], []
    header, *rows = data
    return header, rows


def to_int(value: Any) -> int:
    """Coerce a Census cell to int, falling back to 0 for missing or non-numeric values"""
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value == value else 0
    if value is None:
        return 0
    match = _INT_PREFIX.match(str(value))
    return int(match.group()) if match else 0


def to_float(value: Any) -> float:
    """Coerce a Census cell to float, falling back to 0.0 for missing or non-numeric values"""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return float(value) if value == value else 0.0
    if value is None:
        return 0.0
    match = _FLOAT_PREFIX.match(str(value))
    return float(match.group()) if match else 0.0


def _cell(row: list, index: int) -> Any:
    return row[index] if index < len(row) else None


def parse_state_population(data: Optional[list]) -> List[StatePopulationRecord]:
    """Parse a POP_2023,NAME,state response into population records"""
    _, rows = split_response(data)
    records = [
        StatePopulationRecord(
            state=_cell(row, 1),
            population=to_int(_cell(row, 0)),
            state_code=_cell(row, 2)
        )
        for row in rows
    ]
    logger.debug(f"Parsed {len(records)} state population rows")
    return records


def parse_acs_row(data: Optional[list]) -> Optional[Dict[str, Any]]:
    """Parse a NAME,B19013_001E,DP03_0005PE,state response; None when there are no rows"""
    _, rows = split_response(data)
    if not rows:
        return None
    row = rows[0]
    return {
        "median_income": to_int(_cell(row, 1)),
        "unemployment": to_float(_cell(row, 2))
    }


def first_row_values(data: Optional[list], skip: int = 1) -> Optional[list]:
    """Return the first data row without its leading label columns"""
    _, rows = split_response(data)
    if not rows:
        return None
    return rows[0][skip:]
