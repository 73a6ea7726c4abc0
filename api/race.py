import logging
from typing import List

from .constants import RACE_COLORS
from .records import RaceCategory

logger = logging.getLogger(__name__)


def normalize_race_composition(hispanic: float, white: float, black: float, asian: float) -> List[RaceCategory]:
    """Turn four published percentages into five categories with "other" as the residual.

    Inputs are not range checked and the residual is not clamped; a negative
    residual is logged so inconsistent upstream figures stay visible.
    """
    other = 100 - (white + hispanic + black + asian)
    if other < 0:
        logger.warning(
            f"Race percentages exceed 100 (hispanic={hispanic}, white={white}, "
            f"black={black}, asian={asian}); residual 'other' is {other:.1f}"
        )

    values = {
        'white': white,
        'hispanic': hispanic,
        'black': black,
        'asian': asian,
        'other': other,
    }
    return [
        RaceCategory(key=key, value=round(value, 1), color=RACE_COLORS[key])
        for key, value in values.items()
    ]
