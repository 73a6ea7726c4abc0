import logging
from typing import List, Optional, Sequence

from .constants import AGE_BUCKETS, MALE_AGE_VARIABLES
from .parsers import to_int
from .records import AgeBucket

logger = logging.getLogger(__name__)

MILLION = 1_000_000


def _sum_columns(values: Sequence, indices: Sequence[int], offset: int) -> int:
    total = 0
    for idx in indices:
        position = idx + offset
        if position < len(values):
            total += to_int(values[position])
    return total


def aggregate_age_sex(values: Optional[Sequence]) -> List[AgeBucket]:
    """Aggregate 23 male + 23 female B01001 columns into 9 age buckets (millions).

    Male and female sums are rounded to one decimal independently and the total
    is the rounded sum of those two rounded figures. A missing, short or all-zero
    row produces zero-valued buckets.
    """
    values = values or []
    expected = 2 * len(MALE_AGE_VARIABLES)
    if len(values) != expected:
        logger.warning(f"Expected {expected} age/sex columns, got {len(values)}; missing columns count as 0")

    female_offset = len(MALE_AGE_VARIABLES)
    buckets = []
    for label, indices in AGE_BUCKETS:
        male = round(_sum_columns(values, indices, 0) / MILLION, 1)
        female = round(_sum_columns(values, indices, female_offset) / MILLION, 1)
        buckets.append(AgeBucket(
            age=label,
            male=male,
            female=female,
            total=round(male + female, 1)
        ))
    return buckets
