"""State enrichment: rank states by population and merge in ACS economic data.

Each per-state ACS lookup runs in its own worker and is captured as a
``LookupResult``; a failing lookup degrades only that state's record.
"""
import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from .constants import PLACEHOLDER_GROWTH, STATE_ABBREVIATIONS
from .records import StateEconomicRecord, StatePopulationRecord

logger = logging.getLogger(__name__)


@dataclass
class LookupResult:
    """Outcome of one state's ACS lookup"""
    state_code: str
    value: Optional[Dict[str, Any]] = None
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def state_abbreviation(name: str) -> str:
    """Two-letter code for a state name; unknown names use their first two letters"""
    if name in STATE_ABBREVIATIONS:
        return STATE_ABBREVIATIONS[name]
    return (name or '')[:2].upper()


def rank_states(records: List[StatePopulationRecord], top_n: int = 10) -> List[StatePopulationRecord]:
    """Most populous states first; ties keep their input order"""
    return sorted(records, key=lambda record: record.population, reverse=True)[:top_n]


def lookup_state(census_api, state_code: str) -> LookupResult:
    """Run one ACS lookup, capturing any failure instead of raising"""
    try:
        return LookupResult(state_code=state_code, value=census_api.get_acs_data(state_code))
    except Exception as e:
        logger.warning(f"ACS lookup failed for state {state_code}: {e}")
        return LookupResult(state_code=state_code, error=e)


def merge_state(record: StatePopulationRecord, result: LookupResult) -> StateEconomicRecord:
    value = result.value or {}
    return StateEconomicRecord(
        state=record.state,
        abbr=state_abbreviation(record.state),
        population=record.population,
        growth=PLACEHOLDER_GROWTH if result.ok else 0.0,
        median_income=value.get("median_income") or 0,
        unemployment=value.get("unemployment") or 0.0
    )


def enrich_states(census_api, top_n: int = 10, max_workers: int = 10) -> List[StateEconomicRecord]:
    """Fetch the ranked state list and enrich each of the top states concurrently.

    A failure fetching the population list propagates. Failures of individual
    ACS lookups are isolated to their own record.
    """
    top_states = rank_states(census_api.get_state_population(), top_n)
    if not top_states:
        return []

    workers = max(1, min(max_workers, len(top_states)))
    with ThreadPoolExecutor(max_workers=workers) as executor:
        results = list(executor.map(lambda record: lookup_state(census_api, record.state_code), top_states))

    failed = [result.state_code for result in results if not result.ok]
    if failed:
        logger.warning(f"ACS data unavailable for {len(failed)} state(s): {', '.join(failed)}")

    return [merge_state(record, result) for record, result in zip(top_states, results)]
