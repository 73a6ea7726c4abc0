import logging
import requests
from typing import Any, Dict, List, Optional
from urllib.parse import urlencode

from .age_distribution import aggregate_age_sex
from .constants import (
    ACS_ECONOMIC_VARIABLES,
    ACS_ENDPOINT,
    ACS_PROFILE_ENDPOINT,
    CENSUS_API_BASE_URL,
    FEMALE_AGE_VARIABLES,
    HISTORICAL_POPULATION,
    MALE_AGE_VARIABLES,
    POPULATION_ENDPOINT,
    POPULATION_VARIABLES,
    RACE_VARIABLES,
)
from .enrichment import enrich_states
from .parsers import first_row_values, parse_acs_row, parse_state_population, to_float
from .race import normalize_race_composition
from .records import (
    AgeBucket,
    HistoricalPopulationPoint,
    RaceCategory,
    StateEconomicRecord,
    StatePopulationRecord,
)

logger = logging.getLogger(__name__)


class CensusAPIError(Exception):
    """Non-success response from the Census API"""
    def __init__(self, status_code: int, reason: str):
        super().__init__(f"API Error: {status_code} {reason}")
        self.status_code = status_code
        self.reason = reason


class CensusAPI:
    """Class to handle Census API interactions"""
    def __init__(self, api_key: Optional[str] = None, base_url: str = CENSUS_API_BASE_URL, timeout: float = 10.0):
        self.api_key = api_key or None
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.headers = {
            'User-Agent': 'census-dashboard/1.0',
            'Accept': 'application/json',
            'Accept-Language': 'en-US,en;q=0.9'
        }

    def build_url(self, endpoint: str, params: Dict[str, str]) -> str:
        """Build a dataset URL, appending the API key only when one is configured"""
        query = dict(params)
        if self.api_key:
            query['key'] = self.api_key
        return f"{self.base_url}{endpoint}?{urlencode(query, safe=',:*')}"

    def make_request(self, url: str) -> list:
        """Make a single request to the Census API and return the decoded JSON array"""
        logger.debug(f"Making request to URL: {self._redact(url)}")
        try:
            response = requests.get(url, headers=self.headers, timeout=self.timeout, allow_redirects=True)
        except requests.RequestException as e:
            logger.error(f"Census API transport error: {e}")
            raise

        logger.debug(f"Response status: {response.status_code}")
        logger.debug(f"Response content: {response.text[:500]}")  # First 500 chars

        if not response.ok:
            if response.status_code == 403:
                logger.error("Census API rejected the request; check the configured API key")
            logger.error(f"API request failed. Status code: {response.status_code}")
            raise CensusAPIError(response.status_code, response.reason or '')

        try:
            data = response.json()
        except ValueError as e:
            logger.error(f"Failed to parse JSON response: {e}")
            raise CensusAPIError(response.status_code, "Invalid JSON in Census API response") from e

        if not isinstance(data, list):
            logger.error(f"Invalid response format: {str(data)[:200]}")
            raise CensusAPIError(response.status_code, "Invalid response format from Census API")
        return data

    def _redact(self, url: str) -> str:
        if self.api_key:
            return url.replace(self.api_key, f"{self.api_key[:5]}...")
        return url

    def get_state_population(self) -> List[StatePopulationRecord]:
        """Fetch population estimates for every state"""
        url = self.build_url(POPULATION_ENDPOINT, {
            'get': ','.join(POPULATION_VARIABLES),
            'for': 'state:*'
        })
        return parse_state_population(self.make_request(url))

    def get_acs_data(self, state_code: str) -> Optional[Dict[str, Any]]:
        """Fetch median household income and unemployment rate for one state"""
        url = self.build_url(ACS_ENDPOINT, {
            'get': ','.join(ACS_ECONOMIC_VARIABLES),
            'for': f'state:{state_code}'
        })
        return parse_acs_row(self.make_request(url))

    def get_age_distribution(self) -> List[AgeBucket]:
        """Fetch the national sex-by-age table and aggregate it into age buckets"""
        url = self.build_url(ACS_ENDPOINT, {
            'get': ','.join(['NAME'] + MALE_AGE_VARIABLES + FEMALE_AGE_VARIABLES),
            'for': 'us:1'
        })
        row = first_row_values(self.make_request(url))
        if row is not None:
            # us:1 appends a trailing geography column
            row = row[:len(MALE_AGE_VARIABLES) + len(FEMALE_AGE_VARIABLES)]
        return aggregate_age_sex(row)

    def get_race_data(self) -> List[RaceCategory]:
        """Fetch the national race/ethnicity profile percentages"""
        url = self.build_url(ACS_PROFILE_ENDPOINT, {
            'get': ','.join(RACE_VARIABLES),
            'for': 'us:1'
        })
        row = first_row_values(self.make_request(url)) or []
        hispanic, white, black, asian = (to_float(row[i]) if i < len(row) else 0.0 for i in range(4))
        return normalize_race_composition(hispanic, white, black, asian)

    def get_historical_population(self) -> List[HistoricalPopulationPoint]:
        """Return the decennial population and urbanization reference series"""
        return [
            HistoricalPopulationPoint(year=year, population=population, urban=urban)
            for year, population, urban in HISTORICAL_POPULATION
        ]

    def get_all_states_data(self, top_n: int = 10, max_workers: int = 10) -> List[StateEconomicRecord]:
        """Fetch the most populous states enriched with ACS economic data"""
        return enrich_states(self, top_n=top_n, max_workers=max_workers)
