import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .records import AgeBucket, HistoricalPopulationPoint, RaceCategory, StateEconomicRecord

logger = logging.getLogger(__name__)

ERROR_MESSAGES = {
    'en': 'Unable to load Census data. Please check API key configuration or try again later.',
    'zh': '无法加载 Census 数据。请检查 API 密钥配置或稍后重试。',
}


def error_message(language: str) -> str:
    return ERROR_MESSAGES.get(language, ERROR_MESSAGES['en'])


@dataclass
class DashboardResult:
    """Either all dashboard datasets or a single user-facing error message"""
    ok: bool
    states: List[StateEconomicRecord] = field(default_factory=list)
    age_distribution: List[AgeBucket] = field(default_factory=list)
    race: List[RaceCategory] = field(default_factory=list)
    history: List[HistoricalPopulationPoint] = field(default_factory=list)
    error: Optional[str] = None

    @classmethod
    def failure(cls, message: str) -> 'DashboardResult':
        return cls(ok=False, error=message)

    def to_dict(self) -> Dict[str, Any]:
        if not self.ok:
            return {"ok": False, "error": self.error}
        return {
            "ok": True,
            "states": [record.to_dict() for record in self.states],
            "ageDistribution": [bucket.to_dict() for bucket in self.age_distribution],
            "race": [category.to_dict() for category in self.race],
            "history": [point.to_dict() for point in self.history]
        }


def fetch_dashboard(census_api, include_historical: bool = True, language: str = 'en',
                    top_n: int = 10) -> DashboardResult:
    """Fetch every dashboard dataset concurrently; any failure fails the whole set"""
    tasks = {
        'states': lambda: census_api.get_all_states_data(top_n=top_n),
        'age_distribution': census_api.get_age_distribution,
        'race': census_api.get_race_data,
    }
    if include_historical:
        tasks['history'] = census_api.get_historical_population

    with ThreadPoolExecutor(max_workers=len(tasks)) as executor:
        futures = {name: executor.submit(task) for name, task in tasks.items()}
        # Wait for every fetch to settle before deciding the outcome
        outcomes = {}
        failures = []
        for name, future in futures.items():
            try:
                outcomes[name] = future.result()
            except Exception as e:
                logger.exception(f"Failed to fetch Census data ({name}): {e}")
                failures.append(name)

    if failures:
        return DashboardResult.failure(error_message(language))

    logger.info(f"Dashboard data loaded: {len(outcomes['states'])} states, "
                f"{len(outcomes['age_distribution'])} age buckets, {len(outcomes['race'])} race categories")
    return DashboardResult(ok=True, **outcomes)
