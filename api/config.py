import logging
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from .constants import CENSUS_API_BASE_URL

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Config:
    """Runtime settings read from the environment"""
    census_api_key: Optional[str] = None
    census_api_base_url: str = CENSUS_API_BASE_URL
    request_timeout: float = 10.0
    top_states: int = 10
    include_historical: bool = True
    default_language: str = 'en'
    language_file: Optional[str] = None


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


def load_config() -> Config:
    """Load .env (if present) and build the configuration"""
    load_dotenv()

    api_key = os.getenv('CENSUS_API_KEY') or None
    if api_key:
        logger.info(f"Using Census API Key: {api_key[:5]}...")
    else:
        logger.warning("CENSUS_API_KEY is not set; using unauthenticated Census API requests")

    return Config(
        census_api_key=api_key,
        census_api_base_url=os.getenv('CENSUS_API_BASE_URL', CENSUS_API_BASE_URL),
        request_timeout=float(os.getenv('CENSUS_REQUEST_TIMEOUT', '10')),
        top_states=int(os.getenv('DASHBOARD_TOP_STATES', '10')),
        include_historical=_env_bool('DASHBOARD_INCLUDE_HISTORICAL', True),
        default_language=os.getenv('DASHBOARD_DEFAULT_LANGUAGE', 'en'),
        language_file=os.getenv('DASHBOARD_LANGUAGE_FILE') or None
    )
