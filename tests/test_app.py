import unittest
from unittest.mock import MagicMock

from api.census_api import CensusAPIError
from api.config import Config
from api.dashboard import ERROR_MESSAGES
from api.preferences import LanguagePreference, MemoryPreferenceStore
from api.records import AgeBucket, HistoricalPopulationPoint, RaceCategory, StateEconomicRecord
from app import create_app


class TestApp(unittest.TestCase):
    def setUp(self):
        """Build an app around a mocked Census client."""
        self.api = MagicMock()
        self.api.get_all_states_data.return_value = [
            StateEconomicRecord("California", "CA", 39538223, 0.5, 91905, 4.8)
        ]
        self.api.get_age_distribution.return_value = [AgeBucket("0-4", 9.8, 9.4, 19.2)]
        self.api.get_race_data.return_value = [RaceCategory("white", 57.8, "#3b82f6")]
        self.api.get_historical_population.return_value = [HistoricalPopulationPoint(2020, 331.4, 83.0)]
        self.preference = LanguagePreference(MemoryPreferenceStore())
        self.app = create_app(config=Config(), census_api=self.api, preference=self.preference)
        self.client = self.app.test_client()

    def test_healthz(self):
        response = self.client.get('/healthz')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.get_json(), {"status": "ok"})

    def test_dashboard_success(self):
        response = self.client.get('/api/dashboard')
        self.assertEqual(response.status_code, 200)
        payload = response.get_json()
        self.assertTrue(payload["ok"])
        self.assertEqual(payload["states"][0], {
            "state": "California", "abbr": "CA", "population": 39538223,
            "growth": 0.5, "medianIncome": 91905, "unemployment": 4.8
        })
        self.assertEqual(payload["race"][0]["key"], "white")

    def test_dashboard_failure_uses_preferred_language(self):
        self.api.get_race_data.side_effect = CensusAPIError(500, "Internal Server Error")
        self.preference.set('zh')

        with self.assertLogs('api.dashboard', level='ERROR'):
            response = self.client.get('/api/dashboard')

        self.assertEqual(response.status_code, 503)
        self.assertEqual(response.get_json(), {"ok": False, "error": ERROR_MESSAGES['zh']})

    def test_dashboard_lang_query_overrides_preference(self):
        self.api.get_race_data.side_effect = RuntimeError("boom")
        with self.assertLogs('api.dashboard', level='ERROR'):
            response = self.client.get('/api/dashboard?lang=en')
        self.assertEqual(response.get_json()["error"], ERROR_MESSAGES['en'])

    def test_individual_datasets(self):
        self.assertEqual(self.client.get('/api/states').get_json()[0]["abbr"], "CA")
        self.assertEqual(self.client.get('/api/age-distribution').get_json()[0]["total"], 19.2)
        self.assertEqual(self.client.get('/api/race').get_json()[0]["value"], 57.8)
        self.assertEqual(self.client.get('/api/history').get_json()[0]["year"], 2020)

    def test_census_error_maps_to_bad_gateway(self):
        self.api.get_race_data.side_effect = CensusAPIError(500, "Internal Server Error")
        response = self.client.get('/api/race')
        self.assertEqual(response.status_code, 502)
        self.assertEqual(response.get_json()["status_code"], 502)

    def test_language_endpoints(self):
        self.assertEqual(self.client.get('/api/language').get_json(), {"language": "en"})

        response = self.client.put('/api/language', json={"language": "zh"})
        self.assertEqual(response.get_json(), {"language": "zh"})
        self.assertEqual(self.preference.get(), 'zh')

        response = self.client.post('/api/language/toggle')
        self.assertEqual(response.get_json(), {"language": "en"})

    def test_invalid_language(self):
        response = self.client.put('/api/language', json={"language": "fr"})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(self.preference.get(), 'en')

    def test_unknown_route(self):
        response = self.client.get('/api/nothing')
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.get_json()["error"], "Not Found")


if __name__ == '__main__':
    unittest.main()
