import unittest
from unittest.mock import MagicMock

from api.dashboard import ERROR_MESSAGES, DashboardResult, fetch_dashboard
from api.records import AgeBucket, HistoricalPopulationPoint, RaceCategory, StateEconomicRecord


def make_api():
    api = MagicMock()
    api.get_all_states_data.return_value = [
        StateEconomicRecord("California", "CA", 39538223, 0.5, 91905, 4.8)
    ]
    api.get_age_distribution.return_value = [AgeBucket("0-4", 9.8, 9.4, 19.2)]
    api.get_race_data.return_value = [RaceCategory("white", 57.8, "#3b82f6")]
    api.get_historical_population.return_value = [HistoricalPopulationPoint(1950, 151.3, 64.0)]
    return api


class TestFetchDashboard(unittest.TestCase):
    def test_success_exposes_all_datasets(self):
        api = make_api()
        result = fetch_dashboard(api)

        self.assertTrue(result.ok)
        self.assertIsNone(result.error)
        self.assertEqual(result.states[0].abbr, "CA")
        self.assertEqual(len(result.age_distribution), 1)
        self.assertEqual(len(result.race), 1)
        self.assertEqual(result.history[0].year, 1950)
        api.get_all_states_data.assert_called_once_with(top_n=10)

    def test_historical_is_optional(self):
        api = make_api()
        result = fetch_dashboard(api, include_historical=False)

        self.assertTrue(result.ok)
        self.assertEqual(result.history, [])
        api.get_historical_population.assert_not_called()

    def test_any_failure_fails_the_whole_set(self):
        for failing in ("get_all_states_data", "get_age_distribution", "get_race_data", "get_historical_population"):
            with self.subTest(failing=failing):
                api = make_api()
                getattr(api, failing).side_effect = RuntimeError("API Error: 500 Internal Server Error")

                with self.assertLogs('api.dashboard', level='ERROR'):
                    result = fetch_dashboard(api)

                self.assertFalse(result.ok)
                self.assertEqual(result.states, [])
                self.assertEqual(result.age_distribution, [])
                self.assertEqual(result.race, [])
                self.assertEqual(result.history, [])
                self.assertEqual(result.error, ERROR_MESSAGES['en'])
                self.assertEqual(result.to_dict(), {"ok": False, "error": ERROR_MESSAGES['en']})

    def test_error_detail_is_not_exposed(self):
        api = make_api()
        api.get_race_data.side_effect = RuntimeError("secret upstream detail")

        with self.assertLogs('api.dashboard', level='ERROR'):
            result = fetch_dashboard(api, language='zh')

        self.assertEqual(result.error, ERROR_MESSAGES['zh'])
        self.assertNotIn("secret", str(result.to_dict()))

    def test_other_fetches_still_run_when_one_fails(self):
        api = make_api()
        api.get_all_states_data.side_effect = RuntimeError("boom")

        with self.assertLogs('api.dashboard', level='ERROR'):
            fetch_dashboard(api)

        api.get_age_distribution.assert_called_once()
        api.get_race_data.assert_called_once()

    def test_to_dict(self):
        result = fetch_dashboard(make_api())
        payload = result.to_dict()
        self.assertTrue(payload["ok"])
        self.assertEqual(payload["states"][0]["medianIncome"], 91905)
        self.assertEqual(payload["ageDistribution"][0], {"age": "0-4", "male": 9.8, "female": 9.4, "total": 19.2})
        self.assertEqual(payload["history"][0], {"year": 1950, "population": 151.3, "urban": 64.0})

    def test_failure_constructor(self):
        result = DashboardResult.failure("nope")
        self.assertFalse(result.ok)
        self.assertEqual(result.error, "nope")


if __name__ == '__main__':
    unittest.main()
