import datetime
import os
import sys
import tempfile
import unittest

import yaml

sys.path.append(os.path.dirname(os.path.dirname(__file__)))
from analytics_service import AnalyticsService
from models import LoggedSet
from muscle_attribution import MuscleAttributionModel
from settings_schema import AnalyticsSettings, CacheSettings, RollingSettings

START = datetime.datetime(2024, 4, 1, 18, 0)


def workout_log():
    sets = []
    for i in range(8):
        ts = START + datetime.timedelta(days=3 * i)
        title = f"Day {i}"
        sets.append(LoggedSet("Bench Press (Barbell)", 40.0, 10, 0, ts, title=title, set_type="warmup"))
        sets.append(LoggedSet("Bench Press (Barbell)", 80.0, 8, 1, ts, title=title))
        sets.append(LoggedSet("Bench Press (Barbell)", 80.0, 8, 2, ts, title=title))
        sets.append(LoggedSet("Lateral Raise (Dumbbell)", 10.0 + i, 12, 3, ts, title=title))
    return sets


class AnalyticsServiceTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.service = AnalyticsService(MuscleAttributionModel.default())
        self.sets = workout_log()

    def test_session_heatmap(self) -> None:
        key = self.sets[1].session_key
        result = self.service.session_heatmap(self.sets, key)
        self.assertAlmostEqual(result.volumes["upper-pectoralis"], 2.0)
        self.assertAlmostEqual(result.volumes["lateral-deltoid"], 2.0)
        self.assertAlmostEqual(result.volumes["long-head-triceps"], 1.0)
        self.assertIs(result, self.service.session_heatmap(self.sets, key))

    def test_exercise_heatmap(self) -> None:
        result = self.service.exercise_heatmap(self.sets, "Bench Press (Barbell)")
        self.assertAlmostEqual(result.volumes["mid-lower-pectoralis"], 16.0)
        self.assertAlmostEqual(result.max_volume, 16.0)

    def test_trends_are_cached_until_cleared(self) -> None:
        first = self.service.exercise_trends(self.sets)
        self.assertEqual(first["Bench Press (Barbell)"].status, "stagnant")
        self.assertEqual(first["Lateral Raise (Dumbbell)"].status, "overload")
        self.assertIs(first, self.service.exercise_trends(self.sets))
        self.service.clear_cache()
        self.assertIsNot(first, self.service.exercise_trends(self.sets))

    def test_new_list_instance_invalidates_by_default(self) -> None:
        first = self.service.exercise_trends(self.sets)
        self.assertIsNot(first, self.service.exercise_trends(list(self.sets)))

    def test_content_fingerprint_reuses_equal_data(self) -> None:
        settings = AnalyticsSettings(cache=CacheSettings(content_fingerprint=True))
        service = AnalyticsService(MuscleAttributionModel.default(), settings)
        first = service.plateaus(self.sets)
        self.assertIs(first, service.plateaus(list(self.sets)))
        self.assertEqual([name for name, _ in first], ["Bench Press (Barbell)"])

    def test_weekly_rate_and_delta(self) -> None:
        now = START + datetime.timedelta(days=21)
        selection = ("Chest", "Shoulders")
        rate = self.service.weekly_rate(self.sets, "7d", selection, now=now)
        # days 15, 18 and 21 give 12 sets over an eight day span
        self.assertEqual(rate, 10.5)
        delta = self.service.weekly_delta(self.sets, "7d", selection, now=now)
        self.assertEqual(delta.current, 10.5)
        self.assertEqual(delta.previous, 8.0)
        self.assertEqual(delta.delta, 2.5)
        self.assertEqual(delta.direction, "up")
        self.assertEqual(delta.delta_percent, 31)
        self.assertIsNone(self.service.weekly_rate([], "7d"))
        self.assertIsNone(self.service.weekly_delta([], "7d"))
        self.assertIsNone(self.service.weekly_delta(self.sets, "all", selection, now=now))
        with self.assertRaises(ValueError):
            self.service.weekly_delta(self.sets, "2w")

    def test_dashboard_and_series(self) -> None:
        dash = self.service.weekly_sets_dashboard(self.sets, "all", "group")
        self.assertEqual(dash.window_start, START)
        self.assertIn("Chest", dash.rates)
        series = self.service.muscle_series(self.sets, "weekly", "headless")
        self.assertTrue(all(p.view == "headless" for p in series))
        self.assertIn("chest", series[0].values)

    def test_series_period_defaults_from_span(self) -> None:
        # 22 days of data fit the default 30 daily points
        self.assertEqual(self.service.muscle_series(self.sets), self.service.muscle_series(self.sets, "daily"))
        settings = AnalyticsSettings(rolling=RollingSettings(chart_max_points=10))
        narrow = AnalyticsService(MuscleAttributionModel.default(), settings)
        self.assertEqual(narrow.muscle_series(self.sets), narrow.muscle_series(self.sets, "weekly"))

    def test_windowed_and_headless(self) -> None:
        now = START + datetime.timedelta(days=21)
        windowed = self.service.windowed_sets(self.sets, "weekly", now=now)
        self.assertEqual(windowed.min_ts, START + datetime.timedelta(days=9))
        headless = self.service.headless_heatmap(self.sets, "all")
        self.assertAlmostEqual(headless.volumes["chest"], 16.0)

    def test_from_settings_loads_attribution_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "muscles.yaml")
            with open(path, "w", encoding="utf-8") as f:
                yaml.safe_dump({"exercises": {"Curl": {"primary": "Biceps"}}}, f)
            service = AnalyticsService.from_settings(AnalyticsSettings(attribution_path=path))
        self.assertTrue(service.model.has_exercise("curl"))
        self.assertFalse(service.model.has_exercise("Squat (Barbell)"))


if __name__ == "__main__":
    unittest.main()
