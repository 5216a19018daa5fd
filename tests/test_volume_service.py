import datetime
import os
import sys
import unittest

sys.path.append(os.path.dirname(os.path.dirname(__file__)))
from models import LoggedSet
from muscle_attribution import MuscleAttributionModel
from volume_service import VolumeAggregator

DELTS = ("anterior-deltoid", "lateral-deltoid", "posterior-deltoid")
DAY = datetime.datetime(2024, 5, 6, 18, 0)

FIXTURE = {
    "exercises": {
        "Straight Arm Pulldown": {"primary": "Lats", "secondary": ""},
        "Lateral Raise": {"primary": "Shoulders", "secondary": ""},
        "Shoulder Press": {"primary": "Shoulders", "secondary": "Triceps"},
        "Bench Press": {"primary": "Chest", "secondary": "Shoulders, Triceps"},
        "Burpee": {"primary": "Full Body", "secondary": ""},
        "Treadmill": {"primary": "Cardio", "secondary": ""},
        "Mystery Curl": {"primary": "None", "secondary": "Biceps, Forearms"},
        "Chest Press": {"primary": "Chest", "secondary": "pectoralis_major"},
        "Barbell Row": {"primary": "Upper Back", "secondary": "Lats, Biceps"},
    }
}


def make_set(exercise: str, set_type: str = "normal", index: int = 0) -> LoggedSet:
    return LoggedSet(exercise, 50.0, 10, index, DAY, title="Push", set_type=set_type)


class AggregateTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.model = MuscleAttributionModel.from_mapping(FIXTURE)
        self.agg = VolumeAggregator(self.model)

    def test_single_set_on_ungrouped_muscle(self) -> None:
        result = self.agg.aggregate([make_set("Straight Arm Pulldown")])
        self.assertAlmostEqual(result.volumes.get("lats"), 1.0)
        result = self.agg.aggregate([make_set("Straight Arm Pulldown", "left")])
        self.assertAlmostEqual(result.volumes.get("lats"), 0.5)

    def test_full_body_hits_every_group_once(self) -> None:
        grouped = self.agg.aggregate_groups([make_set("Burpee")])
        self.assertEqual(set(grouped.volumes), set(self.model.groups()))
        for value in grouped.volumes.values():
            self.assertAlmostEqual(value, 1.0)
        parts = self.agg.aggregate([make_set("Burpee", "right")])
        self.assertNotIn("lats", parts.volumes)
        self.assertAlmostEqual(parts.volumes["soleus"], 0.5)

    def test_group_part_consistency_across_exercises(self) -> None:
        sets = [make_set("Lateral Raise", index=i) for i in range(3)]
        sets += [make_set("Shoulder Press", index=i) for i in range(3)]
        grouped = self.agg.aggregate_groups(sets)
        self.assertAlmostEqual(grouped.volumes["Shoulders"], 6.0)
        parts = self.agg.aggregate(sets)
        for part in DELTS:
            self.assertAlmostEqual(parts.volumes[part], 6.0)
        self.assertAlmostEqual(parts.volumes["long-head-triceps"], 1.5)
        self.assertAlmostEqual(parts.max_volume, 6.0)

    def test_secondary_increment_and_unilateral(self) -> None:
        parts = self.agg.aggregate([make_set("Bench Press", "left")])
        self.assertAlmostEqual(parts.volumes["upper-pectoralis"], 0.5)
        self.assertAlmostEqual(parts.volumes["lateral-deltoid"], 0.25)
        self.assertAlmostEqual(parts.max_volume, 1.0)

    def test_primary_group_not_counted_again_as_secondary(self) -> None:
        parts = self.agg.aggregate([make_set("Chest Press")])
        self.assertEqual(parts.volumes, {"mid-lower-pectoralis": 1.0, "upper-pectoralis": 1.0})

    def test_first_secondary_is_promoted(self) -> None:
        parts = self.agg.aggregate([make_set("Mystery Curl")])
        self.assertAlmostEqual(parts.volumes["long-head-bicep"], 1.0)
        self.assertAlmostEqual(parts.volumes["wrist-flexors"], 0.5)

    def test_standalone_parts_accumulate_directly(self) -> None:
        parts = self.agg.aggregate([make_set("Barbell Row")])
        self.assertAlmostEqual(parts.volumes["lats"], 1.5)
        self.assertAlmostEqual(parts.volumes["traps-middle"], 1.0)
        self.assertAlmostEqual(parts.volumes["anterior-deltoid"], 1.0)
        self.assertAlmostEqual(parts.volumes["short-head-bicep"], 0.5)

    def test_skips_warmups_cardio_and_unknown(self) -> None:
        sets = [
            make_set("Bench Press", "warmup"),
            make_set("Treadmill"),
            make_set("Not In Table"),
            LoggedSet("", 0.0, 0),
        ]
        result = self.agg.aggregate(sets)
        self.assertEqual(result.volumes, {})
        self.assertEqual(result.max_volume, 1.0)

    def test_max_volume_invariant(self) -> None:
        sets = [make_set("Bench Press", index=i) for i in range(4)]
        sets.append(make_set("Straight Arm Pulldown"))
        result = self.agg.aggregate(sets)
        self.assertEqual(result.max_volume, max(result.volumes.values()))
        self.assertGreaterEqual(result.max_volume, 1.0)

    def test_heatmap_views(self) -> None:
        sets = [make_set("Bench Press")]
        self.assertEqual(self.agg.heatmap(sets, "group").view, "group")
        headless = self.agg.heatmap(sets, "headless")
        self.assertEqual(headless.view, "headless")
        self.assertAlmostEqual(headless.volumes["chest"], 1.0)
        self.assertAlmostEqual(headless.volumes["triceps"], 0.5)
        with self.assertRaises(ValueError):
            self.agg.heatmap(sets, "sideways")

    def test_set_contributions(self) -> None:
        s = make_set("Shoulder Press")
        self.assertEqual(self.agg.set_contributions(s, "group"), {"Shoulders": 1.0, "Triceps": 0.5})
        muscle = self.agg.set_contributions(s, "muscle")
        self.assertAlmostEqual(muscle["posterior-deltoid"], 1.0)
        self.assertEqual(self.agg.set_contributions(s, "headless"), {"shoulders": 1.0, "triceps": 0.5})


class ExerciseHeatmapTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.model = MuscleAttributionModel.from_mapping(FIXTURE)
        self.agg = VolumeAggregator(self.model)

    def test_scaled_by_working_sets(self) -> None:
        sets = [make_set("Bench Press", "warmup")]
        sets += [make_set("Bench Press", index=i) for i in range(3)]
        result = self.agg.exercise_heatmap(sets, self.model.attribution_for("Bench Press"))
        self.assertAlmostEqual(result.volumes["upper-pectoralis"], 3.0)
        self.assertAlmostEqual(result.volumes["anterior-deltoid"], 1.5)
        self.assertAlmostEqual(result.volumes["lateral-head-triceps"], 1.5)
        self.assertAlmostEqual(result.max_volume, 3.0)

    def test_unilateral_sets_count_half(self) -> None:
        sets = [make_set("Lateral Raise", "left"), make_set("Lateral Raise", "right")]
        result = self.agg.exercise_heatmap(sets, self.model.attribution_for("Lateral Raise"))
        for part in DELTS:
            self.assertAlmostEqual(result.volumes[part], 1.0)

    def test_group_propagation(self) -> None:
        self.model = MuscleAttributionModel.from_mapping(
            {"exercises": {"Front Raise": {"primary": "deltoid_anterior"}}}
        )
        agg = VolumeAggregator(self.model)
        weights = agg.exercise_weights(self.model.attribution_for("Front Raise"))
        self.assertEqual(weights, {part: 1.0 for part in DELTS})

    def test_no_working_sets(self) -> None:
        result = self.agg.exercise_heatmap(
            [make_set("Bench Press", "warmup")], self.model.attribution_for("Bench Press")
        )
        self.assertEqual(result.volumes, {})
        self.assertEqual(result.max_volume, 1.0)
        self.assertEqual(self.agg.exercise_heatmap([make_set("Bench Press")], None).volumes, {})


class HeadlessCollapseTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.agg = VolumeAggregator(MuscleAttributionModel.default())

    def test_collapse_takes_max(self) -> None:
        collapsed = self.agg.headless_collapse({"upper-pectoralis": 2.0, "mid-lower-pectoralis": 3.0})
        self.assertEqual(collapsed, {"chest": 3.0})

    def test_collapse_sum_variant(self) -> None:
        summed = self.agg.headless_collapse_sum({"upper-pectoralis": 2.0, "mid-lower-pectoralis": 3.0})
        self.assertEqual(summed, {"chest": 5.0})

    def test_unmapped_parts_are_dropped(self) -> None:
        collapsed = self.agg.headless_collapse({"inner-thigh": 4.0, "quads": 2.0})
        self.assertEqual(collapsed, {"quads": 2.0})

    def test_radar_series(self) -> None:
        rows = self.agg.headless_radar_series({"chest": 2.04, "lats": 3.0})
        self.assertEqual(rows[0], ("Lats", 3.0))
        self.assertEqual(rows[1], ("Chest", 2.0))
        self.assertEqual(len(rows), 15)


if __name__ == "__main__":
    unittest.main()
