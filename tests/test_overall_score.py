import unittest
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from app.schemas.job import JobOffer, JobPreferences
from app.scoring import (
    ScoreWeights,
    ScoringConfig,
    band_rank,
    calculate_overall_score,
    interpret_score,
    recalculate_with_dismissals,
    salary_adequacy,
)


class OverallScoreTests(unittest.TestCase):
    def test_default_weights_with_unknown_salary(self):
        score = calculate_overall_score(100, 0, 0, False, True, ScoreWeights(30, 50, 20))
        # 0.3 * 50 + 0.5 * 100 + 0.2 * 0
        self.assertEqual(score, 65)

    def test_salary_below_minimum_scores_zero_component(self):
        score = calculate_overall_score(100, 2, 2, True, False, ScoreWeights(30, 50, 20))
        self.assertEqual(score, 70)

    def test_weight_scaling_does_not_change_score(self):
        args = (72, 1, 3, True, True)
        self.assertEqual(
            calculate_overall_score(*args, ScoreWeights(30, 50, 20)),
            calculate_overall_score(*args, ScoreWeights(3, 5, 2)),
        )
        self.assertEqual(
            calculate_overall_score(*args, ScoreWeights(1, 1, 1)),
            calculate_overall_score(*args, ScoreWeights(40, 40, 40)),
        )

    def test_zero_weights_fall_back_to_equal_thirds(self):
        score = calculate_overall_score(90, 1, 2, True, True, ScoreWeights(0, 0, 0))
        # (100 + 90 + 50) / 3
        self.assertEqual(score, 80)
        self.assertEqual(ScoreWeights(0, 0, 0).normalized(), ScoreWeights(1 / 3, 1 / 3, 1 / 3))

    def test_score_is_clamped(self):
        self.assertEqual(calculate_overall_score(150, 9, 3, True, True, ScoreWeights(30, 50, 20)), 100)
        self.assertEqual(calculate_overall_score(-20, 0, 3, True, False, ScoreWeights(30, 50, 20)), 0)

    def test_unknown_salary_sub_score_is_configurable(self):
        config = ScoringConfig(unknown_salary_sub_score=0)
        self.assertEqual(calculate_overall_score(100, 0, 0, False, True, ScoreWeights(1, 0, 0), config), 0)

    def test_salary_adequacy(self):
        prefs = JobPreferences(min_salary=50000)
        self.assertEqual(salary_adequacy(JobOffer(), prefs), (False, False))
        self.assertEqual(salary_adequacy(JobOffer(salary_max=60000), prefs), (True, True))
        self.assertEqual(salary_adequacy(JobOffer(salary_min=30000, salary_max=40000), prefs), (True, False))
        self.assertEqual(
            salary_adequacy(JobOffer(salary_max=4500, salary_rate_type="monthly"), prefs),
            (True, True),
        )
        self.assertEqual(salary_adequacy(JobOffer(salary_max=10), JobPreferences()), (True, True))

    def test_salary_adequacy_uses_floor_for_pay_basis(self):
        prefs = JobPreferences(min_salary=50000, min_hourly_rate=30, min_daily_rate=300)
        hourly = JobOffer(salary_max=40, salary_rate_type="hourly")
        self.assertEqual(salary_adequacy(hourly, prefs), (True, True))
        self.assertEqual(salary_adequacy(JobOffer(salary_max=25, salary_rate_type="hourly"), prefs), (True, False))
        self.assertEqual(salary_adequacy(JobOffer(salary_max=350, salary_rate_type="daily"), prefs), (True, True))
        self.assertEqual(salary_adequacy(JobOffer(salary_max=250, salary_rate_type="daily"), prefs), (True, False))

        # Hourly offer with no hourly floor set counts as meeting.
        self.assertEqual(salary_adequacy(hourly, JobPreferences(min_salary=50000)), (True, True))

    def test_salary_adequacy_falls_back_to_range_bottom(self):
        prefs = JobPreferences(min_salary=50000)
        self.assertEqual(salary_adequacy(JobOffer(salary_min=60000), prefs), (True, True))
        self.assertEqual(salary_adequacy(JobOffer(salary_min=45000), prefs), (True, False))
        self.assertEqual(
            salary_adequacy(JobOffer(salary_min=4500, salary_rate_type="monthly"), prefs),
            (True, True),
        )

    def test_rate_offer_passing_its_floor_gets_full_salary_component(self):
        prefs = JobPreferences(min_salary=50000, min_hourly_rate=30)
        has_info, meets = salary_adequacy(JobOffer(salary_max=40, salary_rate_type="hourly"), prefs)
        score = calculate_overall_score(100, 0, 0, has_info, meets, ScoreWeights(1, 0, 0))
        self.assertEqual(score, 100)


class ScoreInterpreterTests(unittest.TestCase):
    def test_band_thresholds(self):
        cases = {
            100: "excellent",
            85: "excellent",
            84: "good",
            70: "good",
            69: "moderate",
            55: "moderate",
            54: "poor",
            0: "poor",
        }
        for score, band in cases.items():
            self.assertEqual(interpret_score(score).band, band, score)

    def test_labels_and_colors(self):
        self.assertEqual(interpret_score(90).label, "Excellent match")
        self.assertEqual(interpret_score(90).color, "green")
        self.assertEqual(interpret_score(75).color, "blue")
        self.assertEqual(interpret_score(60).color, "yellow")
        self.assertEqual(interpret_score(10).color, "red")

    def test_out_of_range_scores_still_interpret(self):
        self.assertEqual(interpret_score(-5).band, "poor")
        self.assertEqual(interpret_score(250).band, "excellent")

    def test_band_never_decreases_as_score_grows(self):
        ranks = [band_rank(interpret_score(score)) for score in range(0, 101)]
        self.assertEqual(ranks, sorted(ranks))


class DismissalRecalculationTests(unittest.TestCase):
    def setUp(self):
        self.flags = [
            "Salary below expectations",
            "Missing key skill: Kubernetes",
            "Career change required",
            "Long commute",
        ]

    def test_each_flag_kind_adds_its_bonus(self):
        score = recalculate_with_dismissals(60, self.flags, self.flags, salary_below_min=True)
        self.assertEqual(score, 60 + 15 + 5 + 5 + 3)

    def test_salary_bonus_only_when_below_minimum(self):
        score = recalculate_with_dismissals(60, self.flags, ["Salary below expectations"], salary_below_min=False)
        self.assertEqual(score, 60)

    def test_unknown_dismissals_are_ignored(self):
        score = recalculate_with_dismissals(60, self.flags, ["Not a current flag"], salary_below_min=True)
        self.assertEqual(score, 60)

    def test_capped_at_max_score(self):
        score = recalculate_with_dismissals(95, self.flags, self.flags, salary_below_min=True)
        self.assertEqual(score, 100)


if __name__ == "__main__":
    unittest.main()
