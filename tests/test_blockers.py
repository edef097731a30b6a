import unittest
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from app.schemas.job import JobOffer, JobPreferences
from app.scoring import apply_hard_blockers
from app.scoring.blockers import format_amount


class HardBlockerTests(unittest.TestCase):
    def test_salary_below_floor_reports_both_figures(self):
        job = JobOffer(title="Backend Engineer", salary_max=40000)
        prefs = JobPreferences(min_salary=50000)
        result = apply_hard_blockers(job, prefs)
        self.assertTrue(result.blocked)
        self.assertEqual(len(result.reasons), 1)
        self.assertIn("40,000", result.reasons[0])
        self.assertIn("50,000", result.reasons[0])
        self.assertTrue(result.reasons[0].startswith("Salary below minimum"))

    def test_unknown_job_data_never_blocks(self):
        job = JobOffer(title="Mystery role")
        prefs = JobPreferences(
            allowed_countries=["France"],
            allowed_cities=["Paris"],
            min_salary=80000,
            min_hourly_rate=40,
            min_daily_rate=400,
            remote_preference="full_remote",
        )
        result = apply_hard_blockers(job, prefs)
        self.assertFalse(result.blocked)
        self.assertEqual(result.reasons, [])

    def test_empty_allow_lists_never_block(self):
        job = JobOffer(country="Japan", city="Osaka")
        result = apply_hard_blockers(job, JobPreferences())
        self.assertFalse(result.blocked)

    def test_location_match_is_case_insensitive_containment(self):
        prefs = JobPreferences(allowed_countries=["france"], allowed_cities=["Paris"])
        self.assertFalse(apply_hard_blockers(JobOffer(country="France", city="paris 11e"), prefs).blocked)

        result = apply_hard_blockers(JobOffer(country="Germany", city="Berlin"), prefs)
        self.assertEqual(
            result.reasons,
            ['Country "Germany" not in allowed countries', 'Location "Berlin" not in allowed cities'],
        )

    def test_rate_types_use_their_own_floor(self):
        prefs = JobPreferences(min_salary=50000, min_hourly_rate=20, min_daily_rate=300)

        hourly = apply_hard_blockers(JobOffer(salary_max=15, salary_rate_type="hourly"), prefs)
        self.assertEqual(len(hourly.reasons), 1)
        self.assertTrue(hourly.reasons[0].startswith("Hourly rate below minimum"))

        daily = apply_hard_blockers(JobOffer(salary_max=350, salary_rate_type="daily"), prefs)
        self.assertFalse(daily.blocked)

        monthly = apply_hard_blockers(JobOffer(salary_max=3000, salary_rate_type="monthly"), prefs)
        self.assertEqual(len(monthly.reasons), 1)
        self.assertIn("36,000", monthly.reasons[0])

        monthly_ok = apply_hard_blockers(JobOffer(salary_max=4500, salary_rate_type="monthly"), prefs)
        self.assertFalse(monthly_ok.blocked)

    def test_rate_floor_without_matching_preference_is_ignored(self):
        job = JobOffer(salary_max=12, salary_rate_type="hourly")
        self.assertFalse(apply_hard_blockers(job, JobPreferences(min_salary=50000)).blocked)

    def test_work_mode_mismatch(self):
        job = JobOffer(presence_type="on_site")
        result = apply_hard_blockers(job, JobPreferences(remote_preference="full_remote"))
        self.assertEqual(result.reasons, ["Work mode mismatch (job: On-site, wanted: Full Remote)"])
        self.assertFalse(apply_hard_blockers(job, JobPreferences(remote_preference="any")).blocked)
        self.assertFalse(apply_hard_blockers(job, JobPreferences(remote_preference="on_site")).blocked)

    def test_hours_bounds(self):
        prefs = JobPreferences()
        self.assertEqual(
            apply_hard_blockers(JobOffer(hours_per_week=30), prefs).reasons,
            ["Hours below minimum (30h < 35h)"],
        )
        self.assertEqual(
            apply_hard_blockers(JobOffer(hours_per_week=50), prefs).reasons,
            ["Hours above maximum (50h > 45h)"],
        )
        self.assertFalse(apply_hard_blockers(JobOffer(hours_per_week=40), prefs).blocked)

    def test_every_rule_reports_in_order(self):
        job = JobOffer(
            salary_max=30000,
            country="Spain",
            city="Madrid",
            presence_type="on_site",
            hours_per_week=20,
        )
        prefs = JobPreferences(
            min_salary=45000,
            allowed_countries=["France"],
            allowed_cities=["Lyon"],
            remote_preference="hybrid",
        )
        reasons = apply_hard_blockers(job, prefs).reasons
        self.assertEqual(len(reasons), 5)
        self.assertTrue(reasons[0].startswith("Salary below minimum"))
        self.assertTrue(reasons[1].startswith("Country"))
        self.assertTrue(reasons[2].startswith("Location"))
        self.assertTrue(reasons[3].startswith("Work mode mismatch"))
        self.assertTrue(reasons[4].startswith("Hours below minimum"))

    def test_adding_constraints_never_unblocks(self):
        job = JobOffer(salary_max=30000, country="Spain", presence_type="on_site", hours_per_week=50)
        loose = JobPreferences(min_salary=45000)
        stricter = [
            loose.model_copy(update={"allowed_countries": ["France"]}),
            loose.model_copy(update={"remote_preference": "full_remote"}),
            loose.model_copy(update={"min_hourly_rate": 10}),
        ]
        base = apply_hard_blockers(job, loose)
        self.assertTrue(base.blocked)
        for prefs in stricter:
            result = apply_hard_blockers(job, prefs)
            self.assertTrue(result.blocked)
            self.assertGreaterEqual(len(result.reasons), len(base.reasons))

    def test_salary_floor_only_adds_salary_reason(self):
        job = JobOffer(salary_max=40000, presence_type="hybrid", hours_per_week=50)
        without_floor = apply_hard_blockers(job, JobPreferences(remote_preference="on_site"))
        with_floor = apply_hard_blockers(job, JobPreferences(remote_preference="on_site", min_salary=50000))
        self.assertEqual(with_floor.reasons[1:], without_floor.reasons)
        self.assertTrue(with_floor.reasons[0].startswith("Salary below minimum"))

    def test_format_amount_defaults_currency(self):
        self.assertEqual(format_amount(52000, None), "52,000 EUR")
        self.assertEqual(format_amount(1234.6, "USD"), "1,235 USD")


if __name__ == "__main__":
    unittest.main()
