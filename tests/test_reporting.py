# tests/test_reporting.py
import unittest
import sys
import os

# Add parent directory to path to import modules
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from volunteer_matching.models import Student, Soldier
from volunteer_matching.lookup.languages import LanguageRegistry
from volunteer_matching.matching.candidates import generate_candidates
from volunteer_matching.matching.diagnostics import analyze_coverage
from volunteer_matching.matching.pipeline import run_matching
from volunteer_matching.anonymize import to_secure_student, to_secure_soldier, to_secure_match
from volunteer_matching.report import (
    ASSIGNMENT_COLUMNS,
    score_matrix_frame,
    assignments_frame,
    student_load_frame,
    summary_frame,
)


def small_population():
    students = [
        Student(id="A", gender="female", city="Tel Aviv", language="Hebrew"),
        Student(id="B", gender="male", city="Haifa", language="Russian"),
        Student(id="C", gender="female", city="Netanya", language="English"),
    ]
    soldiers = [
        Soldier(id="S1", city="Tel Aviv", language="Hebrew", gender_preference="female"),
        Soldier(id="S2", city="Haifa", language="Ukrainian"),
    ]
    return students, soldiers


class TestCoverage(unittest.TestCase):

    def test_clean_population(self):
        students, soldiers = small_population()
        diag = analyze_coverage(students, soldiers)
        self.assertTrue(diag["ok"], diag["messages"])
        self.assertEqual(diag["num_students"], 3)
        self.assertEqual(diag["num_soldiers"], 2)
        self.assertEqual(diag["demand"], 4)
        self.assertEqual(diag["primary_demand"], 2)
        self.assertEqual(diag["supply"], 12)
        self.assertEqual(diag["suggestion"], "No coverage issues detected.")

    def test_no_students(self):
        diag = analyze_coverage([], [Soldier(id="S1")])
        self.assertFalse(diag["ok"])
        self.assertIn("no students", diag["messages"][0])

    def test_capacity_short(self):
        students = [
            Student(id="A", current_soldiers_count=2, is_scholarship_active=True),
            Student(id="B", current_soldiers_count=4),
        ]
        soldiers = [Soldier(id="S1"), Soldier(id="S2")]
        diag = analyze_coverage(students, soldiers)
        self.assertFalse(diag["ok"])
        self.assertEqual(diag["supply"], 0)
        self.assertTrue(any("Capacity short" in m for m in diag["messages"]))
        self.assertIn("raising capacity", diag["suggestion"])

    def test_capacity_warning_counts_rank_one_only(self):
        """Two soldiers need two rank-1 slots; four total matches do not matter."""
        students = [
            Student(id="A", language="Hebrew", current_soldiers_count=4),
            Student(id="B", language="Hebrew", current_soldiers_count=1, is_scholarship_active=True),
            Student(id="C", language="Hebrew", current_soldiers_count=1, is_scholarship_active=True),
        ]
        soldiers = [Soldier(id="S1", language="Hebrew"), Soldier(id="S2", language="Hebrew")]
        diag = analyze_coverage(students, soldiers)
        self.assertEqual(diag["demand"], 4)
        self.assertEqual(diag["primary_demand"], 2)
        self.assertEqual(diag["supply"], 2)
        self.assertTrue(diag["ok"], diag["messages"])

    def test_unrecognised_preference_listed(self):
        students = [
            Student(id="A", gender="female", city="Haifa", language="English"),
            Student(id="B", gender="male", city="Haifa", language="English"),
        ]
        soldiers = [Soldier(id="S1", city="Haifa", language="English", gender_preference="women only")]
        diag = analyze_coverage(students, soldiers)
        self.assertFalse(diag["ok"])
        self.assertEqual(diag["soldiers_without_gender"], ["S1"])

    def test_language_gender_and_city_gaps(self):
        students = [
            Student(id="A", gender="male", city="Atlantis", language="English"),
            Student(id="B", gender="male", city="Haifa", language="English"),
        ]
        soldiers = [
            Soldier(id="S1", city="Haifa", language="Amharic", gender_preference="female"),
            Soldier(id="S2", city="Haifa", language="Tigrinya"),
        ]
        diag = analyze_coverage(students, soldiers, languages=LanguageRegistry())
        self.assertFalse(diag["ok"])
        self.assertEqual(diag["soldiers_without_language"], ["S1", "S2"])
        self.assertEqual(diag["soldiers_without_gender"], ["S1"])
        self.assertEqual(diag["unresolved_cities"], ["Atlantis"])
        self.assertEqual(diag["minted_languages"], {"tigrinya": "TI"})


class TestAnonymize(unittest.TestCase):

    def test_student_record(self):
        st = Student(
            id="ST1", gender="נקבה", city="Haifa", language="Russian",
            current_soldiers_count=1, is_scholarship_active=True,
        )
        rec = to_secure_student(st)
        self.assertEqual(rec, {
            "external_id": "ST1",
            "gender": "F",
            "city_code": "חיפ",
            "region": "north",
            "mother_tongue_code": "RU",
            "current_soldiers_count": 1,
            "is_scholarship_active": True,
            "max_soldiers": 2,
            "available_slots": 1,
        })

    def test_soldier_record(self):
        so = Soldier(
            id="SO1", gender="זכר", city="Atlantis", language="Tigrinya",
            gender_preference="מתנדבת", has_special_request=True,
        )
        rec = to_secure_soldier(so)
        self.assertEqual(rec["gender"], "M")
        self.assertIsNone(rec["city_code"])
        self.assertIsNone(rec["region"])
        self.assertEqual(rec["mother_tongue_code"], "TI")
        self.assertEqual(rec["volunteer_gender_preference"], "female")
        self.assertTrue(rec["has_special_requests"])
        self.assertNotIn("city", rec)
        self.assertNotIn("language", rec)

    def test_unrecognised_preference_exported_as_any(self):
        rec = to_secure_soldier(Soldier(id="SO2", gender_preference="women only"))
        self.assertEqual(rec["volunteer_gender_preference"], "any")

    def test_match_record(self):
        students, soldiers = small_population()
        result = run_matching(students, soldiers)
        rec = to_secure_match(result.assignments[0])
        self.assertEqual(rec["soldier_external_id"], result.assignments[0].soldier_id)
        self.assertEqual(rec["match_rank"], 1)
        self.assertEqual(rec["status"], "suggested")
        self.assertEqual(
            set(rec["match_criteria"]),
            {"language_match", "distance_score", "gender_pref_match", "region_match"},
        )


class TestReportFrames(unittest.TestCase):

    def setUp(self):
        self.students, self.soldiers = small_population()
        self.result = run_matching(self.students, self.soldiers)

    def test_score_matrix(self):
        df = score_matrix_frame(generate_candidates(self.students, self.soldiers))
        self.assertEqual(df.shape, (2, 3))
        self.assertEqual(df.index.name, "soldier_id")
        self.assertEqual(df.loc["S1", "A"], 100)

    def test_assignments_frame(self):
        df = assignments_frame(self.result.assignments)
        self.assertEqual(list(df.columns), ASSIGNMENT_COLUMNS)
        self.assertEqual(len(df), 4)
        self.assertEqual(list(df["rank"]), [1, 2, 1, 2])

        by_score = assignments_frame(self.result.assignments, sort_by_score=True)
        self.assertTrue(by_score["score"].is_monotonic_decreasing)

    def test_empty_assignments_frame(self):
        self.assertTrue(assignments_frame([]).empty)
        self.assertEqual(list(student_load_frame([]).columns), ["rank_1", "rank_2", "total"])

    def test_student_load(self):
        load = student_load_frame(self.result.assignments)
        self.assertEqual(list(load.columns), ["rank_1", "rank_2", "total"])
        self.assertEqual(int(load["rank_1"].sum()), 2)
        self.assertEqual(int(load["total"].sum()), 4)

    def test_summary_frame(self):
        df = summary_frame(self.result.summary)
        self.assertEqual(df.index.name, "metric")
        self.assertEqual(df.loc["total_matches", "value"], 4)
        self.assertEqual(df.loc["soldiers_with_two_matches", "value"], 2)


if __name__ == '__main__':
    unittest.main()
