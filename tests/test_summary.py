# tests/test_summary.py
import unittest
import sys
import os

# Add parent directory to path to import modules
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from volunteer_matching.models import Student, Soldier, Assignment, MatchCriteria, make_assignment_id
from volunteer_matching.matching.summary import summarize
from volunteer_matching.matching.validation import InvalidInputError, validate_records

CRITERIA = MatchCriteria(language_match=True, distance_score=100, gender_pref_match=True, region_match=True)


def assignment(soldier_id, student_id, rank, score):
    return Assignment(
        id=make_assignment_id(soldier_id, student_id, rank),
        student_id=student_id,
        soldier_id=soldier_id,
        score=score,
        rank=rank,
        criteria=CRITERIA,
    )


class TestSummarize(unittest.TestCase):

    def setUp(self):
        self.students = [Student(id=i) for i in ("A", "B", "C", "D")]
        self.soldiers = [Soldier(id=i) for i in ("S1", "S2", "S3")]

    def test_counts_and_bands(self):
        assignments = [
            assignment("S1", "A", 1, 100),
            assignment("S1", "B", 2, 70),
            assignment("S2", "A", 1, 69),
            assignment("S2", "C", 2, 30),
            assignment("S3", "B", 1, 29),
        ]
        s = summarize(assignments, self.students, self.soldiers)

        self.assertEqual(s.total_students, 4)
        self.assertEqual(s.total_soldiers, 3)
        self.assertEqual(s.total_matches, 5)
        self.assertEqual(s.soldiers_with_two_matches, 2)
        self.assertEqual(s.soldiers_with_one_match, 1)
        self.assertEqual(s.soldiers_with_no_match, 0)
        self.assertEqual(s.students_used, 3)
        self.assertEqual(s.students_not_used, 1)
        self.assertEqual(s.avg_score, 60)  # 298 / 5 = 59.6
        self.assertEqual(s.high_score_matches, 2)
        self.assertEqual(s.medium_score_matches, 2)
        self.assertEqual(s.low_score_matches, 1)

    def test_avg_rounds_half_up(self):
        assignments = [assignment("S1", "A", 1, 50), assignment("S1", "B", 2, 51)]
        self.assertEqual(summarize(assignments, self.students, self.soldiers).avg_score, 51)

    def test_soldier_without_match(self):
        s = summarize([assignment("S1", "A", 1, 80)], self.students, self.soldiers)
        self.assertEqual(s.soldiers_with_one_match, 1)
        self.assertEqual(s.soldiers_with_no_match, 2)

    def test_empty(self):
        s = summarize([], [], [])
        self.assertEqual(s.as_dict(), {key: 0 for key in s.as_dict()})


class TestAssignmentIds(unittest.TestCase):

    def test_stable(self):
        self.assertEqual(make_assignment_id("S1", "A", 1), make_assignment_id("S1", "A", 1))
        self.assertNotEqual(make_assignment_id("S1", "A", 1), make_assignment_id("S1", "A", 2))

    def test_ids_with_separator_characters_do_not_collide(self):
        self.assertNotEqual(
            make_assignment_id("a|b", "c", 1),
            make_assignment_id("a", "b|c", 1),
        )


class TestValidation(unittest.TestCase):

    def test_valid(self):
        self.assertEqual(validate_records([Student(id="A")], [Soldier(id="A")]), [])

    def test_missing_and_duplicate_ids(self):
        errors = validate_records(
            [Student(id="A"), Student(id=" "), Student(id="A")],
            [Soldier(id=None), Soldier(id="S")],
        )
        self.assertEqual(len(errors), 3)
        self.assertTrue(any("Student #2" in e for e in errors))
        self.assertTrue(any("'A' appears 2 times" in e for e in errors))
        self.assertTrue(any("Soldier #1" in e for e in errors))

    def test_error_is_value_error(self):
        err = InvalidInputError(["one", "two"])
        self.assertIsInstance(err, ValueError)
        self.assertEqual(err.errors, ["one", "two"])
        self.assertEqual(str(err), "one; two")


if __name__ == '__main__':
    unittest.main()
