# run_tests.py
from volunteer_matching.data_generation.toy_dataset import make_toy_dataset
from volunteer_matching.matching.diagnostics import analyze_coverage
from volunteer_matching.matching.pipeline import run_matching


def run_test_case(name, num_students, num_soldiers, policy="balanced", seed=42):
    print(f"\n{'='*20}\nRUNNING TEST: {name}\n{'='*20}")

    # 1. Generate Data
    students, soldiers = make_toy_dataset(
        num_students=num_students,
        num_soldiers=num_soldiers,
        seed=seed,
    )
    print(f"Generated {len(students)} students and {len(soldiers)} soldiers.")

    # 2. Check Coverage
    diag = analyze_coverage(students, soldiers)
    if not diag["ok"]:
        print("\n[WARN] Coverage issues:")
        for msg in diag["messages"]:
            print(f"  - {msg}")

    # 3. Match
    result = run_matching(students, soldiers, policy=policy)
    summary = result.summary

    # 4. Print Debug Info
    print("\n[DEBUG] Assignments per soldier:")
    by_soldier = {}
    for a in result.assignments:
        by_soldier.setdefault(a.soldier_id, []).append(f"{a.student_id}({a.score})")
    for sid in sorted(by_soldier):
        print(f"  {sid}: {', '.join(by_soldier[sid])}")

    print(f"\n[RESULT] policy={policy}")
    print(f"  Soldiers 2/1/0 matches : {summary.soldiers_with_two_matches}/"
          f"{summary.soldiers_with_one_match}/{summary.soldiers_with_no_match}")
    print(f"  Students used          : {summary.students_used}/{summary.total_students}")
    print(f"  Avg score              : {summary.avg_score}")
    print(f"  High/Medium/Low        : {summary.high_score_matches}/"
          f"{summary.medium_score_matches}/{summary.low_score_matches}")

    if summary.soldiers_with_two_matches == summary.total_soldiers:
        print("Every soldier has two matches!")


def main():
    # Test Case 1: More soldiers than students
    # Goal: every soldier still gets two matches; load spread across students.
    run_test_case(
        name="10 Students, 30 Soldiers",
        num_students=10,
        num_soldiers=30,
    )

    # Test Case 2: More students than soldiers
    # Goal: rebalancing pulls unused students into rank-2 slots.
    run_test_case(
        name="25 Students, 10 Soldiers",
        num_students=25,
        num_soldiers=10,
    )

    # Test Case 3: Single student (edge case)
    # Only one distinct student exists, so each soldier gets exactly one match.
    run_test_case(
        name="1 Student, 5 Soldiers",
        num_students=1,
        num_soldiers=5,
    )

    # Test Case 4: Capacity policy on the same data as case 1
    run_test_case(
        name="10 Students, 30 Soldiers (capacity policy)",
        num_students=10,
        num_soldiers=30,
        policy="capacity",
    )


if __name__ == "__main__":
    main()
