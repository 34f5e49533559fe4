# run_toy.py

import logging

import pandas as pd

from volunteer_matching.config import NUM_STUDENTS_DEFAULT, NUM_SOLDIERS_DEFAULT, DEFAULT_SEED
from volunteer_matching.data_generation.toy_dataset import make_toy_dataset
from volunteer_matching.lookup.languages import LanguageRegistry
from volunteer_matching.matching.candidates import generate_candidates
from volunteer_matching.matching.diagnostics import analyze_coverage
from volunteer_matching.matching.pipeline import run_matching
from volunteer_matching.report import (
    score_matrix_frame,
    assignments_frame,
    student_load_frame,
    summary_frame,
)


def main():
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    pd.set_option("display.width", 160)
    pd.set_option("display.max_columns", 20)

    # ---- Generate toy students + soldiers ----
    students, soldiers = make_toy_dataset(
        num_students=NUM_STUDENTS_DEFAULT,
        num_soldiers=NUM_SOLDIERS_DEFAULT,
        seed=DEFAULT_SEED,
    )
    print(f"Generated {len(students)} students and {len(soldiers)} soldiers.")
    print()

    # one registry for the whole session so minted codes line up in every view
    languages = LanguageRegistry()

    # ---- Pre-run coverage check ----
    print("=== COVERAGE CHECK ===")
    diag = analyze_coverage(students, soldiers, languages=languages)
    for msg in diag["messages"]:
        print(f"  - {msg}")
    print(f"Suggestion: {diag['suggestion']}")
    print(f"Primary demand {diag['primary_demand']} vs available slots {diag['supply']}")
    print()

    # ============================
    #  SCORE MATRIX (PANDAS)
    # ============================
    ranked = generate_candidates(students, soldiers, languages=languages)
    df_scores = score_matrix_frame(ranked)
    print("=== SOLDIER–STUDENT SCORE MATRIX (first 10 soldiers) ===")
    print(df_scores.head(10))
    print()

    print("=== TOP 3 CANDIDATES PER SOLDIER (first 5 soldiers) ===")
    for soldier_id in list(ranked)[:5]:
        print(f"\n{soldier_id}:")
        for c in ranked[soldier_id][:3]:
            print(
                f"  - {c.student.id} (Score {c.score}) "
                f"lang={c.criteria.language_match} gender={c.criteria.gender_pref_match} "
                f"dist={c.criteria.distance_score}"
            )
    print()

    # =====================================
    #  MATCHING RUN: both policies
    # =====================================
    for policy in ("balanced", "capacity"):
        print(f"=== MATCHING RUN (policy={policy}) ===")
        result = run_matching(students, soldiers, policy=policy, languages=languages)

        print(assignments_frame(result.assignments, sort_by_score=True).head(20))
        print()
        print("--- Student load ---")
        print(student_load_frame(result.assignments).head(10))
        print()
        print("--- Summary ---")
        print(summary_frame(result.summary))
        print()

    # ---- Verification: rank 1 before rank 2, no duplicate pairs ----
    print("=== VERIFICATION: RANK ORDER AND DUPLICATES ===")
    result = run_matching(students, soldiers, languages=languages)
    seen_rank1 = set()
    pairs = set()
    status_flag = "PASS"
    for a in result.assignments:
        if a.rank == 1:
            seen_rank1.add(a.soldier_id)
        elif a.soldier_id not in seen_rank1:
            status_flag = "FAIL"
        if (a.student_id, a.soldier_id) in pairs:
            status_flag = "FAIL"
        pairs.add((a.student_id, a.soldier_id))
    print(f"{len(result.assignments)} assignments -> {status_flag}")


if __name__ == "__main__":
    main()
