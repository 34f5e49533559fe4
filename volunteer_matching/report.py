# volunteer_matching/report.py
from __future__ import annotations

from typing import Dict, List

import pandas as pd

from .models import Assignment, MatchCandidate, MatchingSummary

ASSIGNMENT_COLUMNS = [
    "soldier_id",
    "rank",
    "student_id",
    "score",
    "language_match",
    "gender_pref_match",
    "region_match",
    "distance_score",
    "distance_km",
    "status",
]


def score_matrix_frame(ranked: Dict[str, List[MatchCandidate]]) -> pd.DataFrame:
    """
    Soldier x student score matrix (soldiers as rows).
    Students never scored against a soldier show as NaN.
    """
    rows: Dict[str, Dict[str, int]] = {
        soldier_id: {c.student.id: c.score for c in candidates}
        for soldier_id, candidates in ranked.items()
    }
    df = pd.DataFrame.from_dict(rows, orient="index")
    df.index.name = "soldier_id"
    return df


def assignments_frame(assignments: List[Assignment], sort_by_score: bool = False) -> pd.DataFrame:
    """One row per assignment, in allocation order unless sort_by_score."""
    records = [
        {
            "soldier_id": a.soldier_id,
            "rank": a.rank,
            "student_id": a.student_id,
            "score": a.score,
            "language_match": a.criteria.language_match,
            "gender_pref_match": a.criteria.gender_pref_match,
            "region_match": a.criteria.region_match,
            "distance_score": a.criteria.distance_score,
            "distance_km": a.criteria.distance_km,
            "status": a.status,
        }
        for a in assignments
    ]
    df = pd.DataFrame.from_records(records, columns=ASSIGNMENT_COLUMNS)
    if sort_by_score:
        df = df.sort_values("score", ascending=False, kind="stable").reset_index(drop=True)
    return df


def student_load_frame(assignments: List[Assignment]) -> pd.DataFrame:
    """Rank-1 / rank-2 counts per student."""
    df = assignments_frame(assignments)
    if df.empty:
        return pd.DataFrame(columns=["rank_1", "rank_2", "total"])
    load = pd.crosstab(df["student_id"], df["rank"]).reindex(columns=[1, 2], fill_value=0)
    load.columns = ["rank_1", "rank_2"]
    load["total"] = load["rank_1"] + load["rank_2"]
    return load.sort_values("total", ascending=False, kind="stable")


def summary_frame(summary: MatchingSummary) -> pd.DataFrame:
    return pd.DataFrame(
        list(summary.as_dict().items()),
        columns=["metric", "value"],
    ).set_index("metric")
