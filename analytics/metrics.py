"""
Analytics and Metrics Calculation Module
=========================================

This module turns the normalized lists fetched from the backend into the
dashboard figures.
"""

from collections.abc import Mapping
from typing import Any, List, Optional, Sequence

import pandas as pd

from models.quiz_models import DashboardStats


def count_questions(quiz: Any) -> int:
    """Number of questions in a quiz; a missing or malformed list counts as 0."""
    if not isinstance(quiz, Mapping):
        return 0
    questions = quiz.get("questions")
    return len(questions) if isinstance(questions, list) else 0


def quiz_id(quiz: Any) -> Optional[str]:
    """The quiz key, ``_id`` first (MongoDB records) then ``id``."""
    if not isinstance(quiz, Mapping):
        return None
    for key in ("_id", "id"):
        value = quiz.get(key)
        if value not in (None, ""):
            return str(value)
    return None


def quiz_title(quiz: Any, default: str = "Untitled") -> str:
    title = quiz.get("title") if isinstance(quiz, Mapping) else None
    return title if isinstance(title, str) and title else default


def total_questions(quizzes: Sequence[Any]) -> int:
    return sum(count_questions(quiz) for quiz in quizzes)


def calculate_dashboard_stats(students: Sequence[Any], quizzes: Sequence[Any],
                              bookmarks: Sequence[Any]) -> DashboardStats:
    return DashboardStats(
        students=len(students),
        quizzes=len(quizzes),
        bookmarks=len(bookmarks),
        total_questions=total_questions(quizzes),
    )


def quiz_overview(quizzes: Sequence[Any]) -> pd.DataFrame:
    """
    One row per quiz with its title, question count and creation date,
    in the order the backend returned them.
    """
    rows: List[dict] = []
    for idx, quiz in enumerate(quizzes):
        record = quiz if isinstance(quiz, Mapping) else {}
        rows.append({
            "Quiz": quiz_title(quiz, default=f"Quiz {idx + 1}"),
            "Questions": count_questions(quiz),
            "Created": pd.to_datetime(record.get("createdAt"), errors="coerce", utc=True),
        })

    return pd.DataFrame(rows, columns=["Quiz", "Questions", "Created"])
