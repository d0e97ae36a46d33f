"""Course-level summary of current grade records."""

from __future__ import annotations

from collections import Counter
from collections.abc import Sequence

from gradebook_core.grade_models import CourseGradeStatistics, GradeRecord

from services.grading_service.constants import GRADE_DECIMALS


def summarize_course_grades(
    records: Sequence[GradeRecord], letters: Sequence[str]
) -> CourseGradeStatistics:
    """Student count, mean, extremes and letter distribution of the records.

    The distribution lists every letter of the scale, in scale order, with
    zero for letters nobody earned.
    """
    if not records:
        return CourseGradeStatistics(
            total_students=0,
            average_grade=0.0,
            highest_grade=0.0,
            lowest_grade=0.0,
            grade_distribution={letter: 0 for letter in letters},
        )

    grades = [record.final_grade for record in records]
    counts = Counter(record.letter_grade for record in records)
    distribution = {letter: counts.get(letter, 0) for letter in letters}
    # Records calculated under a previous scale keep their letters visible
    for letter, count in counts.items():
        distribution.setdefault(letter, count)

    return CourseGradeStatistics(
        total_students=len(records),
        average_grade=round(sum(grades) / len(grades), GRADE_DECIMALS),
        highest_grade=max(grades),
        lowest_grade=min(grades),
        grade_distribution=distribution,
    )
