"""
Integration test for the exam -> course grade -> GPA flow.

Runs the real services against the in-memory store: students take an exam,
the teacher grades the short answers, course grades are calculated for the
whole class and feed GPA and course statistics.
"""

from __future__ import annotations

from gradebook_core.exam_models import (
    Exam,
    MultipleChoiceAnswer,
    ShortAnswerResponse,
    TrueFalseAnswer,
)
from gradebook_core.grade_models import GradedSubmission, GradeWeights
from gradebook_core.status_enums import ExamAttemptStatus

from services.grading_service.config import Settings
from services.grading_service.grading_logic.gpa import GpaAggregator
from services.grading_service.grading_logic.letter_grades import LetterGradeConverter
from services.grading_service.grading_logic.weighted_average import WeightedGradeCalculator
from services.grading_service.implementations.exam_attempt_service_impl import (
    ExamAttemptServiceImpl,
)
from services.grading_service.implementations.grade_service_impl import GradeServiceImpl
from services.grading_service.implementations.in_memory_repository_impl import (
    InMemoryGradebookRepository,
)
from services.grading_service.metrics import GradingMetrics


async def test_exam_results_flow_into_course_grades_and_gpa(
    repository: InMemoryGradebookRepository,
    metrics: GradingMetrics,
    converter: LetterGradeConverter,
    calculator: WeightedGradeCalculator,
    gpa_aggregator: GpaAggregator,
    test_settings: Settings,
    mixed_exam: Exam,
) -> None:
    exam_service = ExamAttemptServiceImpl(repository=repository, metrics=metrics)
    grade_service = GradeServiceImpl(
        graded_work=repository,
        enrollment=repository,
        grade_records=repository,
        course_catalog=repository,
        converter=converter,
        calculator=calculator,
        gpa_aggregator=gpa_aggregator,
        settings=test_settings,
        metrics=metrics,
    )
    course_id = mixed_exam.course_id
    await exam_service.create_exam(mixed_exam)
    for student_id in ("alice", "bob", "carol"):
        repository.enroll_student(course_id, student_id)

    # alice: all objective answers right, 4/5 on the short answer -> 9/10
    alice = await exam_service.start(mixed_exam.id, "alice")
    await exam_service.submit(
        alice.id,
        [
            MultipleChoiceAnswer(question_id="q1", selected_index=1),
            TrueFalseAnswer(question_id="q2", value=True),
            ShortAnswerResponse(question_id="q3", text="Light to chemical energy"),
        ],
    )
    alice_graded = await exam_service.grade(alice.id, 4, feedback="Nearly complete")

    # bob: wrong multiple choice, 3/5 on the short answer -> 6/10
    bob = await exam_service.start(mixed_exam.id, "bob")
    await exam_service.submit(
        bob.id,
        [
            MultipleChoiceAnswer(question_id="q1", selected_index=0),
            TrueFalseAnswer(question_id="q2", value=True),
        ],
    )
    await exam_service.grade(bob.id, 3)

    # carol submits but is never graded; the exam does not count for her yet
    carol = await exam_service.start(mixed_exam.id, "carol")
    carol_submitted = await exam_service.submit(carol.id, [])

    assert alice_graded.score == 9.0
    assert carol_submitted.status is ExamAttemptStatus.SUBMITTED

    repository.add_graded_submission(
        "alice", course_id, GradedSubmission(assignment_id="hw1", grade=80, max_score=100)
    )
    repository.add_graded_submission(
        "bob", course_id, GradedSubmission(assignment_id="hw1", grade=70, max_score=100)
    )
    repository.add_graded_submission(
        "carol", course_id, GradedSubmission(assignment_id="hw1", grade=95, max_score=100)
    )

    outcomes = await grade_service.calculate_for_all_students_in_course(course_id, GradeWeights())
    records = {outcome.student_id: outcome.record for outcome in outcomes}

    assert all(outcome.succeeded for outcome in outcomes)
    # alice: 80 * 0.6 + 90 * 0.4
    assert records["alice"].final_grade == 84.0
    assert records["alice"].letter_grade == "B"
    assert records["alice"].exam_grades == {mixed_exam.id: 90.0}
    # bob: 70 * 0.6 + 60 * 0.4
    assert records["bob"].final_grade == 66.0
    assert records["bob"].letter_grade == "D"
    # carol: no graded exam, assignments only
    assert records["carol"].final_grade == 95.0
    assert records["carol"].exam_grades == {}

    # Recalculation replaces the record instead of adding another one
    await grade_service.calculate_grade("alice", course_id, GradeWeights())
    assert len(await repository.list_grade_records_for_course(course_id)) == 3

    repository.set_course_credits("history-101", 4.0)
    await grade_service.record_manual_grade("alice", "history-101", 97.0, "teacher-2")
    gpa = await grade_service.calculate_student_gpa("alice")
    # B (3.0) at the default 3 credits, A+ (4.0) at 4 credits
    assert gpa.gpa == round((3.0 * 3 + 4.0 * 4) / 7, 2)
    assert gpa.total_credits == 7.0

    stats = await grade_service.get_course_statistics(course_id)
    assert stats.total_students == 3
    assert stats.average_grade == 81.67
    assert stats.highest_grade == 95.0
    assert stats.lowest_grade == 66.0
    assert stats.grade_distribution["B"] == 1
    assert stats.grade_distribution["D"] == 1
    assert stats.grade_distribution["A"] == 1
