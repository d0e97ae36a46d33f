"""
Gradebook Common Core Package.
"""

from .config_enums import Environment
from .domain_enums import GradeCategory, QuestionKind
from .error_enums import ErrorCode, GradingErrorCode
from .exam_models import (
    Exam,
    ExamAnswer,
    ExamAttempt,
    ExamQuestion,
    MultipleChoiceAnswer,
    ShortAnswerResponse,
    TrueFalseAnswer,
)
from .grade_models import (
    CategoryAverage,
    CourseGradePoints,
    CourseGradeStatistics,
    GpaSummary,
    GradedExamResult,
    GradedSubmission,
    GradeRecord,
    GradeWeights,
    StudentGradeOutcome,
)
from .grade_scales import DEFAULT_SCALE_ID, GradeBand, GradeScaleMetadata, get_scale
from .models.error_models import ErrorDetail
from .status_enums import ExamAttemptStatus, GradeCalculationMethod

__all__ = [
    "DEFAULT_SCALE_ID",
    "CategoryAverage",
    "CourseGradePoints",
    "CourseGradeStatistics",
    "Environment",
    "ErrorCode",
    "ErrorDetail",
    "Exam",
    "ExamAnswer",
    "ExamAttempt",
    "ExamAttemptStatus",
    "ExamQuestion",
    "GpaSummary",
    "GradeBand",
    "GradeCalculationMethod",
    "GradeCategory",
    "GradeRecord",
    "GradeScaleMetadata",
    "GradeWeights",
    "GradedExamResult",
    "GradedSubmission",
    "GradingErrorCode",
    "MultipleChoiceAnswer",
    "QuestionKind",
    "ShortAnswerResponse",
    "StudentGradeOutcome",
    "TrueFalseAnswer",
    "get_scale",
]
