"""
Weighted and simple averaging of category percentages.

Categories without graded entries (average None) or with zero weight take no
part in either the numerator or the denominator. Results are not rounded.
"""

from __future__ import annotations

from collections.abc import Sequence

from gradebook_core.grade_models import CategoryAverage
from gradebook_core.grade_scales import MAX_PERCENT
from gradebook_service_libs.error_handling import raise_invalid_input
from gradebook_service_libs.logging_utils import create_service_logger

from services.grading_service.constants import SERVICE_NAME
from services.grading_service.grading_logic.numeric_validation import require_non_negative

logger = create_service_logger("grading_service.weighted_average")


class WeightedGradeCalculator:
    """Combines per-category percentages into one course percentage."""

    def __init__(self) -> None:
        self.logger = logger

    def weighted_average(self, categories: Sequence[CategoryAverage]) -> float:
        """
        Weighted mean of the categories that have both an average and a weight.

        Args:
            categories: Category averages with weights as percentages (0-100)

        Returns:
            Sum(average * weight) / Sum(weights used), or 0.0 when no category is used
        """
        weighted_sum = 0.0
        total_weight = 0.0

        for index, category in enumerate(categories):
            weight = require_non_negative(
                category.weight, f"categories[{index}].weight", "weighted_average"
            )
            if weight > MAX_PERCENT:
                raise_invalid_input(
                    service=SERVICE_NAME,
                    operation="weighted_average",
                    field=f"categories[{index}].weight",
                    message="Category weight cannot exceed 100",
                    value=weight,
                )
            if category.average is None:
                continue
            average = require_non_negative(
                category.average, f"categories[{index}].average", "weighted_average"
            )
            if weight == 0:
                continue
            weighted_sum += average * weight
            total_weight += weight

        if total_weight == 0:
            self.logger.debug("No weighted categories contributed", category_count=len(categories))
            return 0.0

        return weighted_sum / total_weight

    def simple_average(self, scores: Sequence[float]) -> float:
        """Arithmetic mean of the scores; 0.0 for no scores."""
        values = [
            require_non_negative(score, f"scores[{index}]", "simple_average")
            for index, score in enumerate(scores)
        ]
        if not values:
            return 0.0
        return sum(values) / len(values)

    def category_average(self, scores: Sequence[float]) -> float | None:
        """Mean of one category's percentages, None when the category is empty."""
        if not scores:
            return None
        return self.simple_average(scores)
