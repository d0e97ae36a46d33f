"""Letter grade conversion against an injected grade scale."""

from __future__ import annotations

from gradebook_core.grade_scales import MAX_PERCENT, GradeScaleMetadata
from gradebook_service_libs.error_handling import raise_unknown_letter

from services.grading_service.constants import SERVICE_NAME
from services.grading_service.grading_logic.numeric_validation import require_non_negative


class LetterGradeConverter:
    """Maps percentages to letters and letters to 4.0-scale grade points.

    Percentages above 100 (bonus points) are clamped to 100 before lookup.
    """

    def __init__(self, scale: GradeScaleMetadata) -> None:
        self.scale = scale
        self._points_by_letter = scale.grade_points_by_letter

    def to_letter(self, percent: float) -> str:
        value = min(require_non_negative(percent, "percent", "to_letter"), MAX_PERCENT)
        # Bands are ordered from the highest minimum down
        for band in self.scale.bands:
            if band.min_percent <= value:
                return band.letter
        # Unreachable: scale validation guarantees a band starting at 0
        return self.scale.bands[-1].letter

    def to_grade_points(self, letter: str) -> float:
        if letter not in self._points_by_letter:
            raise_unknown_letter(
                service=SERVICE_NAME,
                operation="to_grade_points",
                letter=letter,
                scale_id=self.scale.scale_id,
            )
        return self._points_by_letter[letter]

    def convert(self, percent: float) -> tuple[str, float]:
        """Letter and grade points for a percentage."""
        letter = self.to_letter(percent)
        return letter, self.to_grade_points(letter)
