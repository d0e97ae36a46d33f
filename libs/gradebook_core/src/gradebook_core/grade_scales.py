"""
Grade scale registry for the grading engine.

Provides the single definition of letter-grade range tables. Every component
that converts percentages into letters or grade points receives one
GradeScaleMetadata instance, so the tables cannot drift apart.
"""

from __future__ import annotations

from dataclasses import dataclass

MIN_PERCENT = 0.0
MAX_PERCENT = 100.0


@dataclass(frozen=True)
class GradeBand:
    """
    One row of a range table.

    A band covers [min_percent, next higher band's min_percent). The top band
    covers [min_percent, 100].
    """

    letter: str
    min_percent: float
    grade_points: float


@dataclass(frozen=True)
class GradeScaleMetadata:
    """
    Metadata for a specific grade scale.

    Attributes:
        scale_id: Unique identifier for the scale (e.g., "us_letter_4_0")
        display_name: Human-readable name for UI display
        bands: Bands ordered from highest minimum to lowest
        description: Purpose and context of this scale
    """

    scale_id: str
    display_name: str
    bands: tuple[GradeBand, ...]
    description: str

    def __post_init__(self) -> None:
        """Validate that the bands partition [0, 100] without gaps or overlaps."""
        if not self.scale_id:
            msg = "scale_id cannot be empty"
            raise ValueError(msg)
        if not self.bands:
            msg = "bands cannot be empty"
            raise ValueError(msg)

        letters = [band.letter for band in self.bands]
        if len(letters) != len(set(letters)):
            msg = f"letters must be unique: {letters}"
            raise ValueError(msg)

        minimums = [band.min_percent for band in self.bands]
        for higher, lower in zip(minimums, minimums[1:]):
            if lower >= higher:
                msg = f"band minimums must be strictly descending, got {minimums}"
                raise ValueError(msg)

        if any(not (MIN_PERCENT <= value <= MAX_PERCENT) for value in minimums):
            msg = f"band minimums must lie within [0, 100], got {minimums}"
            raise ValueError(msg)

        # Lowest band must start at 0 so every valid percentage has a band
        if minimums[-1] != MIN_PERCENT:
            msg = f"lowest band must start at 0, got {minimums[-1]}"
            raise ValueError(msg)

        negative = [band.letter for band in self.bands if band.grade_points < 0]
        if negative:
            msg = f"grade points cannot be negative: {negative}"
            raise ValueError(msg)

    @property
    def letters(self) -> list[str]:
        """Letters ordered from highest to lowest."""
        return [band.letter for band in self.bands]

    @property
    def grade_points_by_letter(self) -> dict[str, float]:
        return {band.letter: band.grade_points for band in self.bands}


# Plus/minus letter grades on the 4.0 scale (default)
_US_LETTER_4_0 = GradeScaleMetadata(
    scale_id="us_letter_4_0",
    display_name="Letter grades with +/- (4.0 scale)",
    bands=(
        GradeBand("A+", 97.0, 4.0),
        GradeBand("A", 93.0, 4.0),
        GradeBand("A-", 90.0, 3.7),
        GradeBand("B+", 87.0, 3.3),
        GradeBand("B", 83.0, 3.0),
        GradeBand("B-", 80.0, 2.7),
        GradeBand("C+", 77.0, 2.3),
        GradeBand("C", 73.0, 2.0),
        GradeBand("C-", 70.0, 1.7),
        GradeBand("D+", 67.0, 1.3),
        GradeBand("D", 63.0, 1.0),
        GradeBand("D-", 60.0, 0.7),
        GradeBand("F", 0.0, 0.0),
    ),
    description=(
        "Thirteen-band letter scale with plus/minus modifiers. "
        "A+ and A both carry 4.0 grade points; anything below 60% is F."
    ),
)

# Plain five-letter scale without modifiers
_US_LETTER_SIMPLE = GradeScaleMetadata(
    scale_id="us_letter_simple",
    display_name="Letter grades A-F (4.0 scale)",
    bands=(
        GradeBand("A", 90.0, 4.0),
        GradeBand("B", 80.0, 3.0),
        GradeBand("C", 70.0, 2.0),
        GradeBand("D", 60.0, 1.0),
        GradeBand("F", 0.0, 0.0),
    ),
    description="Five-band letter scale in ten-point steps, no modifiers.",
)

DEFAULT_SCALE_ID = _US_LETTER_4_0.scale_id

# Registry mapping scale_id to metadata
GRADE_SCALES: dict[str, GradeScaleMetadata] = {
    _US_LETTER_4_0.scale_id: _US_LETTER_4_0,
    _US_LETTER_SIMPLE.scale_id: _US_LETTER_SIMPLE,
}


def get_scale(scale_id: str) -> GradeScaleMetadata:
    """
    Retrieve grade scale metadata by ID.

    Args:
        scale_id: Unique scale identifier

    Returns:
        GradeScaleMetadata for the requested scale

    Raises:
        ValueError: If scale_id is not registered
    """
    if scale_id not in GRADE_SCALES:
        available = ", ".join(sorted(GRADE_SCALES.keys()))
        msg = f"Unknown grade scale '{scale_id}'. Available scales: {available}"
        raise ValueError(msg)
    return GRADE_SCALES[scale_id]


def list_available_scales() -> list[str]:
    """
    Get list of all registered grade scale IDs.

    Returns:
        Sorted list of scale identifiers
    """
    return sorted(GRADE_SCALES.keys())
