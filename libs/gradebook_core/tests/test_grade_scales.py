"""
Unit tests for grade scale registry.

Tests band validation, the default letter table and registry helpers.
"""

from __future__ import annotations

import pytest
from gradebook_core.grade_scales import (
    DEFAULT_SCALE_ID,
    GRADE_SCALES,
    GradeBand,
    GradeScaleMetadata,
    get_scale,
    list_available_scales,
)


def _scale(*bands: GradeBand, scale_id: str = "test_scale") -> GradeScaleMetadata:
    return GradeScaleMetadata(
        scale_id=scale_id, display_name="Test", bands=tuple(bands), description="Test scale"
    )


class TestGradeScaleMetadata:
    """Tests for GradeScaleMetadata validation."""

    def test_valid_scale(self) -> None:
        scale = _scale(GradeBand("P", 50.0, 1.0), GradeBand("F", 0.0, 0.0))

        assert scale.letters == ["P", "F"]
        assert scale.grade_points_by_letter == {"P": 1.0, "F": 0.0}

    def test_empty_scale_id_raises(self) -> None:
        with pytest.raises(ValueError, match="scale_id cannot be empty"):
            _scale(GradeBand("F", 0.0, 0.0), scale_id="")

    def test_empty_bands_raise(self) -> None:
        with pytest.raises(ValueError, match="bands cannot be empty"):
            _scale()

    def test_duplicate_letters_raise(self) -> None:
        with pytest.raises(ValueError, match="letters must be unique"):
            _scale(GradeBand("F", 50.0, 1.0), GradeBand("F", 0.0, 0.0))

    @pytest.mark.parametrize(
        "bands",
        [
            (GradeBand("B", 50.0, 2.0), GradeBand("A", 80.0, 4.0), GradeBand("F", 0.0, 0.0)),
            (GradeBand("A", 50.0, 4.0), GradeBand("B", 50.0, 3.0), GradeBand("F", 0.0, 0.0)),
        ],
    )
    def test_minimums_must_strictly_descend(self, bands: tuple[GradeBand, ...]) -> None:
        with pytest.raises(ValueError, match="strictly descending"):
            _scale(*bands)

    def test_minimum_above_hundred_raises(self) -> None:
        with pytest.raises(ValueError, match=r"within \[0, 100\]"):
            _scale(GradeBand("A", 101.0, 4.0), GradeBand("F", 0.0, 0.0))

    def test_gap_below_lowest_band_raises(self) -> None:
        with pytest.raises(ValueError, match="lowest band must start at 0"):
            _scale(GradeBand("A", 90.0, 4.0), GradeBand("B", 10.0, 3.0))

    def test_negative_points_raise(self) -> None:
        with pytest.raises(ValueError, match="grade points cannot be negative"):
            _scale(GradeBand("A", 50.0, 4.0), GradeBand("F", 0.0, -1.0))


class TestDefaultScale:
    def test_default_scale_is_registered(self) -> None:
        assert DEFAULT_SCALE_ID == "us_letter_4_0"
        assert get_scale(DEFAULT_SCALE_ID) is GRADE_SCALES[DEFAULT_SCALE_ID]

    def test_default_table(self) -> None:
        scale = get_scale(DEFAULT_SCALE_ID)

        assert [(b.letter, b.min_percent, b.grade_points) for b in scale.bands] == [
            ("A+", 97.0, 4.0),
            ("A", 93.0, 4.0),
            ("A-", 90.0, 3.7),
            ("B+", 87.0, 3.3),
            ("B", 83.0, 3.0),
            ("B-", 80.0, 2.7),
            ("C+", 77.0, 2.3),
            ("C", 73.0, 2.0),
            ("C-", 70.0, 1.7),
            ("D+", 67.0, 1.3),
            ("D", 63.0, 1.0),
            ("D-", 60.0, 0.7),
            ("F", 0.0, 0.0),
        ]

    def test_points_never_increase_down_the_table(self) -> None:
        for scale in GRADE_SCALES.values():
            points = [band.grade_points for band in scale.bands]
            assert points == sorted(points, reverse=True)


class TestRegistryHelpers:
    def test_list_available_scales_is_sorted(self) -> None:
        assert list_available_scales() == ["us_letter_4_0", "us_letter_simple"]

    def test_unknown_scale_raises(self) -> None:
        with pytest.raises(ValueError, match="Unknown grade scale 'percent'"):
            get_scale("percent")
