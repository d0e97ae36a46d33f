from __future__ import annotations

from dotenv import find_dotenv, load_dotenv
from gradebook_core.config_enums import Environment
from gradebook_core.grade_models import GradeWeights
from gradebook_core.grade_scales import DEFAULT_SCALE_ID
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load .env file from repository root, regardless of current working directory
load_dotenv(find_dotenv(".env"))


class Settings(BaseSettings):
    """
    Configuration settings for the Grading Service.

    These settings can be overridden via environment variables prefixed with
    GRADING_SERVICE_.
    """

    LOG_LEVEL: str = "INFO"
    ENVIRONMENT: Environment = Environment.DEVELOPMENT
    SERVICE_NAME: str = "grading_service"

    GRADE_SCALE_ID: str = Field(
        default=DEFAULT_SCALE_ID, description="Registered grade scale used for letter conversion"
    )

    # Default category weights (percentages) for automatic course grades
    DEFAULT_ASSIGNMENT_WEIGHT: float = Field(default=60.0, ge=0, le=100)
    DEFAULT_EXAM_WEIGHT: float = Field(default=40.0, ge=0, le=100)
    DEFAULT_PARTICIPATION_WEIGHT: float = Field(default=0.0, ge=0, le=100)

    DEFAULT_COURSE_CREDITS: float = Field(
        default=3.0, gt=0, description="Credit weight for courses without catalog credits"
    )
    BATCH_MAX_CONCURRENCY: int = Field(
        default=5, ge=1, description="Concurrent per-student calculations in a course batch"
    )
    SYSTEM_CALCULATOR_ID: str = Field(
        default="system", description="calculated_by value for automatic calculations"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_prefix="GRADING_SERVICE_",
    )

    def default_weights(self) -> GradeWeights:
        return GradeWeights(
            assignment_weight=self.DEFAULT_ASSIGNMENT_WEIGHT,
            exam_weight=self.DEFAULT_EXAM_WEIGHT,
            participation_weight=self.DEFAULT_PARTICIPATION_WEIGHT,
        )


settings = Settings()
