"""AI assessment result model and the canned fallback assessment."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


# Scenario names used for CRS projections
FUTURE_SCENARIOS = ("current", "oneYearStudy", "twoYearStudy", "twoYearStudyPlusWork")


class AIAnalysisResult(BaseModel):
    """Structured immigration assessment returned by the model.

    Attributes:
        overall_success_probability: Estimated chance of success (0-100)
        crs_score_prediction: Predicted Comprehensive Ranking System score
        risk_factors: Weaknesses that may hurt the application
        strengths: Factors working in the applicant's favour
        assumptions: Assumptions the model made about missing data
        recommended_pathways: Best-fit immigration programs (loose objects)
        other_pathways: Further programs worth considering (loose objects)
        strategic_advice: Actionable next steps
        future_crs_predictions: Projected score per scenario name

    Only the two top-level scores are checked. List items and projection
    values are passed through exactly as the model produced them (a null
    projection stays None). List fields always exist and default to empty.
    """

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="allow"
    )

    overall_success_probability: float
    crs_score_prediction: float
    risk_factors: list[Any] = Field(default_factory=list)
    strengths: list[Any] = Field(default_factory=list)
    assumptions: list[Any] = Field(default_factory=list)
    recommended_pathways: list[Any] = Field(default_factory=list)
    other_pathways: list[Any] = Field(default_factory=list)
    strategic_advice: list[Any] = Field(default_factory=list)
    future_crs_predictions: dict[str, Any] = Field(default_factory=dict)

    @field_validator(
        "risk_factors",
        "strengths",
        "assumptions",
        "recommended_pathways",
        "other_pathways",
        "strategic_advice",
        mode="before",
    )
    @classmethod
    def null_list_is_empty(cls, v: Any) -> Any:
        """An explicit null list reads as an empty one."""
        return [] if v is None else v

    @field_validator("future_crs_predictions", mode="before")
    @classmethod
    def null_projections_are_empty(cls, v: Any) -> Any:
        return {} if v is None else v

    @classmethod
    def fallback(cls) -> "AIAnalysisResult":
        """Build the fixed assessment returned when the live call fails.

        Returns:
            A new AIAnalysisResult instance (never shared between callers)
        """
        return cls(
            overall_success_probability=72,
            crs_score_prediction=310,
            risk_factors=["Missing language test"],
            strengths=["Good financial support"],
            assumptions=["Assumed CLB 5 for missing IELTS"],
            recommended_pathways=[],
            other_pathways=[],
            strategic_advice=[
                "Improve English score",
                "Consider 2-year study leading to PGWP",
            ],
            future_crs_predictions={
                "current": 310,
                "oneYearStudy": 335,
                "twoYearStudy": 360,
                "twoYearStudyPlusWork": 470,
            },
        )

    def is_fallback(self) -> bool:
        """Check whether this result equals the canned fallback assessment."""
        return self == AIAnalysisResult.fallback()
