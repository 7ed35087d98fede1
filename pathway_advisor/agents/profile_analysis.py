"""
Profile Analysis Agent
Requests a structured immigration assessment for an applicant profile.
"""

import json
from typing import Callable, Optional, Union

from google import genai

from pathway_advisor.models.analysis import AIAnalysisResult
from pathway_advisor.models.config import Settings
from pathway_advisor.models.profile import LanguageTestDetails, UserProfile, UserType
from pathway_advisor.utils.gemini_client import (
    ANALYSIS_RESPONSE_SCHEMA,
    create_client,
    structured_output_config,
)
from pathway_advisor.utils.logger import get_logger
from pathway_advisor.utils.prompt_loader import format_number, render_prompt

ClientFactory = Callable[[Settings], genai.Client]

STUDENT_TEMPLATE = "analysis/student.j2"
SKILLED_WORKER_TEMPLATE = "analysis/skilled_worker.j2"


class EmptyResponseError(Exception):
    """Raised when the model returns no text."""


def summarize_language_test(details: LanguageTestDetails) -> str:
    """
    Render one language test as a single summary line.

    Example:
        "IELTS - Overall:7, R:7, W:6, L:8, S:7"
    """
    return (
        f"{details.test_type} - Overall:{format_number(details.overall_score)}, "
        f"R:{format_number(details.reading)}, "
        f"W:{format_number(details.writing)}, "
        f"L:{format_number(details.listening)}, "
        f"S:{format_number(details.speaking)}"
    )


def english_summary(profile: UserProfile) -> str:
    """English test line, or "N/A" when no breakdown was given."""
    if profile.language_details is None:
        return "N/A"
    return summarize_language_test(profile.language_details)


def french_summary(profile: UserProfile) -> str:
    """French test line, or "None" when absent or recorded as the "None" test."""
    if profile.french_details is None or profile.french_details.is_sentinel():
        return "None"
    return summarize_language_test(profile.french_details)


def instructions_template(user_type: Union[UserType, str]) -> str:
    """Pick the instruction template: students get their own, everyone else the worker one."""
    if user_type == UserType.STUDENT:
        return STUDENT_TEMPLATE
    return SKILLED_WORKER_TEMPLATE


def render_profile_text(profile: UserProfile) -> str:
    """Flatten a profile into the text block embedded in the prompt."""
    return render_prompt(
        "analysis/profile.j2",
        profile=profile,
        english_info=english_summary(profile),
        french_info=french_summary(profile),
    )


def build_analysis_prompt(
    profile: UserProfile, user_type: Union[UserType, str]
) -> str:
    """Assemble the full assessment prompt for a profile and applicant type."""
    return render_prompt(
        "analysis/request.j2",
        instructions=render_prompt(instructions_template(user_type)).strip(),
        profile_text=render_profile_text(profile).strip(),
    )


class ProfileAnalyzer:
    """Produces an AIAnalysisResult for an applicant, falling back on failure."""

    def __init__(
        self,
        settings: Settings,
        client_factory: ClientFactory = create_client,
        correlation_id: Optional[str] = None,
    ):
        """
        Initialize profile analyzer.

        Args:
            settings: Injected runtime settings (API key, model)
            client_factory: Builds the Gemini client from settings
            correlation_id: Correlation ID for logging (auto-generated if None)
        """
        self.settings = settings
        self.client_factory = client_factory
        self.logger = get_logger(
            correlation_id=correlation_id,
            phase="profile_analysis",
            component="profile_analyzer",
        )

    async def analyze(
        self, profile: UserProfile, user_type: Union[UserType, str]
    ) -> AIAnalysisResult:
        """
        Assess a profile and return the model's structured result.

        The reply is parsed and validated leniently: list fields the model
        leaves out become empty, nested pathway and advice items are kept as
        returned. An empty reply or any request, JSON or validation failure
        yields AIAnalysisResult.fallback().

        Args:
            profile: Applicant profile
            user_type: Student or Skilled Worker (any other value uses the worker branch)

        Returns:
            AIAnalysisResult from the model, or the fallback result

        Raises:
            MissingCredentialError: If no API key is configured
        """
        client = self.client_factory(self.settings)

        try:
            prompt = build_analysis_prompt(profile, user_type)
            self.logger.info(
                "Requesting profile assessment",
                model=self.settings.model,
                user_type=str(getattr(user_type, "value", user_type)),
                prompt_length=len(prompt),
            )
            response = await client.aio.models.generate_content(
                model=self.settings.model,
                contents=prompt,
                config=structured_output_config(ANALYSIS_RESPONSE_SCHEMA),
            )

            if not response.text:
                raise EmptyResponseError("No response returned")

            result = AIAnalysisResult.model_validate(json.loads(response.text))

            self.logger.info(
                "Profile assessment complete",
                success_probability=result.overall_success_probability,
                crs_prediction=result.crs_score_prediction,
                recommended_pathways=len(result.recommended_pathways),
            )
            return result

        except Exception as e:
            self.logger.error(
                "Error analyzing profile, using fallback result",
                error=str(e),
                error_type=type(e).__name__,
            )
            return AIAnalysisResult.fallback()


async def analyze_profile(
    profile: UserProfile,
    user_type: Union[UserType, str],
    settings: Optional[Settings] = None,
    client_factory: ClientFactory = create_client,
) -> AIAnalysisResult:
    """
    Convenience wrapper around ProfileAnalyzer.analyze.

    Args:
        profile: Applicant profile
        user_type: Student or Skilled Worker
        settings: Runtime settings (read from the environment if None)
        client_factory: Builds the Gemini client from settings

    Returns:
        AIAnalysisResult, never raising except for a missing API key
    """
    analyzer = ProfileAnalyzer(settings or Settings.from_env(), client_factory)
    return await analyzer.analyze(profile, user_type)
