"""
Gemini Client Module

Builds google-genai clients from injected settings and declares the response
schemas used for structured-output requests.

Example Usage:
    from pathway_advisor.models.config import Settings
    from pathway_advisor.utils.gemini_client import create_client

    client = create_client(Settings.from_env())
    response = await client.aio.models.generate_content(
        model="gemini-2.5-flash",
        contents="...",
        config=structured_output_config(ANALYSIS_RESPONSE_SCHEMA),
    )
"""

from google import genai
from google.genai import types

from pathway_advisor.models.analysis import FUTURE_SCENARIOS
from pathway_advisor.models.config import Settings
from pathway_advisor.utils.credential_manager import MissingCredentialError
from pathway_advisor.utils.logger import get_logger

logger = get_logger(
    correlation_id="gemini-client",
    phase="client_factory",
    component="gemini_client",
)


def create_client(settings: Settings) -> genai.Client:
    """
    Return a ready-to-use Gemini client, or fail before any network call.

    A new client is built on every call; construction performs no I/O.

    Args:
        settings: Injected runtime settings holding the API key

    Returns:
        google.genai.Client bound to the configured key

    Raises:
        MissingCredentialError: If no API key is configured
    """
    if not settings.gemini_api_key:
        logger.error("gemini_api_key_missing")
        raise MissingCredentialError("Missing Gemini API Key")

    return genai.Client(api_key=settings.gemini_api_key)


def structured_output_config(schema: types.Schema) -> types.GenerateContentConfig:
    """Build a request config that constrains the reply to JSON matching ``schema``."""
    return types.GenerateContentConfig(
        response_mime_type="application/json",
        response_schema=schema,
    )


RESUME_RESPONSE_SCHEMA = types.Schema(
    type=types.Type.OBJECT,
    properties={
        "name": types.Schema(type=types.Type.STRING),
        "country": types.Schema(type=types.Type.STRING),
        "educationLevel": types.Schema(type=types.Type.STRING),
        "fieldOfStudy": types.Schema(type=types.Type.STRING),
        "workExperienceYears": types.Schema(type=types.Type.NUMBER),
        "englishScore": types.Schema(type=types.Type.NUMBER),
    },
    required=["name", "educationLevel", "fieldOfStudy", "workExperienceYears"],
)

# Pathway items declare properties but require none of them; the API rejects
# OBJECT schemas without properties.
_PATHWAY_SCHEMA = types.Schema(
    type=types.Type.OBJECT,
    properties={
        "name": types.Schema(type=types.Type.STRING),
        "description": types.Schema(type=types.Type.STRING),
        "eligibility": types.Schema(type=types.Type.STRING),
    },
)

ANALYSIS_RESPONSE_SCHEMA = types.Schema(
    type=types.Type.OBJECT,
    properties={
        "overallSuccessProbability": types.Schema(type=types.Type.NUMBER),
        "crsScorePrediction": types.Schema(type=types.Type.NUMBER),
        "riskFactors": types.Schema(
            type=types.Type.ARRAY, items=types.Schema(type=types.Type.STRING)
        ),
        "strengths": types.Schema(
            type=types.Type.ARRAY, items=types.Schema(type=types.Type.STRING)
        ),
        "assumptions": types.Schema(
            type=types.Type.ARRAY, items=types.Schema(type=types.Type.STRING)
        ),
        "recommendedPathways": types.Schema(
            type=types.Type.ARRAY, items=_PATHWAY_SCHEMA
        ),
        "otherPathways": types.Schema(type=types.Type.ARRAY, items=_PATHWAY_SCHEMA),
        "strategicAdvice": types.Schema(
            type=types.Type.ARRAY, items=types.Schema(type=types.Type.STRING)
        ),
        "futureCrsPredictions": types.Schema(
            type=types.Type.OBJECT,
            properties={
                scenario: types.Schema(type=types.Type.NUMBER)
                for scenario in FUTURE_SCENARIOS
            },
        ),
    },
    required=["overallSuccessProbability", "crsScorePrediction"],
)
