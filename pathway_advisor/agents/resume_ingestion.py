"""
Resume Ingestion Agent
Extracts a partial applicant profile from an uploaded resume with Gemini.
"""

import json
from typing import Callable, Optional

from google import genai

from pathway_advisor.models.config import Settings
from pathway_advisor.models.profile import PartialUserProfile, ResumeExtraction
from pathway_advisor.utils.file_payload import UploadSource, file_to_generative_part
from pathway_advisor.utils.gemini_client import (
    RESUME_RESPONSE_SCHEMA,
    create_client,
    structured_output_config,
)
from pathway_advisor.utils.logger import get_logger
from pathway_advisor.utils.prompt_loader import render_prompt

ClientFactory = Callable[[Settings], genai.Client]


class ResumeIngestor:
    """Turns an uploaded resume into a PartialUserProfile."""

    def __init__(
        self,
        settings: Settings,
        client_factory: ClientFactory = create_client,
        correlation_id: Optional[str] = None,
    ):
        """
        Initialize resume ingestor.

        Args:
            settings: Injected runtime settings (API key, model, read timeout)
            client_factory: Builds the Gemini client from settings
            correlation_id: Correlation ID for logging (auto-generated if None)
        """
        self.settings = settings
        self.client_factory = client_factory
        self.logger = get_logger(
            correlation_id=correlation_id,
            phase="resume_ingestion",
            component="resume_ingestor",
        )

    async def ingest(
        self, source: UploadSource, mime_type: Optional[str] = None
    ) -> PartialUserProfile:
        """
        Parse a resume into whatever profile fields it reveals.

        Only a missing API key escapes as an exception. Every other failure
        (unreadable file, API error, empty reply, malformed JSON) is logged and
        yields an empty PartialUserProfile.

        Args:
            source: Path, raw bytes, or binary file-like upload
            mime_type: MIME type of the upload, if known

        Returns:
            PartialUserProfile with the extracted fields populated

        Raises:
            MissingCredentialError: If no API key is configured
        """
        client = self.client_factory(self.settings)

        try:
            file_part = await file_to_generative_part(
                source, mime_type=mime_type, timeout=self.settings.file_read_timeout
            )
            prompt = render_prompt("resume/parse.j2")

            self.logger.info(
                "Requesting resume extraction",
                model=self.settings.model,
                mime_type=file_part.mime_type,
            )
            response = await client.aio.models.generate_content(
                model=self.settings.model,
                contents=[file_part.to_part(), prompt],
                config=structured_output_config(RESUME_RESPONSE_SCHEMA),
            )

            if not response.text:
                self.logger.warning("Resume extraction returned no text")
                return PartialUserProfile()

            extraction = ResumeExtraction.model_validate(json.loads(response.text))
            profile = extraction.to_partial_profile()

            self.logger.info(
                "Resume parsed",
                fields_extracted=sorted(profile.model_dump(exclude_none=True)),
            )
            return profile

        except Exception as e:
            self.logger.error(
                "Error parsing resume", error=str(e), error_type=type(e).__name__
            )
            return PartialUserProfile()


async def parse_resume(
    source: UploadSource,
    settings: Optional[Settings] = None,
    mime_type: Optional[str] = None,
    client_factory: ClientFactory = create_client,
) -> PartialUserProfile:
    """
    Convenience wrapper around ResumeIngestor.ingest.

    Args:
        source: Path, raw bytes, or binary file-like upload
        settings: Runtime settings (read from the environment if None)
        mime_type: MIME type of the upload, if known
        client_factory: Builds the Gemini client from settings

    Returns:
        PartialUserProfile, empty when nothing could be extracted
    """
    ingestor = ResumeIngestor(settings or Settings.from_env(), client_factory)
    return await ingestor.ingest(source, mime_type=mime_type)
