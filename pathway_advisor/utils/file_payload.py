"""
File Payload Module

Converts an uploaded resume into an inline payload the model can read.

Example Usage:
    from pathway_advisor.utils.file_payload import file_to_generative_part

    part = await file_to_generative_part(Path("resume.pdf"), timeout=10)
    part.mime_type  # "application/pdf"
"""

import asyncio
import base64
import mimetypes
from pathlib import Path
from typing import BinaryIO, Optional, Union

import structlog
from google.genai import types
from pydantic import BaseModel

logger = structlog.get_logger(__name__)

DEFAULT_MIME_TYPE = "application/octet-stream"

UploadSource = Union[str, Path, bytes, BinaryIO]


class FilePayloadError(Exception):
    """Raised when an upload cannot be read into a payload."""


class GenerativePart(BaseModel):
    """Base64 file content paired with its MIME type."""

    data: str
    mime_type: str

    def to_part(self) -> types.Part:
        """Convert to the SDK's inline-data part."""
        return types.Part.from_bytes(
            data=base64.b64decode(self.data), mime_type=self.mime_type
        )


def resolve_mime_type(source: UploadSource, mime_type: Optional[str] = None) -> str:
    """
    Determine the MIME type of an upload.

    Order: explicit argument, the object's ``content_type`` or ``mime_type``
    attribute (web framework upload objects), a guess from its file name,
    then application/octet-stream.

    Args:
        source: Path, raw bytes, or binary file-like object
        mime_type: Explicit MIME type, if the caller knows it

    Returns:
        MIME type string
    """
    if mime_type:
        return mime_type

    for attr in ("content_type", "mime_type"):
        declared = getattr(source, attr, None)
        if isinstance(declared, str) and declared:
            return declared

    if isinstance(source, (str, Path)):
        name: Optional[str] = str(source)
    else:
        name = getattr(source, "filename", None) or getattr(source, "name", None)

    if isinstance(name, str):
        guessed, _ = mimetypes.guess_type(name)
        if guessed:
            return guessed

    return DEFAULT_MIME_TYPE


def _read_bytes(source: UploadSource) -> bytes:
    """Blocking read of the whole upload."""
    if isinstance(source, bytes):
        return source
    if isinstance(source, (str, Path)):
        return Path(source).read_bytes()

    stream = getattr(source, "file", source)  # Starlette UploadFile wraps a file
    if getattr(stream, "seekable", lambda: False)():
        stream.seek(0)
    data = stream.read()
    if not isinstance(data, bytes):
        raise TypeError(f"Expected a binary stream, got {type(data).__name__}")
    return data


async def file_to_generative_part(
    source: UploadSource,
    mime_type: Optional[str] = None,
    timeout: Optional[float] = 30.0,
) -> GenerativePart:
    """
    Read an upload and encode it as a base64 inline payload.

    The read runs in a worker thread and is bounded by ``timeout``.

    Args:
        source: Path, raw bytes, or binary file-like object
        mime_type: Explicit MIME type (resolved from the source when omitted)
        timeout: Seconds allowed for the read; None waits indefinitely

    Returns:
        GenerativePart with base64 data and MIME type

    Raises:
        FilePayloadError: If the read fails or exceeds the timeout
    """
    resolved_type = resolve_mime_type(source, mime_type)

    try:
        raw = await asyncio.wait_for(asyncio.to_thread(_read_bytes, source), timeout)
    except asyncio.TimeoutError as e:
        logger.error("file_read_timed_out", timeout=timeout, mime_type=resolved_type)
        raise FilePayloadError(f"Reading upload timed out after {timeout}s") from e
    except (OSError, TypeError, ValueError) as e:
        logger.error("file_read_failed", error=str(e), mime_type=resolved_type)
        raise FilePayloadError(f"Could not read upload: {e}") from e

    logger.debug("file_encoded", size_bytes=len(raw), mime_type=resolved_type)
    return GenerativePart(
        data=base64.b64encode(raw).decode("ascii"), mime_type=resolved_type
    )
