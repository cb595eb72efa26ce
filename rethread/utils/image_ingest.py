"""Turn an uploaded file into an UploadedGarment."""

import base64
import binascii
import io
import logging

from PIL import Image, UnidentifiedImageError

from ..config import UploadConfig
from ..errors import IngestError
from ..models import UploadedGarment

logger = logging.getLogger(__name__)


def detect_media_type(data: bytes) -> str | None:
    """Identify the image format and return its media type.

    Uses Pillow to open and verify the payload so truncated or non-image
    data is rejected rather than guessed from the extension.
    """
    try:
        with Image.open(io.BytesIO(data)) as img:
            fmt = img.format
            img.verify()
    except (UnidentifiedImageError, OSError, SyntaxError, ValueError) as e:
        logger.debug(f"Pillow could not read upload: {e}")
        return None
    if fmt is None:
        return None
    return Image.MIME.get(fmt)


def ingest_image(
    data: bytes | None,
    filename: str | None = None,
    config: UploadConfig | None = None,
) -> UploadedGarment:
    """Validate image bytes and derive the transport encoding and preview.

    Args:
        data: Raw file contents as supplied by the user
        filename: Optional original filename (kept for display only)
        config: Upload limits (defaults to UploadConfig())

    Returns:
        UploadedGarment with base64 payload and data-URL preview

    Raises:
        IngestError: If no file was provided, it is too large, or it is
            not an accepted image type
    """
    config = config or UploadConfig()

    if not data:
        raise IngestError("No file was provided. Please choose a garment photo.")

    if len(data) > config.max_upload_bytes:
        limit_mb = config.max_upload_bytes / (1024 * 1024)
        raise IngestError(f"That file is too large. Please upload an image under {limit_mb:.0f} MB.")

    media_type = detect_media_type(data)
    if media_type is None:
        raise IngestError("That file doesn't look like an image. Please upload a photo of your garment.")
    if media_type not in config.allowed_media_types:
        allowed = ", ".join(t.split("/", 1)[1].upper() for t in config.allowed_media_types)
        raise IngestError(f"Unsupported image type ({media_type}). Please upload one of: {allowed}.")

    encoded = base64.b64encode(data).decode("utf-8")
    logger.info(f"Ingested garment {filename or '<unnamed>'}: {media_type}, {len(data)} bytes")

    return UploadedGarment(
        data=data,
        media_type=media_type,
        encoded=encoded,
        preview_url=f"data:{media_type};base64,{encoded}",
        filename=filename,
    )


def decode_data_url(value: str) -> bytes:
    """Decode a base64 data URL (``data:image/png;base64,...``) or bare base64.

    Raises:
        IngestError: If the payload is not valid base64
    """
    if value.startswith("data:"):
        # Remove data URL prefix (e.g., "data:image/png;base64,")
        if "," not in value:
            raise IngestError("The uploaded image data is malformed.")
        _, value = value.split(",", 1)
    try:
        return base64.b64decode(value, validate=True)
    except (binascii.Error, ValueError) as e:
        raise IngestError("The uploaded image data is malformed.") from e


def ingest_data_url(
    value: str,
    filename: str | None = None,
    config: UploadConfig | None = None,
) -> UploadedGarment:
    """Ingest browser FileReader output (a data URL) or raw base64."""
    return ingest_image(decode_data_url(value.strip()), filename=filename, config=config)
