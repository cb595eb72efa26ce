"""Gemini generateContent client for garment redesigns."""

import logging
from typing import Any

import httpx

from ..config import GeminiConfig
from ..errors import ConfigurationError, TransformError
from ..models import GeneratedImage, TransformRequest

logger = logging.getLogger(__name__)


def extract_first_image(body: Any) -> GeneratedImage | None:
    """Find the first inline image part in a generateContent response.

    Only the first candidate is inspected. Both the REST (camelCase) and
    Python SDK (snake_case) spellings of the inline data key are accepted.
    """
    if not isinstance(body, dict):
        return None
    candidates = body.get("candidates")
    if not isinstance(candidates, list) or not candidates or not isinstance(candidates[0], dict):
        return None
    content = candidates[0].get("content")
    parts = content.get("parts") if isinstance(content, dict) else None
    if not isinstance(parts, list):
        return None
    for part in parts:
        if not isinstance(part, dict):
            continue
        inline_data = part.get("inlineData") or part.get("inline_data")
        if not isinstance(inline_data, dict):
            continue
        data = inline_data.get("data")
        if isinstance(data, str) and data:
            media_type = inline_data.get("mimeType") or inline_data.get("mime_type")
            if not isinstance(media_type, str) or not media_type:
                media_type = "image/png"
            return GeneratedImage(data=data, media_type=media_type)
    return None


def _describe_missing_image(body: Any) -> str:
    """Summarise why a response had no image, for the log only."""
    if not isinstance(body, dict):
        return f"unexpected body type {type(body).__name__}"
    if "error" in body:
        error = body["error"]
        if not isinstance(error, dict):
            return f"error: {str(error)[:200]}"
        return f"error {error.get('code')}: {str(error.get('message', ''))[:200]}"
    feedback = body.get("promptFeedback")
    if isinstance(feedback, dict) and feedback.get("blockReason"):
        return f"prompt blocked: {feedback['blockReason']}"
    candidates = body.get("candidates")
    if not isinstance(candidates, list) or not candidates:
        return "no candidates"
    first = candidates[0]
    finish_reason = first.get("finishReason") if isinstance(first, dict) else None
    return f"no image part (finishReason={finish_reason})"


class GeminiClient:
    """Client for the Gemini image-generation REST API."""

    def __init__(
        self,
        config: GeminiConfig,
        api_key: str | None,
        http_client: httpx.AsyncClient | None = None,
    ):
        if not api_key:
            raise ConfigurationError(
                "No Gemini API key configured. Set GEMINI_API_KEY in the environment or .env file."
            )
        self.config = config
        self._api_key = api_key
        self._client = http_client

    @property
    def client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(timeout=self.config.timeout)
        return self._client

    def _build_payload(self, request: TransformRequest) -> dict[str, Any]:
        """Build the generateContent body: instruction text plus inline image."""
        return {
            "contents": [
                {
                    "parts": [
                        {"text": request.instruction},
                        {
                            "inlineData": {
                                "mimeType": request.media_type,
                                "data": request.image_base64,
                            }
                        },
                    ]
                }
            ],
            "generationConfig": {
                "responseModalities": ["TEXT", "IMAGE"],
            },
        }

    async def generate_redesign(self, request: TransformRequest) -> GeneratedImage:
        """Send one transform request and return the generated image.

        Args:
            request: Instruction and encoded garment image

        Returns:
            The first image found in the response

        Raises:
            TransformError: For any failure (transport, HTTP status,
                malformed body, or no image in the response)
        """
        logger.info(f"Requesting {request.style_id} redesign from {self.config.model}")

        try:
            response = await self.client.post(
                self.config.endpoint,
                json=self._build_payload(request),
                headers={
                    "Content-Type": "application/json",
                    "x-goog-api-key": self._api_key,
                },
            )
        except httpx.HTTPError as e:
            logger.warning(f"Transform request did not complete: {type(e).__name__}: {e}")
            raise TransformError() from e

        try:
            body = response.json()
        except ValueError as e:
            logger.warning(
                f"Transform response was not JSON (HTTP {response.status_code}): {response.text[:200]}"
            )
            raise TransformError() from e

        if not response.is_success:
            logger.warning(
                f"Transform service returned HTTP {response.status_code}: {_describe_missing_image(body)}"
            )
            raise TransformError()

        image = extract_first_image(body)
        if image is None:
            logger.warning(f"Transform response contained no image: {_describe_missing_image(body)}")
            raise TransformError()

        logger.info(f"Received generated image ({image.media_type}, {len(image.data)} base64 chars)")
        return image

    async def close(self):
        """Close the HTTP client."""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
            self._client = None
