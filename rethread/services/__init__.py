"""External services."""

from .gemini_client import GeminiClient, extract_first_image

__all__ = ["GeminiClient", "extract_first_image"]
