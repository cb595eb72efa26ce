# Test fixtures and configuration
import base64
import io
import sys
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest
from PIL import Image

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from rethread.models import GeneratedImage, get_style  # noqa: E402
from rethread.utils import ingest_image  # noqa: E402


def _image_bytes(fmt: str, color: str = "red", size=(4, 4)) -> bytes:
    output = io.BytesIO()
    Image.new("RGB", size, color).save(output, format=fmt)
    return output.getvalue()


@pytest.fixture
def png_bytes():
    """Small valid PNG image bytes (the uploaded garment X)."""
    return _image_bytes("PNG")


@pytest.fixture
def jpeg_bytes():
    return _image_bytes("JPEG", color="navy")


@pytest.fixture
def generated_png_base64():
    """Base64 of a different PNG (the generated redesign Y)."""
    return base64.b64encode(_image_bytes("PNG", color="green", size=(8, 8))).decode()


@pytest.fixture
def garment(png_bytes):
    return ingest_image(png_bytes, filename="silk_dress.png")


@pytest.fixture
def avant_garde():
    return get_style("avant-garde")


@pytest.fixture
def gemini_image_body(generated_png_base64):
    """generateContent response with a text part followed by an image part."""
    return {
        "candidates": [
            {
                "content": {
                    "role": "model",
                    "parts": [
                        {"text": "Here is your redesigned garment."},
                        {"inlineData": {"mimeType": "image/png", "data": generated_png_base64}},
                    ],
                },
                "finishReason": "STOP",
            }
        ]
    }


@pytest.fixture
def gemini_text_only_body():
    """generateContent response with no image part (e.g. a refusal)."""
    return {
        "candidates": [
            {
                "content": {
                    "role": "model",
                    "parts": [{"text": "I can't help with that image."}],
                },
                "finishReason": "STOP",
            }
        ]
    }


@pytest.fixture
def fake_client(generated_png_base64):
    """Stand-in for GeminiClient that returns image Y."""
    client = MagicMock()
    client.generate_redesign = AsyncMock(
        return_value=GeneratedImage(data=generated_png_base64, media_type="image/png")
    )
    client.close = AsyncMock()
    return client
