"""Helpers for the ReThread workflow."""

from .image_ingest import decode_data_url, detect_media_type, ingest_data_url, ingest_image

__all__ = [
    "decode_data_url",
    "detect_media_type",
    "ingest_data_url",
    "ingest_image",
]
