"""Data models for the ReThread workflow."""

from .garment import UploadedGarment
from .style import StyleOption, STYLE_CATALOG, DEFAULT_STYLE_ID, default_style, get_style, list_styles
from .transform import TransformRequest, GeneratedImage, TransformResult
from .workflow import LandingState, StudioState, ResultsState, WorkflowState

__all__ = [
    "UploadedGarment",
    "StyleOption",
    "STYLE_CATALOG",
    "DEFAULT_STYLE_ID",
    "default_style",
    "get_style",
    "list_styles",
    "TransformRequest",
    "GeneratedImage",
    "TransformResult",
    "LandingState",
    "StudioState",
    "ResultsState",
    "WorkflowState",
]
