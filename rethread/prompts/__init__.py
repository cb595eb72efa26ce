"""Prompt construction for the redesign model."""

from .redesign_prompt import REDESIGN_TEMPLATE, build_transform_request, render_instruction

__all__ = [
    "REDESIGN_TEMPLATE",
    "build_transform_request",
    "render_instruction",
]
