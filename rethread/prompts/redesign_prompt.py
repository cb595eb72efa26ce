"""Redesign instruction template for the image model."""

from ..models import StyleOption, TransformRequest, UploadedGarment


REDESIGN_TEMPLATE = (
    "Redesign this garment into a {style_id} high-fashion masterpiece. "
    "Keep the same fabric texture, color palette, and patterns from the original. "
    "The new design should be an upcycled version that transforms the old silhouette "
    "into a modern, sophisticated {label} style. "
    "Professional fashion photography, white studio background, high detail."
)


def render_instruction(style: StyleOption) -> str:
    """Render the natural-language instruction for a style.

    The text names the target aesthetic, asks the model to keep the
    original fabric, color and pattern, and fixes the output framing.
    """
    return REDESIGN_TEMPLATE.format(style_id=style.id, label=style.label)


def build_transform_request(garment: UploadedGarment, style: StyleOption) -> TransformRequest:
    """Pair the rendered instruction with the encoded garment image."""
    return TransformRequest(
        style_id=style.id,
        instruction=render_instruction(style),
        image_base64=garment.encoded,
        media_type=garment.media_type,
    )
