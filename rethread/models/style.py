"""Style ("vibe") catalog."""

from pydantic import BaseModel, ConfigDict

from ..errors import UnknownStyleError


class StyleOption(BaseModel):
    """A named aesthetic preset steering the generated redesign."""

    model_config = ConfigDict(frozen=True)

    id: str
    label: str
    description: str


STYLE_CATALOG: tuple[StyleOption, ...] = (
    StyleOption(id="minimalist", label="Quiet Luxury", description="Sleek, refined, and understated"),
    StyleOption(id="avant-garde", label="Avant-Garde", description="Bold structures and artistic flair"),
    StyleOption(id="boho-chic", label="Boho Chic", description="Flowing shapes and relaxed patterns"),
    StyleOption(id="streetwear", label="Urban Edge", description="Modern, modular, and functional"),
)

DEFAULT_STYLE_ID = "avant-garde"


def list_styles() -> list[StyleOption]:
    """Return the catalog in display order."""
    return list(STYLE_CATALOG)


def get_style(style_id: str) -> StyleOption:
    """Look up a style by id.

    Raises:
        UnknownStyleError: If the id is not in the catalog
    """
    for style in STYLE_CATALOG:
        if style.id == style_id:
            return style
    raise UnknownStyleError(style_id)


def default_style() -> StyleOption:
    return get_style(DEFAULT_STYLE_ID)
