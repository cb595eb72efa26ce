"""Static copy shown alongside a finished redesign."""

from pydantic import BaseModel

from .models import StyleOption


class TailoringStep(BaseModel):
    number: int
    title: str
    detail: str


class EcoImpact(BaseModel):
    carbon_saved_kg: float
    carbon_label: str
    water_saved_label: str
    why_upcycle: str


SOURCE_MATERIAL_NOTE = "Maintained fabric integrity and color palette."

ECO_IMPACT = EcoImpact(
    carbon_saved_kg=12.4,
    carbon_label="Carbon Footprint Saved",
    water_saved_label="2.5K L",
    why_upcycle="Redesigning a single dress saves approximately 2,500 liters of water compared to buying new.",
)


def tailoring_guide(style: StyleOption) -> list[TailoringStep]:
    """Three tailoring steps for turning the garment into the redesign."""
    return [
        TailoringStep(
            number=1,
            title="Deconstruct Seams",
            detail="Carefully separate the side panels while preserving the fabric grain.",
        ),
        TailoringStep(
            number=2,
            title="Re-Draping",
            detail=f"Apply the new bias cut as shown in the AI silhouette for the {style.id} effect.",
        ),
        TailoringStep(
            number=3,
            title="Finishing",
            detail="Use invisible stitching on the hems to maintain the luxury finish.",
        ),
    ]
