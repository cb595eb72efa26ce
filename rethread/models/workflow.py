"""Workflow state models.

The workflow is a tagged union keyed by ``stage``. Each stage carries only
the data that is valid in it, so a Results state cannot exist without a
generated image and a Studio state cannot exist without a garment.
"""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from .garment import UploadedGarment
from .style import StyleOption
from .transform import GeneratedImage


class LandingState(BaseModel):
    """Nothing uploaded yet. ``error`` holds the last rejected upload, if any."""

    model_config = ConfigDict(frozen=True)

    stage: Literal["landing"] = "landing"
    error: str | None = None


class StudioState(BaseModel):
    """A garment is uploaded; the user picks a style and confirms."""

    model_config = ConfigDict(frozen=True)

    stage: Literal["studio"] = "studio"
    garment: UploadedGarment
    style: StyleOption
    in_flight: bool = False
    error: str | None = None


class ResultsState(BaseModel):
    """A redesign was generated for the garment."""

    model_config = ConfigDict(frozen=True)

    stage: Literal["results"] = "results"
    garment: UploadedGarment
    style: StyleOption
    image: GeneratedImage


WorkflowState = Annotated[
    Union[LandingState, StudioState, ResultsState],
    Field(discriminator="stage"),
]
