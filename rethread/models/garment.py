"""Uploaded garment model."""

from pydantic import BaseModel, ConfigDict, Field


class UploadedGarment(BaseModel):
    """A garment photo accepted from the user.

    Holds the raw bytes plus the two derived artifacts the workflow needs:
    the base64 transport encoding sent to the model, and a data URL the
    front-end can display as the "before" image.
    """

    model_config = ConfigDict(frozen=True)

    data: bytes = Field(repr=False)
    media_type: str = Field(description="e.g., 'image/png', 'image/jpeg'")
    encoded: str = Field(repr=False, description="Base64 of `data`, no data-URL prefix")
    preview_url: str = Field(repr=False, description="data:<media_type>;base64,<encoded>")
    filename: str | None = None

    @property
    def size(self) -> int:
        return len(self.data)
