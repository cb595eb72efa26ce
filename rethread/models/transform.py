"""Transform request and result models."""

from pydantic import BaseModel, ConfigDict, Field, model_validator


class TransformRequest(BaseModel):
    """One redesign attempt: instruction text paired with the encoded garment."""

    model_config = ConfigDict(frozen=True)

    style_id: str
    instruction: str
    image_base64: str = Field(repr=False)
    media_type: str


class GeneratedImage(BaseModel):
    """Image returned by the generation service."""

    model_config = ConfigDict(frozen=True)

    data: str = Field(repr=False, description="Base64 image data")
    media_type: str = "image/png"

    @property
    def preview_url(self) -> str:
        return f"data:{self.media_type};base64,{self.data}"


class TransformResult(BaseModel):
    """Outcome of a transform attempt: an image or an error message, never both."""

    model_config = ConfigDict(frozen=True)

    image: GeneratedImage | None = None
    error: str | None = None

    @model_validator(mode="after")
    def _exactly_one(self) -> "TransformResult":
        if (self.image is None) == (self.error is None):
            raise ValueError("TransformResult needs exactly one of image or error")
        return self

    @property
    def succeeded(self) -> bool:
        return self.image is not None

    @classmethod
    def success(cls, image: GeneratedImage) -> "TransformResult":
        return cls(image=image)

    @classmethod
    def failure(cls, error: str) -> "TransformResult":
        return cls(error=error)
