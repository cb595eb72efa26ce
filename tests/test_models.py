"""Unit tests for style catalog and workflow state models."""

import pytest
from pydantic import TypeAdapter, ValidationError

from rethread.errors import UnknownStyleError
from rethread.models import (
    DEFAULT_STYLE_ID,
    GeneratedImage,
    LandingState,
    ResultsState,
    StudioState,
    TransformResult,
    WorkflowState,
    default_style,
    get_style,
    list_styles,
)


class TestStyleCatalog:
    """Tests for the fixed style catalog."""

    def test_catalog_ids(self):
        """Catalog ids are in display order."""
        assert [s.id for s in list_styles()] == ["minimalist", "avant-garde", "boho-chic", "streetwear"]

    def test_labels(self):
        assert get_style("minimalist").label == "Quiet Luxury"
        assert get_style("streetwear").label == "Urban Edge"

    def test_default_is_avant_garde(self):
        assert DEFAULT_STYLE_ID == "avant-garde"
        assert default_style().label == "Avant-Garde"

    def test_unknown_style(self):
        """Unknown ids raise UnknownStyleError."""
        with pytest.raises(UnknownStyleError) as exc_info:
            get_style("grunge")

        assert exc_info.value.style_id == "grunge"
        assert isinstance(exc_info.value, ValueError)

    def test_list_is_a_copy(self):
        styles = list_styles()
        styles.clear()

        assert len(list_styles()) == 4


class TestTransformResult:
    """Tests for the success/failure result model."""

    def test_success(self):
        result = TransformResult.success(GeneratedImage(data="abc"))

        assert result.succeeded
        assert result.error is None

    def test_failure(self):
        result = TransformResult.failure("Transformation failed. Please try again.")

        assert not result.succeeded
        assert result.image is None

    def test_needs_exactly_one(self):
        """A result holds an image or an error, never both or neither."""
        with pytest.raises(ValidationError):
            TransformResult()
        with pytest.raises(ValidationError):
            TransformResult(image=GeneratedImage(data="abc"), error="boom")


class TestWorkflowStates:
    """Tests for the tagged-union workflow states."""

    def test_results_requires_image(self, garment, avant_garde):
        """Results cannot be built without a generated image."""
        with pytest.raises(ValidationError):
            ResultsState(garment=garment, style=avant_garde)

    def test_studio_requires_garment(self, avant_garde):
        with pytest.raises(ValidationError):
            StudioState(style=avant_garde)

    def test_discriminated_by_stage(self, garment, avant_garde):
        """The stage field selects the state model."""
        adapter = TypeAdapter(WorkflowState)

        state = adapter.validate_python(
            {"stage": "studio", "garment": garment, "style": avant_garde}
        )

        assert isinstance(state, StudioState)
        assert isinstance(adapter.validate_python({"stage": "landing"}), LandingState)

    def test_generated_preview_url(self):
        image = GeneratedImage(data="abc", media_type="image/jpeg")

        assert image.preview_url == "data:image/jpeg;base64,abc"
