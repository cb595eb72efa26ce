"""Upload → redesign → review workflow controller."""

import asyncio
import logging
from typing import Callable

from ..config import UploadConfig
from ..errors import IngestError, TransformError, TRANSFORM_FAILED_MESSAGE
from ..models import (
    LandingState,
    ResultsState,
    StudioState,
    TransformResult,
    UploadedGarment,
    WorkflowState,
    default_style,
    get_style,
)
from ..prompts import build_transform_request
from ..services import GeminiClient
from ..utils import ingest_data_url, ingest_image

logger = logging.getLogger(__name__)


class WorkflowController:
    """State machine for one user's redesign session.

    Flow:
    1. Landing: user uploads a garment photo → Studio
    2. Studio: user picks a style and confirms → one remote call
    3. Results on success, back to Studio with an error on failure

    The controller is the only writer of the workflow state. Every state
    is a frozen model and each transition replaces it wholesale. Actions
    that are not valid from the current stage are ignored and return False.
    While a remote call is outstanding, only its completion may change the
    state.
    """

    def __init__(self, client: GeminiClient, upload_config: UploadConfig | None = None):
        self.client = client
        self.upload_config = upload_config or UploadConfig()
        self._state: WorkflowState = LandingState()

    @property
    def state(self) -> WorkflowState:
        return self._state

    @property
    def stage(self) -> str:
        return self._state.stage

    @property
    def in_flight(self) -> bool:
        return isinstance(self._state, StudioState) and self._state.in_flight

    @property
    def garment(self) -> UploadedGarment | None:
        if isinstance(self._state, (StudioState, ResultsState)):
            return self._state.garment
        return None

    @property
    def error(self) -> str | None:
        if isinstance(self._state, (LandingState, StudioState)):
            return self._state.error
        return None

    @property
    def result(self) -> TransformResult | None:
        """The latest transform outcome, if one is still current."""
        if isinstance(self._state, ResultsState):
            return TransformResult.success(self._state.image)
        if isinstance(self._state, StudioState) and self._state.error:
            return TransformResult.failure(self._state.error)
        return None

    def _transition(self, new_state: WorkflowState) -> None:
        if new_state.stage != self._state.stage:
            logger.info(f"Workflow {self._state.stage} → {new_state.stage}")
        self._state = new_state

    # Landing

    def upload(self, data: bytes | None, filename: str | None = None) -> bool:
        """Accept a garment photo and move Landing → Studio.

        A rejected file keeps the workflow in Landing with the reason in
        ``error`` so the user can pick another file.
        """
        return self._ingest(ingest_image, data, filename)

    def upload_data_url(self, data_url: str, filename: str | None = None) -> bool:
        """Same as upload() for a base64 data URL from the browser."""
        return self._ingest(ingest_data_url, data_url, filename)

    def _ingest(
        self,
        ingest: Callable[..., UploadedGarment],
        payload: bytes | str | None,
        filename: str | None,
    ) -> bool:
        if not isinstance(self._state, LandingState):
            logger.debug(f"Ignoring upload in {self.stage}")
            return False
        try:
            garment = ingest(payload, filename=filename, config=self.upload_config)
        except IngestError as e:
            logger.info(f"Upload rejected: {e}")
            self._transition(LandingState(error=str(e)))
            return False
        self._transition(StudioState(garment=garment, style=default_style()))
        return True

    # Studio

    def select_style(self, style_id: str) -> bool:
        """Change the selected style.

        Raises:
            UnknownStyleError: If the id is not in the catalog
        """
        style = get_style(style_id)
        state = self._state
        if not isinstance(state, StudioState) or state.in_flight:
            logger.debug(f"Ignoring style selection in {self.stage} (in_flight={self.in_flight})")
            return False
        self._transition(state.model_copy(update={"style": style}))
        return True

    async def confirm(self) -> bool:
        """Run one redesign attempt for the current garment and style.

        Returns False without calling the service when there is no garment
        (not in Studio) or an attempt is already in flight. Otherwise makes
        exactly one remote call and returns True once it has resolved,
        whether it succeeded or not.
        """
        state = self._state
        if not isinstance(state, StudioState):
            logger.debug(f"Ignoring transform confirmation in {self.stage}")
            return False
        if state.in_flight:
            logger.info("Transform already in flight; ignoring confirmation")
            return False

        request = build_transform_request(state.garment, state.style)
        # Set before the first await so a second confirm() sees it.
        self._transition(state.model_copy(update={"in_flight": True, "error": None}))

        try:
            image = await self.client.generate_redesign(request)
        except TransformError as e:
            self._transition(state.model_copy(update={"in_flight": False, "error": str(e)}))
            return True
        except Exception:
            logger.exception("Unexpected error during transform")
            self._transition(
                state.model_copy(update={"in_flight": False, "error": TRANSFORM_FAILED_MESSAGE})
            )
            return True
        except asyncio.CancelledError:
            logger.info("Transform cancelled before the service responded")
            self._transition(
                state.model_copy(update={"in_flight": False, "error": TRANSFORM_FAILED_MESSAGE})
            )
            raise

        self._transition(ResultsState(garment=state.garment, style=state.style, image=image))
        return True

    def cancel(self) -> bool:
        """Studio → Landing, discarding the garment and any result."""
        if not isinstance(self._state, StudioState) or self._state.in_flight:
            logger.debug(f"Ignoring cancel in {self.stage} (in_flight={self.in_flight})")
            return False
        self._transition(LandingState())
        return True

    # Results

    def try_new_vibe(self) -> bool:
        """Results → Studio, keeping the garment and style but dropping the result."""
        state = self._state
        if not isinstance(state, ResultsState):
            logger.debug(f"Ignoring try-new-vibe in {self.stage}")
            return False
        self._transition(StudioState(garment=state.garment, style=state.style))
        return True

    # Any stage

    def reset(self) -> bool:
        """Return to Landing from anywhere, discarding all state."""
        if self.in_flight:
            logger.debug("Ignoring reset while a transform is in flight")
            return False
        self._transition(LandingState())
        return True
