"""FastAPI server for ReThread.

Each browser session owns one redesign workflow:
- upload a garment photo (multipart file or base64 data URL)
- pick a style ("vibe") and confirm
- review the before/after pair with tailoring tips
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, File, HTTPException, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from rethread import __version__
from rethread.config import RethreadConfig, load_config
from rethread.content import (
    ECO_IMPACT,
    SOURCE_MATERIAL_NOTE,
    EcoImpact,
    TailoringStep,
    tailoring_guide,
)
from rethread.errors import ConfigurationError, UnknownStyleError
from rethread.models import ResultsState, StudioState, StyleOption, list_styles
from rethread.pipeline import WorkflowController
from rethread.services import GeminiClient

from api.sessions import SessionLimitError, SessionRegistry

logger = logging.getLogger(__name__)


_config: RethreadConfig | None = None
_client: GeminiClient | None = None
_sessions: SessionRegistry | None = None


def get_config() -> RethreadConfig:
    """Get or load the service configuration."""
    global _config
    if _config is None:
        _config = load_config()  # Loads from .env automatically via pydantic-settings
    return _config


def get_client() -> GeminiClient:
    """Get or create the shared Gemini client.

    Raises:
        ConfigurationError: If no API key is configured
    """
    global _client
    if _client is None:
        config = get_config()
        _client = GeminiClient(config.gemini, api_key=config.gemini_api_key)
    return _client


def get_sessions() -> SessionRegistry:
    """Get or create the session registry, sized from configuration."""
    global _sessions
    if _sessions is None:
        config = get_config()
        _sessions = SessionRegistry(
            max_sessions=config.max_sessions,
            idle_ttl=config.session_idle_ttl,
        )
    return _sessions


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    if _client is not None:
        await _client.close()


app = FastAPI(
    title="ReThread API",
    description="Upcycle a garment photo into a redesigned piece with generative AI",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class DataUrlUpload(BaseModel):
    """Upload body for a FileReader data URL."""
    image: str  # Base64 data URL (or bare base64)
    filename: str | None = None


class StyleSelection(BaseModel):
    style_id: str


class WorkflowView(BaseModel):
    """Everything the front-end needs to render the current stage."""
    session_id: str
    stage: str
    styles: list[StyleOption]
    selected_style: StyleOption | None = None
    original_preview: str | None = None
    generated_preview: str | None = None
    in_flight: bool = False
    error: str | None = None
    # Results only
    tailoring_guide: list[TailoringStep] | None = None
    eco_impact: EcoImpact | None = None
    source_material: str | None = None


def render_view(session_id: str, controller: WorkflowController) -> WorkflowView:
    """Render the controller's current state."""
    state = controller.state
    view = WorkflowView(
        session_id=session_id,
        stage=state.stage,
        styles=list_styles(),
        error=controller.error,
    )
    if isinstance(state, StudioState):
        view.selected_style = state.style
        view.original_preview = state.garment.preview_url
        view.in_flight = state.in_flight
    elif isinstance(state, ResultsState):
        view.selected_style = state.style
        view.original_preview = state.garment.preview_url
        view.generated_preview = state.image.preview_url
        view.tailoring_guide = tailoring_guide(state.style)
        view.eco_impact = ECO_IMPACT
        view.source_material = SOURCE_MATERIAL_NOTE
    return view


def _get_session(session_id: str) -> WorkflowController:
    controller = get_sessions().get(session_id)
    if controller is None:
        raise HTTPException(status_code=404, detail=f"Unknown session: {session_id}")
    return controller


@app.get("/")
async def root():
    """Health check endpoint."""
    return {"status": "ok", "service": "ReThread API", "version": __version__}


@app.get("/health")
async def health():
    """Detailed health check."""
    configured = bool(get_config().gemini_api_key)
    return {
        "status": "ok" if configured else "degraded",
        "credential": "configured" if configured else "missing",
        "sessions": len(get_sessions()),
    }


@app.get("/api/styles", response_model=list[StyleOption])
async def styles():
    """List the style catalog."""
    return list_styles()


@app.post("/api/sessions", response_model=WorkflowView)
async def create_session():
    """Start a new workflow in the Landing stage."""
    try:
        client = get_client()
    except ConfigurationError as e:
        logger.error(str(e))
        raise HTTPException(status_code=503, detail=str(e))

    controller = WorkflowController(client, upload_config=get_config().upload)
    try:
        session_id = get_sessions().create(controller)
    except SessionLimitError as e:
        logger.warning(str(e))
        raise HTTPException(status_code=503, detail=str(e))
    logger.info(f"Created session {session_id}")
    return render_view(session_id, controller)


@app.get("/api/sessions/{session_id}", response_model=WorkflowView)
async def get_session(session_id: str):
    return render_view(session_id, _get_session(session_id))


@app.delete("/api/sessions/{session_id}")
async def delete_session(session_id: str):
    controller = _get_session(session_id)
    if controller.in_flight:
        raise HTTPException(status_code=409, detail="A transformation is in progress")
    get_sessions().remove(session_id)
    return {"status": "deleted", "session_id": session_id}


@app.post("/api/sessions/{session_id}/upload", response_model=WorkflowView)
async def upload_garment(session_id: str, file: UploadFile = File(...)):
    """Upload a garment photo (Landing → Studio).

    A rejected file leaves the session in Landing with ``error`` set.
    """
    controller = _get_session(session_id)
    data = await file.read()
    controller.upload(data, filename=file.filename)
    return render_view(session_id, controller)


@app.post("/api/sessions/{session_id}/upload-data-url", response_model=WorkflowView)
async def upload_garment_data_url(session_id: str, body: DataUrlUpload):
    """Upload a garment photo as a base64 data URL (Landing → Studio)."""
    controller = _get_session(session_id)
    controller.upload_data_url(body.image, filename=body.filename)
    return render_view(session_id, controller)


@app.post("/api/sessions/{session_id}/style", response_model=WorkflowView)
async def select_style(session_id: str, body: StyleSelection):
    controller = _get_session(session_id)
    try:
        controller.select_style(body.style_id)
    except UnknownStyleError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return render_view(session_id, controller)


@app.post("/api/sessions/{session_id}/transform", response_model=WorkflowView)
async def transform(session_id: str):
    """Run one redesign attempt for the session's garment and style.

    Returns the Results view on success, or the Studio view with ``error``
    set on failure.
    """
    controller = _get_session(session_id)
    if controller.in_flight:
        raise HTTPException(status_code=409, detail="A transformation is already in progress")
    await controller.confirm()
    return render_view(session_id, controller)


@app.post("/api/sessions/{session_id}/cancel", response_model=WorkflowView)
async def cancel(session_id: str):
    controller = _get_session(session_id)
    controller.cancel()
    return render_view(session_id, controller)


@app.post("/api/sessions/{session_id}/try-again", response_model=WorkflowView)
async def try_new_vibe(session_id: str):
    controller = _get_session(session_id)
    controller.try_new_vibe()
    return render_view(session_id, controller)


@app.post("/api/sessions/{session_id}/reset", response_model=WorkflowView)
async def reset(session_id: str):
    controller = _get_session(session_id)
    controller.reset()
    return render_view(session_id, controller)


if __name__ == "__main__":
    import uvicorn
    logging.basicConfig(
        level=get_config().log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run(app, host="0.0.0.0", port=8000)
