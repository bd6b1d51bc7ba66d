import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

from dotenv import load_dotenv
from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse
from loguru import logger
from pydantic import BaseModel

from studio_core.config_manager import AppConfig, ConfigManager
from studio_core.errors import ValidationError
from studio_core.intelligence.analyst import ViralAnalyst
from studio_core.intelligence.client import build_llm_client
from studio_core.studio.controller import StudioController
from studio_core.studio.display import render_analysis
from studio_core.studio.sessions import SessionStore

# Load env vars
load_dotenv()

STATIC_DIR = Path(__file__).resolve().parent / "static"
DEFAULT_CONFIG_PATH = "config/settings.yaml"


# Bridge loguru to standard logging
class InterceptHandler(logging.Handler):
    def emit(self, record):
        # Get corresponding Loguru level if it exists
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Find caller from where originated the logged message
        frame, depth = logging.currentframe(), 2
        while frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
logging.getLogger("uvicorn").handlers = [InterceptHandler()]
logging.getLogger("uvicorn.access").handlers = [InterceptHandler()]


# --- Data Models ---
class TranscriptBody(BaseModel):
    transcript: str


class TopicBody(BaseModel):
    topic: str


class GenerateBody(BaseModel):
    topic: Optional[str] = None


def load_app_config(config_path: Optional[str] = None) -> AppConfig:
    path = config_path or os.getenv("VIRAL_STUDIO_CONFIG", DEFAULT_CONFIG_PATH)
    try:
        return ConfigManager(path).config
    except FileNotFoundError:
        logger.warning(f"No configuration at {path}. Using defaults.")
        return AppConfig()


def session_payload(session_id: str, controller: StudioController) -> Dict[str, Any]:
    state = controller.state
    view = render_analysis(state.analysis).model_dump() if state.analysis else None
    return {
        "session_id": session_id,
        "state": state.model_dump(mode="json", by_alias=True),
        "analysis_view": view,
    }


def create_app(config: Optional[AppConfig] = None, analyst: Optional[ViralAnalyst] = None) -> FastAPI:
    """Builds the app. The LLM client is created once here and shared by every session."""
    config = config or AppConfig()
    if analyst is None:
        analyst = ViralAnalyst(build_llm_client(config.intelligence), config.studio)

    app = FastAPI(title="Viral Studio")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.server.cors_origins,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    sessions = SessionStore(analyst, config.studio)
    app.state.sessions = sessions
    app.state.config = config

    def get_controller(session_id: str) -> StudioController:
        controller = sessions.get(session_id)
        if controller is None:
            raise HTTPException(status_code=404, detail="Session not found.")
        return controller

    @app.get("/")
    def index():
        return FileResponse(STATIC_DIR / "index.html", media_type="text/html")

    @app.get("/health")
    def health_check():
        return {"status": "ok"}

    @app.post("/sessions")
    def create_session():
        session_id, controller = sessions.create()
        logger.info(f"Session created: {session_id}")
        return session_payload(session_id, controller)

    @app.get("/sessions/{session_id}")
    def get_session(session_id: str):
        return session_payload(session_id, get_controller(session_id))

    @app.delete("/sessions/{session_id}")
    def delete_session(session_id: str):
        if not sessions.delete(session_id):
            raise HTTPException(status_code=404, detail="Session not found.")
        return {"status": "deleted"}

    @app.put("/sessions/{session_id}/transcript")
    def update_transcript(session_id: str, body: TranscriptBody):
        controller = get_controller(session_id)
        controller.set_transcript(body.transcript)
        return session_payload(session_id, controller)

    # Blocking handlers run on FastAPI's threadpool, one LLM call each
    @app.post("/sessions/{session_id}/analyze")
    def analyze(session_id: str, body: TranscriptBody):
        controller = get_controller(session_id)
        try:
            controller.request_analysis(body.transcript)
        except ValidationError as e:
            raise HTTPException(status_code=422, detail=str(e)) from e
        return session_payload(session_id, controller)

    @app.put("/sessions/{session_id}/topic")
    def update_topic(session_id: str, body: TopicBody):
        controller = get_controller(session_id)
        controller.set_topic(body.topic)
        return session_payload(session_id, controller)

    @app.post("/sessions/{session_id}/topics/{index}")
    def select_topic(session_id: str, index: int):
        controller = get_controller(session_id)
        try:
            controller.select_topic(index)
        except ValidationError as e:
            raise HTTPException(status_code=422, detail=str(e)) from e
        return session_payload(session_id, controller)

    @app.post("/sessions/{session_id}/generate")
    def generate(session_id: str, body: GenerateBody):
        controller = get_controller(session_id)
        controller.request_generation(topic=body.topic)
        return session_payload(session_id, controller)

    return app


app_config = load_app_config()
app = create_app(app_config)


def serve(host: Optional[str] = None, port: Optional[int] = None) -> None:
    import uvicorn

    uvicorn.run(app, host=host or app_config.server.host, port=port or app_config.server.port)


if __name__ == "__main__":
    serve()
