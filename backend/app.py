import logging
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from backend import state
from backend.routes import router
from nihilism.config import Settings, load_settings
from nihilism.llm import LLM

logger = logging.getLogger(__name__)


def create_app(
    data_dir: Path | None = None,
    settings: Settings | None = None,
    llm: LLM | None = None,
) -> FastAPI:
    resolved = settings or load_settings()
    if data_dir is not None:
        resolved = resolved.model_copy(update={"data_dir": data_dir})
    state.init_state(resolved, llm=llm)
    logger.info("Starting Nihilism game server, data dir %s", resolved.data_dir)
    logger.info("LLM API base URL: %s", resolved.llm_base_url)

    app = FastAPI(title="Nihilism")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.include_router(router, prefix="/api")
    return app


# Default app instance for uvicorn (uses DATA_DIR env var or default)
app = create_app()
