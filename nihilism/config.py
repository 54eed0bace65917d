"""Service settings, read from the environment (and `.env` at the repo root)."""

import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel

from nihilism.llm import ProviderFormat
from nihilism.storage import AutoSave

ROOT = Path(__file__).parent.parent
DEFAULT_DATA_DIR = ROOT / "data"


class Settings(BaseModel):
    host: str = "0.0.0.0"
    port: int = 3001
    data_dir: Path = DEFAULT_DATA_DIR
    llm_base_url: str = "http://localhost:8080/v1"
    llm_api_key: str = "sk-none"
    llm_model: str = "gpt-4"
    llm_format: ProviderFormat = "openai"
    autosave: AutoSave = AutoSave()
    log_level: str = "INFO"


def _flag(value: str) -> bool:
    return value.strip().lower() not in ("0", "false", "no", "off", "")


def load_settings(env_file: Path | None = None) -> Settings:
    """Build Settings from environment variables; unset ones keep defaults."""
    load_dotenv(env_file or ROOT / ".env")

    fields: dict = {}
    for key, name in (
        ("host", "HOST"),
        ("port", "PORT"),
        ("data_dir", "DATA_DIR"),
        ("llm_base_url", "LLM_BASE_URL"),
        ("llm_api_key", "LLM_API_KEY"),
        ("llm_model", "LLM_MODEL"),
        ("llm_format", "LLM_FORMAT"),
        ("log_level", "LOG_LEVEL"),
    ):
        value = os.getenv(name)
        if value:
            fields[key] = value

    autosave: dict = {}
    if os.getenv("AUTOSAVE_ENABLED") is not None:
        autosave["enabled"] = _flag(os.environ["AUTOSAVE_ENABLED"])
    if os.getenv("AUTOSAVE_INTERVAL"):
        autosave["interval_choices"] = os.environ["AUTOSAVE_INTERVAL"]
    fields["autosave"] = AutoSave(**autosave)

    return Settings(**fields)
