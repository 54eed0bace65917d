"""Runtime state shared by the route handlers: settings, storage, registry, LLM."""

from nihilism.config import Settings
from nihilism.llm import LLM, HttpLLM
from nihilism.registry import PlayerRegistry
from nihilism.storage import Storage

_settings: Settings | None = None
_storage: Storage | None = None
_registry: PlayerRegistry | None = None
_llm: LLM | None = None


def init_state(settings: Settings, llm: LLM | None = None) -> None:
    """(Re)initialise runtime state. Drops every in-memory player."""
    global _settings, _storage, _registry, _llm
    _settings = settings
    _storage = Storage(settings.data_dir)
    _registry = PlayerRegistry()
    _llm = llm or HttpLLM(
        provider_url=settings.llm_base_url,
        api_key=settings.llm_api_key,
        provider_format=settings.llm_format,
        model=settings.llm_model,
    )


def settings() -> Settings:
    assert _settings is not None, "Call init_state() before handling requests"
    return _settings


def storage() -> Storage:
    assert _storage is not None, "Call init_state() before handling requests"
    return _storage


def registry() -> PlayerRegistry:
    assert _registry is not None, "Call init_state() before handling requests"
    return _registry


def llm() -> LLM:
    assert _llm is not None, "Call init_state() before handling requests"
    return _llm
