from functools import lru_cache
import logging

from routine_builder.application.ports.catalog import CatalogProviderPort
from routine_builder.application.ports.chat_relay import ChatRelayPort
from routine_builder.application.ports.llm import ChatCompletionPort
from routine_builder.application.ports.renderer import SessionRendererPort
from routine_builder.application.use_cases.relay_chat import RelayChatUseCase
from routine_builder.application.use_cases.routine_session import RoutineSession
from routine_builder.core.config import settings
from routine_builder.infrastructure.catalog.json_catalog import HttpCatalog, JsonFileCatalog
from routine_builder.infrastructure.llm.mock_upstream import MockUpstream
from routine_builder.infrastructure.llm.openai_upstream import OpenAIUpstream
from routine_builder.infrastructure.relay.http_relay_client import HttpChatRelayClient
from routine_builder.infrastructure.relay.in_process_relay import InProcessChatRelay
from routine_builder.infrastructure.store.json_store import JsonKeyValueStore


logger = logging.getLogger(__name__)


@lru_cache
def get_upstream() -> ChatCompletionPort:
    if settings.OPENAI_API_KEY and settings.OPENAI_API_KEY.strip():
        return OpenAIUpstream(api_key=settings.OPENAI_API_KEY, base_url=settings.OPENAI_BASE_URL)
    if settings.ENV.lower() in {"dev", "local"}:
        logger.info("Using MockUpstream (OPENAI_API_KEY missing, ENV=dev/local)")
        return MockUpstream()
    raise ValueError("OPENAI_API_KEY is required to relay chat requests.")


@lru_cache
def get_relay_use_case() -> RelayChatUseCase:
    return RelayChatUseCase(
        upstream=get_upstream(),
        default_model=settings.OPENAI_MODEL_DEFAULT,
        web_search_model=settings.OPENAI_MODEL_WEB_SEARCH,
        temperature=settings.OPENAI_TEMPERATURE,
        top_p=settings.OPENAI_TOP_P,
        web_search_max_results=settings.WEB_SEARCH_MAX_RESULTS,
    )


def get_catalog_provider() -> CatalogProviderPort:
    source = settings.CATALOG_SOURCE
    if source.startswith(("http://", "https://")):
        return HttpCatalog(url=source)
    return JsonFileCatalog(path=source)


def get_chat_relay() -> ChatRelayPort:
    if settings.RELAY_URL.strip():
        return HttpChatRelayClient(relay_url=settings.RELAY_URL, timeout=settings.RELAY_TIMEOUT_SECONDS)
    logger.info("RELAY_URL not set; relaying in-process")
    return InProcessChatRelay(use_case=get_relay_use_case())


def get_routine_session(renderer: SessionRendererPort | None = None) -> RoutineSession:
    return RoutineSession(
        catalog=get_catalog_provider(),
        store=JsonKeyValueStore(path=settings.SELECTION_STORE_PATH),
        relay=get_chat_relay(),
        renderer=renderer,
        persona=settings.ADVISOR_PERSONA,
        storage_key=settings.SELECTION_STORAGE_KEY,
    )
