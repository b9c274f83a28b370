from fastapi import HTTPException, Depends
from fastapi.requests import HTTPConnection

from ..config import settings

from .dispatcher import QueryDispatcher

# Port interfaces
from ..core.ports.embedding_service import EmbeddingService
from ..core.ports.vector_store import HotelVectorStore
from ..core.ports.llm_service import LLMService

# Use-case classes
from ..core.use_cases.constraint_extraction import ConstraintExtractor
from ..core.use_cases.intent_classification import IntentRouter
from ..core.use_cases.result_presentation import ResultPresenter
from ..core.use_cases.search_hotels import SearchHotelsUseCase
from ..core.use_cases.chat_interaction import ChatInteractionUseCase


# Dependency provider functions. They take an HTTPConnection so the same
# providers serve HTTP routes and the WebSocket route.
def get_embedding_service(connection: HTTPConnection) -> EmbeddingService:
    embedder = getattr(connection.app.state, "embedding_service", None)
    if embedder is None:
        raise HTTPException(status_code=500, detail="EmbeddingService not initialized")
    return embedder


def get_fallback_embedding_service(connection: HTTPConnection) -> EmbeddingService:
    embedder = getattr(connection.app.state, "fallback_embedding_service", None)
    if embedder is None:
        raise HTTPException(status_code=500, detail="Fallback EmbeddingService not initialized")
    return embedder


def get_llm_service(connection: HTTPConnection) -> LLMService:
    llm = getattr(connection.app.state, "llm_service", None)
    if llm is None:
        raise HTTPException(status_code=500, detail="LLMService not initialized")
    return llm


def get_vector_store(connection: HTTPConnection) -> HotelVectorStore:
    vs = getattr(connection.app.state, "vector_store", None)
    if vs is None:
        raise HTTPException(status_code=500, detail="HotelVectorStore not initialized")
    return vs


def get_intent_router() -> IntentRouter:
    return IntentRouter()


def get_constraint_extractor() -> ConstraintExtractor:
    return ConstraintExtractor()


def get_result_presenter() -> ResultPresenter:
    return ResultPresenter()


def get_search_hotels_use_case(
        embedding_service: EmbeddingService = Depends(get_embedding_service),
        fallback_embedding_service: EmbeddingService = Depends(get_fallback_embedding_service),
        vector_store: HotelVectorStore = Depends(get_vector_store),
        constraint_extractor: ConstraintExtractor = Depends(get_constraint_extractor),
) -> SearchHotelsUseCase:
    return SearchHotelsUseCase(
        embedding_service=embedding_service,
        fallback_embedding_service=fallback_embedding_service,
        vector_store=vector_store,
        constraint_extractor=constraint_extractor,
        top_k=settings.SEARCH_TOP_K,
        embedding_timeout=settings.EMBEDDING_TIMEOUT,
        search_timeout=settings.SEARCH_TIMEOUT,
    )


def get_chat_interaction_use_case(
        intent_router: IntentRouter = Depends(get_intent_router),
        search_use_case: SearchHotelsUseCase = Depends(get_search_hotels_use_case),
        presenter: ResultPresenter = Depends(get_result_presenter),
        llm_service: LLMService = Depends(get_llm_service),
) -> ChatInteractionUseCase:
    return ChatInteractionUseCase(
        intent_router=intent_router,
        search_use_case=search_use_case,
        presenter=presenter,
        llm_service=llm_service,
    )


def get_query_dispatcher(
        chat_use_case: ChatInteractionUseCase = Depends(get_chat_interaction_use_case),
) -> QueryDispatcher:
    return QueryDispatcher(chat_use_case, message_delay_ms=settings.MESSAGE_DELAY_MS)
