"""
Test dependency injection configuration.

This test ensures that dependency provider functions in app/api/deps.py
correctly instantiate use cases with the right parameters.

This prevents issues like:
- Passing wrong parameters to use case constructors
- Missing required dependencies
- Providers that only work for HTTP and break the WebSocket route
"""
import inspect
import pytest
from unittest.mock import Mock, AsyncMock
from fastapi import HTTPException
from fastapi.requests import HTTPConnection

from app.api.deps import (
    get_chat_interaction_use_case,
    get_embedding_service,
    get_fallback_embedding_service,
    get_llm_service,
    get_query_dispatcher,
    get_search_hotels_use_case,
    get_vector_store,
)
from app.api.dispatcher import QueryDispatcher
from app.config import settings
from app.core.use_cases.chat_interaction import ChatInteractionUseCase
from app.core.use_cases.constraint_extraction import ConstraintExtractor
from app.core.use_cases.intent_classification import IntentRouter
from app.core.use_cases.result_presentation import ResultPresenter
from app.core.use_cases.search_hotels import SearchHotelsUseCase


def create_mock_connection(**state_overrides):
    """Create a mock connection with app.state attributes."""
    connection = Mock(spec=HTTPConnection)
    connection.app = Mock()
    connection.app.state = Mock()

    defaults = {
        "embedding_service": AsyncMock(),
        "fallback_embedding_service": AsyncMock(),
        "llm_service": AsyncMock(),
        "vector_store": AsyncMock(),
    }
    defaults.update(state_overrides)

    for key, value in defaults.items():
        setattr(connection.app.state, key, value)

    return connection


class TestStateProviders:

    @pytest.mark.parametrize("provider,attribute", [
        (get_embedding_service, "embedding_service"),
        (get_fallback_embedding_service, "fallback_embedding_service"),
        (get_llm_service, "llm_service"),
        (get_vector_store, "vector_store"),
    ])
    def test_returns_state_singleton(self, provider, attribute):
        connection = create_mock_connection()

        assert provider(connection) is getattr(connection.app.state, attribute)

    @pytest.mark.parametrize("provider,attribute", [
        (get_embedding_service, "embedding_service"),
        (get_vector_store, "vector_store"),
    ])
    def test_missing_singleton_is_500(self, provider, attribute):
        connection = create_mock_connection(**{attribute: None})

        with pytest.raises(HTTPException) as exc_info:
            provider(connection)

        assert exc_info.value.status_code == 500

    def test_providers_accept_any_connection(self):
        """HTTPConnection covers both Request and WebSocket"""
        sig = inspect.signature(get_vector_store)

        assert sig.parameters["connection"].annotation is HTTPConnection


class TestUseCaseProviders:

    def test_search_hotels_use_case_uses_settings(self):
        connection = create_mock_connection()

        use_case = get_search_hotels_use_case(
            embedding_service=connection.app.state.embedding_service,
            fallback_embedding_service=connection.app.state.fallback_embedding_service,
            vector_store=connection.app.state.vector_store,
            constraint_extractor=ConstraintExtractor(),
        )

        assert isinstance(use_case, SearchHotelsUseCase)
        assert use_case.top_k == settings.SEARCH_TOP_K
        assert use_case.search_timeout == settings.SEARCH_TIMEOUT
        assert use_case.fallback_embedding_service is connection.app.state.fallback_embedding_service

    def test_chat_interaction_use_case(self):
        search = Mock(spec=SearchHotelsUseCase)
        llm = AsyncMock()

        use_case = get_chat_interaction_use_case(
            intent_router=IntentRouter(),
            search_use_case=search,
            presenter=ResultPresenter(),
            llm_service=llm,
        )

        assert isinstance(use_case, ChatInteractionUseCase)
        assert use_case.search_use_case is search
        assert use_case.llm_service is llm

    def test_query_dispatcher_uses_message_delay(self):
        chat_use_case = Mock(spec=ChatInteractionUseCase)

        dispatcher = get_query_dispatcher(chat_use_case=chat_use_case)

        assert isinstance(dispatcher, QueryDispatcher)
        assert dispatcher.message_delay == settings.MESSAGE_DELAY_MS / 1000
