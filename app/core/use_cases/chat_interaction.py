import logging
import time
from typing import AsyncGenerator, Optional

from ..domain.entities.intent import Intent, IntentKind
from ..domain.entities.message import OutboundMessage
from ..domain.entities.query import Query
from ..domain.exceptions import IndexUnavailableError
from ..domain.prompts import PromptTemplates
from ..ports.llm_service import LLMService
from .intent_classification import IntentRouter
from .result_presentation import ResultPresenter
from .search_hotels import SearchHotelsUseCase

logger = logging.getLogger(__name__)


class ChatInteractionUseCase:
    """
    Pipeline boundary for one user utterance.

    Routes the query, runs the matching handler and yields the messages to
    deliver, in order. Every failure is converted into a single user-facing
    message here; raw error detail only goes to the log.
    """

    def __init__(
            self,
            intent_router: IntentRouter,
            search_use_case: SearchHotelsUseCase,
            presenter: ResultPresenter,
            llm_service: LLMService,
    ):
        self.intent_router = intent_router
        self.search_use_case = search_use_case
        self.presenter = presenter
        self.llm_service = llm_service

    async def handle(self, query: Query) -> AsyncGenerator[OutboundMessage, None]:
        """Process a query and yield the reply messages"""
        intent: Optional[Intent] = self.intent_router.route(query.text)
        if intent is None:
            logger.warning(f"[{query.session_id}] Empty message received, skipping")
            return

        logger.info(f"[{query.session_id}] Routing to {intent.kind.value} ({intent.reasoning})")
        start_time = time.time()

        try:
            if intent.kind == IntentKind.HOTEL_SEARCH:
                async for message in self._handle_hotel_search(query):
                    yield message
            elif intent.kind == IntentKind.RESEARCH:
                async for message in self._stream_llm(query, PromptTemplates.research_prompt_for(query.text)):
                    yield message
            else:
                async for message in self._stream_llm(query, PromptTemplates.GENERAL_CHAT):
                    yield message
        except IndexUnavailableError as e:
            logger.error(f"[{query.session_id}] Hotel index unavailable: {e}")
            yield self.presenter.unavailable()
        except Exception as e:
            logger.exception(f"[{query.session_id}] Error handling query: {e}")
            yield self.presenter.apology()
        finally:
            response_time_ms = int((time.time() - start_time) * 1000)
            logger.info(f"[{query.session_id}] Handled {intent.kind.value} in {response_time_ms} ms")

    async def _handle_hotel_search(self, query: Query) -> AsyncGenerator[OutboundMessage, None]:
        results = await self.search_use_case.search_hotels(query.text)
        for message in self.presenter.present(results, query.text):
            yield message

    async def _stream_llm(self, query: Query, system_prompt: str) -> AsyncGenerator[OutboundMessage, None]:
        async for chunk in self.llm_service.generate_streaming_response(
                prompt=query.text,
                system_prompt=system_prompt,
        ):
            if chunk:
                yield OutboundMessage.text(chunk)
