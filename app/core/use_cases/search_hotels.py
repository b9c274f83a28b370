import asyncio
import logging
from typing import List, Optional

from ..domain.entities.hotel import HotelRecord
from ..domain.exceptions import EmbeddingUnavailableError, IndexUnavailableError
from ..domain.value_objects.constraints import ConstraintSet
from ..domain.value_objects.embedding import EmbeddingVector
from ..ports.embedding_service import EmbeddingService
from ..ports.vector_store import HotelVectorStore
from .constraint_extraction import ConstraintExtractor

logger = logging.getLogger(__name__)


class SearchHotelsUseCase:
    """Use case for filtered similarity search over the hotel catalog"""

    def __init__(
            self,
            embedding_service: EmbeddingService,
            fallback_embedding_service: EmbeddingService,
            vector_store: HotelVectorStore,
            constraint_extractor: Optional[ConstraintExtractor] = None,
            top_k: int = 5,
            embedding_timeout: float = 30.0,
            search_timeout: float = 10.0,
    ):
        self.embedding_service = embedding_service
        self.fallback_embedding_service = fallback_embedding_service
        self.vector_store = vector_store
        self.constraint_extractor = constraint_extractor or ConstraintExtractor()
        self.top_k = top_k
        self.embedding_timeout = embedding_timeout
        self.search_timeout = search_timeout

    async def search_hotels(
            self,
            query_text: str,
            top_k: Optional[int] = None,
            constraints: Optional[ConstraintSet] = None,
    ) -> List[HotelRecord]:
        """
        Search for hotels matching a natural-language query

        Args:
            query_text: User query, embedded as a whole
            top_k: Number of results to return (defaults to the configured value)
            constraints: Explicit filter; extracted from query_text when omitted

        Returns:
            Hotels ordered by descending similarity

        Raises:
            InvalidQueryError: top_k <= 0 or an empty query vector
            IndexUnavailableError: the store failed or timed out
        """
        if constraints is None:
            constraints = self.constraint_extractor.extract(query_text)
        top_k = self.top_k if top_k is None else top_k

        query_vector = await self.embed_query(query_text)

        try:
            results = await asyncio.wait_for(
                self.vector_store.search(
                    query_vector=query_vector,
                    constraints=constraints,
                    top_k=top_k,
                ),
                timeout=self.search_timeout,
            )
        except asyncio.TimeoutError:
            raise IndexUnavailableError(f"Vector search timed out after {self.search_timeout}s")

        logger.info(f"Found {len(results)} hotels for query (top_k={top_k})")
        return results

    async def embed_query(self, text: str) -> EmbeddingVector:
        """Embed the query, degrading to the fallback vector on provider failure"""
        try:
            return await asyncio.wait_for(
                self.embedding_service.generate_embedding(text),
                timeout=self.embedding_timeout,
            )
        except asyncio.TimeoutError:
            logger.warning(f"Embedding timed out after {self.embedding_timeout}s, using fallback vector")
        except EmbeddingUnavailableError as e:
            logger.warning(f"Embedding provider unavailable, using fallback vector: {e}")

        return await self.fallback_embedding_service.generate_embedding(text)
