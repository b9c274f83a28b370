"""
Tests for SearchHotelsUseCase
"""
import asyncio
import math
from unittest.mock import AsyncMock

import pytest

from app.core.domain.exceptions import EmbeddingUnavailableError, IndexUnavailableError, InvalidQueryError
from app.core.domain.value_objects.constraints import ConstraintSet
from app.core.use_cases.search_hotels import SearchHotelsUseCase


@pytest.fixture
def use_case(mock_embedding_service, fallback_embedding_service, mock_vector_store):
    return SearchHotelsUseCase(
        embedding_service=mock_embedding_service,
        fallback_embedding_service=fallback_embedding_service,
        vector_store=mock_vector_store,
        top_k=5,
        embedding_timeout=0.5,
        search_timeout=0.5,
    )


class TestSearchHotels:

    async def test_extracts_constraints_and_searches(self, use_case, mock_vector_store, sample_embedding, sample_hotels):
        mock_vector_store.search.return_value = sample_hotels

        results = await use_case.search_hotels("отель в Турции до 5000, 5 звёзд")

        assert results == sample_hotels
        call = mock_vector_store.search.call_args.kwargs
        assert call["query_vector"] == sample_embedding
        assert call["top_k"] == 5
        assert call["constraints"] == ConstraintSet(max_price=5000, min_stars=5, country="Турция")

    async def test_explicit_constraints_skip_extraction(self, use_case, mock_vector_store):
        explicit = ConstraintSet(city="Сочи")

        await use_case.search_hotels("отель в Турции", top_k=2, constraints=explicit)

        call = mock_vector_store.search.call_args.kwargs
        assert call["constraints"] == explicit
        assert call["top_k"] == 2

    async def test_embeds_the_whole_query(self, use_case, mock_embedding_service):
        await use_case.search_hotels("тихий отель у моря до 4000")

        mock_embedding_service.generate_embedding.assert_awaited_once_with("тихий отель у моря до 4000")

    async def test_invalid_query_propagates(self, use_case, mock_vector_store):
        mock_vector_store.search.side_effect = InvalidQueryError("top_k must be positive, got 0")

        with pytest.raises(InvalidQueryError):
            await use_case.search_hotels("отель", top_k=0)

    async def test_store_failure_propagates(self, use_case, mock_vector_store):
        mock_vector_store.search.side_effect = IndexUnavailableError("connection refused")

        with pytest.raises(IndexUnavailableError):
            await use_case.search_hotels("отель")

    async def test_store_timeout_becomes_index_unavailable(self, use_case, mock_vector_store):
        async def slow_search(**kwargs):
            await asyncio.sleep(5)
            return []

        mock_vector_store.search.side_effect = slow_search

        with pytest.raises(IndexUnavailableError, match="timed out"):
            await use_case.search_hotels("отель")


class TestEmbeddingFallback:

    async def test_provider_outage_uses_fallback_vector(self, use_case, mock_embedding_service, mock_vector_store):
        mock_embedding_service.generate_embedding.side_effect = EmbeddingUnavailableError("ollama down")

        await use_case.search_hotels("отель в Сочи")

        vector = mock_vector_store.search.call_args.kwargs["query_vector"]
        assert vector.dimensions == 4
        assert math.isclose(vector.magnitude, 1.0, rel_tol=1e-9)

    async def test_provider_timeout_uses_fallback_vector(self, use_case, mock_embedding_service):
        async def slow_embedding(text):
            await asyncio.sleep(5)

        mock_embedding_service.generate_embedding = AsyncMock(side_effect=slow_embedding)

        vector = await use_case.embed_query("отель")

        assert vector.model_name == "deterministic-fallback"

    async def test_fallback_is_stable_per_text(self, use_case, mock_embedding_service):
        mock_embedding_service.generate_embedding.side_effect = EmbeddingUnavailableError("down")

        first = await use_case.embed_query("отель в Сочи")
        second = await use_case.embed_query("отель в Сочи")

        assert first == second
