"""
Shared pytest fixtures for all tests.

This module provides reusable fixtures for:
- Mock services (embedding, LLM, vector store)
- A real Chroma-backed hotel store on a temporary directory
- Sample domain entities and catalog entries
"""

from typing import List
from unittest.mock import AsyncMock, Mock

import pytest

from app.adapters.embedding.deterministic_embedding import DeterministicEmbeddingService
from app.core.domain.entities.hotel import HotelRecord
from app.core.domain.value_objects.embedding import EmbeddingVector
from app.core.ports.embedding_service import EmbeddingService
from app.core.ports.llm_service import LLMService
from app.core.ports.vector_store import HotelVectorStore


# ============================================================================
# SAMPLE DOMAIN ENTITIES
# ============================================================================

@pytest.fixture
def sample_embedding() -> EmbeddingVector:
    """Small embedding vector for tests that only pass it through."""
    return EmbeddingVector(values=[0.1, 0.2, 0.3, 0.4], model_name="test-model", dimensions=4)


@pytest.fixture
def sample_hotels() -> List[HotelRecord]:
    """Three ranked hotels, closest first."""
    return [
        HotelRecord(
            id="h-1", name="Sunrise Resort", country="Турция", city="Анталья", stars=5,
            price_per_night=4500.0, rating=4.8, description="Первая линия, песчаный пляж",
            kids_club=True, all_inclusive=True, aquapark=False, similarity=0.92,
        ),
        HotelRecord(
            id="h-2", name="Blue Lagoon", country="Турция", city="Кемер", stars=4,
            price_per_night=3200.0, rating=4.3, all_inclusive=True, similarity=0.87,
        ),
        HotelRecord(id="h-3", name="Pine Hill", country="Турция", stars=3, similarity=0.74),
    ]


@pytest.fixture
def catalog_entries() -> List[dict]:
    """Raw catalog entries as they appear in the seed JSON."""
    return [
        {
            "id": "antalya-palace", "name": "Antalya Palace", "country": "Турция", "city": "Анталья",
            "stars": 5, "price_per_night": 4800, "rating": 4.7, "description": "Роскошный отель у моря",
            "kids_club": True, "all_inclusive": True, "aquapark": True,
        },
        {
            "id": "kemer-garden", "name": "Kemer Garden", "country": "Турция", "city": "Кемер",
            "stars": 4, "price_per_night": 3100, "rating": 4.2, "description": "Тихий семейный отель",
            "kids_club": True, "all_inclusive": False, "aquapark": False,
        },
        {
            "id": "hurghada-bay", "name": "Hurghada Bay", "country": "Египет", "city": "Хургада",
            "stars": 5, "price_per_night": 5200, "rating": 4.5, "description": "Коралловый риф рядом",
            "kids_club": False, "all_inclusive": True, "aquapark": True,
        },
        {
            "id": "sochi-park", "name": "Sochi Park", "country": "Россия", "city": "Сочи",
            "stars": 3, "price_per_night": 2500, "rating": 4.0, "description": "Недалеко от парка",
            "kids_club": False, "all_inclusive": False, "aquapark": False,
        },
    ]


# ============================================================================
# MOCK SERVICES
# ============================================================================

@pytest.fixture
def mock_embedding_service(sample_embedding) -> Mock:
    """Mock embedding service returning the sample embedding."""
    service = Mock(spec=EmbeddingService)
    service.generate_embedding = AsyncMock(return_value=sample_embedding)
    service.generate_embeddings_batch = AsyncMock(
        side_effect=lambda texts: [sample_embedding for _ in texts]
    )
    service.get_model_info = Mock(return_value={"model_name": "test-model", "dimensions": 4})
    return service


@pytest.fixture
def fallback_embedding_service() -> DeterministicEmbeddingService:
    """Real deterministic embedder sized like the sample embedding."""
    return DeterministicEmbeddingService(dimensions=4)


@pytest.fixture
def mock_vector_store() -> Mock:
    """Mock hotel vector store with an empty index."""
    store = Mock(spec=HotelVectorStore)
    store.search = AsyncMock(return_value=[])
    store.add_hotels = AsyncMock(side_effect=lambda hotels: len(hotels))
    store.count = AsyncMock(return_value=0)
    return store


@pytest.fixture
def mock_llm_service() -> Mock:
    """Mock LLM service that streams two chunks."""
    service = Mock(spec=LLMService)

    async def stream(prompt, system_prompt=None, max_tokens=1000, temperature=0.7):
        for chunk in ("Привет", "! Чем помочь?"):
            yield chunk

    service.generate_streaming_response = Mock(side_effect=stream)
    service.generate_response = AsyncMock(return_value="Привет! Чем помочь?")
    service.get_model_info = Mock(return_value={"model_name": "test-llm", "provider": "test"})
    return service
