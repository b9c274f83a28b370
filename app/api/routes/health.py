import logging
from fastapi import APIRouter, Depends

from ...api.deps import get_embedding_service, get_vector_store
from ...core.domain.exceptions import IndexUnavailableError
from ...core.ports.embedding_service import EmbeddingService
from ...core.ports.vector_store import HotelVectorStore

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("")
async def health(
        vector_store: HotelVectorStore = Depends(get_vector_store),
        embedding_service: EmbeddingService = Depends(get_embedding_service),
):
    """Liveness plus catalog size and embedding model info"""
    try:
        hotel_count = await vector_store.count()
        status = "ok"
    except IndexUnavailableError as e:
        logger.warning(f"Health check could not reach the hotel index: {e}")
        hotel_count = None
        status = "degraded"

    return {
        "status": status,
        "hotels": hotel_count,
        "embedding": embedding_service.get_model_info(),
    }
