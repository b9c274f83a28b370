from abc import ABC, abstractmethod
from typing import List, Dict, Any, Tuple
from ..domain.entities.hotel import HotelRecord
from ..domain.value_objects.constraints import ConstraintSet
from ..domain.value_objects.embedding import EmbeddingVector


class HotelVectorStore(ABC):
    """Port for the hotel catalog vector index"""

    @abstractmethod
    async def search(
            self,
            query_vector: EmbeddingVector,
            constraints: ConstraintSet,
            top_k: int
    ) -> List[HotelRecord]:
        """
        Filtered nearest-neighbour search over the catalog.

        Args:
            query_vector: Query embedding; its dimension must match the index
            constraints: Structured filter; absent fields add no condition
            top_k: Maximum number of hotels to return

        Returns:
            Hotels in the store's distance order (closest first), at most top_k

        Raises:
            InvalidQueryError: empty vector or top_k <= 0
            IndexUnavailableError: store unreachable or dimension mismatch
        """
        pass

    @abstractmethod
    async def add_hotels(self, hotels: List[Tuple[Dict[str, Any], EmbeddingVector]]) -> int:
        """
        Upsert raw catalog entries with their vectors.

        Args:
            hotels: (raw hotel mapping, embedding) pairs

        Returns:
            Number of hotels written
        """
        pass

    @abstractmethod
    async def count(self) -> int:
        """Number of hotels in the index"""
        pass
