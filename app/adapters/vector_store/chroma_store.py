import asyncio
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Dict, Any, Tuple
import chromadb
from chromadb.config import Settings
from ...core.ports.vector_store import HotelVectorStore
from ...core.domain.entities.hotel import HotelRecord
from ...core.domain.exceptions import (
    DecodingAnomalyError,
    IndexUnavailableError,
    InvalidQueryError,
)
from ...core.domain.value_objects.constraints import ConstraintSet
from ...core.domain.value_objects.embedding import EmbeddingVector
from .payload_codec import FLAG_FIELDS, decode_hotel, encode_flag, encode_hotel

logger = logging.getLogger(__name__)


def build_where_filter(constraints: Optional[ConstraintSet]) -> Optional[Dict[str, Any]]:
    """
    Build a ChromaDB where filter from a constraint set.

    Every present constraint becomes one condition and all conditions must
    hold. Chroma rejects an empty where and a single-element $and, so zero
    conditions yield None and one condition is returned bare.
    """
    if constraints is None:
        return None

    conditions: List[Dict[str, Any]] = []

    if constraints.min_price is not None:
        conditions.append({"price_per_night": {"$gte": constraints.min_price}})
    if constraints.max_price is not None:
        conditions.append({"price_per_night": {"$lte": constraints.max_price}})
    if constraints.min_stars is not None:
        conditions.append({"stars": {"$gte": constraints.min_stars}})
    if constraints.max_stars is not None:
        conditions.append({"stars": {"$lte": constraints.max_stars}})
    if constraints.country:
        conditions.append({"country": {"$eq": constraints.country}})
    if constraints.city:
        conditions.append({"city": {"$eq": constraints.city}})

    # Only a required amenity narrows the search; False and None mean "don't care"
    for flag in FLAG_FIELDS:
        if getattr(constraints, flag) is True:
            conditions.append({flag: {"$eq": encode_flag(True)}})

    if not conditions:
        return None
    if len(conditions) == 1:
        return conditions[0]
    return {"$and": conditions}


class ChromaHotelStore(HotelVectorStore):
    """
    Chroma-based implementation of the HotelVectorStore port using the PersistentClient API.
    """

    def __init__(
            self,
            persist_directory: Optional[str] = None,
            collection_name: str = "hotels",
            overfetch_factor: int = 5,
            client: Optional[Any] = None,
    ):
        """
        Args:
            persist_directory: Path to persist Chroma DB files (local folder).
            collection_name: Name of the Chroma collection holding the catalog.
            overfetch_factor: Candidates requested per result slot before truncation.
            client: Pre-built Chroma client; persist_directory is ignored when given.
        """
        self.collection_name = collection_name
        self.overfetch_factor = max(1, overfetch_factor)

        # Thread pool executor for wrapping sync calls
        self._executor = ThreadPoolExecutor()

        try:
            self._client = client or chromadb.PersistentClient(
                path=persist_directory,
                settings=Settings(anonymized_telemetry=False),
            )

            self._collection = self._client.get_or_create_collection(
                name=collection_name,
                configuration={
                    "hnsw": {
                        "space": "cosine",
                        "ef_search": 100,
                        "ef_construction": 100,
                        "max_neighbors": 16,
                    }
                }
            )
        except Exception as e:
            raise IndexUnavailableError(f"Could not open hotel collection '{collection_name}': {e}") from e

    async def search(
            self,
            query_vector: EmbeddingVector,
            constraints: ConstraintSet,
            top_k: int
    ) -> List[HotelRecord]:
        if query_vector is None or not query_vector.values:
            raise InvalidQueryError("Query vector is empty")
        if top_k <= 0:
            raise InvalidQueryError(f"top_k must be positive, got {top_k}")

        where = build_where_filter(constraints)
        logger.debug(f"Searching '{self.collection_name}' with filter {where}")

        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(
            self._executor,
            self._search_sync,
            list(query_vector.values),
            where,
            top_k,
        )

    def _search_sync(
            self,
            query_vec: List[float],
            where: Optional[Dict[str, Any]],
            top_k: int,
    ) -> List[HotelRecord]:
        try:
            results = self._collection.query(
                query_embeddings=[query_vec],
                n_results=top_k * self.overfetch_factor,
                where=where,
                include=["metadatas", "distances"],
            )
        except Exception as e:
            raise IndexUnavailableError(f"Hotel search failed: {e}") from e

        ids_list = results.get("ids") or [[]]
        metadatas_list = results.get("metadatas") or [[]]
        distances_list = results.get("distances") or [[]]

        hotels: List[HotelRecord] = []

        for idx, hotel_id in enumerate(ids_list[0]):
            # Cosine space: similarity = 1 - distance
            distance = distances_list[0][idx] if distances_list[0] else None
            similarity = 1 - distance if distance is not None else None
            metadata = metadatas_list[0][idx] if metadatas_list[0] else None

            try:
                hotel = decode_hotel(hotel_id, metadata, similarity)
            except DecodingAnomalyError as e:
                logger.warning(f"Skipping undecodable hotel record {e.record_id}: {e}")
                continue

            hotels.append(hotel)

            # Store order is kept as-is; only truncated
            if len(hotels) >= top_k:
                break

        return hotels

    async def add_hotels(self, hotels: List[Tuple[Dict[str, Any], EmbeddingVector]]) -> int:
        if not hotels:
            return 0

        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(self._executor, self._add_hotels_sync, hotels)

    def _add_hotels_sync(self, hotels: List[Tuple[Dict[str, Any], EmbeddingVector]]) -> int:
        ids: List[str] = []
        embeddings: List[List[float]] = []
        metadatas: List[Dict[str, Any]] = []
        documents: List[str] = []

        for hotel, embedding in hotels:
            if embedding is None or embedding.is_empty:
                raise ValueError(f"Hotel {hotel.get('id')} has no embedding")

            hotel_id = str(hotel["id"])
            ids.append(hotel_id)
            embeddings.append(list(embedding.values))
            metadatas.append(encode_hotel(hotel))
            documents.append(str(hotel.get("description") or hotel.get("name") or hotel_id))

        try:
            self._collection.upsert(
                ids=ids,
                embeddings=embeddings,
                metadatas=metadatas,
                documents=documents,
            )
        except Exception as e:
            raise IndexUnavailableError(f"Could not write hotels to '{self.collection_name}': {e}") from e

        return len(ids)

    async def count(self) -> int:
        loop = asyncio.get_running_loop()
        try:
            return await loop.run_in_executor(self._executor, self._collection.count)
        except Exception as e:
            raise IndexUnavailableError(f"Could not count hotels in '{self.collection_name}': {e}") from e

    def close(self) -> None:
        self._executor.shutdown(wait=False)
