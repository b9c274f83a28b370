import json
import logging
import uuid
from pathlib import Path
from typing import Any, Dict, List, Union

from ..domain.exceptions import CatalogIngestionError, EmbeddingUnavailableError
from ..ports.embedding_service import EmbeddingService
from ..ports.vector_store import HotelVectorStore

logger = logging.getLogger(__name__)


class CatalogIngestionUseCase:
    """
    Loads a JSON hotel catalog into the vector store.

    Runs out of band from query handling (at startup, only into an empty
    collection); query handling never writes to the store.
    """

    def __init__(
            self,
            embedding_service: EmbeddingService,
            vector_store: HotelVectorStore,
            batch_size: int = 16,
    ):
        self.embedding_service = embedding_service
        self.vector_store = vector_store
        self.batch_size = batch_size

    async def seed_if_empty(self, catalog_path: Union[str, Path]) -> int:
        """Ingest the catalog file unless the collection already holds hotels"""
        existing = await self.vector_store.count()
        if existing > 0:
            logger.info(f"Hotel collection already contains {existing} records, skipping seed")
            return 0
        return await self.ingest_file(catalog_path)

    async def ingest_file(self, catalog_path: Union[str, Path]) -> int:
        path = Path(catalog_path)
        try:
            with path.open(encoding="utf-8") as f:
                hotels = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise CatalogIngestionError(f"Could not read catalog {path}: {e}") from e

        if not isinstance(hotels, list):
            raise CatalogIngestionError(f"Catalog {path} must contain a JSON array of hotels")

        logger.info(f"Loaded {len(hotels)} hotels from {path}")
        return await self.ingest(hotels)

    async def ingest(self, hotels: List[Dict[str, Any]]) -> int:
        """Embed and upsert hotels; entries that are not objects are skipped"""
        entries = []
        for hotel in hotels:
            if not isinstance(hotel, dict):
                logger.warning(f"Skipping catalog entry that is not an object: {hotel!r}")
                continue
            entry = dict(hotel)
            entry["id"] = str(entry.get("id") or uuid.uuid4())
            entries.append(entry)

        written = 0
        for start in range(0, len(entries), self.batch_size):
            batch = entries[start:start + self.batch_size]
            texts = [self.build_hotel_text(hotel) for hotel in batch]
            try:
                embeddings = await self.embedding_service.generate_embeddings_batch(texts)
            except EmbeddingUnavailableError as e:
                raise CatalogIngestionError(f"Embedding failed for catalog batch at {start}: {e}") from e

            written += await self.vector_store.add_hotels(list(zip(batch, embeddings)))
            logger.info(f"Progress: {written}/{len(entries)} hotels indexed")

        return written

    @staticmethod
    def build_hotel_text(hotel: Dict[str, Any]) -> str:
        """Text that represents a hotel in the embedding space"""
        parts = []
        if hotel.get("name"):
            parts.append(f"{hotel['name']}.")
        if hotel.get("description"):
            parts.append(str(hotel["description"]))
        if hotel.get("country"):
            parts.append(f"в {hotel['country']}")
        if hotel.get("city"):
            parts.append(f"в городе {hotel['city']}")
        if hotel.get("stars") is not None:
            parts.append(f"{hotel['stars']} звёзд")
        if hotel.get("all_inclusive") is True:
            parts.append("all inclusive питание")
        if hotel.get("kids_club") is True:
            parts.append("детский клуб развлечение")
        if hotel.get("aquapark") is True:
            parts.append("аквапарк водные горки")
        if hotel.get("price_per_night") is not None:
            parts.append(f"цена {hotel['price_per_night']}")
        if hotel.get("rating") is not None:
            parts.append(f"рейтинг {hotel['rating']}")
        if hotel.get("reviews"):
            parts.append(f"отзывы {hotel['reviews']}")
        return " ".join(parts).strip()
