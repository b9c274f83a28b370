import hashlib
import math
import random
from typing import List, Dict, Any
from ...core.ports.embedding_service import EmbeddingService
from ...core.domain.value_objects.embedding import EmbeddingVector


class DeterministicEmbeddingService(EmbeddingService):
    """
    Offline embedding service that derives a unit vector from the text hash.

    Used as the fallback when the real provider is down, and as the primary
    provider for local runs without Ollama. The same text always maps to the
    same vector, so search results stay stable across restarts, but the
    vectors carry no meaning: retrieval quality degrades to filter-only.
    """

    def __init__(self, dimensions: int = 1024, model_name: str = "deterministic-fallback"):
        if dimensions <= 0:
            raise ValueError("dimensions must be positive")
        self._dimensions = dimensions
        self.model_name = model_name

    async def generate_embedding(self, text: str) -> EmbeddingVector:
        return self.embed(text)

    async def generate_embeddings_batch(self, texts: List[str]) -> List[EmbeddingVector]:
        return [self.embed(text) for text in texts]

    def embed(self, text: str) -> EmbeddingVector:
        seed = int.from_bytes(hashlib.sha256((text or "").encode("utf-8")).digest()[:8], "big")
        rng = random.Random(seed)
        values = [rng.gauss(0.0, 1.0) for _ in range(self._dimensions)]

        norm = math.sqrt(sum(v * v for v in values)) or 1.0
        values = [v / norm for v in values]

        return EmbeddingVector(values=values, model_name=self.model_name, dimensions=self._dimensions)

    def get_model_info(self) -> Dict[str, Any]:
        return {
            "model_name": self.model_name,
            "dimensions": self._dimensions,
            "provider": "deterministic",
        }
