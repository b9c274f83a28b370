import httpx
import asyncio
import logging
from typing import List, Dict, Any, Optional
from ...core.ports.embedding_service import EmbeddingService
from ...core.domain.value_objects.embedding import EmbeddingVector
from ...core.domain.exceptions import EmbeddingUnavailableError

logger = logging.getLogger(__name__)


class OllamaEmbeddingService(EmbeddingService):
    """Ollama implementation with retry logic and ordered batch results"""

    LOCAL_URL_KEYWORDS = ["localhost", "127.0.0.1", "host.docker.internal"]

    DIMENSION_MAP = {
        "mxbai-embed-large": 1024,
        "nomic-embed-text": 768,
        "all-minilm": 384,
    }

    def __init__(
        self,
        base_url: str = "http://localhost:11434",
        model_name: str = "mxbai-embed-large",
        timeout: int = 30,
        concurrency_limit: int = 2,
        max_retries: int = 3,
        retry_delay: float = 1.0,
        dimensions: Optional[int] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.base_url = base_url.rstrip('/')
        self.model_name = model_name
        self.timeout = timeout
        self.concurrency_limit = max(1, concurrency_limit)
        self.max_retries = max(1, max_retries)
        self.retry_delay = retry_delay
        self._configured_dimensions = dimensions

        limits = httpx.Limits(
            max_keepalive_connections=5,
            max_connections=10,
            keepalive_expiry=30.0
        )

        self.client = client or httpx.AsyncClient(
            timeout=timeout,
            limits=limits,
            follow_redirects=True
        )
        self._model_info = None

    def _is_local(self) -> bool:
        """Detect if Ollama endpoint is local"""
        base = self.base_url.lower()
        return any(kw in base for kw in self.LOCAL_URL_KEYWORDS)

    def _build_api_url(self) -> str:
        if self._is_local():
            return f"{self.base_url}/api/embed"
        return f"{self.base_url}/api/embeddings"

    def _build_api_payload(self, text: str) -> dict:
        if self._is_local():
            return {"model": self.model_name, "input": text}
        return {"model": self.model_name, "prompt": text}

    def _extract_embedding(self, response_json: dict) -> List[float]:
        """Extract embedding vector from API response"""
        if self._is_local():
            embeddings = response_json.get("embeddings")
            if not embeddings:
                raise EmbeddingUnavailableError("No embeddings in response")
            return embeddings[0]

        embedding = response_json.get("embedding")
        if not embedding:
            raise EmbeddingUnavailableError("No embedding in response")
        return embedding

    async def _make_request_with_retry(self, url: str, payload: dict, text_preview: str = "") -> dict:
        """Make HTTP request with exponential backoff retry"""
        last_error = None

        for attempt in range(self.max_retries):
            try:
                logger.debug(
                    f"Embedding request attempt {attempt + 1}/{self.max_retries} "
                    f"for text: {text_preview[:50]}..."
                )

                response = await self.client.post(url, json=payload)
                response.raise_for_status()
                return response.json()

            except httpx.TimeoutException as e:
                last_error = e
                logger.warning(f"Timeout on attempt {attempt + 1}/{self.max_retries}")

            except httpx.HTTPStatusError as e:
                last_error = e
                # Don't retry on 4xx errors (client errors)
                if 400 <= e.response.status_code < 500:
                    logger.error(f"Client error (won't retry): {e.response.status_code} - {e.response.text}")
                    raise EmbeddingUnavailableError(
                        f"HTTP {e.response.status_code}: {e.response.text}"
                    ) from e
                logger.warning(
                    f"HTTP error {e.response.status_code} on attempt {attempt + 1}/{self.max_retries}"
                )

            except httpx.RequestError as e:
                last_error = e
                logger.warning(f"Request error on attempt {attempt + 1}/{self.max_retries}: {str(e)}")

            if attempt < self.max_retries - 1:
                delay = self.retry_delay * (2 ** attempt)
                logger.info(f"Waiting {delay}s before retry...")
                await asyncio.sleep(delay)

        error_msg = f"All {self.max_retries} retry attempts failed"
        if last_error:
            error_msg += f": {str(last_error)}"
        logger.error(error_msg)
        raise EmbeddingUnavailableError(error_msg)

    async def generate_embedding(self, text: str) -> EmbeddingVector:
        """Generate embedding for single text"""
        embeddings = await self.generate_embeddings_batch([text])
        return embeddings[0]

    async def generate_embeddings_batch(self, texts: List[str]) -> List[EmbeddingVector]:
        """Generate embeddings for texts; the result list follows input order"""
        if not texts:
            return []

        url = self._build_api_url()
        semaphore = asyncio.Semaphore(self.concurrency_limit)

        async def process_single_text(text: str) -> EmbeddingVector:
            async with semaphore:
                result = await self._make_request_with_retry(url, self._build_api_payload(text), text_preview=text)
                values = self._extract_embedding(result)
                return EmbeddingVector(
                    values=values,
                    model_name=self.model_name,
                    dimensions=len(values)
                )

        try:
            embeddings = await asyncio.gather(*(process_single_text(text) for text in texts))
        except EmbeddingUnavailableError:
            raise
        except Exception as e:
            logger.error(f"Unexpected error in generate_embeddings_batch: {str(e)}")
            raise EmbeddingUnavailableError(f"Error generating embeddings: {str(e)}") from e

        logger.debug(f"Generated {len(embeddings)} embeddings with {self.model_name}")
        return list(embeddings)

    def get_model_info(self) -> Dict[str, Any]:
        """Return embedding model information"""
        if self._model_info is None:
            dimensions = self._configured_dimensions or next(
                (dim for model, dim in self.DIMENSION_MAP.items() if model in self.model_name),
                1024  # default
            )

            self._model_info = {
                "model_name": self.model_name,
                "dimensions": dimensions,
                "provider": "ollama",
                "base_url": self.base_url,
                "concurrency": self.concurrency_limit
            }
        return self._model_info

    async def aclose(self):
        await self.client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.aclose()
