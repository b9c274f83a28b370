from pydantic_settings import BaseSettings
from pydantic import Field, HttpUrl, ValidationError
from typing import Optional, Literal
import logging

logger = logging.getLogger(__name__)


class CriticalConfigError(Exception):
    """Custom exception for critical configuration failures."""
    pass


class AppSettings(BaseSettings):
    # Pydantic model configuration
    model_config = {
        'extra': 'ignore',
        'env_file': '.env',
        'env_file_encoding': 'utf-8',
        'validate_default': True,
    }

    # -- Embedding provider selection --
    EMBEDDING_PROVIDER: Literal['ollama', 'deterministic'] = Field(
        default='ollama',
        description="Which embedding provider to use: ollama, or deterministic for offline runs."
    )
    OLLAMA_EMBEDDING_BASE_URL: Optional[HttpUrl] = Field(
        default='http://localhost:11434',
        description='Ollama Embedding base URL.'
    )
    OLLAMA_EMBEDDING_MODEL: str = Field(
        default="mxbai-embed-large",
        description="The Ollama embedding model to be used."
    )
    EMBEDDING_DIMENSIONS: int = Field(
        default=1024,
        gt=0,
        description="Vector dimension of the embedding model; the fallback vector uses the same size."
    )
    EMBEDDING_TIMEOUT: float = Field(
        default=30.0,
        gt=0,
        description="Timeout for embedding a query (seconds). On expiry the fallback vector is used."
    )
    EMBEDDING_MAX_RETRIES: int = Field(
        default=3,
        ge=1,
        description="Max attempts for a failed embedding request."
    )
    EMBEDDING_RETRY_DELAY: float = Field(
        default=1.0,
        ge=0,
        description="Base delay between embedding retries (seconds), doubled per attempt."
    )
    EMBEDDING_CONCURRENCY: int = Field(
        default=2,
        ge=1,
        description="Number of concurrent embedding requests during catalog ingestion.",
    )

    # -- LLM provider selection --
    LLM_PROVIDER: Literal['ollama'] = Field(
        default='ollama',
        description="Which LLM provider to use for research and general chat."
    )
    OLLAMA_LLM_BASE_URL: Optional[HttpUrl] = Field(
        default='http://localhost:11434',
        description="Ollama LLM base URL."
    )
    OLLAMA_LLM_MODEL: str = Field(
        default="llama3.2:3b",
        description="Ollama LLM model."
    )
    LLM_TIMEOUT: int = Field(
        default=120,
        gt=0,
        description="LLM API Requests Timeout Config."
    )

    # Vector store (Chroma)
    CHROMA_PERSIST_DIR: str = Field("./data/vector_db")
    CHROMA_COLLECTION_NAME: str = Field("hotels")

    # Hotel search
    SEARCH_TOP_K: int = Field(default=5, gt=0, description="Hotels returned per search.")
    SEARCH_OVERFETCH_FACTOR: int = Field(
        default=5,
        ge=1,
        description="Candidates fetched per result slot before truncation."
    )
    SEARCH_TIMEOUT: float = Field(default=10.0, gt=0, description="Vector search timeout (seconds).")

    # Delivery pacing between consecutive outbound messages
    MESSAGE_DELAY_MS: int = Field(default=300, ge=0)

    # JSON array of hotels loaded into an empty collection on startup
    CATALOG_SEED_PATH: Optional[str] = Field(default=None)

    LOG_LEVEL: Literal['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'] = Field(default='INFO')

    # FastAPI settings
    API_HOST: str = Field("0.0.0.0")
    API_PORT: int = Field(8000)
    DEBUG: bool = Field(False)


# Instantiate settings. This will load, validate, and expose the settings.
# Pydantic will raise a ValidationError if required fields are missing or types are wrong.
try:
    settings = AppSettings()
except ValidationError as e:
    error_messages = []
    for error in e.errors():
        field = ".".join(str(loc) for loc in error['loc'])
        message = error['msg']
        error_messages.append(f"  - Field '{field}': {message}")

    full_error_message = "😱 Environment variable validation failed!\n" + "\n".join(error_messages) + \
                         "\nPlease check the logs and your .env file or environment settings."
    logger.error(full_error_message)

    raise CriticalConfigError(full_error_message) from e
