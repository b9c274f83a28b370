import os
import logging
import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .infrastructure.logging import setup_logging, RequestLoggingMiddleware
from .infrastructure.metrics import PrometheusMiddleware, metrics_endpoint

from .config import settings

# Import adapter classes
from .adapters.embedding.ollama_embedding import OllamaEmbeddingService
from .adapters.embedding.deterministic_embedding import DeterministicEmbeddingService
from .adapters.llm.ollama_llm import OllamaLLMService
from .adapters.vector_store.chroma_store import ChromaHotelStore
from .core.domain.exceptions import CatalogIngestionError
from .core.use_cases.catalog_ingestion import CatalogIngestionUseCase

# Imports for routers
from .api.routes.chat import router as chat_router
from .api.routes.hotels import router as hotels_router
from .api.routes.health import router as health_router


app = FastAPI(
    title="Hotel Concierge",
    debug=settings.DEBUG
)

# Setup logging early
setup_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

# Add request logging middleware
app.add_middleware(RequestLoggingMiddleware)
# Add Prometheus metrics middleware
app.add_middleware(PrometheusMiddleware)

# CORS (if frontend served separately)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Adjust in production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Include metrics endpoint
@app.get("/metrics")
async def metrics():
    return await metrics_endpoint()


# On startup, instantiate and store singleton adapter instances in app.state
@app.on_event("startup")
async def on_startup():
    logger.info("Application startup: instantiating adapters...")

    # Offline embedding, also the fallback when the provider is down
    app.state.fallback_embedding_service = DeterministicEmbeddingService(
        dimensions=settings.EMBEDDING_DIMENSIONS,
    )

    # Embedding service
    if settings.EMBEDDING_PROVIDER == "ollama":
        app.state.embedding_service = OllamaEmbeddingService(
            base_url=str(settings.OLLAMA_EMBEDDING_BASE_URL),
            model_name=settings.OLLAMA_EMBEDDING_MODEL,
            timeout=settings.EMBEDDING_TIMEOUT,
            concurrency_limit=settings.EMBEDDING_CONCURRENCY,
            max_retries=settings.EMBEDDING_MAX_RETRIES,
            retry_delay=settings.EMBEDDING_RETRY_DELAY,
            dimensions=settings.EMBEDDING_DIMENSIONS,
        )
    elif settings.EMBEDDING_PROVIDER == "deterministic":
        app.state.embedding_service = app.state.fallback_embedding_service
    else:
        raise RuntimeError(f"Unsupported EMBEDDING_PROVIDER: {settings.EMBEDDING_PROVIDER}")

    # LLM service
    if settings.LLM_PROVIDER == "ollama":
        app.state.llm_service = OllamaLLMService(
            base_url=str(settings.OLLAMA_LLM_BASE_URL),
            model_name=settings.OLLAMA_LLM_MODEL,
            timeout=settings.LLM_TIMEOUT
        )
    else:
        raise RuntimeError(f"Unsupported LLM_PROVIDER: {settings.LLM_PROVIDER}")

    # Vector store
    persist_dir = settings.CHROMA_PERSIST_DIR
    os.makedirs(persist_dir, exist_ok=True)
    app.state.vector_store = ChromaHotelStore(
        persist_directory=persist_dir,
        collection_name=settings.CHROMA_COLLECTION_NAME,
        overfetch_factor=settings.SEARCH_OVERFETCH_FACTOR,
    )

    if settings.CATALOG_SEED_PATH:
        ingestion = CatalogIngestionUseCase(
            embedding_service=app.state.embedding_service,
            vector_store=app.state.vector_store,
        )
        try:
            written = await ingestion.seed_if_empty(settings.CATALOG_SEED_PATH)
            if written:
                logger.info(f"Seeded {written} hotels from {settings.CATALOG_SEED_PATH}")
        except CatalogIngestionError as e:
            # The service still answers research and chat queries without a catalog
            logger.error(f"Catalog seeding failed: {e}")

    logger.info("Startup complete: adapters instantiated")


@app.on_event("shutdown")
async def on_shutdown():
    logger.info("Application shutdown: closing resources...")

    vector_store = getattr(app.state, "vector_store", None)
    if vector_store is not None:
        vector_store.close()
        logger.info("Closed vector store thread pool")

    for name in ("embedding_service", "llm_service"):
        service = getattr(app.state, name, None)
        if service is not None and hasattr(service, "aclose"):
            try:
                await service.aclose()
                logger.info(f"Closed {name} HTTP client")
            except Exception as e:
                logger.warning(f"Error closing {name} client: {e}")

    logger.info("Shutdown complete.")


app.include_router(
    chat_router,
    prefix="/chat",
    tags=["chat"]
)

app.include_router(
    hotels_router,
    prefix="/hotels",
    tags=["hotels"]
)

app.include_router(
    health_router,
    prefix="/health",
    tags=["health"]
)


if __name__ == "__main__":
    uvicorn.run("app.main:app", host=settings.API_HOST, port=settings.API_PORT, reload=settings.DEBUG)
