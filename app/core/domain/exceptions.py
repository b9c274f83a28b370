class DomainException(Exception):
    """Base exception for domain layer"""
    pass


class InvalidQueryError(DomainException):
    """Raised when the vector index receives malformed input (empty vector, non-positive top_k)"""
    pass


class EmbeddingUnavailableError(DomainException):
    """Raised when the embedding provider fails or times out"""
    pass


class IndexUnavailableError(DomainException):
    """Raised when the vector store is unreachable or misconfigured"""
    pass


class DecodingAnomalyError(DomainException):
    """Raised when a single stored record cannot be decoded"""
    def __init__(self, message: str, record_id: str = None):
        super().__init__(message)
        self.record_id = record_id


class LLMServiceError(DomainException):
    """Raised when the language model provider fails"""
    pass


class CatalogIngestionError(DomainException):
    """Raised when the hotel catalog cannot be loaded into the vector store"""
    pass
