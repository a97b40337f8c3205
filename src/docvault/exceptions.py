"""Custom exception hierarchy for the document vault RAG core."""


class DocVaultError(Exception):
    """Base exception for all document vault errors."""


class ConfigurationError(DocVaultError):
    """Invalid setup detected at construction time. Never retried."""


class DimensionMismatchError(ConfigurationError):
    """Embedding dimensions disagree between provider, store, or vector."""


class IngestionError(DocVaultError):
    """Error during document ingestion."""


class ChunkingError(IngestionError):
    """Error during text chunking."""


class PartialIngestFailure(IngestionError):
    """Some chunks were embedded but the document could not be committed."""


class EmbeddingError(DocVaultError):
    """Error generating embeddings."""


class TransientProviderError(EmbeddingError):
    """Network embedding call failed; recovered by the deterministic fallback."""


class StoreError(DocVaultError):
    """Error reading from or writing to the vector store."""


class GenerationError(DocVaultError):
    """Error during answer generation."""
