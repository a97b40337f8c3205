"""Fixed constants shared across modules. Tunables live in settings.py."""

from __future__ import annotations

# Chunking defaults (characters)
DEFAULT_CHUNK_TARGET_SIZE = 1000
DEFAULT_CHUNK_OVERLAP = 200
DEFAULT_CHUNK_MIN_SIZE = 100
DEFAULT_CHUNK_MAX_SIZE = 2000

# Chunk metadata extraction
HEADING_SCAN_LINES = 3
HEADING_MAX_LENGTH = 100
KEYWORD_MIN_LENGTH = 4
KEYWORD_LIMIT = 5

# Embeddings
DEFAULT_EMBEDDING_DIMENSIONS = 768
EMBEDDING_BATCH_SIZE = 10
EMBEDDING_BATCH_PAUSE_S = 0.1
FALLBACK_EMBEDDING_SCALE = 0.5

# Response type protocol
RESPONSE_TYPE_PATTERN = r"\[RESPONSE_TYPE:\s*(\w+)\s*\]"
ARTIFACT_UNAVAILABLE_NOTE = "Note: The requested file is not available locally."

# Arbitration confidences
CONFIDENCE_TEXT_ONLY = 0.8
CONFIDENCE_FULL_ARTIFACT = 0.9
CONFIDENCE_ARTIFACT_MISSING = 0.5
CONFIDENCE_MIXED = 0.7
CONFIDENCE_NO_TAG = 0.6
