"""Chunking configuration with construction-time validation."""

from __future__ import annotations

from dataclasses import dataclass

from docvault.config.constants import (
    DEFAULT_CHUNK_MAX_SIZE,
    DEFAULT_CHUNK_MIN_SIZE,
    DEFAULT_CHUNK_OVERLAP,
    DEFAULT_CHUNK_TARGET_SIZE,
)
from docvault.exceptions import ConfigurationError


@dataclass(frozen=True)
class ChunkConfig:
    target_size: int = DEFAULT_CHUNK_TARGET_SIZE
    overlap: int = DEFAULT_CHUNK_OVERLAP
    min_size: int = DEFAULT_CHUNK_MIN_SIZE
    max_size: int = DEFAULT_CHUNK_MAX_SIZE
    prefer_sentence_boundary: bool = True
    prefer_paragraph_boundary: bool = True

    def __post_init__(self) -> None:
        if self.target_size <= 0:
            raise ConfigurationError(f"target_size must be positive, got {self.target_size}")
        if self.overlap < 0:
            raise ConfigurationError(f"overlap must be non-negative, got {self.overlap}")
        if self.overlap >= self.target_size:
            raise ConfigurationError(
                f"overlap ({self.overlap}) must be smaller than target_size ({self.target_size})"
            )
        if self.min_size < 0:
            raise ConfigurationError(f"min_size must be non-negative, got {self.min_size}")
        if self.min_size > self.target_size:
            raise ConfigurationError(
                f"min_size ({self.min_size}) must not exceed target_size ({self.target_size})"
            )
        if self.max_size < self.target_size:
            raise ConfigurationError(
                f"max_size ({self.max_size}) must be at least target_size ({self.target_size})"
            )

    @property
    def uses_boundaries(self) -> bool:
        return self.prefer_sentence_boundary or self.prefer_paragraph_boundary

    @classmethod
    def default(cls) -> ChunkConfig:
        return cls()

    @classmethod
    def small_document(cls) -> ChunkConfig:
        return cls(target_size=500, overlap=100, prefer_paragraph_boundary=False)

    @classmethod
    def large_document(cls) -> ChunkConfig:
        return cls(target_size=1500, overlap=300)
