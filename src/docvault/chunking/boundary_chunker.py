"""Boundary-aware character chunker with overlapping windows.

Windows are ``target_size`` characters long. When boundary preferences are
enabled the window end is pulled back to the nearest sentence terminator,
then paragraph break, then word break, as long as the trimmed segment
still reaches ``min_size``. A window that trims short is extended forward
(up to ``max_size``), and a short final window is widened backwards.
Offsets always refer to the untrimmed source text, so
``text[start_offset:end_offset].strip() == chunk.text``.
"""

from __future__ import annotations

from collections.abc import Iterator

from docvault.chunking.config import ChunkConfig
from docvault.chunking.metadata import extract_metadata
from docvault.models.domain import Chunk
from docvault.observability.logger import get_logger

logger = get_logger("chunker")

SENTENCE_TERMINATORS = ".!?"


class BoundaryChunker:
    def __init__(self, config: ChunkConfig | None = None) -> None:
        self._config = config or ChunkConfig()

    @property
    def config(self) -> ChunkConfig:
        return self._config

    def chunk(self, text: str, doc_id: str = "") -> list[Chunk]:
        chunks = list(self.iter_chunks(text, doc_id))
        logger.debug("chunked", doc_id=doc_id, chars=len(text), chunks=len(chunks))
        return chunks

    def iter_chunks(self, text: str, doc_id: str = "") -> Iterator[Chunk]:
        """Yield chunks left to right. Each call restarts from offset 0."""
        if not text or not text.strip():
            return

        cfg = self._config
        length = len(text)
        start = 0
        prev_start = -1
        ordinal = 0

        while start < length:
            end = self._find_end(text, start)
            segment = text[start:end].strip()

            if end >= length and segment and len(segment) < cfg.min_size:
                # Short tail: widen it backwards rather than drop it.
                start = self._widen_tail(text, start, prev_start)
                segment = text[start:end].strip()

            if segment and len(segment) >= cfg.min_size:
                yield Chunk(
                    chunk_id=f"{doc_id or 'chunk'}-{ordinal}",
                    doc_id=doc_id,
                    text=segment,
                    index=ordinal,
                    start_offset=start,
                    end_offset=end,
                    metadata=extract_metadata(segment),
                )
                ordinal += 1

            if end >= length:
                break

            # Never start past the previous end, or the region between them is lost.
            next_start = max(start + cfg.target_size - cfg.overlap, end - cfg.overlap)
            prev_start = start
            start = min(next_start, end)

    def _find_end(self, text: str, start: int) -> int:
        cfg = self._config
        length = len(text)
        preferred_end = min(start + cfg.target_size, length)
        if preferred_end >= length:
            return preferred_end

        if cfg.uses_boundaries:
            candidates = []
            if cfg.prefer_sentence_boundary:
                candidates.append(self._sentence_end(text, start, preferred_end))
            if cfg.prefer_paragraph_boundary:
                candidates.append(self._paragraph_end(text, start, preferred_end))
            candidates.append(self._word_end(text, start, preferred_end))

            for end in candidates:
                if end > start and self._long_enough(text, start, end):
                    return end

        # Whitespace-heavy windows may trim below min_size; scan ahead up to max_size.
        end = preferred_end
        limit = min(start + cfg.max_size, length)
        while end < limit and not self._long_enough(text, start, end):
            end += 1
        return end

    def _widen_tail(self, text: str, start: int, prev_start: int) -> int:
        cfg = self._config
        length = len(text)
        floor = max(prev_start + 1, length - cfg.max_size, 0)
        new_start = min(start, max(floor, length - cfg.target_size))
        while new_start > floor and not self._long_enough(text, new_start, length):
            new_start -= 1
        return new_start

    def _long_enough(self, text: str, start: int, end: int) -> bool:
        return len(text[start:end].strip()) >= self._config.min_size

    @staticmethod
    def _sentence_end(text: str, start: int, preferred_end: int) -> int:
        for i in range(preferred_end - 1, start - 1, -1):
            if text[i] in SENTENCE_TERMINATORS:
                if i + 1 >= len(text) or text[i + 1].isspace():
                    return i + 1
        return start

    @staticmethod
    def _paragraph_end(text: str, start: int, preferred_end: int) -> int:
        for i in range(preferred_end - 1, start - 1, -1):
            if text[i] == "\n":
                if i + 1 >= len(text) or text[i + 1].isspace():
                    return i + 1
        return start

    @staticmethod
    def _word_end(text: str, start: int, preferred_end: int) -> int:
        for i in range(preferred_end, start - 1, -1):
            if text[i].isspace():
                return i
        return start
