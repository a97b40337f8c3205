"""Tests for boundary-aware chunking and chunk metadata."""

import pytest

from docvault.chunking.boundary_chunker import BoundaryChunker
from docvault.chunking.config import ChunkConfig
from docvault.chunking.metadata import extract_headings, extract_keywords, extract_metadata
from docvault.exceptions import ConfigurationError


def _spans(chunks):
    return [(c.start_offset, c.end_offset) for c in chunks]


def test_first_chunk_ends_at_sentence_boundary():
    config = ChunkConfig(target_size=20, overlap=5, min_size=5, max_size=40)
    chunks = BoundaryChunker(config).chunk("Sentence one. Sentence two. Sentence three.")
    assert chunks[0].text == "Sentence one."
    assert chunks[0].end_offset == 13
    assert [c.text for c in chunks] == ["Sentence one.", "Sentence two.", "Sentence three."]


def test_chunk_empty_and_blank_text():
    chunker = BoundaryChunker()
    assert chunker.chunk("") == []
    assert chunker.chunk("   \n\t  \n") == []


def test_text_shorter_than_min_size_yields_nothing():
    chunker = BoundaryChunker(ChunkConfig(min_size=100))
    assert chunker.chunk("A short note about the lease.") == []


def test_offsets_point_into_source(long_text):
    chunks = BoundaryChunker().chunk(long_text, doc_id="doc1")
    assert len(chunks) > 1
    for chunk in chunks:
        assert 0 <= chunk.start_offset < chunk.end_offset <= len(long_text)
        assert long_text[chunk.start_offset : chunk.end_offset].strip() == chunk.text


def test_chunks_cover_text_without_gaps(long_text):
    chunks = BoundaryChunker().chunk(long_text, doc_id="doc1")
    assert chunks[0].start_offset == 0
    assert chunks[-1].end_offset == len(long_text)
    for prev, nxt in zip(chunks, chunks[1:]):
        assert nxt.start_offset <= prev.end_offset
        assert nxt.start_offset > prev.start_offset


def test_chunk_size_bounds(long_text):
    config = ChunkConfig()
    chunks = BoundaryChunker(config).chunk(long_text)
    for chunk in chunks:
        assert config.min_size <= chunk.text_length <= config.max_size


def test_non_final_chunks_end_on_sentences(long_text):
    chunks = BoundaryChunker().chunk(long_text)
    for chunk in chunks[:-1]:
        assert chunk.text.endswith(".")


def test_word_boundary_fallback():
    text = " ".join(["alpha", "bravo", "charlie", "delta", "echo"] * 30)
    config = ChunkConfig(target_size=60, overlap=10, min_size=10, max_size=120)
    chunks = BoundaryChunker(config).chunk(text)
    assert len(chunks) > 1
    for chunk in chunks[:-1]:
        assert text[chunk.end_offset].isspace()


def test_fixed_windows_without_boundary_preferences():
    config = ChunkConfig(
        target_size=50,
        overlap=10,
        min_size=1,
        max_size=50,
        prefer_sentence_boundary=False,
        prefer_paragraph_boundary=False,
    )
    chunks = BoundaryChunker(config).chunk("a" * 120)
    assert _spans(chunks) == [(0, 50), (40, 90), (80, 120)]


def _uncovered(text, chunks):
    return [
        i
        for i, ch in enumerate(text)
        if not ch.isspace() and not any(c.start_offset <= i < c.end_offset for c in chunks)
    ]


def test_whitespace_run_does_not_drop_leading_sentence():
    text = "Hi there." + " " * 20 + "more words continue here and more and more and more."
    config = ChunkConfig(target_size=30, overlap=5, min_size=10, max_size=60)
    chunks = BoundaryChunker(config).chunk(text)

    assert "Hi there." in chunks[0].text
    assert _uncovered(text, chunks) == []
    for chunk in chunks:
        assert config.min_size <= chunk.text_length <= config.max_size
        assert text[chunk.start_offset : chunk.end_offset].strip() == chunk.text


def test_short_tail_is_kept():
    text = "The boiler was serviced in March and the filter replaced. Done."
    config = ChunkConfig(target_size=60, overlap=5, min_size=10, max_size=80)
    chunks = BoundaryChunker(config).chunk(text)

    assert len(chunks) == 2
    assert chunks[-1].end_offset == len(text)
    assert chunks[-1].text.endswith("Done.")
    assert _uncovered(text, chunks) == []
    for prev, nxt in zip(chunks, chunks[1:]):
        assert nxt.start_offset > prev.start_offset


def test_whitespace_heavy_text_is_fully_covered(long_text):
    padded = long_text.replace(". ", ".\n\n" + " " * 12)
    config = ChunkConfig(target_size=120, overlap=20, min_size=40, max_size=240)
    chunks = BoundaryChunker(config).chunk(padded)

    assert _uncovered(padded, chunks) == []
    for chunk in chunks:
        assert config.min_size <= chunk.text_length <= config.max_size


def test_chunk_ids_and_ordinals():
    config = ChunkConfig(target_size=20, overlap=5, min_size=5, max_size=40)
    chunks = BoundaryChunker(config).chunk(
        "Sentence one. Sentence two. Sentence three.", doc_id="abc"
    )
    assert [c.index for c in chunks] == [0, 1, 2]
    assert [c.chunk_id for c in chunks] == ["abc-0", "abc-1", "abc-2"]
    assert all(c.doc_id == "abc" for c in chunks)


def test_chunking_is_restartable(long_text):
    chunker = BoundaryChunker()
    first = [(c.text, c.start_offset, c.end_offset) for c in chunker.chunk(long_text)]
    second = [(c.text, c.start_offset, c.end_offset) for c in chunker.iter_chunks(long_text)]
    assert first == second


def test_overlap_must_be_smaller_than_target():
    with pytest.raises(ConfigurationError):
        ChunkConfig(target_size=100, overlap=100)
    with pytest.raises(ConfigurationError):
        ChunkConfig(target_size=100, overlap=150)


@pytest.mark.parametrize(
    "kwargs",
    [
        {"target_size": 0},
        {"overlap": -1},
        {"min_size": -5},
        {"target_size": 500, "overlap": 100, "min_size": 600},
        {"target_size": 1000, "max_size": 999},
    ],
)
def test_invalid_config_rejected(kwargs):
    with pytest.raises(ConfigurationError):
        ChunkConfig(**kwargs)


def test_presets():
    small = ChunkConfig.small_document()
    assert (small.target_size, small.overlap) == (500, 100)
    assert small.prefer_paragraph_boundary is False
    large = ChunkConfig.large_document()
    assert (large.target_size, large.overlap) == (1500, 300)
    assert ChunkConfig.default() == ChunkConfig()


def test_extract_headings():
    text = "SUMMARY\nDocuments required:\nthe regular line here\nLATE HEADING"
    assert extract_headings(text) == ["SUMMARY", "Documents required:"]
    assert extract_headings("1234\n" + "X" * 120) == []


def test_extract_keywords():
    text = "Apple apple banana Banana banana cherry tree tree."
    assert extract_keywords(text) == ["banana", "apple", "tree"]
    assert extract_keywords("every word here appears only once") == []


def test_extract_metadata_format():
    assert extract_metadata("SUMMARY\nbanana banana split") == (
        "heading: SUMMARY; keywords: banana"
    )
    assert extract_metadata("nothing notable") == ""


def test_chunks_carry_metadata():
    text = "RENEWAL NOTES\n" + "The passport renewal needs the passport photo. " * 5
    config = ChunkConfig(target_size=400, overlap=50, min_size=10, max_size=800)
    chunks = BoundaryChunker(config).chunk(text)
    assert "heading: RENEWAL NOTES" in chunks[0].metadata
    assert "passport" in chunks[0].metadata
