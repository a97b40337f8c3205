"""Vector math and exact binary serialization for embeddings."""

from __future__ import annotations

import base64
from collections.abc import Sequence

import numpy as np

from docvault.exceptions import DimensionMismatchError

# Little-endian float64 so Python floats round-trip exactly.
VECTOR_DTYPE = np.dtype("<f8")


def as_array(vector: Sequence[float] | np.ndarray) -> np.ndarray:
    return np.asarray(vector, dtype=VECTOR_DTYPE)


def _check_same_dimension(a: np.ndarray, b: np.ndarray) -> None:
    if a.shape != b.shape:
        raise DimensionMismatchError(f"Vectors must have the same dimension: {a.shape} vs {b.shape}")


def magnitude(vector: Sequence[float] | np.ndarray) -> float:
    return float(np.linalg.norm(as_array(vector)))


def dot(a: Sequence[float] | np.ndarray, b: Sequence[float] | np.ndarray) -> float:
    va, vb = as_array(a), as_array(b)
    _check_same_dimension(va, vb)
    return float(np.dot(va, vb))


def cosine_similarity(a: Sequence[float] | np.ndarray, b: Sequence[float] | np.ndarray) -> float:
    """Cosine similarity in [-1, 1]; 0.0 when either vector has zero magnitude."""
    va, vb = as_array(a), as_array(b)
    _check_same_dimension(va, vb)
    denom = np.linalg.norm(va) * np.linalg.norm(vb)
    if denom == 0.0:
        return 0.0
    return float(np.clip(np.dot(va, vb) / denom, -1.0, 1.0))


def cosine_similarities(query: Sequence[float] | np.ndarray, matrix: np.ndarray) -> np.ndarray:
    """Cosine similarity of ``query`` against every row of ``matrix``."""
    if matrix.size == 0:
        return np.zeros(0, dtype=np.float64)
    q = as_array(query)
    m = as_array(matrix)
    if m.shape[1] != q.shape[0]:
        raise DimensionMismatchError(
            f"Query dimension {q.shape[0]} does not match stored dimension {m.shape[1]}"
        )
    q_norm = np.linalg.norm(q)
    row_norms = np.linalg.norm(m, axis=1)
    denom = row_norms * q_norm
    scores = np.zeros(m.shape[0], dtype=np.float64)
    nonzero = denom > 0
    scores[nonzero] = (m[nonzero] @ q) / denom[nonzero]
    return np.clip(scores, -1.0, 1.0)


def euclidean_distance(a: Sequence[float] | np.ndarray, b: Sequence[float] | np.ndarray) -> float:
    va, vb = as_array(a), as_array(b)
    _check_same_dimension(va, vb)
    return float(np.linalg.norm(va - vb))


def manhattan_distance(a: Sequence[float] | np.ndarray, b: Sequence[float] | np.ndarray) -> float:
    va, vb = as_array(a), as_array(b)
    _check_same_dimension(va, vb)
    return float(np.abs(va - vb).sum())


def normalize(vector: Sequence[float] | np.ndarray) -> list[float]:
    v = as_array(vector)
    norm = np.linalg.norm(v)
    if norm == 0.0:
        return v.tolist()
    return (v / norm).tolist()


def average(vectors: Sequence[Sequence[float]]) -> list[float]:
    if not vectors:
        raise ValueError("Cannot average an empty list of vectors")
    dims = {len(v) for v in vectors}
    if len(dims) != 1:
        raise DimensionMismatchError("All vectors must have the same dimension")
    return np.mean(np.asarray(vectors, dtype=np.float64), axis=0).tolist()


def has_invalid_values(vector: Sequence[float] | np.ndarray) -> bool:
    return not bool(np.all(np.isfinite(np.asarray(vector, dtype=np.float64))))


def vector_to_blob(vector: Sequence[float] | np.ndarray) -> bytes:
    return as_array(vector).tobytes()


def blob_to_vector(blob: bytes) -> list[float]:
    return np.frombuffer(blob, dtype=VECTOR_DTYPE).tolist()


def vector_to_base64(vector: Sequence[float] | np.ndarray) -> str:
    return base64.b64encode(vector_to_blob(vector)).decode("ascii")


def base64_to_vector(encoded: str) -> list[float]:
    return blob_to_vector(base64.b64decode(encoded))
