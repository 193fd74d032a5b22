"""Cosine similarity between embedding vectors."""

import logging
from collections.abc import Sequence

import numpy as np
from sklearn.metrics.pairwise import cosine_similarity as sklearn_cosine

logger = logging.getLogger(__name__)


class VectorLengthError(ValueError):
    """Raised when two embeddings of different dimensionality are compared."""

    def __init__(self, len_a: int, len_b: int):
        super().__init__(f"Vectors must be same length (got {len_a} and {len_b})")
        self.len_a = len_a
        self.len_b = len_b


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """Compute cosine similarity between two equal-length vectors.

    Returns a value in [-1, 1]. A zero-magnitude vector yields 0.0.
    Raises VectorLengthError if the lengths differ.
    """
    vec_a = np.asarray(a, dtype=float).ravel()
    vec_b = np.asarray(b, dtype=float).ravel()

    if vec_a.shape[0] != vec_b.shape[0]:
        raise VectorLengthError(vec_a.shape[0], vec_b.shape[0])
    if vec_a.shape[0] == 0:
        return 0.0

    # sklearn normalizes rows first, so zero vectors come back as 0.0
    score = sklearn_cosine(vec_a.reshape(1, -1), vec_b.reshape(1, -1))[0][0]
    if not np.isfinite(score):
        logger.warning("Non-finite cosine similarity, returning 0.0")
        return 0.0
    return float(np.clip(score, -1.0, 1.0))
