"""
Vector similarity.

Dependencies: numpy
System role: Scoring primitive for retrieval ranking
"""

import numpy as np


def cosine_similarity(a, b) -> float:
    """
    Cosine similarity between two vectors.

    Defined as 0.0 when either vector has zero magnitude, and clamped to
    [-1, 1] against floating point drift.
    """
    a = np.asarray(a, dtype=np.float64)
    b = np.asarray(b, dtype=np.float64)
    norm = np.linalg.norm(a) * np.linalg.norm(b)
    if norm == 0.0:
        return 0.0
    return float(np.clip(np.dot(a, b) / norm, -1.0, 1.0))


def cosine_scores(query, matrix: np.ndarray) -> np.ndarray:
    """
    Cosine similarity of a query against every row of a matrix.

    Rows (or a query) with zero magnitude score 0.0.

    Returns:
        np.ndarray: Shape (n_rows,)
    """
    query = np.asarray(query, dtype=np.float64)
    if matrix.size == 0:
        return np.zeros(matrix.shape[0])
    norms = np.linalg.norm(matrix, axis=1) * np.linalg.norm(query)
    dots = matrix @ query
    scores = np.divide(dots, norms, out=np.zeros_like(dots), where=norms != 0)
    return np.clip(scores, -1.0, 1.0)
