"""Vector index integration module."""

from .index import ChromaVectorIndex, VectorIndex, VectorMatch

__all__ = ["ChromaVectorIndex", "VectorIndex", "VectorMatch"]
