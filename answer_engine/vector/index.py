"""Vector index implementation using ChromaDB."""

import asyncio
import logging
from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

import chromadb
from chromadb.config import Settings as ChromaSettings

from answer_engine.config import get_settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class VectorMatch:
    """Nearest-neighbour hit returned by the vector index."""

    id: str
    score: float
    content: str
    metadata: dict[str, Any] = field(default_factory=dict)


class VectorIndex(ABC):
    """Abstract base class for nearest-neighbour indexes."""

    @abstractmethod
    async def search(self, query_embedding: list[float], top_k: int = 10) -> list[VectorMatch]:
        """Return up to ``top_k`` matches, most similar first."""
        pass

    @abstractmethod
    async def upsert(
        self,
        ids: Sequence[str],
        embeddings: Sequence[list[float]],
        contents: Sequence[str],
        metadatas: Sequence[dict[str, Any]] | None = None,
    ) -> None:
        """Insert or replace vectors."""
        pass

    @abstractmethod
    async def delete(self, ids: Sequence[str]) -> None:
        """Remove vectors by id."""
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """Check if the index is healthy."""
        pass


class ChromaVectorIndex(VectorIndex):
    """ChromaDB implementation of the vector index."""

    def __init__(
        self,
        host: str | None = None,
        port: int | None = None,
        collection_name: str | None = None,
        client: Any = None,
    ):
        """Initialize ChromaDB client.

        Args:
            host: ChromaDB host (optional, uses config if not provided)
            port: ChromaDB port (optional, uses config if not provided)
            collection_name: Collection holding the knowledge base
            client: Pre-built chromadb client, skips connecting
        """
        if host is None or port is None or collection_name is None:
            settings = get_settings()
            host = host or settings.chroma_host
            port = port or settings.chroma_port
            collection_name = collection_name or settings.chroma_collection

        self.host = host
        self.port = port
        self.collection_name = collection_name
        self.chroma_url = f"http://{host}:{port}"

        if client is not None:
            self.client = client
            return

        try:
            self.client = chromadb.HttpClient(
                host=host,
                port=port,
                settings=ChromaSettings(anonymized_telemetry=False),
            )
            logger.info(f"Connected to ChromaDB at {self.chroma_url}")
        except Exception as e:
            logger.error(f"Failed to connect to ChromaDB at {self.chroma_url}: {e}")
            raise

    def _collection(self):
        return self.client.get_or_create_collection(
            name=self.collection_name,
            metadata={"hnsw:space": "cosine"},
            embedding_function=None,  # embeddings are supplied by the caller
        )

    async def search(self, query_embedding: list[float], top_k: int = 10) -> list[VectorMatch]:
        """Search for similar chunks in ChromaDB."""
        try:
            results = await asyncio.to_thread(self._query, query_embedding, top_k)
        except Exception as e:
            logger.error(f"Failed to search collection {self.collection_name}: {e}")
            raise

        matches = []
        if results["ids"] and len(results["ids"]) > 0:
            documents = results.get("documents") or [[]]
            metadatas = results.get("metadatas") or [[]]
            distances = results.get("distances") or [[]]

            for i, match_id in enumerate(results["ids"][0]):
                metadata = dict(metadatas[0][i] or {}) if i < len(metadatas[0]) else {}
                content = documents[0][i] if i < len(documents[0]) else None
                distance = distances[0][i] if i < len(distances[0]) else 1.0
                matches.append(
                    VectorMatch(
                        id=match_id,
                        # cosine distance -> similarity
                        score=1.0 - distance,
                        content=content or metadata.get("content", ""),
                        metadata=metadata,
                    )
                )

        logger.info(f"Found {len(matches)} results for query in {self.collection_name}")
        return matches

    def _query(self, query_embedding: list[float], top_k: int):
        return self._collection().query(
            query_embeddings=[query_embedding],
            n_results=top_k,
            include=["documents", "metadatas", "distances"],
        )

    async def upsert(
        self,
        ids: Sequence[str],
        embeddings: Sequence[list[float]],
        contents: Sequence[str],
        metadatas: Sequence[dict[str, Any]] | None = None,
    ) -> None:
        """Add or replace vectors in the ChromaDB collection."""
        if not ids:
            logger.warning("No vectors provided to upsert")
            return
        if not (len(ids) == len(embeddings) == len(contents)):
            raise ValueError("ids, embeddings and contents must have the same length")

        metadatas = list(metadatas) if metadatas is not None else [{} for _ in ids]
        metadatas = [{**metadata, "content": content} for metadata, content in zip(metadatas, contents)]

        try:
            await asyncio.to_thread(
                lambda: self._collection().upsert(
                    ids=list(ids),
                    embeddings=list(embeddings),
                    documents=list(contents),
                    metadatas=metadatas,
                )
            )
            logger.info(f"Upserted {len(ids)} vectors into {self.collection_name}")
        except Exception as e:
            logger.error(f"Failed to upsert into collection {self.collection_name}: {e}")
            raise

    async def delete(self, ids: Sequence[str]) -> None:
        """Delete vectors from the ChromaDB collection."""
        if not ids:
            return
        try:
            await asyncio.to_thread(lambda: self._collection().delete(ids=list(ids)))
            logger.info(f"Deleted {len(ids)} vectors from {self.collection_name}")
        except Exception as e:
            logger.error(f"Failed to delete from collection {self.collection_name}: {e}")
            raise

    async def health_check(self) -> bool:
        """Check if ChromaDB is healthy and accessible."""
        try:
            await asyncio.to_thread(self.client.heartbeat)
            return True
        except Exception as e:
            logger.warning(f"ChromaDB health check failed: {e}")
            return False
